##
# copyright 2009, James William Pye
# http://python.projects.postgresql.org
##
"""
Resolved connection configuration records.

`ConnectionConfig` is the sole product of `conninfo.parse`; it is what a
dialer needs to reach the server: the network family and address, the
startup credentials, and the TLS posture, if any.

All records are tuples and cannot be modified once created.
"""
import ssl
import datetime
from operator import itemgetter

socket_prefix = '.s.PGSQL.'

class Record(tuple):
	"Name addressable, immutable tuple"
	__slots__ = ()
	_fields = ()

	def __repr__(self):
		return '%s.%s(%s)' %(
			type(self).__module__,
			type(self).__name__,
			', '.join([
				'%s = %r' %(k, v) for k, v in zip(self._fields, self)
			])
		)

	def items(self):
		return zip(self._fields, self)

class ClientCertificate(Record):
	"A client certificate and its private key, loaded from disk"
	__slots__ = ()
	_fields = ('certfile', 'keyfile', 'certificate', 'key')

	def __new__(typ, certfile, keyfile, certificate, key):
		return tuple.__new__(typ, (certfile, keyfile, certificate, key))

	certfile = property(itemgetter(0))
	keyfile = property(itemgetter(1))
	certificate = property(itemgetter(2), doc = 'certificate file contents')
	key = property(itemgetter(3), doc = 'key file contents')

	def __repr__(self):
		# Keep key material out of tracebacks.
		return '%s.%s(%r, %r)' %(
			type(self).__module__,
			type(self).__name__,
			self.certfile,
			self.keyfile,
		)

class TLSPosture(Record):
	"""
	The resolved TLS behavior of a connection.

	``skip_verification``
	 Whether the server certificate is accepted without verification.
	``server_name``
	 The host name the server certificate must be issued for, or `None`.
	``certificates``
	 Tuple of `ClientCertificate` to present to the server.
	"""
	__slots__ = ()
	_fields = ('skip_verification', 'server_name', 'certificates')

	def __new__(typ, skip_verification, server_name = None, certificates = ()):
		return tuple.__new__(typ, (
			skip_verification, server_name, tuple(certificates)
		))

	skip_verification = property(itemgetter(0))
	server_name = property(itemgetter(1))
	certificates = property(itemgetter(2))

	@property
	def sslmode(self):
		'the weakest sslmode that reproduces this posture'
		if not self.skip_verification and self.server_name is not None:
			return 'verify-full'
		return 'require'

	def context(self):
		"""
		Create an `ssl.SSLContext` for a client socket reflecting the posture.
		The dialer passes ``server_name`` as ``server_hostname`` when wrapping.
		"""
		ctx = ssl.SSLContext(ssl.PROTOCOL_TLS_CLIENT)
		if self.skip_verification:
			ctx.check_hostname = False
			ctx.verify_mode = ssl.CERT_NONE
		else:
			ctx.check_hostname = self.server_name is not None
			ctx.verify_mode = ssl.CERT_REQUIRED
			ctx.load_default_certs()
		for x in self.certificates:
			ctx.load_cert_chain(x.certfile, keyfile = x.keyfile, password = '')
		return ctx

class ConnectionConfig(Record):
	"""
	A fully resolved connection target.

	``address``
	 ``host:port`` for TCP; ``directory/.s.PGSQL.port`` for Unix sockets.
	``network``
	 ``'tcp'`` or ``'unix'``.
	``dial_timeout``
	 `datetime.timedelta`; zero when no timeout was given.
	``tls``
	 `TLSPosture` or `None` when TLS is disabled.
	"""
	__slots__ = ()
	_fields = (
		'address', 'network', 'user', 'password', 'database',
		'application_name', 'dial_timeout', 'tls',
	)

	def __new__(typ,
		address : "host:port or socket path",
		network : ('tcp', 'unix'),
		user : str,
		password : str = '',
		database : str = None,
		application_name : str = '',
		dial_timeout : datetime.timedelta = datetime.timedelta(0),
		tls : TLSPosture = None,
	):
		return tuple.__new__(typ, (
			address, network, user, password,
			user if database is None else database,
			application_name, dial_timeout, tls,
		))

	address = property(itemgetter(0))
	network = property(itemgetter(1))
	user = property(itemgetter(2))
	password = property(itemgetter(3))
	database = property(itemgetter(4))
	application_name = property(itemgetter(5))
	dial_timeout = property(itemgetter(6))
	tls = property(itemgetter(7))

	def __repr__(self):
		# Keep the password out of tracebacks.
		return '%s.%s(%s)' %(
			type(self).__module__,
			type(self).__name__,
			', '.join([
				'%s = %r' %(k, '...' if k == 'password' and v else v)
				for k, v in self.items()
			])
		)

	def host_and_port(self):
		'Split the address into the host (or socket directory) and the port'
		if self.network == 'unix':
			directory, _, port = self.address.rpartition('/' + socket_prefix)
			return directory, int(port)
		host, _, port = self.address.rpartition(':')
		return host, int(port)

	def parameters(self):
		"""
		Keyword parameters that resolve to this configuration. Serialized with
		`conninfo.dsn.serialize` they form an equivalent connection string.
		"""
		host, port = self.host_and_port()
		p = {
			'host' : host,
			'port' : str(port),
			'user' : self.user,
			'dbname' : self.database,
			'password' : self.password or None,
			'application_name' : self.application_name or None,
			'connect_timeout' : (
				str(int(self.dial_timeout.total_seconds()))
				if self.dial_timeout else None
			),
		}
		if self.tls is None:
			p['sslmode'] = 'disable'
		else:
			p['sslmode'] = self.tls.sslmode
			for x in self.tls.certificates:
				p['sslcert'] = x.certfile
				p['sslkey'] = x.keyfile
		return p
