##
# copyright 2009, James William Pye
# http://python.projects.postgresql.org
##
"""
Translate ``sslmode`` and the deprecated ``requiressl`` into a TLS posture.

	=========== ======= ================= ==============
	mode        enabled skip verification needs hostname
	=========== ======= ================= ==============
	disable     no
	allow       yes     yes               no
	prefer      yes     yes               no
	require     yes     yes               no
	verify-ca   yes     yes               no
	verify-full yes     no                yes
	=========== ======= ================= ==============

``verify-ca`` trusts any certificate signed by the root certificate without
checking the host name. That cannot be expressed with `ssl.SSLContext`
without a custom verification callback, so the certificate is not verified
at all and a `conninfo.exceptions.DowngradedVerificationWarning` is emitted.

``requiressl=0`` is ``prefer``; any other value, ``1`` included, is ``require``.
"""
import ssl
import warnings

from . import exceptions as conninfo_exc
from .config import ClientCertificate

# mode -> (enabled, skip_verification, needs_hostname)
modes = {
	'disable' : (False, False, False),
	'allow' : (True, True, False),
	'prefer' : (True, True, False),
	'require' : (True, True, False),
	'verify-ca' : (True, True, False),
	'verify-full' : (True, False, True),
}

requiressl_modes = {
	'0' : 'prefer',
}

class SSLState(object):
	"""
	SSL resolution state of a single parse. The first mode applied is final;
	see `resolve`.
	"""
	__slots__ = ('seen', 'enabled', 'skip_verification', 'needs_hostname')

	def __init__(self):
		self.seen = False
		self.enabled = False
		self.skip_verification = False
		self.needs_hostname = False

	def __repr__(self):
		return '%s.%s(%s)' %(
			type(self).__module__,
			type(self).__name__,
			', '.join([
				'%s = %r' %(x, getattr(self, x)) for x in self.__slots__
			])
		)

	def apply_mode(self, mode):
		try:
			enabled, skip, needs_hostname = modes[mode]
		except KeyError:
			raise conninfo_exc.InvalidSSLMode("unsupported sslmode", mode)
		if mode == 'verify-ca':
			warnings.warn(conninfo_exc.DowngradedVerificationWarning(
				"sslmode verify-ca cannot be enforced, " \
				"the server certificate will not be verified"
			))
		self.seen = True
		self.enabled = enabled
		self.skip_verification = skip
		self.needs_hostname = needs_hostname

	def apply_requiressl(self, value):
		# any other value sets the flag
		self.apply_mode(requiressl_modes.get(value, 'require'))

appliers = {
	'sslmode' : SSLState.apply_mode,
	'requiressl' : SSLState.apply_requiressl,
}

def resolve(sources):
	"""
	Create an `SSLState` from an ordered sequence of ``(kind, value)`` pairs
	where kind is ``'sslmode'`` or ``'requiressl'``.

	Pairs with a `None` value are skipped. The first remaining pair decides
	the state and the rest are never consulted, so an explicit "disable"
	can't be overridden by the environment.
	"""
	state = SSLState()
	for kind, value in sources:
		if value is None:
			continue
		appliers[kind](state, value)
		break
	return state

def load_key_pair(certfile, keyfile):
	"""
	Load a client certificate and its private key.

	The pair is checked by loading it into an `ssl.SSLContext`. Encrypted keys
	are not supported.
	"""
	try:
		ctx = ssl.SSLContext(ssl.PROTOCOL_TLS_CLIENT)
		ctx.load_cert_chain(certfile, keyfile = keyfile, password = '')
		with open(certfile, 'rb') as f:
			certificate = f.read()
		with open(keyfile, 'rb') as f:
			key = f.read()
	except (OSError, ValueError) as err:
		# ssl.SSLError is an OSError; paths with a NUL are a ValueError
		raise conninfo_exc.TLSKeyPairError(
			"failed to load SSL key pair (%s)" %(err,),
			(certfile, keyfile),
		)
	return ClientCertificate(certfile, keyfile, certificate, key)
