##
# copyright 2009, James William Pye
# http://python.projects.postgresql.org
##
"""
Resolve connection parameters into a `conninfo.config.ConnectionConfig`.

Parameters are collected from a URI or keyword/value string by `collect`.
`resolve` validates them and fills each field from the first source that has
a value: the explicit parameters, then the environment, then the default.
The order is given by `resolution_sequence` and `ssl_sequence`.
"""
import os
import re
import datetime
import warnings
from getpass import getuser

from . import iri as conninfo_iri
from . import dsn as conninfo_dsn
from . import environ as conninfo_environ
from . import sslmode as conninfo_ssl
from . import exceptions as conninfo_exc
from .config import ConnectionConfig, TLSPosture, socket_prefix

default_host = 'localhost'
default_port = 5432
default_user = 'postgres'
max_port = 65535
# the largest timedelta, in whole seconds
max_timeout = datetime.timedelta.max.days * 86400

# Accepted, and without effect.
ignored = frozenset((
	'client_encoding',
	'options',
	'keepalives',
	'keepalives_idle',
	'keepalives_interval',
	'keepalives_count',
	'tty',
	'sslcompression',
	'sslrootcert',
	'sslcrl',
	'requirepeer',
	'krbsrvname',
	'gsslib',
	'service',
	'target_session_attrs',
))

recognized = frozenset((
	'host',
	'hostaddr',
	'port',
	'dbname',
	'user',
	'password',
	'connect_timeout',
	'application_name',
	'fallback_application_name',
	'sslmode',
	'requiressl',
	'sslcert',
	'sslkey',
)) | ignored

# Ignored parameters that weaken the connection's security.
unchecked = {
	'sslrootcert' : "root certificates are *not* checked",
	'sslcrl' : "certificate revocation lists are *not* checked",
}

# Sources of each field, in order of precedence.
# ('explicit', name) is a collected parameter, ('environ', name) is the
# environment variable mapped to the parameter in `conninfo.environ`.
resolution_sequence = {
	'host' : (
		('explicit', 'hostaddr'),
		('explicit', 'host'),
		('environ', 'host'),
	),
	'port' : (('explicit', 'port'), ('environ', 'port')),
	'dbname' : (('explicit', 'dbname'), ('environ', 'dbname')),
	'user' : (('explicit', 'user'), ('environ', 'user')),
	'password' : (('explicit', 'password'), ('environ', 'password')),
	'application_name' : (
		('explicit', 'application_name'),
		('environ', 'application_name'),
		('explicit', 'fallback_application_name'),
	),
	'connect_timeout' : (
		('explicit', 'connect_timeout'),
		('environ', 'connect_timeout'),
	),
	'sslcert' : (('explicit', 'sslcert'), ('environ', 'sslcert')),
	'sslkey' : (('explicit', 'sslkey'), ('environ', 'sslkey')),
}

# First writer wins; see `conninfo.sslmode.resolve`.
ssl_sequence = (
	('explicit', 'sslmode'),
	('explicit', 'requiressl'),
	('environ', 'sslmode'),
	('environ', 'requiressl'),
)

numeric_re = re.compile('[0-9]+')

def sources(sequence, params, environ):
	"""
	Yield ``(name, origin, value)`` for each source in `sequence`. `origin` is
	the parameter name or the environment variable name. The environment is
	only consulted when the generator is advanced that far.
	"""
	for kind, name in sequence:
		if kind == 'explicit':
			yield name, name, params.get(name)
		else:
			yield (
				name,
				conninfo_environ.envvar_map[name],
				conninfo_environ.lookup(name, environ),
			)

def first(sources):
	'The first ``(origin, value)`` with a value, or ``(None, None)``'
	for name, origin, value in sources:
		if value is not None:
			return origin, value
	return None, None

def integer(origin, value, maximum = None):
	try:
		if numeric_re.fullmatch(value) is None:
			raise ValueError(value)
		n = int(value)
		if maximum is not None and n > maximum:
			raise OverflowError(value)
	except (ValueError, OverflowError):
		# int() refuses strings beyond the digit limit
		raise conninfo_exc.InvalidNumericValue(
			"invalid integer value for " + origin, value
		)
	return n

def validate(params):
	"""
	Check that every parameter is recognized and has a value.

	Emits `conninfo.exceptions.IgnoredClientParameterWarning` for ignored
	parameters that would otherwise tighten the connection's security.
	"""
	for k, v in params.items():
		if not v:
			raise conninfo_exc.EmptyParameterValue(
				"missing value for parameter", k
			)
		if k not in recognized:
			raise conninfo_exc.UnknownParameter(
				"invalid connection option", k
			)
		note = unchecked.get(k)
		if note is not None:
			warnings.warn(conninfo_exc.IgnoredClientParameterWarning(
				note, details = {'parameter' : k}
			))

def current_user(getuser = getuser):
	'The operating system account name, or "postgres" if unknown'
	try:
		return getuser() or default_user
	except (OSError, KeyError):
		return default_user

def address(host, port):
	"""
	Derive (network, address) from a resolved host and port.

	A host starting with '/' is a Unix socket directory.
	"""
	if host.startswith('/'):
		return 'unix', '%s/%s%d' %(host, socket_prefix, port)
	if host.startswith('[') and (
		not host.endswith(']') or ']' in host[:-1] or host == '[]'
	):
		raise conninfo_exc.MalformedConnectionString(
			"malformed IPv6 address literal", host
		)
	if ':' in host and not host.startswith('['):
		host = '[' + host + ']'
	return 'tcp', '%s:%d' %(host, port)

def resolve(params, environ = os.environ, getuser = getuser):
	"""
	Create a `conninfo.config.ConnectionConfig` from the collected `params`.

	Fields missing from `params` are looked up in `environ`. Raises a
	`conninfo.exceptions.ParseError` subclass when the parameters are invalid.
	"""
	validate(params)

	def lookup(field):
		return first(sources(resolution_sequence[field], params, environ))

	host = lookup('host')[1] or default_host

	origin, port = lookup('port')
	port = integer(origin, port, maximum = max_port) if port else 0
	network, addr = address(host, port or default_port)

	user = lookup('user')[1] or current_user(getuser = getuser)
	database = lookup('dbname')[1] or user
	password = lookup('password')[1] or ''
	application_name = lookup('application_name')[1] or ''

	origin, timeout = lookup('connect_timeout')
	timeout = integer(origin, timeout, maximum = max_timeout) if timeout else 0
	dial_timeout = datetime.timedelta(seconds = timeout)

	state = conninfo_ssl.resolve(
		(name, value)
		for name, origin, value in sources(ssl_sequence, params, environ)
	)
	tls = None
	if state.enabled:
		skip_verification = state.skip_verification
		server_name = None
		if state.needs_hostname:
			if network == 'unix':
				warnings.warn(conninfo_exc.DowngradedVerificationWarning(
					"the server host name cannot be verified over a Unix socket, " \
					"the server certificate will not be verified",
					details = {'address' : addr},
				))
				skip_verification = True
			elif host.startswith('['):
				server_name = host[1:-1]
			else:
				server_name = host

		certificates = ()
		certfile = lookup('sslcert')[1]
		keyfile = lookup('sslkey')[1]
		if certfile and keyfile:
			certificates = (conninfo_ssl.load_key_pair(certfile, keyfile),)
		tls = TLSPosture(skip_verification, server_name, certificates)

	return ConnectionConfig(
		addr,
		network,
		user,
		password = password,
		database = database,
		application_name = application_name,
		dial_timeout = dial_timeout,
		tls = tls,
	)

uri_prefixes = tuple([x + '://' for x in conninfo_iri.schemes])

def collect(s):
	"""
	Parse a URI or keyword/value string into a parameters dictionary.

	Strings starting with ``postgresql://`` or ``postgres://`` are URIs;
	anything else, including the empty string, is a keyword/value string.
	"""
	if s.startswith(uri_prefixes):
		return conninfo_iri.parse(s)
	return conninfo_dsn.parse(s)

def parse(s, environ = os.environ, getuser = getuser):
	'Parse and resolve a connection string into a ConnectionConfig'
	return resolve(collect(s), environ = environ, getuser = getuser)

if __name__ == '__main__':
	import sys
	import pprint
	for x in sys.argv[1:]:
		pprint.pprint(dict(parse(x).items()))
