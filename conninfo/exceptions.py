##
# copyright 2009, James William Pye
# http://python.projects.postgresql.org
##
"""
Connection descriptor parsing exceptions and warnings.

Every failure raised by `conninfo.parse` is a `ParseError` subclass carrying a
``code`` string. The primary lookup entry point is `ErrorLookup`.

This module is executable via -m: python -m conninfo.exceptions.
It provides a convenient way to look up the exception object mapped to by the
given code::

	$ python -m conninfo.exceptions malformed_uri
	conninfo.exceptions.MalformedURI [malformed_uri]
"""
import sys
from os import linesep

class Exception(Exception):
	'Base conninfo exception class'
	pass

def msgstr(ob):
	'Create a string for display in a warning or traceback'
	if ob.fragment is None:
		return str(ob.message)
	return '%s: %r' %(ob.message, ob.fragment)

class ParseError(Exception):
	"""ParseError(msg[, fragment])

	A connection descriptor could not be resolved into a configuration.
	``fragment`` is the offending token, parameter or value when one can be
	identified.
	"""
	code = 'parse_error'
	fragment = None
	message = None

	def __init__(self, msg, fragment = None, code = None):
		Exception.__init__(self, msg, fragment)
		if code is not None and self.code != code:
			self.code = code
		self.message = msg
		self.fragment = fragment

	__str__ = msgstr
	def __repr__(self):
		return '%s.%s(%r%s)' %(
			type(self).__module__,
			type(self).__name__,
			self.message,
			'' if self.fragment is None else ', ' + repr(self.fragment),
		)

class MalformedConnectionString(ParseError):
	"Keyword/value string could not be tokenized"
	code = 'malformed_connstr'

class MalformedURI(ParseError):
	"URI structure or percent-escape decoding failure"
	code = 'malformed_uri'

class AmbiguousParameter(ParseError):
	"A parameter was given more than one value"
	code = 'ambiguous_parameter'

class UnknownParameter(ParseError):
	code = 'unknown_parameter'

class EmptyParameterValue(ParseError):
	"""
	A parameter was present with an empty value. `key=` is invalid, it does
	not mean "unset".
	"""
	code = 'empty_value'

class InvalidNumericValue(ParseError):
	"port or connect_timeout is not a valid integer"
	code = 'invalid_numeric'

class InvalidSSLMode(ParseError):
	code = 'invalid_sslmode'

class TLSKeyPairError(ParseError):
	"The client certificate and key could not be loaded as a pair"
	code = 'tls_keypair'

class Warning(Warning):
	'Base conninfo warning class'
	code = 'warning'
	message = None

	def __init__(self, msg, details = {}):
		super().__init__(msg)
		self.message = msg
		self.details = details

	def __str__(self):
		if not self.details:
			return str(self.message)
		return str(self.message) + linesep + linesep.join([
			'%s: %s' %(k.upper(), v) for k, v in sorted(self.details.items())
		])

class IgnoredClientParameterWarning(Warning):
	"A recognized parameter was accepted but has no effect"
	code = 'ignored_parameter'

class DowngradedVerificationWarning(Warning):
	"""
	The requested server certificate verification cannot be performed and the
	TLS posture skips verification instead.
	"""
	code = 'downgraded_verification'

CodeClass = {}
def ErrorLookup(c):
	"""
	Given an error code, return the exception that is most closely associated
	with it.
	"""
	return CodeClass.get(c) or ParseError

# Setup mapping to provide code based exception lookup.
d = sys.modules[__name__].__dict__
e = None
for e in d.values():
	if type(e) == type(ParseError) and issubclass(e, (ParseError, Warning)):
		CodeClass[e.code] = e
del e, d

if __name__ == '__main__':
	for x in sys.argv[1:]:
		e = ErrorLookup(x)
		sys.stdout.write('conninfo.exceptions.%s [%s]%s%s' %(
				e.__name__, e.code, linesep, (
					e.__doc__ is not None and linesep.join([
						'  ' + x for x in (e.__doc__).split('\n')
					]) + linesep or ''
				)
			)
		)
