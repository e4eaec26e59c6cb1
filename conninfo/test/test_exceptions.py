##
# copyright 2009, James William Pye
# http://python.projects.postgresql.org
##
import unittest
import conninfo.exceptions as conninfo_exc

class test_exceptions(unittest.TestCase):
	def test_error_lookup(self):
		self.assertEqual(
			conninfo_exc.ErrorLookup('malformed_uri'), conninfo_exc.MalformedURI
		)
		self.assertEqual(
			conninfo_exc.ErrorLookup('malformed_connstr'),
			conninfo_exc.MalformedConnectionString
		)
		self.assertEqual(
			conninfo_exc.ErrorLookup('invalid_sslmode'), conninfo_exc.InvalidSSLMode
		)
		self.assertEqual(
			conninfo_exc.ErrorLookup('tls_keypair'), conninfo_exc.TLSKeyPairError
		)
		# unknown codes map to the base class
		self.assertEqual(
			conninfo_exc.ErrorLookup('no_such_code'), conninfo_exc.ParseError
		)

	def test_warning_lookup(self):
		self.assertEqual(
			conninfo_exc.ErrorLookup('ignored_parameter'),
			conninfo_exc.IgnoredClientParameterWarning
		)
		self.assertEqual(
			conninfo_exc.ErrorLookup('downgraded_verification'),
			conninfo_exc.DowngradedVerificationWarning
		)

	def test_codes_unique(self):
		classes = list(conninfo_exc.CodeClass.values())
		self.assertEqual(len(classes), len(set(classes)))
		for code, typ in conninfo_exc.CodeClass.items():
			self.assertEqual(typ.code, code)

	def test_parse_error(self):
		err = conninfo_exc.UnknownParameter("invalid connection option", 'zzz')
		self.assertTrue(isinstance(err, conninfo_exc.ParseError))
		self.assertEqual(err.code, 'unknown_parameter')
		self.assertEqual(err.message, "invalid connection option")
		self.assertEqual(err.fragment, 'zzz')
		self.assertEqual(str(err), "invalid connection option: 'zzz'")

		err = conninfo_exc.ParseError("no fragment")
		self.assertEqual(str(err), "no fragment")
		self.assertEqual(err.fragment, None)

	def test_warning_details(self):
		w = conninfo_exc.IgnoredClientParameterWarning(
			"not checked", details = {'parameter' : 'sslcrl'}
		)
		self.assertTrue(isinstance(w, Warning))
		self.assertTrue(str(w).startswith("not checked"))
		self.assertTrue('PARAMETER: sslcrl' in str(w))
		self.assertEqual(str(conninfo_exc.Warning("plain")), "plain")

if __name__ == '__main__':
	from types import ModuleType
	this = ModuleType("this")
	this.__dict__.update(globals())
	unittest.main(this)
