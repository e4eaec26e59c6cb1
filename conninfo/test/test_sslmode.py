##
# copyright 2009, James William Pye
# http://python.projects.postgresql.org
##
import unittest
import warnings
import os.path

import conninfo.sslmode as conninfo_ssl
import conninfo.exceptions as conninfo_exc
from conninfo.config import ClientCertificate
from . import support

# mode -> (enabled, skip_verification, needs_hostname)
mode_samples = {
	'disable' : (False, False, False),
	'allow' : (True, True, False),
	'prefer' : (True, True, False),
	'require' : (True, True, False),
	'verify-ca' : (True, True, False),
	'verify-full' : (True, False, True),
}

def flags(state):
	return (state.enabled, state.skip_verification, state.needs_hostname)

class test_sslmode(unittest.TestCase):
	def testModes(self):
		with warnings.catch_warnings():
			warnings.simplefilter('ignore')
			for mode, expect in mode_samples.items():
				state = conninfo_ssl.resolve([('sslmode', mode)])
				self.assertTrue(state.seen)
				self.assertEqual(flags(state), expect,
					"sslmode incongruity, %r -> %r != %r" %(
						mode, flags(state), expect
					)
				)

	def testInvalidMode(self):
		for mode in ('', 'Require', 'verify_full', 'on'):
			self.assertRaises(
				conninfo_exc.InvalidSSLMode,
				conninfo_ssl.resolve, [('sslmode', mode)]
			)

	def testRequireSSL(self):
		state = conninfo_ssl.resolve([('requiressl', '1')])
		self.assertEqual(flags(state), mode_samples['require'])
		state = conninfo_ssl.resolve([('requiressl', '0')])
		self.assertEqual(flags(state), mode_samples['prefer'])
		# any other value sets the flag
		for value in ('yes', 'true', '2'):
			state = conninfo_ssl.resolve([('requiressl', value)])
			self.assertTrue(state.seen)
			self.assertEqual(flags(state), mode_samples['require'])

	def testUnset(self):
		state = conninfo_ssl.resolve([('sslmode', None), ('requiressl', None)])
		self.assertFalse(state.seen)
		self.assertFalse(state.enabled)

	def testFirstWriterWins(self):
		state = conninfo_ssl.resolve([
			('sslmode', None),
			('sslmode', 'disable'),
			('requiressl', '1'),
			('sslmode', 'verify-full'),
		])
		self.assertEqual(flags(state), mode_samples['disable'])

		def sources():
			yield 'sslmode', 'require'
			raise AssertionError("consulted after the first value")
		state = conninfo_ssl.resolve(sources())
		self.assertEqual(flags(state), mode_samples['require'])

	def testVerifyCAWarning(self):
		with warnings.catch_warnings(record = True) as w:
			warnings.simplefilter('always')
			conninfo_ssl.resolve([('sslmode', 'verify-ca')])
			conninfo_ssl.resolve([('sslmode', 'require')])
		self.assertEqual(len(w), 1)
		self.assertTrue(
			issubclass(w[0].category, conninfo_exc.DowngradedVerificationWarning)
		)

class test_key_pair(support.KeyPairFiles, unittest.TestCase):
	def testLoad(self):
		c = conninfo_ssl.load_key_pair(self.certfile, self.keyfile)
		self.assertTrue(isinstance(c, ClientCertificate))
		self.assertEqual(c.certfile, self.certfile)
		self.assertEqual(c.keyfile, self.keyfile)
		self.assertEqual(c.certificate, support.client_certificate)
		self.assertEqual(c.key, support.client_key)
		# key material stays out of the repr
		self.assertFalse('PRIVATE' in repr(c))

	def testMismatch(self):
		self.assertRaises(
			conninfo_exc.TLSKeyPairError,
			conninfo_ssl.load_key_pair, self.certfile, self.other_keyfile
		)

	def testMissing(self):
		missing = os.path.join(self.tmpdir, 'missing.crt')
		try:
			conninfo_ssl.load_key_pair(missing, self.keyfile)
		except conninfo_exc.TLSKeyPairError as err:
			self.assertEqual(err.fragment, (missing, self.keyfile))
		else:
			self.fail("missing certificate file was accepted")

	def testNulInPath(self):
		self.assertRaises(
			conninfo_exc.TLSKeyPairError,
			conninfo_ssl.load_key_pair, self.certfile + '\x00', self.keyfile
		)

	def testNotACertificate(self):
		# the key is not a certificate
		self.assertRaises(
			conninfo_exc.TLSKeyPairError,
			conninfo_ssl.load_key_pair, self.keyfile, self.keyfile
		)

if __name__ == '__main__':
	from types import ModuleType
	this = ModuleType("this")
	this.__dict__.update(globals())
	unittest.main(this)
