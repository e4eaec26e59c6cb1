##
# copyright 2009, James William Pye
# http://python.projects.postgresql.org
##
"""
Print the connection configuration resolved from a connection string.

	$ pg_conninfo 'postgresql://user@host/db?connect_timeout=10'
	address: host:5432
	network: tcp
	...

Command line options override the parameters in the connection string.
"""
import os
import sys
import optparse

from .. import project
from .. import clientoptparse
from .. import clientparameters
from .. import environ as client_environ
from .. import dsn as conninfo_dsn
from .. import iri as conninfo_iri
from .. import exceptions as conninfo_exc

output_format = optparse.make_option('--format',
	dest = 'format',
	type = 'choice',
	choices = ('fields', 'conninfo', 'uri'),
	default = 'fields',
	help = 'output as named fields, a keyword/value string, or a URI',
)
show_environ = optparse.make_option('--environ',
	dest = 'show_environ',
	action = 'store_true',
	default = False,
	help = 'print the connection parameters set in the environment and exit',
)
default_options = [
	output_format,
	show_environ,
]

def fields(config):
	'Yield (name, display string) for each field of the configuration'
	for k, v in config.items():
		if k == 'password':
			v = '********' if v else ''
		elif k == 'dial_timeout':
			v = str(int(v.total_seconds()))
		elif k == 'tls':
			if v is None:
				v = 'disabled'
			else:
				v = 'skip_verification=%r server_name=%s certificates=%s' %(
					v.skip_verification,
					v.server_name or '',
					','.join([x.certfile for x in v.certificates]),
				)
		yield k, v

def command(args = sys.argv, environ = os.environ, stdout = sys.stdout, stderr = sys.stderr):
	p = clientoptparse.DefaultParser(
		"%prog [connection options] [connection-string]",
		version = project.version,
		option_list = default_options
	)
	co, ca = p.parse_args(args[1:])
	if len(ca) > 1:
		p.error("only one connection string may be given")
	if co.no_environ:
		environ = {}

	if co.show_environ:
		for k, v in sorted(client_environ.convert_environ(environ).items()):
			if k == 'password':
				v = '********'
			stdout.write('%s: %s%s' %(k, v, os.linesep))
		return 0

	try:
		params = clientoptparse.apply(
			clientparameters.collect(ca[0] if ca else ''), co
		)
		config = clientparameters.resolve(params, environ = environ)
	except conninfo_exc.ParseError as err:
		stderr.write(p.get_prog_name() + ': ' + str(err) + os.linesep)
		return 1

	if co.format == 'conninfo':
		stdout.write(conninfo_dsn.serialize(config.parameters()) + os.linesep)
	elif co.format == 'uri':
		stdout.write(conninfo_iri.serialize(config.parameters()) + os.linesep)
	else:
		for k, v in fields(config):
			stdout.write('%s: %s%s' %(k, v, os.linesep))
	return 0

if __name__ == '__main__':
	sys.exit(command(sys.argv))
