##
# copyright 2009, James William Pye
# http://python.projects.postgresql.org
##
"""
PostgreSQL command-line client optparse options.

The connection options append ``(parameter, value)`` pairs to the parser's
``db_client_parameters`` list in the order they were given on the command
line. `apply` applies that list over a collected parameters dictionary.
"""
import optparse
from functools import partial

def append_db_client_parameters(option, opt_str, value, parser):
	parser.values.db_client_parameters.append((option.dest, value))

make_option = partial(optparse.make_option,
	action = 'callback',
	callback = append_db_client_parameters,
	type = 'str',
)

user = make_option('-U', '--username',
	dest = 'user',
	help = 'user name to connect as',
)
database = make_option('-d', '--database',
	help = "database's name",
	dest = 'dbname',
)
host = make_option('-h', '--host',
	help = 'database server host or socket directory',
	dest = 'host',
)
port = make_option('-p', '--port',
	help = 'database server port',
	dest = 'port',
)
sslmode = make_option('--ssl-mode',
	dest = 'sslmode',
	help = 'SSL rules for connectivity',
	choices = ('disable', 'allow', 'prefer', 'require', 'verify-ca', 'verify-full'),
	type = 'choice',
)
application_name = make_option('--application-name',
	dest = 'application_name',
	help = 'application name reported to the server',
)

no_environ = optparse.make_option('--no-environ',
	dest = 'no_environ',
	action = 'store_true',
	default = False,
	help = 'ignore PG* environment variables',
)

# PostgreSQL Standard Options
standard = [database, host, port, user]

class StandardParser(optparse.OptionParser):
	"""
	Option parser limited to the basic -U, -h, -p, and -d options.
	This parser subclass is necessary for two reasons:

	 1. _add_help_option override to not conflict with -h
	 2. Initialize the db_client_parameters on the parser's values.

	See the DefaultParser for more fun.
	"""
	standard_option_list = standard

	def get_default_values(self, *args, **kw):
		v = super().get_default_values(*args, **kw)
		v.db_client_parameters = []
		return v

	def _add_help_option(self):
		# Only allow long --help so that it will not conflict with -h(host)
		self.add_option("--help",
			action = "help",
			help = "show this help message and exit",
		)

# Extended Options
default = standard + [
	sslmode,
	application_name,
	no_environ,
]

class DefaultParser(StandardParser):
	"""
	Parser that includes a variety of connectivity options.
	(sslmode, application name, environment suppression)
	"""
	standard_option_list = default

def apply(params, co):
	"""
	Return a copy of `params` with the parameters given on the command line
	applied over it. Later options override earlier ones.
	"""
	d = dict(params)
	for k, v in getattr(co, 'db_client_parameters', ()):
		if k == 'host':
			# -h always replaces the whole host slot
			d.pop('hostaddr', None)
		d[k] = v
	return d

if __name__ == '__main__':
	import pprint
	p = DefaultParser()
	(co, ca) = p.parse_args()
	print("Parameters(co.db_client_parameters):")
	pprint.pprint(co.db_client_parameters)
	print("Remainder(ca):")
	pprint.pprint(ca)
