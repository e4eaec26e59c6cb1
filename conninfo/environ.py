##
# copyright 2009, James William Pye
# http://python.projects.postgresql.org
##
"""
PostgreSQL client environment variable extraction.

Each resolvable connection parameter has exactly one environment variable:

	host -> PGHOST
	port -> PGPORT
	dbname -> PGDATABASE
	user -> PGUSER
	password -> PGPASSWORD
	application_name -> PGAPPNAME
	sslmode -> PGSSLMODE
	requiressl -> PGREQUIRESSL
	sslcert -> PGSSLCERT
	sslkey -> PGSSLKEY
	connect_timeout -> PGCONNECT_TIMEOUT

These are a finite map with zero manipulation of the values. A variable set
to the empty string is treated as unset.

The environment is any mapping; `os.environ` is only the default.
"""
import os

envvar_map = {
	'host' : 'PGHOST',
	'port' : 'PGPORT',
	'dbname' : 'PGDATABASE',
	'user' : 'PGUSER',
	'password' : 'PGPASSWORD',
	'application_name' : 'PGAPPNAME',

	'sslmode' : 'PGSSLMODE',
	# deprecated in favor of PGSSLMODE
	'requiressl' : 'PGREQUIRESSL',
	'sslcert' : 'PGSSLCERT',
	'sslkey' : 'PGSSLKEY',

	'connect_timeout' : 'PGCONNECT_TIMEOUT',
}

def lookup(parameter, environ = os.environ, envvar_map = envvar_map):
	"""
	Return the value of the environment variable mapped to `parameter`, or
	`None` if there is no such variable or it is empty.
	"""
	k = envvar_map.get(parameter)
	if k is None:
		return None
	return environ.get(k) or None

def convert_environ(env = os.environ):
	'given an environment, make a connection parameter dictionary'
	return {
		k : env[v] for k, v in envvar_map.items() if env.get(v)
	}
