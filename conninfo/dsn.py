##
# copyright 2008, pg/python project.
# http://python.projects.postgresql.org
##
"""
Parse and construct keyword/value connection strings::

	host=localhost port=5432 "application_name=my app" password=p\\ w

Tokens are separated by whitespace. A token may be wrapped in double quotes
with inner quotes doubled, and a backslash escapes the following character.
"""
import csv
import io
import re

from . import exceptions as conninfo_exc

needs_quoting_re = re.compile(r'[\s"\\]')

def separators(s):
	"""
	Replace the whitespace between tokens with a space, the only delimiter the
	csv reader accepts. Quoted and escaped whitespace is kept.
	"""
	l = []
	quoted = escaped = False
	for c in s:
		if escaped:
			escaped = False
		elif c == '\\':
			escaped = True
		elif c == '"':
			quoted = not quoted
		elif not quoted and c.isspace():
			c = ' '
		l.append(c)
	return ''.join(l)

def reader(s):
	return csv.reader(io.StringIO(separators(s), newline = ''),
		delimiter = ' ',
		quotechar = '"',
		escapechar = '\\',
		doublequote = True,
		skipinitialspace = False,
		strict = True,
	)

def tokens(s):
	'yield the non-empty tokens of a keyword/value string'
	r = reader(s)
	try:
		for record in r:
			for x in record:
				if x:
					yield x
	except csv.Error as err:
		raise conninfo_exc.MalformedConnectionString(
			"invalid quoting in connection string, line %d (%s)" %(
				r.line_num, err,
			),
			s,
		)

def split(s):
	'yield (key, value) pairs from a keyword/value string'
	for x in tokens(s):
		kv = x.split('=', 1)
		if len(kv) != 2:
			raise conninfo_exc.MalformedConnectionString(
				"missing \"=\" after keyword in connection string", x
			)
		yield kv[0], kv[1]

def parse(s):
	'Parse a keyword/value string into a dictionary object'
	d = {}
	for k, v in split(s):
		if k in d:
			raise conninfo_exc.AmbiguousParameter(
				"parameter specified more than once", k
			)
		d[k] = v
	return d

def quote(token, re = needs_quoting_re):
	if re.search(token) is None:
		return token
	return '"' + token.replace('\\', '\\\\').replace('"', '""') + '"'

def serialize(x):
	'Return a keyword/value string from a dictionary object'
	return ' '.join((
		quote(k + '=' + str(v)) for k, v in x.items()
		if v is not None
	))

if __name__ == '__main__':
	import sys
	for x in sys.argv[1:]:
		print("{src} -> {parsed!r} -> {serial}".format(
			src = x,
			parsed = parse(x),
			serial = serialize(parse(x))
		))
