##
# copyright 2009, James William Pye
# http://python.projects.postgresql.org
##
"""
py-conninfo tests. Run them all with::

	$ python -m conninfo.test.testall
"""
