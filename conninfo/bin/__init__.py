##
# vim: ts=3:sw=3:noet:
"""
Console-script collection package.

Contents:

 pg_conninfo
  Print the connection configuration resolved from a connection string and
  the environment.
"""
