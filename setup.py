#!/usr/bin/env python
##
# setup.py - py-conninfo
##
import sys
import os

if sys.version_info[:2] < (3,8):
	sys.stderr.write(
		"ERROR: py-conninfo is for Python 3.8 and greater." + os.linesep
	)
	sys.stderr.write(
		"HINT: setup.py was ran using Python " + \
		'.'.join([str(x) for x in sys.version_info[:3]]) +
		': ' + sys.executable + os.linesep
	)
	sys.exit(1)

# project data is kept in `conninfo.project`
sys.path.insert(0, '')

sys.dont_write_bytecode = True
import conninfo.project as project
sys.dont_write_bytecode = False

def standard_setup_keywords():
	return {
		'name' : project.name,
		'version' : project.version,
		'description' : project.description,
		'author' : project.author.split(' <')[0],
		'author_email' : project.author.split('<')[1].rstrip('>'),
		'url' : project.identity,
		'license' : 'BSD',
		'classifiers' : [
			'Development Status :: 5 - Production/Stable',
			'Intended Audience :: Developers',
			'License :: OSI Approved :: BSD License',
			'Operating System :: OS Independent',
			'Programming Language :: Python :: 3',
			'Topic :: Database',
		],
		'python_requires' : '>=3.8',
		'packages' : [
			'conninfo',
			'conninfo.bin',
			'conninfo.test',
		],
		'entry_points' : {
			'console_scripts' : [
				'pg_conninfo = conninfo.bin.pg_conninfo:command',
			],
		},
	}

if __name__ == '__main__':
	from setuptools import setup
	setup(**standard_setup_keywords())
