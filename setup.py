#!/usr/bin/env python3

import sys
from setuptools import setup, find_packages
from pathlib import Path
import importlib.util

# Load metadata from the package's version module
spec = importlib.util.spec_from_file_location('version',
                                              Path('couchrecord', 'version.py'))
metadata = importlib.util.module_from_spec(spec)
spec.loader.exec_module(metadata)

NAME = "couchrecord"

VERSION = metadata.__version__

DEPENDENCIES = []
DEPENDENCY_FILE_PATH = "./requirements/core.txt"

try:
    with open(DEPENDENCY_FILE_PATH, 'r') as dependency_file:
        DEPENDENCIES = [
            line.strip() for line in dependency_file if line.strip()
        ]
except OSError as err:
    print(
        f"Failed to lookup dependencies from {DEPENDENCY_FILE_PATH}: {str(err)}",
        file=sys.stderr)

EXTRAS = {'test': ['pytest>=7.0']}

# Package short description
DESCRIPTION = "Typed record classes mapped to CouchDB-style document databases"

# Package long description
LONG_DESCRIPTION = \
"""
Declare record classes with typed attributes and one-to-many associations,
then create, fetch, update and delete them in a document database reached
over HTTP, without writing JSON marshaling or REST calls.
"""

# Package keywords
KEYWORDS = ["CouchDB", "document", "ODM", "REST"]

# PyPI classifiers
CLASSIFIERS = [
    'Development Status :: 4 - Beta',
    'Intended Audience :: Developers',
    'License :: OSI Approved :: MIT License',
    'Natural Language :: English',
    'Programming Language :: Python :: 3',
    'Topic :: Database',
]

install_options = dict(
    name=NAME,
    version=VERSION,
    url=metadata.WEBSITE,
    description=DESCRIPTION,
    long_description=LONG_DESCRIPTION,
    license=metadata.LICENSE,
    keywords=KEYWORDS,
    classifiers=CLASSIFIERS,
    python_requires='>=3.7',
    install_requires=DEPENDENCIES,
    extras_require=EXTRAS,
    packages=find_packages(exclude=['tests', 'tests.*']),
)

setup(**install_options)
