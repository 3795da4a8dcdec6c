import os
import sys
try:
    from couchrecord.version import __version__
except ModuleNotFoundError:
    __version__ = "0.0.0"

COUCHRECORD_VERSION = __version__
"""str: couchrecord version"""

EXIT_FAILURE = -100
"""int: Process exit code indicating unrecoverable failure."""

MIN_PYTHON_VERSION = (3, 7)
"""tuple: Required Python version for couchrecord.

A tuple of at least (MAJOR, MINOR) directly comparible to :any:`sys.version_info`
"""

if sys.version_info[0:2] < MIN_PYTHON_VERSION:
    VERSION = '.'.join([str(x) for x in sys.version_info[0:3]])
    EXPECTED = '.'.join([str(x) for x in MIN_PYTHON_VERSION])
    sys.stderr.write(f"""{sys.executable}
{sys.version}
Your Python version is {VERSION} but Python {EXPECTED} is required.
Please install the required Python version or raise an issue on Github for support.
""")
    sys.exit(EXIT_FAILURE)

COUCHRECORD_TEST = bool(os.environ.get('__COUCHRECORD_TEST__', False))
"""bool: True if the package is run in a test environment"""

COUCHRECORD_ENV_PREFIX = 'COUCHRECORD'

DEFAULT_SITE = 'http://localhost:5984/'
"""str: Document store reached when no site is configured or declared."""

CONTENT_TYPE = 'application/json'
"""str: Media type of every request body sent to the document store."""
