"""Unit test initializations and utility functions."""

import os
import sys
import json
import unittest
from pathlib import Path

os.environ.setdefault('__COUCHRECORD_TEST__', '1')

from couchrecord import logger, config

ASSETS = Path(__file__).parent / "assets"
CONFIGURATION_FILE = ASSETS / "couchrecord.yaml"

# Set the configuration to a specific testing version
config.update_configuration(
    config.Configuration.create_from_file(CONFIGURATION_FILE, complete=True))
logger.set_log_level(config.CONFIGURATION.log_level)

from couchrecord.cf.connection import Response

SITE = 'http://test.host:5984/'


def response(code, body=None):
    """Build a store answer, encoding `body` unless it is already text."""
    if body is None:
        body = {}
    if not isinstance(body, str):
        body = json.dumps(body)
    return Response(code, body)


class FakeConnection:
    """Stands for a :any:`Connection`: records requests, replays canned answers.

    Answers are consumed in order; a request without answer fails the test.
    """

    def __init__(self, *responses):
        self.requests = []
        self.responses = list(responses)

    def __repr__(self):
        return f"FakeConnection({len(self.requests)} requests)"

    def respond(self, code, body=None):
        self.responses.append(response(code, body))
        return self

    def _answer(self, method, path, body=None):
        self.requests.append((method, path, body))
        if not self.responses:
            raise AssertionError(f"Unexpected request: {method} {path}")
        return self.responses.pop(0)

    @property
    def last(self):
        return self.requests[-1]

    def get(self, path):
        return self._answer('GET', path)

    def put(self, path, body=None):
        return self._answer('PUT', path, body)

    def post(self, path, body=None):
        return self._answer('POST', path, body)

    def delete(self, path):
        return self._answer('DELETE', path)


class TestCase(unittest.TestCase):
    """Base class for unit tests.

    Reconfigures :any:`couchrecord.logger` to work with :any:`unittest`.
    """
    # Follow the :any:`unittest` code style.
    # pylint: disable=invalid-name

    @classmethod
    def setUpClass(cls):
        # Reset stderr logger handler to use buffered unittest stdout
        # pylint: disable=protected-access
        cls._orig_stream = logger._STDERR_HANDLER.stream
        logger._STDERR_HANDLER.stream = sys.stdout
        logger._STDERR_HANDLER.setFormatter(
            logger.LogFormatter(line_width=150, printable_only=True))

    @classmethod
    def tearDownClass(cls):
        # Reset stderr logger handler to use original stderr
        # pylint: disable=protected-access
        logger._STDERR_HANDLER.stream = cls._orig_stream

    def assertRequest(self, connection, method, path, index=-1):
        sent_method, sent_path, _ = connection.requests[index]
        self.assertEqual((sent_method, sent_path), (method, path))

    def sentDocument(self, connection, index=-1):
        """Decoded body of a recorded request."""
        return json.loads(connection.requests[index][2])
