"""
HTTP transport to a document store.

A :any:`Connection` is bound to a site (the root URL of the store) and turns
``get/put/post/delete(path[, body])`` calls into HTTP requests, returning a
:any:`Response` holding the status code and raw body.  Status codes are
never turned into exceptions here: interpreting them is the caller's job.
"""

from dataclasses import dataclass
from urllib.parse import urljoin
import requests
from couchrecord import logger, config, CONTENT_TYPE
from couchrecord.error import StoreError
from couchrecord.util import json_loads

LOGGER = logger.get_logger(__name__)


@dataclass(frozen=True)
class Response:
    """Answer of the document store to a single request."""
    code: int
    body: str = ''

    def json(self):
        """Decode the body.

        Raises:
            StoreError: The body is not a JSON document.
        """
        try:
            return json_loads(self.body or 'null')
        except ValueError as err:
            raise StoreError(f"Invalid JSON in response ({self.code}): {err}",
                             status=self.code) from err


class Connection:
    """Blocking HTTP client for one document store.

    Args:
        site (str): Root URL of the store, e.g. ``http://localhost:5984/``.
        timeout (float): Seconds to wait for an answer. Defaults to the
            ``timeout`` configuration key.
        session (requests.Session): Session to send requests through.
    """

    def __init__(self, site, timeout=None, session=None):
        if not isinstance(site, str) or not site:
            raise StoreError(f"Invalid site: {site!r}",
                             "Use a URL such as 'http://localhost:5984/'.")
        if '://' not in site:
            site = f"http://{site}"
        self.site = site if site.endswith('/') else site + '/'
        self.timeout = config.CONFIGURATION.timeout if timeout is None else timeout
        self.session = session or requests.Session()
        self.session.headers.update({
            'Content-Type': CONTENT_TYPE,
            'Accept': CONTENT_TYPE,
        })
        self.session.headers.update(config.CONFIGURATION.http_headers)

    def __repr__(self):
        return f"{type(self).__name__}({self.site!r})"

    def url(self, path):
        return urljoin(self.site, path.lstrip('/'))

    def request(self, method, path, body=None):
        url = self.url(path)
        LOGGER.debug("%s %s", method, url)
        try:
            answer = self.session.request(method,
                                          url,
                                          data=body,
                                          timeout=self.timeout)
        except requests.RequestException as err:
            LOGGER.warning("%s %s failed: %s", method, url, err)
            raise StoreError(f"{method} {url} failed: {err}") from err

        LOGGER.debug("%s %s -> %d", method, url, answer.status_code)
        return Response(answer.status_code, answer.text)

    def get(self, path):
        return self.request('GET', path)

    def put(self, path, body=None):
        return self.request('PUT', path, body)

    def post(self, path, body=None):
        return self.request('POST', path, body)

    def delete(self, path):
        return self.request('DELETE', path)
