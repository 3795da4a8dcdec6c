"""
Controller definition of the MVC architecture
"""

from enum import Enum
from http import HTTPStatus
from collections.abc import Mapping
from urllib.parse import quote
from couchrecord import logger
from couchrecord.error import ArgumentError, PreconditionError, StoreError
from couchrecord.mvc.query import query_path

LOGGER = logger.get_logger(__name__)

# Suppress debugging messages in optimized code
if __debug__:
    _heavy_debug = LOGGER.debug  # pylint: disable=invalid-name
else:

    def _heavy_debug(*args, **kwargs):
        # pylint: disable=unused-argument
        pass


class Scope(Enum):
    """Scopes accepted by :any:`Controller.find` besides document ids."""
    ALL = 'all'
    FIRST = 'first'


ALL = Scope.ALL
FIRST = Scope.FIRST


def _quote(value):
    return quote(str(value), safe='')


class Controller():
    """The "C" in `MVC`_: turns record operations into document store requests.

    Attributes:
        model (type): Record class.
        connection (Connection): Transport to the document store.

    .. _MVC: https://en.wikipedia.org/wiki/Model-view-controller
    """

    def __init__(self, model_cls, connection):
        self.model = model_cls
        self.connection = connection

    def __repr__(self):
        return f"Controller({self.model.__name__}, {self.connection!r})"

    @property
    def database_name(self):
        return self.model.database_name()

    def _document_path(self, doc_id, rev=None):
        path = f"/{self.database_name}/{_quote(doc_id)}"
        if rev is not None:
            path += f"?rev={_quote(rev)}"
        return path

    @staticmethod
    def _reason(response):
        try:
            body = response.json()
        except StoreError:
            return response.body
        if isinstance(body, Mapping):
            return body.get('reason', body.get('error', response.body))
        return response.body

    def _instantiate(self, data):
        if not isinstance(data, Mapping):
            raise StoreError(
                f"Expected a {self.model.__name__} document, got {data!r}")
        return self.model(data)

    def save(self, record):
        """Store a record.

        Records with an id are sent with PUT to ``/<database>/<id>``, others
        are POSTed to ``/<database>`` and get an id from the store.  The id
        and revision of `record` are overwritten with those of the answer,
        whatever the outcome.

        Args:
            record (Record): Record to store.

        Returns:
            bool: True if the store created the revision.
        """
        body = record.to_json()
        if record.id is not None:
            response = self.connection.put(self._document_path(record.id),
                                           body)
        else:
            response = self.connection.post(f"/{self.database_name}", body)

        results = response.json()
        if not isinstance(results, Mapping):
            results = {}
        record.id = results.get('id')
        record.rev = results.get('rev')

        if response.code == HTTPStatus.CREATED:
            _heavy_debug("Saved %s %s (rev %s)", self.model.__name__,
                         record.id, record.rev)
            return True
        LOGGER.warning("Failed to save %s in '%s' (%d): %s",
                       self.model.__name__, self.database_name, response.code,
                       self._reason(response))
        return False

    def delete(self, record):
        """Delete the stored revision of a record.

        Args:
            record (Record): A record that has been saved or fetched.

        Returns:
            bool: True if the document was deleted; the id and revision of
            `record` are then reset and it may be saved again as a new record.

        Raises:
            PreconditionError: The record has never been saved or has no id.
        """
        if record.is_new():
            raise PreconditionError(
                "You must specify a revision for the document to be deleted")
        if record.id is None:
            raise PreconditionError(
                "You must specify an ID for the document to be deleted")

        response = self.connection.delete(
            self._document_path(record.id, record.rev))
        if response.code == HTTPStatus.ACCEPTED:
            _heavy_debug("Deleted %s %s", self.model.__name__, record.id)
            record.id = None
            record.rev = None
            return True
        LOGGER.warning("Failed to delete %s %s (%d): %s", self.model.__name__,
                       record.id, response.code, self._reason(response))
        return False

    def delete_document(self, id=None, rev=None):
        """Delete a document given its id and revision.

        Returns:
            bool: True if the document was deleted.

        Raises:
            ArgumentError: `id` or `rev` is missing.
        """
        # pylint: disable=redefined-builtin
        if id is None or rev is None:
            raise ArgumentError(
                "You must specify both an id and a rev for the document to be deleted"
            )
        response = self.connection.delete(self._document_path(id, rev))
        return response.code == HTTPStatus.ACCEPTED

    def create(self, data):
        """Build a record from `data` and save it.

        Args:
            data (dict): Attribute values of the new record.

        Returns:
            Record: The record, saved or not; check :any:`Record.is_new`.

        Raises:
            ArgumentError: `data` is not a mapping.
        """
        if not isinstance(data, Mapping):
            raise ArgumentError(f"The arguments must be a mapping, got {data!r}")
        record = self.model(data)
        self.save(record)
        return record

    def one(self, doc_id):
        """Get a record.

        Args:
            doc_id (str): Document identifier.

        Returns:
            Record: The matching record or None if no such document exists.
        """
        response = self.connection.get(self._document_path(doc_id))
        if response.code == HTTPStatus.NOT_FOUND:
            _heavy_debug("No %s with id %s", self.model.__name__, doc_id)
            return None
        if response.code != HTTPStatus.OK:
            raise StoreError(
                f"Failed to fetch {self.model.__name__} {doc_id} "
                f"({response.code}): {self._reason(response)}",
                status=response.code)
        return self._instantiate(response.json())

    def all(self, options=None):
        """Get the records returned by a view query.

        Args:
            options (dict): See :any:`couchrecord.mvc.query.query_path`.

        Returns:
            list: Records for every row of the view, in order.
        """
        path = query_path(self.database_name, options)
        response = self.connection.get(path)
        if response.code != HTTPStatus.OK:
            raise StoreError(
                f"Failed to query '{path}' ({response.code}): {self._reason(response)}",
                status=response.code)
        result = response.json()
        if not isinstance(result, Mapping) or not isinstance(
                result.get('rows'), list):
            raise StoreError(f"Query '{path}' did not return rows")
        return [
            self._instantiate(
                row.get('value') if isinstance(row, Mapping) else row)
            for row in result['rows']
        ]

    def first(self, options=None):
        """Get the first record returned by a view query, or None."""
        records = self.all(options)
        return records[0] if records else None

    def find(self, scope, options=None, **kwargs):
        """Retrieve one or more records.

        Args:
            scope: :any:`ALL` for every record of a view query, :any:`FIRST`
                for the first one, anything else is a document id.
            options (dict): Query options, merged with `kwargs`.  See
                :any:`couchrecord.mvc.query.query_path`.

        Examples:
        ::

            Person.find(ALL, params={'name': 'McLovin'})    # [Person, ...]
            Person.find(FIRST, params={'name': 'McLovin'})  # Person or None
            Person.find('abc-def')                          # Person or None
        """
        if options is not None and not isinstance(options, Mapping):
            raise ArgumentError(f"Query options must be a mapping, got {options!r}")
        options = dict(options or {}, **kwargs)
        if scope is Scope.ALL:
            return self.all(options)
        if scope is Scope.FIRST:
            return self.first(options)
        return self.one(scope)

    def count(self, options=None, **kwargs):
        """Return the number of records a view query returns.

        Returns:
            int: Effectively ``len(self.find(ALL, options))``
        """
        return len(self.find(Scope.ALL, options, **kwargs))
