"""
Database administration.

Unlike record operations, which report a failed save or delete with a False
result, migrations raise :any:`MigrationError` whenever the document store
does not answer with the expected status.
"""

from http import HTTPStatus
from couchrecord import logger
from couchrecord.error import MigrationError
from couchrecord.cf.connection import Connection

LOGGER = logger.get_logger(__name__)


class Migrator:
    """Creates and deletes whole databases on a document store."""

    @staticmethod
    def create_database(site, name):
        """Create database `name` on `site`.

        Args:
            site (str): Root URL of the document store.
            name (str): Database to create.

        Returns:
            bool: True once the database has been created.

        Raises:
            MigrationError: The database exists or the store refused to create it.
        """
        response = Connection(site).put(f"/{name}")

        if response.code == HTTPStatus.CREATED:
            LOGGER.debug("Created database '%s' on %s", name, site)
            return True

        if response.code == HTTPStatus.PRECONDITION_FAILED:
            raise MigrationError(f"Database '{name}' already exists",
                                 status=response.code)
        raise MigrationError(
            f"Error creating database '{name}' - response code: {response.code}",
            status=response.code)

    @staticmethod
    def delete_database(site, name):
        """Delete database `name` from `site`.

        Args:
            site (str): Root URL of the document store.
            name (str): Database to delete.

        Returns:
            bool: True once the database has been deleted.

        Raises:
            MigrationError: The database does not exist or the store refused to delete it.
        """
        response = Connection(site).delete(f"/{name}")

        if response.code == HTTPStatus.ACCEPTED:
            LOGGER.debug("Deleted database '%s' from %s", name, site)
            return True

        if response.code == HTTPStatus.NOT_FOUND:
            raise MigrationError(f"Database '{name}' does not exist",
                                 status=response.code)
        raise MigrationError(
            f"Error deleting database '{name}' - response code: {response.code}",
            status=response.code)
