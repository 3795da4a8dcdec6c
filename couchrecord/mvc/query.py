"""
View query paths.

Records are searched through permanent views following a naming convention:
the view indexing documents by `field` is named ``by_<field>`` and lives in
the design document of the same name.  Filtering people by name therefore
queries ``/people/_view/by_name/by_name?key=McLovin``.
"""

from collections.abc import Mapping
from urllib.parse import quote
from couchrecord.error import ArgumentError


def _key(value):
    if value is None:
        return ''
    if isinstance(value, bool):
        return str(value).lower()
    return quote(str(value), safe='')


def view_query(params):
    """View path and query string matching a single-entry filter.

    Args:
        params (dict): ``{field: value}``.

    Returns:
        str: ``by_<field>/by_<field>?key=<url-encoded value>``.  Booleans
        are written in lowercase and None as an empty key.

    Raises:
        ArgumentError: `params` is not a mapping with exactly one entry.
    """
    if not isinstance(params, Mapping) or len(params) != 1:
        raise ArgumentError(
            f"The value for the key 'params' must be a mapping with a single entry, got {params!r}",
            "Use params={'<field>': <value>} or give a path with 'from'.")
    (field, value), = params.items()
    return f"by_{field}/by_{field}?key={_key(value)}"


def query_path(database_name, options=None):
    """Path of the view query described by `options`.

    Args:
        database_name (str): Database holding the view.
        options (dict): Either ``from``, a path used verbatim, or ``params``,
            a filter for :any:`view_query`.  ``from_`` is accepted for ``from``.

    Raises:
        ArgumentError: Neither a valid path nor a valid filter was given.
    """
    options = options or {}
    if not isinstance(options, Mapping):
        raise ArgumentError(f"Query options must be a mapping, got {options!r}")

    path = options.get('from', options.get('from_'))
    if path is not None:
        if not isinstance(path, str):
            raise ArgumentError(f"The value for the key 'from' must be a path, got {path!r}")
        return path

    return f"/{database_name}/_view/{view_query(options.get('params'))}"
