"""Utility functions.

JSON encoding and decoding of documents exchanged with the document store.
"""

import json
from decimal import Decimal
from datetime import date, datetime
from couchrecord.error import InternalError


def _json_serializer(obj):
    """
    JSON add-on that renders the values a record may carry but :any:`json`
    cannot: decimals become floats, dates and datetimes their ISO form, sets
    sorted lists.
    """
    if isinstance(obj, Decimal):
        return float(obj)
    if isinstance(obj, (date, datetime)):
        return obj.isoformat()
    if isinstance(obj, (set, frozenset)):
        return sorted(obj)

    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


def json_dumps(*args, **kwargs):
    """
    json.dumps wrapper
    """
    if kwargs.get('default'):
        raise InternalError("Cannot override default from util.json_dumps")

    kwargs['default'] = _json_serializer

    return json.dumps(*args, **kwargs)


def json_loads(*args, **kwargs):
    """
    json.loads wrapper

    Accepts bytes as returned by the transport.
    """
    if args and isinstance(args[0], (bytes, bytearray)):
        args = (args[0].decode('utf-8'),) + args[1:]

    return json.loads(*args, **kwargs)
