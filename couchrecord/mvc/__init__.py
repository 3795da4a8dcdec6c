"""
couchrecord core software architecture.

couchrecord follows the `Model-View-Controller (MVC)`_ architectural pattern,
without the view.  :py:mod:`couchrecord.mvc.model` defines :any:`Record`, the
base class of every record class, and :py:mod:`couchrecord.mvc.controller`
the :any:`Controller` turning record operations into requests to the
document store.

Record classes declare their attributes as a dictionary named
``__attributes__`` in the form::

    <attribute>: {
        property: value,
        [[property: value], ...]
    }

Supported properties are:

* ``type`` (str): One of 'text', 'number', 'decimal', 'boolean' or 'list'.
* ``default``: Value of the attribute in new records.
* ``description`` (str): Documentation of the attribute.

Associations are declared in ``__associations__``, where the ``model``
property names the record class of the children::

    class Brewery(Record):
        __attributes__ = {'address': {'type': 'text'}}
        __associations__ = {'brews': {'model': 'Beer'}}

    class Beer(Record):
        __attributes__ = {'color': {'type': 'text'},
                          'ibu': {'type': 'number'}}

Children are stored inside the document of their parent::

    {
     '_id': '100',
     '_rev': '1-2b4e',
     'address': '4615 Hollins Ferry Rd, Halethorpe, MD 21227',
     'brews': [{'color': 'gold', 'ibu': 45},
               {'color': 'dark', 'ibu': 15}]
    }

Every record has an ``id`` and a ``rev`` attribute, stored as ``_id`` and
``_rev`` in documents.  A record without revision is *new*: saving it creates
a document, saving it again creates a new revision.

Schemas, database names and connections are kept by the
:any:`SchemaRegistry` a record class finds in its ``__registry__``
attribute.

.. _Model-View-Controller (MVC): https://en.wikipedia.org/wiki/Model-view-controller
"""

from couchrecord.mvc.controller import ALL, FIRST, Controller, Scope
from couchrecord.mvc.schema import Schema, SchemaRegistry
from couchrecord.mvc.model import Record, REGISTRY
