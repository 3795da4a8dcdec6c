"""
Attribute and association metadata.

The same classes serve as templates, stored in a record class schema, and as
live holders, owned by a record instance.  A live holder is obtained from its
template with :any:`Attribute.copy` or :any:`HasManyAssociation.bind`.
"""

import copy
from decimal import Decimal
import inflection
from couchrecord.error import AttributeTypeError, ArgumentError

TYPES = {
    'text': (str, ),
    'number': (int, ),
    'decimal': (float, int, Decimal),
    'boolean': (bool, ),
    'list': (list, tuple),
}
"""dict: Python types accepted by each declarable attribute type."""

DEFAULT_TYPE = 'text'


def _coerce(type_name, value):
    if type_name == 'decimal':
        return float(value)
    if type_name == 'list':
        return list(value)
    return value


class Attribute:
    """A scalar field of a record.

    Args:
        name (str): Name of the attribute in Python code.
        type (str): One of :any:`TYPES`.
        default: Value of the attribute in a freshly built record.
        wire_name (str): Key of the attribute in documents, defaults to `name`.
    """

    def __init__(self, name, type=DEFAULT_TYPE, default=None, wire_name=None):
        # pylint: disable=redefined-builtin
        if type not in TYPES:
            raise ValueError(f"Unknown attribute type '{type}', "
                             f"expected one of {', '.join(TYPES)}")
        self.name = name
        self.type = type
        self.wire_name = wire_name or name
        self.default = self.check(default)
        self._value = copy.deepcopy(self.default)

    def __repr__(self):
        return f"Attribute({self.name!r}, type={self.type!r}, value={self._value!r})"

    def check(self, value):
        """Return `value` converted to the declared type.

        Raises:
            AttributeTypeError: `value` is neither None nor of the declared type.
        """
        if value is None:
            return None
        # bool is an int: only booleans may hold True/False
        if isinstance(value, bool) != (self.type == 'boolean') or \
                not isinstance(value, TYPES[self.type]):
            raise AttributeTypeError(self, value)
        return _coerce(self.type, value)

    @property
    def value(self):
        return self._value

    @value.setter
    def value(self, value):
        self._value = self.check(value)

    def copy(self):
        """Live holder seeded with a private copy of the default."""
        return type(self)(self.name, self.type, self.default, self.wire_name)

    def is_set(self):
        return self._value is not None

    def to_dict(self):
        if not self.is_set():
            return {}
        return {self.wire_name: self._value}


class HasManyAssociation:
    """A one-to-many relation between a record and child records.

    Args:
        name (str): Name of the association, usually a plural noun.
        model (type or str): Record class of the children, or its name.
            Inferred from `name` when omitted, e.g. ``people`` gives ``Person``.
    """

    def __init__(self, name, model=None):
        self.name = name
        self.model = model
        self.target = None
        self.container = []

    def __repr__(self):
        return f"HasManyAssociation({self.name!r}, model={self.model_name!r})"

    @property
    def singular(self):
        return inflection.singularize(self.name)

    @property
    def model_name(self):
        if self.model is None:
            return inflection.camelize(self.singular)
        if isinstance(self.model, str):
            return self.model
        return self.model.__name__

    def bind(self, target):
        """Live holder with an empty container for instances of `target`."""
        live = type(self)(self.name, self.model)
        live.target = target
        return live

    def push(self, child):
        if self.target is not None and not isinstance(child, self.target):
            raise ArgumentError(
                f"Cannot add {type(child).__name__} to '{self.name}': "
                f"expected a {self.target.__name__}")
        self.container.append(child)
        return child

    def build(self, data):
        """Construct a child from a mapping and add it."""
        return self.push(self.target(data))

    def to_dict(self):
        return {self.name: [child.to_dict() for child in self.container]}
