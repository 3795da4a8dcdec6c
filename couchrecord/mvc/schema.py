"""
Schema registry.

Every record class owns a :any:`Schema` listing the attributes and
associations it declares.  The *effective* schema of a class is its own
schema merged over the effective schema of its parent class; it is computed
on first use and cached until a declaration changes the hierarchy.

The registry also holds the per-class state that used to live on the classes
themselves: database names and the connections used to reach the document
store.  Record classes find their registry in their ``__registry__``
attribute, so a test may build a private registry and bind fake connections
to it without touching module globals.
"""

from typing import Dict, Optional
import inflection
from couchrecord import logger, config
from couchrecord.error import (
    AttributeTypeError,
    HierarchyError,
    InvalidDeclaration,
)
from couchrecord.cf.connection import Connection
from couchrecord.mvc.attribute import Attribute, HasManyAssociation

LOGGER = logger.get_logger(__name__)

IDENTITY_ATTRIBUTES = {'id': '_id', 'rev': '_rev'}
"""dict: Attributes present on every record, and their key in documents."""


class Schema:
    """Attributes and associations of a record class.

    Attributes:
        attributes (dict): Attribute templates indexed by name.
        associations (dict): HasManyAssociation templates indexed by name.
    """

    def __init__(self, attributes=None, associations=None):
        self.attributes: Dict[str, Attribute] = dict(attributes or {})
        self.associations: Dict[str,
                                HasManyAssociation] = dict(associations or {})

    def __repr__(self):
        return (f"Schema(attributes={list(self.attributes)}, "
                f"associations={list(self.associations)})")

    def __contains__(self, name):
        return name in self.attributes or name in self.associations

    def merged(self, parent):
        """Return this schema's declarations merged over `parent`."""
        return Schema({
            **parent.attributes,
            **self.attributes
        }, {
            **parent.associations,
            **self.associations
        })

    def setters(self):
        """Attributes indexed by every key a document may use for them."""
        keys = {}
        for attribute in self.attributes.values():
            keys[attribute.name] = attribute.name
            keys[attribute.wire_name] = attribute.name
        return keys


class SchemaRegistry:
    """Schemas, database names and connections of a family of record classes.

    Args:
        root (type): Root record class; its direct subclasses are base types.
    """

    def __init__(self, root=None):
        self.root = root
        self._declared = {}
        self._resolved = {}
        self._database_names = {}
        self._overrides = {}
        self._connections = {}
        self._parents = {}
        self._models = {}

    def _check(self, model):
        if not (isinstance(model, type) and self.root is not None
                and issubclass(model, self.root)):
            raise HierarchyError(model)

    def base_class(self, model):
        """Return the class descending directly from the root in the hierarchy of `model`.

        Raises:
            HierarchyError: `model` is the root or does not descend from it.
        """
        self._check(model)
        if model is self.root:
            raise HierarchyError(model)
        klass = model
        while self.root not in klass.__bases__:
            klass = next(base for base in klass.__bases__
                         if issubclass(base, self.root))
        return klass

    def parent_class(self, model):
        """Return the record class `model` inherits its schema from, or None for the root."""
        self._check(model)
        if model is self.root:
            return None
        return next(base for base in model.__bases__
                    if issubclass(base, self.root))

    def register(self, model):
        """Add a freshly defined record class to the registry.

        Record classes defined in the body of `model` are recorded as nested
        in it, which affects their database name.
        """
        self._check(model)
        self._declared.setdefault(model, Schema())
        self._models.setdefault(model.__name__,
                                {})[(model.__module__, model.__qualname__)] = model
        for member in vars(model).values():
            if isinstance(member, type) and issubclass(member, self.root) \
                    and member.__qualname__.startswith(model.__qualname__ + '.'):
                self._parents[member] = model
        if '__database_name__' in vars(model):
            self.set_database_name(model, vars(model)['__database_name__'])
        self._resolved.clear()

    def lookup(self, name, scope=None) -> Optional[type]:
        """Return the registered record class called `name`, if any.

        A class nested in `scope`, or in one of the record classes `scope`
        inherits from, is preferred over classes defined elsewhere.

        Raises:
            InvalidDeclaration: Several record classes are called `name`
                and none of them is nested in `scope`.
        """
        candidates = list(self._models.get(name, {}).values())
        if scope is not None:
            for klass in scope.__mro__:
                if not issubclass(klass, self.root):
                    break
                for candidate in candidates:
                    if candidate.__module__ == klass.__module__ and \
                            candidate.__qualname__ == f"{klass.__qualname__}.{name}":
                        return candidate
        if len(candidates) > 1:
            raise InvalidDeclaration(
                scope or self.root, f"Ambiguous record class name '{name}': "
                f"{', '.join(c.__qualname__ for c in candidates)}")
        return candidates[0] if candidates else None

    def _validate_name(self, model, name):
        if not isinstance(name, str):
            raise InvalidDeclaration(
                model, f"{name!r} is neither a String nor a Symbol")
        if not name.isidentifier():
            raise InvalidDeclaration(model,
                                     f"'{name}' is not a valid identifier")
        if name in IDENTITY_ATTRIBUTES or name in IDENTITY_ATTRIBUTES.values():
            raise InvalidDeclaration(model, f"'{name}' is always defined")
        if hasattr(self.root, name):
            raise InvalidDeclaration(
                model, f"'{name}' would hide {self.root.__name__}.{name}")

    def declare_attribute(self, model, name, type=None, default=None):
        """Register an attribute template on `model`.

        Args:
            model (type): Record class.
            name (str): Attribute name.
            type (str): Declared type, see :any:`couchrecord.mvc.attribute.TYPES`.
            default: Value of the attribute in new records.

        Returns:
            Attribute: The template.

        Raises:
            InvalidDeclaration: The name, type or default is invalid.
        """
        # pylint: disable=redefined-builtin
        self._check(model)
        self._validate_name(model, name)
        if name in self.schema(model).associations:
            raise InvalidDeclaration(model,
                                     f"'{name}' is already an association")
        try:
            attribute = Attribute(name, type or 'text', default)
        except (ValueError, AttributeTypeError) as err:
            raise InvalidDeclaration(model, str(err)) from err
        self._declared.setdefault(model, Schema()).attributes[name] = attribute
        self._resolved.clear()
        return attribute

    def declare_association(self, model, name, target=None):
        """Register a has-many association template on `model`.

        Args:
            model (type): Record class.
            name (str): Association name.
            target (type or str): Child record class or its name.

        Returns:
            HasManyAssociation: The template.

        Raises:
            InvalidDeclaration: The name is invalid.
        """
        self._check(model)
        self._validate_name(model, name)
        if name in self.schema(model).attributes:
            raise InvalidDeclaration(model,
                                     f"'{name}' is already an attribute")
        if target is not None and not isinstance(target, (str, type)):
            raise InvalidDeclaration(
                model, f"Invalid record class for '{name}': {target!r}")
        association = HasManyAssociation(name, target)
        self._declared.setdefault(model,
                                  Schema()).associations[name] = association
        self._resolved.clear()
        return association

    def schema(self, model) -> Schema:
        """Effective schema of `model`."""
        try:
            return self._resolved[model]
        except KeyError:
            pass
        parent = self.parent_class(model)
        if parent is None:
            resolved = Schema({
                name: Attribute(name, 'text', None, wire_name)
                for name, wire_name in IDENTITY_ATTRIBUTES.items()
            })
        else:
            own = self._declared.get(model, Schema())
            resolved = own.merged(self.schema(parent))
        self._resolved[model] = resolved
        return resolved

    def target(self, model, association):
        """Resolve the record class of the children of `association`.

        Raises:
            InvalidDeclaration: No record class matches the association.
        """
        if isinstance(association.model, type):
            self._check(association.model)
            return association.model
        target = self.lookup(association.model_name, model)
        if target is None:
            raise InvalidDeclaration(
                model, f"No record class named '{association.model_name}' "
                f"for association '{association.name}'")
        return target

    def set_database_name(self, model, value):
        """Override the database name of `model`.

        Args:
            model (type): Record class.
            value (str or callable): The name, or a callable receiving the
                inferred name and returning the one to use.
        """
        self._check(model)
        if not (isinstance(value, str) or callable(value)):
            raise InvalidDeclaration(model,
                                     f"Invalid database name: {value!r}")
        self._overrides[model] = value
        self._database_names.clear()

    def database_name(self, model) -> str:
        """Database holding the documents of `model`.

        The name is inferred from the base type of `model`: its class name,
        pluralized and underscored, prefixed by the singular database name of
        the record class it is nested in, if any::

            class Invoice(Record):            # invoices
                class Lineitem(Record):       # invoice_lineitems
                    pass

            class Receipt(Invoice):           # invoices
                pass
        """
        override = self._overrides.get(model)
        if isinstance(override, str):
            return override
        try:
            return self._database_names[model]
        except KeyError:
            pass

        base = self.base_class(model)
        if model is not base:
            name = self.database_name(base)
        else:
            name = inflection.underscore(inflection.pluralize(model.__name__))
            parent = self._parents.get(model)
            if parent is not None:
                contained = inflection.singularize(self.database_name(parent))
                name = f"{contained}_{name}"

        if override is not None:
            name = override(name)
        self._database_names[model] = name
        return name

    def bind(self, model, connection):
        """Use `connection` for `model` and the subclasses that do not have their own."""
        self._check(model)
        self._connections[model] = connection
        LOGGER.debug("Bound %s to %s", model.__name__, connection)
        return connection

    def connection(self, model):
        """Connection used by `model`.

        The nearest connection bound in the class hierarchy wins.  Without
        any, the base type is bound to the configured default site.
        """
        base = self.base_class(model)
        for klass in model.__mro__:
            if klass in self._connections:
                return self._connections[klass]
            if klass is self.root:
                break
        return self.bind(base, Connection(config.CONFIGURATION.site))
