"""
Record data model.

A record class declares attributes and has-many associations, either with
the ``__attributes__`` and ``__associations__`` class mappings or with the
:any:`Record.has` and :any:`Record.has_many` class methods::

    class Person(Record):
        __attributes__ = {
            'name': {'type': 'text'},
            'age': {'type': 'number', 'default': 18},
        }

    class Family(Record):
        __associations__ = {'people': {}}

    Family.site('http://localhost:5984/')

    family = Family(people=[{'name': 'McLovin'}])
    family.add_person(Person(name='Seth'))
    family.save()

Accessors are generated once, when the declaration is made: every attribute
becomes a property and every association a read-only property along with an
``add_<singular>`` method.  :any:`Record.get` and :any:`Record.set` give the
same access by name.
"""

import types
from collections.abc import Mapping
from couchrecord.error import ArgumentError, InvalidDeclaration, ModelError
from couchrecord.util import json_dumps, json_loads
from couchrecord.cf.connection import Connection
from couchrecord.mvc.schema import SchemaRegistry
from couchrecord.mvc.controller import Controller


class dualmethod:
    """Method bound to the class when looked up on the class, to the
    instance when looked up on an instance.

    The class-level implementation is decorated first, the instance-level one
    is registered with :any:`dualmethod.instance`.
    """

    # pylint: disable=invalid-name

    def __init__(self, class_function):
        self.class_function = class_function
        self.instance_function = None
        self.__doc__ = class_function.__doc__

    def instance(self, instance_function):
        self.instance_function = instance_function
        return self

    def __get__(self, instance, owner=None):
        if instance is None or self.instance_function is None:
            return types.MethodType(self.class_function, owner)
        return types.MethodType(self.instance_function, instance)


def _attribute_property(name, doc=None):

    def getter(self):
        return self._attributes[name].value

    def setter(self, value):
        self._attributes[name].value = value

    return property(getter, setter, doc=doc or f"Value of the '{name}' attribute.")


def _association_property(name):

    def getter(self):
        return self._associations[name].container

    return property(getter, doc=f"Records of the '{name}' association.")


def _association_adder(name):

    def adder(self, child):
        return self.add(name, child)

    adder.__doc__ = f"Add a record to the '{name}' association."
    return adder


class Record:
    """Base class of every record class.

    Args:
        params (dict): Initial values, indexed by attribute or association name.
            Document keys ``_id`` and ``_rev`` are accepted for `id` and `rev`.
        initializer (callable): Called with the record once built.
        **kwargs: Merged into `params`.
    """

    __registry__ = None
    """SchemaRegistry: Schemas, database names and connections of the hierarchy."""

    __attributes__ = {}
    __associations__ = {}

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        cls.__registry__.register(cls)

        declared = vars(cls)
        attributes = declared.get('__attributes__', {})
        if callable(attributes):
            attributes = attributes()
        for name, props in attributes.items():
            cls.has(name, **(props or {}))

        for name, props in declared.get('__associations__', {}).items():
            cls.has_many(name, **(props or {}))

    def __init__(self, params=None, initializer=None, **kwargs):
        if params is not None and not isinstance(params, Mapping):
            raise ArgumentError(
                f"{type(self).__name__} expects a mapping, got {params!r}")
        cls = type(self)
        registry = cls.__registry__
        registry.base_class(cls)
        schema = registry.schema(cls)

        self._attributes = {
            name: attribute.copy()
            for name, attribute in schema.attributes.items()
        }
        self._associations = {
            name: association.bind(registry.target(cls, association))
            for name, association in schema.associations.items()
        }
        self._setters = schema.setters()

        self._from_dict(dict(params or {}, **kwargs))
        if initializer is not None:
            initializer(self)

    def _from_dict(self, data):
        for key, value in data.items():
            association = self._associations.get(key)
            if isinstance(value, (list, tuple)) and association is not None:
                for child in value:
                    if isinstance(child, Mapping):
                        association.build(child)
                    else:
                        association.push(child)
            elif isinstance(value, Mapping):
                # Reserved for to-one relations
                continue
            elif key in self._setters:
                self._attributes[self._setters[key]].value = value

    id = _attribute_property('id')
    rev = _attribute_property('rev')

    def __repr__(self):
        return f"{type(self).__name__}({self.to_dict()!r})"

    def __eq__(self, other):
        if not isinstance(other, Record):
            return NotImplemented
        return type(self) is type(other) and self.to_dict() == other.to_dict()

    __hash__ = None

    def __getstate__(self):
        return self.to_json()

    def __setstate__(self, state):
        self.__init__(json_loads(state))

    def get(self, name):
        """Value of an attribute or container of an association.

        Raises:
            ModelError: `name` is not declared.
        """
        if name in self._setters:
            return self._attributes[self._setters[name]].value
        if name in self._associations:
            return self._associations[name].container
        raise ModelError(type(self), f"no attribute named '{name}'")

    def set(self, name, value):
        """Assign an attribute.

        Raises:
            ModelError: `name` is not a declared attribute.
            AttributeTypeError: `value` does not match the declared type.
        """
        if name not in self._setters:
            raise ModelError(type(self), f"no attribute named '{name}'")
        self._attributes[self._setters[name]].value = value

    def add(self, name, child):
        """Add a child record to association `name`.

        Args:
            name (str): Association name.
            child (Record or dict): The child, or a mapping to build it from.

        Returns:
            Record: The child.
        """
        try:
            association = self._associations[name]
        except KeyError as err:
            raise ModelError(type(self),
                             f"no association named '{name}'") from err
        if isinstance(child, Mapping):
            return association.build(child)
        return association.push(child)

    @property
    def attributes(self):
        """Attribute values indexed by name."""
        return {name: attr.value for name, attr in self._attributes.items()}

    @property
    def associations(self):
        """Association containers indexed by name."""
        return {
            name: assoc.container
            for name, assoc in self._associations.items()
        }

    def to_dict(self):
        """Document representing the record.

        Attributes set to None are left out, associations are always present.
        """
        document = {}
        for attribute in self._attributes.values():
            document.update(attribute.to_dict())
        for association in self._associations.values():
            document.update(association.to_dict())
        return document

    def to_json(self):
        """JSON representation of the record, see :any:`to_dict`.

        Examples:
        ::

            class AgedPerson(Record):
                __attributes__ = {'age': {'type': 'decimal', 'default': 3.5}}

            aged_person = AgedPerson()
            aged_person.id = 'abc-def'
            aged_person.to_json() # '{"_id": "abc-def", "age": 3.5}'
        """
        return json_dumps(self.to_dict())

    @classmethod
    def from_dict(cls, data):
        return cls(data)

    @classmethod
    def from_json(cls, text):
        """Build a record from its JSON representation."""
        data = json_loads(text)
        if not isinstance(data, Mapping):
            raise ArgumentError(f"Expected a JSON object, got {text!r}")
        return cls(data)

    def is_new(self):
        """True until the record is saved to or fetched from the store."""
        return self.rev is None

    def save(self):
        """Store the record, see :any:`Controller.save`."""
        return type(self).controller().save(self)

    @dualmethod
    def delete(cls, id=None, rev=None):
        """Delete a record.

        On a record, deletes its stored revision, see :any:`Controller.delete`.
        On a record class, deletes the document with the given `id` and `rev`,
        see :any:`Controller.delete_document`; `id` may also be a mapping
        holding both.
        """
        # pylint: disable=redefined-builtin,no-self-argument
        if isinstance(id, Mapping):
            id, rev = id.get('id'), id.get('rev', rev)
        return cls.controller().delete_document(id=id, rev=rev)

    @delete.instance
    def delete(self):
        # pylint: disable=function-redefined
        return type(self).controller().delete(self)

    # Class-level API

    @classmethod
    def has(cls, name, type=None, default=None, description=None):
        """Declare an attribute.

        Args:
            name (str): Attribute name.
            type (str): 'text' (default), 'number', 'decimal', 'boolean' or 'list'.
            default: Value of the attribute in new records.
            description (str): Free text documenting the attribute.

        Raises:
            InvalidDeclaration: The name, type or default is invalid.
        """
        # pylint: disable=redefined-builtin
        attribute = cls.__registry__.declare_attribute(cls, name, type,
                                                       default)
        setattr(cls, name, _attribute_property(name, description))
        return attribute

    @classmethod
    def has_many(cls, name, model=None):
        """Declare a one-to-many association.

        Args:
            name (str): Association name.
            model (type or str): Record class of the children, or its name.
                Guessed from `name` by default, e.g. ``people`` gives ``Person``.

        Raises:
            InvalidDeclaration: The name is invalid.
        """
        association = cls.__registry__.declare_association(cls, name, model)
        adder = f"add_{association.singular}"
        if hasattr(Record, adder):
            raise InvalidDeclaration(cls, f"'{adder}' would hide Record.{adder}")
        setattr(cls, name, _association_property(name))
        setattr(cls, adder, _association_adder(name))
        return association

    @classmethod
    def schema(cls):
        return cls.__registry__.schema(cls)

    @classmethod
    def base_class(cls):
        return cls.__registry__.base_class(cls)

    @classmethod
    def database_name(cls):
        return cls.__registry__.database_name(cls)

    @classmethod
    def set_database_name(cls, value):
        """Use `value` as database name, or to compute it from the inferred one.

        Example:
        ::

            class Post(Record):
                pass

            Post.set_database_name('legacy_posts')
            # or
            Post.set_database_name(lambda original: original + '_legacy')
        """
        cls.__registry__.set_database_name(cls, value)

    @classmethod
    def site(cls, site):
        """Connect the record class, and its subclasses, to the store at `site`."""
        return cls.bind(Connection(site))

    @classmethod
    def bind(cls, connection):
        """Use `connection` to reach the store for this class and its subclasses."""
        return cls.__registry__.bind(cls, connection)

    @classmethod
    def connection(cls):
        return cls.__registry__.connection(cls)

    @classmethod
    def controller(cls, connection=None):
        """Controller for this class, using `connection` or the bound one."""
        return Controller(cls, connection or cls.connection())

    @classmethod
    def create(cls, data):
        """Build and save a record, see :any:`Controller.create`."""
        return cls.controller().create(data)

    @classmethod
    def find(cls, scope, options=None, **kwargs):
        """Retrieve records, see :any:`Controller.find`."""
        return cls.controller().find(scope, options, **kwargs)

    @classmethod
    def count(cls, options=None, **kwargs):
        """Number of records a view query returns, see :any:`Controller.count`."""
        return cls.controller().count(options, **kwargs)


Record.__registry__ = REGISTRY = SchemaRegistry(Record)
"""SchemaRegistry: Registry shared by record classes unless they set their own."""
