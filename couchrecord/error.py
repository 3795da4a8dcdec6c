"""couchrecord errors.

Errors come in two flavors: :any:`InternalError` signals a broken record
declaration or a bug, :any:`ConfigurationError` signals that a call cannot
succeed with the inputs it was given.  Failed saves and deletes are *not*
errors: they are reported through the boolean result of the call.
"""

from couchrecord import logger


class Error(Exception):
    """Base class for all errors in couchrecord.

    Attributes:
        value: Some value attached to the error, typically a string but could be anything with a __str__ method.
        hints (list): String hints for the user to help resolve the error.
        message_fmt (str): Format string for the error message.
    """
    message_fmt = ("An unexpected %(typename)s exception was raised:\n"
                   "\n"
                   "%(value)s\n"
                   "\n"
                   "This is a bug in couchrecord.\n"
                   "Please raise an issue on Github with the contents of '%(logfile)s'.")

    def __init__(self, value, *hints):
        """Initialize the Error instance.

        Args:
            value (str): Message describing the error.
            *hints: Hint messages to help the user resolve this error.
        """
        super().__init__(value)
        self.value = value
        self.hints = list(hints)
        self.message_fields = {
            'logfile': logger.LOG_FILE,
            'typename': type(self).__name__,
        }

    @property
    def message(self):
        fields = dict(self.message_fields, value=self.value)
        if not self.hints:
            hints_str = ''
        elif len(self.hints) == 1:
            hints_str = 'Hint: %s\n' % self.hints[0]
        else:
            hints_str = 'Hints:\n  * %s\n' % ('\n  * '.join(self.hints))
        fields['hints'] = hints_str
        return self.message_fmt % fields

    def __str__(self):
        return str(self.value)


class InternalError(Error):
    """Indicates that an internal error has occurred, i.e. a bug.

    These are bad and really shouldn't happen.
    """


class ConfigurationError(Error):
    """Indicates that couchrecord cannot succeed with the given parameters.

    This is most commonly caused by user error, e.g. a call missing an
    argument or a document store answering with an unexpected status.
    """
    message_fmt = ("%(value)s\n"
                   "\n"
                   "%(hints)s\n"
                   "Cannot proceed with the given inputs.\n"
                   "Please check the call for errors or raise an issue on Github.")


class ModelError(InternalError):
    """Indicates an error in model data or the model itself."""

    def __init__(self, model, value):
        """Initialize the error instance.

        Args:
            model (type): Record class.
            value (str): A message describing the error.
        """
        name = getattr(model, '__name__', repr(model))
        super().__init__("%s: %s" % (name, value))
        self.model = model


class InvalidDeclaration(ModelError):
    """Indicates that an attribute or association cannot be declared."""


class HierarchyError(ModelError):
    """Indicates that a class does not descend from :any:`Record`."""

    def __init__(self, model):
        super().__init__(
            model,
            "doesn't belong in a hierarchy descending from couchrecord.mvc.Record")


class ArgumentError(ConfigurationError, ValueError):
    """Indicates that a call was given malformed arguments."""

    def __init__(self, value, *hints):
        if not hints:
            hints = ("Check the arguments passed to the record class.",)
        super().__init__(value, *hints)


class PreconditionError(ArgumentError):
    """Indicates that a record is not in a state allowing the operation."""


class AttributeTypeError(ConfigurationError, TypeError):
    """Indicates that a value does not match the declared type of an attribute."""

    def __init__(self, attribute, value):
        super().__init__(
            "Attribute '%s' is of type %s, got %r" %
            (attribute.name, attribute.type, value),
            "Assign a value matching the declaration or None.")
        self.attribute = attribute


class StoreError(ConfigurationError):
    """Indicates that the document store could not be reached or gave an unusable answer."""

    def __init__(self, value, *hints, status=None):
        if not hints:
            hints = ("Check that the document store is running and that the "
                     "database and its views exist.",)
        super().__init__(value, *hints)
        self.status = status


class MigrationError(ConfigurationError):
    """Indicates that a database could not be created or deleted."""

    def __init__(self, value, *hints, status=None):
        super().__init__(value, *hints)
        self.status = status
