#pylint: disable=E1131
"""
Load and propagate the contents of configuration files in YAML format
"""

import yaml
from dataclasses import dataclass
from typing import Dict
from pathlib import Path
from couchrecord import (
    COUCHRECORD_TEST,
    DEFAULT_SITE,
)


def update_configuration(configuration):
    global CONFIGURATION
    CONFIGURATION = configuration


def flatten(data):
    """
    Transform nested dictionaries into key value pairs by prefixing the
    parent's key, under the assumption that all keys are str.
    >>> flatten({'root': {'key1': 0, 'key2': 'test'} })

    => dict(root_key1=0, root_key2='test')

    Values of fields declared as mappings (see `MAPPING_FIELDS`) are kept
    whole instead of being flattened.
    """
    separator = '_'

    def _pre(prefix, string):
        return str(separator.join(filter(None, [prefix, string])))

    def _intermediate(prefix, data: dict):
        flat = {}

        if not data:
            return flat

        for key, value in data.items():
            if isinstance(value, dict) and _pre(prefix,
                                                str(key)) not in MAPPING_FIELDS:
                for ckey, cval in _intermediate(str(key), value).items():
                    flat.update({_pre(prefix, ckey): cval})
            else:
                flat.update({_pre(prefix, key): value})

        return flat

    return _intermediate('', data)


@dataclass(frozen=True)
class ConfigurationField:
    key: str
    expected_type: type
    default: callable
    description: str = ""


@dataclass(frozen=True)
class ConfigurationGroup:
    key: str
    fields: frozenset  # [ConfigurationField|ConfigurationGroup]
    description: str = ""

    def __init__(self, key, fields, description=""):
        object.__setattr__(self, "key", key)
        object.__setattr__(self, "fields", frozenset(fields))
        object.__setattr__(self, "description", description)

    def flatten(self):
        _fields = []

        for field in self.fields:
            if isinstance(field, ConfigurationGroup):
                _fields.extend(field.flatten())
            elif isinstance(field, ConfigurationField):
                _fields.append(field)

        for field in _fields:
            namespaced = "_".join(filter(None, [self.key, field.key]))
            yield ConfigurationField(namespaced, field.expected_type,
                                     field.default)

    def as_dict(self) -> Dict:
        out = {}

        for field in self.fields:
            if isinstance(field, ConfigurationGroup):
                out[field.key] = field.as_dict()

            elif isinstance(field, ConfigurationField):
                out[field.key] = field.default()

        return out

    def template(self):
        return yaml.safe_dump(self.as_dict())


class ConfigurationError(Exception):
    """
    Do not pass through logger nor error as those depend on configuration
    """


class Configuration:
    """
    Class of objects abstracting configuration values. Can be created using a
    dict or class methods to complete it with defined configuration fields,
    then merged with other Configuration objects using the bitwise or operation.
    """

    @classmethod
    def create_from_string(cls, string, complete=False):
        """
        Create a Configuration object from a YAML string, with type checking.
        Will complete with default values for missing fields if complete is set
        to True.
        """

        config = cls()
        data = flatten(yaml.safe_load(string)) or {}

        for parameter in ALLOWED_CONFIG.flatten():
            field = {}
            if parameter.key in data:
                value = data[parameter.key]

                # bool is an int, but not a valid timeout
                if isinstance(value, parameter.expected_type) and not (
                        isinstance(value, bool)
                        and parameter.expected_type is not bool):
                    field = {parameter.key: value}
                else:
                    raise ConfigurationError(
                        f"Invalid value for parameter '{parameter.key}':"
                        f"{value} (expected {str(parameter.expected_type)})")

            elif complete:
                field = {parameter.key: parameter.default()}

            config._fields.update(field)

        return config

    @classmethod
    def create_from_file(cls, config_file, complete=False):
        yaml_contents = ''
        if config_file and Path(config_file).exists():
            with open(config_file, encoding='utf-8') as file:
                yaml_contents = file.read()

        return Configuration.create_from_string(yaml_contents,
                                                complete=complete)

    @classmethod
    def default(cls):
        return cls.create_from_string('', complete=True)

    def __init__(self, defaults=None):
        if isinstance(defaults, dict):
            self._fields = defaults
        else:
            self._fields = {}

    def __getattr__(self, identifier):
        if identifier in self._fields:
            return self._fields[identifier]
        raise AttributeError(
            f"'{self.__class__.__name__}' object has no attribute '{identifier}'"
        )

    def __or__(self, rhs):
        """
        Merge configuration objects
        The right hand side has priority, and its keys will take precedence
        """
        if not isinstance(rhs, Configuration):
            raise TypeError(f"unsupported operand type(s) for |: "
                            f"'{type(self)}' and '{type(rhs)}'")

        # Merge the two dictionaries (Use | on py39)
        return Configuration({**self._fields, **rhs._fields})

    def __eq__(self, rhs):
        if not isinstance(rhs, Configuration):
            return NotImplemented
        return self._fields == rhs._fields

    def __str__(self):
        return str(self._fields)


USER_CONFIG_PATH = Path.home() / ".config/couchrecord.yaml"
SYSTEM_CONFIG_PATH = "/etc/couchrecord/couchrecord.yaml"

MAPPING_FIELDS = {'http_headers'}
"""set: Fields holding a whole mapping as their value."""

ALLOWED_CONFIG = ConfigurationGroup(
    "", {
        ConfigurationField(
            "site",
            str,
            lambda: DEFAULT_SITE,
            "Document store used by record types that do not declare a site",
        ),
        ConfigurationField(
            "timeout",
            (int, float),
            lambda: 30,
            "Seconds to wait for the document store to answer a request",
        ),
        ConfigurationField(
            "http_headers",
            dict,
            lambda: {},
            "Additional headers sent with every request",
        ),
        ConfigurationGroup(
            "log", {
                ConfigurationField(
                    "level",
                    str,
                    lambda: "INFO",
                    "Verbosity of the couchrecord loggers",
                ),
                ConfigurationField(
                    "file",
                    str,
                    lambda: "",
                    "File receiving a copy of every log record",
                ),
            }, "Logging configuration"),
    })

CONFIGURATION = Configuration.default()
if not COUCHRECORD_TEST:
    CONFIGURATION = CONFIGURATION  \
        | Configuration.create_from_file(SYSTEM_CONFIG_PATH) \
        | Configuration.create_from_file(USER_CONFIG_PATH)
