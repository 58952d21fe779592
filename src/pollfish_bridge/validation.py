"""Option payload validation.

Every command takes a loosely-typed options table from the host. Each
command has a schema: an allow-list mapping option keys to the kind of
value they accept. Validation sweeps the table once, failing on the first
unknown key or type mismatch, then checks required keys, then checks
enumerated values. Nothing is stored until the whole table has passed.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from .errors import (
    InvalidOptionValueError,
    MissingOptionError,
    OptionTypeError,
    UnknownOptionError,
)

STRING = "string"
BOOLEAN = "boolean"
NUMBER = "number"
TABLE = "table"

Y_ALIGN_VALUES = ("top", "bottom", "center")
X_ALIGN_VALUES = ("left", "right")
GENDER_VALUES = ("male", "female", "other")


@dataclass(frozen=True)
class OptionSpec:
    """Expected shape of a single option."""

    kind: str = STRING
    required: bool = False
    choices: Optional[Tuple[str, ...]] = None
    nested: Optional[Dict[str, "OptionSpec"]] = None
    ignored: bool = False


LOCATION_SCHEMA: Dict[str, OptionSpec] = {
    "longitude": OptionSpec(NUMBER),
    "latitude": OptionSpec(NUMBER),
    "horizontalAccuracy": OptionSpec(NUMBER),
}

SCHEMAS: Dict[str, Dict[str, OptionSpec]] = {
    "init": {
        "apiKey": OptionSpec(STRING, required=True),
        "developerMode": OptionSpec(BOOLEAN),
        "requestUUID": OptionSpec(STRING),
        "rewardMode": OptionSpec(BOOLEAN),
    },
    "load": {
        "yAlign": OptionSpec(STRING, choices=Y_ALIGN_VALUES),
        "xAlign": OptionSpec(STRING, choices=X_ALIGN_VALUES),
        "padding": OptionSpec(NUMBER),
        "customMode": OptionSpec(BOOLEAN),
        "offerwallMode": OptionSpec(BOOLEAN),
        "rewardMode": OptionSpec(BOOLEAN),
    },
    "setUserDetails": {
        "gender": OptionSpec(STRING, choices=GENDER_VALUES),
        "facebookId": OptionSpec(STRING),
        "twitterId": OptionSpec(STRING),
        "requestUUID": OptionSpec(STRING),
        "location": OptionSpec(TABLE, nested=LOCATION_SCHEMA),
        # legacy keys, accepted and dropped
        "age": OptionSpec(ignored=True),
        "ageGroup": OptionSpec(ignored=True),
        "customData": OptionSpec(ignored=True),
    },
}

OPTIONAL_TABLE_COMMANDS = frozenset({"load"})


def describe_type(value: Any) -> str:
    """Name a value's type the way host scripts see it."""
    if value is None:
        return "nil"
    if isinstance(value, bool):
        return BOOLEAN
    if isinstance(value, (int, float)):
        return NUMBER
    if isinstance(value, str):
        return STRING
    if isinstance(value, Mapping):
        return TABLE
    if callable(value):
        return "function"
    return type(value).__name__


def matches_kind(kind: str, value: Any) -> bool:
    """Check a value against an option kind. Booleans are never numbers."""
    if kind == STRING:
        return isinstance(value, str)
    if kind == BOOLEAN:
        return isinstance(value, bool)
    if kind == NUMBER:
        return isinstance(value, (int, float)) and not isinstance(value, bool)
    if kind == TABLE:
        return isinstance(value, Mapping)
    raise ValueError(f"Unknown option kind: {kind}")


def validate_options(command: str, options: Any) -> Dict[str, Any]:
    """
    Validate a command's options table.

    Args:
        command: Command name ('init', 'load' or 'setUserDetails')
        options: Untyped options payload from the host

    Returns:
        Dict of validated options, legacy keys removed

    Raises:
        ValueError: If the command has no schema
        OptionError: If the payload is rejected
    """
    if command not in SCHEMAS:
        raise ValueError(f"Unknown command: {command}")

    if options is None and command in OPTIONAL_TABLE_COMMANDS:
        return {}

    return _validate_table(SCHEMAS[command], options, "options")


def _validate_table(schema: Dict[str, OptionSpec], options: Any, path: str) -> Dict[str, Any]:
    if not isinstance(options, Mapping):
        raise OptionTypeError(path, TABLE, describe_type(options))

    validated: Dict[str, Any] = {}

    for key, value in options.items():
        spec = schema.get(key) if isinstance(key, str) else None
        if spec is None:
            raise UnknownOptionError(str(key), path)
        if spec.ignored:
            continue

        key_path = f"{path}.{key}"
        if not matches_kind(spec.kind, value):
            raise OptionTypeError(key_path, spec.kind, describe_type(value))

        if spec.nested is not None:
            value = _validate_table(spec.nested, value, key_path)

        validated[key] = value

    for key, spec in schema.items():
        if spec.required and key not in validated:
            raise MissingOptionError(f"{path}.{key}")

    for key, spec in schema.items():
        if spec.choices and key in validated and validated[key] not in spec.choices:
            raise InvalidOptionValueError(f"{path}.{key}", validated[key], spec.choices)

    return validated
