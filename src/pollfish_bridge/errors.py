"""Exceptions raised by the bridge command surface."""


class BridgeError(Exception):
    """Base class for all bridge errors."""

    kind = "bridge_error"


class CommandRejectedError(BridgeError):
    """A command was rejected before performing any side effect."""

    kind = "rejected"


class OptionError(CommandRejectedError):
    """An option payload failed validation."""

    kind = "invalid_options"


class UnknownOptionError(OptionError):
    kind = "unknown_option"

    def __init__(self, key: str, prefix: str = "options") -> None:
        self.key = key
        if prefix == "options":
            message = f"Invalid option '{key}'"
        else:
            # nested tables are reported as option.<name>
            message = f"{prefix.replace('options.', 'option.', 1)} invalid option '{key}'"
        super().__init__(message)


class OptionTypeError(OptionError):
    kind = "option_type"

    def __init__(self, path: str, expected: str, got: str) -> None:
        self.path = path
        self.expected = expected
        self.got = got
        if expected == "table":
            message = f"{path} table expected. Got {got}"
        else:
            message = f"{path} expected ({expected}). Got {got}"
        super().__init__(message)


class MissingOptionError(OptionError):
    kind = "missing_option"

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"{path} is required")


class InvalidOptionValueError(OptionError):
    kind = "invalid_value"

    def __init__(self, path: str, value: str, choices) -> None:
        self.path = path
        self.value = value
        valid = ", ".join(f"'{c}'" for c in choices)
        super().__init__(f"{path} invalid value '{value}'. Valid values: {valid}")


class ArityError(CommandRejectedError):
    kind = "arity"


class ListenerError(CommandRejectedError):
    kind = "listener"


class AlreadyInitializedError(CommandRejectedError):
    kind = "already_initialized"

    def __init__(self) -> None:
        super().__init__("init() can only be called once")


class NotInitializedError(CommandRejectedError):
    kind = "not_initialized"

    def __init__(self, message: str = "pollfish.init() must be called before calling other API functions") -> None:
        super().__init__(message)


class NotRegisteredError(NotInitializedError):
    """init() was called but its registration round-trip has not completed."""

    kind = "not_registered"

    def __init__(self) -> None:
        super().__init__("The Pollfish apiKey is not registered")
