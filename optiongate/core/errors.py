"""Exception types raised by optiongate."""


class OptionGateError(Exception):
    """Base class for optiongate errors."""


class MalformedDependencyError(OptionGateError, ValueError):
    """A dependency's required-values payload could not be parsed."""

    def __init__(self, message: str, payload: object = None):
        super().__init__(message)
        self.payload = payload


class UnknownContextError(OptionGateError, ValueError):
    """A rendering context string is not one of the supported contexts."""
