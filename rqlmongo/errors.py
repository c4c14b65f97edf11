"""Errors raised while turning RQL text into a Mongo query."""


class RQLError(Exception):
    """Base class for every error raised by rqlmongo."""


class ParseError(RQLError):
    """Malformed RQL text."""


class ConversionError(ParseError):
    """An argument could not be decoded under its type tag."""

    def __init__(self, message: str, value: str | None = None) -> None:
        super().__init__(message)
        self.value = value


class ValidationError(RQLError):
    """Well-formed RQL that breaks an operator's argument contract."""


class ConflictError(RQLError):
    """Constraints on the same field that cannot be combined."""

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field
