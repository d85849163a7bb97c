"""Common utilities and exception classes."""

from __future__ import annotations


class RikishidataError(Exception):
    """Base exception for rikishidata."""


class FetchError(RikishidataError):
    """HTTP fetch failure after retries."""


class ParseError(RikishidataError):
    """HTML parse failure."""


class AttributeMissingError(ParseError):
    """A table element has no class attribute (strict lookup only)."""


class TableNotFoundError(ParseError):
    """No sibling-isolated rikishidata table in the document."""


class FieldError(ParseError):
    """A recognized profile row whose value cannot be parsed."""

    def __init__(
        self,
        message: str,
        *,
        label: str,
        value: str,
        rid: int | None = None,
    ) -> None:
        if rid is not None:
            message = f"{message} rikishi({rid})"
        super().__init__(message)
        self.label = label
        self.value = value
        self.rid = rid


class PatternMismatchError(FieldError):
    """Value does not have the shape expected for its label."""


class DateParseError(FieldError):
    """Birth date text is not a valid calendar date."""


class NumberParseError(FieldError):
    """Height or weight could not be converted to an integer.

    Unreachable after an ASCII digit match; kept so every numeric field
    failure has a named kind.
    """
