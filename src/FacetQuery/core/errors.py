"""Errors raised while normalizing options and compiling queries."""

from __future__ import annotations

from typing import Iterable


class InvalidOptionError(ValueError):
    """An option value cannot be compiled.

    Attributes:
        option: Offending option key.
        family: Clause family of the option (identity, exclusion, flag,
            range, fulltext, native, schema).
    """

    def __init__(self, message: str, *, option: str, family: str) -> None:
        super().__init__(message)
        self.option = option
        self.family = family


class UnknownOptionError(InvalidOptionError):
    """One or more option keys are not part of the collection's schema."""

    def __init__(self, collection: str, names: Iterable[str]) -> None:
        self.names = tuple(sorted(names))
        super().__init__(
            f"Unknown option(s) for {collection}: {', '.join(self.names)}",
            option=self.names[0] if self.names else "",
            family="schema",
        )


class MalformedTemporalError(InvalidOptionError):
    """A date/time option is not a valid ISO-8601 value."""


class OptionShapeError(InvalidOptionError, TypeError):
    """An option value has a shape that cannot be coerced safely."""
