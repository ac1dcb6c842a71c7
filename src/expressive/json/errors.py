"""
=============================================================================
JSON CODEC ERRORS
=============================================================================

Every failure of the tokenizer, parser or serializer is raised as one of
the exceptions below. They all derive from JSONError, which is itself a
ValueError, so callers that only care about "bad input" can catch that.

    ┌─────────────────────────────────────────────────────────────────────┐
    │                       ERROR TAXONOMY                                │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │   JSONError (ValueError)                                             │
    │     ├── LexError               no lexical rule matches at offset     │
    │     ├── ParseError             unexpected token kind at offset       │
    │     └── UnsupportedValueError  serializer cannot classify a value    │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

None of these errors is retried or mapped to an HTTP status here. They
propagate to the handler, and from the handler to the transport, which
turns anything uncaught into a 500 response.

=============================================================================
"""

from typing import Any, FrozenSet, Iterable, Optional


class JSONError(ValueError):
    """
    Base class for all JSON codec errors.

    `source` holds the complete input text once the top-level parse()
    has wrapped the error; it stays None for errors raised directly by
    the tokenizer or the serializer.
    """

    def __init__(self, message: str, source: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.source = source

    def __str__(self) -> str:
        if self.source is None:
            return self.message
        return f"{self.message}\n while parsing {self.source}"

    def with_source(self, source: str) -> "JSONError":
        """Return a copy of this error that carries the full input text."""
        return JSONError(self.message, source)


class LexError(JSONError):
    """
    Raised when no lexical rule matches at the current scan position.

    Example:
        tokenize("[ -1 ]")  # LexError: no token recognized at 2
    """

    def __init__(self, offset: int, source: Optional[str] = None):
        super().__init__(f"no token recognized at {offset}", source)
        self.offset = offset

    def with_source(self, source: str) -> "LexError":
        return LexError(self.offset, source)


class ParseError(JSONError):
    """
    Raised when the parser meets a token it did not expect.

    Carries the set of token kinds that would have been accepted, the
    kind actually observed (None when the input ended early) and the
    offset of the observed token.

    Example:
        parse("true")
        # ParseError: expect LEFT_BRACE, LEFT_BRACKET but recognized TRUE at 0
    """

    def __init__(
        self,
        expected: Iterable[Any],
        observed: Optional[Any],
        offset: int,
        source: Optional[str] = None,
        reason: Optional[str] = None,
    ):
        self.expected: FrozenSet[Any] = frozenset(expected)
        self.observed = observed
        self.offset = offset
        self.reason = reason

        if reason is not None:
            message = f"{reason} at {offset}"
        else:
            # Sorted by declaration order so the message is stable
            names = ", ".join(
                kind.name for kind in sorted(self.expected, key=lambda k: k.order)
            )
            observed_name = observed.name if observed is not None else "EOF"
            message = f"expect {names} but recognized {observed_name} at {offset}"
        super().__init__(message, source)

    def with_source(self, source: str) -> "ParseError":
        return ParseError(
            self.expected, self.observed, self.offset, source, self.reason
        )


class UnsupportedValueError(JSONError, TypeError):
    """
    Raised when the serializer is given a value it cannot classify.

    Also a TypeError, matching what the standard json module raises for
    objects it does not know how to encode.
    """

    def __init__(self, value: Any):
        super().__init__(f"unknown json object {value!r}")
        self.value = value
