r"""
=============================================================================
JSON TOKENIZER
=============================================================================

Turns JSON text into a lazy stream of typed tokens.

=============================================================================
HOW IT WORKS
=============================================================================

Every token kind owns one regular expression. All of them are joined,
in declaration order, into a single alternation with one named group
per kind:

    (?P<NULL>null)|(?P<TRUE>true)|(?P<FALSE>false)|(?P<FLOAT>[0-9]*\.[0-9]*)|...

At each scan position the alternation is tried ONCE. Python's regex
engine takes the first alternative that matches, so when two kinds could
match at the same offset the one declared first wins, regardless of
which match would be longer:

    Input "145.4"   FLOAT is declared before INTEGER → FLOAT("145.4")
    Input "42"      FLOAT needs a dot, fails        → INTEGER("42")

    ┌─────────────────────────────────────────────────────────────────────┐
    │   text:   [ 13.4 , null ]                                           │
    │           │ │    │ │    │                                           │
    │           ▼ ▼    ▼ ▼    ▼                                           │
    │   tokens: LEFT_BRACKET FLOAT COMMA NULL RIGHT_BRACKET               │
    │           (whitespace is matched, then dropped)                     │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
KNOWN LIMITATIONS (kept on purpose)
=============================================================================

- No escape sequences: a `"` always ends a string.
- No negative numbers and no exponents: "-1" and "1e5" do not lex.
- The FLOAT rule allows an empty integer or fractional part, so "." on
  its own lexes as a FLOAT token. The parser reports it when it tries
  to convert it to a number.

=============================================================================
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterator
import re

from .errors import LexError


class TokenKind(Enum):
    """
    Token kinds, in the order their rules are tried.

    The value of each member is its lexical rule. WHITESPACE is matched
    like any other kind but never emitted.
    """

    NULL = r"null"
    TRUE = r"true"
    FALSE = r"false"
    FLOAT = r"[0-9]*\.[0-9]*"
    INTEGER = r"[0-9]+"
    STRING = r'"[^"]*"'
    LEFT_BRACE = r"\{"
    RIGHT_BRACE = r"\}"
    LEFT_BRACKET = r"\["
    RIGHT_BRACKET = r"\]"
    COLON = r":"
    COMMA = r","
    WHITESPACE = r"[ \t\r\n]+"

    @property
    def order(self) -> int:
        """Position of this kind in the declaration order."""
        return _DECLARATION_ORDER[self]


_DECLARATION_ORDER = {kind: index for index, kind in enumerate(TokenKind)}

# One alternation for all kinds, compiled once at import time.
_TOKEN_PATTERN = re.compile(
    "|".join(f"(?P<{kind.name}>{kind.value})" for kind in TokenKind)
)


@dataclass(frozen=True)
class Token:
    """
    A single token.

    `text` is the matched source text, except for STRING tokens where
    the surrounding quotes are stripped. `offset` is where `text` starts
    in the source.
    """

    kind: TokenKind
    text: str
    offset: int

    def is_(self, kind: TokenKind) -> bool:
        return self.kind is kind


def tokenize(text: str) -> Iterator[Token]:
    """
    Lazily tokenize JSON text.

    Tokens are produced one at a time as the caller asks for them, so a
    parser that fails early never scans the rest of the input. To start
    over, call tokenize() again on the same text.

    Args:
        text: JSON text

    Yields:
        Tokens in source order, whitespace excluded.

    Raises:
        LexError: If no rule matches at the current offset.

    Example:
        >>> [t.kind.name for t in tokenize('{"a": 1}')]
        ['LEFT_BRACE', 'STRING', 'COLON', 'INTEGER', 'RIGHT_BRACE']
    """
    position = 0
    length = len(text)

    while position < length:
        match = _TOKEN_PATTERN.match(text, position)
        if match is None:
            raise LexError(position)

        kind = TokenKind[match.lastgroup]
        position = match.end()

        if kind is TokenKind.WHITESPACE:
            continue

        if kind is TokenKind.STRING:
            # Drop the quotes; the offset points at the first character inside
            yield Token(kind, match.group()[1:-1], match.start() + 1)
        else:
            yield Token(kind, match.group(), match.start())
