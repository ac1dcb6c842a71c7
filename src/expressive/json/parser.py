"""
=============================================================================
JSON PARSER
=============================================================================

Recursive descent parser over the token stream produced by tokenize().

=============================================================================
GRAMMAR
=============================================================================

    document := object | array            ← bare scalars are rejected
    object   := "{" "}" | "{" member ("," member)* "}"
    member   := STRING ":" value
    array    := "[" "]" | "[" value ("," value)* "]"
    value    := NULL | TRUE | FALSE | INTEGER | FLOAT | STRING
              | object | array

The start symbol only accepts an object or an array. `parse("true")`
fails on purpose: request bodies handled by this package are always
containers.

=============================================================================
VALUE MAPPING
=============================================================================

    JSON             Python
    ─────────────    ──────────────────────────────
    null             None
    true / false     True / False
    INTEGER          int     (base 10)
    FLOAT            float   (kept distinct from int)
    STRING           str     (verbatim, no unescaping)
    object           dict    (keys in source order)
    array            list

Containers are built locally and only handed back once complete, so a
failure never leaves a half-filled structure visible to the caller.

=============================================================================
"""

from typing import Any, Dict, FrozenSet, Iterator, List

from .errors import JSONError, ParseError
from .tokenizer import Token, TokenKind, tokenize


K = TokenKind

CONTAINER_KINDS: FrozenSet[TokenKind] = frozenset({K.LEFT_BRACE, K.LEFT_BRACKET})
VALUE_KINDS: FrozenSet[TokenKind] = frozenset({
    K.NULL, K.TRUE, K.FALSE, K.INTEGER, K.FLOAT, K.STRING,
    K.LEFT_BRACE, K.LEFT_BRACKET,
})

_SCALARS = {K.NULL: None, K.TRUE: True, K.FALSE: False}


class _Parser:
    """Single-use parser state: the token stream and the input length."""

    def __init__(self, text: str):
        self._tokens: Iterator[Token] = tokenize(text)
        self._end = len(text)

    def next(self, expected: FrozenSet[TokenKind]) -> Token:
        """Pull the next token; running out of input is a ParseError."""
        token = next(self._tokens, None)
        if token is None:
            raise ParseError(expected, None, self._end)
        return token

    def expect(self, kinds: FrozenSet[TokenKind]) -> Token:
        token = self.next(kinds)
        if token.kind not in kinds:
            raise ParseError(kinds, token.kind, token.offset)
        return token

    # =========================================================================
    # PRODUCTIONS
    # =========================================================================

    def document(self, start: FrozenSet[TokenKind]) -> Any:
        token = self.expect(start)
        if token.kind is K.LEFT_BRACE:
            return self.object()
        return self.array()

    def value(self, token: Token) -> Any:
        kind = token.kind

        if kind in _SCALARS:
            return _SCALARS[kind]
        if kind is K.INTEGER:
            return int(token.text, 10)
        if kind is K.FLOAT:
            try:
                return float(token.text)
            except ValueError:
                # A lone "." lexes as FLOAT but is not a number
                raise ParseError(
                    {K.FLOAT}, kind, token.offset,
                    reason=f"malformed number {token.text!r}",
                ) from None
        if kind is K.STRING:
            return token.text
        if kind is K.LEFT_BRACE:
            return self.object()
        if kind is K.LEFT_BRACKET:
            return self.array()

        raise ParseError(VALUE_KINDS, kind, token.offset)

    def object(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {}

        token = self.expect(frozenset({K.STRING, K.RIGHT_BRACE}))
        if token.kind is K.RIGHT_BRACE:
            return result

        while True:
            key = token.text
            self.expect(frozenset({K.COLON}))
            result[key] = self.value(self.next(VALUE_KINDS))

            token = self.expect(frozenset({K.COMMA, K.RIGHT_BRACE}))
            if token.kind is K.RIGHT_BRACE:
                return result
            token = self.expect(frozenset({K.STRING}))

    def array(self) -> List[Any]:
        result: List[Any] = []

        token = self.expect(VALUE_KINDS | {K.RIGHT_BRACKET})
        if token.kind is K.RIGHT_BRACKET:
            return result

        while True:
            result.append(self.value(token))

            separator = self.expect(frozenset({K.COMMA, K.RIGHT_BRACKET}))
            if separator.kind is K.RIGHT_BRACKET:
                return result
            token = self.next(VALUE_KINDS)


# =============================================================================
# PUBLIC API
# =============================================================================

def _parse(text: str, start: FrozenSet[TokenKind]) -> Any:
    try:
        return _Parser(text).document(start)
    except JSONError as e:
        # Attach the whole input for diagnostics
        raise e.with_source(text) from e


def parse(text: str) -> Any:
    """
    Parse JSON text whose top-level value is an object or an array.

    Args:
        text: JSON text

    Returns:
        A dict or a list.

    Raises:
        LexError: If the text contains something that is not a token.
        ParseError: If the tokens do not form an object or an array.

    Example:
        >>> parse('{"foo": 4, "bar": null}')
        {'foo': 4, 'bar': None}
    """
    return _parse(text, CONTAINER_KINDS)


def parse_object(text: str) -> Dict[str, Any]:
    """Parse JSON text that must be an object."""
    return _parse(text, frozenset({K.LEFT_BRACE}))


def parse_array(text: str) -> List[Any]:
    """Parse JSON text that must be an array."""
    return _parse(text, frozenset({K.LEFT_BRACKET}))
