"""
Minimal JSON codec used for request and response bodies.

    tokenize(text)   → lazy stream of Token
    parse(text)      → dict or list
    serialize(value) → JSON text

This is deliberately NOT a full JSON implementation: no escape
sequences, no negative numbers, no exponents, and the top level must be
an object or an array.
"""

from .errors import JSONError, LexError, ParseError, UnsupportedValueError
from .tokenizer import Token, TokenKind, tokenize
from .parser import parse, parse_array, parse_object
from .serializer import JSONRecord, serialize

__all__ = [
    # Tokenizer
    "Token",
    "TokenKind",
    "tokenize",

    # Parser
    "parse",
    "parse_object",
    "parse_array",

    # Serializer
    "JSONRecord",
    "serialize",

    # Errors
    "JSONError",
    "LexError",
    "ParseError",
    "UnsupportedValueError",
]
