"""
Request routing: path pattern matching and the handler pipeline.
"""

from .matcher import PathMatcher, compile_pattern, split_path
from .pipeline import (
    Callback,
    Chain,
    Handler,
    NextHandler,
    Pipeline,
    Route,
    Router,
    no_match,
)

__all__ = [
    # Matching
    "PathMatcher",
    "compile_pattern",
    "split_path",

    # Pipeline
    "Pipeline",
    "Router",
    "Route",
    "Chain",
    "no_match",

    # Handler signatures
    "Handler",
    "Callback",
    "NextHandler",
]
