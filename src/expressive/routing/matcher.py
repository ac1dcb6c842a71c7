"""
=============================================================================
PATH PATTERN MATCHER
=============================================================================

Compiles a route pattern such as "/users/:id" into a reusable matcher.

=============================================================================
SEGMENTS
=============================================================================

Both patterns and request paths are split on "/" by split_path().
Trailing empty segments are dropped, the leading one is kept, so every
path starting with "/" begins with the same empty segment:

    "/"              → [""]
    "/users/42"      → ["", "users", "42"]
    "/users/42/"     → ["", "users", "42"]

=============================================================================
COMPILATION
=============================================================================

A pattern of length L compiles into three pieces:

    Pattern: /users/:id/posts/:post_id
             ["", "users", ":id", "posts", ":post_id"]      L = 5

    ┌─────────────────────────────────────────────────────────────────────┐
    │  1. length guard      request has at least 5 segments               │
    │  2. literal checks    seg[0] == ""   seg[1] == "users"              │
    │                       seg[3] == "posts"                             │
    │  3. binding rules     id ← seg[2]    post_id ← seg[4]               │
    └─────────────────────────────────────────────────────────────────────┘

Matching runs the guard, then every literal check, then every binding
rule. There is no backtracking and no regex. Extra trailing request
segments are ignored, so "/users/:id" also matches "/users/42/posts".

=============================================================================
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple


def split_path(path: str) -> List[str]:
    """
    Split a path or pattern into segments.

    Example:
        >>> split_path("/foo/42/")
        ['', 'foo', '42']
    """
    segments = path.split("/")
    while len(segments) > 1 and not segments[-1]:
        segments.pop()
    return segments


@dataclass(frozen=True)
class PathMatcher:
    """
    A compiled route pattern.

    Immutable once built, so one matcher is safely shared by every
    request that is dispatched concurrently.
    """

    pattern: str
    length: int
    literals: Tuple[Tuple[int, str], ...]     # (index, expected segment)
    bindings: Tuple[Tuple[int, str], ...]     # (index, parameter name)

    @property
    def param_names(self) -> List[str]:
        return [name for _, name in self.bindings]

    def match(self, segments: Sequence[str]) -> Optional[Dict[str, str]]:
        """
        Match already split request segments.

        Returns:
            A fresh dict of parameter name → captured segment, or None
            if the request does not match.
        """
        if len(segments) < self.length:
            return None

        for index, literal in self.literals:
            if segments[index] != literal:
                return None

        return {name: segments[index] for index, name in self.bindings}

    def match_path(self, path: str) -> Optional[Dict[str, str]]:
        """Split `path` and match it."""
        return self.match(split_path(path))


def compile_pattern(pattern: str) -> PathMatcher:
    """
    Compile a route pattern.

    Segments starting with ":" are parameters, everything else must
    match literally.

    Example:
        >>> compile_pattern("/foo/:id").match_path("/foo/42")
        {'id': '42'}
        >>> compile_pattern("/foo/:id").match_path("/foo") is None
        True
    """
    segments = split_path(pattern)
    literals = []
    bindings = []

    for index, segment in enumerate(segments):
        if segment.startswith(":"):
            bindings.append((index, segment[1:]))
        else:
            literals.append((index, segment))

    return PathMatcher(
        pattern=pattern,
        length=len(segments),
        literals=tuple(literals),
        bindings=tuple(bindings),
    )
