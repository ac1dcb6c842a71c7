"""
Unit tests for path pattern matching.
"""

from dataclasses import FrozenInstanceError

import pytest

from expressive.routing import compile_pattern, split_path


class TestSplitPath:
    """Tests for split_path()."""

    @pytest.mark.parametrize("path, expected", [
        ("/", [""]),
        ("", [""]),
        ("/foo", ["", "foo"]),
        ("/foo/", ["", "foo"]),
        ("/foo/42//", ["", "foo", "42"]),
        ("/foo//bar", ["", "foo", "", "bar"]),
    ])
    def test_split(self, path, expected):
        """Test segment splitting of paths."""
        assert split_path(path) == expected


class TestPathMatcher:
    """Tests for compiled patterns."""

    def test_literal_match(self):
        """Test literal-only patterns."""
        matcher = compile_pattern("/users")

        assert matcher.match_path("/users") == {}
        assert matcher.match_path("/posts") is None

    def test_parameter_binding(self):
        """Test a parameter captures its segment."""
        matcher = compile_pattern("/foo/:id")
        assert matcher.match_path("/foo/42") == {"id": "42"}

    def test_request_shorter_than_pattern(self):
        """Test the length guard."""
        assert compile_pattern("/foo/:id").match_path("/foo") is None

    def test_literal_mismatch(self):
        """Test a differing literal segment."""
        assert compile_pattern("/foo/:id").match_path("/bar/42") is None

    def test_extra_request_segments_still_match(self):
        """Patterns match as prefixes of the request path."""
        matcher = compile_pattern("/foo/:id")
        assert matcher.match_path("/foo/42/comments") == {"id": "42"}

    def test_root_matches_everything(self):
        """Test "/" matches any absolute path."""
        matcher = compile_pattern("/")

        assert matcher.match_path("/") == {}
        assert matcher.match_path("/any/thing") == {}

    def test_trailing_slash_is_ignored(self):
        """Test trailing slashes on both sides."""
        assert compile_pattern("/foo/:id/").match_path("/foo/42/") == {"id": "42"}

    def test_multiple_parameters(self):
        """Test patterns with several parameters."""
        matcher = compile_pattern("/users/:user/posts/:post")

        assert matcher.param_names == ["user", "post"]
        assert matcher.match_path("/users/ada/posts/7") == {"user": "ada", "post": "7"}
        assert matcher.match_path("/users/ada/comments/7") is None

    def test_parameter_captures_empty_segment(self):
        """Test an empty segment binds as ""."""
        assert compile_pattern("/a/:x/b").match_path("/a//b") == {"x": ""}

    def test_each_match_returns_a_new_dict(self):
        """Test match results are never shared."""
        matcher = compile_pattern("/foo/:id")

        first = matcher.match_path("/foo/1")
        second = matcher.match_path("/foo/1")
        assert first == second
        assert first is not second

    def test_matcher_is_immutable(self):
        """Test compiled matchers are frozen."""
        matcher = compile_pattern("/foo")
        with pytest.raises(FrozenInstanceError):
            matcher.pattern = "/bar"
