"""Tests for translation keys, scopes and literal fallbacks.

Python 3.13+.
"""

from hypothesis import given
from hypothesis import strategies as st

from towerlex.keys import Alias, Fallback, explode_key, is_key, literal_value, scoped

segments = st.lists(
    st.text(alphabet="abcdefghijklmnopqrstuvwxyz-_", min_size=1, max_size=6),
    min_size=1,
    max_size=4,
)


class TestExplodeKey:
    """Test explode_key segment splitting."""

    def test_dots_and_slashes(self) -> None:
        """Both separators split segments."""
        assert explode_key("example.bar/baz") == ("example", "bar", "baz")

    def test_empty_segments_dropped(self) -> None:
        """Leading, trailing and doubled separators produce no segments."""
        assert explode_key("/example//foo.") == ("example", "foo")

    def test_single_segment(self) -> None:
        """Unscoped keys are one segment."""
        assert explode_key("missing") == ("missing",)


class TestScoped:
    """Test scoped key composition."""

    def test_scope_and_key(self) -> None:
        """Scope segments precede key segments."""
        assert scoped("example", "bar/baz") == "example.bar/baz"

    def test_none_scope_is_identity(self) -> None:
        """A None scope yields the canonical form of the key."""
        assert scoped(None, "example/foo") == "example/foo"
        assert scoped(None, "example.foo") == "example/foo"

    def test_nested_scopes(self) -> None:
        """Several scopes concatenate in order."""
        assert scoped("a", "b.c", "d/e") == "a.b.c.d/e"

    def test_unscoped_key(self) -> None:
        """A single segment has no slash."""
        assert scoped("missing") == "missing"

    def test_nothing_left(self) -> None:
        """No segments at all yields None."""
        assert scoped(None) is None
        assert scoped("", None) is None

    @given(scope=segments, key=segments)
    def test_concatenation_property(self, scope: list[str], key: list[str]) -> None:
        """PROPERTY: scoping concatenates segments in order."""
        joined = scoped(".".join(scope), "/".join(key))
        assert joined is not None
        assert explode_key(joined) == tuple(scope + key)

    @given(key=segments)
    def test_canonical_is_fixed_point(self, key: list[str]) -> None:
        """PROPERTY: scoping a canonical key again changes nothing."""
        canonical = scoped("/".join(key))
        assert canonical is not None
        assert scoped(None, canonical) == canonical


class TestLiterals:
    """Test key versus literal classification."""

    def test_strings_are_keys(self) -> None:
        """Strings always name dictionary entries."""
        assert is_key("example/foo")

    def test_fallback_is_literal(self) -> None:
        """Fallback wraps text that is returned as-is."""
        fallback = Fallback("Explicit fallback")
        assert not is_key(fallback)
        assert literal_value(fallback) == "Explicit fallback"

    def test_none_is_literal(self) -> None:
        """None is an explicit 'no text' fallback."""
        assert not is_key(None)
        assert literal_value(None) is None

    def test_alias_holds_target(self) -> None:
        """Alias is a plain value object."""
        assert Alias("example/greeting") == Alias("example/greeting")
        assert Alias("example/greeting").target == "example/greeting"
