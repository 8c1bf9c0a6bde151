"""Tests for cause-chain operations.

Tests cover:
- unwrap() one step at a time
- is_() by identity and by value equality
- as_kind() type search
- join() and JoinedError as an ExceptionGroup
- walk() ordering and cycle safety
"""

import pickle

import pytest

from stackerr.core.chain import JoinedBaseError, JoinedError, as_kind, is_, join, unwrap, walk
from stackerr.core.errors import Error, WrappedError, new, new_with_path, wrap, wrap_with_path


class CodeError(Exception):
    """An error type that compares equal by code."""

    def __init__(self, code: int) -> None:
        super().__init__(f"code {code}")
        self.code = code

    def __eq__(self, other: object) -> bool:
        return isinstance(other, CodeError) and other.code == self.code

    def __hash__(self) -> int:
        return hash(self.code)


class TestUnwrap:
    """Tests for unwrap()."""

    def test_terminal_error(self) -> None:
        assert unwrap(new("x")) is None

    def test_none(self) -> None:
        assert unwrap(None) is None

    def test_foreign_raise_from(self) -> None:
        try:
            try:
                raise KeyError("k")
            except KeyError as e:
                raise RuntimeError("lookup failed") from e
        except RuntimeError as outer:
            assert isinstance(unwrap(outer), KeyError)

    def test_implicit_context_is_not_a_cause(self) -> None:
        try:
            try:
                raise KeyError("k")
            except KeyError:
                raise RuntimeError("during handling")  # noqa: B904
        except RuntimeError as outer:
            assert outer.__context__ is not None
            assert unwrap(outer) is None


class TestIs:
    """Tests for is_()."""

    @pytest.mark.parametrize(
        "build",
        [
            lambda bottom: wrap(bottom, "middle"),
            lambda bottom: wrap_with_path(bottom, "middle"),
            lambda bottom: wrap(wrap_with_path(bottom, "middle"), "top"),
            lambda bottom: wrap_with_path(wrap(bottom, "middle"), "top"),
        ],
        ids=["wrap", "wrap_with_path", "mixed", "mixed_reversed"],
    )
    def test_finds_every_layer(self, build) -> None:
        """Each error in the chain is found from the top and from itself."""
        bottom = new_with_path("bottom")
        top = build(bottom)

        chain = list(walk(top))
        for i, layer in enumerate(chain):
            assert is_(layer, layer)
            for below in chain[i:]:
                assert is_(layer, below)
        assert is_(top, bottom)

    def test_upper_layer_not_in_lower_chain(self) -> None:
        bottom = new("bottom")
        top = wrap(bottom, "top")

        assert not is_(bottom, top)

    def test_unrelated_error(self) -> None:
        assert not is_(wrap(new("a"), "b"), new("a"))

    def test_equal_message_is_not_enough(self) -> None:
        """Errors from new() compare by identity."""
        assert not is_(new("same"), new("same"))

    def test_value_equality(self) -> None:
        """Types with __eq__ match by value."""
        err = wrap(CodeError(404), "fetching")

        assert is_(err, CodeError(404))
        assert not is_(err, CodeError(500))

    def test_none_handling(self) -> None:
        assert is_(None, None)
        assert not is_(new("x"), None)
        assert not is_(None, new("x"))

    def test_foreign_chain(self) -> None:
        inner = ValueError("v")
        outer = RuntimeError("r")
        outer.__cause__ = inner

        assert is_(wrap(outer, "ctx"), inner)


class TestAsKind:
    """Tests for as_kind()."""

    def test_finds_first_match(self) -> None:
        inner = KeyError("k")
        err = wrap(wrap(inner, "lookup"), "request")

        assert as_kind(err, KeyError) is inner

    def test_outermost_match_wins(self) -> None:
        err = wrap(wrap(new("x"), "inner"), "outer")

        found = as_kind(err, WrappedError)

        assert found is err
        assert found.annotation == "outer"

    def test_terminal_kind(self) -> None:
        bottom = new("x")
        err = wrap(bottom, "y")

        assert as_kind(err, Error) is bottom

    def test_tuple_of_kinds(self) -> None:
        inner = OSError("disk")
        err = wrap(inner, "save")

        assert as_kind(err, (KeyError, OSError)) is inner

    def test_no_match(self) -> None:
        assert as_kind(wrap(new("x"), "y"), KeyError) is None

    def test_none(self) -> None:
        assert as_kind(None, Exception) is None


class TestJoin:
    """Tests for join() and JoinedError."""

    def test_empty(self) -> None:
        assert join() is None

    def test_all_none(self) -> None:
        assert join(None, None) is None

    def test_drops_none(self) -> None:
        a = new("a")
        b = new("b")

        joined = join(a, None, b)

        assert joined.exceptions == (a, b)

    def test_message(self) -> None:
        joined = join(new("a"), KeyError("b"))

        assert str(joined) == "a\n'b'"

    def test_is_exception_group(self) -> None:
        joined = join(new("a"), ValueError("b"))

        assert isinstance(joined, JoinedError)
        assert isinstance(joined, ExceptionGroup)

    def test_except_star(self) -> None:
        caught: list[BaseException] = []
        try:
            raise join(new("a"), ValueError("b"))
        except* ValueError as group:
            caught.extend(group.exceptions)
        except* Error:
            pass

        assert [str(e) for e in caught] == ["b"]

    def test_split_keeps_type(self) -> None:
        joined = join(new("a"), ValueError("b"))

        match, rest = joined.split(ValueError)

        assert isinstance(match, JoinedError)
        assert str(match) == "b"
        assert str(rest) == "a"

    def test_is_and_as_kind_see_members(self) -> None:
        a = new_with_path("a")
        b = KeyError("b")
        joined = join(wrap(a, "ctx"), b)

        assert is_(joined, a)
        assert is_(joined, b)
        assert as_kind(joined, KeyError) is b

    def test_unwrap_does_not_enter_members(self) -> None:
        assert unwrap(join(new("a"), new("b"))) is None

    def test_wrapped_join(self) -> None:
        a = new("a")
        err = wrap(join(a, new("b")), "batch")

        assert str(err) == "batch: a\nb"
        assert is_(err, a)

    def test_base_exception_member(self) -> None:
        """Non-Exception members give a JoinedBaseError."""
        interrupt = KeyboardInterrupt()
        a = new("a")

        joined = join(a, interrupt)

        assert type(joined) is JoinedBaseError
        assert not isinstance(joined, Exception)
        assert str(joined) == "a\n"
        assert is_(joined, interrupt)
        assert as_kind(joined, KeyboardInterrupt) is interrupt
        assert as_kind(joined, Error) is a

    def test_split_narrows_type(self) -> None:
        joined = join(new("a"), SystemExit(2))

        match, rest = joined.split(Error)

        assert type(match) is JoinedError
        assert type(rest) is JoinedBaseError

    def test_joined_error_is_joined_base_error(self) -> None:
        assert isinstance(join(new("a")), JoinedBaseError)

    def test_pickle(self) -> None:
        joined = join(new("a"), new("b"))

        restored = pickle.loads(pickle.dumps(joined))

        assert type(restored) is JoinedError
        assert str(restored) == "a\nb"
        assert [str(e) for e in restored.exceptions] == ["a", "b"]


class TestWalk:
    """Tests for walk()."""

    def test_pre_order(self) -> None:
        x = new("x")
        w = wrap(x, "w")
        y = new("y")
        joined = join(w, y)

        assert list(walk(joined)) == [joined, w, x, y]

    def test_cycle_terminates(self) -> None:
        a = ValueError("a")
        b = ValueError("b")
        a.__cause__ = b
        b.__cause__ = a

        assert list(walk(a)) == [a, b]
        assert not is_(a, KeyError("missing"))

    def test_none(self) -> None:
        assert list(walk(None)) == []
