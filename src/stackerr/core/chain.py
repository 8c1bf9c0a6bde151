"""Cause-chain operations over Python's own exception chaining.

The chain is the ``__cause__`` link set by ``raise ... from`` or by the
wrap constructors. Exception groups fan out into their members. Implicit
``__context__`` links are not part of the chain.

Key functions:
- unwrap(): One step down the chain
- walk(): Every error reachable from a starting error, depth-first
- is_(): Whether a target error appears in the chain
- as_kind(): First error in the chain of a given type
- join(): Combine independent errors into one value
"""

from collections.abc import Iterator, Sequence
from typing import Self


class JoinedBaseError(BaseExceptionGroup):
    """Several independent errors carried as one value.

    ``str()`` gives the member messages joined by newlines. join() returns
    this type only when some member is not an Exception (KeyboardInterrupt,
    SystemExit); otherwise it returns the JoinedError subclass.
    """

    def __new__(cls, errors: Sequence[BaseException]) -> Self:
        members = list(errors)
        return super().__new__(cls, "\n".join(str(e) for e in members), members)

    def __str__(self) -> str:
        return self.message

    def derive(self, excs: Sequence[BaseException]) -> "JoinedBaseError":
        return _group(excs)


class JoinedError(JoinedBaseError, ExceptionGroup):
    """A JoinedBaseError whose members are all Exceptions.

    Catchable with ``except Exception`` and ``except*``.

    Example:
        >>> err = join(ValueError("a"), KeyError("b"))
        >>> print(err)
        a
        'b'
    """


def unwrap(err: BaseException | None) -> BaseException | None:
    """Return the immediate cause of ``err``, or None if it is terminal.

    Exception group members are not causes; reach them through walk(),
    is_() or as_kind().
    """
    if err is None:
        return None
    return err.__cause__


def walk(err: BaseException | None) -> Iterator[BaseException]:
    """Yield ``err`` and everything reachable from it, pre-order.

    Follows ``__cause__`` and exception group members. Errors already
    visited are skipped, so hand-built cycles terminate.
    """
    seen: set[int] = set()
    stack: list[BaseException | None] = [err]
    while stack:
        current = stack.pop()
        if current is None or id(current) in seen:
            continue
        seen.add(id(current))
        yield current

        stack.append(current.__cause__)
        if isinstance(current, BaseExceptionGroup):
            stack.extend(reversed(current.exceptions))


def is_(err: BaseException | None, target: BaseException | None) -> bool:
    """Report whether ``target`` appears anywhere in ``err``'s chain.

    Matches by identity or ``==``, so exception types that define
    ``__eq__`` can match by value.
    """
    if err is None or target is None:
        return err is target

    for candidate in walk(err):
        if candidate is target or candidate == target:
            return True
    return False


def as_kind[E: BaseException](
    err: BaseException | None,
    kind: type[E] | tuple[type[E], ...],
) -> E | None:
    """Return the first error in ``err``'s chain that is an instance of ``kind``."""
    for candidate in walk(err):
        if isinstance(candidate, kind):
            return candidate
    return None


def join(*errs: BaseException | None) -> JoinedBaseError | None:
    """Combine errors into one value, dropping None entries.

    Returns a JoinedError when every member is an Exception, a
    JoinedBaseError otherwise, and None when no errors remain.
    """
    members = [e for e in errs if e is not None]
    if not members:
        return None
    return _group(members)


def _group(members: Sequence[BaseException]) -> JoinedBaseError:
    if all(isinstance(e, Exception) for e in members):
        return JoinedError(members)
    return JoinedBaseError(members)
