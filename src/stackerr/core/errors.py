"""Error values with optional captured call paths.

Two kinds of value:
- Error: a terminal error (message, optional path, no cause)
- WrappedError: an annotation on top of a cause (optional path)

Both render through format_error() in one of three modes (compact,
quoted, verbose), and through format specs in f-strings:

    f"{err}"     -> message
    f"{err:q}"   -> "message" (quoted)
    f"{err:+v}"  -> message, newline, this layer's frames

Verbose rendering covers a single layer. format_chain() renders every
layer of the cause chain with its own frames.
"""

import json
from enum import Enum
from io import StringIO

from stackerr.core.chain import unwrap
from stackerr.core.path import CapturedPath, capture_path, render_path

# Appended to a template that could not be applied to its arguments.
_BAD_FORMAT = "%!(BADFORMAT {kind}: {detail})"

# Stands in for the cause's message when a wrap constructor gets None.
_NIL_CAUSE = "%!w(<nil>)"

# Stands in for the message of an error whose str() raised.
_PANIC = "%!v(PANIC={kind}: {detail})"


class FormatMode(Enum):
    """How much of an error to render."""

    COMPACT = "compact"
    """Plain message."""

    QUOTED = "quoted"
    """Message as a double-quoted, escaped string literal."""

    VERBOSE = "verbose"
    """Message followed by this layer's captured frames."""


_FORMAT_SPECS: dict[str, FormatMode] = {
    "": FormatMode.COMPACT,
    "s": FormatMode.COMPACT,
    "v": FormatMode.COMPACT,
    "q": FormatMode.QUOTED,
    "+v": FormatMode.VERBOSE,
}


class TracedError(Exception):
    """Common base for errors that may carry a captured path."""

    def __init__(self, message: str, path: CapturedPath | None = None) -> None:
        super().__init__(message)
        self._message = message
        self._path = path

    @property
    def message(self) -> str:
        """Full rendered message."""
        return self._message

    @property
    def path(self) -> CapturedPath | None:
        """Call path captured at creation, if any."""
        return self._path

    def __str__(self) -> str:
        return self._message

    def __reduce__(self) -> tuple[object, ...]:
        # Captured paths hold code objects and stay process-local.
        return (type(self), (self._message,))

    def __format__(self, spec: str) -> str:
        mode = _FORMAT_SPECS.get(spec)
        if mode is None:
            return format(self._message, spec)
        return format_error(self, mode)


class Error(TracedError):
    """A terminal error: no cause, optionally a captured path."""

    def __repr__(self) -> str:
        return f"Error({self._message!r})"


class WrappedError(TracedError):
    """An annotation layered over a cause.

    The message is ``"<annotation>: <str(cause)>"`` and the cause is
    exposed through ``__cause__`` like ``raise ... from cause``.
    """

    def __init__(
        self,
        cause: BaseException | None,
        annotation: str,
        path: CapturedPath | None = None,
    ) -> None:
        cause_message = _NIL_CAUSE if cause is None else _message_of(cause)
        super().__init__(f"{annotation}: {cause_message}", path)
        self._annotation = annotation
        if cause is not None:
            self.__cause__ = cause

    @property
    def annotation(self) -> str:
        """The text this layer added."""
        return self._annotation

    @property
    def cause(self) -> BaseException | None:
        """The wrapped error."""
        return self.__cause__

    def __reduce__(self) -> tuple[object, ...]:
        return (type(self), (self.__cause__, self._annotation))

    def __repr__(self) -> str:
        return f"WrappedError({self.__cause__!r}, {self._annotation!r})"


# Constructors. The *_with_path variants must call capture_path() directly
# (see SKIP_INTERNAL_FRAMES).


def new(message: str) -> Error:
    """Create a terminal error with no path."""
    return Error(message)


def newf(template: str, *args: object, **kwargs: object) -> Error:
    """Create a terminal error from a ``str.format`` template."""
    return Error(_sprintf(template, args, kwargs))


def new_with_path(message: str) -> Error:
    """Create a terminal error and capture the caller's call path."""
    return Error(message, capture_path())


def new_with_pathf(template: str, *args: object, **kwargs: object) -> Error:
    """Formatted variant of new_with_path()."""
    return Error(_sprintf(template, args, kwargs), capture_path())


def wrap(err: BaseException | None, message: str) -> WrappedError:
    """Annotate ``err`` with ``message``; no path."""
    return WrappedError(err, message)


def wrapf(
    err: BaseException | None, template: str, *args: object, **kwargs: object
) -> WrappedError:
    """Formatted variant of wrap()."""
    return WrappedError(err, _sprintf(template, args, kwargs))


def wrap_with_path(err: BaseException | None, message: str) -> WrappedError:
    """Annotate ``err`` and capture the call path at this wrap site."""
    return WrappedError(err, message, capture_path())


def wrap_with_pathf(
    err: BaseException | None, template: str, *args: object, **kwargs: object
) -> WrappedError:
    """Formatted variant of wrap_with_path()."""
    return WrappedError(err, _sprintf(template, args, kwargs), capture_path())


def format_error(err: BaseException, mode: FormatMode = FormatMode.COMPACT) -> str:
    """Render one error layer.

    Works for any exception. Verbose rendering of an error without a
    captured path is just the message, with no trailing newline.
    """
    message = _message_of(err)
    if mode is FormatMode.QUOTED:
        return json.dumps(message, ensure_ascii=False)

    if mode is FormatMode.VERBOSE and isinstance(err, TracedError) and err.path is not None:
        out = StringIO()
        out.write(message)
        out.write("\n")
        render_path(err.path, out)
        return out.getvalue()

    return message


def format_chain(err: BaseException) -> str:
    """Render every layer of the cause chain, outermost first.

    Each layer is its message plus its own frames. Layers are separated by
    a blank line.
    """
    blocks: list[str] = []
    seen: set[int] = set()
    layer: BaseException | None = err
    while layer is not None and id(layer) not in seen:
        seen.add(id(layer))
        block = format_error(layer, FormatMode.VERBOSE)
        blocks.append(block if block.endswith("\n") else block + "\n")
        layer = unwrap(layer)
    return "\n".join(blocks)


def _sprintf(template: str, args: tuple[object, ...], kwargs: dict[str, object]) -> str:
    try:
        return template.format(*args, **kwargs)
    except Exception as e:
        # Any argument may raise from __format__ or __str__.
        return template + _BAD_FORMAT.format(kind=type(e).__name__, detail=_exc_text(e))


def _message_of(err: BaseException) -> str:
    try:
        return str(err)
    except Exception as e:
        return _PANIC.format(kind=type(e).__name__, detail=_exc_text(e))


def _exc_text(exc: BaseException) -> str:
    try:
        return str(exc)
    except Exception:
        return f"<unprintable {type(exc).__name__}>"
