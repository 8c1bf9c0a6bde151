"""Call-path capture and lazy rendering.

Capturing is cheap: it copies ``(code, lasti)`` references for at most
MAX_DEPTH frames and nothing else. Names, files and line numbers are looked
up the first time a path is rendered, then cached on the path.

Usage:
    path = capture_path()          # from inside a public constructor
    render_path(path, sys.stderr)  # name\\n\\tfile:line\\n per frame

Thread Safety:
    The frame cache is filled under a module-level lock with a
    double-checked read, so resolution runs exactly once per path in
    free-threaded Python (3.14t).
"""

import inspect
import logging
import threading
from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from io import StringIO
from types import CodeType

from stackerr.foundation.types import Writer

logger = logging.getLogger(__name__)

# Deeper stacks keep the frames nearest the capture site and drop the rest
# without a marker.
MAX_DEPTH = 32

# Frames skipped so the first captured entry is the caller's call site:
#   1. capture_path
#   2. the public constructor (new_with_path, wrap_with_path, ...)
SKIP_INTERNAL_FRAMES = 2

type ReturnAddress = tuple[CodeType, int]
"""Code object plus the byte offset of its last executed instruction."""

_resolve_lock = threading.Lock()


@dataclass(frozen=True, slots=True)
class ResolvedFrame:
    """One symbolicated entry of a captured path."""

    name: str
    """Qualified function name without its module prefix (``Class.method``)."""

    file: str
    """Source file path as recorded on the code object."""

    line: int
    """Source line of the call."""


class CapturedPath:
    """A snapshot of the call stack taken when an error was created.

    The address tuple never changes after construction. The resolved frame
    cache moves from ``None`` to a tuple once and is not part of the
    path's identity.
    """

    __slots__ = ("_addresses", "_frames")

    def __init__(self, addresses: Sequence[ReturnAddress]) -> None:
        self._addresses: tuple[ReturnAddress, ...] = tuple(addresses[:MAX_DEPTH])
        self._frames: tuple[ResolvedFrame, ...] | None = None

    @property
    def depth(self) -> int:
        """Number of captured entries."""
        return len(self._addresses)

    @property
    def resolved(self) -> bool:
        """Whether the frames have been symbolicated yet."""
        return self._frames is not None

    def frames(self) -> tuple[ResolvedFrame, ...]:
        """Resolve the captured addresses, once, and return the frames.

        Innermost call first. Thread-safe with double-check locking.
        """
        frames = self._frames
        if frames is not None:
            return frames

        with _resolve_lock:
            if self._frames is None:
                self._frames = tuple(_resolve(address) for address in self._addresses)
                logger.debug("Resolved %d frames for captured path", len(self._frames))
            return self._frames

    def __len__(self) -> int:
        return len(self._addresses)

    def __iter__(self) -> Iterator[ResolvedFrame]:
        return iter(self.frames())

    def __repr__(self) -> str:
        return f"CapturedPath(depth={self.depth}, resolved={self.resolved})"


def capture_path() -> CapturedPath:
    """Record the current call path, starting at the constructor's caller.

    Must be called directly from a public constructor; see
    SKIP_INTERNAL_FRAMES.
    """
    frame = inspect.currentframe()
    try:
        for _ in range(SKIP_INTERNAL_FRAMES):
            if frame is None:
                break
            frame = frame.f_back

        addresses: list[ReturnAddress] = []
        while frame is not None and len(addresses) < MAX_DEPTH:
            addresses.append((frame.f_code, frame.f_lasti))
            frame = frame.f_back
    finally:
        del frame

    return CapturedPath(addresses)


def render_path(path: CapturedPath, writer: Writer) -> None:
    """Write each frame as ``<name>\\n\\t<file>:<line>\\n``.

    The error's own message line is the caller's job.
    """
    for frame in path.frames():
        writer.write(frame.name)
        writer.write("\n\t")
        writer.write(frame.file)
        writer.write(":")
        writer.write(str(frame.line))
        writer.write("\n")


def format_path(path: CapturedPath) -> str:
    """Render a path to a string."""
    out = StringIO()
    render_path(path, out)
    return out.getvalue()


def _resolve(address: ReturnAddress) -> ResolvedFrame:
    code, lasti = address
    return ResolvedFrame(
        name=code.co_qualname,
        file=code.co_filename,
        line=_line_for(code, lasti),
    )


def _line_for(code: CodeType, lasti: int) -> int:
    # co_lines() yields half-open [start, end) byte ranges, the same table
    # frame.f_lineno is computed from.
    for start, end, line in code.co_lines():
        if start <= lasti < end:
            return line if line is not None else code.co_firstlineno
    return code.co_firstlineno
