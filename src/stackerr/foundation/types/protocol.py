"""Protocol definitions shared across stackerr.

These protocols describe the small host capabilities the core relies on,
so any compatible object can be passed in (files, StringIO, click streams).
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class Writer(Protocol):
    """Anything rendered text can be written to."""

    def write(self, text: str, /) -> object:
        """Write a chunk of text."""
        ...
