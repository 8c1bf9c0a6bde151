"""Type definitions shared by the core and interface layers."""

from stackerr.foundation.types.protocol import Writer

__all__ = [
    "Writer",
]
