"""Parse verbose error text back into a message and frames.

The verbose rendering is a textual contract:

    <message line(s)>
    <name>
    \t<file>:<line>
    ...

The frames are the longest run of name / location pairs at the end of the
text. Everything before that run is the message, which may span several
lines (joined errors, for instance).
"""

import re
from dataclasses import asdict, dataclass
from typing import Any

from stackerr.core.path import ResolvedFrame
from stackerr.foundation.errors import ErrorCode, scrape_error

_LOCATION = re.compile(r"^\t(?P<file>.+):(?P<line>\d+)$")


@dataclass(frozen=True, slots=True)
class ParsedError:
    """A message and the frames rendered beneath it."""

    message: str
    frames: tuple[ResolvedFrame, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dict."""
        return {
            "message": self.message,
            "frames": [asdict(frame) for frame in self.frames],
        }


def parse_verbose(text: str) -> ParsedError:
    """Split verbose error text into its message and frames.

    An empty first line followed only by frames is an empty message, as
    rendered for ``new_with_path("")``.

    Raises:
        ScrapeError: If the text is blank, or its first line is blank and
            more message lines follow.
    """
    if not text.strip():
        raise scrape_error(ErrorCode.SCRAPE_EMPTY_INPUT)

    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()

    # Walk backwards over name / location pairs, always leaving at least
    # one line for the message.
    frames: list[ResolvedFrame] = []
    end = len(lines)
    while end >= 3:
        name, location = lines[end - 2], lines[end - 1]
        match = _LOCATION.match(location)
        if match is None or not name or name.startswith("\t"):
            break
        frames.append(
            ResolvedFrame(name=name, file=match["file"], line=int(match["line"]))
        )
        end -= 2

    if not lines[0].strip() and (lines[0] or end > 1):
        raise scrape_error(ErrorCode.SCRAPE_MISSING_MESSAGE, line=1)

    frames.reverse()
    return ParsedError(message="\n".join(lines[:end]), frames=tuple(frames))
