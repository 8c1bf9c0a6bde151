"""Tests for parsing verbose error text back into frames."""

import pytest

from stackerr.core.chain import join
from stackerr.core.errors import FormatMode, format_error, new, new_with_path, wrap_with_path
from stackerr.core.path import ResolvedFrame
from stackerr.core.scrape import ParsedError, parse_verbose
from stackerr.foundation.errors import ErrorCode, ScrapeError


class TestParseVerbose:
    """Tests for parse_verbose()."""

    def test_recovers_rendered_frames(self) -> None:
        err = new_with_path("boom")

        parsed = parse_verbose(f"{err:+v}")

        assert parsed.message == "boom"
        assert parsed.frames == err.path.frames()

    def test_wrapped_layer(self) -> None:
        err = wrap_with_path(new("bottom"), "top")

        parsed = parse_verbose(format_error(err, FormatMode.VERBOSE))

        assert parsed.message == "top: bottom"
        assert parsed.frames[0].name == "TestParseVerbose.test_wrapped_layer"

    def test_multi_line_message(self) -> None:
        err = new_with_path("line one\nline two")

        parsed = parse_verbose(f"{err:+v}")

        assert parsed.message == "line one\nline two"
        assert len(parsed.frames) == err.path.depth

    def test_empty_message(self) -> None:
        """An empty message renders as a blank first line above the frames."""
        err = new_with_path("")

        parsed = parse_verbose(format_error(err, FormatMode.VERBOSE))

        assert parsed.message == ""
        assert parsed.frames == err.path.frames()

    def test_message_only(self) -> None:
        parsed = parse_verbose(f"{new('plain'):+v}")

        assert parsed == ParsedError(message="plain")
        assert parsed.frames == ()

    def test_joined_message_without_frames(self) -> None:
        parsed = parse_verbose(str(join(new("a"), new("b"))))

        assert parsed.message == "a\nb"
        assert parsed.frames == ()

    def test_hand_written_text(self) -> None:
        text = "disk full\nsave\n\t/app/store.py:41\nmain\n\t/app/cli.py:9\n"

        parsed = parse_verbose(text)

        assert parsed.message == "disk full"
        assert parsed.frames == (
            ResolvedFrame(name="save", file="/app/store.py", line=41),
            ResolvedFrame(name="main", file="/app/cli.py", line=9),
        )

    def test_file_with_colon(self) -> None:
        parsed = parse_verbose("boom\nrun\n\tC:\\app\\run.py:12")

        assert parsed.frames == (ResolvedFrame(name="run", file="C:\\app\\run.py", line=12),)

    def test_non_frame_tail_stays_in_message(self) -> None:
        text = "boom\nnot a frame\n\tno line number"

        parsed = parse_verbose(text)

        assert parsed.message == text
        assert parsed.frames == ()

    def test_to_dict(self) -> None:
        parsed = parse_verbose("boom\nrun\n\t/app/run.py:3\n")

        assert parsed.to_dict() == {
            "message": "boom",
            "frames": [{"name": "run", "file": "/app/run.py", "line": 3}],
        }


class TestParseErrors:
    """Tests for rejected input."""

    @pytest.mark.parametrize("text", ["", "\n", "\n\n", "  \n\t\n"])
    def test_empty_input(self, text: str) -> None:
        with pytest.raises(ScrapeError) as exc_info:
            parse_verbose(text)

        assert exc_info.value.code == ErrorCode.SCRAPE_EMPTY_INPUT

    def test_blank_first_line(self) -> None:
        with pytest.raises(ScrapeError) as exc_info:
            parse_verbose("   \nrun\n\t/app/run.py:3")

        assert exc_info.value.code == ErrorCode.SCRAPE_MISSING_MESSAGE
        assert exc_info.value.context["line"] == 1

    def test_blank_first_line_before_message(self) -> None:
        with pytest.raises(ScrapeError) as exc_info:
            parse_verbose("\nmessage\nrun\n\t/app/run.py:3\n")

        assert exc_info.value.code == ErrorCode.SCRAPE_MISSING_MESSAGE

    def test_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            parse_verbose("")
