"""Tests for terminal output sanitization."""

from __future__ import annotations

from webterm.commands.sanitizer import sanitize_output


class TestSanitizeOutput:
    def test_printable_text_unchanged(self) -> None:
        text = "total 0\r\ndrwxr-xr-x  2 user  staff  64 docs ~!@#$%^&*()\n"
        assert sanitize_output(text) == text

    def test_strips_control_bytes(self) -> None:
        assert sanitize_output("a\x00b\x07c\x08d\te\x0bf") == "abcdef"

    def test_strips_delete(self) -> None:
        assert sanitize_output("abc\x7f") == "abc"

    def test_keeps_line_breaks(self) -> None:
        assert sanitize_output("one\r\ntwo\nthree\r") == "one\r\ntwo\nthree\r"

    def test_keeps_colour_sequences(self) -> None:
        text = "\x1b[32m  help\x1b[0m - show help\r\n"
        assert sanitize_output(text) == text

    def test_keeps_clear_screen(self) -> None:
        assert sanitize_output("\x1b[2J\x1b[H") == "\x1b[2J\x1b[H"

    def test_drops_lone_escape(self) -> None:
        assert sanitize_output("a\x1bb") == "ab"

    def test_drops_non_csi_escape(self) -> None:
        # OSC title sequence: ESC and BEL go, the payload text stays
        assert sanitize_output("\x1b]0;title\x07done") == "]0;titledone"

    def test_keeps_unicode_text(self) -> None:
        assert sanitize_output("café 🎉\n") == "café 🎉\n"

    def test_strips_c1_controls(self) -> None:
        assert sanitize_output("a\x9bb\x85c") == "abc"

    def test_empty(self) -> None:
        assert sanitize_output("") == ""
