"""Tests for text helpers."""

import io

import pytest

from autowrapper.text import (
    escape,
    indent,
    write_lines,
)


class TestEscape:
    def test_empty(self):
        assert escape("") == ""

    def test_no_escaping_needed(self):
        assert escape("no escaping here") == "no escaping here"

    def test_quote_and_backslash(self):
        assert escape("'\"\\") == "'\\\"\\\\"

    def test_other_characters_pass_through(self):
        assert escape("tab\tnewline\n'single'") == "tab\tnewline\n'single'"

    @pytest.mark.parametrize(
        "text",
        ['"', "\\", 'a "quoted" \\path\\', '""\\\\', "plain"],
    )
    def test_output_only_has_escape_sequences(self, text):
        escaped = escape(text)
        assert len(escaped) <= 2 * len(text)
        # Walking the escaped text, every quote or backslash must be part of
        # a two-character escape sequence.
        i = 0
        while i < len(escaped):
            if escaped[i] == "\\":
                assert escaped[i + 1] in ('"', "\\")
                i += 2
            else:
                assert escaped[i] != '"'
                i += 1

    def test_not_idempotent(self):
        """Escaping twice doubles the backslashes."""
        assert escape(escape('"')) == '\\\\\\"'


class TestIndent:
    def test_zero(self):
        assert indent(0) == ""

    def test_levels_use_tabs(self):
        assert indent(1) == "\t"
        assert indent(3) == "\t\t\t"


class TestWriteLines:
    def test_each_line_terminated(self):
        out = io.StringIO()
        write_lines(out, ["a", "", "b"])
        assert out.getvalue() == "a\n\nb\n"

    def test_nothing_written_for_empty(self):
        out = io.StringIO()
        write_lines(out, [])
        assert out.getvalue() == ""
