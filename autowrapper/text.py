"""Text helpers shared by the emitters."""

from typing import (
    IO,
    Iterable,
)

INDENT = "\t"


def indent(level: int) -> str:
    """Return the leading whitespace for ``level`` indentation levels."""
    return INDENT * level


def escape(text: str) -> str:
    """Escape a string for placing inside double quotes.

    Only ``"`` and ``\\`` are escaped, each by prefixing a backslash. The
    result is meant to be produced once per value: escaping it again doubles
    the backslashes.

    Example
    -------
    ::

        escape('say "hi"')  # 'say \\"hi\\"'
    """
    result = []
    for char in text:
        if char in ('"', "\\"):
            result.append("\\")
        result.append(char)
    return "".join(result)


def write_lines(w: IO[str], lines: Iterable[str]) -> None:
    """Write each line followed by a newline.

    Write errors are not caught; the first failing write aborts.
    """
    for line in lines:
        w.write(f"{line}\n")
