"""Shared pytest fixtures for autowrapper tests."""

import io

import pytest

from autowrapper.ir import (
    Config,
    Environment,
    Namespace,
    Version,
)


@pytest.fixture
def env() -> Environment:
    """Environment generating Gtk with a 3.14 baseline.

    Registry: 0 = Gtk (``gtk``/``gtk_sys``), 1 = GObject (``glib``/``gobject_sys``),
    2 = Gio (``gio``/``gio_sys``).
    """
    return Environment(
        Config(min_cfg_version=Version(3, 14), girs_version="d1e0b9c"),
        [
            Namespace("Gtk", "gtk"),
            Namespace("GObject", "glib", "gobject_sys"),
            Namespace("Gio", "gio"),
        ],
    )


@pytest.fixture
def emit(env):
    """Run a writer function against an in-memory sink and return the text.

    Usage: ``emit(define_boxed_type, decl)`` calls
    ``define_boxed_type(sink, env, decl)``.
    """

    def _emit(func, *args) -> str:
        out = io.StringIO()
        func(out, env, *args)
        return out.getvalue()

    return _emit


class FailingSink(io.StringIO):
    """Sink whose writes fail after ``limit`` successful calls."""

    def __init__(self, limit: int = 0) -> None:
        super().__init__()
        self.limit = limit
        self.calls = 0

    def write(self, s: str) -> int:
        if self.calls >= self.limit:
            raise OSError("No space left on device")
        self.calls += 1
        return super().write(s)


@pytest.fixture
def failing_sink():
    return FailingSink
