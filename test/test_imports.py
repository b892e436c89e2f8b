"""Tests for use statements and derive lines."""

import io

from autowrapper.imports import (
    render_derives,
    render_imports,
    write_derives,
    write_imports,
)
from autowrapper.ir import (
    Derive,
    Imports,
    Version,
)


class TestRenderImports:
    def test_plain(self, env):
        imports = Imports()
        imports.add("glib::translate::*")
        imports.add("std::fmt")
        assert render_imports(env, imports) == ["use glib::translate::*;", "use std::fmt;"]

    def test_single_feature(self, env):
        imports = Imports()
        imports.add("futures_core", constraints=["futures"])
        assert render_imports(env, imports) == ['#[cfg(feature = "futures")]', "use futures_core;"]

    def test_multiple_features(self, env):
        imports = Imports()
        imports.add("gio", constraints=["futures", "v3_16"])
        assert render_imports(env, imports) == [
            '#[cfg(any(feature = "futures", feature = "v3_16"))]',
            "use gio;",
        ]

    def test_version_guard_after_features(self, env):
        imports = Imports()
        imports.add("gio", version=Version(3, 16), constraints=["futures"])
        assert render_imports(env, imports) == [
            '#[cfg(feature = "futures")]',
            '#[cfg(any(feature = "v3_16", feature = "dox"))]',
            "use gio;",
        ]

    def test_baseline_version_unguarded(self, env):
        imports = Imports()
        imports.add("gdk", version=Version(3, 14))
        assert render_imports(env, imports) == ["use gdk;"]

    def test_order_not_sorted(self, env):
        imports = Imports()
        for path in ["z", "a", "m"]:
            imports.add(path)
        assert render_imports(env, imports) == ["use z;", "use a;", "use m;"]

    def test_write_leading_blank_line(self, env):
        imports = Imports()
        imports.add("std::fmt")
        out = io.StringIO()
        write_imports(out, env, imports)
        assert out.getvalue() == "\nuse std::fmt;\n"


class TestRenderDerives:
    def test_unconditional(self):
        assert render_derives([Derive(["Debug", "Clone"])], 1) == ["\t#[derive(Debug, Clone)]"]

    def test_conditional(self):
        assert render_derives([Derive(["Hash"], 'feature = "v3_16"')]) == [
            '#[cfg_attr(feature = "v3_16", derive(Hash))]'
        ]

    def test_multiple_specs(self):
        derives = [
            Derive(["Debug", "PartialEq", "Eq"]),
            Derive(["PartialOrd", "Ord", "Hash"], "any(unix, windows)"),
        ]
        assert render_derives(derives, 2) == [
            "\t\t#[derive(Debug, PartialEq, Eq)]",
            "\t\t#[cfg_attr(any(unix, windows), derive(PartialOrd, Ord, Hash))]",
        ]

    def test_empty(self):
        assert render_derives([], 1) == []

    def test_write(self):
        out = io.StringIO()
        write_derives(out, [Derive(["Debug"])], 1)
        assert out.getvalue() == "\t#[derive(Debug)]\n"
