"""Tests for parent clause resolution."""

import pytest

from autowrapper.ancestors import (
    available_ancestors,
    parent_name,
    resolve_ancestors,
)
from autowrapper.ir import (
    Ancestor,
    Status,
    TypeId,
    TypeKind,
)
from autowrapper.nodes import (
    Inheritance,
    Prerequisites,
)

# Namespace ids from the ``env`` fixture
GTK = 0
GOBJECT = 1
GIO = 2


def cls(name, ns_id=GTK, status=Status.GENERATE):
    return Ancestor(TypeId(ns_id, TypeKind.CLASS), name, status)


def iface(name, ns_id=GTK, status=Status.GENERATE):
    return Ancestor(TypeId(ns_id, TypeKind.INTERFACE), name, status)


class TestParentName:
    def test_same_namespace_unqualified(self, env):
        assert parent_name(env, GTK, cls("Widget")) == "Widget"

    def test_other_namespace_qualified(self, env):
        assert parent_name(env, GTK, cls("Object", GOBJECT)) == "glib::Object"

    def test_relative_to_owner(self, env):
        assert parent_name(env, GIO, iface("ListModel", GIO)) == "ListModel"
        assert parent_name(env, GIO, cls("Widget", GTK)) == "gtk::Widget"


class TestAvailableAncestors:
    def test_ignored_dropped(self):
        parents = [cls("A"), cls("B", status=Status.IGNORE), iface("C", status=Status.MANUAL)]
        assert [p.name for p in available_ancestors(parents)] == ["A", "C"]


class TestResolveAncestors:
    def test_no_parents(self, env):
        assert resolve_ancestors(env, GTK, False, []) is None

    def test_all_ignored(self, env):
        parents = [cls("Object", GOBJECT, Status.IGNORE), iface("Buildable", status=Status.IGNORE)]
        assert resolve_ancestors(env, GTK, False, parents) is None
        assert resolve_ancestors(env, GTK, True, parents) is None

    def test_interface_prerequisites(self, env):
        parents = [cls("Widget"), iface("Buildable"), cls("Object", GOBJECT)]
        clause = resolve_ancestors(env, GTK, True, parents)
        assert isinstance(clause, Prerequisites)
        assert clause.names == ["Widget", "Buildable", "glib::Object"]
        assert str(clause) == " @requires Widget, Buildable, glib::Object"

    def test_concrete_partitioned_by_kind(self, env):
        parents = [
            cls("Bin"),
            iface("Buildable"),
            cls("Container"),
            iface("Orientable", status=Status.IGNORE),
            cls("Widget"),
            cls("Object", GOBJECT),
            iface("ActionGroup", GIO),
        ]
        clause = resolve_ancestors(env, GTK, False, parents)
        assert isinstance(clause, Inheritance)
        assert clause.extends == ["Bin", "Container", "Widget", "glib::Object"]
        assert clause.implements == ["Buildable", "gio::ActionGroup"]

    @pytest.mark.parametrize(
        "parents, expected",
        [
            ([cls("Object")], " @extends Object"),
            ([iface("Buildable")], " @implements Buildable"),
            ([cls("Object"), iface("Buildable")], " @extends Object, @implements Buildable"),
            (
                [iface("A"), cls("X"), iface("B"), cls("Y")],
                " @extends X, Y, @implements A, B",
            ),
        ],
    )
    def test_rendering(self, env, parents, expected):
        assert str(resolve_ancestors(env, GTK, False, parents)) == expected

    def test_no_ignored_in_output(self, env):
        parents = [cls(f"C{i}", status=s) for i, s in enumerate(Status)] + [
            iface(f"I{i}", status=s) for i, s in enumerate(Status)
        ]
        clause = resolve_ancestors(env, GTK, False, parents)
        ignored = {p.name for p in parents if p.status.ignored}
        assert not ignored & set(clause.extends + clause.implements)
        assert len(clause.extends) + len(clause.implements) == len(parents) - len(ignored)
