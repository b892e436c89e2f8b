"""Parent clauses of object and interface declarations.

Ancestors marked :attr:`~autowrapper.ir.Status.IGNORE` are dropped. The
survivors of an interface are all prerequisites. The survivors of a concrete
type are split by their underlying kind into the classes it extends and the
interfaces it implements, each keeping its relative order.
"""

from typing import (
    Optional,
)

from autowrapper.ir import (
    Ancestor,
    Environment,
    TypeKind,
)
from autowrapper.nodes import (
    Inheritance,
    ParentClause,
    Prerequisites,
)


def parent_name(env: Environment, owner_ns_id: int, ancestor: Ancestor) -> str:
    """Name of ``ancestor`` as seen from a type in namespace ``owner_ns_id``.

    Ancestors from other namespaces are qualified with their crate name,
    e.g. ``glib::Object``.
    """
    if ancestor.type_id.ns_id == owner_ns_id:
        return ancestor.name
    crate_name = env.namespaces[ancestor.type_id.ns_id].crate_name
    return f"{crate_name}::{ancestor.name}"


def available_ancestors(parents: list[Ancestor]) -> list[Ancestor]:
    return [p for p in parents if not p.status.ignored]


def resolve_ancestors(
    env: Environment,
    owner_ns_id: int,
    is_interface: bool,
    parents: list[Ancestor],
) -> Optional[ParentClause]:
    """Build the parent clause for a type, or None when no ancestor survives.

    :param env: Generation environment (namespace registry).
    :param owner_ns_id: Namespace of the type being declared.
    :param is_interface: True if the type being declared is an interface.
    :param parents: Ancestors in inheritance order.
    """
    survivors = available_ancestors(parents)
    if not survivors:
        return None

    if is_interface:
        return Prerequisites([parent_name(env, owner_ns_id, p) for p in survivors])

    extends: list[str] = []
    implements: list[str] = []
    for parent in survivors:
        kind = parent.type_id.kind
        if kind is TypeKind.CLASS:
            extends.append(parent_name(env, owner_ns_id, parent))
        elif kind is TypeKind.INTERFACE:
            implements.append(parent_name(env, owner_ns_id, parent))
        else:
            raise TypeError(f"Unknown ancestor kind: {kind!r}")
    return Inheritance(extends, implements)
