"""Build the IR from a descriptor document.

The upstream analysis phase hands over its resolved types as a JSON
document. This module turns the decoded document into an
:class:`~autowrapper.ir.Environment` and a :class:`~autowrapper.ir.Module`.

Document layout::

    {
        "config": {"min_cfg_version": "3.14", "girs_version": "d1e0b9c"},
        "namespaces": [
            {"name": "Gtk", "crate_name": "gtk"},
            {"name": "GObject", "crate_name": "glib", "sys_crate_name": "gobject_sys"}
        ],
        "imports": [{"path": "glib::translate::*"}],
        "declarations": [
            {
                "kind": "object",
                "name": "Widget",
                "glib_name": "GtkWidget",
                "get_type_fn": "gtk_widget_get_type",
                "parents": [{"name": "Object", "namespace": 1, "type": "class"}]
            }
        ]
    }

Malformed documents raise :class:`ValueError` naming the offending field.
"""

from __future__ import (
    annotations,
)

import json
from typing import (
    Any,
    Optional,
)

from autowrapper.ir import (
    MAIN_NAMESPACE,
    Ancestor,
    AutoBoxedType,
    BoxedType,
    Config,
    Declaration,
    Derive,
    Environment,
    FunctionInfo,
    Imports,
    Module,
    Namespace,
    ObjectType,
    SharedType,
    Status,
    TypeId,
    TypeKind,
    Version,
)

DECLARATION_KINDS = ("object", "interface", "boxed", "auto_boxed", "shared")


def _object(value: Any, where: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise ValueError(f"{where}: expected an object")
    return value


def _list(value: Any, where: str) -> list[Any]:
    if not isinstance(value, list):
        raise ValueError(f"{where}: expected a list")
    return value


def _strings(value: Any, where: str) -> list[str]:
    items = _list(value, where)
    for i, item in enumerate(items):
        if not isinstance(item, str):
            raise ValueError(f"{where}[{i}]: expected a string")
    return list(items)


def _require(data: dict[str, Any], key: str, where: str) -> Any:
    if key not in _object(data, where):
        raise ValueError(f"{where}: missing required field {key!r}")
    return data[key]


def _entries(data: dict[str, Any], key: str, where: str) -> list[tuple[str, dict[str, Any]]]:
    """The ``key`` section of ``data`` as ``(location, object)`` pairs."""
    prefix = f"{where}.{key}" if where else key
    section = _list(data.get(key, []), prefix)
    return [(f"{prefix}[{i}]", _object(entry, f"{prefix}[{i}]")) for i, entry in enumerate(section)]


def _version(value: Optional[str], where: str) -> Optional[Version]:
    if value is None:
        return None
    try:
        return Version.parse(str(value))
    except ValueError as e:
        raise ValueError(f"{where}: {e}") from e


def _enum(enum_cls, value: str, where: str):
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(member.value for member in enum_cls)
        raise ValueError(f"{where}: unknown value {value!r} (expected one of: {allowed})") from None


def load_config(data: dict[str, Any]) -> Config:
    data = _object(data, "config")
    config = Config(
        girs_version=data.get("girs_version", ""),
        single_version_file=data.get("single_version_file"),
        gobject_sys_crate_name=data.get("gobject_sys_crate_name", "gobject_sys"),
    )
    min_version = _version(data.get("min_cfg_version"), "config.min_cfg_version")
    if min_version is not None:
        config.min_cfg_version = min_version
    return config


def load_environment(data: dict[str, Any]) -> Environment:
    """Build the environment from the ``config`` and ``namespaces`` sections.

    :raises ValueError: If the namespace registry is empty or malformed.
    """
    namespaces = [
        Namespace(
            _require(ns, "name", where),
            _require(ns, "crate_name", where),
            ns.get("sys_crate_name"),
        )
        for where, ns in _entries(_object(data, "document"), "namespaces", "")
    ]
    if not namespaces:
        raise ValueError("namespaces: at least the main namespace is required")
    return Environment(load_config(data.get("config", {})), namespaces)


def _ancestor(data: dict[str, Any], where: str, env: Environment) -> Ancestor:
    ns_id = data.get("namespace", MAIN_NAMESPACE)
    if not isinstance(ns_id, int) or not 0 <= ns_id < len(env.namespaces):
        raise ValueError(f"{where}.namespace: unknown namespace id {ns_id!r}")
    return Ancestor(
        TypeId(ns_id, _enum(TypeKind, data.get("type", "class"), f"{where}.type")),
        _require(data, "name", where),
        _enum(Status, data.get("status", "generate"), f"{where}.status"),
    )


def _derives(data: dict[str, Any], where: str) -> list[Derive]:
    return [
        Derive(_strings(_require(d, "names", dwhere), f"{dwhere}.names"), d.get("cfg_condition"))
        for dwhere, d in _entries(data, "derives", where)
    ]


def _functions(data: dict[str, Any], where: str) -> list[FunctionInfo]:
    return [
        FunctionInfo(
            _require(f, "name", fwhere),
            _strings(f.get("parameters", []), f"{fwhere}.parameters"),
            bool(f.get("hidden", False)),
            _version(f.get("version"), f"{fwhere}.version"),
            _version(f.get("deprecated_version"), f"{fwhere}.deprecated_version"),
        )
        for fwhere, f in _entries(data, "functions", where)
    ]


def load_declaration(data: dict[str, Any], env: Environment, where: str = "declaration") -> Declaration:
    """Build one declaration from its ``kind``-tagged mapping.

    :raises ValueError: If the kind is unknown or a required field is missing.
    """
    kind = _require(data, "kind", where)
    if kind not in DECLARATION_KINDS:
        raise ValueError(f"{where}.kind: unknown value {kind!r} (expected one of: {', '.join(DECLARATION_KINDS)})")

    name = _require(data, "name", where)
    glib_name = _require(data, "glib_name", where)
    common: dict[str, Any] = {
        "version": _version(data.get("version"), f"{where}.version"),
        "deprecated_version": _version(data.get("deprecated_version"), f"{where}.deprecated_version"),
        "cfg_condition": data.get("cfg_condition"),
        "functions": _functions(data, where),
    }

    if kind in ("object", "interface"):
        return ObjectType(
            name,
            glib_name,
            _require(data, "get_type_fn", where),
            glib_class_name=data.get("glib_class_name"),
            rust_class_name=data.get("rust_class_name"),
            is_interface=kind == "interface",
            parents=[_ancestor(p, pwhere, env) for pwhere, p in _entries(data, "parents", where)],
            ns_id=data.get("namespace", MAIN_NAMESPACE),
            **common,
        )
    if kind == "boxed":
        return BoxedType(
            name,
            glib_name,
            _require(data, "copy_fn", where),
            _require(data, "free_fn", where),
            get_type_fn=data.get("get_type_fn"),
            derives=_derives(data, where),
            **common,
        )
    if kind == "auto_boxed":
        return AutoBoxedType(
            name,
            glib_name,
            _require(data, "get_type_fn", where),
            derives=_derives(data, where),
            **common,
        )
    return SharedType(
        name,
        glib_name,
        _require(data, "ref_fn", where),
        _require(data, "unref_fn", where),
        get_type_fn=data.get("get_type_fn"),
        derives=_derives(data, where),
        **common,
    )


def load_module(data: dict[str, Any], env: Environment) -> Module:
    imports = Imports()
    for where, entry in _entries(data, "imports", ""):
        imports.add(
            _require(entry, "path", where),
            _version(entry.get("version"), f"{where}.version"),
            _strings(entry.get("constraints", []), f"{where}.constraints"),
        )
    section = _list(data.get("declarations", []), "declarations")
    declarations = [load_declaration(d, env, f"declarations[{i}]") for i, d in enumerate(section)]
    return Module(declarations, imports)


def load_document(data: dict[str, Any]) -> tuple[Environment, Module]:
    env = load_environment(data)
    return env, load_module(data, env)


def loads(text: str) -> tuple[Environment, Module]:
    """Decode a JSON descriptor document.

    :raises ValueError: If the text is not valid JSON or the document is
        malformed (:class:`json.JSONDecodeError` is a ``ValueError``).
    """
    data = json.loads(text)
    if not isinstance(data, dict):
        raise ValueError("document: expected a JSON object")
    return load_document(data)
