"""Wrapper declaration emitters.

Each emitter builds a small node tree for one declaration and writes its
lines to the sink ``w``. Output starts with a blank line, then the
declaration's gating attributes, then the ``glib_wrapper!`` block,
indented with one tab per level::

    glib_wrapper! {
        pub struct Widget(Object<gtk_sys::GtkWidget, gtk_sys::GtkWidgetClass>) @extends glib::Object;

        match fn {
            get_type => || gtk_sys::gtk_widget_get_type(),
        }
    }

Emitters never close or flush the sink. Write errors propagate unchanged.

Example
-------
::

    import io

    from autowrapper.declarations import write_declaration

    out = io.StringIO()
    write_declaration(out, env, BoxedType("Rectangle", "GdkRectangle", "gdk_rectangle_copy", "gdk_rectangle_free"))
    print(out.getvalue())
"""

from typing import (
    IO,
    Optional,
)

from autowrapper.ancestors import (
    resolve_ancestors,
)
from autowrapper.annotations import (
    item_attributes,
)
from autowrapper.imports import (
    render_derives,
)
from autowrapper.ir import (
    AutoBoxedType,
    BoxedType,
    Declaration,
    Environment,
    FunctionInfo,
    ObjectType,
    SharedType,
)
from autowrapper.nodes import (
    Binding,
    DefaultImpl,
    Item,
    MatchFn,
    StructDecl,
    Wrapper,
)
from autowrapper.text import (
    write_lines,
)


def _get_type_binding(sys_crate: str, get_type_fn: str) -> Binding:
    return Binding("get_type", f"|| {sys_crate}::{get_type_fn}()")


def _write_item(w: IO[str], env: Environment, decl: Declaration, wrapper: Wrapper) -> None:
    attributes = item_attributes(env, decl.deprecated_version, decl.version, decl.cfg_condition)
    write_lines(w, Item(wrapper, attributes).lines())


def define_object_type(w: IO[str], env: Environment, decl: ObjectType) -> None:
    """Write the wrapper block of an object or interface.

    The underlying type arguments are the C instance struct, then the class
    struct override and the binding class name when present. The parent
    clause is omitted when no ancestor survives filtering.
    """
    sys_crate = env.main_sys_crate_name()

    type_args = [f"{sys_crate}::{decl.glib_name}"]
    if decl.glib_class_name is not None:
        type_args.append(f"{sys_crate}::{decl.glib_class_name}")
    if decl.rust_class_name is not None:
        type_args.append(decl.rust_class_name)

    kind = "Interface" if decl.is_interface else "Object"
    parents = resolve_ancestors(env, decl.ns_id, decl.is_interface, decl.parents)

    wrapper = Wrapper(
        StructDecl(decl.name, kind, type_args, parents),
        MatchFn([_get_type_binding(sys_crate, decl.get_type_fn)]),
    )
    _write_item(w, env, decl, wrapper)


def define_boxed_type(w: IO[str], env: Environment, decl: BoxedType) -> None:
    sys_crate = env.main_sys_crate_name()

    bindings = [
        Binding("copy", f"|ptr| {sys_crate}::{decl.copy_fn}(mut_override(ptr))"),
        Binding("free", f"|ptr| {sys_crate}::{decl.free_fn}(ptr)"),
    ]
    if decl.get_type_fn is not None:
        bindings.append(_get_type_binding(sys_crate, decl.get_type_fn))

    wrapper = Wrapper(
        StructDecl(decl.name, "Boxed", [f"{sys_crate}::{decl.glib_name}"]),
        MatchFn(bindings),
        attributes=render_derives(decl.derives, 1),
    )
    _write_item(w, env, decl, wrapper)


def define_auto_boxed_type(w: IO[str], env: Environment, decl: AutoBoxedType) -> None:
    """Write a boxed type whose copy and free go through ``g_boxed_copy``/``g_boxed_free``.

    The runtime dispatches on the dynamic type, so the type's ``get_type``
    function is passed to both primitives.
    """
    sys_crate = env.main_sys_crate_name()
    gobject_sys = env.config.gobject_sys_crate_name
    get_type = f"{sys_crate}::{decl.get_type_fn}()"

    bindings = [
        Binding(
            "copy",
            f"|ptr| {gobject_sys}::g_boxed_copy({get_type}, ptr as *mut _) as *mut {sys_crate}::{decl.glib_name}",
        ),
        Binding("free", f"|ptr| {gobject_sys}::g_boxed_free({get_type}, ptr as *mut _)"),
        _get_type_binding(sys_crate, decl.get_type_fn),
    ]

    wrapper = Wrapper(
        StructDecl(decl.name, "Boxed", [f"{sys_crate}::{decl.glib_name}"]),
        MatchFn(bindings),
        attributes=render_derives(decl.derives, 1),
    )
    _write_item(w, env, decl, wrapper)


def define_shared_type(w: IO[str], env: Environment, decl: SharedType) -> None:
    sys_crate = env.main_sys_crate_name()

    bindings = [
        Binding("ref", f"|ptr| {sys_crate}::{decl.ref_fn}(ptr)"),
        Binding("unref", f"|ptr| {sys_crate}::{decl.unref_fn}(ptr)"),
    ]
    if decl.get_type_fn is not None:
        bindings.append(_get_type_binding(sys_crate, decl.get_type_fn))

    wrapper = Wrapper(
        StructDecl(decl.name, "Shared", [f"{sys_crate}::{decl.glib_name}"]),
        MatchFn(bindings),
        attributes=render_derives(decl.derives, 1),
    )
    _write_item(w, env, decl, wrapper)


def write_declaration(w: IO[str], env: Environment, decl: Declaration) -> None:
    """Write any declaration, dispatching on its variant.

    :raises TypeError: If ``decl`` is not one of the declaration variants.
    """
    if isinstance(decl, ObjectType):
        define_object_type(w, env, decl)
    elif isinstance(decl, BoxedType):
        define_boxed_type(w, env, decl)
    elif isinstance(decl, AutoBoxedType):
        define_auto_boxed_type(w, env, decl)
    elif isinstance(decl, SharedType):
        define_shared_type(w, env, decl)
    else:
        raise TypeError(f"Unknown declaration: {type(decl).__name__}")


def _find_default_constructor(functions: list[FunctionInfo]) -> Optional[FunctionInfo]:
    for func in functions:
        if not func.hidden and func.name == "new" and not func.parameters:
            return func
    return None


def declare_default_from_new(w: IO[str], env: Environment, name: str, functions: list[FunctionInfo]) -> None:
    """Write ``impl Default`` forwarding to a visible ``new()`` without parameters.

    Only the first qualifying constructor is used. The impl carries that
    constructor's deprecation and version attributes. Nothing is written
    when no constructor qualifies.
    """
    func = _find_default_constructor(functions)
    if func is None:
        return

    attributes = item_attributes(env, func.deprecated_version, func.version)
    write_lines(w, Item(DefaultImpl(name), attributes).lines())
