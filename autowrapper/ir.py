"""Intermediate Representation (IR) for wrapper declarations.

This module defines the resolved descriptors that the upstream analysis
phase hands to autowrapper. The emitters consume this IR to generate
``glib_wrapper!`` declaration blocks and their surrounding attributes.

Design Principles
-----------------
* **Resolved input**: Every name, status and kind is already decided
  upstream. Nothing here performs lookups.
* **Explicit absence**: Optional overrides are ``None`` when absent, never
  empty strings, so "absent" and "empty" stay distinguishable.
* **Closed kinds**: Declaration variants and ancestor kinds are closed sets
  dispatched exhaustively by the emitters.

Declaration Types
-----------------
* :class:`ObjectType` - GObject class or interface
* :class:`BoxedType` - Boxed value with explicit copy/free functions
* :class:`AutoBoxedType` - Boxed value copied/freed through ``g_boxed_*``
* :class:`SharedType` - Reference-counted value with ref/unref functions

Example
-------
Describe a widget and write it out::

    from autowrapper.ir import Ancestor, Environment, Namespace, ObjectType, TypeId, TypeKind

    env = Environment(namespaces=[Namespace("Gtk", "gtk"), Namespace("GObject", "glib")])
    widget = ObjectType(
        "Widget",
        "GtkWidget",
        get_type_fn="gtk_widget_get_type",
        parents=[Ancestor(TypeId(1, TypeKind.CLASS), "Object")],
    )
"""

from __future__ import (
    annotations,
)

import enum
from dataclasses import (
    dataclass,
    field,
)
from typing import (
    Optional,
    Union,
)

# Namespace id of the library being generated
MAIN_NAMESPACE = 0


# =============================================================================
# Versions
# =============================================================================


@dataclass(frozen=True, order=True)
class Version:
    """Library version used for conditional compilation.

    Versions compare component-wise, so ``Version(3, 16) < Version(3, 16, 1)``.

    :param major: Major version component.
    :param minor: Minor version component.
    :param patch: Patch version component.

    Examples
    --------
    ::

        v = Version.parse("3.16")
        v.to_feature()  # "v3_16"
        v.to_cfg()  # 'feature = "v3_16"'
    """

    major: int
    minor: int = 0
    patch: int = 0

    @classmethod
    def parse(cls, text: str) -> Version:
        """Parse ``"X"``, ``"X.Y"`` or ``"X.Y.Z"``.

        :raises ValueError: If the text is not a dotted version of at most
            three numeric components.
        """
        parts = text.strip().split(".")
        if not parts or len(parts) > 3 or not all(p.isdigit() for p in parts):
            raise ValueError(f"Invalid version: {text!r}")
        return cls(*(int(p) for p in parts))

    def to_feature(self) -> str:
        if self.patch == 0:
            return f"v{self.major}_{self.minor}"
        return f"v{self.major}_{self.minor}_{self.patch}"

    def to_cfg(self) -> str:
        return f'feature = "{self.to_feature()}"'

    def __str__(self) -> str:
        if self.patch == 0:
            return f"{self.major}.{self.minor}"
        return f"{self.major}.{self.minor}.{self.patch}"


# =============================================================================
# Environment
# =============================================================================


@dataclass
class Namespace:
    """One entry of the namespace registry.

    :param name: Introspection namespace name (e.g., ``"Gtk"``).
    :param crate_name: Name of the crate holding the high-level bindings.
    :param sys_crate_name: Name of the crate holding the raw FFI bindings.
        Derived from ``crate_name`` when not given (``gtk`` -> ``gtk_sys``).
    """

    name: str
    crate_name: str
    sys_crate_name: Optional[str] = None

    def __post_init__(self) -> None:
        if self.sys_crate_name is None:
            self.sys_crate_name = f"{self.crate_name.replace('-', '_')}_sys"


@dataclass
class Config:
    """Generation settings shared by every emitter in a run.

    :param min_cfg_version: Minimum supported library version. Items
        introduced at or below it need no version guard.
    :param girs_version: Source revision of the introspection data, stamped
        into generated file headers.
    :param single_version_file: Path of the separate version file. When set,
        generated headers carry no version stamp.
    :param gobject_sys_crate_name: Crate providing ``g_boxed_copy`` and
        ``g_boxed_free`` for auto-boxed types.
    """

    min_cfg_version: Version = field(default_factory=lambda: Version(0, 0))
    girs_version: str = ""
    single_version_file: Optional[str] = None
    gobject_sys_crate_name: str = "gobject_sys"


@dataclass
class Environment:
    """Read-only context threaded into every emission call.

    :param config: Generation settings.
    :param namespaces: Namespace registry, indexed by namespace id. Entry
        :data:`MAIN_NAMESPACE` is the library being generated.
    """

    config: Config = field(default_factory=Config)
    namespaces: list[Namespace] = field(default_factory=list)

    def is_too_low_version(self, version: Optional[Version]) -> bool:
        """True if ``version`` is present and already required by the minimum."""
        if version is None:
            return False
        return version <= self.config.min_cfg_version

    def main_sys_crate_name(self) -> str:
        return self.namespaces[MAIN_NAMESPACE].sys_crate_name or ""


# =============================================================================
# Ancestors
# =============================================================================


class TypeKind(enum.Enum):
    """Underlying kind of an ancestor type."""

    CLASS = "class"
    INTERFACE = "interface"


class Status(enum.Enum):
    """Generation status assigned to a type by upstream policy.

    Only :attr:`IGNORE` makes a type unavailable; the others still allow it
    to be named in parent clauses.
    """

    GENERATE = "generate"
    MANUAL = "manual"
    COMMENT = "comment"
    IGNORE = "ignore"

    @property
    def ignored(self) -> bool:
        return self is Status.IGNORE


@dataclass(frozen=True)
class TypeId:
    """Identity of a resolved type: its namespace and underlying kind."""

    ns_id: int
    kind: TypeKind


@dataclass
class Ancestor:
    """Parent class or implemented interface of a declared type.

    :param type_id: Identity of the ancestor type.
    :param name: Display name of the ancestor (unqualified).
    :param status: Availability of the ancestor.
    """

    type_id: TypeId
    name: str
    status: Status = Status.GENERATE

    def __str__(self) -> str:
        return self.name


# =============================================================================
# Attributes and imports
# =============================================================================


@dataclass
class Derive:
    """One ``#[derive(...)]`` line, optionally gated by a cfg condition.

    :param names: Derive names in output order.
    :param cfg_condition: Precomputed cfg condition text, or None for an
        unconditional derive.
    """

    names: list[str]
    cfg_condition: Optional[str] = None


@dataclass
class ImportEntry:
    """A single ``use`` statement with its gating.

    :param path: Module path to import (e.g., ``"glib::translate::*"``).
    :param version: Version the import needs, or None.
    :param constraints: Feature names that must be enabled for the import.
    """

    path: str
    version: Optional[Version] = None
    constraints: list[str] = field(default_factory=list)


class Imports:
    """Insertion-ordered collection of :class:`ImportEntry`.

    Adding a path that is already present keeps its original position, keeps
    the lower of the two versions and merges the feature constraints.

    Example
    -------
    ::

        imports = Imports()
        imports.add("glib::translate::*")
        imports.add("std::fmt")
        imports.add("gio", version=Version(3, 16))
        [entry.path for entry in imports]  # insertion order
    """

    def __init__(self, entries: Optional[list[ImportEntry]] = None) -> None:
        self._entries: dict[str, ImportEntry] = {}
        for entry in entries or []:
            self.add(entry.path, entry.version, entry.constraints)

    def add(
        self,
        path: str,
        version: Optional[Version] = None,
        constraints: Optional[list[str]] = None,
    ) -> None:
        existing = self._entries.get(path)
        if existing is None:
            self._entries[path] = ImportEntry(path, version, list(constraints or []))
            return

        if existing.version is not None and (version is None or version < existing.version):
            existing.version = version
        for constraint in constraints or []:
            if constraint not in existing.constraints:
                existing.constraints.append(constraint)

    def __iter__(self):
        return iter(self._entries.values())

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, path: object) -> bool:
        return path in self._entries


# =============================================================================
# Functions
# =============================================================================


@dataclass
class FunctionInfo:
    """Associated function of a declared type, as analysed upstream.

    :param name: Host-binding name of the function (e.g., ``"new"``).
    :param parameters: Host-binding parameter names, excluding ``self``.
    :param hidden: True if the function is not exposed.
    :param version: Version introducing the function.
    :param deprecated_version: Version deprecating the function.
    """

    name: str
    parameters: list[str] = field(default_factory=list)
    hidden: bool = False
    version: Optional[Version] = None
    deprecated_version: Optional[Version] = None


# =============================================================================
# Declarations
# =============================================================================


@dataclass
class ObjectType:
    """GObject class or interface.

    :param name: Local type name (e.g., ``"Widget"``).
    :param glib_name: Underlying C type name (e.g., ``"GtkWidget"``).
    :param glib_class_name: Override for the C class struct name
        (e.g., ``"GtkWidgetClass"``).
    :param rust_class_name: Override for the class name used by the
        binding layer (e.g., ``"WidgetClass"``).
    :param get_type_fn: C function returning the dynamic type.
    :param is_interface: True for interfaces.
    :param parents: Ancestors in inheritance order.
    :param ns_id: Namespace the type belongs to.

    Examples
    --------
    ::

        widget = ObjectType(
            "Widget",
            "GtkWidget",
            get_type_fn="gtk_widget_get_type",
            glib_class_name="GtkWidgetClass",
        )
    """

    name: str
    glib_name: str
    get_type_fn: str
    glib_class_name: Optional[str] = None
    rust_class_name: Optional[str] = None
    is_interface: bool = False
    parents: list[Ancestor] = field(default_factory=list)
    ns_id: int = MAIN_NAMESPACE
    version: Optional[Version] = None
    deprecated_version: Optional[Version] = None
    cfg_condition: Optional[str] = None
    functions: list[FunctionInfo] = field(default_factory=list)

    def __str__(self) -> str:
        kind = "interface" if self.is_interface else "object"
        return f"{kind} {self.name}"


@dataclass
class BoxedType:
    """Boxed value with type-specific copy and free functions."""

    name: str
    glib_name: str
    copy_fn: str
    free_fn: str
    get_type_fn: Optional[str] = None
    derives: list[Derive] = field(default_factory=list)
    version: Optional[Version] = None
    deprecated_version: Optional[Version] = None
    cfg_condition: Optional[str] = None
    functions: list[FunctionInfo] = field(default_factory=list)

    def __str__(self) -> str:
        return f"boxed {self.name}"


@dataclass
class AutoBoxedType:
    """Boxed value managed generically through ``g_boxed_copy``/``g_boxed_free``."""

    name: str
    glib_name: str
    get_type_fn: str
    derives: list[Derive] = field(default_factory=list)
    version: Optional[Version] = None
    deprecated_version: Optional[Version] = None
    cfg_condition: Optional[str] = None
    functions: list[FunctionInfo] = field(default_factory=list)

    def __str__(self) -> str:
        return f"boxed {self.name}"


@dataclass
class SharedType:
    """Reference-counted value with ref and unref functions."""

    name: str
    glib_name: str
    ref_fn: str
    unref_fn: str
    get_type_fn: Optional[str] = None
    derives: list[Derive] = field(default_factory=list)
    version: Optional[Version] = None
    deprecated_version: Optional[Version] = None
    cfg_condition: Optional[str] = None
    functions: list[FunctionInfo] = field(default_factory=list)

    def __str__(self) -> str:
        return f"shared {self.name}"


# Type alias for any declaration
Declaration = Union[ObjectType, BoxedType, AutoBoxedType, SharedType]


# =============================================================================
# Module Container
# =============================================================================


@dataclass
class Module:
    """Everything written to one generated file.

    :param declarations: Declarations in output order.
    :param imports: ``use`` statements in output order.
    """

    declarations: list[Declaration] = field(default_factory=list)
    imports: Imports = field(default_factory=Imports)

    def __str__(self) -> str:
        return f"Module({len(self.declarations)} declarations)"
