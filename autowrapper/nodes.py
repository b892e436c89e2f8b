from abc import (
    ABCMeta,
    abstractmethod,
)
from typing import (
    List,
    Optional,
    Union,
)

from .text import (
    indent,
)


class WrapperNode(metaclass=ABCMeta):
    def __str__(self):
        return "\n".join(self.lines())

    @abstractmethod
    def lines(self) -> List[str]:
        pass


class Prerequisites:
    """Parent clause of an interface: `` @requires A, B``."""

    __slots__ = ("names",)

    names: List[str]

    def __init__(self, names: List[str]):
        self.names = names

    def __str__(self):
        return f" @requires {', '.join(self.names)}"


class Inheritance:
    """Parent clause of a concrete type: `` @extends A, @implements B, C``."""

    __slots__ = ("extends", "implements")

    extends: List[str]
    implements: List[str]

    def __init__(self, extends: List[str], implements: List[str]):
        self.extends = extends
        self.implements = implements

    def __str__(self):
        rv = ""
        if self.extends:
            rv += f" @extends {', '.join(self.extends)}"
        if self.implements:
            if self.extends:
                rv += ","
            rv += f" @implements {', '.join(self.implements)}"
        return rv


ParentClause = Union[Prerequisites, Inheritance]


class StructDecl(WrapperNode):
    __slots__ = ("name", "kind", "type_args", "parents")

    name: str
    kind: str
    type_args: List[str]
    parents: Optional[ParentClause]

    def __init__(self, name: str, kind: str, type_args: List[str], parents: Optional[ParentClause] = None):
        self.name = name
        self.kind = kind
        self.type_args = type_args
        self.parents = parents

    def lines(self) -> List[str]:
        parents = str(self.parents) if self.parents is not None else ""
        return [f"pub struct {self.name}({self.kind}<{', '.join(self.type_args)}>){parents};"]


class Binding(WrapperNode):
    __slots__ = ("key", "closure")

    key: str
    closure: str

    def __init__(self, key: str, closure: str):
        self.key = key
        self.closure = closure

    def lines(self) -> List[str]:
        return [f"{self.key} => {self.closure},"]


class MatchFn(WrapperNode):
    __slots__ = ("bindings",)

    bindings: List[Binding]

    def __init__(self, bindings: List[Binding]):
        self.bindings = bindings

    def lines(self) -> List[str]:
        rv = ["match fn {"]
        for binding in self.bindings:
            for line in binding.lines():
                rv.append(indent(1) + line)
        rv.append("}")
        return rv


class Wrapper(WrapperNode):
    """A ``glib_wrapper!`` block.

    ``attributes`` are emitted verbatim between the opening line and the
    struct declaration, so they must already carry their indentation.
    """

    __slots__ = ("struct", "match_fn", "attributes", "macro")

    struct: StructDecl
    match_fn: MatchFn
    attributes: List[str]
    macro: str

    def __init__(
        self,
        struct: StructDecl,
        match_fn: MatchFn,
        attributes: Optional[List[str]] = None,
        macro: str = "glib_wrapper",
    ):
        self.struct = struct
        self.match_fn = match_fn
        self.attributes = attributes or []
        self.macro = macro

    def lines(self) -> List[str]:
        rv = [f"{self.macro}! {{"]
        rv.extend(self.attributes)
        for line in self.struct.lines():
            rv.append(indent(1) + line)
        rv.append("")
        for line in self.match_fn.lines():
            rv.append(indent(1) + line)
        rv.append("}")
        return rv


class DefaultImpl(WrapperNode):
    __slots__ = ("name",)

    name: str

    def __init__(self, name: str):
        self.name = name

    def lines(self) -> List[str]:
        return [
            f"impl Default for {self.name} {{",
            "    fn default() -> Self {",
            "        Self::new()",
            "    }",
            "}",
        ]


class Use(WrapperNode):
    __slots__ = ("path",)

    path: str

    def __init__(self, path: str):
        self.path = path

    def lines(self) -> List[str]:
        return [f"use {self.path};"]


class Item(WrapperNode):
    """A node preceded by its blank separator line and attribute lines."""

    __slots__ = ("node", "attributes", "separated")

    node: WrapperNode
    attributes: List[str]
    separated: bool

    def __init__(self, node: WrapperNode, attributes: Optional[List[str]] = None, separated: bool = True):
        self.node = node
        self.attributes = attributes or []
        self.separated = separated

    def lines(self) -> List[str]:
        rv = [""] if self.separated else []
        rv.extend(self.attributes)
        rv.extend(self.node.lines())
        return rv
