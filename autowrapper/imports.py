"""``use`` statements and ``#[derive]`` lines."""

from typing import (
    IO,
)

from autowrapper.annotations import (
    version_guard,
)
from autowrapper.ir import (
    Derive,
    Environment,
    Imports,
)
from autowrapper.nodes import (
    Item,
    Use,
)
from autowrapper.text import (
    indent as tabs,
    write_lines,
)


def _constraint_guard(constraints: list[str]) -> list[str]:
    if len(constraints) == 1:
        return [f'#[cfg(feature = "{constraints[0]}")]']
    if constraints:
        features = ", ".join(f'feature = "{c}"' for c in constraints)
        return [f"#[cfg(any({features}))]"]
    return []


def render_imports(env: Environment, imports: Imports) -> list[str]:
    """Render ``use`` statements in insertion order.

    Each statement is preceded by its feature guard (one feature, or
    ``any(...)`` of several) and then by its version guard.

    Example
    -------
    ::

        imports = Imports()
        imports.add("gio", constraints=["futures"])
        render_imports(env, imports)
        # ['#[cfg(feature = "futures")]', 'use gio;']
    """
    lines: list[str] = []
    for entry in imports:
        attributes = _constraint_guard(entry.constraints)
        guard = version_guard(env, entry.version)
        if guard is not None:
            attributes.append(guard)
        lines.extend(Item(Use(entry.path), attributes, separated=False).lines())
    return lines


def write_imports(w: IO[str], env: Environment, imports: Imports) -> None:
    """Write a blank line followed by the rendered imports."""
    w.write("\n")
    write_lines(w, render_imports(env, imports))


def render_derives(derives: list[Derive], indent: int = 0) -> list[str]:
    """Render one derive line per :class:`~autowrapper.ir.Derive`.

    ``render_derives([Derive(["Debug", "Clone"])], 1)`` gives
    ``["\\t#[derive(Debug, Clone)]"]``.
    """
    lines = []
    for derive in derives:
        names = ", ".join(derive.names)
        if derive.cfg_condition is not None:
            attribute = f"#[cfg_attr({derive.cfg_condition}, derive({names}))]"
        else:
            attribute = f"#[derive({names})]"
        lines.append(f"{tabs(indent)}{attribute}")
    return lines


def write_derives(w: IO[str], derives: list[Derive], indent: int = 0) -> None:
    write_lines(w, render_derives(derives, indent))
