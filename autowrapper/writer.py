"""IR to generated source writer.

Composes one generated file from a :class:`~autowrapper.ir.Module`: the
header comments, the ``use`` statements, then every declaration followed by
its ``impl Default`` shim when the type has a suitable constructor.

Example
-------
::

    from autowrapper.writer import render_module

    with open("src/auto/widget.rs", "w") as f:
        f.write(render_module(env, module))
"""

import io
from typing import (
    IO,
    Optional,
)

from autowrapper.declarations import (
    declare_default_from_new,
    write_declaration,
)
from autowrapper.headers import (
    start_comments,
)
from autowrapper.imports import (
    write_imports,
)
from autowrapper.ir import (
    Environment,
    Module,
)


def write_module(
    w: IO[str],
    env: Environment,
    module: Module,
    generator_version: Optional[str] = None,
) -> None:
    """Write a complete generated file to ``w``.

    The import section is skipped when the module has no imports.
    """
    start_comments(w, env.config, generator_version)
    if module.imports:
        write_imports(w, env, module.imports)

    for decl in module.declarations:
        write_declaration(w, env, decl)
        declare_default_from_new(w, env, decl.name, decl.functions)


def render_module(env: Environment, module: Module, generator_version: Optional[str] = None) -> str:
    """Convenience wrapper around :func:`write_module` returning a string."""
    out = io.StringIO()
    write_module(out, env, module, generator_version)
    return out.getvalue()
