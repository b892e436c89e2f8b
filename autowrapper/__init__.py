import io
import sys
from importlib.metadata import (
    version as get_version,
)
from typing import (
    IO,
)

import click

from .headers import (
    single_version_file as write_single_version_file,
)
from .ir import (
    Environment,
    Module,
    Version,
)
from .loader import (
    loads,
)
from .writer import (
    render_module,
)

__version__ = get_version("autowrapper")


def _debug_print(msg: str) -> None:
    """Print debug message to stderr."""
    print(f"[autowrapper] {msg}", file=sys.stderr)


def load(
    document: str,
    min_version: str | None = None,
    single_version_file: str | None = None,
) -> tuple[Environment, Module]:
    """Load a JSON descriptor document, applying option overrides.

    Args:
        document: JSON text produced by the upstream analysis phase.
        min_version: Overrides ``config.min_cfg_version`` (e.g., ``"3.16"``).
        single_version_file: Overrides ``config.single_version_file``.

    Raises:
        ValueError: If the document or an override is malformed.
    """
    env, module = loads(document)
    if min_version is not None:
        env.config.min_cfg_version = Version.parse(min_version)
    if single_version_file is not None:
        env.config.single_version_file = single_version_file
    return env, module


def generate(
    document: str,
    min_version: str | None = None,
    single_version_file: str | None = None,
    debug: bool = False,
) -> str:
    """Generate wrapper declarations from a JSON descriptor document.

    Args:
        document: JSON text produced by the upstream analysis phase.
        min_version: Overrides ``config.min_cfg_version`` (e.g., ``"3.16"``).
        single_version_file: Overrides ``config.single_version_file``. When
            set, header comments carry no version stamp.
        debug: Print debug info to stderr.

    Returns:
        Generated source text.

    Raises:
        ValueError: If the document is malformed.
    """
    env, module = load(document, min_version, single_version_file)

    if debug:
        _debug_print(f"Minimum version: {env.config.min_cfg_version}")
        _debug_print(f"Namespaces: {', '.join(ns.name for ns in env.namespaces)}")
        _debug_print(f"Found {len(module.imports)} imports, {len(module.declarations)} declarations")
        for decl in module.declarations:
            _debug_print(f"  {type(decl).__name__}: {decl.name}")

    return render_module(env, module, __version__)


def generate_version_file(document: str) -> str:
    """Contents of the separate version file for a descriptor document."""
    env, _ = loads(document)
    out = io.StringIO()
    write_single_version_file(out, env.config, __version__)
    return out.getvalue()


CONTEXT_SETTINGS: dict[str, list[str]] = dict(help_option_names=["-h", "--help"])


@click.command(
    context_settings=CONTEXT_SETTINGS,
    help="""Generate glib_wrapper! declarations from resolved type descriptors.

\b
INFILE is a JSON descriptor document; output goes to OUTFILE or stdout.
""",
)
@click.option("--version", "-v", is_flag=True, help="Print version and exit.")
@click.option(
    "--min-version",
    metavar="<version>",
    help="Minimum supported library version (overrides the document).",
)
@click.option(
    "--single-version-file",
    type=click.Path(dir_okay=False, writable=True),
    metavar="<path>",
    help="Write version stamps to this file instead of each generated header.",
)
@click.option(
    "--debug/--no-debug",
    default=False,
    help="Print debug info to stderr.",
)
@click.argument(
    "infile",
    type=click.File("r"),
    required=False,
)
@click.argument(
    "outfile",
    type=click.File("w"),
    default="-",
)
def cli(
    version: bool,
    min_version: str | None,
    single_version_file: str | None,
    debug: bool,
    infile: IO[str] | None,
    outfile: IO[str],
) -> None:
    if version:
        print(__version__)
        return

    if infile is None:
        click.echo("Error: Missing argument 'INFILE'.", err=True)
        raise SystemExit(2)

    document = infile.read()
    try:
        env, _ = load(document, min_version, single_version_file)
        output = generate(
            document,
            min_version=min_version,
            single_version_file=single_version_file,
            debug=debug,
        )
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1) from e

    version_file = env.config.single_version_file
    if version_file:
        if debug:
            _debug_print(f"Writing version file: {version_file}")
        with open(version_file, "w", encoding="utf-8") as f:
            write_single_version_file(f, env.config, __version__)

    outfile.write(output)
