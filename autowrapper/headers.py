"""Header comments marking generated files."""

from importlib.metadata import (
    version as get_version,
)
from typing import (
    IO,
    Optional,
)

from autowrapper.ir import (
    Config,
)

GENERATOR = "autowrapper"
SOURCE = "gir-files"


def _generator_version(generator_version: Optional[str]) -> str:
    if generator_version is not None:
        return generator_version
    return get_version("autowrapper")


def start_comments(w: IO[str], config: Config, generator_version: Optional[str] = None) -> None:
    """Write the "do not edit" header of a generated file.

    The header is stamped with the generator version and the source revision
    of the introspection data, unless the run keeps those in a separate
    version file (``config.single_version_file``).
    """
    if config.single_version_file is not None:
        start_comments_no_version(w)
        return

    version = _generator_version(generator_version)
    w.write(
        f"// This file was generated by {GENERATOR} ({version})\n"
        f"// from {SOURCE} ({config.girs_version})\n"
        "// DO NOT EDIT\n"
    )


def start_comments_no_version(w: IO[str]) -> None:
    w.write(
        f"// This file was generated by {GENERATOR}\n"
        f"// from {SOURCE}\n"
        "// DO NOT EDIT\n"
    )


def single_version_file(w: IO[str], config: Config, generator_version: Optional[str] = None) -> None:
    """Write the contents of the separate version file."""
    version = _generator_version(generator_version)
    w.write(
        f"Generated by {GENERATOR} ({version})\n"
        f"from {SOURCE} ({config.girs_version})\n"
    )
