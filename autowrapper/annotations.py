"""Conditional-compilation and documentation attributes.

Every attribute comes in two forms: a function returning the attribute line
(or None when nothing is needed), and a ``write_*`` function writing that
line to a sink. Attribute lines start with the indentation for ``indent``
levels, followed by ``//`` when ``commented`` is set. Commented attributes
are used inside items that an outer guard already disables.

Guards always carry the ``feature = "dox"`` escape hatch so that gated items
stay visible when building documentation::

    #[cfg(any(feature = "v3_16", feature = "dox"))]

When several attributes apply to one item they are written in the order
deprecation, version guard, feature guard.
"""

from typing import (
    IO,
    Optional,
)

from autowrapper.ir import (
    Environment,
    Version,
)
from autowrapper.text import (
    indent as tabs,
)

DOX_CFG = 'feature = "dox"'


def _prefix(commented: bool, indent: int) -> str:
    return f"{tabs(indent)}{'//' if commented else ''}"


def _write(w: IO[str], line: Optional[str]) -> None:
    if line is not None:
        w.write(f"{line}\n")


def deprecation_annotation(
    env: Environment,
    version: Optional[Version],
    commented: bool = False,
    indent: int = 0,
) -> Optional[str]:
    """Deprecation marker for an item deprecated in ``version``.

    Versions already required by the minimum supported version give an
    unconditional ``#[deprecated]``; later versions only deprecate when the
    matching feature is enabled.
    """
    if env.is_too_low_version(version):
        return f"{_prefix(commented, indent)}#[deprecated]"
    if version is not None:
        return f"{_prefix(commented, indent)}#[cfg_attr({version.to_cfg()}, deprecated)]"
    return None


def version_guard(
    env: Environment,
    version: Optional[Version],
    commented: bool = False,
    indent: int = 0,
) -> Optional[str]:
    """Guard for an item available since ``version``.

    Only versions strictly above ``config.min_cfg_version`` need a guard.
    """
    if version is None or version <= env.config.min_cfg_version:
        return None
    return f"{_prefix(commented, indent)}#[cfg(any({version.to_cfg()}, {DOX_CFG}))]"


def negated_version_guard(
    version: Optional[Version],
    commented: bool = False,
    indent: int = 0,
) -> Optional[str]:
    """Guard for an item valid only before ``version``."""
    if version is None:
        return None
    return f"{_prefix(commented, indent)}#[cfg(any(not({version.to_cfg()}), {DOX_CFG}))]"


def feature_guard(
    condition: Optional[str],
    commented: bool = False,
    indent: int = 0,
) -> Optional[str]:
    """Guard keyed on a precomputed cfg condition."""
    if condition is None:
        return None
    return f"{_prefix(commented, indent)}#[cfg(any({condition}, {DOX_CFG}))]"


def doc_hidden(flag: bool, comment_prefix: str = "", indent: int = 0) -> Optional[str]:
    if not flag:
        return None
    return f"{tabs(indent)}{comment_prefix}#[doc(hidden)]"


def item_attributes(
    env: Environment,
    deprecated_version: Optional[Version] = None,
    version: Optional[Version] = None,
    cfg_condition: Optional[str] = None,
    commented: bool = False,
    indent: int = 0,
) -> list[str]:
    """All gating attributes of one item, in output order."""
    candidates = [
        deprecation_annotation(env, deprecated_version, commented, indent),
        version_guard(env, version, commented, indent),
        feature_guard(cfg_condition, commented, indent),
    ]
    return [line for line in candidates if line is not None]


def write_deprecation_annotation(
    w: IO[str],
    env: Environment,
    version: Optional[Version],
    commented: bool = False,
    indent: int = 0,
) -> None:
    _write(w, deprecation_annotation(env, version, commented, indent))


def write_version_guard(
    w: IO[str],
    env: Environment,
    version: Optional[Version],
    commented: bool = False,
    indent: int = 0,
) -> None:
    _write(w, version_guard(env, version, commented, indent))


def write_negated_version_guard(
    w: IO[str],
    version: Optional[Version],
    commented: bool = False,
    indent: int = 0,
) -> None:
    _write(w, negated_version_guard(version, commented, indent))


def write_feature_guard(
    w: IO[str],
    condition: Optional[str],
    commented: bool = False,
    indent: int = 0,
) -> None:
    _write(w, feature_guard(condition, commented, indent))


def write_doc_hidden(w: IO[str], flag: bool, comment_prefix: str = "", indent: int = 0) -> None:
    _write(w, doc_hidden(flag, comment_prefix, indent))
