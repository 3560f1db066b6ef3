"""
Docstring parameter extraction.

Finds parameter tags that declare a scalar type, such as::

    @param int $age              (phpdoc, the sigil is optional)
    :param int age:              (sphinx)
    age (int): Age in years.     (google, under an Args: section)

and correlates them with the formal parameters of a callable and the values
actually supplied for them.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import functools
import re

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Any, Literal

# Local ----------------------------------------------------------------------------------------------------------------
from .scalars import SCALAR_ALIASES, canonicalize, type_of

# Public API -----------------------------------------------------------------------------------------------------------
__all__ = ["DeclaredParam", "DEFAULT_STYLES", "ParamStyle", "extract", "normalize_styles", "param_pattern"]

# Constants ------------------------------------------------------------------------------------------------------------

ParamStyle = Literal["phpdoc", "sphinx", "google"]

DEFAULT_STYLES: tuple[ParamStyle, ...] = ("phpdoc", "sphinx", "google")

# {types} and {names} are filled with alternations of escaped tokens
_STYLE_TEMPLATES: dict[str, str] = {
    "phpdoc": r"@param\s+(?P<phpdoc_type>{types})\s+\$?\b(?P<phpdoc_name>{names})\b",
    "sphinx": r":param\s+(?P<sphinx_type>{types})\s+\b(?P<sphinx_name>{names})\s*:",
    "google": (
        r"^[ \t]*\b(?P<google_name>{names})[ \t]*"
        r"\([ \t]*(?P<google_type>{types})[ \t]*(?:,[ \t]*optional[ \t]*)?\)[ \t]*:"
    ),
}

_ARGS_HEADER = re.compile(r"^([ \t]*)(?:Args|Arguments):[ \t]*$", re.MULTILINE)


# Classes --------------------------------------------------------------------------------------------------------------


@dataclass(frozen=True)
class DeclaredParam:
    """
    A documented scalar parameter paired with the value supplied for it.

    Attributes:
        name: Parameter name.
        expected_type: Canonical type declared in the docstring.
        actual_type: Canonical type of the supplied value.
        position: Index of the parameter in the formal parameter list.
    """

    name: str
    expected_type: str
    actual_type: str
    position: int


# Methods --------------------------------------------------------------------------------------------------------------


def param_pattern(param_names: Iterable[str], *, styles: Iterable[ParamStyle] = DEFAULT_STYLES) -> re.Pattern:
    """
    Build a regex matching scalar-typed parameter tags for the given names.

    Type tokens are the keys of SCALAR_ALIASES. Names match as whole words only, so
    parameter ``id`` is never found inside ``valid``. All requested styles share one
    pattern, which keeps matches in document order when styles are mixed.

    Args:
        param_names: Formal parameter names to look for.
        styles: Tag styles to recognize.

    Returns:
        Compiled pattern with ``<style>_type`` and ``<style>_name`` groups per style.

    Raises:
        ValueError: If ``param_names`` is empty or ``styles`` is empty or holds unknown names.
    """
    names = tuple(param_names)
    if not names:
        raise ValueError("param_pattern: at least one parameter name required")
    return _compile_pattern(names, normalize_styles(styles))


def extract(
    doc: str | None,
    param_names: Sequence[str],
    args: Sequence[Any],
    *,
    styles: Iterable[ParamStyle] = DEFAULT_STYLES,
) -> list[DeclaredParam]:
    """
    Extract documented scalar parameters that have a supplied value.

    Tags are returned in the order they appear in ``doc``, not in signature order.
    Google style entries count only inside an ``Args:`` or ``Arguments:`` section.
    A tag is dropped, without error, when its name is not a formal parameter or when
    no value is present at that parameter's position (beyond the end of ``args`` or
    None). A parameter documented twice yields two records.

    Args:
        doc: Raw docstring, may be None or empty.
        param_names: Ordered formal parameter names.
        args: Actual values, positionally aligned with ``param_names``.
        styles: Tag styles to recognize.

    Returns:
        List of DeclaredParam, possibly empty.

    Examples:
        >>> extract("@param int $age", ["age"], ["42"])
        [DeclaredParam(name='age', expected_type='integer', actual_type='string', position=0)]
    """
    styles = normalize_styles(styles)
    if not doc or not param_names:
        return []

    names = tuple(param_names)
    pattern = _compile_pattern(names, styles)

    args_sections = _args_sections(doc) if "google" in styles else []

    declared = []
    for match in pattern.finditer(doc):
        style, token, name = _match_groups(match, styles)
        if style == "google" and not any(start <= match.start() < end for start, end in args_sections):
            continue

        # First occurrence wins, like a positional lookup
        index = names.index(name)
        if index >= len(args) or args[index] is None:
            continue

        declared.append(
            DeclaredParam(
                name=name,
                expected_type=canonicalize(token),
                actual_type=type_of(args[index]),
                position=index,
            )
        )
    return declared


def normalize_styles(styles: Iterable[str]) -> tuple[str, ...]:
    """Deduplicate ``styles`` keeping order; raise ValueError if empty or unknown."""
    if isinstance(styles, str):
        styles = (styles,)
    styles = tuple(dict.fromkeys(styles))
    if not styles:
        raise ValueError("at least one docstring style required")
    invalid = set(styles) - set(_STYLE_TEMPLATES)
    if invalid:
        raise ValueError(
            f"unknown docstring style(s): {sorted(invalid)}, expected any of {list(_STYLE_TEMPLATES)}"
        )
    return styles


# Private methods ------------------------------------------------------------------------------------------------------


@functools.lru_cache(maxsize=256)
def _compile_pattern(names: tuple[str, ...], styles: tuple[str, ...]) -> re.Pattern:
    # Longest first so that 'integer' is tried before 'int'
    types = "|".join(re.escape(t) for t in sorted(SCALAR_ALIASES, key=len, reverse=True))
    alternatives = "|".join(re.escape(n) for n in sorted(set(names), key=len, reverse=True))

    parts = [
        "(?:" + _STYLE_TEMPLATES[style].format(types=types, names=alternatives) + ")"
        for style in styles
    ]
    return re.compile("|".join(parts), re.MULTILINE)


def _match_groups(match: re.Match, styles: tuple[str, ...]) -> tuple[str, str, str]:
    """Return (style, type token, name) from whichever style alternative matched."""
    for style in styles:
        name = match.group(f"{style}_name")
        if name is not None:
            return style, match.group(f"{style}_type"), name
    raise AssertionError(f"no style group matched in {match.group(0)!r}")


def _args_sections(doc: str) -> list[tuple[int, int]]:
    """
    Return (start, end) offsets of the bodies of ``Args:``/``Arguments:`` sections.

    A body runs from the line after the header up to the first non-blank line indented
    no deeper than the header, such as a following ``Returns:``.
    """
    sections = []
    for header in _ARGS_HEADER.finditer(doc):
        newline = doc.find("\n", header.end())
        if newline == -1:
            continue
        indent = len(header.group(1).expandtabs())
        start = pos = newline + 1
        end = len(doc)
        for line in doc[start:].splitlines(keepends=True):
            body = line.lstrip(" \t")
            if body.strip() and len(line[: len(line) - len(body)].expandtabs()) <= indent:
                end = pos
                break
            pos += len(line)
        sections.append((start, end))
    return sections
