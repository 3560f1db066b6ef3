"""
Scalar type aliases and runtime type tagging.

Docstrings name scalar types with several spellings (``int`` and ``integer``,
``float`` and ``double``, ``bool`` and ``boolean``). This module folds them into
one canonical name per type and tags runtime values with the same vocabulary.
"""

# Standard library -----------------------------------------------------------------------------------------------------
from typing import Any

# Third-party ----------------------------------------------------------------------------------------------------------
from frozendict import frozendict

# Local ----------------------------------------------------------------------------------------------------------------
from .utils import class_name

# Public API -----------------------------------------------------------------------------------------------------------
__all__ = ["SCALAR_ALIASES", "CANONICAL_TYPES", "canonicalize", "type_of"]

# Constants ------------------------------------------------------------------------------------------------------------

SCALAR_ALIASES: frozendict = frozendict(
    {
        "string": "string",
        "double": "double",
        "float": "double",
        "integer": "integer",
        "int": "integer",
        "boolean": "boolean",
        "bool": "boolean",
    }
)

CANONICAL_TYPES = frozenset(SCALAR_ALIASES.values())

# Checked in order, bool must precede int
_RUNTIME_TYPES = (
    (bool, "boolean"),
    (int, "integer"),
    (float, "double"),
    (str, "string"),
)


# Methods --------------------------------------------------------------------------------------------------------------


def canonicalize(token: str) -> str:
    """
    Translate a type alias to its canonical name.

    Unknown tokens pass through unchanged.

    Examples:
        >>> canonicalize("int")
        'integer'
        >>> canonicalize("float")
        'double'
        >>> canonicalize("list")
        'list'
    """
    return SCALAR_ALIASES.get(token, token)


def type_of(value: Any) -> str:
    """
    Return the canonical scalar type name of a runtime value.

    Non-scalar values are named by their class, which never collides with a
    canonical scalar name.

    Examples:
        >>> type_of(True)
        'boolean'
        >>> type_of(3.14)
        'double'
        >>> type_of([1, 2])
        'list'
    """
    for py_type, name in _RUNTIME_TYPES:
        if isinstance(value, py_type):
            return name
    return class_name(value)
