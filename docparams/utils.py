"""
Docparams utilities shared across the package.

Contains functions used by multiple modules to avoid circular imports.
"""

# Standard library -----------------------------------------------------------------------------------------------------
from typing import Any


# Methods --------------------------------------------------------------------------------------------------------------


def class_name(obj: Any) -> str:
    """
    Get the class name of an object or a class.

    Returns class name whether given an instance or the class itself, so both
    `class_name(10)` and `class_name(int)` return 'int'.

    Parameters:
        obj (Any): An object or a class.

    Returns:
        str: The class name.

    Examples:
        >>> class_name(None)
        'NoneType'

        >>> class Point: ...
        >>> class_name(Point())
        'Point'
    """
    cls = obj if isinstance(obj, type) else obj.__class__
    return cls.__name__


def callable_name(func: Any) -> str | None:
    """Return the qualified name of a function or method, None if it has none."""
    return getattr(func, "__qualname__", None) or getattr(func, "__name__", None)
