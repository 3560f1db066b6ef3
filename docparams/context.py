"""
Call context discovery and method metadata lookup.

These are the introspection seams of the validator: ``caller_context()`` tells which
function is running and with what arguments, ``method_info()`` reads its docstring and
formal parameters. Both return None rather than raising when the information is not
available.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import inspect
import sys

from dataclasses import dataclass, field
from types import FrameType, ModuleType
from typing import Any, Callable

# Public API -----------------------------------------------------------------------------------------------------------
__all__ = ["CallContext", "MethodInfo", "caller_context", "method_info", "resolve_method"]

# Constants ------------------------------------------------------------------------------------------------------------

# Implicit receivers, never documented as parameters
_RECEIVERS = ("self", "cls")

_COLLECTORS = (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)


# Classes --------------------------------------------------------------------------------------------------------------


@dataclass(frozen=True)
class CallContext:
    """
    A running call: who is called and with what.

    Attributes:
        owner: Class or module that defines the callable, None if unknown.
        method: Name of the callable, None if unknown.
        args: Actual values in formal parameter order, receivers excluded.
        func: The resolved callable, if already known.
    """

    owner: type | ModuleType | None
    method: str | None
    args: tuple[Any, ...] = ()
    func: Callable[..., Any] | None = field(default=None, compare=False)


@dataclass(frozen=True)
class MethodInfo:
    """
    Docstring and formal parameter names of a callable.

    Attributes:
        doc: Cleaned docstring of the callable itself, or None.
        params: Formal parameter names in order, receivers and *args/**kwargs excluded.
    """

    doc: str | None
    params: tuple[str, ...]


# Methods --------------------------------------------------------------------------------------------------------------


def caller_context(depth: int = 1) -> CallContext | None:
    """
    Describe the function that called the caller of this function.

    With the default ``depth=1``, a validator calling ``caller_context()`` gets the
    context of the function that called the validator.

    Args:
        depth: Number of frames to skip above the immediate caller.

    Returns:
        CallContext, or None when there is no enclosing function (module level).
    """
    frame = inspect.currentframe()
    target = frame.f_back if frame is not None else None
    try:
        for _ in range(depth):
            if target is None:
                return None
            target = target.f_back

        # <module>, <lambda>, <listcomp> and the like have no docstring to read
        if target is None or target.f_code.co_name.startswith("<"):
            return None

        func_name = target.f_code.co_name
        local_vars = target.f_locals.copy()
        func = _func_from_frame(target, func_name, local_vars)
        if func is None:
            return CallContext(owner=None, method=func_name)

        owner = _owner_of(target, local_vars)
        info = method_info(func)
        names = info.params if info is not None else ()
        defaults = _defaults_of(func)

        # A local still holding its default object was not supplied by the caller
        args = tuple(
            None if name in defaults and local_vars.get(name) is defaults[name] else local_vars.get(name)
            for name in names
        )

        # Trailing unsupplied values are dropped, interior ones stay as None placeholders
        while args and args[-1] is None:
            args = args[:-1]

        return CallContext(owner=owner, method=func_name, args=args, func=func)
    finally:
        # Break reference cycles through frame objects
        del frame
        del target


def resolve_method(owner: Any, method: str | None) -> Callable[..., Any] | None:
    """
    Find the function named ``method`` on a class or module.

    Class lookup walks the MRO and unwraps staticmethod, classmethod and property
    (setter preferred). Returns None when nothing callable is found.
    """
    if owner is None or not method:
        return None

    if inspect.isclass(owner):
        return _lookup_in_mro(owner, method)

    candidate = getattr(owner, method, None)
    return candidate if callable(candidate) else None


def method_info(target: Callable[..., Any] | None) -> MethodInfo | None:
    """
    Read docstring and formal parameter names of a callable.

    Returns:
        MethodInfo, or None when ``target`` is not callable or its signature cannot be read.

    Examples:
        >>> def greet(self, name, *rest):
        ...     '''@param string $name'''
        >>> method_info(greet)
        MethodInfo(doc='@param string $name', params=('name',))
    """
    if target is None or not callable(target):
        return None

    try:
        sig = inspect.signature(target)
    except (TypeError, ValueError):
        return None

    params = tuple(
        name
        for name, param in sig.parameters.items()
        if name not in _RECEIVERS and param.kind not in _COLLECTORS
    )
    # Own docstring only, never one inherited from a base class
    doc = getattr(target, "__doc__", None)
    doc = inspect.cleandoc(doc) if isinstance(doc, str) and doc.strip() else None
    return MethodInfo(doc=doc, params=params)


# Private methods ------------------------------------------------------------------------------------------------------


def _defaults_of(func: Callable[..., Any]) -> dict[str, Any]:
    try:
        sig = inspect.signature(func)
    except (TypeError, ValueError):
        return {}
    return {
        name: param.default
        for name, param in sig.parameters.items()
        if param.default is not inspect.Parameter.empty
    }


def _owner_of(frame: FrameType, local_vars: dict[str, Any]) -> type | ModuleType | None:
    if "self" in local_vars:
        return type(local_vars["self"])
    if "cls" in local_vars and inspect.isclass(local_vars["cls"]):
        return local_vars["cls"]
    return sys.modules.get(frame.f_globals.get("__name__", ""))


def _lookup_in_mro(obj_class: type, func_name: str, code: Any = None) -> Callable[..., Any] | None:
    """
    Find ``func_name`` in the class hierarchy, unwrapping descriptors.

    When ``code`` is given, the function running that code object is preferred, so
    an overridden base method reached through super() resolves to the base version.
    Otherwise the first definition found wins.
    """
    fallback = None
    for cls in obj_class.__mro__:
        attr = cls.__dict__.get(func_name)
        if attr is None:
            continue
        if isinstance(attr, (staticmethod, classmethod)):
            candidates = (attr.__func__,)
        elif isinstance(attr, property):
            candidates = tuple(f for f in (attr.fset, attr.fget) if f is not None)
        elif callable(attr):
            candidates = (attr,)
        else:
            continue

        for func in candidates:
            if code is None or getattr(func, "__code__", None) is code:
                return func
        if fallback is None and candidates:
            fallback = candidates[0]
    return fallback


def _func_from_frame(
    caller_frame: FrameType,
    func_name: str,
    local_vars: dict[str, Any],
) -> Callable[..., Any] | None:
    """
    Find the function object executing in a frame.

    Tries, in order: the frame globals, the MRO of ``self`` or ``cls``, classes in the
    frame globals, callables in the frame locals sharing its code object, then the same
    search in enclosing frames, including classes defined there.
    """
    code = caller_frame.f_code

    candidate = caller_frame.f_globals.get(func_name)
    if getattr(candidate, "__code__", None) is code:
        return candidate

    if "self" in local_vars:
        func = _lookup_in_mro(type(local_vars["self"]), func_name, code)
        if func is not None:
            return func

    if "cls" in local_vars and inspect.isclass(local_vars["cls"]):
        func = _lookup_in_mro(local_vars["cls"], func_name, code)
        if func is not None:
            return func

    # Static methods of module level classes
    for obj in list(caller_frame.f_globals.values()):
        if inspect.isclass(obj) and func_name in obj.__dict__:
            func = _lookup_in_mro(obj, func_name, code)
            if getattr(func, "__code__", None) is code:
                return func

    search_frame = caller_frame
    while search_frame is not None:
        for obj in list(search_frame.f_locals.values()):
            if getattr(obj, "__code__", None) is code:
                return obj
            if inspect.isclass(obj):
                func = _lookup_in_mro(obj, func_name, code)
                if getattr(func, "__code__", None) is code:
                    return func
        search_frame = search_frame.f_back

    # Same name in globals but a different code object, e.g. a wrapped function
    if callable(candidate):
        return candidate
    return None
