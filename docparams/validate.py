"""
Runtime argument validation against documented scalar parameter types.

Validation is best-effort: whenever the calling function, its docstring or its
arguments cannot be determined, it is skipped silently. Only a genuine mismatch
between a documented scalar type and the supplied value is reported.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import functools
import inspect
import logging
import warnings

from collections.abc import Iterable, Sequence
from typing import Any, Callable, Literal, TypeVar

# Local ----------------------------------------------------------------------------------------------------------------
from .context import CallContext, caller_context, method_info, resolve_method
from .errors import ParameterTypeMismatch, Violation
from .extract import DEFAULT_STYLES, DeclaredParam, ParamStyle, extract, normalize_styles
from .utils import callable_name

# Public API -----------------------------------------------------------------------------------------------------------
__all__ = ["check_arguments", "first_violation", "validate_arguments", "validated"]

# Constants ------------------------------------------------------------------------------------------------------------

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])

OnError = Literal["raise", "warn"]


# Methods --------------------------------------------------------------------------------------------------------------


def first_violation(params: Iterable[DeclaredParam]) -> Violation | None:
    """
    Return the first parameter whose actual type differs from the declared one.

    Records are scanned in the given (document) order; later mismatches are not
    looked at.
    """
    for param in params:
        if param.expected_type != param.actual_type:
            return Violation(
                name=param.name,
                expected_type=param.expected_type,
                actual_type=param.actual_type,
            )
    return None


def check_arguments(
    doc: str | None,
    param_names: Sequence[str],
    args: Sequence[Any],
    *,
    where: str | None = None,
    styles: Iterable[ParamStyle] = DEFAULT_STYLES,
    on_error: OnError = "raise",
) -> Violation | None:
    """
    Check explicit arguments against the scalar types documented in ``doc``.

    The pure form of validation: nothing is looked up, all inputs are explicit.

    Args:
        doc: Docstring holding parameter tags.
        param_names: Ordered formal parameter names.
        args: Actual values aligned with ``param_names``; None counts as not supplied.
        where: Function name used in the error message.
        styles: Tag styles to recognize.
        on_error: "raise" to raise ParameterTypeMismatch, "warn" to emit a RuntimeWarning.

    Returns:
        The Violation found (only reachable with on_error="warn"), or None.

    Raises:
        ParameterTypeMismatch: On the first mismatch in document order.
        ValueError: If ``on_error`` or ``styles`` is invalid.

    Examples:
        >>> check_arguments("@param int $age", ["age"], [42])
        >>> check_arguments("@param int $age", ["age"], ["42"])
        Traceback (most recent call last):
        ...
        docparams.errors.ParameterTypeMismatch: Parameter 'age' must be integer, got string
    """
    _check_on_error(on_error)
    return _judge(doc, param_names, args, where=where, styles=styles, on_error=on_error)


def validate_arguments(
    context: CallContext | None = None,
    *,
    styles: Iterable[ParamStyle] = DEFAULT_STYLES,
    on_error: OnError = "raise",
) -> Violation | None:
    """
    Validate the arguments of the calling function against its docstring.

    Call it first thing inside a function or method whose docstring documents
    scalar parameters. The caller's frame is inspected to find the function and
    the values it received. Pass ``context`` to supply them explicitly instead.

    Only scalar tags (string, int/integer, float/double, bool/boolean) are checked.
    Parameters that were not supplied, or are None, are skipped.

    Args:
        context: Explicit call context. Defaults to the caller's frame.
        styles: Tag styles to recognize.
        on_error: "raise" to raise ParameterTypeMismatch, "warn" to emit a RuntimeWarning.

    Returns:
        The Violation found (only reachable with on_error="warn"), or None.

    Raises:
        ParameterTypeMismatch: On the first mismatch in document order.
        ValueError: If ``on_error`` or ``styles`` is invalid.

    Examples:
        >>> class Greeter:
        ...     def greet(self, name, times=1):
        ...         '''
        ...         @param string $name
        ...         @param int $times
        ...         '''
        ...         validate_arguments()
        ...         return ", ".join([f"Hi {name}"] * times)
        >>> Greeter().greet("Alice")
        'Hi Alice'
        >>> Greeter().greet("Alice", "2")
        Traceback (most recent call last):
        ...
        docparams.errors.ParameterTypeMismatch: type validation failed in Greeter.greet():
          Parameter 'times' must be integer, got string
    """
    _check_on_error(on_error)
    styles = normalize_styles(styles)

    if context is None:
        context = caller_context(depth=1)

    if context is None or not context.method:
        logger.debug("validate_arguments: no calling function, skipped")
        return None

    if not context.args:
        logger.debug("validate_arguments: %s() received no arguments, skipped", context.method)
        return None

    func = context.func or resolve_method(context.owner, context.method)
    info = method_info(func)
    if info is None or not info.doc or not info.params:
        logger.debug("validate_arguments: no docstring or parameters for %s(), skipped", context.method)
        return None

    return _judge(
        info.doc,
        info.params,
        context.args,
        where=callable_name(func) or context.method,
        styles=styles,
        on_error=on_error,
    )


def validated(
    func: F | None = None,
    *,
    styles: Iterable[ParamStyle] = DEFAULT_STYLES,
    on_error: OnError = "raise",
) -> F:
    """
    Decorator to validate arguments against the scalar types in the docstring.

    Docstring and signature are read once, at decoration time. On each call the supplied
    arguments are bound to the signature without applying defaults, so parameters
    that were left out are not checked.

    Args:
        func: The function to wrap (automatically provided when used as @validated).
        styles: Tag styles to recognize.
        on_error: "raise" to raise ParameterTypeMismatch, "warn" to emit a RuntimeWarning.

    Returns:
        A wrapper running validation before the call, or ``func`` itself when its
        docstring has nothing to validate.

    Raises:
        ParameterTypeMismatch: At call time, on the first mismatch in document order.
        ValueError: At decoration time, if ``on_error`` or ``styles`` is invalid.

    Examples:
        @validated
        def connect(host, port):
            '''
            Args:
                host (string): Host name.
                port (int): TCP port.
            '''

        @validated(on_error="warn")
        def resize(width, height):
            '''
            :param int width: New width.
            :param int height: New height.
            '''

    Note:
        Apply it below @staticmethod or @classmethod, directly on the function.
    """
    if func is None:
        return functools.partial(validated, styles=styles, on_error=on_error)

    _check_on_error(on_error)
    styles = normalize_styles(styles)

    info = method_info(func)
    if info is None or not info.doc or not info.params:
        logger.debug("@validated: no docstring or parameters for %s(), not wrapped", callable_name(func))
        return func

    sig = inspect.signature(func)
    where = callable_name(func)

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            bound = sig.bind(*args, **kwargs)
        except TypeError:
            # Let the call itself report the bad signature
            return func(*args, **kwargs)

        values = tuple(bound.arguments.get(name) for name in info.params)
        _judge(info.doc, info.params, values, where=where, styles=styles, on_error=on_error)
        return func(*args, **kwargs)

    return wrapper


# Private methods ------------------------------------------------------------------------------------------------------


def _check_on_error(on_error: str) -> None:
    if on_error not in ("raise", "warn"):
        raise ValueError(f"on_error must be 'raise' or 'warn', got {on_error!r}")


def _judge(
    doc: str | None,
    param_names: Sequence[str],
    args: Sequence[Any],
    *,
    where: str | None,
    styles: Iterable[ParamStyle],
    on_error: OnError,
) -> Violation | None:
    declared = extract(doc, param_names, args, styles=styles)
    if not declared:
        logger.debug("no documented scalar parameters with values in %s(), skipped", where or "<unknown>")
        return None

    violation = first_violation(declared)
    if violation is None:
        return None

    logger.info("argument type mismatch in %s(): %s", where or "<unknown>", violation.message)
    error = ParameterTypeMismatch(violation, where=where)
    if on_error == "raise":
        raise error

    # _judge <- public entry point <- caller of the entry point
    warnings.warn(str(error), RuntimeWarning, stacklevel=3)
    return violation
