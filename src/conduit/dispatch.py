"""Invocation of the two filter variants: callables and lookup tables."""

from collections.abc import Mapping
from typing import Any, Callable, Tuple, Union

LOOKUP_MISS = "value not found"
NO_ERROR_MESSAGE = "no error message returned"

Filter = Union[Callable[..., Tuple[bool, Any]], Mapping]


def is_filter(obj: Any) -> bool:
    """Check whether an object can be used as a pipeline filter."""
    return callable(obj) or isinstance(obj, Mapping)


def run_filter(filter: Filter, *args: Any) -> Tuple[bool, Any]:
    """Invoke a filter and return its ``(ok, payload)`` pair.

    Callables are called with all arguments and must return the pair
    themselves. A callable that raises is reported as a failure whose
    payload is the exception. Lookup tables are indexed with the first
    argument only.

    Args:
        filter: A callable or a mapping
        *args: Arguments for the filter

    Returns:
        ``(True, result)`` on success, ``(False, message_or_exception)`` otherwise
    """
    if isinstance(filter, Mapping):
        try:
            value = filter.get(args[0] if args else None)
        except TypeError:
            # unhashable key
            value = None
        if value is not None:
            return True, value
        return False, LOOKUP_MISS

    try:
        ok, result = filter(*args)
    except Exception as e:
        return False, e
    return bool(ok), result


def describe_error(payload: Any) -> str:
    """Render a failure payload as text, with a placeholder for empty ones."""
    if payload is None:
        return NO_ERROR_MESSAGE
    if isinstance(payload, Exception):
        return f"{type(payload).__name__}: {payload}"
    return str(payload) or NO_ERROR_MESSAGE
