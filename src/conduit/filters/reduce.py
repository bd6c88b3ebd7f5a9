from typing import Any, MutableSequence, Tuple

from ..dispatch import Filter, describe_error, run_filter


class Reduce:
    """Filter that folds a sequence into a single value, left to right.

    The inner filter is called as ``inner(accumulator, item)`` and returns
    ``(ok, new_accumulator)``, starting from ``initial``.

    Warning:
        The input sequence is consumed while folding: every folded slot is
        cleared and the sequence is empty after a successful reduce. Pass a
        copy if the caller still needs the items. On failure the elements
        folded so far are already gone.
    """

    def __init__(self, inner: Filter, initial: Any = None):
        """Initialize the Reduce filter.

        Args:
            inner: Binary filter taking (accumulator, item)
            initial: Starting accumulator value
        """
        self.inner = inner
        self.initial = initial

    def __call__(self, items: MutableSequence[Any]) -> Tuple[bool, Any]:
        if items is None:
            return False, "Expected a sequence to reduce."

        accumulator = self.initial
        for index, item in enumerate(items):
            ok, result = run_filter(self.inner, accumulator, item)
            if not ok:
                message = (
                    f"While trying to reduce {items!r}[{index}] ({item!r}): "
                    f"{describe_error(result)}"
                )
                del items[:index]
                return False, message
            accumulator = result
        items.clear()
        return True, accumulator


def reduce(inner: Filter, initial: Any = None) -> Reduce:
    """Create a filter folding a sequence with ``inner`` from ``initial``.

    Examples:
        >>> def add(acc, x):
        ...     return True, acc + x
        >>> reduce(add, 0)([1, 2, 3])
        (True, 6)
    """
    return Reduce(inner, initial)
