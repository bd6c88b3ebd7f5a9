from typing import Any, MutableSequence, Tuple

from ..dispatch import Filter, describe_error, run_filter


class Map:
    """Filter that applies an inner filter to every element of a sequence.

    Elements are replaced in place, so the sequence handed to the filter is
    the one returned. The first failing element stops the map and the
    remaining elements are left untouched.

    Example:
        >>> def square(x):
        ...     return True, x * x
        >>> Map(square)([1, 2, 3])
        (True, [1, 4, 9])
    """

    def __init__(self, inner: Filter):
        """Initialize the Map filter.

        Args:
            inner: Filter applied to each element
        """
        self.inner = inner

    def __call__(self, items: MutableSequence[Any]) -> Tuple[bool, Any]:
        if items is None:
            return False, "Expected a sequence to map over."

        for index, item in enumerate(items):
            ok, result = run_filter(self.inner, item)
            if not ok:
                return (
                    False,
                    f"While trying to map over {items!r}[{index}]: {describe_error(result)}",
                )
            items[index] = result
        return True, items


def map(inner: Filter) -> Map:
    """Create a filter mapping ``inner`` over a sequence in place."""
    return Map(inner)
