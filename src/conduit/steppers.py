"""Strategies that execute a pipeline's filter chain once per input."""

import logging
from typing import TYPE_CHECKING, Any, Dict, Hashable, Optional

from conduit.dispatch import describe_error, run_filter
from conduit.outcome import Outcome

if TYPE_CHECKING:
    from conduit.base import Pipeline

logger = logging.getLogger(__name__)

_MISSING = object()


class Stepper:
    """Base class for pipeline steppers.

    A stepper is bound to exactly one pipeline and reads its filter list on
    every call, so filters added after construction are picked up. Calling
    the stepper runs the chain once and reports an Outcome; steppers never
    raise for filter failures.

    Subclasses implement ``__call__``.
    """

    def __init__(self, pipeline: "Pipeline"):
        self.pipeline = pipeline

    def __call__(self, value: Any = None) -> Outcome:
        raise NotImplementedError


class BasicStepper(Stepper):
    """Run the whole chain for every call, without memoization.

    The first filter is the source: it may return ``None`` to say it has
    nothing left, which ends the run successfully with no value. Any later
    filter except the last (the sink) returning ``None`` is a failure.
    """

    def __call__(self, value: Any = None) -> Outcome:
        filters = self.pipeline.filters
        count = len(filters)
        if count == 0:
            return Outcome.misconfigured("No filters to run.")

        ok, result = run_filter(filters[0], value)
        if not ok:
            return _failed(1, result)
        if result is None:
            return Outcome.success(None)

        for position in range(2, count + 1):
            ok, result = run_filter(filters[position - 1], result)
            if not ok:
                return _failed(position, result)
            if result is None and position != count:
                return Outcome.violation(
                    f"Filter no. {position} returned no value.", position
                )

        return Outcome.success(result)


class CachingStepper(BasicStepper):
    """Basic stepper that memoizes successful runs by input value.

    Results are kept for the lifetime of the stepper, which is the lifetime
    of its pipeline, so every distinct input stays referenced until the
    pipeline is garbage-collected or ``clear()`` is called. Failed runs are
    never stored. Inputs that cannot be hashed are run without the cache.
    """

    def __init__(self, pipeline: "Pipeline"):
        super().__init__(pipeline)
        self._cache: Dict[Hashable, Any] = {}

    def __call__(self, value: Any = None) -> Outcome:
        if not self.pipeline.filters:
            return Outcome.misconfigured("No filters to run.")

        try:
            cached = self._cache.get(value, _MISSING)
        except TypeError:
            logger.debug("Unhashable input %r, running without cache", value)
            return super().__call__(value)

        if cached is not _MISSING:
            logger.debug("Cache hit for %r", value)
            return Outcome.success(cached)

        outcome = super().__call__(value)
        if outcome.ok:
            self._cache[value] = outcome.value
        return outcome

    def clear(self):
        """Forget every memoized result."""
        self._cache.clear()

    def __len__(self) -> int:
        return len(self._cache)


def _failed(position: int, payload: Any) -> Outcome:
    original_error: Optional[Exception] = (
        payload if isinstance(payload, Exception) else None
    )
    return Outcome.failure(
        f"Filter no. {position} failed: {describe_error(payload)}",
        original_error=original_error,
        position=position,
    )


STEPPERS = {
    "basic": BasicStepper,
    "caching": CachingStepper,
}

DEFAULT_STEPPER = BasicStepper


def resolve_stepper(stepper) -> type:
    """Turn a stepper name or class into a stepper class.

    Raises:
        ValueError: If the name is not a known stepper
        TypeError: If the value is neither a name nor a Stepper subclass
    """
    if isinstance(stepper, str):
        try:
            return STEPPERS[stepper]
        except KeyError:
            raise ValueError(
                f"Unknown stepper {stepper!r}, expected one of {sorted(STEPPERS)}"
            ) from None
    if isinstance(stepper, type) and issubclass(stepper, Stepper):
        return stepper
    raise TypeError(
        f"stepper must be a Stepper subclass or name, got {type(stepper).__name__}"
    )
