"""Pipeline: an ordered filter chain bound to a stepper."""

import logging
from typing import Any, Iterator, List, Optional, Tuple, Union

from conduit.dispatch import Filter, is_filter
from conduit.errors import ConfigurationError, ErrorPolicy
from conduit.steppers import DEFAULT_STEPPER, BasicStepper, Stepper, resolve_stepper

logger = logging.getLogger(__name__)


class Pipeline:
    """An ordered chain of filters driven by a stepper.

    Each filter receives the previous filter's result. The first filter
    (the source) is the only one allowed to return ``None`` to say there is
    no more input; the last one (the sink) may return ``None`` as its result.

    Usage patterns:
    1. Build from filters: Pipeline([f1, f2, f3])
    2. Chain with |: Pipeline([f1]) | f2 | f3
    3. Embed in another pipeline: Pipeline([pipeline.runner(), f4])

    Example:
        >>> def add10(x):
        ...     return True, x + 10
        >>> def sub5(x):
        ...     return True, x - 5
        >>> Pipeline([add10, sub5]).run(10)
        15

    Attributes:
        filters: List of filters to execute in order
        stepper: Stepper class that runs the chain
        error_policy: Whether failures raise or yield None
    """

    filters: List[Filter]

    def __init__(
        self,
        filters: List[Filter],
        *,
        allow_empty: bool = False,
        stepper: Union[str, type] = DEFAULT_STEPPER,
        error_policy: ErrorPolicy = ErrorPolicy.FAIL_FAST,
    ):
        """Initialize a new Pipeline.

        Args:
            filters: List of filters to execute in sequence
            allow_empty: Accept an empty filter list, for staged construction
            stepper: Stepper class, or one of the names in ``STEPPERS``
            error_policy: How to handle failures in ``run``

        Raises:
            TypeError: If filters is not a list or error_policy is invalid
            ConfigurationError: If filters is empty and not allowed to be,
                or holds something that is not a filter
        """
        if not isinstance(filters, list):
            raise TypeError(f"filters must be a list, got {type(filters).__name__}")
        if not isinstance(error_policy, ErrorPolicy):
            raise TypeError(
                f"error_policy must be an ErrorPolicy, got {type(error_policy).__name__}"
            )
        if not filters and not allow_empty:
            raise ConfigurationError("No filters given, need at least one.")
        for position, candidate in enumerate(filters, start=1):
            if not is_filter(candidate):
                raise ConfigurationError(
                    f"Filter no. {position} is not callable or a mapping: {candidate!r}"
                )

        self.filters = filters
        self.stepper = resolve_stepper(stepper)
        self.error_policy = error_policy
        self._step: Optional[Stepper] = None

    @classmethod
    def create(cls, filters: List[Filter], allow_empty: bool = False, **options):
        """Alternate constructor mirroring ``Pipeline(filters, ...)``."""
        return cls(filters, allow_empty=allow_empty, **options)

    @property
    def step(self) -> Stepper:
        """The bound stepper, built on first use and kept afterwards."""
        if self._step is None:
            self._step = self.stepper(self)
            logger.debug(
                "Built %s for pipeline with %d filters",
                self.stepper.__name__,
                len(self.filters),
            )
        return self._step

    def add(self, filter: Filter) -> "Pipeline":
        """Append a filter to the end of the chain.

        Raises:
            ConfigurationError: If filter is None or not a filter
        """
        if filter is None:
            raise ConfigurationError("Need a filter.")
        if not is_filter(filter):
            raise ConfigurationError(f"Not callable or a mapping: {filter!r}")
        self.filters.append(filter)
        return self

    def run(self, value: Any = None, allow_fail: bool = False) -> Any:
        """Run the chain once for a value and return the final result.

        Args:
            value: Input handed to the first filter
            allow_fail: Return None instead of raising when the run fails

        Returns:
            The sink's result, or None when the source is exhausted

        Raises:
            PipelineError: The failure, unless allow_fail is set or the
                error policy is IGNORE
        """
        outcome = self.step(value)
        if outcome.ok:
            return outcome.value

        logger.debug("Pipeline run failed: %s", outcome.error)
        if allow_fail or self.error_policy == ErrorPolicy.IGNORE:
            return None
        raise outcome.to_error()

    def runner(self):
        """Return a filter that runs this pipeline.

        The returned callable reports ``(ok, result)`` instead of raising,
        so a pipeline can be used as a step of another pipeline.
        """

        def run_pipeline(value: Any = None) -> Tuple[bool, Any]:
            return tuple(self.step(value))

        return run_pipeline

    def __call__(self, value: Any = None) -> Tuple[bool, Any]:
        return tuple(self.step(value))

    def stream(self, value: Any = None) -> Iterator[Any]:
        """Run the pipeline repeatedly, yielding results until the source ends.

        Meant for pipelines whose first filter pulls from a source such as a
        Stream; with any other first filter this never stops on its own.
        Runs always go through a basic stepper: every pass must pull from
        the source, so memoized results are never used here.

        Raises:
            PipelineError: On the first failing run under FAIL_FAST, and on
                any failure of the source itself under either policy
        """
        step = BasicStepper(self)
        while True:
            outcome = step(value)
            if not outcome.ok:
                # a failing source never advances, so skipping it would spin
                source_failed = (outcome.position or 1) == 1
                if self.error_policy == ErrorPolicy.IGNORE and not source_failed:
                    logger.debug("Skipping failed run: %s", outcome.error)
                    continue
                raise outcome.to_error()
            if outcome.value is None:
                return
            yield outcome.value

    def then(self, other: Union["Pipeline", Filter]) -> "Pipeline":
        """Chain this pipeline with a filter or another pipeline.

        Returns:
            A new Pipeline; neither operand is modified
        """
        if isinstance(other, Pipeline):
            filters = self.filters + other.filters
        else:
            filters = self.filters + [other]
        return Pipeline(
            filters, stepper=self.stepper, error_policy=self.error_policy
        )

    def __or__(self, other: Union["Pipeline", Filter]) -> "Pipeline":
        return self.then(other)

    def __ror__(self, other: Filter) -> "Pipeline":
        """Support filter | pipeline, prepending the filter."""
        return Pipeline(
            [other] + self.filters,
            stepper=self.stepper,
            error_policy=self.error_policy,
        )

    def __len__(self) -> int:
        return len(self.filters)

    def __repr__(self) -> str:
        return (
            f"Pipeline({len(self.filters)} filters, "
            f"stepper={self.stepper.__name__}, error_policy={self.error_policy.name})"
        )


create = Pipeline.create
