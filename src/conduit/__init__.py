"""
Conduit: Small Synchronous Filter Pipelines

Compose a chain of filters into one callable unit, run it against a single
input value, and get back either the result or a failure that names the
filter that broke.

Key Features:
- Filters are plain functions returning (ok, result), or lookup tables
- Explicit source/sink rules: only the first filter may end the input early
- Optional memoization per input with the caching stepper
- Fluent builder with a pluggable registry of filter factories (map, reduce, source)
- Buffered, demand-driven Stream to feed pipelines lazily

Quick Start:
    import conduit as c

    def add10(x):
        return True, x + 10

    # Basic pipeline
    result = c.Pipeline([add10]).run(10)  # 20

    # Builder with map/reduce
    total = c.builder().map(square).reduce(add, 0).run([1, 2, 3])

    # Error handling
    pipeline = c.Pipeline([might_fail], error_policy=c.ErrorPolicy.IGNORE)
    result = pipeline.run(value)  # None on failure
"""

import logging

from .errors import (
    ConfigurationError,
    ErrorPolicy,
    FilterFailure,
    PipelineError,
    ProtocolViolation,
    UnknownFilterError,
)

from .dispatch import LOOKUP_MISS, is_filter, run_filter
from .outcome import Outcome
from .steppers import (
    DEFAULT_STEPPER,
    STEPPERS,
    BasicStepper,
    CachingStepper,
    Stepper,
)
from .stream import Stream
from .base import Pipeline, create
from .filters import Map, Reduce, Source, map, reduce, source
from .builder import Builder, FilterRegistry, builder, default_registry

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "BasicStepper",
    "Builder",
    "CachingStepper",
    "ConfigurationError",
    "DEFAULT_STEPPER",
    "ErrorPolicy",
    "FilterFailure",
    "FilterRegistry",
    "LOOKUP_MISS",
    "Map",
    "Outcome",
    "Pipeline",
    "PipelineError",
    "ProtocolViolation",
    "Reduce",
    "STEPPERS",
    "Source",
    "Stepper",
    "Stream",
    "UnknownFilterError",
    "builder",
    "create",
    "default_registry",
    "is_filter",
    "map",
    "reduce",
    "run_filter",
    "source",
]
