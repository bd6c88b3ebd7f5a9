"""Fluent pipeline construction over a registry of filter factories."""

import logging
from typing import Any, Callable, Dict, List, Optional

from conduit import filters as builtin
from conduit.base import Pipeline
from conduit.dispatch import Filter
from conduit.errors import UnknownFilterError

logger = logging.getLogger(__name__)

FilterFactory = Callable[..., Filter]


class FilterRegistry:
    """Name to filter-factory table used by builders.

    Registries are plain objects: build one per context (or copy the
    default one) instead of mutating shared state.

    Example:
        >>> registry = default_registry.copy()
        >>> @registry.register("double")
        ... def double():
        ...     return lambda x: (True, x * 2)
        >>> builder(registry).double().run(4)
        8
    """

    def __init__(self, factories: Optional[Dict[str, FilterFactory]] = None):
        self._factories: Dict[str, FilterFactory] = {}
        for name, factory in (factories or {}).items():
            self.add(name, factory)

    def add(self, name: str, factory: FilterFactory):
        """Register a factory under a name, replacing any previous one.

        Raises:
            ValueError: If the name is empty or private
            TypeError: If factory is not callable
        """
        if not name or name.startswith("_"):
            raise ValueError(f"Invalid filter name {name!r}")
        if not callable(factory):
            raise TypeError(f"factory must be callable, got {type(factory).__name__}")

        if name in self._factories:
            logger.warning("Overwriting registration for filter '%s'", name)
        self._factories[name] = factory
        logger.debug("Registered filter '%s' -> %r", name, factory)

    def register(self, name: str):
        """Decorator form of ``add``."""

        def decorator(factory: FilterFactory) -> FilterFactory:
            self.add(name, factory)
            return factory

        return decorator

    def get(self, name: str) -> Optional[FilterFactory]:
        return self._factories.get(name)

    def names(self) -> List[str]:
        return sorted(self._factories)

    def copy(self) -> "FilterRegistry":
        return FilterRegistry(self._factories)

    def __contains__(self, name: str) -> bool:
        return name in self._factories


default_registry = FilterRegistry(
    {
        "map": builtin.map,
        "reduce": builtin.reduce,
        "source": builtin.source,
    }
)


class Builder:
    """Chainable pipeline construction.

    ``use`` appends a filter as-is; ``apply`` builds one from a registered
    factory. Registered names can also be called as methods, so these are
    equivalent::

        builder().apply("map", square).apply("reduce", add, 0)
        builder().map(square).reduce(add, 0)
    """

    def __init__(self, registry: Optional[FilterRegistry] = None):
        if registry is None:
            registry = default_registry
        if not isinstance(registry, FilterRegistry):
            raise TypeError(
                f"registry must be a FilterRegistry, got {type(registry).__name__}"
            )
        self.registry = registry
        self.pipeline = Pipeline([], allow_empty=True)

    def use(self, filter: Filter) -> "Builder":
        """Append a filter to the pipeline being built."""
        self.pipeline.add(filter)
        return self

    def apply(self, name: str, *args: Any, **kwargs: Any) -> "Builder":
        """Build a filter from the named factory and append it.

        Raises:
            UnknownFilterError: If no factory is registered under name
        """
        factory = self.registry.get(name)
        if factory is None:
            raise UnknownFilterError(f"No such filter: {name}")
        self.pipeline.add(factory(*args, **kwargs))
        return self

    def run(self, value: Any = None, allow_fail: bool = False) -> Any:
        """Run the built pipeline; see ``Pipeline.run``."""
        return self.pipeline.run(value, allow_fail)

    def build(self) -> Pipeline:
        """Return the pipeline assembled so far."""
        return self.pipeline

    def __getattr__(self, name: str) -> Callable[..., "Builder"]:
        # Only reached for names that are not regular attributes.
        registry = self.__dict__.get("registry")
        if name.startswith("_") or registry is None:
            raise AttributeError(name)
        if name not in registry:
            raise UnknownFilterError(f"No such filter: {name}")

        def add_filter(*args: Any, **kwargs: Any) -> "Builder":
            return self.apply(name, *args, **kwargs)

        return add_filter


def builder(registry: Optional[FilterRegistry] = None) -> Builder:
    """Create a pipeline builder backed by ``registry`` (default filters if omitted)."""
    return Builder(registry)
