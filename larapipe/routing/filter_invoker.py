"""
Filter Invoker
Resolves a filter by name and calls it with the route filter argument convention
"""
import inspect
from typing import Any, Optional, Sequence

from larapipe.defaults import DEFAULT_STRICT_FILTERS
from larapipe.exceptions import UnknownFilterError
from larapipe.logging import getLogger
from larapipe.routing.filter_registry import FilterRegistry

logger = getLogger(__name__)


class FilterInvoker:
    """
    Calls named filters as filter(current_route, request, *extra_args)

    Unregistered names are a policy decision: by default they are skipped
    with a warning. With strict=True
    (or config routing.STRICT_FILTERS) they raise UnknownFilterError.
    """

    def __init__(self, registry: FilterRegistry, strict: Optional[bool] = None):
        """
        Args:
            registry: Where filter names are resolved
            strict: Raise on unknown names (default: routing.STRICT_FILTERS)
        """
        self.registry = registry
        self._strict = strict

    @property
    def strict(self) -> bool:
        if self._strict is not None:
            return self._strict
        from larapipe.support import Config
        return bool(Config.get('routing.STRICT_FILTERS', DEFAULT_STRICT_FILTERS))

    async def invoke(
        self,
        name: str,
        current_route: Any,
        request: Any,
        extra_args: Sequence[Any] = ()
    ) -> Any:
        """
        Call a filter and return its result verbatim

        Args:
            name: Registered filter name
            current_route: The BoundRoute being dispatched
            request: The incoming request
            extra_args: Appended after route and request (the response, for after filters)

        Returns:
            The filter's result, or None for an unknown name in permissive mode

        Raises:
            UnknownFilterError: unknown name in strict mode
        """
        parameters = [current_route, request, *extra_args]

        callback = self.registry.resolve(name)
        if callback is None:
            if self.strict:
                raise UnknownFilterError(name)
            logger.warning("Route filter %r is not registered, skipping", name)
            return None

        result = callback(*parameters)
        if inspect.isawaitable(result):
            result = await result
        return result
