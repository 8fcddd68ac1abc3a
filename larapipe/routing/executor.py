"""
Route Executor
Runs before filters, the route handler and after filters for one dispatch
"""
import inspect
from typing import Any, Mapping, Optional, Union

from sanic.response import HTTPResponse

from larapipe.http import ResponseNormalizer
from larapipe.logging import getLogger
from larapipe.routing.bound_route import BoundRoute
from larapipe.routing.filter_invoker import FilterInvoker
from larapipe.routing.filter_registry import FilterRegistry
from larapipe.routing.pattern_filters import PatternFilterResolver
from larapipe.routing.route import Route

logger = getLogger(__name__)


class RouteExecutor:
    """
    Route dispatch pipeline

    Flow for one request:
        1. every before filter runs: the route's own, then the pattern filters
        2. the handler runs only if the last before filter result was None
        3. the result is prepared into an HTTPResponse
        4. the route's after filters run with that response

    Usage:
        executor = RouteExecutor(registry, patterns, ResponseNormalizer())
        response = await executor.run(route, request, {'id': '42'})
    """

    def __init__(
        self,
        registry: FilterRegistry,
        patterns: PatternFilterResolver,
        normalizer: Optional[ResponseNormalizer] = None,
        invoker: Optional[FilterInvoker] = None,
    ):
        self.patterns = patterns
        self.normalizer = normalizer or ResponseNormalizer()
        self.invoker = invoker or FilterInvoker(registry)

    @property
    def registry(self) -> FilterRegistry:
        """The registry filters are actually resolved from"""
        return self.invoker.registry

    async def run(
        self,
        route: Union[Route, BoundRoute],
        request: Any,
        parameters: Optional[Mapping[str, Any]] = None
    ) -> HTTPResponse:
        """
        Execute the route and return the response

        Args:
            route: A BoundRoute, or a Route to bind with parameters
            request: The incoming request
            parameters: Matched placeholder values (only used with a Route)

        Returns:
            The prepared HTTPResponse

        Raises:
            BindingError: a placeholder has no value and no default
        """
        bound = route if isinstance(route, BoundRoute) else route.bind(parameters)

        logger.debug("Dispatching route %s", bound.get_uri())

        response = await self.call_before_filters(bound, request)

        # Any before filter result replaces the handler call
        if response is None:
            response = await self.call_handler(bound)
        else:
            logger.debug("Route %s short-circuited by before filters", bound.get_uri())

        response = await self.normalizer.prepare(response, request)

        for name in bound.get_after_filters():
            await self.invoker.invoke(name, bound, request, (response,))

        logger.debug("Route %s dispatched with status %s", bound.get_uri(), response.status)

        return response

    async def call_handler(self, bound: BoundRoute) -> Any:
        """Call the route handler with its arguments in placeholder order"""
        result = bound.get_action()(*bound.resolved_arguments())
        if inspect.isawaitable(result):
            result = await result
        return result

    async def call_before_filters(self, bound: BoundRoute, request: Any) -> Any:
        """
        Call every before filter and return the last non-None result

        No filter is skipped because an earlier one returned a value.
        """
        response = None

        for name in self.get_all_before_filters(bound, request):
            result = await self.invoker.invoke(name, bound, request)
            if result is not None:
                response = result

        return response

    def get_all_before_filters(self, bound: BoundRoute, request: Any) -> list:
        """Route before filters followed by the matching pattern filters"""
        return bound.get_before_filters() + list(self.patterns.filters_for(request))
