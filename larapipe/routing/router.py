"""
Router
Owns the filter registry, pattern filters and the dispatch pipeline
"""
from contextvars import ContextVar
from typing import Union, List, Dict, Optional, Callable, Any, Iterable, Mapping

from sanic.response import HTTPResponse

from larapipe.http import ResponseNormalizer
from larapipe.routing.bound_route import BoundRoute
from larapipe.routing.executor import RouteExecutor
from larapipe.routing.filter_invoker import FilterInvoker
from larapipe.routing.filter_registry import FilterRegistry
from larapipe.routing.pattern_filters import PatternFilterResolver, PatternFilter
from larapipe.routing.route import Route



class Router:
    """
    Laravel-style router facade for filters and dispatch

    Matching a request to a Route is left to the host application; the
    Router runs the matched route through the filter pipeline.

    Usage:
        router = Router()
        router.filter('auth', lambda route, request: None if request.ctx.user else 'Login required')
        router.when('admin/*', 'auth')

        route = Route(['GET'], '/admin/users/{id}', show_user).before('log')
        response = await router.dispatch(route, request, {'id': '7'})
    """

    def __init__(
        self,
        strict_filters: Optional[bool] = None,
        normalizer: Optional[ResponseNormalizer] = None
    ):
        """
        Args:
            strict_filters: Raise on unknown filter names (default: routing.STRICT_FILTERS)
            normalizer: Response normalizer used by prepare()
        """
        self.filters = FilterRegistry()
        self.patterns = PatternFilterResolver()
        self.normalizer = normalizer or ResponseNormalizer()
        self.executor = RouteExecutor(
            self.filters,
            self.patterns,
            self.normalizer,
            FilterInvoker(self.filters, strict=strict_filters),
        )
        # Per-dispatch, so concurrent requests each see their own route
        self._current_route: ContextVar[Optional[BoundRoute]] = ContextVar('current_route', default=None)

    # =========================================================================
    # Filters
    # =========================================================================

    def filter(self, name: str, callback: Any = None):
        """
        Register a route filter

        Usage:
            router.filter('auth', check_login)

            @router.filter('csrf')
            async def csrf(route, request):
                ...
        """
        if callback is None:
            return self.filters.filter(name)
        return self.filters.register(name, callback)

    def get_filter(self, name: str) -> Optional[Callable]:
        """Get a registered filter callable by name"""
        return self.filters.resolve(name)

    def when(
        self,
        pattern: str,
        names: Union[str, Iterable[str]],
        methods: Optional[Iterable[str]] = None
    ) -> PatternFilter:
        """Attach before filters to every request matching a URI pattern"""
        return self.patterns.when(pattern, names, methods)

    def find_pattern_filters(self, request: Any) -> List[str]:
        """Get the pattern filters that apply to a request"""
        return self.patterns.filters_for(request)

    async def prepare(self, value: Any, request: Any) -> HTTPResponse:
        """Convert a handler result into a response"""
        return await self.normalizer.prepare(value, request)

    # =========================================================================
    # Dispatch
    # =========================================================================

    async def dispatch(
        self,
        route: Union[Route, BoundRoute],
        request: Any,
        parameters: Optional[Mapping[str, Any]] = None
    ) -> HTTPResponse:
        """
        Run a matched route and return its response

        Args:
            route: Matched Route (bound with parameters) or BoundRoute
            request: The incoming request
            parameters: Matched placeholder values

        Returns:
            HTTPResponse
        """
        bound = route if isinstance(route, BoundRoute) else route.bind(parameters)

        token = self._current_route.set(bound)
        try:
            return await self.executor.run(bound, request)
        finally:
            self._current_route.reset(token)

    def current(self) -> Optional[BoundRoute]:
        """Get the route being dispatched in this context"""
        return self._current_route.get()

    def current_route_name(self) -> Optional[str]:
        """Get the current route name"""
        bound = self.current()
        return bound.get_name() if bound else None

    def is_current(self, name: str) -> bool:
        """Check if the current route matches the given name"""
        return self.current_route_name() == name

    def to_dict(self) -> Dict[str, Any]:
        """Describe registered filters and pattern filters"""
        return {
            'filters': self.filters.get_registered(),
            'patterns': [
                {
                    'pattern': entry.pattern,
                    'filters': list(entry.names),
                    'methods': list(entry.methods) if entry.methods else None,
                }
                for entry in self.patterns.get_patterns()
            ],
        }
