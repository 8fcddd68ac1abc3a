"""
Filter Registry
Laravel-style named route filter management
"""
from typing import Callable, List, Optional, Dict, Any

from larapipe.logging import getLogger

logger = getLogger(__name__)


class FilterRegistry:
    """
    Maps filter names to callables

    A filter is called as filter(route, request, *extra) and may be a plain
    function, a coroutine function, or an object with a filter() method.

    Usage:
        registry = FilterRegistry()
        registry.register('auth', check_login)

        @registry.filter('csrf')
        async def csrf(route, request):
            ...
    """

    def __init__(self):
        """Initialize empty registry"""
        self._filters: Dict[str, Callable] = {}

    def register(self, name: str, filter_instance: Any) -> Callable:
        """
        Register a filter under a name, replacing any previous one

        Args:
            name: Filter name used in route before/after lists
            filter_instance: Callable, or object exposing a filter() method

        Returns:
            The resolved callable
        """
        handler = self._callable_for(name, filter_instance)
        if name in self._filters:
            logger.debug("Replacing route filter %s", name)
        self._filters[name] = handler
        return handler

    def filter(self, name: str) -> Callable:
        """Decorator form of register()"""
        def decorator(func: Callable) -> Callable:
            self.register(name, func)
            return func
        return decorator

    def resolve(self, name: str) -> Optional[Callable]:
        """Get the callable for a filter name, or None if unregistered"""
        return self._filters.get(name)

    get = resolve

    def has(self, name: str) -> bool:
        return name in self._filters

    def forget(self, name: str):
        self._filters.pop(name, None)

    def get_registered(self) -> List[str]:
        return list(self._filters.keys())

    @staticmethod
    def _callable_for(name: str, filter_instance: Any) -> Callable:
        if isinstance(filter_instance, type):
            # Filter classes are instantiated once and their filter() is used
            if not callable(getattr(filter_instance, 'filter', None)):
                raise TypeError(f"Route filter class [{name}] must define filter()")
            filter_instance = filter_instance()

        method = getattr(filter_instance, 'filter', None)
        if callable(method):
            return method
        if callable(filter_instance):
            return filter_instance
        raise TypeError(f"Route filter [{name}] must be callable or define filter()")
