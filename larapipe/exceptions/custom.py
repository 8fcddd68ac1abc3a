"""
Custom Exception Classes
Framework-specific exceptions with HTTP status codes
"""
from typing import Optional, List, Any


class FrameworkException(Exception):
    """Base exception for all framework exceptions"""
    status_code = 500
    message = "An error occurred"

    def __init__(self, message: Optional[str] = None, status_code: Optional[int] = None):
        self.message = message or self.__class__.message
        self.status_code = status_code or self.__class__.status_code
        super().__init__(self.message)


class RoutingException(FrameworkException):
    """Base exception for errors raised while dispatching a route"""
    message = "Route dispatch failed"


class BindingError(RoutingException):
    """
    Route binding exception

    Raised when a route placeholder has neither a matched value nor a
    default. This is a configuration/matching bug, so dispatch aborts
    before any filter or the handler runs.

    Example:
        raise BindingError(route, ['id'])
    """
    message = "Missing value for route parameter"

    def __init__(self, route: Any = None, missing: Optional[List[str]] = None, message: Optional[str] = None):
        self.route = route
        self.missing = list(missing or [])
        if message is None and self.missing:
            uri = route.get_uri() if route is not None else '?'
            message = f"Missing value for route parameter(s) {', '.join(self.missing)} on [{uri}]"
        super().__init__(message)


class UnknownFilterError(RoutingException):
    """
    Unknown filter exception

    Raised in strict mode when a route or pattern references a filter
    name that is not registered.

    Example:
        raise UnknownFilterError('auth')
    """
    message = "Route filter is not registered"

    def __init__(self, filter_name: str, message: Optional[str] = None):
        self.filter_name = filter_name
        super().__init__(message or f"Route filter [{filter_name}] is not registered")
