"""
Routing Package
Route definitions and the filter/handler dispatch pipeline
"""
from larapipe.routing.route import Route
from larapipe.routing.bound_route import BoundRoute
from larapipe.routing.filter_registry import FilterRegistry
from larapipe.routing.filter_invoker import FilterInvoker
from larapipe.routing.pattern_filters import PatternFilterResolver, PatternFilter
from larapipe.routing.executor import RouteExecutor
from larapipe.routing.router import Router

__all__ = [
    'Route',
    'BoundRoute',
    'FilterRegistry',
    'FilterInvoker',
    'PatternFilterResolver',
    'PatternFilter',
    'RouteExecutor',
    'Router',
]
