"""
larapipe
Laravel-style route filter pipeline for Sanic applications
"""
from larapipe.routing import (
    Route,
    BoundRoute,
    FilterRegistry,
    FilterInvoker,
    PatternFilterResolver,
    RouteExecutor,
    Router,
)
from larapipe.http import ResponseNormalizer
from larapipe.exceptions import BindingError, UnknownFilterError

__all__ = [
    'Route',
    'BoundRoute',
    'FilterRegistry',
    'FilterInvoker',
    'PatternFilterResolver',
    'RouteExecutor',
    'Router',
    'ResponseNormalizer',
    'BindingError',
    'UnknownFilterError',
]
