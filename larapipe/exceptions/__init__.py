"""
Exceptions Package
Framework exception hierarchy
"""
from larapipe.exceptions.custom import (
    FrameworkException,
    RoutingException,
    BindingError,
    UnknownFilterError,
)

__all__ = [
    'FrameworkException',
    'RoutingException',
    'BindingError',
    'UnknownFilterError',
]
