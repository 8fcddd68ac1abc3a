"""
HTTP Module
Response normalization for dispatched routes
"""
from larapipe.http.response import ResponseNormalizer

__all__ = [
    'ResponseNormalizer',
]
