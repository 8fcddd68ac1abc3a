"""
Framework Support Classes
"""

from larapipe.support.config import Config
from larapipe.support.str import Str

__all__ = [
    'Config',
    'Str',
]
