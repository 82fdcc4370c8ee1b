"""
squarematrix: an n x n integer matrix value type with owned storage,
fill algorithms, arithmetic and comparison operators.
"""

from .core import SquareMatrix
from .backend import seed
from .observability import configure_logging, get_profiler

__all__ = [
    'SquareMatrix',
    'seed',
    'configure_logging',
    'get_profiler'
]
