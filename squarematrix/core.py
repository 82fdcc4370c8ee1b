# --- Purpose: The SquareMatrix value type and its owned backing storage. ---

import logging
import numbers

import numpy as np

from . import backend
from .config import DTYPE, CELL_WIDTH

logger = logging.getLogger(__name__)


def _is_scalar(value) -> bool:
    return isinstance(value, numbers.Integral)


class SquareMatrix:
    """
    An n x n integer matrix that owns its backing storage.

    Storage is a flat numpy buffer allocated for `capacity` x `capacity`
    elements; the logical size `n` may be smaller than the capacity. Element
    (row, col) lives at flat offset row * n + col, so the logical view always
    starts at the head of the buffer.

    Incorrect usage never raises: out-of-range writes are ignored,
    out-of-range reads return 0 and size-mismatched operations return a zero
    matrix the size of the left operand. Each fallback is logged at DEBUG.

    Elements are 32-bit integers. Arithmetic wraps on overflow, and integer
    operands outside that range (values, scalars) are wrapped the same way
    before use, so 2**31 is stored as -2**31.

    Attributes:
        size: Logical dimension n
        capacity: Dimension the storage was allocated for (capacity >= size)
        shape: (size, size)
    """

    def __init__(self, n: int = 0, values=None):
        """
        Create a matrix.

        Args:
            n: Dimension. n <= 0 gives an empty matrix.
            values: Optional row-major data, flat or nested, at least n * n
                values long. Extra values are ignored.
        """
        self._storage = None
        self._size = 0
        self._capacity = 0
        self.resize(n)
        if values is not None and self._size > 0:
            count = self._size * self._size
            self._storage[:count] = backend.as_elements(values)[:count]

    @classmethod
    def from_matrix(cls, other: 'SquareMatrix') -> 'SquareMatrix':
        """Deep copy of `other`, including its spare capacity."""
        obj = cls.__new__(cls)
        obj._size = other._size
        obj._capacity = other._capacity
        obj._storage = None if other._storage is None else other._storage.copy()
        return obj

    def copy(self) -> 'SquareMatrix':
        return SquareMatrix.from_matrix(self)

    def __copy__(self):
        return self.copy()

    def __deepcopy__(self, memo):
        return self.copy()

    @property
    def size(self) -> int:
        return self._size

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def shape(self):
        return (self._size, self._size)

    def _view(self) -> np.ndarray:
        """The (n, n) row-major view over the head of the storage buffer."""
        if self._storage is None:
            return np.zeros((0, 0), dtype=DTYPE)
        n = self._size
        return self._storage[:n * n].reshape(n, n)

    def _in_range(self, index) -> bool:
        return 0 <= index < self._size

    def to_numpy(self) -> np.ndarray:
        """Returns a copy of the logical n x n contents."""
        return self._view().copy()

    # --- Allocation ---

    def resize(self, req_n: int) -> 'SquareMatrix':
        """
        Request a new logical size.

        Grows the storage when req_n exceeds the capacity and reuses the
        buffer otherwise. The logical region is zeroed only when the capacity
        equals req_n afterwards, so shrinking into a larger buffer keeps
        whatever the buffer held before.
        """
        if req_n <= 0:
            logger.debug(f"Ignoring resize to non-positive size {req_n}")
            return self
        if req_n > self._capacity:
            logger.debug(f"Allocating storage for {req_n}x{req_n} (was {self._capacity})")
            self._storage = np.empty(req_n * req_n, dtype=DTYPE)
            self._capacity = req_n
        else:
            logger.debug(f"Reusing storage of capacity {self._capacity} for size {req_n}")
        self._size = req_n
        if self._capacity == req_n:
            self._storage[:req_n * req_n] = 0
        return self

    # --- Element access ---

    def set(self, row: int, col: int, value: int) -> 'SquareMatrix':
        """Writes `value` (wrapped into the int32 range) at (row, col); ignored when out of range."""
        if self._in_range(row) and self._in_range(col):
            self._storage[row * self._size + col] = backend.wrap_scalar(value)
        else:
            logger.debug(f"Ignoring write at ({row}, {col}) outside {self._size}x{self._size}")
        return self

    def get(self, row: int, col: int) -> int:
        if self._in_range(row) and self._in_range(col):
            return int(self._storage[row * self._size + col])
        logger.debug(f"Read at ({row}, {col}) outside {self._size}x{self._size}, returning 0")
        return 0

    # --- Fill algorithms ---

    def randomize(self, rng: np.random.Generator = None) -> 'SquareMatrix':
        """Fills every cell with a uniform random integer in [0, 9]."""
        backend.randomize(self._view(), rng if rng is not None else backend.get_rng())
        return self

    def randomize_sparse(self, count: int, rng: np.random.Generator = None) -> 'SquareMatrix':
        """Zeroes the matrix, then sets `count` randomly chosen cells to random values."""
        backend.randomize_sparse(self._view(), count, rng if rng is not None else backend.get_rng())
        return self

    def fill_diagonal(self, values) -> 'SquareMatrix':
        backend.fill_diagonal(self._view(), values)
        return self

    def fill_diagonal_offset(self, k: int, values) -> 'SquareMatrix':
        backend.fill_diagonal_offset(self._view(), k, values)
        return self

    def fill_column(self, x: int, values) -> 'SquareMatrix':
        if self._in_range(x):
            backend.fill_column(self._view(), x, values)
        else:
            logger.debug(f"Ignoring fill of column {x} outside size {self._size}")
        return self

    def fill_row(self, y: int, values) -> 'SquareMatrix':
        if self._in_range(y):
            backend.fill_row(self._view(), y, values)
        else:
            logger.debug(f"Ignoring fill of row {y} outside size {self._size}")
        return self

    def identity(self) -> 'SquareMatrix':
        backend.identity(self._view())
        return self

    def lower_triangle_ones(self) -> 'SquareMatrix':
        backend.lower_triangle_ones(self._view())
        return self

    def upper_triangle_ones(self) -> 'SquareMatrix':
        backend.upper_triangle_ones(self._view())
        return self

    def checkerboard(self) -> 'SquareMatrix':
        backend.checkerboard(self._view())
        return self

    def transpose(self) -> 'SquareMatrix':
        backend.transpose(self._view())
        return self

    # --- Arithmetic ---

    def _with_contents(self, data: np.ndarray) -> 'SquareMatrix':
        result = SquareMatrix(self._size)
        result._view()[...] = data
        return result

    def _mismatch(self, other: 'SquareMatrix', op: str) -> 'SquareMatrix':
        logger.debug(f"Size mismatch for {op}: {self._size} vs {other._size}, returning zero matrix")
        return SquareMatrix(self._size)

    def __add__(self, other):
        if isinstance(other, SquareMatrix):
            if other._size != self._size:
                return self._mismatch(other, '+')
            return self._with_contents(backend.add(self._view(), other._view()))
        if _is_scalar(other):
            return self._with_contents(backend.apply_scalar(self._view(), 'add', other))
        return NotImplemented

    def __radd__(self, other):
        if _is_scalar(other):
            return self.__add__(other)
        return NotImplemented

    def __sub__(self, other):
        if _is_scalar(other):
            return self._with_contents(backend.apply_scalar(self._view(), 'sub', other))
        return NotImplemented

    def __rsub__(self, other):
        if _is_scalar(other):
            return self._with_contents(backend.apply_scalar(self._view(), 'rsub', other))
        return NotImplemented

    def __mul__(self, other):
        if isinstance(other, SquareMatrix):
            return self.__matmul__(other)
        if _is_scalar(other):
            return self._with_contents(backend.apply_scalar(self._view(), 'mul', other))
        return NotImplemented

    def __rmul__(self, other):
        # Handles the case `2 * matrix`
        if _is_scalar(other):
            return self.__mul__(other)
        return NotImplemented

    def __matmul__(self, other):
        if not isinstance(other, SquareMatrix):
            return NotImplemented
        if other._size != self._size:
            return self._mismatch(other, '*')
        return self._with_contents(backend.multiply(self._view(), other._view()))

    # In-place scalar updates mutate this instance and return it

    def __iadd__(self, other):
        if not _is_scalar(other):
            return NotImplemented
        view = self._view()
        view += DTYPE(backend.wrap_scalar(other))
        return self

    def __isub__(self, other):
        if not _is_scalar(other):
            return NotImplemented
        view = self._view()
        view -= DTYPE(backend.wrap_scalar(other))
        return self

    def __imul__(self, other):
        if not _is_scalar(other):
            return NotImplemented
        view = self._view()
        view *= DTYPE(backend.wrap_scalar(other))
        return self

    def increment(self) -> 'SquareMatrix':
        """Adds 1 to every element. Returns this matrix, not a snapshot."""
        self += 1
        return self

    def decrement(self) -> 'SquareMatrix':
        """Subtracts 1 from every element. Returns this matrix, not a snapshot."""
        self -= 1
        return self

    def __call__(self, value: float) -> 'SquareMatrix':
        """
        Adds the integer part of `value` (truncated toward zero) to every element.
        A part outside the int32 range is wrapped like any other operand; `value`
        must be finite.
        """
        self += int(value)
        return self

    # --- Comparison ---

    def __eq__(self, other):
        if not isinstance(other, SquareMatrix):
            return NotImplemented
        if other._size != self._size:
            return False
        return bool(np.array_equal(self._view(), other._view()))

    # Mutable value type
    __hash__ = None

    def __gt__(self, other):
        """True only if every element is strictly greater than its counterpart."""
        if not isinstance(other, SquareMatrix):
            return NotImplemented
        if other._size != self._size:
            return False
        return bool(np.all(self._view() > other._view()))

    def __lt__(self, other):
        """True only if every element is strictly less than its counterpart."""
        if not isinstance(other, SquareMatrix):
            return NotImplemented
        if other._size != self._size:
            return False
        return bool(np.all(self._view() < other._view()))

    # --- Output ---

    def render(self) -> str:
        """
        Formats the matrix one row per line:

            |   1   0 |
            |   0   1 |

        Each element is right-aligned in a CELL_WIDTH field and every row
        ends with a newline.
        """
        lines = []
        for row in self._view():
            cells = " ".join(f"{int(v):>{CELL_WIDTH}}" for v in row)
            lines.append(f"| {cells} |\n")
        return "".join(lines)

    def __str__(self):
        return self.render()

    def __repr__(self):
        return f"SquareMatrix(size={self._size}, capacity={self._capacity})"
