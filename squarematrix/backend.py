# --- Purpose: Contains the numpy kernels behind SquareMatrix fills and arithmetic. ---

import logging

import numpy as np

from .config import DTYPE, RANDOM_LOW, RANDOM_HIGH, RANDOM_SEED

logger = logging.getLogger(__name__)

# Process-wide generator shared by every random fill
_rng = np.random.default_rng(RANDOM_SEED)


def seed(value=None):
    """Reseeds the process-wide generator. None draws fresh OS entropy."""
    global _rng
    _rng = np.random.default_rng(value)
    logger.debug(f"Random generator reseeded with {value!r}")


def get_rng() -> np.random.Generator:
    """Returns the process-wide generator."""
    return _rng


# Element arithmetic wraps modulo 2**bits; operands are wrapped the same way
_ELEMENT_INFO = np.iinfo(DTYPE)
_ELEMENT_SPAN = int(_ELEMENT_INFO.max) - int(_ELEMENT_INFO.min) + 1


def wrap_scalar(value) -> int:
    """Wraps an integer of any magnitude into the element range, e.g. 2**31 -> -2**31."""
    low = int(_ELEMENT_INFO.min)
    return (int(value) - low) % _ELEMENT_SPAN + low


def as_elements(values) -> np.ndarray:
    """Flattens a flat or nested sequence of integers into a wrapped element array."""
    flat = np.asarray(values, dtype=object).ravel()
    return np.array([wrap_scalar(v) for v in flat], dtype=DTYPE)


def _random_cells(rng: np.random.Generator, size):
    return rng.integers(RANDOM_LOW, RANDOM_HIGH, size=size, endpoint=True, dtype=DTYPE)


# --- Fill kernels ---
# Every kernel takes the (n, n) logical view of a matrix and writes into it.

def randomize(view: np.ndarray, rng: np.random.Generator):
    view[...] = _random_cells(rng, view.shape)


def randomize_sparse(view: np.ndarray, count: int, rng: np.random.Generator):
    """Zeroes the view, then sets `count` random cells to random values (collisions allowed)."""
    view[...] = 0
    n = view.shape[0]
    if n == 0 or count <= 0:
        return
    rows = rng.integers(0, n, size=count)
    cols = rng.integers(0, n, size=count)
    view[rows, cols] = _random_cells(rng, count)


def fill_diagonal(view: np.ndarray, values):
    n = view.shape[0]
    view[...] = 0
    idx = np.arange(n)
    view[idx, idx] = as_elements(values)[:n]


def fill_diagonal_offset(view: np.ndarray, k: int, values):
    """
    Zeroes the view and places values along the k-th diagonal.
    k > 0 is above the main diagonal, k < 0 below it. Values are consumed
    in order, one per row whose target column (row + k) is in range.
    """
    n = view.shape[0]
    view[...] = 0
    rows = np.arange(max(0, -k), min(n, n - k))
    if rows.size == 0:
        return
    view[rows, rows + k] = as_elements(values)[:rows.size]


def fill_column(view: np.ndarray, x: int, values):
    n = view.shape[0]
    view[:, x] = as_elements(values)[:n]


def fill_row(view: np.ndarray, y: int, values):
    n = view.shape[0]
    view[y, :] = as_elements(values)[:n]


def identity(view: np.ndarray):
    view[...] = np.eye(view.shape[0], dtype=DTYPE)


def lower_triangle_ones(view: np.ndarray):
    # Strictly below the main diagonal
    view[...] = np.tri(view.shape[0], k=-1, dtype=DTYPE)


def upper_triangle_ones(view: np.ndarray):
    # Strictly above the main diagonal
    view[...] = np.tri(view.shape[0], k=-1, dtype=DTYPE).T


def checkerboard(view: np.ndarray):
    idx = np.arange(view.shape[0])
    view[...] = np.add.outer(idx, idx) % 2


def transpose(view: np.ndarray):
    # Copy first: assigning a view's own transpose back into it aliases
    view[...] = view.T.copy()


# --- Arithmetic kernels ---

def add(A: np.ndarray, B: np.ndarray) -> np.ndarray:
    """Element-wise sum of two equally sized views: C = A + B."""
    return (A + B).astype(DTYPE, copy=False)


def multiply(A: np.ndarray, B: np.ndarray) -> np.ndarray:
    """Matrix product C = A @ B, C[i][j] = sum_k A[i][k] * B[k][j]."""
    return (A @ B).astype(DTYPE, copy=False)


def apply_scalar(view: np.ndarray, op: str, scalar: int) -> np.ndarray:
    """
    Applies a scalar operation to every element and returns a new array.

    Args:
        view: The (n, n) logical view of a matrix
        op: One of 'add', 'sub', 'mul', 'rsub' (scalar - element)
        scalar: Integer operand, wrapped into the element range first
    """
    s = DTYPE(wrap_scalar(scalar))
    if op == 'add':
        result = view + s
    elif op == 'sub':
        result = view - s
    elif op == 'mul':
        result = view * s
    elif op == 'rsub':
        result = s - view
    else:
        raise ValueError(f"Unknown scalar operation: {op}")
    return result.astype(DTYPE, copy=False)
