"""
Dense 3-vector and 3x3-matrix algebra.

Vectors are float64 arrays of shape (3,), matrices float64 arrays of shape
(3, 3). Every function returns a new array except ``normalize``, which works
in place. The usual laws hold: ``add`` is commutative and associative,
``scale`` distributes over ``add``, ``transpose(matmul(a, b)) ==
matmul(transpose(b), transpose(a))`` and ``trace(transpose(m)) == trace(m)``.
"""

import numpy as np
from typing import Sequence, Union

VectorLike = Union[np.ndarray, Sequence[float]]

_DIRECTIONS = {
    "+x": (1.0, 0.0, 0.0), "-x": (-1.0, 0.0, 0.0),
    "+y": (0.0, 1.0, 0.0), "-y": (0.0, -1.0, 0.0),
    "+z": (0.0, 0.0, 1.0), "-z": (0.0, 0.0, -1.0),
}


def vector(x: Union[float, str, VectorLike] = 0.0, y: float = 0.0, z: float = 0.0) -> np.ndarray:
    """
    Build a 3-vector.

    Args:
        x: x component, a direction label ("+x", "-z", ...) or an iterable of
            three components
        y: y component
        z: z component

    Returns:
        Array of shape (3,)
    """
    if isinstance(x, str):
        key = x.strip().lower()
        if key not in _DIRECTIONS:
            raise ValueError(f"Unknown direction: {x}. Must be one of {list(_DIRECTIONS)}")
        return np.array(_DIRECTIONS[key], dtype=float)

    if np.ndim(x) > 0:
        v = np.array(x, dtype=float)
        if v.shape != (3,):
            raise ValueError(f"A vector needs exactly 3 components, got shape {v.shape}")
        return v

    return np.array([x, y, z], dtype=float)


def matrix(*components, fill: str = None) -> np.ndarray:
    """
    Build a 3x3 matrix.

    Args:
        components: Nine components in row-major order, a single (3, 3)
            array-like, or nothing for the zero matrix
        fill: "identity" for the identity matrix

    Returns:
        Array of shape (3, 3)
    """
    if fill is not None:
        if fill.lower() == "identity":
            return identity()
        raise ValueError(f"Unknown fill mode: {fill}")

    if len(components) == 0:
        return zeros_matrix()

    if len(components) == 1:
        m = np.array(components[0], dtype=float)
    else:
        m = np.array(components, dtype=float)

    if m.size != 9:
        raise ValueError(f"A matrix needs exactly 9 components, got {m.size}")
    return m.reshape(3, 3)


def identity() -> np.ndarray:
    return np.eye(3)


def zeros_matrix() -> np.ndarray:
    return np.zeros((3, 3))


def add(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    return a + b


def subtract(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    return a - b


def scale(factor: float, a: np.ndarray) -> np.ndarray:
    """Multiply a vector or a matrix by a scalar."""
    return factor * a


def dot(a: np.ndarray, b: np.ndarray) -> float:
    # Written out so the summation order is fixed
    return float(a[0]*b[0] + a[1]*b[1] + a[2]*b[2])


def cross(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    return np.array([
        a[1]*b[2] - a[2]*b[1],
        a[2]*b[0] - a[0]*b[2],
        a[0]*b[1] - a[1]*b[0],
    ])


def outer(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    """Tensor product a ⊗ b, i.e. m[i, j] = a[i] * b[j]."""
    return np.outer(a, b)


def norm(a: np.ndarray) -> float:
    return float(np.sqrt(dot(a, a)))


def normalize(a: np.ndarray) -> np.ndarray:
    """
    Scale a vector to unit length in place.

    A zero-length vector is left unchanged.

    Args:
        a: Vector to normalize (modified)

    Returns:
        The same array, for chaining
    """
    n = norm(a)
    if n > 0:
        a /= n
    return a


def distance(a: np.ndarray, b: np.ndarray) -> float:
    return norm(a - b)


# Matrix operations

def matrix_add(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    return a + b


def matrix_scale(factor: float, m: np.ndarray) -> np.ndarray:
    return factor * m


def transpose(m: np.ndarray) -> np.ndarray:
    return m.T.copy()


def trace(m: np.ndarray) -> float:
    return float(m[0, 0] + m[1, 1] + m[2, 2])


def matmul(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    return a @ b


def matvec(m: np.ndarray, v: np.ndarray) -> np.ndarray:
    return m @ v


def skew(w: np.ndarray) -> np.ndarray:
    """Skew-symmetric matrix [w]x such that skew(w) @ v == cross(w, v)."""
    return np.array([
        [0.0, -w[2], w[1]],
        [w[2], 0.0, -w[0]],
        [-w[1], w[0], 0.0],
    ])


def cross_matrix(w: np.ndarray, m: np.ndarray) -> np.ndarray:
    """
    Cross product of a vector with a matrix, taken column by column.

    Column j of the result is ``cross(w, m[:, j])``, which equals
    ``skew(w) @ m``.
    """
    result = np.empty((3, 3))
    for j in range(3):
        result[:, j] = cross(w, m[:, j])
    return result
