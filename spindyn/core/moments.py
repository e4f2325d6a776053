"""
First and second moments of the local spin distribution.
"""

import numpy as np
from typing import Any, Dict, Optional

from . import algebra


class Moments:
    """
    Pair {⟨S⟩, ⟨S⊗S⟩} used as a single ODE state in the dLLB equations.

    Addition and multiplication by a scalar act component-wise on both
    fields, so ``Moments`` form a vector space and can be handed to any
    integrator that only needs ``+`` and scalar ``*``. Instances are treated
    as immutable values: every operation returns a new object.
    """

    __slots__ = ("spin", "sigma")

    # numpy scalars must defer to __rmul__ instead of broadcasting
    __array_ufunc__ = None

    def __init__(self, spin: Optional[np.ndarray] = None, sigma: Optional[np.ndarray] = None):
        """
        Args:
            spin: First moment ⟨S⟩ (defaults to the zero vector)
            sigma: Second moment ⟨S⊗S⟩ (defaults to the zero matrix)
        """
        self.spin = algebra.vector() if spin is None else algebra.vector(spin)
        self.sigma = algebra.zeros_matrix() if sigma is None else algebra.matrix(sigma)

    @classmethod
    def zeros(cls) -> 'Moments':
        return cls()

    @classmethod
    def from_spin(cls, spin) -> 'Moments':
        """Sharp distribution centred on ``spin``: sigma = s ⊗ s."""
        s = algebra.vector(spin)
        return cls(s, algebra.outer(s, s))

    def add(self, other: 'Moments') -> 'Moments':
        return Moments(algebra.add(self.spin, other.spin), algebra.matrix_add(self.sigma, other.sigma))

    def scale(self, factor: float) -> 'Moments':
        return Moments(algebra.scale(factor, self.spin), algebra.matrix_scale(factor, self.sigma))

    def __add__(self, other: 'Moments') -> 'Moments':
        if not isinstance(other, Moments):
            return NotImplemented
        return self.add(other)

    def __sub__(self, other: 'Moments') -> 'Moments':
        if not isinstance(other, Moments):
            return NotImplemented
        return self.add(other.scale(-1.0))

    def __mul__(self, factor: float) -> 'Moments':
        if not np.isscalar(factor):
            return NotImplemented
        return self.scale(float(factor))

    __rmul__ = __mul__

    def __neg__(self) -> 'Moments':
        return self.scale(-1.0)

    def copy(self) -> 'Moments':
        return Moments(self.spin.copy(), self.sigma.copy())

    def allclose(self, other: 'Moments', rtol: float = 1e-12, atol: float = 1e-12) -> bool:
        return (np.allclose(self.spin, other.spin, rtol=rtol, atol=atol)
                and np.allclose(self.sigma, other.sigma, rtol=rtol, atol=atol))

    def to_dict(self) -> Dict[str, Any]:
        return {'spin': self.spin.tolist(), 'sigma': self.sigma.tolist()}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Moments':
        return cls(data['spin'], data['sigma'])

    def __eq__(self, other) -> bool:
        if not isinstance(other, Moments):
            return NotImplemented
        return np.array_equal(self.spin, other.spin) and np.array_equal(self.sigma, other.sigma)

    __hash__ = None

    def __repr__(self) -> str:
        return f"Moments(spin={self.spin.tolist()}, sigma={self.sigma.tolist()})"
