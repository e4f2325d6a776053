"""
Undamped precession of a unit spin around its local pulsation vector.

Every update returns a new unit vector; the input spin is not modified.
"""

import numpy as np
from typing import Union

from ..core import algebra
from .integrators import RK4Integrator
from .schemes import PrecessionMethod


def euler_step(spin: np.ndarray, omega: np.ndarray, dt: float) -> np.ndarray:
    """First-order explicit step s + dt (ω × s), renormalized."""
    s = spin + dt * algebra.cross(omega, spin)
    return algebra.normalize(s)


def symplectic_step(spin: np.ndarray, omega: np.ndarray, dt: float) -> np.ndarray:
    """
    Implicit midpoint step solved in closed form.

    With ω² = ω·ω, c = dt²/4 and c2 = 1/(1 + c ω²)::

        s1    = c (2 (ω·s) ω - ω² s) + dt (ω × s)
        s_new = c2 (s + s1)

    The implicit midpoint rule conserves |s| exactly; the final
    renormalization only removes rounding drift.
    """
    omega2 = algebra.dot(omega, omega)
    c = 0.25 * dt * dt
    c2 = 1.0 / (1.0 + c * omega2)

    s1 = c * ((2.0 * algebra.dot(omega, spin)) * omega - omega2 * spin)
    s1 = s1 + dt * algebra.cross(omega, spin)

    s = c2 * (spin + s1)
    return algebra.normalize(s)


def rotation_step(spin: np.ndarray, omega: np.ndarray, dt: float) -> np.ndarray:
    """
    Exact rotation of s about Ω = ω/|ω| by the angle ξ = |ω| dt.

    Rodrigues formula: s cos ξ + (Ω × s) sin ξ + (Ω·s)(1 - cos ξ) Ω.

    Raises:
        ValueError: If ω has zero or non-finite length, the rotation axis is undefined
    """
    n = algebra.norm(omega)
    if not np.isfinite(n) or n == 0.0:
        raise ValueError(f"Cannot rotate a spin around the pulsation vector {omega}")

    axis = (1.0 / n) * omega
    xi = n * dt
    chi = algebra.dot(axis, spin)

    s = np.cos(xi) * spin + np.sin(xi) * algebra.cross(axis, spin) + (chi * (1.0 - np.cos(xi))) * axis
    return algebra.normalize(s)


def rk4_step(spin: np.ndarray, omega: np.ndarray, dt: float) -> np.ndarray:
    """Classical RK4 on ds/dt = ω × s at fixed ω, renormalized."""
    s = RK4Integrator().step(spin, lambda x: algebra.cross(omega, x), dt)
    return algebra.normalize(s)


_STEPS = {
    PrecessionMethod.EULER: euler_step,
    PrecessionMethod.SYMPLECTIC: symplectic_step,
    PrecessionMethod.FULL: rotation_step,
    PrecessionMethod.RK4: rk4_step,
}


def precess(
    spin: np.ndarray,
    omega: np.ndarray,
    dt: float,
    method: Union[str, PrecessionMethod] = PrecessionMethod.SYMPLECTIC
) -> np.ndarray:
    """
    Advance a unit spin by one precession step.

    Args:
        spin: Current unit spin
        omega: Local pulsation vector (rad/ps)
        dt: Time step (ps)
        method: "euler", "symplectic", "full" or "rk4"

    Returns:
        New unit spin
    """
    method = PrecessionMethod.parse(method)
    return _STEPS[method](np.asarray(spin, dtype=float), np.asarray(omega, dtype=float), dt)
