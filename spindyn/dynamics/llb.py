"""
Right-hand side of the dLLB moment-closure equations.

The dynamics of the first moment s = ⟨S⟩ and the second moment
Σ = ⟨S⊗S⟩ of an atom precessing around ω and coupled to a bath at
temperature T with damping α read, with c = 1/(1+α²) and the diffusion
coefficient D = α k_B T / ħ::

    ds/dt = c [ ω×s - α (tr(Σ) ω - Σᵀω) - 2 D c s ]
    dΣ/dt = c [ M1 + D c M2 + M1ᵀ ]

where M1 = ω×Σᵀ - α A1 (cross product taken column-wise),
M2 = 2 tr(Σ) I - 3 (Σ + Σᵀ), and with W = ω⊗s, P = s⊗s::

    A1 = tr(Σ) W - ΣᵀW + WΣᵀ - tr(W) Σᵀ + (W - Wᵀ) Σᵀ - 2 (tr(P) W - PᵀW)
"""

import numpy as np
from typing import Callable

from ..core import algebra
from ..core.moments import Moments
from ..utils.constants import DEFAULT_CONSTANTS, PhysicalConstants


def diffusion_coefficient(
    temperature: float,
    alpha: float,
    constants: PhysicalConstants = DEFAULT_CONSTANTS
) -> float:
    """
    Diffusion coefficient D = α/(β ħ) = α k_B T / ħ in 1/ps.

    Raises:
        ValueError: For a negative or non-finite temperature or damping
    """
    if not np.isfinite(temperature) or temperature < 0:
        raise ValueError(f"Temperature must be finite and non-negative, got {temperature}")
    if not np.isfinite(alpha) or alpha < 0:
        raise ValueError(f"Damping must be finite and non-negative, got {alpha}")
    return alpha * constants.kB * temperature / constants.hbar


def llb_rhs(
    moments: Moments,
    omega: np.ndarray,
    temperature: float,
    alpha: float,
    constants: PhysicalConstants = DEFAULT_CONSTANTS
) -> Moments:
    """
    Time derivative of the moments.

    Args:
        moments: Current first and second moments
        omega: Local pulsation vector (rad/ps)
        temperature: Bath temperature (K), T = 0 gives D = 0
        alpha: Dimensionless damping
        constants: Physical constants context

    Returns:
        Derivative {ds/dt, dΣ/dt}
    """
    D = diffusion_coefficient(temperature, alpha, constants)
    c = 1.0 / (1.0 + alpha * alpha)

    spin = moments.spin
    sigma = moments.sigma
    sigma_t = algebra.transpose(sigma)
    tr_sigma = algebra.trace(sigma)
    I = algebra.identity()

    W = algebra.outer(omega, spin)
    P = algebra.outer(spin, spin)

    A1 = tr_sigma * W - algebra.matmul(sigma_t, W)
    A1 = A1 + algebra.matmul(W, sigma_t) - algebra.trace(W) * sigma_t
    A1 = A1 + algebra.matmul(W - algebra.transpose(W), sigma_t)
    A1 = A1 - 2 * (algebra.trace(P) * W - algebra.matmul(algebra.transpose(P), W))

    M1 = algebra.cross_matrix(omega, sigma_t) - alpha * A1
    M2 = 2 * tr_sigma * I - 3 * (sigma + sigma_t)

    damping = alpha * tr_sigma * omega - alpha * algebra.matvec(sigma_t, omega)
    dspin = c * (algebra.cross(omega, spin) - damping - 2 * D * c * spin)
    dsigma = c * (M1 + D * c * M2 + algebra.transpose(M1))

    return Moments(dspin, dsigma)


def llb_rhs_factory(
    omega: np.ndarray,
    temperature: float,
    alpha: float,
    constants: PhysicalConstants = DEFAULT_CONSTANTS
) -> Callable[[Moments], Moments]:
    """
    Bind the fixed parameters of ``llb_rhs`` for use with an integrator.

    Parameters are validated when the closure is built.
    """
    diffusion_coefficient(temperature, alpha, constants)
    omega = algebra.vector(omega)

    def rhs(moments: Moments) -> Moments:
        return llb_rhs(moments, omega, temperature, alpha, constants)

    return rhs
