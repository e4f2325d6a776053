"""Spin dynamics: precession, dLLB moments and time integration."""

from .schemes import EquationFamily, IntegrationScheme, MomentMethod, PrecessionMethod
from .integrators import EulerIntegrator, RK4Integrator, create_integrator
from .precession import precess
from .llb import llb_rhs
from .evolver import Evolver, Trajectory

__all__ = [
    "EquationFamily",
    "IntegrationScheme",
    "MomentMethod",
    "PrecessionMethod",
    "EulerIntegrator",
    "RK4Integrator",
    "create_integrator",
    "precess",
    "llb_rhs",
    "Evolver",
    "Trajectory",
]
