"""
SpinDyn: atomistic spin dynamics with the sLLG and dLLB equations.

Integrates the precession of atomic spins around their local pulsation
vectors, or the first and second moments of the spin distribution coupled
to a thermal bath, and sweeps temperatures to trace Curie curves.
"""

__version__ = "0.1.0"

from . import utils
from . import core
from . import dynamics
from . import analysis
from . import simulation

from .core import Atom, Moments, Interaction, BoundaryConditions, InitialParameters, build_lattice
from .dynamics import Evolver, EquationFamily, IntegrationScheme, MomentMethod, PrecessionMethod
from .simulation import CurieScanParameters, SimulationProgram
from .utils.constants import PhysicalConstants, DEFAULT_CONSTANTS

__all__ = [
    "Atom",
    "Moments",
    "Interaction",
    "BoundaryConditions",
    "InitialParameters",
    "build_lattice",
    "Evolver",
    "EquationFamily",
    "IntegrationScheme",
    "MomentMethod",
    "PrecessionMethod",
    "CurieScanParameters",
    "SimulationProgram",
    "PhysicalConstants",
    "DEFAULT_CONSTANTS",
    "utils",
    "core",
    "dynamics",
    "analysis",
    "simulation",
]
