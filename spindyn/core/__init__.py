"""Core state: vector algebra, atoms, lattices and field assembly."""

from . import algebra
from .moments import Moments
from .atom import Atom
from .lattice import BoundaryConditions, InitialParameters, build_lattice, compute_distance, fcc_unit_cell
from .interaction import Interaction

__all__ = [
    "algebra",
    "Moments",
    "Atom",
    "BoundaryConditions",
    "InitialParameters",
    "build_lattice",
    "compute_distance",
    "fcc_unit_cell",
    "Interaction",
]
