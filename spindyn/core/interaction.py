"""
Assembly of the local pulsation vectors ω acting on each atom.

Sign convention: ω = (1/ħ) ∂H/∂s, i.e. ω = -γB for a magnetic field B.
Spins therefore relax antiparallel to ω, which is the sign taken by the
damping term of the dLLB equations.
"""

import numpy as np
from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Sequence

from . import algebra
from .atom import Atom
from .lattice import BoundaryConditions, compute_distance
from ..utils.constants import DEFAULT_CONSTANTS, PhysicalConstants


class FieldTerm(ABC):
    """Abstract base class for contributions to the local pulsation."""

    @abstractmethod
    def calculate_field(self, atoms: Sequence[Atom], site_idx: int) -> np.ndarray:
        """Calculate the pulsation contribution on a specific site (rad/ps)."""
        pass


class ZeemanTerm(FieldTerm):
    """Coupling to a uniform applied magnetic field."""

    def __init__(self, direction: np.ndarray, value: float, gamma: float):
        """
        Args:
            direction: Field direction (normalized here)
            value: Field strength in tesla
            gamma: Gyromagnetic ratio (rad/(ps·T))
        """
        self.direction = algebra.normalize(algebra.vector(direction))
        self.value = value
        self.gamma = gamma

    def calculate_field(self, atoms: Sequence[Atom], site_idx: int) -> np.ndarray:
        return -self.gamma * self.value * self.direction


class UniaxialTerm(FieldTerm):
    """Uniaxial anisotropy H = -K (u·s)², favouring alignment with the axis."""

    def __init__(self, axis: np.ndarray, value: float):
        """
        Args:
            axis: Easy axis (normalized here)
            value: Anisotropy constant K/ħ in rad/ps
        """
        self.axis = algebra.normalize(algebra.vector(axis))
        self.value = value

    def calculate_field(self, atoms: Sequence[Atom], site_idx: int) -> np.ndarray:
        projection = algebra.dot(self.axis, atoms[site_idx].spin)
        return -2.0 * self.value * projection * self.axis


class ExchangeTerm(FieldTerm):
    """Isotropic Heisenberg exchange H = -J Σ s_i·s_j between two atom types."""

    def __init__(
        self,
        atoms: Sequence[Atom],
        type_i: int,
        type_j: int,
        value: float,
        cutoff: float,
        bcs: Optional[BoundaryConditions] = None
    ):
        """
        Args:
            atoms: Atom collection, used once to build the neighbor lists
            type_i: Type of the atoms receiving the field
            type_j: Type of their neighbors
            value: Exchange constant J/ħ in rad/ps
            cutoff: Neighbor cutoff radius (nm)
            bcs: Boundary conditions (no periodicity by default)
        """
        if cutoff <= 0:
            raise ValueError(f"Cutoff radius must be positive, got {cutoff}")

        self.type_i = type_i
        self.type_j = type_j
        self.value = value
        self.cutoff = cutoff
        self.bcs = bcs if bcs is not None else BoundaryConditions()
        self.neighbors = self._find_neighbors(atoms)

    def _find_neighbors(self, atoms: Sequence[Atom]) -> Dict[int, List[int]]:
        neighbors = {}
        for i, atom_i in enumerate(atoms):
            if atom_i.type != self.type_i:
                continue
            neighbors[i] = [
                j for j, atom_j in enumerate(atoms)
                if j != i and atom_j.type == self.type_j
                and compute_distance(self.bcs, atom_i, atom_j) <= self.cutoff
            ]
        return neighbors

    def calculate_field(self, atoms: Sequence[Atom], site_idx: int) -> np.ndarray:
        field = algebra.vector()
        for j in self.neighbors.get(site_idx, []):
            field = field - self.value * atoms[j].spin
        return field

    def n_neighbors(self, site_idx: int) -> int:
        return len(self.neighbors.get(site_idx, []))


class Interaction:
    """
    Collection of field terms acting on an atom collection.

    Methods that add terms return ``self`` so calls can be chained::

        h = Interaction(atoms).zeeman_field("+z", 1.0).dampening(0.1)
    """

    def __init__(self, atoms: Optional[Sequence[Atom]] = None, constants: PhysicalConstants = DEFAULT_CONSTANTS):
        """
        Initialize the interaction.

        Args:
            atoms: Atoms whose ω is managed by this interaction
            constants: Physical constants context
        """
        self.atoms: List[Atom] = list(atoms) if atoms is not None else []
        self.constants = constants
        self.terms: List[FieldTerm] = []
        self.term_names: List[str] = []
        self.alpha = 0.0

    def add_term(self, term: FieldTerm, name: str) -> 'Interaction':
        """Add a field term and refresh ω."""
        self.terms.append(term)
        self.term_names.append(name)
        self.update()
        return self

    def zeeman_field(self, direction, value: float) -> 'Interaction':
        """Add an applied field of ``value`` tesla along ``direction``."""
        return self.add_term(ZeemanTerm(direction, value, self.constants.gamma), "zeeman")

    def uniaxial_field(self, axis, value: float) -> 'Interaction':
        """Add a uniaxial anisotropy of strength ``value`` rad/ps along ``axis``."""
        return self.add_term(UniaxialTerm(axis, value), "uniaxial")

    def exchange_field(
        self,
        type_i: int,
        type_j: int,
        value: float,
        cutoff: float,
        bcs: Optional[BoundaryConditions] = None
    ) -> 'Interaction':
        """Add exchange between atoms of types ``type_i`` and ``type_j``."""
        term = ExchangeTerm(self.atoms, type_i, type_j, value, cutoff, bcs)
        return self.add_term(term, f"exchange_{type_i}_{type_j}")

    def dampening(self, alpha: float) -> 'Interaction':
        """
        Include Gilbert damping in ω for the precession-only updates.

        ω is replaced by (ω - α s×ω)/(1 + α²), so that ds/dt = ω×s
        reproduces the Landau-Lifshitz form of the damped equation.
        """
        if alpha < 0:
            raise ValueError(f"Damping must be non-negative, got {alpha}")
        self.alpha = alpha
        self.update()
        return self

    def calculate_field(self, site_idx: int) -> np.ndarray:
        """Undamped pulsation on one site."""
        field = algebra.vector()
        for term in self.terms:
            field = field + term.calculate_field(self.atoms, site_idx)
        return field

    def update(self):
        """Recompute ω on every atom from the current spins."""
        fields = [self.calculate_field(i) for i in range(len(self.atoms))]

        for atom, field in zip(self.atoms, fields):
            if self.alpha > 0:
                c = 1.0 / (1.0 + self.alpha * self.alpha)
                field = c * (field - self.alpha * algebra.cross(atom.spin, field))
            atom.omega = field

    def to_dict(self) -> dict:
        return {
            'atoms': [atom.to_dict() for atom in self.atoms],
            'terms': list(self.term_names),
            'alpha': self.alpha,
        }

    def __repr__(self) -> str:
        return f"Interaction(n_atoms={len(self.atoms)}, terms={self.term_names}, alpha={self.alpha})"
