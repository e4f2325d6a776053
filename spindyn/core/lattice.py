"""
Crystal generation and inter-atomic distances.
"""

import numpy as np
from dataclasses import dataclass, field
from typing import Any, Dict, List, Sequence, Tuple, Union
from ase import Atoms

from . import algebra
from .atom import Atom
from .moments import Moments


@dataclass(frozen=True, eq=False)
class InitialParameters:
    """Species and initial state shared by every atom of a generated crystal."""
    name: str
    type: int
    spin: np.ndarray = field(default_factory=algebra.vector)
    moments: Moments = field(default_factory=Moments)
    g: float = 0.0

    def __post_init__(self):
        if self.g < 0:
            raise ValueError(f"g factor must be non-negative, got {self.g}")
        object.__setattr__(self, 'spin', algebra.vector(self.spin))

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'type': self.type,
            'spin': self.spin.tolist(),
            'moments': self.moments.to_dict(),
            'g': self.g,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'InitialParameters':
        return cls(
            name=data['name'],
            type=data['type'],
            spin=data.get('spin', [0.0, 0.0, 0.0]),
            moments=Moments.from_dict(data['moments']) if 'moments' in data else Moments(),
            g=data.get('g', 0.0)
        )


@dataclass(frozen=True, eq=False)
class BoundaryConditions:
    """
    Simulation box and periodicity.

    Attributes:
        box_size: Edge lengths of the orthorhombic box (nm)
        pbc: Whether distances use the minimum-image convention
    """
    box_size: np.ndarray = field(default_factory=algebra.vector)
    pbc: bool = False

    def __post_init__(self):
        box = algebra.vector(self.box_size)
        if self.pbc and np.any(box <= 0):
            raise ValueError(f"Periodic boundaries need a positive box size, got {box.tolist()}")
        object.__setattr__(self, 'box_size', box)

    @classmethod
    def parse(cls, box_size, pbc: Union[bool, str]) -> 'BoundaryConditions':
        """Accept the "on"/"off" switch used in configuration files."""
        if isinstance(pbc, str):
            key = pbc.strip().lower()
            if key not in ("on", "off"):
                raise ValueError(f"Unknown PBC switch: {pbc}. Must be 'on' or 'off'")
            pbc = key == "on"
        return cls(box_size=box_size, pbc=bool(pbc))


def fcc_unit_cell() -> np.ndarray:
    """Fractional positions of the 4-atom conventional face-centered cubic cell."""
    return np.array([
        [0.0, 0.0, 0.0],
        [0.0, 0.5, 0.5],
        [0.5, 0.0, 0.5],
        [0.5, 0.5, 0.0],
    ])


def build_lattice(
    unit_cell: Union[Sequence[Atom], np.ndarray],
    supercell: Tuple[int, int, int],
    lattice_constant: float,
    initial: InitialParameters
) -> List[Atom]:
    """
    Replicate a unit cell into a supercell of fully initialized atoms.

    Positions are a·(p + (i, j, k)) with i outermost, k innermost and the
    unit cell atoms varying fastest.

    Args:
        unit_cell: Atoms (only their positions are used) or an (n, 3) array of
            fractional positions
        supercell: Number of cells along x, y, z
        lattice_constant: Cubic lattice constant (nm)
        initial: Species and initial spin state given to every atom

    Returns:
        List of atoms
    """
    if len(unit_cell) == 0:
        raise ValueError("Unit cell must contain at least one atom")
    if lattice_constant <= 0:
        raise ValueError(f"Lattice constant must be positive, got {lattice_constant}")
    reps = tuple(int(n) for n in supercell)
    if len(reps) != 3 or any(n < 1 for n in reps):
        raise ValueError(f"Supercell must be three positive integers, got {supercell}")

    fractional = np.array([
        a.position if isinstance(a, Atom) else algebra.vector(a) for a in unit_cell
    ])

    cell = Atoms(
        symbols=['X'] * len(fractional),
        scaled_positions=fractional,
        cell=lattice_constant * np.eye(3),
        pbc=True
    )
    crystal = cell.repeat(reps)

    return [Atom.from_parameters(initial, position) for position in crystal.get_positions()]


def box_size(supercell: Tuple[int, int, int], lattice_constant: float) -> np.ndarray:
    """Edge lengths of the box spanned by a cubic supercell."""
    return lattice_constant * np.array(supercell, dtype=float)


def _round_half_away(x: float) -> float:
    return float(np.sign(x) * np.floor(np.abs(x) + 0.5))


def compute_distance(bcs: BoundaryConditions, atom1: Atom, atom2: Atom) -> float:
    """
    Distance between two atoms, using the minimum image when periodic.

    Args:
        bcs: Boundary conditions
        atom1: First atom
        atom2: Second atom

    Returns:
        Distance (nm)
    """
    if not bcs.pbc:
        return algebra.distance(atom1.position, atom2.position)

    xij = atom1.position - atom2.position
    for k in range(3):
        length = bcs.box_size[k]
        xij[k] -= length * _round_half_away(xij[k] / length)
    return algebra.norm(xij)
