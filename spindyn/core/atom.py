"""
Per-atom physical state and single-atom time advance.
"""

import numpy as np
from typing import Any, Dict, Optional, Union

from . import algebra
from .moments import Moments
from ..dynamics.integrators import EulerIntegrator, RK4Integrator
from ..dynamics.llb import llb_rhs_factory
from ..dynamics.precession import precess
from ..dynamics.schemes import MomentMethod, PrecessionMethod
from ..utils.constants import DEFAULT_CONSTANTS, PhysicalConstants


class Atom:
    """
    One lattice site: species, position, spin and the local pulsation vector.

    ``spin`` is a unit vector on the sLLG path. On the dLLB path ``moments``
    is authoritative and ``spin`` mirrors ``moments.spin`` after each step,
    so its length may drop below one.
    """

    def __init__(
        self,
        name: str = "",
        type: int = 0,
        position=None,
        spin=None,
        omega=None,
        moments: Optional[Moments] = None,
        g: float = 0.0
    ):
        """
        Initialize an atom.

        Args:
            name: Name of the atomic species
            type: Integer identifier of the atomic type
            position: Cartesian position (nm)
            spin: Spin direction as a unit vector (or a label like "+z")
            omega: Local pulsation vector (rad/ps)
            moments: First and second moments for the dLLB equations
            g: Landé factor in Bohr magneton units

        Raises:
            ValueError: If g is negative
        """
        if not np.isfinite(g) or g < 0:
            raise ValueError(f"g factor must be non-negative, got {g}")

        self.name = name
        self.type = int(type)
        self.g = float(g)
        self.position = algebra.vector() if position is None else algebra.vector(position)
        self.spin = algebra.vector() if spin is None else algebra.vector(spin)
        self.omega = algebra.vector() if omega is None else algebra.vector(omega)
        self.moments = Moments() if moments is None else moments.copy()

    @classmethod
    def from_parameters(cls, params, position=None) -> 'Atom':
        """Create an atom from ``InitialParameters`` at a given position."""
        return cls(
            name=params.name,
            type=params.type,
            position=position,
            spin=params.spin,
            moments=params.moments,
            g=params.g
        )

    def advance_spin(self, method: Union[str, PrecessionMethod], dt: float):
        """
        Precess the spin around ω without thermal moments.

        Args:
            method: "euler", "symplectic", "full" or "rk4"
            dt: Time step (ps)
        """
        self.spin = precess(self.spin, self.omega, dt, method)

    def advance_moments(
        self,
        method: Union[str, MomentMethod],
        dt: float,
        temperature: float = 0.0,
        alpha: float = 0.0,
        constants: PhysicalConstants = DEFAULT_CONSTANTS
    ):
        """
        Advance the first and second moments with the dLLB equations.

        The norm of the spin is not restored after the step.

        Args:
            method: "euler" or "rk4"
            dt: Time step (ps)
            temperature: Bath temperature (K)
            alpha: Dimensionless damping
            constants: Physical constants context

        Raises:
            NotImplementedError: For the reserved "expio1" integrator
        """
        method = MomentMethod.parse(method)
        if method is MomentMethod.EXPIO1:
            raise NotImplementedError("The expio1 exponential integrator is not implemented")

        rhs = llb_rhs_factory(self.omega, temperature, alpha, constants)
        integrator = RK4Integrator() if method is MomentMethod.RK4 else EulerIntegrator()

        self.moments = integrator.step(self.moments, rhs, dt)
        self.spin = self.moments.spin.copy()

    def magnetic_moment(self) -> np.ndarray:
        """Magnetic moment g·S in Bohr magnetons."""
        return self.g * self.spin

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'type': self.type,
            'g': self.g,
            'position': self.position.tolist(),
            'spin': self.spin.tolist(),
            'omega': self.omega.tolist(),
            'moments': self.moments.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Atom':
        moments = data.get('moments')
        return cls(
            name=data.get('name', ""),
            type=data.get('type', 0),
            position=data.get('position'),
            spin=data.get('spin'),
            omega=data.get('omega'),
            moments=Moments.from_dict(moments) if moments is not None else None,
            g=data.get('g', 0.0)
        )

    def __repr__(self) -> str:
        return (f"Atom(name={self.name!r}, type={self.type}, g={self.g}, "
                f"position={self.position.tolist()}, spin={self.spin.tolist()})")
