"""Physical constants.

Internal units are meV for energies, picoseconds for times, kelvin for
temperatures and tesla for magnetic fields, so pulsations come out in rad/ps.
"""

from dataclasses import dataclass, replace

import numpy as np

# Physical constants
PHYSICAL_CONSTANTS = {
    # Boltzmann constant
    'kB': 8.617333262e-2,  # meV/K

    # Reduced Planck constant
    'hbar': 6.582119569e-1,  # meV·ps

    # Bohr magneton
    'mu_B': 5.7883818060e-2,  # meV/T

    # Gyromagnetic ratio for electron
    'gamma_e': 1.76085963023e-1,  # rad/(ps·T)
}


@dataclass(frozen=True)
class PhysicalConstants:
    """
    Immutable set of constants handed to the equations of motion.

    Attributes:
        kB: Boltzmann constant (meV/K)
        hbar: Reduced Planck constant (meV·ps)
        gamma: Gyromagnetic ratio (rad/(ps·T))
        mu_B: Bohr magneton (meV/T)
    """
    kB: float = PHYSICAL_CONSTANTS['kB']
    hbar: float = PHYSICAL_CONSTANTS['hbar']
    gamma: float = PHYSICAL_CONSTANTS['gamma_e']
    mu_B: float = PHYSICAL_CONSTANTS['mu_B']

    def __post_init__(self):
        for name in ('kB', 'hbar', 'gamma', 'mu_B'):
            value = getattr(self, name)
            if not np.isfinite(value) or value <= 0:
                raise ValueError(f"Physical constant {name} must be positive and finite, got {value}")

    def with_values(self, **kwargs) -> 'PhysicalConstants':
        """Return a copy with some constants replaced."""
        return replace(self, **kwargs)


DEFAULT_CONSTANTS = PhysicalConstants()


def energy_to_pulsation(energy: float, constants: PhysicalConstants = DEFAULT_CONSTANTS) -> float:
    """
    Convert an energy in meV to a pulsation in rad/ps.

    Args:
        energy: Energy in meV
        constants: Constants context

    Returns:
        Pulsation E/hbar
    """
    return energy / constants.hbar
