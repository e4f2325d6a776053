"""
Simulation programs built on top of the integrator driver.

Available programs:

1) curie_temperature: sweeps the bath temperature, relaxing the dLLB
   moments at every temperature, to trace |M|(T) and locate the Curie
   temperature.

The optical_pulse, macrospin and paramagnetic_spins programs are reserved
names; the laser two-temperature model they rely on is not part of this
package.
"""

import threading
import warnings
import numpy as np
from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional, Union

from ..analysis.magnetization import get_magnetization
from ..dynamics.evolver import Evolver
from ..dynamics.schemes import EquationFamily, IntegrationScheme, MethodEnum
from ..utils import io


class SimulationProgramName(MethodEnum):
    CURIE_TEMPERATURE = "curie_temperature"
    OPTICAL_PULSE = "optical_pulse"
    MACROSPIN = "macrospin"
    PARAMAGNETIC_SPINS = "paramagneticspins"


@dataclass(frozen=True)
class CurieScanParameters:
    """
    Parameters of a temperature sweep.

    Attributes:
        T_initial: First temperature (K)
        T_step: Temperature increment (K)
        T_final: Sweep stops before reaching this temperature (K)
        time_step: Integration time step (ps)
        stop: Integration time at each temperature (ps)
        alpha: Dimensionless damping
    """
    T_initial: float = 0.0
    T_step: float = 25.0
    T_final: float = 250.0
    time_step: float = 1e-2
    stop: float = 10.0
    alpha: float = 0.1

    def __post_init__(self):
        for name, value in asdict(self).items():
            if not np.isfinite(value):
                raise ValueError(f"{name} must be finite, got {value}")
        if self.T_initial < 0:
            raise ValueError(f"T_initial must be non-negative, got {self.T_initial}")
        if self.T_step <= 0:
            raise ValueError(f"T_step must be positive, got {self.T_step}")
        if self.time_step <= 0:
            raise ValueError(f"time_step must be positive, got {self.time_step}")
        if self.stop <= 0:
            raise ValueError(f"stop must be positive, got {self.stop}")
        if self.alpha < 0:
            raise ValueError(f"alpha must be non-negative, got {self.alpha}")

    def temperatures(self) -> np.ndarray:
        """Temperatures visited by the sweep: T_initial + k T_step < T_final."""
        n = max(0, int(np.ceil((self.T_final - self.T_initial) / self.T_step)))
        temps = self.T_initial + self.T_step * np.arange(n)
        return temps[temps < self.T_final]

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'CurieScanParameters':
        return cls(**data)


@dataclass
class CurieCurve:
    """Equilibrium magnetization at each temperature of a sweep."""
    temperatures: np.ndarray
    magnetizations: np.ndarray
    magnitudes: np.ndarray
    cancelled: bool = False

    def __len__(self) -> int:
        return len(self.temperatures)

    def as_records(self) -> np.ndarray:
        """Rows of T, Mx, My, Mz, |M|."""
        return np.column_stack([self.temperatures, self.magnetizations, self.magnitudes])

    def save_text(self, filename: str):
        io.save_records(filename, self.as_records(), delimiter="\t")


class SimulationProgram:
    """Runs named simulation programs with a configured driver."""

    def __init__(self, evolver: Evolver):
        self.evolver = evolver

    def simulate(
        self,
        program: Union[str, SimulationProgramName],
        params: CurieScanParameters,
        **kwargs
    ):
        """
        Run a program by name.

        Raises:
            ValueError: For an unknown program name
            NotImplementedError: For reserved programs
        """
        program = SimulationProgramName.parse(program)
        if program is SimulationProgramName.CURIE_TEMPERATURE:
            return self.curie_temperature(params, **kwargs)
        raise NotImplementedError(f"Simulation program '{program.value}' is not implemented")

    def curie_temperature(
        self,
        params: CurieScanParameters,
        output_prefix: Optional[str] = None,
        cancel_event: Optional[threading.Event] = None,
        verbose: bool = False
    ) -> CurieCurve:
        """
        Sweep the temperature with dLLB/RK4 runs and record |M|(T).

        Atom state carries over from one temperature to the next.

        Args:
            params: Sweep parameters
            output_prefix: If given, write ``<prefix>_<T>`` trajectories and
                the ``<prefix>_MvsT`` summary
            cancel_event: Stops the sweep between or within temperatures
            verbose: Whether to print progress

        Returns:
            The magnetization curve
        """
        temperatures = []
        magnetizations = []
        cancelled = False

        for T in params.temperatures():
            if verbose:
                print(f"Temperature: {T:.1f} K")

            trajectory = self.evolver.run(
                stop=params.stop,
                dt=params.time_step,
                scheme=IntegrationScheme.RK4,
                equations=EquationFamily.DLLB,
                temperature=T,
                alpha=params.alpha,
                cancel_event=cancel_event,
                verbose=verbose
            )
            if trajectory.cancelled:
                cancelled = True
                break

            if output_prefix is not None:
                trajectory.save_text(f"{output_prefix}_{T:g}")

            m = get_magnetization(self.evolver.atoms)
            temperatures.append(T)
            magnetizations.append(m)

            if verbose:
                print(f"  |M| = {np.linalg.norm(m):.6f}")

        magnetizations = np.array(magnetizations).reshape(-1, 3)
        curve = CurieCurve(
            temperatures=np.array(temperatures, dtype=float),
            magnetizations=magnetizations,
            magnitudes=np.linalg.norm(magnetizations, axis=1),
            cancelled=cancelled
        )

        if len(curve) > 1 and curve.magnitudes[-1] >= curve.magnitudes[0]:
            warnings.warn("Magnetization did not decrease over the temperature sweep")

        if output_prefix is not None:
            curve.save_text(f"{output_prefix}_MvsT")

        return curve
