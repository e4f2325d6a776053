"""
Driver integrating a whole atom collection in fixed time steps.
"""

import time
import threading
import warnings
import numpy as np
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Union, TYPE_CHECKING
from tqdm import tqdm

from .llb import diffusion_coefficient
from .schemes import EquationFamily, IntegrationScheme, PrecessionMethod
from ..analysis.magnetization import get_magnetization
from ..utils import io
from ..utils.constants import DEFAULT_CONSTANTS, PhysicalConstants

if TYPE_CHECKING:
    from ..core.atom import Atom
    from ..core.interaction import Interaction


@dataclass
class Trajectory:
    """
    Records accumulated during a run, one row per time step.

    Column 0 is the time. sLLG rows continue with the x, y, z spin
    components of every atom; dLLB rows with Mx, My, Mz and |M|.
    """
    equations: EquationFamily
    columns: List[str]
    data: np.ndarray
    cancelled: bool = False
    timing: Dict[str, float] = field(default_factory=dict)

    @property
    def times(self) -> np.ndarray:
        return self.data[:, 0]

    @property
    def records(self) -> np.ndarray:
        """Observables without the time column."""
        return self.data[:, 1:]

    def __len__(self) -> int:
        return self.data.shape[0]

    def save_text(self, filename: str):
        """Write whitespace-separated text records."""
        io.save_records(filename, self.data)

    def save_hdf5(self, filename: str, metadata: Optional[Dict[str, Any]] = None):
        meta = {'equations': self.equations.value, 'cancelled': self.cancelled}
        if metadata:
            meta.update(metadata)
        io.save_trajectory(filename, self.times, self.records, self.columns[1:], meta)


class Evolver:
    """
    Integrates every atom of an ``Interaction`` with sLLG or dLLB equations.

    Each step advances all atoms with their current ω, then asks the
    interaction to recompute ω from the new spins before the next step.
    """

    def __init__(self, interaction: 'Interaction', constants: Optional[PhysicalConstants] = None):
        """
        Initialize the driver.

        Args:
            interaction: Field assembly owning the atom collection
            constants: Physical constants (defaults to the interaction's)
        """
        self.interaction = interaction
        self.constants = constants if constants is not None else getattr(
            interaction, 'constants', DEFAULT_CONSTANTS
        )

        # Current state
        self.time = 0.0
        self.step_count = 0
        self.trajectory: Optional[Trajectory] = None
        self.timing_info = {}

    @property
    def atoms(self) -> List['Atom']:
        return self.interaction.atoms

    def _columns(self, equations: EquationFamily) -> List[str]:
        if equations is EquationFamily.SLLG:
            columns = ['time']
            for i in range(len(self.atoms)):
                columns += [f's{i}_x', f's{i}_y', f's{i}_z']
            return columns
        return ['time', 'Mx', 'My', 'Mz', 'M']

    def run(
        self,
        stop: float,
        dt: float,
        scheme: Union[str, IntegrationScheme] = IntegrationScheme.EULER,
        equations: Union[str, EquationFamily] = EquationFamily.SLLG,
        temperature: float = 0.0,
        alpha: float = 0.0,
        cancel_event: Optional[threading.Event] = None,
        callback: Optional[Callable] = None,
        verbose: bool = False
    ) -> Trajectory:
        """
        Integrate from t = 0 while t < stop.

        Args:
            stop: End time (ps)
            dt: Time step (ps)
            scheme: "euler" or "rk4"
            equations: "sllg" or "dllb"
            temperature: Bath temperature for dLLB (K)
            alpha: Damping for dLLB
            cancel_event: Checked before every step; when set the run stops
                and the partial trajectory is returned
            callback: Called as ``callback(evolver, step)`` after every step
            verbose: Whether to show progress

        Returns:
            Trajectory with one record per step
        """
        scheme = IntegrationScheme.parse(scheme)
        equations = EquationFamily.parse(equations)

        if not np.isfinite(dt) or dt <= 0:
            raise ValueError(f"Time step must be positive, got {dt}")
        if not np.isfinite(stop) or stop < 0:
            raise ValueError(f"Stop time must be non-negative, got {stop}")
        if len(self.atoms) == 0:
            raise ValueError("No atoms to evolve")

        if equations is EquationFamily.DLLB:
            diffusion_coefficient(temperature, alpha, self.constants)
            if getattr(self.interaction, 'alpha', 0.0) > 0:
                warnings.warn("Interaction damping is applied on top of the dLLB damping")
        if 0 < stop < dt:
            warnings.warn(f"Stop time {stop} is shorter than the time step {dt}; running a single step")

        start_time = time.time()
        n_steps = int(np.ceil(stop / dt))
        precession_method = scheme.precession_method()
        moment_method = scheme.moment_method()

        self.time = 0.0
        self.step_count = 0
        rows = []
        cancelled = False

        with tqdm(total=n_steps, desc=f"{equations.value} {scheme.value}", disable=not verbose) as pbar:
            while self.time < stop:
                if cancel_event is not None and cancel_event.is_set():
                    cancelled = True
                    break

                if equations is EquationFamily.SLLG:
                    row = [self.time]
                    for atom in self.atoms:
                        row.extend(atom.spin)
                        atom.advance_spin(precession_method, dt)
                else:
                    for atom in self.atoms:
                        atom.advance_moments(moment_method, dt, temperature, alpha, self.constants)
                    m = get_magnetization(self.atoms)
                    row = [self.time, m[0], m[1], m[2], np.linalg.norm(m)]
                rows.append(row)

                self.interaction.update()
                self.step_count += 1
                self.time = self.step_count * dt

                if callback is not None:
                    callback(self, self.step_count)

                pbar.update(1)

        if cancelled and verbose:
            print(f"Run cancelled at t = {self.time:g} after {self.step_count} steps")

        elapsed = time.time() - start_time
        self.timing_info = {
            'total_time': elapsed,
            'time_per_step': elapsed / self.step_count if self.step_count else 0.0,
            'simulated_time': self.time,
        }

        columns = self._columns(equations)
        data = np.array(rows, dtype=float) if rows else np.empty((0, len(columns)))
        self.trajectory = Trajectory(equations, columns, data, cancelled, dict(self.timing_info))

        return self.trajectory

    def evolve(
        self,
        stop: float,
        dt: float,
        scheme: Union[str, IntegrationScheme] = IntegrationScheme.EULER,
        equations: Union[str, EquationFamily] = EquationFamily.SLLG,
        file_name: Optional[str] = None,
        **kwargs
    ) -> Trajectory:
        """Run and, if ``file_name`` is given, write the text records."""
        trajectory = self.run(stop, dt, scheme, equations, **kwargs)
        if file_name is not None:
            trajectory.save_text(file_name)
        return trajectory

    def strang_sweep(self, method: Union[str, PrecessionMethod], dt: float):
        """
        One alternating-direction splitting step of the precession.

        Atoms 0..N-2 advance by dt/2 in order, atom N-1 by dt, then atoms
        N-2..0 by dt/2 in reverse order. Fields are not recomputed here.
        """
        method = PrecessionMethod.parse(method)
        atoms = self.atoms
        if len(atoms) == 0:
            return

        for atom in atoms[:-1]:
            atom.advance_spin(method, 0.5 * dt)
        atoms[-1].advance_spin(method, dt)
        for atom in reversed(atoms[:-1]):
            atom.advance_spin(method, 0.5 * dt)

    def save_trajectory(self, filename: str):
        """Save the last trajectory to HDF5."""
        if self.trajectory is None:
            raise ValueError("No trajectory to save")
        self.trajectory.save_hdf5(filename, {'n_atoms': len(self.atoms)})

    def reset(self):
        """Reset solver state."""
        self.time = 0.0
        self.step_count = 0
        self.trajectory = None
        self.timing_info = {}

    def __repr__(self) -> str:
        return f"Evolver(n_atoms={len(self.atoms)}, steps={self.step_count})"
