#!/usr/bin/env python3
"""
Curie temperature of FCC nickel with the dLLB moment equations.

The conventional 4-atom FCC cell of Ni is relaxed with RK4 at a sequence
of bath temperatures. The state carries over from one temperature to the
next, and the length of the average spin traces |M|(T).
"""

import numpy as np
import matplotlib.pyplot as plt

from spindyn import (
    CurieScanParameters, Evolver, InitialParameters, Interaction, Moments, SimulationProgram, build_lattice
)
from spindyn.analysis.magnetization import estimate_curie_temperature, plot_curie_curve
from spindyn.core import algebra
from spindyn.core.lattice import fcc_unit_cell
from spindyn.utils.constants import energy_to_pulsation


def main():
    """Run the Ni Curie temperature sweep."""

    print("SpinDyn: Curie temperature of FCC Ni")
    print("=" * 40)

    # Ni, g = 2.02, all spins along +x
    spin = algebra.vector("+x")
    initial = InitialParameters(name="Ni", type=1, spin=spin, moments=Moments.from_spin(spin), g=2.02)

    lattice_constant = 0.35  # nm
    atoms = build_lattice(fcc_unit_cell(), (1, 1, 1), lattice_constant, initial)
    print(f"Created FCC cell with {len(atoms)} atoms")

    # Nearest-neighbor exchange, 0.25 nm covers the 0.2475 nm FCC bond
    J = 13.725  # meV
    h = Interaction(atoms).exchange_field(1, 1, energy_to_pulsation(J), 0.25)
    print(f"Exchange J = {J} meV ({energy_to_pulsation(J):.2f} rad/ps)")

    params = CurieScanParameters(T_initial=0.0, T_step=25.0, T_final=250.0, time_step=1e-2, stop=10.0, alpha=0.1)

    program = SimulationProgram(Evolver(h))
    curve = program.curie_temperature(params, output_prefix="Output_CurieTemp", verbose=True)

    print("\nT (K)     |M|")
    for T, m in zip(curve.temperatures, curve.magnitudes):
        print(f"{T:6.1f}  {m:.4f}")

    critical = None
    try:
        result = estimate_curie_temperature(curve.temperatures, curve.magnitudes)
        critical = result['critical_temperature']
        print(f"\nSteepest drop of |M| at T = {critical:.1f} K")
    except ValueError as e:
        print(f"Could not estimate the Curie temperature: {e}")

    plot_curie_curve(curve.temperatures, curve.magnitudes, critical,
                     title="FCC Ni, dLLB", save_path="curie_temperature_ni.png")
    print("Saved plot to 'curie_temperature_ni.png'")

    plt.show()


if __name__ == "__main__":
    main()
