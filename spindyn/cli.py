"""
Command-line interface for SpinDyn.
"""

import argparse
import sys
import numpy as np

from . import Atom, Moments, Interaction, BoundaryConditions, InitialParameters, build_lattice
from . import Evolver, CurieScanParameters, SimulationProgram
from .core import algebra
from .core.lattice import box_size, fcc_unit_cell
from .dynamics.schemes import EquationFamily, IntegrationScheme
from .analysis.magnetization import estimate_curie_temperature, get_magnetization, plot_curie_curve
from .utils.constants import energy_to_pulsation
from .utils.io import load_atoms, load_json


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="spindyn",
        description="SpinDyn: atomistic sLLG and dLLB spin dynamics",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    # Curie temperature sweep
    curie_parser = subparsers.add_parser('curie', help='Sweep temperature to trace |M|(T)')
    curie_parser.add_argument('--name', default='Ni', help='Atomic species (default: Ni)')
    curie_parser.add_argument('--g', type=float, default=2.02, help='Landé factor (default: 2.02)')
    curie_parser.add_argument('--supercell', nargs=3, type=int, default=[1, 1, 1],
                              help='FCC cells along x y z (default: 1 1 1)')
    curie_parser.add_argument('-a', '--lattice-constant', type=float, default=0.35,
                              help='Lattice constant in nm (default: 0.35)')
    curie_parser.add_argument('-J', '--exchange', type=float, default=13.725,
                              help='Exchange energy in meV (default: 13.725)')
    curie_parser.add_argument('--cutoff', type=float, default=0.25,
                              help='Exchange cutoff radius in nm (default: 0.25)')
    curie_parser.add_argument('--pbc', action='store_true', help='Use periodic boundaries')
    curie_parser.add_argument('-T', '--temperatures', nargs=3, type=float, default=[0.0, 25.0, 250.0],
                              metavar=('T_INITIAL', 'T_STEP', 'T_FINAL'),
                              help='Temperature range: initial step final (default: 0 25 250)')
    curie_parser.add_argument('-dt', '--timestep', type=float, default=1e-2,
                              help='Time step in ps (default: 0.01)')
    curie_parser.add_argument('-t', '--time', type=float, default=10.0,
                              help='Integration time per temperature in ps (default: 10)')
    curie_parser.add_argument('--alpha', type=float, default=0.1,
                              help='Damping parameter (default: 0.1)')
    curie_parser.add_argument('--config', help='JSON file with scan parameters (overrides -T, -dt, -t, --alpha)')
    curie_parser.add_argument('-o', '--output', default='Output_CurieTemp',
                              help='Output prefix (default: Output_CurieTemp)')
    curie_parser.add_argument('--plot', action='store_true', help='Save a plot of |M|(T)')

    # Single run
    evolve_parser = subparsers.add_parser('evolve', help='Integrate a single trajectory')
    evolve_parser.add_argument('--atoms', help='JSON file with atoms (default: one macrospin)')
    evolve_parser.add_argument('-e', '--equations', default='sllg',
                               choices=[e.value for e in EquationFamily],
                               help='Equations of motion (default: sllg)')
    evolve_parser.add_argument('-m', '--scheme', default='rk4',
                               choices=[s.value for s in IntegrationScheme],
                               help='Integration scheme (default: rk4)')
    evolve_parser.add_argument('-t', '--time', type=float, default=10.0,
                               help='Simulation time in ps (default: 10)')
    evolve_parser.add_argument('-dt', '--timestep', type=float, default=1e-3,
                               help='Time step in ps (default: 0.001)')
    evolve_parser.add_argument('-B', '--field', type=float, default=1.0,
                               help='Applied field in tesla (default: 1)')
    evolve_parser.add_argument('--field-direction', default='+z',
                               help='Applied field direction (default: +z)')
    evolve_parser.add_argument('--spin', default='+x', help='Initial spin direction (default: +x)')
    evolve_parser.add_argument('--alpha', type=float, default=0.0,
                               help='Damping parameter (default: 0)')
    evolve_parser.add_argument('-T', '--temperature', type=float, default=0.0,
                               help='Bath temperature in K for dLLB (default: 0)')
    evolve_parser.add_argument('-o', '--output', default='Output_atoms',
                               help='Output file (default: Output_atoms)')

    return parser


def main(argv=None):
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return

    try:
        if args.command == 'curie':
            run_curie_temperature(args)
        elif args.command == 'evolve':
            run_evolve(args)
    except Exception as e:
        print(f"Error: {e}")
        sys.exit(1)


def run_curie_temperature(args):
    """Run a Curie temperature sweep on an FCC crystal."""
    if args.config:
        params = CurieScanParameters.from_dict(load_json(args.config))
    else:
        T_initial, T_step, T_final = args.temperatures
        params = CurieScanParameters(
            T_initial=T_initial, T_step=T_step, T_final=T_final,
            time_step=args.timestep, stop=args.time, alpha=args.alpha
        )

    print("Running Curie temperature sweep...")
    print(f"Species: {args.name}, supercell {tuple(args.supercell)}, a = {args.lattice_constant} nm")
    print(f"Exchange: {args.exchange} meV, cutoff {args.cutoff} nm")
    print(f"Temperatures: {params.T_initial} - {params.T_final} K by {params.T_step} K")

    initial = InitialParameters(
        name=args.name, type=1, spin=algebra.vector("+x"),
        moments=Moments.from_spin(algebra.vector("+x")), g=args.g
    )
    atoms = build_lattice(fcc_unit_cell(), tuple(args.supercell), args.lattice_constant, initial)
    bcs = BoundaryConditions(box_size=box_size(args.supercell, args.lattice_constant), pbc=args.pbc)

    h = Interaction(atoms).exchange_field(1, 1, energy_to_pulsation(args.exchange), args.cutoff, bcs)

    program = SimulationProgram(Evolver(h))
    curve = program.curie_temperature(params, output_prefix=args.output, verbose=True)
    print(f"Results saved to {args.output}_MvsT")

    critical = None
    if len(curve) >= 4:
        critical = estimate_curie_temperature(curve.temperatures, curve.magnitudes)['critical_temperature']
        print(f"\nEstimated Curie temperature: {critical:.1f} K")

    if args.plot:
        plot_curie_curve(curve.temperatures, curve.magnitudes, critical,
                         save_path=f"{args.output}_MvsT.png")
        print(f"Plot saved to {args.output}_MvsT.png")


def run_evolve(args):
    """Integrate a single trajectory."""
    if args.atoms:
        atoms = load_atoms(args.atoms)
    else:
        spin = algebra.vector(args.spin)
        atoms = [Atom(name="Fe", type=1, spin=spin, moments=Moments.from_spin(spin), g=2.0)]

    print(f"Running {args.equations} dynamics with {args.scheme}...")
    print(f"Atoms: {len(atoms)}")
    print(f"Time: {args.time} ps, timestep {args.timestep} ps")

    h = Interaction(atoms).zeeman_field(algebra.vector(args.field_direction), args.field)
    if args.equations == EquationFamily.SLLG.value and args.alpha > 0:
        h.dampening(args.alpha)

    evolver = Evolver(h)
    trajectory = evolver.evolve(
        stop=args.time,
        dt=args.timestep,
        scheme=args.scheme,
        equations=args.equations,
        file_name=args.output,
        temperature=args.temperature,
        alpha=args.alpha,
        verbose=True
    )
    print(f"Results saved to {args.output} ({len(trajectory)} records)")

    final = get_magnetization(evolver.atoms)
    print(f"\nFinal magnetization: {final} (|M| = {np.linalg.norm(final):.4f})")


if __name__ == "__main__":
    main()
