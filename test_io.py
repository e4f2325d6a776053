#!/usr/bin/env python3
"""
Tests for records, HDF5 trajectories, JSON parameters and ASE export.
"""

import os
import tempfile

import numpy as np
import pytest

from spindyn.core import algebra
from spindyn.core.atom import Atom
from spindyn.core.interaction import Interaction
from spindyn.core.moments import Moments
from spindyn.dynamics.evolver import Evolver
from spindyn.dynamics.llb import diffusion_coefficient
from spindyn.simulation.programs import CurieScanParameters
from spindyn.utils import constants
from spindyn.utils.constants import DEFAULT_CONSTANTS, PHYSICAL_CONSTANTS, PhysicalConstants, energy_to_pulsation
from spindyn.utils.io import (
    export_to_ase, load_atoms, load_json, load_records, load_trajectory, save_atoms, save_json,
    save_records
)


def _atoms():
    spin = algebra.vector("+z")
    return [
        Atom(name="Fe", type=1, position=(0.0, 0.0, 0.0), spin=spin, moments=Moments.from_spin(spin), g=2.0),
        Atom(name="Co", type=2, position=(0.25, 0.0, 0.0), spin="-z", g=1.7),
    ]


def test_records_round_trip():
    data = np.array([[0.0, 1.0 / 3.0, -2.5e-12], [0.1, 2.0 / 3.0, 7.0]])
    with tempfile.TemporaryDirectory() as tmpdir:
        path = os.path.join(tmpdir, "records")
        save_records(path, data)
        np.testing.assert_array_equal(load_records(path), data)

        # A single record still loads as one row
        save_records(path, data[0])
        assert load_records(path).shape == (1, 3)
    print("✓ Text records keep full precision")


def test_trajectory_hdf5():
    atom = Atom(spin="+x", g=2.0)
    evolver = Evolver(Interaction([atom]).zeeman_field("+z", 1.0))
    trajectory = evolver.run(stop=0.5, dt=0.125, scheme="rk4")

    with tempfile.TemporaryDirectory() as tmpdir:
        path = os.path.join(tmpdir, "trajectory.h5")
        evolver.save_trajectory(path)
        loaded = load_trajectory(path)

    np.testing.assert_array_equal(loaded['times'], trajectory.times)
    np.testing.assert_array_equal(loaded['records'], trajectory.records)
    assert loaded['columns'] == ['s0_x', 's0_y', 's0_z']
    assert loaded['equations'] == 'sllg'
    assert loaded['n_atoms'] == 1
    assert not loaded['cancelled']
    print("✓ HDF5 trajectory")


def test_json_parameters():
    params = CurieScanParameters(T_step=10.0, stop=2.0)
    with tempfile.TemporaryDirectory() as tmpdir:
        path = os.path.join(tmpdir, "params.json")
        save_json(path, {'scan': params, 'field': np.array([0.0, 0.0, 1.0]), 'alpha': np.float64(0.1)})
        data = load_json(path)

    assert CurieScanParameters.from_dict(data['scan']) == params
    assert data['field'] == [0.0, 0.0, 1.0]
    assert data['alpha'] == 0.1

    with tempfile.TemporaryDirectory() as tmpdir:
        with pytest.raises(TypeError):
            save_json(os.path.join(tmpdir, "bad.json"), {'value': object()})


def test_atoms_round_trip():
    atoms = _atoms()
    with tempfile.TemporaryDirectory() as tmpdir:
        path = os.path.join(tmpdir, "atoms.json")
        save_atoms(path, atoms)
        loaded = load_atoms(path)

    assert [a.name for a in loaded] == ["Fe", "Co"]
    assert [a.type for a in loaded] == [1, 2]
    for original, restored in zip(atoms, loaded):
        np.testing.assert_array_equal(restored.position, original.position)
        np.testing.assert_array_equal(restored.spin, original.spin)
        assert restored.moments == original.moments
        assert restored.g == original.g

    with pytest.raises(ValueError):
        load_atoms("does_not_exist.json")
    print("✓ Atom collections")


def test_export_to_ase():
    structure = export_to_ase(_atoms(), cell=np.eye(3), pbc=True)
    assert structure.get_chemical_symbols() == ["Fe", "Co"]
    np.testing.assert_allclose(structure.get_initial_magnetic_moments(), [[0, 0, 2.0], [0, 0, -1.7]])
    assert all(structure.pbc)

    unknown = export_to_ase([Atom(name="spin-a", spin="+x", g=1.0)])
    assert unknown.get_chemical_symbols() == ["X"]


def test_constants():
    assert DEFAULT_CONSTANTS.kB == pytest.approx(8.617333262e-2)
    assert DEFAULT_CONSTANTS.hbar == pytest.approx(6.582119569e-1)
    assert DEFAULT_CONSTANTS.gamma == pytest.approx(1.76085963023e-1)
    assert energy_to_pulsation(13.725) == pytest.approx(13.725 / 6.582119569e-1)

    custom = DEFAULT_CONSTANTS.with_values(hbar=1.0)
    assert energy_to_pulsation(2.0, custom) == 2.0
    assert DEFAULT_CONSTANTS.hbar != 1.0

    # Thermal energies come from the context handed in, not from the module table
    doubled = DEFAULT_CONSTANTS.with_values(kB=2.0 * DEFAULT_CONSTANTS.kB)
    assert diffusion_coefficient(300.0, 0.1, doubled) == pytest.approx(2.0 * diffusion_coefficient(300.0, 0.1))

    assert sorted(PHYSICAL_CONSTANTS) == ["gamma_e", "hbar", "kB", "mu_B"]
    assert not hasattr(constants, "convert_units")

    with pytest.raises(ValueError):
        PhysicalConstants(kB=0.0)
    with pytest.raises(ValueError):
        PhysicalConstants(hbar=float("nan"))


def main():
    """Run all I/O tests."""
    print("Testing input/output...\n")
    test_records_round_trip()
    test_trajectory_hdf5()
    test_json_parameters()
    test_atoms_round_trip()
    test_export_to_ase()
    test_constants()
    print("\nAll I/O tests passed.")


if __name__ == "__main__":
    main()
