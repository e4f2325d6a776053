#!/usr/bin/env python3
"""
Tests for the spindyn command-line interface.
"""

import os
import tempfile

import matplotlib
matplotlib.use("Agg")

import numpy as np
import pytest

from spindyn.cli import build_parser, main
from spindyn.core.atom import Atom
from spindyn.simulation.programs import CurieScanParameters
from spindyn.utils.io import load_records, save_atoms, save_json

DT = "0.0078125"


def test_parser_defaults():
    args = build_parser().parse_args(["curie"])
    assert args.temperatures == [0.0, 25.0, 250.0]
    assert args.timestep == 1e-2
    assert args.time == 10.0
    assert args.output == "Output_CurieTemp"

    args = build_parser().parse_args(["evolve"])
    assert args.equations == "sllg"
    assert args.scheme == "rk4"

    with pytest.raises(SystemExit):
        build_parser().parse_args(["evolve", "-m", "heun"])


def test_no_command():
    assert main([]) is None


def test_curie_command():
    with tempfile.TemporaryDirectory() as tmpdir:
        prefix = os.path.join(tmpdir, "Output_CurieTemp")
        main(["curie", "-T", "0", "50", "200", "-dt", DT, "-t", "0.0390625", "-o", prefix, "--plot"])

        summary = load_records(f"{prefix}_MvsT")
        assert summary.shape == (4, 5)
        np.testing.assert_array_equal(summary[:, 0], [0.0, 50.0, 100.0, 150.0])
        assert os.path.exists(f"{prefix}_0")
        assert os.path.exists(f"{prefix}_150")
        assert os.path.exists(f"{prefix}_MvsT.png")
    print("✓ curie command")


def test_curie_command_with_config():
    with tempfile.TemporaryDirectory() as tmpdir:
        config = os.path.join(tmpdir, "scan.json")
        save_json(config, CurieScanParameters(T_initial=0.0, T_step=100.0, T_final=200.0,
                                              time_step=0.0078125, stop=0.015625))
        prefix = os.path.join(tmpdir, "scan")
        main(["curie", "--config", config, "-o", prefix])

        summary = load_records(f"{prefix}_MvsT")
        assert summary.shape == (2, 5)


def test_evolve_command():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = os.path.join(tmpdir, "Output_atoms")
        main(["evolve", "-t", "0.5", "-dt", "0.125", "-B", "2.0", "-o", path])
        records = load_records(path)
        assert records.shape == (4, 4)
        np.testing.assert_allclose(np.linalg.norm(records[:, 1:], axis=1), 1.0, atol=1e-12)

        main(["evolve", "-e", "dllb", "-m", "euler", "-T", "100", "--alpha", "0.1",
              "-t", "0.5", "-dt", "0.125", "-o", path])
        records = load_records(path)
        assert records.shape == (4, 5)
        assert records[-1, 4] < 1.0
    print("✓ evolve command")


def test_evolve_command_with_atoms():
    atoms = [Atom(name="Fe", type=1, spin="+x", g=2.0), Atom(name="Fe", type=1, position=(0.3, 0, 0), spin="+y", g=2.0)]
    with tempfile.TemporaryDirectory() as tmpdir:
        atoms_file = os.path.join(tmpdir, "atoms.json")
        save_atoms(atoms_file, atoms)
        path = os.path.join(tmpdir, "Output_atoms")
        main(["evolve", "--atoms", atoms_file, "-t", "0.25", "-dt", "0.125", "--alpha", "0.1", "-o", path])

        records = load_records(path)
        assert records.shape == (2, 7)


def test_errors_exit_with_status_one():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = os.path.join(tmpdir, "Output_atoms")
        with pytest.raises(SystemExit) as excinfo:
            main(["evolve", "-dt", "-1", "-o", path])
        assert excinfo.value.code == 1

        with pytest.raises(SystemExit) as excinfo:
            main(["evolve", "--atoms", os.path.join(tmpdir, "missing.json"), "-o", path])
        assert excinfo.value.code == 1

        with pytest.raises(SystemExit) as excinfo:
            main(["curie", "-T", "0", "-25", "100", "-o", path])
        assert excinfo.value.code == 1
    print("✓ Errors reported with exit status 1")


def main_tests():
    """Run all CLI tests."""
    print("Testing the command-line interface...\n")
    test_parser_defaults()
    test_no_command()
    test_curie_command()
    test_curie_command_with_config()
    test_evolve_command()
    test_evolve_command_with_atoms()
    test_errors_exit_with_status_one()
    print("\nAll CLI tests passed.")


if __name__ == "__main__":
    main_tests()
