#!/usr/bin/env python3
"""
Tests for the single-spin precession updates.
"""

import numpy as np
import pytest

from spindyn.core import algebra
from spindyn.dynamics.precession import precess, rotation_step, symplectic_step
from spindyn.dynamics.schemes import PrecessionMethod


def _random_unit_vectors(n, seed):
    rng = np.random.default_rng(seed)
    v = rng.normal(size=(n, 3))
    return v / np.linalg.norm(v, axis=1)[:, None]


def test_unit_norm_preserved():
    """Every method returns a unit spin."""
    spins = _random_unit_vectors(20, seed=0)
    omegas = 5.0 * _random_unit_vectors(20, seed=1)

    for method in PrecessionMethod:
        for spin, omega in zip(spins, omegas):
            s = precess(spin, omega, 0.05, method)
            assert abs(np.linalg.norm(s) - 1.0) < 1e-12, method
    print("✓ Unit norm preserved by all methods")


def test_full_rotation_exact():
    """Spin along +x rotating about +z follows (cos ωt, sin ωt, 0)."""
    w, dt = 2.0, 0.1
    spin = algebra.vector("+x")
    omega = algebra.vector(0, 0, w)

    for k in range(1, 50):
        spin = precess(spin, omega, dt, "full")
        expected = [np.cos(w * k * dt), np.sin(w * k * dt), 0.0]
        np.testing.assert_allclose(spin, expected, atol=1e-12)
    print("✓ Closed-form rotation")


def test_full_rotation_preserves_projection():
    spin = algebra.normalize(algebra.vector(1, 1, 1))
    omega = algebra.vector(0.3, -0.2, 1.5)
    axis = omega / np.linalg.norm(omega)

    s = rotation_step(spin, omega, 0.37)
    assert algebra.dot(s, axis) == pytest.approx(algebra.dot(spin, axis), abs=1e-12)


def test_full_rotation_zero_omega():
    with pytest.raises(ValueError):
        precess(algebra.vector("+x"), algebra.vector(), 0.1, "full")
    for bad in (np.array([np.nan, 0.0, 0.0]), np.array([0.0, np.inf, 0.0])):
        with pytest.raises(ValueError):
            precess(algebra.vector("+x"), bad, 0.1, "full")
    print("✓ Zero and non-finite pulsations rejected by the rotation update")


def test_symplectic_is_cayley_rotation():
    """The implicit midpoint step rotates by 2 atan(|ω| dt / 2)."""
    w, dt = 3.0, 0.2
    s = symplectic_step(algebra.vector("+x"), algebra.vector(0, 0, w), dt)
    theta = 2.0 * np.arctan(w * dt / 2.0)
    np.testing.assert_allclose(s, [np.cos(theta), np.sin(theta), 0.0], atol=1e-14)
    print("✓ Symplectic update")


def test_parallel_spin_is_fixed():
    """A spin parallel to ω does not move."""
    omega = algebra.vector(0, 0, 4.0)
    spin = algebra.vector("+z")
    for method in PrecessionMethod:
        np.testing.assert_allclose(precess(spin, omega, 0.1, method), spin, atol=1e-15)


def test_zero_omega_keeps_spin():
    spin = algebra.normalize(algebra.vector(1, 2, 3))
    for method in ("euler", "symplectic", "rk4"):
        np.testing.assert_allclose(precess(spin, algebra.vector(), 0.1, method), spin, atol=1e-15)


def test_rk4_matches_rotation():
    omega = algebra.vector(0.5, -1.0, 2.0)
    spin_rk4 = algebra.normalize(algebra.vector(1, 0, 1))
    spin_full = spin_rk4.copy()

    for _ in range(100):
        spin_rk4 = precess(spin_rk4, omega, 0.01, "rk4")
        spin_full = precess(spin_full, omega, 0.01, "full")

    np.testing.assert_allclose(spin_rk4, spin_full, atol=1e-7)
    print("✓ RK4 agrees with the closed-form rotation")


def test_euler_convergence():
    """
    Halving dt divides the Euler error by about four.

    For a spin perpendicular to ω the renormalized Euler update rotates by
    atan(|ω| dt), so its phase error is second order.
    """
    omega = algebra.vector(0, 0, 1.0)
    t_end = 1.0
    exact = np.array([np.cos(t_end), np.sin(t_end), 0.0])

    errors = []
    for n in (64, 128):
        spin = algebra.vector("+x")
        for _ in range(n):
            spin = precess(spin, omega, t_end / n, "euler")
        errors.append(np.linalg.norm(spin - exact))

    ratio = errors[0] / errors[1]
    assert 3.5 < ratio < 4.5
    print(f"✓ Euler error ratio {ratio:.2f}")


def test_input_not_modified():
    spin = algebra.vector("+x")
    precess(spin, algebra.vector(0, 0, 1.0), 0.1, "euler")
    assert np.array_equal(spin, algebra.vector("+x"))


def test_unknown_method():
    with pytest.raises(ValueError):
        precess(algebra.vector("+x"), algebra.vector(0, 0, 1.0), 0.1, "leapfrog")
    # Case-insensitive names
    precess(algebra.vector("+x"), algebra.vector(0, 0, 1.0), 0.1, "Symplectic")
    print("✓ Unknown method rejected")


def main():
    """Run all precession tests."""
    print("Testing precession updates...\n")
    test_unit_norm_preserved()
    test_full_rotation_exact()
    test_full_rotation_preserves_projection()
    test_full_rotation_zero_omega()
    test_symplectic_is_cayley_rotation()
    test_parallel_spin_is_fixed()
    test_zero_omega_keeps_spin()
    test_rk4_matches_rotation()
    test_euler_convergence()
    test_input_not_modified()
    test_unknown_method()
    print("\nAll precession tests passed.")


if __name__ == "__main__":
    main()
