"""
Magnetization observables and Curie-curve analysis.
"""

import warnings
import numpy as np
from typing import Any, Dict, Optional, Sequence, Tuple, TYPE_CHECKING
import matplotlib.pyplot as plt
from scipy.interpolate import UnivariateSpline

if TYPE_CHECKING:
    from ..core.atom import Atom


def get_magnetization(atoms: Sequence['Atom']) -> np.ndarray:
    """Average spin vector of the collection."""
    if len(atoms) == 0:
        return np.zeros(3)
    return np.mean([atom.spin for atom in atoms], axis=0)


def get_magnetization_length(atoms: Sequence['Atom']) -> float:
    """Length of the average spin vector."""
    return float(np.linalg.norm(get_magnetization(atoms)))


def spin_lengths(atoms: Sequence['Atom']) -> np.ndarray:
    """Length of every individual spin."""
    return np.array([np.linalg.norm(atom.spin) for atom in atoms])


def estimate_curie_temperature(
    temperatures: np.ndarray,
    magnitudes: np.ndarray,
    smoothing: float = 1e-3
) -> Dict[str, Any]:
    """
    Locate the Curie temperature as the steepest drop of |M|(T).

    Args:
        temperatures: Increasing temperatures (K)
        magnitudes: Magnetization length at each temperature
        smoothing: Smoothing factor of the spline

    Returns:
        Dictionary with the critical temperature, the slope there and the spline
    """
    temps = np.asarray(temperatures, dtype=float)
    mags = np.asarray(magnitudes, dtype=float)

    if temps.shape != mags.shape:
        raise ValueError(f"Inconsistent sizes: {temps.shape} temperatures vs {mags.shape} magnitudes")
    if len(temps) < 4:
        raise ValueError("Need at least 4 temperatures to estimate the Curie temperature")
    if np.any(np.diff(temps) <= 0):
        raise ValueError("Temperatures must be strictly increasing")

    spline = UnivariateSpline(temps, mags, s=smoothing)
    derivative = spline.derivative()

    temp_fine = np.linspace(temps.min(), temps.max(), 1000)
    slopes = derivative(temp_fine)
    idx = np.argmin(slopes)

    if slopes[idx] >= 0:
        warnings.warn("Magnetization does not decrease with temperature; Curie temperature is ill-defined")

    return {
        'critical_temperature': float(temp_fine[idx]),
        'slope': float(slopes[idx]),
        'spline_fit': spline,
    }


def plot_curie_curve(
    temperatures: np.ndarray,
    magnitudes: np.ndarray,
    critical_temperature: Optional[float] = None,
    title: str = "Magnetization vs temperature",
    figsize: Tuple[int, int] = (6, 4),
    save_path: Optional[str] = None
):
    """
    Plot |M| against temperature.

    Args:
        temperatures: Temperatures (K)
        magnitudes: Magnetization lengths
        critical_temperature: Optional Curie temperature marker
        title: Plot title
        figsize: Figure size
        save_path: Path to save figure

    Returns:
        The matplotlib figure
    """
    fig, ax = plt.subplots(figsize=figsize)
    ax.plot(temperatures, magnitudes, 'o-', color='tab:blue', label='|M|')

    if critical_temperature is not None:
        ax.axvline(critical_temperature, color='tab:red', linestyle='--',
                   label=f'$T_C$ ≈ {critical_temperature:.0f} K')

    ax.set_xlabel('Temperature (K)')
    ax.set_ylabel('|M|')
    ax.set_title(title)
    ax.grid(True)
    ax.set_ylim(bottom=0)
    ax.legend()
    fig.tight_layout()

    if save_path:
        fig.savefig(save_path, dpi=300, bbox_inches='tight')

    return fig
