"""Utility functions and helpers."""

from .constants import DEFAULT_CONSTANTS, PHYSICAL_CONSTANTS, PhysicalConstants
from .io import load_atoms, load_json, load_trajectory, save_atoms, save_json, save_records, save_trajectory

__all__ = [
    "DEFAULT_CONSTANTS",
    "PHYSICAL_CONSTANTS",
    "PhysicalConstants",
    "load_atoms",
    "load_json",
    "load_trajectory",
    "save_atoms",
    "save_json",
    "save_records",
    "save_trajectory",
]
