"""Simulation programs."""

from .programs import CurieCurve, CurieScanParameters, SimulationProgram, SimulationProgramName

__all__ = ["CurieCurve", "CurieScanParameters", "SimulationProgram", "SimulationProgramName"]
