"""Analysis tools for magnetization curves."""

from .magnetization import (
    estimate_curie_temperature, get_magnetization, get_magnetization_length, plot_curie_curve
)

__all__ = ["estimate_curie_temperature", "get_magnetization", "get_magnetization_length", "plot_curie_curve"]
