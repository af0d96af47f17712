"""FFT engine abstraction consumed by the FFT-conversion algorithms."""

from .backend import (
    FftHandle,
    FftPlanner,
    NumpyFft,
    NumpyFftPlanner,
    ScipyFft,
    ScipyFftPlanner,
)
from .registry import FftBackendRegistry, default_fft_registry

__all__ = [
    "FftHandle",
    "FftPlanner",
    "ScipyFft",
    "ScipyFftPlanner",
    "NumpyFft",
    "NumpyFftPlanner",
    "FftBackendRegistry",
    "default_fft_registry",
]
