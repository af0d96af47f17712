"""Twiddle factor tables.

Angles are reduced modulo the period in exact integer arithmetic before the
trigonometric call, so large indices keep full float64 accuracy.
"""

from __future__ import annotations

import numpy as np


def phase(numerators: np.ndarray | int, denominator: int) -> np.ndarray:
    """Return $2\\pi \\cdot (m \\bmod d) / d$ for integer numerators ``m``."""
    reduced = np.mod(np.asarray(numerators, dtype=np.int64), denominator)
    return 2.0 * np.pi * reduced / denominator


def forward_twiddles(numerators: np.ndarray | int, denominator: int) -> np.ndarray:
    """Complex twiddles $e^{-2\\pi i m / d}$ in float64."""
    return np.exp(-1j * phase(numerators, denominator))
