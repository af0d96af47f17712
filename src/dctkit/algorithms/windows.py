"""Plan-time window handling for the MDCT family."""

from __future__ import annotations

from typing import Any, Callable, Union

import numpy as np

from ..core.buffers import readonly
from ..errors import ConfigurationError

WindowLike = Union[np.ndarray, Callable[[int], Any], None]


def resolve_window(window: WindowLike, length: int, dtype: np.dtype) -> np.ndarray:
    """Evaluate ``window`` into a read-only table of ``length`` coefficients.

    ``window`` may be ``None`` (rectangular), a sequence of coefficients, or a
    callable ``f(length)`` returning them.
    """
    if window is None:
        values = np.ones(length)
    elif callable(window):
        values = np.asarray(window(length), dtype=np.float64)
    else:
        values = np.asarray(window, dtype=np.float64)
    if values.ndim != 1 or values.shape[0] != length:
        raise ConfigurationError(
            f"Window has the wrong shape. Expected ({length},), got {values.shape}"
        )
    return readonly(values, dtype)
