"""FFT backends used by the FFT-conversion algorithms.

The DCT planner depends on an FFT engine but does not implement one. An engine
is an :class:`FftPlanner` handing out one shared :class:`FftHandle` per length;
handles transform complex 1-D buffers in place.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
import logging
import threading

import numpy as np
import scipy.fft

from ..core.buffers import complex_dtype, resolve_dtype
from ..errors import ConfigurationError, ContractViolation

LOGGER = logging.getLogger(__name__)


class FftHandle(ABC):
    """Forward complex FFT of a fixed length."""

    def __init__(self, length: int, dtype: np.dtype) -> None:
        if length < 1:
            raise ConfigurationError(f"FFT length must be positive, got {length}")
        self.length = int(length)
        self.dtype = complex_dtype(resolve_dtype(dtype))

    def __len__(self) -> int:
        return self.length

    def required_scratch_len(self) -> int:
        """Complex scratch values needed by :meth:`process`."""
        return 0

    def process(self, buffer: np.ndarray, scratch: np.ndarray | None = None) -> np.ndarray:
        """Replace ``buffer`` with its forward DFT and return it."""
        if buffer.ndim != 1 or buffer.shape[0] != self.length:
            raise ContractViolation(
                f"FFT buffer is the wrong length. Expected {self.length}, "
                f"got {buffer.shape}"
            )
        if scratch is not None and scratch.shape[0] < self.required_scratch_len():
            raise ContractViolation(
                f"Not enough FFT scratch. Expected at least "
                f"{self.required_scratch_len()}, got {scratch.shape[0]}"
            )
        buffer[:] = self._forward(buffer)
        return buffer

    @abstractmethod
    def _forward(self, buffer: np.ndarray) -> np.ndarray:
        """Return the forward DFT of ``buffer``."""


class ScipyFft(FftHandle):
    """``scipy.fft`` forward transform."""

    def __init__(self, length: int, dtype: np.dtype, workers: int | None = None) -> None:
        super().__init__(length, dtype)
        self.workers = workers

    def _forward(self, buffer: np.ndarray) -> np.ndarray:
        return scipy.fft.fft(buffer, workers=self.workers)


class NumpyFft(FftHandle):
    """``numpy.fft`` forward transform (always computed in complex128)."""

    def _forward(self, buffer: np.ndarray) -> np.ndarray:
        return np.fft.fft(buffer)


class FftPlanner(ABC):
    """Hands out one shared :class:`FftHandle` per length."""

    name: str

    def __init__(self, dtype: np.dtype = np.float64) -> None:
        self.dtype = resolve_dtype(dtype)
        self._handles: dict[int, FftHandle] = {}
        self._lock = threading.Lock()

    def plan_fft(self, length: int) -> FftHandle:
        """Return the cached forward FFT of ``length``, creating it once."""
        handle = self._handles.get(length)
        if handle is not None:
            return handle
        with self._lock:
            handle = self._handles.get(length)
            if handle is None:
                handle = self._create(length)
                self._handles[length] = handle
                LOGGER.debug("FFT | backend=%s length=%d", self.name, length)
        return handle

    @abstractmethod
    def _create(self, length: int) -> FftHandle:
        """Build a new handle for ``length``."""


class ScipyFftPlanner(FftPlanner):
    """FFT planner backed by :mod:`scipy.fft`."""

    name = "scipy"

    def __init__(self, dtype: np.dtype = np.float64, workers: int | None = None) -> None:
        super().__init__(dtype)
        self.workers = workers

    def _create(self, length: int) -> FftHandle:
        return ScipyFft(length, self.dtype, workers=self.workers)


class NumpyFftPlanner(FftPlanner):
    """FFT planner backed by :mod:`numpy.fft`."""

    name = "numpy"

    def _create(self, length: int) -> FftHandle:
        return NumpyFft(length, self.dtype)
