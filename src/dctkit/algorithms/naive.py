"""Naive $O(N^2)$ transforms.

Each instance precomputes the full basis matrix of its kind, so one call is a
single matrix-vector product. The planner only picks these for small sizes,
where the matrix is cheap and faster than any conversion overhead.
"""

from __future__ import annotations

from typing import Any

import numpy as np

from ..core.base import BaseInplaceTransform, BaseLappedTransform
from ..core.buffers import readonly
from ..core.kinds import TransformKind
from ..core.twiddles import phase
from ..errors import ConfigurationError
from .windows import WindowLike, resolve_window


def _grid(n_rows: int, n_cols: int) -> tuple[np.ndarray, np.ndarray]:
    return np.arange(n_rows)[:, None], np.arange(n_cols)[None, :]


def basis_matrix(kind: TransformKind, n: int) -> np.ndarray:
    """Return the float64 matrix $M$ with ``kind(x) == M @ x`` for length ``n``.

    For ``MDCT`` the matrix is $N \\times 2N$; ``IMDCT`` uses its transpose.
    """
    kind = TransformKind.coerce(kind)
    if kind is TransformKind.DCT1:
        if n < 2:
            raise ConfigurationError("DCT1 is undefined for length < 2")
        k, j = _grid(n, n)
        matrix = np.cos(phase(j * k, 2 * (n - 1)))
        matrix[:, 0] *= 0.5
        matrix[:, -1] *= 0.5
        return matrix
    if kind is TransformKind.DST1:
        k, j = _grid(n, n)
        return np.sin(phase((j + 1) * (k + 1), 2 * (n + 1)))
    if kind is TransformKind.DCT2:
        k, j = _grid(n, n)
        return np.cos(phase(k * (2 * j + 1), 4 * n))
    if kind is TransformKind.DST2:
        k, j = _grid(n, n)
        return np.sin(phase((k + 1) * (2 * j + 1), 4 * n))
    if kind is TransformKind.DCT3:
        k, j = _grid(n, n)
        matrix = np.cos(phase(j * (2 * k + 1), 4 * n))
        matrix[:, 0] *= 0.5
        return matrix
    if kind is TransformKind.DST3:
        k, j = _grid(n, n)
        matrix = np.sin(phase((j + 1) * (2 * k + 1), 4 * n))
        matrix[:, -1] *= 0.5
        return matrix
    if kind is TransformKind.DCT4:
        k, j = _grid(n, n)
        return np.cos(phase((2 * j + 1) * (2 * k + 1), 8 * n))
    if kind is TransformKind.DST4:
        k, j = _grid(n, n)
        return np.sin(phase((2 * j + 1) * (2 * k + 1), 8 * n))
    k, j = _grid(n, 2 * n)
    return np.cos(phase((2 * j + 1 + n) * (2 * k + 1), 8 * n))


class _MatrixTransform(BaseInplaceTransform):
    def __init__(self, kind: TransformKind | str, length: int, dtype: Any = np.float64) -> None:
        super().__init__(kind, length, dtype)
        self._matrix = readonly(basis_matrix(self.kind, self.length), self.dtype)

    def required_scratch_len(self) -> int:
        return 0

    def _apply(self, buffer: np.ndarray, scratch: np.ndarray) -> None:
        del scratch
        buffer[:] = self._matrix @ buffer


class Type1Naive(_MatrixTransform):
    """Naive DCT1 (length >= 2) and DST1."""

    _dispatch = {TransformKind.DCT1: "_apply", TransformKind.DST1: "_apply"}


class Type2And3Naive(_MatrixTransform):
    """Naive DCT2, DST2, DCT3 and DST3."""

    _dispatch = {
        TransformKind.DCT2: "_apply",
        TransformKind.DST2: "_apply",
        TransformKind.DCT3: "_apply",
        TransformKind.DST3: "_apply",
    }


class Type4Naive(_MatrixTransform):
    """Naive DCT4 and DST4."""

    _dispatch = {TransformKind.DCT4: "_apply", TransformKind.DST4: "_apply"}


class MdctNaive(BaseLappedTransform):
    """Naive MDCT/IMDCT, used as a reference for :class:`MdctViaDct4`."""

    def __init__(
        self,
        kind: TransformKind | str,
        length: int,
        dtype: Any = np.float64,
        window: WindowLike = None,
    ) -> None:
        super().__init__(kind, length, dtype)
        if self.length % 2:
            raise ConfigurationError(f"The MDCT length must be even. Got {self.length}")
        self._matrix = readonly(basis_matrix(TransformKind.MDCT, self.length), self.dtype)
        self._window = resolve_window(window, 2 * self.length, self.dtype)

    def required_scratch_len(self) -> int:
        return 0

    def _mdct(self, input_a, input_b, output, scratch) -> None:
        del scratch
        n = self.length
        output[:] = self._matrix[:, :n] @ (input_a * self._window[:n])
        output += self._matrix[:, n:] @ (input_b * self._window[n:])

    def _imdct(self, input, output_a, output_b, scratch) -> None:
        del scratch
        n = self.length
        output_a += (self._matrix[:, :n].T @ input) * self._window[:n]
        output_b += (self._matrix[:, n:].T @ input) * self._window[n:]
