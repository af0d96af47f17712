"""Transforms computed through one complex FFT.

Each algorithm reorders (and for types 1 extends) the real input into a
complex staging area carved out of the caller's scratch, runs the shared FFT
handle, then twiddles and reorders the spectrum back into the buffer.
"""

from __future__ import annotations

import math
from typing import Any

import numpy as np

from ..core.base import BaseInplaceTransform
from ..core.buffers import complex_dtype, complex_view, readonly
from ..core.kinds import TransformKind
from ..core.twiddles import forward_twiddles
from ..errors import ConfigurationError
from ..fft.backend import FftHandle


class _FftConversion(BaseInplaceTransform):
    """Shared scratch layout: ``fft_len`` complex values, then FFT scratch."""

    def __init__(
        self,
        kind: TransformKind | str,
        length: int,
        fft: FftHandle,
        dtype: Any = np.float64,
    ) -> None:
        super().__init__(kind, length, dtype)
        self._fft = fft

    @property
    def fft_length(self) -> int:
        return self._fft.length

    def required_scratch_len(self) -> int:
        return 2 * (self._fft.length + self._fft.required_scratch_len())

    def summary(self) -> dict[str, Any]:
        info = super().summary()
        info["fft_length"] = self._fft.length
        return info

    def _split_scratch(self, scratch: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
        fft_len = self._fft.length
        work = complex_view(scratch, fft_len)
        fft_scratch = complex_view(scratch[2 * fft_len :], self._fft.required_scratch_len())
        return work, fft_scratch


class Type1ConvertToFft(_FftConversion):
    """DCT1 via an FFT of size $2(N-1)$, DST1 via an FFT of size $2(N+1)$.

    The input is extended to the even (DCT1) or odd (DST1) symmetric sequence
    whose DFT is real (resp. imaginary) and contains the transform.
    """

    _dispatch = {
        TransformKind.DCT1: "_process_dct1",
        TransformKind.DST1: "_process_dst1",
    }

    def __init__(self, kind: TransformKind | str, fft: FftHandle, dtype: Any = np.float64) -> None:
        kind = TransformKind.coerce(kind)
        if fft.length % 2:
            raise ConfigurationError(f"Type-1 conversion needs an even FFT, got {fft.length}")
        if kind is TransformKind.DCT1:
            length = fft.length // 2 + 1
        else:
            length = fft.length // 2 - 1
        super().__init__(kind, length, fft, dtype)

    def _process_dct1(self, buffer: np.ndarray, scratch: np.ndarray) -> None:
        n = self.length
        work, fft_scratch = self._split_scratch(scratch)
        work[:n] = buffer
        work[n:] = buffer[n - 2 : 0 : -1]
        self._fft.process(work, fft_scratch)
        buffer[:] = work[:n].real * 0.5

    def _process_dst1(self, buffer: np.ndarray, scratch: np.ndarray) -> None:
        n = self.length
        fft_len = self._fft.length
        work, fft_scratch = self._split_scratch(scratch)
        work[0] = 0.0
        work[1 : n + 1] = buffer
        work[n + 1] = 0.0
        work[n + 2 :] = -buffer[::-1]
        self._fft.process(work, fft_scratch)
        buffer[:] = work[fft_len - 1 : n + 1 : -1].imag * 0.5


class Type2And3ConvertToFft(_FftConversion):
    """DCT2, DST2, DCT3 and DST3 via a same-size FFT.

    Types 2 interleave evens with reversed odds before the FFT and apply the
    $e^{-i\\pi k / 2N}$ twiddle after it; types 3 apply the conjugate steps in
    reverse order.
    """

    _dispatch = {
        TransformKind.DCT2: "_process_dct2",
        TransformKind.DST2: "_process_dst2",
        TransformKind.DCT3: "_process_dct3",
        TransformKind.DST3: "_process_dst3",
    }

    def __init__(self, kind: TransformKind | str, fft: FftHandle, dtype: Any = np.float64) -> None:
        super().__init__(kind, fft.length, fft, dtype)
        n = self.length
        self._twiddles = readonly(
            forward_twiddles(np.arange(n), 4 * n), complex_dtype(self.dtype)
        )
        self._even_end = (n + 1) // 2

    def _process_dct2(self, buffer: np.ndarray, scratch: np.ndarray) -> None:
        work, fft_scratch = self._split_scratch(scratch)
        work[: self._even_end] = buffer[0::2]
        work[self._even_end :] = buffer[1::2][::-1]
        self._fft.process(work, fft_scratch)
        buffer[:] = (work * self._twiddles).real

    def _process_dst2(self, buffer: np.ndarray, scratch: np.ndarray) -> None:
        work, fft_scratch = self._split_scratch(scratch)
        work[: self._even_end] = buffer[0::2]
        work[self._even_end :] = -buffer[1::2][::-1]
        self._fft.process(work, fft_scratch)
        buffer[:] = (work * self._twiddles).real[::-1]

    def _process_dct3(self, buffer: np.ndarray, scratch: np.ndarray) -> None:
        work, fft_scratch = self._split_scratch(scratch)
        work[0] = buffer[0] * 0.5
        work[1:] = (buffer[1:] + 1j * buffer[:0:-1]) * self._twiddles[1:] * 0.5
        self._fft.process(work, fft_scratch)
        buffer[0::2] = work[: self._even_end].real
        buffer[1::2] = work[self._even_end :].real[::-1]

    def _process_dst3(self, buffer: np.ndarray, scratch: np.ndarray) -> None:
        n = self.length
        work, fft_scratch = self._split_scratch(scratch)
        work[0] = buffer[n - 1] * 0.5
        work[1:] = (buffer[: n - 1][::-1] + 1j * buffer[: n - 1]) * self._twiddles[1:] * 0.5
        self._fft.process(work, fft_scratch)
        buffer[0::2] = work[: self._even_end].real
        buffer[1::2] = -work[self._even_end :].real[::-1]


def odd_input_map(n: int) -> tuple[np.ndarray, np.ndarray]:
    """Return ``(indices, signs)`` such that the FFT input is ``signs * x[indices]``.

    Walks the FFT input in steps of four, starting at ``n // 2``, cycling
    through four (reflected, sign) phases and wrapping modulo ``n``.
    """
    indices: list[int] = []
    signs: list[float] = []
    index = n // 2
    for reflect, sign in ((False, 1.0), (True, -1.0), (False, -1.0), (True, 1.0)):
        while index < n:
            indices.append(n - index - 1 if reflect else index)
            signs.append(sign)
            index += 4
        index -= n
    while len(indices) < n:
        indices.append(index)
        signs.append(1.0)
        index += 4
    return np.asarray(indices, dtype=np.intp), np.asarray(signs)


class Type4ConvertToFftOdd(_FftConversion):
    """DCT4 and DST4 of odd size via a same-size FFT.

    For odd $N$ the DCT4 is a permuted, sign-flipped DFT of a permuted input;
    only the half of the spectrum at indices $\\equiv 1, 3 \\pmod 4$ is read.
    """

    _dispatch = {
        TransformKind.DCT4: "_process_dct4",
        TransformKind.DST4: "_process_dst4",
    }

    def __init__(self, kind: TransformKind | str, fft: FftHandle, dtype: Any = np.float64) -> None:
        if fft.length % 2 == 0:
            raise ConfigurationError(f"Odd type-4 conversion needs an odd FFT, got {fft.length}")
        super().__init__(kind, fft.length, fft, dtype)
        n = self.length
        indices, signs = odd_input_map(n)
        if self.kind is TransformKind.DST4:
            indices = n - 1 - indices
        self._indices = readonly(indices, np.intp)
        self._signs = readonly(signs, self.dtype)

    def _process_dct4(self, buffer: np.ndarray, scratch: np.ndarray) -> None:
        work, fft_scratch = self._split_scratch(scratch)
        work[:] = buffer[self._indices] * self._signs
        self._fft.process(work, fft_scratch)
        self._unpack(buffer, work, sine=False)

    def _process_dst4(self, buffer: np.ndarray, scratch: np.ndarray) -> None:
        work, fft_scratch = self._split_scratch(scratch)
        work[:] = buffer[self._indices] * self._signs
        self._fft.process(work, fft_scratch)
        self._unpack(buffer, work, sine=True)

    def _unpack(self, buffer: np.ndarray, work: np.ndarray, *, sine: bool) -> None:
        n = self.length
        half = n // 2
        quarter = n // 4
        scale = math.sqrt(0.5)
        half_sign = 1.0 if n % 4 == 1 else -1.0

        idx = np.arange(quarter)
        row_scale = np.where(idx % 2 == 0, scale, -scale)
        lower = work[4 * idx + 1] * row_scale
        upper = work[4 * idx + 3] * row_scale

        buffer[2 * idx] = lower.real + lower.imag
        buffer[n - 1 - 2 * idx] = (lower.real - lower.imag) * half_sign
        if sine:
            buffer[2 * idx + 1] = upper.real - upper.imag
            buffer[n - 2 - 2 * idx] = -(upper.real + upper.imag) * half_sign
        else:
            buffer[2 * idx + 1] = upper.imag - upper.real
            buffer[n - 2 - 2 * idx] = (upper.real + upper.imag) * half_sign

        tail_scale = scale if quarter % 2 == 0 else -scale
        if n % 4 == 1:
            buffer[half] = work[0].real * tail_scale
        else:
            middle = work[n - 2] * tail_scale
            buffer[half - 1] = middle.real + middle.imag
            buffer[half + 1] = middle.imag - middle.real
            centre = work[0].real * tail_scale
            buffer[half] = centre if sine else -centre
