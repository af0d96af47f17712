r"""Split-radix DCT2/DCT3 for power-of-two sizes.

A DCT2 of size $N$ splits into a DCT2 of size $N/2$ over the folded sums
$x_n + x_{N-1-n}$, plus a DCT4-like transform of size $N/2$ over the folded
differences. The DCT4-like half is itself computed from two DCT2s of size
$N/4$ (one over rotated cosine inputs, one over sign-alternated sine
inputs), so every level only needs DCT2 children of size $N/2$ and $N/4$.
DCT3 runs the same graph backwards with DCT3 children.
"""

from __future__ import annotations

import numpy as np

from ..core.base import BaseInplaceTransform
from ..core.buffers import readonly
from ..core.kinds import TransformKind
from ..core.twiddles import phase
from ..errors import ConfigurationError


def split_radix_twiddles(n: int, dtype: np.dtype) -> tuple[np.ndarray, np.ndarray]:
    """Return $\\cos$ and $\\sin$ of $\\pi (2i+1) / (2N)$ for $i < N/4$."""
    angles = phase(2 * np.arange(n // 4) + 1, 4 * n)
    return readonly(np.cos(angles), dtype), readonly(np.sin(angles), dtype)


def stage_dct2(
    buffer: np.ndarray,
    staging: np.ndarray,
    cos_tw: np.ndarray,
    sin_tw: np.ndarray,
) -> None:
    """Fold ``buffer`` into the three child inputs laid out in ``staging``.

    Layout: ``[0, N/2)`` DCT2 input, ``[N/2, 3N/4)`` cosine quarter,
    ``[3N/4, N)`` sine quarter.
    """
    n = buffer.shape[0]
    half = n // 2
    quarter = n // 4
    idx = np.arange(quarter)

    bottom = buffer[idx]
    top = buffer[n - 1 - idx]
    half_bottom = buffer[half - 1 - idx]
    half_top = buffer[half + idx]

    staging[idx] = top + bottom
    staging[half - 1 - idx] = half_bottom + half_top

    lower = bottom - top
    upper = half_bottom - half_top
    staging[half : half + quarter] = lower * cos_tw + upper * sin_tw

    sin_input = upper * cos_tw - lower * sin_tw
    sin_input[1::2] *= -1
    staging[n - 1 - idx] = sin_input


def merge_dct2(buffer: np.ndarray, staging: np.ndarray) -> None:
    """Interleave the three child DCT2 outputs back into ``buffer``."""
    n = buffer.shape[0]
    half = n // 2
    quarter = n // 4
    even = staging[half : half + quarter]
    odd = staging[half + quarter : n]

    buffer[0::2] = staging[:half]
    buffer[1] = even[0]

    idx = np.arange(1, quarter)
    sin_output = odd[quarter - idx]
    sin_output = np.where((idx + quarter) % 2 == 0, -sin_output, sin_output)
    buffer[4 * idx - 1] = even[1:] + sin_output
    buffer[4 * idx + 1] = even[1:] - sin_output

    buffer[n - 1] = -odd[0]


def stage_dct3(buffer: np.ndarray, staging: np.ndarray) -> None:
    """Split ``buffer`` into the three child DCT3 inputs (same layout as DCT2)."""
    n = buffer.shape[0]
    half = n // 2
    quarter = n // 4
    n1 = staging[half : half + quarter]
    n3 = staging[half + quarter : n]

    staging[:half] = buffer[0::2]
    n1[0] = buffer[1] * 2
    n3[0] = buffer[n - 1] * 2

    idx = np.arange(1, quarter)
    left = buffer[4 * idx - 1]
    right = buffer[4 * idx + 1]
    n1[1:] = left + right
    n3[quarter - idx] = left - right


def merge_dct3(
    buffer: np.ndarray,
    staging: np.ndarray,
    cos_tw: np.ndarray,
    sin_tw: np.ndarray,
) -> None:
    """Rotate and butterfly the three child DCT3 outputs into ``buffer``."""
    n = buffer.shape[0]
    half = n // 2
    quarter = n // 4
    idx = np.arange(quarter)
    evens = staging[:half]
    cosine = staging[half : half + quarter]
    sine = staging[half + quarter : n].copy()
    sine[1::2] *= -1

    lower_dct4 = cosine * cos_tw + sine * sin_tw
    upper_dct4 = cosine * sin_tw - sine * cos_tw
    lower_dct3 = evens[idx]
    upper_dct3 = evens[half - 1 - idx]

    buffer[idx] = lower_dct3 + lower_dct4
    buffer[n - 1 - idx] = lower_dct3 - lower_dct4
    buffer[half - 1 - idx] = upper_dct3 + upper_dct4
    buffer[half + idx] = upper_dct3 - upper_dct4


class Type2And3SplitRadix(BaseInplaceTransform):
    """Recursive DCT2/DCT3 of power-of-two size built from two shared children.

    Parameters
    ----------
    half:
        Transform of the same kind and size $N/2$.
    quarter:
        Transform of the same kind and size $N/4$; used twice per call.

    Scratch is exactly $N$: the children's inputs are staged in scratch and the
    caller's buffer, already consumed, serves as the children's scratch.
    """

    _dispatch = {
        TransformKind.DCT2: "_process_dct2",
        TransformKind.DCT3: "_process_dct3",
    }

    def __init__(self, half: BaseInplaceTransform, quarter: BaseInplaceTransform) -> None:
        length = half.length * 2
        if length < 4 or length & (length - 1):
            raise ConfigurationError(
                "Split-radix requires a power-of-two size of at least 4. "
                f"Got {length}"
            )
        if quarter.length * 4 != length:
            raise ConfigurationError(
                f"Quarter transform has length {quarter.length}, expected {length // 4}"
            )
        if half.kind is not quarter.kind or half.dtype != quarter.dtype:
            raise ConfigurationError("Split-radix children must share kind and dtype")
        super().__init__(half.kind, length, half.dtype, children=(half, quarter))
        self._half = half
        self._quarter = quarter
        self._cos, self._sin = split_radix_twiddles(length, self.dtype)

    def required_scratch_len(self) -> int:
        return self.length

    def _run_children(self, buffer: np.ndarray, staging: np.ndarray) -> None:
        half = self.length // 2
        quarter = self.length // 4
        self._half.process(staging[:half], buffer)
        self._quarter.process(staging[half : half + quarter], buffer)
        self._quarter.process(staging[half + quarter :], buffer)

    def _process_dct2(self, buffer: np.ndarray, scratch: np.ndarray) -> None:
        staging = scratch[: self.length]
        stage_dct2(buffer, staging, self._cos, self._sin)
        self._run_children(buffer, staging)
        merge_dct2(buffer, staging)

    def _process_dct3(self, buffer: np.ndarray, scratch: np.ndarray) -> None:
        staging = scratch[: self.length]
        stage_dct3(buffer, staging)
        self._run_children(buffer, staging)
        merge_dct3(buffer, staging, self._cos, self._sin)
