"""Hard-coded DCT2/DCT3 kernels for sizes 2, 4, 8 and 16.

These are the base cases of the split-radix recursion. Every kernel works on
scalars: the inputs are read into locals, the outputs are computed from them
and written back, so no scratch and no temporary arrays are needed. Sizes 2,
4 and 8 are fully unrolled; size 16 runs one split-radix step over the size 8
and size 4 kernels.
"""

from __future__ import annotations

import math
from typing import Any, Callable, Sequence

import numpy as np

from ..core.base import BaseInplaceTransform
from ..core.kinds import TransformKind
from ..errors import ConfigurationError

FRAC_1_SQRT_2 = math.sqrt(0.5)
_COS_PI_8 = math.cos(math.pi / 8)
_SIN_PI_8 = math.sin(math.pi / 8)
_COS_PI_16 = math.cos(math.pi / 16)
_SIN_PI_16 = math.sin(math.pi / 16)
_COS_3PI_16 = math.cos(3 * math.pi / 16)
_SIN_3PI_16 = math.sin(3 * math.pi / 16)

Kernel = Callable[[np.ndarray], None]
Values = Callable[..., tuple]


def _twiddles(n: int) -> tuple[tuple[float, ...], tuple[float, ...]]:
    angles = [math.pi * (2 * i + 1) / (2 * n) for i in range(n // 4)]
    return tuple(math.cos(a) for a in angles), tuple(math.sin(a) for a in angles)


def _dct2_2(x0, x1):
    return x0 + x1, (x0 - x1) * FRAC_1_SQRT_2


def _dct3_2(x0, x1):
    half_x0 = x0 * 0.5
    scaled_x1 = x1 * FRAC_1_SQRT_2
    return half_x0 + scaled_x1, half_x0 - scaled_x1


def _dct2_4(x0, x1, x2, x3):
    lower = x0 - x3
    upper = x2 - x1
    sum_a = x0 + x3
    sum_b = x2 + x1
    return (
        sum_a + sum_b,
        lower * _COS_PI_8 - upper * _SIN_PI_8,
        (sum_a - sum_b) * FRAC_1_SQRT_2,
        upper * _COS_PI_8 + lower * _SIN_PI_8,
    )


def _dct3_4(x0, x1, x2, x3):
    half_x0 = x0 * 0.5
    scaled_x2 = x2 * FRAC_1_SQRT_2
    even_lower = half_x0 + scaled_x2
    even_upper = half_x0 - scaled_x2
    odd_lower = x1 * _COS_PI_8 + x3 * _SIN_PI_8
    odd_upper = x1 * _SIN_PI_8 - x3 * _COS_PI_8
    return (
        even_lower + odd_lower,
        even_upper + odd_upper,
        even_upper - odd_upper,
        even_lower - odd_lower,
    )


def _dct2_8(x0, x1, x2, x3, x4, x5, x6, x7):
    e0, e1, e2, e3 = _dct2_4(x0 + x7, x1 + x6, x2 + x5, x3 + x4)

    lower0 = x0 - x7
    lower1 = x1 - x6
    upper0 = x3 - x4
    upper1 = x2 - x5
    c0, c1 = _dct2_2(
        lower0 * _COS_PI_16 + upper0 * _SIN_PI_16,
        lower1 * _COS_3PI_16 + upper1 * _SIN_3PI_16,
    )
    s0, s1 = _dct2_2(
        lower1 * _SIN_3PI_16 - upper1 * _COS_3PI_16,
        upper0 * _COS_PI_16 - lower0 * _SIN_PI_16,
    )
    return e0, c0, e1, c1 + s1, e2, c1 - s1, e3, -s0


def _dct3_8(x0, x1, x2, x3, x4, x5, x6, x7):
    e0, e1, e2, e3 = _dct3_4(x0, x2, x4, x6)
    c0, c1 = _dct3_2(x1 * 2, x3 + x5)
    s0, s1 = _dct3_2(x7 * 2, x3 - x5)

    lower0 = c0 * _COS_PI_16 + s0 * _SIN_PI_16
    upper0 = c0 * _SIN_PI_16 - s0 * _COS_PI_16
    lower1 = c1 * _COS_3PI_16 - s1 * _SIN_3PI_16
    upper1 = c1 * _SIN_3PI_16 + s1 * _COS_3PI_16
    return (
        e0 + lower0,
        e1 + lower1,
        e2 + upper1,
        e3 + upper0,
        e3 - upper0,
        e2 - upper1,
        e1 - lower1,
        e0 - lower0,
    )


def _split_dct2(
    x: Sequence[Any],
    half_kernel: Values,
    quarter_kernel: Values,
    cos_tw: Sequence[float],
    sin_tw: Sequence[float],
) -> tuple:
    """One split-radix DCT2 step over scalar inputs."""
    n = len(x)
    half = n // 2
    quarter = n // 4
    folded = [0.0] * half
    cos_in = [0.0] * quarter
    sin_in = [0.0] * quarter
    for i in range(quarter):
        bottom, top = x[i], x[n - 1 - i]
        half_bottom, half_top = x[half - 1 - i], x[half + i]
        folded[i] = bottom + top
        folded[half - 1 - i] = half_bottom + half_top
        lower = bottom - top
        upper = half_bottom - half_top
        cos_in[i] = lower * cos_tw[i] + upper * sin_tw[i]
        rotated = upper * cos_tw[i] - lower * sin_tw[i]
        sin_in[quarter - 1 - i] = -rotated if i % 2 else rotated

    evens = half_kernel(*folded)
    cosine = quarter_kernel(*cos_in)
    sine = quarter_kernel(*sin_in)

    out = [0.0] * n
    out[0::2] = evens
    out[1] = cosine[0]
    for i in range(1, quarter):
        odd = sine[quarter - i]
        if (i + quarter) % 2 == 0:
            odd = -odd
        out[4 * i - 1] = cosine[i] + odd
        out[4 * i + 1] = cosine[i] - odd
    out[n - 1] = -sine[0]
    return tuple(out)


def _split_dct3(
    x: Sequence[Any],
    half_kernel: Values,
    quarter_kernel: Values,
    cos_tw: Sequence[float],
    sin_tw: Sequence[float],
) -> tuple:
    """One split-radix DCT3 step over scalar inputs."""
    n = len(x)
    half = n // 2
    quarter = n // 4
    cos_in = [0.0] * quarter
    sin_in = [0.0] * quarter
    cos_in[0] = x[1] * 2
    sin_in[0] = x[n - 1] * 2
    for i in range(1, quarter):
        left, right = x[4 * i - 1], x[4 * i + 1]
        cos_in[i] = left + right
        sin_in[quarter - i] = left - right

    evens = half_kernel(*x[0::2])
    cosine = quarter_kernel(*cos_in)
    sine = quarter_kernel(*sin_in)

    out = [0.0] * n
    for i in range(quarter):
        odd = -sine[i] if i % 2 else sine[i]
        lower = cosine[i] * cos_tw[i] + odd * sin_tw[i]
        upper = cosine[i] * sin_tw[i] - odd * cos_tw[i]
        out[i] = evens[i] + lower
        out[n - 1 - i] = evens[i] - lower
        out[half - 1 - i] = evens[half - 1 - i] + upper
        out[half + i] = evens[half - 1 - i] - upper
    return tuple(out)


_COS_16, _SIN_16 = _twiddles(16)


def _dct2_16(*x):
    return _split_dct2(x, _dct2_8, _dct2_4, _COS_16, _SIN_16)


def _dct3_16(*x):
    return _split_dct3(x, _dct3_8, _dct3_4, _COS_16, _SIN_16)


def _in_place(values: Values) -> Kernel:
    def kernel(buffer: np.ndarray) -> None:
        for i, value in enumerate(values(*buffer)):
            buffer[i] = value

    return kernel


_KERNELS: dict[TransformKind, dict[int, Kernel]] = {
    TransformKind.DCT2: {
        2: _in_place(_dct2_2),
        4: _in_place(_dct2_4),
        8: _in_place(_dct2_8),
        16: _in_place(_dct2_16),
    },
    TransformKind.DCT3: {
        2: _in_place(_dct3_2),
        4: _in_place(_dct3_4),
        8: _in_place(_dct3_8),
        16: _in_place(_dct3_16),
    },
}

BUTTERFLY_SIZES = (2, 4, 8, 16)


class Type2And3Butterfly(BaseInplaceTransform):
    """Fixed-size DCT2 or DCT3 for ``length`` in :data:`BUTTERFLY_SIZES`."""

    _dispatch = {
        TransformKind.DCT2: "_apply",
        TransformKind.DCT3: "_apply",
    }

    def __init__(self, kind: TransformKind | str, length: int, dtype: Any = np.float64) -> None:
        super().__init__(kind, length, dtype)
        if self.length not in BUTTERFLY_SIZES:
            raise ConfigurationError(
                f"No butterfly of size {self.length}. Available sizes: {BUTTERFLY_SIZES}"
            )
        self._butterfly = _KERNELS[self.kind][self.length]

    def required_scratch_len(self) -> int:
        return 0

    def _apply(self, buffer: np.ndarray, scratch: np.ndarray) -> None:
        del scratch
        self._butterfly(buffer)
