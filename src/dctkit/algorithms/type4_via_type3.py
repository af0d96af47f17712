r"""DCT4/DST4 of even size through a half-size DCT3.

Adjacent input pairs are summed and differenced into two half-size sequences;
a DCT3 of the sums and a DST3 of the differences, rotated by
$e^{i\pi(2k+1)/4N}$, give the first and mirrored second half of the output.
The DST3 is obtained from the same DCT3 child by reversing its input and
negating its odd outputs.
"""

from __future__ import annotations

import numpy as np

from ..core.base import BaseInplaceTransform
from ..core.buffers import readonly
from ..core.kinds import TransformKind
from ..core.twiddles import phase
from ..errors import ConfigurationError


class Type4ConvertToType3Even(BaseInplaceTransform):
    """Even-size DCT4 or DST4 delegating to a DCT3 of half the size.

    Parameters
    ----------
    kind:
        ``DCT4`` or ``DST4``.
    inner:
        Planned DCT3 of size $N/2$.
    """

    _dispatch = {
        TransformKind.DCT4: "_process_dct4",
        TransformKind.DST4: "_process_dst4",
    }

    def __init__(self, kind: TransformKind | str, inner: BaseInplaceTransform) -> None:
        if inner.kind is not TransformKind.DCT3:
            raise ConfigurationError(
                f"Type-4 conversion needs a DCT3 child, got {inner.kind.value}"
            )
        super().__init__(kind, 2 * inner.length, inner.dtype, children=(inner,))
        self._inner = inner
        angles = phase(2 * np.arange(inner.length) + 1, 8 * self.length)
        self._cos = readonly(np.cos(angles), self.dtype)
        self._sin = readonly(np.sin(angles), self.dtype)

    def required_scratch_len(self) -> int:
        return self.length + self._inner.required_scratch_len()

    def _dst3(self, view: np.ndarray, scratch: np.ndarray) -> None:
        view[:] = view[::-1].copy()
        self._inner.process(view, scratch)
        view[1::2] *= -1

    def _process_dct4(self, buffer: np.ndarray, scratch: np.ndarray) -> None:
        n = self.length
        half = n // 2
        left = scratch[:half]
        right = scratch[half:n]
        inner_scratch = scratch[n:]

        odds = buffer[1 : n - 1 : 2]
        evens = buffer[2:n:2]
        left[0] = buffer[0] * 2
        left[1:] = odds + evens
        right[:-1] = odds - evens
        right[-1] = buffer[n - 1] * 2

        self._inner.process(left, inner_scratch)
        self._dst3(right, inner_scratch)

        buffer[:half] = left * self._cos + right * self._sin
        buffer[n - 1 : half - 1 : -1] = left * self._sin - right * self._cos

    def _process_dst4(self, buffer: np.ndarray, scratch: np.ndarray) -> None:
        n = self.length
        half = n // 2
        left = scratch[:half]
        right = scratch[half:n]
        inner_scratch = scratch[n:]

        odds = buffer[1 : n - 1 : 2]
        evens = buffer[2:n:2]
        right[0] = buffer[0] * 2
        left[:-1] = odds + evens
        right[1:] = evens - odds
        left[-1] = buffer[n - 1] * 2

        self._dst3(left, inner_scratch)
        self._inner.process(right, inner_scratch)

        buffer[:half] = left * self._cos + right * self._sin
        buffer[n - 1 : half - 1 : -1] = right * self._cos - left * self._sin
