"""MDCT and IMDCT through a same-size DCT4."""

from __future__ import annotations

import numpy as np

from ..core.base import BaseInplaceTransform, BaseLappedTransform
from ..core.kinds import TransformKind
from ..errors import ConfigurationError
from .windows import WindowLike, resolve_window


class MdctViaDct4(BaseLappedTransform):
    r"""Windowed MDCT/IMDCT of $N$ coefficients (even $N$) over $2N$ samples.

    Writing the windowed input as four quarters $(a, b, c, d)$, the MDCT is the
    DCT4 of $(-c_r - d, a - b_r)$ where $_r$ denotes reversal. The IMDCT runs
    the DCT4 and unfolds its two halves $(y_1, y_2)$ into
    $(y_2, -y_{2,r}, -y_{1,r}, -y_1)$, windowed and added to the output.

    Parameters
    ----------
    kind:
        ``MDCT`` or ``IMDCT``; selects what :meth:`process` computes.
    dct4:
        Planned DCT4 of size $N$.
    window:
        ``None`` for a rectangular window, $2N$ coefficients, or a callable
        evaluated once with $2N$.
    """

    def __init__(
        self,
        kind: TransformKind | str,
        dct4: BaseInplaceTransform,
        window: WindowLike = None,
    ) -> None:
        if dct4.kind is not TransformKind.DCT4:
            raise ConfigurationError(f"MDCT needs a DCT4 child, got {dct4.kind.value}")
        super().__init__(kind, dct4.length, dct4.dtype, children=(dct4,))
        if self.length % 2:
            raise ConfigurationError(f"The MDCT length must be even. Got {self.length}")
        self._dct4 = dct4
        self._window = resolve_window(window, 2 * self.length, self.dtype)

    @property
    def window(self) -> np.ndarray:
        """Read-only window table of length $2N$."""
        return self._window

    def required_scratch_len(self) -> int:
        return self.length + self._dct4.required_scratch_len()

    def _mdct(self, input_a, input_b, output, scratch) -> None:
        n = self.length
        half = n // 2
        windowed_a = input_a * self._window[:n]
        windowed_b = input_b * self._window[n:]

        output[:half] = -windowed_b[:half][::-1] - windowed_b[half:]
        output[half:] = windowed_a[:half] - windowed_a[half:][::-1]
        self._dct4.process(output, scratch)

    def _imdct(self, input, output_a, output_b, scratch) -> None:
        n = self.length
        half = n // 2
        window = self._window
        coefficients = scratch[:n]
        coefficients[:] = input
        self._dct4.process(coefficients, scratch[n:])

        output_a[:half] += window[:half] * coefficients[half:]
        output_a[half:] -= window[half:n] * coefficients[half:][::-1]
        output_b[:half] -= window[n : n + half] * coefficients[:half][::-1]
        output_b[half:] -= window[n + half :] * coefficients[:half]
