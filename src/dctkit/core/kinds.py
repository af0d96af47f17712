"""Transform kinds and their normalization conventions."""

from __future__ import annotations

from enum import Enum

from ..errors import ConfigurationError


class TransformKind(str, Enum):
    r"""Closed set of transforms the planner can build.

    Every kind is computed without normalization. For an input $x$ of length
    $N$:

    - ``DCT1``: $X_k = \frac{1}{2}(x_0 + (-1)^k x_{N-1})
      + \sum_{n=1}^{N-2} x_n \cos\frac{\pi n k}{N-1}$
    - ``DST1``: $X_k = \sum_n x_n \sin\frac{\pi (n+1)(k+1)}{N+1}$
    - ``DCT2``: $X_k = \sum_n x_n \cos\frac{\pi k (2n+1)}{2N}$
    - ``DST2``: $X_k = \sum_n x_n \sin\frac{\pi (k+1)(2n+1)}{2N}$
    - ``DCT3``: $X_k = \frac{x_0}{2} + \sum_{n\ge1} x_n \cos\frac{\pi n (2k+1)}{2N}$
    - ``DST3``: $X_k = \sum_{n<N-1} x_n \sin\frac{\pi (n+1)(2k+1)}{2N}
      + \frac{(-1)^k}{2} x_{N-1}$
    - ``DCT4``/``DST4``: $X_k = \sum_n x_n \cos/\sin\frac{\pi (2n+1)(2k+1)}{4N}$
    - ``MDCT``: $2N$ inputs, $N$ outputs,
      $X_k = \sum_{n<2N} w_n x_n \cos\left[\frac{\pi}{N}(n + \frac12 + \frac N2)(k + \frac12)\right]$
    - ``IMDCT``: $N$ inputs, $2N$ outputs accumulated into the destination,
      $y_n \mathrel{+}= w_n \sum_k X_k \cos\left[\frac{\pi}{N}(n + \frac12 + \frac N2)(k + \frac12)\right]$
    """

    DCT1 = "dct1"
    DCT2 = "dct2"
    DCT3 = "dct3"
    DCT4 = "dct4"
    DST1 = "dst1"
    DST2 = "dst2"
    DST3 = "dst3"
    DST4 = "dst4"
    MDCT = "mdct"
    IMDCT = "imdct"

    @classmethod
    def coerce(cls, value: TransformKind | str) -> TransformKind:
        """Return ``value`` as a kind, accepting case-insensitive names."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.lower())
            except ValueError:
                pass
        available = ", ".join(kind.value for kind in cls)
        raise ConfigurationError(
            f"Unknown transform kind {value!r}. Available kinds: {available}"
        )

    @property
    def is_lapped(self) -> bool:
        """Whether input and output lengths differ (MDCT family)."""
        return self in (TransformKind.MDCT, TransformKind.IMDCT)

    @property
    def inverse(self) -> TransformKind:
        """Kind that undoes this transform up to :meth:`inverse_scale`."""
        return _INVERSES.get(self, self)

    def inverse_scale(self, size: int) -> float:
        """Scale left on the signal after forward-then-inverse at ``size``.

        For the MDCT pair this is the factor observed after overlap-adding
        consecutive frames with a Princen-Bradley window
        ($w_n^2 + w_{n+N}^2 = 1$), i.e. $N/2$ like the other pairs.
        """
        if self is TransformKind.DCT1:
            return (size - 1) / 2.0
        if self is TransformKind.DST1:
            return (size + 1) / 2.0
        return size / 2.0

    def min_size(self) -> int:
        return 2 if self is TransformKind.DCT1 else 1


_INVERSES = {
    TransformKind.DCT2: TransformKind.DCT3,
    TransformKind.DCT3: TransformKind.DCT2,
    TransformKind.DST2: TransformKind.DST3,
    TransformKind.DST3: TransformKind.DST2,
    TransformKind.MDCT: TransformKind.IMDCT,
    TransformKind.IMDCT: TransformKind.MDCT,
}
