"""Algorithm selection and the shared transform cache.

The planner turns a ``(kind, size)`` request into a graph of immutable
transform instances. Composite algorithms obtain their children through the
same cache, so a sub-transform needed by several parents is built once and
shared by reference.

Decision table, per kind:

- ``DCT1``/``DST1``: naive below ``type1_naive_below``, otherwise an FFT of
  size $2(N-1)$ / $2(N+1)$.
- ``DCT2``/``DCT3``: butterflies for 2, 4, 8, 16; split-radix for larger powers
  of two; otherwise naive below ``type2and3_naive_below`` and FFT conversion
  above it.
- ``DST2``/``DST3``: naive below ``type2and3_naive_below``, FFT conversion above.
- ``DCT4``/``DST4``: even sizes through a DCT3 of half the size; odd sizes naive
  below ``type4_naive_below``, odd-size FFT conversion above it.
- ``MDCT``/``IMDCT``: even sizes only, through a DCT4 of the same size.
"""

from __future__ import annotations

from dataclasses import replace
import logging
import operator
import threading
from typing import Any

from .algorithms.butterflies import BUTTERFLY_SIZES, Type2And3Butterfly
from .algorithms.convert_to_fft import (
    Type1ConvertToFft,
    Type2And3ConvertToFft,
    Type4ConvertToFftOdd,
)
from .algorithms.mdct import MdctViaDct4
from .algorithms.naive import Type1Naive, Type2And3Naive, Type4Naive
from .algorithms.splitradix import Type2And3SplitRadix
from .algorithms.type4_via_type3 import Type4ConvertToType3Even
from .algorithms.windows import WindowLike
from .config_schema import PlannerConfig
from .core.base import BaseInplaceTransform, BaseLappedTransform, BaseTransform
from .core.buffers import resolve_dtype
from .core.kinds import TransformKind
from .errors import ConfigurationError
from .fft.backend import FftPlanner
from .fft.registry import FftBackendRegistry, default_fft_registry

LOGGER = logging.getLogger(__name__)

PlanKey = tuple[TransformKind, int]


def _is_power_of_two(size: int) -> bool:
    return size > 0 and size & (size - 1) == 0


class Planner:
    """Plans DCT/DST/MDCT transforms and caches them by ``(kind, size)``.

    Parameters
    ----------
    config:
        Planner configuration. Defaults to :class:`PlannerConfig()`.
    dtype:
        Overrides ``config.dtype`` when given.
    fft_planner:
        FFT engine to use instead of the one named by ``config.fft_backend``.
        Its dtype must match the planner's.
    fft_registry:
        Registry used to resolve ``config.fft_backend``.

    Examples
    --------
    >>> import numpy as np
    >>> planner = Planner()
    >>> dct2 = planner.plan_dct2(4)
    >>> coefficients = dct2.process(np.array([1.0, 2.0, 3.0, 4.0]))
    """

    def __init__(
        self,
        config: PlannerConfig | None = None,
        *,
        dtype: Any = None,
        fft_planner: FftPlanner | None = None,
        fft_registry: FftBackendRegistry | None = None,
    ) -> None:
        config = config if config is not None else PlannerConfig()
        if dtype is not None:
            config = replace(config, dtype=resolve_dtype(dtype).name)
        self.config = config.validate()
        self.dtype = resolve_dtype(config.dtype)

        if fft_planner is None:
            registry = fft_registry if fft_registry is not None else default_fft_registry()
            fft_planner = registry.create(
                config.fft_backend,
                dtype=self.dtype,
                workers=config.fft_workers,
            )
        elif fft_planner.dtype != self.dtype:
            raise ConfigurationError(
                f"FFT planner dtype {fft_planner.dtype.name} does not match "
                f"planner dtype {self.dtype.name}"
            )
        self.fft_planner = fft_planner

        self._cache: dict[PlanKey, BaseTransform] = {}
        # Re-entrant: building a composite plans its children under the same lock.
        self._lock = threading.RLock()

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, tuple) or len(key) != 2:
            return False
        kind, size = key
        try:
            kind = TransformKind.coerce(kind)
        except ConfigurationError:
            return False
        return (kind, size) in self._cache

    def cached_keys(self) -> list[PlanKey]:
        """Snapshot of the ``(kind, size)`` pairs built so far."""
        with self._lock:
            return list(self._cache)

    def plan(
        self,
        kind: TransformKind | str,
        size: int,
        *,
        window: WindowLike = None,
    ) -> BaseTransform:
        """Return the shared transform for ``(kind, size)``.

        ``window`` is only accepted for ``MDCT``/``IMDCT``. Windowed plans are
        built per call but share the cached DCT4 of the same size.
        """
        kind = TransformKind.coerce(kind)
        size = self._check_size(kind, size)
        if window is not None:
            if not kind.is_lapped:
                raise ConfigurationError(f"{kind.value} does not accept a window")
            transform = MdctViaDct4(kind, self._cached(TransformKind.DCT4, size), window)
            LOGGER.debug(
                "PLAN | kind=%s size=%d algorithm=%s windowed=True",
                kind.value,
                size,
                transform.__class__.__name__,
            )
            return transform
        return self._cached(kind, size)

    def plan_dct1(self, size: int) -> BaseInplaceTransform:
        return self.plan(TransformKind.DCT1, size)

    def plan_dct2(self, size: int) -> BaseInplaceTransform:
        return self.plan(TransformKind.DCT2, size)

    def plan_dct3(self, size: int) -> BaseInplaceTransform:
        return self.plan(TransformKind.DCT3, size)

    def plan_dct4(self, size: int) -> BaseInplaceTransform:
        return self.plan(TransformKind.DCT4, size)

    def plan_dst1(self, size: int) -> BaseInplaceTransform:
        return self.plan(TransformKind.DST1, size)

    def plan_dst2(self, size: int) -> BaseInplaceTransform:
        return self.plan(TransformKind.DST2, size)

    def plan_dst3(self, size: int) -> BaseInplaceTransform:
        return self.plan(TransformKind.DST3, size)

    def plan_dst4(self, size: int) -> BaseInplaceTransform:
        return self.plan(TransformKind.DST4, size)

    def plan_mdct(self, size: int, window: WindowLike = None) -> BaseLappedTransform:
        return self.plan(TransformKind.MDCT, size, window=window)

    def plan_imdct(self, size: int, window: WindowLike = None) -> BaseLappedTransform:
        return self.plan(TransformKind.IMDCT, size, window=window)

    @staticmethod
    def _check_size(kind: TransformKind, size: int) -> int:
        try:
            size = operator.index(size)
        except TypeError as exc:
            raise ConfigurationError(f"Size must be an integer, got {size!r}") from exc
        if size < 1:
            raise ConfigurationError(f"Cannot plan {kind.value} of size {size}")
        if size < kind.min_size():
            raise ConfigurationError(
                f"{kind.value} requires a size of at least {kind.min_size()}. Got {size}"
            )
        if kind.is_lapped and size % 2:
            raise ConfigurationError(f"The {kind.value} size must be even. Got {size}")
        return size

    def _cached(self, kind: TransformKind, size: int) -> Any:
        key = (kind, size)
        transform = self._cache.get(key)
        if transform is not None:
            return transform
        with self._lock:
            transform = self._cache.get(key)
            if transform is None:
                transform = self._build(kind, size)
                self._cache[key] = transform
                LOGGER.debug(
                    "PLAN | kind=%s size=%d algorithm=%s",
                    kind.value,
                    size,
                    transform.__class__.__name__,
                )
        return transform

    def _build(self, kind: TransformKind, size: int) -> BaseTransform:
        if kind in (TransformKind.DCT1, TransformKind.DST1):
            return self._build_type1(kind, size)
        if kind in (TransformKind.DCT2, TransformKind.DCT3):
            return self._build_dct23(kind, size)
        if kind in (TransformKind.DST2, TransformKind.DST3):
            return self._build_dst23(kind, size)
        if kind in (TransformKind.DCT4, TransformKind.DST4):
            return self._build_type4(kind, size)
        return MdctViaDct4(kind, self._cached(TransformKind.DCT4, size))

    def _build_type1(self, kind: TransformKind, size: int) -> BaseInplaceTransform:
        if size < self.config.type1_naive_below:
            return Type1Naive(kind, size, self.dtype)
        fft_len = 2 * (size - 1) if kind is TransformKind.DCT1 else 2 * (size + 1)
        return Type1ConvertToFft(kind, self.fft_planner.plan_fft(fft_len), self.dtype)

    def _build_dct23(self, kind: TransformKind, size: int) -> BaseInplaceTransform:
        if size in BUTTERFLY_SIZES:
            return Type2And3Butterfly(kind, size, self.dtype)
        if _is_power_of_two(size) and size > BUTTERFLY_SIZES[-1]:
            return Type2And3SplitRadix(
                self._cached(kind, size // 2),
                self._cached(kind, size // 4),
            )
        return self._build_dst23(kind, size)

    def _build_dst23(self, kind: TransformKind, size: int) -> BaseInplaceTransform:
        if size == 1 or size < self.config.type2and3_naive_below:
            return Type2And3Naive(kind, size, self.dtype)
        return Type2And3ConvertToFft(kind, self.fft_planner.plan_fft(size), self.dtype)

    def _build_type4(self, kind: TransformKind, size: int) -> BaseInplaceTransform:
        if size % 2 == 0:
            return Type4ConvertToType3Even(kind, self._cached(TransformKind.DCT3, size // 2))
        if size < self.config.type4_naive_below:
            return Type4Naive(kind, size, self.dtype)
        return Type4ConvertToFftOdd(kind, self.fft_planner.plan_fft(size), self.dtype)
