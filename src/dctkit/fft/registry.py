"""Registry of FFT backend factories."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable

from ..errors import RegistryError
from .backend import FftPlanner, NumpyFftPlanner, ScipyFftPlanner

FftPlannerFactory = Callable[..., FftPlanner]


@dataclass
class FftBackendRegistry:
    """Simple name-to-factory mapping for FFT planners.

    Factories are called as ``factory(dtype=..., **options)``.
    """

    _factories: dict[str, FftPlannerFactory] = field(default_factory=dict)

    def register(
        self,
        name: str,
        factory: FftPlannerFactory,
        *,
        overwrite: bool = False,
    ) -> None:
        if not overwrite and name in self._factories:
            raise RegistryError(f"FFT backend '{name}' is already registered.")
        self._factories[name] = factory

    def create(self, name: str, **options: Any) -> FftPlanner:
        if name not in self._factories:
            available = ", ".join(sorted(self._factories)) or "<none>"
            raise RegistryError(
                f"Unknown FFT backend '{name}'. Available backends: {available}"
            )
        return self._factories[name](**options)

    def available(self) -> list[str]:
        return sorted(self._factories)


def _scipy_factory(*, dtype: Any, workers: int | None = None) -> FftPlanner:
    return ScipyFftPlanner(dtype, workers=workers)


def _numpy_factory(*, dtype: Any, workers: int | None = None) -> FftPlanner:
    del workers
    return NumpyFftPlanner(dtype)


def default_fft_registry() -> FftBackendRegistry:
    """Return a registry with the built-in ``scipy`` and ``numpy`` backends."""
    registry = FftBackendRegistry()
    registry.register("scipy", _scipy_factory)
    registry.register("numpy", _numpy_factory)
    return registry
