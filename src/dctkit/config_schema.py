"""Typed OmegaConf schema for planner configuration."""

from __future__ import annotations

from dataclasses import asdict, dataclass
import importlib
from typing import Any, Mapping, TypeVar, cast

from .core.buffers import resolve_dtype
from .errors import ConfigurationError

try:
    OmegaConf = importlib.import_module("omegaconf").OmegaConf
    OmegaConfBaseException = importlib.import_module(
        "omegaconf.errors"
    ).OmegaConfBaseException
except ModuleNotFoundError as exc:  # pragma: no cover
    raise RuntimeError(
        "dctkit.config_schema requires 'omegaconf'. Install it with `pip install omegaconf`."
    ) from exc


@dataclass
class PlannerConfig:
    """Planner configuration schema.

    Attributes
    ----------
    dtype:
        Real floating type every plan computes in (``"float64"`` or ``"float32"``).
    fft_backend:
        Name of the FFT backend in the backend registry.
    fft_workers:
        Worker count forwarded to backends that support it.
    type1_naive_below:
        DCT1/DST1 sizes below this use the naive algorithm.
    type2and3_naive_below:
        Non power-of-two DCT2/DCT3 and all DST2/DST3 sizes below this use the
        naive algorithm.
    type4_naive_below:
        Odd DCT4/DST4 sizes below this use the naive algorithm.
    """

    dtype: str = "float64"
    fft_backend: str = "scipy"
    fft_workers: int | None = None
    type1_naive_below: int = 10
    type2and3_naive_below: int = 8
    type4_naive_below: int = 7

    def validate(self) -> PlannerConfig:
        """Raise :class:`ConfigurationError` for out-of-range values."""
        resolve_dtype(self.dtype)
        if not self.fft_backend:
            raise ConfigurationError("fft_backend must be a non-empty name")
        if self.fft_workers is not None and self.fft_workers == 0:
            raise ConfigurationError("fft_workers must be non-zero when given")
        for name in ("type1_naive_below", "type2and3_naive_below", "type4_naive_below"):
            if getattr(self, name) < 0:
                raise ConfigurationError(f"{name} must be >= 0, got {getattr(self, name)}")
        return self


TSchema = TypeVar("TSchema")


def _decode_schema(
    data: Mapping[str, object],
    schema: type[TSchema],
) -> TSchema:
    base = OmegaConf.structured(schema)
    try:
        loaded = OmegaConf.create(dict(data))
        merged = OmegaConf.merge(base, loaded)
        decoded = OmegaConf.to_object(merged)
    except OmegaConfBaseException as exc:
        raise ConfigurationError(f"Invalid {schema.__name__}: {exc}") from exc
    if not isinstance(decoded, schema):
        raise TypeError(f"Failed to decode config as {schema.__name__}")
    return cast(TSchema, decoded)


def parse_planner_config(data: Mapping[str, object] | None = None) -> PlannerConfig:
    """Decode a mapping into a validated :class:`PlannerConfig`."""
    return _decode_schema(data or {}, PlannerConfig).validate()


def planner_config_to_dict(config: PlannerConfig) -> dict[str, Any]:
    """Convert :class:`PlannerConfig` to a plain dictionary."""
    return asdict(config)
