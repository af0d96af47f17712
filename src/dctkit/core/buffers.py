"""Buffer validation and scratch helpers shared by all transforms."""

from __future__ import annotations

from typing import Any

import numpy as np

from ..errors import ConfigurationError, ContractViolation

SUPPORTED_DTYPES = (np.dtype(np.float32), np.dtype(np.float64))


def resolve_dtype(dtype: Any) -> np.dtype:
    """Return the real floating dtype a planner computes in."""
    try:
        resolved = np.dtype(dtype)
    except TypeError as exc:
        raise ConfigurationError(f"Unsupported dtype {dtype!r}") from exc
    if resolved not in SUPPORTED_DTYPES:
        names = ", ".join(item.name for item in SUPPORTED_DTYPES)
        raise ConfigurationError(
            f"Unsupported dtype {resolved.name!r}. Expected one of: {names}"
        )
    return resolved


def complex_dtype(dtype: np.dtype) -> np.dtype:
    """Complex counterpart of a real floating dtype."""
    return np.result_type(dtype, np.complex64)


def validate_buffer(
    buffer: Any,
    expected_len: int,
    dtype: np.dtype,
    *,
    name: str = "buffer",
) -> np.ndarray:
    """Check that ``buffer`` is a 1-D array of ``expected_len`` values."""
    if not isinstance(buffer, np.ndarray):
        raise ContractViolation(
            f"{name} must be a numpy.ndarray, got {type(buffer).__name__}"
        )
    if buffer.ndim != 1:
        raise ContractViolation(f"{name} must be 1-D, got ndim={buffer.ndim}")
    if buffer.shape[0] != expected_len:
        raise ContractViolation(
            f"{name} is the wrong length. Expected {expected_len}, "
            f"got {buffer.shape[0]}"
        )
    if buffer.dtype != dtype:
        raise ContractViolation(
            f"{name} has dtype {buffer.dtype.name}, expected {dtype.name}"
        )
    return buffer


def resolve_scratch(
    scratch: Any,
    required_len: int,
    dtype: np.dtype,
) -> np.ndarray:
    """Validate caller scratch, or allocate it when ``scratch`` is ``None``.

    Only a lower bound on the length is enforced; longer scratch is accepted.
    """
    if scratch is None:
        return np.zeros(required_len, dtype=dtype)
    if not isinstance(scratch, np.ndarray) or scratch.ndim != 1:
        raise ContractViolation("scratch must be a 1-D numpy.ndarray")
    if scratch.shape[0] < required_len:
        raise ContractViolation(
            f"Not enough scratch space was provided. Expected at least "
            f"{required_len}, got {scratch.shape[0]}"
        )
    if required_len and scratch.dtype != dtype:
        raise ContractViolation(
            f"scratch has dtype {scratch.dtype.name}, expected {dtype.name}"
        )
    return scratch


def complex_view(scratch: np.ndarray, count: int) -> np.ndarray:
    """Reinterpret the first ``2 * count`` reals of ``scratch`` as complex."""
    if count == 0:
        return np.empty(0, dtype=complex_dtype(scratch.dtype))
    region = scratch[: 2 * count]
    if not region.flags.c_contiguous:
        raise ContractViolation("scratch must be contiguous")
    return region.view(complex_dtype(region.dtype))


def readonly(values: Any, dtype: np.dtype) -> np.ndarray:
    """Cast precomputed values to ``dtype`` and freeze them."""
    table = np.array(values, dtype=dtype)
    table.setflags(write=False)
    return table
