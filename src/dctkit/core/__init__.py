"""Core abstractions shared by every transform algorithm.

- Transform kinds and their normalization conventions.
- Base classes for in-place and lapped (MDCT) transforms.
- Buffer/scratch validation helpers.
- Twiddle factor tables.
"""

from .base import (
    BaseInplaceTransform,
    BaseLappedTransform,
    BaseTransform,
    iter_plan_graph,
)
from .buffers import complex_dtype, resolve_dtype
from .kinds import TransformKind

__all__ = [
    "BaseTransform",
    "BaseInplaceTransform",
    "BaseLappedTransform",
    "TransformKind",
    "complex_dtype",
    "iter_plan_graph",
    "resolve_dtype",
]
