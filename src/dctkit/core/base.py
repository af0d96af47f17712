"""Base classes for planned transform instances.

A planned instance is immutable once constructed: its coefficient tables are
read-only arrays and all per-call storage comes from the caller's buffers and
scratch. Instances can therefore be shared between parents and called from
several threads at once, as long as each call uses its own buffers.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Callable, ClassVar, Iterator, Mapping, Sequence

import numpy as np

from ..errors import ConfigurationError
from .buffers import resolve_dtype, resolve_scratch, validate_buffer
from .kinds import TransformKind


class BaseTransform(ABC):
    """Common top-level contract for all planned transforms.

    Subclasses declare ``_dispatch``, mapping each supported kind to the name
    of the method that computes it. The method is bound once here, so the
    choice between e.g. DCT2 and DCT3 code paths is fixed at plan time.
    """

    _dispatch: ClassVar[Mapping[TransformKind, str]] = {}

    def __init__(
        self,
        kind: TransformKind | str,
        length: int,
        dtype: Any = np.float64,
        children: Sequence[BaseTransform] = (),
    ) -> None:
        kind = TransformKind.coerce(kind)
        if kind not in self._dispatch:
            supported = ", ".join(item.value for item in self._dispatch) or "<none>"
            raise ConfigurationError(
                f"{self.__class__.__name__} cannot compute {kind.value}. "
                f"Supported kinds: {supported}"
            )
        if length < 1:
            raise ConfigurationError(f"Transform length must be positive, got {length}")
        self._kind = kind
        self._length = int(length)
        self._dtype = resolve_dtype(dtype)
        self._children = tuple(children)
        self._kernel: Callable[..., None] = getattr(self, self._dispatch[kind])

    @property
    def kind(self) -> TransformKind:
        return self._kind

    @property
    def length(self) -> int:
        """Transform size $N$."""
        return self._length

    @property
    def dtype(self) -> np.dtype:
        return self._dtype

    @property
    def children(self) -> tuple[BaseTransform, ...]:
        """Shared sub-transforms this instance delegates to."""
        return self._children

    def __len__(self) -> int:
        return self._length

    @abstractmethod
    def required_scratch_len(self) -> int:
        """Minimum scratch length accepted by :meth:`process`."""

    def summary(self) -> dict[str, Any]:
        """Fields of this node alone, without its children."""
        return {
            "kind": self._kind.value,
            "length": self._length,
            "algorithm": self.__class__.__name__,
            "scratch_len": self.required_scratch_len(),
        }

    def describe(self) -> dict[str, Any]:
        """Return the dependency graph rooted here as nested dictionaries.

        Shared children appear once per parent. Use :func:`iter_plan_graph`
        to visit each distinct instance once.
        """
        info = self.summary()
        info["children"] = [child.describe() for child in self._children]
        return info

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(kind={self._kind.value}, "
            f"length={self._length}, dtype={self._dtype.name})"
        )


class BaseInplaceTransform(BaseTransform):
    """Transforms mapping $N$ values to $N$ values in place."""

    def __call__(self, buffer: np.ndarray, scratch: np.ndarray | None = None) -> np.ndarray:
        """Alias for :meth:`process`."""
        return self.process(buffer, scratch)

    def process(
        self,
        buffer: np.ndarray,
        scratch: np.ndarray | None = None,
    ) -> np.ndarray:
        """Transform ``buffer`` in place and return it.

        Parameters
        ----------
        buffer:
            1-D array of exactly :attr:`length` values in the planner dtype.
        scratch:
            Caller-owned temporary storage of at least
            :meth:`required_scratch_len` values. Allocated when omitted.
        """
        validate_buffer(buffer, self._length, self._dtype)
        scratch = resolve_scratch(scratch, self.required_scratch_len(), self._dtype)
        self._kernel(buffer, scratch)
        return buffer


class BaseLappedTransform(BaseTransform):
    """MDCT/IMDCT contract: $2N$ time samples against $N$ coefficients.

    Both directions are available on every instance through the split
    methods; :meth:`process` runs the direction named by :attr:`kind`.
    """

    _dispatch: ClassVar[Mapping[TransformKind, str]] = {
        TransformKind.MDCT: "_forward",
        TransformKind.IMDCT: "_inverse",
    }

    @abstractmethod
    def _mdct(
        self,
        input_a: np.ndarray,
        input_b: np.ndarray,
        output: np.ndarray,
        scratch: np.ndarray,
    ) -> None:
        """Forward transform of validated buffers."""

    @abstractmethod
    def _imdct(
        self,
        input: np.ndarray,
        output_a: np.ndarray,
        output_b: np.ndarray,
        scratch: np.ndarray,
    ) -> None:
        """Inverse transform of validated buffers, accumulating into outputs."""

    def _forward(self, input: np.ndarray, output: np.ndarray, scratch: np.ndarray | None) -> None:
        n = self._length
        validate_buffer(input, 2 * n, self._dtype, name="input")
        self.process_mdct(input[:n], input[n:], output, scratch)

    def _inverse(self, input: np.ndarray, output: np.ndarray, scratch: np.ndarray | None) -> None:
        n = self._length
        validate_buffer(output, 2 * n, self._dtype, name="output")
        self.process_imdct(input, output[:n], output[n:], scratch)

    def __call__(
        self,
        input: np.ndarray,
        output: np.ndarray,
        scratch: np.ndarray | None = None,
    ) -> np.ndarray:
        """Alias for :meth:`process`."""
        return self.process(input, output, scratch)

    def process(
        self,
        input: np.ndarray,
        output: np.ndarray,
        scratch: np.ndarray | None = None,
    ) -> np.ndarray:
        """Run the transform named by :attr:`kind` and return ``output``.

        For ``MDCT`` the $2N$ input values are transformed into ``output``
        (overwritten, length $N$). For ``IMDCT`` the $N$ input coefficients are
        transformed and *added* to ``output`` (length $2N$), which makes
        overlap-add reconstruction a matter of passing overlapping slices.
        """
        self._kernel(input, output, scratch)
        return output

    def process_mdct(
        self,
        input_a: np.ndarray,
        input_b: np.ndarray,
        output: np.ndarray,
        scratch: np.ndarray | None = None,
    ) -> np.ndarray:
        """Forward MDCT of the $2N$ samples ``input_a`` followed by ``input_b``.

        Inputs are not modified, so consecutive frames can share halves.
        """
        n = self._length
        validate_buffer(input_a, n, self._dtype, name="input_a")
        validate_buffer(input_b, n, self._dtype, name="input_b")
        validate_buffer(output, n, self._dtype, name="output")
        scratch = resolve_scratch(scratch, self.required_scratch_len(), self._dtype)
        self._mdct(input_a, input_b, output, scratch)
        return output

    def process_imdct(
        self,
        input: np.ndarray,
        output_a: np.ndarray,
        output_b: np.ndarray,
        scratch: np.ndarray | None = None,
    ) -> tuple[np.ndarray, np.ndarray]:
        """Inverse MDCT of ``input``, summed into ``output_a`` and ``output_b``.

        Returns the two output halves.
        """
        n = self._length
        validate_buffer(input, n, self._dtype, name="input")
        validate_buffer(output_a, n, self._dtype, name="output_a")
        validate_buffer(output_b, n, self._dtype, name="output_b")
        scratch = resolve_scratch(scratch, self.required_scratch_len(), self._dtype)
        self._imdct(input, output_a, output_b, scratch)
        return output_a, output_b


def iter_plan_graph(root: BaseTransform) -> Iterator[BaseTransform]:
    """Yield every distinct instance reachable from ``root`` once, depth first."""
    seen: set[int] = set()
    stack = [root]
    while stack:
        node = stack.pop()
        if id(node) in seen:
            continue
        seen.add(id(node))
        yield node
        stack.extend(reversed(node.children))
