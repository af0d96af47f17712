"""Concrete transform algorithms composed by the planner."""

from .butterflies import BUTTERFLY_SIZES, Type2And3Butterfly
from .convert_to_fft import (
    Type1ConvertToFft,
    Type2And3ConvertToFft,
    Type4ConvertToFftOdd,
)
from .mdct import MdctViaDct4
from .naive import MdctNaive, Type1Naive, Type2And3Naive, Type4Naive, basis_matrix
from .splitradix import Type2And3SplitRadix
from .type4_via_type3 import Type4ConvertToType3Even
from .windows import WindowLike, resolve_window

__all__ = [
    "BUTTERFLY_SIZES",
    "MdctNaive",
    "MdctViaDct4",
    "Type1ConvertToFft",
    "Type1Naive",
    "Type2And3Butterfly",
    "Type2And3ConvertToFft",
    "Type2And3Naive",
    "Type2And3SplitRadix",
    "Type4ConvertToFftOdd",
    "Type4ConvertToType3Even",
    "Type4Naive",
    "WindowLike",
    "basis_matrix",
    "resolve_window",
]
