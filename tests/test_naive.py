from __future__ import annotations

import numpy as np
import pytest

from _reference import (
    assert_close,
    direct_imdct,
    direct_mdct,
    direct_transform,
    random_signal,
    sine_window,
)
from dctkit import ConfigurationError
from dctkit.algorithms import MdctNaive, Type1Naive, Type2And3Naive, Type4Naive


@pytest.mark.parametrize(
    ("cls", "kinds"),
    [
        (Type1Naive, ("dst1",)),
        (Type2And3Naive, ("dct2", "dst2", "dct3", "dst3")),
        (Type4Naive, ("dct4", "dst4")),
    ],
)
def test_naive_matches_definition(cls, kinds) -> None:
    for kind in kinds:
        for n in (1, 2, 3, 5, 8, 13):
            x = random_signal(n, seed=n)
            expected = direct_transform(kind, x)
            transform = cls(kind, n)
            assert transform.required_scratch_len() == 0
            transform.process(x)
            assert_close(x, expected)


def test_naive_dct1_matches_definition_and_rejects_size_one() -> None:
    for n in (2, 3, 4, 9):
        x = random_signal(n, seed=n)
        expected = direct_transform("dct1", x)
        Type1Naive("dct1", n).process(x)
        assert_close(x, expected)
    with pytest.raises(ConfigurationError, match="length < 2"):
        Type1Naive("dct1", 1)


def test_naive_rejects_foreign_kind() -> None:
    with pytest.raises(ConfigurationError, match="cannot compute dct2"):
        Type4Naive("dct2", 4)


def test_naive_float32_buffers() -> None:
    x = random_signal(6, seed=3, dtype=np.float32)
    expected = direct_transform("dst4", x)
    Type4Naive("dst4", 6, np.float32).process(x)
    assert x.dtype == np.float32
    assert_close(x, expected, dtype=np.float32)


def test_mdct_naive_matches_definition() -> None:
    n = 6
    window = sine_window(2 * n)
    x = random_signal(2 * n, seed=11)
    forward = MdctNaive("mdct", n, window=window)
    output = np.zeros(n)
    forward.process(x, output)
    assert_close(output, direct_mdct(x, window))

    inverse = MdctNaive("imdct", n, window=window)
    accumulated = np.ones(2 * n)
    inverse.process(output, accumulated)
    assert_close(accumulated, 1.0 + direct_imdct(output, window))


def test_mdct_naive_rejects_odd_length() -> None:
    with pytest.raises(ConfigurationError, match="must be even"):
        MdctNaive("mdct", 5)
