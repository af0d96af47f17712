from __future__ import annotations

import numpy as np
import pytest

from _reference import assert_close, direct_transform, random_signal
from dctkit import ConfigurationError
from dctkit.algorithms import Type1ConvertToFft, Type2And3ConvertToFft, Type4ConvertToFftOdd
from dctkit.algorithms.convert_to_fft import odd_input_map
from dctkit.fft import NumpyFftPlanner, ScipyFftPlanner


@pytest.fixture(params=[ScipyFftPlanner, NumpyFftPlanner], ids=["scipy", "numpy"])
def fft_planner(request):
    return request.param(np.float64)


def test_dct1_via_fft(fft_planner) -> None:
    for n in (2, 3, 4, 7, 10, 16, 33):
        transform = Type1ConvertToFft("dct1", fft_planner.plan_fft(2 * (n - 1)))
        assert transform.length == n
        x = random_signal(n, seed=n)
        expected = direct_transform("dct1", x)
        transform.process(x)
        assert_close(x, expected)


def test_dst1_via_fft(fft_planner) -> None:
    for n in (1, 2, 3, 4, 7, 10, 16, 33):
        transform = Type1ConvertToFft("dst1", fft_planner.plan_fft(2 * (n + 1)))
        assert transform.length == n
        x = random_signal(n, seed=n)
        expected = direct_transform("dst1", x)
        transform.process(x)
        assert_close(x, expected)


@pytest.mark.parametrize("kind", ["dct2", "dst2", "dct3", "dst3"])
def test_type2_and_3_via_fft(fft_planner, kind: str) -> None:
    for n in (1, 2, 3, 4, 5, 8, 9, 12, 17, 30):
        transform = Type2And3ConvertToFft(kind, fft_planner.plan_fft(n))
        x = random_signal(n, seed=n)
        expected = direct_transform(kind, x)
        transform.process(x)
        assert_close(x, expected)


@pytest.mark.parametrize("kind", ["dct4", "dst4"])
def test_type4_odd_via_fft(fft_planner, kind: str) -> None:
    for n in (1, 3, 5, 7, 9, 11, 13, 15, 17, 21, 99):
        transform = Type4ConvertToFftOdd(kind, fft_planner.plan_fft(n))
        x = random_signal(n, seed=n)
        expected = direct_transform(kind, x)
        transform.process(x)
        assert_close(x, expected)


def test_odd_input_map_is_signed_permutation() -> None:
    for n in (1, 3, 5, 7, 9, 11, 13, 15, 17, 19, 21):
        indices, signs = odd_input_map(n)
        assert sorted(indices.tolist()) == list(range(n))
        assert set(np.abs(signs).tolist()) == {1.0}


def test_conversions_report_scratch_and_fft_length() -> None:
    planner = ScipyFftPlanner()
    transform = Type2And3ConvertToFft("dct2", planner.plan_fft(12))
    assert transform.fft_length == 12
    assert transform.required_scratch_len() == 24
    info = transform.describe()
    assert info["fft_length"] == 12
    assert info["algorithm"] == "Type2And3ConvertToFft"

    x = random_signal(12, seed=4)
    expected = direct_transform("dct2", x)
    transform.process(x, np.zeros(100))
    assert_close(x, expected)


def test_float32_conversions() -> None:
    planner = ScipyFftPlanner(np.float32)
    transform = Type4ConvertToFftOdd("dct4", planner.plan_fft(15), np.float32)
    x = random_signal(15, seed=2, dtype=np.float32)
    expected = direct_transform("dct4", x)
    transform.process(x)
    assert x.dtype == np.float32
    assert_close(x, expected, dtype=np.float32)


def test_conversions_reject_wrong_fft_parity() -> None:
    planner = ScipyFftPlanner()
    with pytest.raises(ConfigurationError, match="even FFT"):
        Type1ConvertToFft("dct1", planner.plan_fft(5))
    with pytest.raises(ConfigurationError, match="odd FFT"):
        Type4ConvertToFftOdd("dct4", planner.plan_fft(8))
