from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

import numpy as np
import pytest

from _reference import assert_close, direct_transform, random_signal
from dctkit import ConfigurationError, ContractViolation, Planner, PlannerConfig, TransformKind
from dctkit.algorithms import (
    Type1ConvertToFft,
    Type1Naive,
    Type2And3Butterfly,
    Type2And3ConvertToFft,
    Type2And3Naive,
    Type2And3SplitRadix,
)
from dctkit.fft import NumpyFftPlanner

INPLACE_KINDS = ["dct1", "dct2", "dct3", "dct4", "dst1", "dst2", "dst3", "dst4"]


def test_dct2_of_small_ramp() -> None:
    planner = Planner()
    x = np.array([1.0, 2.0, 3.0, 4.0])
    planner.plan_dct2(4).process(x)
    expected = np.array([10.0, -3.15432202989895, 0.0, -0.2241707645839829])
    assert_close(x, expected)
    assert_close(x, direct_transform("dct2", [1.0, 2.0, 3.0, 4.0]))

    x32 = np.array([1.0, 2.0, 3.0, 4.0], dtype=np.float32)
    Planner(dtype=np.float32).plan_dct2(4).process(x32)
    assert_close(x32, expected, dtype=np.float32)


@pytest.mark.parametrize("kind", INPLACE_KINDS)
def test_boundary_sizes_match_definition(kind: str) -> None:
    planner = Planner()
    for n in (1, 2, 4, 8, 16, 17, 1024):
        if n < TransformKind.coerce(kind).min_size():
            continue
        transform = planner.plan(kind, n)
        x = random_signal(n, seed=n)
        expected = direct_transform(kind, x)
        transform.process(x)
        assert_close(x, expected)


@pytest.mark.parametrize("kind", INPLACE_KINDS)
def test_forward_then_inverse_round_trip(kind: str) -> None:
    planner = Planner()
    kind = TransformKind.coerce(kind)
    for n in (3, 9, 12, 31, 64):
        forward = planner.plan(kind, n)
        inverse = planner.plan(kind.inverse, n)
        x = random_signal(n, seed=n + 1)
        y = x.copy()
        forward.process(y)
        inverse.process(y)
        assert_close(y, x * kind.inverse_scale(n))


def test_cache_returns_identical_instances() -> None:
    planner = Planner()
    first = planner.plan("dct2", 48)
    assert planner.plan(TransformKind.DCT2, 48) is first
    assert planner.plan_dct2(48) is first
    assert ("dct2", 48) in planner
    assert (TransformKind.DCT2, 48) in planner
    assert ("dct2", 49) not in planner
    assert ("nope", 48) not in planner
    assert "dct2" not in planner


def test_cached_keys_include_recursive_children() -> None:
    planner = Planner()
    planner.plan_dct2(64)
    keys = set(planner.cached_keys())
    assert {
        (TransformKind.DCT2, 64),
        (TransformKind.DCT2, 32),
        (TransformKind.DCT2, 16),
        (TransformKind.DCT2, 8),
    } <= keys

    planner.plan_dct4(64)
    assert (TransformKind.DCT3, 32) in planner
    assert (TransformKind.DCT3, 16) in planner


def test_algorithm_selection() -> None:
    planner = Planner()
    assert isinstance(planner.plan_dct2(1), Type2And3Naive)
    for n in (2, 4, 8, 16):
        assert isinstance(planner.plan_dct2(n), Type2And3Butterfly)
        assert isinstance(planner.plan_dct3(n), Type2And3Butterfly)
    assert isinstance(planner.plan_dct2(32), Type2And3SplitRadix)
    assert isinstance(planner.plan_dct3(1024), Type2And3SplitRadix)
    assert isinstance(planner.plan_dct2(7), Type2And3Naive)
    assert isinstance(planner.plan_dct2(17), Type2And3ConvertToFft)
    assert isinstance(planner.plan_dst2(4), Type2And3Naive)
    assert isinstance(planner.plan_dst3(16), Type2And3ConvertToFft)
    assert isinstance(planner.plan_dct1(9), Type1Naive)
    assert isinstance(planner.plan_dct1(10), Type1ConvertToFft)
    assert isinstance(planner.plan_dst1(17), Type1ConvertToFft)


def test_config_thresholds_change_selection() -> None:
    planner = Planner(
        PlannerConfig(type1_naive_below=100, type2and3_naive_below=0, type4_naive_below=100)
    )
    assert isinstance(planner.plan_dct1(40), Type1Naive)
    assert isinstance(planner.plan_dst2(3), Type2And3ConvertToFft)
    assert planner.plan_dst4(41).__class__.__name__ == "Type4Naive"
    x = random_signal(3, seed=0)
    expected = direct_transform("dst2", x)
    planner.plan_dst2(3).process(x)
    assert_close(x, expected)


def test_scratch_tolerance() -> None:
    planner = Planner()
    for kind, n in (("dct2", 1024), ("dst3", 17), ("dct4", 30), ("dct1", 33)):
        transform = planner.plan(kind, n)
        required = transform.required_scratch_len()
        assert required > 0

        x = random_signal(n, seed=1)
        expected = direct_transform(kind, x)
        transform.process(x, np.zeros(required + 37))
        assert_close(x, expected)

        buffer = random_signal(n, seed=2)
        before = buffer.copy()
        with pytest.raises(ContractViolation, match="Not enough scratch"):
            transform.process(buffer, np.zeros(required - 1))
        np.testing.assert_array_equal(buffer, before)


def test_concurrent_planning_builds_one_instance_per_key() -> None:
    planner = Planner()
    sizes = [1024, 512, 1000, 999, 64] * 8

    with ThreadPoolExecutor(max_workers=8) as pool:
        plans = list(pool.map(lambda n: planner.plan_dct4(n), sizes))

    by_size: dict[int, set[int]] = {}
    for n, plan in zip(sizes, plans):
        by_size.setdefault(n, set()).add(id(plan))
    assert all(len(ids) == 1 for ids in by_size.values())
    keys = planner.cached_keys()
    assert len(keys) == len(set(keys))


def test_concurrent_processing_on_shared_instance() -> None:
    planner = Planner()
    transform = planner.plan_dct3(256)
    signals = [random_signal(256, seed=seed) for seed in range(16)]
    expected = [direct_transform("dct3", x) for x in signals]

    def run(x: np.ndarray) -> np.ndarray:
        out = x.copy()
        transform.process(out, np.empty(transform.required_scratch_len()))
        return out

    with ThreadPoolExecutor(max_workers=4) as pool:
        results = list(pool.map(run, signals))
    for actual, reference in zip(results, expected):
        assert_close(actual, reference)


def test_numpy_fft_backend_by_name_and_instance() -> None:
    by_name = Planner(PlannerConfig(fft_backend="numpy"))
    by_instance = Planner(fft_planner=NumpyFftPlanner())
    for planner in (by_name, by_instance):
        assert planner.fft_planner.name == "numpy"
        x = random_signal(21, seed=21)
        expected = direct_transform("dst2", x)
        planner.plan_dst2(21).process(x)
        assert_close(x, expected)


def test_planner_configuration_errors() -> None:
    planner = Planner()
    with pytest.raises(ConfigurationError, match="size 0"):
        planner.plan_dct2(0)
    with pytest.raises(ConfigurationError, match="at least 2"):
        planner.plan_dct1(1)
    with pytest.raises(ConfigurationError, match="Unknown transform kind"):
        planner.plan("dct9", 8)
    with pytest.raises(ConfigurationError, match="does not accept a window"):
        planner.plan("dct4", 8, window=np.ones(16))
    with pytest.raises(ConfigurationError, match="integer"):
        planner.plan_dct2(4.5)
    with pytest.raises(ConfigurationError, match="Unsupported dtype"):
        Planner(dtype=np.int32)
    with pytest.raises(ConfigurationError, match="does not match"):
        Planner(dtype=np.float32, fft_planner=NumpyFftPlanner(np.float64))
    assert planner.cached_keys() == []
