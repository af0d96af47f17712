import numpy as np
import pytest

from _reference import assert_close, direct_transform, random_signal
from dctkit import ConfigurationError, ContractViolation, Planner


def test_size_one_transforms() -> None:
    planner = Planner()
    expectations = {
        "dct2": 3.0,
        "dct3": 1.5,
        "dst1": 3.0,
        "dst2": 3.0,
        "dst3": 1.5,
        "dct4": 3.0 * np.sqrt(0.5),
        "dst4": 3.0 * np.sqrt(0.5),
    }
    for kind, value in expectations.items():
        x = np.array([3.0])
        planner.plan(kind, 1).process(x)
        assert_close(x, [value])


def test_process_rejects_bad_buffers_without_writing() -> None:
    planner = Planner()
    transform = planner.plan_dct2(8)
    with pytest.raises(ContractViolation, match="wrong length"):
        transform.process(np.zeros(9))
    with pytest.raises(ContractViolation, match="dtype float32"):
        transform.process(np.zeros(8, dtype=np.float32))
    with pytest.raises(ContractViolation, match="1-D"):
        transform.process(np.zeros((2, 4)))
    with pytest.raises(ContractViolation, match="numpy.ndarray"):
        transform.process([0.0] * 8)

    fft_based = planner.plan_dst2(20)
    buffer = random_signal(20, seed=0)
    before = buffer.copy()
    with pytest.raises(ContractViolation, match="scratch has dtype"):
        fft_based.process(buffer, np.zeros(100, dtype=np.float32))
    with pytest.raises(ContractViolation, match="contiguous"):
        fft_based.process(buffer, np.zeros(200)[::2])
    np.testing.assert_array_equal(buffer, before)


def test_lapped_buffers_are_validated() -> None:
    planner = Planner()
    mdct = planner.plan_mdct(8)
    with pytest.raises(ContractViolation, match="input is the wrong length"):
        mdct.process(np.zeros(8), np.zeros(8))
    with pytest.raises(ContractViolation, match="output is the wrong length"):
        mdct.process(np.zeros(16), np.zeros(16))

    imdct = planner.plan_imdct(8)
    output = np.zeros(16)
    with pytest.raises(ContractViolation, match="output is the wrong length"):
        imdct.process(np.zeros(8), np.zeros(8))
    with pytest.raises(ContractViolation, match="input is the wrong length"):
        imdct.process(np.zeros(16), output)


def test_process_accepts_views_of_larger_arrays() -> None:
    planner = Planner()
    transform = planner.plan_dct3(64)
    block = random_signal(256, seed=3)
    expected = direct_transform("dct3", block[64:128])
    transform.process(block[64:128])
    assert_close(block[64:128], expected)

    strided = random_signal(34, seed=4)
    expected = direct_transform("dct4", strided[::2])
    view = strided[::2]
    planner.plan_dct4(17).process(view)
    assert_close(view, expected)


def test_planner_rejects_structurally_invalid_sizes() -> None:
    planner = Planner()
    for kind in ("dct1", "dct2", "dct3", "dct4", "dst1", "dst2", "dst3", "dst4", "mdct", "imdct"):
        with pytest.raises(ConfigurationError):
            planner.plan(kind, 0)
        with pytest.raises(ConfigurationError):
            planner.plan(kind, -4)
    with pytest.raises(ConfigurationError):
        planner.plan_imdct(9)


def test_precomputed_tables_are_read_only() -> None:
    planner = Planner()
    transform = planner.plan_dct2(64)
    with pytest.raises(ValueError):
        transform._cos[0] = 0.0
    naive = planner.plan_dct2(5)
    with pytest.raises(ValueError):
        naive._matrix[0, 0] = 0.0
