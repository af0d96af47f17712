import pytest

from dctkit import (
    ConfigurationError,
    ContractViolation,
    DctError,
    Planner,
    PlannerConfig,
    RegistryError,
    TransformKind,
)


def test_public_imports() -> None:
    assert Planner is not None
    assert PlannerConfig is not None
    assert TransformKind is not None


def test_error_hierarchy() -> None:
    assert issubclass(ConfigurationError, DctError)
    assert issubclass(ConfigurationError, ValueError)
    assert issubclass(ContractViolation, DctError)
    assert issubclass(ContractViolation, ValueError)
    assert issubclass(RegistryError, DctError)
    assert issubclass(DctError, RuntimeError)


def test_transform_kind_coerce_accepts_names() -> None:
    assert TransformKind.coerce("dct2") is TransformKind.DCT2
    assert TransformKind.coerce("IMDCT") is TransformKind.IMDCT
    assert TransformKind.coerce(TransformKind.DST4) is TransformKind.DST4
    with pytest.raises(ConfigurationError, match="Unknown transform kind"):
        TransformKind.coerce("dct5")
    with pytest.raises(ConfigurationError):
        TransformKind.coerce(3)


def test_transform_kind_inverse_pairs() -> None:
    assert TransformKind.DCT2.inverse is TransformKind.DCT3
    assert TransformKind.DST3.inverse is TransformKind.DST2
    assert TransformKind.DCT4.inverse is TransformKind.DCT4
    assert TransformKind.DCT1.inverse is TransformKind.DCT1
    assert TransformKind.MDCT.inverse is TransformKind.IMDCT


def test_transform_kind_inverse_scale() -> None:
    assert TransformKind.DCT1.inverse_scale(9) == 4.0
    assert TransformKind.DST1.inverse_scale(9) == 5.0
    assert TransformKind.DCT2.inverse_scale(8) == 4.0
    assert TransformKind.MDCT.inverse_scale(8) == 4.0
    assert TransformKind.IMDCT.inverse_scale(10) == 5.0
    assert TransformKind.DCT1.min_size() == 2
    assert TransformKind.DST1.min_size() == 1
    assert TransformKind.MDCT.is_lapped
    assert not TransformKind.DCT4.is_lapped
