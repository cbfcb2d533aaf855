import numpy as np
import pytest

from straitjacket.config import NumericConfig
from straitjacket.errors import DegenerateFactorError, DegenerateRangeError
from straitjacket.precision import NumericVariant, double, single, variant_for


def test_single_and_double_dtypes():
    assert single.round_to_nearest(1.1345, 0.2).dtype == np.float32
    assert double.round_to_nearest(1.1345, 0.2).dtype == np.float64
    assert float(single.round_to_nearest(1.1345, 0.2)) == pytest.approx(1.2, abs=1e-5)
    assert float(double.round_to_nearest(1.1345, 0.2)) == pytest.approx(1.2, abs=1e-12)
    assert float(single.floor_to_nearest(1.1345, 0.2)) == pytest.approx(1.0, abs=1e-5)


def test_variants_agree_modulo_precision(rng):
    x = rng.uniform(-10.0, 20.0, size=300)

    np.testing.assert_allclose(
        single.map_range(x, 0.0, 10.0, 0.0, 100.0),
        double.map_range(x, 0.0, 10.0, 0.0, 100.0),
        rtol=1e-5,
        atol=1e-4,
    )
    # float32-representable inputs so both precisions see the same ties
    x32 = x.astype(np.float32)
    np.testing.assert_allclose(
        single.round_to_nearest(x32, 0.25),
        double.round_to_nearest(x32.astype(np.float64), 0.25),
        atol=1e-5,
    )
    np.testing.assert_allclose(
        single.floor_to_nearest(x32, 0.25),
        double.floor_to_nearest(x32.astype(np.float64), 0.25),
        atol=1e-5,
    )


def test_single_precision_round_trip(rng):
    a, b, c, d = -3.5, 12.25, 100.0, -40.0
    x = rng.uniform(-50.0, 50.0, size=200).astype(np.float32)

    forward = single.map_range(x, a, b, c, d)
    back = single.map_range(forward, c, d, a, b)

    assert back.dtype == np.float32
    np.testing.assert_allclose(back, x, rtol=1e-5, atol=1e-4)


def test_spec_map_examples_in_both_precisions():
    for variant in (single, double):
        assert variant.map_range(0, 0, 10, 0, 100) == 0
        assert variant.map_range(10, 0, 10, 0, 100) == 100
        assert variant.map_range(5, 0, 10, 0, 100) == 50
        assert variant.inverse_lerp(0, 10, 2.5) == 0.25
        assert variant.lerp(0, 10, 0.25) == 2.5


def test_variant_uses_config():
    away = NumericVariant(np.float64, NumericConfig(tie_break="half_away"))
    assert away.round_to_nearest(2.5, 1.0) == 3.0
    assert double.round_to_nearest(2.5, 1.0) == 2.0

    strict = double.with_config(NumericConfig(on_degenerate="raise"))
    with pytest.raises(DegenerateFactorError):
        strict.floor_to_nearest(1.0, 0.0)
    with pytest.raises(DegenerateRangeError):
        strict.map_range(1.0, 3.0, 3.0, 0.0, 1.0)
    assert np.isnan(double.floor_to_nearest(1.0, 0.0))

    clamped = NumericVariant(np.float32, NumericConfig(clamp_map=True))
    assert clamped.map_range(15, 0, 10, 0, 100) == 100
    assert clamped.lerp(0, 10, -1) == 0


def test_variant_validates_config_and_dtype():
    variant = NumericVariant(np.float64, NumericConfig(tie_break="bogus"))
    assert variant.config.tie_break == "half_even"
    with pytest.raises(ValueError):
        NumericVariant(np.int64)
    assert "float32" in repr(single)


def test_variant_for():
    assert variant_for(np.float32) is single
    assert variant_for("float64") is double
    assert variant_for(np.float16).dtype == np.float16
    with pytest.raises(ValueError):
        variant_for(np.int8)
