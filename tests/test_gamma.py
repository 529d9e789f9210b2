"""Tests for the Gamma distribution."""

import math

import numpy as np
import pytest
from scipy import stats

from tests.binary_harness import CappedSource, ScriptedSource, assert_plausible, check_binary
from variates.core.exceptions import (
    DistributionError,
    GammaError,
    ParameterError,
    ScaleTooSmallError,
    ShapeTooSmallError,
    VariatesError,
)
from variates.models.params import BetaParams, GammaParams
from variates.services.gamma import Gamma, GammaMethod


class TestGammaValidation:
    """Test Gamma parameter validation."""

    @pytest.mark.parametrize("shape", [0.0, -1.0, -math.inf, math.nan])
    def test_invalid_shape(self, shape):
        """Test that non-positive or NaN shapes are rejected."""
        with pytest.raises(ShapeTooSmallError):
            Gamma(shape, 1.0)

    @pytest.mark.parametrize("scale", [0.0, -2.0, -math.inf, math.nan])
    def test_invalid_scale(self, scale):
        """Test that non-positive or NaN scales are rejected."""
        with pytest.raises(ScaleTooSmallError):
            Gamma(1.0, scale)

    def test_shape_checked_before_scale(self):
        """Test that a bad shape is reported even when the scale is bad too."""
        with pytest.raises(ShapeTooSmallError):
            Gamma(math.nan, math.nan)

    def test_error_hierarchy_and_payload(self):
        """Test the error class hierarchy and its serialized form."""
        with pytest.raises(ShapeTooSmallError) as exc_info:
            Gamma(-1.0, 2.0)

        err = exc_info.value
        assert isinstance(err, GammaError)
        assert isinstance(err, ParameterError)
        assert isinstance(err, VariatesError)
        assert err.code == "SHAPE_TOO_SMALL"
        assert err.phase == "construct"
        assert str(err) == "shape <= 0 or is NaN in Gamma distribution"

        payload = err.to_dict()
        assert payload["error"]["code"] == "SHAPE_TOO_SMALL"
        assert payload["error"]["details"]["params"] == {"shape": -1.0, "scale": 2.0}


class TestGammaMethodSelection:
    """Test the algorithm chosen at construction."""

    @pytest.mark.parametrize(
        ("shape", "scale", "method"),
        [
            (1.0, 2.0, GammaMethod.ONE),
            (0.5, 1.0, GammaMethod.SMALL),
            (1e-300, 1.0, GammaMethod.SMALL),
            (2.0, 1.0, GammaMethod.LARGE),
            (1e300, 1.0, GammaMethod.LARGE),
            (math.inf, 1.0, GammaMethod.ONE),
            (0.5, math.inf, GammaMethod.ONE),
        ],
    )
    def test_method(self, shape, scale, method):
        """Test method selection for representative shapes."""
        assert Gamma(shape, scale).method is method


class TestGammaSampling:
    """Test sampling from the Gamma distribution."""

    @pytest.mark.parametrize("shape", [0.05, 0.5, 1.0, 2.5, 100.0])
    def test_samples_are_non_negative(self, shape):
        """Test that every sample lies in the support."""
        rng = np.random.default_rng(42)
        samples = Gamma(shape, 3.0).sample_n(rng, 1000)

        assert samples.shape == (1000,)
        assert samples.dtype == np.float64
        assert np.all(samples >= 0.0)
        assert not np.any(np.isnan(samples))

    @pytest.mark.parametrize(("shape", "scale"), [(math.inf, 1.0), (2.0, math.inf), (1.0, math.inf)])
    def test_infinite_parameters_give_infinity(self, shape, scale):
        """Test that infinite shape or scale is a point mass at +inf."""
        rng = np.random.default_rng(1)
        gamma = Gamma(shape, scale)

        for _ in range(10):
            assert gamma.sample(rng) == math.inf

    def test_tiny_shape_terminates_without_nan(self):
        """Test that shape 1e-300 samples quickly and never returns NaN."""
        gamma = Gamma(1e-300, 1.0)
        source = CappedSource(np.random.default_rng(7), max_draws=10_000)

        values = [gamma.sample(source) for _ in range(500)]

        assert all(v >= 0.0 for v in values)
        assert not any(math.isnan(v) for v in values)

    def test_tiny_shape_log_samples_are_finite(self):
        """Test that log samples keep information lost to underflow."""
        gamma = Gamma(1e-300, 1.0)
        rng = np.random.default_rng(7)

        ln_values = [gamma.sample_ln(rng) for _ in range(200)]

        assert all(math.isfinite(v) for v in ln_values)
        assert any(v < -700.0 for v in ln_values)

    def test_subnormal_shape_log_parts_stay_finite(self):
        """Test that ln U and the rest stay finite when 1/shape overflows."""
        gamma = Gamma(1e-320, 1.0)
        rng = np.random.default_rng(8)

        parts = [gamma.sample_ln_parts(rng) for _ in range(200)]

        assert all(math.isfinite(ln_u) and ln_u <= 0.0 for ln_u, _ in parts)
        assert all(math.isfinite(rest) for _, rest in parts)
        assert gamma.sample_ln(ScriptedSource(uniforms=[0.5, 0.5], normals=[0.0])) == -math.inf

    def test_near_zero_cube_is_rejected(self):
        """Test that a normal driving v towards zero is rejected, not an error."""
        # 1 + c * x is about 1e-8 for shape 2, so v is about 1e-24
        source = ScriptedSource(uniforms=[0.5, 0.5], normals=[-3.8729833, 0.0])

        assert Gamma(2.0, 1.0).sample(source) == 2.0 - 1.0 / 3.0

    def test_huge_shape_terminates(self):
        """Test that shape 1e300 samples near its mean."""
        gamma = Gamma(1e300, 1.0)
        source = CappedSource(np.random.default_rng(7), max_draws=10_000)

        for _ in range(100):
            x = gamma.sample(source)
            assert 0.99e300 < x < 1.01e300

    def test_same_seed_same_samples(self):
        """Test deterministic output for a fixed seed."""
        gamma = Gamma(0.7, 2.0)

        first = gamma.sample_n(np.random.default_rng(123), 50)
        second = gamma.sample_n(np.random.default_rng(123), 50)

        np.testing.assert_array_equal(first, second)

    @pytest.mark.parametrize("shape", [0.1, 0.5, 1.0, 2.5, 30.0])
    def test_matches_cdf(self, shape):
        """Test the median projection against scipy's Gamma CDF."""
        scale = 2.0
        t = stats.gamma.ppf(0.4, shape, scale=scale)
        p = stats.gamma.cdf(t, shape, scale=scale)
        gamma = Gamma(shape, scale)

        check = check_binary(0x1, p, p, 20_000, lambda rng: gamma.sample(rng) <= t)

        assert_plausible(check)

    @pytest.mark.parametrize("shape", [0.1, 1.0, 4.0])
    def test_log_samples_match_cdf(self, shape):
        """Test that sample_ln follows the log of the Gamma law."""
        t = stats.gamma.ppf(0.7, shape)
        p = stats.gamma.cdf(t, shape)
        gamma = Gamma(shape, 1.0)

        check = check_binary(0x2, p, p, 20_000, lambda rng: gamma.sample_ln(rng) <= math.log(t))

        assert_plausible(check)


class TestGammaPrecision:
    """Test the dtype argument."""

    def test_float32_sample(self):
        """Test that float32 distributions return numpy float32 values."""
        gamma = Gamma(2.0, 3.0, dtype="float32")
        rng = np.random.default_rng(42)

        assert gamma.dtype == np.float32
        assert isinstance(gamma.sample(rng), np.float32)
        assert gamma.sample_n(rng, 10).dtype == np.float32

    def test_float64_sample_is_python_float(self):
        """Test that the default precision returns plain floats."""
        assert type(Gamma(2.0, 3.0).sample(np.random.default_rng(42))) is float

    @pytest.mark.parametrize("dtype", ["int32", "float16", "not-a-dtype"])
    def test_unsupported_dtype(self, dtype):
        """Test that only float64 and float32 are accepted."""
        with pytest.raises(DistributionError):
            Gamma(2.0, 3.0, dtype=dtype)

    def test_negative_size_rejected(self):
        """Test that sample_n refuses a negative size."""
        with pytest.raises(DistributionError, match="non-negative"):
            Gamma(2.0, 3.0).sample_n(np.random.default_rng(1), -1)


class TestGammaValueSemantics:
    """Test equality, hashing and metadata."""

    def test_equal_when_identically_constructed(self):
        """Test that equal parameters give equal distributions."""
        assert Gamma(2.0, 3.0) == Gamma(2.0, 3.0)
        assert Gamma(2, 3) == Gamma(2.0, 3.0)
        assert hash(Gamma(2.0, 3.0)) == hash(Gamma(2, 3))

    def test_not_equal_for_different_parameters(self):
        """Test that parameters and precision take part in equality."""
        assert Gamma(2.0, 3.0) != Gamma(2.0, 4.0)
        assert Gamma(2.0, 3.0) != Gamma(2.0, 3.0, dtype="float32")

    def test_repr(self):
        """Test the repr lists the parameters."""
        assert repr(Gamma(2.0, 3.0)) == "Gamma(shape=2.0, scale=3.0)"

    def test_params_round_trip(self):
        """Test rebuilding a distribution from its parameter set."""
        gamma = Gamma(2.0, 3.0)

        assert gamma.params == GammaParams(shape=2.0, scale=3.0)
        assert Gamma.from_params(gamma.params) == gamma

    def test_from_params_wrong_model(self):
        """Test that a parameter set of another family is rejected."""
        with pytest.raises(DistributionError, match="Expected GammaParams"):
            Gamma.from_params(BetaParams(alpha=1.0, beta=1.0))

    def test_get_info(self):
        """Test distribution metadata."""
        info = Gamma.get_info()

        assert info.name == "gamma"
        assert info.display_name == "Gamma"
        assert info.category == "continuous"
        assert [p.name for p in info.parameters] == ["shape", "scale"]
        assert info.parameters[0].min_value == 0.0
