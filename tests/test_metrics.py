"""Tests for fidelity metrics."""

import numpy as np
import pytest

from iirblur.core import InvalidSigmaError, InvalidStepsError
from iirblur.metrics import reference_blur, approximation_error, impulse_response


class TestImpulseResponse:
    @pytest.mark.parametrize("sigma", [1.0, 3.0])
    @pytest.mark.parametrize("steps", [1, 4, 8])
    def test_unit_mass_and_variance(self, sigma, steps):
        h = impulse_response(sigma, steps, length=201)
        x = np.arange(201) - 100

        assert h.sum() == pytest.approx(1.0, abs=1e-9)
        assert (h * x ** 2).sum() == pytest.approx(sigma ** 2, rel=1e-6)

    def test_symmetric_peak(self):
        h = impulse_response(2.0, 4, length=61)
        assert h.argmax() == 30
        assert np.allclose(h[:30], h[31:][::-1], atol=1e-12)

    def test_more_steps_closer_to_gaussian(self):
        x = np.arange(201) - 100
        gauss = np.exp(-x ** 2 / (2 * 3.0 ** 2))
        gauss /= gauss.sum()

        err_1 = np.abs(impulse_response(3.0, 1, 201) - gauss).max()
        err_8 = np.abs(impulse_response(3.0, 8, 201) - gauss).max()
        assert err_8 < err_1

    def test_rejects_zero_sigma(self):
        with pytest.raises(ValueError):
            impulse_response(0.0)

    @pytest.mark.parametrize("sigma", [float("nan"), float("inf"), -1.0])
    def test_rejects_unusable_sigma(self, sigma):
        with pytest.raises(InvalidSigmaError):
            impulse_response(sigma)

    @pytest.mark.parametrize("steps", [0, -2, 1.5])
    def test_rejects_bad_steps(self, steps):
        with pytest.raises(InvalidStepsError):
            impulse_response(2.0, steps=steps)


class TestReferenceBlur:
    def test_identity(self):
        rng = np.random.default_rng(5)
        img = rng.integers(0, 256, (10, 10, 4), dtype=np.uint8)
        np.testing.assert_array_equal(reference_blur(img, 0.0, 0.0), img)

    def test_shape(self):
        img = np.zeros((7, 9), dtype=np.uint8)
        assert reference_blur(img, 1.0, 2.0).shape == (7, 9)


class TestApproximationError:
    def test_close_to_reference(self):
        rng = np.random.default_rng(11)
        img = rng.integers(0, 256, (64, 64, 3), dtype=np.uint8)

        err = approximation_error(img, 2.0, 2.0, steps=4, border=16)

        assert err["mae"] < 3.0
        assert err["psnr"] > 30.0
        assert err["max_abs"] >= err["mae"]

    def test_border_too_large(self):
        img = np.zeros((8, 8), dtype=np.uint8)
        with pytest.raises(ValueError):
            approximation_error(img, 1.0, 1.0, border=4)
