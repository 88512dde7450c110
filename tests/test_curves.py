"""Tests for the adstock and saturation reference curve grids."""

import numpy as np
import pytest

from carryover.errors import InvalidArgumentError
from carryover.transforms.adstock import weibull_adstock
from carryover.transforms.curves import (
    adstock_curves,
    halflife_table,
    saturation_curves,
)


class TestAdstockCurves:
    """Tests for adstock_curves and halflife_table."""

    @pytest.fixture
    def curves(self):
        return adstock_curves(n_periods=20, thetas=(0.5,), shapes=(1.0,), scales=(0.1,))

    def test_one_curve_per_parameter_set(self, curves):
        # geometric + weibull cdf + weibull pdf
        assert len(curves) == 3 * 20
        assert set(curves.columns) == {
            "family",
            "kind",
            "theta",
            "shape",
            "scale",
            "period",
            "decay",
            "halflife",
        }

    def test_geometric_curve_starts_at_full_effect(self, curves):
        geo = curves[curves["family"] == "geometric"]
        np.testing.assert_allclose(geo["decay"].to_numpy()[:3], [1.0, 0.5, 0.25])
        assert (geo["halflife"] == 2).all()

    def test_weibull_curves_are_kernels(self, curves):
        cdf = curves[(curves["family"] == "weibull") & (curves["kind"] == "cdf")]
        expected = weibull_adstock(np.arange(1, 21), shape=1.0, scale=0.1, kind="cdf")
        np.testing.assert_allclose(cdf["decay"].to_numpy(), expected.kernel)
        np.testing.assert_array_equal(cdf["period"].to_numpy(), np.arange(1, 21))

    def test_halflife_table(self, curves):
        table = halflife_table(curves)
        assert len(table) == 3
        assert list(table["family"]) == ["geometric", "weibull", "weibull"]

    def test_default_grid_size(self):
        curves = adstock_curves(n_periods=10)
        # 9 thetas + 2 kinds * 4 shapes * 6 scales
        assert len(halflife_table(curves)) == 9 + 2 * 4 * 6

    def test_invalid_length_raises(self):
        with pytest.raises(InvalidArgumentError):
            adstock_curves(n_periods=1)


class TestSaturationCurves:
    """Tests for saturation_curves."""

    def test_shape_of_grid(self):
        curves = saturation_curves(n_points=100)
        assert len(curves) == (5 + 5) * 100
        assert set(curves["varying"]) == {"alpha", "gamma"}

    def test_half_saturation_points(self):
        curves = saturation_curves(n_points=100, alphas=(2.0,), gammas=(0.3,))
        alpha_curve = curves[curves["varying"] == "alpha"].set_index("x")["response"]
        gamma_curve = curves[curves["varying"] == "gamma"].set_index("x")["response"]

        assert alpha_curve[50.0] == pytest.approx(0.5)
        assert gamma_curve[30.0] == pytest.approx(0.5)

    def test_responses_bounded(self):
        curves = saturation_curves(n_points=50)
        assert ((curves["response"] > 0) & (curves["response"] < 1)).all()

    def test_invalid_length_raises(self):
        with pytest.raises(InvalidArgumentError):
            saturation_curves(n_points=0)
