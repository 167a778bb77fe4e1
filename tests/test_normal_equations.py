import numpy as np
import pytest

from lmsolver.core.measurements import MeasurementSet
from lmsolver.core.normal_equations import (
    build_normal_equations,
    residuals,
    sum_squared_error,
)
from lmsolver.models import CallableModel, QuadraticModel


X = np.array([-2.0, -1.0, 0.0, 1.0, 2.0, 3.0])
Y = 2 * X**2 - 3 * X + 1


def test_matches_jacobian_products():
    measurements = MeasurementSet.from_xy(X, Y)
    params = np.array([0.5, 1.0, -1.0])
    model = QuadraticModel()

    derivative, hessian = build_normal_equations(model, params, measurements)

    jac = np.column_stack([X**2, X, np.ones_like(X)])
    r = Y - jac @ params
    np.testing.assert_allclose(derivative, jac.T @ r)
    np.testing.assert_allclose(hessian, np.tril(jac.T @ jac))
    assert np.all(np.triu(hessian, k=1) == 0.0)


def test_sum_squared_error_of_exact_parameters_is_zero():
    measurements = MeasurementSet.from_xy(X, Y)
    model = QuadraticModel()

    assert sum_squared_error(model, np.array([2.0, -3.0, 1.0]), measurements) == 0.0
    # 15^2 + 6^2 + 1 + 0 + 3^2 + 10^2
    assert sum_squared_error(model, np.zeros(3), measurements) == pytest.approx(371.0)
    np.testing.assert_allclose(residuals(model, np.zeros(3), measurements), Y)


def test_wrong_gradient_length_raises():
    model = CallableModel(
        evaluate_fn=lambda p, x: float(p[0]),
        gradient_fn=lambda p, x: np.ones(3),
        n_params=1,
    )
    measurements = MeasurementSet.from_xy([1.0], [1.0])

    with pytest.raises(ValueError):
        build_normal_equations(model, np.array([0.0]), measurements)


def test_measurement_set_validation():
    with pytest.raises(ValueError):
        MeasurementSet(design=np.ones((3, 2)), targets=np.ones(2))
    with pytest.raises(ValueError):
        MeasurementSet(design=np.ones((0, 1)), targets=np.ones(0))
    with pytest.raises(ValueError):
        MeasurementSet(design=np.ones((2, 1)), targets=np.array([1.0, np.nan]))

    measurements = MeasurementSet(design=np.ones((4, 3)), targets=np.zeros(4))
    assert len(measurements) == 4
    assert measurements.design_dim == 3
    with pytest.raises(ValueError):
        measurements.targets[0] = 1.0
