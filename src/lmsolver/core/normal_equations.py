"""Gauss-Newton normal equations over a measurement set."""

from __future__ import annotations

from typing import TYPE_CHECKING, Tuple

import numpy as np

from .measurements import MeasurementSet

if TYPE_CHECKING:
    from lmsolver.models import Model


def residuals(model: "Model", params: np.ndarray, measurements: MeasurementSet) -> np.ndarray:
    """Residuals ``y - f(params, x)`` for every measurement."""
    return np.array(
        [y - model.evaluate(params, x) for x, y in measurements],
        dtype=float,
    )


def sum_squared_error(model: "Model", params: np.ndarray, measurements: MeasurementSet) -> float:
    """Sum of squared residuals."""
    r = residuals(model, params, measurements)
    return float(np.dot(r, r))


def build_normal_equations(
    model: "Model",
    params: np.ndarray,
    measurements: MeasurementSet,
) -> Tuple[np.ndarray, np.ndarray]:
    """Accumulate ``J^T r`` and the lower triangle of ``J^T J``.

    Args:
        model: Model providing ``evaluate`` and ``gradient``
        params: Current parameter vector (P,)
        measurements: Measurement set

    Returns:
        (derivative, hessian): derivative has shape (P,), hessian (P, P) with
        only the lower triangle populated; the upper triangle stays zero.
    """
    n_params = len(params)
    derivative = np.zeros(n_params)
    hessian = np.zeros((n_params, n_params))
    rows, cols = np.tril_indices(n_params)

    for x, y in measurements:
        grad = np.asarray(model.gradient(params, x), dtype=float)
        if grad.shape != (n_params,):
            raise ValueError(
                f"gradient returned shape {grad.shape}, expected ({n_params},)"
            )
        residual = y - model.evaluate(params, x)
        derivative += residual * grad
        # H = J^T * J, l <= k only
        hessian[rows, cols] += grad[rows] * grad[cols]

    return derivative, hessian
