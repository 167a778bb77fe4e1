"""Reference fitting backend built on scipy's MINPACK Levenberg-Marquardt.

Solves the same problem as ``lmsolver.core`` with
``scipy.optimize.least_squares(method="lm")`` so the two can be compared on
identical models and measurements.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Sequence

import numpy as np
from scipy.optimize import least_squares

from lmsolver.core.measurements import MeasurementSet
from lmsolver.core.normal_equations import sum_squared_error

if TYPE_CHECKING:
    from lmsolver.models import Model


@dataclass
class ReferenceConfig:
    """Configuration for the scipy backend."""

    maxiter: int = 100
    ftol: float = 1e-10
    gtol: float = 1e-10
    xtol: float = 1e-10
    verbose: int = 0

    def __post_init__(self):
        if self.maxiter < 1:
            raise ValueError("maxiter must be at least 1")
        if self.verbose not in (0, 1):
            raise ValueError("method='lm' supports verbose 0 or 1 only")


@dataclass
class ReferenceResult:
    """Results from the scipy backend."""

    success: bool
    message: str
    parameters: np.ndarray
    error: float
    cost: float
    optimality: float
    nfev: int


class ReferenceFitter:
    """Fits a model with ``scipy.optimize.least_squares``."""

    def __init__(self, model: "Model", measurements: MeasurementSet):
        self.model = model
        self.measurements = measurements

    def _residual(self, params: np.ndarray) -> np.ndarray:
        """Predicted minus measured."""
        predicted = np.array(
            [self.model.evaluate(params, x) for x in self.measurements.design]
        )
        return predicted - self.measurements.targets

    def _jacobian(self, params: np.ndarray) -> np.ndarray:
        return np.array(
            [self.model.gradient(params, x) for x in self.measurements.design],
            dtype=float,
        )

    def fit(
        self,
        initial_params: Sequence[float],
        config: ReferenceConfig | None = None,
    ) -> ReferenceResult:
        """Run ``least_squares`` from ``initial_params``.

        Args:
            initial_params: Starting parameter vector (P,)
            config: Tolerances and evaluation budget

        Returns:
            ReferenceResult with fitted parameters and diagnostics
        """
        config = config if config is not None else ReferenceConfig()
        x0 = np.array(initial_params, dtype=float)
        n_params = x0.shape[0]

        result = least_squares(
            self._residual,
            x0,
            jac=self._jacobian,
            method="lm",
            ftol=config.ftol,
            gtol=config.gtol,
            xtol=config.xtol,
            max_nfev=config.maxiter * 100 * (n_params + 1),
            verbose=config.verbose,
        )

        return ReferenceResult(
            success=bool(result.success),
            message=result.message,
            parameters=result.x,
            error=sum_squared_error(self.model, result.x, self.measurements),
            cost=float(result.cost),
            optimality=float(result.optimality),
            nfev=int(result.nfev),
        )


def fit_with_scipy(
    model: "Model",
    measurements: MeasurementSet,
    initial_params: Sequence[float],
    config: ReferenceConfig | None = None,
) -> ReferenceResult:
    """Convenience wrapper around ``ReferenceFitter.fit``."""
    return ReferenceFitter(model, measurements).fit(initial_params, config)


__all__ = [
    "ReferenceConfig",
    "ReferenceResult",
    "ReferenceFitter",
    "fit_with_scipy",
]
