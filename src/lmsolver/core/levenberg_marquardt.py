"""Levenberg-Marquardt controller with Cholesky normal-equation solves.

Each outer iteration rebuilds ``J^T r`` and ``J^T J`` at the current
parameters, then searches for an acceptable step by factoring the damped
Hessian. Ill-conditioned factorizations and steps that increase the error both
raise the damping and cost one unit of the iteration budget. Accepted steps
lower the damping.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, List, Optional, Sequence

import numpy as np

from .cholesky import DampedCholeskySolver
from .config import SolverConfig
from .measurements import MeasurementSet
from .normal_equations import build_normal_equations, sum_squared_error

if TYPE_CHECKING:
    from lmsolver.models import Model

logger = logging.getLogger(__name__)

IterationCallback = Callable[[int, np.ndarray, float, float], None]


class FitStatus(enum.Enum):
    CONVERGED = "converged"
    MAX_ITERATIONS_EXCEEDED = "max_iterations_exceeded"
    ILL_CONDITIONED_EXHAUSTED = "ill_conditioned_exhausted"


@dataclass
class FitResult:
    """Results from a Levenberg-Marquardt fit."""

    parameters: np.ndarray
    status: FitStatus
    error: float
    mean_error: float
    iterations: int
    damping: float
    error_history: List[float] = field(default_factory=list)
    message: str = ""

    @property
    def success(self) -> bool:
        return self.status is FitStatus.CONVERGED


class LevenbergMarquardtSolver:
    """Fits a model to a measurement set by damped Gauss-Newton steps."""

    def __init__(
        self,
        model: "Model",
        measurements: MeasurementSet,
        config: Optional[SolverConfig] = None,
    ):
        """Initialize solver.

        Args:
            model: Model with ``evaluate`` and ``gradient``
            measurements: Read-only measurement set
            config: Solver tunables, defaults to ``SolverConfig()``
        """
        self.model = model
        self.measurements = measurements
        self.config = config if config is not None else SolverConfig()
        self._linear_solver = DampedCholeskySolver(
            tol=self.config.tol,
            mode=self.config.damping_mode,
        )

    def _error(self, params: np.ndarray) -> float:
        return sum_squared_error(self.model, params, self.measurements)

    def _log_error(self, error: float) -> None:
        logger.info("Current Error: %.6e", error)
        logger.info("Mean Error: %.6e", error / len(self.measurements))

    def fit(
        self,
        initial_params: Sequence[float],
        callback: Optional[IterationCallback] = None,
    ) -> FitResult:
        """Run the fit from ``initial_params``.

        The input sequence is copied, never modified.

        Args:
            initial_params: Starting parameter vector (P,)
            callback: Called as ``callback(iteration, params, error, damping)``
                after every accepted step

        Returns:
            FitResult with the fitted parameters and a status telling
            convergence apart from an exhausted budget
        """
        cfg = self.config
        params = np.array(initial_params, dtype=float)
        n_params = self.model.num_params()
        if params.shape != (n_params,):
            raise ValueError(
                f"initial parameters have shape {params.shape}, expected ({n_params},)"
            )

        damping = cfg.initial_damping
        current_error = self._error(params)
        history = [current_error]
        iteration = 0
        status = FitStatus.MAX_ITERATIONS_EXCEEDED

        while iteration < cfg.max_iterations:
            iteration += 1
            self._log_error(current_error)

            derivative, hessian = build_normal_equations(self.model, params, self.measurements)

            accepted = False
            factored = False
            while True:
                step = self._linear_solver.solve(hessian, derivative, damping)
                if step is None:
                    logger.debug("Ill-conditioned at λ=%.3e", damping)
                else:
                    factored = True
                    candidate = params + step
                    new_error = self._error(candidate)
                    if new_error <= current_error:
                        accepted = True
                        break
                    logger.debug(
                        "Rejected step at λ=%.3e (error %.6e -> %.6e)",
                        damping, current_error, new_error,
                    )

                damping *= cfg.up_factor
                iteration += 1
                if iteration >= cfg.max_iterations:
                    break

            if not accepted:
                if not factored:
                    status = FitStatus.ILL_CONDITIONED_EXHAUSTED
                break

            delta_error = current_error - new_error
            params = candidate
            current_error = new_error
            damping *= cfg.down_factor
            history.append(current_error)
            if callback is not None:
                callback(iteration, params.copy(), current_error, damping)

            if abs(delta_error) < cfg.target_delta_error:
                status = FitStatus.CONVERGED
                break

        self._log_error(current_error)

        if status is FitStatus.CONVERGED:
            message = f"Converged after {iteration} iterations"
        elif status is FitStatus.ILL_CONDITIONED_EXHAUSTED:
            message = f"Hessian stayed ill-conditioned until the budget of {cfg.max_iterations} ran out"
        else:
            message = f"Reached max_iterations={cfg.max_iterations} without converging"
        logger.info(message)

        return FitResult(
            parameters=params,
            status=status,
            error=current_error,
            mean_error=current_error / len(self.measurements),
            iterations=iteration,
            damping=damping,
            error_history=history,
            message=message,
        )


def fit(
    model: "Model",
    measurements: MeasurementSet,
    initial_params: Sequence[float],
    config: Optional[SolverConfig] = None,
    callback: Optional[IterationCallback] = None,
) -> FitResult:
    """Convenience wrapper around ``LevenbergMarquardtSolver.fit``."""
    return LevenbergMarquardtSolver(model, measurements, config).fit(initial_params, callback)


__all__ = [
    "FitStatus",
    "FitResult",
    "LevenbergMarquardtSolver",
    "fit",
]
