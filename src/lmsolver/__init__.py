"""Nonlinear least-squares curve fitting with a Cholesky Levenberg-Marquardt solver."""

from .core import (
    FitResult,
    FitStatus,
    LevenbergMarquardtSolver,
    MeasurementSet,
    SolverConfig,
    fit,
)
from .models import (
    CallableModel,
    ExponentialModel,
    NumericalGradientModel,
    PolynomialModel,
    QuadraticModel,
)

__version__ = "0.1.0"

__all__ = [
    "FitResult",
    "FitStatus",
    "LevenbergMarquardtSolver",
    "MeasurementSet",
    "SolverConfig",
    "fit",
    "CallableModel",
    "ExponentialModel",
    "NumericalGradientModel",
    "PolynomialModel",
    "QuadraticModel",
]
