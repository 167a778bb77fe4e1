"""Levenberg-Marquardt core - normal equations, damped Cholesky, controller."""

from .cholesky import DampedCholeskySolver, cholesky_factor, cholesky_solve, damp
from .config import SolverConfig
from .levenberg_marquardt import FitResult, FitStatus, LevenbergMarquardtSolver, fit
from .measurements import MeasurementSet
from .normal_equations import build_normal_equations, residuals, sum_squared_error

__all__ = [
    'DampedCholeskySolver',
    'cholesky_factor',
    'cholesky_solve',
    'damp',
    'SolverConfig',
    'FitResult',
    'FitStatus',
    'LevenbergMarquardtSolver',
    'fit',
    'MeasurementSet',
    'build_normal_equations',
    'residuals',
    'sum_squared_error',
]
