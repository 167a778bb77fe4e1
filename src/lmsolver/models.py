"""Model functions fitted by the solvers.

A model couples an evaluation function with its gradient with respect to the
parameters. Both receive the parameter vector and one design vector (a row of
the measurement design matrix).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Protocol

import numpy as np

EvaluationFunction = Callable[[np.ndarray, np.ndarray], float]
GradientFunction = Callable[[np.ndarray, np.ndarray], np.ndarray]


class Model(Protocol):
    """Protocol for fittable scalar models."""

    def num_params(self) -> int:
        """Number of parameters P."""

    def evaluate(self, params: np.ndarray, x: np.ndarray) -> float:
        """Model value at design vector ``x``."""

    def gradient(self, params: np.ndarray, x: np.ndarray) -> np.ndarray:
        """Size-P derivative of ``evaluate`` with respect to ``params``."""

    def describe(self) -> str:
        """Human readable description for logging."""


@dataclass
class PolynomialModel:
    """Polynomial in the first design component, highest power first.

    ``degree=2`` gives ``a*x**2 + b*x + c`` with ``params = (a, b, c)``.
    """

    degree: int = 2

    def __post_init__(self) -> None:
        if self.degree < 0:
            raise ValueError("degree must be non-negative")

    def num_params(self) -> int:
        return self.degree + 1

    def _powers(self, x: np.ndarray) -> np.ndarray:
        t = float(np.ravel(x)[0])
        return t ** np.arange(self.degree, -1, -1, dtype=float)

    def evaluate(self, params: np.ndarray, x: np.ndarray) -> float:
        return float(np.dot(params, self._powers(x)))

    def gradient(self, params: np.ndarray, x: np.ndarray) -> np.ndarray:
        return self._powers(x)

    def describe(self) -> str:
        return f"{self.degree}次多项式"


@dataclass
class QuadraticModel(PolynomialModel):
    """``a*x**2 + b*x + c``."""

    def __post_init__(self) -> None:
        if self.degree != 2:
            raise ValueError("QuadraticModel is fixed at degree 2")

    def describe(self) -> str:
        return "二次模型 a*x^2 + b*x + c"


@dataclass
class ExponentialModel:
    """``a * exp(b * x)`` in the first design component."""

    def num_params(self) -> int:
        return 2

    def evaluate(self, params: np.ndarray, x: np.ndarray) -> float:
        t = float(np.ravel(x)[0])
        return float(params[0] * np.exp(params[1] * t))

    def gradient(self, params: np.ndarray, x: np.ndarray) -> np.ndarray:
        t = float(np.ravel(x)[0])
        e = np.exp(params[1] * t)
        return np.array([e, params[0] * t * e])

    def describe(self) -> str:
        return "指数模型 a*exp(b*x)"


@dataclass
class CallableModel:
    """Wraps a plain evaluation function and its gradient function."""

    evaluate_fn: EvaluationFunction
    gradient_fn: GradientFunction
    n_params: int
    name: str = "callable"

    def num_params(self) -> int:
        return self.n_params

    def evaluate(self, params: np.ndarray, x: np.ndarray) -> float:
        return float(self.evaluate_fn(params, x))

    def gradient(self, params: np.ndarray, x: np.ndarray) -> np.ndarray:
        return np.asarray(self.gradient_fn(params, x), dtype=float)

    def describe(self) -> str:
        return self.name


@dataclass
class NumericalGradientModel:
    """Evaluation function with a central-difference gradient."""

    evaluate_fn: EvaluationFunction
    n_params: int
    epsilon: float = 1e-5
    name: str = "numerical"

    def __post_init__(self) -> None:
        if self.epsilon <= 0.0:
            raise ValueError("epsilon must be positive")

    def num_params(self) -> int:
        return self.n_params

    def evaluate(self, params: np.ndarray, x: np.ndarray) -> float:
        return float(self.evaluate_fn(params, x))

    def gradient(self, params: np.ndarray, x: np.ndarray) -> np.ndarray:
        params = np.asarray(params, dtype=float)
        grad = np.zeros(self.n_params)
        for i in range(self.n_params):
            plus = params.copy()
            minus = params.copy()
            plus[i] += self.epsilon
            minus[i] -= self.epsilon
            grad[i] = (self.evaluate_fn(plus, x) - self.evaluate_fn(minus, x)) / (2 * self.epsilon)
        return grad

    def describe(self) -> str:
        return f"{self.name} (中心差分, eps={self.epsilon:g})"


__all__ = [
    "Model",
    "PolynomialModel",
    "QuadraticModel",
    "ExponentialModel",
    "CallableModel",
    "NumericalGradientModel",
]
