"""Configuration classes for the fitting command line."""

from dataclasses import dataclass, field
from typing import List, Optional

from lmsolver.models import PolynomialModel, QuadraticModel


class ColumnNames:
    """数据列名常量"""
    X = 'x'
    Y = 'y'
    Y_FITTED = 'y_fitted'
    RESIDUAL = 'residual'

    INPUT = [X, Y]


BACKENDS = ('cholesky', 'scipy')


@dataclass
class ModelConfig:
    """多项式模型配置"""
    degree: int = 2
    initial: Optional[List[float]] = None
    backend: str = 'cholesky'

    coefficient_names: List[str] = field(default_factory=lambda: list('abcdefghijklmnopqrstuvwxyz'))

    def __post_init__(self):
        if self.degree < 0:
            raise ValueError("degree must be non-negative")
        if self.backend not in BACKENDS:
            raise ValueError(f"Unknown backend '{self.backend}', expected one of {BACKENDS}")
        if self.initial is not None and len(self.initial) != self.degree + 1:
            raise ValueError(
                f"expected {self.degree + 1} initial values for degree {self.degree}, "
                f"got {len(self.initial)}"
            )
        if self.degree + 1 > len(self.coefficient_names):
            raise ValueError("degree too large for coefficient naming")

    def build_model(self) -> PolynomialModel:
        if self.degree == 2:
            return QuadraticModel()
        return PolynomialModel(degree=self.degree)

    def initial_params(self) -> List[float]:
        """Initial guess, zeros by default as in the original example."""
        if self.initial is None:
            return [0.0] * (self.degree + 1)
        return list(self.initial)

    def names(self) -> List[str]:
        return self.coefficient_names[: self.degree + 1]
