"""Configuration for the Levenberg-Marquardt solver."""

from dataclasses import dataclass

DAMPING_MODES = ("marquardt", "levenberg")


@dataclass
class SolverConfig:
    """LM 求解器参数"""
    max_iterations: int = 10000
    initial_damping: float = 0.1
    up_factor: float = 10.0
    down_factor: float = 0.1
    target_delta_error: float = 0.01

    tol: float = 1e-30  # Cholesky 对角元下限
    damping_mode: str = "marquardt"

    def __post_init__(self):
        if self.max_iterations < 1:
            raise ValueError("max_iterations must be at least 1")
        if self.initial_damping <= 0.0:
            raise ValueError("initial_damping must be positive")
        if self.up_factor <= 1.0:
            raise ValueError("up_factor must be greater than 1")
        if not 0.0 < self.down_factor < 1.0:
            raise ValueError("down_factor must lie in (0, 1)")
        if self.target_delta_error < 0.0:
            raise ValueError("target_delta_error must be non-negative")
        if self.tol < 0.0:
            raise ValueError("tol must be non-negative")
        if self.damping_mode not in DAMPING_MODES:
            raise ValueError(
                f"Unknown damping_mode '{self.damping_mode}', expected one of {DAMPING_MODES}"
            )

    def describe(self) -> str:
        """Return human-readable description."""
        return (
            f"max_iter={self.max_iterations}, λ0={self.initial_damping:g}, "
            f"up={self.up_factor:g}, down={self.down_factor:g}, "
            f"ΔE<{self.target_delta_error:g}, damping={self.damping_mode}"
        )
