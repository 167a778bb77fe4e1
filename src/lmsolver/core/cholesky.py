"""Damped Cholesky solve of the LM normal equations.

Only the lower triangle of the Hessian approximation is read. A factorization
that would need the square root of a value below ``tol`` stops early and is
reported as ill-conditioned; the caller raises the damping and retries.
"""

from __future__ import annotations

import math
from typing import Optional, Tuple

import numpy as np
from scipy.linalg import solve_triangular

from .config import DAMPING_MODES

TOL = 1e-30


def damp(hessian: np.ndarray, damping: float, mode: str = "marquardt") -> np.ndarray:
    """Return a copy of ``hessian`` with a damped diagonal.

    ``marquardt`` scales the diagonal by ``1 + damping``; ``levenberg`` adds
    ``damping`` to it.
    """
    damped = np.array(hessian, dtype=float)
    diag = np.diag_indices_from(damped)
    if mode == "marquardt":
        damped[diag] *= 1.0 + damping
    elif mode == "levenberg":
        damped[diag] += damping
    else:
        raise ValueError(f"Unknown damping mode '{mode}', expected one of {DAMPING_MODES}")
    return damped


def cholesky_factor(
    hessian: np.ndarray,
    tol: float = TOL,
) -> Tuple[Optional[np.ndarray], bool]:
    """Row-wise Cholesky factorization ``H = L L^T``.

    Args:
        hessian: Symmetric matrix (P, P); only the lower triangle is used
        tol: Smallest admissible squared diagonal entry of L

    Returns:
        (L, ill_conditioned): L is lower triangular on success and ``None``
        when the matrix is not numerically positive definite.
    """
    n = hessian.shape[0]
    factor = np.zeros((n, n))

    for i in range(n):
        for j in range(i):
            s = np.dot(factor[i, :j], factor[j, :j])
            factor[i, j] = (hessian[i, j] - s) / factor[j, j]

        diag_sq = hessian[i, i] - np.dot(factor[i, :i], factor[i, :i])
        # inf or NaN from overflowing damping or gradients
        if not (math.isfinite(diag_sq) and diag_sq >= tol):
            return None, True
        factor[i, i] = math.sqrt(diag_sq)

    return factor, False


def cholesky_solve(factor: Optional[np.ndarray], rhs: np.ndarray) -> np.ndarray:
    """Solve ``L L^T delta = rhs`` by forward then back substitution."""
    if factor is None:
        raise ValueError("cholesky_solve needs the factor of a successful factorization")
    # non-finite steps are rejected by the caller
    z = solve_triangular(factor, rhs, lower=True, check_finite=False)
    return solve_triangular(factor, z, lower=True, trans="T", check_finite=False)


class DampedCholeskySolver:
    """Solves the damped normal equations for one LM step."""

    def __init__(self, tol: float = TOL, mode: str = "marquardt"):
        if mode not in DAMPING_MODES:
            raise ValueError(f"Unknown damping mode '{mode}', expected one of {DAMPING_MODES}")
        self.tol = tol
        self.mode = mode

    def solve(
        self,
        hessian: np.ndarray,
        derivative: np.ndarray,
        damping: float,
    ) -> Optional[np.ndarray]:
        """Step for the given damping, or ``None`` if ill-conditioned."""
        factor, ill_conditioned = cholesky_factor(damp(hessian, damping, self.mode), self.tol)
        if ill_conditioned:
            return None
        return cholesky_solve(factor, derivative)
