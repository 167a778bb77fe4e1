import numpy as np
import pytest

from lmsolver.core.cholesky import (
    DampedCholeskySolver,
    cholesky_factor,
    cholesky_solve,
    damp,
)


def _random_spd(n: int, seed: int) -> np.ndarray:
    rng = np.random.default_rng(seed)
    a = rng.normal(size=(n, n))
    return a @ a.T + n * np.eye(n)


@pytest.mark.parametrize("n", [1, 2, 3, 6])
def test_factor_reconstructs_spd_matrix(n):
    h = _random_spd(n, seed=n)
    factor, ill_conditioned = cholesky_factor(h)

    assert not ill_conditioned
    assert np.allclose(factor, np.tril(factor))
    np.testing.assert_allclose(factor @ factor.T, h, rtol=1e-6)


def test_factor_reads_lower_triangle_only():
    h = _random_spd(4, seed=7)
    garbage_upper = np.tril(h) + np.triu(np.full((4, 4), 1e6), k=1)

    factor, ill_conditioned = cholesky_factor(garbage_upper)

    assert not ill_conditioned
    np.testing.assert_allclose(factor @ factor.T, h, rtol=1e-6)


def test_factor_detects_non_positive_leading_minor():
    h = np.array([
        [1.0, 0.0, 0.0],
        [2.0, 1.0, 0.0],
        [0.0, 0.0, 5.0],
    ])
    # second leading minor: 1 - 2**2 < 0
    factor, ill_conditioned = cholesky_factor(h)

    assert ill_conditioned
    assert factor is None


def test_factor_detects_zero_and_non_finite_diagonal():
    assert cholesky_factor(np.zeros((2, 2)))[1]
    assert cholesky_factor(np.array([[np.nan]]))[1]

    factor, ill_conditioned = cholesky_factor(np.array([[np.inf]]))
    assert ill_conditioned
    assert factor is None
    # inf off-diagonal drives the next squared diagonal to -inf
    assert cholesky_factor(np.array([[1.0, 0.0], [np.inf, 1.0]]))[1]


def test_factor_tolerance_is_configurable():
    h = np.array([[1e-20]])
    assert not cholesky_factor(h)[1]
    assert cholesky_factor(h, tol=1e-10)[1]


def test_solve_matches_numpy():
    h = _random_spd(5, seed=3)
    rhs = np.arange(1.0, 6.0)
    factor, _ = cholesky_factor(h)

    delta = cholesky_solve(factor, rhs)

    np.testing.assert_allclose(delta, np.linalg.solve(h, rhs), rtol=1e-8)


def test_solve_requires_successful_factor():
    with pytest.raises(ValueError):
        cholesky_solve(None, np.ones(2))


def test_damp_modes():
    h = np.array([[2.0, 0.0], [1.0, 4.0]])

    np.testing.assert_allclose(damp(h, 0.5), [[3.0, 0.0], [1.0, 6.0]])
    np.testing.assert_allclose(damp(h, 0.5, mode="levenberg"), [[2.5, 0.0], [1.0, 4.5]])
    # input untouched
    assert h[0, 0] == 2.0

    with pytest.raises(ValueError):
        damp(h, 0.5, mode="unknown")


def test_damped_solver_recovers_with_additive_damping():
    h = np.zeros((2, 2))
    d = np.array([1.0, -1.0])

    assert DampedCholeskySolver(mode="marquardt").solve(h, d, 10.0) is None

    step = DampedCholeskySolver(mode="levenberg").solve(h, d, 10.0)
    np.testing.assert_allclose(step, d / 10.0)
