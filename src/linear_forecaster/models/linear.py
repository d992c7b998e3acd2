"""Least-squares and lasso solvers for seasonal design matrices."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Sequence, Tuple

import numpy as np

from linear_forecaster.errors import DimensionMismatchError, InvalidWarmStartError

log = logging.getLogger(__name__)

Coefficients = Tuple[float, np.ndarray]


def _split(coef: np.ndarray) -> Coefficients:
    if coef.size == 0:
        return math.nan, np.empty(0, dtype=float)
    return float(coef[0]), coef[1:].copy()


def ols(obs: np.ndarray, y: Sequence[float] | np.ndarray) -> Coefficients:
    """Ordinary least squares through QR factorization.

    Returns ``(first, rest)`` where ``first`` is the coefficient of column 0
    (the intercept when the caller prepends a column of ones). ``obs`` must
    have full column rank; dependent columns produce inf/nan coefficients.
    """
    obs = np.asarray(obs, dtype=float)
    y = np.asarray(y, dtype=float).reshape(-1)
    if obs.ndim != 2:
        raise DimensionMismatchError(f"observation matrix must be 2-D, got {obs.shape}")
    m, n = obs.shape
    if y.shape[0] != m:
        raise DimensionMismatchError(
            f"observation matrix has {m} observations and y has {y.shape[0]}"
        )
    if n == 0:
        return _split(np.empty(0, dtype=float))

    q, r = np.linalg.qr(obs, mode="reduced")
    projected = y @ q

    coef = np.zeros(n, dtype=float)
    with np.errstate(divide="ignore", invalid="ignore"):
        for i in range(n - 1, -1, -1):
            coef[i] = (projected[i] - coef[i + 1 :] @ r[i, i + 1 :]) / r[i, i]
    return _split(coef)


@dataclass
class LassoOptions:
    warm_start_beta: Sequence[float] | None = None
    lam: float = 1.0
    iterations: int = 1000
    tolerance: float = 1e-4


def soft_threshold(x: float, gamma: float) -> float:
    """Proximal operator of the L1 penalty; keeps the sign of ``x``."""
    res = max(0.0, abs(x) - gamma)
    return -res if math.copysign(1.0, x) < 0 else res


def _coordinate_descent(
    obs: Sequence[np.ndarray],
    y: np.ndarray,
    opt: LassoOptions,
) -> Tuple[np.ndarray, int]:
    """Run coordinate descent and return ``(beta, sweeps)``.

    ``obs`` is a list of column vectors. The fitted values ``X @ beta`` are
    kept up to date with a rank-one correction after each coordinate, so a
    sweep costs O(n*m).
    """
    n = len(obs)
    m = y.shape[0]

    beta = np.zeros(n, dtype=float)
    if opt.warm_start_beta is not None:
        beta[:] = np.asarray(opt.warm_start_beta, dtype=float)

    xdot = np.array([float(col @ col) for col in obs], dtype=float)

    fitted = np.zeros(m, dtype=float)
    for j in np.flatnonzero(beta):
        fitted += beta[j] * obs[j]

    sweeps = 0
    for sweep in range(opt.iterations):
        sweeps += 1
        max_coef = 0.0
        max_update = 0.0
        for j in range(n):
            beta_curr = beta[j]
            # a zeroed coordinate is assumed to stay at zero
            if sweep != 0 and beta_curr == 0:
                continue
            if xdot[j] == 0:
                continue

            col = obs[j]
            residual = y - fitted
            num = float(col @ residual)
            beta_next = num / xdot[j] + beta_curr
            beta_next = soft_threshold(beta_next, opt.lam / xdot[j])

            max_coef = max(max_coef, beta_next)
            max_update = max(max_update, abs(beta_next - beta_curr))

            diff = beta_next - beta_curr
            if diff != 0:
                fitted += diff * col
            beta[j] = beta_next

        if max_update <= opt.tolerance * max_coef:
            break

    log.debug("Coordinate descent finished after %d sweeps", sweeps)
    return beta, sweeps


def lasso_regression(
    obs: Sequence[np.ndarray],
    y: Sequence[float] | np.ndarray,
    opt: LassoOptions | None = None,
) -> Coefficients:
    """Lasso regression by coordinate descent; ``lam = 0`` converges to OLS.

    ``obs`` is the column list produced by ``FeatureSet.matrix_columns``.
    Returns ``(first, rest)`` with the same layout as :func:`ols`.
    """
    if opt is None:
        opt = LassoOptions()

    if obs is None:
        obs = []
    columns = [np.asarray(col, dtype=float).reshape(-1) for col in obs]
    y = np.asarray(y, dtype=float).reshape(-1)
    n = len(columns)
    m = y.shape[0]

    for idx, col in enumerate(columns):
        if col.shape[0] != m:
            raise DimensionMismatchError(
                f"observation column {idx} has {col.shape[0]} observations and y has {m}"
            )
    if opt.warm_start_beta is not None and len(opt.warm_start_beta) != n:
        raise InvalidWarmStartError(
            f"warm start beta has {len(opt.warm_start_beta)} features instead of {n}"
        )
    if n == 0:
        return _split(np.empty(0, dtype=float))

    beta, _ = _coordinate_descent(columns, y, opt)
    return _split(beta)


__all__ = [
    "LassoOptions",
    "lasso_regression",
    "ols",
    "soft_threshold",
]
