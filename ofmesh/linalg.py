"""Dense linear-algebra kernels: Householder, Givens, LU, QR and inversion."""

from __future__ import annotations

import math
from typing import Iterable

from .matrix import Matrix

__all__ = [
    "sign",
    "householder",
    "givens",
    "lu",
    "lu_kij",
    "lu_ikj",
    "qr_gs",
    "mat_inv",
]


def sign(x: float) -> int:
    """Return -1, 0 or 1 according to the sign of ``x``."""
    return (0 < x) - (x < 0)


def _rows(a) -> list[list[float]]:
    """Copy a Matrix or a nested sequence into a list of float rows."""
    if isinstance(a, Matrix):
        nr, nc = a.shape
        return [[a[i, j] for j in range(nc)] for i in range(nr)]
    rows = [[float(x) for x in row] for row in a]
    if rows and any(len(row) != len(rows[0]) for row in rows):
        raise ValueError("all rows must have the same length")
    return rows


def _square_rows(a) -> list[list[float]]:
    rows = _rows(a)
    if any(len(row) != len(rows) for row in rows):
        raise ValueError("matrix must be square")
    return rows


def _eliminate(row: list[float], pivot_row: list[float], start: int, factor: float) -> None:
    row[start:] = [x - factor * u for x, u in zip(row[start:], pivot_row[start:])]


def householder(x: Iterable[float]) -> tuple[list[float], float]:
    """Return ``(v, beta)`` with ``(I - beta v v^T) x = |x| e_1``."""
    x = [float(c) for c in x]
    if not x:
        raise ValueError("householder needs a non-empty vector")
    sigma = sum(c * c for c in x[1:])
    v = list(x)
    if sigma == 0.0:
        if x[0] < 0:
            v[0] = 2 * x[0]
            beta = 2 / (v[0] * v[0])
        else:
            v[0] = 0.0
            beta = 0.0
    else:
        alpha = math.sqrt(x[0] * x[0] + sigma)
        if x[0] < 0.0:
            v[0] -= alpha
        else:
            v[0] = -sigma / (x[0] + alpha)
        beta = 2.0 / (v[0] * v[0] + sigma)
    return v, beta


def givens(x0: float, x1: float) -> tuple[float, float]:
    """Return ``(c, s)`` of the rotation that zeroes ``x1`` against ``x0``."""
    if x1 == 0.0:
        return (1.0 if x0 >= 0.0 else -1.0), 0.0
    if abs(x1) > abs(x0):
        tau = x0 / x1
        s = sign(x1) / math.sqrt(1 + tau * tau)
        return s * tau, s
    tau = x1 / x0
    c = sign(x0) / math.sqrt(1 + tau * tau)
    return c, c * tau


def _check_pivot(pivot: float, k: int) -> None:
    if pivot == 0.0:
        raise ValueError(f"zero pivot at position {k}")


def lu(a) -> tuple[Matrix, Matrix]:
    """Doolittle factorisation without pivoting; returns ``(L, U)``."""
    work = _square_rows(a)
    n = len(work)
    lower = [[0.0] * n for _ in range(n)]
    upper = [[0.0] * n for _ in range(n)]
    for k in range(n):
        if k + 1 < n:
            _check_pivot(work[k][k], k)
        for i in range(k + 1, n):
            lower[i][k] = work[i][k] / work[k][k]
        upper[k][k:] = work[k][k:]
        for i in range(k + 1, n):
            _eliminate(work[i], upper[k], k + 1, lower[i][k])
    for k, row in enumerate(lower):
        row[k] = 1.0
    return Matrix(lower), Matrix(upper)


def lu_kij(a) -> Matrix:
    """Compact LU (k-i-j order): strict lower part holds L, the rest holds U."""
    work = _square_rows(a)
    n = len(work)
    for k in range(n):
        if k + 1 < n:
            _check_pivot(work[k][k], k)
        for i in range(k + 1, n):
            work[i][k] /= work[k][k]
            _eliminate(work[i], work[k], k + 1, work[i][k])
    return Matrix(work)


def lu_ikj(a) -> Matrix:
    """Compact LU computed row by row (i-k-j order)."""
    work = _square_rows(a)
    for i, row in enumerate(work):
        for k in range(i):
            _check_pivot(work[k][k], k)
            row[k] /= work[k][k]
            _eliminate(row, work[k], k + 1, row[k])
    return Matrix(work)


def qr_gs(a) -> tuple[Matrix, Matrix]:
    """Gram-Schmidt QR factorisation; returns ``(Q, R)``."""
    rows = _rows(a)
    if not rows or not rows[0]:
        raise ValueError("qr_gs needs a non-empty matrix")
    n = len(rows[0])
    r = [[0.0] * n for _ in range(n)]
    q_cols: list[list[float]] = []
    for j, col in enumerate(zip(*rows)):
        q = list(col)
        for k, qk in enumerate(q_cols):
            rkj = sum(x * y for x, y in zip(qk, q))
            r[k][j] = rkj
            q = [x - rkj * y for x, y in zip(q, qk)]
        norm = math.sqrt(sum(x * x for x in q))
        if norm == 0.0:
            raise ValueError(f"column {j} is linearly dependent")
        r[j][j] = norm
        q_cols.append([x / norm for x in q])
    return Matrix(zip(*q_cols)), Matrix(r)


def mat_inv(a) -> Matrix:
    """Return the inverse of a square matrix; raise ValueError if singular."""
    rows = _square_rows(a)
    n = len(rows)
    if n == 0:
        return Matrix()
    aug = [row + [1.0 if i == j else 0.0 for j in range(n)] for i, row in enumerate(rows)]
    for col in range(n):
        p = max(range(col, n), key=lambda r: abs(aug[r][col]))
        if aug[p][col] == 0.0:
            raise ValueError("matrix is singular")
        aug[col], aug[p] = aug[p], aug[col]
        pivot = aug[col][col]
        aug[col] = [x / pivot for x in aug[col]]
        for r, row in enumerate(aug):
            if r != col and row[col] != 0.0:
                _eliminate(row, aug[col], 0, row[col])
    return Matrix(row[n:] for row in aug)