"""One-dimensional minimisation by the 0.618 (golden section) method."""

from __future__ import annotations

from typing import Callable

__all__ = ["line_search"]

_RATIO = 0.618


def line_search(f: Callable[[float], float]) -> float:
    """Return an approximate minimiser of ``f`` on ``[0, 1]``."""
    a, b = 0.0, 1.0
    c = a + (1 - _RATIO) * (b - a)
    d = a + _RATIO * (b - a)
    qc = f(c)
    qd = f(d)

    while abs(qc - qd) > 0.0001:
        if qc > qd:
            a, c = c, d
            d = a + _RATIO * (b - a)
            qc = qd
            qd = f(d)
        else:
            b, d = d, c
            c = a + (1 - _RATIO) * (b - a)
            qd = qc
            qc = f(c)
        if abs(a - b) < 0.0000000001:
            break
    return c