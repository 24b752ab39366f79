"""Root location of a level-set function along a segment by bisection."""

from __future__ import annotations

import math
from typing import Callable

from .vectors import Point, midpoint, sign

__all__ = ["bisect"]


def bisect(fun: Callable[[Point], float], p1, p2, eps: float = 1e-12) -> Point:
    """Return a point on the segment ``p1``-``p2`` where ``fun`` changes sign.

    Bisection stops once the bracket is no longer than ``eps``. A ValueError is
    raised when the current bracket holds no sign change.
    """
    a = Point(p1)
    b = Point(p2)
    a_sign = sign(fun(a))
    b_sign = sign(fun(b))

    h = math.sqrt((b - a).squared_length())
    m = midpoint(a, b)
    m_sign = sign(fun(m))
    while h > eps:
        if m_sign == 0:
            return m
        if a_sign * m_sign < 0:
            b, b_sign = m, m_sign
        elif b_sign * m_sign < 0:
            a, a_sign = m, m_sign
        else:
            raise ValueError("the function does not change sign on the segment")
        h = math.sqrt((b - a).squared_length())
        m = midpoint(a, b)
        m_sign = sign(fun(m))
    return m