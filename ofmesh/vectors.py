"""Small fixed-dimension geometric objects: vectors, points and point views."""

from __future__ import annotations

import math
from numbers import Real
from typing import Iterable, Iterator, MutableSequence, Sequence


def _fmt(x: float) -> str:
    return f"{x:g}"


def _coords(obj: object) -> tuple[float, ...] | None:
    """Return the coordinates of a geometric object, or None if it is not one."""
    if isinstance(obj, (Vector, Point, PointView)):
        return tuple(obj)
    return None


def _check_same_dim(a: Sequence[float], b: Sequence[float]) -> None:
    if len(a) != len(b):
        raise ValueError(f"dimension mismatch: {len(a)} and {len(b)}")


def _parse_args(args: tuple) -> list[float]:
    if not args:
        return [0.0, 0.0, 0.0]
    if len(args) == 1 and not isinstance(args[0], Real):
        values = [float(c) for c in args[0]]
    else:
        values = [float(c) for c in args]
    if not values:
        raise ValueError("a geometric object needs at least one coordinate")
    return values


class Vector:
    """A free vector in 2 or 3 dimensions (3 by default)."""

    __slots__ = ("_data",)
    __hash__ = None  # mutable

    def __init__(self, *args) -> None:
        self._data = _parse_args(args)

    def dimension(self) -> int:
        return len(self._data)

    def squared_length(self) -> float:
        return sum(c * c for c in self._data)

    def dot(self, other) -> float:
        w = _coords(other)
        if w is None:
            w = tuple(other)
        _check_same_dim(self._data, w)
        return sum(a * b for a, b in zip(self._data, w))

    def __getitem__(self, i: int) -> float:
        return self._data[i]

    def __setitem__(self, i: int, value: float) -> None:
        self._data[i] = float(value)

    def __len__(self) -> int:
        return len(self._data)

    def __iter__(self) -> Iterator[float]:
        return iter(self._data)

    def __add__(self, other):
        w = _coords(other)
        if w is None:
            return NotImplemented
        _check_same_dim(self._data, w)
        return Vector(a + b for a, b in zip(self._data, w))

    def __sub__(self, other):
        w = _coords(other)
        if w is None:
            return NotImplemented
        _check_same_dim(self._data, w)
        return Vector(a - b for a, b in zip(self._data, w))

    def __neg__(self) -> "Vector":
        return Vector(-c for c in self._data)

    def __mul__(self, s):
        if _coords(s) is not None:
            return self.dot(s)
        if isinstance(s, Real):
            return Vector(c * s for c in self._data)
        return NotImplemented

    def __rmul__(self, s):
        if isinstance(s, Real):
            return Vector(c * s for c in self._data)
        return NotImplemented

    def __truediv__(self, s):
        if isinstance(s, Real):
            return Vector(c / s for c in self._data)
        return NotImplemented

    def __eq__(self, other) -> bool:
        if not isinstance(other, Vector):
            return NotImplemented
        return self._data == other._data

    def __repr__(self) -> str:
        inner = ", ".join(_fmt(c) for c in self._data)
        return f"Vector_{len(self._data)}({inner})"


class Point:
    """A location in 2 or 3 dimensions (3 by default)."""

    __slots__ = ("_data",)
    __hash__ = None  # mutable

    def __init__(self, *args) -> None:
        self._data = _parse_args(args)

    def dimension(self) -> int:
        return len(self._data)

    def __getitem__(self, i: int) -> float:
        return self._data[i]

    def __setitem__(self, i: int, value: float) -> None:
        self._data[i] = float(value)

    def __len__(self) -> int:
        return len(self._data)

    def __iter__(self) -> Iterator[float]:
        return iter(self._data)

    def __add__(self, v):
        w = _coords(v)
        if w is None:
            return NotImplemented
        _check_same_dim(self._data, w)
        return Point(a + b for a, b in zip(self._data, w))

    def __sub__(self, other):
        if not isinstance(other, (Point, PointView)):
            return NotImplemented
        w = tuple(other)
        _check_same_dim(self._data, w)
        return Vector(a - b for a, b in zip(self._data, w))

    def __rmul__(self, w):
        if isinstance(w, Real):
            return Point(w * c for c in self._data)
        return NotImplemented

    def __eq__(self, other) -> bool:
        if isinstance(other, Point):
            return self._data == other._data
        if isinstance(other, PointView):
            return self._data == list(other)
        return NotImplemented

    def __repr__(self) -> str:
        inner = ", ".join(_fmt(c) for c in self._data)
        return f"Point_{len(self._data)}({inner})"


class PointView:
    """A point whose coordinates live in a flat, externally owned sequence.

    Coordinates ``data[offset:offset + dim]`` are read and written in place.
    """

    __slots__ = ("_data", "_offset", "_dim")
    __hash__ = None

    def __init__(self, data: MutableSequence[float], offset: int, dim: int) -> None:
        if dim < 1:
            raise ValueError("dimension must be positive")
        if offset < 0 or offset + dim > len(data):
            raise IndexError("view lies outside the data")
        self._data = data
        self._offset = offset
        self._dim = dim

    def dimension(self) -> int:
        return self._dim

    def _index(self, i: int) -> int:
        if i < 0:
            i += self._dim
        if not 0 <= i < self._dim:
            raise IndexError("coordinate index out of range")
        return self._offset + i

    def __getitem__(self, i: int) -> float:
        return self._data[self._index(i)]

    def __setitem__(self, i: int, value: float) -> None:
        self._data[self._index(i)] = float(value)

    def __len__(self) -> int:
        return self._dim

    def __iter__(self) -> Iterator[float]:
        return iter(self._data[self._offset:self._offset + self._dim])

    def _apply(self, values: Iterable[float]) -> None:
        for d, value in enumerate(values):
            self._data[self._offset + d] = value

    def __iadd__(self, v):
        w = _coords(v)
        if w is None:
            return NotImplemented
        _check_same_dim(self, w)
        self._apply(a + b for a, b in zip(list(self), w))
        return self

    def __isub__(self, v):
        w = _coords(v)
        if w is None:
            return NotImplemented
        _check_same_dim(self, w)
        self._apply(a - b for a, b in zip(list(self), w))
        return self

    def __imul__(self, w):
        if not isinstance(w, Real):
            return NotImplemented
        self._apply(c * w for c in list(self))
        return self

    def __itruediv__(self, w):
        if not isinstance(w, Real):
            return NotImplemented
        self._apply(c / w for c in list(self))
        return self

    def __sub__(self, other):
        if not isinstance(other, (Point, PointView)):
            return NotImplemented
        w = tuple(other)
        _check_same_dim(self, w)
        return Vector(a - b for a, b in zip(self, w))

    def __add__(self, v):
        w = _coords(v)
        if w is None:
            return NotImplemented
        _check_same_dim(self, w)
        return Point(a + b for a, b in zip(self, w))

    def __rmul__(self, w):
        if isinstance(w, Real):
            return Point(w * c for c in self)
        return NotImplemented

    def to_point(self) -> Point:
        return Point(list(self))

    def __repr__(self) -> str:
        inner = ", ".join(_fmt(c) for c in self)
        return f"PPoint_{self._dim}({inner})"


def cross(v, w):
    """Cross product: a Vector in 3D, the scalar z-component in 2D."""
    a = tuple(v)
    b = tuple(w)
    _check_same_dim(a, b)
    if len(a) == 3:
        return Vector(
            a[1] * b[2] - a[2] * b[1],
            a[2] * b[0] - a[0] * b[2],
            a[0] * b[1] - a[1] * b[0],
        )
    if len(a) == 2:
        return a[0] * b[1] - a[1] * b[0]
    raise ValueError("cross product needs 2 or 3 dimensions")


def dot(v, w) -> float:
    a = tuple(v)
    b = tuple(w)
    _check_same_dim(a, b)
    return sum(x * y for x, y in zip(a, b))


def midpoint(p, q) -> Point:
    a = tuple(p)
    b = tuple(q)
    _check_same_dim(a, b)
    return Point((x + y) / 2.0 for x, y in zip(a, b))


def sign(x: float) -> int:
    return (x > 0) - (x < 0)


def length(v) -> float:
    """Euclidean length of a vector-like object."""
    return math.sqrt(dot(v, v))