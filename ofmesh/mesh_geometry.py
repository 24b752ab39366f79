"""Node coordinates kept in one flat list and read through point views."""

from __future__ import annotations

from typing import Iterator

from .vectors import PointView

__all__ = ["MeshGeometry"]


class MeshGeometry:
    """Three-dimensional node coordinates stored as ``x0, y0, z0, x1, ...``."""

    GEO_DIMENSION = 3

    def __init__(self, capacity: int = 0) -> None:
        if capacity < 0:
            raise ValueError("capacity must be non-negative")
        self._data: list[float] = [0.0] * (3 * capacity)
        self._count = 0

    @property
    def capacity(self) -> int:
        return len(self._data) // 3

    def insert(self, i: int, x: float, y: float, z: float = 0.0) -> None:
        """Overwrite the coordinates of existing node ``i``."""
        if not 0 <= i < self._count:
            raise IndexError(f"node {i} does not exist")
        self._data[3 * i:3 * i + 3] = [float(x), float(y), float(z)]

    def push_back(self, x: float, y: float, z: float = 0.0) -> None:
        """Append a node, growing the storage when it is full."""
        if self._count == self.capacity:
            self._data.extend([0.0] * (3 * max(1, self.capacity)))
        self._data[3 * self._count:3 * self._count + 3] = [float(x), float(y), float(z)]
        self._count += 1

    def number_of_nodes(self) -> int:
        return self._count

    def node(self, i: int) -> PointView:
        """A view on node ``i`` whose changes are written to the storage."""
        if not 0 <= i < self._count:
            raise IndexError(f"node {i} does not exist")
        return PointView(self._data, 3 * i, 3)

    def __iter__(self) -> Iterator[PointView]:
        return (PointView(self._data, 3 * i, 3) for i in range(self._count))

    def clear(self) -> None:
        self._data = []
        self._count = 0