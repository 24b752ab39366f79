"""Named, homogeneously typed arrays of per-entity data."""

from __future__ import annotations

from typing import Any, Iterator

__all__ = ["DataArray", "NodeIntData", "NodeDoubleData"]

# Per-node data keyed by name, as held by the meshes.
NodeIntData = dict[str, list[int]]
NodeDoubleData = dict[str, list[float]]


class DataArray:
    """A list of values of one type; new slots take the default value."""

    def __init__(self, name: str, default: Any = 0.0) -> None:
        self.name = name
        self.default = default
        self.dtype = type(default)
        self._data: list = []

    def __len__(self) -> int:
        return len(self._data)

    def __getitem__(self, i):
        return self._data[i]

    def __setitem__(self, i, value) -> None:
        self._data[i] = value

    def __iter__(self) -> Iterator:
        return iter(self._data)

    def resize(self, n: int) -> None:
        if n < 0:
            raise ValueError("size must be non-negative")
        if n < len(self._data):
            del self._data[n:]
        else:
            self._data.extend([self.default] * (n - len(self._data)))

    def push_back(self) -> None:
        self._data.append(self.default)

    def reset(self, i: int) -> None:
        self._data[i] = self.default

    def _check_compatible(self, other) -> None:
        if not isinstance(other, DataArray) or other.dtype is not self.dtype:
            raise TypeError("data arrays hold different value types")

    def transfer(self, other: "DataArray") -> None:
        """Copy all of ``other`` into the last ``len(other)`` slots of this array."""
        self._check_compatible(other)
        n = len(other)
        if n > len(self._data):
            raise ValueError("the other array is longer than this one")
        self._data[len(self._data) - n:] = list(other)

    def transfer_item(self, other: "DataArray", src: int, dst: int) -> None:
        """Copy ``other[src]`` into slot ``dst``."""
        self._check_compatible(other)
        self._data[dst] = other[src]

    def swap(self, i0: int, i1: int) -> None:
        self._data[i0], self._data[i1] = self._data[i1], self._data[i0]

    def clone(self) -> "DataArray":
        copy = self.empty_clone()
        copy._data = list(self._data)
        return copy

    def empty_clone(self) -> "DataArray":
        return DataArray(self.name, self.default)

    def __repr__(self) -> str:
        return f"DataArray({self.name!r}, {self._data!r})"