"""A small dense row-major matrix."""

from __future__ import annotations

import math
from numbers import Number
from typing import Iterable, Sequence


def _fmt(x: float) -> str:
    return f"{x:g}"


class Matrix:
    """Dense matrix stored as a list of rows."""

    __hash__ = None  # mutable

    def __init__(self, rows: Iterable[Iterable[float]] = ()) -> None:
        data = [[float(x) for x in row] for row in rows]
        if data:
            nc = len(data[0])
            if any(len(row) != nc for row in data):
                raise ValueError("all rows must have the same length")
        self._rows = data

    @classmethod
    def zeros(cls, nr: int, nc: int, val: float = 0.0) -> "Matrix":
        if nr < 0 or nc < 0:
            raise ValueError("matrix dimensions must be non-negative")
        m = cls()
        m._rows = [[float(val)] * nc for _ in range(nr)]
        return m

    @property
    def shape(self) -> tuple[int, int]:
        if not self._rows:
            return (0, 0)
        return (len(self._rows), len(self._rows[0]))

    def number_of_rows(self) -> int:
        return self.shape[0]

    def number_of_columns(self) -> int:
        return self.shape[1]

    def fill(self, val: float) -> None:
        for row in self._rows:
            row[:] = [float(val)] * len(row)

    def fill_diag(self, val, diag: int = 0) -> None:
        """Set the diagonal at offset ``diag`` to a constant or to a sequence."""
        nr, nc = self.shape
        if diag >= 0:
            positions = zip(range(nr), range(diag, nc))
        else:
            positions = zip(range(-diag, nr), range(nc))
        for k, (i, j) in enumerate(positions):
            self._rows[i][j] = float(val[k]) if isinstance(val, Sequence) else float(val)

    def row_norm_l2(self, i: int) -> float:
        return math.sqrt(sum(x * x for x in self._rows[i]))

    def col_norm_l2(self, j: int) -> float:
        return math.sqrt(sum(row[j] * row[j] for row in self._rows))

    def norm(self) -> float:
        return math.sqrt(sum(x * x for row in self._rows for x in row))

    def transpose_multiply(self, other: "Matrix") -> "Matrix":
        """Return ``self.T * other``."""
        if self.number_of_rows() != other.number_of_rows():
            raise ValueError("row counts differ")
        cols_a = list(zip(*self._rows))
        cols_b = list(zip(*other._rows))
        return Matrix(
            [sum(a * b for a, b in zip(ca, cb)) for cb in cols_b] for ca in cols_a
        )

    def copy(self) -> "Matrix":
        return Matrix(self._rows)

    def __getitem__(self, key):
        if isinstance(key, tuple):
            i, j = key
            return self._rows[i][j]
        return self._rows[key]

    def __setitem__(self, key, value) -> None:
        if isinstance(key, tuple):
            i, j = key
            self._rows[i][j] = float(value)
            return
        row = [float(x) for x in value]
        if len(row) != self.number_of_columns():
            raise ValueError("row has the wrong length")
        self._rows[key] = row

    def __mul__(self, other):
        if isinstance(other, Matrix):
            if self.number_of_columns() != other.number_of_rows():
                raise ValueError(
                    f"cannot multiply {self.shape} by {other.shape} matrices"
                )
            cols = list(zip(*other._rows))
            return Matrix(
                [sum(a * b for a, b in zip(row, col)) for col in cols]
                for row in self._rows
            )
        if isinstance(other, Number):
            return Matrix([x * other for x in row] for row in self._rows)
        return NotImplemented

    __matmul__ = __mul__

    def __rmul__(self, s):
        if isinstance(s, Number):
            return Matrix([x * s for x in row] for row in self._rows)
        return NotImplemented

    def __imul__(self, s):
        if not isinstance(s, Number):
            return NotImplemented
        for row in self._rows:
            row[:] = [x * s for x in row]
        return self

    def __iadd__(self, other):
        if not isinstance(other, Matrix):
            return NotImplemented
        if self.shape != other.shape:
            raise ValueError("shapes differ")
        for row, orow in zip(self._rows, other._rows):
            row[:] = [a + b for a, b in zip(row, orow)]
        return self

    def __sub__(self, other):
        if not isinstance(other, Matrix):
            return NotImplemented
        if self.shape != other.shape:
            raise ValueError("shapes differ")
        return Matrix(
            [a - b for a, b in zip(row, orow)]
            for row, orow in zip(self._rows, other._rows)
        )

    def __eq__(self, other) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self._rows == other._rows

    def __str__(self) -> str:
        nr, nc = self.shape
        lines = [f"Matrix({nr},{nc}):"]
        lines.extend("".join(_fmt(x) + " " for x in row) for row in self._rows)
        return "\n".join(lines) + "\n\n"

    def __repr__(self) -> str:
        return f"Matrix({self._rows!r})"