"""Jacobian-based quality of hexahedral cells and its gradient."""

from __future__ import annotations

from .vectors import Vector, cross, dot, length

__all__ = ["HexJacobiQuality", "INVALID_QUALITY"]

# Quality reported for a cell with an inverted corner.
INVALID_QUALITY = float(2**63 - 1)


class HexJacobiQuality:
    """Cell quality of a hexahedral mesh built from the scaled corner Jacobians.

    For every corner the three edge vectors ``v1, v2, v3`` give
    ``q = 3 det(v1, v2, v3) / (|v1|^3 + |v2|^3 + |v3|^3)``; the quality is the
    mean of ``(q - 2)^4`` over the eight corners. A cell with a negative corner
    Jacobian gets :data:`INVALID_QUALITY`.
    """

    def __init__(self, mesh) -> None:
        self.mesh = mesh

    def quality(self, i: int) -> float:
        """Quality of cell ``i``; smaller is better."""
        mesh = self.mesh
        cell = mesh.cells[i]
        nodes = mesh.nodes
        mu = 0.0
        for idx in mesh.NUM:
            x0 = nodes[cell[idx[0]]]
            v1 = nodes[cell[idx[4]]] - x0
            v2 = nodes[cell[idx[2]]] - x0
            v3 = nodes[cell[idx[1]]] - x0
            jac = dot(cross(v1, v2), v3)
            if jac < 0:
                return INVALID_QUALITY
            d = length(v1) ** 3 + length(v2) ** 3 + length(v3) ** 3
            q = 3.0 * jac / d
            mu += (q - 2) ** 4
        return mu / 8.0

    def gradient(self, c: int, i: int) -> Vector:
        """Gradient of the quality of cell ``c`` with respect to its local node ``i``."""
        mesh = self.mesh
        nodes = mesh.nodes
        cell = mesh.cells[c]
        idx = mesh.NUM[i]
        x0, x1, x2, x3, x4, x5, x6 = (nodes[cell[idx[k]]] for k in range(7))

        v04 = x4 - x0
        v02 = x2 - x0
        v01 = x1 - x0
        v46 = x6 - x4
        v45 = x5 - x4
        v23 = x3 - x2
        v26 = x6 - x2
        v13 = x3 - x1
        v15 = x5 - x1

        l04, l02, l01 = length(v04), length(v02), length(v01)
        l46, l45 = length(v46), length(v45)
        l23, l26 = length(v23), length(v26)
        l13, l15 = length(v13), length(v15)

        j0 = dot(cross(v04, v02), v01)
        j4 = dot(cross(v46, v45), v04)
        j2 = dot(cross(v23, v26), v02)
        j1 = dot(cross(v15, v13), v01)

        d0 = l04**3 + l01**3 + l02**3
        d4 = l04**3 + l45**3 + l46**3
        d2 = l26**3 + l23**3 + l02**3
        d1 = l13**3 + l01**3 + l15**3

        q0 = 3.0 * j0 / d0
        q4 = 3.0 * j4 / d4
        q2 = 3.0 * j2 / d2
        q1 = 3.0 * j1 / d1

        nabla_j0 = cross(v04, v01) + cross(v02, v04) + cross(v01, v02)
        nabla_j4 = cross(v45, v46)
        nabla_j2 = cross(v26, v23)
        nabla_j1 = cross(v13, v15)

        nabla_d0 = -3.0 * (l04 * v04 + l02 * v02 + l01 * v01)
        nabla_d4 = -3.0 * l04 * v04
        nabla_d2 = -3.0 * l02 * v02
        nabla_d1 = -3.0 * l01 * v01

        terms = (
            (q0, d0, j0, nabla_j0, nabla_d0),
            (q4, d4, j4, nabla_j4, nabla_d4),
            (q2, d2, j2, nabla_j2, nabla_d2),
            (q1, d1, j1, nabla_j1, nabla_d1),
        )
        result = Vector(0.0, 0.0, 0.0)
        for q, d, jac, nabla_j, nabla_d in terms:
            nabla_q = 3.0 * (d * nabla_j - jac * nabla_d) / d / d
            result = result + (4.0 * (q - 2) ** 3) * nabla_q
        return result