"""Hexahedral meshes: topology, measures and uniform refinement."""

from __future__ import annotations

import math
from typing import Iterable, Sequence

from .tetmesh import Topology
from .vectors import Point, Vector, cross, dot

__all__ = ["HexahedronMesh"]

_FACE_CORNERS = ((0, 0), (1, 0), (1, 1), (0, 1))
_CELL_CORNERS = (
    (0, 0, 0), (1, 0, 0), (1, 1, 0), (0, 1, 0),
    (0, 0, 1), (1, 0, 1), (1, 1, 1), (0, 1, 1),
)
_GAUSS_1D = (
    (0.5 - 0.5 / math.sqrt(3.0), 0.5),
    (0.5 + 0.5 / math.sqrt(3.0), 0.5),
)


def _rule(quadrature, dim: int) -> list[tuple[Sequence[float], float]]:
    """Quadrature points and weights on the reference square or cube."""
    if quadrature is None:
        if dim == 2:
            return [((u, v), wu * wv) for u, wu in _GAUSS_1D for v, wv in _GAUSS_1D]
        return [
            ((u, v, w), wu * wv * ww)
            for u, wu in _GAUSS_1D
            for v, wv in _GAUSS_1D
            for w, ww in _GAUSS_1D
        ]
    return [
        (quadrature.quadrature_point(n), quadrature.quadrature_weight(n))
        for n in range(quadrature.number_of_quadrature_points())
    ]


def _shape_factor(bit: int, t: float) -> tuple[float, float]:
    """Value and derivative of the 1D linear shape function for corner ``bit`` at ``t``."""
    if bit:
        return t, 1.0
    return 1.0 - t, -1.0


def _compress(pairs: Iterable[tuple[int, object]], n: int) -> tuple[list[int], list]:
    """Build (locations, neighbors) from (source, target) pairs in their given order."""
    pairs = list(pairs)
    locations = [0] * (n + 1)
    for src, _ in pairs:
        locations[src + 1] += 1
    for i in range(n):
        locations[i + 1] += locations[i]
    neighbors: list = [None] * locations[n]
    start = list(locations)
    for src, dst in pairs:
        neighbors[start[src]] = dst
        start[src] += 1
    return locations, neighbors


class HexahedronMesh:
    """Hexahedral mesh stored as lists of nodes and 8-tuples of node indices.

    Nodes 0-3 form the bottom face in cyclic order and nodes 4-7 the top face
    directly above them.
    """

    LOCAL_EDGE = (
        (0, 1), (1, 2), (2, 3), (0, 3),
        (0, 4), (1, 5), (2, 6), (3, 7),
        (4, 5), (5, 6), (6, 7), (4, 7),
    )
    LOCAL_FACE = (
        (0, 3, 2, 1), (4, 5, 6, 7),
        (0, 4, 7, 3), (1, 2, 6, 5),
        (0, 1, 5, 4), (2, 3, 7, 6),
    )
    LOCAL_FACE_TO_EDGE = (
        (3, 2, 1, 0), (8, 9, 10, 11),
        (4, 11, 7, 3), (1, 6, 9, 5),
        (0, 5, 8, 4), (2, 7, 10, 6),
    )
    # Child vertex order: {node, edge, face, edge, edge, face, cell, face}.
    REFINE = (
        (0, 0, 0, 3, 4, 4, 0, 2), (1, 1, 0, 0, 5, 3, 0, 4),
        (2, 2, 0, 1, 6, 5, 0, 3), (3, 3, 0, 2, 7, 2, 0, 5),
        (4, 11, 1, 8, 4, 2, 0, 4), (5, 8, 1, 9, 5, 4, 0, 3),
        (6, 9, 1, 10, 6, 3, 0, 5), (7, 10, 1, 11, 7, 5, 0, 2),
    )
    NUM = (
        (0, 1, 2, 3, 4, 5, 6, 7), (1, 2, 3, 0, 5, 6, 7, 4),
        (2, 3, 0, 1, 6, 7, 4, 5), (3, 0, 1, 2, 7, 4, 5, 6),
        (4, 7, 6, 5, 0, 3, 2, 1), (5, 4, 7, 6, 1, 0, 3, 2),
        (6, 5, 4, 7, 2, 1, 0, 3), (7, 6, 5, 4, 3, 2, 1, 0),
    )
    VTK_INDEX = (0, 1, 2, 3, 4, 5, 6, 7)
    NODES_PER_CELL = 8
    GEO_DIMENSION = 3
    TOP_DIMENSION = 3

    def __init__(self) -> None:
        self.nodes: list[Point] = []
        self.cells: list[tuple[int, ...]] = []
        self.edges: list[tuple[int, int]] = []
        self.faces: list[tuple[int, int, int, int]] = []
        self.face2cell: list[list[int]] = []
        self.cell2face: list[list[int]] = []
        self.cell2edge: list[list[int]] = []
        self.node_int_data: dict[str, list[int]] = {}
        self.node_double_data: dict[str, list[float]] = {}

    # construction -------------------------------------------------------

    def insert_node(self, node) -> None:
        self.nodes.append(Point(node))

    def insert_cell(self, cell) -> None:
        cell = tuple(int(v) for v in cell)
        if len(cell) != self.NODES_PER_CELL:
            raise ValueError("a hexahedron needs exactly 8 node indices")
        self.cells.append(cell)

    def number_of_nodes(self) -> int:
        return len(self.nodes)

    def number_of_cells(self) -> int:
        return len(self.cells)

    def number_of_edges(self) -> int:
        return len(self.edges)

    def number_of_faces(self) -> int:
        return len(self.faces)

    def vtk_cell_type(self, td: int = 3) -> int:
        """VTK cell type of entities of topological dimension ``td``."""
        return {3: 12, 1: 3}.get(td, 68)

    def init_top(self) -> None:
        """Build faces, edges and the cell/face/edge adjacency from the cells."""
        self.face2cell = []
        self.cell2face = []
        face_index: dict[tuple[int, ...], int] = {}
        for i, cell in enumerate(self.cells):
            c2f = []
            for j, local in enumerate(self.LOCAL_FACE):
                key = tuple(sorted(cell[k] for k in local))
                idx = face_index.get(key)
                if idx is None:
                    idx = len(self.face2cell)
                    face_index[key] = idx
                    self.face2cell.append([i, i, j, j])
                else:
                    self.face2cell[idx][1] = i
                    self.face2cell[idx][3] = j
                c2f.append(idx)
            self.cell2face.append(c2f)
        self.faces = [
            tuple(self.cells[c0][k] for k in self.LOCAL_FACE[j0])
            for c0, _, j0, _ in self.face2cell
        ]

        self.edges = []
        self.cell2edge = []
        edge_index: dict[tuple[int, int], int] = {}
        for cell in self.cells:
            c2e = []
            for a, b in self.LOCAL_EDGE:
                key = tuple(sorted((cell[a], cell[b])))
                idx = edge_index.get(key)
                if idx is None:
                    idx = len(self.edges)
                    edge_index[key] = idx
                    self.edges.append((cell[a], cell[b]))
                c2e.append(idx)
            self.cell2edge.append(c2e)

    # angles -------------------------------------------------------------

    def cell_dihedral_angle(self, i: int) -> tuple[float, float]:
        """Return ``(max, min)`` angle in degrees between the first four faces of cell ``i``."""
        cell = self.cells[i]
        normals = []
        for local in self.LOCAL_FACE[:4]:
            p0 = self.nodes[cell[local[0]]]
            n = cross(self.nodes[cell[local[1]]] - p0, self.nodes[cell[local[2]]] - p0)
            normals.append(n / math.sqrt(n.squared_length()))
        angles = [
            (math.pi - math.acos(max(-1.0, min(1.0, dot(normals[j], normals[k]))))) / math.pi * 180
            for j in range(4)
            for k in range(j + 1, 4)
        ]
        return max(angles), min(angles)

    def dihedral_angle_range(self) -> tuple[float, float]:
        """Return ``(max, min)`` of :meth:`cell_dihedral_angle` over all cells."""
        hi, lo = 0.0, 1e10
        for i in range(len(self.cells)):
            cmax, cmin = self.cell_dihedral_angle(i)
            hi = max(hi, cmax)
            lo = min(lo, cmin)
        return hi, lo

    # measures and barycentres -------------------------------------------

    def edge_measure(self, i: int) -> float:
        a, b = self.edges[i]
        return math.sqrt((self.nodes[b] - self.nodes[a]).squared_length())

    def _face_jacobian_det(self, i: int, r: Sequence[float]) -> float:
        u, v = r[0], r[1]
        xu = Vector(0.0, 0.0, 0.0)
        xv = Vector(0.0, 0.0, 0.0)
        for k, (a, b) in zip(self.faces[i], _FACE_CORNERS):
            p = Vector(self.nodes[k])
            fu, du = _shape_factor(a, u)
            fv, dv = _shape_factor(b, v)
            xu = xu + (du * fv) * p
            xv = xv + (fu * dv) * p
        return math.sqrt(cross(xu, xv).squared_length())

    def _cell_jacobian_det(self, i: int, r: Sequence[float]) -> float:
        u, v, w = r[0], r[1], r[2]
        xu = Vector(0.0, 0.0, 0.0)
        xv = Vector(0.0, 0.0, 0.0)
        xw = Vector(0.0, 0.0, 0.0)
        for k, (a, b, c) in zip(self.cells[i], _CELL_CORNERS):
            p = Vector(self.nodes[k])
            fu, du = _shape_factor(a, u)
            fv, dv = _shape_factor(b, v)
            fw, dw = _shape_factor(c, w)
            xu = xu + (du * fv * fw) * p
            xv = xv + (fu * dv * fw) * p
            xw = xw + (fu * fv * dw) * p
        return dot(cross(xu, xv), xw)

    def face_measure(self, i: int, quadrature=None) -> float:
        """Area of quadrilateral face ``i``.

        ``quadrature`` provides ``number_of_quadrature_points()``,
        ``quadrature_point(n)`` (coordinates ``(u, v)`` in ``[0, 1]^2``) and
        ``quadrature_weight(n)``; a 2x2 Gauss rule is used when it is None.
        """
        return sum(self._face_jacobian_det(i, r) * w for r, w in _rule(quadrature, 2))

    def cell_measure(self, i: int, quadrature=None) -> float:
        """Volume of cell ``i`` by quadrature on the reference cube ``[0, 1]^3``."""
        return sum(self._cell_jacobian_det(i, r) * w for r, w in _rule(quadrature, 3))

    def _mean(self, indices: Iterable[int]) -> Point:
        pts = [self.nodes[k] for k in indices]
        return Point(sum(coords) / len(pts) for coords in zip(*pts))

    def edge_barycenter(self, i: int) -> Point:
        return self._mean(self.edges[i])

    def face_barycenter(self, i: int) -> Point:
        return self._mean(self.faces[i])

    def cell_barycenter(self, i: int) -> Point:
        return self._mean(self.cells[i])

    # refinement ---------------------------------------------------------

    def uniform_refine(self, n: int = 1) -> None:
        """Split every hexahedron into eight, ``n`` times."""
        for _ in range(n):
            if len(self.cell2edge) != len(self.cells):
                self.init_top()
            nn = len(self.nodes)
            ne = len(self.edges)
            nf = len(self.faces)
            new_nodes = (
                [self.edge_barycenter(j) for j in range(ne)]
                + [self.face_barycenter(j) for j in range(nf)]
                + [self.cell_barycenter(j) for j in range(len(self.cells))]
            )
            groups: list[list[tuple[int, ...]]] = [[] for _ in range(8)]
            for j, (c, c2e, c2f) in enumerate(zip(self.cells, self.cell2edge, self.cell2face)):
                center = nn + ne + nf + j
                for k, r in enumerate(self.REFINE):
                    groups[k].append((
                        c[k],
                        nn + c2e[r[1]],
                        nn + ne + c2f[r[2]],
                        nn + c2e[r[3]],
                        nn + c2e[r[4]],
                        nn + ne + c2f[r[5]],
                        center,
                        nn + ne + c2f[r[7]],
                    ))
            self.nodes.extend(new_nodes)
            self.cells = [cell for group in groups for cell in group]
            self.init_top()

    # boundary -----------------------------------------------------------

    def boundary_faces(self) -> list[bool]:
        return [f[0] == f[1] for f in self.face2cell]

    def boundary_nodes(self) -> list[bool]:
        flags = [False] * len(self.nodes)
        for face, f2c in zip(self.faces, self.face2cell):
            if f2c[0] == f2c[1]:
                for v in face:
                    flags[v] = True
        return flags

    # adjacency ----------------------------------------------------------

    def cell_to_node(self) -> Topology:
        nn = self.NODES_PER_CELL
        return Topology(
            locations=[nn * i for i in range(len(self.cells) + 1)],
            neighbors=[v for cell in self.cells for v in cell],
        )

    def cell_to_cell(self) -> Topology:
        """Cells across each face; a boundary face lists the cell itself."""
        pairs = []
        for c0, c1, _, _ in self.face2cell:
            pairs.append((c0, c1))
            if c0 != c1:
                pairs.append((c1, c0))
        loc, nei = _compress(pairs, len(self.cells))
        return Topology(locations=loc, neighbors=nei)

    def node_to_node(self) -> Topology:
        pairs = []
        for a, b in self.edges:
            pairs.append((a, b))
            pairs.append((b, a))
        loc, nei = _compress(pairs, len(self.nodes))
        return Topology(locations=loc, neighbors=nei)

    def node_to_cell(self) -> Topology:
        """Cells around each node, with the node's local index in each cell."""
        pairs = [(v, (i, j)) for i, cell in enumerate(self.cells) for j, v in enumerate(cell)]
        loc, nei = _compress(pairs, len(self.nodes))
        return Topology(
            locations=loc,
            neighbors=[c for c, _ in nei],
            local_indices=[j for _, j in nei],
        )