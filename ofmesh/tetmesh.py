"""Tetrahedral meshes: topology, measures, quality and uniform refinement."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Iterable

from .vectors import Point, Vector, cross, dot

__all__ = ["Topology", "TetrahedronMesh"]


@dataclass
class Topology:
    """Compressed adjacency: entity ``i`` is adjacent to
    ``neighbors[locations[i]:locations[i + 1]]``.

    ``local_indices`` is filled by relations that record the local position of
    the source entity inside each neighbour.
    """

    locations: list[int] = field(default_factory=list)
    neighbors: list[int] = field(default_factory=list)
    local_indices: list[int] = field(default_factory=list)

    def neighbors_of(self, i: int) -> list[int]:
        return self.neighbors[self.locations[i]:self.locations[i + 1]]


def _compress(pairs: Iterable[tuple[int, int]], n: int) -> tuple[list[int], list[int]]:
    """Build (locations, neighbors) from (source, target) pairs in their given order."""
    pairs = list(pairs)
    counts = [0] * (n + 1)
    for src, _ in pairs:
        counts[src + 1] += 1
    for i in range(n):
        counts[i + 1] += counts[i]
    neighbors = [0] * counts[n]
    start = list(counts)
    for src, dst in pairs:
        neighbors[start[src]] = dst
        start[src] += 1
    return counts, neighbors


class TetrahedronMesh:
    """Tetrahedral mesh stored as lists of nodes and 4-tuples of node indices."""

    LOCAL_EDGE = ((0, 1), (0, 2), (0, 3), (1, 2), (1, 3), (2, 3))
    LOCAL_FACE = ((1, 2, 3), (0, 3, 2), (0, 1, 3), (0, 2, 1))
    LOCAL_FACE_TO_EDGE = ((5, 4, 3), (5, 1, 2), (4, 2, 0), (3, 0, 1))
    REFINE = ((1, 3, 4, 2, 5, 0), (0, 2, 5, 3, 4, 1), (0, 4, 5, 1, 3, 2))
    INDEX = (
        (0, 1, 2, 3), (0, 2, 3, 1), (0, 3, 1, 2),
        (1, 2, 0, 3), (1, 0, 3, 2), (1, 3, 2, 0),
        (2, 0, 1, 3), (2, 1, 3, 0), (2, 3, 0, 1),
        (3, 0, 2, 1), (3, 2, 1, 0), (3, 1, 0, 2),
    )
    VTK_INDEX = (0, 1, 2, 3)
    NUM = ((0, 1, 2, 3), (1, 0, 3, 2), (2, 0, 1, 3), (3, 0, 2, 1))
    NODES_PER_CELL = 4
    GEO_DIMENSION = 3
    TOP_DIMENSION = 3

    def __init__(self) -> None:
        self.nodes: list[Point] = []
        self.cells: list[tuple[int, int, int, int]] = []
        self.edges: list[tuple[int, int]] = []
        self.faces: list[tuple[int, int, int]] = []
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
            raise ValueError("a tetrahedron needs exactly 4 node indices")
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
        return {3: 10, 2: 5, 1: 3}.get(td, 0)

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

    # quality ------------------------------------------------------------

    def cell_quality(self, i: int) -> float:
        """Radius-ratio quality ``3 r / R``; equals 1 for a regular tetrahedron."""
        s = self.cell_surface_area(i)
        d = self.direction(i, 0)
        length = math.sqrt(d.squared_length())
        vol = self.cell_measure(i)
        big_r = length / vol / 12.0
        small_r = 3.0 * vol / s
        return small_r * 3.0 / big_r

    def cell_qualities(self) -> list[float]:
        return [self.cell_quality(i) for i in range(len(self.cells))]

    def cell_surface_area(self, i: int) -> float:
        return sum(self.face_measure(f) for f in self.cell2face[i])

    def direction(self, i: int, j: int) -> Vector:
        """Circumcentre direction vector of cell ``i`` seen from local vertex ``j``."""
        cell = self.cells[i]
        idx = self.INDEX[3 * j]
        x0 = self.nodes[cell[idx[0]]]
        v10 = x0 - self.nodes[cell[idx[1]]]
        v20 = x0 - self.nodes[cell[idx[2]]]
        v30 = x0 - self.nodes[cell[idx[3]]]
        v1 = v10.squared_length() * cross(v20, v30)
        v2 = v20.squared_length() * cross(v30, v10)
        v3 = v30.squared_length() * cross(v10, v20)
        return v1 + v2 + v3

    def cell_dihedral_angle(self, i: int) -> tuple[float, float]:
        """Return ``(max, min)`` dihedral angle of cell ``i`` in degrees."""
        cell = self.cells[i]
        normals = []
        for a, b, c in self.LOCAL_FACE:
            p0 = self.nodes[cell[a]]
            n = cross(self.nodes[cell[b]] - p0, self.nodes[cell[c]] - p0)
            normals.append(n / math.sqrt(n.squared_length()))
        angles = [
            (math.pi - math.acos(max(-1.0, min(1.0, dot(normals[j], normals[k]))))) / math.pi * 180
            for j in range(4)
            for k in range(j + 1, 4)
        ]
        return max(angles), min(angles)

    def dihedral_angle_range(self) -> tuple[float, float]:
        """Return ``(max, min)`` dihedral angle over all cells in degrees."""
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

    def face_measure(self, i: int) -> float:
        f = self.faces[i]
        p0 = self.nodes[f[0]]
        v1 = self.nodes[f[1]] - p0
        v2 = self.nodes[f[2]] - p0
        return 0.5 * math.sqrt(cross(v1, v2).squared_length())

    def cell_measure(self, i: int) -> float:
        """Signed volume of cell ``i``."""
        c = self.cells[i]
        p0 = self.nodes[c[0]]
        v01 = self.nodes[c[1]] - p0
        v02 = self.nodes[c[2]] - p0
        v03 = self.nodes[c[3]] - p0
        return dot(cross(v01, v02), v03) / 6.0

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
        """Split every tetrahedron into eight, ``n`` times."""
        for _ in range(n):
            if len(self.cell2edge) != len(self.cells):
                self.init_top()
            nn = len(self.nodes)
            midpoints = [self.edge_barycenter(j) for j in range(len(self.edges))]
            self.nodes.extend(midpoints)

            groups: list[list[tuple[int, int, int, int]]] = [[] for _ in range(8)]
            for c, c2e in zip(self.cells, self.cell2edge):
                e = [k + nn for k in c2e]
                groups[0].append((c[0], e[0], e[1], e[2]))
                groups[1].append((c[1], e[3], e[0], e[4]))
                groups[2].append((c[2], e[1], e[3], e[5]))
                groups[3].append((c[3], e[4], e[2], e[5]))

                diagonals = [
                    (self.nodes[e[0]] - self.nodes[e[5]]).squared_length(),
                    (self.nodes[e[1]] - self.nodes[e[4]]).squared_length(),
                    (self.nodes[e[2]] - self.nodes[e[3]]).squared_length(),
                ]
                idx = min(range(3), key=diagonals.__getitem__)
                r = [e[k] for k in self.REFINE[idx]]
                groups[4].append((r[0], r[1], r[4], r[5]))
                groups[5].append((r[1], r[2], r[4], r[5]))
                groups[6].append((r[2], r[3], r[4], r[5]))
                groups[7].append((r[3], r[0], r[4], r[5]))

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