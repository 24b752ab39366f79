"""Optimisation of a single node by moving it inside its patch of cells."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from .vectors import Point, Vector

__all__ = ["NodePatch", "MixNodePatchObjectFunction", "NodePatchOptAlg"]

_RATIO = 0.618


@dataclass
class NodePatch:
    """The cells around node ``id`` and the node's local index in each of them."""

    id: int
    cells: list[int] = field(default_factory=list)
    local_indices: list[int] = field(default_factory=list)

    def __post_init__(self) -> None:
        if len(self.cells) != len(self.local_indices):
            raise ValueError("cells and local_indices must have the same length")


class MixNodePatchObjectFunction:
    """Worst cell quality in a node patch, as a function of the centre node.

    ``quality`` provides ``quality(cell)`` and ``gradient(cell, local_index)``.
    """

    def __init__(self, mesh, quality, patch: NodePatch) -> None:
        self.mesh = mesh
        self.quality = quality
        self.patch = patch
        self._node = Point(mesh.nodes[patch.id])

    def value(self, node) -> float:
        """Patch quality with the centre node placed at ``node``."""
        pid = self.patch.id
        self.mesh.nodes[pid] = Point(node)
        try:
            q = 0.0
            for c in self.patch.cells:
                q = max(q, self.quality.quality(c))
        finally:
            self.mesh.nodes[pid] = Point(self._node)
        return q

    def gradient(self) -> Vector:
        """Mean of the cell quality gradients with respect to the centre node."""
        n = len(self.patch.cells)
        if n == 0:
            raise ValueError("the patch has no cells")
        v = Vector([0.0] * len(self._node))
        for c, j in zip(self.patch.cells, self.patch.local_indices):
            v = v + self.quality.gradient(c, j)
        return v / n

    def direction(self) -> Vector:
        return -self.gradient()


class NodePatchOptAlg:
    """Moves one node along a descent direction, respecting the geometry model.

    The mesh's ``node_int_data`` must hold ``"gdof"`` (2 for a node on a face,
    1 for a node on an edge) and ``"gtag"`` (the face or edge tag).
    """

    def __init__(self, mesh, model) -> None:
        self.mesh = mesh
        self.model = model

    def optimization(self, objfun: MixNodePatchObjectFunction, alpha: float) -> float:
        """Move the patch centre; return the distance it moved."""
        i = objfun.patch.id
        node = Point(self.mesh.nodes[i])
        v = self.preprocess(i, node, objfun.direction())
        norm = math.sqrt(v.squared_length())
        if alpha > 0 and norm > 0:
            v = (2 * alpha / norm) * v
        step = self.compute_step(objfun, node, v)
        node = self.postprocess(i, node + step * v)
        self.mesh.nodes[i] = node
        return step * math.sqrt(v.squared_length())

    def _tag_and_dof(self, i: int) -> tuple[int, int]:
        data = self.mesh.node_int_data
        return data["gtag"][i], data["gdof"][i]

    def preprocess(self, i: int, node, v) -> Vector:
        """Restrict the direction ``v`` to the geometric entity node ``i`` lies on."""
        tag, dof = self._tag_and_dof(i)
        if dof == 2:
            return self.model.project_vector_to_face(tag, node, v)
        if dof == 1:
            return self.model.project_vector_to_edge(tag, node, v)
        return Vector(v)

    def postprocess(self, i: int, node) -> Point:
        """Project ``node`` back onto the geometric entity node ``i`` lies on."""
        tag, dof = self._tag_and_dof(i)
        if dof == 2:
            return self.model.project_to_face(tag, node)
        if dof == 1:
            return self.model.project_to_edge(tag, node)
        return Point(node)

    def compute_step(self, objfun: MixNodePatchObjectFunction, node, v) -> float:
        """Golden-section search for the best step in ``[0, 1]`` along ``v``."""
        node = Point(node)
        a, b = 0.0, 1.0
        c = a + (1 - _RATIO) * (b - a)
        d = a + _RATIO * (b - a)
        qc = objfun.value(node + c * v)
        qd = objfun.value(node + d * v)
        it = 0
        while abs(qc - qd) >= 0.0001 or qc > 1000000:
            it += 1
            if it > 100 and qc > 1000:
                return 0.0
            if qc > qd:
                a, c = c, d
                d = a + _RATIO * (b - a)
                qc = qd
                qd = objfun.value(node + d * v)
            else:
                b, d = d, c
                c = a + (1 - _RATIO) * (b - a)
                qd = qc
                qc = objfun.value(node + c * v)
        return c