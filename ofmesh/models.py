"""Analytic geometry models that mesh nodes are projected back onto."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable

from .vectors import Point, Vector, cross, dot

__all__ = ["Sphere", "C6", "C6H6", "CubeWithSpheresModel", "RectangleWithTwoHoles", "SphereModel"]


@dataclass
class Sphere:
    """A sphere given by its centre and radius."""

    center: Point
    radius: float


def _onto_sphere(center: Point, radius: float, p) -> Point:
    v = Point(p) - center
    return center + (radius / math.sqrt(v.squared_length())) * v


def _tangential(v, n: Vector) -> Vector:
    """Remove from ``v`` its component along ``n``."""
    v = Vector(v)
    return v - (dot(v, n) / n.squared_length()) * n


def _along(v, t: Vector) -> Vector:
    """Keep only the component of ``v`` along ``t``."""
    return (dot(v, t) / t.squared_length()) * t


def _onto_line(p0: Point, p1: Point, p) -> Point:
    v = p1 - p0
    k = dot(Point(p) - p0, v) / dot(v, v)
    return p0 + k * v


class C6:
    """Six unit spheres arranged in a ring, with six bounding planes."""

    def __init__(self) -> None:
        a = math.sqrt(3)
        b = math.sqrt(3) / 2.0
        self.radius = 1.0
        self.centers = [
            Point(-a, 0.0, 0.0),
            Point(-b, -1.5, 0.0),
            Point(b, -1.5, 0.0),
            Point(a, 0.0, 0.0),
            Point(b, 1.5, 0.0),
            Point(-b, 1.5, 0.0),
        ]
        self.normals = [
            Vector(-0.5, -b, 0.0),
            Vector(0.5, -b, 0.0),
            Vector(1.0, 0.0, 0.0),
            Vector(0.5, b, 0.0),
            Vector(-0.5, b, 0.0),
            Vector(-1.0, 0.0, 0.0),
        ]

    def _check(self, fid: int) -> None:
        if not 1 <= fid <= 12:
            raise ValueError(f"face tag {fid} is not in 1..12")

    def project_to_face(self, fid: int, p) -> Point:
        self._check(fid)
        if fid < 7:
            return _onto_sphere(self.centers[fid - 1], self.radius, p)
        return Point(_tangential(Point(p) - Point(0.0, 0.0, 0.0), self.normals[fid - 7]))

    def project_to_edge(self, eid: int, p) -> Point:
        """This model has no feature edges; the point is returned unchanged."""
        return Point(p)

    def project_vector_to_face(self, fid: int, p, v) -> Vector:
        self._check(fid)
        if fid < 7:
            return _tangential(v, Point(p) - self.centers[fid - 1])
        return _tangential(v, self.normals[fid - 7])

    def project_vector_to_edge(self, eid: int, p, v) -> Vector:
        """This model has no feature edges; the vector is returned unchanged."""
        return Vector(v)


class C6H6:
    """Six overlapping spheres arranged on a hexagon of radius 4."""

    def __init__(self) -> None:
        g3 = math.sqrt(3) / 2
        self.radius = 1.1 * math.sqrt(2)
        self.centers = [
            4.0 * Point(1.0, 0.0, 0.0),
            4.0 * Point(0.5, g3, 0.0),
            4.0 * Point(-0.5, g3, 0.0),
            4.0 * Point(-1.0, 0.0, 0.0),
            4.0 * Point(-0.5, -g3, 0.0),
            4.0 * Point(0.5, -g3, 0.0),
        ]

    def _center(self, fid: int) -> Point:
        if not 0 <= fid < len(self.centers):
            raise ValueError(f"face tag {fid} is not in 0..5")
        return self.centers[fid]

    def project_to_face(self, fid: int, p) -> Point:
        return _onto_sphere(self._center(fid), self.radius, p)

    def project_to_edge(self, eid: int, p) -> Point:
        """This model has no feature edges; the point is returned unchanged."""
        return Point(p)

    def project_vector_to_face(self, fid: int, p, v) -> Vector:
        return _tangential(v, Point(p) - self._center(fid))

    def project_vector_to_edge(self, eid: int, p, v) -> Vector:
        """This model has no feature edges; the vector is returned unchanged."""
        return Vector(v)


class CubeWithSpheresModel:
    """The unit cube with one (n=1) or two (n=2) spherical holes."""

    def __init__(self, n: int = 1) -> None:
        self.points: dict[int, Point] = {}
        self.lines: dict[int, list[int]] = {}
        self.faces: dict[int, list[int]] = {}
        self.spheres: dict[int, Sphere] = {}
        self.volumes: dict[int, list[int]] = {}

        corners = [
            (0.0, 0.0, 0.0), (1.0, 0.0, 0.0), (1.0, 1.0, 0.0), (0.0, 1.0, 0.0),
            (0.0, 0.0, 1.0), (1.0, 0.0, 1.0), (1.0, 1.0, 1.0), (0.0, 1.0, 1.0),
        ]
        for tag, corner in enumerate(corners, start=1):
            self.add_point(corner, tag)

        edges = [
            (1, 2), (2, 3), (3, 4), (4, 1), (5, 6), (6, 7),
            (7, 8), (8, 5), (1, 5), (2, 6), (3, 7), (4, 8),
        ]
        for tag, edge in enumerate(edges, start=1):
            self.add_line(edge, tag)

        faces = [
            (-1, -4, -3, -2), (5, 6, 7, 8), (1, 10, -5, -9),
            (3, 12, -7, -11), (2, 11, -6, -10), (4, 9, -8, -12),
        ]
        for tag, face in enumerate(faces, start=1):
            self.add_face(face, tag)

        if n == 1:
            self.add_sphere(0.5, 0.5, 0.5, 0.4, 7)
            self.add_volume([1, 2, 3, 4, 5, 6] + [-t for t in range(7, 15)], 1)
        elif n == 2:
            self.add_sphere(0.32, 0.32, 0.32, 0.27, 7)
            self.add_sphere(0.66, 0.66, 0.66, 0.27, 15)
            self.add_volume([1, 2, 3, 4, 5, 6] + [-t for t in range(7, 23)], 1)

    def add_point(self, point: Iterable[float], tag: int) -> None:
        self.points[tag] = Point(point)

    def add_line(self, line: Iterable[int], tag: int) -> None:
        self.lines[tag] = list(line)

    def add_face(self, face: Iterable[int], tag: int) -> None:
        self.faces[tag] = list(face)

    def add_volume(self, volume: Iterable[int], tag: int) -> None:
        self.volumes[tag] = list(volume)

    def add_sphere(self, x: float, y: float, z: float, r: float, tag: int) -> None:
        self.spheres[tag] = Sphere(Point(x, y, z), float(r))

    def _start_point(self, oriented_line: int) -> Point:
        if oriented_line > 0:
            return self.points[self.lines[oriented_line][0]]
        return self.points[self.lines[-oriented_line][1]]

    def _face_frame(self, fid: int) -> tuple[Point, Vector, Vector]:
        p0, p1, p2 = (self._start_point(e) for e in self.faces[fid][:3])
        return p0, p1 - p0, p2 - p1

    def _sphere_of_face(self, fid: int) -> Sphere:
        return self.spheres[7 + 8 * ((fid - 7) // 8)]

    def _line_ends(self, eid: int) -> tuple[Point, Point]:
        start, end = self.lines[eid]
        return self.points[start], self.points[end]

    def project_to_face(self, fid: int, p) -> Point:
        if fid < 7:
            p0, v0, v1 = self._face_frame(fid)
            v2 = Point(p) - p0
            a = dot(v0, v0)
            b = dot(v0, v1)
            c = dot(v1, v1)
            f = dot(v2, v0)
            g = dot(v2, v1)
            det = a * c - b * b
            k = (f * c - b * g) / det
            m = (a * g - b * f) / det
            return p0 + (k * v0 + m * v1)
        sphere = self._sphere_of_face(fid)
        return _onto_sphere(sphere.center, sphere.radius, p)

    def project_to_edge(self, eid: int, p) -> Point:
        if eid < 13:
            return _onto_line(*self._line_ends(eid), p)
        return self.project_to_face(7 + 8 * ((eid - 13) // 12), p)

    def project_vector_to_face(self, fid: int, p, v) -> Vector:
        if fid < 7:
            _, v0, v1 = self._face_frame(fid)
            return _tangential(v, cross(v0, v1))
        return _tangential(v, Point(p) - self._sphere_of_face(fid).center)

    def project_vector_to_edge(self, eid: int, p, v) -> Vector:
        if eid < 13:
            p0, p1 = self._line_ends(eid)
            return _along(v, p1 - p0)
        return self.project_vector_to_face(7 + 8 * ((eid - 13) // 12), p, v)


class RectangleWithTwoHoles:
    """The square [0, 4]^2 with two circular holes (edges 1, 2) and four sides (3..6)."""

    def __init__(self) -> None:
        g2 = math.sqrt(2) / 2.0
        self.radii = [0.5, 1.0]
        self.centers = [Point(0.8, 0.8), Point(1.6 + g2, 1.6 + g2)]
        self.points = [Point(0.0, 0.0), Point(4.0, 0.0), Point(4.0, 4.0), Point(0.0, 4.0)]
        self.lines = [(0, 1), (2, 3), (1, 2), (3, 0)]

    def _check(self, eid: int) -> None:
        if not 1 <= eid <= 2 + len(self.lines):
            raise ValueError(f"edge tag {eid} is not in 1..6")

    def _line_ends(self, eid: int) -> tuple[Point, Point]:
        start, end = self.lines[eid - 3]
        return self.points[start], self.points[end]

    def project_to_edge(self, eid: int, p) -> Point:
        self._check(eid)
        if eid < 3:
            return _onto_sphere(self.centers[eid - 1], self.radii[eid - 1], p)
        return _onto_line(*self._line_ends(eid), p)

    def project_to_face(self, fid: int, p) -> Point:
        """The domain is planar; the point is returned unchanged."""
        return Point(p)

    def project_vector_to_face(self, fid: int, p, v) -> Vector:
        """The domain is planar; the vector is returned unchanged."""
        return Vector(v)

    def project_vector_to_edge(self, eid: int, p, v) -> Vector:
        self._check(eid)
        if eid < 3:
            return _tangential(v, Point(p) - self.centers[eid - 1])
        p0, p1 = self._line_ends(eid)
        return _along(v, p1 - p0)


class SphereModel:
    """A single sphere surface."""

    def __init__(self, x: float = 0.0, y: float = 0.0, z: float = 0.0, r: float = 1.0) -> None:
        self.center = Point(x, y, z)
        self.radius = float(r)

    def project_to_face(self, fid: int, p) -> Point:
        return _onto_sphere(self.center, self.radius, p)

    def point_normal(self, fid: int, p) -> Vector:
        """Unit outward normal of the sphere at ``p``."""
        n = Point(p) - self.center
        return n / math.sqrt(n.squared_length())