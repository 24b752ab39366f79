import math

import pytest

from ofmesh.hexmesh import HexahedronMesh
from ofmesh.vectors import Point

CUBE_NODES = [
    (0.0, 0.0, 0.0), (1.0, 0.0, 0.0), (1.0, 1.0, 0.0), (0.0, 1.0, 0.0),
    (0.0, 0.0, 1.0), (1.0, 0.0, 1.0), (1.0, 1.0, 1.0), (0.0, 1.0, 1.0),
]


def make_cube() -> HexahedronMesh:
    mesh = HexahedronMesh()
    for node in CUBE_NODES:
        mesh.insert_node(node)
    mesh.insert_cell(range(8))
    mesh.init_top()
    return mesh


def make_two_cubes() -> HexahedronMesh:
    mesh = make_cube()
    for x, y, z in CUBE_NODES[4:]:
        mesh.insert_node((x, y, z + 1.0))
    mesh.insert_cell((4, 5, 6, 7, 8, 9, 10, 11))
    mesh.init_top()
    return mesh


class MidpointRule:
    def __init__(self, dim):
        self.dim = dim

    def number_of_quadrature_points(self):
        return 1

    def quadrature_point(self, n):
        return (0.5,) * self.dim

    def quadrature_weight(self, n):
        return 1.0


def euler_characteristic(mesh):
    return (
        mesh.number_of_nodes()
        - mesh.number_of_edges()
        + mesh.number_of_faces()
        - mesh.number_of_cells()
    )


def test_single_cube_topology():
    mesh = make_cube()
    assert mesh.number_of_faces() == len(HexahedronMesh.LOCAL_FACE)
    assert mesh.number_of_edges() == len(HexahedronMesh.LOCAL_EDGE)
    assert all(mesh.boundary_faces())
    assert all(mesh.boundary_nodes())
    assert mesh.cell2face == [list(range(6))]
    assert mesh.cell2edge == [list(range(12))]


def test_shared_face_is_interior():
    mesh = make_two_cubes()
    flags = mesh.boundary_faces()
    interior = [i for i, b in enumerate(flags) if not b]
    assert len(interior) == 1
    f2c = mesh.face2cell[interior[0]]
    assert {f2c[0], f2c[1]} == {0, 1}
    assert sorted(mesh.faces[interior[0]]) == [4, 5, 6, 7]
    assert euler_characteristic(mesh) == 1


def test_vtk_cell_types():
    mesh = HexahedronMesh()
    assert mesh.vtk_cell_type() == 12
    assert mesh.vtk_cell_type(1) == 3
    assert mesh.vtk_cell_type(2) == 68


def test_insert_cell_requires_eight_nodes():
    mesh = HexahedronMesh()
    with pytest.raises(ValueError):
        mesh.insert_cell((0, 1, 2, 3))


def test_edges_of_unit_cube():
    mesh = make_cube()
    assert all(mesh.edge_measure(i) == pytest.approx(1.0) for i in range(12))
    assert mesh.edge_barycenter(0) == Point(0.5, 0.0, 0.0)


def test_barycenters():
    mesh = make_cube()
    assert mesh.cell_barycenter(0) == Point(0.5, 0.5, 0.5)
    for i in range(mesh.number_of_faces()):
        bc = mesh.face_barycenter(i)
        assert sorted(abs(c - 0.5) for c in bc) == [0.0, 0.0, 0.5]


def test_measures_with_default_and_custom_rules():
    mesh = make_cube()
    for i in range(mesh.number_of_faces()):
        assert mesh.face_measure(i) == pytest.approx(1.0)
        assert mesh.face_measure(i, MidpointRule(2)) == pytest.approx(1.0)
    assert mesh.cell_measure(0) == pytest.approx(1.0)
    assert mesh.cell_measure(0, MidpointRule(3)) == pytest.approx(1.0)


def test_refine_preserves_volume_and_euler_characteristic():
    mesh = make_cube()
    mesh.uniform_refine(2)
    assert mesh.number_of_cells() == 8 ** 2
    total = sum(mesh.cell_measure(i) for i in range(mesh.number_of_cells()))
    assert total == pytest.approx(1.0)
    assert euler_characteristic(mesh) == 1
    assert all(mesh.cell_measure(i) > 0 for i in range(mesh.number_of_cells()))
    for node in mesh.nodes:
        assert all(0.0 <= c <= 1.0 for c in node)


def test_refine_children_lie_in_parent():
    mesh = make_two_cubes()
    mesh.uniform_refine()
    nc = 2
    for k in range(8):
        for j in range(nc):
            child = mesh.cell_barycenter(k * nc + j)
            assert (child[2] > 1.0) == (j == 1)


def test_cell_to_node():
    mesh = make_two_cubes()
    top = mesh.cell_to_node()
    assert top.neighbors_of(1) == list(mesh.cells[1])
    assert top.locations[-1] == 16


def test_cell_to_cell():
    mesh = make_two_cubes()
    top = mesh.cell_to_cell()
    assert top.neighbors_of(0).count(1) == 1
    assert top.neighbors_of(1).count(0) == 1
    assert len(top.neighbors_of(0)) == len(HexahedronMesh.LOCAL_FACE)


def test_node_to_node_is_symmetric():
    mesh = make_cube()
    mesh.uniform_refine()
    top = mesh.node_to_node()
    for i in range(mesh.number_of_nodes()):
        for j in top.neighbors_of(i):
            assert i in top.neighbors_of(j)
    assert len(top.neighbors) == 2 * mesh.number_of_edges()


def test_node_to_cell_local_indices():
    mesh = make_two_cubes()
    top = mesh.node_to_cell()
    for v in range(mesh.number_of_nodes()):
        start, end = top.locations[v], top.locations[v + 1]
        for c, j in zip(top.neighbors[start:end], top.local_indices[start:end]):
            assert mesh.cells[c][j] == v
    assert top.neighbors_of(5) == [0, 1]


def test_dihedral_angles():
    mesh = make_two_cubes()
    cmax, cmin = mesh.cell_dihedral_angle(0)
    assert cmax == pytest.approx(90.0)
    assert cmin == pytest.approx(0.0, abs=1e-6)
    hi, lo = mesh.dihedral_angle_range()
    assert hi == pytest.approx(cmax)
    assert lo == pytest.approx(cmin, abs=1e-6)
    assert not math.isnan(hi)


def test_uniform_refine_initialises_topology():
    mesh = HexahedronMesh()
    for node in CUBE_NODES:
        mesh.insert_node(node)
    mesh.insert_cell(range(8))
    mesh.uniform_refine()
    assert mesh.number_of_cells() == 8
    assert sum(mesh.boundary_faces()) == 4 * len(HexahedronMesh.LOCAL_FACE)