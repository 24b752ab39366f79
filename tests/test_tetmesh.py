import pytest

from ofmesh.tetmesh import TetrahedronMesh, Topology
from ofmesh.vectors import Point


def unit_tet():
    mesh = TetrahedronMesh()
    for p in [(0, 0, 0), (1, 0, 0), (0, 1, 0), (0, 0, 1)]:
        mesh.insert_node(p)
    mesh.insert_cell((0, 1, 2, 3))
    mesh.init_top()
    return mesh


def regular_tet(scale=1.0, shift=(0.0, 0.0, 0.0)):
    mesh = TetrahedronMesh()
    for p in [(1, 1, 1), (1, -1, -1), (-1, 1, -1), (-1, -1, 1)]:
        mesh.insert_node([scale * c + s for c, s in zip(p, shift)])
    mesh.insert_cell((0, 1, 2, 3))
    mesh.init_top()
    return mesh


def two_tets():
    mesh = TetrahedronMesh()
    for p in [(0, 0, 0), (1, 0, 0), (0, 1, 0), (0, 0, 1), (1, 1, 1)]:
        mesh.insert_node(p)
    mesh.insert_cell((0, 1, 2, 3))
    mesh.insert_cell((1, 2, 3, 4))
    mesh.init_top()
    return mesh


def euler(mesh):
    return (
        mesh.number_of_nodes()
        - mesh.number_of_edges()
        + mesh.number_of_faces()
        - mesh.number_of_cells()
    )


def test_single_tet_entities_follow_local_tables():
    mesh = unit_tet()
    assert mesh.edges == list(TetrahedronMesh.LOCAL_EDGE)
    assert mesh.faces == list(TetrahedronMesh.LOCAL_FACE)
    assert mesh.face2cell == [[0, 0, j, j] for j in range(4)]
    assert mesh.cell2edge == [[0, 1, 2, 3, 4, 5]]


def test_euler_characteristic_of_ball():
    assert euler(unit_tet()) == 1
    assert euler(two_tets()) == 1


def test_init_top_is_idempotent():
    mesh = two_tets()
    edges, faces = list(mesh.edges), list(mesh.faces)
    mesh.init_top()
    assert mesh.edges == edges
    assert mesh.faces == faces


def test_shared_face_links_cells():
    mesh = two_tets()
    interior = [f for f in mesh.face2cell if f[0] != f[1]]
    assert len(interior) == 1
    assert sorted(interior[0][:2]) == [0, 1]
    c2c = mesh.cell_to_cell()
    assert 1 in c2c.neighbors_of(0)
    assert 0 in c2c.neighbors_of(1)
    assert all(len(c2c.neighbors_of(i)) == 4 for i in range(2))


def test_boundary_flags():
    mesh = two_tets()
    flags = mesh.boundary_faces()
    assert flags.count(False) == 1
    assert all(mesh.boundary_nodes())


def test_vtk_cell_types():
    mesh = TetrahedronMesh()
    assert [mesh.vtk_cell_type(td) for td in (3, 2, 1, 0)] == [10, 5, 3, 0]


def test_insert_cell_rejects_wrong_size():
    with pytest.raises(ValueError):
        TetrahedronMesh().insert_cell((0, 1, 2))


def test_regular_tet_quality_is_one_and_scale_invariant():
    q = regular_tet().cell_quality(0)
    assert q == pytest.approx(1.0)
    assert regular_tet(scale=3.5, shift=(1, 2, 3)).cell_quality(0) == pytest.approx(q)


def test_distorted_tet_has_worse_quality():
    mesh = unit_tet()
    assert mesh.cell_qualities()[0] < regular_tet().cell_quality(0)


def test_surface_area_is_sum_of_faces():
    mesh = regular_tet(scale=2.0)
    total = sum(mesh.face_measure(f) for f in range(mesh.number_of_faces()))
    assert mesh.cell_surface_area(0) == pytest.approx(total)


def test_direction_translation_invariant():
    a = regular_tet(scale=1.5).direction(0, 1)
    b = regular_tet(scale=1.5, shift=(4, -2, 7)).direction(0, 1)
    assert list(a) == pytest.approx(list(b))


def test_dihedral_angles():
    hi, lo = regular_tet().cell_dihedral_angle(0)
    assert hi == pytest.approx(lo)
    hi, lo = unit_tet().dihedral_angle_range()
    assert hi == pytest.approx(90.0)
    assert lo < hi


def test_edge_and_face_barycenters():
    mesh = unit_tet()
    for i, (a, b) in enumerate(mesh.edges):
        mid = mesh.edge_barycenter(i)
        assert list(mid - mesh.nodes[a]) == pytest.approx(list(mesh.nodes[b] - mid))
    for i, face in enumerate(mesh.faces):
        c = mesh.face_barycenter(i)
        total = sum((mesh.nodes[v] - c for v in face[1:]), mesh.nodes[face[0]] - c)
        assert list(total) == pytest.approx([0.0, 0.0, 0.0])


def test_cell_barycenter_moves_with_translation():
    a = regular_tet().cell_barycenter(0)
    b = regular_tet(shift=(1, 2, 3)).cell_barycenter(0)
    assert list(b - a) == pytest.approx([1.0, 2.0, 3.0])


def test_uniform_refine_preserves_volume_and_topology():
    mesh = unit_tet()
    volume = mesh.cell_measure(0)
    nn, ne = mesh.number_of_nodes(), mesh.number_of_edges()
    mesh.uniform_refine()
    assert mesh.number_of_cells() == 8
    assert mesh.number_of_nodes() == nn + ne
    assert sum(abs(mesh.cell_measure(i)) for i in range(8)) == pytest.approx(volume)
    assert mesh.boundary_faces().count(True) == 16
    assert euler(mesh) == 1
    mesh.uniform_refine(1)
    assert mesh.number_of_cells() == 8 * 8
    assert euler(mesh) == 1
    total = sum(abs(mesh.cell_measure(i)) for i in range(mesh.number_of_cells()))
    assert total == pytest.approx(volume)


def test_refined_midpoints_lie_on_parent_edges():
    mesh = unit_tet()
    parents = list(mesh.edges)
    mesh.uniform_refine()
    for k, (a, b) in enumerate(parents):
        mid = mesh.nodes[4 + k]
        assert list(mid - mesh.nodes[a]) == pytest.approx(list(mesh.nodes[b] - mid))


def test_cell_to_node():
    mesh = two_tets()
    top = mesh.cell_to_node()
    for i, cell in enumerate(mesh.cells):
        assert top.neighbors_of(i) == list(cell)


def test_node_to_cell_local_indices():
    mesh = two_tets()
    top = mesh.node_to_cell()
    for v in range(mesh.number_of_nodes()):
        lo, hi = top.locations[v], top.locations[v + 1]
        for c, j in zip(top.neighbors[lo:hi], top.local_indices[lo:hi]):
            assert mesh.cells[c][j] == v
    assert len(top.neighbors) == 4 * mesh.number_of_cells()


def test_node_to_node_is_symmetric():
    mesh = two_tets()
    top = mesh.node_to_node()
    assert len(top.neighbors) == 2 * mesh.number_of_edges()
    for v in range(mesh.number_of_nodes()):
        for w in top.neighbors_of(v):
            assert v in top.neighbors_of(w)


def test_topology_neighbors_of():
    top = Topology(locations=[0, 2, 3], neighbors=[5, 6, 7])
    assert top.neighbors_of(0) == [5, 6]
    assert top.neighbors_of(1) == [7]


def test_insert_node_copies_point():
    mesh = TetrahedronMesh()
    p = Point(1.0, 2.0, 3.0)
    mesh.insert_node(p)
    p[0] = 9.0
    assert mesh.nodes[0] == Point(1.0, 2.0, 3.0)