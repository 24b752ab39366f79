# ofmesh

Unstructured mesh data structures, analytic geometry models, small dense
linear algebra and tools for improving mesh quality node by node, in pure
Python with no dependencies outside the standard library.

## Modules

- `ofmesh.vectors`: `Vector` and `Point` (2 or 3 coordinates, 3 by default),
  and `PointView`, a point that reads and writes a slice of a flat coordinate
  list in place. Functions `cross` (a `Vector` in 3D, a scalar in 2D), `dot`,
  `midpoint`, `sign` and `length`.
- `ofmesh.matrix`: `Matrix`, a dense row-major matrix. Build it from rows or
  with `Matrix.zeros(nr, nc, val)`; it supports `m[i, j]`, `m[i]`, matrix and
  scalar products (`a * b`, `a @ b`, `2.0 * a`), `+=`, `*=`, `-`,
  `transpose_multiply`, `fill`, `fill_diag`, `row_norm_l2`, `col_norm_l2`,
  `norm` and `copy`.
- `ofmesh.linalg`: `householder(x)` returns `(v, beta)`, `givens(x0, x1)`
  returns `(c, s)`, `lu(a)` returns `(L, U)`, `lu_kij(a)` and `lu_ikj(a)`
  return the compact LU factors in one matrix, `qr_gs(a)` returns `(Q, R)` by
  Gram–Schmidt, and `mat_inv(a)` returns the inverse by Gauss–Jordan
  elimination with partial pivoting. A zero pivot, a singular matrix or a
  dependent column raises `ValueError`. The inputs are not modified.
- `ofmesh.models`: geometry models with `project_to_face`, `project_to_edge`,
  `project_vector_to_face` and `project_vector_to_edge`; each returns a new
  `Point` or `Vector`. The models are `C6`, `C6H6`, `CubeWithSpheresModel`
  (unit cube with one or two spherical holes), `RectangleWithTwoHoles` and
  `SphereModel` (which has `project_to_face` and `point_normal`). `Sphere` is a
  small dataclass of centre and radius.
- `ofmesh.bisection`: `bisect(fun, p1, p2, eps)` finds a point on a segment
  where a level-set function changes sign; it raises `ValueError` when the
  bracket holds no sign change.
- `ofmesh.optimization`: `line_search(f)`, a golden-section (0.618) search for
  a minimiser of `f` on `[0, 1]`.
- `ofmesh.tetmesh`: `TetrahedronMesh` and `Topology`. The mesh builds edges,
  faces and cell/face/edge adjacency (`init_top`), computes edge lengths, face
  areas, signed cell volumes, barycentres, radius-ratio cell quality
  (`cell_quality`, `cell_qualities`) and dihedral angles, refines uniformly
  (each tetrahedron into eight), flags boundary faces and nodes, and returns
  `cell_to_node`, `cell_to_cell`, `node_to_node` and `node_to_cell` as
  compressed `Topology` objects.
- `ofmesh.hexmesh`: `HexahedronMesh` with the same kind of topology,
  barycentres, refinement, boundary and adjacency methods. `face_measure` and
  `cell_measure` integrate the Jacobian on the reference square or cube; pass
  an object with `number_of_quadrature_points()`, `quadrature_point(n)` and
  `quadrature_weight(n)`, or leave it out to use a 2-point Gauss rule per
  direction.
- `ofmesh.hex_quality`: `HexJacobiQuality`, a corner-Jacobian quality of
  hexahedra (smaller is better; `INVALID_QUALITY` for an inverted corner) and
  its gradient with respect to one node of a cell.
- `ofmesh.node_patch`: `NodePatch` (a node and the cells around it),
  `MixNodePatchObjectFunction` (the worst cell quality of the patch as a
  function of the centre node) and `NodePatchOptAlg`, which moves the centre
  node along the descent direction with a golden-section step and projects it
  back onto the model using the mesh's `node_int_data["gdof"]` and
  `node_int_data["gtag"]`.
- `ofmesh.data_array`: `DataArray`, a named list of values with a default for
  new slots, plus `resize`, `push_back`, `reset`, `transfer`, `transfer_item`,
  `swap`, `clone` and `empty_clone`.
- `ofmesh.mesh_geometry`: `MeshGeometry`, 3D node coordinates kept in one flat
  list and handed out as `PointView` objects.

## Installation

```
pip install .
```

## Example

```python
from ofmesh.tetmesh import TetrahedronMesh
from ofmesh.vectors import Point

mesh = TetrahedronMesh()
for xyz in [(0, 0, 0), (1, 0, 0), (0, 1, 0), (0, 0, 1)]:
    mesh.insert_node(Point(*map(float, xyz)))
mesh.insert_cell((0, 1, 2, 3))
mesh.init_top()

print(mesh.number_of_edges(), mesh.number_of_faces())  # 6 4
print(mesh.cell_measure(0))                             # 0.16666666666666666
mesh.uniform_refine(1)
print(mesh.number_of_cells())                           # 8
```

## What it does not do

- It does not read or write mesh files; meshes are built in code with
  `insert_node` and `insert_cell`.
- It has no triangle, quadrilateral or polygon meshes, and no mesh generators.
- Optimization works on one node patch at a time in a single process; there is
  no distributed or whole-mesh optimization driver.
- There is no command-line program.

## Running the tests

```
pip install .[test]
pytest
```