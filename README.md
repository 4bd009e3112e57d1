# meshsimplify

Approximates a binary PPM (P6) image with a jittered grid of coloured
triangles, then simplifies the mesh by repeatedly collapsing edges until the
triangle count reaches a target. Each stage is written as an HTML page with an
inline SVG drawing of the mesh.

## Installation

```
pip install .
```

No third-party dependencies; Python 3.10 or later. Install with the `test`
extra (`pip install .[test]`) to run the tests with pytest.

## Command line

```
meshsimplify -image sunflowers.ppm -dimensions 20 15 -target 150
```

The same entry point can be run as `python -m meshsimplify.cli`.

| Option | Meaning |
| --- | --- |
| `-image FILE` | input `.ppm` image (default `sunflowers.ppm`, which is not supplied with the package) |
| `-dimensions COLS ROWS` | grid resolution (default 10 x 10) |
| `-target N` | stop once the mesh has at most N triangles (default 150) |
| `-shortest` / `-random` / `-color` | which edge to collapse next (default `-shortest`) |
| `-linear` / `-priority_queue` | how the next edge is found (default `-linear`) |
| `-preserve_area` | only allow collapses that keep the triangles upright and the total area within 0.1% |
| `-debug` | write one page per collapse for the first ten collapses and check the mesh's bookkeeping |

Numeric values are read like C's `atoi`: leading digits are used, anything
else counts as 0. An unknown option, a missing value, an unreadable image or
a file name not ending in `.ppm` prints an `ERROR:` line to standard error and
exits with status 1.

Files written to the current directory (old copies are deleted first):

- `mesh_original.html`: the mesh as first built
- `mesh_collapse_01.html` … `mesh_collapse_10.html`: with `-debug` only
- `mesh_final.html`: the simplified mesh

Each page links to the previous and next page, shows the element counts and
area, and draws the triangles filled with the average colour of their
vertices. Edges that may not be collapsed are drawn in red and the next edge
to collapse in blue; checkboxes on the page toggle these lines and the
wireframe.

Element counts and total area are printed after each stage, for example for
a square image on the default grid:

```
ORIGINAL:             121 vertices,    320 edges,    200 triangles, area =  640000.00
```

## Choosing the next edge

- `-shortest`: the shortest legal edge.
- `-color`: currently ordered by edge length as well, the same as `-shortest`.
- `-random`: a random legal edge, from a generator seeded with 42.

With `-linear` every edge is scanned. With `-priority_queue` the edges are
kept in a min-heap keyed by `Edge.priority_value()`; if the edge at the top is
not legal, no collapse is made. `-random` ignores the method.

A collapse keeps the vertex with the smaller id, moves it to the midpoint of
the edge with the averaged colour, removes the one or two triangles on the
edge and reconnects the other triangles to the kept vertex.

## Library use

```python
from meshsimplify.mesh import Mesh
from meshsimplify.output import write_html

mesh = Mesh.from_file("sunflowers.ppm", 10, 10, "shortest", "linear", False, False)
print(mesh)
mesh.simplify(150)
write_html(mesh, "mesh_final.html", "", "")
```

Main pieces:

- `meshsimplify.geometry`: `Point`, `Color`, `Vertex`, `average_points`, `distance_between`, `average_colors`
- `meshsimplify.image`: `Image` with `get_pixel`, `set_pixel`, `set_all_pixels`, `copy`, and `load` / `save` for binary PPM files
- `meshsimplify.priority_queue`: `PriorityQueue`, a keyed min-heap with `push`, `pop`, `top`, `remove`, `update_position`, `format_heap` and `check_heap`
- `meshsimplify.elements`: `Edge`, `Triangle`, `triangle_area`, `angle_between`, `right_side_up`
- `meshsimplify.mesh`: `Mesh` (also `Mesh(image, rows, cols, ...)` from an `Image`) with `collapse`, `simplify`, `find_edge`, `is_legal_collapse`, `area`, `check`; `MeshConsistencyError` is raised by `check` in debug mode
- `meshsimplify.output`: `render_html`, `write_html`, `output_color`, `coordinate_helper`
- `meshsimplify.cli`: `parse_args`, `main`

Mesh construction seeds its own random generator, so the same image and
settings always give the same mesh.

## What it does not do

The simplified mesh is only written as HTML/SVG pages; it is not rendered
back to a PPM image or saved in any mesh file format.