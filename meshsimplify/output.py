"""HTML/SVG visualisation of a mesh."""

from __future__ import annotations

import math
import os
from typing import Union

from meshsimplify.elements import Edge
from meshsimplify.mesh import BORDER, Mesh

PathLike = Union[str, "os.PathLike[str]"]

_FORM = (
    '<form name="orderForm">\n'
    '   <input type="checkbox" name="illegal"   checked  '
    ' onClick="render()">draw illegal (red) & next legal collapse (blue) edges<br>\n'
    '   <input type="checkbox" name="wireframe"          '
    ' onClick="render()">draw all edges<br>\n'
    '   <input type="checkbox" name="black"              '
    ' onClick="render()">toggle white vs. black<br>\n'
    "</form>\n"
)

_SCRIPT = """\
<script language="JavaScript">
  function render() {
    var mysvg = document.getElementById("mesh");
    if (document.orderForm.wireframe.checked == false) {
      var polys = mysvg.children;
      for (var i = 0; i < polys.length; i++) {
        if (polys[i].tagName.toUpperCase() == "POLYGON") {
          polys[i].style["strokeWidth"] = "0"
        }
      }
    } else if (document.orderForm.black.checked == false) {
      var polys = mysvg.children;
      for (var i = 0; i < polys.length; i++) {
        if (polys[i].tagName.toUpperCase() == "POLYGON") {
          polys[i].style.stroke = "#FFFFFF"
          polys[i].style["strokeWidth"] = "1"
        }
      }
      mysvg.style.background = "white"
    } else  {
      var polys = mysvg.children;
      for (var i = 0; i < polys.length; i++) {
        if (polys[i].tagName.toUpperCase() == "POLYGON") {
          polys[i].style.stroke = "#000000"
          polys[i].style["strokeWidth"] = "2"
        }
      }
      mysvg.style.background = "white"
    }
    if (document.orderForm.illegal.checked == false) {
      var polys = mysvg.children;
      for (var i = 0; i < polys.length; i++) {
        if (polys[i].tagName.toUpperCase() == "LINE") {
          polys[i].style["strokeWidth"] = "0"
        }
      }
    } else  {
      var polys = mysvg.children;
      for (var i = 0; i < polys.length; i++) {
        if (polys[i].tagName.toUpperCase() == "LINE") {
          polys[i].style["strokeWidth"] = "5"
        }
      }
      mysvg.style.background = "white"
    }
  }
</script>
"""


def output_color(r: float, g: float, b: float) -> str:
    """Return the colour as six lower-case hex digits, each channel floored."""
    return "".join(f"{math.floor(c):02x}" for c in (r, g, b))


def coordinate_helper(name: str, value: float) -> str:
    """Return an SVG attribute such as x1="12.345"."""
    return f'{name}="{value:.3f}"'


def _line(edge: Edge, colour: str) -> str:
    coords = "".join(
        f"{coordinate_helper(name, value):<14}"
        for name, value in (
            ("x1", edge.v1.x),
            ("y1", edge.v1.y),
            ("x2", edge.v2.x),
            ("y2", edge.v2.y),
        )
    )
    return (
        f"<line {coords}"
        f' stroke="{colour}" '
        ' stroke-width="0" '
        ' stroke-linecap="round" '
        "/>\n"
    )


def render_html(mesh: Mesh, prev_filename: str, next_filename: str) -> str:
    """Return an HTML page drawing the mesh, with links to neighbouring pages."""
    parts = [
        f"{mesh}\n<br>\n",
        "<table><tr><td width=300>",
        f'prev: <a href="{prev_filename}">{prev_filename}</a>\n',
        "</td><td width=300>",
        f'next: <a href="{next_filename}">{next_filename}</a>\n',
        "</td></tr></table>",
        '<body bgcolor=dddddd  onLoad="render()" >\n',
        _FORM,
        _SCRIPT,
        f'<svg  id="mesh" height="{mesh.height + 2 * BORDER:.2f}"'
        f' width="{mesh.width + 2 * BORDER:.2f}"'
        ' style="background:white" shape-rendering="crispEdges">\n',
    ]

    # Triangles are filled with the average colour of their vertices.
    for t in mesh.triangles:
        pts = t.vertices
        r = sum(v.r for v in pts) / 3.0
        g = sum(v.g for v in pts) / 3.0
        b = sum(v.b for v in pts) / 3.0
        colour = output_color(int(r), int(g), int(b))
        coords = "  ".join(f"{v.x:8.2f},{v.y:8.2f}" for v in pts)
        parts.append(
            f'<polygon points="{coords}"'
            f' style="fill:#{colour};stroke:#{colour};stroke-width:1'
            ';stroke-linecap:round" ;stroke-linejoin:round" />\n'
        )

    parts.extend(_line(e, "red") for e in mesh.edges if not e.legal)

    next_edge = mesh.find_edge()
    if next_edge is not None:
        parts.append(_line(next_edge, "blue"))

    parts.append("</svg>\n")
    parts.append("</body>\n")
    return "".join(parts)


def write_html(mesh: Mesh, path: PathLike, prev_filename: str, next_filename: str) -> None:
    """Write the page produced by render_html to path."""
    text = render_html(mesh, prev_filename, next_filename)
    with open(os.fspath(path), "w", encoding="utf-8") as f:
        f.write(text)