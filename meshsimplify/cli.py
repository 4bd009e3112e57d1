"""Command line entry point: build a mesh over an image and simplify it."""

from __future__ import annotations

import re
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence

from meshsimplify.mesh import Mesh
from meshsimplify.output import write_html

NUM_DEBUG_COLLAPSES = 10

ORIGINAL_PAGE = "mesh_original.html"
FINAL_PAGE = "mesh_final.html"

_LEADING_INT = re.compile(r"\s*[+-]?\d+")


@dataclass
class Options:
    """Settings chosen on the command line."""

    image: str = "sunflowers.ppm"
    rows: int = 10
    cols: int = 10
    target: int = 150
    which: str = "shortest"
    method: str = "linear"
    preserve_area: bool = False
    debug: bool = False


def _atoi(text: str) -> int:
    match = _LEADING_INT.match(text)
    return int(match.group()) if match else 0


def _collapse_page(i: int) -> str:
    return f"mesh_collapse_{i:02d}.html"


_FLAGS = {
    "-shortest": ("which", "shortest"),
    "-random": ("which", "random"),
    "-color": ("which", "color"),
    "-preserve_area": ("preserve_area", True),
    "-debug": ("debug", True),
    "-linear": ("method", "linear"),
    "-priority_queue": ("method", "priority_queue"),
}


def parse_args(argv: Sequence[str]) -> Options:
    """Parse the arguments (without the program name) into Options."""
    options = Options()
    args = iter(argv)

    def values(flag: str, count: int) -> list[str]:
        taken = [arg for _, arg in zip(range(count), args)]
        if len(taken) < count:
            raise ValueError(f"{flag} needs {count} value(s)")
        return taken

    for arg in args:
        if arg == "-image":
            (options.image,) = values(arg, 1)
        elif arg == "-dimensions":
            cols, rows = values(arg, 2)
            options.cols, options.rows = _atoi(cols), _atoi(rows)
        elif arg == "-target":
            (target,) = values(arg, 1)
            options.target = _atoi(target)
        elif arg in _FLAGS:
            field, value = _FLAGS[arg]
            setattr(options, field, value)
        else:
            raise ValueError(f"unknown argument {arg}")
    return options


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the simplification and write the HTML pages to the current directory."""
    if argv is None:
        argv = sys.argv[1:]
    try:
        options = parse_args(argv)
    except ValueError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1

    stale = [ORIGINAL_PAGE, FINAL_PAGE]
    stale += [_collapse_page(i) for i in range(1, NUM_DEBUG_COLLAPSES + 1)]
    for name in stale:
        Path(name).unlink(missing_ok=True)

    try:
        mesh = Mesh.from_file(
            options.image,
            options.rows,
            options.cols,
            options.which,
            options.method,
            options.preserve_area,
            options.debug,
        )
    except (OSError, ValueError) as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1

    prev_page = ""
    current_page = ORIGINAL_PAGE
    next_page = _collapse_page(1) if options.debug else FINAL_PAGE
    write_html(mesh, current_page, prev_page, next_page)
    print(f"ORIGINAL:          {mesh}")

    if options.debug:
        # A few single collapses, one page each, to show the process.
        for i in range(1, NUM_DEBUG_COLLAPSES + 1):
            prev_page, current_page = current_page, next_page
            next_page = _collapse_page(i + 1) if i < NUM_DEBUG_COLLAPSES else FINAL_PAGE
            mesh.collapse()
            write_html(mesh, current_page, prev_page, next_page)
            print(f"AFTER COLLAPSE {i:2d}: {mesh}")
            mesh.check()

    mesh.simplify(options.target)
    print(f"AFTER SIMPLIFY:    {mesh}")
    prev_page, current_page, next_page = current_page, next_page, ""
    write_html(mesh, current_page, prev_page, next_page)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())