"""Layer files: generating point lists and gridding per-point results."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Iterable

import numpy as np

from .cut import Direction
from .params import param, parse_args

__all__ = [
    "GENERATOR_HELP",
    "INTERPOLATION_HELP",
    "layer_points",
    "write_layer_file",
    "grid_layer_result",
    "generator_main",
    "interpolation_main",
]

log = logging.getLogger(__name__)

GENERATOR_HELP = """\
Layer generator: write the points of a plane cut through a volume.
Usage: se_layer_generator par=parfile [name=value ...]

Parameters:
  nx, ny, nt             int,    default 100    samples along x, y and t
  direction              int,    default 2      axis cut across (0 x, 1 y, 2 t)
  cut_point              int,    default 50     index of the plane along that axis
  layer_fname            string, default "layer.txt"   output layer file
"""

INTERPOLATION_HELP = """\
Layer gridding: place per-point layer results on a 2-D profile.
Usage: se_interplatation_2d par=parfile [name=value ...]

Parameters:
  n1, n2                 int,    default 100    samples along the two profile axes
  axis1, axis2           int,    default 1, 2   volume axes (1 x, 2 y, 3 t) of the profile
  layer_fname            string, default "layer.txt"   input layer result file
  layer_interplatation_fname
                         string, default "layer_interplatation.bin"   output profile
"""

_AXIS_PAIRS = {
    (1, 2): (0, 1),
    (2, 1): (1, 0),
    (1, 3): (0, 2),
    (3, 1): (2, 0),
    (2, 3): (1, 2),
    (3, 2): (2, 1),
}


def _configure_logging() -> None:
    if not logging.getLogger().handlers:
        logging.basicConfig(level=logging.INFO, format="%(message)s")


def layer_points(nx: int, ny: int, nt: int, direction, cut_point: int) -> list[tuple[int, int, int]]:
    """Return the ``(ix, iy, it)`` points of the plane at ``cut_point`` across ``direction``.

    Points are listed with x slowest and t fastest.
    """
    try:
        axis = Direction(int(direction))
    except ValueError as exc:
        raise ValueError("direction must be 0, 1 or 2") from exc
    name, extent = {Direction.X: ("nx", nx), Direction.Y: ("ny", ny),
                    Direction.Z: ("nt", nt)}[axis]
    if not 0 <= cut_point < extent:
        raise ValueError(
            f"cut_point must be less than {name} {extent} and not negative, got {cut_point}"
        )
    if axis is Direction.X:
        return [(cut_point, j, k) for j in range(ny) for k in range(nt)]
    if axis is Direction.Y:
        return [(i, cut_point, k) for i in range(nx) for k in range(nt)]
    return [(i, j, cut_point) for i in range(nx) for j in range(ny)]


def write_layer_file(path, points: Iterable[tuple[int, int, int]]) -> None:
    """Write a point count, then one ``ix,iy,it`` line per point."""
    items = list(points)
    with Path(path).open("w", encoding="utf-8") as handle:
        handle.write(f"{len(items)}\n")
        for ix, iy, it in items:
            handle.write(f"{ix},{iy},{it}\n")


def grid_layer_result(path, n1: int, n2: int, axis1: int = 1, axis2: int = 2) -> np.ndarray:
    """Place ``n1*n2`` lines of ``ix,iy,it,value`` on an ``(n1, n2)`` grid.

    ``axis1`` and ``axis2`` (1 for x, 2 for y, 3 for t) choose which point
    coordinates index the rows and the columns.  Cells not listed stay 0.
    """
    try:
        row_axis, col_axis = _AXIS_PAIRS[(int(axis1), int(axis2))]
    except KeyError as exc:
        raise ValueError("axis1 and axis2 must be two different values of 1, 2, 3") from exc
    if n1 < 1 or n2 < 1:
        raise ValueError(f"grid sizes must be positive, got {n1}x{n2}")

    total = n1 * n2
    grid = np.zeros((n1, n2), dtype=np.float32)
    read = 0
    with Path(path).open("r", encoding="utf-8") as handle:
        for line in handle:
            if read == total:
                break
            text = line.strip()
            if not text:
                continue
            fields = [field.strip() for field in text.split(",")]
            if len(fields) < 4:
                raise ValueError(f"malformed layer result line {text!r}")
            coords = (int(fields[0]), int(fields[1]), int(fields[2]))
            row, col = coords[row_axis], coords[col_axis]
            if not (0 <= row < n1 and 0 <= col < n2):
                raise ValueError(f"point {coords} falls outside the {n1}x{n2} grid")
            grid[row, col] = float(fields[3])
            read += 1
    if read < total:
        raise ValueError(f"{path} holds {read} points, expected {total}")
    return grid


def generator_main(argv=None) -> int:
    """Write a layer file for a plane cut; print the usage when given nothing."""
    args = sys.argv[1:] if argv is None else list(argv)
    if not args:
        print(GENERATOR_HELP, end="")
        return 0
    _configure_logging()
    try:
        params = parse_args(args)
        nx = param(params, "nx", int, 100)
        ny = param(params, "ny", int, 100)
        nt = param(params, "nt", int, 100)
        direction = param(params, "direction", int, 2)
        cut_point = param(params, "cut_point", int, 50)
        name = param(params, "layer_fname", str, "layer.txt")
        write_layer_file(name, layer_points(nx, ny, nt, direction, cut_point))
    except (ValueError, OSError) as exc:
        log.error("Error: %s", exc)
        return 1
    log.info("Create layer file done")
    log.info("layer file name: %s", name)
    return 0


def interpolation_main(argv=None) -> int:
    """Grid a layer result file into a raw float profile; print the usage when given nothing."""
    args = sys.argv[1:] if argv is None else list(argv)
    if not args:
        print(INTERPOLATION_HELP, end="")
        return 0
    _configure_logging()
    try:
        params = parse_args(args)
        n1 = param(params, "n1", int, 100)
        n2 = param(params, "n2", int, 100)
        axis1 = param(params, "axis1", int, 1)
        axis2 = param(params, "axis2", int, 2)
        source = param(params, "layer_fname", str, "layer.txt")
        target = param(params, "layer_interplatation_fname", str, "layer_interplatation.bin")
        grid_layer_result(source, n1, n2, axis1, axis2).astype(np.float32).tofile(target)
    except (ValueError, OSError) as exc:
        log.error("%s", exc)
        return 1
    log.info("Interpolation done")
    log.info("Interpolation data saved in %s", target)
    return 0