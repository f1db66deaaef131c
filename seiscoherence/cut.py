"""Cutting slices and sub-volumes out of a coherence volume."""

from __future__ import annotations

import logging
import sys
from enum import IntEnum
from pathlib import Path

import numpy as np

from .params import param, parse_args

__all__ = [
    "Direction",
    "SLICE_HELP",
    "CUBE_HELP",
    "read_cube",
    "slice_file_name",
    "cube_file_name",
    "cut_slice",
    "cut_cube",
    "slice_main",
    "cube_main",
]

log = logging.getLogger(__name__)

SLICE_HELP = """\
Coherence slice cutter: extract one slice of a coherence volume.
Usage: se_coherence_cut_slice par=parfile [name=value ...]

Parameters:
  coherence_cube_file    string, default "coherence_cube.bin"
  nx, ny, nz             int,    default 100    samples along x, y and z
  direction              int,    default 2      axis cut across (0 x, 1 y, 2 z)
  cutpoint               int,    default 50     index of the slice along that axis
"""

CUBE_HELP = """\
Coherence cube cutter: extract a sub-volume of a coherence volume.
Usage: se_coherence_cut_cube par=parfile [name=value ...]

Parameters:
  coherence_cube_file    string, default "coherence_cube.bin"
  nx, ny, nz             int,    default 100    samples along x, y and z
  n1, n2, n3             int,    default 10     sub-volume size along x, y and z
  no1, no2, no3          int,    default 0      sub-volume offset along x, y and z
"""


class Direction(IntEnum):
    """Axis that a slice cuts across."""

    X = 0
    Y = 1
    Z = 2

    @property
    def letter(self) -> str:
        return self.name.lower()


def _configure_logging() -> None:
    if not logging.getLogger().handlers:
        logging.basicConfig(level=logging.INFO, format="%(message)s")


def _direction(value) -> Direction:
    try:
        return Direction(int(value))
    except ValueError:
        log.warning("Invalid direction %s, automatically set direction to z", value)
        return Direction.Z


def read_cube(path, nx: int, ny: int, nz: int) -> np.ndarray:
    """Read a raw 32-bit float volume as an array of shape ``(ny, nx, nz)``."""
    count = nx * ny * nz
    data = np.fromfile(Path(path), dtype=np.float32, count=count)
    if data.size < count:
        raise ValueError(f"{path} holds {data.size} samples, expected {count}")
    return data.reshape(ny, nx, nz)


def slice_file_name(cube_name, nx, ny, nz, direction, cut_point) -> str:
    """Name of the file a slice is written to."""
    letter = _direction(direction).letter
    return f"{cube_name}_{nx}_{ny}_{nz}_{letter}_{cut_point}"


def cube_file_name(cube_name, nx, ny, nz, n1, n2, n3, no1, no2, no3) -> str:
    """Name of the file a sub-volume is written to."""
    return f"{cube_name}_{nx}_{ny}_{nz}_{n1}_{n2}_{n3}_o_{no1}_{no2}_{no3}"


def cut_slice(volume, direction, cut_point: int) -> np.ndarray:
    """Cut the slice at ``cut_point`` across ``direction`` of a ``(ny, nx, nz)`` volume.

    Across x the slice has shape ``(ny, nz)``, across y ``(nx, nz)`` and
    across z ``(nx, ny)``.  An unknown direction cuts across z.  NaNs become 0.
    """
    cube = np.asarray(volume, dtype=np.float32)
    if cube.ndim != 3:
        raise ValueError("volume must have shape (ny, nx, nz)")
    axis = _direction(direction)
    ny, nx, nz = cube.shape
    extent = {Direction.X: nx, Direction.Y: ny, Direction.Z: nz}[axis]
    if not 0 <= cut_point < extent:
        raise ValueError(f"Invalid cut point {cut_point}: should be in range [0, {extent})")

    if axis is Direction.X:
        plane = cube[:, cut_point, :]
    elif axis is Direction.Y:
        plane = cube[cut_point, :, :]
    else:
        plane = cube[:, :, cut_point].T
    return np.nan_to_num(np.array(plane, dtype=np.float32), nan=0.0, posinf=np.inf,
                         neginf=-np.inf)


def cut_cube(volume, n1: int, n2: int, n3: int, no1: int, no2: int, no3: int) -> np.ndarray:
    """Cut a sub-volume of ``n1 x n2 x n3`` (x, y, z) samples at offsets ``no1..no3``.

    The result has shape ``(n2, n1, n3)``, stored like the source volume.
    """
    cube = np.asarray(volume, dtype=np.float32)
    if cube.ndim != 3:
        raise ValueError("volume must have shape (ny, nx, nz)")
    ny, nx, nz = cube.shape
    for label, size, offset, extent in (("x", n1, no1, nx), ("y", n2, no2, ny),
                                        ("z", n3, no3, nz)):
        if size < 1:
            raise ValueError(f"sub-volume size along {label} must be positive, got {size}")
        if offset < 0 or offset + size > extent:
            raise ValueError(
                f"sub-volume along {label} [{offset}, {offset + size}) "
                f"exceeds the volume size {extent}"
            )
    return np.array(cube[no2:no2 + n2, no1:no1 + n1, no3:no3 + n3], dtype=np.float32)


def slice_main(argv=None) -> int:
    """Cut a slice from a coherence volume file; print the usage when given nothing."""
    args = sys.argv[1:] if argv is None else list(argv)
    if not args:
        print(SLICE_HELP, end="")
        return 0
    _configure_logging()
    try:
        params = parse_args(args)
        name = param(params, "coherence_cube_file", str, "coherence_cube.bin")
        nx = param(params, "nx", int, 100)
        ny = param(params, "ny", int, 100)
        nz = param(params, "nz", int, 100)
        direction = _direction(param(params, "direction", int, 2))
        cut_point = param(params, "cutpoint", int, 50)

        log.info("Cutting coherence cube along %s direction", direction.letter)
        out_name = slice_file_name(name, nx, ny, nz, direction, cut_point)
        log.info("Slice will be saved in %s", out_name)
        plane = cut_slice(read_cube(name, nx, ny, nz), direction, cut_point)
        plane.astype(np.float32).tofile(out_name)
    except (ValueError, OSError) as exc:
        log.error("%s", exc)
        return 1
    log.info("Slice done!")
    log.info("Slice saved in %s", out_name)
    return 0


def cube_main(argv=None) -> int:
    """Cut a sub-volume from a coherence volume file; print the usage when given nothing."""
    args = sys.argv[1:] if argv is None else list(argv)
    if not args:
        print(CUBE_HELP, end="")
        return 0
    _configure_logging()
    try:
        params = parse_args(args)
        name = param(params, "coherence_cube_file", str, "coherence_cube.bin")
        nx = param(params, "nx", int, 100)
        ny = param(params, "ny", int, 100)
        nz = param(params, "nz", int, 100)
        n1 = param(params, "n1", int, 10)
        n2 = param(params, "n2", int, 10)
        n3 = param(params, "n3", int, 10)
        no1 = param(params, "no1", int, 0)
        no2 = param(params, "no2", int, 0)
        no3 = param(params, "no3", int, 0)

        out_name = cube_file_name(name, nx, ny, nz, n1, n2, n3, no1, no2, no3)
        part = cut_cube(read_cube(name, nx, ny, nz), n1, n2, n3, no1, no2, no3)
        part.astype(np.float32).tofile(out_name)
    except (ValueError, OSError) as exc:
        log.error("%s", exc)
        return 1
    log.info("Cut cube done!")
    log.info("Cut cube saved in %s", out_name)
    return 0