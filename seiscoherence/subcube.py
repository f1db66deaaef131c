"""Analysis windows (subcubes) around points of a seismic volume."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from pathlib import Path
from typing import Iterable, Iterator

import numpy as np

__all__ = [
    "CoherenceType",
    "Subcube",
    "read_layer_points",
    "build_subcubes",
    "grid_points",
]


class CoherenceType(IntEnum):
    """Coherence measures, numbered as on the command line."""

    SEMBLANCE = 0
    VARIATION0 = 1
    VARIATION1 = 2
    VARIATION2 = 3
    EIGENSTRUCTURE = 4
    GRADIENT_STRUCTURE_TENSOR = 5

    @property
    def label(self) -> str:
        return _LABELS[self]


_LABELS = {
    CoherenceType.SEMBLANCE: "Semblance",
    CoherenceType.VARIATION0: "Variation0",
    CoherenceType.VARIATION1: "Variation1",
    CoherenceType.VARIATION2: "Variation2",
    CoherenceType.EIGENSTRUCTURE: "Eigenstructure",
    CoherenceType.GRADIENT_STRUCTURE_TENSOR: "Gradient Structure Tensor",
}


@dataclass
class Subcube:
    """A window of neighbouring traces centred on one sample of the volume.

    ``idlist`` holds, for each trace of the window, the flat index of its first
    sample in the volume, or -1 when the trace falls outside.  Traces are
    ordered with the x offset fastest.  ``idx``/``idy`` are the trace offsets
    from the centre in samples.
    """

    ix: int
    iy: int
    it: int
    window_x: int
    window_y: int
    window_t: int
    window_dip: int
    kind: int
    dx: float
    dy: float
    dt: float
    idlist: tuple[int, ...]
    idx: tuple[float, ...]
    idy: tuple[float, ...]
    semblance_dip: float = 0.0
    px: float = 0.0
    py: float = 0.0

    @classmethod
    def around(cls, ix, iy, it, nx, ny, nt, window_x, window_y, window_t,
               window_dip, kind, dx, dy, dt) -> "Subcube":
        """Build the window centred on ``(ix, iy, it)`` of an ``nx*ny*nt`` volume."""
        for name, size in (("window_x", window_x), ("window_y", window_y),
                           ("window_t", window_t), ("window_dip", window_dip)):
            if size < 1:
                raise ValueError(f"{name} must be at least 1, got {size}")

        start_t = it - (window_t - 1) // 2
        half_x = (window_x - 1) // 2
        half_y = (window_y - 1) // 2
        time_inside = 0 <= start_t < nt

        ids: list[int] = []
        offsets_x: list[float] = []
        offsets_y: list[float] = []
        for jj in range(window_y):
            for ii in range(window_x):
                x = ix + ii - half_x
                y = iy + jj - half_y
                if time_inside and 0 <= x < nx and 0 <= y < ny:
                    ids.append(y * nx * nt + x * nt + start_t)
                else:
                    ids.append(-1)
                offsets_x.append(float(ii - half_x))
                offsets_y.append(float(jj - half_y))

        return cls(
            ix=ix, iy=iy, it=it,
            window_x=window_x, window_y=window_y, window_t=window_t,
            window_dip=window_dip, kind=kind, dx=dx, dy=dy, dt=dt,
            idlist=tuple(ids), idx=tuple(offsets_x), idy=tuple(offsets_y),
        )

    def gather(self, volume) -> np.ndarray:
        """Return the window's traces as an array of shape ``(traces, window_t)``.

        Samples are read from the flat volume as stored, so a window reaching
        past the end of one trace continues into the next; traces outside the
        volume, and samples past its end, are zero.
        """
        flat = np.ravel(np.asarray(volume, dtype=np.float64))
        traces = np.zeros((len(self.idlist), self.window_t), dtype=np.float64)
        for row, start in zip(traces, self.idlist):
            if start >= 0:
                chunk = flat[start:start + self.window_t]
                row[:chunk.size] = chunk
        return traces


def grid_points(nx: int, ny: int, nt: int) -> Iterator[tuple[int, int, int]]:
    """Yield every ``(ix, iy, it)`` of the volume in storage order."""
    for iy in range(ny):
        for ix in range(nx):
            for it in range(nt):
                yield ix, iy, it


def read_layer_points(path) -> list[tuple[int, int, int]]:
    """Read a layer file: a point count, then one ``ix,iy,it`` line per point."""
    with Path(path).open("r", encoding="utf-8") as handle:
        lines = [line.strip() for line in handle if line.strip()]
    if not lines:
        raise ValueError(f"layer file {path} is empty")
    try:
        count = int(lines[0])
    except ValueError as exc:
        raise ValueError(f"layer file {path} does not start with a point count") from exc
    body = lines[1:]
    if len(body) < count:
        raise ValueError(
            f"layer file {path} announces {count} points but holds {len(body)}"
        )
    points = []
    for line in body[:count]:
        fields = [field.strip() for field in line.split(",")]
        if len(fields) < 3:
            raise ValueError(f"malformed layer point {line!r}")
        ix, iy, it = (int(field) for field in fields[:3])
        points.append((ix, iy, it))
    return points


def build_subcubes(points: Iterable[tuple[int, int, int]], nx, ny, nt, window_dip,
                   window_x, window_y, window_t, kind, dx, dy, dt) -> list[Subcube]:
    """Build one subcube per ``(ix, iy, it)`` point, in the given order."""
    return [
        Subcube.around(ix, iy, it, nx, ny, nt, window_x, window_y, window_t,
                       window_dip, kind, dx, dy, dt)
        for ix, iy, it in points
    ]