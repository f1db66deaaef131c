"""Interpolation of irregularly sampled traces and functions."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Sequence

import numpy as np

__all__ = [
    "TraceInterpolator",
    "poly9fit",
    "interp1_irregular",
    "check_coeff",
]

log = logging.getLogger(__name__)

_NCOEF_LAGRANGE = 12
_SC_LAGRANGE = _NCOEF_LAGRANGE - 2
_NCOEF_P9 = 10
_SC_P9 = 5
# Tolerance used when deciding whether two sample positions coincide.
_TOL = 1e-6

_O8 = 1.0 / 8.0
_O16 = 1.0 / 16.0
_O24 = 1.0 / 24.0
_O32 = 1.0 / 32.0
_O40 = 1.0 / 40.0
_O48 = 1.0 / 48.0
_O56 = 1.0 / 56.0
_O72 = 1.0 / 72.0
_O80 = 1.0 / 80.0


def _fequal(a: float, b: float) -> bool:
    return abs(a - b) <= _TOL * max(1.0, abs(a), abs(b))


def _f32(value) -> float:
    return float(np.float32(value))


def _poly_half(s1: float, s3: float, s5: float, s7: float, s9: float):
    t3 = _O8 * (s3 - s1)
    t5 = _O24 * (s5 - s1)
    t7 = _O48 * (s7 - s1)
    t9 = _O80 * (s9 - s1)
    u5 = _O16 * (t5 - t3)
    u7 = _O40 * (t7 - t3)
    u9 = _O72 * (t9 - t3)
    v7 = _O24 * (u7 - u5)
    v9 = _O56 * (u9 - u5)

    top = _O32 * (v9 - v7)
    third = v7 - 84.0 * top
    second = u5 - 35.0 * third - 996.0 * top
    first = t3 - 10.0 * second - 91.0 * third - 820.0 * top
    base = s1 - first - second - third - top
    return base, first, second, third, top


def poly9fit(x0: float, samples: Sequence[float], dx: float) -> float:
    """Evaluate the degree-9 polynomial through 10 equally spaced samples.

    ``x0`` is measured from the fifth sample (index 4) and ``dx`` is the
    sample spacing, so ``x0 = 0`` gives ``samples[4]`` and ``x0 = dx`` gives
    ``samples[5]``.
    """
    s = [float(value) for value in samples[:_NCOEF_P9]]
    if len(s) < _NCOEF_P9:
        raise ValueError(f"poly9fit needs {_NCOEF_P9} samples, got {len(s)}")
    if dx == 0:
        raise ValueError("sample spacing must not be zero")
    x = (2.0 * x0 / dx) - 1.0

    a, c, e, g, p = _poly_half(
        0.5 * (s[5] + s[4]),
        0.5 * (s[6] + s[3]),
        0.5 * (s[7] + s[2]),
        0.5 * (s[8] + s[1]),
        0.5 * (s[9] + s[0]),
    )
    b, d, f, h, q = _poly_half(
        0.5000000 * (s[5] - s[4]),
        0.1666667 * (s[6] - s[3]),
        0.1000000 * (s[7] - s[2]),
        0.0714286 * (s[8] - s[1]),
        0.0555556 * (s[9] - s[0]),
    )
    return a + x * (b + x * (c + x * (d + x * (e + x * (f + x * (g + x * (h + x * (p + x * q))))))))


class _OpKind(Enum):
    ZERO = 0
    NEAREST = 1
    LAGRANGE = 2
    POLY9 = 3


@dataclass(frozen=True)
class _Op:
    kind: _OpKind = _OpKind.ZERO
    beg: int = 0
    end: int = 0
    coef: tuple[float, ...] = ()


def _find_range(i: int, nidx: int, nmax: int, sc: int) -> tuple[int, int]:
    nh = nidx // 2
    sc = max(sc, 0)
    if i - nh < 0:
        beg = 0
        end = i + nidx - nh - 1
        if end > 2 * i + sc:
            end = 2 * i
        if end > nmax - 1:
            end = nmax - 1
    else:
        beg = i - nh
        end = i + nidx - nh - 1
        if end > nmax - 1:
            end = nmax - 1
            if i - beg > end - i + sc:
                beg = max(2 * i - end, 0)
    return beg, end


class TraceInterpolator:
    """Resample traces given at positions ``zz`` onto a regular output axis.

    Output sample ``k`` lies at ``zz[0] + k * dzout``.  Samples that fall on
    an input position are copied, samples surrounded by ten equally spaced
    inputs use a degree-9 polynomial fit, and the rest use Lagrange
    interpolation over up to twelve inputs.  Output samples from the last
    input position onwards are zero.
    """

    def __init__(self, zz, dzout: float, nout: int, flag: int = 0):
        if zz is None:
            raise ValueError("trace interpolator needs sample positions")
        positions = [_f32(value) for value in np.asarray(zz, dtype=np.float64).ravel()]
        if not positions:
            raise ValueError("trace interpolator called with nz=0 <= 0")
        if nout <= 0:
            raise ValueError(f"trace interpolator called with nout={nout} <= 0")
        step = _f32(dzout)
        if abs(step) <= _TOL:
            raise ValueError("trace interpolator called with zero dzout")
        if step < 0:
            raise ValueError("trace interpolator called with negative dzout")
        for i in range(1, len(positions)):
            z1, z2 = positions[i - 1], positions[i]
            if _fequal(z1, z2):
                raise ValueError(
                    f"trace interpolator called with equal zz values; i={i}, z1={z1:f}, z2={z2:f}"
                )
            if z2 < z1:
                raise ValueError(
                    f"trace interpolator called with unsorted zz values; i={i}, z1={z1:f}, z2={z2:f}"
                )

        self.zz = positions
        self.dzout = step
        self.nout = int(nout)
        self.flag = flag
        self._ops = self._build_ops()

    @property
    def nz(self) -> int:
        return len(self.zz)

    def _lagrange(self, i: int, z: float) -> _Op:
        beg, end = _find_range(i, _NCOEF_LAGRANGE, self.nz, _SC_LAGRANGE)
        nodes = self.zz[beg:end + 1]
        coef = []
        for j, zzj in enumerate(nodes):
            c = 1.0
            for m, zzl in enumerate(nodes):
                if m != j:
                    c *= (z - zzl) / (zzj - zzl)
            coef.append(c)
        return _Op(_OpKind.LAGRANGE, beg, end, tuple(coef))

    def _op_between(self, i: int, z: float) -> _Op:
        zz = self.zz
        if _fequal(z, zz[i - 1]):
            return _Op(_OpKind.NEAREST, i - 1, i - 1)
        if _fequal(z, zz[i]):
            return _Op(_OpKind.NEAREST, i, i)
        beg, end = _find_range(i, _NCOEF_P9, self.nz, _SC_P9)
        if end - beg + 1 == _NCOEF_P9:
            dz = zz[beg + 1] - zz[beg]
            if all(_fequal(dz, zz[j] - zz[j - 1]) for j in range(beg + 2, end + 1)):
                return _Op(_OpKind.POLY9, beg, end)
        return self._lagrange(i, z)

    def _build_ops(self) -> list[_Op]:
        ops = [_Op() for _ in range(self.nout)]
        ops[0] = _Op(_OpKind.NEAREST, 0, 0)
        z0 = self.zz[0]
        last = 0
        for i in range(1, self.nz):
            first = int((self.zz[i - 1] - z0) / self.dzout)
            last = min(int((self.zz[i] - z0) / self.dzout), self.nout - 1)
            for k in range(first, last):
                ops[k] = self._op_between(i, z0 + k * self.dzout)
        if last >= 0:
            for k in range(last, self.nout):
                ops[k] = _Op()
        return ops

    def _one_trace(self, trace: np.ndarray) -> np.ndarray:
        out = np.zeros(self.nout, dtype=np.float32)
        z0 = self.zz[0]
        for k, op in enumerate(self._ops):
            if op.kind is _OpKind.POLY9:
                z = z0 + k * self.dzout
                out[k] = poly9fit(
                    z - self.zz[op.beg + 4],
                    trace[op.beg:op.end + 1],
                    _f32(self.zz[op.beg + 1] - self.zz[op.beg]),
                )
            elif op.kind is _OpKind.LAGRANGE:
                window = trace[op.beg:op.end + 1]
                out[k] = sum(float(v) * c for v, c in zip(window, op.coef))
            elif op.kind is _OpKind.NEAREST:
                out[k] = trace[op.beg]
        return out

    def interpolate(self, traces) -> np.ndarray:
        """Resample one trace of ``nz`` samples, or a stack of them.

        A one-dimensional trace gives a one-dimensional result of ``nout``
        samples; otherwise the result has shape ``(ntraces, nout)``.
        """
        data = np.asarray(traces, dtype=np.float32)
        if data.size % self.nz:
            raise ValueError(f"trace data of {data.size} samples is not a multiple of nz={self.nz}")
        rows = data.reshape(-1, self.nz).astype(np.float64)
        result = np.array([self._one_trace(row) for row in rows], dtype=np.float32)
        if data.ndim == 1 and rows.shape[0] == 1:
            return result[0]
        return result.reshape(-1, self.nout)


def interp1_irregular(x, v, xq) -> tuple[int, np.ndarray]:
    """Linearly interpolate ``v(x)`` at the sorted positions ``xq``.

    Returns ``(start, values)``: query points before ``x[0]`` are skipped,
    ``start`` is the index of the first one used and earlier entries of
    ``values`` are NaN.  Points past ``x[-1]`` are extrapolated from the last
    two samples.
    """
    xs = np.asarray(x, dtype=np.float64).ravel()
    vs = np.asarray(v, dtype=np.float64).ravel()
    qs = np.asarray(xq, dtype=np.float64).ravel()
    lx = xs.size
    if lx < 2:
        raise ValueError("interpolation needs at least two samples")
    if vs.size < lx:
        raise ValueError(f"v holds {vs.size} values, expected {lx}")

    values = np.full(qs.size, np.nan)
    start = 0
    while start < qs.size and qs[start] < xs[0]:
        start += 1
    j1, j2 = 0, 1
    for i in range(start, qs.size):
        q = qs[i]
        while j1 < lx - 2 and xs[j1 + 1] < q:
            j1 += 1
        while j2 < lx - 1 and xs[j2] < q:
            j2 += 1
        values[i] = vs[j1] + (q - xs[j1]) / (xs[j2] - xs[j1]) * (vs[j2] - vs[j1])
    return start, values


def check_coeff(x: float) -> bool:
    """Tell whether ``x`` is a valid convex-combination weight in ``[0, 1]``."""
    if x < 0.0 or x > 1.0:
        log.warning("Wrong value for convex combination coefficient %f", x)
        return False
    return True