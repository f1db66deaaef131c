"""Butterworth band-pass filtering of seismic traces."""

from __future__ import annotations

import math

import numpy as np

__all__ = ["Bandpass"]

_LOW_ACTIVE = 0.000001
_HIGH_ACTIVE = 4.999999

Section = tuple[float, float, float, float, float]


def _split_poles(poles: int, phase: bool) -> tuple[int, int]:
    """Return the poles per pass and whether that count is odd."""
    count = poles
    odd = poles % 2
    if not phase:
        count = (poles + 1) // 2 if odd else poles // 2
        odd = count % 2
    return count, odd


def _low_cut_sections(flo: float, poles: int, odd: int) -> list[Section]:
    sections = (poles + 1) // 2
    if sections == 0:
        return []
    fno2 = 0.25
    a = 2.0 * math.sin(math.pi * fno2) / math.cos(math.pi * fno2)
    aa = a * a
    aap4 = aa + 4.0
    e = -math.cos(math.pi * (flo + fno2)) / math.cos(math.pi * (flo - fno2))
    ee = e * e
    dtheta = math.pi / poles
    theta0 = 0.0 if odd else dtheta / 2.0

    result: list[Section] = []
    if odd:
        b1 = a / (a + 2.0)
        b2 = (a - 2.0) / (a + 2.0)
        den = 1.0 - b2 * e
        c0 = b1 * (1.0 - e) / den
        result.append((c0, -c0, 0.0, (e - b2) / den, 0.0))
    for j in range(odd, sections):
        c = 4.0 * a * math.cos(theta0 + j * dtheta)
        b1 = aa / (aap4 + c)
        b2 = (2.0 * aa - 8.0) / (aap4 + c)
        b3 = (aap4 - c) / (aap4 + c)
        den = 1.0 - b2 * e + b3 * ee
        c0 = b1 * (1.0 - e) * (1.0 - e) / den
        result.append((
            c0,
            -2.0 * c0,
            c0,
            (2.0 * e * (1.0 + b3) - b2 * (1.0 + ee)) / den,
            (ee - b2 * e + b3) / den,
        ))
    return result


def _high_cut_sections(fhi: float, poles: int, odd: int) -> list[Section]:
    sections = (poles + 1) // 2
    if sections == 0:
        return []
    a = 2.0 * math.tan(math.pi * fhi)
    aa = a * a
    aap4 = aa + 4.0
    dtheta = math.pi / poles
    theta0 = 0.0 if odd else dtheta / 2.0

    result: list[Section] = []
    if odd:
        c0 = a / (a + 2.0)
        result.append((c0, c0, 0.0, (a - 2.0) / (a + 2.0), 0.0))
    for j in range(odd, sections):
        c = 4.0 * a * math.cos(theta0 + j * dtheta)
        c0 = aa / (aap4 + c)
        result.append((c0, 2.0 * c0, c0, (2.0 * aa - 8.0) / (aap4 + c), (aap4 - c) / (aap4 + c)))
    return result


def _run_sections(signal: list[float], sections: list[Section]) -> list[float]:
    """Run second-order sections in cascade over a signal with two leading zeros."""
    src = signal
    for c0, c1, c2, c3, c4 in sections:
        dst = [0.0] * len(src)
        for i in range(2, len(src)):
            dst[i] = (c0 * src[i] + c1 * src[i - 1] + c2 * src[i - 2]
                      - c3 * dst[i - 1] - c4 * dst[i - 2])
        src = dst
    return src


class Bandpass:
    """Recursive Butterworth low-cut and high-cut filter.

    Frequencies are in Hz; ``flo <= 0`` disables the low cut and ``fhi <= 0``
    puts the high cut at the Nyquist frequency.  With ``phase`` false the
    filter runs forward and backward (zero phase) using half the poles each
    way; otherwise it runs forward only (minimum phase).
    """

    def __init__(self, dt: float, flo: float, fhi: float, nplo: int, nphi: int, phase):
        if dt <= 0:
            raise ValueError(f"dt must be positive, got {dt}")
        if nplo < 0 or nphi < 0:
            raise ValueError(f"pole counts must not be negative, got {nplo}, {nphi}")
        self.dt = float(dt)
        self.flo = float(flo)
        self.fhi = float(fhi)
        self.nplo = int(nplo)
        self.nphi = int(nphi)
        self.phase = bool(phase)

        self._flo = (0.0 if flo <= 0 else float(flo)) * self.dt
        self._fhi = (0.5 / self.dt if fhi <= 0 else float(fhi)) * self.dt

        lo_poles, lo_odd = _split_poles(self.nplo, self.phase)
        hi_poles, hi_odd = _split_poles(self.nphi, self.phase)
        self._low: list[Section] = (
            _low_cut_sections(self._flo, lo_poles, lo_odd) if self._low_active else []
        )
        self._high: list[Section] = (
            _high_cut_sections(self._fhi, hi_poles, hi_odd) if self._high_active else []
        )

    @property
    def _low_active(self) -> bool:
        return self._flo > _LOW_ACTIVE

    @property
    def _high_active(self) -> bool:
        return self._fhi < _HIGH_ACTIVE

    def __repr__(self) -> str:
        return (f"Bandpass(dt={self.dt}, flo={self.flo}, fhi={self.fhi}, "
                f"nplo={self.nplo}, nphi={self.nphi}, phase={self.phase})")

    def clone(self) -> "Bandpass":
        """Return a new filter built from the same settings."""
        return Bandpass(self.dt, self.flo, self.fhi, self.nplo, self.nphi, self.phase)

    def _cut(self, trace: list[float], sections: list[Section]) -> list[float]:
        forward = _run_sections([0.0, 0.0, *trace], sections)
        if self.phase:
            return forward[2:]
        backward = _run_sections([0.0, 0.0, *reversed(forward[2:])], sections)
        return backward[2:][::-1]

    def apply(self, data, nsamples: int, ntraces: int) -> np.ndarray:
        """Filter ``ntraces`` consecutive traces of ``nsamples`` samples each.

        Returns a new flat float32 array the size of ``data``; samples past
        the last trace are copied unchanged.
        """
        if nsamples < 0 or ntraces < 0:
            raise ValueError("nsamples and ntraces must not be negative")
        out = np.array(data, dtype=np.float32).ravel()
        total = nsamples * ntraces
        if out.size < total:
            raise ValueError(f"data holds {out.size} samples, expected {total}")
        if not (self._low_active or self._high_active):
            return out

        block = out[:total]
        block[~np.isfinite(block)] = 0.0
        for start in range(0, total, max(nsamples, 1)):
            trace = [float(v) for v in block[start:start + nsamples]]
            if self._low_active:
                trace = [float(np.float32(v)) for v in self._cut(trace, self._low)]
            if self._high_active:
                trace = self._cut(trace, self._high)
            block[start:start + nsamples] = np.asarray(trace, dtype=np.float32)
        return out