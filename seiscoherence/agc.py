"""Automatic gain control of seismic traces."""

from __future__ import annotations

import logging

import numpy as np

__all__ = ["Agc"]

log = logging.getLogger(__name__)

_DEFAULT_THRESHOLD = 0.025
_EPSILON = 1e-10


class Agc:
    """Automatic gain control with a running absolute-amplitude window.

    With ``detect`` set, the gain is applied only between the first and last
    samples where the signal rises above ``threshold`` times the energy of a
    ``dwind``-sample probe window at either end of the trace.
    """

    def __init__(self, window: int, dwind: int, detect, threshold: float):
        self.window = int(window)
        self.dwind = int(dwind)
        self.detect = bool(detect)
        self.threshold = float(threshold)
        if self.threshold < 0.0 or self.threshold >= 1.0:
            log.warning(
                "AGC detect threshold=%g is out of range (0,1]. Will set it to %g",
                self.threshold, _DEFAULT_THRESHOLD,
            )
            self.threshold = _DEFAULT_THRESHOLD

    def __repr__(self) -> str:
        return (f"Agc(window={self.window}, dwind={self.dwind}, "
                f"detect={self.detect}, threshold={self.threshold})")

    def clone(self) -> "Agc":
        """Return a new gain control with the same settings."""
        return Agc(self.window, self.dwind, self.detect, self.threshold)

    def _signal_range(self, mags: np.ndarray) -> tuple[int, int]:
        n = mags.size
        dw = max(0, min(self.dwind, n))
        half = dw // 2
        limit_factor = self.threshold

        init = float(mags[:dw].sum())
        probe = init
        i = half
        while i < n and probe <= init * limit_factor:
            probe += float(mags[i])
            i += 1
        beg = i - half

        init = float(sum(mags[k] for k in range(n - dw, n + 1) if 0 <= k < n))
        probe = init
        i = n - half
        while i >= 0 and probe <= init * limit_factor:
            if i < n:
                probe += float(mags[i])
            i -= 1
        end = i + half

        beg = max(0, min(beg, n - 1))
        end = max(0, min(end, n - 1))
        return beg, end

    def apply(self, data) -> np.ndarray:
        """Return the gained trace; non-finite samples are replaced by 0 first."""
        trace = np.array(data, dtype=np.float32).ravel()
        trace[~np.isfinite(trace)] = 0.0
        n = trace.size
        if n == 0:
            return trace

        mags = np.abs(trace.astype(np.float64))
        if self.detect:
            beg, end = self._signal_range(mags)
        else:
            beg, end = 0, n - 1
        wnd = min(self.window, n - 1)
        if end - wnd + 1 <= beg:
            return trace

        gained = trace.astype(np.float64)

        def gain(norm: float) -> float:
            return norm / (norm * norm + _EPSILON)

        norm = float(mags[beg:wnd].sum()) if wnd > beg else 0.0
        half = wnd // 2
        for i in range(beg, half):
            gained[i] *= gain(norm)
        for i in range(half, end - half):
            norm += float(mags[i + half] - mags[i - half])
            gained[i] *= gain(norm)
        for i in range(end - half, end + 1):
            gained[i] *= gain(norm)
        return gained.astype(np.float32)