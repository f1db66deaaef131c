"""Random helpers and separable Gaussian filtering used by the coherence code."""

from __future__ import annotations

import random

import numpy as np

__all__ = ["rand_int", "rand_float", "gaussian_filter_1d", "gaussian_filter_3d"]


def rand_int(limit: int, rng: random.Random) -> int:
    """Return a uniformly drawn integer in ``[0, limit)``."""
    if limit <= 0:
        raise ValueError(f"limit must be positive, got {limit}")
    return rng.randrange(limit)


def rand_float(rng: random.Random) -> float:
    """Return a uniformly drawn float in ``[0, 1)``."""
    return rng.random()


def _gaussian_kernel(sigma: float) -> np.ndarray:
    radius = int(3.0 * sigma)
    offsets = np.arange(-radius, radius + 1, dtype=np.float64)
    kernel = np.exp(-0.5 * offsets * offsets / (sigma * sigma))
    return kernel / kernel.sum()


def gaussian_filter_1d(values, sigma: float, order: int = 0) -> np.ndarray:
    """Smooth a 1-D signal with a normalised Gaussian kernel.

    Boundaries are reflected about the end samples.  With ``order == 1`` the
    smoothed signal is differentiated (central differences inside, one-sided
    differences at both ends).
    """
    if sigma <= 0:
        raise ValueError(f"sigma must be positive, got {sigma}")
    data = np.asarray(values, dtype=np.float64)
    if data.ndim != 1:
        raise ValueError("gaussian_filter_1d expects a one-dimensional signal")
    length = data.size
    if length == 0:
        raise ValueError("cannot filter an empty signal")

    kernel = _gaussian_kernel(sigma)
    radius = (kernel.size - 1) // 2
    positions = np.arange(length)
    output = np.zeros(length, dtype=np.float64)
    for offset, weight in zip(range(-radius, radius + 1), kernel):
        index = positions + offset
        index = np.where(index < 0, -index, index)
        index = np.where(index >= length, 2 * length - index - 2, index)
        if index.min() < 0 or index.max() >= length:
            raise ValueError(
                f"signal of length {length} is too short for a kernel of radius {radius}"
            )
        output += data[index] * weight

    if order == 1:
        if length < 2:
            raise ValueError("a gradient needs at least two samples")
        output = np.gradient(output)
    return output


def gaussian_filter_3d(volume, nx: int, ny: int, nt: int, sigma: float, order: int = 0) -> np.ndarray:
    """Apply the 1-D Gaussian filter along x, then y, then t of a volume.

    The volume is stored with t fastest, then x, then y (shape ``(ny, nx, nt)``).
    The result has the same shape as the input.
    """
    source = np.asarray(volume, dtype=np.float64)
    if source.size != nx * ny * nt:
        raise ValueError(
            f"volume holds {source.size} samples, expected {nx * ny * nt}"
        )
    cube = source.reshape(ny, nx, nt)
    for axis in (1, 0, 2):
        cube = np.apply_along_axis(gaussian_filter_1d, axis, cube, sigma, order)
    return cube.reshape(source.shape)