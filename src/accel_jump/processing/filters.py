"""Numeric primitives: resultant, smoothing, differentiation, peak finding.

Each function takes and returns plain numpy arrays so detectors can accept
drop-in replacements with the same call signature.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray
from scipy.signal import find_peaks

Series = NDArray[np.floating[Any]]

Smoother = Callable[[Series, int], Series]
Differentiator = Callable[[Series], Series]
PeakFinder = Callable[[Series, float], list[tuple[int, float]]]


def resultant(recording: ArrayLike) -> Series:
    """Euclidean norm of each triaxial sample.

    Args:
        recording: (n, 3) acceleration array

    Returns:
        Length-n magnitude series
    """
    samples = np.asarray(recording, dtype=np.float64)
    return np.sqrt(np.sum(samples**2, axis=1))


def moving_average(series: ArrayLike, half_width: int) -> Series:
    """Centered moving average over ``2 * half_width + 1`` samples.

    Windows shrink at both ends of the series instead of padding, so the
    output has the same length as the input for any series length.

    Args:
        series: 1D input series
        half_width: Samples on each side of the center

    Returns:
        Smoothed series of identical length
    """
    values = np.asarray(series, dtype=np.float64)
    n = values.size
    if half_width <= 0 or n == 0:
        return values.copy()

    csum = np.concatenate(([0.0], np.cumsum(values)))
    centers = np.arange(n)
    lo = np.clip(centers - half_width, 0, n)
    hi = np.clip(centers + half_width + 1, 0, n)

    return (csum[hi] - csum[lo]) / (hi - lo)


def central_difference(series: ArrayLike) -> Series:
    """Rate of change per sample.

    Interior points use the central difference, the two end points use
    one-sided differences. Series shorter than two samples have zero slope.

    Args:
        series: 1D input series

    Returns:
        Derivative series of identical length
    """
    values = np.asarray(series, dtype=np.float64)
    if values.size < 2:
        return np.zeros_like(values)
    return np.gradient(values)


def find_peaks_above(series: ArrayLike, min_height: float) -> list[tuple[int, float]]:
    """Local maxima strictly higher than ``min_height``.

    Args:
        series: 1D input series
        min_height: Peaks must exceed this value

    Flat peaks are reported at their first sample.

    Returns:
        List of (index, value) in ascending index order
    """
    values = np.asarray(series, dtype=np.float64)
    _, properties = find_peaks(values, height=min_height, plateau_size=1)

    return [
        (int(i), float(values[i])) for i in properties["left_edges"] if values[i] > min_height
    ]
