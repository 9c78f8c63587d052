"""Error metrics exposed to external parameter searches."""

from __future__ import annotations

import math
from collections.abc import Sequence

import numpy as np


def rms_error(detected: Sequence[int], criterion: Sequence[int]) -> float:
    """Root-mean-square difference between detected and criterion indices.

    Args:
        detected: Detected sample indices
        criterion: Ground-truth sample indices, aligned with ``detected``

    Returns:
        RMS error in samples (0.0 for an empty batch)
    """
    if len(detected) == 0:
        return 0.0
    diff = np.asarray(detected, dtype=np.float64) - np.asarray(criterion, dtype=np.float64)
    return float(np.sqrt(np.mean(diff**2)))


def landing_criterion(
    known_takeoff: int,
    known_duration: float,
    duration_fraction: float = 0.25,
) -> int:
    """Reference landing index derived from a known takeoff and flight duration.

    Args:
        known_takeoff: Ground-truth takeoff index
        known_duration: Ground-truth landing duration in samples
        duration_fraction: Portion of the duration added to the takeoff

    Returns:
        ``known_takeoff + floor(duration_fraction * known_duration) + 1``
    """
    return int(known_takeoff) + math.floor(duration_fraction * known_duration) + 1
