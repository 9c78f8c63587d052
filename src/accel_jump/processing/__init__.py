"""Signal primitives used by the detectors: filters, orientation, validation."""

from accel_jump.processing.filters import (
    central_difference,
    find_peaks_above,
    moving_average,
    resultant,
)
from accel_jump.processing.orientation import rotate_to_vertical
from accel_jump.processing.recording import as_recording, as_recordings, check_aligned

__all__ = [
    "resultant",
    "moving_average",
    "central_difference",
    "find_peaks_above",
    "rotate_to_vertical",
    "as_recording",
    "as_recordings",
    "check_aligned",
]
