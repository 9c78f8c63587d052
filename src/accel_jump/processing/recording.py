"""Input validation for triaxial recordings and aligned batch inputs."""

from __future__ import annotations

from collections.abc import Sequence, Sized

import numpy as np
from numpy.typing import ArrayLike

from accel_jump.core.exceptions import PreconditionViolation
from accel_jump.core.types import Recording

AXES = 3


def as_recording(data: ArrayLike, position: int | None = None) -> Recording:
    """Validate and convert input into an (n, 3) float array.

    The returned array is a new array when conversion was needed; callers
    never write to it either way.

    Args:
        data: Array-like of triaxial samples
        position: Batch position, used in error messages

    Returns:
        Read-only view of the samples

    Raises:
        PreconditionViolation: Input is not a non-empty (n, 3) array
    """
    where = f"Recording {position}" if position is not None else "Recording"
    samples = np.asarray(data, dtype=np.float64)

    if samples.ndim != 2:
        raise PreconditionViolation(f"{where} must be 2D, got {samples.ndim}D")
    if samples.shape[1] != AXES:
        raise PreconditionViolation(
            f"{where} must have {AXES} axes, got {samples.shape[1]}"
        )
    if samples.shape[0] == 0:
        raise PreconditionViolation(f"{where} is empty")

    view = samples.view()
    view.flags.writeable = False
    return view


def as_recordings(batch: Sequence[ArrayLike]) -> list[Recording]:
    """Validate every recording of a batch.

    Raises:
        PreconditionViolation: Any recording is malformed
    """
    return [as_recording(data, position=i) for i, data in enumerate(batch)]


def check_aligned(reference: Sized, **others: Sized) -> None:
    """Ensure aligned batch inputs have the same length as the recordings.

    Raises:
        PreconditionViolation: A named input differs in length
    """
    expected = len(reference)
    for name, values in others.items():
        if len(values) != expected:
            raise PreconditionViolation(
                f"Expected {expected} {name}, got {len(values)}"
            )
