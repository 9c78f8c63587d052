"""Reorientation of a triaxial recording to a vertical reference.

Assumes the subject stands still and upright at the start of the recording,
so the mean of the first samples points along gravity in the sensor frame.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import ArrayLike, NDArray
from scipy.optimize import least_squares
from scipy.spatial.transform import Rotation

from accel_jump.core.exceptions import OrientationError, PreconditionViolation
from accel_jump.core.logging import get_logger
from accel_jump.processing.recording import as_recording

logger = get_logger(__name__)

# Keeps the solution at the smallest rotation; twisting about gravity is free
_TWIST_WEIGHT = 1e-3


def _initial_rotvec(current: NDArray[np.float64], target: NDArray[np.float64]) -> NDArray[np.float64]:
    """Closed-form rotation vector turning ``current`` onto ``target``."""
    axis = np.cross(current, target)
    sin_angle = float(np.linalg.norm(axis))
    cos_angle = float(np.dot(current, target))

    if sin_angle < 1e-12:
        if cos_angle > 0:
            return np.zeros(3)
        # Antiparallel: any axis perpendicular to current will do
        trial = np.eye(3)[int(np.argmin(np.abs(current)))]
        axis = np.cross(current, trial)
        return np.pi * axis / np.linalg.norm(axis)

    return axis / sin_angle * np.arctan2(sin_angle, cos_angle)


def rotate_to_vertical(
    series: ArrayLike,
    reference: ArrayLike,
    iteration_budget: int = 100,
    still_samples: int = 25,
) -> tuple[NDArray[np.float64], float]:
    """Rotate a recording so its initial gravity vector matches ``reference``.

    Args:
        series: (n, 3) acceleration array
        reference: Target direction of gravity in the rotated frame
        iteration_budget: Maximum function evaluations for the solver
        still_samples: Leading samples assumed to be a still, upright posture

    Returns:
        Tuple of (rotated_series, rotation_angle_degrees)

    Raises:
        PreconditionViolation: Zero-length reference or zero initial gravity
        OrientationError: Solver failed to converge within the budget
    """
    samples = as_recording(series)
    target = np.asarray(reference, dtype=np.float64)

    target_norm = float(np.linalg.norm(target))
    if target.shape != (3,) or target_norm == 0.0:
        raise PreconditionViolation("Orientation reference must be a non-zero 3-vector")
    target = target / target_norm

    gravity = samples[: max(1, still_samples)].mean(axis=0)
    gravity_norm = float(np.linalg.norm(gravity))
    if gravity_norm == 0.0:
        raise PreconditionViolation("Initial posture has no measurable gravity vector")
    gravity = gravity / gravity_norm

    def residuals(rotvec: NDArray[np.float64]) -> NDArray[np.float64]:
        aligned = Rotation.from_rotvec(rotvec).apply(gravity)
        return np.concatenate([aligned - target, _TWIST_WEIGHT * rotvec])

    x0 = _initial_rotvec(gravity, target)
    out = least_squares(residuals, x0, max_nfev=iteration_budget)

    misalignment = float(np.linalg.norm(out.fun[:3]))
    if out.status <= 0 and misalignment > 1e-3:
        raise OrientationError(
            f"Reorientation did not converge: {out.message} (residual {misalignment:.4f})"
        )

    rotation = Rotation.from_rotvec(out.x)
    angle = float(np.degrees(rotation.magnitude()))
    logger.debug("Reoriented recording by %.2f deg (%d evaluations)", angle, out.nfev)

    return rotation.apply(np.array(samples)), angle
