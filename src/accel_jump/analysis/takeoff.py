"""Takeoff detection from derivative extrema before the landing backstop.

This module is pure logic with NO I/O.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from functools import partial

import numpy as np
from numpy.typing import ArrayLike, NDArray

from accel_jump.analysis.scoring import rms_error
from accel_jump.core.config import CalibrationSettings, TakeoffSettings
from accel_jump.core.logging import get_logger
from accel_jump.core.types import (
    CalibrationResult,
    Feasibility,
    Recording,
    TakeoffAxis,
    TakeoffResult,
)
from accel_jump.processing.filters import (
    Differentiator,
    Smoother,
    central_difference,
    moving_average,
)
from accel_jump.processing.orientation import rotate_to_vertical
from accel_jump.processing.recording import as_recording, as_recordings, check_aligned

logger = get_logger(__name__)

Rotator = Callable[[Recording, ArrayLike, int], tuple[NDArray[np.float64], float]]

# Secondary (anterior-posterior) and vertical axes
X_AXIS = 0
Z_AXIS = 2


class TakeoffDetector:
    """Detects takeoff indices using landing as a hard backstop.

    Within samples up to the landing index, the secondary axis x is expected
    to trough during the crouch and peak at full extension. The fastest rise
    of the vertical axis z marks takeoff if it falls close enough to that
    extension peak; otherwise the fastest rise of x is used instead.
    """

    def __init__(
        self,
        settings: TakeoffSettings | None = None,
        smoother: Smoother = moving_average,
        differentiator: Differentiator = central_difference,
        rotator: Rotator | None = None,
    ) -> None:
        """Initialize detector with settings.

        Args:
            settings: Takeoff detection parameters (uses defaults if None)
            smoother: Centered moving-average implementation
            differentiator: Central-difference implementation
            rotator: Reorientation routine, used when enabled in settings
        """
        self.settings = settings or TakeoffSettings()
        self._smooth = smoother
        self._diff = differentiator
        self._rotate = rotator or partial(
            rotate_to_vertical, still_samples=self.settings.still_samples
        )

    def detect(self, recording: ArrayLike, landing_index: int) -> TakeoffResult:
        """Detect takeoff in a single recording.

        Args:
            recording: (n, 3) acceleration array
            landing_index: Landing index bounding the search

        Returns:
            TakeoffResult, with NO_EVENT if the landing index is a sentinel
        """
        samples = as_recording(recording)
        if landing_index < 0:
            logger.warning("No landing backstop (index %d); takeoff not searched", landing_index)
            return TakeoffResult.missing()
        return self._detect(samples, landing_index)

    def detect_batch(
        self,
        recordings: Sequence[ArrayLike],
        landing_indices: Sequence[int],
    ) -> list[TakeoffResult]:
        """Detect takeoffs for every recording of a batch, in input order."""
        batch = as_recordings(recordings)
        check_aligned(batch, landing_indices=landing_indices)

        results: list[TakeoffResult] = []
        for i, (recording, landing_index) in enumerate(zip(batch, landing_indices)):
            if landing_index < 0:
                logger.warning("Recording %d: no landing backstop; takeoff not searched", i)
                results.append(TakeoffResult.missing())
                continue
            results.append(self._detect(recording, int(landing_index)))

        return results

    def calibrate(
        self,
        recordings: Sequence[ArrayLike],
        landing_indices: Sequence[int],
        criterion_indices: Sequence[int],
        calibration: CalibrationSettings | None = None,
    ) -> CalibrationResult[TakeoffResult]:
        """Score detected takeoffs against ground-truth criterion indices.

        A recording without a landing backstop makes the batch infeasible.
        """
        calibration = calibration or CalibrationSettings()
        batch = as_recordings(recordings)
        check_aligned(
            batch,
            landing_indices=landing_indices,
            criterion_indices=criterion_indices,
        )

        results: list[TakeoffResult] = []
        for i, (recording, landing_index) in enumerate(zip(batch, landing_indices)):
            if landing_index < 0:
                logger.warning("Recording %d: no landing backstop; parameters infeasible", i)
                return CalibrationResult(
                    rms_error=calibration.infeasible_penalty,
                    feasibility=Feasibility.INFEASIBLE,
                    results=results,
                )
            results.append(self._detect(recording, int(landing_index)))

        error = rms_error([r.takeoff_index for r in results], criterion_indices)
        logger.info("Takeoff RMS error %.3f samples over %d recordings", error, len(results))

        return CalibrationResult(
            rms_error=error,
            feasibility=Feasibility.FEASIBLE,
            results=results,
        )

    def _detect(self, recording: Recording, landing_index: int) -> TakeoffResult:
        """Run detection on a validated recording with a valid backstop."""
        angle: float | None = None
        samples: NDArray[np.float64] = recording
        if self.settings.reorient_to_vertical:
            samples, angle = self._rotate(
                recording,
                self.settings.initial_orientation_reference,
                self.settings.rotation_iteration_budget,
            )

        # Landing is inclusive; an index past the end is clamped
        stop = min(landing_index, samples.shape[0] - 1) + 1
        half_width = self.settings.smoothing_half_width
        x = np.asarray(self._smooth(samples[:stop, X_AXIS], half_width), dtype=np.float64)
        z = np.asarray(self._smooth(samples[:stop, Z_AXIS], half_width), dtype=np.float64)

        dx = np.asarray(self._diff(x), dtype=np.float64)
        dz = np.asarray(self._diff(z), dtype=np.float64)

        # Crouch trough, then the extension peak after it
        x_min = int(np.argmin(x))
        x_max = x_min + int(np.argmax(x[x_min:]))

        dx_max = int(np.argmax(dx[: x_max + 1]))
        dz_max = int(np.argmax(dz[: x_max + 1]))

        if x_max - dz_max < self.settings.max_axis_divergence:
            axis, chosen = TakeoffAxis.VERTICAL, dz_max
        else:
            axis, chosen = TakeoffAxis.SECONDARY, dx_max

        logger.debug(
            "Takeoff at %d via %s (x trough %d, x peak %d, dx peak %d, dz peak %d)",
            chosen,
            axis.name.lower(),
            x_min,
            x_max,
            dx_max,
            dz_max,
        )

        return TakeoffResult(
            takeoff_index=max(chosen + self.settings.index_offset, 0),
            x_min_index=x_min,
            x_max_index=x_max,
            dx_max_index=dx_max,
            dz_max_index=dz_max,
            axis=axis,
            rotation_angle_deg=angle,
        )


def detect_takeoff(
    recordings: Sequence[ArrayLike],
    landing_indices: Sequence[int],
    settings: TakeoffSettings | None = None,
) -> list[TakeoffResult]:
    """Detect the takeoff of each recording in a batch.

    Pure function for batch processing recorded data. Run landing detection
    first; its indices bound the search.

    Args:
        recordings: Batch of (n, 3) acceleration arrays in g
        landing_indices: Landing index per recording
        settings: Detection settings

    Returns:
        One TakeoffResult per recording, in input order
    """
    return TakeoffDetector(settings).detect_batch(recordings, landing_indices)


def calibrate_takeoff(
    recordings: Sequence[ArrayLike],
    landing_indices: Sequence[int],
    criterion_indices: Sequence[int],
    settings: TakeoffSettings | None = None,
    calibration: CalibrationSettings | None = None,
) -> CalibrationResult[TakeoffResult]:
    """Takeoff RMS error and feasibility for an external parameter search."""
    return TakeoffDetector(settings).calibrate(
        recordings, landing_indices, criterion_indices, calibration
    )
