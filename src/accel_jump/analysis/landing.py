"""Landing detection from the resultant acceleration.

A landing is the onset of the free-fall lull that precedes the impact spike
with the highest peak-to-lull ratio. This module is pure logic with NO I/O.
"""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np
from numpy.typing import ArrayLike

from accel_jump.analysis.scoring import landing_criterion, rms_error
from accel_jump.core.config import CalibrationSettings, LandingSettings
from accel_jump.core.exceptions import NoCandidateFound
from accel_jump.core.logging import get_logger
from accel_jump.core.types import (
    CalibrationResult,
    Feasibility,
    LandingResult,
    SpikeCandidate,
)
from accel_jump.processing.filters import (
    PeakFinder,
    Series,
    Smoother,
    find_peaks_above,
    moving_average,
    resultant,
)
from accel_jump.processing.recording import as_recording, as_recordings, check_aligned

logger = get_logger(__name__)


class LandingDetector:
    """Detects impact and landing indices in triaxial recordings.

    Each spike in the smoothed resultant that exceeds the free-fall threshold
    is a candidate. A candidate survives only if a below-threshold sample
    exists within ``max_spike_search_width`` samples before it; survivors are
    ranked by peak value over the mean resultant of the lull before onset.
    """

    def __init__(
        self,
        settings: LandingSettings | None = None,
        smoother: Smoother = moving_average,
        peak_finder: PeakFinder = find_peaks_above,
    ) -> None:
        """Initialize detector with settings.

        Args:
            settings: Landing detection parameters (uses defaults if None)
            smoother: Centered moving-average implementation
            peak_finder: Local-maxima finder with a minimum height
        """
        self.settings = settings or LandingSettings()
        self._smooth = smoother
        self._find_peaks = peak_finder

    def detect(self, recording: ArrayLike) -> LandingResult:
        """Detect landing in a single recording.

        Returns:
            LandingResult, with NO_EVENT indices if no candidate survives
        """
        try:
            return self._detect(as_recording(recording))
        except NoCandidateFound as exc:
            logger.warning("%s", exc.message)
            return LandingResult.missing(candidates=exc.candidates)

    def detect_batch(self, recordings: Sequence[ArrayLike]) -> list[LandingResult]:
        """Detect landings in every recording of a batch, in input order."""
        batch = as_recordings(recordings)
        results: list[LandingResult] = []

        for i, recording in enumerate(batch):
            try:
                results.append(self._detect(recording))
            except NoCandidateFound as exc:
                logger.warning("Recording %d: %s", i, exc.message)
                results.append(LandingResult.missing(candidates=exc.candidates))

        return results

    def calibrate(
        self,
        recordings: Sequence[ArrayLike],
        known_takeoffs: Sequence[int],
        known_durations: Sequence[float],
        calibration: CalibrationSettings | None = None,
    ) -> CalibrationResult[LandingResult]:
        """Score detected landings against criteria from known takeoffs.

        Stops at the first recording without a surviving candidate and
        reports the whole batch as infeasible.

        Args:
            recordings: Batch of triaxial recordings
            known_takeoffs: Ground-truth takeoff index per recording
            known_durations: Ground-truth landing duration per recording
            calibration: Penalty and criterion settings (uses defaults if None)

        Returns:
            CalibrationResult with RMS error and feasibility flag
        """
        calibration = calibration or CalibrationSettings()
        batch = as_recordings(recordings)
        check_aligned(batch, known_takeoffs=known_takeoffs, known_durations=known_durations)

        results: list[LandingResult] = []
        for i, recording in enumerate(batch):
            try:
                results.append(self._detect(recording))
            except NoCandidateFound as exc:
                logger.warning("Recording %d: %s; parameters infeasible", i, exc.message)
                return CalibrationResult(
                    rms_error=calibration.infeasible_penalty,
                    feasibility=Feasibility.INFEASIBLE,
                    results=results,
                )

        criteria = [
            landing_criterion(takeoff, duration, calibration.landing_duration_fraction)
            for takeoff, duration in zip(known_takeoffs, known_durations)
        ]
        error = rms_error([r.landing_index for r in results], criteria)
        logger.info("Landing RMS error %.3f samples over %d recordings", error, len(results))

        return CalibrationResult(
            rms_error=error,
            feasibility=Feasibility.FEASIBLE,
            results=results,
        )

    def _detect(self, recording: ArrayLike) -> LandingResult:
        """Run detection on a validated recording.

        Raises:
            NoCandidateFound: No spike is preceded by verified free-fall
        """
        smoothed = np.asarray(
            self._smooth(resultant(recording), self.settings.smoothing_half_width),
            dtype=np.float64,
        )
        spikes = self._find_peaks(smoothed, self.settings.freefall_threshold)

        candidates = [
            candidate
            for candidate in (self._verify(smoothed, idx, value) for idx, value in spikes)
            if candidate is not None
        ]
        if not candidates:
            raise NoCandidateFound(
                f"none of {len(spikes)} spike candidates follow verified free-fall",
                candidates=len(spikes),
            )

        scores = np.array([c.score for c in candidates])
        best = candidates[int(np.argmax(scores))]

        logger.debug(
            "Impact at %d (onset %d, ratio %.2f) from %d/%d candidates",
            best.peak_index,
            best.onset_index,
            best.score,
            len(candidates),
            len(spikes),
        )

        # A found landing never shifts onto the NO_EVENT sentinel
        return LandingResult(
            impact_index=best.peak_index,
            landing_index=max(best.onset_index + self.settings.index_offset, 0),
            peak_to_lull=best.score,
            candidates=len(spikes),
        )

    def _verify(self, smoothed: Series, peak_index: int, peak_value: float) -> SpikeCandidate | None:
        """Pair a spike with its free-fall onset, or reject it."""
        threshold = self.settings.freefall_threshold

        start = max(peak_index - self.settings.max_spike_search_width, 0)
        if not np.any(smoothed[start : peak_index + 1] < threshold):
            return None

        # Onset is the most recent dip anywhere before the peak, not only
        # within the search width used above
        below = np.flatnonzero(smoothed[: peak_index + 1] < threshold)
        onset = int(below[-1])

        lull_start = max(onset - self.settings.freefall_baseline_window, 0)
        baseline = float(np.mean(smoothed[lull_start : onset + 1]))

        return SpikeCandidate(
            peak_index=peak_index,
            peak_value=peak_value,
            onset_index=onset,
            baseline=baseline,
        )


def detect_landing(
    recordings: Sequence[ArrayLike],
    settings: LandingSettings | None = None,
) -> list[LandingResult]:
    """Detect the landing of each recording in a batch.

    Pure function for batch processing recorded data.

    Args:
        recordings: Batch of (n, 3) acceleration arrays in g
        settings: Detection settings

    Returns:
        One LandingResult per recording, in input order
    """
    return LandingDetector(settings).detect_batch(recordings)


def calibrate_landing(
    recordings: Sequence[ArrayLike],
    known_takeoffs: Sequence[int],
    known_durations: Sequence[float],
    settings: LandingSettings | None = None,
    calibration: CalibrationSettings | None = None,
) -> CalibrationResult[LandingResult]:
    """Landing RMS error and feasibility for an external parameter search."""
    return LandingDetector(settings).calibrate(
        recordings, known_takeoffs, known_durations, calibration
    )
