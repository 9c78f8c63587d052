"""Tests for takeoff detection."""

from __future__ import annotations

from collections.abc import Callable

import numpy as np
import pytest

from accel_jump.analysis.takeoff import TakeoffDetector, detect_takeoff
from accel_jump.core.config import TakeoffSettings
from accel_jump.core.exceptions import PreconditionViolation
from accel_jump.core.types import NO_EVENT, TakeoffAxis

RecordingFactory = Callable[..., np.ndarray]


class TestTakeoffDetector:
    """Tests for the TakeoffDetector class."""

    def test_prefers_vertical_peak_near_extension(
        self, takeoff_settings: TakeoffSettings, takeoff_recording: RecordingFactory
    ) -> None:
        """A dz peak close to the x peak is trusted."""
        result = TakeoffDetector(takeoff_settings).detect(takeoff_recording(dz_peak=55), 80)

        assert result.x_min_index == 20
        assert result.x_max_index == 60
        assert result.dz_max_index == 55
        assert result.axis is TakeoffAxis.VERTICAL
        assert result.takeoff_index == 55

    def test_falls_back_to_secondary_axis(
        self, takeoff_settings: TakeoffSettings, takeoff_recording: RecordingFactory
    ) -> None:
        """A dz peak far from the x peak yields to the dx peak."""
        result = TakeoffDetector(takeoff_settings).detect(takeoff_recording(dz_peak=30), 80)

        assert result.dz_max_index == 30
        assert result.dx_max_index == 40
        assert result.axis is TakeoffAxis.SECONDARY
        assert result.takeoff_index == 40

    def test_index_offset_applied(self, takeoff_recording: RecordingFactory) -> None:
        """The fixed offset is added to the chosen index."""
        settings = TakeoffSettings(smoothing_half_width=0, max_axis_divergence=10, index_offset=3)
        result = TakeoffDetector(settings).detect(takeoff_recording(dz_peak=55), 80)

        assert result.takeoff_index == 58
        assert result.dz_max_index == 55

    def test_negative_offset_stops_at_first_sample(
        self, takeoff_recording: RecordingFactory
    ) -> None:
        """A large negative offset never turns a found takeoff into NO_EVENT."""
        settings = TakeoffSettings(
            smoothing_half_width=0, max_axis_divergence=10, index_offset=-60
        )
        result = TakeoffDetector(settings).detect(takeoff_recording(dz_peak=55), 80)

        assert result.found
        assert result.takeoff_index == 0

    def test_divergence_boundary_is_exclusive(self, takeoff_recording: RecordingFactory) -> None:
        """A gap equal to the divergence limit falls back to dx."""
        settings = TakeoffSettings(smoothing_half_width=0, max_axis_divergence=5)
        result = TakeoffDetector(settings).detect(takeoff_recording(dz_peak=55), 80)

        assert result.axis is TakeoffAxis.SECONDARY
        assert result.takeoff_index == 40

    def test_never_searches_past_landing(
        self, takeoff_settings: TakeoffSettings, takeoff_recording: RecordingFactory
    ) -> None:
        """Samples after the landing backstop are ignored."""
        result = TakeoffDetector(takeoff_settings).detect(takeoff_recording(dz_peak=55), 80)

        # the recording jumps to its maximum right after index 80
        assert result.x_max_index == 60

    @pytest.mark.parametrize("landing", [5, 30, 50, 80, 99])
    def test_takeoff_not_after_landing(
        self,
        takeoff_settings: TakeoffSettings,
        takeoff_recording: RecordingFactory,
        landing: int,
    ) -> None:
        """The chosen index never exceeds the landing backstop."""
        result = TakeoffDetector(takeoff_settings).detect(takeoff_recording(dz_peak=55), landing)

        assert result.takeoff_index - takeoff_settings.index_offset <= landing

    def test_landing_past_end_is_clamped(
        self, takeoff_settings: TakeoffSettings, takeoff_recording: RecordingFactory
    ) -> None:
        """A backstop beyond the recording uses every sample."""
        recording = takeoff_recording(dz_peak=55)
        result = TakeoffDetector(takeoff_settings).detect(recording, 500)

        assert result.found
        assert result.takeoff_index < recording.shape[0]

    def test_sentinel_landing_returns_sentinel(
        self, takeoff_settings: TakeoffSettings, takeoff_recording: RecordingFactory
    ) -> None:
        """Without a landing there is no backstop and no takeoff."""
        result = TakeoffDetector(takeoff_settings).detect(takeoff_recording(dz_peak=55), NO_EVENT)

        assert not result.found
        assert result.takeoff_index == NO_EVENT

    def test_degenerate_short_series(self) -> None:
        """Series shorter than the smoothing window do not index out of range."""
        settings = TakeoffSettings(smoothing_half_width=5)
        recording = np.array([[0.0, 0.0, 1.0], [0.1, 0.0, 1.1], [0.2, 0.0, 0.9]])
        detector = TakeoffDetector(settings)

        assert detector.detect(recording, 0).takeoff_index == 0
        assert detector.detect(recording, 2).takeoff_index <= 2

    def test_deterministic(
        self, takeoff_settings: TakeoffSettings, takeoff_recording: RecordingFactory
    ) -> None:
        """Identical inputs always yield identical outputs."""
        recording = takeoff_recording(dz_peak=42)
        detector = TakeoffDetector(takeoff_settings)

        assert detector.detect(recording, 80) == detector.detect(recording.copy(), 80)

    def test_reorientation_uses_rotator(self, takeoff_recording: RecordingFactory) -> None:
        """The rotator runs only when reorientation is enabled."""
        calls: list[tuple[float, float, float]] = []

        def rotator(series, reference, budget):
            calls.append(tuple(reference))
            return np.asarray(series), 12.5

        enabled = TakeoffSettings(smoothing_half_width=0, reorient_to_vertical=True)
        result = TakeoffDetector(enabled, rotator=rotator).detect(takeoff_recording(55), 80)

        assert calls == [(0.0, 0.0, 1.0)]
        assert result.rotation_angle_deg == 12.5
        assert result.takeoff_index == 55

        disabled = TakeoffSettings(smoothing_half_width=0)
        result = TakeoffDetector(disabled, rotator=rotator).detect(takeoff_recording(55), 80)

        assert len(calls) == 1
        assert result.rotation_angle_deg is None

    def test_reorientation_with_default_rotator(self, takeoff_recording: RecordingFactory) -> None:
        """The built-in rotator reports its angle and keeps the backstop."""
        settings = TakeoffSettings(reorient_to_vertical=True, still_samples=10)
        recording = takeoff_recording(dz_peak=55)
        recording[:, 2] += 2.0
        result = TakeoffDetector(settings).detect(recording, 80)

        assert result.found
        assert result.rotation_angle_deg is not None
        assert result.takeoff_index <= 80

    def test_rejects_non_triaxial(self, takeoff_settings: TakeoffSettings) -> None:
        """Recordings must have three axes."""
        with pytest.raises(PreconditionViolation):
            TakeoffDetector(takeoff_settings).detect(np.ones((20, 2)), 10)


class TestDetectTakeoff:
    """Tests for the batch detection function."""

    def test_batch_results_in_order(
        self, takeoff_settings: TakeoffSettings, takeoff_recording: RecordingFactory
    ) -> None:
        """Each recording is bounded by its own landing index."""
        recordings = [takeoff_recording(55), takeoff_recording(30), takeoff_recording(55)]
        results = detect_takeoff(recordings, [80, 80, NO_EVENT], takeoff_settings)

        assert [r.takeoff_index for r in results] == [55, 40, NO_EVENT]

    def test_mismatched_landing_count(
        self, takeoff_settings: TakeoffSettings, takeoff_recording: RecordingFactory
    ) -> None:
        """Landing indices must align with recordings."""
        with pytest.raises(PreconditionViolation):
            detect_takeoff([takeoff_recording(55)], [80, 80], takeoff_settings)
