"""Recording processing pipeline orchestration."""

from __future__ import annotations

import threading
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor

from numpy.typing import ArrayLike

from accel_jump.analysis.landing import LandingDetector
from accel_jump.analysis.metrics import flight_metrics
from accel_jump.analysis.takeoff import TakeoffDetector
from accel_jump.core.config import Settings, get_settings
from accel_jump.core.logging import get_logger
from accel_jump.core.types import BatchStats, JumpEvent
from accel_jump.processing.recording import as_recording, as_recordings

logger = get_logger(__name__)


class RecordingProcessor:
    """Orchestrates detection for batches of recordings.

    Coordinates:
    - Landing detection
    - Takeoff detection bounded by the landing
    - Flight metrics
    """

    def __init__(self, settings: Settings | None = None) -> None:
        """Initialize processor with settings.

        Args:
            settings: Application settings (uses defaults if None)
        """
        self.settings = settings or get_settings()

        self._landing = LandingDetector(self.settings.landing)
        self._takeoff = TakeoffDetector(self.settings.takeoff)
        self._stats = BatchStats()

    @property
    def stats(self) -> BatchStats:
        """Events from every recording processed so far."""
        return self._stats

    def reset(self) -> None:
        """Discard collected events."""
        self._stats = BatchStats()

    def process_recording(self, recording: ArrayLike, recording_index: int = 0) -> JumpEvent:
        """Process a single recording through the full pipeline.

        Args:
            recording: (n, 3) acceleration array in g
            recording_index: Position of the recording within its batch

        Returns:
            JumpEvent for the recording
        """
        samples = as_recording(recording, position=recording_index)

        landing = self._landing.detect(samples)
        takeoff = self._takeoff.detect(samples, landing.landing_index)
        metrics = flight_metrics(
            takeoff.takeoff_index,
            landing.landing_index,
            self.settings.recording.sample_interval_s,
        )

        return JumpEvent(
            recording_index=recording_index,
            takeoff_index=takeoff.takeoff_index,
            landing_index=landing.landing_index,
            impact_index=landing.impact_index,
            flight_time_s=metrics.flight_time_s if metrics else None,
            height_cm=metrics.height_cm if metrics else None,
        )

    def process_batch(
        self,
        recordings: Sequence[ArrayLike],
        stop_event: threading.Event | None = None,
    ) -> list[JumpEvent]:
        """Process a batch of recordings, preserving input order.

        Recordings are independent, so they run in a thread pool when
        ``pipeline.max_workers`` is greater than one.

        Args:
            recordings: Batch of (n, 3) acceleration arrays
            stop_event: When set, remaining recordings are skipped

        Returns:
            Events for the recordings processed before any stop
        """
        batch = as_recordings(recordings)
        max_workers = self.settings.pipeline.max_workers

        def run(item: tuple[int, ArrayLike]) -> JumpEvent | None:
            index, recording = item
            if stop_event is not None and stop_event.is_set():
                return None
            return self.process_recording(recording, index)

        if max_workers > 1:
            with ThreadPoolExecutor(max_workers=max_workers) as pool:
                outcomes = list(pool.map(run, enumerate(batch)))
        else:
            outcomes = []
            for item in enumerate(batch):
                outcome = run(item)
                if outcome is None:
                    break
                outcomes.append(outcome)

        events: list[JumpEvent] = []
        for outcome in outcomes:
            if outcome is None:
                break
            events.append(outcome)
            self._stats.add_event(outcome)

        if len(events) < len(batch):
            logger.info("Batch stopped after %d of %d recordings", len(events), len(batch))
        logger.info(
            "Processed %d recordings, %d complete jumps",
            len(events),
            sum(1 for e in events if e.is_complete),
        )

        return events
