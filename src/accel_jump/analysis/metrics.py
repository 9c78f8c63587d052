"""Flight metrics and batch summaries derived from detected events.

This module is pure logic apart from the JSON export helpers.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path

from accel_jump.core.types import NO_EVENT, BatchStats, JumpEvent

# Standard gravity in cm/s^2
GRAVITY_CM_S2 = 980.665


@dataclass(frozen=True)
class FlightMetrics:
    """Airborne duration and the jump height it implies."""

    flight_time_s: float
    height_cm: float
    takeoff_velocity_cm_s: float


@dataclass
class BatchSummary:
    """Summary statistics for a batch of recordings."""

    total_recordings: int
    detected_jumps: int
    max_height_cm: float | None
    avg_height_cm: float | None
    std_height_cm: float | None
    min_height_cm: float | None


def flight_metrics(
    takeoff_index: int,
    landing_index: int,
    sample_interval_s: float,
) -> FlightMetrics | None:
    """Compute flight time and jump height from an index pair.

    Uses the flight-time method: for a symmetric trajectory the time to peak
    is half the airborne time, so ``h = g * t^2 / 8``.

    Args:
        takeoff_index: Detected takeoff sample
        landing_index: Detected landing sample
        sample_interval_s: Seconds between samples

    Returns:
        FlightMetrics, or None if either index is missing or flight time is not positive
    """
    if takeoff_index == NO_EVENT or landing_index == NO_EVENT:
        return None

    flight_time = (landing_index - takeoff_index) * sample_interval_s
    if flight_time <= 0:
        return None

    return FlightMetrics(
        flight_time_s=flight_time,
        height_cm=GRAVITY_CM_S2 * flight_time**2 / 8.0,
        takeoff_velocity_cm_s=GRAVITY_CM_S2 * flight_time / 2.0,
    )


def summarize(stats: BatchStats) -> BatchSummary:
    """Get batch summary statistics.

    Args:
        stats: Events collected from a batch

    Returns:
        BatchSummary with computed statistics
    """
    heights = [e.height_cm for e in stats.complete_events if e.height_cm is not None]

    return BatchSummary(
        total_recordings=stats.recording_count,
        detected_jumps=stats.detected_count,
        max_height_cm=stats.max_height,
        avg_height_cm=stats.avg_height,
        std_height_cm=stats.std_height,
        min_height_cm=min(heights) if heights else None,
    )


def export_batch_data(stats: BatchStats, path: Path) -> None:
    """Export batch events to a JSON file.

    Args:
        stats: Batch events to export
        path: Output file path
    """
    events_data = [
        {
            "recording_index": e.recording_index,
            "takeoff_index": e.takeoff_index,
            "landing_index": e.landing_index,
            "impact_index": e.impact_index,
            "flight_time_s": e.flight_time_s,
            "height_cm": e.height_cm,
        }
        for e in stats.events
    ]

    data = {
        "recording_count": stats.recording_count,
        "detected_count": stats.detected_count,
        "max_height": stats.max_height,
        "avg_height": stats.avg_height,
        "std_height": stats.std_height,
        "events": events_data,
    }

    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        json.dump(data, f, indent=2)


def import_batch_data(path: Path) -> BatchStats:
    """Import batch events from a JSON file.

    Args:
        path: Input file path

    Returns:
        Reconstructed BatchStats
    """
    with open(path) as f:
        data = json.load(f)

    stats = BatchStats()
    for e in data.get("events", []):
        stats.add_event(
            JumpEvent(
                recording_index=e["recording_index"],
                takeoff_index=e["takeoff_index"],
                landing_index=e["landing_index"],
                impact_index=e["impact_index"],
                flight_time_s=e.get("flight_time_s"),
                height_cm=e.get("height_cm"),
            )
        )

    return stats
