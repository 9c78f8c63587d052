#!/usr/bin/env python3
"""Detect jump takeoff and landing in accelerometer recordings.

Processes one CSV per recording (three acceleration columns in g) and
optionally compares the detections against reference indices.
"""

from __future__ import annotations

import argparse
import csv
import sys
from dataclasses import dataclass
from pathlib import Path

import numpy as np

from accel_jump.analysis.landing import LandingDetector
from accel_jump.analysis.metrics import export_batch_data, summarize
from accel_jump.analysis.takeoff import TakeoffDetector
from accel_jump.core.config import get_settings
from accel_jump.core.exceptions import AccelJumpError
from accel_jump.core.logging import get_logger, setup_logging
from accel_jump.core.types import NO_EVENT, JumpEvent, Recording
from accel_jump.pipeline.processor import RecordingProcessor

logger = get_logger(__name__)


@dataclass
class ReferenceRow:
    """Ground truth for a single recording."""

    recording: str
    takeoff: int
    landing_duration: float
    takeoff_criterion: int


def load_recording(csv_path: Path) -> Recording:
    """Load a triaxial recording from CSV, skipping a header row if present.

    Args:
        csv_path: Path to CSV file

    Returns:
        (n, 3) array of accelerations
    """
    rows: list[list[float]] = []

    with open(csv_path, newline="") as f:
        reader = csv.reader(f)
        for line_no, row in enumerate(reader):
            if not row:
                continue
            try:
                rows.append([float(v) for v in row[:3]])
            except ValueError:
                if line_no == 0:
                    continue
                raise

    return np.asarray(rows, dtype=np.float64)


def load_reference_data(csv_path: Path) -> dict[str, ReferenceRow]:
    """Load reference indices from CSV.

    Expected format: recording,takeoff,landing_duration,takeoff_criterion

    Args:
        csv_path: Path to CSV file

    Returns:
        Reference rows keyed by recording file stem
    """
    references: dict[str, ReferenceRow] = {}

    with open(csv_path, newline="") as f:
        reader = csv.DictReader(f)
        for row in reader:
            ref = ReferenceRow(
                recording=Path(row["recording"]).stem,
                takeoff=int(row["takeoff"]),
                landing_duration=float(row["landing_duration"]),
                takeoff_criterion=int(row.get("takeoff_criterion") or row["takeoff"]),
            )
            references[ref.recording] = ref

    logger.info("Loaded %d reference rows", len(references))
    return references


def _fmt_index(index: int) -> str:
    return "N/A" if index == NO_EVENT else str(index)


def print_results(names: list[str], events: list[JumpEvent]) -> None:
    """Print per-recording detections to console."""
    print("\n" + "=" * 72)
    print("DETECTED EVENTS")
    print("=" * 72)
    print(f"{'Recording':<24} {'Takeoff':<9} {'Landing':<9} {'Impact':<9} {'Flight s':<10} {'Height cm':<10}")
    print("-" * 72)

    for name, e in zip(names, events):
        flight = f"{e.flight_time_s:.3f}" if e.flight_time_s is not None else "N/A"
        height = f"{e.height_cm:.1f}" if e.height_cm is not None else "N/A"
        print(
            f"{name:<24} "
            f"{_fmt_index(e.takeoff_index):<9} "
            f"{_fmt_index(e.landing_index):<9} "
            f"{_fmt_index(e.impact_index):<9} "
            f"{flight:<10} "
            f"{height:<10}"
        )


def print_calibration(
    recordings: list[Recording],
    names: list[str],
    events: list[JumpEvent],
    references: dict[str, ReferenceRow],
) -> None:
    """Print landing and takeoff RMS errors for recordings with references."""
    matched = [i for i, name in enumerate(names) if name in references]
    if not matched:
        logger.warning("No recordings match the reference file")
        return

    settings = get_settings()
    batch = [recordings[i] for i in matched]
    refs = [references[names[i]] for i in matched]

    landing = LandingDetector(settings.landing).calibrate(
        batch,
        [r.takeoff for r in refs],
        [r.landing_duration for r in refs],
        settings.calibration,
    )
    takeoff = TakeoffDetector(settings.takeoff).calibrate(
        batch,
        [events[i].landing_index for i in matched],
        [r.takeoff_criterion for r in refs],
        settings.calibration,
    )

    print("\n" + "=" * 72)
    print("CALIBRATION")
    print("=" * 72)
    print(f"Matched recordings:  {len(matched)}")
    for label, result in (("Landing", landing), ("Takeoff", takeoff)):
        status = "feasible" if result.is_feasible else "INFEASIBLE"
        print(f"{label} RMS error:   {result.rms_error:.2f} samples ({status})")


def main() -> int:
    """Run detection script."""
    parser = argparse.ArgumentParser(description="Detect jump takeoff and landing")
    parser.add_argument(
        "recordings",
        type=Path,
        nargs="+",
        help="CSV files with x,y,z acceleration columns in g",
    )
    parser.add_argument(
        "--reference",
        "-r",
        type=Path,
        help="Path to CSV with reference indices",
    )
    parser.add_argument(
        "--output",
        "-o",
        type=Path,
        help="Output JSON for results",
    )

    args = parser.parse_args()

    settings = get_settings()
    setup_logging(settings.logging.level, settings.logging.file)

    names = [p.stem for p in args.recordings]
    recordings = [load_recording(p) for p in args.recordings]

    processor = RecordingProcessor(settings)
    try:
        events = processor.process_batch(recordings)
    except AccelJumpError as exc:
        logger.error("Detection failed: %s", exc)
        return 1

    print_results(names, events)

    summary = summarize(processor.stats)
    print(f"\nComplete jumps:      {summary.detected_jumps}/{summary.total_recordings}")
    if summary.avg_height_cm is not None:
        print(f"Mean height:         {summary.avg_height_cm:.1f} cm")
        print(f"Max height:          {summary.max_height_cm:.1f} cm")

    if args.reference and args.reference.exists():
        print_calibration(recordings, names, events, load_reference_data(args.reference))

    if args.output:
        export_batch_data(processor.stats, args.output)
        logger.info("Results saved to %s", args.output)

    return 0


if __name__ == "__main__":
    sys.exit(main())
