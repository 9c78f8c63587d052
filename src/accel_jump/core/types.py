"""Core data types and structures."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum, auto
from typing import Generic, TypeVar

import numpy as np
from numpy.typing import NDArray

# Sentinel index reported when an event could not be located
NO_EVENT = -1

# An (n, 3) array of accelerations in g
Recording = NDArray[np.float64]


@dataclass(frozen=True, slots=True)
class SpikeCandidate:
    """A resultant-acceleration peak paired with its preceding free-fall lull.

    Attributes:
        peak_index: Sample index of the impact spike
        peak_value: Smoothed resultant at the spike (g)
        onset_index: Last below-threshold sample at or before the spike
        baseline: Mean resultant over the window ending at the onset (g)
    """

    peak_index: int
    peak_value: float
    onset_index: int
    baseline: float

    @property
    def score(self) -> float:
        """Peak-to-lull ratio; a zero baseline scores infinitely high."""
        if self.baseline <= 0.0:
            return float("inf")
        return self.peak_value / self.baseline


@dataclass(frozen=True, slots=True)
class LandingResult:
    """Landing detection outcome for one recording.

    Attributes:
        impact_index: Index of the chosen impact spike, or NO_EVENT
        landing_index: Free-fall onset plus offset, or NO_EVENT
        peak_to_lull: Score of the chosen candidate
        candidates: Number of spike candidates examined
    """

    impact_index: int
    landing_index: int
    peak_to_lull: float | None = None
    candidates: int = 0

    @property
    def found(self) -> bool:
        """Whether a verified landing was located."""
        return self.impact_index != NO_EVENT

    @classmethod
    def missing(cls, candidates: int = 0) -> LandingResult:
        """Sentinel result for a recording without a verified landing."""
        return cls(impact_index=NO_EVENT, landing_index=NO_EVENT, candidates=candidates)


class TakeoffAxis(Enum):
    """Which derivative peak the takeoff decision settled on."""

    VERTICAL = auto()
    SECONDARY = auto()


@dataclass(frozen=True, slots=True)
class TakeoffResult:
    """Takeoff detection outcome for one recording.

    Intermediate indices are relative to the recording start and exclude the
    final index offset.
    """

    takeoff_index: int
    x_min_index: int = NO_EVENT
    x_max_index: int = NO_EVENT
    dx_max_index: int = NO_EVENT
    dz_max_index: int = NO_EVENT
    axis: TakeoffAxis | None = None
    rotation_angle_deg: float | None = None

    @property
    def found(self) -> bool:
        """Whether a takeoff was located."""
        return self.axis is not None

    @classmethod
    def missing(cls) -> TakeoffResult:
        """Sentinel result for a recording without a landing backstop."""
        return cls(takeoff_index=NO_EVENT)


class Feasibility(IntEnum):
    """Calibration feasibility flag as consumed by parameter searches."""

    FEASIBLE = -1
    INFEASIBLE = 1


ResultT = TypeVar("ResultT", LandingResult, TakeoffResult)


@dataclass
class CalibrationResult(Generic[ResultT]):
    """Batch error metric against ground-truth indices.

    Attributes:
        rms_error: Root-mean-square index error, or the penalty when infeasible
        feasibility: FEASIBLE when every recording produced an event
        results: Per-recording results computed before any short-circuit
    """

    rms_error: float
    feasibility: Feasibility
    results: list[ResultT] = field(default_factory=list)

    @property
    def is_feasible(self) -> bool:
        """Whether the error metric can be trusted."""
        return self.feasibility == Feasibility.FEASIBLE


@dataclass(slots=True)
class JumpEvent:
    """Detected takeoff and landing of a single recording.

    Attributes:
        recording_index: Position of the recording within its batch
        takeoff_index: Sample index of takeoff, or NO_EVENT
        landing_index: Sample index of landing, or NO_EVENT
        impact_index: Sample index of the impact spike, or NO_EVENT
        flight_time_s: Airborne duration in seconds
        height_cm: Jump height estimated from flight time
    """

    recording_index: int
    takeoff_index: int
    landing_index: int
    impact_index: int
    flight_time_s: float | None = None
    height_cm: float | None = None

    @property
    def airborne_samples(self) -> int | None:
        """Number of samples between takeoff and landing."""
        if self.takeoff_index == NO_EVENT or self.landing_index == NO_EVENT:
            return None
        return self.landing_index - self.takeoff_index

    @property
    def is_complete(self) -> bool:
        """Both events detected and flight metrics available."""
        return self.height_cm is not None


@dataclass(slots=True)
class BatchStats:
    """Jump events collected from a batch of recordings."""

    events: list[JumpEvent] = field(default_factory=list)

    @property
    def recording_count(self) -> int:
        """Total number of processed recordings."""
        return len(self.events)

    @property
    def complete_events(self) -> list[JumpEvent]:
        """Events with both takeoff and landing detected."""
        return [e for e in self.events if e.is_complete]

    @property
    def detected_count(self) -> int:
        """Number of recordings with a complete jump."""
        return len(self.complete_events)

    @property
    def max_height(self) -> float | None:
        """Maximum jump height in cm."""
        heights = [e.height_cm for e in self.complete_events if e.height_cm is not None]
        return max(heights) if heights else None

    @property
    def avg_height(self) -> float | None:
        """Average jump height in cm."""
        heights = [e.height_cm for e in self.complete_events if e.height_cm is not None]
        if not heights:
            return None
        return sum(heights) / len(heights)

    @property
    def std_height(self) -> float | None:
        """Standard deviation of jump heights in cm."""
        heights = [e.height_cm for e in self.complete_events if e.height_cm is not None]
        if len(heights) < 2:
            return None
        mean = sum(heights) / len(heights)
        variance = sum((h - mean) ** 2 for h in heights) / len(heights)
        return variance**0.5

    def add_event(self, event: JumpEvent) -> None:
        """Append a processed recording's event."""
        self.events.append(event)
