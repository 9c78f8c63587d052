"""Takeoff and landing detection for vertical jumps from body-worn accelerometers."""

from accel_jump.analysis import (
    LandingDetector,
    TakeoffDetector,
    calibrate_landing,
    calibrate_takeoff,
    detect_landing,
    detect_takeoff,
)
from accel_jump.core import (
    NO_EVENT,
    CalibrationResult,
    Feasibility,
    JumpEvent,
    LandingResult,
    NoCandidateFound,
    PreconditionViolation,
    Settings,
    TakeoffResult,
    get_settings,
)
from accel_jump.pipeline import RecordingProcessor

__version__ = "0.1.0"

__all__ = [
    "LandingDetector",
    "TakeoffDetector",
    "detect_landing",
    "detect_takeoff",
    "calibrate_landing",
    "calibrate_takeoff",
    "RecordingProcessor",
    "NO_EVENT",
    "LandingResult",
    "TakeoffResult",
    "JumpEvent",
    "CalibrationResult",
    "Feasibility",
    "PreconditionViolation",
    "NoCandidateFound",
    "Settings",
    "get_settings",
]
