"""Core infrastructure: config, types, exceptions, and logging."""

from accel_jump.core.config import Settings, get_settings
from accel_jump.core.exceptions import (
    AccelJumpError,
    JumpDetectionError,
    NoCandidateFound,
    OrientationError,
    PreconditionViolation,
)
from accel_jump.core.logging import get_logger, setup_logging
from accel_jump.core.types import (
    NO_EVENT,
    BatchStats,
    CalibrationResult,
    Feasibility,
    JumpEvent,
    LandingResult,
    Recording,
    SpikeCandidate,
    TakeoffAxis,
    TakeoffResult,
)

__all__ = [
    # Config
    "Settings",
    "get_settings",
    # Types
    "NO_EVENT",
    "Recording",
    "SpikeCandidate",
    "LandingResult",
    "TakeoffAxis",
    "TakeoffResult",
    "Feasibility",
    "CalibrationResult",
    "JumpEvent",
    "BatchStats",
    # Exceptions
    "AccelJumpError",
    "PreconditionViolation",
    "JumpDetectionError",
    "NoCandidateFound",
    "OrientationError",
    # Logging
    "setup_logging",
    "get_logger",
]
