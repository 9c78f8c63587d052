"""Recording processing pipeline orchestration."""

from accel_jump.pipeline.processor import RecordingProcessor

__all__ = ["RecordingProcessor"]
