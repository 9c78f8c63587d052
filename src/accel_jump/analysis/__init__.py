"""Pure analysis logic: landing and takeoff detection, scoring, and metrics.

Detection modules contain NO I/O operations. All functions operate on numpy
arrays and typed dataclasses and return results.
"""

from accel_jump.analysis.landing import LandingDetector, calibrate_landing, detect_landing
from accel_jump.analysis.metrics import FlightMetrics, flight_metrics, summarize
from accel_jump.analysis.scoring import landing_criterion, rms_error
from accel_jump.analysis.takeoff import TakeoffDetector, calibrate_takeoff, detect_takeoff

__all__ = [
    "LandingDetector",
    "TakeoffDetector",
    "detect_landing",
    "detect_takeoff",
    "calibrate_landing",
    "calibrate_takeoff",
    "landing_criterion",
    "rms_error",
    "FlightMetrics",
    "flight_metrics",
    "summarize",
]
