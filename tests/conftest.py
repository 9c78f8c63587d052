"""Pytest fixtures for accel-jump tests."""

from __future__ import annotations

from collections.abc import Callable

import numpy as np
import pytest

from accel_jump.core.config import (
    CalibrationSettings,
    LandingSettings,
    PipelineSettings,
    Settings,
    TakeoffSettings,
)


def _triaxial(x: np.ndarray, y: np.ndarray | None = None, z: np.ndarray | None = None) -> np.ndarray:
    """Stack axis series into an (n, 3) recording, zero-filling missing axes."""
    zeros = np.zeros_like(x)
    return np.column_stack([x, zeros if y is None else y, zeros if z is None else z])


def _scenario_resultant(dip_value: float = 0.2) -> np.ndarray:
    """Resultant flat at 1 g, dipping over 51-70, with a 3 g peak at 75."""
    r = np.ones(100)
    r[51:71] = dip_value
    r[71:75] = [1.0, 1.5, 2.0, 2.5]
    r[75] = 3.0
    r[76:80] = [2.5, 2.0, 1.5, 1.2]
    return r


def _takeoff_recording(dz_peak: int, n: int = 100) -> np.ndarray:
    """Recording with an x trough at 20, an x peak at 60 and a z step at ``dz_peak``.

    The fastest rise of x is at index 40. Samples after index 80 jump to a
    large constant so any search past a landing at 80 would be visible.
    """
    i = np.arange(n, dtype=np.float64)
    x = np.where(
        i <= 20,
        -i / 20.0,
        np.where(
            i <= 60,
            -1.0 + 1.5 * (1.0 - np.cos(np.pi * (i - 20.0) / 40.0)),
            np.where(i <= 80, 2.0 - (i - 60.0) / 10.0, 10.0),
        ),
    )
    z = np.tanh((i - dz_peak) / 3.0)
    return _triaxial(x, z=z)


def _jump_recording() -> np.ndarray:
    """Stand, crouch, push off, fly from 50 to 79, and impact at 80."""
    n = 150
    x = np.zeros(n)
    x[20:31] = np.linspace(0.0, -0.3, 11)
    x[30:49] = np.linspace(-0.3, 0.3, 19)
    x[49:] = 0.05

    z = np.ones(n)
    z[40:48] = np.linspace(1.0, 2.0, 8)
    z[48:50] = [1.2, 0.6]
    z[50:80] = 0.1
    z[80] = 4.0
    z[81:90] = np.linspace(3.5, 1.0, 9)
    return _triaxial(x, z=z)


@pytest.fixture
def scenario_settings() -> LandingSettings:
    """Landing settings matching the reference scenarios."""
    return LandingSettings(
        smoothing_half_width=0,
        freefall_threshold=0.5,
        max_spike_search_width=30,
        freefall_baseline_window=10,
        index_offset=0,
    )


@pytest.fixture
def takeoff_settings() -> TakeoffSettings:
    """Takeoff settings without smoothing or reorientation."""
    return TakeoffSettings(
        smoothing_half_width=0,
        reorient_to_vertical=False,
        max_axis_divergence=10,
        index_offset=0,
    )


@pytest.fixture
def calibration_settings() -> CalibrationSettings:
    """Calibration settings with the default penalty."""
    return CalibrationSettings()


@pytest.fixture
def scenario_a() -> np.ndarray:
    """Recording with a genuine free-fall dip before the impact spike."""
    return _triaxial(_scenario_resultant())


@pytest.fixture
def scenario_b() -> np.ndarray:
    """Recording whose resultant never drops below 0.5 g."""
    return _triaxial(_scenario_resultant(dip_value=0.8))


@pytest.fixture
def triaxial() -> Callable[..., np.ndarray]:
    """Factory stacking axis series into a recording."""
    return _triaxial


@pytest.fixture
def scenario_resultant() -> Callable[..., np.ndarray]:
    """Factory for the dip-then-spike resultant, with a configurable dip."""
    return _scenario_resultant


@pytest.fixture
def takeoff_recording() -> Callable[..., np.ndarray]:
    """Factory for takeoff recordings with the z step at a given index."""
    return _takeoff_recording


@pytest.fixture
def jump() -> np.ndarray:
    """A full synthetic jump recording."""
    return _jump_recording()


@pytest.fixture
def pipeline_settings(
    scenario_settings: LandingSettings,
    takeoff_settings: TakeoffSettings,
) -> Settings:
    """Application settings for pipeline tests."""
    return Settings(
        landing=scenario_settings,
        takeoff=takeoff_settings,
        pipeline=PipelineSettings(max_workers=1),
    )
