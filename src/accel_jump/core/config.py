"""Application configuration via Pydantic Settings."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class LandingSettings(BaseSettings):
    """Landing/impact detection parameters."""

    model_config = SettingsConfigDict(env_prefix="LANDING_")

    smoothing_half_width: int = Field(default=2, ge=0)
    freefall_threshold: float = Field(default=0.5, gt=0.0)
    max_spike_search_width: int = Field(default=50, ge=0)
    freefall_baseline_window: int = Field(default=25, ge=0)
    index_offset: int = 0


class TakeoffSettings(BaseSettings):
    """Takeoff detection parameters."""

    model_config = SettingsConfigDict(env_prefix="TAKEOFF_")

    smoothing_half_width: int = Field(default=5, ge=0)
    reorient_to_vertical: bool = False
    initial_orientation_reference: tuple[float, float, float] = (0.0, 0.0, 1.0)
    still_samples: int = Field(default=25, ge=1)
    rotation_iteration_budget: int = Field(default=100, ge=1)
    max_axis_divergence: int = 10
    index_offset: int = 0


class RecordingSettings(BaseSettings):
    """Accelerometer recording properties."""

    model_config = SettingsConfigDict(env_prefix="RECORDING_")

    sample_interval_s: float = Field(default=0.004, gt=0.0)


class CalibrationSettings(BaseSettings):
    """Error metric settings consumed by external parameter searches."""

    model_config = SettingsConfigDict(env_prefix="CALIBRATION_")

    infeasible_penalty: float = 1.0e4
    landing_duration_fraction: float = 0.25


class PipelineSettings(BaseSettings):
    """Batch processing settings."""

    model_config = SettingsConfigDict(env_prefix="PIPELINE_")

    max_workers: int = Field(default=1, ge=1)


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(env_prefix="LOG_")

    level: str = "INFO"
    file: str | None = None


class Settings(BaseSettings):
    """Root settings aggregating all configuration sections."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    landing: LandingSettings = Field(default_factory=LandingSettings)
    takeoff: TakeoffSettings = Field(default_factory=TakeoffSettings)
    recording: RecordingSettings = Field(default_factory=RecordingSettings)
    calibration: CalibrationSettings = Field(default_factory=CalibrationSettings)
    pipeline: PipelineSettings = Field(default_factory=PipelineSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings instance."""
    return Settings()
