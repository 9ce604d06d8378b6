"""
ETICA Configuration.

Pydantic Settings v2 — loads from .env, environment variables.
Scoring coefficients default to the calibrated values in
``etica.scoring.weights``; override them only for experiments.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Core settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ── Application ──────────────────────────────────────────────────────
    app_name: str = "ETICA Core"
    app_version: str = "1.0.0"

    # ── Logging ───────────────────────────────────────────────────────────
    log_level: str = Field(default="INFO", alias="ETICA_LOG_LEVEL")
    log_format: str = Field(default="console", alias="ETICA_LOG_FORMAT")  # console | json

    # ── Vigilance Scoring ─────────────────────────────────────────────────
    # Intrinsic exposure
    decision_factor: float = Field(default=0.35, alias="VIGILANCE_DECISION_FACTOR")
    vulnerable_bonus: float = Field(default=0.3, alias="VIGILANCE_VULNERABLE_BONUS")
    scale_factor: float = Field(default=0.1, alias="VIGILANCE_SCALE_FACTOR")
    # Flow-derived exposure (per relevant edge)
    flow_sensitivity_factor: float = Field(default=0.05, alias="VIGILANCE_FLOW_SENSITIVITY_FACTOR")
    flow_profile_factor: float = Field(default=0.05, alias="VIGILANCE_FLOW_PROFILE_FACTOR")
    # Tension-derived exposure (per active tension)
    tension_factor: float = Field(default=0.15, alias="VIGILANCE_TENSION_FACTOR")
    # Share of exposure that full coverage can remove
    max_coverage_reduction: float = Field(default=0.7, alias="VIGILANCE_MAX_COVERAGE_REDUCTION")

    # ── Framework Coverage ────────────────────────────────────────────────
    max_gaps_per_lens: int = Field(default=10, alias="FRAMEWORK_MAX_GAPS_PER_LENS")
    max_gaps_total: int = Field(default=20, alias="FRAMEWORK_MAX_GAPS_TOTAL")


settings = Settings()
