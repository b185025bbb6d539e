"""Configuration management.

Loads from TOML config files + environment variables.
Uses pydantic-settings for validation and env var overriding.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, model_validator
from pydantic_settings import BaseSettings

from .enums import GoalType


# ---------------------------------------------------------------------------
# Sub-configs
# ---------------------------------------------------------------------------

class ProjectionConfig(BaseModel):
    n_simulations: int = Field(default=3000, ge=1)


class GoalThresholds(BaseModel):
    """Status cut-offs as multiples of a goal's target.

    Higher-is-better goals are on track at ``current >= target * on_track_ratio``
    and broken below ``target * broken_ratio``.
    Lower-is-better goals are on track below ``target * on_track_ratio``
    and broken at ``current >= target * broken_ratio``.
    Anything between is at risk.
    """

    on_track_ratio: float = Field(ge=0.0)
    broken_ratio: float = Field(ge=0.0)


def _default_goal_thresholds() -> dict[GoalType, GoalThresholds]:
    # Multipliers as currently used in production; pending stakeholder review
    return {
        GoalType.MONTHLY_PROFIT: GoalThresholds(on_track_ratio=1.0, broken_ratio=0.7),
        GoalType.WIN_RATE: GoalThresholds(on_track_ratio=1.0, broken_ratio=0.9),
        GoalType.CONSISTENCY: GoalThresholds(on_track_ratio=1.0, broken_ratio=0.9),
        GoalType.MAX_DAILY_LOSS: GoalThresholds(on_track_ratio=0.9, broken_ratio=1.0),
        GoalType.MAX_TRADES_PER_DAY: GoalThresholds(on_track_ratio=0.9, broken_ratio=1.0),
    }


class GoalConfig(BaseModel):
    thresholds: dict[GoalType, GoalThresholds] = Field(
        default_factory=_default_goal_thresholds
    )

    @model_validator(mode="after")
    def _fill_missing(self) -> "GoalConfig":
        defaults = _default_goal_thresholds()
        for goal_type, thresholds in defaults.items():
            self.thresholds.setdefault(goal_type, thresholds)
        return self

    def for_type(self, goal_type: GoalType) -> GoalThresholds:
        return self.thresholds[goal_type]


def _default_tracked_fields() -> dict[str, str]:
    return {
        "trading_quality": "Trading Quality",
        "revenge_trading": "Revenge Trading",
        "overtrading": "Overtrading",
        "sleep_quality": "Sleep Quality",
        "caffeine": "Caffeine",
    }


class JournalConfig(BaseModel):
    # journal field name -> display label, in display order
    tracked_fields: dict[str, str] = Field(default_factory=_default_tracked_fields)


class ObservabilityConfig(BaseModel):
    log_level: str = "INFO"
    log_format: str = "json"  # "json" or "console"


# ---------------------------------------------------------------------------
# Top-level settings
# ---------------------------------------------------------------------------

class Settings(BaseSettings):
    """Top-level analytics settings.

    Loaded from TOML config files, overridden by environment variables.
    """

    projection: ProjectionConfig = Field(default_factory=ProjectionConfig)
    goals: GoalConfig = Field(default_factory=GoalConfig)
    journal: JournalConfig = Field(default_factory=JournalConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)

    model_config = {"env_prefix": "JOURNAL_ANALYTICS_", "env_nested_delimiter": "__"}


def load_settings(
    config_path: str | Path | None = None,
    overrides: dict[str, Any] | None = None,
) -> Settings:
    """Load settings from TOML file + env vars.

    Args:
        config_path: Path to TOML config file (optional).
        overrides: Dict of overrides to apply on top.

    Raises:
        ConfigError: if the file exists but is not valid TOML.
    """
    data: dict[str, Any] = {}

    if config_path:
        path = Path(config_path)
        if path.exists():
            import tomli

            from .errors import ConfigError

            try:
                with open(path, "rb") as f:
                    data = tomli.load(f)
            except tomli.TOMLDecodeError as exc:
                raise ConfigError(f"Invalid config file {path}: {exc}") from exc

    if overrides:
        data.update(overrides)

    return Settings(**data)
