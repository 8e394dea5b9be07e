"""Configuration for the strokes-gained engine."""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

BaselineSource = Literal["pga_tour", "scratch", "custom"]


class SGConfig(BaseSettings):
    """Engine options, overridable through ``SG_*`` environment variables.

    ``use_conditions_adjustment`` and ``use_course_adjustment`` are accepted
    but not applied by the core formula. ``min_shots_for_calculation`` is
    advisory: callers compare it against ``SGSummary.shots_analyzed``.
    """

    baseline_source: BaselineSource = "pga_tour"
    use_conditions_adjustment: bool = False
    use_course_adjustment: bool = False
    min_shots_for_calculation: int = Field(default=1, ge=0)
    rounding_precision: int = Field(default=3, ge=0, le=10)

    model_config = SettingsConfigDict(
        env_prefix="SG_", env_file=".env", extra="ignore", frozen=True
    )


@lru_cache(maxsize=1)
def get_config() -> SGConfig:
    """Return cached engine configuration."""

    return SGConfig()


def reset_config_cache() -> None:
    """Clear cached configuration (primarily for tests)."""

    get_config.cache_clear()


__all__ = ["BaselineSource", "SGConfig", "get_config", "reset_config_cache"]
