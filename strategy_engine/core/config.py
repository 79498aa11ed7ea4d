"""strategy_engine.core.config

Two config surfaces only:
1) `config/default.yaml` + `config/presets/*.yaml`
2) Environment variables (``STRATEGY_ENGINE_`` prefix)

Everything else is derived.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from strategy_engine.core.exceptions import ConfigError


def _deep_merge(base: dict[str, Any], overlay: dict[str, Any]) -> dict[str, Any]:
    result: dict[str, Any] = dict(base)
    for k, v in overlay.items():
        if k in result and isinstance(result[k], dict) and isinstance(v, dict):
            result[k] = _deep_merge(result[k], v)
        else:
            result[k] = v
    return result


class BacktestConfig(BaseModel):
    initial_cash: float = 10_000.0
    allocation_fraction: float = 0.2  # fraction of cash committed per BUY
    periods_per_year: int = 252

    @field_validator("initial_cash")
    @classmethod
    def initial_cash_must_be_positive(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("initial_cash must be > 0")
        return v

    @field_validator("allocation_fraction")
    @classmethod
    def allocation_fraction_in_range(cls, v: float) -> float:
        if not 0.0 < v <= 1.0:
            raise ValueError("allocation_fraction must be in (0, 1]")
        return v

    @field_validator("periods_per_year")
    @classmethod
    def periods_per_year_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("periods_per_year must be >= 1")
        return v


class StrategyConfig(BaseModel):
    """Strategy kind + constructor parameters (minus the symbol)."""

    kind: str = "sma_crossover"
    params: dict[str, Any] = Field(default_factory=dict)

    @model_validator(mode="after")
    def kind_not_blank(self) -> StrategyConfig:
        if not self.kind.strip():
            raise ValueError("strategy kind must not be empty")
        return self


class LoggingConfig(BaseModel):
    level: str = "INFO"
    json_output: bool = False


class EngineConfig(BaseSettings):
    """Root configuration. Single source of truth."""

    preset: Literal["conservative", "balanced", "aggressive", "custom"] = "balanced"

    backtest: BacktestConfig = Field(default_factory=BacktestConfig)
    strategy: StrategyConfig = Field(default_factory=StrategyConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = {"env_prefix": "STRATEGY_ENGINE_", "env_nested_delimiter": "__"}

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # Environment wins over values loaded from YAML (passed as init kwargs).
        return env_settings, init_settings, dotenv_settings, file_secret_settings

    @classmethod
    def from_yaml(cls, path: Path) -> EngineConfig:
        if not path.exists():
            raise ConfigError(f"Config file not found: {path}")

        try:
            raw = yaml.safe_load(path.read_text()) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Config file is not valid YAML: {path}") from e

        preset_name = raw.get("preset", "balanced")
        preset_path = path.parent / "presets" / f"{preset_name}.yaml"
        if preset_path.exists():
            preset_data = yaml.safe_load(preset_path.read_text()) or {}
            raw = _deep_merge(preset_data, raw)

        try:
            return cls(**raw)
        except ValueError as e:
            raise ConfigError(str(e)) from e
