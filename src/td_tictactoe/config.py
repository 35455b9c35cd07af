"""Training configuration models and loading."""

from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from td_tictactoe.exceptions import ConfigurationError


class SeatConfig(BaseModel):
    """Hyperparameters for the agent in one seat."""

    epsilon: float = Field(default=0.08, description="Exploration probability")
    alpha: float = Field(default=0.1, description="TD step size")

    @field_validator("epsilon")
    @classmethod
    def validate_epsilon(cls, v: float) -> float:
        """Validate exploration probability."""
        if not 0.0 <= v <= 1.0:
            raise ValueError("epsilon must be between 0 and 1")
        return v

    @field_validator("alpha")
    @classmethod
    def validate_alpha(cls, v: float) -> float:
        """Validate step size."""
        if not 0.0 < v <= 1.0:
            raise ValueError("alpha must be greater than 0 and at most 1")
        return v


class TrainingConfig(BaseModel):
    """Self-play training configuration."""

    episodes: int = Field(default=500, description="Number of games to play")
    player_a: SeatConfig = Field(
        default_factory=SeatConfig, description="Agent playing mark A (moves first)"
    )
    player_b: SeatConfig = Field(
        default_factory=SeatConfig, description="Agent playing mark B"
    )
    estimates_path: str = Field(
        default="rlttt_estimates", description="File the mark A table is saved to"
    )
    resume_from: Optional[str] = Field(
        default=None, description="Estimates file to start mark A from"
    )
    seed: Optional[int] = Field(default=None, description="Random seed")
    report_interval: int = Field(
        default=100, description="Episodes between progress reports"
    )
    log_level: str = Field(default="INFO", description="Logging level")

    @field_validator("episodes")
    @classmethod
    def validate_episodes(cls, v: int) -> int:
        """Validate episode count."""
        if v < 1:
            raise ValueError("episodes must be at least 1")
        return v

    @field_validator("report_interval")
    @classmethod
    def validate_report_interval(cls, v: int) -> int:
        """Validate report interval."""
        if v < 1:
            raise ValueError("report_interval must be at least 1")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate logging level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"log_level must be one of: {', '.join(valid_levels)}")
        return v.upper()


def load_config(
    config_path: Optional[Union[str, Path]] = None,
    overrides: Optional[Dict[str, Any]] = None,
) -> TrainingConfig:
    """Load training configuration.

    Values come from the model defaults, then the YAML file (if given), then
    overrides. Overrides set to None are ignored, so unset CLI options can be
    passed straight through.

    Args:
        config_path: Path to a YAML configuration file
        overrides: Top-level values that take precedence over the file

    Returns:
        Validated training configuration

    Raises:
        ConfigurationError: If the file cannot be read or values are invalid
    """
    config_data: Dict[str, Any] = {}

    if config_path is not None:
        config_data = _load_yaml_file(Path(config_path))

    for key, value in (overrides or {}).items():
        if value is not None:
            config_data[key] = value

    try:
        return TrainingConfig(**config_data)
    except ValidationError as e:
        raise ConfigurationError(f"Configuration validation failed: {e}") from e


def _load_yaml_file(file_path: Path) -> Dict[str, Any]:
    """Load and parse a YAML configuration file."""
    try:
        with open(file_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {file_path}: {e}") from e
    except OSError as e:
        raise ConfigurationError(f"Failed to read {file_path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"Configuration file {file_path} must contain a mapping")
    return data
