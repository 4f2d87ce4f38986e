"""Game configuration with YAML support."""

from __future__ import annotations

from pathlib import Path

import yaml
from pydantic import Field, field_validator

from quiz_core.schemas import BaseSchema, QuestionConfig

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class GameConfig(BaseSchema):
    """Runtime settings and the static question bank for one game session."""

    # Directory holding the per-run db-<unix-ms>.sqlite files
    db_dir: str = "db"
    log_level: str = "INFO"

    questions: list[QuestionConfig] = Field(default_factory=list)

    @field_validator("log_level")
    @classmethod
    def known_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {list(LOG_LEVELS)}, got {value!r}")
        return level

    @field_validator("questions")
    @classmethod
    def unique_question_ids(cls, value: list[QuestionConfig]) -> list[QuestionConfig]:
        ids = [question.id for question in value]
        duplicates = sorted({question_id for question_id in ids if ids.count(question_id) > 1})
        if duplicates:
            raise ValueError(f"duplicate question ids: {duplicates}")
        return value


def load_config(yaml_path: str | Path) -> GameConfig:
    """Load game configuration from YAML file.

    Args:
        yaml_path: Path to YAML configuration file

    Returns:
        GameConfig instance

    Raises:
        FileNotFoundError: If YAML file doesn't exist
        ValueError: If YAML is invalid or the question bank is malformed
    """
    yaml_path = Path(yaml_path)

    if not yaml_path.exists():
        raise FileNotFoundError(f"Config file not found: {yaml_path}")

    with open(yaml_path, "r", encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {yaml_path}: {e}") from e

    if not data:
        raise ValueError(f"Empty or invalid YAML file: {yaml_path}")

    try:
        return GameConfig.from_dict(data)
    except Exception as e:
        raise ValueError(f"Invalid configuration in {yaml_path}: {e}") from e


def save_config(config: GameConfig, yaml_path: str | Path) -> None:
    """Save game configuration to YAML file.

    Args:
        config: GameConfig to save
        yaml_path: Path where to save YAML file
    """
    yaml_path = Path(yaml_path)
    yaml_path.parent.mkdir(parents=True, exist_ok=True)

    data = config.to_dict()

    with open(yaml_path, "w", encoding="utf-8") as f:
        yaml.dump(data, f, default_flow_style=False, sort_keys=False, indent=2)
