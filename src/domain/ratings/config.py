"""Load tournament rating definitions from TOML files."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from domain.config_base import BaseSystemConfig, load_system_config, load_system_configs
from domain.ratings.calculator import RatingParameters

DEFAULT_OUTPUT_NAME = "output"


@dataclass(frozen=True)
class RatingSystemConfig(BaseSystemConfig):
    """Configuration for one calculation run."""

    parameters: RatingParameters
    output_name: str = DEFAULT_OUTPUT_NAME

    def as_config_json(self) -> dict[str, Any]:
        return {
            "rounds": self.parameters.round_count,
            "points_per_round": self.parameters.points_per_round,
            "full_mark": self.parameters.full_mark,
            "output_name": self.output_name,
        }


def load_rating_system_configs(config_dir: Path) -> list[RatingSystemConfig]:
    """Load and validate all rating TOML config files in a directory."""
    return load_system_configs(
        config_dir,
        _parse_rating_system_config,
        duplicate_name_label="rating",
    )


def load_rating_system_config(file_path: Path) -> RatingSystemConfig:
    """Load and validate a single rating TOML config file."""
    return load_system_config(file_path, _parse_rating_system_config)


def _parse_rating_system_config(raw: dict[str, Any], file_path: Path) -> RatingSystemConfig:
    system_raw = raw.get("system", {})
    tournament_raw = raw.get("tournament", {})

    name = str(system_raw.get("name", "")).strip()
    if not name:
        raise ValueError(f"{file_path}: [system].name is required")

    description_value = system_raw.get("description")
    description = None if description_value is None else str(description_value)

    output_name = str(tournament_raw.get("output_name", DEFAULT_OUTPUT_NAME)).strip()
    if not output_name:
        raise ValueError(f"{file_path}: [tournament].output_name must not be empty")

    parameters = RatingParameters(
        round_count=int(tournament_raw.get("rounds", 4)),
        points_per_round=float(tournament_raw.get("points_per_round", 2.0)),
    )
    _validate_parameters(file_path=file_path, parameters=parameters)

    return RatingSystemConfig(
        name=name,
        description=description,
        file_path=file_path,
        parameters=parameters,
        output_name=output_name,
    )


def _validate_parameters(*, file_path: Path, parameters: RatingParameters) -> None:
    if parameters.round_count < 1:
        raise ValueError(f"{file_path}: [tournament].rounds must be >= 1")
    if parameters.points_per_round <= 0.0:
        raise ValueError(f"{file_path}: [tournament].points_per_round must be > 0")


__all__ = [
    "DEFAULT_OUTPUT_NAME",
    "RatingSystemConfig",
    "load_rating_system_config",
    "load_rating_system_configs",
]
