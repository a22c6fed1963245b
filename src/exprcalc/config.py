"""
Calculator configuration.

Parses the [calculator] section from exprcalc.toml and provides typed
settings for evaluation and result formatting.
"""

from __future__ import annotations

import tomllib
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from exprcalc.core.evaluator import DivisionPolicy
from exprcalc.core.parser import DEFAULT_MAX_DEPTH
from exprcalc.core.printer import DEFAULT_PRECISION

CONFIG_FILENAME = "exprcalc.toml"

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class CalculatorConfig(BaseModel):
    """Complete calculator configuration."""

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    precision: int = Field(default=DEFAULT_PRECISION, ge=1, le=17)
    division_policy: DivisionPolicy = Field(
        default=DivisionPolicy.ZERO, alias="division_by_zero"
    )
    max_depth: int = Field(default=DEFAULT_MAX_DEPTH, ge=1)
    log_level: LogLevel = "WARNING"


def load_config(toml_path: Path) -> CalculatorConfig:
    """
    Load calculator configuration from exprcalc.toml.

    Args:
        toml_path: Path to exprcalc.toml file

    Returns:
        CalculatorConfig with parsed values or defaults

    Raises:
        pydantic.ValidationError: If a setting has an invalid value
        tomllib.TOMLDecodeError: If the file is not valid TOML
    """
    if not toml_path.exists():
        return CalculatorConfig()

    with open(toml_path, "rb") as f:
        data = tomllib.load(f)

    calculator_data = data.get("calculator", {})

    if not calculator_data:
        return CalculatorConfig()

    return CalculatorConfig.model_validate(calculator_data)


def find_config(start: Path | None = None) -> Path | None:
    """Return the nearest exprcalc.toml at or above ``start`` (default: cwd)."""
    current = (start or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.exists():
            return candidate
    return None
