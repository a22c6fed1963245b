"""Tests for exprcalc.toml loading."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from exprcalc.config import CONFIG_FILENAME, CalculatorConfig, find_config, load_config
from exprcalc.core.evaluator import DivisionPolicy


def _write(path: Path, content: str) -> Path:
    path.write_text(content)
    return path


class TestLoadConfig:
    def test_missing_file_gives_defaults(self, tmp_path: Path) -> None:
        config = load_config(tmp_path / CONFIG_FILENAME)
        assert config == CalculatorConfig()
        assert config.precision == 6
        assert config.division_policy == DivisionPolicy.ZERO
        assert config.max_depth == 100
        assert config.log_level == "WARNING"

    def test_missing_section_gives_defaults(self, tmp_path: Path) -> None:
        path = _write(tmp_path / CONFIG_FILENAME, '[other]\nkey = "value"\n')
        assert load_config(path) == CalculatorConfig()

    def test_full_section(self, tmp_path: Path) -> None:
        path = _write(
            tmp_path / CONFIG_FILENAME,
            "[calculator]\n"
            "precision = 10\n"
            'division_by_zero = "error"\n'
            "max_depth = 20\n"
            'log_level = "DEBUG"\n',
        )
        config = load_config(path)
        assert config.precision == 10
        assert config.division_policy == DivisionPolicy.RAISE
        assert config.max_depth == 20
        assert config.log_level == "DEBUG"

    def test_partial_section(self, tmp_path: Path) -> None:
        path = _write(tmp_path / CONFIG_FILENAME, "[calculator]\nprecision = 3\n")
        config = load_config(path)
        assert config.precision == 3
        assert config.division_policy == DivisionPolicy.ZERO

    @pytest.mark.parametrize(
        "line",
        [
            "precision = 0",
            "precision = 40",
            'division_by_zero = "ignore"',
            "max_depth = 0",
            'log_level = "LOUD"',
            "unknown = 1",
        ],
    )
    def test_invalid_values(self, tmp_path: Path, line: str) -> None:
        path = _write(tmp_path / CONFIG_FILENAME, f"[calculator]\n{line}\n")
        with pytest.raises(ValidationError):
            load_config(path)

    def test_field_name_accepted(self) -> None:
        config = CalculatorConfig(division_policy=DivisionPolicy.RAISE)
        assert config.division_policy == DivisionPolicy.RAISE


class TestFindConfig:
    def test_finds_file_in_parent(self, tmp_path: Path) -> None:
        path = _write(tmp_path / CONFIG_FILENAME, "[calculator]\n")
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)
        assert find_config(nested) == path.resolve()

    def test_prefers_nearest(self, tmp_path: Path) -> None:
        _write(tmp_path / CONFIG_FILENAME, "[calculator]\n")
        nested = tmp_path / "sub"
        nested.mkdir()
        inner = _write(nested / CONFIG_FILENAME, "[calculator]\n")
        assert find_config(nested) == inner.resolve()
