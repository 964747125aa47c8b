"""Tests for config loading."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from polaris_audit.config import PolarisConfig


class TestPolarisConfig:
    def test_defaults(self) -> None:
        cfg = PolarisConfig()
        assert cfg.scoring.critical == 8
        assert cfg.scoring.missing_h1 == 5
        assert cfg.inspection.max_alt_length == 150
        assert cfg.baseline.source == "none"
        assert cfg.baseline.mode == "augment"
        assert cfg.baseline.timeout == 10.0
        assert cfg.output.report_format == "markdown"

    def test_load_from_yaml(self, tmp_path: Path) -> None:
        config_file = tmp_path / "polaris.yaml"
        config_file.write_text(
            """\
scoring:
  critical: 12
  contrast_failure: 1.5
inspection:
  max_alt_length: 100
baseline:
  source: http
  mode: replace
  url: http://tester.internal:9000/audit
  timeout: 3
output:
  report_format: json
""",
            encoding="utf-8",
        )
        cfg = PolarisConfig.load(config_file)
        assert cfg.scoring.critical == 12
        assert cfg.scoring.contrast_failure == 1.5
        assert cfg.inspection.max_alt_length == 100
        assert cfg.baseline.source == "http"
        assert cfg.baseline.mode == "replace"
        assert cfg.baseline.url == "http://tester.internal:9000/audit"
        assert cfg.baseline.timeout == 3.0
        assert cfg.output.report_format == "json"

    def test_load_missing_file_returns_defaults(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("HOME", str(tmp_path))
        cfg = PolarisConfig.load(None)
        # Falls through all candidates and returns default
        assert cfg.baseline.source == "none"

    def test_search_current_directory(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / "polaris.yaml").write_text("baseline:\n  mode: replace\n", encoding="utf-8")
        monkeypatch.chdir(tmp_path)
        assert PolarisConfig.load().baseline.mode == "replace"

    def test_partial_yaml(self, tmp_path: Path) -> None:
        config_file = tmp_path / "polaris.yaml"
        config_file.write_text("scoring:\n  serious: 6\n", encoding="utf-8")
        cfg = PolarisConfig.load(config_file)
        assert cfg.scoring.serious == 6
        assert cfg.scoring.critical == 8  # default preserved
        assert cfg.output.report_format == "markdown"  # default preserved

    def test_empty_yaml(self, tmp_path: Path) -> None:
        config_file = tmp_path / "polaris.yaml"
        config_file.write_text("", encoding="utf-8")
        assert PolarisConfig.load(config_file) == PolarisConfig()

    def test_invalid_mode_rejected(self, tmp_path: Path) -> None:
        config_file = tmp_path / "polaris.yaml"
        config_file.write_text("baseline:\n  mode: merge\n", encoding="utf-8")
        with pytest.raises(ValidationError):
            PolarisConfig.load(config_file)

    def test_non_positive_timeout_rejected(self) -> None:
        with pytest.raises(ValidationError):
            PolarisConfig.model_validate({"baseline": {"timeout": 0}})
