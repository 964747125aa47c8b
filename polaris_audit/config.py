"""Pydantic configuration model with YAML loading."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field

_DEFAULT_CONFIG_NAME = "polaris.yaml"


class ScoringWeights(BaseModel):
    """Score deductions.

    The defaults are heuristic calibrations, not values taken from WCAG.
    """

    critical: float = 8
    serious: float = 5
    moderate: float = 3
    minor: float = 1
    contrast_failure: float = 2
    missing_h1: float = 5
    improper_nesting: float = 3
    form_grouping_issue: float = 2
    form_issue: float = 3
    missing_alt_issue: float = 4
    image_issue: float = 1
    keyboard_issue: float = 2


class InspectionConfig(BaseModel):
    """Inspector thresholds."""

    max_alt_length: int = Field(default=150, ge=1)
    max_heading_length: int = Field(default=120, ge=1)
    grouping_threshold: int = Field(default=5, ge=0)


class BaselineConfig(BaseModel):
    """External baseline defect source settings."""

    source: Literal["none", "http"] = "none"
    mode: Literal["augment", "replace"] = "augment"
    url: str = "http://localhost:8787/audit"
    timeout: float = Field(default=10.0, gt=0)


class OutputConfig(BaseModel):
    """Output file settings."""

    report_format: Literal["json", "markdown"] = "markdown"


class PolarisConfig(BaseModel):
    """Top-level configuration for Polaris."""

    scoring: ScoringWeights = Field(default_factory=ScoringWeights)
    inspection: InspectionConfig = Field(default_factory=InspectionConfig)
    baseline: BaselineConfig = Field(default_factory=BaselineConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)

    @classmethod
    def load(cls, path: Path | None = None) -> PolarisConfig:
        """Load config from a YAML file.

        Search order when *path* is None:
          1. ./polaris.yaml
          2. ~/.config/polaris/polaris.yaml

        Returns default config if no file is found.
        """
        if path is not None:
            return cls._from_yaml(path)

        candidates = [
            Path.cwd() / _DEFAULT_CONFIG_NAME,
            Path.home() / ".config" / "polaris" / _DEFAULT_CONFIG_NAME,
        ]
        for candidate in candidates:
            if candidate.is_file():
                return cls._from_yaml(candidate)

        return cls()

    @classmethod
    def _from_yaml(cls, path: Path) -> PolarisConfig:
        raw: dict[str, Any] = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
        return cls.model_validate(raw)
