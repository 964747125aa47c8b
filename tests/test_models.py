"""Tests for core data models."""

from __future__ import annotations

import dataclasses
import json

import pytest

from polaris_audit.models import (
    AuditResult,
    AuditSummary,
    ConformanceLevel,
    Defect,
    DefectNode,
    DetailedAnalysis,
    InspectorResult,
    PassRecord,
    Severity,
)


def _result(*defects: Defect) -> AuditResult:
    summary = AuditSummary(
        violations=len(defects), passes=1, incomplete=0, score=90,
        conformance_level=ConformanceLevel.AA, total_elements=4, tested_elements=3,
    )
    return AuditResult(
        score=90,
        conformance_level=ConformanceLevel.AA,
        defects=defects,
        passes=(PassRecord("document-title", "Documents must have a title", 1),),
        incomplete=(),
        summary=summary,
        detailed_analysis=DetailedAnalysis(),
    )


class TestSeverity:
    def test_rank_order(self) -> None:
        ranks = [s.rank for s in (Severity.MINOR, Severity.MODERATE, Severity.SERIOUS, Severity.CRITICAL)]
        assert ranks == sorted(ranks)

    def test_at_least(self) -> None:
        assert Severity.CRITICAL.at_least(Severity.SERIOUS)
        assert Severity.SERIOUS.at_least(Severity.SERIOUS)
        assert not Severity.MODERATE.at_least(Severity.SERIOUS)

    def test_string_value(self) -> None:
        assert Severity("critical") is Severity.CRITICAL
        assert Severity.MINOR == "minor"


class TestDefect:
    def test_locators(self) -> None:
        defect = Defect("label-missing", Severity.CRITICAL, "x",
                        nodes=(DefectNode("/input[1]"), DefectNode("/input[2]")))
        assert defect.locators == ("/input[1]", "/input[2]")

    def test_page_level_defect(self) -> None:
        defect = Defect("document-title", Severity.SERIOUS, "x")
        assert defect.locators == ()
        assert defect.source == "manual"

    def test_frozen(self) -> None:
        defect = Defect("x", Severity.MINOR, "x")
        with pytest.raises(dataclasses.FrozenInstanceError):
            defect.kind = "y"  # type: ignore[misc]


class TestAuditResult:
    def test_defects_with(self) -> None:
        critical = Defect("missing-alt", Severity.CRITICAL, "a")
        minor = Defect("alt-too-long", Severity.MINOR, "b")
        result = _result(critical, minor)
        assert result.defects_with(Severity.CRITICAL) == (critical,)
        assert result.defects_with(Severity.SERIOUS) == ()

    def test_to_dict_is_json_ready(self) -> None:
        result = _result(Defect("missing-alt", Severity.CRITICAL, "a", nodes=(DefectNode("/img[1]"),)))
        data = json.loads(json.dumps(result.to_dict()))
        assert data["defects"][0]["severity"] == "critical"
        assert data["defects"][0]["nodes"][0]["locator"] == "/img[1]"
        assert data["conformance_level"] == "AA"
        assert data["sources"] == ["manual"]


class TestInspectorResult:
    def test_defaults(self) -> None:
        res = InspectorResult(inspector_name="Images")
        assert res.success is True
        assert res.defects == []
        assert res.analysis is None

    def test_failure(self) -> None:
        res = InspectorResult(inspector_name="Forms", success=False, error="boom")
        assert res.error == "boom"
