"""Report generation: structured report, JSON and Markdown output."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from polaris_audit.models import (
    AuditResult,
    ConformanceLevel,
    Defect,
    DetailedAnalysis,
    Severity,
)

REPORT_VERSION = "2.0"

# A level passes when no defect at or above its threshold severity exists.
_LEVEL_THRESHOLD: dict[ConformanceLevel, Severity] = {
    ConformanceLevel.A: Severity.CRITICAL,
    ConformanceLevel.AA: Severity.CRITICAL,
    ConformanceLevel.AAA: Severity.SERIOUS,
}


@dataclass(frozen=True)
class DefectSection:
    title: str
    kind: str
    severity: Severity
    description: str
    how_to_fix: str
    code_example: str
    affected: tuple[str, ...]
    help_url: str


@dataclass(frozen=True)
class PriorityList:
    high: tuple[str, ...] = ()  # critical
    medium: tuple[str, ...] = ()  # serious
    low: tuple[str, ...] = ()  # moderate + minor


@dataclass(frozen=True)
class Report:
    """Structured, render-independent form of an audit report."""

    score: int
    conformance_level: ConformanceLevel
    total_elements: int
    tested_elements: int
    violation_count: int
    defect_sections: tuple[DefectSection, ...]
    detailed_analysis: DetailedAnalysis
    priorities: PriorityList
    compliance: dict[str, bool] = field(default_factory=dict)
    generated_at: str = ""
    version: str = REPORT_VERSION


def compliance_status(defects: tuple[Defect, ...] | list[Defect]) -> dict[str, bool]:
    """PASS/FAIL per conformance level, from defect severities alone."""
    return {
        level.value: not any(d.severity.at_least(threshold) for d in defects)
        for level, threshold in _LEVEL_THRESHOLD.items()
    }


def compose_report(result: AuditResult, generated_at: datetime | None = None) -> Report:
    """Build the structured report for *result*.

    Pure for a fixed *generated_at*; defaults to the current UTC time.
    """
    stamp = (generated_at or datetime.now(timezone.utc)).isoformat(timespec="seconds")
    sections = tuple(_defect_section(d) for d in result.defects)

    def _describe(severities: set[Severity]) -> tuple[str, ...]:
        return tuple(
            f"{d.description} ({', '.join(d.locators) or 'page'})"
            for d in result.defects
            if d.severity in severities
        )

    priorities = PriorityList(
        high=_describe({Severity.CRITICAL}),
        medium=_describe({Severity.SERIOUS}),
        low=_describe({Severity.MODERATE, Severity.MINOR}),
    )
    return Report(
        score=result.score,
        conformance_level=result.conformance_level,
        total_elements=result.summary.total_elements,
        tested_elements=result.summary.tested_elements,
        violation_count=len(result.defects),
        defect_sections=sections,
        detailed_analysis=result.detailed_analysis,
        priorities=priorities,
        compliance=compliance_status(result.defects),
        generated_at=stamp,
    )


def _defect_section(defect: Defect) -> DefectSection:
    affected = tuple(
        f"{n.locator}: {n.failure_summary}" if n.failure_summary else n.locator
        for n in defect.nodes
    )
    return DefectSection(
        title=f"{defect.kind.upper()} - {defect.severity.value.upper()} PRIORITY",
        kind=defect.kind,
        severity=defect.severity,
        description=defect.description,
        how_to_fix=defect.remediation,
        code_example=defect.code_example,
        affected=affected,
        help_url=defect.help_url,
    )


# ── Serialization ───────────────────────────────────────────────────────────


def to_json(result: AuditResult) -> str:
    """Serialize an audit result; identical results give identical text."""
    return json.dumps(result.to_dict(), indent=2, sort_keys=True, default=str)


def write_json_report(result: AuditResult, output: Path) -> None:
    """Write an audit result as a JSON report."""
    output.write_text(to_json(result), encoding="utf-8")


def write_markdown_report(
    result: AuditResult, output: Path, generated_at: datetime | None = None
) -> None:
    """Write an audit result as a Markdown report."""
    text = render_markdown(compose_report(result, generated_at))
    output.write_text(text, encoding="utf-8")


def report_to_dict(report: Report) -> dict[str, Any]:
    return asdict(report)


def render_markdown(report: Report) -> str:
    """Render the structured report as Markdown."""
    lines: list[str] = [
        "# Comprehensive Accessibility Report",
        "",
        "## Executive Summary",
        f"- **Overall Score**: {report.score}/100",
        f"- **WCAG Compliance Level**: {report.conformance_level.value}",
        f"- **Total Elements Analyzed**: {report.total_elements}",
        f"- **Elements Tested**: {report.tested_elements}",
        "",
        f"## Critical Issues Found: {report.violation_count}",
        "",
    ]

    for section in report.defect_sections:
        lines += [
            f"### {section.title}",
            "",
            f"**Issue**: {section.description}",
            "",
            f"**Impact**: {section.severity.value} - Affects {len(section.affected)} element(s)",
            "",
            f"**How to Fix**: {section.how_to_fix}",
            "",
        ]
        if section.code_example:
            lines += ["**Code Example**:", "```html", section.code_example, "```", ""]
        lines.append("**Affected Elements**:")
        lines += [f"- {a}" for a in section.affected] or ["- (page level)"]
        lines.append("")
        if section.help_url:
            lines += [f"**Learn More**: {section.help_url}", ""]
        lines += ["---", ""]

    lines += _render_analysis(report.detailed_analysis)

    p = report.priorities
    lines += [
        "## Recommendations Priority List",
        "",
        "### High Priority (Fix Immediately)",
        *(_bullets(p.high)),
        "",
        "### Medium Priority (Fix Soon)",
        *(_bullets(p.medium)),
        "",
        "### Low Priority (Improve When Possible)",
        *(_bullets(p.low)),
        "",
        "## Compliance Status",
    ]
    for level in ("A", "AA", "AAA"):
        verdict = "PASS" if report.compliance.get(level) else "FAIL"
        lines.append(f"- **WCAG 2.1 Level {level}**: {verdict}")

    lines += [
        "",
        f"Generated on: {report.generated_at}",
        f"Report Version: {report.version}",
    ]
    return "\n".join(lines).strip() + "\n"


def _bullets(items: tuple[str, ...]) -> list[str]:
    return [f"- {item}" for item in items] or ["None"]


def _yes_no(flag: bool) -> str:
    return "Yes" if flag else "No"


_UNAVAILABLE = "Automated analysis failed; manual review required."


def _render_analysis(analysis: DetailedAnalysis) -> list[str]:
    lines = ["## Detailed Analysis", "", "### Color Contrast Analysis"]
    if analysis.color_contrast is None:
        lines.append(_UNAVAILABLE)
    elif analysis.color_contrast:
        lines += [
            f"- **{c.element}**: {c.ratio}:1 ratio - {c.recommendation}"
            for c in analysis.color_contrast
        ]
    else:
        lines.append("No color contrast issues detected.")

    lines += ["", "### Heading Structure"]
    h = analysis.heading_structure
    if h is None:
        lines.append(_UNAVAILABLE)
    else:
        lines += [
            f"- **Has H1**: {_yes_no(h.has_h1)}",
            f"- **Proper Nesting**: {_yes_no(h.proper_nesting)}",
            f"- **Recommendations**: {', '.join(h.recommendations) or 'None'}",
        ]

    lines += ["", "### Form Accessibility"]
    f = analysis.form_analysis
    if f is None:
        lines.append(_UNAVAILABLE)
    else:
        lines += [
            f"- **Total Forms**: {f.total_forms}",
            f"- **Forms with Labels**: {f.forms_with_labels}",
            f"- **Forms with Fieldsets**: {f.forms_with_fieldsets}",
            f"- **Issues Found**: {len(f.issues)}",
        ]

    lines += ["", "### Image Accessibility"]
    i = analysis.image_analysis
    if i is None:
        lines.append(_UNAVAILABLE)
    else:
        lines += [
            f"- **Total Images**: {i.total_images}",
            f"- **Images with Alt Text**: {i.images_with_alt}",
            f"- **Decorative Images**: {i.decorative_images}",
            f"- **Issues**: {len(i.issues)}",
        ]

    lines += ["", "### Keyboard Navigation"]
    k = analysis.keyboard_navigation
    if k is None:
        lines.append(_UNAVAILABLE)
    else:
        lines += [
            f"- **Focusable Elements**: {k.focusable_elements}",
            f"- **Skip Links**: {k.skip_links}",
            f"- **Issues**: {len(k.issues)}",
            f"- **Recommendations**: {', '.join(k.recommendations) or 'None'}",
        ]
    lines.append("")
    return lines
