"""Score and conformance level from aggregated findings.

Both functions are pure: the same inputs always give the same output.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence

from polaris_audit.config import ScoringWeights
from polaris_audit.models import ConformanceLevel, Defect, DetailedAnalysis, Severity

_DEFAULT_WEIGHTS = ScoringWeights()


def severity_weight(severity: Severity, weights: ScoringWeights = _DEFAULT_WEIGHTS) -> float:
    return {
        Severity.CRITICAL: weights.critical,
        Severity.SERIOUS: weights.serious,
        Severity.MODERATE: weights.moderate,
        Severity.MINOR: weights.minor,
    }[severity]


def raw_score(
    defects: Sequence[Defect],
    analysis: DetailedAnalysis,
    weights: ScoringWeights | None = None,
) -> float:
    """Unclamped running total; may fall below zero."""
    weights = weights or _DEFAULT_WEIGHTS
    total = 100.0

    # (kind, locator) -> heaviest defect weight already deducted for it
    covered: dict[tuple[str, str], float] = {}
    for defect in defects:
        weight = severity_weight(defect.severity, weights)
        total -= weight
        for loc in defect.locators:
            key = (defect.kind, loc)
            covered[key] = max(covered.get(key, 0.0), weight)

    # Sections of failed inspectors are None and deduct nothing.
    total -= weights.contrast_failure * sum(
        1 for entry in analysis.color_contrast or () if not entry.passes_aa
    )

    headings = analysis.heading_structure
    if headings is not None:
        if not headings.has_h1:
            total -= weights.missing_h1
        if not headings.proper_nesting:
            total -= weights.improper_nesting

    forms = analysis.form_analysis
    for issue in forms.issues if forms is not None else ():
        weight = weights.form_grouping_issue if issue.kind == "grouping" else weights.form_issue
        total -= _residual(weight, issue.kind, issue.locator, covered)

    images = analysis.image_analysis
    for issue in images.issues if images is not None else ():
        weight = weights.missing_alt_issue if issue.kind == "missing-alt" else weights.image_issue
        total -= _residual(weight, issue.kind, issue.locator, covered)

    keyboard = analysis.keyboard_navigation
    for issue in keyboard.issues if keyboard is not None else ():
        total -= _residual(weights.keyboard_issue, issue.kind, issue.locator, covered)

    return total


def score(
    defects: Sequence[Defect],
    analysis: DetailedAnalysis,
    weights: ScoringWeights | None = None,
) -> int:
    """Conformance score in [0, 100].

    Clamping happens once, after every deduction.
    """
    total = raw_score(defects, analysis, weights)
    clamped = max(0.0, min(100.0, total))
    return int(math.floor(clamped + 0.5))


def classify(defects: Iterable[Defect]) -> ConformanceLevel:
    """AAA without critical or serious defects, AA without critical ones, else A."""
    severities = {d.severity for d in defects}
    if Severity.CRITICAL in severities:
        return ConformanceLevel.A
    if Severity.SERIOUS in severities:
        return ConformanceLevel.AA
    return ConformanceLevel.AAA


def _residual(weight: float, kind: str, locator: str, covered: dict[tuple[str, str], float]) -> float:
    """Part of an analysis issue's weight not already paid by a matching defect."""
    return max(0.0, weight - covered.get((kind, locator), 0.0))
