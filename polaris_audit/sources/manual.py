"""Manual inspection source: the engine's own inspectors."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from polaris_audit.inspectors import Inspector, default_inspectors
from polaris_audit.models import (
    ColorContrastEntry,
    DetailedAnalysis,
    FormAnalysis,
    HeadingAnalysis,
    ImageAnalysis,
    IncompleteRecord,
    InspectorResult,
    KeyboardAnalysis,
)
from polaris_audit.snapshot import DocumentSnapshot
from polaris_audit.sources.base import SourceFindings

logger = logging.getLogger(__name__)

# InspectorResult.analysis type -> DetailedAnalysis field
_ANALYSIS_FIELDS: dict[type, str] = {
    ImageAnalysis: "image_analysis",
    HeadingAnalysis: "heading_structure",
    FormAnalysis: "form_analysis",
    KeyboardAnalysis: "keyboard_navigation",
}

# Inspector rule -> DetailedAnalysis field left empty when that inspector fails
_RULE_FIELDS: dict[str, str] = {
    "image-alt": "image_analysis",
    "heading-order": "heading_structure",
    "label": "form_analysis",
    "tabindex": "keyboard_navigation",
    "color-contrast": "color_contrast",
}


@dataclass
class Inspection:
    """Everything one manual pass produced."""

    findings: SourceFindings
    analysis: DetailedAnalysis = field(default_factory=DetailedAnalysis)
    inspector_results: list[InspectorResult] = field(default_factory=list)


class ManualInspectionSource:
    """Runs the tree inspectors in order; always available."""

    def __init__(self, inspectors: list[Inspector] | None = None) -> None:
        self._inspectors = inspectors if inspectors is not None else default_inspectors()

    @property
    def name(self) -> str:
        return "manual"

    async def collect(self, snapshot: DocumentSnapshot) -> SourceFindings:
        return self.inspect(snapshot).findings

    async def is_available(self) -> bool:
        return True

    def inspect(self, snapshot: DocumentSnapshot) -> Inspection:
        """Run every inspector, isolating failures to their own rule."""
        findings = SourceFindings(source_name=self.name)
        sections: dict[str, object] = {}
        results: list[InspectorResult] = []

        for inspector in self._inspectors:
            res = _run_single_inspector(inspector, snapshot)
            results.append(res)
            if not res.success:
                findings.incomplete.append(IncompleteRecord(
                    rule=inspector.rule,
                    description=f"Automated analysis failed for rule {inspector.rule}",
                    nodes=0,
                    reason=f"Manual review required ({res.error})",
                ))
                if inspector.rule in _RULE_FIELDS:
                    sections[_RULE_FIELDS[inspector.rule]] = None
                continue
            findings.defects.extend(res.defects)
            findings.passes.extend(res.passes)
            section = _section_for(res.analysis)
            if section is not None:
                sections[section] = res.analysis

        return Inspection(
            findings=findings,
            analysis=DetailedAnalysis(**sections),  # type: ignore[arg-type]
            inspector_results=results,
        )


def _run_single_inspector(inspector: Inspector, snapshot: DocumentSnapshot) -> InspectorResult:
    """Run one inspector, converting unexpected exceptions to a failed result."""
    try:
        return inspector.inspect(snapshot)
    except Exception as exc:
        logger.error("Inspector %s failed: %s", inspector.name, exc, exc_info=True)
        return InspectorResult(
            inspector_name=inspector.name,
            success=False,
            error=str(exc) or type(exc).__name__,
        )


def _section_for(analysis: object) -> str | None:
    if isinstance(analysis, tuple) and all(isinstance(e, ColorContrastEntry) for e in analysis):
        return "color_contrast"
    return _ANALYSIS_FIELDS.get(type(analysis))
