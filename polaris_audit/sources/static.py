"""Static baseline source: a pre-computed conformance-testing result.

Accepts the result shape produced by axe-core style tools::

    {
        "violations": [
            {"id": "image-alt", "impact": "critical", "description": "...",
             "help": "...", "helpUrl": "...",
             "nodes": [{"html": "<img>", "target": ["img"], "failureSummary": "..."}]}
        ],
        "passes": [{"id": "document-title", "description": "...", "nodes": [...]}],
        "incomplete": [...]
    }

A bare list is treated as the ``violations`` list.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from polaris_audit.models import (
    Defect,
    DefectNode,
    IncompleteRecord,
    PassRecord,
    Severity,
)
from polaris_audit.snapshot import DocumentSnapshot
from polaris_audit.sources.base import SourceFindings

logger = logging.getLogger(__name__)

# External rule id -> internal defect kind
KIND_MAP: dict[str, str] = {
    "image-alt": "missing-alt",
    "input-image-alt": "missing-alt",
    "role-img-alt": "missing-alt",
    "image-redundant-alt": "alt-redundant-phrase",
    "color-contrast": "insufficient-contrast",
    "label": "label-missing",
    "button-name": "label-missing",
    "select-name": "label-missing",
    "heading-order": "heading-skip",
    "empty-heading": "heading-empty",
    "tabindex": "positive-tabindex",
}

SEVERITY_MAP: dict[str, Severity] = {
    "critical": Severity.CRITICAL,
    "serious": Severity.SERIOUS,
    "moderate": Severity.MODERATE,
    "minor": Severity.MINOR,
    "error": Severity.SERIOUS,
    "warning": Severity.MODERATE,
    "info": Severity.MINOR,
    "notice": Severity.MINOR,
}


class StaticBaselineSource:
    """Baseline source backed by an already-available result."""

    def __init__(self, data: Mapping[str, Any] | Sequence[Any], *, name: str = "baseline") -> None:
        self._data = data
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    async def collect(self, snapshot: DocumentSnapshot) -> SourceFindings:
        return normalize_results(self._data, source_name=self._name)

    async def is_available(self) -> bool:
        return True


def map_severity(impact: Any) -> Severity:
    """Map an external impact label to a Severity; unknown labels become minor."""
    if isinstance(impact, Severity):
        return impact
    return SEVERITY_MAP.get(str(impact or "").strip().lower(), Severity.MINOR)


def map_kind(rule_id: str) -> str:
    return KIND_MAP.get(rule_id, rule_id)


def normalize_results(data: Mapping[str, Any] | Sequence[Any], *, source_name: str) -> SourceFindings:
    """Convert an external result into SourceFindings.

    Each violation node becomes its own Defect so that deductions count
    affected elements individually.
    """
    if isinstance(data, Mapping):
        violations = data.get("violations") or []
        passes = data.get("passes") or []
        incomplete = data.get("incomplete") or []
    else:
        violations, passes, incomplete = list(data), [], []

    findings = SourceFindings(source_name=source_name)
    for entry in violations:
        if not isinstance(entry, Mapping):
            logger.debug("Ignoring malformed baseline violation: %r", entry)
            continue
        findings.defects.extend(_violation_defects(entry, source_name))

    for entry in passes:
        if isinstance(entry, Mapping):
            findings.passes.append(PassRecord(
                rule=str(entry.get("id", "")),
                description=str(entry.get("description", "")),
                nodes=_node_count(entry.get("nodes")),
            ))

    for entry in incomplete:
        if isinstance(entry, Mapping):
            description = str(entry.get("description", ""))
            findings.incomplete.append(IncompleteRecord(
                rule=str(entry.get("id", "")),
                description=description,
                nodes=_node_count(entry.get("nodes")),
                reason=incomplete_reason(description),
            ))

    logger.debug(
        "Normalized %d defect(s) from %s", len(findings.defects), source_name,
    )
    return findings


def incomplete_reason(description: str) -> str:
    if "color" in description.lower() or "colour" in description.lower():
        return "Manual verification needed for color-dependent content"
    return "Requires manual testing"


def _violation_defects(entry: Mapping[str, Any], source_name: str) -> list[Defect]:
    rule_id = str(entry.get("id", "unknown"))
    severity = map_severity(entry.get("impact"))
    base = {
        "kind": map_kind(rule_id),
        "description": str(entry.get("description", "")),
        "help": str(entry.get("help", "")),
        "help_url": str(entry.get("helpUrl") or entry.get("help_url") or ""),
        "remediation": str(entry.get("howToFix") or entry.get("remediation") or ""),
        "code_example": str(entry.get("codeExample") or entry.get("code_example") or ""),
        "source": source_name,
    }
    raw_nodes = entry.get("nodes") or []
    if not isinstance(raw_nodes, list) or not raw_nodes:
        return [Defect(severity=severity, **base)]

    defects: list[Defect] = []
    for raw in raw_nodes:
        if not isinstance(raw, Mapping):
            continue
        node_severity = map_severity(raw["impact"]) if raw.get("impact") else severity
        defects.append(Defect(
            severity=node_severity,
            nodes=(DefectNode(
                locator=_locator(raw),
                html=str(raw.get("html", "")),
                failure_summary=str(raw.get("failureSummary") or raw.get("failure_summary") or ""),
            ),),
            **base,
        ))
    return defects


def _locator(raw: Mapping[str, Any]) -> str:
    for key in ("locator", "xpath"):
        if raw.get(key):
            return str(raw[key])
    target = raw.get("target")
    if isinstance(target, list):
        return ", ".join(str(t) for t in target)
    return str(target or "")


def _node_count(nodes: Any) -> int:
    if isinstance(nodes, int):
        return nodes
    if isinstance(nodes, list):
        return len(nodes)
    return 0
