"""HeadingInspector: heading hierarchy, emptiness and length."""

from __future__ import annotations

import logging

from polaris_audit.inspectors.base import node_defect, role_of
from polaris_audit.models import (
    HeadingAnalysis,
    HeadingEntry,
    InspectorResult,
    PassRecord,
    Severity,
)
from polaris_audit.snapshot import DocumentSnapshot, Node

logger = logging.getLogger(__name__)

_HEADING_TAGS = {f"h{i}": i for i in range(1, 7)}


class HeadingInspector:
    def __init__(self, *, max_text_length: int = 120) -> None:
        self._max_text_length = max_text_length

    @property
    def name(self) -> str:
        return "Headings"

    @property
    def rule(self) -> str:
        return "heading-order"

    def inspect(self, snapshot: DocumentSnapshot) -> InspectorResult:
        result = InspectorResult(inspector_name=self.name)
        structure: list[HeadingEntry] = []
        proper_nesting = True
        previous: int | None = None

        for node in snapshot.nodes:
            level = _heading_level(node)
            if level is None:
                continue
            text = snapshot.text_content(node)
            issues: list[str] = []

            if previous is not None and level > previous + 1:
                proper_nesting = False
                issues.append(f"Skips heading level {previous + 1}")
                result.defects.append(node_defect(
                    "heading-skip", Severity.MODERATE,
                    "Heading levels should only increase by one",
                    snapshot, node,
                    f"Heading order invalid - h{level} follows h{previous} without h{previous + 1}",
                    help="Ensure headings are in a logical order",
                ))

            if not text:
                issues.append("Heading is empty")
                result.defects.append(node_defect(
                    "heading-empty", Severity.MODERATE,
                    "Headings must not be empty",
                    snapshot, node,
                    "Heading has no text content",
                ))
            elif len(text) > self._max_text_length:
                # Advisory only.
                issues.append("Heading text is too long")

            structure.append(HeadingEntry(level, text, node.locator, tuple(issues)))
            previous = level

        has_h1 = any(h.level == 1 for h in structure)
        recommendations: list[str] = []
        if not has_h1:
            recommendations.append("Add an H1 heading to the page")
        if not proper_nesting:
            recommendations.append("Fix heading hierarchy - avoid skipping levels")
        if not structure:
            recommendations.append("Add headings to structure your content")

        if structure and proper_nesting:
            result.passes.append(PassRecord(
                "heading-order", "Heading levels only increase by one", len(structure),
            ))

        logger.debug("Inspected %d heading(s), nesting ok=%s", len(structure), proper_nesting)
        result.analysis = HeadingAnalysis(
            structure=tuple(structure),
            has_h1=has_h1,
            proper_nesting=proper_nesting,
            recommendations=tuple(recommendations),
        )
        return result


def _heading_level(node: Node) -> int | None:
    if node.tag in _HEADING_TAGS:
        return _HEADING_TAGS[node.tag]
    if role_of(node) == "heading":
        try:
            level = int(node.get("aria-level") or 2)
        except ValueError:
            level = 2
        return max(1, level)
    return None
