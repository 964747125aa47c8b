"""ContrastInspector: text/background contrast for every styled node."""

from __future__ import annotations

import logging

from polaris_audit.errors import ColorParseError
from polaris_audit.inspectors.base import node_defect
from polaris_audit.models import ColorContrastEntry, InspectorResult, PassRecord, Severity
from polaris_audit.snapshot import DocumentSnapshot
from polaris_audit.utils.contrast import (
    AA_LARGE,
    AA_NORMAL,
    AAA_NORMAL,
    ContrastResult,
    contrast,
    is_large_text,
    required_increase,
)

logger = logging.getLogger(__name__)


class ContrastInspector:
    @property
    def name(self) -> str:
        return "Contrast"

    @property
    def rule(self) -> str:
        return "color-contrast"

    def inspect(self, snapshot: DocumentSnapshot) -> InspectorResult:
        result = InspectorResult(inspector_name=self.name)
        entries: list[ColorContrastEntry] = []
        passing = 0

        for node in snapshot.nodes:
            style = node.style
            if style is None or not style.color or not style.background_color:
                continue
            large = is_large_text(style.font_size, style.font_weight)
            try:
                res = contrast(style.color, style.background_color, large_text=large)
            except ColorParseError as exc:
                logger.debug("Skipping contrast for %s: %s", node.locator, exc)
                continue

            ratio = round(res.ratio, 2)
            entries.append(ColorContrastEntry(
                element=node.locator,
                foreground=res.foreground.to_hex(),
                background=res.background.to_hex(),
                ratio=ratio,
                passes_aa=res.passes_aa,
                passes_aaa=res.passes_aaa,
                recommendation=recommendation(res),
                large_text=large,
            ))

            if res.passes_aa:
                passing += 1
                continue
            required = AA_LARGE if large else AA_NORMAL
            result.defects.append(node_defect(
                "insufficient-contrast", Severity.SERIOUS,
                "Elements must have sufficient color contrast",
                snapshot, node,
                f"Element has insufficient color contrast of {ratio}:1 "
                f"(foreground color: {res.foreground.to_hex()}, "
                f"background color: {res.background.to_hex()}). "
                f"Expected contrast ratio of {required}:1",
                help="Ensure all text elements have sufficient contrast against their background",
            ))

        if passing:
            result.passes.append(PassRecord(
                "color-contrast", "Elements have sufficient color contrast", passing,
            ))

        logger.debug("Checked contrast on %d node(s)", len(entries))
        result.analysis = tuple(entries)
        return result


def recommendation(res: ContrastResult) -> str:
    """Human advice for a single contrast measurement."""
    if res.passes_aaa:
        return "Excellent contrast ratio"
    if res.passes_aa:
        target = AA_NORMAL if res.large_text else AAA_NORMAL
        return (
            "Good contrast ratio, consider improving for AAA compliance "
            f"(requires {target:g}:1)"
        )
    required = AA_LARGE if res.large_text else AA_NORMAL
    return (
        f"Increase contrast by {required_increase(res.ratio, required)}% to meet AA "
        f"standards. Current: {res.ratio:.2f}:1, Required: {required:g}:1"
    )
