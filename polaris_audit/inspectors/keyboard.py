"""KeyboardInspector: focusable elements, tab order and skip links."""

from __future__ import annotations

import logging

from polaris_audit.models import InspectorResult, KeyboardAnalysis, KeyboardIssue, PassRecord
from polaris_audit.snapshot import DocumentSnapshot, Node

logger = logging.getLogger(__name__)

_NATIVE_FOCUSABLE = frozenset({"button", "input", "textarea", "select", "details", "summary"})
_NO_INDICATOR = frozenset({"none", "0", "0px", ""})


class KeyboardInspector:
    @property
    def name(self) -> str:
        return "Keyboard"

    @property
    def rule(self) -> str:
        return "tabindex"

    def inspect(self, snapshot: DocumentSnapshot) -> InspectorResult:
        result = InspectorResult(inspector_name=self.name)
        issues: list[KeyboardIssue] = []
        recommendations: list[str] = []
        focusable = with_tabindex = skip_links = 0
        missing_focus_style = 0

        for node in snapshot.nodes:
            tabindex = _tabindex(node)
            if node.has("tabindex"):
                with_tabindex += 1
            if tabindex is not None and tabindex > 0:
                issues.append(KeyboardIssue(
                    "positive-tabindex", node.locator,
                    "Avoid positive tabindex values as they can disrupt natural tab order",
                ))

            if node.tag == "a" and (node.get("href") or "").startswith("#"):
                skip_links += 1

            if not _is_focusable(node, tabindex):
                continue
            focusable += 1
            if _lacks_focus_indicator(node):
                missing_focus_style += 1

        if skip_links == 0:
            recommendations.append("Add skip navigation links for keyboard users")
        if missing_focus_style:
            # One page-level issue, however many elements are affected
            issues.append(KeyboardIssue(
                "missing-focus-indicator", snapshot.root.locator,
                "Some focusable elements lack visible focus indicators",
            ))
            recommendations.append("Ensure all interactive elements have visible focus indicators")

        if focusable and not issues:
            result.passes.append(PassRecord("tabindex", "Tab order follows document order", focusable))

        logger.debug("Inspected %d focusable element(s), %d issue(s)", focusable, len(issues))
        result.analysis = KeyboardAnalysis(
            focusable_elements=focusable,
            elements_with_tabindex=with_tabindex,
            skip_links=skip_links,
            issues=tuple(issues),
            recommendations=tuple(recommendations),
        )
        return result


def _tabindex(node: Node) -> int | None:
    raw = node.get("tabindex")
    if raw is None:
        return None
    try:
        return int(raw.strip())
    except ValueError:
        return None


def _is_focusable(node: Node, tabindex: int | None) -> bool:
    if node.has("disabled"):
        return False
    if node.tag in ("a", "area") and node.has("href"):
        return True
    if node.tag == "input" and (node.get("type") or "").lower() == "hidden":
        return False
    if node.tag in _NATIVE_FOCUSABLE:
        return True
    return tabindex is not None and tabindex >= 0


def _lacks_focus_indicator(node: Node) -> bool:
    style = node.style
    if style is None or style.outline is None or style.box_shadow is None:
        return False
    return (style.outline.lower() in _NO_INDICATOR
            and style.box_shadow.lower() in _NO_INDICATOR)
