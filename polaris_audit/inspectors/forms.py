"""FormInspector: label association and grouping of form controls."""

from __future__ import annotations

import logging

from polaris_audit.inspectors.base import node_defect, role_of
from polaris_audit.models import (
    FormAnalysis,
    FormIssue,
    InspectorResult,
    PassRecord,
    Severity,
)
from polaris_audit.snapshot import DocumentSnapshot, Node

logger = logging.getLogger(__name__)

_FIELD_TAGS = frozenset({"input", "textarea", "select"})
_BUTTON_TYPES = frozenset({"submit", "button", "reset"})
_UNLABELED_TYPES = frozenset({"hidden", "image"})

_LABEL_FIX = "Add <label> elements or aria-label attributes to form controls"
_BUTTON_FIX = "Add descriptive text or value attribute to buttons"
_GROUPING_FIX = "Add <fieldset> and <legend> elements to group related form fields"


class FormInspector:
    def __init__(self, *, grouping_threshold: int = 5) -> None:
        self._grouping_threshold = grouping_threshold

    @property
    def name(self) -> str:
        return "Forms"

    @property
    def rule(self) -> str:
        return "label"

    def inspect(self, snapshot: DocumentSnapshot) -> InspectorResult:
        result = InspectorResult(inspector_name=self.name)
        issues: list[FormIssue] = []
        label_targets = {
            (label.get("for") or "").strip() for label in snapshot.iter_tag("label")
        }
        label_targets.discard("")

        total_controls = labeled = 0
        unlabeled: set[int] = set()

        for node in snapshot.nodes:
            if _is_button(node):
                if not _button_name(snapshot, node):
                    unlabeled.add(node.index)
                    issues.append(FormIssue("label-missing", node.locator,
                                            "Buttons must have accessible text", _BUTTON_FIX))
                    result.defects.append(node_defect(
                        "label-missing", Severity.SERIOUS,
                        "Buttons must have discernible text",
                        snapshot, node,
                        "Button has no value, text content or accessible name",
                    ))
                continue

            if not _is_labelable(node):
                continue
            total_controls += 1
            if _has_label(snapshot, node, label_targets):
                labeled += 1
                continue
            unlabeled.add(node.index)
            issues.append(FormIssue("label-missing", node.locator,
                                    "Form inputs missing associated labels", _LABEL_FIX))
            result.defects.append(node_defect(
                "label-missing", Severity.CRITICAL,
                "Form elements must have labels",
                snapshot, node,
                "Form element does not have an associated label",
                help="Ensure every form element has a label",
            ))

        forms = list(snapshot.iter_tag("form"))
        with_labels = with_fieldsets = 0
        for form in forms:
            fields = [n for n in snapshot.descendants(form) if n.tag in _FIELD_TAGS
                      and (n.get("type") or "").lower() != "hidden"]
            controls = [n for n in snapshot.descendants(form)
                        if _is_labelable(n) or _is_button(n)]
            grouped = any(n.tag == "fieldset" or role_of(n) in ("group", "radiogroup")
                          for n in snapshot.descendants(form))

            if all(c.index not in unlabeled for c in controls):
                with_labels += 1
            if grouped:
                with_fieldsets += 1
            if len(fields) > self._grouping_threshold and not grouped:
                issues.append(FormIssue(
                    "grouping", form.locator,
                    "Large forms should use fieldsets to group related fields",
                    _GROUPING_FIX,
                ))

        if labeled:
            result.passes.append(PassRecord("label", "Form elements have labels", labeled))

        logger.debug("Inspected %d form(s), %d control(s)", len(forms), total_controls)
        result.analysis = FormAnalysis(
            total_forms=len(forms),
            forms_with_labels=with_labels,
            forms_with_fieldsets=with_fieldsets,
            total_controls=total_controls,
            labeled_controls=labeled,
            issues=tuple(issues),
        )
        return result


def _is_button(node: Node) -> bool:
    if node.tag == "button":
        return True
    return node.tag == "input" and (node.get("type") or "").lower() in _BUTTON_TYPES


def _is_labelable(node: Node) -> bool:
    if node.tag not in _FIELD_TAGS:
        return False
    input_type = (node.get("type") or "").lower()
    return input_type not in _UNLABELED_TYPES and input_type not in _BUTTON_TYPES


def _referenced_text(snapshot: DocumentSnapshot, node: Node) -> bool:
    """True when aria-labelledby points at an existing node with text."""
    for ref in (node.get("aria-labelledby") or "").split():
        target = snapshot.by_id(ref)
        if target is not None and snapshot.text_content(target):
            return True
    return False


def _has_label(snapshot: DocumentSnapshot, node: Node, label_targets: set[str]) -> bool:
    node_id = (node.get("id") or "").strip()
    if node_id and node_id in label_targets:
        return True
    if (node.get("aria-label") or "").strip():
        return True
    if _referenced_text(snapshot, node):
        return True
    if (node.get("title") or "").strip():
        return True
    return any(a.tag == "label" and snapshot.text_content(a) for a in snapshot.ancestors(node))


def _button_name(snapshot: DocumentSnapshot, node: Node) -> bool:
    if (node.get("value") or "").strip():
        return True
    if snapshot.text_content(node):
        return True
    if (node.get("aria-label") or "").strip():
        return True
    return _referenced_text(snapshot, node)
