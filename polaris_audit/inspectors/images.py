"""ImageInspector: alternative text presence, length and wording."""

from __future__ import annotations

import logging
import re

from polaris_audit.inspectors.base import is_hidden, node_defect, role_of
from polaris_audit.models import (
    ImageAnalysis,
    ImageIssue,
    InspectorResult,
    PassRecord,
    Severity,
)
from polaris_audit.snapshot import DocumentSnapshot, Node

logger = logging.getLogger(__name__)

_REDUNDANT_PREFIX = re.compile(
    r"^\s*(an?\s+)?(image|picture|photo|graphic)\s+of\b", re.IGNORECASE
)
_DECORATIVE_ROLES = frozenset({"presentation", "none"})

_MISSING_FIX = 'Add alt="" for decorative images or descriptive alt text for informative images'
_TOO_LONG_FIX = (
    "Keep alt text under {limit} characters. Use surrounding text or a "
    "linked description for detailed content"
)
_REDUNDANT_FIX = 'Remove phrases like "image of" or "picture of" from alt text'


class ImageInspector:
    def __init__(self, *, max_alt_length: int = 150) -> None:
        self._max_alt_length = max_alt_length

    @property
    def name(self) -> str:
        return "Images"

    @property
    def rule(self) -> str:
        return "image-alt"

    def inspect(self, snapshot: DocumentSnapshot) -> InspectorResult:
        result = InspectorResult(inspector_name=self.name)
        issues: list[ImageIssue] = []
        total = with_alt = decorative = 0

        for node in snapshot.nodes:
            if not _is_image(node):
                continue
            total += 1
            src = node.get("src") or "unknown"
            alt = node.get("alt")
            role = role_of(node)

            if alt is None:
                if role in _DECORATIVE_ROLES or is_hidden(node):
                    decorative += 1
                    continue
                if _has_aria_name(snapshot, node):
                    with_alt += 1
                    continue
                issues.append(ImageIssue("missing-alt", node.locator, src,
                                         "Missing alt attribute", _MISSING_FIX))
                result.defects.append(node_defect(
                    "missing-alt", Severity.CRITICAL,
                    "Images must have alternate text",
                    snapshot, node,
                    "Element does not have an alt attribute",
                    help="Ensure img elements have alternate text or a role of none or presentation",
                ))
                continue

            with_alt += 1
            if not alt.strip() or role in _DECORATIVE_ROLES:
                decorative += 1
                continue

            if len(alt) > self._max_alt_length:
                issues.append(ImageIssue("alt-too-long", node.locator, src,
                                         "Alt text is too long",
                                         _TOO_LONG_FIX.format(limit=self._max_alt_length)))
                result.defects.append(node_defect(
                    "alt-too-long", Severity.MINOR,
                    "Alternative text should be concise",
                    snapshot, node,
                    f"Alt text is {len(alt)} characters (limit {self._max_alt_length})",
                ))

            if _REDUNDANT_PREFIX.search(alt):
                issues.append(ImageIssue("alt-redundant-phrase", node.locator, src,
                                         "Alt text contains redundant phrases",
                                         _REDUNDANT_FIX))
                result.defects.append(node_defect(
                    "alt-redundant-phrase", Severity.MINOR,
                    "Alternative text should not announce that it is an image",
                    snapshot, node,
                    f"Alt text starts with a redundant phrase: {alt[:40]!r}",
                ))

        if with_alt:
            result.passes.append(PassRecord("image-alt", "Images have alternate text", with_alt))

        logger.debug("Inspected %d image(s), %d decorative", total, decorative)
        result.analysis = ImageAnalysis(
            total_images=total,
            images_with_alt=with_alt,
            decorative_images=decorative,
            issues=tuple(issues),
        )
        return result


def _is_image(node: Node) -> bool:
    if node.tag == "img":
        return True
    if node.tag == "input" and (node.get("type") or "").lower() == "image":
        return True
    return role_of(node) == "img"


def _has_aria_name(snapshot: DocumentSnapshot, node: Node) -> bool:
    if (node.get("aria-label") or "").strip():
        return True
    for ref in (node.get("aria-labelledby") or "").split():
        target = snapshot.by_id(ref)
        if target is not None and snapshot.text_content(target):
            return True
    return False
