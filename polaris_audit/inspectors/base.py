"""Base protocol and helpers for tree inspectors."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from polaris_audit.models import Defect, DefectNode, InspectorResult, Severity
from polaris_audit.snapshot import DocumentSnapshot, Node


@runtime_checkable
class Inspector(Protocol):
    """Interface that every tree inspector must implement.

    Each inspector addresses a single accessibility concern (images, headings,
    forms, keyboard access, contrast).  Inspectors only read the snapshot and
    return a fresh InspectorResult carrying their defects and sub-report.
    Unexpected exceptions are allowed to propagate; the aggregator turns them
    into an incomplete record.
    """

    @property
    def name(self) -> str:
        """Human-readable inspector name (e.g. 'Images')."""
        ...

    @property
    def rule(self) -> str:
        """Rule identifier reported when the inspector cannot complete."""
        ...

    def inspect(self, snapshot: DocumentSnapshot) -> InspectorResult:
        ...


def node_defect(
    kind: str,
    severity: Severity,
    description: str,
    snapshot: DocumentSnapshot,
    node: Node,
    failure_summary: str,
    *,
    help: str = "",
) -> Defect:
    """Build a single-node defect for *node*."""
    return Defect(
        kind=kind,
        severity=severity,
        description=description,
        help=help,
        nodes=(
            DefectNode(
                locator=node.locator,
                html=snapshot.outer_html(node),
                failure_summary=failure_summary,
            ),
        ),
    )


def is_hidden(node: Node) -> bool:
    return node.get("aria-hidden", "").lower() == "true" or node.has("hidden")


def role_of(node: Node) -> str:
    return (node.get("role") or "").strip().lower()
