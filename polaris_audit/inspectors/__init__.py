"""Tree inspectors.

Each inspector is a stateless object whose ``inspect()`` reads one snapshot.
"""

from __future__ import annotations

from polaris_audit.config import InspectionConfig
from polaris_audit.inspectors.base import Inspector
from polaris_audit.inspectors.contrast import ContrastInspector
from polaris_audit.inspectors.forms import FormInspector
from polaris_audit.inspectors.headings import HeadingInspector
from polaris_audit.inspectors.images import ImageInspector
from polaris_audit.inspectors.keyboard import KeyboardInspector

__all__ = [
    "ContrastInspector",
    "FormInspector",
    "HeadingInspector",
    "ImageInspector",
    "Inspector",
    "KeyboardInspector",
    "default_inspectors",
]


def default_inspectors(config: InspectionConfig | None = None) -> list[Inspector]:
    """Build the standard inspector set.

    List order determines execution order, and therefore defect order.
    """
    config = config or InspectionConfig()
    return [
        ImageInspector(max_alt_length=config.max_alt_length),
        HeadingInspector(max_text_length=config.max_heading_length),
        FormInspector(grouping_threshold=config.grouping_threshold),
        KeyboardInspector(),
        ContrastInspector(),
    ]
