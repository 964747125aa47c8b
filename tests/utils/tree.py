"""Helpers for building snapshot trees in tests."""

from __future__ import annotations

from typing import Any

from polaris_audit.snapshot import DocumentSnapshot


def el(tag: str, *children: dict[str, Any], text: str = "",
       style: dict[str, Any] | None = None, **attrs: str) -> dict[str, Any]:
    """Build one snapshot node.

    Attribute names use underscores for dashes (``aria_label``) and a trailing
    underscore for Python keywords (``for_``).
    """
    node: dict[str, Any] = {"tag": tag}
    if attrs:
        node["attributes"] = {k.rstrip("_").replace("_", "-"): v for k, v in attrs.items()}
    if style is not None:
        node["style"] = style
    if text:
        node["text"] = text
    if children:
        node["children"] = list(children)
    return node


def page(*body_children: dict[str, Any]) -> DocumentSnapshot:
    """Snapshot of ``<html><body>...</body></html>``."""
    return DocumentSnapshot.from_dict(el("html", el("body", *body_children), lang="en"))
