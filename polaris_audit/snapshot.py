"""Immutable document tree snapshot.

The renderer hands the engine one snapshot per scan.  Nodes are stored in a
flat arena in document (pre-)order; parent/child links are indices into that
arena, so inspectors can walk the tree freely without touching the source DOM.

A snapshot can be built from a nested mapping::

    {
        "tag": "html",
        "attributes": {"lang": "en"},
        "style": {"color": "#000", "background-color": "#fff"},
        "text": "",
        "children": [...]
    }
"""

from __future__ import annotations

import json
import re
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Any

from polaris_audit.errors import InputError

_WS = re.compile(r"\s+")

# Accepted spellings for computed style keys.
_STYLE_KEYS: dict[str, str] = {
    "color": "color",
    "foreground": "color",
    "background-color": "background_color",
    "backgroundColor": "background_color",
    "background_color": "background_color",
    "background": "background_color",
    "font-size": "font_size",
    "fontSize": "font_size",
    "font_size": "font_size",
    "font-weight": "font_weight",
    "fontWeight": "font_weight",
    "font_weight": "font_weight",
    "outline": "outline",
    "box-shadow": "box_shadow",
    "boxShadow": "box_shadow",
    "box_shadow": "box_shadow",
}


@dataclass(frozen=True)
class ComputedStyle:
    """Resolved style values the inspectors care about."""

    color: str | None = None
    background_color: str | None = None
    font_size: float | None = None  # CSS px
    font_weight: str | None = None
    outline: str | None = None
    box_shadow: str | None = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> ComputedStyle:
        values: dict[str, Any] = {}
        for key, value in data.items():
            name = _STYLE_KEYS.get(key)
            if name is None or value is None:
                continue
            if name == "font_size":
                values[name] = _parse_px(value)
            else:
                values[name] = str(value).strip()
        return cls(**values)


def _parse_px(value: Any) -> float | None:
    if isinstance(value, (int, float)):
        return float(value)
    text = str(value).strip().lower()
    try:
        if text.endswith("px"):
            return float(text[:-2])
        if text.endswith("pt"):
            return float(text[:-2]) * 4 / 3
        return float(text)
    except ValueError:
        return None


@dataclass(frozen=True)
class Node:
    """A single element of the snapshot."""

    index: int
    tag: str
    attributes: Mapping[str, str]
    style: ComputedStyle | None
    text: str
    parent: int | None
    children: tuple[int, ...]
    locator: str

    def get(self, name: str, default: str | None = None) -> str | None:
        return self.attributes.get(name, default)

    def has(self, name: str) -> bool:
        return name in self.attributes


class DocumentSnapshot:
    """Read-only arena of :class:`Node` records.

    Usage::

        snapshot = DocumentSnapshot.from_dict(tree)
        for node in snapshot.iter_tag("img"):
            ...
    """

    __slots__ = ("_nodes", "_ids")

    def __init__(self, nodes: tuple[Node, ...]) -> None:
        if not nodes:
            raise InputError("Document snapshot is empty.")
        self._nodes = nodes
        ids: dict[str, int] = {}
        for node in nodes:
            node_id = node.attributes.get("id")
            if node_id and node_id not in ids:
                ids[node_id] = node.index
        self._ids = MappingProxyType(ids)

    # ── construction ────────────────────────────────────────────────────

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> DocumentSnapshot:
        """Build a snapshot from a nested mapping (see module docstring)."""
        if not isinstance(data, Mapping) or not data:
            raise InputError("Document snapshot must be a non-empty mapping.")
        return cls(tuple(_ArenaBuilder().build(data)))

    @classmethod
    def from_json(cls, text: str) -> DocumentSnapshot:
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise InputError(f"Snapshot is not valid JSON: {exc}") from exc
        except RecursionError as exc:
            raise InputError("Snapshot JSON is nested too deeply to decode.") from exc
        return cls.from_dict(data)

    @classmethod
    def load(cls, path: Path) -> DocumentSnapshot:
        """Read a JSON snapshot from *path*."""
        if not path.is_file():
            raise InputError(f"Snapshot file not found: {path}")
        return cls.from_json(path.read_text(encoding="utf-8"))

    # ── queries ─────────────────────────────────────────────────────────

    def __len__(self) -> int:
        return len(self._nodes)

    @property
    def root(self) -> Node:
        return self._nodes[0]

    @property
    def nodes(self) -> tuple[Node, ...]:
        return self._nodes

    def children(self, node: Node) -> Iterator[Node]:
        for idx in node.children:
            yield self._nodes[idx]

    def parent(self, node: Node) -> Node | None:
        return None if node.parent is None else self._nodes[node.parent]

    def ancestors(self, node: Node) -> Iterator[Node]:
        current = self.parent(node)
        while current is not None:
            yield current
            current = self.parent(current)

    def descendants(self, node: Node) -> Iterator[Node]:
        """All nodes below *node*, in document order."""
        stack = list(reversed(node.children))
        while stack:
            current = self._nodes[stack.pop()]
            yield current
            stack.extend(reversed(current.children))

    def iter_tag(self, *tags: str, within: Node | None = None) -> Iterator[Node]:
        wanted = {t.lower() for t in tags}
        source = self._nodes if within is None else self.descendants(within)
        for node in source:
            if node.tag in wanted:
                yield node

    def by_id(self, node_id: str) -> Node | None:
        idx = self._ids.get(node_id)
        return None if idx is None else self._nodes[idx]

    def text_content(self, node: Node) -> str:
        """Concatenated text of *node* and its descendants, whitespace-collapsed."""
        parts = [node.text]
        parts.extend(d.text for d in self.descendants(node))
        return _WS.sub(" ", " ".join(p for p in parts if p)).strip()

    def outer_html(self, node: Node, limit: int = 200) -> str:
        """Short opening-tag rendering of *node*, used as a defect snippet."""
        attrs = "".join(f' {k}="{v}"' for k, v in node.attributes.items())
        html = f"<{node.tag}{attrs}>"
        if len(html) > limit:
            return html[:limit] + "..."
        return html

    def to_dict(self, node: Node | None = None) -> dict[str, Any]:
        """Nested mapping form, the inverse of :meth:`from_dict`."""
        top = node or self.root
        built: dict[int, dict[str, Any]] = {}
        for current in (top, *self.descendants(top)):
            out: dict[str, Any] = {"tag": current.tag, "locator": current.locator}
            if current.attributes:
                out["attributes"] = dict(current.attributes)
            if current.style is not None:
                out["style"] = {
                    k.replace("_", "-"): v
                    for k, v in vars(current.style).items()
                    if v is not None
                }
            if current.text:
                out["text"] = current.text
            built[current.index] = out
            # Descendants come in document order, so the parent is already built.
            if current is not top:
                built[current.parent].setdefault("children", []).append(out)
        return built[top.index]


class _ArenaBuilder:
    """Flattens a nested mapping into arena order, assigning locators.

    Walks with an explicit stack, so nesting depth is not bounded by the
    interpreter's recursion limit.
    """

    def __init__(self) -> None:
        self._locators: set[str] = set()

    def build(self, root: Mapping[str, Any]) -> list[Node]:
        fields: list[dict[str, Any]] = []
        # Mutable child lists while building; frozen into tuples at the end.
        children: list[list[int]] = []
        stack: list[tuple[Mapping[str, Any], int | None, str, int]] = [(root, None, "", 1)]

        while stack:
            data, parent, parent_path, position = stack.pop()
            tag = data.get("tag")
            if not isinstance(tag, str) or not tag.strip():
                raise InputError(f"Snapshot node under {parent_path or '/'} has no tag.")
            tag = tag.strip().lower()

            raw_attrs = data.get("attributes") or {}
            if not isinstance(raw_attrs, Mapping):
                raise InputError(f"Attributes of <{tag}> must be a mapping.")
            raw_style = data.get("style")

            path = f"{parent_path}/{tag}[{position}]"
            locator = data.get("locator") or path
            if locator in self._locators:
                raise InputError(f"Duplicate node locator: {locator}")
            self._locators.add(locator)

            index = len(fields)
            fields.append({
                "index": index,
                "tag": tag,
                "attributes": MappingProxyType({str(k): str(v) for k, v in raw_attrs.items()}),
                "style": ComputedStyle.from_mapping(raw_style) if isinstance(raw_style, Mapping) else None,
                "text": str(data.get("text") or ""),
                "parent": parent,
                "locator": locator,
            })
            children.append([])
            if parent is not None:
                children[parent].append(index)

            raw_children = data.get("children") or []
            if not isinstance(raw_children, list):
                raise InputError(f"Children of {locator} must be a list.")
            seen: dict[str, int] = {}
            queued: list[tuple[Mapping[str, Any], int | None, str, int]] = []
            for child in raw_children:
                if not isinstance(child, Mapping):
                    raise InputError(f"Child of {locator} must be a mapping.")
                child_tag = str(child.get("tag", "")).strip().lower()
                seen[child_tag] = seen.get(child_tag, 0) + 1
                queued.append((child, index, path, seen[child_tag]))
            # Reversed so the first child is popped next, keeping pre-order.
            stack.extend(reversed(queued))

        return [Node(children=tuple(children[i]), **f) for i, f in enumerate(fields)]
