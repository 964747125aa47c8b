"""Shared test fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

from polaris_audit.snapshot import DocumentSnapshot
from tests.utils.tree import el, page


@pytest.fixture
def tmp_dir(tmp_path: Path) -> Path:
    """Alias for pytest's tmp_path fixture."""
    return tmp_path


@pytest.fixture
def scenario_snapshot() -> DocumentSnapshot:
    """One unlabelled image, one low-contrast paragraph, headings h1 then h3."""
    return page(
        el("img", src="hero.jpg"),
        el("p", text="Secondary text", style={"color": "#999999", "background-color": "#ffffff"}),
        el("h1", text="Design for everyone"),
        el("h3", text="Key Features"),
    )


@pytest.fixture
def clean_snapshot() -> DocumentSnapshot:
    """A page with no detectable defects."""
    return page(
        el("a", text="Skip to content", href="#main"),
        el("h1", text="Welcome"),
        el("img", src="logo.png", alt="Polaris logo"),
        el("main",
           el("h2", text="Contact"),
           el("form",
              el("label", text="Email", for_="email"),
              el("input", type="email", id="email"),
              el("button", text="Send", type="submit")),
           id="main",
           style={"color": "#000000", "background-color": "#ffffff"}),
    )


@pytest.fixture
def snapshot_file(tmp_path: Path, scenario_snapshot: DocumentSnapshot) -> Path:
    import json

    path = tmp_path / "page.json"
    path.write_text(json.dumps(scenario_snapshot.to_dict()), encoding="utf-8")
    return path


@pytest.fixture
def axe_baseline() -> dict:
    """Baseline result in the shape produced by axe-core."""
    return {
        "violations": [
            {
                "id": "image-alt",
                "impact": "critical",
                "description": "Images must have alternate text",
                "help": "Ensure img elements have alternate text",
                "helpUrl": "https://dequeuniversity.com/rules/axe/4.7/image-alt",
                "howToFix": "Describe the hero image.",
                "codeExample": "<img src=\"hero.jpg\" alt=\"Team at work\">",
                "nodes": [
                    {
                        "html": "<img src=\"hero.jpg\">",
                        "target": ["/html[1]/body[1]/img[1]"],
                        "failureSummary": "Element does not have an alt attribute",
                    }
                ],
            },
            {
                "id": "link-name",
                "impact": "serious",
                "description": "Links must have discernible text",
                "nodes": [
                    {"html": "<a href=\"/x\"></a>", "target": ["a.icon"], "failureSummary": "No text"},
                    {"html": "<a href=\"/y\"></a>", "target": ["a.icon2"], "failureSummary": "No text"},
                ],
            },
        ],
        "passes": [
            {"id": "document-title", "description": "Documents must have a title", "nodes": [{}]},
        ],
        "incomplete": [
            {"id": "color-contrast-enhanced", "description": "Enhanced color contrast", "nodes": [{}, {}]},
        ],
    }
