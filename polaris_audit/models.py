"""Shared data models produced by an audit run."""

from __future__ import annotations

import enum
from dataclasses import asdict, dataclass, field
from typing import Any


class Severity(str, enum.Enum):
    """Impact of a defect, ordered from least to most severe."""

    MINOR = "minor"
    MODERATE = "moderate"
    SERIOUS = "serious"
    CRITICAL = "critical"

    @property
    def rank(self) -> int:
        return _SEVERITY_RANK[self]

    def at_least(self, other: Severity) -> bool:
        return self.rank >= other.rank


_SEVERITY_RANK = {
    Severity.MINOR: 0,
    Severity.MODERATE: 1,
    Severity.SERIOUS: 2,
    Severity.CRITICAL: 3,
}


class ConformanceLevel(str, enum.Enum):
    """WCAG 2.1 conformance grade."""

    A = "A"
    AA = "AA"
    AAA = "AAA"


@dataclass(frozen=True)
class DefectNode:
    """One element affected by a defect."""

    locator: str
    html: str = ""
    failure_summary: str = ""


@dataclass(frozen=True)
class Defect:
    """A single classified accessibility nonconformance."""

    kind: str
    severity: Severity
    description: str
    nodes: tuple[DefectNode, ...] = ()
    help: str = ""
    help_url: str = ""
    remediation: str = ""
    code_example: str = ""
    source: str = "manual"

    @property
    def locators(self) -> tuple[str, ...]:
        return tuple(n.locator for n in self.nodes)


@dataclass(frozen=True)
class PassRecord:
    """A rule that passed, with the number of matching nodes."""

    rule: str
    description: str
    nodes: int = 0


@dataclass(frozen=True)
class IncompleteRecord:
    """A rule that needs manual judgment."""

    rule: str
    description: str
    nodes: int = 0
    reason: str = "Requires manual testing"


# ── Detailed analysis sub-reports ───────────────────────────────────────────


@dataclass(frozen=True)
class ColorContrastEntry:
    element: str
    foreground: str
    background: str
    ratio: float
    passes_aa: bool
    passes_aaa: bool
    recommendation: str
    large_text: bool = False


@dataclass(frozen=True)
class HeadingEntry:
    level: int
    text: str
    locator: str
    issues: tuple[str, ...] = ()


@dataclass(frozen=True)
class HeadingAnalysis:
    structure: tuple[HeadingEntry, ...] = ()
    has_h1: bool = False
    proper_nesting: bool = True
    recommendations: tuple[str, ...] = ()


@dataclass(frozen=True)
class FormIssue:
    kind: str  # "grouping", "label-missing", ...
    locator: str
    description: str
    fix: str = ""


@dataclass(frozen=True)
class FormAnalysis:
    total_forms: int = 0
    forms_with_labels: int = 0
    forms_with_fieldsets: int = 0
    total_controls: int = 0
    labeled_controls: int = 0
    issues: tuple[FormIssue, ...] = ()


@dataclass(frozen=True)
class ImageIssue:
    kind: str  # "missing-alt", "alt-too-long", "alt-redundant-phrase"
    locator: str
    src: str
    issue: str
    fix: str = ""


@dataclass(frozen=True)
class ImageAnalysis:
    total_images: int = 0
    images_with_alt: int = 0
    decorative_images: int = 0
    issues: tuple[ImageIssue, ...] = ()


@dataclass(frozen=True)
class KeyboardIssue:
    kind: str  # "positive-tabindex", "missing-focus-indicator"
    locator: str
    description: str


@dataclass(frozen=True)
class KeyboardAnalysis:
    focusable_elements: int = 0
    elements_with_tabindex: int = 0
    skip_links: int = 0
    issues: tuple[KeyboardIssue, ...] = ()
    recommendations: tuple[str, ...] = ()


@dataclass(frozen=True)
class DetailedAnalysis:
    """The five independent inspector sub-reports.

    A section is ``None`` when its inspector failed; the rule is then listed
    among the incomplete records instead.
    """

    color_contrast: tuple[ColorContrastEntry, ...] | None = ()
    heading_structure: HeadingAnalysis | None = field(default_factory=HeadingAnalysis)
    form_analysis: FormAnalysis | None = field(default_factory=FormAnalysis)
    image_analysis: ImageAnalysis | None = field(default_factory=ImageAnalysis)
    keyboard_navigation: KeyboardAnalysis | None = field(default_factory=KeyboardAnalysis)


# ── Aggregate result ────────────────────────────────────────────────────────


@dataclass(frozen=True)
class AuditSummary:
    violations: int
    passes: int
    incomplete: int
    score: int
    conformance_level: ConformanceLevel
    total_elements: int
    tested_elements: int
    critical: int = 0
    serious: int = 0
    moderate: int = 0
    minor: int = 0


@dataclass(frozen=True)
class AuditResult:
    """Complete, immutable result of one audit invocation."""

    score: int
    conformance_level: ConformanceLevel
    defects: tuple[Defect, ...]
    passes: tuple[PassRecord, ...]
    incomplete: tuple[IncompleteRecord, ...]
    summary: AuditSummary
    detailed_analysis: DetailedAnalysis
    sources: tuple[str, ...] = ("manual",)

    def defects_with(self, severity: Severity) -> tuple[Defect, ...]:
        return tuple(d for d in self.defects if d.severity == severity)

    def to_dict(self) -> dict[str, Any]:
        """Plain-data form of the result, suitable for ``json.dumps``."""
        return asdict(self)


@dataclass
class InspectorResult:
    """Findings from a single inspector run."""

    inspector_name: str
    analysis: Any = None
    defects: list[Defect] = field(default_factory=list)
    passes: list[PassRecord] = field(default_factory=list)
    success: bool = True
    error: str | None = None
