"""Defect aggregation: merges manual and baseline findings.

The manual inspection pass always runs, since it alone produces the detailed
analysis.  A baseline source, when configured and reachable, either augments
the manual defects or replaces them.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field, replace
from typing import Literal

from polaris_audit.errors import CollaboratorUnavailable
from polaris_audit.models import Defect, DetailedAnalysis, IncompleteRecord, PassRecord
from polaris_audit.remediation import FALLBACK, remediation_for
from polaris_audit.snapshot import DocumentSnapshot
from polaris_audit.sources import select_source
from polaris_audit.sources.base import DefectSource, SourceFindings
from polaris_audit.sources.manual import ManualInspectionSource

logger = logging.getLogger(__name__)

Mode = Literal["augment", "replace"]


@dataclass
class Aggregation:
    """Normalized findings ready for scoring."""

    defects: list[Defect] = field(default_factory=list)
    passes: list[PassRecord] = field(default_factory=list)
    incomplete: list[IncompleteRecord] = field(default_factory=list)
    analysis: DetailedAnalysis = field(default_factory=DetailedAnalysis)
    sources: list[str] = field(default_factory=list)


class DefectAggregator:
    """Combines the manual pass with an optional baseline source.

    Usage::

        aggregator = DefectAggregator(baseline=StaticBaselineSource(axe_json))
        aggregation = await aggregator.aggregate(snapshot)
    """

    def __init__(
        self,
        manual: ManualInspectionSource | None = None,
        baseline: DefectSource | None = None,
        *,
        mode: Mode = "augment",
        timeout: float = 10.0,
    ) -> None:
        self._manual = manual or ManualInspectionSource()
        self._baseline = baseline
        self._mode = mode
        self._timeout = timeout

    async def aggregate(self, snapshot: DocumentSnapshot) -> Aggregation:
        inspection = self._manual.inspect(snapshot)
        manual = inspection.findings
        baseline = await self._collect_baseline(snapshot)

        if baseline is None:
            parts = [manual]
        elif self._mode == "replace":
            parts = [baseline]
        else:
            parts = [manual, baseline]

        defects = dedupe([d for p in parts for d in p.defects])
        passes = _unique_passes(manual.passes + (baseline.passes if baseline else []))
        incomplete = manual.incomplete + (baseline.incomplete if baseline else [])

        return Aggregation(
            defects=[attach_remediation(d) for d in defects],
            passes=passes,
            incomplete=incomplete,
            analysis=inspection.analysis,
            sources=[p.source_name for p in parts],
        )

    async def _collect_baseline(self, snapshot: DocumentSnapshot) -> SourceFindings | None:
        """Ask the baseline source, degrading to ``None`` on any failure."""
        if self._baseline is None:
            return None
        try:
            source = await asyncio.wait_for(select_source([self._baseline]), self._timeout)
            if source is None:
                raise CollaboratorUnavailable(f"{self._baseline.name} is not available")
            return await asyncio.wait_for(source.collect(snapshot), self._timeout)
        except asyncio.TimeoutError:
            logger.warning(
                "Baseline source %s timed out after %ss; using manual inspection only",
                self._baseline.name, self._timeout,
            )
        except CollaboratorUnavailable as exc:
            logger.warning("%s; using manual inspection only", exc)
        except Exception as exc:
            logger.warning(
                "Baseline source %s failed (%s); using manual inspection only",
                self._baseline.name, exc, exc_info=True,
            )
        return None


def attach_remediation(defect: Defect) -> Defect:
    """Fill missing guidance fields from the remediation table."""
    guidance = remediation_for(defect.kind)
    return replace(
        defect,
        remediation=defect.remediation or guidance.how_to_fix,
        code_example=defect.code_example or guidance.code_example,
        help_url=defect.help_url or guidance.help_url or FALLBACK.help_url,
    )


def dedupe(defects: list[Defect]) -> list[Defect]:
    """Drop repeated (kind, locator) pairs, keeping the richer entry.

    The surviving entry stays at the position of the first occurrence.
    """
    order: list[tuple[str, tuple[str, ...]]] = []
    best: dict[tuple[str, tuple[str, ...]], Defect] = {}
    for defect in defects:
        key = (defect.kind, defect.locators)
        current = best.get(key)
        if current is None:
            order.append(key)
            best[key] = defect
        elif _richness(defect) > _richness(current):
            best[key] = defect
    return [best[k] for k in order]


def _richness(defect: Defect) -> tuple[int, int]:
    populated = sum(
        1
        for value in (defect.help, defect.help_url, defect.remediation, defect.description)
        if value
    )
    populated += sum(1 for n in defect.nodes if n.html or n.failure_summary)
    return (1 if defect.code_example else 0, populated)


def _unique_passes(passes: list[PassRecord]) -> list[PassRecord]:
    seen: set[str] = set()
    out: list[PassRecord] = []
    for record in passes:
        if record.rule in seen:
            continue
        seen.add(record.rule)
        out.append(record)
    return out
