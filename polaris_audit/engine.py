"""Top-level audit orchestration.

Reads a DocumentSnapshot and produces an AuditResult describing its defects,
score, conformance level and detailed analysis.
"""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Mapping, Sequence
from typing import Any

from polaris_audit.aggregator import DefectAggregator
from polaris_audit.config import PolarisConfig
from polaris_audit.errors import InputError
from polaris_audit.inspectors import Inspector, default_inspectors
from polaris_audit.models import AuditResult, AuditSummary, Severity
from polaris_audit.scoring import classify, score
from polaris_audit.snapshot import DocumentSnapshot
from polaris_audit.sources import get_source, run_sync
from polaris_audit.sources.base import DefectSource
from polaris_audit.sources.manual import ManualInspectionSource
from polaris_audit.sources.static import StaticBaselineSource

logger = logging.getLogger(__name__)


class Auditor:
    """Audits document snapshots for accessibility conformance.

    Usage::

        auditor = Auditor()
        result = auditor.audit(DocumentSnapshot.load(Path("page.json")))

    An Auditor holds only configuration; every ``audit()`` call is independent.
    """

    def __init__(
        self,
        config: PolarisConfig | None = None,
        *,
        inspectors: list[Inspector] | None = None,
        baseline: DefectSource | None = None,
    ) -> None:
        self._config = config or PolarisConfig()
        self._inspectors = inspectors
        self._baseline = baseline

    def audit(
        self,
        snapshot: DocumentSnapshot | None,
        baseline: Mapping[str, Any] | Sequence[Any] | None = None,
    ) -> AuditResult:
        """Run a full audit on *snapshot*.

        *baseline* is an optional pre-computed conformance-testing result
        (see ``polaris_audit.sources.static``).  Raises ``InputError`` when
        the snapshot is unusable.
        """
        return run_sync(self.audit_async(snapshot, baseline))

    async def audit_async(
        self,
        snapshot: DocumentSnapshot | None,
        baseline: Mapping[str, Any] | Sequence[Any] | None = None,
    ) -> AuditResult:
        if snapshot is None or not isinstance(snapshot, DocumentSnapshot) or len(snapshot) == 0:
            raise InputError("A non-empty DocumentSnapshot is required.")

        aggregator = DefectAggregator(
            ManualInspectionSource(self._make_inspectors()),
            self._baseline_source(baseline),
            mode=self._config.baseline.mode,
            timeout=self._config.baseline.timeout,
        )
        aggregation = await aggregator.aggregate(snapshot)

        defects = tuple(aggregation.defects)
        value = score(defects, aggregation.analysis, self._config.scoring)
        level = classify(defects)
        counts = Counter(d.severity for d in defects)

        summary = AuditSummary(
            violations=len(defects),
            passes=len(aggregation.passes),
            incomplete=len(aggregation.incomplete),
            score=value,
            conformance_level=level,
            total_elements=len(snapshot),
            tested_elements=len(defects) + sum(p.nodes for p in aggregation.passes),
            critical=counts[Severity.CRITICAL],
            serious=counts[Severity.SERIOUS],
            moderate=counts[Severity.MODERATE],
            minor=counts[Severity.MINOR],
        )
        logger.info(
            "Audit complete: score=%d level=%s defects=%d sources=%s",
            value, level.value, len(defects), ",".join(aggregation.sources),
        )
        return AuditResult(
            score=value,
            conformance_level=level,
            defects=defects,
            passes=tuple(aggregation.passes),
            incomplete=tuple(aggregation.incomplete),
            summary=summary,
            detailed_analysis=aggregation.analysis,
            sources=tuple(aggregation.sources),
        )

    def _make_inspectors(self) -> list[Inspector]:
        if self._inspectors is not None:
            return list(self._inspectors)
        return default_inspectors(self._config.inspection)

    def _baseline_source(
        self, baseline: Mapping[str, Any] | Sequence[Any] | None
    ) -> DefectSource | None:
        if baseline is not None:
            return StaticBaselineSource(baseline)
        if self._baseline is not None:
            return self._baseline
        cfg = self._config.baseline
        if cfg.source == "http":
            return get_source("http", url=cfg.url, timeout=cfg.timeout)
        return None


def audit(
    snapshot: DocumentSnapshot | None,
    baseline: Mapping[str, Any] | Sequence[Any] | None = None,
    *,
    config: PolarisConfig | None = None,
) -> AuditResult:
    """Convenience wrapper around :meth:`Auditor.audit`."""
    return Auditor(config).audit(snapshot, baseline)
