"""Base protocol and shared types for defect sources."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

from polaris_audit.models import Defect, IncompleteRecord, PassRecord
from polaris_audit.snapshot import DocumentSnapshot


@dataclass
class SourceFindings:
    """Defects, passes and incomplete rules reported by one source."""

    source_name: str
    defects: list[Defect] = field(default_factory=list)
    passes: list[PassRecord] = field(default_factory=list)
    incomplete: list[IncompleteRecord] = field(default_factory=list)


@runtime_checkable
class DefectSource(Protocol):
    """Interface for anything that can produce a defect list for a snapshot.

    The engine's own manual inspection is one implementation; an external
    conformance-testing collaborator is another.  Sources live in
    ``polaris_audit/sources/``: one file per source.
    """

    @property
    def name(self) -> str:
        """Source identifier (e.g. 'manual', 'http')."""
        ...

    async def collect(self, snapshot: DocumentSnapshot) -> SourceFindings:
        """Return findings for *snapshot*.

        Out-of-process sources raise ``CollaboratorUnavailable`` when they
        cannot answer.
        """
        ...

    async def is_available(self) -> bool:
        """Check whether the source is reachable / configured."""
        ...
