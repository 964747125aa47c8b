"""Defect sources.

Source registry: use ``get_source()`` to obtain a ``DefectSource`` by name,
and ``select_source()`` to pick the first one that is currently available.
"""

from __future__ import annotations

import asyncio
import importlib
import logging
from collections.abc import Sequence
from typing import Any

from polaris_audit.sources.base import DefectSource, SourceFindings

logger = logging.getLogger(__name__)

__all__ = ["DefectSource", "SourceFindings", "get_source", "run_sync", "select_source"]

# Map of source name → module path, class name
_SOURCE_MAP: dict[str, tuple[str, str]] = {
    "manual": ("polaris_audit.sources.manual", "ManualInspectionSource"),
    "static": ("polaris_audit.sources.static", "StaticBaselineSource"),
    "http": ("polaris_audit.sources.http", "HttpBaselineSource"),
}


def get_source(name: str, **kwargs: Any) -> DefectSource:
    """Create a source instance by name.

    Raises ``ValueError`` if the source name is unknown.
    """
    name = name.lower().strip()
    if name not in _SOURCE_MAP:
        raise ValueError(
            f"Unknown defect source: {name!r}. Available: {', '.join(_SOURCE_MAP)}"
        )

    module_path, class_name = _SOURCE_MAP[name]
    module = importlib.import_module(module_path)
    cls = getattr(module, class_name)
    return cls(**kwargs)


async def select_source(candidates: Sequence[DefectSource]) -> DefectSource | None:
    """Return the first candidate whose ``is_available()`` is true."""
    for source in candidates:
        try:
            if await source.is_available():
                return source
        except Exception:
            logger.debug("Availability check failed for %s", source.name, exc_info=True)
        logger.info("Defect source %s is unavailable", source.name)
    return None


def run_sync(coro):  # type: ignore[no-untyped-def]
    """Run a coroutine, handling the case where an event loop is already running."""
    try:
        loop = asyncio.get_running_loop()
    except RuntimeError:
        loop = None

    if loop and loop.is_running():
        # Inside an async context: run on a fresh loop in a worker thread
        import concurrent.futures
        with concurrent.futures.ThreadPoolExecutor(max_workers=1) as pool:
            return pool.submit(asyncio.run, coro).result()
    else:
        return asyncio.run(coro)
