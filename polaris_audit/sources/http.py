"""HTTP baseline source: asks an out-of-process conformance tester."""

from __future__ import annotations

import json
import logging
from urllib.parse import urlsplit

import httpx

from polaris_audit.errors import CollaboratorUnavailable
from polaris_audit.snapshot import DocumentSnapshot
from polaris_audit.sources.base import SourceFindings
from polaris_audit.sources.static import normalize_results

logger = logging.getLogger(__name__)


class HttpBaselineSource:
    """POSTs the snapshot as JSON and normalizes the returned result."""

    def __init__(
        self,
        *,
        url: str = "http://localhost:8787/audit",
        timeout: float = 10.0,
        **_kwargs: object,
    ) -> None:
        self._url = url
        self._timeout = timeout

    @property
    def name(self) -> str:
        return "http"

    async def collect(self, snapshot: DocumentSnapshot) -> SourceFindings:
        payload = {"snapshot": snapshot.to_dict()}
        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                resp = await client.post(self._url, json=payload)

                if resp.status_code != 200:
                    raise CollaboratorUnavailable(
                        f"Baseline service error ({resp.status_code}): {resp.text[:200]}"
                    )

                data = resp.json()
        except httpx.ConnectError as exc:
            raise CollaboratorUnavailable(f"Cannot connect to baseline service at {self._url}") from exc
        except httpx.TimeoutException as exc:
            raise CollaboratorUnavailable(f"Baseline service timed out after {self._timeout}s") from exc
        except (httpx.HTTPError, json.JSONDecodeError) as exc:
            raise CollaboratorUnavailable(f"Baseline service failed: {exc}") from exc

        if not isinstance(data, (dict, list)):
            raise CollaboratorUnavailable("Baseline service returned an unexpected payload")
        return normalize_results(data, source_name=self.name)

    async def is_available(self) -> bool:
        parts = urlsplit(self._url)
        base = f"{parts.scheme}://{parts.netloc}/"
        try:
            async with httpx.AsyncClient(timeout=min(self._timeout, 5.0)) as client:
                resp = await client.get(base)
                return resp.status_code < 500
        except Exception:
            return False
