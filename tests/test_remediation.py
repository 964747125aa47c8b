"""Tests for remediation guidance lookup."""

from __future__ import annotations

from polaris_audit.remediation import FALLBACK, remediation_for


class TestRemediationFor:
    def test_known_kind(self) -> None:
        guidance = remediation_for("missing-alt")
        assert "alt" in guidance.how_to_fix
        assert "<img" in guidance.code_example
        assert guidance.help_url.endswith("image-alt")

    def test_unknown_kind_gets_fallback(self) -> None:
        assert remediation_for("no-such-kind") is FALLBACK
