"""Tests for contrast utilities and the contrast inspector."""

from __future__ import annotations

import pytest

from polaris_audit.errors import ColorParseError, InvalidColorError
from polaris_audit.inspectors.contrast import ContrastInspector
from polaris_audit.utils.contrast import (
    ColorSpec,
    contrast,
    contrast_ratio,
    is_large_text,
    parse_color,
    passes_aa,
    passes_aaa,
    relative_luminance,
    required_increase,
)
from tests.utils.tree import el, page


class TestRelativeLuminance:
    def test_black(self) -> None:
        assert relative_luminance(0, 0, 0) == pytest.approx(0.0, abs=1e-6)

    def test_white(self) -> None:
        assert relative_luminance(255, 255, 255) == pytest.approx(1.0, abs=1e-4)

    def test_mid_gray(self) -> None:
        lum = relative_luminance(128, 128, 128)
        assert 0.2 < lum < 0.25  # ~0.2158

    def test_pure_red(self) -> None:
        lum = relative_luminance(255, 0, 0)
        assert 0.20 < lum < 0.22  # ~0.2126

    def test_color_spec_method(self) -> None:
        assert ColorSpec(0, 255, 0).relative_luminance() == pytest.approx(0.7152, abs=1e-4)


class TestContrastRatio:
    def test_black_on_white(self) -> None:
        ratio = contrast_ratio((0, 0, 0), (255, 255, 255))
        assert ratio == pytest.approx(21.0, abs=0.01)

    def test_white_on_white(self) -> None:
        assert contrast_ratio((255, 255, 255), (255, 255, 255)) == 1.0

    def test_same_color_is_exactly_one(self) -> None:
        assert contrast("#3a7bd5", "#3a7bd5").ratio == 1.0

    def test_symmetric(self) -> None:
        r1 = contrast_ratio((100, 50, 200), (200, 100, 50))
        r2 = contrast_ratio((200, 100, 50), (100, 50, 200))
        assert r1 == r2

    def test_symmetric_through_contrast(self) -> None:
        assert contrast("#123456", "#fedcba").ratio == contrast("#fedcba", "#123456").ratio

    def test_light_gray_on_white(self) -> None:
        # Light gray (217, 217, 217) on white should fail AA
        ratio = contrast_ratio((217, 217, 217), (255, 255, 255))
        assert ratio < 4.5

    def test_gray_999_on_white(self) -> None:
        assert contrast("#999999", "#ffffff").ratio == pytest.approx(2.85, abs=0.01)


class TestContrastResult:
    def test_black_on_white_passes_everything(self) -> None:
        res = contrast("#000000", "#ffffff")
        assert res.ratio == pytest.approx(21.0, abs=0.01)
        assert res.passes_aa is True
        assert res.passes_aaa is True

    def test_aa_only(self) -> None:
        res = contrast("#767676", "#ffffff")  # ~4.54:1
        assert res.passes_aa is True
        assert res.passes_aaa is False

    def test_large_text_threshold(self) -> None:
        res = contrast("#949494", "#ffffff", large_text=True)  # ~3.03:1
        assert res.passes_aa is True
        assert contrast("#949494", "#ffffff").passes_aa is False

    def test_translucent_foreground_composited(self) -> None:
        res = contrast("rgba(0, 0, 0, 0.5)", "#ffffff")
        assert res.foreground.rgb == (128, 128, 128)

    def test_transparent_background_raises(self) -> None:
        with pytest.raises(InvalidColorError):
            contrast("#000", "transparent")


class TestThresholds:
    def test_passes_normal(self) -> None:
        assert passes_aa(4.5) is True

    def test_fails_normal(self) -> None:
        assert passes_aa(4.4) is False

    def test_passes_large_text(self) -> None:
        assert passes_aa(3.0, large_text=True) is True

    def test_fails_large_text(self) -> None:
        assert passes_aa(2.9, large_text=True) is False

    def test_aaa(self) -> None:
        assert passes_aaa(7.0) is True
        assert passes_aaa(6.9) is False
        assert passes_aaa(4.5, large_text=True) is True

    def test_large_text_detection(self) -> None:
        assert is_large_text(24) is True
        assert is_large_text(19, "bold") is True
        assert is_large_text(19, "700") is True
        assert is_large_text(19, "400") is False
        assert is_large_text(None, "bold") is False

    def test_required_increase(self) -> None:
        assert required_increase(2.849) == 58


class TestParseColor:
    def test_short_hex(self) -> None:
        assert parse_color("#fff") == ColorSpec(255, 255, 255)

    def test_long_hex(self) -> None:
        assert parse_color("#FF8000").rgb == (255, 128, 0)

    def test_hex_with_alpha(self) -> None:
        assert parse_color("#00000080").alpha == pytest.approx(128 / 255)

    def test_rgb_function(self) -> None:
        assert parse_color("rgb(255, 0, 0)").rgb == (255, 0, 0)

    def test_rgba_function(self) -> None:
        assert parse_color("rgba(0, 0, 0, 0.5)").alpha == 0.5

    def test_space_syntax_with_percent_alpha(self) -> None:
        color = parse_color("rgb(0 128 255 / 50%)")
        assert color.rgb == (0, 128, 255)
        assert color.alpha == 0.5

    def test_percent_channels(self) -> None:
        assert parse_color("rgb(100%, 0%, 0%)").rgb == (255, 0, 0)

    def test_named(self) -> None:
        assert parse_color("White").rgb == (255, 255, 255)

    @pytest.mark.parametrize(
        "spec", ["transparent", "none", "", "rgba(0, 0, 0, 0)", "#00000000", "chartreuse-ish", "rgb(1, 2)"]
    )
    def test_rejected(self, spec: str) -> None:
        with pytest.raises(ColorParseError):
            parse_color(spec)

    def test_to_hex(self) -> None:
        assert ColorSpec(153, 153, 153).to_hex() == "#999999"


class TestContrastInspector:
    def test_failing_node_emits_serious_defect(self) -> None:
        snapshot = page(el("p", text="faint", style={"color": "#999999", "background-color": "#ffffff"}))
        result = ContrastInspector().inspect(snapshot)

        assert len(result.defects) == 1
        defect = result.defects[0]
        assert defect.kind == "insufficient-contrast"
        assert defect.severity.value == "serious"
        assert defect.locators == ("/html[1]/body[1]/p[1]",)

        entry = result.analysis[0]
        assert entry.ratio == 2.85
        assert entry.passes_aa is False
        assert entry.recommendation.startswith("Increase contrast by 58% to meet AA standards")

    def test_passing_nodes_are_recorded(self) -> None:
        snapshot = page(
            el("p", text="ok", style={"color": "#000", "background-color": "#fff"}),
            el("p", text="aa", style={"color": "#767676", "background-color": "#fff"}),
        )
        result = ContrastInspector().inspect(snapshot)
        assert result.defects == []
        assert [e.recommendation for e in result.analysis][0] == "Excellent contrast ratio"
        assert "AAA" in result.analysis[1].recommendation
        assert "7:1" in result.analysis[1].recommendation
        assert result.passes[0].nodes == 2

    def test_transparent_background_skipped(self) -> None:
        snapshot = page(el("p", text="x", style={"color": "#999", "background-color": "rgba(0, 0, 0, 0)"}))
        result = ContrastInspector().inspect(snapshot)
        assert result.analysis == ()
        assert result.defects == []

    def test_unparseable_color_skips_only_that_node(self) -> None:
        snapshot = page(
            el("p", text="bad", style={"color": "not-a-color", "background-color": "#fff"}),
            el("p", text="faint", style={"color": "#999", "background-color": "#fff"}),
        )
        result = ContrastInspector().inspect(snapshot)
        assert len(result.analysis) == 1
        assert result.analysis[0].element == "/html[1]/body[1]/p[2]"

    def test_large_text_uses_relaxed_threshold(self) -> None:
        style = {"color": "#949494", "background-color": "#fff", "font-size": "24px"}
        result = ContrastInspector().inspect(page(el("h1", text="Big", style=style)))
        assert result.defects == []
        assert result.analysis[0].large_text is True
