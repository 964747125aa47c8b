"""WCAG 2.1 contrast ratio utilities.

Implements the relative luminance and contrast ratio calculations defined in
WCAG 2.1 Success Criterion 1.4.3 (Contrast, Minimum) and 1.4.6 (Enhanced).
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass

from polaris_audit.errors import InvalidColorError

AA_NORMAL = 4.5
AA_LARGE = 3.0
AAA_NORMAL = 7.0
AAA_LARGE = 4.5

# CSS basic and commonly used extended keywords.
_NAMED_COLORS: dict[str, tuple[int, int, int]] = {
    "black": (0, 0, 0),
    "silver": (192, 192, 192),
    "gray": (128, 128, 128),
    "grey": (128, 128, 128),
    "white": (255, 255, 255),
    "maroon": (128, 0, 0),
    "red": (255, 0, 0),
    "purple": (128, 0, 128),
    "fuchsia": (255, 0, 255),
    "magenta": (255, 0, 255),
    "green": (0, 128, 0),
    "lime": (0, 255, 0),
    "olive": (128, 128, 0),
    "yellow": (255, 255, 0),
    "navy": (0, 0, 128),
    "blue": (0, 0, 255),
    "teal": (0, 128, 128),
    "aqua": (0, 255, 255),
    "cyan": (0, 255, 255),
    "orange": (255, 165, 0),
    "darkgray": (169, 169, 169),
    "darkgrey": (169, 169, 169),
    "lightgray": (211, 211, 211),
    "lightgrey": (211, 211, 211),
    "dimgray": (105, 105, 105),
    "dimgrey": (105, 105, 105),
    "whitesmoke": (245, 245, 245),
    "gainsboro": (220, 220, 220),
}

_TRANSPARENT = frozenset({"", "transparent", "none", "initial", "inherit", "currentcolor"})
_HEX = re.compile(r"^#([0-9a-f]{3,4}|[0-9a-f]{6}|[0-9a-f]{8})$")
_FUNC = re.compile(r"^rgba?\((.*)\)$")


@dataclass(frozen=True)
class ColorSpec:
    """An sRGB color, 8 bits per channel, plus alpha in [0, 1]."""

    r: int
    g: int
    b: int
    alpha: float = 1.0

    @property
    def rgb(self) -> tuple[int, int, int]:
        return (self.r, self.g, self.b)

    def relative_luminance(self) -> float:
        return relative_luminance(self.r, self.g, self.b)

    def over(self, backdrop: ColorSpec) -> ColorSpec:
        """Composite this color onto an opaque *backdrop*."""
        if self.alpha >= 1.0:
            return self
        a = self.alpha
        return ColorSpec(
            _clamp(self.r * a + backdrop.r * (1 - a)),
            _clamp(self.g * a + backdrop.g * (1 - a)),
            _clamp(self.b * a + backdrop.b * (1 - a)),
        )

    def to_hex(self) -> str:
        return f"#{self.r:02x}{self.g:02x}{self.b:02x}"


WHITE = ColorSpec(255, 255, 255)


@dataclass(frozen=True)
class ContrastResult:
    """Contrast between two colors and its WCAG verdicts."""

    ratio: float
    passes_aa: bool
    passes_aaa: bool
    foreground: ColorSpec
    background: ColorSpec
    large_text: bool = False


def _srgb_to_linear(v: float) -> float:
    """Convert an sRGB channel (0-1) to linear light."""
    if v <= 0.04045:
        return v / 12.92
    return ((v + 0.055) / 1.055) ** 2.4


def relative_luminance(r: int, g: int, b: int) -> float:
    """Compute relative luminance for an sRGB color (0-255 per channel).

    Per WCAG 2.1: L = 0.2126*R + 0.7152*G + 0.0722*B
    where R, G, B are linearized sRGB values.
    """
    rl = _srgb_to_linear(r / 255.0)
    gl = _srgb_to_linear(g / 255.0)
    bl = _srgb_to_linear(b / 255.0)
    return 0.2126 * rl + 0.7152 * gl + 0.0722 * bl


def contrast_ratio(color1: tuple[int, int, int], color2: tuple[int, int, int]) -> float:
    """Compute the WCAG contrast ratio between two sRGB colors.

    Returns a value between 1.0 (identical) and 21.0 (black on white).
    """
    l1 = relative_luminance(*color1)
    l2 = relative_luminance(*color2)
    lighter = max(l1, l2)
    darker = min(l1, l2)
    return (lighter + 0.05) / (darker + 0.05)


def passes_aa(ratio: float, *, large_text: bool = False) -> bool:
    """Check whether a contrast ratio meets WCAG AA.

    Normal text: 4.5:1 minimum.
    Large text (>=18pt or >=14pt bold): 3:1 minimum.
    """
    threshold = AA_LARGE if large_text else AA_NORMAL
    return ratio >= threshold


def passes_aaa(ratio: float, *, large_text: bool = False) -> bool:
    """Check whether a contrast ratio meets WCAG AAA (7:1, or 4.5:1 for large text)."""
    threshold = AAA_LARGE if large_text else AAA_NORMAL
    return ratio >= threshold


def contrast(
    foreground: ColorSpec | str,
    background: ColorSpec | str,
    *,
    large_text: bool = False,
) -> ContrastResult:
    """Contrast of *foreground* text on *background*.

    A translucent background is composited onto white, then a translucent
    foreground onto the resulting background.
    """
    fg = parse_color(foreground) if isinstance(foreground, str) else foreground
    bg = parse_color(background) if isinstance(background, str) else background
    if bg.alpha <= 0:
        raise InvalidColorError("Transparent background is not a contrast partner")
    bg = bg.over(WHITE)
    fg = fg.over(bg)
    ratio = contrast_ratio(fg.rgb, bg.rgb)
    return ContrastResult(
        ratio=ratio,
        passes_aa=passes_aa(ratio, large_text=large_text),
        passes_aaa=passes_aaa(ratio, large_text=large_text),
        foreground=fg,
        background=bg,
        large_text=large_text,
    )


def is_large_text(font_size_px: float | None, font_weight: str | None = None) -> bool:
    """WCAG large text: >=18pt (24px), or >=14pt (~18.66px) when bold.

    Unknown size is treated as normal text so the stricter threshold applies.
    """
    if font_size_px is None:
        return False
    if font_size_px >= 24.0:
        return True
    return font_size_px >= 18.66 and _is_bold(font_weight)


def _is_bold(weight: str | None) -> bool:
    if not weight:
        return False
    w = weight.strip().lower()
    if w in ("bold", "bolder"):
        return True
    try:
        return int(float(w)) >= 700
    except ValueError:
        return False


def required_increase(ratio: float, required: float = AA_NORMAL) -> int:
    """Percentage increase of *ratio* needed to reach *required*."""
    return math.ceil((required / ratio) * 100) - 100


def _clamp(v: float) -> int:
    return max(0, min(255, round(v)))


def parse_color(spec: str) -> ColorSpec:
    """Parse a CSS color string into a :class:`ColorSpec`.

    Supports:
    - hex: ``#rgb``, ``#rgba``, ``#rrggbb``, ``#rrggbbaa``
    - ``rgb()`` / ``rgba()`` with comma or space syntax, integers or percentages
    - named colors (CSS basic set plus common greys)

    Raises ``InvalidColorError`` for transparent/``none`` values, a zero alpha,
    or anything unparseable.
    """
    if spec is None:
        raise InvalidColorError("No color specified")
    text = str(spec).strip().lower()
    if text in _TRANSPARENT:
        raise InvalidColorError(f"Not an opaque color: {spec!r}")

    if text in _NAMED_COLORS:
        return ColorSpec(*_NAMED_COLORS[text])

    m = _HEX.match(text)
    if m:
        return _check_alpha(_parse_hex(m.group(1)), spec)

    m = _FUNC.match(text)
    if m:
        return _check_alpha(_parse_rgb_args(m.group(1), spec), spec)

    raise InvalidColorError(f"Unrecognised color: {spec!r}")


def _check_alpha(color: ColorSpec, spec: str) -> ColorSpec:
    if color.alpha <= 0:
        raise InvalidColorError(f"Fully transparent color: {spec!r}")
    return color


def _parse_hex(digits: str) -> ColorSpec:
    if len(digits) in (3, 4):
        digits = "".join(ch * 2 for ch in digits)
    r, g, b = (int(digits[i:i + 2], 16) for i in (0, 2, 4))
    alpha = int(digits[6:8], 16) / 255.0 if len(digits) == 8 else 1.0
    return ColorSpec(r, g, b, alpha)


def _parse_rgb_args(body: str, spec: str) -> ColorSpec:
    alpha_part: str | None = None
    if "/" in body:
        body, alpha_part = body.split("/", 1)
    parts = [p for p in re.split(r"[,\s]+", body.strip()) if p]
    if len(parts) == 4 and alpha_part is None:
        alpha_part = parts.pop()
    if len(parts) != 3:
        raise InvalidColorError(f"Expected three channels: {spec!r}")
    try:
        channels = [_parse_channel(p) for p in parts]
        alpha = _parse_alpha(alpha_part) if alpha_part is not None else 1.0
    except ValueError as exc:
        raise InvalidColorError(f"Bad channel value in {spec!r}") from exc
    return ColorSpec(*channels, alpha=alpha)


def _parse_channel(value: str) -> int:
    if value.endswith("%"):
        return _clamp(float(value[:-1]) * 255 / 100)
    return _clamp(float(value))


def _parse_alpha(value: str) -> float:
    value = value.strip()
    if value.endswith("%"):
        a = float(value[:-1]) / 100
    else:
        a = float(value)
    return max(0.0, min(1.0, a))
