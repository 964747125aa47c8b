"""Remediation guidance keyed by defect kind."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Remediation:
    how_to_fix: str
    code_example: str = ""
    help_url: str = ""


_DEQUE = "https://dequeuniversity.com/rules/axe/4.7/"

FALLBACK = Remediation(
    how_to_fix="Review the element against WCAG 2.1 conformance guidelines.",
    code_example="<!-- Refer to WCAG guidelines for specific implementation -->",
    help_url="https://www.w3.org/WAI/WCAG21/quickref/",
)

_GUIDANCE: dict[str, Remediation] = {
    "missing-alt": Remediation(
        how_to_fix="Add descriptive alt text to images. Use alt=\"\" for decorative images.",
        code_example=(
            "<!-- Bad -->\n"
            "<img src=\"chart.png\">\n"
            "\n"
            "<!-- Good -->\n"
            "<img src=\"chart.png\" alt=\"Sales increased 25% from Q1 to Q2\">\n"
            "<img src=\"decoration.png\" alt=\"\" role=\"presentation\">"
        ),
        help_url=_DEQUE + "image-alt",
    ),
    "alt-too-long": Remediation(
        how_to_fix="Shorten alt text to a brief summary; move long descriptions into "
                   "surrounding text or a linked description.",
        code_example=(
            "<figure>\n"
            "  <img src=\"chart.png\" alt=\"Quarterly revenue, 2024\">\n"
            "  <figcaption>Revenue grew in every quarter, led by ...</figcaption>\n"
            "</figure>"
        ),
        help_url=_DEQUE + "image-alt",
    ),
    "alt-redundant-phrase": Remediation(
        how_to_fix="Remove phrases like \"image of\" or \"picture of\"; screen readers "
                   "already announce the element as an image.",
        code_example=(
            "<!-- Bad -->\n"
            "<img src=\"team.jpg\" alt=\"Image of our team\">\n"
            "\n"
            "<!-- Good -->\n"
            "<img src=\"team.jpg\" alt=\"Our team at the 2024 offsite\">"
        ),
        help_url=_DEQUE + "image-redundant-alt",
    ),
    "insufficient-contrast": Remediation(
        how_to_fix="Increase color contrast to at least 4.5:1 for normal text and 3:1 "
                   "for large text.",
        code_example=(
            "/* Bad */\n"
            ".text { color: #999; background: #fff; } /* 2.8:1 */\n"
            "\n"
            "/* Good */\n"
            ".text { color: #666; background: #fff; } /* 5.7:1 */"
        ),
        help_url=_DEQUE + "color-contrast",
    ),
    "label-missing": Remediation(
        how_to_fix="Associate form controls with labels using for/id attributes or "
                   "aria-label, and give buttons discernible text.",
        code_example=(
            "<!-- Good -->\n"
            "<label for=\"email\">Email Address</label>\n"
            "<input type=\"email\" id=\"email\" name=\"email\">\n"
            "\n"
            "<!-- Alternative -->\n"
            "<input type=\"email\" aria-label=\"Email Address\">"
        ),
        help_url=_DEQUE + "label",
    ),
    "heading-skip": Remediation(
        how_to_fix="Use headings in logical order (h1, h2, h3) without skipping levels.",
        code_example=(
            "<!-- Bad - skips h2 -->\n"
            "<h1>Main Title</h1>\n"
            "<h3>Subsection</h3>\n"
            "\n"
            "<!-- Good -->\n"
            "<h1>Main Title</h1>\n"
            "<h2>Section Title</h2>\n"
            "<h3>Subsection Title</h3>"
        ),
        help_url=_DEQUE + "heading-order",
    ),
    "heading-empty": Remediation(
        how_to_fix="Give every heading visible text, or remove the empty heading element.",
        code_example="<!-- Bad -->\n<h2></h2>\n\n<!-- Good -->\n<h2>Pricing</h2>",
        help_url=_DEQUE + "empty-heading",
    ),
    "positive-tabindex": Remediation(
        how_to_fix="Remove positive tabindex values; order elements in the DOM instead "
                   "and use tabindex=\"0\" or \"-1\" only.",
        code_example=(
            "<!-- Bad -->\n"
            "<button tabindex=\"3\">Save</button>\n"
            "\n"
            "<!-- Good -->\n"
            "<button>Save</button>"
        ),
        help_url=_DEQUE + "tabindex",
    ),
    "link-name": Remediation(
        how_to_fix="Ensure links have descriptive text that makes sense out of context.",
        code_example=(
            "<!-- Bad -->\n"
            "<a href=\"/report.pdf\">Click here</a>\n"
            "\n"
            "<!-- Good -->\n"
            "<a href=\"/report.pdf\">Download 2024 Annual Report (PDF)</a>"
        ),
        help_url=_DEQUE + "link-name",
    ),
}


def remediation_for(kind: str) -> Remediation:
    """Guidance for *kind*; unknown kinds get the generic fallback."""
    return _GUIDANCE.get(kind, FALLBACK)
