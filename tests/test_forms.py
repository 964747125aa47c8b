"""Tests for FormInspector."""

from __future__ import annotations

from polaris_audit.inspectors.forms import FormInspector
from polaris_audit.models import Severity
from tests.utils.tree import el, page


def _inspect(*children):  # type: ignore[no-untyped-def]
    return FormInspector().inspect(page(*children))


class TestLabelAssociation:
    def test_label_for_id(self) -> None:
        result = _inspect(el("form", el("label", text="Name", for_="name"), el("input", id="name")))
        assert result.defects == []
        assert result.analysis.labeled_controls == 1
        assert result.analysis.forms_with_labels == 1

    def test_label_elsewhere_in_tree(self) -> None:
        result = _inspect(el("label", text="Name", for_="name"), el("form", el("input", id="name")))
        assert result.defects == []

    def test_aria_label(self) -> None:
        assert _inspect(el("input", aria_label="Search")).defects == []

    def test_aria_labelledby_existing_text(self) -> None:
        result = _inspect(el("span", id="lbl", text="Quantity"), el("input", aria_labelledby="lbl"))
        assert result.defects == []

    def test_aria_labelledby_empty_target(self) -> None:
        result = _inspect(el("span", id="lbl"), el("input", aria_labelledby="lbl"))
        assert [d.kind for d in result.defects] == ["label-missing"]

    def test_aria_labelledby_missing_target(self) -> None:
        result = _inspect(el("input", aria_labelledby="ghost"))
        assert [d.kind for d in result.defects] == ["label-missing"]

    def test_wrapping_label(self) -> None:
        assert _inspect(el("label", el("input", type="checkbox"), text="Subscribe")).defects == []

    def test_unlabeled_is_critical(self) -> None:
        result = _inspect(el("form", el("input", type="text", id="q"), el("textarea"), el("select")))
        assert [d.severity for d in result.defects] == [Severity.CRITICAL] * 3
        assert result.analysis.forms_with_labels == 0
        assert len(result.analysis.issues) == 3

    def test_hidden_input_ignored(self) -> None:
        result = _inspect(el("input", type="hidden", name="csrf"))
        assert result.defects == []
        assert result.analysis.total_controls == 0


class TestButtons:
    def test_submit_without_text_is_serious(self) -> None:
        result = _inspect(el("form", el("input", type="submit")))
        assert [(d.kind, d.severity) for d in result.defects] == [("label-missing", Severity.SERIOUS)]

    def test_submit_with_value(self) -> None:
        assert _inspect(el("input", type="submit", value="Send")).defects == []

    def test_button_with_text(self) -> None:
        assert _inspect(el("button", text="Save")).defects == []

    def test_icon_button_with_aria_label(self) -> None:
        assert _inspect(el("button", el("svg"), aria_label="Close")).defects == []

    def test_empty_button(self) -> None:
        result = _inspect(el("button", el("svg")))
        assert result.defects[0].severity == Severity.SERIOUS


class TestGrouping:
    def _form(self, *extra):  # type: ignore[no-untyped-def]
        fields = [el("input", aria_label=f"Field {i}") for i in range(6)]
        return el("form", *fields, *extra)

    def test_large_form_without_fieldset(self) -> None:
        result = _inspect(self._form())
        kinds = [i.kind for i in result.analysis.issues]
        assert kinds == ["grouping"]
        # Grouping is advisory only
        assert result.defects == []

    def test_large_form_with_fieldset(self) -> None:
        result = _inspect(el("form", el("fieldset", *[el("input", aria_label=f"F{i}") for i in range(6)])))
        assert result.analysis.issues == ()
        assert result.analysis.forms_with_fieldsets == 1

    def test_small_form(self) -> None:
        fields = [el("input", aria_label=f"Field {i}") for i in range(5)]
        assert _inspect(el("form", *fields)).analysis.issues == ()

    def test_configurable_threshold(self) -> None:
        snapshot = page(el("form", el("input", aria_label="a"), el("input", aria_label="b")))
        result = FormInspector(grouping_threshold=1).inspect(snapshot)
        assert [i.kind for i in result.analysis.issues] == ["grouping"]

    def test_counts(self) -> None:
        result = _inspect(self._form(), el("form", el("input", aria_label="x")))
        assert result.analysis.total_forms == 2
        assert result.analysis.total_controls == 7
