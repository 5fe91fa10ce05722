"""Tests for FormState — lazy collections and rendered-field tracking."""

import pytest

from viewstate import (
    FormState,
    InvalidFieldNameError,
    Markup,
    ReadOnlyFormState,
    ReadOnlyFormStateError,
)

from .strategies import Fragment


class TestFreshFormState:
    """A new FormState allocates nothing and reports nothing rendered."""

    def test_defaults(self) -> None:
        form = FormState()
        assert form.can_defer_content is False
        assert form.has_antiforgery_token is False
        assert form.is_read_only is False

    def test_nothing_created(self, form: FormState) -> None:
        assert form.has_field_data is False
        assert form.has_deferred_content is False
        assert form.was_field_rendered("Name") is False

    def test_was_field_rendered_does_not_create_collections(self, form: FormState) -> None:
        for name in ("Name", "Email", ""):
            form.was_field_rendered(name)
        assert form.has_field_data is False
        assert form.has_deferred_content is False
        assert form._rendered_fields is None

    def test_constructor_flags(self) -> None:
        form = FormState(can_defer_content=True, has_antiforgery_token=True)
        assert form.can_defer_content is True
        assert form.has_antiforgery_token is True


class TestFieldData:
    """field_data is created on first access and stable afterwards."""

    def test_access_creates_empty_dict(self, form: FormState) -> None:
        data = form.field_data
        assert form.has_field_data is True
        assert len(data) == 0

    def test_same_instance_returned(self, form: FormState) -> None:
        form.field_data["Name"] = {"placeholder": "Your name"}
        assert form.field_data is form.field_data
        assert form.field_data["Name"] == {"placeholder": "Your name"}

    def test_does_not_create_deferred_content(self, form: FormState) -> None:
        form.field_data["x"] = 1
        assert form.has_deferred_content is False


class TestDeferredContent:
    """deferred_content keeps fragments in append order."""

    def test_access_creates_empty_list(self, form: FormState) -> None:
        content = form.deferred_content
        assert form.has_deferred_content is True
        assert list(content) == []

    def test_append_order_preserved(self, form: FormState) -> None:
        fragments = [Markup("<a>"), Fragment("<b>"), Markup("<c>")]
        for fragment in fragments:
            form.deferred_content.append(fragment)
        assert list(form.deferred_content) == fragments

    def test_does_not_create_field_data(self, form: FormState) -> None:
        form.deferred_content.append(Markup("<hr>"))
        assert form.has_field_data is False


class TestRenderedFields:
    """Rendered-field tracking is ordinal and last-write-wins."""

    def test_set_then_query(self, form: FormState) -> None:
        form.set_field_rendered("Name", True)
        assert form.was_field_rendered("Name") is True

    def test_value_defaults_to_true(self, form: FormState) -> None:
        form.set_field_rendered("Name")
        assert form.was_field_rendered("Name") is True

    def test_overwrite(self, form: FormState) -> None:
        form.set_field_rendered("Name", True)
        form.set_field_rendered("Name", False)
        assert form.was_field_rendered("Name") is False

    def test_case_sensitive(self, form: FormState) -> None:
        form.set_field_rendered("Name")
        assert form.was_field_rendered("name") is False
        assert form.was_field_rendered("NAME") is False

    def test_no_normalization(self, form: FormState) -> None:
        # "é" precomposed vs. "e" + combining acute
        form.set_field_rendered("caf\u00e9")
        assert form.was_field_rendered("cafe\u0301") is False

    def test_other_fields_unaffected(self, form: FormState) -> None:
        form.set_field_rendered("Address.City")
        assert form.was_field_rendered("Address.Street") is False

    def test_set_does_not_create_field_data(self, form: FormState) -> None:
        form.set_field_rendered("Name")
        assert form.has_field_data is False
        assert form.has_deferred_content is False

    @pytest.mark.parametrize("bad", [None, 42, b"Name"])
    def test_was_field_rendered_rejects_invalid_name(self, form: FormState, bad: object) -> None:
        with pytest.raises(InvalidFieldNameError):
            form.was_field_rendered(bad)  # type: ignore[arg-type]

    @pytest.mark.parametrize("bad", [None, 42, b"Name"])
    def test_set_field_rendered_rejects_invalid_name(self, form: FormState, bad: object) -> None:
        with pytest.raises(InvalidFieldNameError):
            form.set_field_rendered(bad, True)  # type: ignore[arg-type]
        assert form._rendered_fields is None

    def test_invalid_name_is_value_error(self, form: FormState) -> None:
        with pytest.raises(ValueError):
            form.set_field_rendered(None)  # type: ignore[arg-type]


class TestDefaultFormState:
    """The shared default reads like a fresh form and rejects every write."""

    def test_singleton(self) -> None:
        assert FormState.default() is FormState.default()

    def test_reads_like_fresh_form(self, default_form: FormState) -> None:
        assert default_form.is_read_only is True
        assert default_form.can_defer_content is False
        assert default_form.has_antiforgery_token is False
        assert default_form.was_field_rendered("Name") is False
        assert len(default_form.field_data) == 0
        assert len(default_form.deferred_content) == 0
        assert default_form.has_field_data is False
        assert default_form.has_deferred_content is False

    def test_set_field_rendered_raises(self, default_form: FormState) -> None:
        with pytest.raises(ReadOnlyFormStateError):
            default_form.set_field_rendered("Name", True)
        assert default_form.was_field_rendered("Name") is False

    def test_flag_assignment_raises(self, default_form: FormState) -> None:
        with pytest.raises(ReadOnlyFormStateError):
            default_form.has_antiforgery_token = True
        with pytest.raises(ReadOnlyFormStateError):
            default_form.can_defer_content = True
        assert default_form.has_antiforgery_token is False
        assert default_form.can_defer_content is False

    def test_collections_are_immutable(self, default_form: FormState) -> None:
        with pytest.raises(TypeError):
            default_form.field_data["x"] = 1  # type: ignore[index]
        with pytest.raises(AttributeError):
            default_form.deferred_content.append(Markup("<hr>"))  # type: ignore[attr-defined]
        assert default_form.has_field_data is False

    def test_invalid_name_checked_before_read_only(self, default_form: FormState) -> None:
        with pytest.raises(InvalidFieldNameError):
            default_form.set_field_rendered(None)  # type: ignore[arg-type]

    def test_read_only_state_takes_no_flags(self) -> None:
        with pytest.raises(TypeError):
            ReadOnlyFormState(can_defer_content=True)  # type: ignore[call-arg]
        state = ReadOnlyFormState()
        assert state.can_defer_content is False
        assert state.has_antiforgery_token is False

    def test_no_attribute_leakage(self, default_form: FormState) -> None:
        with pytest.raises(AttributeError):
            default_form.extra = 1  # type: ignore[attr-defined]


def test_repr_counts() -> None:
    form = FormState(can_defer_content=True)
    form.set_field_rendered("a")
    form.deferred_content.append(Markup("<x>"))
    text = repr(form)
    assert text.startswith("FormState(")
    assert "rendered_fields=1" in text
    assert "deferred_content=1" in text
