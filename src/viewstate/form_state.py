"""Per-form state tracked while rendering a ``<form>`` element.

A FormState lives for one form's nesting level inside a render pass. It
records which fields have been rendered (so validation markup and similar
per-field output is emitted once), gives helpers a free-form data bag, and
collects fragments that must be written just before ``</form>``.

All backing collections are created on first use. Most forms use none of
these features, and for them a FormState costs one small object and nothing
more. The ``has_*`` properties and ``was_field_rendered()`` never allocate.

Literal forms without extended behavior share a single read-only instance
returned by ``FormState.default()``. Reads on it behave like a fresh form;
writes raise ReadOnlyFormStateError.

"""

from __future__ import annotations

from collections.abc import Mapping, MutableMapping, MutableSequence, Sequence
from types import MappingProxyType
from typing import Any, ClassVar

from viewstate.exceptions import InvalidFieldNameError, ReadOnlyFormStateError
from viewstate.html import HtmlContent

_EMPTY_FIELD_DATA: Mapping[str, Any] = MappingProxyType({})


def _check_field_name(field_name: object) -> None:
    if not isinstance(field_name, str):
        raise InvalidFieldNameError(field_name)


class FormState:
    """Information about the current ``<form>``.

    Field names are full HTML names (``"Address.City"``) and are compared
    as exact strings: no case folding or normalization.

    Example:
        >>> form = FormState(can_defer_content=True)
        >>> form.was_field_rendered("Name")
        False
        >>> form.set_field_rendered("Name")
        >>> form.was_field_rendered("Name")
        True
        >>> form.has_field_data
        False

    """

    __slots__ = (
        "_can_defer_content",
        "_deferred_content",
        "_field_data",
        "_has_antiforgery_token",
        "_rendered_fields",
    )

    is_read_only: ClassVar[bool] = False

    def __init__(
        self,
        *,
        can_defer_content: bool = False,
        has_antiforgery_token: bool = False,
    ) -> None:
        self._can_defer_content = can_defer_content
        self._has_antiforgery_token = has_antiforgery_token
        self._field_data: dict[str, Any] | None = None
        self._rendered_fields: dict[str, bool] | None = None
        self._deferred_content: list[HtmlContent] | None = None

    @classmethod
    def default(cls) -> FormState:
        """Shared read-only state for forms without extended behavior."""
        return _DEFAULT_FORM_STATE

    def _ensure_writable(self, operation: str) -> None:
        if self.is_read_only:
            raise ReadOnlyFormStateError(operation)

    @property
    def field_data(self) -> MutableMapping[str, Any]:
        """Property bag for helpers to associate data with this form.

        Created on first access; later accesses return the same dict.
        """
        if self._field_data is None:
            self._field_data = {}
        return self._field_data

    @property
    def has_field_data(self) -> bool:
        """True once ``field_data`` has been created, even if still empty."""
        return self._field_data is not None

    @property
    def deferred_content(self) -> MutableSequence[HtmlContent]:
        """Fragments to render just before the ``</form>`` end tag, in order.

        Created on first access. Only use when ``can_defer_content`` is True.
        """
        if self._deferred_content is None:
            self._deferred_content = []
        return self._deferred_content

    @property
    def has_deferred_content(self) -> bool:
        """True once ``deferred_content`` has been created, even if still empty."""
        return self._deferred_content is not None

    @property
    def has_antiforgery_token(self) -> bool:
        """Whether an antiforgery token has been emitted in this form."""
        return self._has_antiforgery_token

    @has_antiforgery_token.setter
    def has_antiforgery_token(self, value: bool) -> None:
        self._ensure_writable("set has_antiforgery_token")
        self._has_antiforgery_token = value

    @property
    def can_defer_content(self) -> bool:
        """Whether ``deferred_content`` will be rendered before ``</form>``.

        True for forms opened by helpers that flush end-of-form content;
        False for the shared default state.
        """
        return self._can_defer_content

    @can_defer_content.setter
    def can_defer_content(self, value: bool) -> None:
        self._ensure_writable("set can_defer_content")
        self._can_defer_content = value

    def was_field_rendered(self, field_name: str) -> bool:
        """Return True if ``field_name`` has been marked rendered in this form.

        Raises:
            InvalidFieldNameError: If field_name is None or not a str
        """
        _check_field_name(field_name)
        if self._rendered_fields is None:
            return False
        return self._rendered_fields.get(field_name, False)

    def set_field_rendered(self, field_name: str, value: bool = True) -> None:
        """Record whether ``field_name`` has been rendered. Last write wins.

        Raises:
            InvalidFieldNameError: If field_name is None or not a str
            ReadOnlyFormStateError: If called on the shared default state
        """
        _check_field_name(field_name)
        self._ensure_writable(f"mark field {field_name!r} as rendered")
        if self._rendered_fields is None:
            self._rendered_fields = {}
        self._rendered_fields[field_name] = bool(value)

    def __repr__(self) -> str:
        rendered = len(self._rendered_fields) if self._rendered_fields else 0
        deferred = len(self._deferred_content) if self._deferred_content else 0
        return (
            f"{type(self).__name__}(can_defer_content={self._can_defer_content}, "
            f"has_antiforgery_token={self._has_antiforgery_token}, "
            f"rendered_fields={rendered}, deferred_content={deferred})"
        )


class ReadOnlyFormState(FormState):
    """FormState whose mutators raise; backs ``FormState.default()``.

    Collections are exposed as empty immutable views so a helper that only
    reads sees the same answers it would get from a fresh form.
    """

    __slots__ = ()

    is_read_only: ClassVar[bool] = True

    def __init__(self) -> None:
        super().__init__()

    @property
    def field_data(self) -> Mapping[str, Any]:  # type: ignore[override]
        return _EMPTY_FIELD_DATA

    @property
    def deferred_content(self) -> Sequence[HtmlContent]:  # type: ignore[override]
        return ()


_DEFAULT_FORM_STATE = ReadOnlyFormState()
