"""Exceptions for viewstate.

Exception Hierarchy:
ViewStateError (base)
├── InvalidFieldNameError     # Missing or non-string field name
├── ReadOnlyFormStateError    # Mutation attempted on the shared default form
└── DeferredContentError      # Deferred content on a form that cannot hold it

Every error here signals a bug in the calling pipeline or helper, not a
data condition. They are raised immediately and never caught internally.

"""

from __future__ import annotations

from enum import Enum


class ErrorCode(Enum):
    """Searchable error codes for viewstate errors.

    Format: VS-{CATEGORY}-{NUMBER}
    Categories: ARG (argument), FRM (form lifecycle)
    """

    # Argument errors (VS-ARG-xxx)
    INVALID_FIELD_NAME = "VS-ARG-001"

    # Form lifecycle errors (VS-FRM-xxx)
    READ_ONLY_FORM = "VS-FRM-001"
    DEFERRED_CONTENT = "VS-FRM-002"

    @property
    def category(self) -> str:
        """Error category (e.g., 'argument', 'form')."""
        prefix = self.value.split("-")[1]
        return {
            "ARG": "argument",
            "FRM": "form",
        }.get(prefix, "unknown")


class ViewStateError(Exception):
    """Base exception for all viewstate errors.

    Attributes:
        code: Optional ErrorCode for searchable error identification.
        suggestion: Optional hint on how to fix the calling code.
    """

    code: ErrorCode | None = None

    def __init__(self, message: str, *, suggestion: str | None = None):
        self.message = message
        self.suggestion = suggestion
        super().__init__(message)

    def format_compact(self) -> str:
        """Format error as a short multi-line diagnostic.

        Format::

            VS-FRM-001: Cannot mark field 'Name' as rendered on the default form state
              Hint: Open the form with track_fields=True or can_defer_content=True
        """
        header = self.message
        if self.code and self.code.value not in header:
            header = f"{self.code.value}: {header}"
        parts = [header]
        if self.suggestion:
            parts.append(f"  Hint: {self.suggestion}")
        return "\n".join(parts)


class InvalidFieldNameError(ViewStateError, ValueError):
    """Field name passed to rendered-field tracking was None or not a string."""

    code: ErrorCode | None = ErrorCode.INVALID_FIELD_NAME

    def __init__(self, field_name: object):
        self.field_name = field_name
        super().__init__(
            f"field_name must be a str, got {type(field_name).__name__}",
            suggestion="Pass the full HTML name of the field, e.g. 'Address.City'",
        )


class ReadOnlyFormStateError(ViewStateError, TypeError):
    """Mutation attempted on the shared default FormState.

    The default instance is reused by every form that has no extended
    behavior, so writes to it would leak across unrelated forms and renders.
    """

    code: ErrorCode | None = ErrorCode.READ_ONLY_FORM

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(
            f"Cannot {operation} on the shared default form state",
            suggestion=(
                "Open the form with track_fields=True or can_defer_content=True "
                "to get a per-form state"
            ),
        )


class DeferredContentError(ViewStateError):
    """Deferred content used on a form that does not render end-of-form content."""

    code: ErrorCode | None = ErrorCode.DEFERRED_CONTENT
