"""viewstate — per-render execution context for server-side page templates.

Two passive records mutated by a rendering pipeline:

- **RenderContext**: one per page render. Holds the output sink, a
  page-scoped ambient data mapping, the executing page key, model type
  metadata, the active form state and the date rendering mode.
- **FormState**: one per ``<form>`` being rendered. Tracks rendered fields,
  a per-form data bag, the antiforgery-token flag, and fragments deferred
  until just before ``</form>``.

Quickstart:
    >>> from viewstate import Markup, claim_field, form_scope, render_context
    >>> with render_context(page_key="signup.html") as ctx:
    ...     with form_scope(ctx, can_defer_content=True) as form:
    ...         _ = ctx.output.write("<form>")
    ...         claim_field(form, "Email")
    ...         claim_field(form, "Email")
    ...         form.deferred_content.append(Markup("<input type=hidden>"))
    ...     _ = ctx.output.write("</form>")
    True
    False
    >>> ctx.rendered_text()
    '<form><input type=hidden></form>'

Thread-Safety:
A RenderContext and its FormState belong to a single in-flight render.
The current context is tracked in a ContextVar. The shared default
FormState is read-only; its mutators raise ReadOnlyFormStateError.

"""

from viewstate.exceptions import (
    DeferredContentError,
    ErrorCode,
    InvalidFieldNameError,
    ReadOnlyFormStateError,
    ViewStateError,
)
from viewstate.form_state import FormState, ReadOnlyFormState
from viewstate.forms import (
    FormScope,
    add_antiforgery_token,
    claim_field,
    close_form,
    defer_content,
    flush_deferred_content,
    form_scope,
    open_form,
)
from viewstate.html import HtmlContent, Markup, render_fragment
from viewstate.model_info import DateRenderingMode, ModelTypeInfo
from viewstate.render_context import (
    RenderContext,
    async_render_context,
    get_render_context,
    get_render_context_required,
    render_context,
    reset_render_context,
    set_render_context,
)

__version__ = "0.1.0"

__all__ = [
    "DateRenderingMode",
    "DeferredContentError",
    "ErrorCode",
    "FormScope",
    "FormState",
    "HtmlContent",
    "InvalidFieldNameError",
    "Markup",
    "ModelTypeInfo",
    "ReadOnlyFormState",
    "ReadOnlyFormStateError",
    "RenderContext",
    "ViewStateError",
    "add_antiforgery_token",
    "async_render_context",
    "claim_field",
    "close_form",
    "defer_content",
    "flush_deferred_content",
    "form_scope",
    "get_render_context",
    "get_render_context_required",
    "open_form",
    "render_context",
    "render_fragment",
    "reset_render_context",
    "set_render_context",
]
