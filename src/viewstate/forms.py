"""Form lifecycle helpers used by the rendering pipeline.

The protocol around a FormState is sequential:

1. open the form (install a FormState on the RenderContext)
2. render fields, consulting and updating rendered-field tracking
3. defer zero or more fragments to the end of the form
4. close the form: flush deferred fragments in order before ``</form>``,
   then restore the enclosing form state

Forms without extended behavior use the shared read-only default state;
forms that track rendered fields or defer content get a fresh FormState
of their own.

Example:
    with form_scope(ctx, can_defer_content=True) as form:
        ctx.output.write('<form method="post">')
        if claim_field(form, "Email"):
            ctx.output.write('<span data-valmsg-for="Email"></span>')
        add_antiforgery_token(form, Markup(token_html))
    ctx.output.write("</form>")

"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass

from viewstate.exceptions import DeferredContentError
from viewstate.form_state import FormState
from viewstate.html import HtmlContent, render_fragment
from viewstate.render_context import RenderContext

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class FormScope:
    """An open form and the form state it replaced on the RenderContext."""

    form: FormState
    previous: FormState | None


def open_form(
    ctx: RenderContext,
    *,
    track_fields: bool = False,
    can_defer_content: bool = False,
) -> FormScope:
    """Install the form state for a newly opened ``<form>``.

    Args:
        ctx: Render context of the current page
        track_fields: True when helpers will record rendered fields
        can_defer_content: True when the form will flush end-of-form content

    Either switch gives the form its own FormState instead of the shared
    read-only default.

    Returns:
        FormScope to pass to close_form()
    """
    if track_fields or can_defer_content:
        form = FormState(can_defer_content=can_defer_content)
    else:
        form = FormState.default()
    scope = FormScope(form=form, previous=ctx.form_state)
    ctx.form_state = form
    logger.debug(
        "Opened form in %s (track_fields=%s, can_defer_content=%s, nested=%s)",
        ctx.page_key or "<page>",
        track_fields,
        can_defer_content,
        scope.previous is not None,
    )
    return scope


def flush_deferred_content(ctx: RenderContext, form: FormState) -> int:
    """Write the form's deferred fragments to ``ctx.output`` and clear them.

    All fragments are rendered before anything is written, so a bad fragment
    leaves both the output and the deferred list untouched.

    Returns:
        Number of fragments written

    Raises:
        DeferredContentError: If content was deferred on a form that
            cannot render end-of-form content
    """
    if not form.has_deferred_content:
        return 0
    content = form.deferred_content
    if content and not form.can_defer_content:
        raise DeferredContentError(
            f"{len(content)} fragment(s) deferred on a form that cannot render end-of-form content",
            suggestion="Open the form with can_defer_content=True",
        )
    html = [render_fragment(fragment) for fragment in content]
    ctx.output.write("".join(html))
    count = len(html)
    content.clear()
    logger.debug("Flushed %d deferred fragment(s) in %s", count, ctx.page_key or "<page>")
    return count


def close_form(ctx: RenderContext, scope: FormScope) -> None:
    """Flush deferred content, then restore the enclosing form state.

    Call immediately before writing the ``</form>`` end tag. The enclosing
    state is restored even if flushing fails.
    """
    try:
        flush_deferred_content(ctx, scope.form)
    finally:
        ctx.form_state = scope.previous
    logger.debug("Closed form in %s", ctx.page_key or "<page>")


@contextmanager
def form_scope(
    ctx: RenderContext,
    *,
    track_fields: bool = False,
    can_defer_content: bool = False,
) -> Iterator[FormState]:
    """Context manager around open_form()/close_form().

    Deferred content is flushed only when the body completes normally; the
    enclosing form state is restored either way.
    """
    scope = open_form(ctx, track_fields=track_fields, can_defer_content=can_defer_content)
    try:
        yield scope.form
    except BaseException:
        ctx.form_state = scope.previous
        raise
    close_form(ctx, scope)


def defer_content(form: FormState, fragment: HtmlContent) -> None:
    """Append ``fragment`` to the content rendered before ``</form>``.

    Raises:
        DeferredContentError: If the form cannot render end-of-form content
        TypeError: If fragment has no ``__html__``
    """
    if not form.can_defer_content:
        raise DeferredContentError(
            "Form cannot render end-of-form content",
            suggestion="Write the fragment directly, or open the form with can_defer_content=True",
        )
    if not isinstance(fragment, HtmlContent):
        raise TypeError(
            f"Deferred content must implement __html__(), got {type(fragment).__name__}"
        )
    form.deferred_content.append(fragment)


def claim_field(form: FormState, field_name: str) -> bool:
    """Mark ``field_name`` rendered; return False if it already was.

    Used by helpers that must emit per-field markup (validation spans,
    hidden inputs) at most once per form.
    """
    if form.was_field_rendered(field_name):
        return False
    form.set_field_rendered(field_name, True)
    return True


def add_antiforgery_token(form: FormState, token: HtmlContent) -> bool:
    """Defer an antiforgery token to the end of the form, once.

    Returns:
        True if the token was added, False if the form already has one
    """
    if form.has_antiforgery_token:
        return False
    defer_content(form, token)
    form.has_antiforgery_token = True
    return True
