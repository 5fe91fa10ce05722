"""RenderContext — per-render state for one page execution.

One RenderContext is created by the rendering pipeline at the start of a
page render and handed to the template body and every helper it calls.
It is a transport record: fields are plain attributes with no validation.

The pipeline also installs the context as "current" via a ContextVar so
helpers deep in a call chain can reach it without threading it through.

Thread Safety:
    A RenderContext has a single owner (one in-flight render). ContextVars
    are per-thread and per-task, so concurrent renders never see each
    other's current context.

"""

from __future__ import annotations

import io
from collections.abc import AsyncIterator, Iterator, MutableMapping
from contextlib import asynccontextmanager, contextmanager
from contextvars import ContextVar, Token
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, TextIO

from viewstate.model_info import DateRenderingMode, ModelTypeInfo

if TYPE_CHECKING:
    from viewstate.form_state import FormState


@dataclass
class RenderContext:
    """Per-render state shared by a template and its helpers.

    Attributes:
        ambient_data: Free-form page-scoped values, read and written by key
        output: Text sink the page renders into; replaceable mid-render
        page_key: Key of the template currently executing
        model_type_info: Type metadata of the bound model
        form_state: State of the ``<form>`` being rendered, None outside forms
        date_rendering_mode: Consulted by date formatting helpers

    Example:
        >>> ctx = RenderContext()
        >>> ctx.ambient_data["title"] = "Home"
        >>> ctx.output.write("<h1>Home</h1>")
        13
        >>> ctx.rendered_text()
        '<h1>Home</h1>'
    """

    # First so RenderContext(view_bag) binds the mapping; kept by reference
    ambient_data: MutableMapping[str, Any] = field(default_factory=dict)

    output: TextIO = field(default_factory=io.StringIO)

    page_key: str | None = None
    model_type_info: ModelTypeInfo | None = None
    form_state: FormState | None = None
    date_rendering_mode: DateRenderingMode = DateRenderingMode.RFC3339

    def __post_init__(self) -> None:
        if self.ambient_data is None:
            self.ambient_data = {}
        if self.output is None:
            self.output = io.StringIO()

    @contextmanager
    def redirect_output(self, buffer: TextIO | None = None) -> Iterator[TextIO]:
        """Temporarily send output to ``buffer`` (a fresh StringIO by default).

        The previous sink is restored on exit, including when the body raises.

        Example:
            with ctx.redirect_output() as buf:
                render_partial(ctx)
            ctx.ambient_data["sidebar"] = buf.getvalue()
        """
        previous = self.output
        target = buffer if buffer is not None else io.StringIO()
        self.output = target
        try:
            yield target
        finally:
            self.output = previous

    def rendered_text(self) -> str:
        """Return everything written to an in-memory ``output`` so far.

        Raises:
            TypeError: If output is not an io.StringIO
        """
        if not isinstance(self.output, io.StringIO):
            raise TypeError(
                f"rendered_text() needs an in-memory output, got {type(self.output).__name__}"
            )
        return self.output.getvalue()


# Module-level ContextVar
_render_context: ContextVar[RenderContext | None] = ContextVar(
    "render_context",
    default=None,
)


def get_render_context() -> RenderContext | None:
    """Get current render context (None if not in render)."""
    return _render_context.get()


def get_render_context_required() -> RenderContext:
    """Get current render context, raise if not in render.

    Raises:
        RuntimeError: If not in a render context
    """
    ctx = _render_context.get()
    if ctx is None:
        raise RuntimeError("Not in a render context")
    return ctx


@contextmanager
def render_context(
    output: TextIO | None = None,
    ambient_data: MutableMapping[str, Any] | None = None,
    page_key: str | None = None,
    model_type_info: ModelTypeInfo | None = None,
    date_rendering_mode: DateRenderingMode = DateRenderingMode.RFC3339,
) -> Iterator[RenderContext]:
    """Context manager for render-scoped state.

    Creates a new RenderContext and sets it as the current context for
    the duration of the with block. Restores the previous context on exit.

    Example:
        with render_context(page_key="home.html", ambient_data=view_bag) as ctx:
            template_body(ctx)
        html = ctx.rendered_text()
    """
    ctx = RenderContext(
        output=output if output is not None else io.StringIO(),
        ambient_data=ambient_data if ambient_data is not None else {},
        page_key=page_key,
        model_type_info=model_type_info,
        date_rendering_mode=date_rendering_mode,
    )
    token: Token[RenderContext | None] = _render_context.set(ctx)
    try:
        yield ctx
    finally:
        _render_context.reset(token)


@asynccontextmanager
async def async_render_context(
    output: TextIO | None = None,
    ambient_data: MutableMapping[str, Any] | None = None,
    page_key: str | None = None,
    model_type_info: ModelTypeInfo | None = None,
    date_rendering_mode: DateRenderingMode = DateRenderingMode.RFC3339,
) -> AsyncIterator[RenderContext]:
    """Async context manager for render-scoped state.

    Identical to render_context() but for use with ``async with``.
    ContextVar reset is synchronous; the async wrapper is structural only.
    """
    ctx = RenderContext(
        output=output if output is not None else io.StringIO(),
        ambient_data=ambient_data if ambient_data is not None else {},
        page_key=page_key,
        model_type_info=model_type_info,
        date_rendering_mode=date_rendering_mode,
    )
    token: Token[RenderContext | None] = _render_context.set(ctx)
    try:
        yield ctx
    finally:
        _render_context.reset(token)


def set_render_context(ctx: RenderContext) -> Token[RenderContext | None]:
    """Set a RenderContext and return the reset token.

    Low-level function for cases where the context manager isn't suitable.
    """
    return _render_context.set(ctx)


def reset_render_context(token: Token[RenderContext | None]) -> None:
    """Reset render context using a token from set_render_context."""
    _render_context.reset(token)
