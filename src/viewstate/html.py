"""Renderable HTML fragments.

Values that are already safe to write into a page expose ``__html__()``,
the same convention template engines and markup libraries share. Nothing
here escapes text; a fragment is trusted by whoever built it.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class HtmlContent(Protocol):
    def __html__(self) -> str: ...


class Markup(str):
    """A string that is already HTML.

    Example:
        >>> Markup('<input type="hidden" name="__token" value="x">').__html__()
        '<input type="hidden" name="__token" value="x">'
    """

    __slots__ = ()

    def __html__(self) -> str:
        return self

    def __repr__(self) -> str:
        return f"Markup({str.__repr__(self)})"


def render_fragment(fragment: HtmlContent) -> str:
    """Return the HTML text of a fragment.

    Raises:
        TypeError: If ``fragment`` does not implement ``__html__``
    """
    if not isinstance(fragment, HtmlContent):
        raise TypeError(
            f"Expected an object with __html__(), got {type(fragment).__name__}; "
            "wrap trusted text in Markup()"
        )
    return fragment.__html__()
