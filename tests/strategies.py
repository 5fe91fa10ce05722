"""Shared hypothesis strategies for viewstate property-based testing."""

from __future__ import annotations

from hypothesis import strategies as st

from viewstate import Markup

# Any str is a legal field name, including "" and non-ASCII text
field_name = st.text(
    alphabet=st.characters(blacklist_categories=("Cs",)),
    min_size=0,
    max_size=40,
)

# Realistic dotted/indexed HTML field names: "Address.City", "Items[0].Qty"
_segment = st.from_regex(r"[A-Za-z_][A-Za-z0-9_]{0,10}(\[[0-9]{1,2}\])?", fullmatch=True)
html_field_name = st.lists(_segment, min_size=1, max_size=4).map(".".join)

# Values that are not acceptable field names
invalid_field_name = st.one_of(
    st.none(),
    st.integers(),
    st.binary(max_size=10),
    st.lists(st.text(max_size=3), max_size=2),
)

markup_fragment = st.text(max_size=30).map(lambda s: Markup(f"<i>{s}</i>"))


class Fragment:
    """Minimal non-str object implementing __html__."""

    def __init__(self, html: str) -> None:
        self.html = html

    def __html__(self) -> str:
        return self.html
