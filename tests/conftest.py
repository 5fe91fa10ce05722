"""Pytest configuration and fixtures for viewstate tests."""

import pytest

from viewstate import FormState, RenderContext


@pytest.fixture
def ctx():
    """Create a RenderContext with an in-memory output sink."""
    return RenderContext(page_key="test.html")


@pytest.fixture
def form():
    """Create a per-form FormState that can defer content."""
    return FormState(can_defer_content=True)


@pytest.fixture
def default_form():
    """The shared read-only FormState."""
    return FormState.default()

