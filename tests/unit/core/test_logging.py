"""Tests for structured logging helpers."""

from __future__ import annotations

from collections.abc import Generator

import pytest
import structlog

from npc_generator.core.logging import (
    add_app_context,
    bind_context,
    clear_context,
    get_logger,
    unbind_context,
)


@pytest.fixture(autouse=True)
def clean_context() -> Generator[None, None, None]:
    """Start and finish every test with no bound context."""
    clear_context()
    yield
    clear_context()


class TestAddAppContext:
    """Tests for the app-context processor."""

    def test_adds_app_name(self) -> None:
        """Test the processor tags events with the application name."""
        event = add_app_context(None, "info", {"event": "Generated NPC"})
        assert event == {"event": "Generated NPC", "app": "npc_generator"}


class TestContextBinding:
    """Tests for bind_context and clear_context."""

    def test_bind_context(self) -> None:
        """Test bound values are visible to structlog."""
        bind_context(seed=42, ancestry="Human")
        assert structlog.contextvars.get_contextvars() == {"seed": 42, "ancestry": "Human"}

    def test_clear_context(self) -> None:
        """Test clearing removes every bound value."""
        bind_context(seed=42)
        clear_context()
        assert structlog.contextvars.get_contextvars() == {}

    def test_unbind_context(self) -> None:
        """Test unbinding removes only the named values."""
        bind_context(seed=42, ancestry="Human", heritage=None)
        unbind_context("ancestry", "heritage")
        assert structlog.contextvars.get_contextvars() == {"seed": 42}


class TestGetLogger:
    """Tests for get_logger."""

    def test_returns_usable_logger(self) -> None:
        """Test the logger exposes the standard level methods."""
        logger = get_logger(__name__)
        for method in ("debug", "info", "warning", "error"):
            assert callable(getattr(logger, method))
