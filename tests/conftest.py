"""Common test fixtures and configuration."""

import tempfile
from pathlib import Path

import pytest

from widget_grid.audit.journal import MemoryAuditJournal
from widget_grid.config.schema import AuditConfig, LayoutConfig
from widget_grid.layout_engine.placement import PlacementResolver
from widget_grid.models.geometry import Point
from widget_grid.models.view import ViewMode
from widget_grid.models.widget import Widget, WidgetSize, WidgetType
from widget_grid.persistence.memory_store import InMemoryWidgetStore
from widget_grid.runtime.session import LayoutSession

PAGE_ID = "page-1"


@pytest.fixture
def make_widget():
    """Factory for widgets with optional per-view positions given as (x, y)."""

    def _make(widget_id, size=WidgetSize.THIN, desktop=None, mobile=None):
        positions = {}
        if desktop is not None:
            positions[ViewMode.DESKTOP] = Point(*desktop)
        if mobile is not None:
            positions[ViewMode.MOBILE] = Point(*mobile)
        return Widget(
            id=widget_id,
            type=WidgetType.LINK,
            size=size,
            positions=positions,
            position=positions.get(ViewMode.DESKTOP, Point()),
        )

    return _make


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmp_dir:
        yield Path(tmp_dir)


@pytest.fixture
def config():
    """Default layout config with file auditing disabled."""
    return LayoutConfig(audit=AuditConfig(enabled=False))


@pytest.fixture
def resolver(config):
    """Placement resolver built from the default config."""
    return PlacementResolver.from_config(config)


@pytest.fixture
def store():
    """In-memory store holding one empty page."""
    return InMemoryWidgetStore(pages={PAGE_ID: []})


@pytest.fixture
def journal():
    return MemoryAuditJournal()


@pytest.fixture
def session(config, store, journal):
    """An editing session over an empty page."""
    return LayoutSession(config, store, PAGE_ID, audit_journal=journal, session_id="s_test")
