"""Unit tests for the in-memory widget store."""

import json

import pytest

from widget_grid.exceptions import PersistenceError
from widget_grid.models.geometry import Point
from widget_grid.models.view import ViewMode
from widget_grid.models.widget import WidgetSize
from widget_grid.persistence.memory_store import InMemoryWidgetStore


@pytest.fixture
def seeded_store():
    return InMemoryWidgetStore(pages={"p": [{"id": "a", "size": "thin"}]})


def test_fetch_returns_copies(seeded_store):
    records = seeded_store.fetch_widgets("p")
    records[0]["size"] = "wide"
    assert seeded_store.fetch_widgets("p")[0]["size"] == "thin"
    assert seeded_store.fetch_widgets("other") == []


def test_update_position_writes_one_field(seeded_store):
    seeded_store.update_position("a", ViewMode.MOBILE, Point(164, 20))
    record = seeded_store.fetch_widgets("p")[0]
    assert record["mobile_position"] == {"x": 164, "y": 20}
    assert "web_position" not in record
    assert record["widget_position"] == {"x": 164, "y": 20}
    assert seeded_store.writes == [("update_position", "a", (ViewMode.MOBILE, Point(164, 20)))]


def test_json_encoded_positions():
    store = InMemoryWidgetStore(pages={"p": [{"id": "a"}]}, encode_positions_as_json=True)
    store.update_position("a", ViewMode.DESKTOP, Point(20, 40))
    assert json.loads(store.fetch_widgets("p")[0]["web_position"]) == {"x": 20, "y": 40}


def test_update_size_and_delete(seeded_store):
    seeded_store.update_size("a", WidgetSize.TALL)
    assert seeded_store.fetch_widgets("p")[0]["size"] == "tall"
    seeded_store.delete_widget("a")
    assert seeded_store.fetch_widgets("p") == []


def test_unknown_widget_fails(seeded_store):
    with pytest.raises(PersistenceError) as exc_info:
        seeded_store.update_size("missing", "thin")
    assert exc_info.value.operation == "update_size"


def test_fail_next(seeded_store):
    """Test that injected failures are consumed one write at a time."""
    seeded_store.fail_next(1)
    with pytest.raises(PersistenceError):
        seeded_store.update_size("a", "wide")
    seeded_store.update_size("a", "wide")
    assert seeded_store.fetch_widgets("p")[0]["size"] == "wide"


def test_fail_always_blocks_reads():
    store = InMemoryWidgetStore(fail_always=True)
    with pytest.raises(PersistenceError):
        store.fetch_widgets("p")
