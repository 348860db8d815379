"""Unit tests for stored record ingestion."""

import json

import pytest

from widget_grid.models.geometry import Point
from widget_grid.models.view import ViewMode
from widget_grid.models.widget import Widget, WidgetSize, WidgetType
from widget_grid.persistence.records import (
    parse_position,
    widget_to_record,
    widgets_from_records,
)


@pytest.mark.parametrize(
    "raw,expected",
    [
        ('{"x":20,"y":40}', Point(20, 40)),
        ({"x": 1, "y": 2.5}, Point(1, 2.5)),
        (Point(3, 4), Point(3, 4)),
        (None, None),
        ("", None),
        ("null", None),
        ("{not json", None),
        ("[1, 2]", None),
        ({"x": "20", "y": 40}, None),
        ({"x": True, "y": 40}, None),
        ({"x": float("nan"), "y": 0}, None),
        ({"y": 40}, None),
    ],
)
def test_parse_position(raw, expected):
    assert parse_position(raw) == expected


def test_shared_mobile_slot_is_rearranged(resolver):
    """Test that records sharing one mobile slot load as a two-column grid."""
    records = [
        {"id": f"w{i}", "size": "thin", "web_position": {"x": 20, "y": 20 + i * 80},
         "mobile_position": '{"x":20,"y":20}'}
        for i in range(3)
    ]

    result = widgets_from_records(records, resolver)

    assert result.auto_arranged
    assert [w.mobile_position for w in result.widgets] == [
        Point(20, 20), Point(164, 20), Point(20, 164),
    ]
    assert [w.web_position for w in result.widgets] == [
        Point(20, 20), Point(20, 100), Point(20, 180),
    ]
    assert result.recovered == []


def test_distinct_mobile_slots_are_kept(resolver):
    records = [
        {"id": "a", "web_position": {"x": 20, "y": 20}, "mobile_position": {"x": 20, "y": 300}},
        {"id": "b", "web_position": {"x": 20, "y": 100}, "mobile_position": {"x": 164, "y": 20}},
    ]
    result = widgets_from_records(records, resolver)
    assert not result.auto_arranged
    assert result.widgets[0].mobile_position == Point(20, 300)


def test_malformed_position_is_recovered(resolver):
    """Test that an unreadable position gets a freshly placed default."""
    records = [
        {"id": "a", "web_position": '{"x":20,"y":20}', "mobile_position": {"x": 20, "y": 20}},
        {"id": "b", "web_position": "{not json", "mobile_position": {"x": 164, "y": 20}},
    ]

    result = widgets_from_records(records, resolver)

    b = result.widgets[1]
    assert b.web_position == Point(20, 200)
    assert b.position == Point(20, 200)
    assert b.mobile_position == Point(164, 20)
    assert result.recovered == [("b", ViewMode.DESKTOP, Point(20, 200))]


def test_missing_positions_avoid_loaded_widgets(resolver):
    records = [
        {"id": "a", "web_position": {"x": 20, "y": 200}, "mobile_position": {"x": 20, "y": 20}},
        {"id": "b"},
    ]

    result = widgets_from_records(records, resolver)

    b = result.widgets[1]
    assert b.web_position == Point(0, 140)
    assert b.mobile_position == Point(20, 200)
    assert {(wid, view) for wid, view, _ in result.recovered} == {
        ("b", ViewMode.DESKTOP),
        ("b", ViewMode.MOBILE),
    }


def test_legacy_position_is_kept(resolver):
    """Test that a legacy generic position survives desktop recovery."""
    records = [{"id": "a", "widget_position": {"x": 100, "y": 100}, "mobile_position": {"x": 20, "y": 20}}]
    result = widgets_from_records(records, resolver)
    widget = result.widgets[0]
    assert widget.position == Point(100, 100)
    assert widget.web_position == Point(20, 20)


def test_record_fields(resolver):
    """Test type, size and render data handling."""
    records = [
        {"id": 7, "widget_type": "qr_code", "size": "jumbo", "title": "Menu",
         "web_position": {"x": 20, "y": 20}, "mobile_position": {"x": 20, "y": 20}},
        {"id": "b", "widget_type": "social", "web_position": {"x": 20, "y": 100},
         "mobile_position": {"x": 164, "y": 20}},
    ]

    first, second = widgets_from_records(records, resolver).widgets

    assert first.id == "7"
    assert first.type == WidgetType.LINK
    assert first.size_tag == "jumbo"
    assert first.data == {"title": "Menu"}
    assert second.type == WidgetType.SOCIAL
    assert second.size == WidgetSize.THIN


def test_record_without_id_is_skipped(resolver):
    result = widgets_from_records([{"size": "thin"}, {"id": "a"}], resolver)
    assert [w.id for w in result.widgets] == ["a"]


def test_widget_to_record():
    widget = Widget(
        id="a",
        type=WidgetType.IMAGE,
        size=WidgetSize.WIDE,
        positions={ViewMode.DESKTOP: Point(20, 40), ViewMode.MOBILE: Point(164, 20)},
        position=Point(20, 40),
        data={"url": "https://example.com/a.png"},
    )

    record = widget_to_record(widget)

    assert record == {
        "id": "a",
        "widget_type": "image",
        "size": "wide",
        "widget_position": {"x": 20, "y": 40},
        "web_position": {"x": 20, "y": 40},
        "mobile_position": {"x": 164, "y": 20},
        "url": "https://example.com/a.png",
    }
    json.dumps(record)
