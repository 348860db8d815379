"""Unit tests for layout configuration."""

from datetime import datetime
from pathlib import Path

import pytest
import yaml

from widget_grid.audit.events import AuditEventType
from widget_grid.config.loader import (
    compute_config_hash,
    load_config,
    parse_config,
    save_config_snapshot,
)
from widget_grid.config.schema import GridConfig, LayoutConfig, MobileConfig
from widget_grid.config.validator import ConfigValidator
from widget_grid.exceptions import ConfigValidationError
from widget_grid.models.view import ViewMode


def test_defaults():
    config = LayoutConfig()
    assert config.grid.unit == 20
    assert config.grid.margin == 8
    assert config.canvas_width(ViewMode.DESKTOP) == 660
    assert config.canvas_width(ViewMode.MOBILE) == 292


def test_load_config(temp_dir):
    """Test loading a partial YAML file."""
    path = temp_dir / "layout.yaml"
    path.write_text(
        yaml.safe_dump({"grid": {"unit": 10}, "canvas": {"desktop_width": 800}}),
        encoding="utf-8",
    )

    config = load_config(str(path))

    assert config.grid.unit == 10
    assert config.grid.margin == 8
    assert config.canvas.desktop_width == 800
    assert config.mobile == MobileConfig()


def test_load_empty_file(temp_dir):
    path = temp_dir / "empty.yaml"
    path.write_text("", encoding="utf-8")
    assert load_config(str(path)) == LayoutConfig()


def test_load_missing_file(temp_dir):
    with pytest.raises(FileNotFoundError):
        load_config(str(temp_dir / "missing.yaml"))


def test_unknown_keys_are_ignored():
    config = parse_config({"grid": {"unit": 40, "snap": True}})
    assert config.grid == GridConfig(unit=40)


def test_config_hash():
    """Test that the hash is stable and tracks changes."""
    assert compute_config_hash(LayoutConfig()) == compute_config_hash(LayoutConfig())
    assert len(compute_config_hash(LayoutConfig())) == 8
    assert compute_config_hash(LayoutConfig()) != compute_config_hash(
        LayoutConfig(grid=GridConfig(margin=4))
    )


def test_snapshot_round_trip(temp_dir):
    config = LayoutConfig(grid=GridConfig(unit=10))
    path = temp_dir / "snapshots" / "config.yaml"
    save_config_snapshot(config, str(path))
    assert load_config(str(path)) == config


def test_default_config_is_valid():
    result = ConfigValidator().validate(LayoutConfig())
    assert result.is_valid
    assert result.violations == []
    assert result.warnings == []


def test_invariant_violations():
    """Test that broken layout invariants are rejected."""
    config = LayoutConfig(
        grid=GridConfig(unit=0, margin=-1),
        mobile=MobileConfig(stride=100),
    )
    result = ConfigValidator().validate(config)
    assert not result.is_valid
    assert len(result.violations) == 3

    with pytest.raises(ConfigValidationError) as exc_info:
        ConfigValidator().validate_or_raise(config)
    assert exc_info.value.violations == result.violations


def test_range_warnings():
    config = parse_config({
        "grid": {"max_search_distance": 10},
        "canvas": {"desktop_width": 300, "mobile_width": 200},
    })
    result = ConfigValidator().validate(config)
    assert result.is_valid
    assert len(result.warnings) == 3


def test_invalid_config_event():
    event = ConfigValidator().create_invalid_config_event(
        "s1", datetime.now(), ["bad"], "abcd1234"
    )
    assert event.event_type == AuditEventType.CONFIG_INVALID
    assert event.to_dict()["details"] == {"violations": ["bad"]}


def test_shipped_config_matches_defaults():
    path = Path(__file__).resolve().parents[2] / "configs" / "layout.yaml"
    assert load_config(str(path)) == LayoutConfig()
