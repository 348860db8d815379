"""Smoke test for the layout demo."""

import sys

import pytest
from loguru import logger

from widget_grid.runtime.demo import run_demo


@pytest.fixture
def restore_logging():
    """The demo reconfigures loguru sinks; put the default back afterwards."""
    yield
    logger.remove()
    logger.add(sys.stderr)


def test_run_demo(temp_dir, capsys, restore_logging):
    """Test that the scripted editing flow ends without overlaps."""
    assert run_demo(None, str(temp_dir))

    out = capsys.readouterr().out
    assert "Demo PASSED" in out
    assert "Failed to save changes to widget w2" in out
    assert (temp_dir / "audit_events.jsonl").exists()
