"""Unit tests for audit events and journals."""

import json
from datetime import datetime, timedelta

from widget_grid.audit.events import AuditEvent, AuditEventType
from widget_grid.audit.journal import AuditJournal, MemoryAuditJournal
from widget_grid.models.geometry import Point


def _moved(widget_id, ts):
    return AuditEvent.widget_moved(
        session_id="s1",
        timestamp=ts,
        widget_id=widget_id,
        view="web",
        old_position=Point(20, 20),
        new_position=Point(20, 80),
        strategy="search",
    )


def test_event_to_dict():
    """Test that only populated fields are serialized."""
    ts = datetime(2024, 5, 1, 9, 30)
    data = _moved("a", ts).to_dict()
    assert data == {
        "ts": "2024-05-01T09:30:00",
        "session": "s1",
        "type": "WIDGET_MOVED",
        "reason": "drop",
        "widget_id": "a",
        "view": "web",
        "old_position": {"x": 20, "y": 20},
        "new_position": {"x": 20, "y": 80},
        "details": {"strategy": "search"},
    }


def test_persist_failed_event():
    event = AuditEvent.persist_failed("s1", datetime.now(), "a", "update_size", "boom")
    data = event.to_dict()
    assert data["type"] == "PERSIST_FAILED"
    assert data["operation"] == "update_size"
    assert data["error"] == "boom"


def test_journal_writes_jsonl(temp_dir):
    """Test that events land one per line and can be queried back."""
    ts = datetime(2024, 5, 1, 9, 30)
    with AuditJournal(str(temp_dir)) as journal:
        journal.write(_moved("a", ts))
        journal.write(_moved("b", ts + timedelta(minutes=5)))
        journal.write(AuditEvent.view_change("s1", ts, "web", "mobile", "user_toggle"))
        assert journal.event_count == 3

    lines = (temp_dir / "audit_events.jsonl").read_text(encoding="utf-8").splitlines()
    assert len(lines) == 3
    assert json.loads(lines[0])["widget_id"] == "a"

    assert [e["widget_id"] for e in journal.query(event_types=[AuditEventType.WIDGET_MOVED])] == ["a", "b"]
    assert len(journal.query(widget_id="b")) == 1
    assert len(journal.query(start_time=ts + timedelta(minutes=1))) == 1


def test_journal_skips_corrupt_lines(temp_dir):
    journal = AuditJournal(str(temp_dir))
    journal.write(_moved("a", datetime.now()))
    journal.close()
    with open(journal.filepath, "a", encoding="utf-8") as f:
        f.write("{broken\n")

    assert len(journal.query()) == 1


def test_query_missing_file(temp_dir):
    assert AuditJournal(str(temp_dir), "none.jsonl").query() == []


def test_memory_journal_query():
    journal = MemoryAuditJournal()
    journal.write(_moved("a", datetime.now()))
    journal.write(AuditEvent.view_change("s2", datetime.now(), "web", "mobile", "explicit_set"))
    assert len(journal.events) == 2
    assert len(journal.query(session_id="s2")) == 1
