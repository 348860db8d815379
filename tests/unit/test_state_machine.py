"""Unit tests for the view mode state machine."""

from datetime import datetime

import pytest

from widget_grid.audit.events import AuditEventType
from widget_grid.models.view import ViewMode, is_valid_transition
from widget_grid.state_machine.states import ViewModeStateMachine
from widget_grid.state_machine.transitions import TransitionTrigger


def test_starts_in_desktop():
    assert ViewModeStateMachine().current_mode == ViewMode.DESKTOP


def test_toggle_alternates(journal):
    """Test that toggling flips between the two views and audits each flip."""
    machine = ViewModeStateMachine(session_id="s1", audit_journal=journal)

    first = machine.toggle()
    second = machine.toggle()

    assert first.changed and first.to_mode == ViewMode.MOBILE
    assert second.to_mode == ViewMode.DESKTOP
    assert first.trigger == TransitionTrigger.USER_TOGGLE
    assert [e.event_type for e in journal.events] == [AuditEventType.VIEW_MODE_CHANGE] * 2
    assert journal.events[0].from_view == "web"
    assert journal.events[0].to_view == "mobile"
    assert journal.events[0].reason == "user_toggle"


def test_setting_current_mode_is_a_noop(journal):
    machine = ViewModeStateMachine(audit_journal=journal)
    result = machine.transition_to(ViewMode.DESKTOP)
    assert not result.changed
    assert machine.history == []
    assert journal.events == []


def test_history_records_transitions():
    machine = ViewModeStateMachine()
    ts = datetime(2024, 1, 1, 12, 0)
    machine.transition_to(ViewMode.MOBILE, timestamp=ts)
    assert machine.history == [(ts, ViewMode.DESKTOP, ViewMode.MOBILE, TransitionTrigger.EXPLICIT_SET)]


@pytest.mark.parametrize("from_mode", list(ViewMode))
@pytest.mark.parametrize("to_mode", list(ViewMode))
def test_all_transitions_are_valid(from_mode, to_mode):
    assert is_valid_transition(from_mode, to_mode)


def test_view_mode_parse():
    assert ViewMode.parse("web") == ViewMode.DESKTOP
    assert ViewMode.parse(" Desktop ") == ViewMode.DESKTOP
    assert ViewMode.parse("MOBILE") == ViewMode.MOBILE
    with pytest.raises(ValueError):
        ViewMode.parse("tablet")
