"""Tests for the submission window resolver and the unlock state machine.

Pure unit tests: every call passes ``now`` explicitly.
"""

import datetime

import pytest

from app.core.errors import InvalidTransitionError
from app.monitoring.config import WindowConfig
from app.monitoring.window import (
    UnlockEvent,
    decision_event,
    next_unlock_state,
    resolve_window,
    source_states,
)
from app.schemas.window import UnlockDecision, UnlockState, WindowKind

START = datetime.datetime(2026, 10, 15, 18, 0)


def _at(**delta) -> datetime.datetime:
    return START + datetime.timedelta(**delta)


# ======================================================================
# Pre-window
# ======================================================================


class TestPreWindow:
    def test_open_before_start(self):
        w = resolve_window(WindowKind.PRE, START, None, _at(hours=-2))
        assert w.is_open is True
        assert w.is_expired is False
        assert w.opens_at == _at(hours=-24)
        assert w.closes_at == START
        assert w.remaining_minutes == 120

    def test_exactly_at_start_is_not_expired(self):
        w = resolve_window(WindowKind.PRE, START, None, START)
        assert w.is_expired is False
        assert w.remaining_minutes == 0

    def test_one_second_after_start_is_expired(self):
        w = resolve_window(WindowKind.PRE, START, None, _at(seconds=1))
        assert w.is_expired is True
        assert w.is_open is False
        assert w.remaining_minutes == 0
        assert w.unlock_state is UnlockState.LOCKED
        assert w.can_request_unlock is True

    def test_not_yet_open(self):
        w = resolve_window(WindowKind.PRE, START, None, _at(hours=-30))
        assert w.is_open is False
        assert w.is_expired is False

    def test_remaining_minutes_rounds_down(self):
        w = resolve_window(WindowKind.PRE, START, None, _at(minutes=-10, seconds=-59))
        assert w.remaining_minutes == 10

    def test_custom_lead_time(self):
        w = resolve_window(WindowKind.PRE, START, None, _at(hours=-3), config=WindowConfig(pre_lead_hours=2))
        assert w.is_open is False
        assert w.opens_at == _at(hours=-2)


# ======================================================================
# Post-window
# ======================================================================


class TestPostWindow:
    def test_opens_at_expected_end(self):
        w = resolve_window(WindowKind.POST, START, None, _at(minutes=60), planned_duration_minutes=90)
        assert w.opens_at == _at(minutes=90)
        assert w.is_open is False
        assert w.is_expired is False

    def test_closes_24h_after_first_write(self):
        created = _at(hours=3)
        w = resolve_window(WindowKind.POST, START, created, _at(hours=20), planned_duration_minutes=90)
        assert w.closes_at == created + datetime.timedelta(hours=24)
        assert w.is_open is True

    def test_exactly_24h_after_write_is_not_expired(self):
        created = _at(hours=3)
        w = resolve_window(WindowKind.POST, START, created, created + datetime.timedelta(hours=24))
        assert w.is_expired is False

    def test_expired_25h_after_write(self):
        created = _at(hours=2)
        w = resolve_window(WindowKind.POST, START, created, created + datetime.timedelta(hours=25))
        assert w.is_expired is True
        assert w.can_request_unlock is True

    def test_unstarted_stays_open_until_grace(self):
        w = resolve_window(WindowKind.POST, START, None, _at(hours=47), planned_duration_minutes=90)
        assert w.is_open is True
        assert w.closes_at == _at(hours=48)

    def test_unstarted_locked_after_grace(self):
        w = resolve_window(WindowKind.POST, START, None, _at(hours=49), planned_duration_minutes=90)
        assert w.is_expired is True
        assert w.unlock_state is UnlockState.LOCKED


# ======================================================================
# Unlock effect on the window
# ======================================================================


class TestUnlockReopen:
    def test_approved_unlock_reopens_for_24h(self):
        created = _at(hours=2)
        now = created + datetime.timedelta(hours=25)
        w = resolve_window(WindowKind.POST, START, created, now, planned_duration_minutes=90,
                           unlock_state=UnlockState.UNLOCKED, unlocked_at=now)
        assert w.is_expired is False
        assert w.is_open is True
        assert w.closes_at == now + datetime.timedelta(hours=24)
        assert w.remaining_minutes == 24 * 60

    def test_reopened_window_expires_again(self):
        approved = _at(hours=30)
        w = resolve_window(WindowKind.PRE, START, None, approved + datetime.timedelta(hours=25),
                           unlock_state=UnlockState.UNLOCKED, unlocked_at=approved)
        assert w.is_expired is True
        assert w.unlock_state is UnlockState.UNLOCKED
        assert w.can_request_unlock is False

    def test_pending_request_keeps_window_locked(self):
        w = resolve_window(WindowKind.PRE, START, None, _at(hours=1), unlock_state=UnlockState.UNLOCK_REQUESTED)
        assert w.is_expired is True
        assert w.unlock_state is UnlockState.UNLOCK_REQUESTED
        assert w.can_request_unlock is True

    def test_denied_can_request_again(self):
        w = resolve_window(WindowKind.PRE, START, None, _at(hours=1), unlock_state=UnlockState.DENIED)
        assert w.is_expired is True
        assert w.can_request_unlock is True


# ======================================================================
# Unlock state machine
# ======================================================================


class TestUnlockStateMachine:
    @pytest.mark.parametrize(
        "current, event, expected",
        [
            (UnlockState.LOCKED, UnlockEvent.REQUEST, UnlockState.UNLOCK_REQUESTED),
            (UnlockState.DENIED, UnlockEvent.REQUEST, UnlockState.UNLOCK_REQUESTED),
            (UnlockState.UNLOCK_REQUESTED, UnlockEvent.REQUEST, UnlockState.UNLOCK_REQUESTED),
            (UnlockState.UNLOCK_REQUESTED, UnlockEvent.APPROVE, UnlockState.UNLOCKED),
            (UnlockState.UNLOCK_REQUESTED, UnlockEvent.DENY, UnlockState.DENIED),
        ],
    )
    def test_legal_transitions(self, current, event, expected):
        assert next_unlock_state(current, event) is expected

    @pytest.mark.parametrize(
        "current, event",
        [
            (UnlockState.LOCKED, UnlockEvent.APPROVE),
            (UnlockState.LOCKED, UnlockEvent.DENY),
            (UnlockState.UNLOCKED, UnlockEvent.REQUEST),
            (UnlockState.UNLOCKED, UnlockEvent.APPROVE),
            (UnlockState.DENIED, UnlockEvent.APPROVE),
            (UnlockState.DENIED, UnlockEvent.DENY),
        ],
    )
    def test_illegal_transitions_raise(self, current, event):
        with pytest.raises(InvalidTransitionError):
            next_unlock_state(current, event)

    def test_request_is_idempotent(self):
        state = next_unlock_state(UnlockState.LOCKED, UnlockEvent.REQUEST)
        assert next_unlock_state(state, UnlockEvent.REQUEST) is state

    def test_source_states(self):
        assert set(source_states(UnlockEvent.REQUEST)) == {
            UnlockState.LOCKED, UnlockState.DENIED, UnlockState.UNLOCK_REQUESTED,
        }
        assert source_states(UnlockEvent.APPROVE) == [UnlockState.UNLOCK_REQUESTED]

    def test_decision_event(self):
        assert decision_event(UnlockDecision.APPROVE) is UnlockEvent.APPROVE
        assert decision_event(UnlockDecision.DENY) is UnlockEvent.DENY
