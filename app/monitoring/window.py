"""
Submission window resolver and unlock state machine.

Pure functions: the caller supplies ``now`` explicitly.

Pre-window
    Opens ``pre_lead_hours`` before the scheduled start, closes exactly at
    the start.  Expired iff ``now > session_start``.

Post-window
    Opens at the expected session end.  Closes ``post_hours`` after the
    athlete's first post write (``record_created_at``), not after the
    session end.  An athlete who never started a post submission keeps
    the window open until the session is ``unstarted_post_grace_hours``
    old; after that it is locked for good, with unlock still available.

Unlock
    Only meaningful once a window has expired.  The state machine is an
    explicit transition table; anything not in the table is illegal.
    Approving reopens the window for ``unlock_reopen_hours`` from the
    moment of approval.  A denial behaves like ``locked``: the athlete may
    ask again.
"""

from __future__ import annotations

import datetime
import math
from enum import Enum
from typing import Optional

from app.core.errors import InvalidTransitionError
from app.monitoring.config import DEFAULT_CONFIG, WindowConfig
from app.schemas.window import UnlockDecision, UnlockState, WindowKind, WindowState

# ======================================================================
# Unlock state machine
# ======================================================================


class UnlockEvent(str, Enum):
    REQUEST = "request"
    APPROVE = "approve"
    DENY = "deny"


_TRANSITIONS: dict[tuple[UnlockState, UnlockEvent], UnlockState] = {
    (UnlockState.LOCKED, UnlockEvent.REQUEST): UnlockState.UNLOCK_REQUESTED,
    (UnlockState.DENIED, UnlockEvent.REQUEST): UnlockState.UNLOCK_REQUESTED,
    # Idempotent: asking twice before resolution changes nothing.
    (UnlockState.UNLOCK_REQUESTED, UnlockEvent.REQUEST): UnlockState.UNLOCK_REQUESTED,
    (UnlockState.UNLOCK_REQUESTED, UnlockEvent.APPROVE): UnlockState.UNLOCKED,
    (UnlockState.UNLOCK_REQUESTED, UnlockEvent.DENY): UnlockState.DENIED,
}

_DECISION_EVENTS = {
    UnlockDecision.APPROVE: UnlockEvent.APPROVE,
    UnlockDecision.DENY: UnlockEvent.DENY,
}


def next_unlock_state(current: UnlockState, event: UnlockEvent) -> UnlockState:
    """Apply *event* to *current*.

    Raises:
        InvalidTransitionError: if the pair is not in the transition table.
    """
    try:
        return _TRANSITIONS[(current, event)]
    except KeyError:
        raise InvalidTransitionError(
            f"Cannot {event.value} an unlock in state '{current.value}'",
            state=current.value,
        ) from None


def source_states(event: UnlockEvent) -> list[UnlockState]:
    """States from which *event* is legal (used for conditional updates)."""
    return [state for (state, ev) in _TRANSITIONS if ev is event]


def decision_event(decision: UnlockDecision) -> UnlockEvent:
    return _DECISION_EVENTS[decision]


# ======================================================================
# Window resolution
# ======================================================================


def _remaining_minutes(closes_at: datetime.datetime, now: datetime.datetime) -> int:
    seconds = (closes_at - now).total_seconds()
    return max(0, math.floor(seconds / 60))


def _base_window(kind: WindowKind, session_start: datetime.datetime, planned_duration_minutes: int,
                 record_created_at: Optional[datetime.datetime], now: datetime.datetime,
                 cfg: WindowConfig, ) -> tuple[datetime.datetime, datetime.datetime, bool]:
    """Return ``(opens_at, closes_at, is_expired)`` ignoring any unlock."""
    if kind is WindowKind.PRE:
        opens_at = session_start - datetime.timedelta(hours=cfg.pre_lead_hours)
        return opens_at, session_start, now > session_start

    opens_at = session_start + datetime.timedelta(minutes=planned_duration_minutes)
    if record_created_at is not None:
        span = datetime.timedelta(hours=cfg.post_hours)
        closes_at = record_created_at + span
        return opens_at, closes_at, now - record_created_at > span

    closes_at = session_start + datetime.timedelta(hours=cfg.unstarted_post_grace_hours)
    return opens_at, closes_at, now > closes_at


def resolve_window(kind: WindowKind, session_start: datetime.datetime,
                   record_created_at: Optional[datetime.datetime], now: datetime.datetime, *,
                   planned_duration_minutes: int = 0, unlock_state: Optional[UnlockState] = None,
                   unlocked_at: Optional[datetime.datetime] = None,
                   config: Optional[WindowConfig] = None, ) -> WindowState:
    """Resolve the open/locked state of a submission window at *now*.

    Args:
        kind: ``pre`` or ``post``.
        session_start: Scheduled session start.
        record_created_at: First write of the athlete's submission of this
            kind, ``None`` if never started.
        now: Evaluation instant.
        planned_duration_minutes: Used to place the post-window opening.
        unlock_state: Current unlock FSM state, if an unlock record exists.
        unlocked_at: Approval instant when ``unlock_state`` is ``unlocked``.
        config: Optional :class:`WindowConfig` override.

    Returns:
        :class:`WindowState`.
    """
    cfg = config or DEFAULT_CONFIG.window
    opens_at, closes_at, is_expired = _base_window(
        kind, session_start, planned_duration_minutes, record_created_at, now, cfg,
    )

    if is_expired and unlock_state is UnlockState.UNLOCKED and unlocked_at is not None:
        closes_at = unlocked_at + datetime.timedelta(hours=cfg.unlock_reopen_hours)
        is_expired = now > closes_at

    if is_expired:
        # An approved unlock that ran out again stays "unlocked": no second reopen.
        state = unlock_state if unlock_state is not None else UnlockState.LOCKED
        can_request = (state, UnlockEvent.REQUEST) in _TRANSITIONS
    else:
        state = unlock_state
        can_request = False

    return WindowState(
        kind=kind,
        opens_at=opens_at,
        closes_at=closes_at,
        remaining_minutes=0 if is_expired else _remaining_minutes(closes_at, now),
        is_expired=is_expired,
        is_open=not is_expired and now >= opens_at,
        unlock_state=state,
        can_request_unlock=can_request,
    )
