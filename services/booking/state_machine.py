"""
services/booking/state_machine.py
Booking status transition table.

    pending → assigned → confirmed → in_progress → completed
    cancelled | refunded from any non-terminal state

assigned → pending is allowed so a professional can be unassigned.
"""

from typing import Dict, FrozenSet

from shared.models.models import BookingStatus

S = BookingStatus

TRANSITIONS: Dict[BookingStatus, FrozenSet[BookingStatus]] = {
    S.PENDING: frozenset({S.ASSIGNED, S.CONFIRMED, S.CANCELLED, S.REFUNDED}),
    S.ASSIGNED: frozenset({S.CONFIRMED, S.PENDING, S.CANCELLED, S.REFUNDED}),
    S.CONFIRMED: frozenset({S.IN_PROGRESS, S.CANCELLED, S.REFUNDED}),
    S.IN_PROGRESS: frozenset({S.COMPLETED, S.CANCELLED, S.REFUNDED}),
    S.COMPLETED: frozenset(),
    S.CANCELLED: frozenset(),
    S.REFUNDED: frozenset(),
}


def can_transition(current: str, target: str) -> bool:
    """Re-writing the current status is a no-op and always allowed."""
    current, target = BookingStatus(current), BookingStatus(target)
    return current == target or target in TRANSITIONS[current]
