"""
Arsip Server - Letter Lifecycle

Status state machine for letters. A letter starts PENDING and only moves
forward: PENDING -> PROCESSED -> COMPLETED. Every status change in the
registry and the disposition router goes through AdvanceStatus.

Events:
- ROUTE: a disposition was created. Moves PENDING to PROCESSED and leaves
  later statuses unchanged.
- PROCESS: explicit request to mark a letter processed.
- COMPLETE: explicit request to mark a letter completed.
"""

from enum import Enum

from errors import InvalidTransitionError, InvalidInputError
from models.enums import LetterStatus


class LetterEvent(str, Enum):
    ROUTE = "ROUTE"
    PROCESS = "PROCESS"
    COMPLETE = "COMPLETE"


# (current status, event) -> new status. Missing pairs are invalid.
_TRANSITIONS = {
    (LetterStatus.PENDING, LetterEvent.ROUTE): LetterStatus.PROCESSED,
    (LetterStatus.PROCESSED, LetterEvent.ROUTE): LetterStatus.PROCESSED,
    (LetterStatus.COMPLETED, LetterEvent.ROUTE): LetterStatus.COMPLETED,
    (LetterStatus.PENDING, LetterEvent.PROCESS): LetterStatus.PROCESSED,
    (LetterStatus.PENDING, LetterEvent.COMPLETE): LetterStatus.COMPLETED,
    (LetterStatus.PROCESSED, LetterEvent.COMPLETE): LetterStatus.COMPLETED,
}

# Explicit status requests accepted by the registry
_REQUEST_EVENTS = {
    LetterStatus.PROCESSED: LetterEvent.PROCESS,
    LetterStatus.COMPLETED: LetterEvent.COMPLETE,
}


def AdvanceStatus(current, event: LetterEvent) -> LetterStatus:
    """
    Apply an event to a letter status

    Args:
        current: Current status (LetterStatus or its string value)
        event: Lifecycle event

    Returns:
        LetterStatus: Resulting status (may equal current for ROUTE)

    Raises:
        InvalidTransitionError: If the event is not allowed from current
    """
    current = LetterStatus(current)
    new_status = _TRANSITIONS.get((current, LetterEvent(event)))
    if new_status is None:
        raise InvalidTransitionError(
            f"Cannot apply {LetterEvent(event).value} to a letter that is {current.value}"
        )
    return new_status


def EventForRequestedStatus(requested) -> LetterEvent:
    """
    Map a client-requested status to the lifecycle event that produces it

    Raises:
        InvalidTransitionError: If the status can never be requested (PENDING)
        InvalidInputError: If the value is not a known status
    """
    try:
        requested = LetterStatus(requested)
    except ValueError:
        raise InvalidInputError(f"Unknown status: {requested}")

    event = _REQUEST_EVENTS.get(requested)
    if event is None:
        raise InvalidTransitionError(f"A letter cannot be moved back to {requested.value}")
    return event
