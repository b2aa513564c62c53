"""Study session state machines."""
from core.errors import InvalidTransition, NotFound, SessionError
from core.session_state import SessionStatus, SessionSummary, round_half_up

__all__ = [
    "InvalidTransition",
    "NotFound",
    "SessionError",
    "SessionStatus",
    "SessionSummary",
    "round_half_up",
]
