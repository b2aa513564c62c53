"""Session contract violations."""


class SessionError(Exception):
    """Base class for rejected session transitions."""


class InvalidTransition(SessionError):
    """The session is not in a state that allows the requested operation."""


class NotFound(SessionError):
    """An item id is not part of the session's items."""
