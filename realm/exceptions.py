"""
Custom exception hierarchy for the Shadow Realm engine and services.

Provides typed errors that can be handled consistently across
the core engine, services, and API layer.
"""


class RealmError(Exception):
    """Base exception for all game-related errors."""

    code = "realm_error"


class NotYourTurnError(RealmError):
    """Caller is not the active player."""

    code = "not_your_turn"


class InvalidPhaseError(RealmError):
    """Operation attempted out of the required turn order."""

    code = "invalid_phase"


class TileNotFoundError(RealmError):
    """Board topology has no tile at the requested position."""

    code = "tile_not_found"


class SessionNotActiveError(RealmError):
    """Session is not in the status the operation requires."""

    code = "session_not_active"


class RosterInvalidError(RealmError):
    """Roster is too small, too large, or has bad player numbers."""

    code = "roster_invalid"


class SessionNotFoundError(RealmError):
    """Session does not exist."""

    code = "session_not_found"


class ValidationError(RealmError):
    """Input validation failed."""

    code = "validation_error"


class NarrationError(RealmError):
    """Narration backend communication failed."""

    code = "narration_error"
