"""Errors raised by the player rules.

They carry no HTTP knowledge; the router maps them to status codes.
"""


class PlayerError(Exception):
    """Base class for player rule violations."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidPlayerInputError(PlayerError):
    """Raised for a malformed id, a missing required field or an out-of-range value."""


class PlayerNotFoundError(PlayerError):
    """Raised when a well-formed id matches no stored player."""

    def __init__(self, player_id: int):
        super().__init__(f"Player with id {player_id} not found")
        self.player_id = player_id
