"""Errors raised by engine operations."""


class BlendingError(Exception):
    """Base class for blending engine errors."""


class UnknownGame(BlendingError):
    """A referenced id is absent from the catalog."""

    def __init__(self, game_id: str):
        self.game_id = game_id
        super().__init__(f"Game {game_id} not found in catalog")


class InsufficientSelection(BlendingError):
    """Fewer than two distinct ids were supplied for a blend."""

    def __init__(self, count: int, minimum: int = 2):
        self.count = count
        self.minimum = minimum
        super().__init__(f"Need at least {minimum} games to blend, got {count}")
