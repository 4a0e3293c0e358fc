from __future__ import annotations


class OthelloError(Exception):
    """Base class for rule rejections. State is never changed when one is raised."""


class IllegalMove(OthelloError):
    """Target is off the board, occupied, out of turn, or flips nothing."""


class IllegalPass(OthelloError):
    """The player still has a legal move, or it is not their turn."""


class GameOver(OthelloError):
    """Mutation attempted after the game reached a terminal state."""
