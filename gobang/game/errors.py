"""Exceptions raised by the board model and the match session."""

from __future__ import annotations

from typing import Optional

from .types import Point


class GobangError(Exception):
    """Base class for every error raised by the game layer."""


class OutOfBoundsError(GobangError):
    def __init__(self, point: Point) -> None:
        self.point = point
        super().__init__(f"{tuple(point)} is off the board")


class CellOccupiedError(GobangError):
    def __init__(self, point: Point, label: Optional[str] = None) -> None:
        self.point = point
        super().__init__(f"{label or tuple(point)} is occupied")


class GameOverError(GobangError):
    def __init__(self) -> None:
        super().__init__("Game is already over")
