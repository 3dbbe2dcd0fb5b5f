from __future__ import annotations

import abc
from typing import Optional

from gobang.agent.search import SearchStats
from gobang.game.board import GomokuGameState
from gobang.game.types import Point


class Agent(abc.ABC):
    """A computer player. Plays for `game_state.current_player`."""

    last_stats: Optional[SearchStats] = None

    @abc.abstractmethod
    def select_move(self, game_state: GomokuGameState) -> Point:
        """Return an empty, on-board point to play. Must leave the board unchanged."""

    @property
    def name(self) -> str:
        return self.__class__.__name__
