"""Per-tier search constants and the Hell tier's opening book."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Optional

from gobang.game.board import CENTER
from gobang.game.types import Difficulty, Point


@dataclass(frozen=True)
class TierConfig:
    difficulty: Difficulty

    # Cascade steps beyond "win now / block five", which every tier has
    take_open_four: bool = False
    block_open_four: bool = False
    take_compound: bool = False
    block_compound: bool = False
    forcing_search: bool = False
    opening_book: bool = False

    # Easy tier: greedy scoring with an occasional pick from the top N
    greedy_only: bool = False
    random_top_n: int = 3
    random_chance: float = 0.3

    # Minimax
    search_depth: int = 1       # plies searched below the root move
    candidate_limit: int = 10   # root moves considered
    search_limit: int = 8       # moves expanded at inner nodes
    threat_terms: bool = False  # threat-count terms in the static evaluation

    # VCF / VCT
    vcf_depth: int = 0
    vct_depth: int = 0
    forcing_branch: int = 10
    forcing_nodes: Optional[int] = None  # per VCF / VCT run

    # Budget for minimax; None means unbounded
    max_nodes: Optional[int] = None
    time_limit: Optional[float] = None


TIER_CONFIGS: dict[Difficulty, TierConfig] = {
    Difficulty.EASY: TierConfig(
        difficulty=Difficulty.EASY,
        greedy_only=True,
    ),
    Difficulty.MEDIUM: TierConfig(
        difficulty=Difficulty.MEDIUM,
        take_open_four=True,
        block_open_four=True,
        search_depth=1,
        candidate_limit=10,
        search_limit=8,
    ),
    Difficulty.HARD: TierConfig(
        difficulty=Difficulty.HARD,
        take_open_four=True,
        block_open_four=True,
        take_compound=True,
        block_compound=True,
        search_depth=2,
        candidate_limit=12,
        search_limit=8,
        threat_terms=True,
    ),
    Difficulty.HELL: TierConfig(
        difficulty=Difficulty.HELL,
        take_open_four=True,
        block_open_four=True,
        take_compound=True,
        block_compound=True,
        forcing_search=True,
        opening_book=True,
        search_depth=3,
        candidate_limit=12,
        search_limit=8,
        threat_terms=True,
        vcf_depth=12,
        vct_depth=8,
        forcing_branch=10,
        forcing_nodes=4_000,
        max_nodes=20_000,
    ),
}


def tier_config(difficulty: Difficulty, **overrides) -> TierConfig:
    """Preset for `difficulty`, optionally with some fields replaced."""
    config = TIER_CONFIGS[difficulty]
    if overrides:
        config = dataclasses.replace(config, **overrides)
    return config


# ---------------------------------------------------------------------------
# Opening book: reply to the opponent's first stone when playing second
# ---------------------------------------------------------------------------

OPENING_BOOK: dict[Point, Point] = {
    CENTER: Point(8, 8),
    # 3-3 points: step one cell diagonally toward the centre
    Point(3, 3): Point(4, 4),
    Point(11, 3): Point(10, 4),
    Point(3, 11): Point(4, 10),
    Point(11, 11): Point(10, 10),
    # Mid-side points: step one cell toward the centre
    Point(7, 3): Point(7, 4),
    Point(3, 7): Point(4, 7),
    Point(11, 7): Point(10, 7),
    Point(7, 11): Point(7, 10),
    # Next to the centre: take it
    Point(6, 6): CENTER,
    Point(8, 6): CENTER,
    Point(6, 8): CENTER,
    Point(8, 8): CENTER,
    Point(7, 6): CENTER,
    Point(6, 7): CENTER,
    Point(8, 7): CENTER,
    Point(7, 8): CENTER,
}
