"""Line-shape classification for a single axis through a candidate point.

A window is 9 cells centred on the candidate, encoded relative to the player
being evaluated: EMPTY, OWN, or BLOCKED (opponent stone or off the board).
The candidate itself is treated as OWN, i.e. classification answers "what
shape does this axis form if the player plays here".

Shapes are matched from a small ordered table, most severe first. Every
shape must cover the centre cell, so stones elsewhere on the axis that do
not interact with the candidate never upgrade its classification.
"""

from __future__ import annotations

import enum
from functools import lru_cache
from itertools import combinations
from typing import NamedTuple, Sequence

EMPTY = 0
OWN = 1
BLOCKED = 2

WINDOW_SIZE = 9
CENTER_INDEX = 4


class PatternKind(enum.IntEnum):
    """Line shapes ordered by severity (higher value = more severe)."""

    NONE = 0
    OPEN_ONE = 1
    SIMPLE_TWO = 2
    OPEN_TWO = 3
    SIMPLE_THREE = 4
    OPEN_THREE = 5
    BROKEN_THREE = 6
    SIMPLE_FOUR = 7
    OPEN_FOUR = 8
    FIVE = 9

    def __str__(self) -> str:
        return self.name.lower().replace("_", "-")


# ---------------------------------------------------------------------------
# Pattern scoring table
# ---------------------------------------------------------------------------

PATTERN_SCORES: dict[PatternKind, int] = {
    PatternKind.FIVE: 1_000_000,
    PatternKind.OPEN_FOUR: 100_000,   # unblockable
    PatternKind.SIMPLE_FOUR: 10_000,  # must be answered at once
    PatternKind.BROKEN_THREE: 5_500,
    PatternKind.OPEN_THREE: 5_000,
    PatternKind.SIMPLE_THREE: 500,
    PatternKind.OPEN_TWO: 200,
    PatternKind.SIMPLE_TWO: 50,
    PatternKind.OPEN_ONE: 10,
    PatternKind.NONE: 0,
}


class LinePattern(NamedTuple):
    kind: PatternKind
    score: int


# ---------------------------------------------------------------------------
# Shape table
# ---------------------------------------------------------------------------

def _shape(text: str) -> tuple[int, ...]:
    codes = {"_": EMPTY, "X": OWN, "O": BLOCKED}
    return tuple(codes[ch] for ch in text)


def _with_mirrors(*texts: str) -> tuple[tuple[int, ...], ...]:
    """Shapes plus their reversals, so every entry is symmetric as a set."""
    shapes: list[tuple[int, ...]] = []
    for text in texts:
        for variant in (text, text[::-1]):
            shape = _shape(variant)
            if shape not in shapes:
                shapes.append(shape)
    return tuple(shapes)


def _five_cell(stones: int) -> tuple[str, ...]:
    """Every 5-cell span holding exactly `stones` own stones and no blocker."""
    texts = []
    for picked in combinations(range(5), stones):
        texts.append("".join("X" if i in picked else "_" for i in range(5)))
    return tuple(texts)


SHAPES: tuple[tuple[PatternKind, tuple[tuple[int, ...], ...]], ...] = (
    (PatternKind.FIVE, _with_mirrors("XXXXX")),
    (PatternKind.OPEN_FOUR, _with_mirrors("_XXXX_")),
    (PatternKind.SIMPLE_FOUR, _with_mirrors(*_five_cell(4))),
    (PatternKind.BROKEN_THREE, _with_mirrors("_XX_X_")),
    (PatternKind.OPEN_THREE, _with_mirrors("__XXX_")),
    (PatternKind.SIMPLE_THREE, _with_mirrors(*_five_cell(3))),
    (PatternKind.OPEN_TWO, _with_mirrors("__XX__", "_X_X_")),
    (PatternKind.SIMPLE_TWO, _with_mirrors(*_five_cell(2))),
    (PatternKind.OPEN_ONE, _with_mirrors("_X_")),
)


def _matches(window: Sequence[int], shape: Sequence[int]) -> bool:
    """True if `shape` occurs in `window` at an offset that covers the centre."""
    length = len(shape)
    first = max(0, CENTER_INDEX - length + 1)
    last = min(CENTER_INDEX, WINDOW_SIZE - length)
    for start in range(first, last + 1):
        for i in range(length):
            if window[start + i] != shape[i]:
                break
        else:
            return True
    return False


@lru_cache(maxsize=None)
def _classify(window: tuple[int, ...]) -> PatternKind:
    for kind, shapes in SHAPES:
        for shape in shapes:
            if _matches(window, shape):
                return kind
    return PatternKind.NONE


def classify(window: Sequence[int], center_index: int = CENTER_INDEX) -> LinePattern:
    """Classify a 9-cell window as if the player's stone sat at the centre.

    The centre cell must be empty on the real board; it is simulated as OWN
    here regardless of the value passed in.
    """
    if len(window) != WINDOW_SIZE or center_index != CENTER_INDEX:
        raise ValueError("classify expects a 9-cell window centred on index 4")
    cells = list(window)
    cells[CENTER_INDEX] = OWN
    kind = _classify(tuple(cells))
    return LinePattern(kind, PATTERN_SCORES[kind])
