from gobang.game.types import Difficulty, Player, Point


def test_player_other():
    assert Player.BLACK.other is Player.WHITE
    assert Player.WHITE.other is Player.BLACK


def test_player_str():
    assert str(Player.BLACK) == "Black"
    assert str(Player.WHITE) == "White"


def test_point_is_namedtuple():
    p = Point(3, 5)
    assert p.x == 3
    assert p.y == 5
    assert p == Point(3, 5)
    assert p == (3, 5)


def test_difficulty_str():
    assert [str(d) for d in Difficulty] == ["Easy", "Medium", "Hard", "Hell"]
