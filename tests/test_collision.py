"""Tests for pre-tick occupancy queries."""

from __future__ import annotations

from arena import collision
from arena.utils import GridPoint, LEFT

from conftest import make_snake, vertical


def _cell(x: int, y: int) -> GridPoint:
    return GridPoint(x, y)


class TestHitsSnake:
    def test_other_snake_head_and_body_block(self) -> None:
        mover = make_snake("mover", vertical(10, 10))
        other = make_snake("other", vertical(12, 10))
        occupancy = collision.build_occupancy([mover, other])
        assert collision.hits_snake(occupancy, mover, _cell(12, 10))
        assert collision.hits_snake(occupancy, mover, _cell(12, 14))
        assert not collision.hits_snake(occupancy, mover, _cell(11, 10))

    def test_own_body_blocks_but_tail_does_not(self) -> None:
        mover = make_snake("mover", [(5, 5), (5, 6), (6, 6), (6, 5)])
        occupancy = collision.build_occupancy([mover])
        assert collision.hits_snake(occupancy, mover, _cell(6, 6))
        assert not collision.hits_snake(occupancy, mover, _cell(6, 5))

    def test_own_tail_blocks_when_food_keeps_it_in_place(self) -> None:
        mover = make_snake("mover", [(5, 5), (5, 6), (6, 6), (6, 5)])
        occupancy = collision.build_occupancy([mover])
        assert collision.hits_snake(occupancy, mover, _cell(6, 5), food_cells={_cell(6, 5)})

    def test_other_snake_tail_always_blocks(self) -> None:
        mover = make_snake("mover", vertical(10, 10))
        other = make_snake("other", [(11, 8), (11, 9)], direction=LEFT)
        occupancy = collision.build_occupancy([mover, other])
        assert collision.hits_snake(occupancy, mover, _cell(11, 9))

    def test_dead_snakes_are_not_obstacles(self) -> None:
        mover = make_snake("mover", vertical(10, 10))
        corpse = make_snake("corpse", vertical(11, 10), alive=False)
        occupancy = collision.build_occupancy([mover, corpse])
        assert not collision.hits_snake(occupancy, mover, _cell(11, 10))


def test_hits_wall() -> None:
    assert collision.hits_wall(_cell(-1, 5), 200)
    assert collision.hits_wall(_cell(5, 200), 200)
    assert not collision.hits_wall(_cell(199, 0), 200)


def test_is_blocked_combines_wall_and_snakes() -> None:
    mover = make_snake("mover", vertical(0, 10))
    other = make_snake("other", vertical(1, 10))
    occupancy = collision.build_occupancy([mover, other])
    assert collision.is_blocked(occupancy, mover, _cell(-1, 10), 200)
    assert collision.is_blocked(occupancy, mover, _cell(1, 10), 200)
    assert not collision.is_blocked(occupancy, mover, _cell(0, 9), 200)


def test_contested_cells() -> None:
    candidates = {"a": _cell(3, 3), "b": _cell(3, 3), "c": _cell(4, 4)}
    assert collision.contested_cells(candidates) == {_cell(3, 3)}
    assert collision.contested_cells({"a": _cell(1, 1)}) == set()
