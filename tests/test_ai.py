"""Tests for bot steering."""

from __future__ import annotations

import random

from arena import ai, collision
from arena.utils import DOWN, LEFT, RIGHT, UP, GridPoint

from conftest import make_food, make_snake, vertical


class ScriptedRng(random.Random):
    """Random source with a fixed ``random()`` draw and first-item ``choice``."""

    def __init__(self, draw: float) -> None:
        super().__init__(0)
        self.draw = draw

    def random(self) -> float:
        return self.draw

    def choice(self, seq):
        return seq[0]


def _plan(bot, others=(), foods=(), world_size=200, rng=None):
    occupancy = collision.build_occupancy([bot, *others])
    return ai.decide_direction(bot, occupancy, list(foods), world_size, rng)


class TestNearestFood:
    def test_picks_smallest_manhattan_distance(self) -> None:
        foods = [make_food(20, 20), make_food(12, 11), make_food(0, 0)]
        assert ai.nearest_food(GridPoint(10, 10), foods) is foods[1]

    def test_ties_go_to_first_in_list(self) -> None:
        foods = [make_food(12, 10, "east"), make_food(8, 10, "west"), make_food(10, 12, "south")]
        assert ai.nearest_food(GridPoint(10, 10), foods).id == "east"

    def test_no_food(self) -> None:
        assert ai.nearest_food(GridPoint(0, 0), []) is None


def test_candidate_order() -> None:
    bot = make_snake("bot", vertical(10, 10), direction=UP)
    candidates = ai.candidate_directions(bot, GridPoint(15, 3))
    assert candidates == [RIGHT, UP, UP, RIGHT, LEFT, DOWN, UP]


def test_candidate_order_skips_aligned_axis() -> None:
    bot = make_snake("bot", vertical(10, 10), direction=UP)
    assert ai.candidate_directions(bot, GridPoint(4, 10))[:2] == [LEFT, UP]


class TestDecideDirection:
    def test_heads_toward_food_horizontally_first(self) -> None:
        bot = make_snake("bot", vertical(10, 10))
        plan = _plan(bot, foods=[make_food(14, 2)])
        assert plan.direction == RIGHT
        assert plan.target == GridPoint(14, 2)

    def test_never_reverses(self) -> None:
        bot = make_snake("bot", vertical(5, 0))
        plan = _plan(bot, foods=[make_food(5, 10)])
        # DOWN would reverse and UP leaves the grid
        assert plan.direction == RIGHT

    def test_avoids_other_snakes(self) -> None:
        bot = make_snake("bot", vertical(10, 10))
        blocker = make_snake("blocker", vertical(11, 10))
        plan = _plan(bot, others=[blocker], foods=[make_food(15, 10)])
        assert plan.direction == UP

    def test_own_tail_is_a_safe_cell(self) -> None:
        bot = make_snake("bot", [(5, 5), (5, 6), (6, 6), (6, 5)], direction=UP)
        plan = _plan(bot, foods=[make_food(7, 5)])
        assert plan.direction == RIGHT

    def test_own_tail_is_unsafe_when_food_sits_on_it(self) -> None:
        bot = make_snake("bot", [(5, 5), (5, 6), (6, 6), (6, 5)], direction=UP)
        plan = _plan(bot, foods=[make_food(6, 5)])
        assert plan.direction == UP

    def test_keeps_heading_when_every_move_is_rejected(self) -> None:
        bot = make_snake("bot", vertical(0, 0))
        blocker = make_snake("blocker", [(2, 0), (1, 0)], direction=RIGHT)
        plan = _plan(bot, others=[blocker], foods=[make_food(5, 5)])
        assert plan.direction == UP


class TestWander:
    def test_keeps_heading_most_ticks(self) -> None:
        bot = make_snake("bot", vertical(10, 10), direction=LEFT)
        plan = _plan(bot, rng=ScriptedRng(0.5))
        assert plan.direction == LEFT
        assert plan.target is None

    def test_turns_randomly_on_low_draw(self) -> None:
        bot = make_snake("bot", vertical(10, 10), direction=LEFT)
        plan = _plan(bot, rng=ScriptedRng(0.05))
        assert plan.direction == UP

    def test_turn_rate_is_low(self) -> None:
        bot = make_snake("bot", vertical(10, 10), direction=LEFT)
        trials = 4000
        draws = [ai.wander(bot, random.Random(seed)) for seed in range(trials)]
        changed = sum(1 for direction in draws if direction != LEFT)
        # a tenth of the draws turn, and a quarter of those land on LEFT again
        assert 0.04 < changed / trials < 0.12
