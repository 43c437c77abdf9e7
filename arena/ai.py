"""Greedy food-seeking steering for bot snakes."""

from __future__ import annotations

from dataclasses import dataclass
import random
from typing import AbstractSet, List, Optional, Sequence

from . import collision, constants, utils
from .food import Food
from .snake import Snake


@dataclass(frozen=True)
class BotPlan:
    """The move a bot wants to make this tick and the food it is chasing."""

    direction: utils.Direction
    target: Optional[utils.GridPoint] = None


def nearest_food(head: utils.GridPoint, foods: Sequence[Food]) -> Optional[Food]:
    """Return the food closest to ``head`` by Manhattan distance.

    Ties go to the item that comes first in ``foods``.
    """

    best: Optional[Food] = None
    best_distance = 0
    for food in foods:
        distance = head.manhattan_to(food.position)
        if best is None or distance < best_distance:
            best = food
            best_distance = distance
    return best


def candidate_directions(bot: Snake, target: utils.GridPoint) -> List[utils.Direction]:
    """Return the moves a bot tries, most preferred first.

    Horizontal step toward the target, vertical step toward the target,
    current heading, then every cardinal in :data:`utils.FALLBACK_ORDER`.
    """

    head = bot.head
    candidates: List[utils.Direction] = []
    if target.x != head.x:
        candidates.append(utils.RIGHT if target.x > head.x else utils.LEFT)
    if target.y != head.y:
        candidates.append(utils.DOWN if target.y > head.y else utils.UP)
    candidates.append(bot.direction)
    candidates.extend(utils.FALLBACK_ORDER)
    return candidates


def wander(bot: Snake, rng: random.Random) -> utils.Direction:
    """Keep the heading, occasionally turning to a random cardinal."""

    if rng.random() < constants.WANDER_TURN_CHANCE:
        return rng.choice(utils.CARDINALS)
    return bot.direction


def decide_direction(
    bot: Snake,
    occupancy: collision.Occupancy,
    foods: Sequence[Food],
    world_size: int = constants.WORLD_SIZE,
    rng: Optional[random.Random] = None,
    food_cells: Optional[AbstractSet[utils.GridPoint]] = None,
) -> BotPlan:
    """Pick the bot's next move from the pre-tick view of the arena.

    The first candidate that is neither a reversal nor fatal wins. When every
    candidate is rejected the bot keeps its heading and takes its chances.
    """

    target_food = nearest_food(bot.head, foods)
    if target_food is None:
        return BotPlan(wander(bot, rng or random.Random()))

    if food_cells is None:
        food_cells = {food.position for food in foods}
    target = target_food.position
    for move in candidate_directions(bot, target):
        if len(bot.body) > 1 and utils.is_reversal(bot.direction, move):
            continue
        if collision.is_blocked(occupancy, bot, bot.head + move, world_size, food_cells):
            continue
        return BotPlan(move, target)
    return BotPlan(bot.direction, target)
