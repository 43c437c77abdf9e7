"""Food entity definition and pool maintenance."""

from __future__ import annotations

from dataclasses import dataclass
import random
from typing import Collection, Iterable, List, Optional

from . import constants, utils


@dataclass(frozen=True)
class Food:
    """A food item that snakes can consume to grow."""

    id: str
    position: utils.GridPoint
    color: str
    value: int = constants.FOOD_VALUE

    def to_dict(self) -> dict[str, object]:
        """Serialise the food item to a JSON friendly dictionary."""

        return {
            "id": self.id,
            "x": self.position.x,
            "y": self.position.y,
            "color": self.color,
            "value": self.value,
        }


def spawn_food(rng: Optional[random.Random] = None, world_size: int = constants.WORLD_SIZE) -> Food:
    """Create a food item on a uniformly random cell with a random palette colour.

    Spawning ignores snake bodies, so food may appear underneath one.
    """

    rng = rng or random.Random()
    return Food(
        id=format(rng.getrandbits(40), "010x"),
        position=utils.random_point_in_world(rng, world_size),
        color=rng.choice(constants.COLORS),
        value=constants.FOOD_VALUE,
    )


def remove_consumed(foods: Iterable[Food], consumed_ids: Collection[str]) -> List[Food]:
    """Return ``foods`` without the items whose id is in ``consumed_ids``."""

    if not consumed_ids:
        return list(foods)
    return [food for food in foods if food.id not in consumed_ids]


def replenish(
    foods: Iterable[Food],
    target_count: int,
    rng: Optional[random.Random] = None,
    world_size: int = constants.WORLD_SIZE,
) -> List[Food]:
    """Top the pool back up to ``target_count`` items.

    A pool that already holds ``target_count`` items (or more) comes back
    unchanged and no random numbers are drawn.
    """

    replenished = list(foods)
    if len(replenished) >= target_count:
        return replenished
    rng = rng or random.Random()
    while len(replenished) < target_count:
        replenished.append(spawn_food(rng, world_size))
    return replenished


def index_by_position(foods: Iterable[Food]) -> dict[utils.GridPoint, Food]:
    """Map each occupied cell to the first food item found on it."""

    by_position: dict[utils.GridPoint, Food] = {}
    for food in foods:
        by_position.setdefault(food.position, food)
    return by_position
