"""Grid primitives used by the arena simulation."""

from __future__ import annotations

from dataclasses import dataclass
import random
from typing import Optional


@dataclass(frozen=True)
class GridPoint:
    """An integer cell coordinate on the square arena grid.

    The same type doubles as a unit step when it holds one of the four
    cardinal directions, so moving a head is a plain addition.
    """

    x: int
    y: int

    def __add__(self, other: "GridPoint") -> "GridPoint":
        return GridPoint(self.x + other.x, self.y + other.y)

    def __neg__(self) -> "GridPoint":
        return GridPoint(-self.x, -self.y)

    def manhattan_to(self, other: "GridPoint") -> int:
        """Return the Manhattan distance between this cell and ``other``."""

        return abs(self.x - other.x) + abs(self.y - other.y)

    def in_bounds(self, world_size: int) -> bool:
        """Return ``True`` if the cell lies inside ``[0, world_size)`` on both axes."""

        return 0 <= self.x < world_size and 0 <= self.y < world_size

    def to_tuple(self) -> tuple[int, int]:
        """Return the point as an ``(x, y)`` tuple."""

        return self.x, self.y


Direction = GridPoint

UP = Direction(0, -1)
DOWN = Direction(0, 1)
LEFT = Direction(-1, 0)
RIGHT = Direction(1, 0)

CARDINALS: tuple[Direction, ...] = (UP, DOWN, LEFT, RIGHT)

# Last-resort order tried by the bots once every preferred move is rejected.
FALLBACK_ORDER: tuple[Direction, ...] = (RIGHT, LEFT, DOWN, UP)

DIRECTION_NAMES: dict[str, Direction] = {
    "up": UP,
    "down": DOWN,
    "left": LEFT,
    "right": RIGHT,
    "w": UP,
    "s": DOWN,
    "a": LEFT,
    "d": RIGHT,
}


def parse_direction(value: object) -> Optional[Direction]:
    """Normalise raw input into one of the four unit directions.

    Accepts a :class:`GridPoint`, an ``(x, y)`` pair, a ``{"x": .., "y": ..}``
    mapping or a key name such as ``"up"`` or ``"a"``. Anything that is not
    exactly one of the four cardinal steps yields ``None`` ("no input").
    """

    if value is None:
        return None
    if isinstance(value, GridPoint):
        candidate = value
    elif isinstance(value, str):
        return DIRECTION_NAMES.get(value.strip().lower())
    elif isinstance(value, dict):
        candidate = _pair_to_point(value.get("x"), value.get("y"))
    elif isinstance(value, (tuple, list)) and len(value) == 2:
        candidate = _pair_to_point(value[0], value[1])
    else:
        return None
    if candidate in CARDINALS:
        return candidate
    return None


def _pair_to_point(x: object, y: object) -> Optional[GridPoint]:
    # bool is an int subclass but never a meaningful step
    if isinstance(x, bool) or isinstance(y, bool):
        return None
    if not isinstance(x, (int, float)) or not isinstance(y, (int, float)):
        return None
    if int(x) != x or int(y) != y:
        return None
    return GridPoint(int(x), int(y))


def is_reversal(current: Direction, requested: Direction) -> bool:
    """Return ``True`` if ``requested`` points exactly against ``current``."""

    return requested == -current


def random_point_in_world(rng: random.Random, world_size: int, margin: int = 0) -> GridPoint:
    """Return a uniformly random cell.

    ``margin`` trims that many rows from the bottom of the grid so that a body
    extending downwards from the returned cell still fits inside the world.
    """

    max_y = max(0, world_size - 1 - margin)
    return GridPoint(rng.randrange(world_size), rng.randint(0, max_y))
