"""Snake entity implementation."""

from __future__ import annotations

from dataclasses import dataclass, field
import random
from typing import AbstractSet, List, Optional

from . import constants, utils


@dataclass
class Snake:
    """One agent in the arena: the human player or a bot.

    ``body[0]`` is the head and ``body[-1]`` the tail; consecutive segments are
    always one grid step apart.
    """

    id: str
    name: str
    color: str
    body: List[utils.GridPoint]
    direction: utils.Direction = utils.UP
    score: int = 0
    alive: bool = True
    is_human: bool = False
    target: Optional[utils.GridPoint] = field(default=None, compare=False)

    @property
    def head(self) -> utils.GridPoint:
        """Return the head cell."""

        return self.body[0]

    @property
    def tail(self) -> utils.GridPoint:
        """Return the tail cell."""

        return self.body[-1]

    @property
    def length(self) -> int:
        """Return the number of body segments."""

        return len(self.body)

    def copy(self) -> "Snake":
        """Return a copy that shares no mutable state with this snake."""

        return Snake(
            id=self.id,
            name=self.name,
            color=self.color,
            body=list(self.body),
            direction=self.direction,
            score=self.score,
            alive=self.alive,
            is_human=self.is_human,
            target=self.target,
        )

    def advance(self, new_head: utils.GridPoint, grow: bool) -> None:
        """Push ``new_head`` onto the body and drop the tail unless growing."""

        self.body.insert(0, new_head)
        if not grow:
            self.body.pop()

    def kill(self, direction: utils.Direction) -> None:
        """Mark the snake as dead, keeping its body where it was."""

        self.direction = direction
        self.alive = False

    def respawn(
        self,
        rng: Optional[random.Random] = None,
        world_size: int = constants.WORLD_SIZE,
        blocked: AbstractSet[utils.GridPoint] = frozenset(),
    ) -> None:
        """Re-initialise the snake in place under the same id and name.

        The new body avoids ``blocked`` whenever the grid has room for it.
        """

        fresh = create_agent(self.id, self.name, self.is_human, rng, world_size, blocked)
        self.color = fresh.color
        self.body = fresh.body
        self.direction = fresh.direction
        self.score = fresh.score
        self.alive = True
        self.target = None

    def to_snapshot(self) -> dict:
        """Return a snapshot representation for clients."""

        return {
            "id": self.id,
            "name": self.name,
            "color": self.color,
            "score": self.score,
            "alive": self.alive,
            "isHuman": self.is_human,
            "direction": {"x": self.direction.x, "y": self.direction.y},
            "target": None if self.target is None else {"x": self.target.x, "y": self.target.y},
            "segments": [{"x": point.x, "y": point.y} for point in self.body],
        }


def initial_body(start: utils.GridPoint, length: int = constants.INITIAL_SNAKE_LENGTH) -> List[utils.GridPoint]:
    """Return a vertical body hanging down from ``start`` along +y."""

    return [utils.GridPoint(start.x, start.y + offset) for offset in range(length)]


def pick_start(
    rng: random.Random,
    world_size: int,
    blocked: AbstractSet[utils.GridPoint] = frozenset(),
) -> utils.GridPoint:
    """Choose a start cell whose initial column stays clear of ``blocked``.

    A few uniform draws are tried first. On a crowded grid every valid start
    is then scanned in shuffled order, falling back to a start whose head cell
    alone is free, and only then to any start at all.
    """

    margin = constants.INITIAL_SNAKE_LENGTH - 1
    start = utils.random_point_in_world(rng, world_size, margin)
    if not blocked:
        return start
    for _ in range(constants.RESPAWN_ATTEMPTS):
        if blocked.isdisjoint(initial_body(start)):
            return start
        start = utils.random_point_in_world(rng, world_size, margin)

    max_y = max(0, world_size - 1 - margin)
    starts = [utils.GridPoint(x, y) for x in range(world_size) for y in range(max_y + 1)]
    rng.shuffle(starts)
    for candidate in starts:
        if blocked.isdisjoint(initial_body(candidate)):
            return candidate
    for candidate in starts:
        if candidate not in blocked:
            return candidate
    return start


def create_agent(
    agent_id: str,
    name: str,
    is_human: bool = False,
    rng: Optional[random.Random] = None,
    world_size: int = constants.WORLD_SIZE,
    blocked: AbstractSet[utils.GridPoint] = frozenset(),
) -> Snake:
    """Create a fresh agent at a random start cell, heading up."""

    rng = rng or random.Random()
    start = pick_start(rng, world_size, blocked)
    color = constants.HUMAN_COLOR if is_human else rng.choice(constants.COLORS)
    return Snake(
        id=agent_id,
        name=name,
        color=color,
        body=initial_body(start),
        direction=utils.UP,
        score=0,
        alive=True,
        is_human=is_human,
    )


def resolve_next_direction(snake: Snake, requested: Optional[utils.Direction]) -> utils.Direction:
    """Return the direction ``snake`` will actually take this tick.

    Invalid or missing requests keep the current heading, and so does an
    exact reversal while the body is longer than one cell.
    """

    direction = utils.parse_direction(requested)
    if direction is None:
        return snake.direction
    if len(snake.body) > 1 and utils.is_reversal(snake.direction, direction):
        return snake.direction
    return direction
