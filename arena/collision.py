"""Collision helpers over a frozen pre-tick view of the arena."""

from __future__ import annotations

from dataclasses import dataclass
from typing import AbstractSet, Dict, Iterable, List, Mapping, Tuple

from .snake import Snake
from . import utils


@dataclass(frozen=True)
class Occupancy:
    """Which alive snakes cover which cells at the start of a tick.

    Built once per tick and shared by the bots and the engine so that no
    lookup ever sees a move made during the same tick.
    """

    owners: Mapping[utils.GridPoint, Tuple[str, ...]]
    tails: Mapping[str, utils.GridPoint]

    def owners_of(self, cell: utils.GridPoint) -> Tuple[str, ...]:
        return self.owners.get(cell, ())


def build_occupancy(snakes: Iterable[Snake]) -> Occupancy:
    """Index every segment of every alive snake by cell."""

    owners: Dict[utils.GridPoint, List[str]] = {}
    tails: Dict[str, utils.GridPoint] = {}
    for snake in snakes:
        if not snake.alive:
            continue
        tails[snake.id] = snake.tail
        for segment in snake.body:
            owners.setdefault(segment, []).append(snake.id)
    return Occupancy(
        owners={cell: tuple(ids) for cell, ids in owners.items()},
        tails=tails,
    )


def hits_wall(cell: utils.GridPoint, world_size: int) -> bool:
    """Return ``True`` if ``cell`` lies outside the arena."""

    return not cell.in_bounds(world_size)


def hits_snake(
    occupancy: Occupancy,
    mover: Snake,
    cell: utils.GridPoint,
    food_cells: AbstractSet[utils.GridPoint] = frozenset(),
) -> bool:
    """Return ``True`` if moving ``mover``'s head into ``cell`` is a collision.

    Any head or body segment of an alive snake blocks the cell. The mover's
    own tail is the exception, but only when ``cell`` holds no food: eating
    keeps the tail in place, so the tail only vacates on a plain move.
    """

    for owner in occupancy.owners_of(cell):
        if owner != mover.id:
            return True
        if cell != occupancy.tails.get(mover.id) or cell in food_cells:
            return True
    return False


def is_blocked(
    occupancy: Occupancy,
    mover: Snake,
    cell: utils.GridPoint,
    world_size: int,
    food_cells: AbstractSet[utils.GridPoint] = frozenset(),
) -> bool:
    """Return ``True`` if ``cell`` is a fatal destination for ``mover``."""

    return hits_wall(cell, world_size) or hits_snake(occupancy, mover, cell, food_cells)


def contested_cells(candidates: Mapping[str, utils.GridPoint]) -> set[utils.GridPoint]:
    """Return the cells that two or more movers are heading into at once."""

    seen: set[utils.GridPoint] = set()
    contested: set[utils.GridPoint] = set()
    for cell in candidates.values():
        if cell in seen:
            contested.add(cell)
        seen.add(cell)
    return contested
