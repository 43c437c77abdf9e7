"""Pytest configuration and fixtures for arena tests."""

from __future__ import annotations

import random
from typing import Iterable, Optional

import pytest

from arena.food import Food
from arena.snake import Snake
from arena.utils import Direction, GridPoint, UP
from arena.world import WorldState


def make_snake(
    snake_id: str,
    cells: Iterable[tuple[int, int]],
    direction: Direction = UP,
    is_human: bool = False,
    alive: bool = True,
    score: int = 0,
) -> Snake:
    return Snake(
        id=snake_id,
        name=snake_id.title(),
        color="#ffffff" if is_human else "#22c55e",
        body=[GridPoint(x, y) for x, y in cells],
        direction=direction,
        score=score,
        alive=alive,
        is_human=is_human,
    )


def make_food(x: int, y: int, food_id: Optional[str] = None) -> Food:
    return Food(id=food_id or f"food-{x}-{y}", position=GridPoint(x, y), color="#ef4444")


def make_state(
    snakes: list[Snake],
    foods: Optional[list[Food]] = None,
    world_size: int = 200,
    food_target: Optional[int] = None,
) -> WorldState:
    foods = foods if foods is not None else []
    return WorldState(
        world_size=world_size,
        snakes=snakes,
        foods=foods,
        food_target=len(foods) if food_target is None else food_target,
    )


def vertical(x: int, y: int, length: int = 5) -> list[tuple[int, int]]:
    """Cells of a snake heading up with its head at ``(x, y)``."""
    return [(x, y + offset) for offset in range(length)]


@pytest.fixture
def rng():
    """Provide a deterministic RNG for tests."""
    return random.Random(42)
