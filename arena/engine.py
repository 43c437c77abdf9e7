"""One-tick advance of the arena.

:func:`step` works in two phases. The scan phase reads only the state it was
handed and produces one :class:`Transition` per snake. The apply phase copies
the snakes and replays those records onto the copies, so no snake's move can
influence another snake's collision checks within the same tick.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import logging
import random
from typing import Dict, List, Optional

from . import ai, collision, constants, utils
from .food import Food, index_by_position, remove_consumed, replenish
from .snake import Snake, resolve_next_direction
from .world import WorldState

logger = logging.getLogger(__name__)


class Outcome(Enum):
    """What happens to a snake during a tick."""

    MOVED = "moved"
    ATE = "ate"
    HIT_WALL = "hit_wall"
    HIT_SNAKE = "hit_snake"
    HEAD_ON = "head_on"
    STILL_DEAD = "still_dead"

    @property
    def fatal(self) -> bool:
        return self in (Outcome.HIT_WALL, Outcome.HIT_SNAKE, Outcome.HEAD_ON)


@dataclass(frozen=True)
class Transition:
    """The scan-phase verdict for a single snake."""

    snake_id: str
    outcome: Outcome
    direction: utils.Direction
    new_head: Optional[utils.GridPoint] = None
    food: Optional[Food] = None
    target: Optional[utils.GridPoint] = None


def plan_transitions(
    state: WorldState,
    human_direction: object = None,
    rng: Optional[random.Random] = None,
) -> List[Transition]:
    """Decide every snake's fate for this tick without touching ``state``."""

    rng = rng or random.Random()
    requested = utils.parse_direction(human_direction)
    occupancy = collision.build_occupancy(state.snakes)
    food_by_cell = index_by_position(state.foods)
    food_cells = food_by_cell.keys()

    transitions: List[Transition] = []
    for snake in state.snakes:
        if not snake.alive:
            transitions.append(Transition(snake.id, Outcome.STILL_DEAD, snake.direction))
            continue

        target = snake.target
        if snake.is_human:
            direction = resolve_next_direction(snake, requested)
        else:
            plan = ai.decide_direction(snake, occupancy, state.foods, state.world_size, rng, food_cells)
            direction = resolve_next_direction(snake, plan.direction)
            target = plan.target

        new_head = snake.head + direction
        if collision.hits_wall(new_head, state.world_size):
            transitions.append(Transition(snake.id, Outcome.HIT_WALL, direction, target=target))
        elif collision.hits_snake(occupancy, snake, new_head, food_cells):
            transitions.append(Transition(snake.id, Outcome.HIT_SNAKE, direction, target=target))
        else:
            food = food_by_cell.get(new_head)
            outcome = Outcome.ATE if food is not None else Outcome.MOVED
            transitions.append(Transition(snake.id, outcome, direction, new_head, food, target))

    return _resolve_head_on(transitions)


def _resolve_head_on(transitions: List[Transition]) -> List[Transition]:
    movers = {
        transition.snake_id: transition.new_head
        for transition in transitions
        if transition.new_head is not None
    }
    contested = collision.contested_cells(movers)
    if not contested:
        return transitions
    resolved: List[Transition] = []
    for transition in transitions:
        if transition.new_head in contested:
            transition = Transition(
                transition.snake_id,
                Outcome.HEAD_ON,
                transition.direction,
                target=transition.target,
            )
        resolved.append(transition)
    return resolved


def apply_transitions(
    state: WorldState,
    transitions: List[Transition],
    rng: Optional[random.Random] = None,
) -> WorldState:
    """Build the next state from ``state`` and the scan-phase ``transitions``."""

    rng = rng or random.Random()
    by_id: Dict[str, Transition] = {transition.snake_id: transition for transition in transitions}
    snakes: List[Snake] = [snake.copy() for snake in state.snakes]
    consumed: set[str] = set()

    for snake in snakes:
        transition = by_id.get(snake.id)
        if transition is None or transition.outcome is Outcome.STILL_DEAD:
            continue
        if not snake.is_human:
            snake.target = transition.target
        if transition.outcome.fatal:
            snake.kill(transition.direction)
            logger.debug("%s (%s) died: %s", snake.name, snake.id, transition.outcome.value)
            continue
        snake.direction = transition.direction
        ate = transition.outcome is Outcome.ATE and transition.food is not None
        snake.advance(transition.new_head, grow=ate)
        if ate:
            snake.score += constants.FOOD_SCORE * transition.food.value
            consumed.add(transition.food.id)

    foods = replenish(
        remove_consumed(state.foods, consumed),
        state.food_target,
        rng,
        state.world_size,
    )

    blocked = {segment for snake in snakes if snake.alive for segment in snake.body}
    for snake in snakes:
        if snake.alive or snake.is_human:
            continue
        snake.respawn(rng, state.world_size, blocked)
        blocked.update(snake.body)
        logger.debug("Respawned %s (%s) at %s", snake.name, snake.id, snake.head.to_tuple())

    camera = state.camera
    for snake in snakes:
        if snake.is_human:
            camera = state.focus_on(snake.head)
            break

    return WorldState(
        world_size=state.world_size,
        snakes=snakes,
        foods=foods,
        camera=camera,
        tick=state.tick + 1,
        food_target=state.food_target,
        viewport=state.viewport,
    )


def step(
    state: WorldState,
    human_direction: object = None,
    rng: Optional[random.Random] = None,
) -> WorldState:
    """Advance ``state`` by one tick and return the resulting state.

    ``human_direction`` may be ``None`` or anything that is not one of the four
    unit steps, in which case the human keeps its heading. ``state`` itself is
    never modified.
    """

    rng = rng or random.Random()
    transitions = plan_transitions(state, human_direction, rng)
    return apply_transitions(state, transitions, rng)
