"""World state aggregate and session construction."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import logging
import random
from typing import List, Optional

from . import constants, utils
from .food import Food, replenish
from .snake import Snake, create_agent

logger = logging.getLogger(__name__)


class SessionStatus(Enum):
    """Where the human player stands in the current session."""

    PLAYING = "playing"
    GAME_OVER = "game_over"


@dataclass
class WorldState:
    """Everything the simulation owns at one tick.

    The engine treats a state it is handed as read-only and returns a new
    one; collaborators should do the same.
    """

    world_size: int
    snakes: List[Snake]
    foods: List[Food]
    camera: utils.GridPoint = utils.GridPoint(0, 0)
    tick: int = 0
    food_target: int = constants.FOOD_COUNT
    viewport: tuple[int, int] = (constants.VIEWPORT_WIDTH, constants.VIEWPORT_HEIGHT)

    def human(self) -> Optional[Snake]:
        """Return the human snake, or ``None`` if the session has none."""

        for snake in self.snakes:
            if snake.is_human:
                return snake
        return None

    def bots(self) -> List[Snake]:
        return [snake for snake in self.snakes if not snake.is_human]

    def get_snake(self, snake_id: str) -> Optional[Snake]:
        for snake in self.snakes:
            if snake.id == snake_id:
                return snake
        return None

    @property
    def status(self) -> SessionStatus:
        human = self.human()
        if human is not None and not human.alive:
            return SessionStatus.GAME_OVER
        return SessionStatus.PLAYING

    def alive_count(self) -> int:
        return sum(1 for snake in self.snakes if snake.alive)

    def focus_on(self, head: utils.GridPoint) -> utils.GridPoint:
        """Return the viewport's top-left cell that centres ``head``."""

        width, height = self.viewport
        return utils.GridPoint(head.x - width // 2, head.y - height // 2)

    def leaderboard(self, limit: int = constants.LEADERBOARD_SIZE) -> List[dict]:
        """Return the top alive snakes by score, highest first."""

        entries = sorted(
            (snake for snake in self.snakes if snake.alive),
            key=lambda snake: snake.score,
            reverse=True,
        )
        return [
            {"id": snake.id, "name": snake.name, "score": snake.score, "isHuman": snake.is_human}
            for snake in entries[:limit]
        ]


def bot_name(index: int) -> str:
    """Return the pool name for bot ``index``, cycling once the pool runs out."""

    return constants.BOT_NAMES[index % len(constants.BOT_NAMES)]


def create_session(
    human_name: str,
    bot_count: int = constants.TOTAL_BOTS,
    food_count: int = constants.FOOD_COUNT,
    world_size: int = constants.WORLD_SIZE,
    rng: Optional[random.Random] = None,
) -> WorldState:
    """Build the opening state: one human, ``bot_count`` bots and a full food pool."""

    rng = rng or random.Random()
    human = create_agent(constants.HUMAN_ID, human_name, True, rng, world_size)
    snakes = [human]
    occupied = set(human.body)
    for index in range(bot_count):
        bot = create_agent(f"bot-{index}", bot_name(index), False, rng, world_size, occupied)
        occupied.update(bot.body)
        snakes.append(bot)
    foods = replenish([], food_count, rng, world_size)
    state = WorldState(
        world_size=world_size,
        snakes=snakes,
        foods=foods,
        food_target=food_count,
    )
    state.camera = state.focus_on(human.head)
    logger.debug(
        "Created session for %s with %d bots and %d food on a %dx%d grid",
        human_name,
        bot_count,
        food_count,
        world_size,
        world_size,
    )
    return state
