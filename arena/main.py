"""Entry point for the asyncio based arena driver."""

from __future__ import annotations

import argparse
import asyncio
import logging
import random
from typing import Optional, Set

import websockets
from websockets.asyncio.server import ServerConnection

from . import constants, protocol, utils
from .engine import step
from .snake import resolve_next_direction
from .world import SessionStatus, WorldState, create_session


logger = logging.getLogger(__name__)


class GameServer:
    """Drives one arena session at a fixed rate and streams its snapshots.

    The first client to join controls the human snake; later clients only
    receive snapshots until the controller leaves.
    """

    def __init__(
        self,
        host: str,
        port: int,
        tick_rate: int = constants.TICK_RATE,
        bot_count: int = constants.TOTAL_BOTS,
        food_count: int = constants.FOOD_COUNT,
        world_size: int = constants.WORLD_SIZE,
        seed: Optional[int] = None,
    ) -> None:
        self.host = host
        self.port = port
        self.tick_rate = tick_rate
        self.bot_count = bot_count
        self.food_count = food_count
        self.world_size = world_size
        self.rng = random.Random(seed)
        self.state: Optional[WorldState] = None
        self.player_name = "Player 1"
        self.pending_direction: Optional[utils.Direction] = None
        self.clients: Set[ServerConnection] = set()
        self.controller: Optional[ServerConnection] = None
        self._broadcast_lock = asyncio.Lock()

    async def start(self) -> None:
        """Start the websocket server and the world update loop."""

        async with websockets.serve(self._handle_client, self.host, self.port):
            logger.info("Server listening on %s:%s", self.host, self.port)
            await self._run_game_loop()

    def new_session(self, name: str) -> WorldState:
        """Replace the running session with a fresh one for ``name``."""

        self.player_name = name
        self.pending_direction = None
        self.state = create_session(
            name,
            bot_count=self.bot_count,
            food_count=self.food_count,
            world_size=self.world_size,
            rng=self.rng,
        )
        logger.info("Started session for %s with %d bots", name, self.bot_count)
        return self.state

    def handle_message(self, payload: dict) -> None:
        """Apply one message from the controlling client.

        A turn that the human's current heading would reject is dropped here,
        so it cannot overwrite an earlier legal turn queued for the same tick.
        """

        kind = payload.get("type")
        if kind == "input":
            direction = utils.parse_direction(payload.get("direction"))
            if direction is None:
                return
            human = self.state.human() if self.state is not None else None
            if human is not None and resolve_next_direction(human, direction) != direction:
                return
            self.pending_direction = direction
        elif kind == "restart":
            self.new_session(self.player_name)

    def advance(self) -> Optional[WorldState]:
        """Step the session once using the latest pending input."""

        if self.state is None:
            return None
        previous = self.state.status
        self.state = step(self.state, self.pending_direction, self.rng)
        self.pending_direction = None
        if previous is SessionStatus.PLAYING and self.state.status is SessionStatus.GAME_OVER:
            human = self.state.human()
            logger.info(
                "%s died on tick %d with score %d",
                human.name if human else self.player_name,
                self.state.tick,
                human.score if human else 0,
            )
        return self.state

    async def _run_game_loop(self) -> None:
        tick_interval = 1.0 / self.tick_rate
        while True:
            if self.advance() is not None:
                await self._broadcast_snapshot()
            await asyncio.sleep(tick_interval)

    async def _broadcast_snapshot(self) -> None:
        if not self.clients or self.state is None:
            return
        payload = protocol.encode_snapshot(self.state)
        async with self._broadcast_lock:
            disconnected = []
            for websocket in list(self.clients):
                try:
                    await websocket.send(payload)
                except websockets.ConnectionClosed:
                    logger.info("Dropping closed client %s", websocket.remote_address)
                    disconnected.append(websocket)
            for websocket in disconnected:
                self._forget(websocket)

    async def _handle_client(self, websocket: ServerConnection) -> None:
        name = await self._receive_join_name(websocket)
        controller = self.controller is None
        if controller:
            self.controller = websocket
            self.new_session(name)
        self.clients.add(websocket)
        await websocket.send(protocol.encode_welcome(self.state, controller))
        logger.info("%s connected as %s", name, "controller" if controller else "viewer")
        try:
            async for message in websocket:
                if websocket is not self.controller:
                    continue
                try:
                    payload = protocol.parse_client_message(message)
                except ValueError:
                    continue
                self.handle_message(payload)
        except websockets.ConnectionClosed:
            logger.info("Client %s disconnected", name)
        finally:
            self._forget(websocket)

    def _forget(self, websocket: ServerConnection) -> None:
        self.clients.discard(websocket)
        if websocket is self.controller:
            self.controller = None

    async def _receive_join_name(self, websocket: ServerConnection) -> str:
        default = f"Player{len(self.clients) + 1}"
        try:
            message = await asyncio.wait_for(websocket.recv(), timeout=constants.JOIN_TIMEOUT)
        except asyncio.TimeoutError:
            return default
        try:
            return protocol.parse_join_name(message) or default
        except ValueError:
            return default


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the snake arena server")
    parser.add_argument("--host", default="127.0.0.1", help="Host interface to bind to")
    parser.add_argument("--port", type=int, default=8765, help="Port to listen on")
    parser.add_argument("--tick-rate", type=int, default=constants.TICK_RATE, help="Ticks per second")
    parser.add_argument("--bots", type=int, default=constants.TOTAL_BOTS, help="Number of bot snakes")
    parser.add_argument("--food", type=int, default=constants.FOOD_COUNT, help="Food items kept on the grid")
    parser.add_argument("--world-size", type=int, default=constants.WORLD_SIZE, help="Grid side length")
    parser.add_argument("--seed", type=int, default=None, help="Seed for reproducible sessions")
    parser.add_argument("--log-level", default="INFO", help="Logging level")
    args = parser.parse_args(argv)
    if args.world_size < constants.INITIAL_SNAKE_LENGTH:
        parser.error(f"--world-size must be at least {constants.INITIAL_SNAKE_LENGTH}")
    if args.tick_rate < 1:
        parser.error("--tick-rate must be positive")
    if args.bots < 0 or args.food < 0:
        parser.error("--bots and --food cannot be negative")
    return args


def main() -> None:
    args = parse_args()
    logging.basicConfig(level=args.log_level.upper(), format="[%(levelname)s] %(message)s")
    server = GameServer(
        args.host,
        args.port,
        tick_rate=args.tick_rate,
        bot_count=args.bots,
        food_count=args.food,
        world_size=args.world_size,
        seed=args.seed,
    )
    asyncio.run(server.start())


if __name__ == "__main__":
    main()
