"""JSON protocol helpers for the websocket transport."""

from __future__ import annotations

import json
from typing import Optional

from . import constants
from .world import WorldState


def parse_client_message(message: str | bytes) -> dict:
    """Parse a raw client ``message`` into a Python dictionary.

    Raises ``ValueError`` for anything that is not a JSON object carrying one
    of the arena's message types.
    """

    try:
        payload = json.loads(message)
    except json.JSONDecodeError as exc:
        raise ValueError("Invalid client message") from exc
    if not isinstance(payload, dict):
        raise ValueError("Client message must be a JSON object")
    kind = payload.get("type")
    if not isinstance(kind, str) or kind not in constants.CLIENT_MESSAGE_TYPES:
        raise ValueError(f"Unknown client message type: {kind!r}")
    return payload


def parse_join_name(message: str | bytes) -> Optional[str]:
    """Return the trimmed player name from a ``join`` message.

    ``None`` means the message was some other valid type or carried a blank
    name; malformed messages raise ``ValueError`` like
    :func:`parse_client_message`.
    """

    payload = parse_client_message(message)
    if payload["type"] != "join":
        return None
    name = str(payload.get("name", "")).strip()
    return name[: constants.NAME_MAX_LENGTH] or None


def snapshot_dict(state: WorldState) -> dict:
    """Return the read-only view of ``state`` handed to renderers."""

    human = state.human()
    return {
        "type": "snapshot",
        "tick": state.tick,
        "worldSize": state.world_size,
        "camera": {"x": state.camera.x, "y": state.camera.y},
        "viewport": {"width": state.viewport[0], "height": state.viewport[1]},
        "status": state.status.value,
        "playerId": human.id if human is not None else None,
        "snakes": [snake.to_snapshot() for snake in state.snakes],
        "foods": [food.to_dict() for food in state.foods],
        "leaderboard": state.leaderboard(),
        "alive": state.alive_count(),
        "total": len(state.snakes),
    }


def encode_snapshot(state: WorldState) -> str:
    """Encode a world snapshot for broadcasting to clients."""

    return json.dumps(snapshot_dict(state))


def encode_welcome(state: WorldState, controller: bool) -> str:
    """Encode the welcome payload sent upon connection."""

    human = state.human()
    return json.dumps(
        {
            "type": "welcome",
            "id": human.id if human is not None else None,
            "name": human.name if human is not None else None,
            "controller": controller,
            "worldSize": state.world_size,
        }
    )
