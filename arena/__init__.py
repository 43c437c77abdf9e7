"""Grid snake arena: a deterministic multi-agent simulation core."""

__all__ = [
    "ai",
    "collision",
    "constants",
    "engine",
    "food",
    "main",
    "protocol",
    "snake",
    "utils",
    "world",
]
