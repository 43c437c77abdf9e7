"""Gameplay constants shared across the arena modules."""

TICK_RATE: int = 15
WORLD_SIZE: int = 200
VIEWPORT_WIDTH: int = 40
VIEWPORT_HEIGHT: int = 40
INITIAL_SNAKE_LENGTH: int = 5
TOTAL_BOTS: int = 99
FOOD_COUNT: int = 300
FOOD_VALUE: int = 1
FOOD_SCORE: int = 10
WANDER_TURN_CHANCE: float = 0.1
RESPAWN_ATTEMPTS: int = 32
LEADERBOARD_SIZE: int = 10

HUMAN_ID: str = "player-1"
HUMAN_COLOR: str = "#ffffff"

COLORS: tuple[str, ...] = (
    "#ef4444",  # red
    "#f97316",  # orange
    "#eab308",  # yellow
    "#22c55e",  # green
    "#06b6d4",  # cyan
    "#3b82f6",  # blue
    "#8b5cf6",  # violet
    "#d946ef",  # fuchsia
    "#f43f5e",  # rose
)

BOT_NAMES: tuple[str, ...] = (
    "SnakeKing", "Venom", "Python", "Viper", "Cobra", "SlitherMaster",
    "Noodle", "Worm", "SolidSnake", "Liquid", "BigBoss", "Ocelot",
    "Kaa", "Nagini", "Basilisk", "Jormungandr", "Orochi", "Hydra",
    "Medusa", "Gorgon", "Sidewinder", "Rattler", "Copperhead", "Mamba",
    "Taipan", "Anaconda", "Boa", "Constrictor", "Asp", "Adder",
    "PixelEater", "ByteBite", "LagMonster", "Glitch", "DevNull",
    "Sudo", "Root", "Admin", "User123", "Guest99", "PlayerOne",
    "NoobSlayer", "ProGamer", "SpeedRunner", "Camper", "Troll",
    "Lurker", "Bot_01", "AI_Overlord", "Skynet", "Hal9000",
)

JOIN_TIMEOUT: float = 5.0
NAME_MAX_LENGTH: int = 16
CLIENT_MESSAGE_TYPES: frozenset[str] = frozenset({"join", "input", "restart"})
