# joust Configuration
# All default values and constants

from dataclasses import dataclass, field, is_dataclass
from typing import List

from logging_utils import log_event


CURRENT_CONFIG_VERSION = 1

# The sampled song: (milliseconds, jerk threshold)
DEFAULT_SONG_MS = [
    [0, 1600],
    [30000, 1600],
    [31000, 3000],
    [60000, 3000],
    [61000, 1300],
    [120000, 1600],
]


@dataclass
class GameConfig:
    """Game loop parameters"""
    tick_ms: int = 500                # Accelerometer peek period (ms), one tick
    fixed_threshold: int = 2000       # Threshold used when no song is loaded


@dataclass
class GraphConfig:
    """Song graph geometry (pixels)"""
    width: int = 144                  # Screen width
    height: int = 60                  # Graph height, baseline sits here
    baseline_height: int = 10         # Flat skirt under the curve


@dataclass
class SongConfig:
    """Threshold envelope in milliseconds, converted to ticks at startup"""
    points_ms: List[List[int]] = field(default_factory=lambda: [list(p) for p in DEFAULT_SONG_MS])


@dataclass
class Config:
    """Master configuration"""
    version: int = 1                  # Schema version for persisted configs
    game: GameConfig = field(default_factory=GameConfig)
    graph: GraphConfig = field(default_factory=GraphConfig)
    song: SongConfig = field(default_factory=SongConfig)
    log_level: str = "INFO"           # Logging level (DEBUG/INFO/WARNING/ERROR)


def apply_dict_to_dataclass(target, data) -> None:
    """Recursively apply values from a dict onto a dataclass instance.
    Unknown keys are ignored."""
    if not isinstance(data, dict):
        return

    for key, value in data.items():
        if not hasattr(target, key):
            continue

        current = getattr(target, key)

        if is_dataclass(current):
            if isinstance(value, dict):
                apply_dict_to_dataclass(current, value)
            else:
                log_event("WARN", "Config", "Ignoring non-object value for section", key=key)
            continue

        setattr(target, key, value)


def _clamp_int(value, default: int, low: int, high: int) -> int:
    try:
        value = int(value)
    except (TypeError, ValueError):
        value = default
    return max(low, min(high, value))


def migrate_config(config: Config, loaded_version) -> None:
    """Upgrade older config structures to the current schema.
    Fills defaults for missing/None fields, clamps ranges and bumps version."""
    try:
        version = int(loaded_version) if loaded_version is not None else 0
    except (TypeError, ValueError):
        version = 0

    if version < 1:
        if getattr(config.game, 'fixed_threshold', None) is None:
            config.game.fixed_threshold = GameConfig.fixed_threshold
        if not config.song.points_ms:
            config.song.points_ms = [list(p) for p in DEFAULT_SONG_MS]

    if getattr(config, 'log_level', None) is None:
        config.log_level = "INFO"

    config.game.tick_ms = _clamp_int(config.game.tick_ms, GameConfig.tick_ms, 1, 60000)
    config.game.fixed_threshold = _clamp_int(config.game.fixed_threshold, GameConfig.fixed_threshold, 0, 1_000_000)

    config.graph.width = _clamp_int(config.graph.width, GraphConfig.width, 1, 10000)
    config.graph.height = _clamp_int(config.graph.height, GraphConfig.height, 1, 10000)
    config.graph.baseline_height = _clamp_int(
        config.graph.baseline_height, GraphConfig.baseline_height, 0, config.graph.height - 1)

    if not isinstance(config.song.points_ms, list):
        config.song.points_ms = [list(p) for p in DEFAULT_SONG_MS]

    config.version = CURRENT_CONFIG_VERSION
