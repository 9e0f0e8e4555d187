from __future__ import annotations

import logging
import os
from dataclasses import dataclass


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == '':
        return default
    return float(raw)


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == '':
        return default
    return int(raw)


CANVAS_WIDTH = 800
CANVAS_HEIGHT = 600
TILE_WIDTH = 200
TILE_HEIGHT = 40

BASE_FALL_SPEED = _env_float('SHELLFALL_BASE_SPEED', 1.0)  # pixels per frame
SPEED_INCREMENT = _env_float('SHELLFALL_SPEED_INCREMENT', 0.2)
SPAWN_INTERVAL_MS = _env_int('SHELLFALL_SPAWN_MS', 2000)
DIFFICULTY_INTERVAL_MS = _env_int('SHELLFALL_DIFFICULTY_MS', 10000)

# Web host only
MAX_TICK_MS = _env_int('SHELLFALL_MAX_TICK_MS', 250)
SESSION_TTL_SEC = _env_int('SHELLFALL_SESSION_TTL_SEC', 1800)
LOG_LEVEL = os.getenv('SHELLFALL_LOG_LEVEL', 'INFO')


@dataclass(frozen=True)
class GameConfig:
    """Tunable numbers for one session. Defaults come from the module constants."""
    canvas_width: int = CANVAS_WIDTH
    canvas_height: int = CANVAS_HEIGHT
    tile_width: int = TILE_WIDTH
    tile_height: int = TILE_HEIGHT
    base_fall_speed: float = BASE_FALL_SPEED
    speed_increment: float = SPEED_INCREMENT
    spawn_interval_ms: int = SPAWN_INTERVAL_MS
    difficulty_interval_ms: int = DIFFICULTY_INTERVAL_MS

    def __post_init__(self) -> None:
        if self.base_fall_speed <= 0:
            raise ValueError('base_fall_speed must be positive')
        if self.speed_increment < 0:
            raise ValueError('speed_increment must not be negative')
        if self.spawn_interval_ms <= 0 or self.difficulty_interval_ms <= 0:
            raise ValueError('timer periods must be positive')
        if self.tile_width > self.canvas_width or self.tile_height > self.canvas_height:
            raise ValueError('tile does not fit on the canvas')


def configure_logging(level: str | None = None) -> None:
    """Basic root logging setup for the CLI and the dev server."""
    logging.basicConfig(
        level=(level or LOG_LEVEL).upper(),
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )
