from __future__ import annotations

# Facade module that re-exports the Shellfall engine.
# Kept so the Flask app, scripts and tests have one import point.
# Single-responsibility modules live under shellfall_core/*.

from shellfall_core.commands import SHELL_COMMANDS, CommandPool
from shellfall_core.config import (
    BASE_FALL_SPEED,
    CANVAS_HEIGHT,
    CANVAS_WIDTH,
    DIFFICULTY_INTERVAL_MS,
    SPAWN_INTERVAL_MS,
    SPEED_INCREMENT,
    TILE_HEIGHT,
    TILE_WIDTH,
    GameConfig,
)
from shellfall_core.host import (
    CUE_CORRECT,
    CUE_GAME_OVER,
    Canvas,
    HostBindings,
    InitializationError,
    ScoreLabel,
    SoundCues,
    TextInput,
)
from shellfall_core.render import draw_game_over, draw_tile
from shellfall_core.scheduler import FrameClock, TaskHandle, cancel_all
from shellfall_core.session import GameSession, Phase, SessionStateError
from shellfall_core.tile import Tile
from shellfall_core.view import session_to_json
from shellfall_core.cli import SimulationResult, simulate

__all__ = [
    'SHELL_COMMANDS', 'CommandPool',
    'BASE_FALL_SPEED', 'CANVAS_HEIGHT', 'CANVAS_WIDTH', 'DIFFICULTY_INTERVAL_MS',
    'SPAWN_INTERVAL_MS', 'SPEED_INCREMENT', 'TILE_HEIGHT', 'TILE_WIDTH', 'GameConfig',
    'CUE_CORRECT', 'CUE_GAME_OVER', 'Canvas', 'HostBindings', 'InitializationError',
    'ScoreLabel', 'SoundCues', 'TextInput',
    'draw_game_over', 'draw_tile',
    'FrameClock', 'TaskHandle', 'cancel_all',
    'GameSession', 'Phase', 'SessionStateError',
    'Tile', 'session_to_json', 'SimulationResult', 'simulate',
]


def main() -> None:
    # CLI driver delegated to shellfall_core.cli
    from shellfall_core.cli import main as _main
    _main()


if __name__ == '__main__':
    main()
