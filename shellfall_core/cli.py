from __future__ import annotations

import argparse
import logging
import random
from dataclasses import dataclass
from typing import List, Optional, Set

from .config import GameConfig, configure_logging
from .session import GameSession
from .tile import Tile

logger = logging.getLogger(__name__)


@dataclass
class SimulationResult:
    score: int
    frames: int
    fall_speed: float
    game_over: bool


class AutoTyper:
    """Bot player: types a tile once it falls past `reaction` pixels, unless it decides to miss it."""

    def __init__(self, reaction: float, miss_rate: float, rng: random.Random) -> None:
        self.reaction = reaction
        self.miss_rate = miss_rate
        self._rng = rng
        self._decided: Set[Tile] = set()
        self._ignored: Set[Tile] = set()

    def act(self, session: GameSession) -> Optional[str]:
        for tile in session.tiles:
            if tile.y < self.reaction or tile in self._ignored:
                continue
            if tile not in self._decided:
                self._decided.add(tile)
                if self._rng.random() < self.miss_rate:
                    self._ignored.add(tile)
                    continue
            session.handle_input(tile.command)
            return tile.command
        return None


def simulate(
    seed: Optional[int] = None,
    max_frames: int = 20000,
    frame_ms: float = 16.0,
    reaction: float = 300.0,
    miss_rate: float = 0.05,
    config: Optional[GameConfig] = None,
) -> SimulationResult:
    """Plays one session on the virtual clock until game over or max_frames."""
    session = GameSession(config=config, seed=seed)
    bot = AutoTyper(reaction, miss_rate, random.Random(seed))
    session.start()
    while session.running and session.frame_count < max_frames:
        bot.act(session)
        session.tick(frame_ms)
    logger.info('Simulation finished: score=%d frames=%d', session.score, session.frame_count)
    return SimulationResult(
        score=session.score,
        frames=session.frame_count,
        fall_speed=session.fall_speed,
        game_over=not session.running,
    )


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(description='Shellfall headless simulation')
    parser.add_argument('--seed', type=int, default=None, help='RNG seed for spawns and the bot')
    parser.add_argument('--max-frames', type=int, default=20000, help='Stop after this many frames')
    parser.add_argument('--frame-ms', type=float, default=16.0, help='Virtual milliseconds per frame')
    parser.add_argument('--reaction', type=float, default=300.0, help='Depth (px) at which the bot types a tile')
    parser.add_argument('--miss-rate', type=float, default=0.05, help='Chance the bot ignores a tile for good')
    parser.add_argument('--log-level', default=None, help='Logging level (default from SHELLFALL_LOG_LEVEL)')
    args = parser.parse_args(argv)

    if args.frame_ms <= 0:
        parser.error('--frame-ms must be positive')
    if not 0.0 <= args.miss_rate <= 1.0:
        parser.error('--miss-rate must be within [0, 1]')

    configure_logging(args.log_level)
    res = simulate(
        seed=args.seed,
        max_frames=args.max_frames,
        frame_ms=args.frame_ms,
        reaction=args.reaction,
        miss_rate=args.miss_rate,
    )
    outcome = 'Game over' if res.game_over else 'Stopped'
    print(f"{outcome} after {res.frames} frames: score {res.score}, fall speed {res.fall_speed:.2f}")
