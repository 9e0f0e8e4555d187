from __future__ import annotations

import enum
import logging
import random
from typing import List, Optional

from .commands import CommandPool
from .config import GameConfig
from .host import CUE_CORRECT, CUE_GAME_OVER, HostBindings
from .render import draw_game_over, draw_tile
from .scheduler import FrameClock, TaskHandle, cancel_all
from .tile import Tile

logger = logging.getLogger(__name__)


class Phase(enum.Enum):
    IDLE = 'idle'
    RUNNING = 'running'
    GAME_OVER = 'game_over'


class SessionStateError(RuntimeError):
    """Raised for a lifecycle transition the current phase does not allow."""


class GameSession:
    """
    One play-through of the game, from start() to game over, plus restarts.

    The session owns the live tiles, the score and the fall speed. Three
    scheduled activities hang off the frame clock while running: the frame
    request (update loop), the spawn timer and the difficulty timer. Every
    transition out of RUNNING cancels all three.
    """

    def __init__(
        self,
        host: Optional[HostBindings] = None,
        config: Optional[GameConfig] = None,
        pool: Optional[CommandPool] = None,
        clock: Optional[FrameClock] = None,
        seed: Optional[int] = None,
    ) -> None:
        self.config = config or GameConfig()
        self.host = host if host is not None else HostBindings.headless(self.config.canvas_width, self.config.canvas_height)
        self.host.validate(self.config.tile_width, self.config.tile_height)
        self._rng = random.Random(seed)
        self.pool = pool or CommandPool(rng=self._rng)
        self.clock = clock or FrameClock()

        self.phase = Phase.IDLE
        self.score = 0
        self.fall_speed = self.config.base_fall_speed
        self.tiles: List[Tile] = []
        self.frame_count = 0

        self._frame_handle: Optional[TaskHandle] = None
        self._spawn_handle: Optional[TaskHandle] = None
        self._difficulty_handle: Optional[TaskHandle] = None

    @property
    def running(self) -> bool:
        return self.phase is Phase.RUNNING

    # ---------- Lifecycle ----------

    def start(self) -> None:
        """IDLE -> RUNNING."""
        if self.phase is not Phase.IDLE:
            raise SessionStateError(f'cannot start from {self.phase.value}')
        self.score = 0
        self.fall_speed = self.config.base_fall_speed
        self.tiles = []
        self.frame_count = 0
        self.host.score_label.show(self.score)

        field = self.host.text_input
        field.enable()
        field.clear()
        field.focus()

        self.phase = Phase.RUNNING
        self._frame_handle = self.clock.request_frame(self.update_frame)
        self._spawn_handle = self.clock.set_interval(self.config.spawn_interval_ms, self.spawn_tile)
        self._difficulty_handle = self.clock.set_interval(self.config.difficulty_interval_ms, self.increase_difficulty)
        logger.info('Session started (speed=%.2f)', self.fall_speed)

    def end_game(self) -> None:
        """RUNNING -> GAME_OVER."""
        if self.phase is not Phase.RUNNING:
            logger.debug('end_game ignored in %s', self.phase.value)
            return
        self._cancel_scheduled()
        self.phase = Phase.GAME_OVER
        self.host.sounds.play(CUE_GAME_OVER)
        draw_game_over(self.host.canvas, self.score)
        self.host.text_input.disable()
        logger.info('Game over: score=%d frames=%d speed=%.2f', self.score, self.frame_count, self.fall_speed)

    def restart(self) -> None:
        """Any phase -> RUNNING, with a full reset."""
        self._cancel_scheduled()
        self.phase = Phase.IDLE
        logger.info('Restarting session')
        self.start()

    def _cancel_scheduled(self) -> None:
        cancel_all(self._frame_handle, self._spawn_handle, self._difficulty_handle)
        self._frame_handle = None
        self._spawn_handle = None
        self._difficulty_handle = None

    # ---------- Driving ----------

    def tick(self, dt_ms: float) -> int:
        """Advances the frame clock by dt_ms. Returns how many frames were processed."""
        if dt_ms < 0:
            raise ValueError(f'dt must not be negative, got {dt_ms}')
        if not self.running:
            return 0
        return self.clock.advance(dt_ms)

    # ---------- Spawner ----------

    def spawn_tile(self) -> Optional[Tile]:
        if not self.running:
            logger.debug('spawn ignored in %s', self.phase.value)
            return None
        cfg = self.config
        tile = Tile(
            x=self._rng.uniform(0, cfg.canvas_width - cfg.tile_width),
            y=0.0,
            command=self.pool.pick(),
        )
        self.tiles.append(tile)
        logger.debug('Spawned %r at x=%.1f (%d live)', tile.command, tile.x, len(self.tiles))
        return tile

    # ---------- Difficulty controller ----------

    def increase_difficulty(self) -> Optional[float]:
        if not self.running:
            logger.debug('difficulty tick ignored in %s', self.phase.value)
            return None
        self.fall_speed += self.config.speed_increment
        logger.info('Fall speed now %.2f', self.fall_speed)
        return self.fall_speed

    # ---------- Update loop ----------

    def update_frame(self) -> None:
        """Advances, draws and loss-checks every tile, then schedules the next frame or ends the game."""
        if not self.running:
            logger.debug('frame ignored in %s', self.phase.value)
            return
        cfg = self.config
        canvas = self.host.canvas
        canvas.clear()

        lost = False
        for tile in self.tiles:
            tile.y += self.fall_speed
            draw_tile(canvas, tile, cfg.tile_width, cfg.tile_height)
            if tile.bottom(cfg.tile_height) >= cfg.canvas_height:
                lost = True
        self.frame_count += 1

        if lost:
            self._frame_handle = None
            self.end_game()
        else:
            self._frame_handle = self.clock.request_frame(self.update_frame)

    # ---------- Input matcher ----------

    def handle_input(self, text: str) -> bool:
        """
        Checks the text field value against the live tiles.

        The trimmed text must equal a tile's command exactly. Only the first
        matching tile in collection order is removed, so duplicates need one
        match each.
        """
        if not self.running:
            logger.debug('input ignored in %s', self.phase.value)
            return False
        field = self.host.text_input
        field.value = text
        typed = text.strip()
        if not typed:
            return False
        for i, tile in enumerate(self.tiles):
            if tile.command == typed:
                del self.tiles[i]
                self.score += 1
                self.host.score_label.show(self.score)
                field.clear()
                self.host.sounds.play(CUE_CORRECT)
                logger.debug('Matched %r, score=%d', typed, self.score)
                return True
        return False
