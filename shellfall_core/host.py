from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)

CUE_CORRECT = 'correct'
CUE_GAME_OVER = 'gameover'

DrawOp = Dict[str, Any]


class InitializationError(RuntimeError):
    """Raised when the rendering or input resources a session needs are missing."""


class Canvas:
    """
    Drawing surface that records operations instead of painting pixels.

    The browser replays the recorded list onto a real 2D canvas context,
    so every op maps to one context call (clearRect, fillRect, fillText).
    """

    def __init__(self, width: int, height: int) -> None:
        self.width = int(width)
        self.height = int(height)
        self._ops: List[DrawOp] = []

    def clear(self) -> None:
        self._ops.append({"op": "clear", "x": 0, "y": 0, "w": self.width, "h": self.height})

    def fill_rect(self, x: float, y: float, w: float, h: float, color: str) -> None:
        self._ops.append({"op": "rect", "x": x, "y": y, "w": w, "h": h, "color": color})

    def fill_text(self, text: str, x: float, y: float, color: str, font: str, align: str = 'left') -> None:
        self._ops.append({"op": "text", "text": text, "x": x, "y": y, "color": color, "font": font, "align": align})

    @property
    def ops(self) -> List[DrawOp]:
        return list(self._ops)

    def drain(self) -> List[DrawOp]:
        """Returns the ops recorded since the last drain and forgets them."""
        ops, self._ops = self._ops, []
        return ops


class TextInput:
    """State of the single command text field."""

    def __init__(self) -> None:
        self.value = ''
        self.enabled = False
        self.focused = False

    def clear(self) -> None:
        self.value = ''

    def enable(self) -> None:
        self.enabled = True

    def disable(self) -> None:
        self.enabled = False
        self.focused = False

    def focus(self) -> None:
        if self.enabled:
            self.focused = True


class ScoreLabel:
    def __init__(self) -> None:
        self.text = '0'

    def show(self, score: int) -> None:
        self.text = str(score)


class SoundCues:
    """Fire-and-forget audio triggers. Played names queue up until the host drains them."""

    def __init__(self) -> None:
        self._queue: List[str] = []

    def play(self, name: str) -> None:
        logger.debug('cue %s', name)
        self._queue.append(name)

    def drain(self) -> List[str]:
        queued, self._queue = self._queue, []
        return queued


@dataclass
class HostBindings:
    """Everything outside the engine a session talks to."""
    canvas: Optional[Canvas]
    text_input: Optional[TextInput]
    score_label: Optional[ScoreLabel]
    sounds: Optional[SoundCues]

    @classmethod
    def headless(cls, width: int, height: int) -> 'HostBindings':
        return cls(canvas=Canvas(width, height), text_input=TextInput(), score_label=ScoreLabel(), sounds=SoundCues())

    def validate(self, tile_width: int, tile_height: int) -> None:
        missing = [name for name in ('canvas', 'text_input', 'score_label', 'sounds') if getattr(self, name) is None]
        if missing:
            raise InitializationError(f"missing host resources: {', '.join(missing)}")
        assert self.canvas is not None
        if self.canvas.width < tile_width or self.canvas.height < tile_height:
            raise InitializationError(
                f'canvas {self.canvas.width}x{self.canvas.height} cannot fit a {tile_width}x{tile_height} tile'
            )
