from __future__ import annotations

from typing import Any, Dict

from .session import GameSession


def session_to_json(session: GameSession, drain: bool = True) -> Dict[str, Any]:
    """
    Snapshot of everything the page needs to repaint after a call.

    With drain=True the recorded draw ops and queued sound cues are handed
    over and forgotten, so each one reaches the browser exactly once.
    """
    host = session.host
    canvas = host.canvas
    if drain:
        ops = canvas.drain()
        cues = host.sounds.drain()
    else:
        ops = canvas.ops
        cues = []
    return {
        "phase": session.phase.value,
        "running": session.running,
        "score": int(session.score),
        "scoreText": host.score_label.text,
        "fallSpeed": round(float(session.fall_speed), 6),
        "frame": int(session.frame_count),
        "clockMs": float(session.clock.now_ms),
        "tiles": [t.to_json() for t in session.tiles],
        "canvas": {"width": canvas.width, "height": canvas.height},
        "draw": ops,
        "sounds": cues,
        "input": {
            "value": host.text_input.value,
            "enabled": bool(host.text_input.enabled),
            "focused": bool(host.text_input.focused),
        },
    }
