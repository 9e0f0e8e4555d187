from __future__ import annotations

from dataclasses import dataclass


@dataclass(eq=False)
class Tile:
    """A falling unit carrying one command. Only y changes after spawn."""
    x: float
    y: float
    command: str

    def bottom(self, tile_height: float) -> float:
        return self.y + tile_height

    def to_json(self) -> dict:
        return {"x": float(self.x), "y": float(self.y), "command": self.command}
