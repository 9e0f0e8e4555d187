"""
Shellfall core Python package.

Pure-logic engine for the falling shell-command typing game. Nothing in
here touches the browser; the Flask app in app.py drives it.
Modules:
- config.py: constants and environment overrides
- commands.py: CommandPool
- tile.py: Tile
- scheduler.py: TaskHandle, FrameClock
- host.py: recording canvas, text input, score label, sound cues
- render.py: tile and overlay drawing
- session.py: GameSession (spawner, difficulty, update loop, input matcher)
- view.py: JSON snapshot of a session
- store.py: SessionStore for the web host
- cli.py: headless simulation driver
"""
