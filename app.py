from __future__ import annotations

import os
import sys
from typing import Any, Optional, Tuple

from flask import Flask, jsonify, request, send_from_directory

# Ensure package imports work when executed directly from repo root or as module
if __package__ in (None, ""):
    sys.path.insert(0, os.path.abspath(os.path.dirname(__file__)))

from shellfall_core.config import MAX_TICK_MS, configure_logging
from shellfall_core.commands import SHELL_COMMANDS
from shellfall_core.host import InitializationError
from shellfall_core.session import GameSession
from shellfall_core.store import SessionStore, UnknownSessionError
from shellfall_core.view import session_to_json

# Serve static assets from ./static (explicit absolute path)
STATIC_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), "static"))
app = Flask(__name__, static_url_path="/static", static_folder=STATIC_DIR)

sessions = SessionStore()


def _error(message: str, status: int) -> Tuple[Any, int]:
    return jsonify({"ok": False, "error": message}), status


def _session_id(body: dict) -> Optional[str]:
    sid = body.get("sessionId")
    if not isinstance(sid, str) or not sid:
        return None
    return sid


# ---------- Static routes ----------

@app.get("/")
def index() -> Any:
    return send_from_directory(app.static_folder, "index.html")


@app.get("/main.js")
def main_js() -> Any:
    resp = send_from_directory(app.static_folder, "main.js")
    resp.headers["Content-Type"] = "application/javascript; charset=utf-8"
    return resp


@app.get("/styles.css")
def styles_css() -> Any:
    resp = send_from_directory(app.static_folder, "styles.css")
    resp.headers["Content-Type"] = "text/css; charset=utf-8"
    return resp


# ---------- Game API (used by main.js) ----------

@app.get("/api/commands")
def api_commands() -> Any:
    return jsonify({"ok": True, "commands": list(SHELL_COMMANDS)})


@app.post("/api/new")
def api_new() -> Any:
    body = request.get_json(force=True, silent=True) or {}
    seed = body.get("seed", None)
    if seed is not None and (isinstance(seed, bool) or not isinstance(seed, int)):
        return _error("seed must be an integer", 400)
    try:
        session = GameSession(seed=seed)
        session.start()
    except InitializationError as e:
        app.logger.error("Session init failed: %s", e)
        return _error(str(e), 500)
    sid = sessions.create(session)
    return jsonify({"ok": True, "sessionId": sid, "view": session_to_json(session)})


@app.post("/api/tick")
def api_tick() -> Any:
    body = request.get_json(force=True, silent=True) or {}
    sid = _session_id(body)
    if sid is None:
        return _error("sessionId required", 400)
    dt = body.get("dt", 0)
    if isinstance(dt, bool) or not isinstance(dt, (int, float)) or dt < 0:
        return _error("dt must be a non-negative number", 400)
    # A backgrounded tab resumes with a huge dt; clamp so it is one long frame, not a burst of spawns
    dt = min(float(dt), float(MAX_TICK_MS))
    try:
        with sessions.use(sid) as session:
            frames = session.tick(dt)
            view = session_to_json(session)
    except UnknownSessionError:
        return _error("unknown session", 404)
    return jsonify({"ok": True, "frames": frames, "view": view})


@app.post("/api/input")
def api_input() -> Any:
    body = request.get_json(force=True, silent=True) or {}
    sid = _session_id(body)
    if sid is None:
        return _error("sessionId required", 400)
    text = body.get("text")
    if not isinstance(text, str):
        return _error("text must be a string", 400)
    try:
        with sessions.use(sid) as session:
            matched = session.handle_input(text)
            view = session_to_json(session)
    except UnknownSessionError:
        return _error("unknown session", 404)
    return jsonify({"ok": True, "matched": matched, "view": view})


@app.post("/api/restart")
def api_restart() -> Any:
    body = request.get_json(force=True, silent=True) or {}
    sid = _session_id(body)
    if sid is None:
        return _error("sessionId required", 400)
    try:
        with sessions.use(sid) as session:
            session.restart()
            view = session_to_json(session)
    except UnknownSessionError:
        return _error("unknown session", 404)
    app.logger.info("Session %s restarted", sid)
    return jsonify({"ok": True, "view": view})


# Entrypoint for "python app.py"
if __name__ == "__main__":
    configure_logging()
    debug = os.getenv("FLASK_DEBUG", os.getenv("DEBUG", "0")).lower() in ("1", "true", "yes", "on")
    port = int(os.getenv("PORT", "5000"))
    app.run(host=os.getenv("HOST", "127.0.0.1"), port=port, debug=debug)
