from __future__ import annotations

import logging
import os
import threading
import uuid
from collections import OrderedDict
from typing import Any, Dict, List, Optional, Tuple

from flask import Flask, jsonify, request

from game import (
    Board,
    Coord,
    GameState,
    Game,
    LogEntry,
    MoveResult,
    OthelloError,
    GameOver,
    BLACK,
    WHITE,
    SIZE,
    initial_state,
    legal_moves,
    apply_move,
    apply_pass,
    score,
    is_terminal,
    winner,
    must_pass,
)

logger = logging.getLogger(__name__)

MAX_GAMES = int(os.getenv("OTHELLO_MAX_GAMES", "256"))
LOG_LEVEL = os.getenv("OTHELLO_LOG_LEVEL", "INFO").upper()

app = Flask(__name__)


# ---------- JSON codec ----------

def board_to_json(b: Board) -> Dict[str, Any]:
    return {"size": SIZE, "grid": list(b.grid)}


def board_from_json(obj: Dict[str, Any]) -> Board:
    if not isinstance(obj, dict):
        raise ValueError("board must be an object")
    size = int(obj.get("size", SIZE))
    if size != SIZE:
        raise ValueError(f"only {SIZE}x{SIZE} boards are supported")
    return Board(grid=tuple(str(x) for x in obj["grid"]))


def state_to_json(s: GameState) -> Dict[str, Any]:
    sc = score(s.board)
    return {
        "board": board_to_json(s.board),
        "current": s.current,
        "moveNumber": int(s.move_number),
        "terminal": bool(s.terminal),
        "result": s.result,
        "mustPass": must_pass(s),
        "score": {"black": sc.black, "white": sc.white},
    }


def json_to_state(obj: Dict[str, Any]) -> GameState:
    if not isinstance(obj, dict):
        raise ValueError("state must be an object")
    board = board_from_json(obj["board"])
    current = str(obj.get("current", BLACK))
    if current not in (BLACK, WHITE):
        raise ValueError(f"invalid current player: {current!r}")
    move_number = int(obj.get("moveNumber", 1))
    if move_number < 1:
        raise ValueError("moveNumber must be >= 1")
    # terminal/result are derived from the board, never trusted from the client
    if is_terminal(board):
        return GameState(board, current, move_number, True, winner(board))
    return GameState(board, current, move_number)


def _moves_json(moves: List[Coord]) -> List[List[int]]:
    return [[int(r), int(c)] for (r, c) in moves]


def _status_for(error: Optional[str]) -> int:
    return 409 if error == GameOver.__name__ else 400


def _parse_move(raw: Any) -> Tuple[int, int]:
    if not isinstance(raw, (list, tuple)) or len(raw) != 2:
        raise ValueError("move must be [row, col]")
    return int(raw[0]), int(raw[1])


def _json_body() -> Dict[str, Any]:
    # Anything but a JSON object (arrays, scalars, invalid JSON) reads as an empty body
    body = request.get_json(force=True, silent=True)
    return body if isinstance(body, dict) else {}


def _read_state(body: Dict[str, Any]) -> Tuple[Optional[GameState], Any]:
    s_in = body.get("state")
    if not isinstance(s_in, dict):
        return None, (jsonify({"ok": False, "error": "state required"}), 400)
    try:
        return json_to_state(s_in), None
    except (KeyError, TypeError, ValueError) as e:
        return None, (jsonify({"ok": False, "error": f"bad state: {e}"}), 400)


# ---------- Stateless game API (client carries the state) ----------

@app.post("/api/new")
def api_new() -> Any:
    state = initial_state()
    return jsonify({
        "ok": True,
        "state": state_to_json(state),
        "legalMoves": _moves_json(legal_moves(state.board, state.current)),
    })


@app.post("/api/legal")
def api_legal() -> Any:
    body = _json_body()
    state, err = _read_state(body)
    if err:
        return err
    return jsonify({"ok": True, "legalMoves": _moves_json(legal_moves(state.board, state.current))})


@app.post("/api/move")
def api_move() -> Any:
    body = _json_body()
    state, err = _read_state(body)
    if err:
        return err
    legal = _moves_json(legal_moves(state.board, state.current))
    try:
        move = _parse_move(body.get("move"))
    except (TypeError, ValueError) as e:
        return jsonify({"ok": False, "error": str(e), "legalMoves": legal}), 400
    try:
        next_state, flipped = apply_move(state, move)
    except OthelloError as e:
        return jsonify({"ok": False, "error": type(e).__name__, "message": str(e), "legalMoves": legal}), _status_for(type(e).__name__)
    return jsonify({
        "ok": True,
        "state": state_to_json(next_state),
        "flipped": _moves_json(flipped),
        "legalMoves": _moves_json(legal_moves(next_state.board, next_state.current)),
    })


@app.post("/api/pass")
def api_pass() -> Any:
    body = _json_body()
    state, err = _read_state(body)
    if err:
        return err
    try:
        next_state = apply_pass(state)
    except OthelloError as e:
        legal = _moves_json(legal_moves(state.board, state.current))
        return jsonify({"ok": False, "error": type(e).__name__, "message": str(e), "legalMoves": legal}), _status_for(type(e).__name__)
    return jsonify({
        "ok": True,
        "state": state_to_json(next_state),
        "legalMoves": _moves_json(legal_moves(next_state.board, next_state.current)),
    })


# ---------- Session API (server owns one Game per id) ----------

_games: "OrderedDict[str, Game]" = OrderedDict()
_games_lock = threading.Lock()


def _create_game() -> Tuple[str, Game]:
    game_id = uuid.uuid4().hex
    g = Game()
    with _games_lock:
        _games[game_id] = g
        while len(_games) > MAX_GAMES:
            evicted, _ = _games.popitem(last=False)
            logger.info("Evicted game %s (registry full)", evicted)
    return game_id, g


def _get_game(game_id: str) -> Optional[Game]:
    with _games_lock:
        return _games.get(game_id)


def _log_json(log: Tuple[LogEntry, ...]) -> List[Dict[str, Any]]:
    return [
        {
            "kind": e.kind,
            "moveNumber": e.move_number,
            "player": e.player,
            "position": list(e.position) if e.position else None,
            "flipped": e.flipped,
            "result": e.result,
            "error": e.error,
        }
        for e in log
    ]


def _snapshot(game_id: str, g: Game, res: Optional[MoveResult] = None) -> Dict[str, Any]:
    # Commands carry the state and log they committed; plain reads take the game lock.
    if res is None:
        state, legal, log = g.snapshot()
    else:
        state, log = res.state, res.log
        legal = legal_moves(state.board, state.current)
    out: Dict[str, Any] = {
        "ok": True if res is None else res.ok,
        "id": game_id,
        "state": state_to_json(state),
        "legalMoves": _moves_json(legal),
        "log": _log_json(log),
    }
    if res is not None:
        out["flipped"] = _moves_json(res.flipped)
        if not res.ok:
            out["error"] = res.error
            out["message"] = res.message
    return out


def _not_found(game_id: str) -> Any:
    return jsonify({"ok": False, "error": f"unknown game {game_id}"}), 404


@app.post("/api/games")
def api_games_create() -> Any:
    game_id, g = _create_game()
    logger.debug("Created game %s", game_id)
    return jsonify(_snapshot(game_id, g)), 201


@app.get("/api/games/<game_id>")
def api_games_get(game_id: str) -> Any:
    g = _get_game(game_id)
    if g is None:
        return _not_found(game_id)
    return jsonify(_snapshot(game_id, g))


@app.delete("/api/games/<game_id>")
def api_games_delete(game_id: str) -> Any:
    with _games_lock:
        g = _games.pop(game_id, None)
    if g is None:
        return _not_found(game_id)
    return jsonify({"ok": True, "id": game_id})


@app.post("/api/games/<game_id>/move")
def api_games_move(game_id: str) -> Any:
    g = _get_game(game_id)
    if g is None:
        return _not_found(game_id)
    body = _json_body()
    try:
        row, col = _parse_move(body.get("move"))
    except (TypeError, ValueError) as e:
        return jsonify({"ok": False, "error": str(e)}), 400
    res = g.attempt_move(row, col)
    if not res.ok:
        return jsonify(_snapshot(game_id, g, res)), _status_for(res.error)
    return jsonify(_snapshot(game_id, g, res))


@app.post("/api/games/<game_id>/pass")
def api_games_pass(game_id: str) -> Any:
    g = _get_game(game_id)
    if g is None:
        return _not_found(game_id)
    res = g.attempt_pass()
    if not res.ok:
        return jsonify(_snapshot(game_id, g, res)), _status_for(res.error)
    return jsonify(_snapshot(game_id, g, res))


@app.post("/api/games/<game_id>/reset")
def api_games_reset(game_id: str) -> Any:
    g = _get_game(game_id)
    if g is None:
        return _not_found(game_id)
    res = g.reset()
    return jsonify(_snapshot(game_id, g, res))


# Entrypoint for "python app.py"
if __name__ == "__main__":
    logging.basicConfig(
        level=getattr(logging, LOG_LEVEL, logging.INFO),
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    )
    debug = os.getenv("FLASK_DEBUG", os.getenv("DEBUG", "0")).lower() in ("1", "true", "yes", "on")
    app.run(host="0.0.0.0", port=int(os.getenv("PORT", "5000")), debug=debug)
