from __future__ import annotations

import logging
import os
import random
from typing import Any, Dict, Optional

from flask import Flask, jsonify, request

from game import (
    Board,
    InvalidMove,
    Move,
    Player,
    board_from_file,
    deal_board,
    find_optimal_move,
    legal_moves,
    move_for_square,
    nim_sum,
    take_best_move,
)
from squaregame_core.config import SETTINGS

log = logging.getLogger(__name__)

app = Flask(__name__)


# ---------- JSON <-> Board ----------

def state_to_json(b: Board) -> Dict[str, Any]:
    return {
        "rows": [
            {"length": int(row.original_length), "consumedBy": [p.value for p in row.consumed_by]}
            for row in b.rows
        ],
        "turn": b.current_turn.value,
    }


def json_to_state(obj: Dict[str, Any]) -> Board:
    """Rebuilds a Board from its JSON form. Raises KeyError/TypeError/ValueError on malformed input."""
    rows_in = obj["rows"]
    board = Board.from_lengths([int(r["length"]) for r in rows_in], Player(str(obj.get("turn", Player.FIRST.value))))
    for row, r in zip(board.rows, rows_in):
        consumed = [Player(str(p)) for p in r.get("consumedBy", [])]
        if len(consumed) > row.original_length:
            raise ValueError(f"row of length {row.original_length} cannot have {len(consumed)} squares eaten")
        row.consumed_by.extend(consumed)
    return board


def _payload(b: Board, **extra: Any) -> Dict[str, Any]:
    winner = b.winner()
    out: Dict[str, Any] = {
        "ok": True,
        "state": state_to_json(b),
        "legalMoves": [m.as_pair() for m in legal_moves(b)],
        "nimSum": nim_sum(b.remaining_counts()),
        "winner": winner.value if winner else None,
    }
    out.update(extra)
    return out


def _bad_request(msg: str, status: int = 400, **extra: Any) -> Any:
    log.warning("Rejected %s: %s", request.path, msg)
    body = {"ok": False, "error": msg}
    body.update(extra)
    return jsonify(body), status


def _json_body() -> Optional[Dict[str, Any]]:
    """The request body as a dict; None when it is JSON but not an object."""
    body = request.get_json(force=True, silent=True)
    if body is None:
        return {}
    return body if isinstance(body, dict) else None


def _state_from_body(body: Dict[str, Any]) -> Optional[Board]:
    s_in = body.get("state")
    if not isinstance(s_in, dict):
        return None
    return json_to_state(s_in)


# ---------- Game API ----------

@app.post("/api/new")
def api_new() -> Any:
    body = _json_body()
    if body is None:
        return _bad_request("body must be a JSON object")
    try:
        turn = Player(str(body.get("turn", Player.FIRST.value)))
        if "lengths" in body:
            board = Board.from_lengths([int(n) for n in body["lengths"]], turn)
        elif SETTINGS.layout and "rows" not in body:
            board = board_from_file(SETTINGS.layout, turn)
        else:
            rows = int(body.get("rows", SETTINGS.rows))
            max_len = int(body.get("maxRowLength", SETTINGS.max_row_length))
            seed = body.get("seed", None)
            board = deal_board(rows, max_len, turn, seed=seed)
    except (TypeError, ValueError) as e:
        return _bad_request(f"bad parameters: {e}")
    except FileNotFoundError:
        return _bad_request(f"layout file not found: {SETTINGS.layout}", 500)
    return jsonify(_payload(board))


@app.post("/api/legal")
def api_legal() -> Any:
    body = _json_body()
    if body is None:
        return _bad_request("body must be a JSON object")
    try:
        board = _state_from_body(body)
    except (KeyError, TypeError, ValueError) as e:
        return _bad_request(f"bad state: {e}")
    if board is None:
        return _bad_request("state required")
    return jsonify(_payload(board))


@app.post("/api/move")
def api_move() -> Any:
    body = _json_body()
    if body is None:
        return _bad_request("body must be a JSON object")
    try:
        board = _state_from_body(body)
        if board is None:
            return _bad_request("state required")
        if "move" in body:
            row_index, amount = body["move"]
            move: Optional[Move] = Move(int(row_index), int(amount))
        else:
            move = move_for_square(board, int(body["row"]), int(body["square"]))
    except InvalidMove as e:
        return _bad_request(f"Illegal move: {e}", legalMoves=[m.as_pair() for m in legal_moves(board)])
    except (KeyError, TypeError, ValueError) as e:
        return _bad_request(f"bad state: {e}")
    if move is None:
        return _bad_request("Square already eaten", legalMoves=[m.as_pair() for m in legal_moves(board)])
    try:
        board.apply(move)
    except InvalidMove as e:
        return _bad_request(f"Illegal move: {e}", legalMoves=[m.as_pair() for m in legal_moves(board)])
    board.next_turn()
    return jsonify(_payload(board, move=move.as_pair()))


@app.post("/api/ai")
def api_ai() -> Any:
    body = _json_body()
    if body is None:
        return _bad_request("body must be a JSON object")
    try:
        board = _state_from_body(body)
    except (KeyError, TypeError, ValueError) as e:
        return _bad_request(f"bad state: {e}")
    if board is None:
        return _bad_request("state required")
    if board.is_empty():
        return _bad_request("Game is over", 409)
    try:
        rng = random.Random(body.get("seed", None))
    except (TypeError, ValueError) as e:
        return _bad_request(f"bad seed: {e}")
    move = take_best_move(board, rng)
    board.next_turn()
    return jsonify(_payload(board, move=move.as_pair()))


@app.post("/api/hint")
def api_hint() -> Any:
    body = _json_body()
    if body is None:
        return _bad_request("body must be a JSON object")
    try:
        board = _state_from_body(body)
    except (KeyError, TypeError, ValueError) as e:
        return _bad_request(f"bad state: {e}")
    if board is None:
        return _bad_request("state required")
    best = find_optimal_move(board)
    return jsonify({
        "ok": True,
        "move": best.as_pair() if best else None,
        "nimSum": nim_sum(board.remaining_counts()),
    })


# Entrypoint for "python app.py"
if __name__ == "__main__":
    logging.basicConfig(level=SETTINGS.log_level, format="%(levelname)s %(name)s: %(message)s")
    debug = os.getenv("FLASK_DEBUG", os.getenv("DEBUG", "0")).lower() in ("1", "true", "yes", "on")
    app.run(host="0.0.0.0", port=int(os.getenv("PORT", "5000")), debug=debug)
