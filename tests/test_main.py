import json

from fastapi.testclient import TestClient

from snakeio.main import app


def receive_state(ws, mode, limit=50):
    for _ in range(limit):
        msg = ws.receive_json()
        if msg["type"] == "state" and msg["mode"] == mode:
            return msg
    raise AssertionError(f"no {mode} state received")


def test_websocket_session():
    with TestClient(app) as client:
        with client.websocket_connect("/ws") as ws:
            welcome = ws.receive_json()
            assert welcome == {"type": "welcome", "grid": [30, 30], "tile": 20}
            state = ws.receive_json()
            assert state["type"] == "state"
            assert state["mode"] == "title"

            ws.send_text("not json")
            ws.send_text(json.dumps({"type": "key", "key": "Enter"}))
            state = receive_state(ws, "playing")
            assert len(state["snake"]) == 3
            assert len(state["foods"]) >= 2

            ws.send_text(json.dumps({"type": "key", "key": " "}))
            state = receive_state(ws, "paused")
            assert state["high_score"] >= state["score"]


def test_binary_frames_are_ignored():
    with TestClient(app) as client:
        with client.websocket_connect("/ws") as ws:
            assert ws.receive_json()["type"] == "welcome"
            assert ws.receive_json()["type"] == "state"
            ws.send_bytes(b"\x00\x01")
            ws.send_text(json.dumps({"type": "key", "key": "Enter"}))
            # the session is shared, so the game may already be paused
            ws.send_text(json.dumps({"type": "key", "key": "Enter"}))
            receive_state(ws, "playing")
