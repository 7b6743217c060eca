"""Tests for the HTTP API."""

import pytest
import sys
import os

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from fastapi.testclient import TestClient

import api


@pytest.fixture
def client():
    api.games.clear()
    with TestClient(api.app) as test_client:
        yield test_client
    api.games.clear()


def new_game(client, game_id="test", **kwargs):
    response = client.post("/api/new-game", json={"game_id": game_id, **kwargs})
    assert response.status_code == 200
    return response.json()


class TestNewGame:
    """Test game creation."""

    def test_standard_game(self, client):
        assert new_game(client) == {"status": "ok", "game_id": "test"}

        state = client.get("/api/board/test").json()

        assert state["width"] == 8
        assert state["height"] == 8
        assert state["side_to_move"] == "white"
        assert state["board"][0] == ["r", "n", "b", "q", "k", "b", "n", "r"]
        assert state["board"][7][4] == "K"
        assert state["board"][4] == [None] * 8
        assert len(state["legal_moves"]) == 20
        assert state["game_over"] is False
        assert state["can_undo"] is False

    def test_custom_setup(self, client):
        new_game(client, width=5, height=5, custom_setup={"a1": "K", "e5": "k", "c2": "P"})

        state = client.get("/api/board/test").json()

        assert state["width"] == 5
        assert state["board"][4][0] == "K"
        assert "c2c3" in state["legal_moves"]

    def test_black_to_move(self, client):
        new_game(client, side_to_move="black")

        state = client.get("/api/board/test").json()

        assert state["side_to_move"] == "black"
        assert "e7e5" in state["legal_moves"]

    def test_invalid_setup(self, client):
        response = client.post(
            "/api/new-game", json={"game_id": "bad", "custom_setup": {"z9": "K"}}
        )

        assert response.status_code == 400

    def test_size_without_setup(self, client):
        response = client.post("/api/new-game", json={"game_id": "small", "width": 5, "height": 5})

        assert response.status_code == 400
        assert client.get("/api/board/small").status_code == 404

    @pytest.mark.parametrize("depth", [0, 7])
    def test_depth_out_of_range(self, client, depth):
        response = client.post("/api/new-game", json={"game_id": "bad", "depth": depth})

        assert response.status_code == 422


class TestMoves:
    """Test playing moves."""

    def test_make_move(self, client):
        new_game(client)

        response = client.post("/api/move", json={"game_id": "test", "move": "e2e4"})

        assert response.json() == {"status": "ok", "move": "e2e4"}
        state = client.get("/api/board/test").json()
        assert state["side_to_move"] == "black"
        assert state["move_history"] == ["e2e4"]
        assert state["board"][4][4] == "P"
        assert state["can_undo"] is True

    def test_illegal_move(self, client):
        new_game(client)

        response = client.post("/api/move", json={"game_id": "test", "move": "e2e5"})

        assert response.status_code == 400

    def test_unknown_game(self, client):
        assert client.get("/api/board/missing").status_code == 404
        assert client.post("/api/move", json={"game_id": "missing", "move": "e2e4"}).status_code == 404
        assert client.post("/api/ai-move/missing").status_code == 404

    def test_ai_move(self, client):
        new_game(client, depth=1)
        legal = client.get("/api/board/test").json()["legal_moves"]

        response = client.post("/api/ai-move/test")

        assert response.status_code == 200
        body = response.json()
        assert body["move"] in legal
        assert body["nodes_searched"] > 0
        assert client.get("/api/board/test").json()["side_to_move"] == "black"

    def test_random_move_is_seeded(self, client):
        new_game(client, "first", seed=7)
        new_game(client, "second", seed=7)

        first = client.post("/api/random-move/first").json()["move"]
        second = client.post("/api/random-move/second").json()["move"]

        assert first == second


class TestUndo:
    """Test taking moves back."""

    def test_undo(self, client):
        new_game(client)
        client.post("/api/move", json={"game_id": "test", "move": "e2e4"})

        response = client.post("/api/undo/test")

        assert response.status_code == 200
        state = client.get("/api/board/test").json()
        assert state["side_to_move"] == "white"
        assert state["move_history"] == []
        assert state["can_undo"] is False

    def test_history_snapshot(self, client):
        new_game(client)
        client.post("/api/move", json={"game_id": "test", "move": "e2e4"})
        state = client.get("/api/board/test").json()

        client.post("/api/move", json={"game_id": "test", "move": "e7e5"})

        assert state["move_history"] == ["e2e4"]
        assert api.games["test"].move_history == ["e2e4", "e7e5"]

    def test_nothing_to_undo(self, client):
        new_game(client)

        assert client.post("/api/undo/test").status_code == 400


class TestGameOver:
    """Test finished games."""

    def test_stalemate(self, client):
        new_game(client, custom_setup={"a1": "K", "b3": "q", "h8": "k"})

        state = client.get("/api/board/test").json()

        assert state["game_over"] is True
        assert state["result"] == "stalemate"
        assert state["winner"] is None
        assert state["legal_moves"] == []

    def test_checkmate(self, client):
        new_game(client, custom_setup={"h1": "K", "g2": "P", "h2": "P", "a1": "r", "a8": "k"})

        state = client.get("/api/board/test").json()

        assert state["result"] == "checkmate"
        assert state["winner"] == "black"
        assert state["in_check"] is True

    def test_no_engine_move_when_over(self, client):
        new_game(client, custom_setup={"a1": "K", "b3": "q", "h8": "k"})

        assert client.post("/api/ai-move/test").status_code == 400
        assert client.post("/api/random-move/test").status_code == 400
