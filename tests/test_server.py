import pytest
from fastapi.testclient import TestClient

from boggle.lexicon import Lexicon
from boggle.server import create_app
from boggle.settings import settings

CARE_BOARD = ["C", "A", "R", "E"]


@pytest.fixture
def client():
    return TestClient(create_app(lexicon=Lexicon(["cat", "car", "care", "race", "acre"])))


@pytest.fixture(autouse=True)
def _restore_settings():
    saved = (settings.MIN_WORD_LENGTH, settings.MAX_RESULTS, settings.LOG_LEVEL, settings.DEBUG)
    yield
    settings.MIN_WORD_LENGTH, settings.MAX_RESULTS, settings.LOG_LEVEL, settings.DEBUG = saved


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok", "lexicon_loaded": True, "lexicon_size": 5}


def test_solve(client):
    resp = client.post("/solve", json={"board": CARE_BOARD, "min_length": 3})
    assert resp.status_code == 200
    data = resp.json()
    assert data["grid_size"] == 2
    assert data["board"] == [["C", "A"], ["R", "E"]]
    # Longest first, then alphabetical
    assert data["words"] == ["acre", "care", "race", "car"]
    assert data["total_words"] == 4
    assert "solve" in data["stage_timings"]


def test_solve_caps_results(client):
    settings.MAX_RESULTS = 2
    data = client.post("/solve", json={"board": CARE_BOARD}).json()
    assert data["words"] == ["acre", "care"]
    assert data["word_count"] == 2
    assert data["total_words"] == 4


def test_solve_bad_board(client):
    resp = client.post("/solve", json={"board": ["C", "A", "R"]})
    assert resp.status_code == 400
    assert "perfect-square" in resp.json()["detail"]


def test_solve_bad_min_length(client):
    resp = client.post("/solve", json={"board": CARE_BOARD, "min_length": 0})
    assert resp.status_code == 400


def test_solve_without_lexicon():
    client = TestClient(create_app())
    resp = client.post("/solve", json={"board": CARE_BOARD})
    assert resp.status_code == 503
    assert client.get("/health").json()["lexicon_loaded"] is False


def test_locate(client):
    resp = client.post("/locate", json={"board": CARE_BOARD, "word": "care"})
    assert resp.json() == {"word": "care", "found": True, "path": [0, 1, 2, 3]}

    resp = client.post("/locate", json={"board": CARE_BOARD, "word": "cat"})
    assert resp.json() == {"word": "cat", "found": False, "path": []}


def test_locate_empty_word(client):
    resp = client.post("/locate", json={"board": CARE_BOARD, "word": ""})
    assert resp.status_code == 400


def test_score(client):
    resp = client.post("/score", json={"board": CARE_BOARD, "words": ["care", "cat", "car"], "min_length": 3})
    assert resp.json() == {"score": 3, "min_length": 3}


def test_board_png(client):
    resp = client.post("/board.png", json={"board": CARE_BOARD, "word": "care"})
    assert resp.status_code == 200
    assert resp.headers["content-type"] == "image/png"
    assert resp.content[:4] == b"\x89PNG"


def test_settings_round_trip(client):
    data = client.get("/api/settings").json()
    assert data["field_types"]["MIN_WORD_LENGTH"] == "int"

    resp = client.post("/api/settings", json={"MIN_WORD_LENGTH": 4})
    assert resp.status_code == 200
    assert resp.json()["updated"]["MIN_WORD_LENGTH"] == 4

    data = client.post("/solve", json={"board": CARE_BOARD}).json()
    assert data["words"] == ["acre", "care", "race"]


def test_settings_errors(client):
    resp = client.post("/api/settings", json={"PORT": 1})
    assert resp.status_code == 400
    assert "PORT" in resp.json()["errors"]


def test_solve_debug_includes_paths(client):
    settings.DEBUG = True
    data = client.post("/solve", json={"board": CARE_BOARD, "min_length": 4}).json()
    assert data["paths"]["care"] == [0, 1, 2, 3]
    assert set(data["paths"]) == {"acre", "care", "race"}


def test_board_export(client):
    resp = client.post("/board", json={"board": ["Qu", "A", "R", "E"]})
    assert resp.json() == {"size": 2, "rows": [["Qu", "A"], ["R", "E"]], "tiles": ["Qu", "A", "R", "E"]}


def test_oversized_board_rejected(client):
    resp = client.post("/solve", json={"board": ["a"] * 32 * 32})
    assert resp.status_code == 400
    assert "largest supported" in resp.json()["detail"]
