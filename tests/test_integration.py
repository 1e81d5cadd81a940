import json

import pytest
from fastapi.testclient import TestClient

from factories import create_joke, create_joke_input
from joke_server import main as server_main
from joke_server.config import get_settings
from joke_server.events import record_events
from joke_server.infrastructure import (
    Uuid,
    create_infrastructure,
    create_null_infrastructure,
)
from joke_server.main import create_app
from joke_server.storage.fs_db_client import FsDbClient, StorageError
from joke_server.storage.joke_repo import JokeRemoved, JokeRepo

infrastructure = create_null_infrastructure()
client = TestClient(create_app(infrastructure))


def create_client(**overrides):
    infrastructure = create_null_infrastructure(**overrides)
    return TestClient(create_app(infrastructure)), infrastructure


def test_health_check():
    """Test health endpoint"""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


def test_list_jokes():
    """Test retrieving all jokes"""
    joke1 = create_joke(jokeId="joke-111")
    joke2 = create_joke(jokeId="joke-222")
    client, _ = create_client(joke_repo=JokeRepo.create_null(jokes={
        joke1.joke_id: joke1,
        joke2.joke_id: joke2,
    }))

    response = client.get("/jokes")

    assert response.status_code == 200
    assert response.json() == {"jokes": [joke1.to_item(), joke2.to_item()]}


def test_create_joke():
    """Test storing a joke under a generated id"""
    joke_input = create_joke_input()
    client, infrastructure = create_client()
    joke_added_events = record_events(infrastructure.joke_repo.joke_added)

    response = client.post("/jokes", json=joke_input)

    assert response.status_code == 201
    data = response.json()
    assert data == {"joke": {**joke_input, "jokeId": "00000000-0000-0000-0000-000000000000"}}
    assert [event.joke.to_item() for event in joke_added_events.data()] == [data["joke"]]


def test_create_invalid_joke():
    """Test validation failures respond with 400"""
    response = client.post("/jokes", json={"question": "Q"})

    assert response.status_code == 400
    assert response.json() == {"message": "Joke data is invalid. No joke!"}


def test_create_malformed_body():
    """Test malformed JSON is treated as invalid joke data"""
    response = client.post(
        "/jokes",
        content="{not json",
        headers={"Content-Type": "application/json"}
    )

    assert response.status_code == 400


def test_show_joke():
    """Test retrieving a single joke"""
    joke = create_joke()
    client, _ = create_client(joke_repo=JokeRepo.create_null(jokes={joke.joke_id: joke}))

    response = client.get(f"/jokes/{joke.joke_id}")

    assert response.status_code == 200
    assert response.json() == {"joke": joke.to_item()}


def test_show_unknown_joke():
    """Test unknown ids respond with 404"""
    response = client.get("/jokes/does-not-exist")

    assert response.status_code == 404
    assert response.json() == {"message": "Not found"}


def test_update_joke():
    """Test replacing a joke"""
    joke_input = create_joke_input()
    client, infrastructure = create_client()
    joke_added_events = record_events(infrastructure.joke_repo.joke_added)

    response = client.put("/jokes/joke-111", json=joke_input)

    assert response.status_code == 204
    assert response.content == b""
    assert [event.joke.to_item() for event in joke_added_events.data()] == [
        {**joke_input, "jokeId": "joke-111"}
    ]


def test_delete_joke():
    """Test deleting responds with 204 whether or not the joke exists"""
    client, infrastructure = create_client()
    joke_removed_events = record_events(infrastructure.joke_repo.joke_removed)

    response = client.delete("/jokes/joke-111")

    assert response.status_code == 204
    assert joke_removed_events.data() == [JokeRemoved(joke_id="joke-111")]


def test_storage_failure():
    """Test unexpected errors respond with a generic 500"""
    fs_db_client = FsDbClient.create_null(error=StorageError("disk on fire"))
    client, _ = create_client(joke_repo=JokeRepo(fs_db_client))

    response = client.get("/jokes")

    assert response.status_code == 500
    assert response.json() == {"message": "Internal server error"}
    assert "disk on fire" not in response.text


def test_end_to_end_with_store_file(tmp_path):
    """Test the full flow against a real store file"""
    db_file = tmp_path / "jokes.json"
    infrastructure = create_infrastructure(str(db_file))
    infrastructure.uuid = Uuid.create_null(["joke-111", "joke-222"])
    client = TestClient(create_app(infrastructure))

    response = client.post("/jokes", json={"question": "Q1", "answer": "A1", "extra": "drop-me"})
    assert response.status_code == 201
    assert response.json() == {"joke": {"jokeId": "joke-111", "question": "Q1", "answer": "A1"}}

    response = client.post("/jokes", json={"question": "Q2", "answer": "A2"})
    assert response.status_code == 201

    response = client.put("/jokes/joke-111", json={"question": "Q1b", "answer": "A1b"})
    assert response.status_code == 204

    assert json.loads(db_file.read_text()) == {
        "joke-111": {"jokeId": "joke-111", "question": "Q1b", "answer": "A1b"},
        "joke-222": {"jokeId": "joke-222", "question": "Q2", "answer": "A2"},
    }

    response = client.delete("/jokes/joke-111")
    assert response.status_code == 204

    response = client.get("/jokes/joke-111")
    assert response.status_code == 404

    response = client.get("/jokes")
    assert response.json() == {"jokes": [{"jokeId": "joke-222", "question": "Q2", "answer": "A2"}]}


def test_main_requires_db_file(monkeypatch):
    """Test the server refuses to start without DB_FILE"""
    monkeypatch.delenv("DB_FILE", raising=False)
    get_settings.cache_clear()

    with pytest.raises(SystemExit) as exc_info:
        server_main.main()

    assert exc_info.value.code == 1
    get_settings.cache_clear()


def test_main_starts_uvicorn(monkeypatch, tmp_path):
    """Test the server starts on the configured host and port"""
    calls = []
    monkeypatch.setenv("DB_FILE", str(tmp_path / "jokes.json"))
    monkeypatch.setenv("PORT", "4321")
    monkeypatch.setattr("uvicorn.run", lambda app, host, port: calls.append((host, port)))
    get_settings.cache_clear()

    server_main.main()

    assert calls == [("0.0.0.0", 4321)]
    get_settings.cache_clear()
