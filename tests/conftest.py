"""
Shared pytest fixtures for the tournament engine tests.

Running tests:
    pytest tests/
"""
import pytest
import random
import sys
import os

# Add src directory to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from core.models import Player, Team
from core.session import TournamentSession
from core.storage import MemoryStore


PLAYER_NAMES = ["Ann", "Bob", "Cid", "Dee", "Eve", "Fay", "Gus", "Hal"]


@pytest.fixture
def player_names():
    """Eight distinct player names."""
    return list(PLAYER_NAMES)


@pytest.fixture
def players():
    """Eight players with intake ids P1..P8."""
    return [Player(id=f"P{i}", name=name) for i, name in enumerate(PLAYER_NAMES, start=1)]


@pytest.fixture
def player_ids(players):
    return [p.id for p in players]


@pytest.fixture
def drafted_teams():
    """Four full teams, Team 1..Team 4."""
    return [
        Team(name="Team 1", players=["P1", "P2"]),
        Team(name="Team 2", players=["P3", "P4"]),
        Team(name="Team 3", players=["P5", "P6"]),
        Team(name="Team 4", players=["P7", "P8"]),
    ]


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def session(store):
    """A session with a seeded shuffle for reproducible schedules."""
    return TournamentSession(store, rng=random.Random(42))


@pytest.fixture
def started_session(session, player_names):
    session.start(player_names)
    return session


@pytest.fixture
def client():
    """Create a Flask test client."""
    from app import app
    app.config['TESTING'] = True
    with app.test_client() as client:
        yield client


@pytest.fixture
def temp_data_dir(tmp_path, monkeypatch):
    """Point the app's data directory at a temporary folder."""
    import app as app_module

    data_dir = tmp_path / "data"
    data_dir.mkdir()
    monkeypatch.setattr(app_module, 'DATA_DIR', str(data_dir))
    return data_dir
