import pytest
from fastapi.testclient import TestClient

from cards.functions import make_card_pairs
from cards.models import Match, MatchResult, PlayerRef
from main import app
from settings import Settings, get_settings
from storage import get_tournaments


def make_players(n: int):
    return [PlayerRef(id=f"u{i}", name=f"Player {i}") for i in range(1, n + 1)]


@pytest.fixture
def pairs():
    """Pairs A, K, Q, J in seed order."""
    p = make_players(8)
    return make_card_pairs([(p[0], p[1]), (p[2], p[3]), (p[4], p[5]), (p[6], p[7])])


@pytest.fixture
def pair_map(pairs):
    return {pair.label: pair for pair in pairs}


@pytest.fixture
def scenario_a_round1(pair_map):
    """Round 1 of the reference scenario: A beats K 6-3, J beats Q 6-4."""
    return [
        Match(id="m-r1-c1", round=1, court=1, team_a=pair_map["A"], team_b=pair_map["K"]).with_result(
            MatchResult(score_a=6, score_b=3)
        ),
        Match(id="m-r1-c2", round=1, court=2, team_a=pair_map["Q"], team_b=pair_map["J"]).with_result(
            MatchResult(score_a=4, score_b=6)
        ),
    ]


@pytest.fixture
def settings():
    return Settings()


@pytest.fixture
def client(settings):
    store = {}
    app.dependency_overrides[get_tournaments] = lambda: store
    app.dependency_overrides[get_settings] = lambda: settings
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def pair_payload():
    p = make_players(8)
    return [
        {"players": [p[i].to_dict(), p[i + 1].to_dict()]}
        for i in range(0, 8, 2)
    ]
