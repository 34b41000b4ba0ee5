import pytest

from cards.controller import TiePolicy
from settings import Settings


def _create(client, pair_payload, name="Friday Night 8-Mixer"):
    resp = client.post("/cards/tournament/create", json={"name": name, "pairs": pair_payload})
    assert resp.status_code == 201
    return resp.json()


def _match_id(data, round_number, court):
    return next(m["id"] for m in data["matches"] if m["round"] == round_number and m["court"] == court)


def _submit(client, tid, match_id, score_a, score_b, golden=False):
    return client.post(
        f"/cards/tournament/{tid}/matches/{match_id}/result",
        json={"score_a": score_a, "score_b": score_b, "is_golden_point": golden},
    )


def test_create_seeds_round_one(client, pair_payload):
    data = _create(client, pair_payload)

    assert data["name"] == "Friday Night 8-Mixer"
    assert data["current_round"] == 1
    assert data["phase"] == "round1_active"
    assert [p["label"] for p in data["pairs"]] == ["A", "K", "Q", "J"]
    assert [p["name"] for p in data["pairs"]] == ["Pair Ace", "Pair King", "Pair Queen", "Pair Jack"]
    assert len(data["matches"]) == 2
    assert all(m["status"] == "pending" for m in data["matches"])


def test_create_keeps_supplied_ids_and_names(client, pair_payload):
    pair_payload[0]["id"] = "team-1"
    pair_payload[0]["name"] = "Los Lobos"
    data = _create(client, pair_payload)
    assert data["pairs"][0]["id"] == "team-1"
    assert data["pairs"][0]["name"] == "Los Lobos"


def test_create_rejects_wrong_pair_count(client, pair_payload):
    resp = client.post("/cards/tournament/create", json={"name": "Short", "pairs": pair_payload[:3]})
    assert resp.status_code == 422


def test_create_rejects_player_in_two_pairs(client, pair_payload):
    pair_payload[1]["players"][0] = pair_payload[0]["players"][0]
    resp = client.post("/cards/tournament/create", json={"name": "Clash", "pairs": pair_payload})
    assert resp.status_code == 422


def test_full_tournament_flow(client, pair_payload):
    data = _create(client, pair_payload)
    tid = data["id"]

    data = _submit(client, tid, _match_id(data, 1, 1), 6, 3).json()
    assert data["current_round"] == 1
    data = _submit(client, tid, _match_id(data, 1, 2), 4, 6, golden=True).json()

    assert data["current_round"] == 2
    round2 = [m for m in data["matches"] if m["round"] == 2]
    assert [(m["team_a"]["label"], m["team_b"]["label"]) for m in round2] == [("A", "J"), ("K", "Q")]
    assert [s["pair_name"] for s in data["standings"]] == ["Pair Ace", "Pair Jack", "Pair Queen", "Pair King"]

    _submit(client, tid, _match_id(data, 2, 1), 6, 2)
    data = _submit(client, tid, _match_id(data, 2, 2), 3, 6).json()
    assert data["phase"] == "complete"
    assert data["is_complete"] is True

    standings = client.get(f"/cards/tournament/{tid}/standings").json()
    assert standings[0]["pair_id"] == "pA"
    assert standings[0]["wins"] == 2
    assert sum(s["wins"] for s in standings) == 4


def test_duplicate_result_conflict(client, pair_payload):
    data = _create(client, pair_payload)
    mid = _match_id(data, 1, 1)
    assert _submit(client, data["id"], mid, 6, 3).status_code == 200
    assert _submit(client, data["id"], mid, 6, 4).status_code == 409


def test_unknown_match_and_tournament(client, pair_payload):
    data = _create(client, pair_payload)
    assert _submit(client, data["id"], "missing", 6, 3).status_code == 404
    assert _submit(client, "missing", "missing", 6, 3).status_code == 404
    assert client.get("/cards/tournament/missing").status_code == 404
    assert client.head("/cards/tournament/missing").status_code == 404
    assert client.head(f"/cards/tournament/{data['id']}").status_code == 200


def test_negative_score_rejected(client, pair_payload):
    data = _create(client, pair_payload)
    assert _submit(client, data["id"], _match_id(data, 1, 1), -1, 6).status_code == 422


def test_tie_accepted_by_default(client, pair_payload):
    data = _create(client, pair_payload)
    data = _submit(client, data["id"], _match_id(data, 1, 1), 5, 5).json()
    match = next(m for m in data["matches"] if m["court"] == 1)
    assert match["result"]["winner"] == "teamB"


@pytest.mark.parametrize("settings", [Settings(tie_policy=TiePolicy.REJECT)])
def test_tie_rejected_when_configured(client, pair_payload):
    data = _create(client, pair_payload)
    assert _submit(client, data["id"], _match_id(data, 1, 1), 5, 5).status_code == 422


def test_list_and_delete(client, pair_payload):
    first = _create(client, pair_payload, name="One")
    _create(client, pair_payload, name="Two")

    listing = client.get("/cards/").json()
    assert sorted(t["name"] for t in listing) == ["One", "Two"]

    assert client.post(f"/cards/tournament/{first['id']}/delete").json() == {"deleted": first["id"]}
    assert client.post(f"/cards/tournament/{first['id']}/delete").status_code == 404
    assert [t["name"] for t in client.get("/cards/").json()] == ["Two"]
