from flask import Flask

from arena import init_arena


def _client(**config):
    app = Flask(__name__)
    app.config.update(config)
    init_arena(app)
    return app.test_client()


def _player(**extra):
    data = {"id": "p1", "name": "TestPlayer", "class": "warrior", "level": 10,
            "strength": 50, "agility": 30, "vitality": 40, "endurance": 25,
            "intelligence": 10, "wisdom": 15, "luck": 10, "charisma": 10, "armor": 20}
    data.update(extra)
    return data


def test_missing_player_is_rejected():
    client = _client()
    res = client.post("/api/combat/simulate", json={})
    assert res.status_code == 400
    assert "error" in res.get_json()
    res = client.post("/api/combat/simulate", json={"player": {"name": "Test", "class": "warrior", "level": 10}})
    assert res.status_code == 400


def test_simulate_returns_a_result():
    res = _client().post("/api/combat/simulate", json={"player": _player(), "opponent_preset": "warrior", "seed": 4})
    assert res.status_code == 200
    data = res.get_json()
    for key in ("winner_id", "loser_id", "draw", "turns", "log", "player_snapshot", "enemy_snapshot"):
        assert key in data
    assert data["log"]
    assert data["enemy_snapshot"]["name"] == "Test Warrior"


def test_default_stats_and_unknown_preset():
    client = _client()
    res = client.post("/api/combat/simulate", json={"player": {"id": "p1", "name": "Min", "class": "mage", "level": 5},
                                                    "opponent_preset": "rogue"})
    assert res.status_code == 200
    assert res.get_json()["turns"] > 0
    res = client.post("/api/combat/simulate", json={"player": _player(), "opponent_preset": "dragon"})
    assert res.get_json()["enemy_snapshot"]["name"] == "Test Warrior"


def test_seeded_requests_replay():
    client = _client()
    body = {"player": _player(), "opponent_preset": "tank", "seed": 99, "player_choices": ["basic", "heavy_strike"]}
    assert client.post("/api/combat/simulate", json=body).get_json() == \
        client.post("/api/combat/simulate", json=body).get_json()


def test_validation_errors_are_bad_requests():
    client = _client()
    bad_stance = {"attack_zones": ["head", "head"], "block_allocation": {"head": 1, "torso": 1, "waist": 1, "legs": 0}}
    res = client.post("/api/combat/simulate", json={"player": _player(), "stance": bad_stance})
    assert res.status_code == 400
    assert res.get_json()["error"] == "Duplicate attack zones"
    assert client.post("/api/combat/simulate", json={"player": _player(**{"class": "bard"})}).status_code == 400
    assert client.post("/api/combat/simulate",
                       json={"player": _player(), "player_choices": ["fireball"]}).status_code == 400
    assert client.post("/api/combat/simulate", json={"player": _player(), "seed": "abc"}).status_code == 400
    assert client.post("/api/combat/simulate", json={"player": _player(id="enemy")}).status_code == 400

    res = client.post("/api/combat/simulate", json=[1, 2])
    assert res.status_code == 400
    assert "error" in res.get_json()
    assert client.post("/api/combat/simulate", json={"player": _player(level=1e400)}).status_code == 400
    assert client.post("/api/combat/simulate", json={"player": _player(strength=1e400)}).status_code == 400


def test_balance_overrides_from_app_config():
    client = _client(ARENA_BALANCE={"max_turns": 1})
    body = {"player": _player(vitality=500), "opponent_preset": "tank", "seed": 1}
    data = client.post("/api/combat/simulate", json=body).get_json()
    assert data["turns"] == 1
    assert data["draw"] is True


def test_presets_listing():
    data = _client().get("/api/combat/presets").get_json()
    assert set(data) == {"warrior", "rogue", "mage", "tank"}
