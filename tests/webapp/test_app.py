"""Tests for the training web API."""
import importlib.util
import os
import sys
import pytest

ROOT = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


@pytest.fixture
def client():
    # Load app by path so we don't rely on webapp package being on path
    app_path = os.path.join(ROOT, "webapp", "app.py")
    spec = importlib.util.spec_from_file_location("webapp_app", app_path)
    mod = importlib.util.module_from_spec(spec)
    sys.modules["webapp_app"] = mod
    spec.loader.exec_module(mod)
    app = mod.app
    app.config["TESTING"] = True
    with app.test_client() as c:
        c.post("/api/reset", json={"seed": 1})
        yield c


def test_navaids(client):
    r = client.get("/api/navaids")
    assert r.status_code == 200
    data = r.get_json()
    assert len(data["navaids"]) == 11
    assert data["nm_to_pixels"] == 5.0
    kwa = data["navaids"][0]
    assert kwa["id"] == "KWA"
    assert kwa["connections"]["TGU"] == {"mc": 72, "distance": 96.3}


def test_snapshot_before_start(client):
    r = client.get("/api/snapshot")
    assert r.status_code == 200
    assert r.get_json()["started"] is False


@pytest.mark.parametrize(
    "body",
    [
        {"direction": 400, "speed": 30},
        {"direction": 270, "speed": -1},
        {"direction": "abc", "speed": 30},
        {"speed": 30},
        {"direction": 270, "speed": 30, "tas": 50},
    ],
)
def test_wind_rejects_bad_input(client, body):
    r = client.post("/api/wind", json=body)
    assert r.status_code == 400
    assert r.get_json()["ok"] is False


def test_start_requires_wind(client):
    r = client.post("/api/start")
    assert r.status_code == 400
    assert "wind" in r.get_json()["error"]


def test_control_requires_started(client):
    client.post("/api/wind", json={"direction": 270, "speed": 30})
    r = client.post("/api/control", json={"heading": 90})
    assert r.status_code == 400


def test_training_flow(client):
    r = client.post("/api/wind", json={"direction": 270, "speed": 30, "tas": 240})
    assert r.status_code == 200
    plan = r.get_json()["flight_plan"]
    assert [row["remark"] for row in plan] == ["START", "1", "2", "END"]

    r = client.post("/api/start")
    assert r.status_code == 200
    assert r.get_json()["snapshot"]["started"] is True

    assert client.post("/api/control", json={}).status_code == 400
    assert client.post("/api/control", json={"tas": 50}).status_code == 400
    assert client.post("/api/control", json={"heading": 90, "tas": 220}).status_code == 200

    r = client.post("/api/tick", json={"dt": 0.1, "steps": 10})
    snap = r.get_json()["snapshot"]
    assert snap["time_s"] == pytest.approx(1.0)
    assert any("HDG 090(M) ENTERED" in e for e in snap["events"])

    client.post("/api/pause")
    r = client.post("/api/tick", json={"dt": 0.1})
    assert r.get_json()["snapshot"]["time_s"] == pytest.approx(1.0)
    client.post("/api/resume")

    r = client.get("/api/snapshot?history=1")
    assert "history" in r.get_json()


def test_route_rejects_unconnected(client):
    r = client.post("/api/route", json={"waypoints": ["KWA", "KPO"]})
    assert r.status_code == 400
    assert "KPO" in r.get_json()["error"]


def test_custom_route_flow(client):
    r = client.post(
        "/api/route",
        json={"waypoints": ["sel", "sot"], "operative": {"tgu": False}, "direction": 270, "speed": 30},
    )
    assert r.status_code == 200
    data = r.get_json()
    assert data["route"] == ["SEL", "SOT"]
    assert len(data["flight_plan"]) == 2

    r = client.post("/api/route/start")
    assert r.status_code == 200
    snap = r.get_json()["snapshot"]
    assert snap["mode"] == "custom"
    assert snap["operative"]["TGU"] is False


def test_calculator_heading(client):
    r = client.post("/api/calculator/heading", json={"course": 0, "tas": 150, "wind_dir": 180, "wind_spd": 20})
    data = r.get_json()
    assert data["heading"] == 0
    assert data["ground_speed"] == 170


def test_calculator_distance(client):
    r = client.post("/api/calculator/distance", json={"time": 30, "speed": 240})
    assert r.get_json()["distance_nm"] == 120.0
    r = client.post("/api/calculator/distance", json={"time": 30})
    assert r.status_code == 400


def test_calculator_wind_and_course(client):
    r = client.post("/api/calculator/wind", json={"heading": 0, "tas": 150, "track": 0, "gs": 170})
    assert r.get_json()["wind_dir"] == 180
    r = client.post("/api/calculator/course", json={"heading": 0, "tas": 150, "wind_dir": 180, "wind_spd": 20})
    assert r.get_json()["ground_speed"] == 170


def test_calculator_unknown(client):
    assert client.post("/api/calculator/nope", json={}).status_code == 404


def test_reset_rejects_bad_seed(client):
    r = client.post("/api/reset", json={"seed": "abc"})
    assert r.status_code == 400
    assert r.get_json()["ok"] is False
    assert client.post("/api/reset", json={"seed": 3}).status_code == 200
