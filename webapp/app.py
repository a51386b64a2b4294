"""
Training web API (Flask).
Validates operator input, forwards commands into the training session between ticks,
and serves read-only snapshots for instrument/map rendering.
The client drives simulated time by POSTing /api/tick once per rendered frame.
"""
import logging
import os
import random
import sys
import threading

from flask import Flask, jsonify, request

# Path to project root (parent of webapp)
ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from src.core.calculator import solve_time_speed_distance
from src.core.wind_triangle import infer_wind, required_heading, track_and_ground_speed
from src.exceptions import TrainingError
from src.navigation.waypoints import validate_route
from src.simulation.session import TrainingSession

logger = logging.getLogger(__name__)

app = Flask(__name__)

# One session per server; the lock keeps commands and ticks from interleaving
_lock = threading.Lock()
_state = {"session": TrainingSession()}


class ValidationError(ValueError):
    pass


def _session() -> TrainingSession:
    return _state["session"]


def _body() -> dict:
    return request.get_json(force=True, silent=True) or {}


def _number(data: dict, key: str, low: float, high: float, default=None) -> float:
    """Read a numeric field and check it lies in [low, high]."""
    value = data.get(key, default)
    if value is None or value == "":
        raise ValidationError(f"{key} is required")
    try:
        value = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{key} must be a number")
    if value < low or value > high:
        raise ValidationError(f"{key} must be {low:g}-{high:g}")
    return value


def _optional_number(data: dict, key: str):
    value = data.get(key)
    if value is None or value == "":
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{key} must be a number")


@app.errorhandler(ValidationError)
def _validation_error(e):
    return jsonify({"ok": False, "error": str(e)}), 400


@app.errorhandler(TrainingError)
def _training_error(e):
    return jsonify({"ok": False, "error": str(e)}), 400


@app.route("/api/navaids")
def api_navaids():
    """Waypoint reference data with chart positions and connections."""
    session = _session()
    out = []
    for wp in session.graph:
        pos = session.positions.get(wp.ident)
        out.append({
            "id": wp.ident,
            "name": wp.name,
            "full_name": wp.full_name,
            "type": wp.kind,
            "frequency": wp.frequency,
            "channel": wp.channel,
            "operative": wp.operative,
            "position": list(pos) if pos else None,
            "connections": {
                to_id: {"mc": c.magnetic_course, "distance": c.distance_nm}
                for to_id, c in wp.connections.items()
            },
        })
    return jsonify({"navaids": out, "nm_to_pixels": session.nm_to_pixels})


@app.route("/api/snapshot")
def api_snapshot():
    history = request.args.get("history", "0") in ("1", "true", "yes")
    with _lock:
        return jsonify(_session().snapshot().to_dict(include_history=history))


@app.route("/api/wind", methods=["POST"])
def api_wind():
    """Decide wind for the default route: direction 0-360, speed 0-100, TAS 100-300."""
    data = _body()
    wind_dir = _number(data, "direction", 0, 360)
    wind_spd = _number(data, "speed", 0, 100)
    tas = _number(data, "tas", 100, 300, default=240)
    with _lock:
        session = _session()
        session.decide_wind(wind_dir, wind_spd, tas)
        rows = [e.display() for e in session.flight_plan]
    return jsonify({"ok": True, "flight_plan": rows})


@app.route("/api/start", methods=["POST"])
def api_start():
    with _lock:
        snap = _session().start_training()
    return jsonify({"ok": True, "snapshot": snap.to_dict()})


@app.route("/api/control", methods=["POST"])
def api_control():
    """Enter heading (0-360) and/or TAS (100-300); a blank field keeps the current value."""
    data = _body()
    has_hdg = data.get("heading") not in (None, "")
    has_tas = data.get("tas") not in (None, "")
    if not has_hdg and not has_tas:
        raise ValidationError("enter at least one value (heading or tas)")
    heading = _number(data, "heading", 0, 360) if has_hdg else None
    tas = _number(data, "tas", 100, 300) if has_tas else None
    with _lock:
        session = _session()
        if heading is not None:
            session.set_heading(heading)
        if tas is not None:
            session.set_tas(tas)
    return jsonify({"ok": True})


@app.route("/api/route", methods=["POST"])
def api_route():
    """Build a custom route: waypoints (ordered ids), operative ({id: bool}), direction, speed, tas."""
    data = _body()
    wind_dir = _number(data, "direction", 0, 360, default=0)
    wind_spd = _number(data, "speed", 0, 100, default=0)
    tas = _number(data, "tas", 100, 300, default=240)
    operative = data.get("operative") or {}
    if not isinstance(operative, dict):
        raise ValidationError("operative must be an object of id -> bool")
    with _lock:
        session = _session()
        route = validate_route(list(data.get("waypoints") or []), session.graph)
        operative = {str(k).upper(): bool(v) for k, v in operative.items()}
        session.build_custom_route(route, operative, wind_dir=wind_dir, wind_spd=wind_spd, tas=tas)
        rows = [e.display() for e in session.flight_plan]
    return jsonify({"ok": True, "route": route, "flight_plan": rows})


@app.route("/api/route/start", methods=["POST"])
def api_route_start():
    with _lock:
        snap = _session().start_custom_training()
    return jsonify({"ok": True, "snapshot": snap.to_dict()})


@app.route("/api/tick", methods=["POST"])
def api_tick():
    """Advance simulated time by dt seconds (clamped per tick); steps > 1 runs several ticks."""
    data = _body()
    dt = _number(data, "dt", 0, 10)
    steps = int(_number(data, "steps", 1, 10000, default=1))
    with _lock:
        session = _session()
        for _ in range(steps):
            if session.tick(dt) is None:
                break
        return jsonify({"ok": True, "snapshot": session.snapshot().to_dict()})


@app.route("/api/pause", methods=["POST"])
def api_pause():
    with _lock:
        _session().pause()
    return jsonify({"ok": True})


@app.route("/api/resume", methods=["POST"])
def api_resume():
    with _lock:
        _session().resume()
    return jsonify({"ok": True})


@app.route("/api/reset", methods=["POST"])
def api_reset():
    """Replace the session with a fresh one (optional integer seed for a repeatable run)."""
    data = _body()
    seed = data.get("seed")
    rng = None
    if seed is not None and seed != "":
        try:
            rng = random.Random(int(seed))
        except (TypeError, ValueError):
            raise ValidationError("seed must be an integer")
    with _lock:
        _state["session"] = TrainingSession(rng=rng)
    return jsonify({"ok": True})


@app.route("/api/calculator/<kind>", methods=["POST"])
def api_calculator(kind):
    """Navigation computer: kind = distance | wind | course | heading."""
    data = _body()
    if kind == "distance":
        try:
            result = solve_time_speed_distance(
                time_min=_optional_number(data, "time"),
                distance_nm=_optional_number(data, "distance"),
                speed=_optional_number(data, "speed"),
            )
        except ValueError as e:
            raise ValidationError(str(e))
        return jsonify({"ok": True, **result})
    if kind == "wind":
        w = infer_wind(
            _number(data, "heading", 0, 360),
            _number(data, "tas", 0, 1000),
            _number(data, "track", 0, 360),
            _number(data, "gs", 0, 1000),
        )
        return jsonify({"ok": True, "wind_dir": w.wind_dir, "wind_spd": w.wind_spd})
    if kind == "course":
        t = track_and_ground_speed(
            _number(data, "heading", 0, 360),
            _number(data, "tas", 0, 1000),
            _number(data, "wind_dir", 0, 360),
            _number(data, "wind_spd", 0, 1000),
        )
        return jsonify({"ok": True, "track": t.track, "ground_speed": t.ground_speed})
    if kind == "heading":
        h = required_heading(
            _number(data, "course", 0, 360),
            _number(data, "tas", 0, 1000),
            _number(data, "wind_dir", 0, 360),
            _number(data, "wind_spd", 0, 1000),
        )
        return jsonify({
            "ok": True, "heading": h.heading, "ground_speed": h.ground_speed, "drift_angle": h.drift_angle,
        })
    return jsonify({"ok": False, "error": f"unknown calculator {kind}"}), 404


def main():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")
    app.run(host="127.0.0.1", port=5000, debug=False)


if __name__ == "__main__":
    main()
