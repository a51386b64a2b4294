"""
Single entry point: plan the default training route and fly it headless with the scripted trainee.
Saves the flight log, event log, track and robustness metrics to outputs/.
All variables (route, wind, aircraft performance, seeds) are defined in src.training_settings.
"""
import csv
import json
import logging
import os
import random
import sys

# Add project root so "src" imports work
ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from src.training_settings import (
    AIRCRAFT_DEFAULT_TAS,
    MONTE_CARLO_NUM_SEEDS,
    MONTE_CARLO_SEED,
    PLAN_WIND_DIR,
    PLAN_WIND_SPD,
)

logger = logging.getLogger(__name__)

FLIGHT_LOG_COLUMNS = ["remark", "navaid", "tc", "mc", "th", "mh", "da", "gs", "dist", "ete", "eta", "ata"]


def run_training(
    wind_dir: float = PLAN_WIND_DIR,
    wind_spd: float = PLAN_WIND_SPD,
    tas: float = AIRCRAFT_DEFAULT_TAS,
    seed: int = MONTE_CARLO_SEED,
    num_seeds: int = MONTE_CARLO_NUM_SEEDS,
    outputs_dir: str = None,
) -> dict:
    """Plan and fly the default route; save to outputs/ (JSON + CSV flight log + plot).
    Output covers the planned flight log (TC/MC/TH/MH/DA/GS/ETE/ETA), the actual times of
    arrival, the event log, the flown track and Monte-Carlo completion across wind seeds.
    """
    from src.aircraft.simulate import ata_errors, monte_carlo_training, simulate_training
    from src.navigation.planner import total_ete
    from src.simulation.session import TrainingSession

    outputs_dir = outputs_dir or os.path.join(ROOT, "outputs")
    session = TrainingSession(rng=random.Random(seed))
    session.decide_wind(wind_dir, wind_spd, tas)
    session.start_training()
    run = simulate_training(session)
    snap = run["snapshot"]
    mc = monte_carlo_training(wind_dir, wind_spd, tas, num_seeds=num_seeds, seed=seed)

    flight_log = [e.display() for e in snap.flight_plan]
    out = {
        "module": "Dead-reckoning training run",
        "route": snap.route,
        "plan_wind": {"direction": wind_dir, "speed": wind_spd},
        "actual_base_wind": {"direction": snap.wind.base_dir, "speed": snap.wind.base_spd},
        "tas": tas,
        "flight_log": flight_log,
        "planned_total_ete_min": total_ete(snap.flight_plan),
        "ata_errors_min": ata_errors(snap),
        "completed": run["completed"],
        "total_time_s": run["time_s"],
        "captured_at_s": run["captured_at"],
        "events": snap.events,
        "track": [list(s) for s in snap.aircraft.history],
        "waypoints": {k: list(v) for k, v in session.positions.items()},
        "nm_to_pixels": session.nm_to_pixels,
        "robustness": {
            "description": "Monte-Carlo: scripted trainee over multiple actual-wind and spawn seeds.",
            "completion_rate": mc["completion_rate"],
            "runs": mc["runs"],
            "total_times": mc["total_times"],
        },
    }
    os.makedirs(outputs_dir, exist_ok=True)
    path = os.path.join(outputs_dir, "training_run.json")
    with open(path, "w") as f:
        json.dump(out, f, indent=2)
    print(f"Training run saved to {path}")

    csv_path = os.path.join(outputs_dir, "flight_log.csv")
    with open(csv_path, "w", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=FLIGHT_LOG_COLUMNS)
        writer.writeheader()
        writer.writerows(flight_log)
    print(f"Flight log table saved to {csv_path}")

    # Plot: route legs and flown track on the chart plane (y down, as on screen)
    try:
        import matplotlib
        matplotlib.use("Agg")
        import matplotlib.pyplot as plt
        fig, ax = plt.subplots(figsize=(8, 8))
        route_pts = [session.positions[w] for w in snap.route]
        ax.plot([p[0] for p in route_pts], [p[1] for p in route_pts], "g--o", label="Planned route")
        for ident in snap.route:
            x, y = session.positions[ident]
            ax.annotate(ident, (x, y), textcoords="offset points", xytext=(5, 5))
        track = out["track"]
        if track:
            ax.plot([s[0] for s in track], [s[1] for s in track], "b-", label="Flown track")
        ax.invert_yaxis()
        ax.set_aspect("equal")
        ax.set_xlabel("x (px)")
        ax.set_ylabel("y (px)")
        ax.set_title("Dead-reckoning training run")
        ax.legend()
        ax.grid(True)
        plt.tight_layout()
        plot_path = os.path.join(outputs_dir, "training_track.png")
        plt.savefig(plot_path)
        plt.close(fig)
        print(f"Track plot saved to {plot_path}")
    except Exception as e:
        logger.warning("Could not save track plot: %s", e)

    return out


def main():
    logging.basicConfig(level=logging.WARNING, format="%(asctime)s - %(levelname)s - %(message)s")
    print("Running default training route...")
    run_training()
    print("Done. Check outputs/")


if __name__ == "__main__":
    main()
