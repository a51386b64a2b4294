"""
Validation: Monte-Carlo training runs under actual-wind uncertainty.
Run from project root with PYTHONPATH set. Produces completion rate and ATA-ETA spread.
"""
import os
import sys

ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)


def main(num_seeds: int = 20, route=None):
    from src.aircraft.simulate import monte_carlo_training

    route = route or ["SEL", "SOT", "KWA"]
    result = monte_carlo_training(270, 30, 240, route=route, num_seeds=num_seeds, seed=123)
    print(f"Monte-Carlo validation ({num_seeds} seeds, plan wind 270/30, route {'-'.join(route)})")
    print(f"  Completion rate: {result['completion_rate']:.2%}")
    print(f"  Runs: {result['runs']}")
    if result["total_times"]:
        print(f"  Total time range: {min(result['total_times']):.1f} - {max(result['total_times']):.1f} s")
    errors = [e for r in result["results"] for e in r["ata_errors_min"] if e is not None]
    if errors:
        print(f"  ATA - ETA range: {min(errors)} .. {max(errors)} min")
    return result


if __name__ == "__main__":
    main()
