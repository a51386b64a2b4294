"""
Shared pytest fixtures for the navigation trainer tests.
Ensures project root is on sys.path so src.* and webapp.* import correctly.
"""
import os
import random
import sys
import pytest

ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)


class FixedRng:
    """random.Random stand-in returning fixed draws."""

    def __init__(self, uniform_value=0.0, randint_value=0):
        self.uniform_value = uniform_value
        self.randint_value = randint_value

    def uniform(self, a, b):
        return self.uniform_value

    def randint(self, a, b):
        return self.randint_value


@pytest.fixture
def fixed_rng():
    return FixedRng


@pytest.fixture
def graph():
    from src.navigation.waypoints import build_graph
    return build_graph()


@pytest.fixture
def seeded_session():
    """Session with a seeded random source."""
    from src.simulation.session import TrainingSession
    return TrainingSession(rng=random.Random(7))


@pytest.fixture
def calm_session():
    """Session whose actual wind is pinned to the (zero) planned wind."""
    from src.navigation.wind import WindModel
    from src.simulation.session import TrainingSession

    rng = random.Random(3)
    wind = WindModel(rng=rng, seed_dir_spread=0, seed_spd_spread=0, min_spd=0, max_spd=0)
    return TrainingSession(rng=rng, wind_model=wind)
