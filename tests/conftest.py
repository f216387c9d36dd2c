"""Pytest configuration and fixtures for flyby simulator tests."""

import pytest

from flyby.scenes import template_default, template_planets
from flyby.settings import SimulationSettings
from flyby.simulation import Simulation

# Large enough that the flyby re-entry point lies inside the extended bounds
WIDE_VIEW = (1920, 1080)


@pytest.fixture
def settings():
    return SimulationSettings()


@pytest.fixture
def default_sim(settings):
    """Sun, two planets and the flyby in a wide viewport."""
    return Simulation(*WIDE_VIEW, settings=settings, template=template_default)


@pytest.fixture
def planets_sim(settings):
    """Sun and two planets, no flyby."""
    return Simulation(*WIDE_VIEW, settings=settings, template=template_planets)


@pytest.fixture
def make_sim(settings):
    """Build a simulation around a hand-made body list."""
    def _make(bodies, width=WIDE_VIEW[0], height=WIDE_VIEW[1], sim_settings=None):
        sim = Simulation(width, height, settings=sim_settings or settings)
        sim.replace_bodies(bodies)
        return sim
    return _make
