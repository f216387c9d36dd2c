"""Tests for the per-frame simulation step.

Covers:
- Fixed bodies never change
- Bounded trails holding the most recent positions
- Two-phase step (all forces from the pre-step snapshot)
- Exact retrace after time reversal
- Loop-on-exit bodies never stay outside the extended bounds
- Render-state snapshot
"""

import pytest

from flyby.data_models import Body
from flyby.scenes import FLYBY_LABEL, template_planets
from flyby.settings import SimulationSettings
from flyby.simulation import Simulation


def test_fixed_bodies_are_bit_identical(default_sim):
    suns = [b for b in default_sim.bodies if b.is_fixed]
    assert len(suns) == 1
    before = [(b.position, b.velocity) for b in suns]

    for _ in range(500):
        default_sim.step()

    assert [(b.position, b.velocity) for b in suns] == before
    assert all(len(b.trail) == 0 for b in suns)


def test_step_count(default_sim):
    for _ in range(7):
        default_sim.step()
    assert default_sim.step_count == 7


def test_trail_holds_most_recent_positions(planets_sim):
    moving = [b for b in planets_sim.bodies if not b.is_fixed]
    history = {id(b): [] for b in moving}

    for step in range(1, 151):
        planets_sim.step()
        for b in moving:
            history[id(b)].append(b.position)
            n = len(b.trail)
            assert n == min(step, 120)
            assert b.trail[0] == history[id(b)][step - n]
            assert b.trail[-1] == b.position


def test_trail_length_is_configurable():
    sim = Simulation(1920, 1080, settings=SimulationSettings(trail_length=5),
                     template=template_planets)
    for _ in range(10):
        sim.step()
    assert all(len(b.trail) == 5 for b in sim.bodies if not b.is_fixed)


def test_forces_use_pre_step_positions(make_sim):
    a = Body(mass=100.0, position=(0.0, 0.0))
    b = Body(mass=100.0, position=(100.0, 0.0))
    sim = make_sim([a, b])

    sim.step()

    pull = 100.0 / (100.0 ** 2 + 1e-6)
    assert a.velocity == pytest.approx((pull, 0.0), rel=1e-12)
    assert b.velocity == pytest.approx((-pull, 0.0), rel=1e-12)
    assert a.position == pytest.approx((pull, 0.0), rel=1e-12)
    assert b.position == pytest.approx((100.0 - pull, 0.0), rel=1e-12)


def test_one_step_centripetal_kick(make_sim):
    sun = Body(mass=1e4, position=(960.0, 540.0), is_fixed=True)
    v1 = (1e4 / 200.0) ** 0.5
    planet = Body(mass=10.0, position=(1160.0, 540.0), velocity=(0.0, v1))
    sim = make_sim([sun, planet])
    assert v1 == pytest.approx(7.071, abs=1e-3)

    sim.step()

    dvx = planet.velocity[0]
    dvy = planet.velocity[1] - v1
    assert dvx == pytest.approx(-0.25, abs=1e-6)
    assert dvy == 0.0
    assert planet.position == pytest.approx((1160.0 + dvx, 540.0 + v1))


def test_time_reversal_retraces_trajectory(planets_sim):
    start = [b.position for b in planets_sim.bodies]

    for _ in range(200):
        planets_sim.step()
    moved = [b.position for b in planets_sim.bodies]
    assert moved != start

    planets_sim.reverse_time()
    for _ in range(200):
        planets_sim.step()

    for b, p in zip(planets_sim.bodies, start):
        assert b.position == pytest.approx(p, abs=1e-6)


def test_reverse_time_leaves_fixed_bodies(planets_sim):
    sun = planets_sim.bodies[0]
    planets_sim.step()
    planets_sim.reverse_time()
    assert sun.velocity == (0.0, 0.0)


def test_loop_body_respawns_on_exit(make_sim):
    settings = SimulationSettings(reentry_offset=(0.0, -250.0), reentry_velocity=(30.0, 0.0))
    runner = Body(mass=1.0, position=(400.0, 50.0), velocity=(30.0, 0.0), loops_on_exit=True)
    sim = make_sim([runner], width=800, height=600, sim_settings=settings)

    for _ in range(23):
        sim.step()
    assert runner.position == (1090.0, 50.0)
    assert sim.respawn_count == 0
    assert len(runner.trail) == 23

    sim.step()
    assert runner.position == (400.0, 50.0)
    assert runner.velocity == (30.0, 0.0)
    assert len(runner.trail) == 0
    assert sim.respawn_count == 1

    for _ in range(24):
        sim.step()
        assert not sim.respawn.is_outside(runner.position, sim.viewport)
    assert sim.respawn_count == 2


def test_non_looping_body_leaves_for_good(make_sim):
    settings = SimulationSettings(reentry_offset=(0.0, -250.0), reentry_velocity=(30.0, 0.0))
    drifter = Body(mass=1.0, position=(400.0, 50.0), velocity=(30.0, 0.0))
    sim = make_sim([drifter], width=800, height=600, sim_settings=settings)

    for _ in range(30):
        sim.step()

    assert drifter.position == (1300.0, 50.0)
    assert sim.respawn_count == 0


def test_flyby_never_stays_outside(default_sim):
    flyby = next(b for b in default_sim.bodies if b.loops_on_exit)
    for _ in range(1500):
        default_sim.step()
        assert not default_sim.respawn.is_outside(flyby.position, default_sim.viewport)


def test_render_state(default_sim):
    default_sim.step()
    states = default_sim.render_state()

    assert len(states) == 3
    moving = [b for b in default_sim.bodies if not b.is_fixed]
    for s, b in zip(states, moving):
        assert s.position == b.position
        assert s.trail == tuple(b.trail)
        assert s.size == 3.0
        assert s.color == b.color

    flyby_state = states[-1]
    assert flyby_state.label == FLYBY_LABEL
    x, y = flyby_state.position
    assert flyby_state.label_position == (x + 10.0, y - 10.0)
    assert states[0].label is None
    assert states[0].label_position is None


def test_dominant_bodies(default_sim):
    assert default_sim.dominant_bodies() == [(960.0, 540.0)]


def test_reset_rebuilds_scene(default_sim):
    for _ in range(10):
        default_sim.step()
    default_sim.reset()

    assert default_sim.step_count == 0
    assert default_sim.respawn_count == 0
    assert default_sim.bodies[1].position == (1160.0, 540.0)
    assert all(len(b.trail) == 0 for b in default_sim.bodies)


def test_reset_centers_on_new_viewport(default_sim):
    default_sim.set_viewport(1000, 800)
    assert default_sim.viewport == (1000.0, 800.0)
    assert default_sim.dominant_bodies() == [(960.0, 540.0)]

    default_sim.reset()
    assert default_sim.dominant_bodies() == [(500.0, 400.0)]


def test_body_count_is_constant(default_sim):
    n = len(default_sim.bodies)
    for _ in range(100):
        default_sim.step()
    assert len(default_sim.bodies) == n
    assert isinstance(default_sim.bodies, tuple)
