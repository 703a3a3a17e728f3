import random

import pytest

from chase.simulation import Simulation
from chase.wizard import AgentEvent, WizardState
from chase.world import World


def corridor_world(length, avatar, wizard):
    world = World(map_grid=[[0] * length])
    world.avatar_spawn = avatar
    world.wizard_spawn = wizard
    return world


def run(sim, steps, direction=(0, 0)):
    events = []
    for _ in range(steps):
        events.extend(sim.step(direction))
    return events


def test_wizard_catches_stationary_avatar():
    world = corridor_world(6, avatar=(5.5, 0.5), wizard=(0.5, 0.5))
    sim = Simulation(world, rng=random.Random(1))
    events = run(sim, 500)
    assert sim.wizard.is_casting
    assert AgentEvent.COLLIDED in events
    assert AgentEvent.TARGET_DEFEATED in events
    assert sim.avatar.dead
    assert sim.lost and not sim.won


def test_noclip_off_floor_triggers_single_alert():
    world = corridor_world(6, avatar=(5.5, 0.5), wizard=(0.5, 0.5))
    sim = Simulation(world, rng=random.Random(1))
    sim.avatar.toggle_noclip()
    sim.avatar.x = 8.5
    events = run(sim, 150)
    assert events.count(AgentEvent.TARGET_UNREACHABLE) == 1
    assert sim.wizard.state is WizardState.BLOCKED
    assert not sim.avatar.dead


def test_treasure_pickup_adds_score():
    world = corridor_world(10, avatar=(0.5, 0.5), wizard=(9.5, 0.5))
    world.treasure = [(1.5, 0.5), (4.5, 0.5)]
    world.treasure_value = 50
    sim = Simulation(world, rng=random.Random(1))
    run(sim, 20, direction=(1, 0))
    assert sim.score == 50
    assert sim.treasure == [(4.5, 0.5)]


def test_stairs_end_the_game_and_stop_the_wizard():
    world = corridor_world(10, avatar=(2.4, 0.5), wizard=(9.5, 0.5))
    world.stairs = (2.5, 0.5)
    sim = Simulation(world, rng=random.Random(1))
    events = run(sim, 1)
    assert sim.won
    events += run(sim, 80)
    assert AgentEvent.FORCED_STOP in events
    assert sim.wizard.state is WizardState.CASTING
    assert AgentEvent.SCREAM not in events
    events += run(sim, 800)
    assert AgentEvent.SCREAM in events
    assert not sim.lost


def test_advance_runs_whole_fixed_steps():
    world = corridor_world(4, avatar=(3.5, 0.5), wizard=(0.5, 0.5))
    sim = Simulation(world, fixed_dt=0.02)
    sim.advance(0.05)
    assert sim.time == pytest.approx(0.04)
    sim.advance(0.011)
    assert sim.time == pytest.approx(0.06)


def test_rejects_bad_fixed_dt():
    with pytest.raises(ValueError):
        Simulation(corridor_world(2, (0.5, 0.5), (1.5, 0.5)), fixed_dt=0)


def test_default_session_uses_default_world():
    sim = Simulation(rng=random.Random(3))
    assert sim.avatar.position() == (1.5, 1.5, 0.0)
    assert sim.wizard.position == (14.5, 9.5, 0.0)
    run(sim, 100)
    assert sim.wizard.is_moving or sim.wizard.position != (14.5, 9.5, 0.0)
