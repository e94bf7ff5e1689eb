"""Tests for the fixed-rate scheduler."""

from unittest.mock import patch

import pytest

from lifelike.automaton import SparseLife
from lifelike.clock import DEFAULT_GPS, MAX_GPS, MIN_GPS, Scheduler
from lifelike.patterns import get_pattern


def make_scheduler(gps: int = DEFAULT_GPS) -> Scheduler:
    life = SparseLife()
    life.insert_pattern_at(get_pattern("blinker"))
    return Scheduler(life, gps)


# --- Speed ---

def test_default_speed():
    sched = make_scheduler()
    assert sched.gps == 10
    assert abs(sched.period - 0.1) < 1e-9


def test_speed_clamped_to_max():
    sched = make_scheduler(500)
    assert sched.gps == MAX_GPS


def test_set_speed_clamps():
    sched = make_scheduler()
    sched.set_speed(121)
    assert sched.gps == MAX_GPS
    sched.set_speed(1)
    assert sched.gps == MIN_GPS


def test_non_positive_speed_rejected():
    with pytest.raises(ValueError):
        make_scheduler(0)
    sched = make_scheduler()
    with pytest.raises(ValueError):
        sched.set_speed(-3)


# --- Stepping ---

def test_tick_steps_once():
    sched = make_scheduler()
    sched.tick()
    assert sched.life.generation == 1


def test_run_steps_n_times():
    sched = make_scheduler()
    sched.run(5)
    assert sched.life.generation == 5


def test_listeners_receive_results():
    sched = make_scheduler()
    seen = []
    sched.on_step(lambda life, result: seen.append((life.generation, len(result.births))))
    sched.run(3)
    assert seen == [(1, 2), (2, 2), (3, 2)]


def test_stop_from_listener_ends_run():
    sched = make_scheduler()

    def stop_at_two(life, result):
        if life.generation == 2:
            sched.stop()

    sched.on_step(stop_at_two)
    sched.run(10)
    assert sched.life.generation == 2


def test_run_for_paces_with_sleep():
    sched = make_scheduler(20)
    times = iter([0.0, 0.0, 0.01, 0.01, 0.05, 0.05, 0.06, 0.06, 0.2, 0.2, 0.2])

    with patch("lifelike.clock.time.monotonic", side_effect=lambda: next(times, 1.0)), \
            patch("lifelike.clock.time.sleep") as sleep:
        steps = sched.run_for(0.1)

    assert steps >= 1
    assert sleep.called
    assert sched.life.generation == steps
    assert not sched.running


def test_run_for_stops_on_request():
    sched = make_scheduler(MAX_GPS)
    sched.on_step(lambda life, result: sched.stop())
    with patch("lifelike.clock.time.sleep"):
        steps = sched.run_for(5.0)
    assert steps == 1


def test_running_flag_during_run():
    sched = make_scheduler()
    seen = []
    sched.on_step(lambda life, result: seen.append(sched.running))
    sched.run(3)
    assert seen == [True, True, True]
    assert not sched.running
