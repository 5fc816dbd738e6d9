"""
Tests for the simulation context (fleet state and tick loop).
"""

import pytest
import sys
import threading
import time
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from hubsim.config import Config
from hubsim.simulation.models import FlightStatus
from hubsim.simulation.simulator import AircraftSimulator


@pytest.fixture
def config():
    """Fast, seeded configuration."""
    config = Config()
    config.set("simulation.tick_interval_seconds", 0.05)
    config.set("simulation.seed", 7)
    config.set("simulation.aircraft_count", 25)
    return config


@pytest.fixture
def simulator(config):
    sim = AircraftSimulator(config)
    yield sim
    sim.stop(timeout=1.0)


def wait_for(predicate, timeout=3.0):
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.01)
    return False


class TestPopulateAndStep:
    """Tests for synchronous fleet handling."""

    def test_initial_state(self, simulator):
        assert simulator.snapshot == ()
        assert simulator.is_running is False
        assert simulator.tick_count == 0

    def test_populate_default_count(self, simulator):
        snapshot = simulator.populate()
        assert len(snapshot) == 25
        assert simulator.snapshot is snapshot
        assert isinstance(snapshot, tuple)

    def test_populate_explicit_count(self, simulator):
        assert len(simulator.populate(3)) == 3

    def test_populate_invalid_count(self, simulator):
        with pytest.raises(ValueError):
            simulator.populate(0)

    def test_step(self, simulator):
        before = simulator.populate(40)
        after = simulator.step()
        assert simulator.tick_count == 1
        assert len(after) == 40
        assert after is not before
        assert [a.id for a in after] == [a.id for a in before]

    def test_snapshot_not_mutated_by_step(self, simulator):
        before = simulator.populate(40)
        progress = [a.route.progress if a.route else None for a in before]
        simulator.step()
        assert [a.route.progress if a.route else None for a in before] == progress

    def test_status_counts(self, simulator):
        simulator.populate(100)
        counts = simulator.status_counts()
        assert set(counts) == set(FlightStatus)
        assert sum(counts.values()) == 100
        assert counts[FlightStatus.PARKED] == 40
        assert counts[FlightStatus.DEPARTED] == 0

    def test_same_seed_same_fleet(self, config):
        first = AircraftSimulator(config).populate(30)
        second = AircraftSimulator(config).populate(30)
        assert [a.flight_number for a in first] == [a.flight_number for a in second]
        assert [a.coordinate for a in first] == [a.coordinate for a in second]


class TestObservers:
    """Tests for snapshot subscriptions."""

    def test_subscribe(self, simulator):
        received = []
        simulator.subscribe(received.append)
        simulator.populate(5)
        simulator.step()
        assert len(received) == 2
        assert received[-1] is simulator.snapshot

    def test_subscribe_twice_notifies_once(self, simulator):
        received = []
        simulator.subscribe(received.append)
        simulator.subscribe(received.append)
        simulator.populate(5)
        assert len(received) == 1

    def test_unsubscribe(self, simulator):
        received = []
        simulator.subscribe(received.append)
        simulator.unsubscribe(received.append)
        simulator.populate(5)
        assert received == []

    def test_failing_observer_is_contained(self, simulator):
        received = []

        def broken(snapshot):
            raise RuntimeError("observer failure")

        simulator.subscribe(broken)
        simulator.subscribe(received.append)
        simulator.populate(5)
        simulator.step()
        assert len(received) == 2
        assert simulator.tick_count == 1


class TestLifecycle:
    """Tests for start/stop of the background loop."""

    def test_start_and_stop(self, simulator):
        simulator.start(10)
        assert simulator.is_running
        assert len(simulator.snapshot) == 10

        assert wait_for(lambda: simulator.tick_count >= 3)

        simulator.stop(timeout=1.0)
        assert not simulator.is_running
        ticks = simulator.tick_count
        time.sleep(0.2)
        assert simulator.tick_count == ticks
        assert len(simulator.snapshot) == 10

    def test_double_start_rejected(self, simulator):
        simulator.start(5)
        with pytest.raises(RuntimeError):
            simulator.start(5)

    def test_restart_reinitializes(self, simulator):
        simulator.start(5)
        assert wait_for(lambda: simulator.tick_count >= 1)
        simulator.stop(timeout=1.0)

        simulator.start(8)
        assert len(simulator.snapshot) == 8
        simulator.stop(timeout=1.0)

    def test_stop_timeout_keeps_thread(self, simulator):
        """A tick thread that outlives stop() still blocks start() and run()."""
        entered = threading.Event()
        release = threading.Event()

        def slow(snapshot):
            if threading.current_thread().name == "hubsim-tick":
                entered.set()
                release.wait(2.0)

        simulator.subscribe(slow)
        simulator.start(5)
        assert entered.wait(2.0)

        simulator.stop(timeout=0.05)
        assert simulator.is_running
        with pytest.raises(RuntimeError):
            simulator.start(5)
        with pytest.raises(RuntimeError):
            simulator.run(count=5, max_ticks=1)

        release.set()
        simulator.stop(timeout=2.0)
        assert not simulator.is_running

    def test_stop_without_start(self, simulator):
        simulator.stop()
        assert not simulator.is_running

    def test_observer_called_from_loop(self, simulator):
        received = []
        simulator.subscribe(received.append)
        simulator.start(5)
        assert wait_for(lambda: len(received) >= 3)
        simulator.stop(timeout=1.0)
        assert all(len(snapshot) == 5 for snapshot in received)


class TestForegroundRun:
    """Tests for the foreground run loop."""

    def test_run_max_ticks(self, simulator, capsys):
        snapshot = simulator.run(count=12, max_ticks=3)
        assert simulator.tick_count == 3
        assert len(snapshot) == 12

        output = capsys.readouterr().out
        assert "HUBSIM" in output
        assert "Final Statistics" in output
        assert "Total ticks: 3" in output


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
