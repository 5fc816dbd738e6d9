"""
HUBSIM Aircraft Simulator
Owns the live fleet and the ticking loop.
"""

import logging
import random
import threading
import time
from collections import Counter
from datetime import datetime
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from hubsim.config import Config, Settings
from hubsim.simulation.engine import TickEngine
from hubsim.simulation.fleet_generator import FleetGenerator
from hubsim.simulation.models import Aircraft, FlightStatus
from hubsim.simulation.route_generator import RouteGenerator

logger = logging.getLogger(__name__)

Snapshot = Tuple[Aircraft, ...]
Observer = Callable[[Snapshot], None]


class AircraftSimulator:
    """
    Simulation context: fleet state plus a cancellable tick loop.

    The tick thread is the only writer. Each tick builds a new fleet and
    publishes it by swapping the ``snapshot`` tuple, so readers always see
    a complete, immutable state.

    Example:
        >>> simulator = AircraftSimulator(Config())
        >>> simulator.subscribe(lambda snapshot: print(len(snapshot)))
        >>> simulator.start(500)
        >>> simulator.stop()
    """

    def __init__(self, config: Config, rng: Optional[random.Random] = None) -> None:
        """
        Initialize simulator.

        Args:
            config: HUBSIM configuration object
            rng: Random source; defaults to one seeded from config.seed
        """
        self.config = config
        self.tick_interval = config.tick_interval
        self.rng = rng or random.Random(config.seed)

        self.route_generator = RouteGenerator(
            config.build_geometry(), config.build_airports(), self.rng
        )
        self.fleet_generator = FleetGenerator(
            self.route_generator,
            config.build_airlines(),
            config.aircraft_types,
            self.rng,
        )
        self.engine = TickEngine(self.route_generator, self.fleet_generator, self.rng)

        self._snapshot: Snapshot = ()
        self._observers: List[Observer] = []
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None

        self.tick_count = 0
        self.started_at: Optional[datetime] = None

    # --- State ---

    @property
    def snapshot(self) -> Snapshot:
        """Latest published fleet state."""
        return self._snapshot

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def status_counts(self) -> Dict[FlightStatus, int]:
        """Number of aircraft per status in the current snapshot."""
        counts = Counter(aircraft.status for aircraft in self._snapshot)
        return {status: counts.get(status, 0) for status in FlightStatus}

    # --- Observers ---

    def subscribe(self, observer: Observer) -> None:
        """Register a callback receiving each new snapshot."""
        if observer not in self._observers:
            self._observers.append(observer)

    def unsubscribe(self, observer: Observer) -> None:
        if observer in self._observers:
            self._observers.remove(observer)

    def _publish(self, fleet: Sequence[Aircraft]) -> None:
        self._snapshot = tuple(fleet)
        for observer in list(self._observers):
            try:
                observer(self._snapshot)
            except Exception:
                logger.exception("Snapshot observer %r failed", observer)

    # --- Lifecycle ---

    def populate(self, count: Optional[int] = None) -> Snapshot:
        """
        Generate a fresh fleet and publish it without starting the loop.

        Args:
            count: Fleet size (defaults to config.aircraft_count)

        Returns:
            The published snapshot
        """
        count = self.config.aircraft_count if count is None else count
        fleet = self.fleet_generator.generate_fleet(count)
        self.tick_count = 0
        self.started_at = datetime.now()
        self._publish(fleet)
        return self._snapshot

    def step(self) -> Snapshot:
        """Run exactly one tick synchronously and publish the result."""
        fleet = self.engine.tick(self._snapshot)
        self.tick_count += 1
        self._publish(fleet)
        return self._snapshot

    def start(self, count: Optional[int] = None) -> None:
        """
        Initialize the fleet and begin ticking in a background thread.

        Args:
            count: Fleet size (defaults to config.aircraft_count)

        Raises:
            RuntimeError: If the simulation is already running
        """
        if self.is_running:
            raise RuntimeError("Simulation is already running")

        self.populate(count)
        self._stop_event.clear()
        self._thread = threading.Thread(
            target=self._loop, name="hubsim-tick", daemon=True
        )
        self._thread.start()
        logger.info(
            "Simulation started: %d aircraft, %.2fs interval",
            len(self._snapshot),
            self.tick_interval,
        )

    def stop(self, timeout: Optional[float] = None) -> None:
        """
        Stop ticking. The fleet is kept as last published.

        If the tick thread does not finish within ``timeout`` it stays
        referenced, so ``is_running`` remains true and ``start`` refuses
        until it has exited.

        Args:
            timeout: Seconds to wait for the tick thread to finish
        """
        self._stop_event.set()
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout)
            if thread.is_alive():
                logger.warning("Tick thread still running after %ss", timeout)
                return
        self._thread = None
        logger.info("Simulation stopped after %d ticks", self.tick_count)

    def _loop(self) -> None:
        # Event.wait doubles as a cancellable sleep
        while not self._stop_event.wait(self.tick_interval):
            try:
                self.step()
            except Exception:
                logger.exception("Error in tick %d, continuing", self.tick_count + 1)

    # --- Foreground Run ---

    def print_header(self) -> None:
        """Print simulator header information."""
        print("\n" + "=" * 70)
        print("🛫  HUBSIM - Airport Operations Simulator")
        print("=" * 70)
        print(f"Hub:        {self.config.hub_code} ({self.config.hub_name})")
        print(f"Center:     {self.config.hub_latitude}°N, {self.config.hub_longitude}°E")
        print(f"Aircraft:   {len(self._snapshot)}")
        print(f"Interval:   {self.tick_interval}s")
        seed = self.config.seed
        print(f"Seed:       {seed if seed is not None else 'unseeded'}")
        print("=" * 70)

    def print_statistics(self) -> None:
        """Print the current status distribution."""
        counts = self.status_counts()
        summary = " | ".join(
            f"{status.display_name}: {count}" for status, count in counts.items() if count
        )
        print(f"\n📊 Tick {self.tick_count}: {summary}\n")

    def run(self, count: Optional[int] = None, max_ticks: Optional[int] = None) -> Snapshot:
        """
        Run the simulation in the foreground until Ctrl+C or max_ticks.

        Args:
            count: Fleet size (defaults to config.aircraft_count)
            max_ticks: Stop after this many ticks (None = run forever)

        Returns:
            Final snapshot

        Raises:
            RuntimeError: If the background loop is running
        """
        if self.is_running:
            raise RuntimeError("Simulation is already running")

        self.populate(count)
        self.print_header()
        self.print_statistics()

        print("\n🔄 Starting simulation... (Press Ctrl+C to stop)\n")

        try:
            while max_ticks is None or self.tick_count < max_ticks:
                started = time.monotonic()
                try:
                    self.step()
                except Exception as e:
                    logger.exception("Error in tick %d", self.tick_count + 1)
                    print(f"\n⚠️  Error in tick {self.tick_count + 1}: {e}")
                    print("   Continuing with next tick...")

                if self.tick_count % Settings.STATS_EVERY_N_TICKS == 0:
                    self.print_statistics()

                remaining = self.tick_interval - (time.monotonic() - started)
                if remaining > 0 and (max_ticks is None or self.tick_count < max_ticks):
                    time.sleep(remaining)

        except KeyboardInterrupt:
            print("\n\n👋 Stopping simulation...")

        self._print_summary()
        return self._snapshot

    def _print_summary(self) -> None:
        print("\n📊 Final Statistics:")
        print(f"   Total ticks: {self.tick_count:,}")
        print(f"   Aircraft:    {len(self._snapshot):,}")
        for status, count in self.status_counts().items():
            print(f"   {status.display_name + ':':<13}{count:,}")
