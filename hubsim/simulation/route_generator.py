"""
Route Generator
Builds phase-specific waypoint sequences anchored to the hub geometry.

Four route archetypes are produced:
1. Approach: entry fix -> perturbed midpoint -> final approach -> threshold -> touchdown
2. Taxi-in: runway exit -> taxiway junction -> terminal junction -> gate
3. Taxi-out: gate -> terminal junction -> main taxiway -> hold short -> threshold
4. Departure: threshold -> liftoff -> initial climb -> departure fix

Each route starts at a random progress so that a freshly generated fleet
shows aircraft at every stage of a phase.
"""

import logging
import random
from typing import List, Optional, Sequence

from hubsim.simulation.constants import (
    APPROACH_ENTRY_DISTANCE,
    APPROACH_MIDPOINT_JITTER,
    APPROACH_PROGRESS_RANGE,
    DEPARTURE_FIX_OFFSETS,
    DEPARTURE_PROGRESS_RANGE,
    FINAL_APPROACH_OFFSET,
    GATE_JITTER,
    INITIAL_CLIMB_OFFSET,
    LIFTOFF_THRESHOLD_WEIGHT,
    TAXI_IN_PROGRESS_RANGE,
    TAXI_OUT_PROGRESS_RANGE,
)
from hubsim.simulation.models import Airport, Coordinate, HubGeometry, Route

logger = logging.getLogger(__name__)

RUNWAY_CODE = "RWY"


class RouteGenerator:
    """
    Generates approach, taxi and departure routes for the hub.

    Example:
        >>> generator = RouteGenerator(config.build_geometry(), config.build_airports())
        >>> route = generator.approach_route(airports[0])
        >>> route.current_position()
    """

    def __init__(
        self,
        geometry: HubGeometry,
        airports: Sequence[Airport],
        rng: Optional[random.Random] = None,
    ) -> None:
        """
        Initialize route generator.

        Args:
            geometry: Hub runway/taxi/terminal reference points
            airports: Origin/destination airport catalog
            rng: Random source (seed it for reproducible routes)
        """
        self.geometry = geometry
        self.airports: List[Airport] = list(airports)
        self.rng = rng or random.Random()

    # --- Catalog ---

    def find_airport(self, code: Optional[str]) -> Optional[Airport]:
        """Look up an airport by code, None when unknown."""
        if code is None:
            return None
        for airport in self.airports:
            if airport.code == code:
                return airport
        return None

    # --- Helpers ---

    def _offset(self, origin: Coordinate, dlat: float, dlon: float) -> Coordinate:
        return Coordinate(origin.latitude + dlat, origin.longitude + dlon)

    def _jitter(self, center: Coordinate, amount: float) -> Coordinate:
        return Coordinate(
            center.latitude + self.rng.uniform(-amount, amount),
            center.longitude + self.rng.uniform(-amount, amount),
        )

    def gate_position(self, gate: Optional[str]) -> Coordinate:
        """Random stand position near the gate's terminal cluster."""
        terminal = self.geometry.terminal_for_gate(gate)
        return self._jitter(terminal.center, GATE_JITTER)

    def _approach_entry(self, origin: Coordinate) -> Coordinate:
        """
        Pick the entry fix from the direction of the origin airport.

        North-west origins enter from the north, anything east of the hub
        from the east, everything else from the south.
        """
        center = self.geometry.center
        from_north = origin.latitude > center.latitude
        from_east = origin.longitude > center.longitude
        distance = APPROACH_ENTRY_DISTANCE

        if from_north and not from_east:
            return self._offset(center, distance, -distance * 0.5)
        elif from_east:
            return self._offset(center, distance * 0.3, distance)
        else:
            return self._offset(center, -distance, -distance * 0.3)

    def _departure_fix(self, destination: Coordinate) -> Coordinate:
        """Pick the departure fix toward the destination airport."""
        center = self.geometry.center

        if destination.latitude > center.latitude:
            key = "north"
        elif destination.longitude > center.longitude:
            key = "east"
        else:
            key = "south"

        dlat, dlon = DEPARTURE_FIX_OFFSETS[key]
        return self._offset(center, dlat, dlon)

    # --- Route Archetypes ---

    def approach_route(self, origin: Airport) -> Route:
        """
        Create an approach from the origin's direction to touchdown.

        Args:
            origin: Airport the flight is arriving from

        Returns:
            Route with 5 waypoints and progress in [0.0, 0.7]
        """
        geo = self.geometry
        entry = self._approach_entry(origin.coordinate)

        midpoint = Coordinate(
            (entry.latitude + geo.arrival_threshold.latitude) / 2
            + self.rng.uniform(-APPROACH_MIDPOINT_JITTER, APPROACH_MIDPOINT_JITTER),
            (entry.longitude + geo.arrival_threshold.longitude) / 2
            + self.rng.uniform(-APPROACH_MIDPOINT_JITTER, APPROACH_MIDPOINT_JITTER),
        )
        final_approach = self._offset(geo.arrival_threshold, *FINAL_APPROACH_OFFSET)
        touchdown = Coordinate(
            (geo.arrival_threshold.latitude + geo.arrival_end.latitude) / 2,
            (geo.arrival_threshold.longitude + geo.arrival_end.longitude) / 2,
        )

        return Route(
            origin_code=origin.code,
            origin_coordinate=origin.coordinate,
            destination_code=geo.code,
            destination_coordinate=geo.center,
            waypoints=(entry, midpoint, final_approach, geo.arrival_threshold, touchdown),
            progress=self.rng.uniform(*APPROACH_PROGRESS_RANGE),
        )

    def taxi_in_route(self, gate: str) -> Route:
        """
        Create a taxi route from the runway exit to a gate.

        Args:
            gate: Gate identifier, e.g. 'A12'

        Returns:
            Route with 4 waypoints and progress in [0.0, 0.8]
        """
        geo = self.geometry
        terminal = geo.terminal_for_gate(gate)
        gate_coord = self._jitter(terminal.center, GATE_JITTER)

        return Route(
            origin_code=RUNWAY_CODE,
            origin_coordinate=geo.runway_exit,
            destination_code=gate,
            destination_coordinate=gate_coord,
            waypoints=(geo.runway_exit, geo.taxiway_junction, terminal.junction, gate_coord),
            progress=self.rng.uniform(*TAXI_IN_PROGRESS_RANGE),
        )

    def taxi_out_route(self, gate: str, destination_code: str) -> Route:
        """
        Create a taxi route from a gate to the departure runway.

        Args:
            gate: Gate identifier the aircraft pushes back from
            destination_code: Airport code the flight departs for

        Returns:
            Route with 5 waypoints and progress in [0.0, 0.7]
        """
        geo = self.geometry
        terminal = geo.terminal_for_gate(gate)
        gate_coord = self._jitter(terminal.center, GATE_JITTER)

        destination = self.find_airport(destination_code)
        if destination is None:
            logger.debug("Unknown destination %s for taxi-out, using %s", destination_code, self.airports[0].code)
            destination = self.airports[0]

        return Route(
            origin_code=gate,
            origin_coordinate=gate_coord,
            destination_code=destination_code,
            destination_coordinate=destination.coordinate,
            waypoints=(
                gate_coord,
                terminal.junction,
                geo.main_taxiway,
                geo.hold_short,
                geo.departure_threshold,
            ),
            progress=self.rng.uniform(*TAXI_OUT_PROGRESS_RANGE),
        )

    def departure_route(self, destination: Airport) -> Route:
        """
        Create a climb-out from the departure runway toward the destination.

        Args:
            destination: Airport the flight is heading to

        Returns:
            Route with 4 waypoints and progress in [0.0, 0.5]
        """
        geo = self.geometry
        weight = LIFTOFF_THRESHOLD_WEIGHT

        liftoff = Coordinate(
            geo.departure_threshold.latitude * weight + geo.departure_end.latitude * (1 - weight),
            geo.departure_threshold.longitude * weight + geo.departure_end.longitude * (1 - weight),
        )
        initial_climb = self._offset(geo.departure_end, *INITIAL_CLIMB_OFFSET)
        departure_fix = self._departure_fix(destination.coordinate)

        return Route(
            origin_code=geo.code,
            origin_coordinate=geo.center,
            destination_code=destination.code,
            destination_coordinate=destination.coordinate,
            waypoints=(geo.departure_threshold, liftoff, initial_climb, departure_fix),
            progress=self.rng.uniform(*DEPARTURE_PROGRESS_RANGE),
        )
