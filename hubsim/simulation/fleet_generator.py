"""
Fleet Generator
Creates the initial population of simulated flights.
"""

import logging
import random
from datetime import datetime, timedelta
from typing import Callable, List, Optional, Sequence, Tuple

from hubsim.simulation.constants import (
    AIRCRAFT_ID_BASE,
    AIRCRAFT_ID_PREFIX,
    APPROACH_ALTITUDE_RANGE,
    APPROACH_SPEED_RANGE,
    DEPARTURE_ALTITUDE_RANGE,
    DEPARTURE_SPEED_RANGE,
    ETA_RANGES,
    ETD_RANGES,
    FLIGHT_NUMBER_RANGE,
    GATE_NUMBER_RANGE,
    STATUS_DISTRIBUTION,
    TAXI_SPEED_RANGE,
)
from hubsim.simulation.models import Aircraft, Airline, Airport, FlightStatus, Route
from hubsim.simulation.route_generator import RouteGenerator

logger = logging.getLogger(__name__)


class FleetGenerator:
    """
    Generates the initial fleet and fresh flight identities.

    Statuses are drawn from a fixed percentage table; each aircraft gets a
    route and position consistent with its status.

    Example:
        >>> generator = FleetGenerator(route_generator, airlines, aircraft_types)
        >>> fleet = generator.generate_fleet(500)
    """

    def __init__(
        self,
        route_generator: RouteGenerator,
        airlines: Sequence[Airline],
        aircraft_types: Sequence[str],
        rng: Optional[random.Random] = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        """
        Initialize fleet generator.

        Args:
            route_generator: Generator used for status-consistent routes
            airlines: Airline catalog
            aircraft_types: Aircraft type designators
            rng: Random source (defaults to the route generator's)
            clock: Returns "now" for ETA/ETD computation
        """
        if not airlines:
            raise ValueError("Airline catalog must not be empty")
        if not aircraft_types:
            raise ValueError("Aircraft type catalog must not be empty")

        self.routes = route_generator
        self.airlines: List[Airline] = list(airlines)
        self.aircraft_types: List[str] = list(aircraft_types)
        self.rng = rng or route_generator.rng
        self.clock = clock

    @property
    def hub_code(self) -> str:
        return self.routes.geometry.code

    # --- Status & Schedule ---

    def build_status_pool(self, count: int) -> List[FlightStatus]:
        """
        Build a shuffled list of exactly `count` statuses.

        Each bucket gets floor(count * percent / 100) entries; the rounding
        shortfall is padded with parked.
        """
        pool: List[FlightStatus] = []
        for status_name, percentage in STATUS_DISTRIBUTION:
            pool.extend([FlightStatus(status_name)] * (count * percentage // 100))
        self.rng.shuffle(pool)

        while len(pool) < count:
            pool.append(FlightStatus.PARKED)

        return pool

    def assign_gate(self, status: FlightStatus) -> Optional[str]:
        """Random gate like 'C7' for every status with a ground assignment."""
        if status is FlightStatus.DEPARTED:
            return None
        terminal = self.rng.choice(self.routes.geometry.gate_letters)
        number = self.rng.randint(*GATE_NUMBER_RANGE)
        return f"{terminal}{number}"

    def eta_for_status(self, status: FlightStatus) -> Optional[datetime]:
        bounds = ETA_RANGES.get(status.value)
        if bounds is None:
            return None
        return self.clock() + timedelta(seconds=self.rng.uniform(*bounds))

    def etd_for_status(self, status: FlightStatus) -> Optional[datetime]:
        bounds = ETD_RANGES.get(status.value)
        if bounds is None:
            return None
        return self.clock() + timedelta(seconds=self.rng.uniform(*bounds))

    # --- Identity ---

    def random_identity(self) -> Tuple[str, str, str]:
        """
        Draw a new flight identity.

        Returns:
            Tuple of (flight_number, airline_name, aircraft_type)
        """
        airline = self.rng.choice(self.airlines)
        flight_number = f"{airline.code}{self.rng.randint(*FLIGHT_NUMBER_RANGE)}"
        return flight_number, airline.name, self.rng.choice(self.aircraft_types)

    def random_airport_pair(self) -> Tuple[Airport, Airport]:
        """Random origin and a destination distinct from it."""
        origin = self.rng.choice(self.routes.airports)
        candidates = [a for a in self.routes.airports if a.code != origin.code]
        return origin, self.rng.choice(candidates)

    # --- Aircraft ---

    def create_aircraft(self, index: int, status: FlightStatus) -> Aircraft:
        """
        Create one aircraft in the given status.

        Args:
            index: Fleet index, used for the stable aircraft id
            status: Initial lifecycle phase

        Returns:
            Aircraft with a route matching its status (None when stationary)
        """
        rng = self.rng
        flight_number, airline, aircraft_type = self.random_identity()
        origin, destination = self.random_airport_pair()
        gate = self.assign_gate(status)
        route: Optional[Route] = None

        if status is FlightStatus.APPROACHING:
            route = self.routes.approach_route(origin)
            speed = rng.uniform(*APPROACH_SPEED_RANGE)
            altitude = rng.uniform(*APPROACH_ALTITUDE_RANGE)
        elif status is FlightStatus.TAXIING_IN:
            route = self.routes.taxi_in_route(gate)
            speed = rng.uniform(*TAXI_SPEED_RANGE)
            altitude = 0.0
        elif status is FlightStatus.TAXIING_OUT:
            route = self.routes.taxi_out_route(gate, destination.code)
            speed = rng.uniform(*TAXI_SPEED_RANGE)
            altitude = 0.0
        elif status is FlightStatus.DEPARTED:
            route = self.routes.departure_route(destination)
            speed = rng.uniform(*DEPARTURE_SPEED_RANGE)
            altitude = rng.uniform(*DEPARTURE_ALTITUDE_RANGE)
        elif status in (
            FlightStatus.PARKED,
            FlightStatus.BOARDING,
            FlightStatus.DELAYED,
            FlightStatus.CANCELLED,
        ):
            speed = 0.0
            altitude = 0.0
        else:
            raise ValueError(f"Unhandled flight status: {status!r}")

        if route is not None:
            coordinate = route.current_position()
            heading = route.current_heading()
        else:
            # Parked at the stand, random orientation
            coordinate = self.routes.gate_position(gate)
            heading = rng.uniform(0.0, 360.0) % 360.0

        return Aircraft(
            id=f"{AIRCRAFT_ID_PREFIX}{AIRCRAFT_ID_BASE + index}",
            flight_number=flight_number,
            aircraft_type=aircraft_type,
            airline=airline,
            coordinate=coordinate,
            heading=heading,
            speed=speed,
            altitude=altitude,
            status=status,
            gate=gate,
            eta=self.eta_for_status(status),
            etd=self.etd_for_status(status),
            origin=origin.code if status.is_arrival else self.hub_code,
            destination=self.hub_code if status.is_arrival else destination.code,
            route=route,
        )

    def generate_fleet(self, count: int = 500) -> List[Aircraft]:
        """
        Generate the initial fleet.

        Args:
            count: Number of aircraft (>= 1)

        Returns:
            List of exactly `count` aircraft

        Raises:
            ValueError: If count < 1 or the airport catalog has fewer than 2 entries
        """
        if count < 1:
            raise ValueError(f"Fleet size must be at least 1, got {count}")
        if len(self.routes.airports) < 2:
            raise ValueError("Airport catalog needs at least 2 airports")

        pool = self.build_status_pool(count)
        fleet = [self.create_aircraft(i, status) for i, status in enumerate(pool)]

        logger.info("Generated fleet of %d aircraft", len(fleet))
        return fleet
