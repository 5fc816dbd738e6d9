"""
Tick Engine
Advances every moving aircraft along its route and drives phase transitions.

Per tick, for each aircraft:
1. Stationary aircraft (no route, or a non-moving status) are returned as-is
2. Route progress grows by a status-dependent speed factor, capped at 1.0
3. Progress >= 0.95 triggers exactly one status transition:

    approaching  -> taxiing_in   taxi-in route to the assigned gate
    taxiing_in   -> parked       route cleared, stays at the final waypoint
    taxiing_out  -> departed     departure route toward the destination
    departed     -> approaching  recycled as a new inbound flight

Parked, boarding, delayed and cancelled have no automatic exit.

The engine never mutates its input: tick() returns a new list of new
Aircraft objects, so snapshots handed to observers stay valid.
"""

import logging
import random
from dataclasses import replace
from typing import Iterable, List, Optional

from hubsim.simulation.constants import (
    APPROACH_ALTITUDE_RANGE,
    APPROACH_SPEED_RANGE,
    DEPARTURE_ALTITUDE_RANGE,
    DEPARTURE_SPEED_RANGE,
    PHASE_COMPLETION_THRESHOLD,
    SPEED_FACTORS,
    TAXI_SPEED_RANGE,
)
from hubsim.simulation.fleet_generator import FleetGenerator
from hubsim.simulation.models import Aircraft, FlightStatus, Route
from hubsim.simulation.route_generator import RouteGenerator

logger = logging.getLogger(__name__)


class TickEngine:
    """
    Applies one simulation step to a fleet.

    Example:
        >>> engine = TickEngine(route_generator, fleet_generator)
        >>> fleet = engine.tick(fleet)
    """

    def __init__(
        self,
        route_generator: RouteGenerator,
        fleet_generator: FleetGenerator,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.routes = route_generator
        self.fleet = fleet_generator
        self.rng = rng or route_generator.rng

    @staticmethod
    def speed_factor(status: FlightStatus) -> float:
        """Route progress gained per tick in the given status."""
        return SPEED_FACTORS.get(status.value, 0.0)

    def tick(self, fleet: Iterable[Aircraft]) -> List[Aircraft]:
        """
        Advance the whole fleet by one tick.

        Args:
            fleet: Current aircraft

        Returns:
            New list with the updated aircraft, same order and length
        """
        return [self.advance(aircraft) for aircraft in fleet]

    def advance(self, aircraft: Aircraft) -> Aircraft:
        """Advance a single aircraft by one tick."""
        route = aircraft.route
        if route is None or not aircraft.status.is_moving:
            return aircraft

        progress = min(1.0, route.progress + self.speed_factor(aircraft.status))
        route = replace(route, progress=progress)

        if progress >= PHASE_COMPLETION_THRESHOLD:
            return self.transition(aircraft, route)

        return replace(
            aircraft,
            route=route,
            coordinate=route.current_position(),
            heading=route.current_heading(),
        )

    def transition(self, aircraft: Aircraft, route: Route) -> Aircraft:
        """
        Move an aircraft that completed its phase into the next status.

        When the next phase cannot be set up (no gate for taxi-in, unknown
        destination for departure) the aircraft keeps its status and its
        advanced route; the transition is retried on the next tick.

        Args:
            aircraft: Aircraft as of the previous tick
            route: Its route with progress already advanced

        Returns:
            Updated aircraft

        Raises:
            ValueError: If called for a stationary status
        """
        handlers = {
            FlightStatus.APPROACHING: self._land,
            FlightStatus.TAXIING_IN: self._park,
            FlightStatus.TAXIING_OUT: self._take_off,
            FlightStatus.DEPARTED: self._recycle,
        }
        if aircraft.status not in handlers:
            raise ValueError(f"No transition from {aircraft.status.value}")

        return handlers[aircraft.status](aircraft, route)

    def _hold(self, aircraft: Aircraft, route: Route) -> Aircraft:
        """Keep the current status on a stale route."""
        return replace(
            aircraft,
            route=route,
            coordinate=route.current_position(),
            heading=route.current_heading(),
        )

    def _land(self, aircraft: Aircraft, route: Route) -> Aircraft:
        if aircraft.gate is None:
            logger.debug("%s has no gate, holding approach", aircraft.flight_number)
            return self._hold(aircraft, route)

        new_route = self.routes.taxi_in_route(aircraft.gate)
        return replace(
            aircraft,
            status=FlightStatus.TAXIING_IN,
            route=new_route,
            coordinate=new_route.current_position(),
            heading=new_route.current_heading(),
            speed=self.rng.uniform(*TAXI_SPEED_RANGE),
            altitude=0.0,
            eta=self.fleet.eta_for_status(FlightStatus.TAXIING_IN),
        )

    def _park(self, aircraft: Aircraft, route: Route) -> Aircraft:
        return replace(
            aircraft,
            status=FlightStatus.PARKED,
            route=None,
            coordinate=route.waypoints[-1] if route.waypoints else aircraft.coordinate,
            speed=0.0,
            heading=self.rng.uniform(0.0, 360.0) % 360.0,
            eta=None,
        )

    def _take_off(self, aircraft: Aircraft, route: Route) -> Aircraft:
        destination = self.routes.find_airport(aircraft.destination)
        if destination is None:
            logger.debug(
                "%s destination %s unknown, holding taxi-out",
                aircraft.flight_number,
                aircraft.destination,
            )
            return self._hold(aircraft, route)

        new_route = self.routes.departure_route(destination)
        return replace(
            aircraft,
            status=FlightStatus.DEPARTED,
            route=new_route,
            coordinate=new_route.current_position(),
            heading=new_route.current_heading(),
            speed=self.rng.uniform(*DEPARTURE_SPEED_RANGE),
            altitude=self.rng.uniform(*DEPARTURE_ALTITUDE_RANGE),
            gate=None,
            etd=None,
        )

    def _recycle(self, aircraft: Aircraft, route: Route) -> Aircraft:
        """Turn a completed departure into a new inbound flight."""
        rng = self.rng
        airports = self.routes.airports
        candidates = [a for a in airports if a.code != aircraft.origin] or airports
        origin = rng.choice(candidates)

        flight_number, airline, aircraft_type = self.fleet.random_identity()
        new_route = self.routes.approach_route(origin)

        logger.debug(
            "%s recycled as %s inbound from %s",
            aircraft.id,
            flight_number,
            origin.code,
        )

        return replace(
            aircraft,
            flight_number=flight_number,
            airline=airline,
            aircraft_type=aircraft_type,
            status=FlightStatus.APPROACHING,
            route=new_route,
            coordinate=new_route.current_position(),
            heading=new_route.current_heading(),
            speed=rng.uniform(*APPROACH_SPEED_RANGE),
            altitude=rng.uniform(*APPROACH_ALTITUDE_RANGE),
            origin=origin.code,
            destination=self.fleet.hub_code,
            gate=self.fleet.assign_gate(FlightStatus.APPROACHING),
            eta=self.fleet.eta_for_status(FlightStatus.APPROACHING),
            etd=None,
        )
