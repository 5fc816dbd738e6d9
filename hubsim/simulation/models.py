"""
Simulation Data Models

Immutable records shared by the route generator, fleet generator and tick
engine. Updates are made with dataclasses.replace so that every tick produces
new objects and published snapshots are never mutated.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, NamedTuple, Optional, Tuple

from hubsim.config import Colors
from hubsim.utils import bearing, lerp


class Coordinate(NamedTuple):
    """Geographic point in degrees."""

    latitude: float
    longitude: float


class Airport(NamedTuple):
    """Origin/destination catalog entry."""

    code: str
    name: str
    coordinate: Coordinate


class Airline(NamedTuple):
    code: str
    name: str


@dataclass(frozen=True)
class Terminal:
    """Terminal gate cluster and the taxiway junction that serves it."""

    letter: str
    center: Coordinate
    junction: Coordinate


@dataclass(frozen=True)
class HubGeometry:
    """
    Fixed reference geometry of the simulated hub airport.

    The arrival runway is used by approach routes, the departure runway by
    taxi-out and departure routes. Terminals are keyed by gate letter;
    gates whose letter is not a known terminal are served by
    ``fallback_terminal``.
    """

    code: str
    name: str
    center: Coordinate
    arrival_threshold: Coordinate
    arrival_end: Coordinate
    departure_threshold: Coordinate
    departure_end: Coordinate
    runway_exit: Coordinate
    taxiway_junction: Coordinate
    main_taxiway: Coordinate
    hold_short: Coordinate
    terminals: Dict[str, Terminal] = field(default_factory=dict)
    fallback_terminal: str = "G"

    def __post_init__(self) -> None:
        if not self.terminals:
            raise ValueError("Hub geometry needs at least one terminal")
        if self.fallback_terminal not in self.terminals:
            raise ValueError(
                f"Fallback terminal {self.fallback_terminal!r} is not one of "
                f"{sorted(self.terminals)}"
            )

    @property
    def gate_letters(self) -> List[str]:
        """Terminal letters gates can be assigned to."""
        return sorted(self.terminals)

    def terminal_for_gate(self, gate: Optional[str]) -> Terminal:
        """
        Resolve the terminal serving a gate identifier such as 'B12'.

        Args:
            gate: Gate identifier; its first character selects the terminal

        Returns:
            Matching Terminal, or the fallback terminal for unknown letters
        """
        letter = gate[:1].upper() if gate else ""
        if letter in self.terminals:
            return self.terminals[letter]
        return self.terminals[self.fallback_terminal]


class FlightStatus(str, Enum):
    """Lifecycle phase of a simulated flight."""

    APPROACHING = "approaching"
    TAXIING_IN = "taxiing_in"
    PARKED = "parked"
    BOARDING = "boarding"
    TAXIING_OUT = "taxiing_out"
    DEPARTED = "departed"
    DELAYED = "delayed"
    CANCELLED = "cancelled"

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]

    @property
    def icon_name(self) -> str:
        return _ICON_NAMES[self]

    @property
    def color(self) -> str:
        return Colors.STATUS_COLORS[self.value]

    @property
    def priority(self) -> int:
        """Sort priority for flight lists (higher first)."""
        return _PRIORITIES[self]

    @property
    def is_moving(self) -> bool:
        """True for phases that follow a route."""
        return self in MOVING_STATUSES

    @property
    def is_arrival(self) -> bool:
        """True for arrival-side phases (real origin, hub destination)."""
        return self in ARRIVAL_STATUSES


_DISPLAY_NAMES = {
    FlightStatus.APPROACHING: "Approaching",
    FlightStatus.TAXIING_IN: "Taxiing In",
    FlightStatus.PARKED: "Parked",
    FlightStatus.BOARDING: "Boarding",
    FlightStatus.TAXIING_OUT: "Taxiing Out",
    FlightStatus.DEPARTED: "Departed",
    FlightStatus.DELAYED: "Delayed",
    FlightStatus.CANCELLED: "Cancelled",
}

_ICON_NAMES = {
    FlightStatus.APPROACHING: "aircraft-approaching",
    FlightStatus.TAXIING_IN: "aircraft-taxiing",
    FlightStatus.PARKED: "aircraft-parked",
    FlightStatus.BOARDING: "aircraft-boarding",
    FlightStatus.TAXIING_OUT: "aircraft-taxiing",
    FlightStatus.DEPARTED: "aircraft-departed",
    FlightStatus.DELAYED: "aircraft-delayed",
    FlightStatus.CANCELLED: "aircraft-cancelled",
}

_PRIORITIES = {
    FlightStatus.DELAYED: 100,
    FlightStatus.BOARDING: 80,
    FlightStatus.TAXIING_IN: 80,
    FlightStatus.TAXIING_OUT: 80,
    FlightStatus.APPROACHING: 60,
    FlightStatus.PARKED: 40,
    FlightStatus.DEPARTED: 20,
    FlightStatus.CANCELLED: 20,
}

MOVING_STATUSES = frozenset(
    {
        FlightStatus.APPROACHING,
        FlightStatus.TAXIING_IN,
        FlightStatus.TAXIING_OUT,
        FlightStatus.DEPARTED,
    }
)
STATIONARY_STATUSES = frozenset(
    {
        FlightStatus.PARKED,
        FlightStatus.BOARDING,
        FlightStatus.DELAYED,
        FlightStatus.CANCELLED,
    }
)
ARRIVAL_STATUSES = frozenset(
    {FlightStatus.APPROACHING, FlightStatus.TAXIING_IN, FlightStatus.PARKED}
)


@dataclass(frozen=True)
class Route:
    """
    Path an aircraft is currently following.

    ``progress`` is measured in segment space: progress * (len(waypoints) - 1)
    gives the segment index plus the fraction travelled within it, so every
    segment takes the same share of progress regardless of its length.
    """

    origin_code: str
    origin_coordinate: Coordinate
    destination_code: str
    destination_coordinate: Coordinate
    waypoints: Tuple[Coordinate, ...]
    progress: float = 0.0

    def _segment(self) -> Tuple[int, float]:
        """Return (segment index, fraction within segment) for the current progress."""
        total_segments = len(self.waypoints) - 1
        exact_position = self.progress * total_segments
        segment_index = max(0, min(int(exact_position), total_segments - 1))
        return segment_index, exact_position - segment_index

    def current_position(self) -> Coordinate:
        """Interpolated position for the current progress."""
        if len(self.waypoints) < 2:
            return self.waypoints[0] if self.waypoints else self.origin_coordinate

        index, fraction = self._segment()
        return Coordinate(*lerp(self.waypoints[index], self.waypoints[index + 1], fraction))

    def current_heading(self) -> float:
        """
        Bearing of the current segment.

        Heading is constant within a segment and jumps at segment boundaries.
        """
        if len(self.waypoints) < 2:
            return 0.0

        index, _ = self._segment()
        return bearing(self.waypoints[index], self.waypoints[index + 1])

    def traveled_path(self) -> List[Coordinate]:
        """Waypoints already passed plus the current position."""
        if len(self.waypoints) < 2:
            return []

        index, _ = self._segment()
        path = list(self.waypoints[: index + 1])
        path.append(self.current_position())
        return path

    def remaining_path(self) -> List[Coordinate]:
        """Current position plus the waypoints still ahead."""
        if len(self.waypoints) < 2:
            return []

        index, _ = self._segment()
        path = [self.current_position()]
        path.extend(self.waypoints[index + 1 :])
        return path

    def with_progress(self, progress: float) -> "Route":
        """Copy of this route with progress clamped to [0, 1]."""
        return replace(self, progress=min(1.0, max(0.0, progress)))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "origin_code": self.origin_code,
            "destination_code": self.destination_code,
            "waypoints": [list(point) for point in self.waypoints],
            "progress": self.progress,
        }


@dataclass(frozen=True)
class Aircraft:
    """
    One simulated flight.

    ``route`` is None exactly when the aircraft is stationary (parked,
    boarding, delayed, cancelled); ``gate`` is None while the aircraft has
    no ground assignment (airborne after departure).
    """

    id: str
    flight_number: str
    aircraft_type: str
    airline: str
    coordinate: Coordinate
    heading: float  # 0-360 degrees
    speed: float  # Ground speed in knots
    altitude: float  # Feet, 0 on the ground
    status: FlightStatus
    gate: Optional[str] = None
    eta: Optional[datetime] = None
    etd: Optional[datetime] = None
    origin: Optional[str] = None
    destination: Optional[str] = None
    route: Optional[Route] = None

    @property
    def is_stationary(self) -> bool:
        return self.route is None

    def to_dict(self) -> Dict[str, Any]:
        """Plain-dict snapshot of the aircraft, suitable for JSON encoding."""
        return {
            "id": self.id,
            "flight_number": self.flight_number,
            "aircraft_type": self.aircraft_type,
            "airline": self.airline,
            "latitude": self.coordinate.latitude,
            "longitude": self.coordinate.longitude,
            "heading": self.heading,
            "speed": self.speed,
            "altitude": self.altitude,
            "status": self.status.value,
            "gate": self.gate,
            "eta": self.eta.isoformat() if self.eta else None,
            "etd": self.etd.isoformat() if self.etd else None,
            "origin": self.origin,
            "destination": self.destination,
            "route": self.route.to_dict() if self.route else None,
        }
