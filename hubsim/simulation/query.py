"""
Fleet Queries
Filtering and lookup over a fleet snapshot, for flight lists.
"""

from enum import Enum
from typing import Iterable, List, Optional

from hubsim.simulation.models import Aircraft, FlightStatus


class FlightFilter(str, Enum):
    """Flight list tabs."""

    ALL = "all"
    ARRIVING = "arriving"
    DEPARTING = "departing"
    DELAYED = "delayed"


FILTER_STATUSES = {
    FlightFilter.ALL: frozenset(FlightStatus),
    FlightFilter.ARRIVING: frozenset({FlightStatus.APPROACHING, FlightStatus.TAXIING_IN}),
    FlightFilter.DEPARTING: frozenset({FlightStatus.BOARDING, FlightStatus.TAXIING_OUT}),
    FlightFilter.DELAYED: frozenset({FlightStatus.DELAYED}),
}


def _matches(aircraft: Aircraft, needle: str) -> bool:
    return (
        needle in aircraft.flight_number.lower()
        or needle in aircraft.airline.lower()
        or needle in (aircraft.gate or "").lower()
    )


def filter_fleet(
    fleet: Iterable[Aircraft],
    flight_filter: FlightFilter = FlightFilter.ALL,
    search_text: str = "",
) -> List[Aircraft]:
    """
    Filter a fleet by tab and free-text search, highest priority first.

    Args:
        fleet: Aircraft snapshot
        flight_filter: Status group to keep
        search_text: Case-insensitive match on flight number, airline or gate

    Returns:
        Matching aircraft ordered by status priority (stable within a priority)

    Example:
        >>> filter_fleet(snapshot, FlightFilter.ARRIVING, "ua")
    """
    statuses = FILTER_STATUSES[FlightFilter(flight_filter)]
    needle = search_text.strip().lower()

    result = [a for a in fleet if a.status in statuses]
    if needle:
        result = [a for a in result if _matches(a, needle)]

    return sorted(result, key=lambda a: a.status.priority, reverse=True)


def find_aircraft(fleet: Iterable[Aircraft], aircraft_id: str) -> Optional[Aircraft]:
    """Look up an aircraft by its stable id."""
    for aircraft in fleet:
        if aircraft.id == aircraft_id:
            return aircraft
    return None
