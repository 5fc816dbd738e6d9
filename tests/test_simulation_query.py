"""
Tests for fleet filtering and lookup.
"""

import pytest
import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from hubsim.simulation.models import Aircraft, Coordinate, FlightStatus
from hubsim.simulation.query import FlightFilter, filter_fleet, find_aircraft


def make_aircraft(index, status, flight_number, airline, gate=None):
    return Aircraft(
        id=f"N{10000 + index}",
        flight_number=flight_number,
        aircraft_type="A320",
        airline=airline,
        coordinate=Coordinate(37.6, -122.4),
        heading=0.0,
        speed=0.0,
        altitude=0.0,
        status=status,
        gate=gate,
    )


@pytest.fixture
def fleet():
    return [
        make_aircraft(0, FlightStatus.PARKED, "UA101", "United Airlines", "A1"),
        make_aircraft(1, FlightStatus.APPROACHING, "DL202", "Delta Air Lines", "B2"),
        make_aircraft(2, FlightStatus.DELAYED, "AA303", "American Airlines", "C3"),
        make_aircraft(3, FlightStatus.BOARDING, "UA404", "United Airlines", "G4"),
        make_aircraft(4, FlightStatus.TAXIING_IN, "WN505", "Southwest Airlines", "A5"),
        make_aircraft(5, FlightStatus.DEPARTED, "AS606", "Alaska Airlines"),
        make_aircraft(6, FlightStatus.TAXIING_OUT, "B6707", "JetBlue Airways", "B7"),
        make_aircraft(7, FlightStatus.CANCELLED, "F9808", "Frontier Airlines", "C8"),
    ]


class TestFilterFleet:
    """Tests for filter_fleet."""

    def test_all_sorted_by_priority(self, fleet):
        result = filter_fleet(fleet)
        assert len(result) == len(fleet)
        priorities = [a.status.priority for a in result]
        assert priorities == sorted(priorities, reverse=True)
        assert result[0].status is FlightStatus.DELAYED

    def test_stable_within_priority(self, fleet):
        """Equal priorities keep their snapshot order."""
        result = filter_fleet(fleet)
        same = [a.flight_number for a in result if a.status.priority == 80]
        assert same == ["UA404", "WN505", "B6707"]

    def test_arriving(self, fleet):
        result = filter_fleet(fleet, FlightFilter.ARRIVING)
        assert {a.status for a in result} == {FlightStatus.APPROACHING, FlightStatus.TAXIING_IN}

    def test_departing(self, fleet):
        result = filter_fleet(fleet, FlightFilter.DEPARTING)
        assert [a.flight_number for a in result] == ["UA404", "B6707"]

    def test_delayed(self, fleet):
        result = filter_fleet(fleet, "delayed")
        assert [a.flight_number for a in result] == ["AA303"]

    def test_search_flight_number(self, fleet):
        result = filter_fleet(fleet, search_text="ua")
        assert {a.flight_number for a in result} == {"UA101", "UA404"}

    def test_search_airline(self, fleet):
        result = filter_fleet(fleet, search_text="  Delta ")
        assert [a.flight_number for a in result] == ["DL202"]

    def test_search_gate(self, fleet):
        result = filter_fleet(fleet, search_text="b7")
        assert [a.flight_number for a in result] == ["B6707"]

    def test_search_combined_with_filter(self, fleet):
        assert filter_fleet(fleet, FlightFilter.ARRIVING, "united") == []

    def test_invalid_filter(self, fleet):
        with pytest.raises(ValueError):
            filter_fleet(fleet, "landed")


class TestFindAircraft:
    """Tests for find_aircraft."""

    def test_found(self, fleet):
        assert find_aircraft(fleet, "N10003").flight_number == "UA404"

    def test_missing(self, fleet):
        assert find_aircraft(fleet, "N99999") is None


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
