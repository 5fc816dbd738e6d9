"""
Tests for initial fleet generation.
"""

import pytest
import random
import re
import sys
from collections import Counter
from dataclasses import replace
from datetime import datetime, timedelta
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from hubsim.config import Config
from hubsim.simulation.fleet_generator import FleetGenerator
from hubsim.simulation.models import FlightStatus
from hubsim.simulation.route_generator import RouteGenerator

NOW = datetime(2025, 6, 1, 12, 0, 0)
GATE_PATTERN = re.compile(r"^[ABCG]([1-9]|1[0-9]|20)$")
FLIGHT_NUMBER_PATTERN = re.compile(r"^[A-Z0-9]{2}\d{3,4}$")


@pytest.fixture
def config():
    return Config()


@pytest.fixture
def route_generator(config):
    return RouteGenerator(config.build_geometry(), config.build_airports(), random.Random(1))


@pytest.fixture
def generator(config, route_generator):
    """Fleet generator with a fixed clock."""
    return FleetGenerator(
        route_generator,
        config.build_airlines(),
        config.aircraft_types,
        clock=lambda: NOW,
    )


@pytest.fixture
def fleet(generator):
    return generator.generate_fleet(300)


class TestStatusPool:
    """Tests for the weighted status pool."""

    def test_exact_distribution(self, generator):
        counts = Counter(generator.build_status_pool(100))
        assert counts[FlightStatus.APPROACHING] == 15
        assert counts[FlightStatus.TAXIING_IN] == 10
        assert counts[FlightStatus.PARKED] == 40
        assert counts[FlightStatus.BOARDING] == 15
        assert counts[FlightStatus.TAXIING_OUT] == 10
        assert counts[FlightStatus.DELAYED] == 8
        assert counts[FlightStatus.CANCELLED] == 2
        assert counts[FlightStatus.DEPARTED] == 0

    def test_single_aircraft_is_parked(self, generator):
        assert generator.build_status_pool(1) == [FlightStatus.PARKED]

    def test_rounding_padded_with_parked(self, generator):
        """7 aircraft: 1 approaching, 2 parked, 1 boarding, rest padded as parked."""
        pool = generator.build_status_pool(7)
        counts = Counter(pool)
        assert len(pool) == 7
        assert counts[FlightStatus.APPROACHING] == 1
        assert counts[FlightStatus.BOARDING] == 1
        assert counts[FlightStatus.PARKED] == 5

    def test_pool_size(self, generator):
        for count in (1, 2, 3, 13, 99, 101, 500):
            assert len(generator.build_status_pool(count)) == count


class TestGenerateFleet:
    """Tests for generate_fleet."""

    @pytest.mark.parametrize("count", [1, 2, 7, 50])
    def test_population_size(self, generator, count):
        assert len(generator.generate_fleet(count)) == count

    def test_invalid_count(self, generator):
        with pytest.raises(ValueError):
            generator.generate_fleet(0)

    def test_small_catalog_rejected(self, config):
        routes = RouteGenerator(config.build_geometry(), config.build_airports()[:1])
        generator = FleetGenerator(routes, config.build_airlines(), config.aircraft_types)
        with pytest.raises(ValueError):
            generator.generate_fleet(5)

    def test_empty_catalogs_rejected(self, route_generator, config):
        with pytest.raises(ValueError):
            FleetGenerator(route_generator, [], config.aircraft_types)
        with pytest.raises(ValueError):
            FleetGenerator(route_generator, config.build_airlines(), [])

    def test_unique_ids(self, fleet):
        ids = [aircraft.id for aircraft in fleet]
        assert len(set(ids)) == len(ids)
        assert ids[0] == "N10000"
        assert ids[-1] == "N10299"

    def test_identity_fields(self, fleet, config):
        airline_names = {a.name for a in config.build_airlines()}
        for aircraft in fleet:
            assert FLIGHT_NUMBER_PATTERN.match(aircraft.flight_number)
            assert aircraft.airline in airline_names
            assert aircraft.aircraft_type in config.aircraft_types

    def test_routes_match_status(self, fleet):
        for aircraft in fleet:
            if aircraft.status.is_moving:
                assert aircraft.route is not None
                assert len(aircraft.route.waypoints) >= 4
                assert aircraft.coordinate == aircraft.route.current_position()
                assert aircraft.heading == aircraft.route.current_heading()
            else:
                assert aircraft.route is None
                assert aircraft.speed == 0.0
                assert aircraft.altitude == 0.0
                assert 0.0 <= aircraft.heading < 360.0

    def test_speed_and_altitude_ranges(self, fleet):
        for aircraft in fleet:
            if aircraft.status is FlightStatus.APPROACHING:
                assert 140 <= aircraft.speed <= 180
                assert 2000 <= aircraft.altitude <= 4000
            elif aircraft.status in (FlightStatus.TAXIING_IN, FlightStatus.TAXIING_OUT):
                assert 10 <= aircraft.speed <= 25
                assert aircraft.altitude == 0.0

    def test_gates(self, fleet):
        for aircraft in fleet:
            assert GATE_PATTERN.match(aircraft.gate)

    def test_stationary_near_terminal(self, fleet, route_generator):
        geometry = route_generator.geometry
        for aircraft in fleet:
            if aircraft.route is None:
                center = geometry.terminal_for_gate(aircraft.gate).center
                assert abs(aircraft.coordinate.latitude - center.latitude) <= 0.001 + 1e-12
                assert abs(aircraft.coordinate.longitude - center.longitude) <= 0.001 + 1e-12

    def test_origin_destination_convention(self, fleet):
        for aircraft in fleet:
            if aircraft.status.is_arrival:
                assert aircraft.destination == "SFO"
                assert aircraft.origin != "SFO"
            else:
                assert aircraft.origin == "SFO"
                assert aircraft.destination != "SFO"
            assert aircraft.origin != aircraft.destination

    def test_eta_etd_presence(self, fleet):
        eta_statuses = {FlightStatus.APPROACHING, FlightStatus.TAXIING_IN, FlightStatus.DELAYED}
        etd_statuses = {FlightStatus.BOARDING, FlightStatus.TAXIING_OUT, FlightStatus.DELAYED}
        for aircraft in fleet:
            assert (aircraft.eta is not None) == (aircraft.status in eta_statuses)
            assert (aircraft.etd is not None) == (aircraft.status in etd_statuses)


class TestSchedule:
    """Tests for ETA/ETD generation."""

    def test_eta_bounds(self, generator):
        for _ in range(50):
            eta = generator.eta_for_status(FlightStatus.APPROACHING)
            assert NOW + timedelta(seconds=300) <= eta <= NOW + timedelta(seconds=1200)
            eta = generator.eta_for_status(FlightStatus.TAXIING_IN)
            assert NOW + timedelta(seconds=60) <= eta <= NOW + timedelta(seconds=300)

    def test_etd_bounds(self, generator):
        for _ in range(50):
            etd = generator.etd_for_status(FlightStatus.BOARDING)
            assert NOW + timedelta(seconds=600) <= etd <= NOW + timedelta(seconds=1800)
            etd = generator.etd_for_status(FlightStatus.DELAYED)
            assert NOW + timedelta(seconds=1800) <= etd <= NOW + timedelta(seconds=7200)

    def test_no_schedule(self, generator):
        assert generator.eta_for_status(FlightStatus.PARKED) is None
        assert generator.etd_for_status(FlightStatus.CANCELLED) is None


class TestCreateAircraft:
    """Tests for single-aircraft creation."""

    def test_departed_aircraft(self, generator):
        aircraft = generator.create_aircraft(3, FlightStatus.DEPARTED)
        assert aircraft.id == "N10003"
        assert aircraft.gate is None
        assert len(aircraft.route.waypoints) == 4
        assert 160 <= aircraft.speed <= 200
        assert 1000 <= aircraft.altitude <= 3000
        assert aircraft.origin == "SFO"

    def test_taxi_out_destination(self, generator):
        aircraft = generator.create_aircraft(0, FlightStatus.TAXIING_OUT)
        assert aircraft.route.destination_code == aircraft.destination
        assert aircraft.route.origin_code == aircraft.gate

    def test_assign_gate(self, generator):
        assert generator.assign_gate(FlightStatus.DEPARTED) is None
        for status in FlightStatus:
            if status is not FlightStatus.DEPARTED:
                assert GATE_PATTERN.match(generator.assign_gate(status))

    def test_gates_follow_configured_terminals(self, config):
        """Gate letters come from the hub's terminals."""
        default = config.build_geometry()
        geometry = replace(
            default,
            terminals={"D": default.terminals["A"], "E": default.terminals["B"]},
            fallback_terminal="E",
        )
        routes = RouteGenerator(geometry, config.build_airports(), random.Random(4))
        generator = FleetGenerator(routes, config.build_airlines(), config.aircraft_types)
        letters = {generator.assign_gate(FlightStatus.PARKED)[0] for _ in range(100)}
        assert letters == {"D", "E"}


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
