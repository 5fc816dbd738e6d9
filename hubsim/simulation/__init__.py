"""
HUBSIM Simulation Component

Procedural simulation of aircraft cycling through approach, taxi-in, gate,
taxi-out and departure at a hub airport.

Main Classes:
    - RouteGenerator: Phase-specific waypoint routes
    - FleetGenerator: Initial fleet population
    - TickEngine: Per-tick progress and status transitions
    - AircraftSimulator: Fleet state and ticking loop

Example:
    >>> from hubsim.config import Config
    >>> from hubsim.simulation import AircraftSimulator
    >>> simulator = AircraftSimulator(Config())
    >>> simulator.start(500)
    >>> snapshot = simulator.snapshot
    >>> simulator.stop()
"""

# Data models
from .models import (
    Aircraft,
    Airline,
    Airport,
    Coordinate,
    FlightStatus,
    HubGeometry,
    Route,
    Terminal,
)

# Core simulation components
from .route_generator import RouteGenerator
from .fleet_generator import FleetGenerator
from .engine import TickEngine
from .simulator import AircraftSimulator
from .query import FlightFilter, filter_fleet, find_aircraft

# Utilities
from . import constants

__all__ = [
    # Models
    "Aircraft",
    "Airline",
    "Airport",
    "Coordinate",
    "FlightStatus",
    "HubGeometry",
    "Route",
    "Terminal",
    # Main classes
    "RouteGenerator",
    "FleetGenerator",
    "TickEngine",
    "AircraftSimulator",
    # Queries
    "FlightFilter",
    "filter_fleet",
    "find_aircraft",
    # Modules
    "constants",
]
