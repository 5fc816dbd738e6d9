"""
HUBSIM Visualization Component

Consumers of simulation snapshots.

Main Classes:
    - FleetMapGenerator: Interactive Folium map of a snapshot

Functions:
    - aircraft_to_feature / route_to_feature / traveled_path_to_feature
    - fleet_to_feature_collection: GeoJSON for a whole snapshot

Example:
    >>> from hubsim.visualization import FleetMapGenerator
    >>> generator = FleetMapGenerator(37.6213, -122.3790, hub_code="SFO")
    >>> generator.add_fleet(simulator.snapshot, show_routes=True)
    >>> generator.save("fleet.html")
"""

from .map_generator import FleetMapGenerator
from .features import (
    aircraft_to_feature,
    route_to_feature,
    traveled_path_to_feature,
    fleet_to_feature_collection,
)

from . import constants

__all__ = [
    "FleetMapGenerator",
    "aircraft_to_feature",
    "route_to_feature",
    "traveled_path_to_feature",
    "fleet_to_feature_collection",
    "constants",
]
