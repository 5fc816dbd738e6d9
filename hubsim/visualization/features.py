"""
GeoJSON Feature Export
Converts fleet snapshots into GeoJSON features for map layers.

GeoJSON positions are [longitude, latitude].
"""

from typing import Any, Dict, Iterable, List, Optional, Sequence

from hubsim.simulation.models import Aircraft, Coordinate


def _position(coordinate: Coordinate) -> List[float]:
    return [coordinate.longitude, coordinate.latitude]


def _line_string(points: Sequence[Coordinate]) -> Dict[str, Any]:
    return {"type": "LineString", "coordinates": [_position(p) for p in points]}


def aircraft_to_feature(aircraft: Aircraft) -> Dict[str, Any]:
    """
    Point feature for an aircraft symbol.

    Optional gate/origin/destination properties are only present when set.
    """
    status = aircraft.status
    properties: Dict[str, Any] = {
        "id": aircraft.id,
        "flightNumber": aircraft.flight_number,
        "aircraftType": aircraft.aircraft_type,
        "airline": aircraft.airline,
        "heading": aircraft.heading,
        "speed": aircraft.speed,
        "altitude": aircraft.altitude,
        "status": status.value,
        "icon": status.icon_name,
        "priority": status.priority,
        "color": status.color,
    }
    if aircraft.gate is not None:
        properties["gate"] = aircraft.gate
    if aircraft.origin is not None:
        properties["origin"] = aircraft.origin
    if aircraft.destination is not None:
        properties["destination"] = aircraft.destination

    return {
        "type": "Feature",
        "geometry": {"type": "Point", "coordinates": _position(aircraft.coordinate)},
        "properties": properties,
    }


def route_to_feature(aircraft: Aircraft) -> Optional[Dict[str, Any]]:
    """Full route line, or None for stationary aircraft."""
    if aircraft.route is None:
        return None

    return {
        "type": "Feature",
        "geometry": _line_string(aircraft.route.waypoints),
        "properties": {
            "id": aircraft.id,
            "flightNumber": aircraft.flight_number,
            "status": aircraft.status.value,
            "color": aircraft.status.color,
        },
    }


def traveled_path_to_feature(aircraft: Aircraft) -> Optional[Dict[str, Any]]:
    """Already-flown part of the route, or None when there is nothing to draw."""
    if aircraft.route is None:
        return None

    path = aircraft.route.traveled_path()
    if len(path) < 2:
        return None

    return {
        "type": "Feature",
        "geometry": _line_string(path),
        "properties": {
            "id": aircraft.id,
            "flightNumber": aircraft.flight_number,
            "type": "traveled",
        },
    }


def fleet_to_feature_collection(
    fleet: Iterable[Aircraft], include_routes: bool = False
) -> Dict[str, Any]:
    """
    Build a FeatureCollection for a whole snapshot.

    Args:
        fleet: Aircraft snapshot
        include_routes: Also add route and traveled-path lines

    Returns:
        GeoJSON FeatureCollection dictionary
    """
    features: List[Dict[str, Any]] = []
    for aircraft in fleet:
        features.append(aircraft_to_feature(aircraft))
        if include_routes:
            for line in (route_to_feature(aircraft), traveled_path_to_feature(aircraft)):
                if line is not None:
                    features.append(line)

    return {"type": "FeatureCollection", "features": features}
