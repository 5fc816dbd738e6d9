"""
HUBSIM Configuration Management

This module provides configuration management for the HUBSIM airport
simulator. It includes physical constants, simulation settings, status colors,
and runtime configuration loaded from YAML files.
"""

import logging
import os
from copy import deepcopy
from typing import Any, Dict, List, Optional

import yaml

logger = logging.getLogger(__name__)

# =============================================================================
# Physical Constants
# =============================================================================


class Constants:
    """Physical constants representing real-world measurements."""

    EARTH_RADIUS_KM: float = 6371.0  # Earth's radius for distance calculations
    METERS_TO_FEET: float = 3.28084  # Altitude conversion factor
    KNOTS_TO_KMH: float = 1.852  # Speed conversion: knots to km/h
    KM_PER_DEGREE_LAT: float = 111.32  # Distance per degree latitude at equator


# =============================================================================
# Simulation Settings
# =============================================================================


class Settings:
    """Configurable settings for the simulation and its visualization."""

    # --- Fleet & Tick ---
    DEFAULT_AIRCRAFT_COUNT: int = 500  # Initial fleet size
    DEFAULT_TICK_INTERVAL: float = 1.0  # Seconds between ticks
    MIN_TICK_INTERVAL: float = 0.05  # Lower bound for the tick loop
    STATS_EVERY_N_TICKS: int = 10  # Console stats cadence in run()

    # --- Visualization ---
    DEFAULT_MAP_STYLE: str = "CartoDB.Positron"  # Base map tile style
    DEFAULT_ZOOM: int = 13  # Initial map zoom level (airport scale)
    ROUTE_WEIGHT: int = 2  # Route line thickness
    ROUTE_OPACITY: float = 0.6  # Route transparency (0-1)
    TRAVELED_OPACITY: float = 0.9  # Traveled path transparency (0-1)
    MARKER_RADIUS: int = 5  # Aircraft marker size (pixels)
    MARKER_OPACITY: float = 0.8  # Marker border transparency (0-1)
    MARKER_FILL_OPACITY: float = 0.6  # Marker fill transparency (0-1)


# =============================================================================
# Color Schemes
# =============================================================================


class Colors:
    """Color definitions for visualizations."""

    STATUS_COLORS: Dict[str, str] = {
        "approaching": "#007AFF",  # Blue
        "taxiing_in": "#34C759",  # Green
        "parked": "#8E8E93",  # Gray
        "boarding": "#34C759",  # Green
        "taxiing_out": "#FF9500",  # Orange
        "departed": "#8E8E93",  # Gray
        "delayed": "#FF3B30",  # Red
        "cancelled": "#8E8E93",  # Gray
    }

    HUB_MARKER_COLOR: str = "red"
    TRAVELED_PATH_COLOR: str = "#5856D6"  # Purple


# =============================================================================
# Default Catalogs
# =============================================================================

DEFAULT_AIRPORTS: List[Dict[str, Any]] = [
    {"code": "LAX", "name": "Los Angeles", "latitude": 33.9425, "longitude": -118.4081},
    {"code": "JFK", "name": "New York JFK", "latitude": 40.6413, "longitude": -73.7781},
    {"code": "ORD", "name": "Chicago O'Hare", "latitude": 41.9742, "longitude": -87.9073},
    {"code": "DFW", "name": "Dallas Fort Worth", "latitude": 32.8998, "longitude": -97.0403},
    {"code": "DEN", "name": "Denver", "latitude": 39.8561, "longitude": -104.6737},
    {"code": "SEA", "name": "Seattle", "latitude": 47.4502, "longitude": -122.3088},
    {"code": "PHX", "name": "Phoenix", "latitude": 33.4373, "longitude": -112.0078},
    {"code": "BOS", "name": "Boston", "latitude": 42.3656, "longitude": -71.0096},
    {"code": "ATL", "name": "Atlanta", "latitude": 33.6407, "longitude": -84.4277},
    {"code": "MIA", "name": "Miami", "latitude": 25.7959, "longitude": -80.2870},
    {"code": "HNL", "name": "Honolulu", "latitude": 21.3187, "longitude": -157.9225},
    {"code": "NRT", "name": "Tokyo Narita", "latitude": 35.7720, "longitude": 140.3929},
    {"code": "LHR", "name": "London Heathrow", "latitude": 51.4700, "longitude": -0.4543},
    {"code": "PVG", "name": "Shanghai Pudong", "latitude": 31.1443, "longitude": 121.8083},
    {"code": "SYD", "name": "Sydney", "latitude": -33.9399, "longitude": 151.1753},
]

DEFAULT_AIRLINES: List[Dict[str, str]] = [
    {"code": "UA", "name": "United Airlines"},
    {"code": "AA", "name": "American Airlines"},
    {"code": "DL", "name": "Delta Air Lines"},
    {"code": "WN", "name": "Southwest Airlines"},
    {"code": "AS", "name": "Alaska Airlines"},
    {"code": "B6", "name": "JetBlue Airways"},
    {"code": "NK", "name": "Spirit Airlines"},
    {"code": "F9", "name": "Frontier Airlines"},
]

DEFAULT_AIRCRAFT_TYPES: List[str] = [
    "B737-800",
    "B737-900",
    "A320",
    "A321",
    "B777-200",
    "B787-9",
    "A350-900",
    "E175",
]

# SFO field layout: runway 28L for arrivals, 28R for departures
DEFAULT_GEOMETRY: Dict[str, Any] = {
    "arrival_runway": {
        "threshold": [37.6135, -122.3575],
        "end": [37.6280, -122.3930],
    },
    "departure_runway": {
        "threshold": [37.6070, -122.3545],
        "end": [37.6215, -122.3900],
    },
    "taxi": {
        "runway_exit": [37.6200, -122.3850],
        "taxiway_junction": [37.6185, -122.3835],
        "main_taxiway": [37.6170, -122.3820],
        "hold_short": [37.6110, -122.3700],
    },
    "terminals": {
        "A": {"center": [37.6155, -122.3815], "junction": [37.6165, -122.3825]},
        "B": {"center": [37.6175, -122.3830], "junction": [37.6175, -122.3840]},
        "C": {"center": [37.6145, -122.3870], "junction": [37.6155, -122.3860]},
        "G": {"center": [37.6130, -122.3900], "junction": [37.6140, -122.3880]},
    },
    "fallback_terminal": "G",
}


# =============================================================================
# Runtime Configuration
# =============================================================================


class Config:
    """
    Runtime configuration manager for HUBSIM.

    Loads settings from YAML files or uses sensible defaults.
    Provides property-based access to common settings and builds the
    reference catalogs consumed by the simulation.

    Example:
        >>> config = Config('config.yaml')
        >>> print(f"Simulating {config.hub_name} with {config.aircraft_count} aircraft")
    """

    def __init__(self, config_path: Optional[str] = None) -> None:
        """
        Initialize configuration.

        Args:
            config_path: Path to YAML configuration file. If None or missing,
                        uses default configuration.
        """
        self.config_path = config_path
        self._config: Dict[str, Any] = self._load_config()

    def _load_config(self) -> Dict[str, Any]:
        """
        Load configuration from YAML file or return defaults.

        Sections missing from the file are filled in from the defaults.

        Returns:
            Configuration dictionary
        """
        if self.config_path is None or not os.path.exists(self.config_path):
            return self._get_default_config()

        try:
            with open(self.config_path, "r", encoding="utf-8") as f:
                config = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            logger.warning("Could not load config file %s: %s", self.config_path, e)
            return self._get_default_config()

        if not self._validate_config(config):
            logger.warning("Invalid config structure in %s, using defaults", self.config_path)
            return self._get_default_config()

        merged = self._get_default_config()
        geometry = self._merge_geometry(merged["geometry"], config.get("geometry"))
        merged.update(config)
        merged["geometry"] = geometry

        if not self._validate_geometry(geometry):
            logger.warning("Invalid geometry section in %s, using defaults", self.config_path)
            return self._get_default_config()

        return merged

    @staticmethod
    def _merge_geometry(defaults: Dict[str, Any], override: Any) -> Dict[str, Any]:
        """
        Merge a (possibly partial) geometry section over the defaults.

        Runway and taxi point blocks are merged key by key. A ``terminals``
        block replaces the default terminal set as a whole.
        """
        if not isinstance(override, dict):
            return defaults

        merged = deepcopy(defaults)
        for key, value in override.items():
            if key in ("arrival_runway", "departure_runway", "taxi") and isinstance(value, dict):
                merged[key] = {**merged[key], **value}
            else:
                merged[key] = value
        return merged

    @staticmethod
    def _validate_geometry(geometry: Any) -> bool:
        """
        Check that a geometry section can build a HubGeometry.

        Args:
            geometry: Merged geometry dictionary

        Returns:
            True if valid, False otherwise
        """

        def is_point(value: Any) -> bool:
            return (
                isinstance(value, (list, tuple))
                and len(value) == 2
                and all(isinstance(v, (float, int)) for v in value)
            )

        try:
            assert isinstance(geometry, dict)

            for runway in ("arrival_runway", "departure_runway"):
                assert is_point(geometry[runway]["threshold"])
                assert is_point(geometry[runway]["end"])

            taxi = geometry["taxi"]
            for name in ("runway_exit", "taxiway_junction", "main_taxiway", "hold_short"):
                assert is_point(taxi[name])

            terminals = geometry["terminals"]
            assert isinstance(terminals, dict) and terminals
            for letter, terminal in terminals.items():
                assert isinstance(letter, str) and len(letter) == 1 and letter.isupper()
                assert is_point(terminal["center"])
                assert is_point(terminal["junction"])

            assert geometry.get("fallback_terminal", "G") in terminals

            return True
        except (AssertionError, KeyError, TypeError):
            return False

    def _validate_config(self, config: Any) -> bool:
        """
        Validate configuration structure and required fields.

        Args:
            config: Configuration dictionary to validate

        Returns:
            True if valid, False otherwise
        """
        try:
            assert isinstance(config, dict)

            # Required: hub section
            assert "hub" in config
            hub = config["hub"]
            assert isinstance(hub["code"], str)
            assert isinstance(hub["latitude"], (float, int))
            assert isinstance(hub["longitude"], (float, int))
            assert -90 <= hub["latitude"] <= 90
            assert -180 <= hub["longitude"] <= 180

            # Required: simulation section
            assert "simulation" in config
            sim = config["simulation"]
            assert isinstance(sim["aircraft_count"], int)
            assert sim["aircraft_count"] >= 1
            assert isinstance(sim["tick_interval_seconds"], (float, int))
            assert sim["tick_interval_seconds"] > 0

            # Optional: geometry overrides are merged over the default layout
            if "geometry" in config:
                assert isinstance(config["geometry"], dict)

            # Optional: airport catalog needs an origin and a distinct destination
            if "airports" in config:
                airports = config["airports"]
                assert isinstance(airports, list)
                assert len(airports) >= 2
                for airport in airports:
                    assert isinstance(airport["code"], str)
                    assert isinstance(airport["latitude"], (float, int))
                    assert isinstance(airport["longitude"], (float, int))

            return True
        except (AssertionError, KeyError, TypeError):
            return False

    def _get_default_config(self) -> Dict[str, Any]:
        """
        Get default configuration.

        Returns:
            Default configuration dictionary
        """
        return {
            "hub": {
                "code": "SFO",
                "name": "San Francisco International",
                "latitude": 37.6213,
                "longitude": -122.3790,
            },
            "simulation": {
                "aircraft_count": Settings.DEFAULT_AIRCRAFT_COUNT,
                "tick_interval_seconds": Settings.DEFAULT_TICK_INTERVAL,
                "seed": None,
            },
            "geometry": deepcopy(DEFAULT_GEOMETRY),
            "airports": deepcopy(DEFAULT_AIRPORTS),
            "airlines": deepcopy(DEFAULT_AIRLINES),
            "aircraft_types": list(DEFAULT_AIRCRAFT_TYPES),
            "logging": {
                "level": "INFO",
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            },
        }

    def save_config(self) -> None:
        """
        Save current configuration to YAML file.

        Raises:
            ValueError: If config_path is not set
        """
        if self.config_path is None:
            raise ValueError("Cannot save config: no config_path specified")

        with open(self.config_path, "w", encoding="utf-8") as f:
            yaml.safe_dump(self._config, f, default_flow_style=False, sort_keys=False)

    # --- Property Accessors ---

    @property
    def hub_code(self) -> str:
        """Get hub airport code."""
        return self._config["hub"]["code"]

    @property
    def hub_name(self) -> str:
        """Get descriptive hub name."""
        return self._config["hub"].get("name", self.hub_code)

    @property
    def hub_latitude(self) -> float:
        """Get hub center latitude in degrees."""
        return float(self._config["hub"]["latitude"])

    @property
    def hub_longitude(self) -> float:
        """Get hub center longitude in degrees."""
        return float(self._config["hub"]["longitude"])

    @property
    def aircraft_count(self) -> int:
        """Get initial fleet size."""
        return int(self._config["simulation"]["aircraft_count"])

    @property
    def tick_interval(self) -> float:
        """Get tick interval in seconds."""
        interval = float(self._config["simulation"]["tick_interval_seconds"])
        return max(interval, Settings.MIN_TICK_INTERVAL)

    @property
    def seed(self) -> Optional[int]:
        """Get random seed, or None for unseeded runs."""
        return self._config["simulation"].get("seed")

    @property
    def log_level(self) -> str:
        return self.get("logging.level", "INFO")

    @property
    def log_format(self) -> str:
        return self.get("logging.format", "%(levelname)s - %(message)s")

    # --- Catalog Builders ---

    def build_airports(self):
        """
        Build the origin/destination airport catalog.

        Returns:
            List of Airport records
        """
        from hubsim.simulation.models import Airport, Coordinate

        return [
            Airport(
                code=entry["code"],
                name=entry.get("name", entry["code"]),
                coordinate=Coordinate(float(entry["latitude"]), float(entry["longitude"])),
            )
            for entry in self._config["airports"]
        ]

    def build_airlines(self):
        """Build the airline catalog."""
        from hubsim.simulation.models import Airline

        return [Airline(code=entry["code"], name=entry["name"]) for entry in self._config["airlines"]]

    @property
    def aircraft_types(self) -> List[str]:
        return list(self._config["aircraft_types"])

    def build_geometry(self):
        """
        Build the hub reference geometry (runways, taxi points, terminals).

        Returns:
            HubGeometry instance
        """
        from hubsim.simulation.models import Coordinate, HubGeometry, Terminal

        geometry = self._config["geometry"]

        def point(value) -> Coordinate:
            return Coordinate(float(value[0]), float(value[1]))

        terminals = {
            letter: Terminal(
                letter=letter,
                center=point(entry["center"]),
                junction=point(entry["junction"]),
            )
            for letter, entry in geometry["terminals"].items()
        }

        return HubGeometry(
            code=self.hub_code,
            name=self.hub_name,
            center=Coordinate(self.hub_latitude, self.hub_longitude),
            arrival_threshold=point(geometry["arrival_runway"]["threshold"]),
            arrival_end=point(geometry["arrival_runway"]["end"]),
            departure_threshold=point(geometry["departure_runway"]["threshold"]),
            departure_end=point(geometry["departure_runway"]["end"]),
            runway_exit=point(geometry["taxi"]["runway_exit"]),
            taxiway_junction=point(geometry["taxi"]["taxiway_junction"]),
            main_taxiway=point(geometry["taxi"]["main_taxiway"]),
            hold_short=point(geometry["taxi"]["hold_short"]),
            terminals=terminals,
            fallback_terminal=geometry.get("fallback_terminal", "G"),
        )

    # --- Generic Accessors ---

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value using dot notation.

        Args:
            key: Dot-separated key path (e.g., 'hub.latitude')
            default: Default value if key not found

        Returns:
            Configuration value or default

        Example:
            >>> config.get('simulation.aircraft_count', 500)
            500
        """
        keys = key.split(".")
        value = self._config

        for k in keys:
            if isinstance(value, dict):
                value = value.get(k)
                if value is None:
                    return default
            else:
                return default

        return value

    def set(self, key: str, value: Any) -> None:
        """
        Set configuration value using dot notation.

        Args:
            key: Dot-separated key path (e.g., 'simulation.aircraft_count')
            value: Value to set

        Example:
            >>> config.set('simulation.tick_interval_seconds', 0.5)
        """
        keys = key.split(".")
        config = self._config

        # Navigate to parent of target key
        for k in keys[:-1]:
            if k not in config:
                config[k] = {}
            config = config[k]

        config[keys[-1]] = value


def setup_logging(config: Config) -> None:
    """
    Configure root logging from the 'logging' config section.

    Args:
        config: HUBSIM configuration object
    """
    level = getattr(logging, str(config.log_level).upper(), logging.INFO)
    logging.basicConfig(level=level, format=config.log_format)
