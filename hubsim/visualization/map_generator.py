"""
Map Generator
Renders a fleet snapshot onto an interactive Folium map.
"""

import folium
from typing import Iterable, Optional

from hubsim.config import Colors, Settings
from hubsim.simulation.models import Aircraft
from hubsim.utils import format_altitude, format_speed
from hubsim.visualization.constants import MAP_TILE_URLS


class FleetMapGenerator:
    """
    Generates an HTML map of a simulation snapshot.

    Supports visualization of:
    - Aircraft positions, colored by status
    - Traveled and remaining route segments for moving aircraft
    """

    def __init__(
        self,
        center_lat: float,
        center_lon: float,
        hub_code: str = "HUB",
        zoom: int = Settings.DEFAULT_ZOOM,
        style: str = Settings.DEFAULT_MAP_STYLE,
    ):
        """
        Initialize map generator.

        Args:
            center_lat: Hub center latitude
            center_lon: Hub center longitude
            hub_code: Hub airport code for the marker label
            zoom: Initial zoom level
            style: Map style/theme (default: CartoDB.Positron)
        """
        self.center_lat = center_lat
        self.center_lon = center_lon
        self.hub_code = hub_code
        self.zoom = zoom
        self.style = style
        self.aircraft_count = 0

        self.map = self._create_base_map()

    def _create_base_map(self) -> folium.Map:
        """Create base Folium map with a hub marker."""
        tiles = MAP_TILE_URLS.get(self.style, self.style)

        m = folium.Map(
            location=[self.center_lat, self.center_lon],
            zoom_start=self.zoom,
            tiles=tiles,
            attr="HUBSIM Fleet Visualization",
        )

        folium.Marker(
            [self.center_lat, self.center_lon],
            popup=self.hub_code,
            tooltip=self.hub_code,
            icon=folium.Icon(color=Colors.HUB_MARKER_COLOR, icon="plane", prefix="fa"),
        ).add_to(m)

        return m

    def _create_popup(self, aircraft: Aircraft) -> str:
        """HTML popup for an aircraft marker."""
        return f"""
        <div style='font-family: Arial; min-width: 180px;'>
            <h4 style='margin: 0 0 8px 0; color: {aircraft.status.color};'>
                {aircraft.flight_number}
            </h4>
            <table style='width: 100%; border-collapse: collapse;'>
                <tr><td><b>Airline:</b></td><td>{aircraft.airline}</td></tr>
                <tr><td><b>Type:</b></td><td>{aircraft.aircraft_type}</td></tr>
                <tr><td><b>Status:</b></td><td>{aircraft.status.display_name}</td></tr>
                <tr><td><b>Route:</b></td><td>{aircraft.origin or '-'} → {aircraft.destination or '-'}</td></tr>
                <tr><td><b>Gate:</b></td><td>{aircraft.gate or '-'}</td></tr>
                <tr><td><b>Speed:</b></td><td>{format_speed(aircraft.speed)}</td></tr>
                <tr><td><b>Altitude:</b></td><td>{format_altitude(aircraft.altitude)}</td></tr>
            </table>
        </div>
        """

    def add_aircraft(self, aircraft: Aircraft, show_route: bool = False) -> None:
        """
        Add an aircraft marker, optionally with its route.

        Args:
            aircraft: Aircraft to draw
            show_route: Draw traveled (solid) and remaining (dashed) path
        """
        coordinate = aircraft.coordinate
        color = aircraft.status.color

        if show_route and aircraft.route is not None:
            traveled = aircraft.route.traveled_path()
            remaining = aircraft.route.remaining_path()
            if len(traveled) >= 2:
                folium.PolyLine(
                    [list(p) for p in traveled],
                    color=Colors.TRAVELED_PATH_COLOR,
                    weight=Settings.ROUTE_WEIGHT,
                    opacity=Settings.TRAVELED_OPACITY,
                ).add_to(self.map)
            if len(remaining) >= 2:
                folium.PolyLine(
                    [list(p) for p in remaining],
                    color=color,
                    weight=Settings.ROUTE_WEIGHT,
                    opacity=Settings.ROUTE_OPACITY,
                    dash_array="5, 5",
                ).add_to(self.map)

        folium.CircleMarker(
            location=[coordinate.latitude, coordinate.longitude],
            radius=Settings.MARKER_RADIUS,
            color=color,
            opacity=Settings.MARKER_OPACITY,
            fill=True,
            fill_color=color,
            fill_opacity=Settings.MARKER_FILL_OPACITY,
            popup=folium.Popup(self._create_popup(aircraft), max_width=260),
            tooltip=f"{aircraft.flight_number} ({aircraft.status.display_name})",
        ).add_to(self.map)

        self.aircraft_count += 1

    def add_fleet(
        self, fleet: Iterable[Aircraft], show_routes: bool = False, limit: Optional[int] = None
    ) -> None:
        """
        Add every aircraft of a snapshot.

        Args:
            fleet: Aircraft snapshot
            show_routes: Draw route lines for moving aircraft
            limit: Maximum number of aircraft to draw
        """
        for index, aircraft in enumerate(fleet):
            if limit is not None and index >= limit:
                break
            self.add_aircraft(aircraft, show_route=show_routes)

    def save(self, output_path: str) -> None:
        """Save map to an HTML file."""
        self.map.save(output_path)
