"""
HUBSIM - Hub Airport Operations Simulator

Procedurally simulates a population of aircraft cycling through approach,
taxi-in, gate dwell, taxi-out and climb-out at a hub airport, producing a
fresh fleet snapshot every tick for real-time visualization.

Components:
    - simulation: Route generation, fleet generation, tick engine
    - visualization: GeoJSON export and interactive snapshot maps

Example:
    >>> from hubsim import Config
    >>> from hubsim.simulation import AircraftSimulator
    >>> simulator = AircraftSimulator(Config())
    >>> simulator.run(max_ticks=60)
"""

from . import config
from . import utils
from . import simulation
from . import visualization
from .config import Config

HUBSIM_VERSION = "v0.1.0"

__version__ = HUBSIM_VERSION
__author__ = "HUBSIM Project"
__license__ = "MIT"

__all__ = [
    "Config",
    "config",
    "utils",
    "simulation",
    "visualization",
]
