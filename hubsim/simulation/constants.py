"""
Simulation Constants
"""

# Status distribution for the initial fleet (percent of fleet)
STATUS_DISTRIBUTION = [
    ("approaching", 15),
    ("taxiing_in", 10),
    ("parked", 40),
    ("boarding", 15),
    ("taxiing_out", 10),
    ("delayed", 8),
    ("cancelled", 2),
]

# Route progress per tick (segment-space fraction)
SPEED_FACTORS = {
    "approaching": 0.008,
    "taxiing_in": 0.015,
    "taxiing_out": 0.015,
    "departed": 0.012,
}
PHASE_COMPLETION_THRESHOLD = 0.95  # Transition slightly before route end

# Initial progress ranges per route archetype
APPROACH_PROGRESS_RANGE = (0.0, 0.7)
TAXI_IN_PROGRESS_RANGE = (0.0, 0.8)
TAXI_OUT_PROGRESS_RANGE = (0.0, 0.7)
DEPARTURE_PROGRESS_RANGE = (0.0, 0.5)

# Speed (knots) and altitude (feet) ranges
APPROACH_SPEED_RANGE = (140.0, 180.0)
APPROACH_ALTITUDE_RANGE = (2000.0, 4000.0)
TAXI_SPEED_RANGE = (10.0, 25.0)
DEPARTURE_SPEED_RANGE = (160.0, 200.0)
DEPARTURE_ALTITUDE_RANGE = (1000.0, 3000.0)

# Route geometry offsets (degrees)
APPROACH_ENTRY_DISTANCE = 0.08  # Roughly 5-6 miles out
APPROACH_MIDPOINT_JITTER = 0.01
FINAL_APPROACH_OFFSET = (-0.015, 0.02)  # From arrival threshold
INITIAL_CLIMB_OFFSET = (0.015, -0.02)  # From departure runway end
LIFTOFF_THRESHOLD_WEIGHT = 0.6  # Remainder goes to the runway end
DEPARTURE_FIX_OFFSETS = {
    "north": (0.08, -0.03),
    "east": (0.03, 0.08),
    "south": (-0.05, -0.06),
}
GATE_JITTER = 0.001

# Gate assignment
GATE_NUMBER_RANGE = (1, 20)

# Flight identity
FLIGHT_NUMBER_RANGE = (100, 9999)
AIRCRAFT_ID_BASE = 10000
AIRCRAFT_ID_PREFIX = "N"

# ETA/ETD offsets from now (seconds)
ETA_RANGES = {
    "approaching": (300, 1200),
    "taxiing_in": (60, 300),
    "delayed": (1800, 7200),
}
ETD_RANGES = {
    "boarding": (600, 1800),
    "taxiing_out": (60, 300),
    "delayed": (1800, 7200),
}
