#!/usr/bin/env python3
"""
HUBSIM Simulator Script

Usage:
    python scripts/simulate.py [--config CONFIG_FILE] [--count N] [--ticks N]
                               [--interval SECONDS] [--seed SEED]
                               [--map OUTPUT.html] [--geojson OUTPUT.json]
"""

import sys
import json
import argparse
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from hubsim.config import Config, setup_logging
from hubsim.simulation import AircraftSimulator
from hubsim.visualization import FleetMapGenerator, fleet_to_feature_collection


def export_outputs(simulator: AircraftSimulator, args) -> None:
    """Write the final snapshot as a map and/or GeoJSON."""
    config = simulator.config
    snapshot = simulator.snapshot

    if args.map:
        generator = FleetMapGenerator(
            config.hub_latitude, config.hub_longitude, hub_code=config.hub_code
        )
        generator.add_fleet(snapshot, show_routes=args.routes)
        generator.save(args.map)
        print(f"🗺️  Map saved to: {args.map}")

    if args.geojson:
        collection = fleet_to_feature_collection(snapshot, include_routes=args.routes)
        with open(args.geojson, "w", encoding="utf-8") as f:
            json.dump(collection, f, indent=2)
        print(f"💾 GeoJSON saved to: {args.geojson}")


def main():
    """Main entry point for the simulator."""
    parser = argparse.ArgumentParser(
        description="HUBSIM - Simulate aircraft operations at a hub airport"
    )
    parser.add_argument(
        "--config",
        type=str,
        default="config.yaml",
        help="Path to configuration file (default: config.yaml)",
    )
    parser.add_argument("--count", type=int, help="Number of aircraft to simulate")
    parser.add_argument("--ticks", type=int, help="Stop after N ticks (default: run until Ctrl+C)")
    parser.add_argument("--interval", type=float, help="Tick interval in seconds")
    parser.add_argument("--seed", type=int, help="Random seed for reproducible runs")
    parser.add_argument("--map", type=str, help="Save final snapshot as HTML map")
    parser.add_argument("--geojson", type=str, help="Save final snapshot as GeoJSON")
    parser.add_argument(
        "--routes", action="store_true", help="Include route lines in map/GeoJSON output"
    )

    args = parser.parse_args()

    # Load configuration
    try:
        config = Config(args.config)
    except Exception as e:
        print(f"❌ Error loading configuration: {e}")
        sys.exit(1)

    if args.count is not None:
        config.set("simulation.aircraft_count", args.count)
    if args.interval is not None:
        config.set("simulation.tick_interval_seconds", args.interval)
    if args.seed is not None:
        config.set("simulation.seed", args.seed)

    setup_logging(config)

    # Create and run simulator
    try:
        simulator = AircraftSimulator(config)
        simulator.run(max_ticks=args.ticks)
        export_outputs(simulator, args)
    except KeyboardInterrupt:
        print("\n👋 Simulator stopped by user")
    except Exception as e:
        print(f"❌ Fatal error: {e}")
        import traceback

        traceback.print_exc()
        sys.exit(1)


if __name__ == "__main__":
    main()
