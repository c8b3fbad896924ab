#!/usr/bin/env python3
"""
Target Compass Demo
===================

Runs a navigation session against mock sources: the user starts some
distance south of the target facing an arbitrary heading, then walks in a
straight line to the target while turning the device toward it.

Usage:
    target_compass_demo --steps 20 --heading 270 --start-offset 1500
    target_compass_demo --config config/target_compass.yaml --log-level DEBUG
"""

import argparse
import logging
import sys

from target_compass.core import get_config, load_config, setup_logging
from target_compass.display import ConsoleDisplay
from target_compass.hardware import MockLocationSource, MockOrientationSource
from target_compass.nav.geodesy import Coordinate, angle_difference, normalize_angle
from target_compass.state import NavigationContext

logger = logging.getLogger(__name__)

METERS_PER_DEGREE_LAT = 111195.0


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Point-to-target compass demo with mock sensors")
    parser.add_argument('--config', help="YAML config file")
    parser.add_argument('--steps', type=int, default=10, help="Walking steps to the target")
    parser.add_argument('--heading', type=float, default=0.0, help="Initial device heading (deg)")
    parser.add_argument('--start-offset', type=float, default=1200.0,
                        help="Start distance south of the target (m)")
    parser.add_argument('--log-level', default=None, help="Override logging level")
    return parser.parse_args(argv)


def run(args: argparse.Namespace) -> int:
    config = load_config(args.config) if args.config else get_config()
    setup_logging(config.logging, level=args.log_level)

    target = Coordinate(config.target.latitude, config.target.longitude)
    start = Coordinate(target.latitude - args.start_offset / METERS_PER_DEGREE_LAT, target.longitude)

    location_source = MockLocationSource(initial_fix=start, accuracy=config.location.accuracy)
    orientation_source = MockOrientationSource(update_interval=config.orientation.update_interval)

    display = ConsoleDisplay(
        target_name=config.target.name,
        alignment_threshold=config.navigation.alignment_threshold,
    )

    with NavigationContext(config, location_source, orientation_source) as context:
        context.subscribe(display)
        result = context.start()
        if not result.success:
            for error in result.errors:
                logger.error(error)
            return 1

        orientation_source.emit_heading(args.heading)
        steps = max(1, args.steps)
        heading = normalize_angle(args.heading)
        for i, point in enumerate(MockLocationSource.walk_towards(start, target, steps)):
            location_source.emit(point, force=True)
            bearing = context.snapshot.bearing
            if bearing is not None:
                # Turn a fraction of the remaining error each step
                heading = normalize_angle(heading + angle_difference(heading, bearing) * (i + 1) / (steps + 1))
            orientation_source.emit_heading(heading)

        final = context.snapshot
        logger.info(
            f"Arrived: distance={final.distance:.1f}m, "
            f"aligned={final.is_aligned(config.navigation.alignment_threshold)}")
    return 0


def main(argv=None):
    try:
        sys.exit(run(parse_args(argv)))
    except KeyboardInterrupt:
        sys.exit(130)


if __name__ == '__main__':
    main()
