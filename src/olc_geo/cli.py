"""
Command-line interface for olc-geo.

Provides commands for encoding, decoding and manipulating Plus Codes, and
for the geodesic distance calculations behind them.
"""

import argparse
import sys
from pathlib import Path
from typing import Optional

import duckdb

from .codec import decode, encode, PAIR_CODE_LENGTH
from .duckdb_batch import BatchConfig, PlusCodeDatabase
from .geodesy import LatLon, calculate_destination, calculate_inverse, is_valid_latlon
from .neighbors import CARDINAL_DIRECTIONS, NeighborDirection, Precision, get_neighbors, optimal_code_length
from .shorten import recover_nearest, shorten
from .syntax import code_length, is_full, is_short, is_valid


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="olc-geo",
        description="Encode, decode and manipulate Open Location Codes (Plus Codes)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Encode command
    encode_parser = subparsers.add_parser("encode", help="Encode a location")
    encode_parser.add_argument("lat", type=float, help="Latitude in degrees")
    encode_parser.add_argument("lon", type=float, help="Longitude in degrees")
    encode_parser.add_argument(
        "-l", "--length",
        type=int,
        default=PAIR_CODE_LENGTH,
        help=f"Number of significant digits (default: {PAIR_CODE_LENGTH})",
    )

    # Decode command
    decode_parser = subparsers.add_parser("decode", help="Decode a full code")
    decode_parser.add_argument("code", help="Full Plus Code")

    # Check command
    check_parser = subparsers.add_parser("check", help="Show validity of a code")
    check_parser.add_argument("code", help="Plus Code to check")

    # Shorten command
    shorten_parser = subparsers.add_parser(
        "shorten",
        help="Shorten a full code relative to a reference location",
    )
    shorten_parser.add_argument("code", help="Full Plus Code")
    shorten_parser.add_argument("lat", type=float, help="Reference latitude")
    shorten_parser.add_argument("lon", type=float, help="Reference longitude")

    # Recover command
    recover_parser = subparsers.add_parser(
        "recover",
        help="Recover a full code from a short code and a reference location",
    )
    recover_parser.add_argument("code", help="Short Plus Code")
    recover_parser.add_argument("lat", type=float, help="Reference latitude")
    recover_parser.add_argument("lon", type=float, help="Reference longitude")

    # Neighbors command
    neighbors_parser = subparsers.add_parser(
        "neighbors",
        help="List the codes of neighbouring cells",
    )
    neighbors_parser.add_argument("code", help="Full Plus Code")
    neighbors_parser.add_argument(
        "-d", "--direction",
        action="append",
        choices=[d.value for d in NeighborDirection],
        help="Direction to include, repeatable (default: n, s, e, w)",
    )

    # Optimal length command
    optimal_parser = subparsers.add_parser(
        "optimal-length",
        help="Find the shortest code length for a target cell size",
    )
    optimal_parser.add_argument("lat", type=float, help="Latitude in degrees")
    optimal_parser.add_argument("lon", type=float, help="Longitude in degrees")
    target_group = optimal_parser.add_mutually_exclusive_group(required=True)
    target_group.add_argument(
        "-m", "--meters",
        type=float,
        help="Largest acceptable cell edge in meters",
    )
    target_group.add_argument(
        "-p", "--precision",
        choices=[p.name.lower() for p in Precision],
        help="Predefined precision tier",
    )

    # Distance command
    distance_parser = subparsers.add_parser(
        "distance",
        help="Geodesic distance and bearings between two points",
    )
    distance_parser.add_argument("lat1", type=float)
    distance_parser.add_argument("lon1", type=float)
    distance_parser.add_argument("lat2", type=float)
    distance_parser.add_argument("lon2", type=float)

    # Destination command
    destination_parser = subparsers.add_parser(
        "destination",
        help="Point reached from a start point along a bearing",
    )
    destination_parser.add_argument("lat", type=float, help="Start latitude")
    destination_parser.add_argument("lon", type=float, help="Start longitude")
    destination_parser.add_argument("azimuth", type=float, help="Bearing in degrees")
    destination_parser.add_argument("distance", type=float, help="Distance in meters")

    # Batch encode command
    batch_parser = subparsers.add_parser(
        "batch-encode",
        help="Add a Plus Code column to a CSV or Parquet file",
    )
    batch_parser.add_argument("input", type=Path, help="Input .csv or .parquet file")
    batch_parser.add_argument("output", type=Path, help="Output .csv or .parquet file")
    batch_parser.add_argument(
        "--lat-column",
        type=str,
        default="lat",
        help="Latitude column name (default: lat)",
    )
    batch_parser.add_argument(
        "--lon-column",
        type=str,
        default="lon",
        help="Longitude column name (default: lon)",
    )
    batch_parser.add_argument(
        "--code-column",
        type=str,
        default="plus_code",
        help="Output column name (default: plus_code)",
    )
    batch_parser.add_argument(
        "-l", "--length",
        type=int,
        default=PAIR_CODE_LENGTH,
        help=f"Number of significant digits (default: {PAIR_CODE_LENGTH})",
    )

    return parser


def cmd_encode(args: argparse.Namespace) -> int:
    """Handle the encode command."""
    code = encode(args.lat, args.lon, args.length)
    if not code:
        print(f"Error: cannot encode {args.lat}, {args.lon}")
        return 1
    print(code)
    return 0


def cmd_decode(args: argparse.Namespace) -> int:
    """Handle the decode command."""
    area = decode(args.code)
    if area is None:
        print(f"Error: {args.code} is not a valid full code")
        return 1

    center = area.center
    print(f"Code length: {area.code_length}")
    print(f"  South-west: {area.lo.lat:.10f}, {area.lo.lon:.10f}")
    print(f"  North-east: {area.hi.lat:.10f}, {area.hi.lon:.10f}")
    print(f"  Center:     {center.lat:.10f}, {center.lon:.10f}")
    return 0


def cmd_check(args: argparse.Namespace) -> int:
    """Handle the check command."""
    valid = is_valid(args.code)
    print(f"Valid: {valid}")
    print(f"Short: {is_short(args.code)}")
    print(f"Full: {is_full(args.code)}")
    print(f"Length: {code_length(args.code)}")
    return 0 if valid else 1


def cmd_shorten(args: argparse.Namespace) -> int:
    """Handle the shorten command."""
    short_code = shorten(args.code, args.lat, args.lon)
    if not short_code:
        print(f"Error: {args.code} cannot be shortened")
        return 1
    print(short_code)
    return 0


def cmd_recover(args: argparse.Namespace) -> int:
    """Handle the recover command."""
    full_code = recover_nearest(args.code, args.lat, args.lon)
    if not full_code:
        print(f"Error: {args.code} is not a valid short or full code")
        return 1
    print(full_code)
    return 0


def cmd_neighbors(args: argparse.Namespace) -> int:
    """Handle the neighbors command."""
    if not is_full(args.code):
        print(f"Error: {args.code} is not a valid full code")
        return 1

    if args.direction:
        wanted = {NeighborDirection(d) for d in args.direction}
    else:
        wanted = set(CARDINAL_DIRECTIONS)
    directions = [d for d in NeighborDirection if d in wanted]
    codes = get_neighbors(args.code, directions)

    for direction, neighbor in zip(directions, codes):
        print(f"{direction.value:>2}: {neighbor or '-'}")
    return 0


def cmd_optimal_length(args: argparse.Namespace) -> int:
    """Handle the optimal-length command."""
    if args.precision:
        target = Precision[args.precision.upper()]
    else:
        target = args.meters
    print(optimal_code_length(args.lat, args.lon, target))
    return 0


def cmd_distance(args: argparse.Namespace) -> int:
    """Handle the distance command."""
    result = calculate_inverse(LatLon(args.lat1, args.lon1), LatLon(args.lat2, args.lon2))
    if not result.success:
        print("Error: geodesic calculation did not converge (nearly antipodal points?)")
        return 1

    print(f"Distance: {result.distance:.3f} m")
    print(f"  Initial bearing: {result.start_azimuth:.6f}")
    print(f"  Final bearing:   {result.end_azimuth:.6f}")
    return 0


def cmd_destination(args: argparse.Namespace) -> int:
    """Handle the destination command."""
    point = calculate_destination(LatLon(args.lat, args.lon), args.azimuth, args.distance)
    if not is_valid_latlon(point):
        print("Error: geodesic calculation did not converge")
        return 1

    print(f"{point.lat:.10f}, {point.lon:.10f}")
    return 0


def cmd_batch_encode(args: argparse.Namespace) -> int:
    """Handle the batch-encode command."""
    try:
        config = BatchConfig(
            lat_column=args.lat_column,
            lon_column=args.lon_column,
            code_length=args.length,
            code_column=args.code_column,
        )
    except ValueError as e:
        print(f"Error: {e}")
        return 1

    print(f"Encoding {args.input} with {config.code_length} digit codes...")
    with PlusCodeDatabase() as db:
        try:
            count = db.write_encoded(args.input, args.output, config)
        except (FileNotFoundError, ValueError, duckdb.Error) as e:
            print(f"Error: {e}")
            return 1

    print(f"Wrote {count} rows to {args.output}")
    return 0


COMMANDS = {
    "encode": cmd_encode,
    "decode": cmd_decode,
    "check": cmd_check,
    "shorten": cmd_shorten,
    "recover": cmd_recover,
    "neighbors": cmd_neighbors,
    "optimal-length": cmd_optimal_length,
    "distance": cmd_distance,
    "destination": cmd_destination,
    "batch-encode": cmd_batch_encode,
}


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    handler = COMMANDS.get(args.command)
    if handler is None:
        parser.print_help()
        return 1
    return handler(args)


if __name__ == "__main__":
    sys.exit(main())
