"""
Pizza Zone CLI - Main entry point.

Provides a command-line interface for delivery zone checks against a zone
configuration file (or the built-in central Ulaanbaatar zone).
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from pizza_zone import ZoneConfigError, ZoneInputError
from pizza_service import DeliveryZoneConfig, DeliveryZoneService
from pizza_service.logging import JSONFormatter, LogEvent, StructuredLogger

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_OUT_OF_ZONE = 2
EXIT_ADDRESS_NOT_FOUND = 3


def setup_logging(level: str = "WARNING") -> None:
    """Route plain and structured logs to stderr as JSON lines; stdout carries results."""
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(JSONFormatter())
    logging.basicConfig(level=getattr(logging, level), handlers=[handler])


def load_config(config_path: Optional[str]) -> DeliveryZoneConfig:
    """
    Load zone configuration.

    Args:
        config_path: Path to YAML file, None for the built-in zone

    Raises:
        ZoneConfigError: If the file is missing or invalid
    """
    if config_path is None:
        return DeliveryZoneConfig.default()
    return DeliveryZoneConfig.from_yaml(Path(config_path))


def create_cli_logger(level: str) -> StructuredLogger:
    # Root handler from setup_logging does the output
    return StructuredLogger("zone_cli", level=getattr(logging, level), stream_handler=False)


def print_json(payload: Dict[str, Any]) -> None:
    print(json.dumps(payload, ensure_ascii=False, indent=2))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pizza-zone",
        description="Pizza Zone CLI - Delivery zone checks",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Check coordinates against the built-in zone
  pizza-zone check 47.9184 106.9177

  # Use a zone config file
  pizza-zone --config config/pizza_zone/zone_config.yaml check 47.92 106.915

  # Manual address entry (district lookup)
  pizza-zone address "Сүхбаатар дүүрэг"

  # Delivery time for a distance
  pizza-zone estimate 1.2

  # Print the loaded configuration
  pizza-zone show-config

Exit codes:
  0 in zone / success, 1 error, 2 outside zone, 3 address not found
"""
    )

    # Global arguments
    parser.add_argument(
        "--config",
        default=None,
        help="Zone config YAML (default: built-in central Ulaanbaatar zone)"
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level for stderr logs (default: WARNING)"
    )

    # Subcommands
    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    check = subparsers.add_parser('check', help='Check a latitude/longitude')
    check.add_argument('lat', type=float, help='Latitude in decimal degrees')
    check.add_argument('lng', type=float, help='Longitude in decimal degrees')

    address = subparsers.add_parser('address', help='Check a manually entered address')
    address.add_argument('text', help='Address text naming a configured district')

    estimate = subparsers.add_parser('estimate', help='Delivery time for a distance')
    estimate.add_argument('distance_km', type=float, help='Distance to restaurant in km')

    subparsers.add_parser('show-config', help='Print the loaded configuration')

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return EXIT_ERROR

    setup_logging(args.log_level)
    logger = create_cli_logger(args.log_level)

    try:
        config = load_config(args.config)

        if args.command == 'show-config':
            print_json(config.to_dict())
            return EXIT_OK

        service = DeliveryZoneService(config, logger=logger)

        if args.command == 'check':
            result = service.check_point(args.lat, args.lng)
            print_json(result.to_dict())
            return EXIT_OK if result.in_zone else EXIT_OUT_OF_ZONE

        elif args.command == 'address':
            result = service.check_address(args.text)
            if result is None:
                print(f"No known district in address: {args.text}", file=sys.stderr)
                return EXIT_ADDRESS_NOT_FOUND
            print_json(result.to_dict())
            return EXIT_OK if result.in_zone else EXIT_OUT_OF_ZONE

        elif args.command == 'estimate':
            estimate = service.estimate(args.distance_km)
            print_json({'distance_km': args.distance_km, 'estimate': estimate.to_dict()})
            return EXIT_OK

    except ZoneConfigError as e:
        logger.error(
            event=LogEvent.CONFIG_ERROR,
            message="Zone configuration rejected",
            metadata={'config': args.config or '<built-in>'},
            exc_info=e,
        )
        print(f"Configuration error: {e}", file=sys.stderr)
        return EXIT_ERROR
    except ZoneInputError as e:
        print(f"Invalid input: {e}", file=sys.stderr)
        return EXIT_ERROR

    return EXIT_ERROR


if __name__ == '__main__':
    sys.exit(main())
