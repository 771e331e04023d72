"""CLI entry point for the forecast dashboard."""

import argparse
import logging
from datetime import datetime

from pydantic import ValidationError

from wxboard.config.loader import get_config_value, load_config, set_config_value
from wxboard.derive.conditions import WEATHER_CODES, describe
from wxboard.pipeline.forecast_pipeline import ForecastPipeline
from wxboard.pipeline.screen import Failed, ForecastScreen, Loaded
from wxboard.reporting.formatters import (
    format_forecast_json,
    format_forecast_text,
    format_state_text,
)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="wxboard",
        description="Open-Meteo forecast dashboard",
    )
    parser.add_argument(
        "--config", default=None, help="Config YAML path (defaults: Sapporo)"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )

    sub = parser.add_subparsers(dest="command")

    # fetch
    fetch_p = sub.add_parser("fetch", help="Fetch and print the forecast")
    fetch_p.add_argument(
        "--format", choices=["text", "json"], default="text", help="Output format"
    )
    fetch_p.add_argument(
        "--now",
        default=None,
        help="Reference time (ISO 8601) for the hourly window",
    )

    # conditions
    sub.add_parser("conditions", help="List the weather code table")

    # config show / get / set
    config_p = sub.add_parser("config", help="Config operations")
    config_sub = config_p.add_subparsers(dest="config_command")
    config_sub.add_parser("show", help="Display current config")
    get_p = config_sub.add_parser("get", help="Get a config value")
    get_p.add_argument("key", help="Dotted key, e.g. location.latitude")
    set_p = config_sub.add_parser(
        "set", help="Validate a value and print it; the config file is not written"
    )
    set_p.add_argument("keyvalue", help="key=value to set")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = load_config(args.config)
    except (OSError, ValidationError) as e:
        print(f"Error: could not load config: {e}")
        return 1

    if args.command == "fetch":
        return _cmd_fetch(config, args)
    elif args.command == "conditions":
        return _cmd_conditions()
    elif args.command == "config":
        return _cmd_config(config, args)
    else:
        parser.print_help()
        return 1


def _cmd_fetch(config, args) -> int:
    reference = None
    if args.now:
        try:
            reference = datetime.fromisoformat(args.now)
        except ValueError:
            print(f"Error: --now must be ISO 8601, got {args.now!r}")
            return 1

    screen = ForecastScreen(ForecastPipeline(config))
    state = screen.refresh(reference)
    screen.close()

    if isinstance(state, Loaded):
        if args.format == "json":
            print(format_forecast_json(state.forecast))
        else:
            print(format_forecast_text(state.forecast, now=reference))
        return 0
    print(format_state_text(state))
    return 1 if isinstance(state, Failed) else 0


def _cmd_conditions() -> int:
    for code in sorted(WEATHER_CODES):
        info = describe(code)
        print(f"{code:>3}  {info.condition:<13} {info.description}")
    return 0


def _cmd_config(config, args) -> int:
    if args.config_command == "show":
        print(config.model_dump_json(indent=2))
        return 0
    elif args.config_command == "get":
        try:
            print(get_config_value(config, args.key))
            return 0
        except (KeyError, IndexError, ValueError) as e:
            print(f"Error: {e}")
            return 1
    elif args.config_command == "set":
        kv = args.keyvalue
        if "=" not in kv:
            print("Error: use key=value format")
            return 1
        key, value = kv.split("=", 1)
        try:
            new_config = set_config_value(config, key.strip(), value.strip())
            value = get_config_value(new_config, key.strip())
            print(f"Valid: {key} = {value} (not saved)")
            return 0
        except (KeyError, ValueError, ValidationError) as e:
            print(f"Error: {e}")
            return 1
    else:
        print("Use: config show | config get key | config set key=value")
        return 1
