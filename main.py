#!/usr/bin/env python3
"""
Roster Dashboard - Main entry point
"""
import argparse
import sys

from simple_logger import Slogger
from roster_dashboard.config import load_config
from roster_dashboard.errors import ConfigError
from roster_dashboard.ui.app import RosterApp


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Browse team members and their parents.")
    parser.add_argument("--team", required=True, help="ID of the team whose members are listed.")
    parser.add_argument("--endpoint", help="Override the GraphQL endpoint URL.")
    parser.add_argument("--config", help="Path to a JSON config file.")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)

    try:
        config = load_config(args.config)
    except ConfigError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2

    if args.endpoint:
        config["api"]["endpoint"] = args.endpoint

    Slogger.configure(path=config["logging"]["path"], level=config["logging"]["level"])
    Slogger.info("Starting Roster Dashboard...", {"endpoint": config["api"]["endpoint"], "team_id": args.team})

    app = RosterApp(config, args.team)
    app.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
