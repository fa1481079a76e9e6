"""
Dump the controller configuration as JSON.

Connects once through the same bridge the API uses and prints circuit
names, bodies and equipment metadata. Handy for finding circuit ids.

Usage:
    plunge-dump-config --system-name "Pentair: XX-XX-XX" --password secret
    PLUNGE_SYSTEM_NAME=... PLUNGE_PASSWORD=... plunge-dump-config
"""

import argparse
import asyncio
import json
import os
import sys
from typing import List, Optional

from plunge.controller.controller_client_factory import create_controller_client
from plunge.managers.config_manager import ConfigManager
from plunge.models.auth import Credentials
from plunge.models.config import ControllerConfig
from plunge.models.enums import LogCategory, LogLevel
from plunge.services.device_bridge import BridgeError, DeviceBridge
from plunge.utils.logger import configure_logger, get_logger

log = get_logger().for_category(LogCategory.SYSTEM)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="plunge-dump-config",
        description="Print the ScreenLogic controller configuration as JSON"
    )
    parser.add_argument(
        "--system-name",
        default=os.environ.get("PLUNGE_SYSTEM_NAME"),
        help="Gateway system name (default: $PLUNGE_SYSTEM_NAME)"
    )
    parser.add_argument(
        "--password",
        default=os.environ.get("PLUNGE_PASSWORD"),
        help="Gateway password (default: $PLUNGE_PASSWORD)"
    )
    parser.add_argument("--config", help="Path to config.yaml (default: $PLUNGE_CONFIG or packaged)")
    parser.add_argument("--indent", type=int, default=2, help="JSON indent (default: 2)")
    return parser


async def dump_config(bridge: DeviceBridge, credentials: Credentials, indent: int = 2) -> str:
    data = await bridge.fetch_configuration(credentials)
    return json.dumps(data, indent=indent, default=str)


def main(argv: Optional[List[str]] = None, bridge: Optional[DeviceBridge] = None) -> int:
    args = build_parser().parse_args(argv)

    if not args.system_name or not args.password:
        print("error: --system-name and --password are required "
              "(or set PLUNGE_SYSTEM_NAME / PLUNGE_PASSWORD)", file=sys.stderr)
        return 2

    if bridge is None:
        # stdout carries the JSON
        configure_logger(min_level=LogLevel.WARN, use_colors=False, stream=sys.stderr)
        controller: ControllerConfig = ConfigManager(args.config).load().controller
        bridge = DeviceBridge(create_controller_client(controller), controller)

    credentials = Credentials(system_name=args.system_name, password=args.password)
    try:
        output = asyncio.run(dump_config(bridge, credentials, args.indent))
    except BridgeError as e:
        log.error("Failed to read controller configuration", error=e.message)
        print(f"error: {e.message}", file=sys.stderr)
        return 1

    print(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
