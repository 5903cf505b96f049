"""
CLI Module

Architectural Intent:
- Command-line interface for incidentrelay
- Opens and resolves PagerDuty incidents by hand (smoke tests, runbooks)
- Delegates to the notifier via the composition root
- Supports --verbose/--debug flags for log level control
"""

import argparse
import asyncio
import logging
import sys
from typing import Optional

from incidentrelay.composition_root import create_container
from incidentrelay.domain.value_objects.escalation_policy import EscalationPolicy
from incidentrelay.infrastructure.config import load_config
from incidentrelay.infrastructure.logging import configure_logging

EXIT_FAILED = 1
EXIT_NOT_CONFIGURED = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="incidentrelay",
        description="incidentrelay: forward incidents to PagerDuty",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable verbose output"
    )
    parser.add_argument(
        "--debug", action="store_true", help="Enable debug output"
    )
    parser.add_argument(
        "--json-logs", action="store_true", help="Emit structured JSON logs"
    )
    parser.add_argument(
        "--config", "-c", default=None, help="Path to incidentrelay.json"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    open_parser = subparsers.add_parser("open", help="Open a PagerDuty incident")
    open_parser.add_argument("title", help="Incident title")
    open_parser.add_argument(
        "--message", "-m", default="", help="Incident details"
    )
    open_parser.add_argument(
        "--policy",
        "-p",
        default=EscalationPolicy.EVERYONE.value,
        choices=[p.value for p in EscalationPolicy],
        help="Escalation policy to page",
    )
    open_parser.add_argument(
        "--key", "-k", default=None, help="Deduplication key (generated if omitted)"
    )

    resolve_parser = subparsers.add_parser(
        "resolve", help="Resolve a PagerDuty incident"
    )
    resolve_parser.add_argument("incident_id", help="PagerDuty incident id")

    return parser


def _config_level(name: str) -> int:
    """Map a configured level name to a logging level, WARNING if unknown."""
    level = logging.getLevelName(str(name).strip().upper())
    return level if isinstance(level, int) else logging.WARNING


async def async_main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    config = load_config(args.config)

    # Flags win over the configured log_level
    if args.debug:
        configure_logging(level=logging.DEBUG, json_format=args.json_logs)
    elif args.verbose:
        configure_logging(level=logging.INFO, json_format=args.json_logs)
    else:
        configure_logging(
            level=_config_level(config.log_level), json_format=args.json_logs
        )

    if args.command is None:
        parser.print_help()
        return 0

    container = create_container(config)
    if container.notifier is None:
        print("[-] PagerDuty is not configured "
              "(set PAGER_DUTY_API_KEY and PAGER_DUTY_SERVICE_ID).")
        container.exporter.shutdown()
        return EXIT_NOT_CONFIGURED

    try:
        if args.command == "open":
            result = await container.notifier.open_incident(
                args.title,
                message=args.message,
                policy=EscalationPolicy.from_name(args.policy),
                dedup_key=args.key,
            )
            if not result.ok:
                print(f"[-] Failed to open incident: {result.error}")
                return EXIT_FAILED
            print(f"[+] Opened incident {result.handle.id} (key {result.handle.key})")
            return 0

        result = await container.notifier.resolve_incident(args.incident_id)
        if not result.ok:
            print(f"[-] Failed to resolve incident: {result.error}")
            return EXIT_FAILED
        print(f"[+] Resolved incident {args.incident_id}")
        return 0
    finally:
        await container.aclose()


def main():
    sys.exit(asyncio.run(async_main()))


if __name__ == "__main__":
    main()
