"""
Command-line launcher.

Runs the gas container server, or a producer or consumer driver against
a running server, with logging configured from --log-level.
"""

import argparse
import logging
import sys
from typing import Optional, Sequence

from .client import GasContainerClient
from .constants import LOG_FORMAT, LOG_DATE_FORMAT
from .drivers import ConsumerDriver, ProducerDriver
from .loader import ConfigLoadError, load_config
from .server import run_server


logger = logging.getLogger("gascontainer.cli")


def _add_common_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--config",
        default=None,
        help="Path to a YAML config file (built-in defaults if omitted).",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Log level for this process.",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gascontainer",
        description="Gas container simulation: server, producer and consumer processes.",
    )
    sub = parser.add_subparsers(dest="mode", required=True)

    server = sub.add_parser("server", help="Serve the container and run its autonomous cycle.")
    _add_common_args(server)

    producer = sub.add_parser("producer", help="Add mass while pressure is below the threshold.")
    _add_common_args(producer)

    consumer = sub.add_parser("consumer", help="Remove mass while pressure is above the threshold.")
    _add_common_args(consumer)

    return parser


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level),
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
    )


def _run(parsed: argparse.Namespace) -> int:
    config = load_config(parsed.config)

    if parsed.mode == "server":
        run_server(config)
        return 0

    client = GasContainerClient(config.server.base_url, config.server.client_timeout_seconds)
    if parsed.mode == "producer":
        driver = ProducerDriver(client, config.driver)
    elif parsed.mode == "consumer":
        driver = ConsumerDriver(client, config.driver)
    else:
        raise ValueError(f"Unknown mode: {parsed.mode}")

    logger.info("Using gas container service at %s", config.server.base_url)
    try:
        driver.run()
    except KeyboardInterrupt:
        driver.stop()
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = _build_parser()
    parsed = parser.parse_args(argv)

    configure_logging(parsed.log_level)

    try:
        return _run(parsed)
    except ConfigLoadError as exc:
        logger.error("Configuration error: %s", exc)
        return 2


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
