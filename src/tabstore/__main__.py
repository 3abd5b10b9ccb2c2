"""Console entry point: ``tabstore [--catalog PATH]``."""

from __future__ import annotations

import argparse
import sys

from tabstore.adapters.inbound import CommandProcessor
from tabstore.application import Registry
from tabstore.domain.errors import TabStoreError
from tabstore.infrastructure import (
    get_config,
    setup_logging,
    setup_metrics,
    setup_tracing,
    shutdown_tracing,
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tabstore",
        description="Interactive file-backed table store",
    )
    parser.add_argument("--catalog", help="Catalog file to open on start")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Override the configured log level",
    )
    parser.add_argument(
        "--log-format",
        choices=["json", "console"],
        help="Override the configured log format",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    config = get_config()
    observability = config.observability

    setup_logging(
        level=args.log_level or observability.log_level,
        log_format=args.log_format or observability.log_format,
    )
    if observability.otel_endpoint:
        setup_tracing(observability.otel_service_name, observability.otel_endpoint)
    if observability.metrics_port:
        setup_metrics(observability.metrics_port)

    try:
        registry = Registry(config=config)
        if args.catalog:
            try:
                registry.open(args.catalog)
            except TabStoreError as e:
                print(f"Error: {e}", file=sys.stderr)
                return 1

        CommandProcessor(registry, config=config).run()
        return 0
    finally:
        shutdown_tracing()


if __name__ == "__main__":
    sys.exit(main())
