"""CLI entry point for the JSpec coordination server."""

import argparse
import asyncio
import contextlib
import json
import logging
import signal
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from jspec_server.models.config import (
    DEFAULT_HOST,
    DEFAULT_LIBRARY_ROOT,
    DEFAULT_PORT,
    ServerConfig,
)
from jspec_server.models.result import SessionOutcome
from jspec_server.session import Session

EXIT_PASSED = 0
EXIT_FAILED = 1
EXIT_INCOMPLETE = 2
EXIT_CONFIG_ERROR = 3

STATUS_SYMBOLS = {
    "passed": "✅",
    "failed": "❌",
    "missing": "⏱️",
}


def log_results_summary(log: logging.Logger, outcome: SessionOutcome) -> None:
    """Log a formatted summary of the reported results."""
    log.info("=" * 80)
    log.info("Browser Results Summary (%s):", outcome.status)
    log.info("=" * 80)

    for result in outcome.results:
        status = "passed" if result.passed else "failed"
        log.info(
            "%s %s: failures %d passes %d",
            STATUS_SYMBOLS[status],
            result.browser,
            result.failures,
            result.passes,
        )

    for browser in outcome.missing:
        log.info("%s %s: no result reported", STATUS_SYMBOLS["missing"], browser)


def format_output(outcome: SessionOutcome) -> dict[str, Any]:
    """Format a session outcome for JSON output."""
    results = [
        {
            "browser": result.browser,
            "failures": result.failures,
            "passes": result.passes,
            "order": result.order,
        }
        for result in outcome.results
    ]

    return {
        "status": outcome.status,
        "total": len(results),
        "passed": sum(1 for r in outcome.results if r.passed),
        "failed": sum(1 for r in outcome.results if not r.passed),
        "missing": list(outcome.missing),
        "results": results,
    }


def exit_code_for(outcome: SessionOutcome) -> int:
    if outcome.status != "complete":
        return EXIT_INCOMPLETE
    return EXIT_FAILED if outcome.has_failures else EXIT_PASSED


def parse_browsers(browsers: str) -> Sequence[str]:
    """Parse comma-separated browser names."""
    if not browsers.strip():
        return ()
    return tuple(b.strip() for b in browsers.split(",") if b.strip())


async def run(config: ServerConfig) -> int:
    """Run one coordination session and return exit code."""
    log = logging.getLogger("jspec_server")

    session = Session.from_config(config)

    loop = asyncio.get_running_loop()
    for signum in (signal.SIGINT, signal.SIGTERM):
        with contextlib.suppress(NotImplementedError):
            loop.add_signal_handler(signum, session.shutdown)

    try:
        outcome = await session.run()
    except OSError as exc:
        log.error(
            "Cannot listen on %s:%d: %s", config.host, config.port, exc.strerror or exc
        )
        return EXIT_CONFIG_ERROR
    finally:
        for signum in (signal.SIGINT, signal.SIGTERM):
            with contextlib.suppress(NotImplementedError):
                loop.remove_signal_handler(signum)

    log_results_summary(log, outcome)
    print(json.dumps(format_output(outcome), indent=2))

    return exit_code_for(outcome)


def build_config(args: argparse.Namespace) -> ServerConfig:
    """Validate parsed command line arguments into a server configuration."""
    return ServerConfig(
        spec_file=args.spec_file,
        browsers=parse_browsers(args.browsers),
        root=args.root,
        library_root=args.library_root,
        server_only=args.server_only,
        host=args.host,
        port=args.port,
        deadline=args.deadline,
        startup_delay=args.startup_delay,
        notify=not args.no_notify,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Serve a spec page to several browsers and collect their results"
    )
    parser.add_argument(
        "spec_file",
        type=Path,
        help="Path to the HTML page opened in each browser",
    )
    parser.add_argument(
        "--browsers",
        default="",
        help="Comma-separated browsers to launch (Safari, Opera, Chrome, Firefox, IE)",
    )
    parser.add_argument(
        "--root",
        type=Path,
        default=None,
        help="Project asset root (defaults to the spec file's directory)",
    )
    parser.add_argument(
        "--library-root",
        type=Path,
        default=DEFAULT_LIBRARY_ROOT,
        help="Directory served under /jspec/",
    )
    parser.add_argument(
        "--server-only",
        action="store_true",
        help="Start the server without launching browsers",
    )
    parser.add_argument("--host", default=DEFAULT_HOST, help="Listener bind host")
    parser.add_argument(
        "--port", type=int, default=DEFAULT_PORT, help="Listener bind port"
    )
    parser.add_argument(
        "--deadline",
        type=float,
        default=None,
        help="Seconds to wait for every browser to report",
    )
    parser.add_argument(
        "--startup-delay",
        type=float,
        default=0.0,
        help="Seconds to wait after the server starts before launching browsers",
    )
    parser.add_argument(
        "--no-notify",
        action="store_true",
        help="Disable desktop notifications",
    )
    return parser


def main() -> None:
    """CLI entry point."""
    args = build_parser().parse_args()

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    try:
        config = build_config(args)
    except ValidationError as exc:
        logging.getLogger("jspec_server").error("Invalid configuration: %s", exc)
        sys.exit(EXIT_CONFIG_ERROR)

    exit_code = asyncio.run(run(config))
    sys.exit(exit_code)


if __name__ == "__main__":  # pragma: no cover
    main()
