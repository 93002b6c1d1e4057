"""Command-line runner for the Replicate client.

Supports running a model (optionally without waiting), and fetching,
canceling or listing predictions. A Ctrl-C while waiting on ``run`` cancels
the remote prediction before exiting.
"""

from __future__ import annotations

import argparse
import json
import logging
from dataclasses import replace
from typing import Any, List, Optional, Tuple

from .client import ReplicateClient
from .config import Config
from .errors import ConfigError, ReplicateError
from .identifiers import split_model
from .schemas import PredictionStatus


EXIT_OK = 0
EXIT_FAILED = 1
EXIT_CONFIG = 2
EXIT_NO_CREDENTIALS = EXIT_CONFIG
EXIT_INTERRUPTED = 130


def _parse_input(pair: str) -> Tuple[str, Any]:
    """Split ``key=value``, decoding the value as JSON when possible."""
    key, sep, raw = pair.partition("=")
    if not sep or not key:
        raise argparse.ArgumentTypeError(f"expected KEY=VALUE, got {pair!r}")
    try:
        return key, json.loads(raw)
    except ValueError:
        return key, raw


def _print_json(data: Any) -> None:
    print(json.dumps(data, indent=2, default=str))


def _cmd_run(client: ReplicateClient, args: argparse.Namespace) -> int:
    logger = logging.getLogger(__name__)
    handle = client.predictions.create(args.version, dict(args.input))
    if args.no_wait:
        _print_json(handle.prediction.to_dict())
        return EXIT_OK

    try:
        final = handle.wait()
    except KeyboardInterrupt:
        logger.info("KeyboardInterrupt received; canceling prediction %s", handle.id)
        handle.cancel()
        _print_json(handle.prediction.to_dict())
        return EXIT_INTERRUPTED

    _print_json(final.to_dict())
    if final.status is not PredictionStatus.SUCCEEDED:
        logger.error("Prediction %s %s: %s", final.id, final.status.value, final.error)
        return EXIT_FAILED
    return EXIT_OK


def _cmd_get(client: ReplicateClient, args: argparse.Namespace) -> int:
    _print_json(client.predictions.get(args.id).to_dict())
    return EXIT_OK


def _cmd_cancel(client: ReplicateClient, args: argparse.Namespace) -> int:
    _print_json(client.predictions.cancel(args.id).to_dict())
    return EXIT_OK


def _cmd_list(client: ReplicateClient, args: argparse.Namespace) -> int:
    page = client.predictions.list(cursor=args.cursor)
    _print_json(
        {
            "previous": page.previous,
            "next": page.next,
            "results": [item.to_dict() for item in page.results],
        }
    )
    return EXIT_OK


def _cmd_model(client: ReplicateClient, args: argparse.Namespace) -> int:
    owner, name = split_model(args.model)
    _print_json(client.models.get(owner, name).to_dict())
    return EXIT_OK


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Replicate API client")
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    run = sub.add_parser("run", help="Run a model version")
    run.add_argument("version", help="owner/name:version")
    run.add_argument(
        "-i",
        "--input",
        action="append",
        type=_parse_input,
        default=[],
        metavar="KEY=VALUE",
        help="Model input; VALUE is parsed as JSON when possible",
    )
    run.add_argument(
        "--no-wait", action="store_true", help="Print the new prediction and exit"
    )
    run.add_argument(
        "--interval",
        type=float,
        default=None,
        help="Seconds between status polls",
    )
    run.add_argument(
        "--max-attempts",
        type=int,
        default=None,
        help="Give up after this many polls (0 polls forever)",
    )
    run.set_defaults(func=_cmd_run)

    get = sub.add_parser("get", help="Show a prediction")
    get.add_argument("id")
    get.set_defaults(func=_cmd_get)

    cancel = sub.add_parser("cancel", help="Cancel a prediction")
    cancel.add_argument("id")
    cancel.set_defaults(func=_cmd_cancel)

    listing = sub.add_parser("list", help="List predictions")
    listing.add_argument("--cursor", default=None, help="next/previous page URL")
    listing.set_defaults(func=_cmd_list)

    model = sub.add_parser("model", help="Show model metadata")
    model.add_argument("model", help="owner/name")
    model.set_defaults(func=_cmd_model)

    return parser.parse_args(argv)


def _build_config(args: argparse.Namespace) -> Config:
    config = Config.from_env()
    interval = getattr(args, "interval", None)
    if interval is not None:
        config = replace(config, poll_interval_ms=int(interval * 1000))
    max_attempts = getattr(args, "max_attempts", None)
    if max_attempts is not None:
        config = replace(config, max_poll_attempts=max_attempts or None)
    return config


def main(argv: Optional[List[str]] = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(message)s",
    )
    logger = logging.getLogger(__name__)

    try:
        client = ReplicateClient(_build_config(args))
    except ConfigError as exc:
        logger.error("%s", exc)
        return EXIT_CONFIG

    try:
        return args.func(client, args)
    except ReplicateError as exc:
        logger.error("%s failed: %s", args.command, exc)
        return EXIT_FAILED


if __name__ == "__main__":
    raise SystemExit(main())
