"""Command-line entry point for LinkSafety link checks."""

import argparse
import json
import logging
import os
import sys
from pathlib import Path
from typing import Optional, Sequence

from .analyzer import RiskScorer
from .config import ConfigurationError, load_config
from .formatters import ResultFormatter
from .storage import LastCheckStore

logger = logging.getLogger(__name__)


def configure_logging(level: str = "WARNING") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=[
            logging.StreamHandler(sys.stderr),
        ],
    )


def _read_url_file(path: Path) -> list[str]:
    """URLs from a file, one per line, skipping blanks and # comments."""
    urls = []
    for line in path.read_text(encoding="utf-8").splitlines():
        value = line.strip()
        if value and not value.startswith("#"):
            urls.append(value)
    return urls


def cmd_check(args: argparse.Namespace, scorer: RiskScorer) -> int:
    if args.file:
        try:
            urls = _read_url_file(args.file)
        except OSError as exc:
            logger.error("Cannot read %s: %s", args.file, exc)
            return 1
        results = [scorer.score(url) for url in urls]
        if args.json:
            print(json.dumps([r.to_dict() for r in results], indent=2, ensure_ascii=False))
        else:
            for result in results:
                print(ResultFormatter.format_line(result))
        return 0

    if args.url is None:
        logger.error("Nothing to check: pass a URL or --file")
        return 2

    result = scorer.score(args.url)
    if not args.no_save:
        LastCheckStore(args.data_dir).save(result)

    if args.json:
        print(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))
    else:
        print(ResultFormatter.format_result(result))
    return 0


def cmd_show(args: argparse.Namespace) -> int:
    store = LastCheckStore(args.data_dir)
    try:
        result = store.load()
    except ValueError as exc:
        logger.error("%s", exc)
        return 1

    if result is None:
        print("No link checked yet.")
        return 0

    if args.json:
        print(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))
    else:
        print(ResultFormatter.format_result(result, saved_at=store.saved_at()))
    return 0


def cmd_forget(args: argparse.Namespace) -> int:
    if LastCheckStore(args.data_dir).clear():
        print("Last check cleared.")
    else:
        print("No link checked yet.")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="linksafety",
        description="Heuristic phishing/unsafe-link risk check for a single URL.",
    )
    parser.add_argument(
        "--config-dir",
        type=Path,
        default=None,
        help="Directory with heuristics.yaml / brands.txt / shorteners.txt (default: $LINKSAFETY_CONFIG_DIR or ./config)",
    )
    parser.add_argument(
        "--data-dir",
        type=Path,
        default=Path(os.getenv("LINKSAFETY_DATA_DIR", "./data")),
        help="Where the last check is stored (default: $LINKSAFETY_DATA_DIR or ./data)",
    )
    parser.add_argument("--log-level", default=os.getenv("LOG_LEVEL", "WARNING"))

    sub = parser.add_subparsers(dest="command", required=True)

    check = sub.add_parser("check", help="Score a URL and remember the result")
    check.add_argument("url", nargs="?", help="URL to check")
    check.add_argument("--file", type=Path, help="Score every URL in a file (one per line)")
    check.add_argument("--json", action="store_true", help="Print the result as JSON")
    check.add_argument("--no-save", action="store_true", help="Do not store the result as the last check")

    show = sub.add_parser("show", help="Show the last checked link")
    show.add_argument("--json", action="store_true", help="Print the result as JSON")

    sub.add_parser("forget", help="Delete the stored last check")

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.command == "check" and args.url is not None and args.file is not None:
        parser.error("check: pass a URL or --file, not both")
    configure_logging(args.log_level)

    if args.command == "show":
        return cmd_show(args)
    if args.command == "forget":
        return cmd_forget(args)

    try:
        scorer = RiskScorer(load_config(args.config_dir))
    except ConfigurationError as exc:
        logger.error("Invalid configuration: %s", exc)
        return 1

    return cmd_check(args, scorer)


if __name__ == "__main__":
    sys.exit(main())
