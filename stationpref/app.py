import argparse
from pathlib import Path

from . import __version__
from .clients import ResolverClient
from .env import load_env, load_settings
from .errors import TableError
from .logger import get_logger
from .models import Outcome
from .names import parse_station_field
from .pipeline import ResolutionPipeline, resolve_one
from .storage import read_records, write_values


def _client(args: argparse.Namespace) -> ResolverClient:
    client = ResolverClient.from_settings(args.settings)
    if getattr(args, "timeout", None) is not None:
        client.timeout = args.timeout
    return client


def cmd_resolve(args: argparse.Namespace) -> None:
    input_path = Path(args.input)
    output_path = Path(args.output)
    workers = args.workers if args.workers is not None else args.settings.workers
    logger = get_logger()

    try:
        records = read_records(input_path)
    except TableError as e:
        raise SystemExit(str(e))

    print(f"Resolving {len(records)} stations with {workers} workers...")
    try:
        with _client(args) as client:
            batch = ResolutionPipeline(client, workers=workers).run(records)
    except ValueError as e:
        raise SystemExit(str(e))

    try:
        write_values(output_path, batch.values())
    except TableError as e:
        raise SystemExit(str(e))

    logger.log_metrics_summary()
    print(
        f"Done. total={len(batch)} resolved={batch.count(Outcome.RESOLVED)} "
        f"no-match={batch.count(Outcome.NO_MATCH)} failed={batch.count(Outcome.FAILED)}"
    )
    print(f"Wrote {output_path}")


def cmd_lookup(args: argparse.Namespace) -> None:
    with _client(args) as client:
        result = resolve_one(client, args.field)
    print(f"Outcome: {result.outcome.value}")
    print(f"Value: {result.render()}")
    if result.error:
        print(f"Reason: {result.error}")


def cmd_parse(args: argparse.Namespace) -> None:
    query = parse_station_field(args.field)
    print(f"Name: {query.name}")
    print(f"Hint: {query.hint}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="stationpref", description="Resolve station names into prefecture addresses")
    parser.add_argument("--version", action="store_true", help="Show version")
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Log level (default: STATIONPREF_LOG_LEVEL or INFO)",
    )

    subparsers = parser.add_subparsers(dest="command")
    res = subparsers.add_parser("resolve", help="Resolve every station in an input CSV and write the output CSV")
    res.add_argument("--input", default="csv/input.csv", help="Input CSV with a header row (default: csv/input.csv)")
    res.add_argument("--output", default="csv/output.csv", help="Output CSV path (default: csv/output.csv)")
    res.add_argument("--workers", type=int, help="Number of concurrent workers (default: STATIONPREF_WORKERS or 10)")
    res.add_argument("--timeout", type=float, help="Per-request timeout in seconds")
    res.set_defaults(func=cmd_resolve)

    lkp = subparsers.add_parser("lookup", help="Resolve a single station field, e.g. \"渋谷 (銀座線)\"")
    lkp.add_argument("field", help="Station name, optionally followed by (line or prefecture)")
    lkp.add_argument("--timeout", type=float, help="Per-request timeout in seconds")
    lkp.set_defaults(func=cmd_lookup)

    prs = subparsers.add_parser("parse", help="Show how a station field is split into name and hint")
    prs.add_argument("field", help="Station field to parse")
    prs.set_defaults(func=cmd_parse)
    return parser


def main(argv=None):
    # Load .env if present (STATIONPREF_WORKERS, STATIONPREF_TIMEOUT, etc.)
    load_env()
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.version:
        print(__version__)
        return

    try:
        settings = load_settings()
    except ValueError as e:
        raise SystemExit(str(e))
    args.settings = settings
    get_logger(level=args.log_level or settings.log_level, log_dir=settings.log_dir)

    if hasattr(args, "func"):
        args.func(args)
        return

    parser.print_help()


if __name__ == "__main__":
    main()
