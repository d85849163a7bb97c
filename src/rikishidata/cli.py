"""CLI entry point and main processing flow."""

import argparse
import logging
import sys
import time
from pathlib import Path

from rikishidata.fetch import BASE_URL, FetchSettings, fetch_rikishi
from rikishidata.io_csv import update_rikishi_csv, write_rikishi_csv
from rikishidata.models import RikishiRecord
from rikishidata.util import RikishidataError

logger = logging.getLogger("rikishidata")


def _positive_int(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an integer: {text!r}")
    if value <= 0:
        raise argparse.ArgumentTypeError(f"rikishi id must be positive: {value}")
    return value


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rikishidata",
        description="Fetch rikishi profiles from SumoDB and write them to CSV.",
    )
    parser.add_argument(
        "rids", metavar="RID", type=_positive_int, nargs="+",
        help="SumoDB rikishi id(s) (e.g. 12370)",
    )
    parser.add_argument(
        "--output", type=Path, default=None,
        help="CSV output path (default: data/dim/dim_rikishi_profile.csv)",
    )
    parser.add_argument(
        "--force", action="store_true", default=False,
        help="Rewrite the CSV with only these rikishi (default: upsert)",
    )
    parser.add_argument(
        "--raw-cache", choices=["on", "off"], default="on",
        help="HTML cache mode (default: on)",
    )
    parser.add_argument(
        "--base-url", default=BASE_URL,
        help=f"SumoDB base URL (default: {BASE_URL})",
    )
    parser.add_argument(
        "--timeout", type=float, default=30,
        help="Per-request timeout in seconds (default: 30)",
    )
    parser.add_argument(
        "--log-level", choices=["INFO", "DEBUG"], default="INFO",
        help="Logging level (default: INFO)",
    )
    return parser


def _setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        stream=sys.stderr,
    )


def _project_root() -> Path:
    """Find project root (directory containing pyproject.toml or data/)."""
    p = Path.cwd()
    for _ in range(10):
        if (p / "pyproject.toml").exists():
            return p
        if (p / "data").is_dir():
            return p
        parent = p.parent
        if parent == p:
            break
        p = parent
    return Path.cwd()


def main(argv: list[str] | None = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(argv)

    _setup_logging(args.log_level)

    use_cache = args.raw_cache == "on"
    settings = FetchSettings(base_url=args.base_url, timeout=args.timeout)

    root = _project_root()
    out_path = args.output or root / "data" / "dim" / "dim_rikishi_profile.csv"
    cache_dir = root / "data" / "raw" / "rikishi"

    logger.info("Starting rikishidata for %d rikishi", len(args.rids))
    logger.info("Options: force=%s cache=%s base_url=%s",
                args.force, use_cache, settings.base_url)

    start_time = time.time()

    try:
        records: list[RikishiRecord] = []
        for rid in args.rids:
            cache_path = cache_dir / f"rikishi_{rid}.html" if use_cache else None
            record = fetch_rikishi(
                rid, settings=settings, cache_path=cache_path, use_cache=use_cache,
            )
            records.append(record)

        if args.force:
            write_rikishi_csv(records, out_path)
        else:
            update_rikishi_csv(records, out_path)

        elapsed = time.time() - start_time
        logger.info("=== Summary ===")
        for r in records:
            logger.info(
                "%d %s (%s) heya=%s highest_rank=%s birth_date=%s "
                "height=%dcm weight=%dkg first_basho=%s",
                r.rid, r.shikona, r.real_name, r.heya, r.highest_rank,
                r.birth_date, r.height_cm, r.weight_kg, r.first_basho,
            )
        logger.info("Rikishi rows: %d", len(records))
        logger.info("Elapsed: %.1fs", elapsed)

    except RikishidataError as e:
        logger.error("Fatal error: %s", e)
        sys.exit(1)
    except Exception as e:
        logger.error("Unexpected error: %s", e, exc_info=True)
        sys.exit(1)
