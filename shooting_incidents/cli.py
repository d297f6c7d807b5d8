"""Command line interface for the shooting incident pipeline."""
from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional

from . import config
from .errors import ShootingPipelineError
from .ingest import load_incidents
from .model import fit_murder_model
from .normalize import normalize_incidents
from .storage import ReportStore
from .transform import summarize_incidents

logger = logging.getLogger(__name__)


def _configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="NYPD shooting incident analysis pipeline")
    parser.add_argument("command", choices=["aggregate", "model", "run"], help="Pipeline stage to execute")
    parser.add_argument(
        "--source",
        dest="source",
        default=None,
        help=f"Dataset URL or path (default: ${config.SOURCE_ENV_VAR} or the NYC Open Data export)",
    )
    parser.add_argument("--timeout", dest="timeout", type=float, default=config.HTTP_TIMEOUT, help="HTTP timeout in seconds")
    parser.add_argument("--output-dir", dest="output_dir", default=str(config.DERIVED_DATA_DIR), help="Directory for derived outputs")
    parser.add_argument(
        "--snapshot",
        dest="snapshot_path",
        nargs="?",
        const=str(config.RAW_DATA_DIR / config.SNAPSHOT_FILENAME),
        default=None,
        help="Save the raw CSV (to the given path, or under the raw data directory)",
    )
    parser.add_argument(
        "--keep",
        dest="passthrough",
        nargs="*",
        default=[],
        help="Raw columns to keep that are pruned by default (e.g. PRECINCT Latitude)",
    )
    parser.add_argument(
        "--alpha",
        dest="alpha",
        type=float,
        default=config.SIGNIFICANCE_LEVEL,
        help="Significance level for model coefficients",
    )
    parser.add_argument("--verbose", dest="verbose", action="store_true", help="Enable verbose logging")
    return parser.parse_args(argv)


def main(argv: Optional[list[str]] = None) -> int:
    args = parse_args(argv)
    _configure_logging(args.verbose)

    try:
        raw = load_incidents(args.source, timeout=args.timeout, snapshot_path=args.snapshot_path)
        incidents = normalize_incidents(raw, passthrough=args.passthrough)
        store = ReportStore(args.output_dir)

        if args.command in ("aggregate", "run"):
            store.write_summary(summarize_incidents(incidents))

        if args.command in ("model", "run"):
            store.write_model(fit_murder_model(incidents, alpha=args.alpha))
    except ShootingPipelineError as exc:
        logger.error("%s: %s", type(exc).__name__, exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
