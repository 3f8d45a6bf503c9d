"""Load the OurAirports CSV exports into the geography tables."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Sequence

from sqlalchemy.orm import Session

from geography.core.config import settings
from geography.core.errors import SourceError
from geography.db.session import SessionLocal
from geography.services.importers import IMPORTERS, ImportResult
from geography.services.source_client import OurAirportsClient


logger = logging.getLogger(__name__)

# parents must exist before the rows that reference them
PASS_ORDER = ("countries", "regions", "airports", "runways", "frequencies")


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Import countries, regions, airports, runways and frequencies")
    parser.add_argument(
        "--data-dir",
        default=settings.data_dir,
        help="Directory holding the CSV files (default: %(default)s)",
    )
    parser.add_argument(
        "--download",
        action="store_true",
        help="Download the CSV files before importing, replacing local copies",
    )
    parser.add_argument(
        "--only",
        default=",".join(PASS_ORDER),
        help="Comma separated subset of passes to run",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )
    parser.add_argument(
        "--log-file",
        default=None,
        help="Also write the import log to this file",
    )
    args = parser.parse_args(argv)

    selected = {name.strip() for name in args.only.split(",") if name.strip()}
    unknown = selected - set(PASS_ORDER)
    if unknown:
        parser.error(f"unknown pass(es): {', '.join(sorted(unknown))}")
    args.passes = [name for name in PASS_ORDER if name in selected]
    return args


def configure_logging(level: str, log_file: str | None) -> None:
    logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO))
    if log_file:
        handler = logging.FileHandler(log_file)
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
        logging.getLogger().addHandler(handler)


def run_passes(
    db: Session,
    client: OurAirportsClient,
    passes: Sequence[str],
    download: bool = False,
) -> list[ImportResult]:
    results: list[ImportResult] = []
    for entity in passes:
        path = client.download(entity, force=True) if download else client.path_for(entity)
        result = IMPORTERS[entity](db).import_file(path)
        results.append(result)
    return results


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    configure_logging(args.log_level, args.log_file)

    client = OurAirportsClient(data_dir=args.data_dir)
    db = SessionLocal()
    try:
        results = run_passes(db, client, args.passes, download=args.download)
    except SourceError as exc:
        logger.error("Import aborted: %s", exc.message)
        return 2
    finally:
        db.close()

    failed = 0
    for result in results:
        logger.info(
            "%s: %s imported, %s blank, %s failed",
            result.entity,
            result.imported,
            result.skipped,
            len(result.failures),
        )
        failed += len(result.failures)

    if failed:
        logger.warning("Import finished with %s failed rows", failed)
        return 1
    logger.info("Import complete")
    return 0


if __name__ == "__main__":
    sys.exit(main())
