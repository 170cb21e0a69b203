"""Load an airports CSV into the local airport directory."""

from __future__ import annotations

import argparse
import csv
import sys
from pathlib import Path

from flightwx.core.logging_config import setup_logging
from flightwx.db.session import get_session, init_db
from flightwx.services.airports import import_airports


def main() -> None:
    parser = argparse.ArgumentParser(description="Import airports (CSV/TSV) into the directory table.")
    parser.add_argument("path", type=Path, help="CSV or TSV file with at least an icao/ident column.")
    parser.add_argument(
        "--delimiter",
        default=None,
        help="Column delimiter (default: tab for .tsv files, comma otherwise).",
    )
    args = parser.parse_args()

    if not args.path.exists():
        print(f"File not found: {args.path}")
        sys.exit(1)

    setup_logging(service_name="flightwx-import")
    delimiter = args.delimiter or ("\t" if args.path.suffix.lower() == ".tsv" else ",")

    init_db()
    with args.path.open(newline="", encoding="utf-8") as handle, get_session() as session:
        reader = csv.DictReader(handle, delimiter=delimiter)
        result = import_airports(session, reader)

    print(f"Upserted {result.upserted} airports, skipped {result.skipped} rows.")


if __name__ == "__main__":
    main()
