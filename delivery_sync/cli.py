#!/usr/bin/env python3
"""
Sync the delivery ticket spreadsheet into the analytics/aging tables.

Usage:
  delivery-sync                       # EXCEL_FILE or delivery_tickets.xlsx
  delivery-sync --file exports/       # newest workbook in a folder
  delivery-sync --dry-run --export-dir out/

Env:
  SUPABASE_URL, SUPABASE_KEY (required unless --dry-run)
  EXCEL_FILE, SYNC_CONFIG, SYNC_TIMEZONE, SYNC_UPDATED_BY
"""
from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import List, Optional

import pandas as pd

from delivery_sync.errors import DeliverySyncError
from delivery_sync.ingest.spreadsheet import read_rows
from delivery_sync.ingest.transform import transform_rows
from delivery_sync.models import TransformResult, to_payload
from delivery_sync.store.rest_store import RestDataStore
from delivery_sync.store.synchronizer import run_sync
from delivery_sync.utils.config import load_settings

logger = logging.getLogger("delivery_sync")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Replace delivery analytics/aging tables from a spreadsheet export")
    p.add_argument("--file", dest="file", default=None, help="Workbook path or folder (default: $EXCEL_FILE)")
    p.add_argument("--config", dest="config", default=None, help="YAML config file (default: $SYNC_CONFIG)")
    p.add_argument("--dry-run", dest="dry_run", action="store_true", help="Transform only; do not touch the remote store")
    p.add_argument("--export-dir", dest="export_dir", type=Path, default=None, help="Write analytics.csv and aging.csv here")
    p.add_argument("-v", "--verbose", action="store_true")
    return p.parse_args(argv)


def export_csv(result: TransformResult, out_dir: Path) -> None:
    out_dir.mkdir(parents=True, exist_ok=True)
    for name, records in (("analytics", result.analytics), ("aging", result.aging)):
        path = out_dir / f"{name}.csv"
        pd.DataFrame(to_payload(records)).to_csv(path, index=False)
        logger.info("Wrote %s rows=%d", path, len(records))


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )

    try:
        settings = load_settings(config_path=args.config, require_remote=not args.dry_run)
        rows = read_rows(args.file or settings.excel_file, settings.transform.extra_columns)
        result = transform_rows(rows, settings.transform)

        if args.export_dir:
            export_csv(result, args.export_dir)

        if args.dry_run:
            logger.info(
                "Dry run: %d analytics / %d aging record(s); remote store untouched",
                len(result.analytics), len(result.aging),
            )
            return 0

        store = RestDataStore.from_settings(settings)
        summary = run_sync(store, settings, result.analytics, result.aging)
    except DeliverySyncError as exc:
        logger.error("%s", exc)
        return 1

    logger.info(
        "Sync complete: %d analytics, %d aging%s",
        summary.analytics_written, summary.aging_written,
        "" if summary.metadata_written else " (metadata not updated)",
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
