"""Export the BCP report (and optionally a backup) from the configured store.

Loads the snapshot the same way the API does: from the backend named in
settings, falling back to the seed when nothing usable is stored.

Usage:
    python -m scripts.export_report
    python -m scripts.export_report --output-dir ./exports --backup
    python -m scripts.export_report --seed --date 2025-06-30
"""

from __future__ import annotations

import argparse
import logging
import sys
from datetime import date
from pathlib import Path

from bedrock.api.dependencies import build_store
from bedrock.config.settings import get_settings
from bedrock.reports.generator import backup_filename, generate_report, report_filename
from bedrock.store.controller import load_or_seed
from bedrock.store.persistence import dump_snapshot
from bedrock.store.seed import make_seed


def main(argv: list[str] | None = None) -> int:
    """Write the report file(s); returns the process exit code."""
    parser = argparse.ArgumentParser(
        description="Export the Bedrock BCP report as plain text",
    )
    parser.add_argument(
        "--output-dir", type=Path, default=Path("."),
        help="Directory to write into (created if missing)",
    )
    parser.add_argument(
        "--backup", action="store_true",
        help="Also write the snapshot document as a JSON backup",
    )
    parser.add_argument(
        "--seed", action="store_true",
        help="Ignore the configured store and export the seed dataset",
    )
    parser.add_argument(
        "--date", type=date.fromisoformat, default=None,
        help="Date stamped into the file names (YYYY-MM-DD, default today)",
    )
    args = parser.parse_args(argv)

    settings = get_settings()
    logging.basicConfig(level=settings.LOG_LEVEL.value)

    snapshot = make_seed() if args.seed else load_or_seed(build_store(settings))
    on_date = args.date or date.today()

    args.output_dir.mkdir(parents=True, exist_ok=True)
    report_path = args.output_dir / report_filename(
        snapshot.company.name, on_date, tool_name=settings.REPORT_TOOL_NAME,
    )
    report_path.write_text(generate_report(snapshot), encoding="utf-8")
    print(f"  Report: {report_path}")

    if args.backup:
        backup_path = args.output_dir / backup_filename(on_date)
        backup_path.write_text(dump_snapshot(snapshot), encoding="utf-8")
        print(f"  Backup: {backup_path}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
