"""
CLI entry point for loading stock price CSV files without the dashboard.

This script is the Composition Root for the upload use-case: it wires the
configured IStockRepository to UploadStockCsvUseCase and feeds it each file.

    export SUPABASE_URL=... SUPABASE_KEY=...
    python -m src.infrastructure.ingestion.ingest prices_2024.csv prices_2023.csv
"""

import argparse
import sys
from pathlib import Path
from typing import Optional, Sequence

from dotenv import load_dotenv

from src.application.use_cases.upload_stock_csv import UploadStockCsvUseCase
from src.domain.errors import BackendWriteError, ParseError
from src.domain.ports.stock_repository_port import IStockRepository
from src.infrastructure.config.logging_setup import configure_logging
from src.infrastructure.config.settings import AppConfig
from src.infrastructure.config.wiring import build_repository, load_secrets


def ingest_files(paths: Sequence[str], repository: IStockRepository) -> int:
    """Upload every file in *paths*. Returns the number of files that failed."""
    service = UploadStockCsvUseCase(repository)
    failures = 0
    for path in paths:
        try:
            text = Path(path).read_text(encoding="utf-8-sig")
            count = service.execute(text)
        except (OSError, ParseError, BackendWriteError) as exc:
            print(f"  {path}: FAILED ({exc})")
            failures += 1
            continue
        print(f"  {path}: {count} records")
    return failures


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Upsert stock price CSV files.")
    parser.add_argument("files", nargs="+", help="CSV files (Date,Close Price or date,open,high,low,close)")
    args = parser.parse_args(argv)

    load_dotenv()
    load_secrets()
    config = AppConfig.from_env()
    configure_logging(config.log_level)

    failures = ingest_files(args.files, build_repository(config))
    print(f"\nIngestion complete: {len(args.files) - failures} of {len(args.files)} files loaded.")
    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
