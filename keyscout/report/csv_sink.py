# keyscout/report/csv_sink.py
"""
Append-only CSV sink for discovered keywords.
"""
from __future__ import annotations

import csv
from pathlib import Path
from typing import Union

from keyscout.crawler.models import ResultRecord
from keyscout.logger import logger

HEADER = ("domain", "keyword", "reference_url")


class CsvResultSink:
    """Writes one row per ResultRecord, in the order records are appended."""

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path)
        self.rows_written = 0

    def initialize(self) -> Path:
        """Create (or truncate) the CSV file and write the header row."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("w", encoding="utf-8", newline="") as f:
            csv.writer(f).writerow(HEADER)
        logger.info("Results will be written to %s", self.path)
        return self.path

    def append(self, record: ResultRecord) -> None:
        with self.path.open("a", encoding="utf-8", newline="") as f:
            csv.writer(f).writerow((record.domain, record.keyword, record.reference_url))
        self.rows_written += 1

    __call__ = append


__all__ = ["CsvResultSink", "HEADER"]
