#!/usr/bin/env python3
"""Tabular record files (CSV / XLSX).

Rows are kept as plain lists of strings; row 0 is the header. Only the first
worksheet of an XLSX workbook is read for processing. Running this module
prints a quick preview of every sheet in a file.
"""

from __future__ import annotations

import argparse
import csv
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Union

import pandas as pd

from git_event_monitor.errors import TabularFileError


SUPPORTED_SUFFIXES = (".csv", ".xlsx")
PREVIEW_ROWS = 5
PREVIEW_CELL_WIDTH = 30


class TabularRecords:
    """An ordered header row plus data rows, mutated in place."""

    def __init__(self, rows: Iterable[Sequence[str]]):
        self.rows: List[List[str]] = [["" if c is None else str(c) for c in row] for row in rows]
        if not self.rows:
            self.rows.append([])

    @property
    def header(self) -> List[str]:
        return self.rows[0]

    @property
    def data_rows(self) -> List[List[str]]:
        return self.rows[1:]

    def __len__(self) -> int:
        return len(self.rows)

    def find_column(self, name: str) -> Optional[int]:
        """Index of the first header cell containing `name`, or None."""
        for i, header in enumerate(self.header):
            if name in header:
                return i
        return None

    def ensure_column(self, name: str) -> int:
        index = self.find_column(name)
        if index is not None:
            return index

        self.header.append(name)
        width = len(self.header)
        for row in self.rows[1:]:
            if len(row) < width:
                row.extend([""] * (width - len(row)))
        return width - 1

    def cell(self, row_index: int, column: int) -> str:
        row = self.rows[row_index]
        if 0 <= column < len(row):
            return row[column]
        return ""

    def set_cell(self, row_index: int, column: int, value: str) -> None:
        row = self.rows[row_index]
        if 0 <= column < len(row):
            row[column] = value


def _suffix(path: Path) -> str:
    suffix = path.suffix.lower()
    if suffix not in SUPPORTED_SUFFIXES:
        supported = ", ".join(SUPPORTED_SUFFIXES)
        raise TabularFileError(f"unsupported file format: {suffix or '(none)'} (supported: {supported})")
    return suffix


def _frame_rows(df: pd.DataFrame) -> List[List[str]]:
    return df.fillna("").astype(str).values.tolist()


def read_records(path: Union[str, Path]) -> TabularRecords:
    path = Path(path)
    suffix = _suffix(path)
    if suffix == ".csv":
        try:
            with path.open("r", encoding="utf-8-sig", newline="") as handle:
                return TabularRecords(csv.reader(handle))
        except (OSError, UnicodeDecodeError, csv.Error) as e:
            raise TabularFileError(f"cannot read {path}: {e}") from e

    try:
        df = pd.read_excel(path, sheet_name=0, header=None, dtype=str, keep_default_na=False, engine="openpyxl")
    except Exception as e:
        # openpyxl reports corrupt workbooks with its own exception types.
        raise TabularFileError(f"cannot read {path}: {e}") from e
    return TabularRecords(_frame_rows(df))


def write_records(records: TabularRecords, path: Union[str, Path]) -> Path:
    path = Path(path)
    suffix = _suffix(path)
    try:
        if suffix == ".csv":
            with path.open("w", encoding="utf-8", newline="") as handle:
                csv.writer(handle).writerows(records.rows)
        else:
            with pd.ExcelWriter(path, engine="openpyxl") as writer:
                pd.DataFrame(records.rows).to_excel(writer, sheet_name="Sheet1", header=False, index=False)
    except (OSError, ValueError) as e:
        raise TabularFileError(f"cannot write {path}: {e}") from e
    return path


def processed_path(path: Union[str, Path]) -> Path:
    """`data.xlsx` -> `data_processed.xlsx`, next to the input."""
    path = Path(path)
    return path.with_name(f"{path.stem}_processed{path.suffix}")


def _clip(value: str) -> str:
    if len(value) > PREVIEW_CELL_WIDTH:
        return value[:PREVIEW_CELL_WIDTH] + "..."
    return value


def preview_lines(name: str, records: TabularRecords, limit: int = PREVIEW_ROWS) -> List[str]:
    lines = [f"==== {name} ===="]
    if not any(records.rows):
        lines.append("(empty)")
        return lines
    lines.append("Header: " + " | ".join(records.header))
    data = records.data_rows
    lines.append(f"Data rows: {len(data)}")
    for i, row in enumerate(data[:limit], start=1):
        lines.append(f"  Row {i}: " + " | ".join(_clip(c) for c in row))
    return lines


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Preview the sheets of a CSV/XLSX file.")
    parser.add_argument("file", help="Path to a .csv or .xlsx file")
    parser.add_argument("--rows", type=int, default=PREVIEW_ROWS, help=f"Data rows to show per sheet (default: {PREVIEW_ROWS})")
    args = parser.parse_args(argv)

    path = Path(args.file)
    try:
        if _suffix(path) == ".csv":
            sheets = {path.name: read_records(path)}
        else:
            frames = pd.read_excel(path, sheet_name=None, header=None, dtype=str, keep_default_na=False, engine="openpyxl")
            sheets = {name: TabularRecords(_frame_rows(df)) for name, df in frames.items()}
    except Exception as e:
        print(f"Error: {e}")
        raise SystemExit(1)

    print(f"Found {len(sheets)} sheet(s): {', '.join(sheets)}")
    for name, records in sheets.items():
        print()
        print("\n".join(preview_lines(name, records, max(args.rows, 0))))


if __name__ == "__main__":
    main()
