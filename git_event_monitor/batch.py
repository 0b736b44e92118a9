#!/usr/bin/env python3
"""Audit every repository listed in a CSV/XLSX sheet.

Usage:
    git-event-monitor-sheet [options] <file> <start-row> <end-row>

Rows are 1-indexed and the header is row 1, so the first data row is row 2.
Two result columns are added when missing (accessibility and submission
status). Cells that do not hold exactly one recognizable GitHub/Gitee
reference are skipped and left untouched. The updated table is written once,
at the end, to `<name>_processed.<ext>` unless `--in-place` or
`--output-file` says otherwise.
"""

from __future__ import annotations

import argparse
from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Mapping, Optional

from dotenv import load_dotenv

from git_event_monitor.analyzer import ComplianceAnalyzer
from git_event_monitor.config import SUPPORTED_LOCALES, Settings, mask_token
from git_event_monitor.errors import TabularFileError
from git_event_monitor.gateways import build_gateways
from git_event_monitor.models import AnalysisResult, Outcome, Platform
from git_event_monitor.tabular import TabularRecords, processed_path, read_records, write_records
from git_event_monitor.url_parser import classify


COLUMN_NAMES: Dict[str, Dict[str, str]] = {
    "en": {
        "repository": "repository",
        "name": "name",
        "accessibility": "accessibility",
        "submission": "submission status",
    },
    "zh": {
        "repository": "代码仓库地址",
        "name": "姓名",
        "accessibility": "是否可访问",
        "submission": "是否准时提交",
    },
}

LABELS: Dict[str, Dict[str, str]] = {
    "en": {
        "accessible": "accessible",
        "inaccessible": "inaccessible",
        "no_deadline": "no deadline set",
        "analysis_failed": "analysis failed",
        "initial_commit": "initial commit (submission time unknown)",
        "empty": "empty repository (submission time unknown)",
        "undetermined": "undetermined",
        "on_time": "on time",
        "late": "late",
    },
    "zh": {
        "accessible": "可访问",
        "inaccessible": "不可访问",
        "no_deadline": "未设置截止时间",
        "analysis_failed": "分析失败",
        "initial_commit": "初始提交（无法检查提交时间）",
        "empty": "空仓库（无法检查提交时间）",
        "undetermined": "无法确定",
        "on_time": "准时提交",
        "late": "超时提交",
    },
}


@dataclass
class BatchSummary:
    processed: int = 0
    skipped: int = 0
    statuses: Counter = field(default_factory=Counter)


def validate_row_range(start_row: int, end_row: int, total_rows: Optional[int] = None) -> None:
    if start_row < 2:
        raise ValueError("start row must be >= 2 (row 1 is the header)")
    if end_row < start_row:
        raise ValueError("end row must be >= start row")
    if total_rows is not None and end_row > total_rows:
        raise ValueError(f"end row {end_row} exceeds total rows {total_rows}")


def submission_label(result: AnalysisResult, deadline: Optional[str], labels: Mapping[str, str]) -> Optional[str]:
    """Status cell text for an accessible repository (None leaves the cell alone)."""
    if result.outcome is Outcome.TRANSPORT_ERROR:
        return None
    if not (deadline or "").strip():
        return labels["no_deadline"]
    if result.outcome is Outcome.ANALYSIS_FAILED:
        return labels["analysis_failed"]
    if result.outcome is Outcome.NO_RECENT_PUSH:
        return labels["initial_commit"]
    if result.outcome is Outcome.EMPTY_REPOSITORY:
        return labels["empty"]
    if result.submitted_before is None:
        return labels["undetermined"]
    return labels["on_time"] if result.submitted_before else labels["late"]


def process_rows(
    records: TabularRecords,
    analyzer: ComplianceAnalyzer,
    *,
    start_row: int,
    end_row: int,
    tokens: Mapping[Platform, Optional[str]],
    deadline: Optional[str],
    repo_column: int,
    accessibility_column: int,
    submission_column: int,
    name_column: Optional[int] = None,
    labels: Mapping[str, str] = LABELS["en"],
) -> BatchSummary:
    """Analyze rows `start_row..end_row` (1-indexed, inclusive), one at a time."""
    summary = BatchSummary()

    for index in range(start_row - 1, end_row):
        raw = records.cell(index, repo_column)
        name = records.cell(index, name_column) if name_column is not None else ""
        print(f"Processing row {index + 1}: {name}".rstrip())
        print(f"  Repository: {raw}")

        ref = classify(raw)
        if ref is None:
            print("  Skipping: cannot parse repository URL (multiple URLs, unsupported platform, or invalid format)")
            summary.skipped += 1
            continue

        print(f"  Platform: {ref.platform.value}, Repository: {ref.full_name}")
        result = analyzer.analyze_reference(ref, tokens.get(ref.platform), deadline)
        summary.processed += 1

        if not result.accessible:
            print(f"  Repository not accessible: {result.error}")
            records.set_cell(index, accessibility_column, labels["inaccessible"])
            summary.statuses[labels["inaccessible"]] += 1
            continue

        records.set_cell(index, accessibility_column, labels["accessible"])
        status = submission_label(result, deadline, labels)
        if status is not None:
            records.set_cell(index, submission_column, status)
            summary.statuses[status] += 1

        detail = result.time_difference or result.error or ""
        print(f"  Result: {status}" + (f" ({detail})" if detail else ""))

    return summary


def _output_path(args: argparse.Namespace, input_path: Path) -> Path:
    if args.output_file:
        return Path(args.output_file)
    if args.in_place:
        return input_path
    return processed_path(input_path)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Check deadline compliance for every repository listed in a CSV/XLSX file."
    )
    parser.add_argument("file", help="Path to the .csv or .xlsx file")
    parser.add_argument("start_row", type=int, help="First row to process (1-indexed, >= 2)")
    parser.add_argument("end_row", type=int, help="Last row to process (1-indexed, inclusive)")
    parser.add_argument("--github-token", default=None, help="GitHub API token (default: env GITHUB_TOKEN)")
    parser.add_argument("--gitee-token", default=None, help="Gitee API token (default: env GITEE_TOKEN)")
    parser.add_argument("--deadline", default=None, help="Deadline in RFC 3339 format, e.g. 2024-03-15T18:00:00Z")
    parser.add_argument(
        "--locale",
        choices=SUPPORTED_LOCALES,
        default=None,
        help="Column names and labels language (default: env GIT_EVENT_MONITOR_LOCALE or en)",
    )
    parser.add_argument("--repo-column", default=None, help="Header text of the repository column (substring match)")
    parser.add_argument("--name-column", default=None, help="Header text of the participant name column (substring match)")
    parser.add_argument("--timeout-seconds", type=float, default=None, help="Per-request timeout (default: 10)")
    output = parser.add_mutually_exclusive_group()
    output.add_argument("--in-place", action="store_true", help="Overwrite the input file")
    output.add_argument("--output-file", default=None, help="Write the result to this path")
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    load_dotenv()
    args = build_parser().parse_args(argv)
    settings = Settings.from_env()

    locale = args.locale or settings.locale
    columns = COLUMN_NAMES[locale]
    labels = LABELS[locale]
    github_token = args.github_token or settings.github_token
    gitee_token = args.gitee_token or settings.gitee_token
    timeout = args.timeout_seconds if args.timeout_seconds and args.timeout_seconds > 0 else settings.timeout_seconds

    try:
        validate_row_range(args.start_row, args.end_row)
    except ValueError as e:
        print(f"Error: {e}")
        raise SystemExit(1)

    input_path = Path(args.file)
    print("Starting sheet processing...")
    print(f"File: {input_path}")
    print(f"Processing rows: {args.start_row} to {args.end_row}")
    if args.deadline:
        print(f"Deadline: {args.deadline}")
    if github_token:
        print(f"GitHub Token: {mask_token(github_token)}")
    if gitee_token:
        print(f"Gitee Token: {mask_token(gitee_token)}")
    print()

    try:
        records = read_records(input_path)
    except TabularFileError as e:
        print(f"Error: {e}")
        raise SystemExit(1)

    if len(records) < 2:
        print("Error: the file needs a header row and at least one data row")
        raise SystemExit(1)

    repo_column = records.find_column(args.repo_column or columns["repository"])
    if repo_column is None:
        print(f"Error: column '{args.repo_column or columns['repository']}' not found")
        raise SystemExit(1)
    name_column = records.find_column(args.name_column or columns["name"])
    if name_column is None:
        print(f"Warning: column '{args.name_column or columns['name']}' not found; names will not be shown")

    result_columns: Dict[str, int] = {}
    for key in ("accessibility", "submission"):
        existed = records.find_column(columns[key]) is not None
        result_columns[key] = records.ensure_column(columns[key])
        if not existed:
            print(f"Added column: {columns[key]} (column {result_columns[key] + 1})")

    try:
        validate_row_range(args.start_row, args.end_row, len(records))
    except ValueError as e:
        print(f"Error: {e}")
        raise SystemExit(1)

    print(f"Processing {args.end_row - args.start_row + 1} record(s)...")
    print()

    analyzer = ComplianceAnalyzer(build_gateways(settings), timeout=timeout, locale=locale)
    summary = process_rows(
        records,
        analyzer,
        start_row=args.start_row,
        end_row=args.end_row,
        tokens={Platform.GITHUB: github_token, Platform.GITEE: gitee_token},
        deadline=args.deadline,
        repo_column=repo_column,
        accessibility_column=result_columns["accessibility"],
        submission_column=result_columns["submission"],
        name_column=name_column,
        labels=labels,
    )

    output_path = _output_path(args, input_path)
    try:
        write_records(records, output_path)
    except TabularFileError as e:
        print(f"Error: {e}")
        raise SystemExit(1)

    print()
    print(f"Processed: {summary.processed}, skipped: {summary.skipped}")
    for status, count in sorted(summary.statuses.items()):
        print(f"  {status}: {count}")
    print(f"Results saved to: {output_path}")


if __name__ == "__main__":
    main()
