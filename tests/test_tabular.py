#!/usr/bin/env python3

import io
import tempfile
import unittest
from contextlib import redirect_stdout
from pathlib import Path

import pandas as pd

from git_event_monitor.errors import TabularFileError
from git_event_monitor.tabular import (
    TabularRecords,
    main,
    preview_lines,
    processed_path,
    read_records,
    write_records,
)


class TestTabularRecords(unittest.TestCase):
    def test_find_column_by_substring(self):
        records = TabularRecords([["序号", "姓名", "代码仓库地址（GitHub/Gitee）"]])
        self.assertEqual(records.find_column("代码仓库地址"), 2)
        self.assertEqual(records.find_column("姓名"), 1)
        self.assertIsNone(records.find_column("是否可访问"))

    def test_ensure_column_appends_and_backfills(self):
        records = TabularRecords([["name", "repository"], ["a", "x"], ["b"]])
        index = records.ensure_column("accessibility")
        self.assertEqual(index, 2)
        self.assertEqual(records.header, ["name", "repository", "accessibility"])
        self.assertEqual(records.rows[1], ["a", "x", ""])
        self.assertEqual(records.rows[2], ["b", "", ""])

        index = records.ensure_column("submission status")
        self.assertEqual(index, 3)
        self.assertTrue(all(len(row) == 4 for row in records.rows))

    def test_ensure_columns_is_noop_when_present(self):
        rows = [
            ["submission status (auto)", "name", "accessibility", "repository"],
            ["late", "a", "accessible", "https://github.com/a/b"],
            ["", "b", "", ""],
        ]
        records = TabularRecords(rows)
        self.assertEqual(records.ensure_column("accessibility"), 2)
        self.assertEqual(records.ensure_column("submission status"), 0)
        self.assertEqual(records.rows, rows)

    def test_set_cell_ignores_out_of_range(self):
        records = TabularRecords([["h1", "h2"], ["a"]])
        records.set_cell(1, 5, "x")
        records.set_cell(1, 0, "y")
        self.assertEqual(records.rows[1], ["y"])
        self.assertEqual(records.cell(1, 1), "")

    def test_empty_input(self):
        records = TabularRecords([])
        self.assertEqual(records.header, [])
        self.assertEqual(records.data_rows, [])
        self.assertEqual(records.ensure_column("accessibility"), 0)


class TestFiles(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp = Path(self._tmp.name)

    def tearDown(self):
        self._tmp.cleanup()

    def test_csv_round_trip(self):
        path = self.tmp / "名单.csv"
        records = TabularRecords([["姓名", "代码仓库地址"], ["张三", "https://gitee.com/a/b"], ["李四", 'a, "quoted"']])
        write_records(records, path)
        self.assertEqual(read_records(path).rows, records.rows)

    def test_csv_with_bom(self):
        path = self.tmp / "bom.csv"
        path.write_bytes("\ufeffname,repository\nx,github.com/a/b\n".encode("utf-8"))
        records = read_records(path)
        self.assertEqual(records.header, ["name", "repository"])
        self.assertEqual(records.find_column("name"), 0)

    def test_xlsx_round_trip(self):
        path = self.tmp / "sheet.xlsx"
        records = TabularRecords([["name", "repository", "accessibility"], ["a", "github.com/a/b", ""], ["b", "", "inaccessible"]])
        write_records(records, path)

        self.assertEqual(read_records(path).rows, records.rows)
        self.assertEqual(pd.ExcelFile(path).sheet_names, ["Sheet1"])

    def test_xlsx_reads_first_sheet_only(self):
        path = self.tmp / "multi.xlsx"
        with pd.ExcelWriter(path, engine="openpyxl") as writer:
            pd.DataFrame([["name", "repository"], ["a", "gitee.com/a/b"]]).to_excel(
                writer, sheet_name="Roster", header=False, index=False
            )
            pd.DataFrame([["other"]]).to_excel(writer, sheet_name="Notes", header=False, index=False)

        records = read_records(path)
        self.assertEqual(records.rows, [["name", "repository"], ["a", "gitee.com/a/b"]])

    def test_unsupported_and_missing_files(self):
        with self.assertRaises(TabularFileError):
            read_records(self.tmp / "data.txt")
        with self.assertRaises(TabularFileError):
            read_records(self.tmp / "missing.csv")
        with self.assertRaises(TabularFileError):
            read_records(self.tmp / "missing.xlsx")
        with self.assertRaises(TabularFileError):
            write_records(TabularRecords([["a"]]), self.tmp / "out.json")

    def test_processed_path(self):
        self.assertEqual(processed_path(Path("/d/名单.xlsx")), Path("/d/名单_processed.xlsx"))
        self.assertEqual(processed_path("data.csv"), Path("data_processed.csv"))

    def test_preview(self):
        records = TabularRecords([["name", "repository"], ["a", "x" * 40], ["b", "y"]])
        lines = preview_lines("Sheet1", records, limit=1)
        self.assertEqual(lines[0], "==== Sheet1 ====")
        self.assertIn("Data rows: 2", lines)
        self.assertEqual(lines[-1], "  Row 1: a | " + "x" * 30 + "...")

    def test_preview_main_lists_sheets(self):
        path = self.tmp / "preview.xlsx"
        with pd.ExcelWriter(path, engine="openpyxl") as writer:
            pd.DataFrame([["h"], ["v"]]).to_excel(writer, sheet_name="First", header=False, index=False)
            pd.DataFrame([["h2"]]).to_excel(writer, sheet_name="Second", header=False, index=False)

        buf = io.StringIO()
        with redirect_stdout(buf):
            main([str(path)])
        out = buf.getvalue()
        self.assertIn("Found 2 sheet(s): First, Second", out)
        self.assertIn("==== Second ====", out)

    def test_preview_main_exits_on_bad_file(self):
        with redirect_stdout(io.StringIO()):
            with self.assertRaises(SystemExit) as ctx:
                main([str(self.tmp / "nope.xlsx")])
        self.assertEqual(ctx.exception.code, 1)


if __name__ == "__main__":
    unittest.main()
