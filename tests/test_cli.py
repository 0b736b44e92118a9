#!/usr/bin/env python3

import io
import json
import unittest
from contextlib import redirect_stdout
from unittest.mock import patch

from git_event_monitor.cli import main
from git_event_monitor.models import Platform
from tests.fakes import FakeGateway, push


class TestCheckCommand(unittest.TestCase):
    def setUp(self):
        self.gateways = {
            Platform.GITHUB: FakeGateway(Platform.GITHUB, events=[push("2024-03-15T17:00:00Z", "77")]),
            Platform.GITEE: FakeGateway(Platform.GITEE, events=[], has_commits=False),
        }

    def _run(self, argv):
        buf = io.StringIO()
        with patch("git_event_monitor.cli.build_gateways", return_value=self.gateways):
            with redirect_stdout(buf):
                main(argv)
        return buf.getvalue()

    def test_json_output(self):
        out = self._run(["octocat/hello", "--deadline", "2024-03-15T18:00:00Z", "--output", "json", "--token", "t"])
        data = json.loads(out)
        self.assertEqual(data["outcome"], "before_deadline")
        self.assertTrue(data["submitted_before"])
        self.assertEqual(data["time_difference"], "1 hour before deadline")
        self.assertEqual(data["last_code_event"]["id"], "77")
        self.assertEqual(self.gateways[Platform.GITHUB].calls[0], ("fetch_events", "octocat/hello", "t"))

    def test_url_selects_platform(self):
        out = self._run(["https://gitee.com/dev/demo.git", "--output", "json"])
        self.assertEqual(json.loads(out)["outcome"], "empty_repository")
        self.assertEqual(self.gateways[Platform.GITEE].calls[0][1], "dev/demo")
        self.assertEqual(self.gateways[Platform.GITHUB].calls, [])

    def test_table_output(self):
        out = self._run(["octocat/hello"])
        self.assertIn("Code event found", out)
        self.assertNotIn("Status:", out)

    def test_invalid_arguments_exit(self):
        for argv in (["octocat/hello", "--platform", "gitlab"], ["just-a-name"], ["a/b/c"]):
            with self.subTest(argv=argv):
                with redirect_stdout(io.StringIO()):
                    with self.assertRaises(SystemExit) as ctx:
                        self._run(argv)
                self.assertEqual(ctx.exception.code, 1)
        self.assertEqual(self.gateways[Platform.GITHUB].calls, [])


if __name__ == "__main__":
    unittest.main()
