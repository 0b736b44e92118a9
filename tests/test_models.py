#!/usr/bin/env python3

import unittest

from git_event_monitor.models import (
    AnalysisResult,
    Outcome,
    Platform,
    is_code_submission_event,
    to_unified,
)
from tests.fakes import push


GITHUB_EVENT = {
    "id": "34961337560",
    "type": "PushEvent",
    "created_at": "2024-03-15T17:00:00Z",
    "actor": {"id": 1, "login": "octocat", "display_login": "octocat", "avatar_url": "https://avatars/u/1"},
    "repo": {"id": 9, "name": "octocat/hello", "url": "https://api.github.com/repos/octocat/hello"},
    "payload": {"ref": "refs/heads/main", "size": 2},
    "public": True,
}

GITEE_EVENT = {
    "id": 12345,
    "type": "PushEvent",
    "created_at": "2024-03-16T01:00:00+08:00",
    "actor": {"id": 7, "login": "gitee-user", "display_name": "G", "avatar_url": "https://gitee.com/a.png"},
    "repo": {"id": 3, "full_name": "gitee-user/demo", "html_url": "https://gitee.com/gitee-user/demo"},
    "payload": {"ref": "refs/heads/master"},
}


class TestToUnified(unittest.TestCase):
    def test_github_projection(self):
        event = to_unified(GITHUB_EVENT, Platform.GITHUB)
        self.assertEqual(event.id, "34961337560")
        self.assertEqual(event.type, "PushEvent")
        self.assertEqual(event.created_at, "2024-03-15T17:00:00Z")
        self.assertEqual(event.actor_login, "octocat")
        self.assertEqual(event.actor_avatar_url, "https://avatars/u/1")
        self.assertEqual(event.repo_name, "octocat/hello")
        self.assertEqual(event.repo_url, "https://api.github.com/repos/octocat/hello")
        self.assertEqual(event.payload, {"ref": "refs/heads/main", "size": 2})

    def test_gitee_projection_uses_full_name_and_html_url(self):
        event = to_unified(GITEE_EVENT, Platform.GITEE)
        self.assertEqual(event.id, "12345")
        self.assertEqual(event.created_at, "2024-03-16T01:00:00+08:00")
        self.assertEqual(event.actor_login, "gitee-user")
        self.assertEqual(event.repo_name, "gitee-user/demo")
        self.assertEqual(event.repo_url, "https://gitee.com/gitee-user/demo")

    def test_missing_sections_become_empty(self):
        event = to_unified({"id": "1", "type": "WatchEvent"}, Platform.GITHUB)
        self.assertEqual(event.actor_login, "")
        self.assertEqual(event.repo_name, "")
        self.assertEqual(event.created_at, "")
        self.assertEqual(dict(event.payload), {})

    def test_unified_event_is_immutable(self):
        event = to_unified(GITHUB_EVENT, Platform.GITHUB)
        with self.assertRaises(AttributeError):
            event.type = "IssuesEvent"

    def test_push_predicate(self):
        self.assertTrue(is_code_submission_event(to_unified(GITHUB_EVENT, Platform.GITHUB)))
        self.assertTrue(is_code_submission_event(to_unified(GITEE_EVENT, Platform.GITEE)))
        other = to_unified({**GITHUB_EVENT, "type": "PullRequestEvent"}, Platform.GITHUB)
        self.assertFalse(is_code_submission_event(other))


class TestPlatform(unittest.TestCase):
    def test_parse(self):
        self.assertIs(Platform.parse(" GitHub "), Platform.GITHUB)
        self.assertIs(Platform.parse("gitee"), Platform.GITEE)
        with self.assertRaises(ValueError):
            Platform.parse("gitlab")


class TestAnalysisResult(unittest.TestCase):
    def test_to_dict_omits_unset_fields(self):
        result = AnalysisResult(outcome=Outcome.EMPTY_REPOSITORY, events_checked=3, error="repository is empty")
        self.assertEqual(
            result.to_dict(),
            {
                "outcome": "empty_repository",
                "found": False,
                "events_checked": 3,
                "error": "repository is empty",
            },
        )

    def test_to_dict_keeps_false_submitted_before(self):
        result = AnalysisResult(
            outcome=Outcome.AFTER_DEADLINE,
            found=True,
            events_checked=1,
            last_code_event=push("2024-03-15T19:00:00Z"),
            submitted_before=False,
        )
        data = result.to_dict()
        self.assertIs(data["submitted_before"], False)
        self.assertEqual(data["last_code_event"]["created_at"], "2024-03-15T19:00:00Z")

    def test_accessible(self):
        self.assertFalse(AnalysisResult(outcome=Outcome.TRANSPORT_ERROR).accessible)
        self.assertTrue(AnalysisResult(outcome=Outcome.EMPTY_REPOSITORY).accessible)


if __name__ == "__main__":
    unittest.main()
