#!/usr/bin/env python3
"""Check a single repository's latest code submission.

Examples:
    git-event-monitor microsoft/vscode
    git-event-monitor https://github.com/microsoft/vscode.git --deadline 2024-03-15T18:00:00Z
    git-event-monitor owner/repo --platform gitee --output json
"""

from __future__ import annotations

import argparse
from typing import List, Optional

from dotenv import load_dotenv

from git_event_monitor.analyzer import ComplianceAnalyzer
from git_event_monitor.config import SUPPORTED_LOCALES, Settings
from git_event_monitor.formatter import OUTPUT_FORMATS, render
from git_event_monitor.gateways import build_gateways
from git_event_monitor.models import Platform
from git_event_monitor.url_parser import parse_repository_argument


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Check the latest code submission (push) event of a GitHub/Gitee repository."
    )
    parser.add_argument("repository", help="owner/repo, or a repository URL (HTTPS, SSH or bare host/owner/repo)")
    parser.add_argument(
        "--platform",
        default="github",
        help="Platform for an owner/repo argument: github or gitee (default: github)",
    )
    parser.add_argument("--token", default=None, help="API token (default: env GITHUB_TOKEN / GITEE_TOKEN)")
    parser.add_argument("--deadline", default=None, help="Deadline in RFC 3339 format, e.g. 2024-03-15T18:00:00Z")
    parser.add_argument("--output", choices=OUTPUT_FORMATS, default="table", help="Output format (default: table)")
    parser.add_argument("--locale", choices=SUPPORTED_LOCALES, default=None, help="Language of duration text")
    parser.add_argument("--timeout-seconds", type=float, default=None, help="Per-request timeout (default: 10)")
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    load_dotenv()
    args = build_parser().parse_args(argv)
    settings = Settings.from_env()

    try:
        platform = Platform.parse(args.platform)
        ref = parse_repository_argument(args.repository, platform)
    except ValueError as e:
        print(f"Error: {e}")
        raise SystemExit(1)

    token = args.token
    if not token:
        token = settings.github_token if ref.platform is Platform.GITHUB else settings.gitee_token

    timeout = args.timeout_seconds if args.timeout_seconds and args.timeout_seconds > 0 else settings.timeout_seconds
    analyzer = ComplianceAnalyzer(
        build_gateways(settings),
        timeout=timeout,
        locale=args.locale or settings.locale,
    )
    result = analyzer.analyze_reference(ref, token, args.deadline)
    print(render(result, args.output))


if __name__ == "__main__":
    main()
