"""Repository push-event deadline auditing for GitHub and Gitee.

Package layout:
- git_event_monitor.url_parser: repository reference classification
- git_event_monitor.gateways: per-platform REST access
- git_event_monitor.analyzer: deadline-compliance analysis
- git_event_monitor.formatter: table / JSON rendering of a result
- git_event_monitor.tabular: CSV / XLSX row I/O
- git_event_monitor.batch: sheet-driven batch audits
- git_event_monitor.cli: single-repository check
"""

__all__ = [
    "analyzer",
    "batch",
    "cli",
    "formatter",
    "gateways",
    "tabular",
    "url_parser",
]
