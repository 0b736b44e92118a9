from __future__ import annotations

from pathlib import Path

from setuptools import find_packages, setup


def read_requirements(filename: str = "requirements.txt") -> list[str]:
    req = Path(__file__).parent / filename
    if not req.exists():
        return []
    lines: list[str] = []
    for line in req.read_text(encoding="utf-8").splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        lines.append(line)
    return lines


setup(
    name="git-event-monitor",
    version="0.1.0",
    description="Deadline compliance audits for GitHub/Gitee repositories based on push events",
    long_description=(Path(__file__).parent / "README.md").read_text(encoding="utf-8"),
    long_description_content_type="text/markdown",
    python_requires=">=3.10",
    packages=find_packages(include=["git_event_monitor", "git_event_monitor.*"]),
    include_package_data=True,
    install_requires=read_requirements(),
    extras_require={"test": read_requirements("requirements-test.txt")},
    entry_points={
        "console_scripts": [
            "git-event-monitor=git_event_monitor.cli:main",
            "git-event-monitor-sheet=git_event_monitor.batch:main",
            "git-event-monitor-preview=git_event_monitor.tabular:main",
        ]
    },
)
