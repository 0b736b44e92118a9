from __future__ import annotations

import json
from typing import List

import pandas as pd

from git_event_monitor.models import AnalysisResult


OUTPUT_FORMATS = ("table", "json")


def format_table(result: AnalysisResult) -> str:
    lines: List[str] = []
    if not result.found:
        lines.append("No code events found")
        lines.append(f"Events checked: {result.events_checked}")
        if result.error:
            lines.append(f"Error: {result.error}")
        return "\n".join(lines)

    lines.append("Code event found")
    lines.append(f"Events checked: {result.events_checked}")
    if result.event_description:
        lines.append(f"Latest: {result.event_description}")
    if result.submitted_before is not None:
        status = "Submitted before deadline" if result.submitted_before else "Submitted after deadline"
        lines.append(f"Status: {status}")
    if result.time_difference:
        lines.append(f"Time difference: {result.time_difference}")
    if result.error:
        lines.append(f"Error: {result.error}")

    event = result.last_code_event
    if event is not None:
        details = pd.DataFrame(
            {
                "Field": ["Event ID", "Event Type", "Created At", "Actor", "Repository"],
                "Value": [event.id, event.type, event.created_at, event.actor_login, event.repo_name],
            }
        )
        lines.append("")
        lines.append("Last Code Event Details:")
        lines.append(details.to_string(index=False, justify="left"))
    return "\n".join(lines)


def format_json(result: AnalysisResult) -> str:
    return json.dumps(result.to_dict(), indent=2, ensure_ascii=False)


def render(result: AnalysisResult, output_format: str = "table") -> str:
    """Render with the named format; anything but "json" falls back to the table."""
    if output_format == "json":
        return format_json(result)
    return format_table(result)
