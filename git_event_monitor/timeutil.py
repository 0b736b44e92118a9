from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone

from git_event_monitor.errors import TimestampParseError


_FRACTION_RE = re.compile(r"\.(\d+)(?=[+-]\d\d:\d\d$)")


def _six_digit_fraction(match: re.Match) -> str:
    return "." + match.group(1)[:6].ljust(6, "0")


def parse_instant(value: str) -> datetime:
    """Parse an RFC 3339 timestamp into an aware UTC datetime.

    A UTC offset (or a trailing `Z`) is required; a bare local time has no
    single instant to compare against.
    """
    text = (value or "").strip()
    if not text:
        raise TimestampParseError("empty timestamp")
    if text[-1] in "zZ":
        text = text[:-1] + "+00:00"
    # fromisoformat on 3.10 only takes 3 or 6 fractional digits.
    text = _FRACTION_RE.sub(_six_digit_fraction, text)
    try:
        dt = datetime.fromisoformat(text)
    except ValueError as e:
        raise TimestampParseError(f"invalid timestamp {value!r}: {e}") from e
    if dt.tzinfo is None:
        raise TimestampParseError(f"invalid timestamp {value!r}: missing UTC offset")
    return dt.astimezone(timezone.utc)


def _unit(count: int, singular: str, plural: str) -> str:
    return f"{count} {singular if count == 1 else plural}"


def format_duration(delta: timedelta, locale: str = "en") -> str:
    """Render a non-negative duration, truncated to whole units.

    Under an hour: minutes. Under a day: hours plus leftover minutes.
    Otherwise: days plus leftover hours.
    """
    total_minutes = int(abs(delta).total_seconds() // 60)
    zh = locale == "zh"

    if total_minutes < 60:
        return f"{total_minutes}分钟" if zh else _unit(total_minutes, "minute", "minutes")

    total_hours, minutes = divmod(total_minutes, 60)
    if total_hours < 24:
        if zh:
            return f"{total_hours}小时{minutes}分钟" if minutes else f"{total_hours}小时"
        text = _unit(total_hours, "hour", "hours")
        return f"{text} {_unit(minutes, 'minute', 'minutes')}" if minutes else text

    days, hours = divmod(total_hours, 24)
    if zh:
        return f"{days}天{hours}小时" if hours else f"{days}天"
    text = _unit(days, "day", "days")
    return f"{text} {_unit(hours, 'hour', 'hours')}" if hours else text


def describe_difference(event_time: datetime, deadline: datetime, locale: str = "en") -> str:
    duration = format_duration(deadline - event_time, locale)
    before = event_time <= deadline
    if locale == "zh":
        return f"截止时间前 {duration}" if before else f"超过截止时间 {duration}"
    return f"{duration} before deadline" if before else f"{duration} after deadline"
