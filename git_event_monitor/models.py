"""Data model shared by the gateways, the analyzer and the presenters.

Platform-specific event JSON is projected into `UnifiedEvent` once, right at
the gateway boundary; everything downstream only ever sees the unified shape.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Mapping, Optional


CODE_SUBMISSION_EVENT_TYPE = "PushEvent"


class Platform(str, Enum):
    GITHUB = "github"
    GITEE = "gitee"

    @property
    def host(self) -> str:
        return f"{self.value}.com"

    @classmethod
    def parse(cls, value: str) -> "Platform":
        try:
            return cls((value or "").strip().lower())
        except ValueError:
            supported = ", ".join(p.value for p in cls)
            raise ValueError(f"unsupported platform: {value} (supported: {supported})") from None


@dataclass(frozen=True)
class RepositoryReference:
    platform: Platform
    owner: str
    name: str

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"

    @property
    def canonical_url(self) -> str:
        return f"{self.platform.host}/{self.owner}/{self.name}"


@dataclass(frozen=True)
class UnifiedEvent:
    id: str
    type: str
    created_at: str
    actor_login: str = ""
    actor_avatar_url: str = ""
    repo_name: str = ""
    repo_url: str = ""
    payload: Mapping[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type,
            "created_at": self.created_at,
            "actor_login": self.actor_login,
            "actor_avatar_url": self.actor_avatar_url,
            "repo_name": self.repo_name,
            "repo_url": self.repo_url,
            "payload": dict(self.payload),
        }


def _section(raw: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    value = raw.get(key)
    return value if isinstance(value, Mapping) else {}


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def to_unified(raw_event: Mapping[str, Any], platform: Platform) -> UnifiedEvent:
    """Project one raw platform event into the unified shape.

    GitHub names the repository in `repo.name`/`repo.url`, Gitee in
    `repo.full_name`/`repo.html_url`. The payload is copied without being
    interpreted.
    """
    actor = _section(raw_event, "actor")
    repo = _section(raw_event, "repo")
    if platform is Platform.GITEE:
        repo_name, repo_url = repo.get("full_name"), repo.get("html_url")
    else:
        repo_name, repo_url = repo.get("name"), repo.get("url")

    payload = raw_event.get("payload")
    return UnifiedEvent(
        id=_text(raw_event.get("id")),
        type=_text(raw_event.get("type")),
        created_at=_text(raw_event.get("created_at")),
        actor_login=_text(actor.get("login")),
        actor_avatar_url=_text(actor.get("avatar_url")),
        repo_name=_text(repo_name),
        repo_url=_text(repo_url),
        payload=dict(payload) if isinstance(payload, Mapping) else {},
    )


def is_code_submission_event(event: UnifiedEvent) -> bool:
    return event.type == CODE_SUBMISSION_EVENT_TYPE


@dataclass
class AnalysisRequest:
    repository: str
    platform: Platform
    token: Optional[str] = None
    deadline: Optional[str] = None


class Outcome(str, Enum):
    """Terminal state reached by one analysis run."""

    TRANSPORT_ERROR = "transport_error"
    ANALYSIS_FAILED = "analysis_failed"
    NO_RECENT_PUSH = "no_recent_push"
    EMPTY_REPOSITORY = "empty_repository"
    NO_DEADLINE = "no_deadline"
    PARSE_ERROR = "parse_error"
    BEFORE_DEADLINE = "before_deadline"
    AFTER_DEADLINE = "after_deadline"


@dataclass
class AnalysisResult:
    outcome: Outcome
    found: bool = False
    events_checked: int = 0
    last_code_event: Optional[UnifiedEvent] = None
    submitted_before: Optional[bool] = None
    time_difference: Optional[str] = None
    event_description: Optional[str] = None
    error: Optional[str] = None

    @property
    def accessible(self) -> bool:
        return self.outcome is not Outcome.TRANSPORT_ERROR

    def to_dict(self) -> Dict[str, Any]:
        """Serializable view; unset optional fields are omitted."""
        out: Dict[str, Any] = {
            "outcome": self.outcome.value,
            "found": self.found,
            "events_checked": self.events_checked,
        }
        if self.last_code_event is not None:
            out["last_code_event"] = self.last_code_event.to_dict()
        if self.submitted_before is not None:
            out["submitted_before"] = self.submitted_before
        if self.time_difference:
            out["time_difference"] = self.time_difference
        if self.event_description:
            out["event_description"] = self.event_description
        if self.error:
            out["error"] = self.error
        return out
