"""Repository reference classification.

Spreadsheet cells are free-form: people paste HTTPS links, SSH remotes, bare
`host/owner/repo` strings, several links at once, or a link followed by a
comment. `classify` accepts only a single, well-formed GitHub or Gitee
reference and rejects everything else.

Accepted shapes (per host, `.git` suffix and trailing slash optional):
- https://github.com/owner/repo
- git@github.com:owner/repo.git
- github.com/owner/repo  (or github.com:owner/repo)
"""

from __future__ import annotations

import re
from typing import List, Optional, Tuple

from git_event_monitor.models import Platform, RepositoryReference


MIN_REFERENCE_LENGTH = 10
MAX_REFERENCE_LENGTH = 200

_NAME_RE = re.compile(r"^[A-Za-z0-9._-]+$")
_TAIL = r"([^/\s]+)/([^/\s]+?)(?:\.git)?/?$"


def _host_patterns(host: str) -> List[re.Pattern]:
    escaped = re.escape(host)
    return [
        re.compile(rf"^https?://{escaped}[/:]{_TAIL}", re.IGNORECASE),
        re.compile(rf"^git@{escaped}:{_TAIL}", re.IGNORECASE),
        re.compile(rf"^{escaped}[/:]{_TAIL}", re.IGNORECASE),
    ]


_PATTERNS: List[Tuple[Platform, List[re.Pattern]]] = [
    (platform, _host_patterns(platform.host)) for platform in (Platform.GITHUB, Platform.GITEE)
]


def is_valid_name(name: str) -> bool:
    if name in (".", ".."):
        return False
    return bool(name) and _NAME_RE.match(name) is not None


def looks_like_multiple_references(text: str) -> bool:
    # Heuristic: a second "http" means a second link, even inside a query string.
    return "\n" in text or text.count("http") > 1


def classify(raw: Optional[str]) -> Optional[RepositoryReference]:
    """Return the repository a reference points at, or None if unrecognized."""
    text = (raw or "").strip()
    if looks_like_multiple_references(text):
        return None
    if len(text) < MIN_REFERENCE_LENGTH or len(text) > MAX_REFERENCE_LENGTH:
        return None

    for platform, patterns in _PATTERNS:
        for pattern in patterns:
            match = pattern.match(text)
            if not match:
                continue
            owner = match.group(1).strip()
            name = match.group(2).strip()
            if is_valid_name(owner) and is_valid_name(name):
                return RepositoryReference(platform=platform, owner=owner, name=name)
    return None


def parse_repository_argument(text: str, platform: Platform) -> RepositoryReference:
    """Resolve a CLI repository argument.

    URL-like arguments are classified (their host wins over `platform`); a
    plain `owner/repo` is paired with `platform`. Raises ValueError otherwise.
    """
    value = (text or "").strip()
    lowered = value.lower()
    url_like = "://" in value or lowered.startswith("git@") or any(
        lowered.startswith(p.host) for p in Platform
    )
    if url_like:
        ref = classify(value)
        if ref is None:
            raise ValueError(f"unrecognized repository reference: {value}")
        return ref

    parts = value.split("/")
    if len(parts) != 2:
        raise ValueError("repository format should be 'owner/repo'")
    owner, name = parts[0].strip(), parts[1].strip()
    if name.lower().endswith(".git"):
        name = name[:-4]
    if not (is_valid_name(owner) and is_valid_name(name)):
        raise ValueError(f"invalid repository name: {value}")
    return RepositoryReference(platform=platform, owner=owner, name=name)
