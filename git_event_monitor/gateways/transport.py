from __future__ import annotations

import time
from typing import Any, Dict, List, Mapping, Optional, Tuple

import requests

from git_event_monitor.config import mask_token, verbose_enabled
from git_event_monitor.errors import TransportError


USER_AGENT = "git-event-monitor/1.0"
SOCKET_TIMEOUT_SECONDS = 30.0

_SECRET_PARAMS = {"access_token"}


def split_repository(repo: str) -> Tuple[str, str]:
    parts = (repo or "").strip().split("/")
    if len(parts) != 2 or not parts[0] or not parts[1]:
        raise TransportError("invalid repository format, expected 'owner/repo'")
    # Dot segments would be collapsed by the HTTP client into a different endpoint.
    if any(part in (".", "..") for part in parts):
        raise TransportError(f"invalid repository name: {repo}")
    return parts[0], parts[1]


def _printable_params(params: Optional[Mapping[str, str]]) -> str:
    if not params:
        return ""
    shown = []
    for k, v in params.items():
        shown.append(f"{k}={mask_token(v) if k in _SECRET_PARAMS else v}")
    return "?" + "&".join(shown)


class RestTransport:
    """Thin `requests` wrapper shared by the platform gateways.

    One GET per call, no retries. The socket timeout here only keeps a stuck
    connection from living forever; the per-call deadline is enforced by the
    analyzer.
    """

    def __init__(
        self,
        base_url: str,
        *,
        session: Optional[requests.Session] = None,
        headers: Optional[Dict[str, str]] = None,
        timeout: float = SOCKET_TIMEOUT_SECONDS,
    ):
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.headers = {"User-Agent": USER_AGENT, **(headers or {})}
        self.timeout = timeout

    def get(
        self,
        path: str,
        *,
        params: Optional[Dict[str, str]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> requests.Response:
        if not path.startswith("/"):
            path = "/" + path
        url = f"{self.base_url}{path}"
        verbose = verbose_enabled()

        if verbose:
            print(f"[http] -> GET {url}{_printable_params(params)}")
            start = time.perf_counter()

        try:
            response = self.session.get(
                url,
                params=params,
                headers={**self.headers, **(headers or {})},
                timeout=self.timeout,
            )
        except requests.Timeout as e:
            raise TransportError(f"request timed out: {url}") from e
        except requests.RequestException as e:
            raise TransportError(f"request failed: {e}") from e

        if verbose:
            elapsed = time.perf_counter() - start
            print(f"[http] <- {response.status_code} ({elapsed:.2f}s)")
        return response


def decode_event_list(response: requests.Response) -> List[Dict[str, Any]]:
    if response.status_code != 200:
        raise TransportError(
            f"API request failed with status {response.status_code}",
            status_code=response.status_code,
        )
    try:
        data = response.json()
    except ValueError as e:
        raise TransportError(f"decode response: {e}") from e
    if not isinstance(data, list):
        raise TransportError("decode response: expected a list of events")
    return [item for item in data if isinstance(item, dict)]
