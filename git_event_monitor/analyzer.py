"""Deadline-compliance analysis for one repository.

The analyzer walks a fixed sequence of steps and stops at the first terminal
state, tagging the result with an `Outcome`:

1. fetch the latest page of repository events (transport failure: stop)
2. keep only PushEvents, newest first
3. no push event: ask whether the repository has any commit at all, which
   separates an empty repository from one whose only commits never surfaced
   as a push event (initial or bulk import)
4. push event found: without a deadline, stop
5. with a deadline: parse both instants (failure: stop) and compare; equality
   counts as on time

Every gateway call runs under its own timeout. A timeout is reported the same
way as any other transport failure.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeout
from typing import Callable, List, Mapping, Optional, TypeVar

from git_event_monitor.config import DEFAULT_CALL_TIMEOUT_SECONDS
from git_event_monitor.errors import TimestampParseError, TransportError
from git_event_monitor.gateways import PlatformGateway
from git_event_monitor.models import (
    AnalysisRequest,
    AnalysisResult,
    Outcome,
    Platform,
    RepositoryReference,
    UnifiedEvent,
    is_code_submission_event,
)
from git_event_monitor.timeutil import describe_difference, parse_instant


T = TypeVar("T")

ANALYSIS_FAILED_MESSAGE = "analysis failed"
NO_RECENT_PUSH_MESSAGE = "has commits but no recent push event (likely bulk/initial commit)"
EMPTY_REPOSITORY_MESSAGE = "repository is empty"


def call_with_timeout(func: Callable[..., T], *args, timeout: Optional[float]) -> T:
    """Run `func(*args)`, raising TransportError if it takes longer than `timeout`."""
    if not timeout or timeout <= 0:
        return func(*args)

    executor = ThreadPoolExecutor(max_workers=1)
    try:
        future = executor.submit(func, *args)
        try:
            return future.result(timeout=timeout)
        except FutureTimeout:
            future.cancel()
            raise TransportError(f"request timed out after {timeout:g}s") from None
    finally:
        # A call that outlived its timeout is abandoned, not awaited.
        executor.shutdown(wait=False)


class ComplianceAnalyzer:
    def __init__(
        self,
        gateways: Mapping[Platform, PlatformGateway],
        *,
        timeout: Optional[float] = DEFAULT_CALL_TIMEOUT_SECONDS,
        locale: str = "en",
    ):
        self.gateways = dict(gateways)
        self.timeout = timeout
        self.locale = locale

    def gateway_for(self, platform: Platform) -> PlatformGateway:
        try:
            return self.gateways[platform]
        except KeyError:
            raise ValueError(f"no gateway configured for platform: {platform.value}") from None

    def analyze_reference(
        self,
        ref: RepositoryReference,
        token: Optional[str] = None,
        deadline: Optional[str] = None,
    ) -> AnalysisResult:
        return self.analyze(
            AnalysisRequest(repository=ref.full_name, platform=ref.platform, token=token, deadline=deadline)
        )

    def analyze(self, request: AnalysisRequest) -> AnalysisResult:
        gateway = self.gateway_for(request.platform)
        token = request.token or None

        try:
            events = call_with_timeout(gateway.fetch_events, request.repository, token, timeout=self.timeout)
        except TransportError as e:
            return AnalysisResult(outcome=Outcome.TRANSPORT_ERROR, events_checked=0, error=str(e))

        pushes: List[UnifiedEvent] = [e for e in events if is_code_submission_event(e)]
        if not pushes:
            return self._without_push_events(gateway, request.repository, token, len(events))

        latest = pushes[0]
        result = AnalysisResult(
            outcome=Outcome.NO_DEADLINE,
            found=True,
            events_checked=len(events),
            last_code_event=latest,
            event_description=f"{latest.type} ({latest.created_at})",
        )

        deadline_text = (request.deadline or "").strip()
        if not deadline_text:
            return result

        try:
            deadline = parse_instant(deadline_text)
        except TimestampParseError as e:
            result.outcome = Outcome.PARSE_ERROR
            result.error = f"invalid deadline format: {e}"
            return result
        try:
            event_time = parse_instant(latest.created_at)
        except TimestampParseError as e:
            result.outcome = Outcome.PARSE_ERROR
            result.error = f"invalid event time format: {e}"
            return result

        result.submitted_before = event_time <= deadline
        result.outcome = Outcome.BEFORE_DEADLINE if result.submitted_before else Outcome.AFTER_DEADLINE
        result.time_difference = describe_difference(event_time, deadline, self.locale)
        return result

    def _without_push_events(
        self,
        gateway: PlatformGateway,
        repository: str,
        token: Optional[str],
        events_checked: int,
    ) -> AnalysisResult:
        try:
            has_commits = call_with_timeout(gateway.has_commits, repository, token, timeout=self.timeout)
        except TransportError:
            return AnalysisResult(
                outcome=Outcome.ANALYSIS_FAILED,
                events_checked=events_checked,
                error=ANALYSIS_FAILED_MESSAGE,
            )

        if has_commits:
            return AnalysisResult(
                outcome=Outcome.NO_RECENT_PUSH,
                events_checked=events_checked,
                error=NO_RECENT_PUSH_MESSAGE,
            )
        return AnalysisResult(
            outcome=Outcome.EMPTY_REPOSITORY,
            events_checked=events_checked,
            error=EMPTY_REPOSITORY_MESSAGE,
        )
