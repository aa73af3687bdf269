"""
목적: 로그 엔트리 모델과 생성 규칙을 검증한다.
설명: 레벨 순서, 식별자/타임스탬프 생성, 컨텍스트 스냅샷, 요청 범위 메타데이터 보강을 확인한다.
디자인 패턴: 테스트 케이스
참조: src/expense_tracker/shared/logging/models.py, src/expense_tracker/shared/logging/request_scope.py
"""

from __future__ import annotations

import re

import pytest
from pydantic import ValidationError

from expense_tracker.shared.logging import (
    LogCategory,
    LogLevel,
    bind_request_scope,
    create_entry,
)


def test_log_level_ordering() -> None:
    """DEBUG < INFO < WARN < ERROR 순서를 확인한다."""

    assert LogLevel.DEBUG.severity < LogLevel.INFO.severity
    assert LogLevel.INFO.severity < LogLevel.WARN.severity
    assert LogLevel.WARN.severity < LogLevel.ERROR.severity
    assert LogLevel.WARN.at_least(LogLevel.INFO)
    assert not LogLevel.DEBUG.at_least(LogLevel.INFO)
    assert LogLevel.ERROR.at_least(LogLevel.ERROR)


def test_create_entry_populates_fields() -> None:
    """엔트리 생성 시 식별자, UTC 시각, 컨텍스트 스냅샷이 채워지는지 확인한다."""

    context = {"user_id": "user-1", "user_email": "a@example.com"}
    entry = create_entry(
        LogLevel.INFO,
        LogCategory.USER_ACTION,
        "expense_created",
        "User performed: expense_created",
        details={"amount": 42},
        context=context,
    )

    assert re.fullmatch(r"\d+-[0-9a-f]{9}", entry.id)
    assert entry.timestamp.tzinfo is not None
    assert entry.user_id == "user-1"
    assert entry.details["amount"] == 42
    assert entry.details["context"] == context

    context["user_id"] = "user-2"
    assert entry.details["context"]["user_id"] == "user-1"


def test_create_entry_ids_are_unique_and_timestamps_monotonic() -> None:
    """연속 생성한 엔트리의 식별자가 겹치지 않고 시각이 역행하지 않는지 확인한다."""

    entries = [
        create_entry(LogLevel.DEBUG, LogCategory.SYSTEM, "tick", "tick") for _ in range(200)
    ]

    assert len({entry.id for entry in entries}) == 200
    for previous, current in zip(entries, entries[1:]):
        assert previous.timestamp <= current.timestamp


def test_create_entry_without_context_has_no_user() -> None:
    """컨텍스트가 없으면 user_id가 비어 있는지 확인한다."""

    entry = create_entry(LogLevel.INFO, LogCategory.SYSTEM, "boot", "boot")

    assert entry.user_id is None
    assert entry.details == {"context": {}}
    assert entry.metadata.user_agent is None
    assert entry.metadata.route is None


def test_create_entry_enriches_metadata_in_request_scope() -> None:
    """요청 범위 안에서는 user_agent/route가 자동으로 채워지는지 확인한다."""

    with bind_request_scope(route="/expenses", user_agent="pytest-agent"):
        entry = create_entry(LogLevel.INFO, LogCategory.API, "request_start", "GET /expenses")

    assert entry.metadata.route == "/expenses"
    assert entry.metadata.user_agent == "pytest-agent"

    outside = create_entry(LogLevel.INFO, LogCategory.API, "request_start", "GET /expenses")
    assert outside.metadata.route is None


def test_explicit_metadata_route_is_kept_in_request_scope() -> None:
    """호출자가 준 route 메타데이터가 요청 범위 값보다 우선하는지 확인한다."""

    with bind_request_scope(route="/outer"):
        entry = create_entry(
            LogLevel.INFO,
            LogCategory.API,
            "api_call",
            "GET /inner",
            metadata={"route": "/inner", "custom": "value"},
        )

    assert entry.metadata.route == "/inner"
    assert entry.metadata.compact()["custom"] == "value"


def test_log_entry_is_frozen() -> None:
    """저장 이후 엔트리 필드를 변경할 수 없는지 확인한다."""

    entry = create_entry(LogLevel.INFO, LogCategory.SYSTEM, "boot", "boot")

    with pytest.raises(ValidationError):
        entry.message = "changed"
