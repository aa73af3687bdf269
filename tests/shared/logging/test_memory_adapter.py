"""
목적: 인메모리 로그 어댑터의 저장/조회/정리 동작을 검증한다.
설명: 최신순 정렬, 필터 결합, 검색어와 건수의 차이, 용량 초과 제거, 보존 정리를 확인한다.
디자인 패턴: 테스트 케이스
참조: src/expense_tracker/shared/logging/adapter.py
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from expense_tracker.shared.exceptions import StorageError
from expense_tracker.shared.logging import (
    InMemoryLogAdapter,
    LogCategory,
    LogEntry,
    LogFilter,
    LogLevel,
)

_NOW = datetime.now(timezone.utc)


def _entry(
    log_id: str,
    minutes_ago: float,
    level: LogLevel = LogLevel.INFO,
    category: LogCategory = LogCategory.USER_ACTION,
    action: str = "expense_created",
    message: str = "User performed: expense_created",
    user_id: str | None = None,
) -> LogEntry:
    return LogEntry(
        id=log_id,
        timestamp=_NOW - timedelta(minutes=minutes_ago),
        level=level,
        category=category,
        action=action,
        message=message,
        user_id=user_id,
    )


@pytest.mark.asyncio
async def test_write_then_read_round_trip() -> None:
    """저장한 엔트리가 동일한 값으로 조회되는지 확인한다."""

    adapter = InMemoryLogAdapter()
    entry = _entry("e1", 1, user_id="u1")

    await adapter.write(entry)

    assert await adapter.read() == [entry]


@pytest.mark.asyncio
async def test_read_orders_newest_first_and_paginates() -> None:
    """최신순 정렬과 limit/offset 슬라이싱을 확인한다."""

    adapter = InMemoryLogAdapter()
    for index, minutes in enumerate([30, 10, 20, 5]):
        await adapter.write(_entry(f"e{index}", minutes))

    ids = [entry.id for entry in await adapter.read()]
    assert ids == ["e3", "e1", "e2", "e0"]
    page = await adapter.read(limit=2, offset=1)
    assert [entry.id for entry in page] == ["e1", "e2"]
    assert await adapter.read(limit=2, offset=10) == []


@pytest.mark.asyncio
async def test_filters_are_combined_with_and() -> None:
    """레벨/카테고리/사용자/기간 조건이 모두 적용되는지 확인한다."""

    adapter = InMemoryLogAdapter()
    await adapter.write(_entry("a", 5, level=LogLevel.ERROR, category=LogCategory.API, user_id="u1"))
    await adapter.write(_entry("b", 5, level=LogLevel.INFO, category=LogCategory.API, user_id="u1"))
    await adapter.write(_entry("c", 5, level=LogLevel.ERROR, category=LogCategory.SYSTEM, user_id="u1"))
    await adapter.write(_entry("d", 5, level=LogLevel.ERROR, category=LogCategory.API, user_id="u2"))
    await adapter.write(_entry("e", 120, level=LogLevel.ERROR, category=LogCategory.API, user_id="u1"))

    log_filter = LogFilter(
        level=[LogLevel.ERROR, LogLevel.WARN],
        category=[LogCategory.API],
        user_id="u1",
        start_date=_NOW - timedelta(minutes=60),
        end_date=_NOW,
    )

    assert [entry.id for entry in await adapter.read(log_filter)] == ["a"]
    assert await adapter.count(log_filter) == 1


@pytest.mark.asyncio
async def test_search_matches_message_or_action_case_insensitively() -> None:
    """검색어가 message 또는 action에 대소문자 구분 없이 적용되는지 확인한다."""

    adapter = InMemoryLogAdapter()
    await adapter.write(_entry("m", 3, action="signin", message="User signed IN"))
    await adapter.write(_entry("a", 2, action="receipt_upload_started", message="upload"))
    await adapter.write(_entry("x", 1, action="signout", message="bye"))

    hits = await adapter.read(LogFilter(search="receipt"))
    assert [entry.id for entry in hits] == ["a"]
    hits = await adapter.read(LogFilter(search="signed in"))
    assert [entry.id for entry in hits] == ["m"]


@pytest.mark.asyncio
async def test_count_ignores_search() -> None:
    """건수는 검색어를 무시하므로 조회 결과보다 클 수 있음을 확인한다."""

    adapter = InMemoryLogAdapter()
    await adapter.write(_entry("a", 2, message="Created expense"))
    await adapter.write(_entry("b", 1, message="Deleted expense", action="expense_deleted"))

    log_filter = LogFilter(search="deleted")

    assert len(await adapter.read(log_filter)) == 1
    assert await adapter.count(log_filter) == 2


@pytest.mark.asyncio
async def test_bounded_buffer_evicts_oldest() -> None:
    """최대 건수를 넘으면 가장 오래된 엔트리부터 버리는지 확인한다."""

    adapter = InMemoryLogAdapter(max_entries=3)
    for index in range(5):
        await adapter.write(_entry(f"e{index}", 10 - index))

    ids = [entry.id for entry in await adapter.read()]
    assert ids == ["e4", "e3", "e2"]
    assert len(adapter) == 3
    assert adapter.evicted_count == 2


@pytest.mark.asyncio
async def test_delete_is_idempotent() -> None:
    """삭제 후 재삭제와 없는 식별자 삭제가 오류 없이 처리되는지 확인한다."""

    adapter = InMemoryLogAdapter()
    await adapter.write(_entry("a", 1))

    await adapter.delete("a")
    await adapter.delete("a")
    await adapter.delete("missing")

    assert await adapter.read() == []


@pytest.mark.asyncio
async def test_cleanup_removes_only_old_entries() -> None:
    """보존 기간보다 오래된 엔트리만 삭제되는지 확인한다."""

    adapter = InMemoryLogAdapter()
    await adapter.write(_entry("old", 60 * 24 * 40))
    await adapter.write(_entry("recent", 60 * 24 * 10))

    removed = await adapter.cleanup(30)

    assert removed == 1
    assert [entry.id for entry in await adapter.read()] == ["recent"]
    assert await adapter.cleanup(30) == 0


@pytest.mark.asyncio
async def test_try_write_reports_failure_as_result() -> None:
    """try_write가 예외 대신 결과 객체를 반환하는지 확인한다."""

    class _Broken(InMemoryLogAdapter):
        async def write(self, entry: LogEntry) -> None:
            raise StorageError.from_error("write", ConnectionError("offline"))

    ok = await InMemoryLogAdapter().try_write(_entry("a", 1))
    failed = await _Broken().try_write(_entry("b", 1))

    assert ok.ok and ok.error is None
    assert not failed.ok
    assert failed.entry_id == "b"
    assert failed.error.detail.code == "LOG_STORAGE_ERROR"


def test_max_entries_must_be_positive() -> None:
    with pytest.raises(ValueError):
        InMemoryLogAdapter(max_entries=0)
