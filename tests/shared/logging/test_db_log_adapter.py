"""
목적: 문서 저장소 로그 어댑터를 SQLite 엔진으로 검증한다.
설명: 왕복 저장, 익명 사용자 표기, 서버측 필터/건수, 검색어 후처리, 값 정제, 배치 정리를 확인한다.
디자인 패턴: 테스트 케이스
참조: src/expense_tracker/shared/logging/db_adapter.py, src/expense_tracker/integrations/db/engines/sqlite.py
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from enum import Enum
from types import SimpleNamespace

import pytest

from expense_tracker.integrations.db import DBClient
from expense_tracker.shared.exceptions import StorageError
from expense_tracker.shared.logging import (
    DBLogAdapter,
    LogCategory,
    LogEntry,
    LogFilter,
    LogLevel,
    LogMetadata,
)
from expense_tracker.shared.logging.db_adapter import (
    ANONYMOUS_USER,
    CLEANUP_BATCH_SIZE,
    parse_timestamp,
    sanitize_payload,
)

_NOW = datetime.now(timezone.utc).replace(microsecond=0)


class _Color(str, Enum):
    RED = "red"


def _entry(
    log_id: str,
    minutes_ago: float,
    level: LogLevel = LogLevel.INFO,
    category: LogCategory = LogCategory.USER_ACTION,
    action: str = "expense_created",
    message: str = "User performed: expense_created",
    user_id: str | None = "u1",
    details: dict | None = None,
) -> LogEntry:
    return LogEntry(
        id=log_id,
        timestamp=_NOW - timedelta(minutes=minutes_ago),
        level=level,
        category=category,
        action=action,
        message=message,
        user_id=user_id,
        details=details or {"amount": 42, "context": {"user_id": user_id}},
        metadata=LogMetadata(route="/expenses", duration=1.5),
    )


@pytest.mark.asyncio
async def test_round_trip_preserves_entry(sqlite_adapter: DBLogAdapter) -> None:
    """저장한 엔트리가 동일한 필드로 조회되는지 확인한다."""

    entry = _entry("e1", 1)

    await sqlite_adapter.write(entry)
    loaded = await sqlite_adapter.read()

    assert len(loaded) == 1
    assert loaded[0].id == entry.id
    assert loaded[0].timestamp == entry.timestamp
    assert loaded[0].level == entry.level
    assert loaded[0].category == entry.category
    assert loaded[0].user_id == "u1"
    assert loaded[0].details == entry.details
    assert loaded[0].metadata.route == "/expenses"
    assert loaded[0].metadata.duration == 1.5


@pytest.mark.asyncio
async def test_missing_user_is_stored_as_anonymous(
    sqlite_adapter: DBLogAdapter, sqlite_client: DBClient
) -> None:
    """사용자 없는 엔트리는 anonymous로 저장되고 조회 시 None으로 돌아오는지 확인한다."""

    await sqlite_adapter.write(_entry("anon", 1, user_id=None, details={"k": "v"}))

    stored = sqlite_client.get("logs", "anon")
    loaded = await sqlite_adapter.read()

    assert stored is not None
    assert stored.fields["user_id"] == ANONYMOUS_USER
    assert loaded[0].user_id is None


@pytest.mark.asyncio
async def test_write_never_overwrites(sqlite_adapter: DBLogAdapter) -> None:
    """같은 식별자로 다시 쓰면 덮어쓰지 않고 StorageError가 발생하는지 확인한다."""

    await sqlite_adapter.write(_entry("dup", 1))

    with pytest.raises(StorageError):
        await sqlite_adapter.write(_entry("dup", 0, message="changed"))

    loaded = await sqlite_adapter.read()
    assert [entry.message for entry in loaded] == ["User performed: expense_created"]


@pytest.mark.asyncio
async def test_structured_filters_and_ordering(sqlite_adapter: DBLogAdapter) -> None:
    """서버측 필터와 최신순 정렬, offset 적용을 확인한다."""

    await sqlite_adapter.write(_entry("a", 30, level=LogLevel.ERROR, category=LogCategory.API))
    await sqlite_adapter.write(_entry("b", 20, level=LogLevel.INFO, category=LogCategory.API))
    await sqlite_adapter.write(_entry("c", 10, level=LogLevel.ERROR, category=LogCategory.API))
    await sqlite_adapter.write(_entry("d", 5, level=LogLevel.ERROR, category=LogCategory.SYSTEM))
    await sqlite_adapter.write(_entry("e", 1, level=LogLevel.ERROR, category=LogCategory.API, user_id="u2"))

    log_filter = LogFilter(level=[LogLevel.ERROR], category=[LogCategory.API], user_id="u1")

    assert [entry.id for entry in await sqlite_adapter.read(log_filter)] == ["c", "a"]
    assert [entry.id for entry in await sqlite_adapter.read(log_filter, limit=1, offset=1)] == ["a"]
    assert await sqlite_adapter.count(log_filter) == 2
    ranged = LogFilter(start_date=_NOW - timedelta(minutes=15), end_date=_NOW)
    assert [entry.id for entry in await sqlite_adapter.read(ranged)] == ["e", "d", "c"]
    assert await sqlite_adapter.count() == 5


@pytest.mark.asyncio
async def test_search_applies_to_fetched_page_and_count_ignores_it(
    sqlite_adapter: DBLogAdapter,
) -> None:
    """검색어는 가져온 페이지에만 적용되고 건수에는 반영되지 않는지 확인한다."""

    await sqlite_adapter.write(_entry("old", 10, action="receipt_analysis_failed", message="fail"))
    await sqlite_adapter.write(_entry("new1", 2, message="Created expense"))
    await sqlite_adapter.write(_entry("new2", 1, message="Created expense"))

    search = LogFilter(search="RECEIPT")

    assert await sqlite_adapter.read(search, limit=2) == []
    assert [entry.id for entry in await sqlite_adapter.read(search, limit=10)] == ["old"]
    assert await sqlite_adapter.count(search) == 3


@pytest.mark.asyncio
async def test_delete_is_idempotent(sqlite_adapter: DBLogAdapter) -> None:
    """삭제가 반복되어도 오류가 없는지 확인한다."""

    await sqlite_adapter.write(_entry("x", 1))

    await sqlite_adapter.delete("x")
    await sqlite_adapter.delete("x")

    assert await sqlite_adapter.read() == []


@pytest.mark.asyncio
async def test_cleanup_runs_in_batches(sqlite_adapter: DBLogAdapter) -> None:
    """배치 크기보다 많은 오래된 로그를 모두 정리하는지 확인한다."""

    old_count = CLEANUP_BATCH_SIZE + 20
    for index in range(old_count):
        await sqlite_adapter.write(_entry(f"old-{index}", 60 * 24 * 45 + index))
    await sqlite_adapter.write(_entry("recent", 5))

    removed = await sqlite_adapter.cleanup(30)

    assert removed == old_count
    assert [entry.id for entry in await sqlite_adapter.read()] == ["recent"]


@pytest.mark.asyncio
async def test_write_sanitizes_values(sqlite_adapter: DBLogAdapter) -> None:
    """None 제거와 datetime/enum/set 변환이 적용되는지 확인한다."""

    entry = _entry(
        "s1",
        1,
        details={
            "skip": None,
            "when": datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc),
            "color": _Color.RED,
            "tags": {"a"},
            "nested": {"inner": None, "pair": (1, 2)},
        },
    )

    await sqlite_adapter.write(entry)
    loaded = (await sqlite_adapter.read())[0]

    assert loaded.details == {
        "when": "2024-01-02T03:04:05+00:00",
        "color": "red",
        "tags": ["a"],
        "nested": {"pair": [1, 2]},
    }


@pytest.mark.asyncio
async def test_unserializable_details_raise_storage_error(sqlite_adapter: DBLogAdapter) -> None:
    """JSON으로 표현할 수 없는 값은 StorageError로 거부되는지 확인한다."""

    with pytest.raises(StorageError) as exc_info:
        await sqlite_adapter.write(_entry("bad", 1, details={"obj": object()}))

    assert exc_info.value.detail.code == "LOG_STORAGE_UNSERIALIZABLE"


@pytest.mark.asyncio
async def test_none_inside_lists_survives_round_trip(sqlite_adapter: DBLogAdapter) -> None:
    """리스트 안의 None은 순서 그대로 남고, 값이 None인 키만 제거되는지 확인한다."""

    entry = _entry("n1", 1, details={"values": [1, None, 2], "note": None, "rows": [[None]]})

    await sqlite_adapter.write(entry)
    loaded = (await sqlite_adapter.read())[0]

    assert loaded.details == {"values": [1, None, 2], "rows": [[None]]}


def test_sanitize_payload_rejects_nan() -> None:
    with pytest.raises(StorageError):
        sanitize_payload({"ratio": float("nan")}, "details")


def test_parse_timestamp_accepts_known_shapes() -> None:
    """저장소가 돌려줄 수 있는 여러 타임스탬프 형식을 해석하는지 확인한다."""

    expected = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)
    epoch = expected.timestamp()

    assert parse_timestamp(expected) == expected
    assert parse_timestamp(expected.replace(tzinfo=None)) == expected
    assert parse_timestamp({"seconds": epoch, "nanoseconds": 0}) == expected
    assert parse_timestamp(SimpleNamespace(seconds=epoch, nanoseconds=0)) == expected
    assert parse_timestamp(epoch) == expected
    assert parse_timestamp("2024-05-01T12:00:00Z") == expected
    assert parse_timestamp("2024-05-01T12:00:00.000000+00:00") == expected


def test_parse_timestamp_falls_back_to_now(caplog) -> None:
    """해석할 수 없는 값은 현재 시각과 경고로 대체되는지 확인한다."""

    before = datetime.now(timezone.utc)
    parsed = parse_timestamp("not-a-date")

    assert parsed >= before
    assert any("타임스탬프" in record.getMessage() for record in caplog.records)


@pytest.mark.asyncio
async def test_engine_failure_is_wrapped(sqlite_client: DBClient) -> None:
    """엔진 연결이 끊기면 StorageError로 변환되는지 확인한다."""

    adapter = DBLogAdapter(sqlite_client)
    sqlite_client.close()

    with pytest.raises(StorageError) as exc_info:
        await adapter.count()

    assert exc_info.value.detail.metadata["operation"] == "count"
