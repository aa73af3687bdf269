"""
목적: 문서 저장소(DBClient) 기반 로그 어댑터를 제공한다.
설명: 엔트리를 저장 가능한 값으로 정제해 삽입하고, 서버측 구조화 필터와
      클라이언트측 검색어 필터를 조합해 조회한다. 동기 엔진 호출은 워커 스레드에서 실행한다.
디자인 패턴: 어댑터 패턴
참조: src/expense_tracker/integrations/db/client.py, src/expense_tracker/shared/logging/adapter.py
"""

from __future__ import annotations

import asyncio
import json
import logging
import threading
from datetime import date, datetime, timezone
from enum import Enum
from typing import Any, Callable, Dict, List, Mapping, Optional, TypeVar

from pydantic import BaseModel

from expense_tracker.integrations.db.base.models import (
    CollectionSchema,
    ColumnSpec,
    Document,
    FilterCondition,
    FilterExpression,
    FilterOperator,
    Pagination,
    Query,
    SortField,
    SortOrder,
)
from expense_tracker.integrations.db.client import DBClient
from expense_tracker.shared.exceptions import StorageError
from expense_tracker.shared.logging.adapter import LogStorageAdapter, retention_cutoff
from expense_tracker.shared.logging.models import (
    LogCategory,
    LogEntry,
    LogFilter,
    LogLevel,
    LogMetadata,
)
from expense_tracker.shared.logging.query import build_filter_expression, matches_search

_LOGGER = logging.getLogger(__name__)

ANONYMOUS_USER = "anonymous"
CLEANUP_BATCH_SIZE = 500

T = TypeVar("T")


def build_log_schema(collection: str = "logs") -> CollectionSchema:
    """로그 컬렉션 스키마를 생성한다."""

    return CollectionSchema(
        name=collection,
        primary_key="log_id",
        columns=[
            ColumnSpec(name="log_id", data_type="TEXT", nullable=False, is_primary=True),
            ColumnSpec(name="timestamp", data_type="TEXT", nullable=False),
            ColumnSpec(name="level", data_type="TEXT", nullable=False),
            ColumnSpec(name="category", data_type="TEXT", nullable=False),
            ColumnSpec(name="action", data_type="TEXT", nullable=False),
            ColumnSpec(name="message", data_type="TEXT", nullable=False),
            ColumnSpec(name="user_id", data_type="TEXT", nullable=False),
            ColumnSpec(name="details", data_type="TEXT"),
            ColumnSpec(name="metadata", data_type="TEXT"),
        ],
        indexes=["timestamp", "level", "category", "user_id"],
    )


def sanitize_value(value: Any) -> Any:
    """저장 가능한 값으로 재귀 변환한다.

    값이 None인 사전 키는 제거하고, 리스트 안의 None은 유지한다.
    """

    if isinstance(value, BaseModel):
        return sanitize_value(value.model_dump(exclude_none=True))
    if isinstance(value, Mapping):
        return {
            str(key): sanitize_value(item) for key, item in value.items() if item is not None
        }
    if isinstance(value, (list, tuple, set, frozenset)):
        return [sanitize_value(item) for item in value]
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc).isoformat()
    if isinstance(value, date):
        return value.isoformat()
    return value


def sanitize_payload(value: Mapping[str, Any], field_name: str) -> Dict[str, Any]:
    """정제 후 JSON 표현 가능 여부를 확인한다.

    Raises:
        StorageError: 정제 후에도 JSON으로 표현할 수 없는 값이 남은 경우.
    """

    cleaned = sanitize_value(value)
    try:
        json.dumps(cleaned, allow_nan=False)
    except (TypeError, ValueError) as exc:
        raise StorageError.from_error(
            "write",
            exc,
            code="LOG_STORAGE_UNSERIALIZABLE",
            hint=f"{field_name}에 저장할 수 없는 값이 포함되어 있습니다.",
        ) from exc
    return cleaned


def parse_timestamp(value: Any) -> datetime:
    """저장소 타임스탬프 값을 UTC datetime으로 변환한다.

    datetime, `seconds` 속성/키를 가진 객체, epoch 초 숫자, ISO 문자열을 지원한다.
    해석할 수 없으면 현재 시각을 반환하고 경고를 남긴다.
    """

    try:
        if isinstance(value, datetime):
            return value if value.tzinfo else value.replace(tzinfo=timezone.utc)
        if isinstance(value, Mapping) and "seconds" in value:
            return _from_epoch(value["seconds"], value.get("nanoseconds", 0))
        if hasattr(value, "seconds") and not isinstance(value, (str, bytes)):
            return _from_epoch(value.seconds, getattr(value, "nanoseconds", 0))
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return _from_epoch(value)
        if isinstance(value, str) and value:
            parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
            return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)
    except (TypeError, ValueError, OverflowError, OSError):
        pass
    _LOGGER.warning("로그 타임스탬프를 해석할 수 없어 현재 시각으로 대체합니다: %r", value)
    return datetime.now(timezone.utc)


def _from_epoch(seconds: Any, nanoseconds: Any = 0) -> datetime:
    total = float(seconds) + float(nanoseconds or 0) / 1_000_000_000
    return datetime.fromtimestamp(total, tz=timezone.utc)


def _load_mapping(value: Any) -> Dict[str, Any]:
    if value is None:
        return {}
    if isinstance(value, str):
        value = json.loads(value) if value else {}
    if not isinstance(value, Mapping):
        raise ValueError("사전 형식이 아닌 저장 값입니다.")
    return dict(value)


class DBLogAdapter(LogStorageAdapter):
    """DBClient 위에서 동작하는 원격 로그 어댑터.

    Args:
        client: 연결된 DBClient.
        collection: 로그 컬렉션 이름.
        auto_create: 최초 사용 시 컬렉션을 생성할지 여부.
    """

    def __init__(
        self,
        client: DBClient,
        collection: str = "logs",
        auto_create: bool = True,
    ) -> None:
        self._client = client
        self._collection = collection
        self._schema = build_log_schema(collection)
        self._auto_create = auto_create
        self._ready = False
        self._ready_lock = threading.Lock()

    @property
    def client(self) -> DBClient:
        return self._client

    @property
    def collection(self) -> str:
        return self._collection

    async def write(self, entry: LogEntry) -> None:
        document = self._to_document(entry)
        await self._run("write", lambda: self._client.insert(self._collection, document))

    async def read(
        self,
        log_filter: Optional[LogFilter] = None,
        limit: int = 100,
        offset: int = 0,
    ) -> List[LogEntry]:
        if limit <= 0:
            return []
        query = Query(
            filter_expression=self._filter_expression(log_filter),
            sort=[
                SortField(field="timestamp", order=SortOrder.DESC),
                SortField(field="log_id", order=SortOrder.DESC),
            ],
            pagination=Pagination(limit=limit, offset=max(offset, 0)),
        )
        documents = await self._run("read", lambda: self._client.fetch(self._collection, query))
        try:
            entries = [self._to_entry(document) for document in documents]
        except (ValueError, TypeError) as exc:
            raise StorageError.from_error("read", exc, code="LOG_STORAGE_CORRUPTED") from exc
        search = log_filter.search if log_filter else None
        return [entry for entry in entries if matches_search(entry, search)]

    async def count(self, log_filter: Optional[LogFilter] = None) -> int:
        expression = self._filter_expression(log_filter)
        return await self._run("count", lambda: self._client.count(self._collection, expression))

    async def delete(self, log_id: str) -> None:
        await self._run("delete", lambda: self._client.delete(self._collection, log_id))

    async def cleanup(self, retention_days: int = 30) -> int:
        cutoff = retention_cutoff(retention_days)
        return await self._run("cleanup", lambda: self._cleanup_before(cutoff))

    async def close(self) -> None:
        await asyncio.to_thread(self._client.close)

    def _cleanup_before(self, cutoff: datetime) -> int:
        query = Query(
            filter_expression=FilterExpression(
                conditions=[
                    FilterCondition(field="timestamp", operator=FilterOperator.LT, value=cutoff)
                ]
            ),
            sort=[SortField(field="timestamp", order=SortOrder.ASC)],
            pagination=Pagination(limit=CLEANUP_BATCH_SIZE, offset=0),
        )
        removed = 0
        while True:
            batch = self._client.fetch(self._collection, query)
            if not batch:
                break
            deleted = self._client.delete_many(
                self._collection, [document.doc_id for document in batch]
            )
            removed += deleted
            _LOGGER.debug("로그 보존 정리 배치 삭제: %s건", deleted)
            if len(batch) < CLEANUP_BATCH_SIZE or deleted == 0:
                break
        return removed

    def _filter_expression(self, log_filter: Optional[LogFilter]) -> FilterExpression:
        return build_filter_expression(log_filter)

    def _ensure_ready(self) -> None:
        if self._ready:
            return
        with self._ready_lock:
            if self._ready:
                return
            self._client.register_schema(self._schema)
            if self._auto_create:
                self._client.create_collection(self._schema)
            self._ready = True

    async def _run(self, operation: str, func: Callable[[], T]) -> T:
        def call() -> T:
            self._ensure_ready()
            return func()

        try:
            return await asyncio.to_thread(call)
        except StorageError:
            raise
        except Exception as exc:  # noqa: BLE001 - 엔진 예외를 저장소 예외로 래핑
            _LOGGER.error("로그 저장소 %s 작업 실패: %s", operation, exc)
            raise StorageError.from_error(operation, exc) from exc

    def _to_document(self, entry: LogEntry) -> Document:
        return Document(
            doc_id=entry.id,
            fields={
                "timestamp": entry.timestamp,
                "level": entry.level.value,
                "category": entry.category.value,
                "action": entry.action,
                "message": entry.message,
                "user_id": entry.user_id or ANONYMOUS_USER,
                "details": sanitize_payload(entry.details, "details"),
                "metadata": sanitize_payload(entry.metadata.compact(), "metadata"),
            },
        )

    def _to_entry(self, document: Document) -> LogEntry:
        fields = document.fields
        user_id = fields.get("user_id")
        return LogEntry(
            id=str(document.doc_id),
            timestamp=parse_timestamp(fields.get("timestamp")),
            level=LogLevel(fields.get("level")),
            category=LogCategory(fields.get("category")),
            action=fields.get("action") or "",
            message=fields.get("message") or "",
            user_id=None if not user_id or user_id == ANONYMOUS_USER else user_id,
            details=_load_mapping(fields.get("details")),
            metadata=LogMetadata(**_load_mapping(fields.get("metadata"))),
        )
