"""
목적: 로그 저장소 어댑터 계약과 인메모리 구현을 제공한다.
설명: 쓰기/조회/건수/삭제/보존 정리의 비동기 인터페이스를 정의하고,
      프로세스 내 고정 크기 버퍼 구현을 함께 제공한다.
디자인 패턴: 어댑터 패턴, 전략 패턴
참조: src/expense_tracker/shared/logging/db_adapter.py, src/expense_tracker/shared/logging/query.py
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections import deque
from datetime import datetime, timedelta, timezone
from typing import Deque, List, Optional

from pydantic import BaseModel, ConfigDict

from expense_tracker.shared.exceptions import StorageError
from expense_tracker.shared.logging.models import LogEntry, LogFilter, ensure_utc
from expense_tracker.shared.logging.query import (
    matches,
    matches_structured,
    paginate,
    sort_newest_first,
)

_LOGGER = logging.getLogger(__name__)


class StorageResult(BaseModel):
    """저장 시도 결과 모델이다."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    ok: bool
    entry_id: Optional[str] = None
    error: Optional[StorageError] = None


class LogStorageAdapter(ABC):
    """로그 저장소 어댑터 인터페이스.

    모든 구현은 쓰기 전용 추가(append)만 지원하며 기존 엔트리를 덮어쓰지 않는다.
    실패는 StorageError로 알린다.
    """

    @abstractmethod
    async def write(self, entry: LogEntry) -> None:
        """엔트리를 저장한다."""

    @abstractmethod
    async def read(
        self,
        log_filter: Optional[LogFilter] = None,
        limit: int = 100,
        offset: int = 0,
    ) -> List[LogEntry]:
        """필터에 맞는 엔트리를 최신순으로 반환한다."""

    @abstractmethod
    async def count(self, log_filter: Optional[LogFilter] = None) -> int:
        """구조화 조건에 맞는 엔트리 수를 반환한다. 검색어는 반영하지 않는다."""

    @abstractmethod
    async def delete(self, log_id: str) -> None:
        """엔트리를 삭제한다. 없는 식별자여도 오류가 아니다."""

    @abstractmethod
    async def cleanup(self, retention_days: int = 30) -> int:
        """보존 기간보다 오래된 엔트리를 삭제하고 삭제 건수를 반환한다."""

    async def try_write(self, entry: LogEntry) -> StorageResult:
        """예외 대신 결과 객체로 저장 성공 여부를 반환한다."""

        try:
            await self.write(entry)
        except StorageError as exc:
            return StorageResult(ok=False, entry_id=entry.id, error=exc)
        return StorageResult(ok=True, entry_id=entry.id)

    async def close(self) -> None:
        """보유한 자원을 정리한다."""

        return None


def retention_cutoff(retention_days: int) -> datetime:
    """보존 기간 기준 시각을 계산한다."""

    return datetime.now(timezone.utc) - timedelta(days=retention_days)


class InMemoryLogAdapter(LogStorageAdapter):
    """프로세스 메모리에 최근 엔트리를 보관하는 어댑터.

    Args:
        max_entries: 보관 최대 건수. 초과 시 가장 오래된 엔트리를 버린다.
    """

    def __init__(self, max_entries: int = 1000) -> None:
        if max_entries < 1:
            raise ValueError("max_entries는 1 이상이어야 합니다.")
        self._max_entries = max_entries
        self._entries: Deque[LogEntry] = deque(maxlen=max_entries)
        self._evicted_count = 0

    @property
    def max_entries(self) -> int:
        return self._max_entries

    @property
    def evicted_count(self) -> int:
        """용량 초과로 버려진 누적 건수."""

        return self._evicted_count

    def __len__(self) -> int:
        return len(self._entries)

    async def write(self, entry: LogEntry) -> None:
        if len(self._entries) == self._max_entries:
            evicted = self._entries.pop()
            self._evicted_count += 1
            _LOGGER.debug("인메모리 로그 용량 초과로 엔트리를 버립니다: %s", evicted.id)
        self._entries.appendleft(entry)

    async def read(
        self,
        log_filter: Optional[LogFilter] = None,
        limit: int = 100,
        offset: int = 0,
    ) -> List[LogEntry]:
        selected = [entry for entry in self._entries if matches(entry, log_filter)]
        return paginate(sort_newest_first(selected), limit, offset)

    async def count(self, log_filter: Optional[LogFilter] = None) -> int:
        return sum(1 for entry in self._entries if matches_structured(entry, log_filter))

    async def delete(self, log_id: str) -> None:
        kept = [entry for entry in self._entries if entry.id != log_id]
        if len(kept) != len(self._entries):
            self._entries = deque(kept, maxlen=self._max_entries)

    async def cleanup(self, retention_days: int = 30) -> int:
        cutoff = retention_cutoff(retention_days)
        kept = [entry for entry in self._entries if ensure_utc(entry.timestamp) >= cutoff]
        removed = len(self._entries) - len(kept)
        if removed:
            self._entries = deque(kept, maxlen=self._max_entries)
        return removed

    def clear(self) -> None:
        """보관 중인 엔트리를 모두 비운다."""

        self._entries.clear()
