"""
목적: 로그 조회/내보내기/삭제/정리 서비스 레이어를 제공한다.
설명: 저장소 어댑터의 read/count/delete/cleanup을 API 응답 형태로 조합한다.
디자인 패턴: 서비스 레이어
참조: src/expense_tracker/shared/logging/adapter.py, src/expense_tracker/api/logs/models/log.py
"""

from __future__ import annotations

import asyncio
from datetime import datetime, timezone
from typing import Optional, Sequence

from expense_tracker.api.logs.models import (
    LogCleanupResponse,
    LogDeleteResponse,
    LogListResponse,
)
from expense_tracker.shared.exceptions import ExceptionDetail, StorageError
from expense_tracker.shared.logging import LogFilter, LogStorageAdapter
from expense_tracker.shared.logging.query import CsvColumn, entries_to_csv


class LogBrowserService:
    """로그 조회 서비스."""

    def __init__(self, adapter: Optional[LogStorageAdapter]) -> None:
        self._adapter = adapter

    @property
    def adapter(self) -> LogStorageAdapter:
        if self._adapter is None:
            message = "로그 저장소가 설정되지 않았습니다."
            raise StorageError(
                message,
                ExceptionDetail(
                    code="LOG_STORAGE_UNAVAILABLE",
                    cause=message,
                    hint="EXPENSE_LOG_ENABLE_STORAGE 설정을 확인하세요.",
                ),
            )
        return self._adapter

    async def list_logs(
        self,
        log_filter: LogFilter,
        page: int,
        page_size: int,
    ) -> LogListResponse:
        """한 페이지의 로그와 전체 건수를 조회한다."""

        adapter = self.adapter
        entries, total = await asyncio.gather(
            adapter.read(log_filter, limit=page_size, offset=(page - 1) * page_size),
            adapter.count(log_filter),
        )
        return LogListResponse(entries=entries, total=total, page=page, page_size=page_size)

    async def export_csv(
        self,
        log_filter: LogFilter,
        limit: int,
        columns: Sequence[CsvColumn],
    ) -> str:
        """필터에 맞는 최신 로그를 최대 limit건까지 CSV로 변환한다."""

        entries = await self.adapter.read(log_filter, limit=limit, offset=0)
        return entries_to_csv(entries, columns)

    async def delete_log(self, log_id: str) -> LogDeleteResponse:
        await self.adapter.delete(log_id)
        return LogDeleteResponse(log_id=log_id, deleted=True)

    async def cleanup(self, retention_days: int) -> LogCleanupResponse:
        removed = await self.adapter.cleanup(retention_days)
        return LogCleanupResponse(removed=removed, retention_days=retention_days)


def export_filename(prefix: str, today: Optional[datetime] = None) -> str:
    """`<prefix>-YYYY-MM-DD.csv` 형식의 파일 이름을 만든다."""

    today = today or datetime.now(timezone.utc)
    return f"{prefix}-{today.date().isoformat()}.csv"
