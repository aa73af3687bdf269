"""
목적: 로그 조회 API 응답 모델을 정의한다.
설명: 로그 목록, 삭제, 보존 정리 응답 모델을 제공한다.
디자인 패턴: 데이터 전송 객체(DTO)
참조: src/expense_tracker/api/logs/routers/router.py, src/expense_tracker/api/activity/routers/router.py
"""

from __future__ import annotations

from pydantic import BaseModel

from expense_tracker.shared.logging import LogEntry


class LogListResponse(BaseModel):
    """로그 목록 응답 모델.

    total은 검색어를 반영하지 않은 건수이므로 entries 수보다 클 수 있다.
    """

    entries: list[LogEntry]
    total: int
    page: int
    page_size: int


class LogDeleteResponse(BaseModel):
    """로그 삭제 응답 모델."""

    log_id: str
    deleted: bool = True


class LogCleanupResponse(BaseModel):
    """로그 보존 정리 응답 모델."""

    removed: int
    retention_days: int
