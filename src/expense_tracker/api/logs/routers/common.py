"""
목적: 로그 조회 라우터 공통 유틸을 제공한다.
설명: 도메인 예외를 HTTP 예외로 변환하고, 쿼리 파라미터를 LogFilter로 조립한다.
디자인 패턴: 유틸리티 모듈
참조: src/expense_tracker/api/logs/routers/router.py, src/expense_tracker/api/activity/routers/router.py
"""

from __future__ import annotations

from datetime import datetime

from fastapi import HTTPException, Query, status

from expense_tracker.shared.exceptions import BaseAppException
from expense_tracker.shared.logging import LogCategory, LogFilter, LogLevel


def to_http_exception(error: BaseAppException) -> HTTPException:
    """도메인 예외를 HTTP 예외로 변환한다."""

    code = error.detail.code
    status_code = status.HTTP_502_BAD_GATEWAY
    if code == "LOG_STORAGE_UNAVAILABLE":
        status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    elif code == "LOG_UNAUTHENTICATED":
        status_code = status.HTTP_401_UNAUTHORIZED
    elif code == "LOG_ACCESS_DENIED":
        status_code = status.HTTP_403_FORBIDDEN
    return HTTPException(status_code=status_code, detail=error.to_dict())


def build_log_filter(
    level: list[LogLevel] | None = Query(default=None),
    category: list[LogCategory] | None = Query(default=None),
    search: str | None = Query(default=None),
    user_id: str | None = Query(default=None),
    start_date: datetime | None = Query(default=None),
    end_date: datetime | None = Query(default=None),
) -> LogFilter:
    """쿼리 파라미터로 로그 필터를 만든다. 빈 검색어는 무시한다."""

    return LogFilter(
        level=level or None,
        category=category or None,
        search=search.strip() if search and search.strip() else None,
        user_id=user_id or None,
        start_date=start_date,
        end_date=end_date,
    )


def csv_response_headers(filename: str) -> dict[str, str]:
    return {"Content-Disposition": f'attachment; filename="{filename}"'}
