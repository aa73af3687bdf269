"""
목적: 관리자 로그 목록 조회 라우터를 제공한다.
설명: 필터/검색/페이지 조건으로 로그 목록과 전체 건수를 반환한다.
디자인 패턴: 라우터 패턴
참조: src/expense_tracker/api/logs/services/log_browser_service.py
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from expense_tracker.api.auth import CurrentUser, require_admin
from expense_tracker.api.const import ADMIN_PAGE_SIZE, MAX_PAGE_SIZE
from expense_tracker.api.logs.models import LogListResponse
from expense_tracker.api.logs.routers.common import build_log_filter, to_http_exception
from expense_tracker.api.logs.services import LogBrowserService, get_log_browser_service
from expense_tracker.shared.exceptions import BaseAppException
from expense_tracker.shared.logging import LogFilter

router = APIRouter()


@router.get(
    "",
    response_model=LogListResponse,
    summary="관리자용 로그 목록을 조회합니다.",
)
async def list_logs(
    page: int = Query(default=1, ge=1),
    page_size: int = Query(default=ADMIN_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    log_filter: LogFilter = Depends(build_log_filter),
    _: CurrentUser = Depends(require_admin),
    service: LogBrowserService = Depends(get_log_browser_service),
) -> LogListResponse:
    """로그 목록 조회를 수행한다."""

    try:
        return await service.list_logs(log_filter, page=page, page_size=page_size)
    except BaseAppException as error:
        raise to_http_exception(error) from error
