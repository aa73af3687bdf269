"""
목적: 내 활동 목록 조회 라우터를 제공한다.
설명: 현재 사용자의 로그만 필터/검색/페이지 조건으로 반환한다.
디자인 패턴: 라우터 패턴
참조: src/expense_tracker/api/activity/services/activity_service.py
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from expense_tracker.api.activity.services import ActivityService, get_activity_service
from expense_tracker.api.auth import CurrentUser, get_current_user
from expense_tracker.api.const import ACTIVITY_PAGE_SIZE, MAX_PAGE_SIZE
from expense_tracker.api.logs.models import LogListResponse
from expense_tracker.api.logs.routers.common import build_log_filter, to_http_exception
from expense_tracker.shared.exceptions import BaseAppException
from expense_tracker.shared.logging import LogFilter

router = APIRouter()


@router.get(
    "",
    response_model=LogListResponse,
    summary="내 활동 로그를 조회합니다.",
)
async def list_activity(
    page: int = Query(default=1, ge=1),
    page_size: int = Query(default=ACTIVITY_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    log_filter: LogFilter = Depends(build_log_filter),
    user: CurrentUser = Depends(get_current_user),
    service: ActivityService = Depends(get_activity_service),
) -> LogListResponse:
    """내 활동 목록 조회를 수행한다."""

    try:
        return await service.list_activity(user, log_filter, page=page, page_size=page_size)
    except BaseAppException as error:
        raise to_http_exception(error) from error
