"""
목적: 관리자 로그 보존 정리 라우터를 제공한다.
설명: 보존 기간보다 오래된 로그를 삭제하고 삭제 건수를 반환한다.
디자인 패턴: 라우터 패턴
참조: src/expense_tracker/api/logs/services/log_browser_service.py
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from expense_tracker.api.auth import CurrentUser, get_logging_settings, require_admin
from expense_tracker.api.const import ADMIN_LOGS_CLEANUP_PATH
from expense_tracker.api.logs.models import LogCleanupResponse
from expense_tracker.api.logs.routers.common import to_http_exception
from expense_tracker.api.logs.services import LogBrowserService, get_log_browser_service
from expense_tracker.shared.config import LoggingSettings
from expense_tracker.shared.exceptions import BaseAppException

router = APIRouter()


@router.post(
    ADMIN_LOGS_CLEANUP_PATH,
    response_model=LogCleanupResponse,
    summary="보존 기간이 지난 로그를 정리합니다.",
)
async def cleanup_logs(
    retention_days: int | None = Query(default=None, ge=0),
    _: CurrentUser = Depends(require_admin),
    settings: LoggingSettings = Depends(get_logging_settings),
    service: LogBrowserService = Depends(get_log_browser_service),
) -> LogCleanupResponse:
    """보존 정리를 수행한다. 기간을 생략하면 설정값을 사용한다."""

    days = settings.retention_days if retention_days is None else retention_days
    try:
        return await service.cleanup(days)
    except BaseAppException as error:
        raise to_http_exception(error) from error
