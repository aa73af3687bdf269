"""
목적: 관리자 로그 삭제 라우터를 제공한다.
설명: 로그 식별자로 단건 삭제를 수행한다. 없는 식별자도 성공으로 응답한다.
디자인 패턴: 라우터 패턴
참조: src/expense_tracker/api/logs/services/log_browser_service.py
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from expense_tracker.api.auth import CurrentUser, require_admin
from expense_tracker.api.const import ADMIN_LOG_PATH
from expense_tracker.api.logs.models import LogDeleteResponse
from expense_tracker.api.logs.routers.common import to_http_exception
from expense_tracker.api.logs.services import LogBrowserService, get_log_browser_service
from expense_tracker.shared.exceptions import BaseAppException

router = APIRouter()


@router.delete(
    ADMIN_LOG_PATH,
    response_model=LogDeleteResponse,
    summary="로그를 삭제합니다.",
)
async def delete_log(
    log_id: str,
    _: CurrentUser = Depends(require_admin),
    service: LogBrowserService = Depends(get_log_browser_service),
) -> LogDeleteResponse:
    """로그 삭제를 수행한다."""

    try:
        return await service.delete_log(log_id)
    except BaseAppException as error:
        raise to_http_exception(error) from error
