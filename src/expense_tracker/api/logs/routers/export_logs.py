"""
목적: 관리자 로그 CSV 내보내기 라우터를 제공한다.
설명: 현재 필터에 맞는 최신 로그를 CSV 첨부 파일로 반환한다.
디자인 패턴: 라우터 패턴
참조: src/expense_tracker/shared/logging/query.py
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import Response

from expense_tracker.api.auth import CurrentUser, require_admin
from expense_tracker.api.const import ADMIN_EXPORT_LIMIT, ADMIN_LOGS_EXPORT_PATH
from expense_tracker.api.logs.routers.common import (
    build_log_filter,
    csv_response_headers,
    to_http_exception,
)
from expense_tracker.api.logs.services import (
    LogBrowserService,
    export_filename,
    get_log_browser_service,
)
from expense_tracker.shared.exceptions import BaseAppException
from expense_tracker.shared.logging import LogFilter
from expense_tracker.shared.logging.query import ADMIN_CSV_COLUMNS

router = APIRouter()


@router.get(ADMIN_LOGS_EXPORT_PATH, summary="관리자용 로그를 CSV로 내보냅니다.")
async def export_logs(
    log_filter: LogFilter = Depends(build_log_filter),
    _: CurrentUser = Depends(require_admin),
    service: LogBrowserService = Depends(get_log_browser_service),
) -> Response:
    """로그 CSV 내보내기를 수행한다."""

    try:
        content = await service.export_csv(log_filter, ADMIN_EXPORT_LIMIT, ADMIN_CSV_COLUMNS)
    except BaseAppException as error:
        raise to_http_exception(error) from error
    return Response(
        content=content,
        media_type="text/csv",
        headers=csv_response_headers(export_filename("logs")),
    )
