"""
목적: 내 활동 CSV 내보내기 라우터를 제공한다.
설명: 현재 사용자의 최신 로그를 활동 설명과 함께 CSV 첨부 파일로 반환한다.
디자인 패턴: 라우터 패턴
참조: src/expense_tracker/shared/logging/query.py
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import Response

from expense_tracker.api.activity.services import ActivityService, get_activity_service
from expense_tracker.api.auth import CurrentUser, get_current_user
from expense_tracker.api.const import ACTIVITY_EXPORT_LIMIT, ACTIVITY_EXPORT_PATH
from expense_tracker.api.logs.routers.common import (
    build_log_filter,
    csv_response_headers,
    to_http_exception,
)
from expense_tracker.api.logs.services import export_filename
from expense_tracker.shared.exceptions import BaseAppException
from expense_tracker.shared.logging import LogFilter

router = APIRouter()


@router.get(ACTIVITY_EXPORT_PATH, summary="내 활동 로그를 CSV로 내보냅니다.")
async def export_activity(
    log_filter: LogFilter = Depends(build_log_filter),
    user: CurrentUser = Depends(get_current_user),
    service: ActivityService = Depends(get_activity_service),
) -> Response:
    """내 활동 CSV 내보내기를 수행한다."""

    try:
        content = await service.export_csv(user, log_filter, ACTIVITY_EXPORT_LIMIT)
    except BaseAppException as error:
        raise to_http_exception(error) from error
    return Response(
        content=content,
        media_type="text/csv",
        headers=csv_response_headers(export_filename("my-activity")),
    )
