"""
목적: 내 활동 조회 서비스 레이어를 제공한다.
설명: 요청 사용자 식별자로 필터를 고정한 뒤 로그 조회 서비스를 재사용한다.
디자인 패턴: 서비스 레이어
참조: src/expense_tracker/api/logs/services/log_browser_service.py
"""

from __future__ import annotations

from expense_tracker.api.auth import CurrentUser
from expense_tracker.api.logs.models import LogListResponse
from expense_tracker.api.logs.services import LogBrowserService
from expense_tracker.shared.logging import LogFilter
from expense_tracker.shared.logging.query import ACTIVITY_CSV_COLUMNS


class ActivityService:
    """내 활동 조회 서비스."""

    def __init__(self, browser: LogBrowserService) -> None:
        self._browser = browser

    def scope_filter(self, user: CurrentUser, log_filter: LogFilter) -> LogFilter:
        """요청으로 전달된 user_id는 무시하고 현재 사용자로 고정한다."""

        return log_filter.model_copy(update={"user_id": user.user_id})

    async def list_activity(
        self,
        user: CurrentUser,
        log_filter: LogFilter,
        page: int,
        page_size: int,
    ) -> LogListResponse:
        return await self._browser.list_logs(
            self.scope_filter(user, log_filter), page=page, page_size=page_size
        )

    async def export_csv(self, user: CurrentUser, log_filter: LogFilter, limit: int) -> str:
        return await self._browser.export_csv(
            self.scope_filter(user, log_filter), limit, ACTIVITY_CSV_COLUMNS
        )
