"""
목적: 내 활동 서비스 공개 API를 제공한다.
설명: 서비스 접근 함수를 외부에 노출한다.
디자인 패턴: 의존성 주입
참조: src/expense_tracker/api/activity/services/activity_service.py
"""

from __future__ import annotations

from fastapi import Depends

from expense_tracker.api.activity.services.activity_service import ActivityService
from expense_tracker.api.logs.services import LogBrowserService, get_log_browser_service


def get_activity_service(
    browser: LogBrowserService = Depends(get_log_browser_service),
) -> ActivityService:
    """로그 조회 서비스를 감싼 내 활동 서비스를 생성한다."""

    return ActivityService(browser)


__all__ = ["ActivityService", "get_activity_service"]
