"""
목적: API 상수 공개 API를 제공한다.
설명: 로그 조회 라우팅 상수를 외부에 노출한다.
디자인 패턴: 퍼사드
참조: src/expense_tracker/api/const/logs.py
"""

from expense_tracker.api.const.logs import (
    ACTIVITY_API_PREFIX,
    ACTIVITY_API_TAG,
    ACTIVITY_EXPORT_LIMIT,
    ACTIVITY_EXPORT_PATH,
    ACTIVITY_PAGE_SIZE,
    ADMIN_EXPORT_LIMIT,
    ADMIN_LOG_PATH,
    ADMIN_LOGS_API_PREFIX,
    ADMIN_LOGS_API_TAG,
    ADMIN_LOGS_CLEANUP_PATH,
    ADMIN_LOGS_EXPORT_PATH,
    ADMIN_PAGE_SIZE,
    MAX_PAGE_SIZE,
    USER_EMAIL_HEADER,
    USER_ID_HEADER,
)

__all__ = [
    "ACTIVITY_API_PREFIX",
    "ACTIVITY_API_TAG",
    "ACTIVITY_EXPORT_LIMIT",
    "ACTIVITY_EXPORT_PATH",
    "ACTIVITY_PAGE_SIZE",
    "ADMIN_EXPORT_LIMIT",
    "ADMIN_LOG_PATH",
    "ADMIN_LOGS_API_PREFIX",
    "ADMIN_LOGS_API_TAG",
    "ADMIN_LOGS_CLEANUP_PATH",
    "ADMIN_LOGS_EXPORT_PATH",
    "ADMIN_PAGE_SIZE",
    "MAX_PAGE_SIZE",
    "USER_EMAIL_HEADER",
    "USER_ID_HEADER",
]
