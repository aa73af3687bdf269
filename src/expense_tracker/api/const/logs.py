"""
목적: 로그 조회 API 라우팅/페이지 상수를 정의한다.
설명: 관리자 로그 브라우저와 내 활동 API의 경로, 태그, 페이지 크기, 내보내기 한도를 제공한다.
디자인 패턴: 상수 모듈
참조: src/expense_tracker/api/logs/routers/router.py, src/expense_tracker/api/activity/routers/router.py
"""

ADMIN_LOGS_API_PREFIX = "/admin/logs"
ADMIN_LOGS_API_TAG = "admin-logs"
ADMIN_LOGS_EXPORT_PATH = "/export"
ADMIN_LOGS_CLEANUP_PATH = "/cleanup"
ADMIN_LOG_PATH = "/{log_id}"
ADMIN_PAGE_SIZE = 50
ADMIN_EXPORT_LIMIT = 1000

ACTIVITY_API_PREFIX = "/activity"
ACTIVITY_API_TAG = "activity"
ACTIVITY_EXPORT_PATH = "/export"
ACTIVITY_PAGE_SIZE = 20
ACTIVITY_EXPORT_LIMIT = 500

MAX_PAGE_SIZE = 200

USER_ID_HEADER = "X-User-Id"
USER_EMAIL_HEADER = "X-User-Email"
