"""
목적: 관리자 로그 API 모듈 공개 API를 제공한다.
설명: 관리자 로그 라우터와 서비스 접근 함수를 외부에 노출한다.
디자인 패턴: 퍼사드
참조: src/expense_tracker/api/logs/routers/router.py, src/expense_tracker/api/logs/services/log_browser_service.py
"""

from expense_tracker.api.logs.routers import router
from expense_tracker.api.logs.services import get_log_browser_service

__all__ = ["router", "get_log_browser_service"]
