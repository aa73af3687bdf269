"""
목적: 내 활동 API 모듈 공개 API를 제공한다.
설명: 내 활동 라우터와 서비스 접근 함수를 외부에 노출한다.
디자인 패턴: 퍼사드
참조: src/expense_tracker/api/activity/routers/router.py, src/expense_tracker/api/activity/services/activity_service.py
"""

from expense_tracker.api.activity.routers import router
from expense_tracker.api.activity.services import get_activity_service

__all__ = ["router", "get_activity_service"]
