"""
목적: 내 활동 라우터 공개 API를 제공한다.
설명: 내 활동 라우터 인스턴스를 외부에 노출한다.
디자인 패턴: 퍼사드
참조: src/expense_tracker/api/activity/routers/router.py
"""

from expense_tracker.api.activity.routers.router import router

__all__ = ["router"]
