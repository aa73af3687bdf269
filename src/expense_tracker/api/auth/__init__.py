"""
목적: API 인증 의존성 공개 API를 제공한다.
설명: 현재 사용자/관리자 확인 의존성을 외부에 노출한다.
디자인 패턴: 퍼사드
참조: src/expense_tracker/api/auth/dependencies.py
"""

from expense_tracker.api.auth.dependencies import (
    CurrentUser,
    get_current_user,
    get_logging_settings,
    require_admin,
)

__all__ = ["CurrentUser", "get_current_user", "get_logging_settings", "require_admin"]
