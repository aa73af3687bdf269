"""
목적: 요청 사용자 식별과 관리자 권한 확인 의존성을 제공한다.
설명: 외부 인증 계층이 전달한 사용자 헤더를 읽어 CurrentUser를 만들고,
      관리자 이메일 허용 목록으로 로그 브라우저 접근을 제한한다.
디자인 패턴: 의존성 주입
참조: src/expense_tracker/shared/config/settings.py, src/expense_tracker/api/logs/routers/common.py
"""

from __future__ import annotations

import threading
from typing import Optional

from fastapi import Depends, Header, HTTPException, status
from pydantic import BaseModel

from expense_tracker.api.const import USER_EMAIL_HEADER, USER_ID_HEADER
from expense_tracker.shared.config import LoggingSettings, load_logging_settings
from expense_tracker.shared.exceptions import AccessDeniedError

_settings: Optional[LoggingSettings] = None
_settings_lock = threading.RLock()


class CurrentUser(BaseModel):
    """요청 사용자 모델."""

    user_id: str
    email: str | None = None


def get_logging_settings() -> LoggingSettings:
    """로깅 설정 싱글턴을 반환한다."""

    global _settings
    if _settings is not None:
        return _settings
    with _settings_lock:
        if _settings is None:
            _settings = load_logging_settings()
    return _settings


def get_current_user(
    user_id: str | None = Header(default=None, alias=USER_ID_HEADER),
    user_email: str | None = Header(default=None, alias=USER_EMAIL_HEADER),
) -> CurrentUser:
    """사용자 헤더로 현재 사용자를 반환한다. 식별자가 없으면 401 예외를 발생시킨다."""

    if not user_id or not user_id.strip():
        error = AccessDeniedError("로그인이 필요합니다.", code="LOG_UNAUTHENTICATED")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=error.to_dict())
    email = user_email.strip().lower() if user_email and user_email.strip() else None
    return CurrentUser(user_id=user_id.strip(), email=email)


def require_admin(
    user: CurrentUser = Depends(get_current_user),
    settings: LoggingSettings = Depends(get_logging_settings),
) -> CurrentUser:
    """관리자 허용 목록에 있는 사용자만 통과시킨다."""

    if not user.email or user.email not in settings.admin_emails:
        error = AccessDeniedError("관리자만 로그를 조회할 수 있습니다.")
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=error.to_dict())
    return user
