"""
목적: 요청 단위 주변 정보(사용자 에이전트, 라우트)를 보관한다.
설명: ContextVar로 현재 요청 범위를 바인딩해 로그 메타데이터 자동 보강에 사용한다.
디자인 패턴: 컨텍스트 객체
참조: src/expense_tracker/shared/logging/models.py, src/expense_tracker/shared/logging/middleware.py
"""

from __future__ import annotations

from contextlib import contextmanager
from contextvars import ContextVar
from typing import Dict, Iterator, Optional

_REQUEST_SCOPE: ContextVar[Optional[Dict[str, str]]] = ContextVar(
    "expense_tracker_request_scope", default=None
)


def current_request_scope() -> Optional[Dict[str, str]]:
    """현재 바인딩된 요청 범위를 반환한다. 요청 밖이면 None이다."""

    scope = _REQUEST_SCOPE.get()
    return dict(scope) if scope is not None else None


@contextmanager
def bind_request_scope(
    route: Optional[str] = None,
    user_agent: Optional[str] = None,
    ip: Optional[str] = None,
) -> Iterator[Dict[str, str]]:
    """블록 실행 동안 요청 범위를 바인딩한다."""

    scope = {
        key: value
        for key, value in {"route": route, "user_agent": user_agent, "ip": ip}.items()
        if value
    }
    token = _REQUEST_SCOPE.set(scope)
    try:
        yield scope
    finally:
        _REQUEST_SCOPE.reset(token)
