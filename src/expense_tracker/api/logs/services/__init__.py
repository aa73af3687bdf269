"""
목적: 로그 조회 서비스 공개 API를 제공한다.
설명: 기본 로거의 저장소 어댑터를 사용하는 서비스 접근 함수를 외부에 노출한다.
디자인 패턴: 의존성 주입
참조: src/expense_tracker/api/logs/services/log_browser_service.py
"""

from __future__ import annotations

from expense_tracker.api.logs.services.log_browser_service import (
    LogBrowserService,
    export_filename,
)
from expense_tracker.shared.logging import get_logger


def get_log_browser_service() -> LogBrowserService:
    """기본 로거에 설정된 저장소 어댑터로 서비스를 생성한다.

    어댑터는 런타임에 교체될 수 있으므로 요청마다 현재 설정을 읽는다.
    """

    return LogBrowserService(get_logger().config.adapter)


__all__ = ["LogBrowserService", "export_filename", "get_log_browser_service"]
