"""
목적: 로그 조회 API 모델 공개 API를 제공한다.
설명: 목록/삭제/정리 응답 모델을 외부에 노출한다.
디자인 패턴: 퍼사드
참조: src/expense_tracker/api/logs/models/log.py
"""

from expense_tracker.api.logs.models.log import (
    LogCleanupResponse,
    LogDeleteResponse,
    LogListResponse,
)

__all__ = ["LogListResponse", "LogDeleteResponse", "LogCleanupResponse"]
