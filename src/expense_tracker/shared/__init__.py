"""
목적: shared 패키지의 공개 API를 제공한다.
설명: 예외, 설정, 활동 로깅 모듈에 대한 접근 포인트를 제공한다.
디자인 패턴: 퍼사드
참조: src/expense_tracker/shared/exceptions, src/expense_tracker/shared/logging
"""

from __future__ import annotations

from expense_tracker.shared.exceptions import (
    AccessDeniedError,
    BaseAppException,
    ExceptionDetail,
    StorageError,
)
from expense_tracker.shared.logging import (
    InMemoryLogAdapter,
    LogCategory,
    LogEntry,
    LogFilter,
    LogLevel,
    Logger,
    LoggerConfig,
    LogStorageAdapter,
    get_logger,
)

__all__ = [
    "AccessDeniedError",
    "BaseAppException",
    "ExceptionDetail",
    "StorageError",
    "InMemoryLogAdapter",
    "LogCategory",
    "LogEntry",
    "LogFilter",
    "LogLevel",
    "Logger",
    "LoggerConfig",
    "LogStorageAdapter",
    "get_logger",
]
