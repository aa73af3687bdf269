"""
목적: 활동 로깅 공개 API를 제공한다.
설명: 모델/어댑터/로거/미들웨어를 노출하고, 프로세스 기본 로거를 대상으로 하는
      사용자 컨텍스트 관리와 도메인 헬퍼 함수를 제공한다.
디자인 패턴: 퍼사드
참조: src/expense_tracker/shared/logging/logger.py, src/expense_tracker/shared/logging/factory.py
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

from expense_tracker.shared.logging.adapter import (
    InMemoryLogAdapter,
    LogStorageAdapter,
    StorageResult,
)
from expense_tracker.shared.logging.console import ConsoleSink, format_entry
from expense_tracker.shared.logging.db_adapter import DBLogAdapter
from expense_tracker.shared.logging.factory import (
    build_logger,
    build_storage_adapter,
    get_logger,
    set_default_logger,
    shutdown_default_logger,
)
from expense_tracker.shared.logging.logger import LogEvent, Logger, LoggerConfig
from expense_tracker.shared.logging.middleware import (
    RequestLoggingMiddleware,
    log_page_navigation,
    log_unhandled_exception,
    with_database_logging,
    with_performance_logging,
    with_user_action_logging,
)
from expense_tracker.shared.logging.models import (
    LogCategory,
    LogEntry,
    LogFilter,
    LogLevel,
    LogMetadata,
    create_entry,
)
from expense_tracker.shared.logging.request_scope import bind_request_scope


def set_logger_user(user_id: str, user_email: Optional[str] = None) -> None:
    """로그인 사용자를 기본 로거 컨텍스트에 설정한다."""

    get_logger().set_context({"user_id": user_id, "user_email": user_email})


def clear_logger_user() -> None:
    """로그아웃 시 기본 로거 컨텍스트를 비운다."""

    get_logger().clear_context()


def configure_logger(**changes: Any) -> LoggerConfig:
    return get_logger().update_config(**changes)


async def log_user_action(action: str, details: Optional[Mapping[str, Any]] = None):
    return await get_logger().log_user_action(action, details)


async def log_user_action_with_user_id(
    user_id: str,
    action: str,
    details: Optional[Mapping[str, Any]] = None,
):
    """사용자 식별자를 보장하며 사용자 액션을 기록한다.

    컨텍스트에 사용자가 없을 때만 user_id를 설정하고, details에도 user_id를 함께 남긴다.
    """

    logger = get_logger()
    if not logger.get_context().get("user_id") and user_id:
        logger.set_context({"user_id": user_id})
    return await logger.log_user_action(action, {**dict(details or {}), "user_id": user_id})


async def log_error(
    error: BaseException,
    context: Optional[str] = None,
    details: Optional[Mapping[str, Any]] = None,
):
    return await get_logger().log_error(error, context, details)


async def log_api_call(
    method: str,
    route: str,
    status_code: int,
    duration: float,
    details: Optional[Mapping[str, Any]] = None,
):
    return await get_logger().log_api_call(method, route, status_code, duration, details)


async def log_database_operation(
    operation: str,
    table: str,
    duration: Optional[float] = None,
    details: Optional[Mapping[str, Any]] = None,
):
    return await get_logger().log_database_operation(operation, table, duration, details)


async def log_performance(
    action: str,
    duration: float,
    details: Optional[Mapping[str, Any]] = None,
):
    return await get_logger().log_performance(action, duration, details)


async def log_auth(action: str, success: bool, details: Optional[Mapping[str, Any]] = None):
    return await get_logger().log_auth(action, success, details)


__all__ = [
    "ConsoleSink",
    "DBLogAdapter",
    "InMemoryLogAdapter",
    "LogCategory",
    "LogEntry",
    "LogEvent",
    "LogFilter",
    "LogLevel",
    "LogMetadata",
    "LogStorageAdapter",
    "Logger",
    "LoggerConfig",
    "RequestLoggingMiddleware",
    "StorageResult",
    "bind_request_scope",
    "build_logger",
    "build_storage_adapter",
    "clear_logger_user",
    "configure_logger",
    "create_entry",
    "format_entry",
    "get_logger",
    "log_api_call",
    "log_auth",
    "log_database_operation",
    "log_error",
    "log_page_navigation",
    "log_performance",
    "log_unhandled_exception",
    "log_user_action",
    "log_user_action_with_user_id",
    "set_default_logger",
    "set_logger_user",
    "shutdown_default_logger",
    "with_database_logging",
    "with_performance_logging",
    "with_user_action_logging",
]
