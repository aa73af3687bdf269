"""
목적: 요청/함수 실행 단위 계측 로깅을 제공한다.
설명: ASGI 요청 로깅 미들웨어, 성능/DB/사용자 액션 데코레이터,
      처리되지 않은 예외와 페이지 이동 기록 함수를 제공한다.
디자인 패턴: 미들웨어 패턴, 데코레이터 패턴
참조: src/expense_tracker/shared/logging/logger.py, src/expense_tracker/api/main.py
"""

from __future__ import annotations

import functools
import inspect
import json
import time
import traceback
from typing import Any, Callable, Dict, Mapping, Optional, TypeVar
from uuid import uuid4

from starlette.types import ASGIApp, Message, Receive, Scope, Send

from expense_tracker.shared.logging.factory import get_logger
from expense_tracker.shared.logging.logger import (
    LogEvent,
    Logger,
    database_event,
    performance_event,
    user_action_event,
)
from expense_tracker.shared.logging.models import LogCategory, LogEntry, LogLevel
from expense_tracker.shared.logging.request_scope import bind_request_scope

F = TypeVar("F", bound=Callable[..., Any])


def generate_request_id() -> str:
    """`req_<epoch-ms>_<임의 9자>` 형식의 요청 식별자를 생성한다."""

    return f"req_{int(time.time() * 1000)}_{uuid4().hex[:9]}"


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 3)


def _format_stack(error: BaseException) -> str:
    return "".join(traceback.format_exception(type(error), error, error.__traceback__))


class RequestLoggingMiddleware:
    """HTTP 요청 시작/종료를 활동 로그로 남기는 ASGI 미들웨어.

    요청 처리 중에는 요청 범위(route, user_agent, ip)를 바인딩해
    이 범위에서 생성되는 모든 엔트리의 메타데이터를 보강한다.
    """

    def __init__(self, app: ASGIApp, logger: Optional[Logger] = None) -> None:
        self.app = app
        self._logger = logger

    @property
    def logger(self) -> Logger:
        return self._logger or get_logger()

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        logger = self.logger
        headers = {
            key.decode("latin-1").lower(): value.decode("latin-1")
            for key, value in scope.get("headers", [])
        }
        method = scope.get("method", "GET")
        path = scope.get("path", "/")
        client = scope.get("client")
        request_id = generate_request_id()
        started = time.perf_counter()
        response: Dict[str, Any] = {"status_code": 500, "size": None}

        async def send_wrapper(message: Message) -> None:
            if message["type"] == "http.response.start":
                response["status_code"] = message["status"]
                for key, value in message.get("headers", []):
                    if key.decode("latin-1").lower() == "content-length":
                        response["size"] = value.decode("latin-1")
            await send(message)

        with bind_request_scope(
            route=path,
            user_agent=headers.get("user-agent"),
            ip=client[0] if client else None,
        ):
            await logger.info(
                LogCategory.API,
                "request_start",
                f"{method} {path}",
                {
                    "request_id": request_id,
                    "method": method,
                    "pathname": path,
                    "user_agent": headers.get("user-agent"),
                    "content_type": headers.get("content-type"),
                },
            )
            try:
                await self.app(scope, receive, send_wrapper)
            except Exception as error:
                await logger.error(
                    LogCategory.API,
                    "request_error",
                    f"{method} {path} failed",
                    {
                        "request_id": request_id,
                        "error": str(error),
                        "stack": _format_stack(error),
                    },
                    {
                        "method": method,
                        "route": path,
                        "duration": _elapsed_ms(started),
                        "status_code": 500,
                    },
                )
                raise
            await logger.log_api_call(
                method,
                path,
                response["status_code"],
                _elapsed_ms(started),
                {"request_id": request_id, "response_size": response["size"]},
            )


def _resolve(logger: Optional[Logger]) -> Logger:
    return logger or get_logger()


def _instrument(
    func: F,
    on_success: Callable[[Any, float], LogEvent],
    on_failure: Callable[[BaseException, float], LogEvent],
    logger: Optional[Logger],
) -> F:
    """성공/실패 이벤트를 기록하도록 함수를 감싼다. 예외는 다시 발생시킨다."""

    if inspect.iscoroutinefunction(func):

        @functools.wraps(func)
        async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
            started = time.perf_counter()
            try:
                result = await func(*args, **kwargs)
            except Exception as error:
                await _resolve(logger).log_event(on_failure(error, _elapsed_ms(started)))
                raise
            await _resolve(logger).log_event(on_success(result, _elapsed_ms(started)))
            return result

        return async_wrapper  # type: ignore[return-value]

    @functools.wraps(func)
    def sync_wrapper(*args: Any, **kwargs: Any) -> Any:
        started = time.perf_counter()
        try:
            result = func(*args, **kwargs)
        except Exception as error:
            _resolve(logger).submit_event(on_failure(error, _elapsed_ms(started)))
            raise
        _resolve(logger).submit_event(on_success(result, _elapsed_ms(started)))
        return result

    return sync_wrapper  # type: ignore[return-value]


def with_performance_logging(name: str, logger: Optional[Logger] = None) -> Callable[[F], F]:
    """함수 실행 시간을 PERFORMANCE 로그로 남긴다."""

    def decorator(func: F) -> F:
        return _instrument(
            func,
            lambda result, duration: performance_event(
                name, duration, {"success": True, "result_type": type(result).__name__}
            ),
            lambda error, duration: performance_event(
                name, duration, {"success": False, "error": str(error)}
            ),
            logger,
        )

    return decorator


def with_database_logging(
    operation: str,
    table: str,
    logger: Optional[Logger] = None,
) -> Callable[[F], F]:
    """DB 작업 결과를 DATABASE 로그로 남긴다."""

    def decorator(func: F) -> F:
        return _instrument(
            func,
            lambda result, duration: database_event(
                operation,
                table,
                duration,
                {
                    "success": True,
                    "result_count": len(result) if isinstance(result, (list, tuple)) else 1,
                },
            ),
            lambda error, duration: database_event(
                operation, table, duration, {"success": False, "error": str(error)}
            ),
            logger,
        )

    return decorator


def _describe_args(args: tuple, kwargs: Mapping[str, Any]) -> Optional[str]:
    if not args and not kwargs:
        return None
    payload: Dict[str, Any] = {"args": list(args)}
    if kwargs:
        payload["kwargs"] = dict(kwargs)
    return json.dumps(payload, ensure_ascii=False, default=str)


def with_user_action_logging(action: str, logger: Optional[Logger] = None) -> Callable[[F], F]:
    """함수 호출을 USER_ACTION 로그로 남긴다. 호출 인자는 JSON 문자열로 기록한다."""

    def decorator(func: F) -> F:
        @functools.wraps(func)
        async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                result = await func(*args, **kwargs)
            except Exception as error:
                await _resolve(logger).log_event(
                    user_action_event(action, {"success": False, "error": str(error)})
                )
                raise
            await _resolve(logger).log_event(
                user_action_event(action, {"success": True, "args": _describe_args(args, kwargs)})
            )
            return result

        @functools.wraps(func)
        def sync_wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                result = func(*args, **kwargs)
            except Exception as error:
                _resolve(logger).submit_event(
                    user_action_event(action, {"success": False, "error": str(error)})
                )
                raise
            _resolve(logger).submit_event(
                user_action_event(action, {"success": True, "args": _describe_args(args, kwargs)})
            )
            return result

        if inspect.iscoroutinefunction(func):
            return async_wrapper  # type: ignore[return-value]
        return sync_wrapper  # type: ignore[return-value]

    return decorator


async def log_unhandled_exception(
    error: BaseException,
    component_info: Optional[Mapping[str, Any]] = None,
    logger: Optional[Logger] = None,
) -> Optional[LogEntry]:
    """경계에서 포착한 처리되지 않은 예외를 기록한다."""

    info = dict(component_info or {})
    return await _resolve(logger).log(
        LogLevel.ERROR,
        LogCategory.ERROR,
        "error_boundary",
        str(error) or type(error).__name__,
        {"component_stack": info.get("component_stack"), "error_boundary": True},
        {"stack": _format_stack(error)},
    )


async def log_page_navigation(
    from_path: str,
    to_path: str,
    duration: Optional[float] = None,
    logger: Optional[Logger] = None,
) -> Optional[LogEntry]:
    """페이지 이동을 USER_ACTION `page_navigation`으로 기록한다."""

    return await _resolve(logger).info(
        LogCategory.USER_ACTION,
        "page_navigation",
        f"Navigation from {from_path} to {to_path}",
        {"from": from_path, "to": to_path, "navigation_type": "client_side"},
        {"duration": duration},
    )


__all__ = [
    "RequestLoggingMiddleware",
    "generate_request_id",
    "log_page_navigation",
    "log_unhandled_exception",
    "with_database_logging",
    "with_performance_logging",
    "with_user_action_logging",
]
