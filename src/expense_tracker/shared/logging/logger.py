"""
목적: 활동 로그 발행의 단일 진입점을 제공한다.
설명: 최소 레벨 필터링, 컨텍스트 스냅샷, 콘솔/저장소 싱크 분배를 담당하며
      로깅 호출이 애플리케이션 로직을 중단시키지 않도록 저장 실패를 흡수한다.
디자인 패턴: 퍼사드 패턴
참조: src/expense_tracker/shared/logging/models.py, src/expense_tracker/shared/logging/adapter.py,
      src/expense_tracker/shared/logging/console.py
"""

from __future__ import annotations

import asyncio
import logging
import traceback
from typing import Any, Dict, Mapping, NamedTuple, Optional, Set, Union

from pydantic import BaseModel, ConfigDict

from expense_tracker.shared.logging.adapter import LogStorageAdapter
from expense_tracker.shared.logging.console import ConsoleSink
from expense_tracker.shared.logging.models import (
    LogCategory,
    LogEntry,
    LogLevel,
    LogMetadata,
    create_entry,
)

_LOGGER = logging.getLogger(__name__)

Details = Optional[Mapping[str, Any]]
Metadata = Optional[Union[Mapping[str, Any], LogMetadata]]


class LoggerConfig(BaseModel):
    """로거 설정 모델이다.

    Args:
        level: 최소 로그 레벨. 이보다 낮은 레벨은 엔트리를 만들지 않는다.
        enable_console: 콘솔 싱크 사용 여부.
        enable_storage: 저장소 싱크 사용 여부.
        adapter: 저장소 어댑터.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True, validate_assignment=True)

    level: LogLevel = LogLevel.INFO
    enable_console: bool = True
    enable_storage: bool = True
    adapter: Optional[LogStorageAdapter] = None


class Logger:
    """활동 로거.

    with_context로 만든 하위 로거는 설정, 콘솔 싱크, 대기 중인 전송 작업을 공유하고
    컨텍스트만 별도로 가진다.
    """

    def __init__(
        self,
        config: Optional[LoggerConfig] = None,
        context: Optional[Mapping[str, Any]] = None,
        console: Optional[ConsoleSink] = None,
        pending: Optional[Set["asyncio.Task[None]"]] = None,
    ) -> None:
        self._config = config or LoggerConfig()
        self._context: Dict[str, Any] = dict(context or {})
        self._console = console or ConsoleSink()
        self._pending: Set["asyncio.Task[None]"] = pending if pending is not None else set()

    @property
    def config(self) -> LoggerConfig:
        return self._config

    @property
    def console(self) -> ConsoleSink:
        return self._console

    # ----- 컨텍스트 -----

    def set_context(self, partial: Mapping[str, Any]) -> None:
        """주어진 키만 컨텍스트에 병합한다."""

        self._context.update(partial)

    def get_context(self) -> Dict[str, Any]:
        """현재 컨텍스트의 복사본을 반환한다."""

        return dict(self._context)

    def clear_context(self) -> None:
        self._context = {}

    def with_context(self, context: Mapping[str, Any]) -> "Logger":
        """현재 컨텍스트에 값을 덧붙인 하위 로거를 반환한다."""

        return Logger(
            config=self._config,
            context={**self._context, **dict(context)},
            console=self._console,
            pending=self._pending,
        )

    def update_config(self, **changes: Any) -> LoggerConfig:
        """설정 값을 부분 갱신한다. 하위 로거에도 즉시 반영된다."""

        for key, value in changes.items():
            if key not in LoggerConfig.model_fields:
                raise ValueError(f"알 수 없는 로거 설정입니다: {key}")
            setattr(self._config, key, value)
        return self._config

    # ----- 발행 -----

    def is_enabled(self, level: LogLevel) -> bool:
        return LogLevel(level).at_least(self._config.level)

    def build_entry(
        self,
        level: LogLevel,
        category: LogCategory,
        action: str,
        message: str,
        details: Details = None,
        metadata: Metadata = None,
    ) -> LogEntry:
        return create_entry(
            level,
            category,
            action,
            message,
            details=details,
            metadata=metadata,
            context=self._context,
        )

    async def log(
        self,
        level: LogLevel,
        category: LogCategory,
        action: str,
        message: str,
        details: Details = None,
        metadata: Metadata = None,
    ) -> Optional[LogEntry]:
        """엔트리를 생성해 활성화된 싱크로 전달한다.

        최소 레벨보다 낮으면 아무 작업도 하지 않고 None을 반환한다.
        엔트리를 만들 수 없는 입력도 콘솔에 보고만 하고 None을 반환한다.
        """

        entry = self._prepare(level, category, action, message, details, metadata)
        if entry is None:
            return None
        await self._dispatch(entry)
        return entry

    def submit(
        self,
        level: LogLevel,
        category: LogCategory,
        action: str,
        message: str,
        details: Details = None,
        metadata: Metadata = None,
    ) -> Optional["asyncio.Task[None]"]:
        """엔트리를 즉시 생성하고 전달은 백그라운드 작업으로 예약한다.

        실행 중인 이벤트 루프가 없으면 전달까지 동기적으로 마친 뒤 None을 반환한다.
        """

        entry = self._prepare(level, category, action, message, details, metadata)
        if entry is None:
            return None
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            asyncio.run(self._dispatch(entry))
            return None
        task = loop.create_task(self._dispatch(entry))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    async def flush(self) -> None:
        """예약된 전달 작업이 모두 끝날 때까지 기다린다."""

        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    async def debug(
        self,
        category: LogCategory,
        action: str,
        message: str,
        details: Details = None,
        metadata: Metadata = None,
    ) -> Optional[LogEntry]:
        return await self.log(LogLevel.DEBUG, category, action, message, details, metadata)

    async def info(
        self,
        category: LogCategory,
        action: str,
        message: str,
        details: Details = None,
        metadata: Metadata = None,
    ) -> Optional[LogEntry]:
        return await self.log(LogLevel.INFO, category, action, message, details, metadata)

    async def warn(
        self,
        category: LogCategory,
        action: str,
        message: str,
        details: Details = None,
        metadata: Metadata = None,
    ) -> Optional[LogEntry]:
        return await self.log(LogLevel.WARN, category, action, message, details, metadata)

    async def error(
        self,
        category: LogCategory,
        action: str,
        message: str,
        details: Details = None,
        metadata: Metadata = None,
    ) -> Optional[LogEntry]:
        return await self.log(LogLevel.ERROR, category, action, message, details, metadata)

    # ----- 도메인 헬퍼 -----

    async def log_event(self, event: "LogEvent") -> Optional[LogEntry]:
        """미리 구성한 이벤트를 기록한다."""

        return await self.log(*event)

    def submit_event(self, event: "LogEvent") -> Optional["asyncio.Task[None]"]:
        """미리 구성한 이벤트를 백그라운드로 기록한다."""

        return self.submit(*event)

    async def log_user_action(self, action: str, details: Details = None) -> Optional[LogEntry]:
        return await self.log_event(user_action_event(action, details))

    async def log_api_call(
        self,
        method: str,
        route: str,
        status_code: int,
        duration: float,
        details: Details = None,
    ) -> Optional[LogEntry]:
        """API 호출 결과를 기록한다. 4xx/5xx 응답은 ERROR 레벨이다."""

        return await self.log_event(api_call_event(method, route, status_code, duration, details))

    async def log_database_operation(
        self,
        operation: str,
        table: str,
        duration: Optional[float] = None,
        details: Details = None,
    ) -> Optional[LogEntry]:
        return await self.log_event(database_event(operation, table, duration, details))

    async def log_error(
        self,
        error: BaseException,
        context: Optional[str] = None,
        details: Details = None,
    ) -> Optional[LogEntry]:
        """예외를 ERROR 레벨 `exception` 액션으로 기록한다.

        호출 위치 설명(context 인자)은 `details["context"]`가 아니라
        `details["error_context"]`에 담긴다. `details["context"]`는 모든 엔트리와 같이
        로거 컨텍스트 스냅샷이다. 예외 타입 이름은 `details["error_name"]`,
        스택 트레이스는 `metadata.stack`에 담긴다.
        """

        return await self.log_event(error_event(error, context, details))

    async def log_performance(
        self,
        action: str,
        duration: float,
        details: Details = None,
    ) -> Optional[LogEntry]:
        return await self.log_event(performance_event(action, duration, details))

    async def log_auth(
        self,
        action: str,
        success: bool,
        details: Details = None,
    ) -> Optional[LogEntry]:
        return await self.log_event(auth_event(action, success, details))

    def _prepare(
        self,
        level: LogLevel,
        category: LogCategory,
        action: str,
        message: str,
        details: Details,
        metadata: Metadata,
    ) -> Optional[LogEntry]:
        try:
            if not self.is_enabled(level):
                return None
            return self.build_entry(level, category, action, message, details, metadata)
        except Exception as exc:  # noqa: BLE001 - 로깅 호출 실패를 호출자에게 전파하지 않음
            self._console.report_build_failure(str(action), exc)
            return None

    async def _dispatch(self, entry: LogEntry) -> None:
        config = self._config
        if config.enable_console:
            try:
                self._console.emit(entry)
            except Exception as exc:  # noqa: BLE001 - 콘솔 출력 실패 격리
                _LOGGER.warning("콘솔 로그 출력에 실패했습니다: %s", exc)
        if config.enable_storage and config.adapter is not None:
            try:
                await config.adapter.write(entry)
            except Exception as exc:  # noqa: BLE001 - 저장 실패는 호출자에게 전파하지 않음
                self._console.report_failure(entry, exc)


class LogEvent(NamedTuple):
    """기록 전 이벤트 구성 값이다. Logger.log 인자 순서와 같다."""

    level: LogLevel
    category: LogCategory
    action: str
    message: str
    details: Details = None
    metadata: Metadata = None


def user_action_event(action: str, details: Details = None) -> LogEvent:
    return LogEvent(
        LogLevel.INFO, LogCategory.USER_ACTION, action, f"User performed: {action}", details
    )


def api_call_event(
    method: str,
    route: str,
    status_code: int,
    duration: float,
    details: Details = None,
) -> LogEvent:
    level = LogLevel.ERROR if status_code >= 400 else LogLevel.INFO
    return LogEvent(
        level,
        LogCategory.API,
        "api_call",
        f"{method} {route}",
        details,
        {"method": method, "route": route, "status_code": status_code, "duration": duration},
    )


def database_event(
    operation: str,
    table: str,
    duration: Optional[float] = None,
    details: Details = None,
) -> LogEvent:
    return LogEvent(
        LogLevel.INFO,
        LogCategory.DATABASE,
        operation,
        f"Database {operation} on {table}",
        details,
        {"duration": duration, "component": table},
    )


def error_event(
    error: BaseException,
    context: Optional[str] = None,
    details: Details = None,
) -> LogEvent:
    stack = "".join(traceback.format_exception(type(error), error, error.__traceback__))
    return LogEvent(
        LogLevel.ERROR,
        LogCategory.ERROR,
        "exception",
        str(error) or type(error).__name__,
        {**dict(details or {}), "error_context": context, "error_name": type(error).__name__},
        {"stack": stack},
    )


def performance_event(action: str, duration: float, details: Details = None) -> LogEvent:
    return LogEvent(
        LogLevel.INFO,
        LogCategory.PERFORMANCE,
        action,
        f"Performance: {action}",
        details,
        {"duration": duration},
    )


def auth_event(action: str, success: bool, details: Details = None) -> LogEvent:
    level = LogLevel.INFO if success else LogLevel.WARN
    outcome = "success" if success else "failed"
    return LogEvent(level, LogCategory.AUTHENTICATION, action, f"Auth {action}: {outcome}", details)
