"""
목적: 로그 엔트리를 콘솔(표준 logging)로 출력한다.
설명: `[LEVEL] CATEGORY: action` 머리말과 message/details/metadata JSON을 한 줄로 기록한다.
디자인 패턴: 싱크(Sink)
참조: src/expense_tracker/shared/logging/logger.py
"""

from __future__ import annotations

import json
import logging
from typing import Optional

from expense_tracker.shared.logging.models import LogEntry, LogLevel

CONSOLE_LOGGER_NAME = "expense_tracker.activity"

_STDLIB_LEVELS = {
    LogLevel.DEBUG: logging.DEBUG,
    LogLevel.INFO: logging.INFO,
    LogLevel.WARN: logging.WARNING,
    LogLevel.ERROR: logging.ERROR,
}


def format_entry(entry: LogEntry) -> str:
    """엔트리를 콘솔 한 줄 형식으로 변환한다."""

    payload = {
        "message": entry.message,
        "details": entry.details,
        "metadata": entry.metadata.compact(),
    }
    body = json.dumps(payload, ensure_ascii=False, default=str)
    return f"[{entry.level.value}] {entry.category.value}: {entry.action} {body}"


class ConsoleSink:
    """표준 logging 로거로 엔트리를 내보내는 싱크."""

    def __init__(self, logger: Optional[logging.Logger] = None) -> None:
        self._logger = logger or logging.getLogger(CONSOLE_LOGGER_NAME)

    @property
    def logger(self) -> logging.Logger:
        return self._logger

    def emit(self, entry: LogEntry) -> None:
        self._logger.log(_STDLIB_LEVELS[entry.level], format_entry(entry))

    def report_failure(self, entry: LogEntry, error: BaseException) -> None:
        """저장 실패를 콘솔에만 보고한다."""

        self._logger.error("Failed to write log to storage: %s (entry=%s)", error, entry.id)

    def report_build_failure(self, action: str, error: BaseException) -> None:
        """엔트리 생성 실패를 콘솔에만 보고한다."""

        self._logger.error("Failed to build log entry: %s (action=%s)", error, action)
