"""
목적: 설정 기반으로 저장소 어댑터와 프로세스 기본 로거를 조립한다.
설명: LoggingSettings의 adapter 값(memory/sqlite/mongodb)에 따라 어댑터를 만들고,
      기본 로거 싱글턴을 지연 생성한다.
디자인 패턴: 팩토리 패턴, 싱글턴 패턴
참조: src/expense_tracker/shared/config/settings.py, src/expense_tracker/shared/logging/logger.py
"""

from __future__ import annotations

import threading
from typing import Optional

from expense_tracker.integrations.db import DBClient, MongoDBEngine, SqliteEngine
from expense_tracker.shared.config import LoggingSettings, load_logging_settings
from expense_tracker.shared.logging.adapter import InMemoryLogAdapter, LogStorageAdapter
from expense_tracker.shared.logging.db_adapter import DBLogAdapter
from expense_tracker.shared.logging.logger import Logger, LoggerConfig
from expense_tracker.shared.logging.models import LogLevel

_default_logger: Optional[Logger] = None
_default_logger_lock = threading.RLock()


def build_storage_adapter(settings: LoggingSettings) -> LogStorageAdapter:
    """설정에 맞는 저장소 어댑터를 생성한다."""

    if settings.adapter == "memory":
        return InMemoryLogAdapter(max_entries=settings.max_memory_entries)
    if settings.adapter == "sqlite":
        engine = SqliteEngine(database_path=settings.sqlite_path)
    else:
        engine = MongoDBEngine(uri=settings.mongodb_uri, database=settings.mongodb_database)
    client = DBClient(engine)
    client.connect()
    return DBLogAdapter(client, collection=settings.collection)


def build_logger(settings: Optional[LoggingSettings] = None) -> Logger:
    """설정으로 로거를 생성한다."""

    settings = settings or load_logging_settings()
    adapter = build_storage_adapter(settings) if settings.enable_storage else None
    config = LoggerConfig(
        level=LogLevel(settings.level),
        enable_console=settings.enable_console,
        enable_storage=settings.enable_storage,
        adapter=adapter,
    )
    return Logger(config)


def get_logger() -> Logger:
    """프로세스 기본 로거를 반환한다. 최초 호출 시 환경 설정으로 생성한다."""

    global _default_logger
    if _default_logger is not None:
        return _default_logger
    with _default_logger_lock:
        if _default_logger is None:
            _default_logger = build_logger()
    return _default_logger


def set_default_logger(logger: Optional[Logger]) -> None:
    """기본 로거를 교체한다. None이면 다음 호출 시 다시 생성한다."""

    global _default_logger
    with _default_logger_lock:
        _default_logger = logger


async def shutdown_default_logger() -> None:
    """기본 로거의 대기 작업을 마치고 저장소 자원을 정리한다."""

    global _default_logger
    with _default_logger_lock:
        logger = _default_logger
        _default_logger = None
    if logger is None:
        return
    await logger.flush()
    if logger.config.adapter is not None:
        await logger.config.adapter.close()
