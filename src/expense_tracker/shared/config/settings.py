"""
목적: 로깅 서브시스템 설정 모델을 제공한다.
설명: 환경 변수(`EXPENSE_LOG_*`)와 dict 오버라이드를 병합해 LoggingSettings를 만든다.
디자인 패턴: 데이터 전송 객체(DTO), 팩토리 함수
참조: src/expense_tracker/shared/config/loader.py, src/expense_tracker/shared/logging/__init__.py
"""

from __future__ import annotations

import os
from typing import Any, List, Literal, Mapping, Optional

from pydantic import BaseModel, Field, field_validator

from expense_tracker.shared.config.loader import ConfigLoader
from expense_tracker.shared.const import SharedConst

AdapterKind = Literal["memory", "sqlite", "mongodb"]


def _default_level() -> str:
    return "INFO" if os.getenv("ENV", "local").lower() in {"prod", "production"} else "DEBUG"


class LoggingSettings(BaseModel):
    """로깅 설정 모델이다.

    Args:
        level: 처리할 최소 로그 레벨. 운영 환경은 INFO, 그 외는 DEBUG가 기본이다.
        enable_console: 콘솔 싱크 활성화 여부.
        enable_storage: 저장소 싱크 활성화 여부.
        adapter: 저장소 어댑터 종류(memory/sqlite/mongodb).
        max_memory_entries: 인메모리 어댑터 최대 보관 건수.
        sqlite_path: SQLite 파일 경로.
        mongodb_uri: MongoDB 접속 URI.
        mongodb_database: MongoDB 데이터베이스 이름.
        collection: 로그 컬렉션 이름.
        retention_days: 정리 작업 기본 보존 일수.
        admin_emails: 관리자 로그 브라우저 접근 허용 이메일 목록.
    """

    level: str = Field(default_factory=_default_level)
    enable_console: bool = True
    enable_storage: bool = True
    adapter: AdapterKind = "memory"
    max_memory_entries: int = Field(default=1000, ge=1)
    sqlite_path: str = "data/db/logs.sqlite"
    mongodb_uri: Optional[str] = None
    mongodb_database: str = "expense_tracker"
    collection: str = "logs"
    retention_days: int = Field(default=30, ge=0)
    admin_emails: List[str] = Field(
        default_factory=lambda: ["admin@example.com", "admin@localhost"]
    )

    @field_validator("level")
    @classmethod
    def _normalize_level(cls, value: str) -> str:
        normalized = str(value).strip().upper()
        if normalized == "WARNING":
            normalized = "WARN"
        if normalized not in {"DEBUG", "INFO", "WARN", "ERROR"}:
            raise ValueError(f"지원하지 않는 로그 레벨입니다: {value}")
        return normalized

    @field_validator("admin_emails", mode="before")
    @classmethod
    def _split_emails(cls, value: Any) -> Any:
        if isinstance(value, str):
            return [item.strip().lower() for item in value.split(",") if item.strip()]
        if isinstance(value, list):
            return [str(item).strip().lower() for item in value if str(item).strip()]
        return value


def load_logging_settings(
    overrides: Optional[Mapping[str, Any]] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> LoggingSettings:
    """환경 변수와 오버라이드를 병합해 로깅 설정을 생성한다."""

    data = ConfigLoader(LoggingSettings, SharedConst.LOGGING_ENV_PREFIX, environ).build(overrides)
    return LoggingSettings.model_validate(data)
