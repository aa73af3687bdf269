"""
목적: 활동 로그에 필요한 공통 모델을 정의한다.
설명: 로그 레벨/카테고리, 메타데이터, 로그 엔트리, 필터 구조와 엔트리 생성 규칙을 제공한다.
디자인 패턴: 데이터 전송 객체(DTO), 팩토리 함수
참조: src/expense_tracker/shared/logging/logger.py, src/expense_tracker/shared/logging/request_scope.py
"""

from __future__ import annotations

import copy
import threading
import time
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from expense_tracker.shared.logging.request_scope import current_request_scope

_SEVERITY = {"DEBUG": 10, "INFO": 20, "WARN": 30, "ERROR": 40}


class LogLevel(str, Enum):
    """로그 레벨 열거형. DEBUG < INFO < WARN < ERROR 순으로 심각도가 높아진다."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARN = "WARN"
    ERROR = "ERROR"

    @property
    def severity(self) -> int:
        """비교용 심각도 순위를 반환한다."""

        return _SEVERITY[self.value]

    def at_least(self, minimum: "LogLevel") -> bool:
        """현재 레벨이 최소 레벨 이상인지 반환한다."""

        return self.severity >= LogLevel(minimum).severity


class LogCategory(str, Enum):
    """로그 카테고리 열거형. 심각도와 무관하게 이벤트 영역을 분류한다."""

    USER_ACTION = "USER_ACTION"
    SYSTEM = "SYSTEM"
    ERROR = "ERROR"
    PERFORMANCE = "PERFORMANCE"
    AUTHENTICATION = "AUTHENTICATION"
    DATABASE = "DATABASE"
    API = "API"


class LogMetadata(BaseModel):
    """전송 계층 정보를 담는 메타데이터 모델이다.

    정의되지 않은 키도 허용한다. 타입이 맞지 않는 정의된 키의 값은
    버리지 않고 `<key>_raw` 추가 키로 옮겨 담는다.
    """

    model_config = ConfigDict(extra="allow")

    user_agent: Optional[str] = None
    ip: Optional[str] = None
    route: Optional[str] = None
    duration: Optional[float] = None
    method: Optional[str] = None
    status_code: Optional[int] = None
    component: Optional[str] = None
    stack: Optional[str] = None

    @model_validator(mode="wrap")
    @classmethod
    def _keep_invalid_as_raw(cls, data: Any, handler: Any) -> "LogMetadata":
        try:
            return handler(data)
        except ValidationError as exc:
            if not isinstance(data, Mapping):
                raise
            invalid = {
                error["loc"][0]
                for error in exc.errors()
                if error["loc"] and error["loc"][0] in cls.model_fields
            }
            if not invalid:
                raise
            repaired = {
                (f"{key}_raw" if key in invalid else key): value for key, value in data.items()
            }
            return handler(repaired)

    def compact(self) -> Dict[str, Any]:
        """값이 있는 항목만 사전으로 반환한다."""

        return self.model_dump(exclude_none=True)


class LogEntry(BaseModel):
    """로그 엔트리 모델이다. 저장 이후에는 변경하지 않는다.

    Args:
        id: 생성 시점에 부여되는 고유 식별자.
        timestamp: 생성 시각(UTC).
        level: 로그 레벨.
        category: 로그 카테고리.
        action: 기계 판독용 이벤트 식별자.
        message: 사람이 읽는 요약.
        user_id: 행위자 식별자. 익명/시스템 이벤트는 None.
        details: 이벤트별 구조화 데이터.
        metadata: 전송 계층 정보.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    timestamp: datetime
    level: LogLevel
    category: LogCategory
    action: str
    message: str
    user_id: Optional[str] = None
    details: Dict[str, Any] = Field(default_factory=dict)
    metadata: LogMetadata = Field(default_factory=LogMetadata)


class LogFilter(BaseModel):
    """로그 조회 필터 모델이다.

    Args:
        level: 허용 레벨 목록. 비어 있으면 제한하지 않는다.
        category: 허용 카테고리 목록.
        user_id: 사용자 식별자 일치 조건.
        start_date: 포함 시작 시각.
        end_date: 포함 종료 시각.
        search: message/action 대소문자 무시 부분 문자열 검색어.
    """

    level: Optional[List[LogLevel]] = None
    category: Optional[List[LogCategory]] = None
    user_id: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    search: Optional[str] = None


_clock_lock = threading.Lock()
_last_timestamp: Optional[datetime] = None


def _utc_now() -> datetime:
    """프로세스 내에서 역행하지 않는 UTC 시각을 반환한다."""

    global _last_timestamp
    with _clock_lock:
        now = datetime.now(timezone.utc)
        if _last_timestamp is not None and now < _last_timestamp:
            now = _last_timestamp
        _last_timestamp = now
        return now


def generate_log_id() -> str:
    """`<epoch-ms>-<임의 9자>` 형식의 식별자를 생성한다."""

    return f"{int(time.time() * 1000)}-{uuid4().hex[:9]}"


def ensure_utc(value: datetime) -> datetime:
    """naive datetime은 UTC로 간주해 timezone-aware 값으로 맞춘다."""

    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def create_entry(
    level: LogLevel,
    category: LogCategory,
    action: str,
    message: str,
    details: Optional[Mapping[str, Any]] = None,
    metadata: Optional[Mapping[str, Any] | LogMetadata] = None,
    context: Optional[Mapping[str, Any]] = None,
) -> LogEntry:
    """로그 엔트리를 생성한다.

    컨텍스트는 호출 시점에 복사되어 `details["context"]`에 들어가고,
    `context["user_id"]`가 엔트리의 user_id가 된다. 요청 범위가 바인딩되어
    있으면 메타데이터에 user_agent/route를 채운다.
    """

    snapshot = copy.deepcopy(dict(context or {}))
    if isinstance(metadata, LogMetadata):
        meta_values = metadata.model_dump(exclude_none=True)
    else:
        meta_values = {str(key): value for key, value in dict(metadata or {}).items()}
    user_id = snapshot.get("user_id")
    scope = current_request_scope()
    if scope:
        for key in ("user_agent", "route"):
            if key in scope:
                meta_values.setdefault(key, scope[key])
    return LogEntry(
        id=generate_log_id(),
        timestamp=_utc_now(),
        level=LogLevel(level),
        category=LogCategory(category),
        action=str(action),
        message=str(message),
        user_id=None if user_id is None else str(user_id),
        details={**dict(details or {}), "context": snapshot},
        metadata=LogMetadata(**meta_values),
    )
