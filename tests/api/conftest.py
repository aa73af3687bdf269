"""
목적: 로그 조회 API 테스트용 앱/클라이언트 픽스처를 제공한다.
설명: 인메모리 어댑터를 주입한 FastAPI 앱과 TestClient, 샘플 로그 적재 도우미를 준비한다.
디자인 패턴: 테스트 픽스처 패턴
참조: src/expense_tracker/api/main.py, src/expense_tracker/api/logs/services/__init__.py
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Iterator, Optional

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from expense_tracker.api.activity import router as activity_router
from expense_tracker.api.auth import get_logging_settings
from expense_tracker.api.logs import get_log_browser_service, router as logs_router
from expense_tracker.api.logs.services import LogBrowserService
from expense_tracker.shared.config import LoggingSettings
from expense_tracker.shared.logging import (
    InMemoryLogAdapter,
    LogCategory,
    LogEntry,
    LogLevel,
    LogStorageAdapter,
    create_entry,
)

def make_entry(
    action: str,
    message: str,
    user_id: Optional[str] = None,
    level: LogLevel = LogLevel.INFO,
    category: LogCategory = LogCategory.USER_ACTION,
    age: timedelta = timedelta(0),
) -> LogEntry:
    """지정한 나이(age)만큼 과거 시각을 가진 로그 엔트리를 만든다."""

    context = {"user_id": user_id} if user_id else {}
    entry = create_entry(level, category, action, message, {"source": "test"}, None, context)
    return entry.model_copy(update={"timestamp": datetime.now(timezone.utc) - age})


@pytest.fixture
def api_adapter() -> InMemoryLogAdapter:
    return InMemoryLogAdapter(max_entries=100)


@pytest.fixture
def api_settings() -> LoggingSettings:
    return LoggingSettings(adapter="memory", retention_days=30)


def build_app(adapter: Optional[LogStorageAdapter], settings: LoggingSettings) -> FastAPI:
    """라우터만 포함한 테스트용 앱을 만든다."""

    app = FastAPI()
    app.include_router(logs_router)
    app.include_router(activity_router)
    app.dependency_overrides[get_log_browser_service] = lambda: LogBrowserService(adapter)
    app.dependency_overrides[get_logging_settings] = lambda: settings
    return app


@pytest.fixture
def entry_factory():
    """로그 엔트리 생성 함수를 반환한다."""

    return make_entry


@pytest.fixture
def app_factory():
    """어댑터와 설정을 받아 테스트용 앱을 만드는 함수를 반환한다."""

    return build_app


@pytest.fixture
def admin_headers() -> dict:
    return {"X-User-Id": "admin-1", "X-User-Email": "Admin@Example.com"}


@pytest.fixture
def user_headers() -> dict:
    return {"X-User-Id": "user-1", "X-User-Email": "user@example.com"}


@pytest.fixture
def api_client(api_adapter: InMemoryLogAdapter, api_settings: LoggingSettings) -> Iterator[TestClient]:
    with TestClient(build_app(api_adapter, api_settings)) as client:
        yield client
