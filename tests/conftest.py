"""
목적: pytest 공통 로깅 훅과 로깅 픽스처를 제공한다.
설명: 테스트 시작/종료와 결과를 로깅하고, 인메모리/SQLite 로그 어댑터와 로거를 준비한다.
디자인 패턴: 테스트 훅, 테스트 픽스처
참조: pyproject.toml, src/expense_tracker/shared/logging/__init__.py
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator

import pytest
from dotenv import load_dotenv

from expense_tracker.integrations.db import DBClient, SqliteEngine
from expense_tracker.shared.logging import (
    DBLogAdapter,
    InMemoryLogAdapter,
    Logger,
    LoggerConfig,
    LogLevel,
    set_default_logger,
)

_LOGGER = logging.getLogger("tests")


def _load_env_files() -> None:
    """프로젝트 루트 `.env`가 있으면 로딩한다."""

    env_path = Path(__file__).resolve().parents[1] / ".env"
    if env_path.exists():
        load_dotenv(env_path, override=False)


_load_env_files()


@pytest.fixture
def memory_adapter() -> InMemoryLogAdapter:
    """인메모리 로그 어댑터를 반환한다."""

    return InMemoryLogAdapter(max_entries=1000)


@pytest.fixture
def logger(memory_adapter: InMemoryLogAdapter) -> Logger:
    """DEBUG 레벨, 콘솔/저장소 싱크가 켜진 로거를 반환한다."""

    return Logger(
        LoggerConfig(
            level=LogLevel.DEBUG,
            enable_console=True,
            enable_storage=True,
            adapter=memory_adapter,
        )
    )


@pytest.fixture
def sqlite_client(tmp_path) -> Iterator[DBClient]:
    """임시 파일 기반 SQLite DB 클라이언트를 반환한다."""

    client = DBClient(SqliteEngine(str(tmp_path / "logs.sqlite")))
    client.connect()
    yield client
    client.close()


@pytest.fixture
def sqlite_adapter(sqlite_client: DBClient) -> DBLogAdapter:
    """SQLite 기반 로그 어댑터를 반환한다."""

    return DBLogAdapter(sqlite_client, collection="logs")


@pytest.fixture(autouse=True)
def _reset_default_logger() -> Iterator[None]:
    """테스트 사이에 프로세스 기본 로거가 공유되지 않도록 초기화한다."""

    set_default_logger(None)
    yield
    set_default_logger(None)


def pytest_sessionstart(session) -> None:  # noqa: D401 - pytest 훅 시그니처 유지
    """테스트 세션 시작을 로깅한다."""

    _LOGGER.info("테스트 세션 시작")


def pytest_sessionfinish(session, exitstatus: int) -> None:  # noqa: D401 - pytest 훅 시그니처 유지
    """테스트 세션 종료를 로깅한다."""

    _LOGGER.info("테스트 세션 종료 (exitstatus=%s)", exitstatus)


def pytest_runtest_logstart(nodeid: str, location) -> None:  # noqa: D401 - pytest 훅 시그니처 유지
    """각 테스트 시작을 로깅한다."""

    _LOGGER.info("테스트 시작: %s", nodeid)


def pytest_runtest_logreport(report) -> None:  # noqa: D401 - pytest 훅 시그니처 유지
    """테스트 결과를 로깅한다."""

    if report.when != "call":
        return
    if report.passed:
        _LOGGER.info("테스트 완료: %s", report.nodeid)
        return
    if report.skipped:
        _LOGGER.warning("테스트 스킵: %s", report.nodeid)
        return
    _LOGGER.error("테스트 실패: %s", report.nodeid)
