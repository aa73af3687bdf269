"""
목적: 관리자 로그 브라우저 API 동작을 검증한다.
설명: 인증/권한, 목록 조회와 전체 건수, CSV 내보내기, 삭제, 보존 정리, 저장소 오류 매핑을 확인한다.
디자인 패턴: 블랙박스 API 테스트
참조: tests/api/conftest.py, src/expense_tracker/api/logs/routers/router.py
"""

from __future__ import annotations

import asyncio
from datetime import datetime, timedelta, timezone

from fastapi.testclient import TestClient

from expense_tracker.shared.exceptions import StorageError
from expense_tracker.shared.logging import InMemoryLogAdapter, LogCategory, LogLevel


def _seed(adapter: InMemoryLogAdapter, *entries) -> None:
    for entry in entries:
        asyncio.run(adapter.write(entry))


class _BrokenAdapter(InMemoryLogAdapter):
    async def read(self, log_filter=None, limit=100, offset=0):
        raise StorageError.from_error("read", ConnectionError("down"))

    async def count(self, log_filter=None):
        raise StorageError.from_error("count", ConnectionError("down"))


def test_admin_logs_require_identity_and_admin(api_client: TestClient, user_headers) -> None:
    """식별 헤더가 없으면 401, 관리자가 아니면 403을 반환한다."""

    unauthenticated = api_client.get("/admin/logs")
    assert unauthenticated.status_code == 401
    assert unauthenticated.json()["detail"]["detail"]["code"] == "LOG_UNAUTHENTICATED"

    forbidden = api_client.get("/admin/logs", headers=user_headers)
    assert forbidden.status_code == 403
    assert forbidden.json()["detail"]["detail"]["code"] == "LOG_ACCESS_DENIED"


def test_list_logs_filters_and_reports_total(
    api_client: TestClient,
    api_adapter: InMemoryLogAdapter,
    entry_factory,
    admin_headers,
) -> None:
    """검색어가 있으면 total은 구조 조건 건수라서 entries보다 클 수 있다."""

    _seed(
        api_adapter,
        entry_factory(
            "login",
            "user signed in",
            "u1",
            category=LogCategory.AUTHENTICATION,
            age=timedelta(minutes=3),
        ),
        entry_factory("expense_created", "Coffee", "u1", age=timedelta(minutes=2)),
        entry_factory(
            "exception",
            "boom",
            "u2",
            level=LogLevel.ERROR,
            category=LogCategory.ERROR,
            age=timedelta(minutes=1),
        ),
    )

    response = api_client.get("/admin/logs", headers=admin_headers)
    assert response.status_code == 200
    body = response.json()
    assert body["total"] == 3
    assert body["page"] == 1
    assert body["page_size"] == 50
    assert [entry["action"] for entry in body["entries"]] == ["exception", "expense_created", "login"]

    errors = api_client.get("/admin/logs", params={"level": ["ERROR"]}, headers=admin_headers).json()
    assert [entry["action"] for entry in errors["entries"]] == ["exception"]
    assert errors["total"] == 1

    searched = api_client.get(
        "/admin/logs", params={"search": "COFFEE", "user_id": "u1"}, headers=admin_headers
    ).json()
    assert [entry["action"] for entry in searched["entries"]] == ["expense_created"]
    assert searched["total"] == 2

    paged = api_client.get(
        "/admin/logs", params={"page": 2, "page_size": 2}, headers=admin_headers
    ).json()
    assert [entry["action"] for entry in paged["entries"]] == ["login"]
    assert paged["total"] == 3


def test_list_logs_rejects_invalid_query(api_client: TestClient, admin_headers) -> None:
    response = api_client.get("/admin/logs", params={"level": ["FATAL"]}, headers=admin_headers)
    assert response.status_code == 422
    response = api_client.get("/admin/logs", params={"page": 0}, headers=admin_headers)
    assert response.status_code == 422


def test_export_logs_returns_csv_attachment(
    api_client: TestClient,
    api_adapter: InMemoryLogAdapter,
    entry_factory,
    admin_headers,
) -> None:
    """CSV 첨부 파일 이름과 헤더 행을 확인한다."""

    _seed(api_adapter, entry_factory("expense_created", 'Lunch "menu"', "u1"))

    response = api_client.get("/admin/logs/export", headers=admin_headers)

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    today = datetime.now(timezone.utc).date().isoformat()
    assert f'filename="logs-{today}.csv"' in response.headers["content-disposition"]
    lines = response.text.strip().split("\n")
    assert lines[0] == '"Timestamp","Level","Category","Action","Message","User ID","Details"'
    assert len(lines) == 2
    assert '"Lunch ""menu"""' in lines[1]
    assert '"u1"' in lines[1]


def test_delete_log_is_idempotent(
    api_client: TestClient,
    api_adapter: InMemoryLogAdapter,
    entry_factory,
    admin_headers,
) -> None:
    entry = entry_factory("expense_deleted", "removed", "u1")
    _seed(api_adapter, entry)

    first = api_client.delete(f"/admin/logs/{entry.id}", headers=admin_headers)
    second = api_client.delete(f"/admin/logs/{entry.id}", headers=admin_headers)

    assert first.status_code == 200
    assert first.json() == {"log_id": entry.id, "deleted": True}
    assert second.status_code == 200
    assert len(api_adapter) == 0


def test_cleanup_uses_settings_default(
    api_client: TestClient,
    api_adapter: InMemoryLogAdapter,
    entry_factory,
    admin_headers,
) -> None:
    """보존 기간을 생략하면 설정값(30일)을 사용한다."""

    _seed(
        api_adapter,
        entry_factory("old", "old entry", age=timedelta(days=45)),
        entry_factory("recent", "recent entry", age=timedelta(days=5)),
    )

    response = api_client.post("/admin/logs/cleanup", headers=admin_headers)
    assert response.status_code == 200
    assert response.json() == {"removed": 1, "retention_days": 30}

    response = api_client.post(
        "/admin/logs/cleanup", params={"retention_days": 1}, headers=admin_headers
    )
    assert response.json() == {"removed": 1, "retention_days": 1}
    assert len(api_adapter) == 0


def test_storage_errors_map_to_gateway_status(app_factory, api_settings, admin_headers) -> None:
    """저장소 실패는 502, 저장소 미설정은 503으로 응답한다."""

    with TestClient(app_factory(_BrokenAdapter(), api_settings)) as client:
        response = client.get("/admin/logs", headers=admin_headers)
    assert response.status_code == 502
    assert response.json()["detail"]["detail"]["code"] == "LOG_STORAGE_ERROR"

    with TestClient(app_factory(None, api_settings)) as client:
        response = client.get("/admin/logs/export", headers=admin_headers)
    assert response.status_code == 503
    assert response.json()["detail"]["detail"]["code"] == "LOG_STORAGE_UNAVAILABLE"
