"""
목적: 로그 조회 필터의 판정 규칙과 내보내기 형식을 한곳에 모은다.
설명: 구조화 조건(레벨/카테고리/사용자/기간)과 검색어 조건을 분리해 판정하고,
      DB 필터 표현식 변환, 페이지 슬라이싱, CSV 변환을 제공한다.
디자인 패턴: 명세(Specification) 함수 모음
참조: src/expense_tracker/shared/logging/adapter.py, src/expense_tracker/shared/logging/db_adapter.py
"""

from __future__ import annotations

import csv
import io
import json
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from expense_tracker.integrations.db.base.models import (
    FilterCondition,
    FilterExpression,
    FilterOperator,
)
from expense_tracker.shared.logging.models import LogEntry, LogFilter, ensure_utc

ACTION_DESCRIPTIONS: Dict[str, str] = {
    "expense_created": "Created new expense",
    "expense_updated": "Updated expense",
    "expense_deleted": "Deleted expense",
    "receipt_upload_started": "Started receipt upload",
    "receipt_analysis_successful": "Receipt analyzed successfully",
    "receipt_analysis_failed": "Receipt analysis failed",
    "signin": "Signed in",
    "signout": "Signed out",
    "signup": "Created account",
    "password_reset": "Requested password reset",
    "category_created": "Created category",
    "category_updated": "Updated category",
    "page_navigation": "Navigated to page",
    "expense_validation_failed": "Form validation failed",
}


def describe_action(action: str) -> str:
    """사용자에게 보여줄 활동 설명을 반환한다. 등록되지 않은 액션은 그대로 반환한다."""

    return ACTION_DESCRIPTIONS.get(action, action)


def matches_structured(entry: LogEntry, log_filter: Optional[LogFilter]) -> bool:
    """검색어를 제외한 구조화 조건을 모두 만족하는지 판정한다."""

    if log_filter is None:
        return True
    if log_filter.level and entry.level not in log_filter.level:
        return False
    if log_filter.category and entry.category not in log_filter.category:
        return False
    if log_filter.user_id and entry.user_id != log_filter.user_id:
        return False
    timestamp = ensure_utc(entry.timestamp)
    if log_filter.start_date and timestamp < ensure_utc(log_filter.start_date):
        return False
    if log_filter.end_date and timestamp > ensure_utc(log_filter.end_date):
        return False
    return True


def matches_search(entry: LogEntry, search: Optional[str]) -> bool:
    """검색어가 message 또는 action에 포함되는지 대소문자 구분 없이 판정한다."""

    if not search:
        return True
    needle = search.lower()
    return needle in entry.message.lower() or needle in entry.action.lower()


def matches(entry: LogEntry, log_filter: Optional[LogFilter]) -> bool:
    """구조화 조건과 검색어 조건을 모두 만족하는지 판정한다."""

    if not matches_structured(entry, log_filter):
        return False
    return matches_search(entry, log_filter.search if log_filter else None)


def build_filter_expression(log_filter: Optional[LogFilter]) -> FilterExpression:
    """구조화 조건을 DB 필터 표현식으로 변환한다. 검색어는 포함하지 않는다."""

    conditions: List[FilterCondition] = []
    if log_filter is None:
        return FilterExpression(conditions=conditions)
    if log_filter.level:
        conditions.append(
            FilterCondition(
                field="level",
                operator=FilterOperator.IN,
                value=[level.value for level in log_filter.level],
            )
        )
    if log_filter.category:
        conditions.append(
            FilterCondition(
                field="category",
                operator=FilterOperator.IN,
                value=[category.value for category in log_filter.category],
            )
        )
    if log_filter.user_id:
        conditions.append(
            FilterCondition(field="user_id", operator=FilterOperator.EQ, value=log_filter.user_id)
        )
    if log_filter.start_date:
        conditions.append(
            FilterCondition(
                field="timestamp",
                operator=FilterOperator.GTE,
                value=ensure_utc(log_filter.start_date),
            )
        )
    if log_filter.end_date:
        conditions.append(
            FilterCondition(
                field="timestamp",
                operator=FilterOperator.LTE,
                value=ensure_utc(log_filter.end_date),
            )
        )
    return FilterExpression(conditions=conditions)


def sort_newest_first(entries: Iterable[LogEntry]) -> List[LogEntry]:
    """타임스탬프 내림차순으로 정렬한다."""

    return sorted(entries, key=lambda entry: ensure_utc(entry.timestamp), reverse=True)


def paginate(entries: Sequence[LogEntry], limit: int, offset: int = 0) -> List[LogEntry]:
    """offset부터 최대 limit개를 잘라 반환한다."""

    if limit <= 0:
        return []
    start = max(offset, 0)
    return list(entries[start : start + limit])


CsvColumn = Tuple[str, Callable[[LogEntry], object]]

ADMIN_CSV_COLUMNS: List[CsvColumn] = [
    ("Timestamp", lambda entry: ensure_utc(entry.timestamp).isoformat()),
    ("Level", lambda entry: entry.level.value),
    ("Category", lambda entry: entry.category.value),
    ("Action", lambda entry: entry.action),
    ("Message", lambda entry: entry.message),
    ("User ID", lambda entry: entry.user_id or ""),
    ("Details", lambda entry: json.dumps(entry.details, ensure_ascii=False, default=str)),
]

ACTIVITY_CSV_COLUMNS: List[CsvColumn] = [
    ("Date", lambda entry: ensure_utc(entry.timestamp).date().isoformat()),
    ("Time", lambda entry: ensure_utc(entry.timestamp).strftime("%H:%M:%S")),
    ("Activity", lambda entry: describe_action(entry.action)),
    ("Category", lambda entry: entry.category.value),
    ("Details", lambda entry: entry.message),
]


def entries_to_csv(entries: Iterable[LogEntry], columns: Sequence[CsvColumn]) -> str:
    """로그 목록을 CSV 문자열로 변환한다. 모든 셀은 따옴표로 감싼다."""

    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow([header for header, _ in columns])
    for entry in entries:
        writer.writerow([extract(entry) for _, extract in columns])
    return buffer.getvalue()
