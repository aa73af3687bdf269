"""
목적: SQLite 기반 DB 엔진을 제공한다.
설명: 컬렉션 스키마 기반 삽입/조회/건수/삭제를 지원하며 로컬 개발과 테스트 저장소로 사용한다.
디자인 패턴: 어댑터 패턴
참조: src/expense_tracker/integrations/db/base/engine.py
"""

from __future__ import annotations

import json
import logging
import re
import sqlite3
import threading
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple

from ..base.engine import BaseDBEngine, DuplicateDocumentError
from ..base.models import (
    CollectionSchema,
    Document,
    FilterCondition,
    FilterExpression,
    Query,
)

_IDENTIFIER_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")
_LOGGER = logging.getLogger(__name__)
_OPERATORS = {"EQ": "=", "NE": "!=", "GT": ">", "GTE": ">=", "LT": "<", "LTE": "<="}


class SqliteEngine(BaseDBEngine):
    """SQLite 엔진 구현체.

    워커 스레드에서 호출될 수 있으므로 단일 연결을 잠금으로 보호한다.
    datetime 값은 UTC ISO 문자열로, dict/list 값은 JSON 문자열로 저장한다.
    """

    def __init__(self, database_path: str = "data/db/logs.sqlite") -> None:
        self._database_path = database_path
        self._connection: Optional[sqlite3.Connection] = None
        self._lock = threading.RLock()

    @property
    def name(self) -> str:
        return "sqlite"

    def connect(self) -> None:
        with self._lock:
            if self._connection is not None:
                return
            if self._database_path != ":memory:":
                Path(self._database_path).parent.mkdir(parents=True, exist_ok=True)
            self._connection = sqlite3.connect(self._database_path, check_same_thread=False)
            self._connection.row_factory = sqlite3.Row
        _LOGGER.info("SQLite 연결이 초기화되었습니다: %s", self._database_path)

    def close(self) -> None:
        with self._lock:
            if self._connection is None:
                return
            self._connection.close()
            self._connection = None
        _LOGGER.info("SQLite 연결이 종료되었습니다.")

    def create_collection(self, schema: CollectionSchema) -> None:
        table = self._quote_identifier(schema.name)
        column_defs = []
        if schema.primary_key not in schema.column_names():
            column_defs.append(f"{self._quote_identifier(schema.primary_key)} TEXT PRIMARY KEY")
        for column in schema.columns:
            col_def = f"{self._quote_identifier(column.name)} {column.data_type or 'TEXT'}"
            if not column.nullable:
                col_def += " NOT NULL"
            if column.is_primary or column.name == schema.primary_key:
                col_def += " PRIMARY KEY"
            column_defs.append(col_def)
        with self._lock:
            connection = self._ensure_connection()
            cursor = connection.cursor()
            cursor.execute(f"CREATE TABLE IF NOT EXISTS {table} ({', '.join(column_defs)})")
            for column_name in schema.indexes:
                index_name = self._quote_identifier(f"idx_{schema.name}_{column_name}")
                cursor.execute(
                    f"CREATE INDEX IF NOT EXISTS {index_name} "
                    f"ON {table} ({self._quote_identifier(column_name)})"
                )
            connection.commit()

    def delete_collection(self, name: str) -> None:
        with self._lock:
            connection = self._ensure_connection()
            connection.execute(f"DROP TABLE IF EXISTS {self._quote_identifier(name)}")
            connection.commit()

    def insert(
        self,
        collection: str,
        document: Document,
        schema: Optional[CollectionSchema] = None,
    ) -> None:
        schema = self._ensure_schema(schema, collection)
        row = self._document_to_row(document, schema)
        columns = list(row.keys())
        placeholders = ", ".join(["?"] * len(columns))
        column_sql = ", ".join(self._quote_identifier(col) for col in columns)
        with self._lock:
            connection = self._ensure_connection()
            try:
                connection.execute(
                    f"INSERT INTO {self._quote_identifier(schema.name)} ({column_sql}) "
                    f"VALUES ({placeholders})",
                    list(row.values()),
                )
            except sqlite3.IntegrityError as exc:
                connection.rollback()
                raise DuplicateDocumentError(
                    f"이미 존재하는 문서입니다: {document.doc_id}"
                ) from exc
            connection.commit()

    def get(
        self,
        collection: str,
        doc_id: object,
        schema: Optional[CollectionSchema] = None,
    ) -> Optional[Document]:
        schema = self._ensure_schema(schema, collection)
        pk = self._quote_identifier(schema.primary_key)
        with self._lock:
            connection = self._ensure_connection()
            row = connection.execute(
                f"SELECT * FROM {self._quote_identifier(schema.name)} WHERE {pk} = ?",
                (doc_id,),
            ).fetchone()
        if row is None:
            return None
        return self._row_to_document(dict(row), schema)

    def delete(
        self,
        collection: str,
        doc_id: object,
        schema: Optional[CollectionSchema] = None,
    ) -> None:
        self.delete_many(collection, [doc_id], schema)

    def delete_many(
        self,
        collection: str,
        doc_ids: Sequence[object],
        schema: Optional[CollectionSchema] = None,
    ) -> int:
        schema = self._ensure_schema(schema, collection)
        if not doc_ids:
            return 0
        pk = self._quote_identifier(schema.primary_key)
        placeholders = ", ".join(["?"] * len(doc_ids))
        with self._lock:
            connection = self._ensure_connection()
            cursor = connection.execute(
                f"DELETE FROM {self._quote_identifier(schema.name)} WHERE {pk} IN ({placeholders})",
                list(doc_ids),
            )
            connection.commit()
            return cursor.rowcount

    def query(
        self,
        collection: str,
        query: Query,
        schema: Optional[CollectionSchema] = None,
    ) -> List[Document]:
        schema = self._ensure_schema(schema, collection)
        sql = f"SELECT * FROM {self._quote_identifier(schema.name)}"
        where_sql, params = self._build_where(query.filter_expression)
        sql += where_sql
        if query.sort:
            order_by_parts = [
                f"{self._quote_identifier(sort_field.field)} {sort_field.order.value}"
                for sort_field in query.sort
            ]
            sql += " ORDER BY " + ", ".join(order_by_parts)
        if query.pagination:
            sql += " LIMIT ? OFFSET ?"
            params.extend([query.pagination.limit, query.pagination.offset])
        with self._lock:
            connection = self._ensure_connection()
            rows = connection.execute(sql, params).fetchall()
        return [self._row_to_document(dict(row), schema) for row in rows]

    def count(
        self,
        collection: str,
        filter_expression: Optional[FilterExpression] = None,
        schema: Optional[CollectionSchema] = None,
    ) -> int:
        schema = self._ensure_schema(schema, collection)
        where_sql, params = self._build_where(filter_expression)
        with self._lock:
            connection = self._ensure_connection()
            row = connection.execute(
                f"SELECT COUNT(*) FROM {self._quote_identifier(schema.name)}{where_sql}",
                params,
            ).fetchone()
        return int(row[0]) if row else 0

    def _build_where(
        self, filter_expression: Optional[FilterExpression]
    ) -> Tuple[str, List[object]]:
        if not filter_expression or not filter_expression.conditions:
            return "", []
        clauses = []
        params: List[object] = []
        for condition in filter_expression.conditions:
            clause, clause_params = self._build_condition(condition)
            clauses.append(clause)
            params.extend(clause_params)
        return " WHERE " + " AND ".join(clauses), params

    def _build_condition(self, condition: FilterCondition) -> Tuple[str, List[object]]:
        column = self._quote_identifier(condition.field)
        operator = condition.operator.value
        value = condition.value
        if operator in _OPERATORS:
            return f"{column} {_OPERATORS[operator]} ?", [self._to_sql_value(value)]
        if operator in {"IN", "NOT_IN"}:
            if not isinstance(value, list):
                raise ValueError("IN/NOT_IN은 리스트 값이 필요합니다.")
            if not value:
                return ("0 = 1" if operator == "IN" else "1 = 1"), []
            placeholders = ", ".join(["?"] * len(value))
            op = "IN" if operator == "IN" else "NOT IN"
            return f"{column} {op} ({placeholders})", [self._to_sql_value(item) for item in value]
        raise NotImplementedError("지원하지 않는 연산자입니다.")

    def _document_to_row(self, document: Document, schema: CollectionSchema) -> Dict[str, Any]:
        row: Dict[str, Any] = {schema.primary_key: document.doc_id}
        for key, value in document.fields.items():
            row[key] = self._to_sql_value(value)
        if schema.columns:
            allowed = schema.column_set()
            row = {key: value for key, value in row.items() if key in allowed}
        return row

    def _row_to_document(self, row: Dict[str, Any], schema: CollectionSchema) -> Document:
        doc_id = row.get(schema.primary_key)
        fields = {key: value for key, value in row.items() if key != schema.primary_key}
        return Document(doc_id=doc_id, fields=fields)

    def _to_sql_value(self, value: Any) -> Any:
        if isinstance(value, datetime):
            if value.tzinfo is None:
                value = value.replace(tzinfo=timezone.utc)
            return value.astimezone(timezone.utc).isoformat(timespec="microseconds")
        if isinstance(value, Enum):
            return value.value
        if isinstance(value, (dict, list)):
            return json.dumps(value, ensure_ascii=False)
        return value

    def _ensure_connection(self) -> sqlite3.Connection:
        if self._connection is None:
            raise RuntimeError("SQLite 연결이 초기화되지 않았습니다.")
        return self._connection

    def _ensure_schema(
        self, schema: Optional[CollectionSchema], collection: Optional[str] = None
    ) -> CollectionSchema:
        if schema is not None:
            return schema
        if collection is None:
            raise ValueError("컬렉션 이름이 필요합니다.")
        return CollectionSchema.default(collection)

    def _quote_identifier(self, name: str) -> str:
        if not name:
            raise ValueError("식별자 이름이 비어 있습니다.")
        if not _IDENTIFIER_RE.match(name):
            raise ValueError(f"허용되지 않는 식별자: {name}")
        return f'"{name}"'
