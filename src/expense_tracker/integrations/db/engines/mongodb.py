"""
목적: MongoDB 기반 DB 엔진을 제공한다.
설명: 스키마 기반 필드 매핑과 삽입/조회/건수/삭제를 지원하는 원격 문서 저장소 엔진이다.
디자인 패턴: 어댑터 패턴
참조: src/expense_tracker/integrations/db/base/engine.py
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from ..base.engine import BaseDBEngine, DuplicateDocumentError
from ..base.models import (
    CollectionSchema,
    Document,
    FilterCondition,
    FilterExpression,
    Query,
    SortOrder,
)

from pymongo import ASCENDING, DESCENDING, MongoClient
from pymongo.errors import DuplicateKeyError

_LOGGER = logging.getLogger(__name__)


class MongoDBEngine(BaseDBEngine):
    """MongoDB 기반 엔진 구현체."""

    def __init__(
        self,
        uri: Optional[str] = None,
        database: str = "expense_tracker",
        host: str = "127.0.0.1",
        port: int = 27017,
        user: Optional[str] = None,
        password: Optional[str] = None,
        scheme: str = "mongodb",
        auth_source: Optional[str] = None,
    ) -> None:
        if not uri:
            auth = ""
            if user and password:
                auth = f"{user}:{password}@"
            elif user:
                auth = f"{user}@"
            uri = f"{scheme}://{auth}{host}:{port}"
            if auth_source:
                uri = f"{uri}/?authSource={auth_source}"
        if not database:
            raise ValueError("database 설정이 필요합니다.")
        self._uri = uri
        self._database_name = database
        self._client: Optional[MongoClient] = None
        self._database = None

    @property
    def name(self) -> str:
        return "mongodb"

    def connect(self) -> None:
        if self._client is not None:
            return
        self._client = MongoClient(self._uri, tz_aware=True)
        self._database = self._client[self._database_name]
        _LOGGER.info("MongoDB 연결이 초기화되었습니다.")

    def close(self) -> None:
        if self._client is None:
            return
        self._client.close()
        self._client = None
        self._database = None
        _LOGGER.info("MongoDB 연결이 종료되었습니다.")

    def create_collection(self, schema: CollectionSchema) -> None:
        database = self._ensure_database()
        if schema.name not in database.list_collection_names():
            database.create_collection(schema.name)
            _LOGGER.info("MongoDB 컬렉션 생성 완료: %s", schema.name)
        coll = database[schema.name]
        for field in schema.indexes:
            coll.create_index([(field, ASCENDING)])

    def delete_collection(self, name: str) -> None:
        database = self._ensure_database()
        database.drop_collection(name)
        _LOGGER.info("MongoDB 컬렉션 삭제 완료: %s", name)

    def insert(
        self,
        collection: str,
        document: Document,
        schema: Optional[CollectionSchema] = None,
    ) -> None:
        coll = self._ensure_database()[collection]
        payload = dict(document.fields)
        payload["_id"] = document.doc_id
        try:
            coll.insert_one(payload)
        except DuplicateKeyError as exc:
            raise DuplicateDocumentError(
                f"이미 존재하는 문서입니다: {document.doc_id}"
            ) from exc

    def get(
        self,
        collection: str,
        doc_id: object,
        schema: Optional[CollectionSchema] = None,
    ) -> Optional[Document]:
        coll = self._ensure_database()[collection]
        data = coll.find_one({"_id": doc_id})
        if not data:
            return None
        return self._to_document(data)

    def delete(
        self,
        collection: str,
        doc_id: object,
        schema: Optional[CollectionSchema] = None,
    ) -> None:
        coll = self._ensure_database()[collection]
        coll.delete_one({"_id": doc_id})

    def delete_many(
        self,
        collection: str,
        doc_ids: Sequence[object],
        schema: Optional[CollectionSchema] = None,
    ) -> int:
        if not doc_ids:
            return 0
        coll = self._ensure_database()[collection]
        result = coll.delete_many({"_id": {"$in": list(doc_ids)}})
        return int(result.deleted_count)

    def query(
        self,
        collection: str,
        query: Query,
        schema: Optional[CollectionSchema] = None,
    ) -> List[Document]:
        schema = self._ensure_schema(schema, collection)
        coll = self._ensure_database()[collection]
        cursor = coll.find(self.build_filter(query.filter_expression, schema))
        if query.sort:
            cursor = cursor.sort(self.build_sort(query, schema))
        if query.pagination:
            cursor = cursor.skip(query.pagination.offset).limit(query.pagination.limit)
        return [self._to_document(data) for data in cursor]

    def count(
        self,
        collection: str,
        filter_expression: Optional[FilterExpression] = None,
        schema: Optional[CollectionSchema] = None,
    ) -> int:
        schema = self._ensure_schema(schema, collection)
        coll = self._ensure_database()[collection]
        return int(coll.count_documents(self.build_filter(filter_expression, schema)))

    def build_filter(
        self,
        filter_expression: Optional[FilterExpression],
        schema: CollectionSchema,
    ) -> dict:
        """필터 표현식을 MongoDB 쿼리 문서로 변환한다."""

        if not filter_expression or not filter_expression.conditions:
            return {}
        return {
            "$and": [
                self._condition_to_query(condition, schema)
                for condition in filter_expression.conditions
            ]
        }

    def build_sort(self, query: Query, schema: CollectionSchema) -> list:
        """정렬 필드를 MongoDB 정렬 스펙으로 변환한다."""

        return [
            (
                self._field_name(sort_field.field, schema),
                DESCENDING if sort_field.order == SortOrder.DESC else ASCENDING,
            )
            for sort_field in query.sort
        ]

    def _condition_to_query(self, condition: FilterCondition, schema: CollectionSchema) -> dict:
        field = self._field_name(condition.field, schema)
        operator = condition.operator.value
        value = condition.value
        if operator == "EQ":
            return {field: value}
        if operator in {"NE", "GT", "GTE", "LT", "LTE"}:
            return {field: {f"${operator.lower()}": value}}
        if operator in {"IN", "NOT_IN"}:
            if not isinstance(value, list):
                raise ValueError("IN/NOT_IN은 리스트 값이 필요합니다.")
            return {field: {"$in" if operator == "IN" else "$nin": value}}
        raise NotImplementedError("지원하지 않는 연산자입니다.")

    def _field_name(self, field: str, schema: CollectionSchema) -> str:
        return "_id" if field == schema.primary_key else field

    def _to_document(self, data: dict) -> Document:
        fields = {key: value for key, value in data.items() if key != "_id"}
        return Document(doc_id=str(data["_id"]), fields=fields)

    def _ensure_database(self):
        if self._database is None:
            raise RuntimeError("MongoDB 연결이 초기화되지 않았습니다.")
        return self._database

    def _ensure_schema(
        self, schema: Optional[CollectionSchema], collection: Optional[str] = None
    ) -> CollectionSchema:
        if schema is not None:
            return schema
        if collection is None:
            raise ValueError("컬렉션 이름이 필요합니다.")
        return CollectionSchema.default(collection)
