"""
목적: 공통 DB 클라이언트를 제공한다.
설명: 엔진을 주입받아 스키마 검증을 거친 삽입/조회/건수/삭제 호출을 제공한다.
디자인 패턴: 파사드
참조: src/expense_tracker/integrations/db/base/engine.py
"""

from __future__ import annotations

from typing import Dict, List, Optional, Sequence

from .base.engine import BaseDBEngine
from .base.models import CollectionSchema, Document, FilterExpression, Query


class DBClient:
    """공통 DB 클라이언트."""

    def __init__(self, engine: BaseDBEngine) -> None:
        self._engine = engine
        self._schemas: Dict[str, CollectionSchema] = {}

    @property
    def engine(self) -> BaseDBEngine:
        """내부 엔진을 반환한다."""

        return self._engine

    def connect(self) -> None:
        """엔진 연결을 초기화한다."""

        self._engine.connect()

    def close(self) -> None:
        """엔진 연결을 종료한다."""

        self._engine.close()

    def register_schema(self, schema: CollectionSchema) -> None:
        """컬렉션 스키마를 등록한다."""

        self._schemas[schema.name] = schema

    def get_schema(self, collection: str) -> CollectionSchema:
        """컬렉션 스키마를 조회한다."""

        return self._schemas.get(collection) or CollectionSchema.default(collection)

    def create_collection(self, schema: CollectionSchema) -> None:
        """스키마 기반으로 컬렉션을 생성한다."""

        self.register_schema(schema)
        self._engine.create_collection(schema)

    def insert(self, collection: str, document: Document) -> None:
        """문서를 삽입한다."""

        schema = self.get_schema(collection)
        schema.validate_document(document)
        self._engine.insert(collection, document, schema)

    def get(self, collection: str, doc_id: object) -> Optional[Document]:
        """단일 문서를 조회한다."""

        return self._engine.get(collection, doc_id, self.get_schema(collection))

    def fetch(self, collection: str, query: Optional[Query] = None) -> List[Document]:
        """Query 기반으로 문서를 조회한다."""

        if query is None:
            query = Query()
        schema = self.get_schema(collection)
        schema.validate_query(query)
        return self._engine.query(collection, query, schema)

    def count(
        self,
        collection: str,
        filter_expression: Optional[FilterExpression] = None,
    ) -> int:
        """조건에 맞는 문서 건수를 반환한다."""

        schema = self.get_schema(collection)
        schema.validate_filter_expression(filter_expression)
        return self._engine.count(collection, filter_expression, schema)

    def delete(self, collection: str, doc_id: object) -> None:
        """단일 문서를 삭제한다."""

        self._engine.delete(collection, doc_id, self.get_schema(collection))

    def delete_many(self, collection: str, doc_ids: Sequence[object]) -> int:
        """여러 문서를 삭제한다."""

        if not doc_ids:
            return 0
        return self._engine.delete_many(collection, list(doc_ids), self.get_schema(collection))
