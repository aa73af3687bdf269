"""
목적: DB 엔진 추상 인터페이스를 정의한다.
설명: 컬렉션 관리, 삽입 전용 쓰기, 조회/건수/삭제를 위한 표준 메서드를 제공한다.
디자인 패턴: 전략 패턴
참조: src/expense_tracker/integrations/db/base/models.py
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from expense_tracker.integrations.db.base.models import (
    CollectionSchema,
    Document,
    FilterExpression,
    Query,
)


class DuplicateDocumentError(RuntimeError):
    """동일한 기본 키의 문서가 이미 존재할 때 발생한다."""


class BaseDBEngine(ABC):
    """DB 엔진 인터페이스."""

    @property
    @abstractmethod
    def name(self) -> str:
        """엔진 이름을 반환한다."""

    @abstractmethod
    def connect(self) -> None:
        """DB 연결을 초기화한다."""

    @abstractmethod
    def close(self) -> None:
        """DB 연결을 종료한다."""

    @abstractmethod
    def create_collection(self, schema: CollectionSchema) -> None:
        """컬렉션을 생성한다."""

    @abstractmethod
    def delete_collection(self, name: str) -> None:
        """컬렉션을 삭제한다."""

    @abstractmethod
    def insert(
        self,
        collection: str,
        document: Document,
        schema: Optional[CollectionSchema] = None,
    ) -> None:
        """문서를 삽입한다. 기본 키가 겹치면 DuplicateDocumentError를 발생시킨다."""

    @abstractmethod
    def get(
        self,
        collection: str,
        doc_id: object,
        schema: Optional[CollectionSchema] = None,
    ) -> Optional[Document]:
        """단일 문서를 조회한다."""

    @abstractmethod
    def delete(
        self,
        collection: str,
        doc_id: object,
        schema: Optional[CollectionSchema] = None,
    ) -> None:
        """문서를 삭제한다. 존재하지 않아도 오류가 아니다."""

    @abstractmethod
    def delete_many(
        self,
        collection: str,
        doc_ids: Sequence[object],
        schema: Optional[CollectionSchema] = None,
    ) -> int:
        """여러 문서를 삭제하고 삭제 건수를 반환한다."""

    @abstractmethod
    def query(
        self,
        collection: str,
        query: Query,
        schema: Optional[CollectionSchema] = None,
    ) -> List[Document]:
        """일반 조회를 수행한다."""

    @abstractmethod
    def count(
        self,
        collection: str,
        filter_expression: Optional[FilterExpression] = None,
        schema: Optional[CollectionSchema] = None,
    ) -> int:
        """조건에 맞는 문서 건수를 서버 측에서 계산한다."""
