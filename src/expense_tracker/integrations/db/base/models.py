"""
목적: DB 통합 인터페이스에서 공통으로 사용하는 모델을 정의한다.
설명: 컬렉션/문서/필터/정렬/페이지네이션 모델을 제공한다.
디자인 패턴: 데이터 전송 객체(DTO)
참조: src/expense_tracker/integrations/db/base/engine.py
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Optional, Set

from pydantic import BaseModel, Field


class ColumnSpec(BaseModel):
    """컬럼 스펙을 표현한다."""

    name: str
    data_type: Optional[str] = None
    nullable: bool = True
    is_primary: bool = False
    metadata: Dict[str, Any] = Field(default_factory=dict)


class CollectionSchema(BaseModel):
    """컬렉션(테이블) 스키마 정보를 표현한다."""

    name: str
    primary_key: str = Field(default="doc_id")
    columns: List[ColumnSpec] = Field(default_factory=list)
    indexes: List[str] = Field(default_factory=list)
    metadata: Dict[str, Any] = Field(default_factory=dict)

    def column_names(self) -> List[str]:
        """등록된 컬럼 이름 목록을 반환한다."""

        return [column.name for column in self.columns]

    def column_set(self) -> Set[str]:
        """컬럼으로 취급할 수 있는 이름 집합을 반환한다."""

        names: Set[str] = {self.primary_key}
        names.update(self.column_names())
        return names

    def validate_document(self, document: "Document") -> None:
        """문서 입력을 스키마 기준으로 검증한다."""

        if not self.columns:
            return
        allowed = self.column_set()
        disallowed = [key for key in document.fields.keys() if key not in allowed]
        if disallowed:
            raise ValueError(f"허용되지 않는 컬럼: {', '.join(disallowed)}")

    def validate_filter_expression(self, filter_expression: Optional["FilterExpression"]) -> None:
        """필터 표현식을 스키마 기준으로 검증한다."""

        if not filter_expression or not filter_expression.conditions or not self.columns:
            return
        for condition in filter_expression.conditions:
            if condition.field not in self.column_set():
                raise ValueError(f"존재하지 않는 컬럼을 조회할 수 없습니다: {condition.field}")

    def validate_query(self, query: "Query") -> None:
        """쿼리 입력을 스키마 기준으로 검증한다."""

        self.validate_filter_expression(query.filter_expression)
        if not query.sort or not self.columns:
            return
        for sort_field in query.sort:
            if sort_field.field not in self.column_set():
                raise ValueError(f"존재하지 않는 컬럼을 정렬에 사용할 수 없습니다: {sort_field.field}")

    @classmethod
    def default(cls, name: str) -> "CollectionSchema":
        """기본 스키마를 생성한다."""

        return cls(name=name)


class Document(BaseModel):
    """문서 데이터를 표현한다."""

    doc_id: Any
    fields: Dict[str, Any] = Field(default_factory=dict)


class FilterOperator(str, Enum):
    """필터 연산자."""

    EQ = "EQ"
    NE = "NE"
    GT = "GT"
    GTE = "GTE"
    LT = "LT"
    LTE = "LTE"
    IN = "IN"
    NOT_IN = "NOT_IN"


class FilterCondition(BaseModel):
    """필터 조건."""

    field: str
    operator: FilterOperator
    value: Any


class FilterExpression(BaseModel):
    """필터 표현식. 조건은 항상 AND로 결합한다."""

    conditions: List[FilterCondition] = Field(default_factory=list)


class SortOrder(str, Enum):
    """정렬 순서."""

    ASC = "ASC"
    DESC = "DESC"


class SortField(BaseModel):
    """정렬 필드."""

    field: str
    order: SortOrder = SortOrder.ASC


class Pagination(BaseModel):
    """페이지네이션 정보."""

    limit: int = Field(default=50, ge=1)
    offset: int = Field(default=0, ge=0)


class Query(BaseModel):
    """일반 조회 쿼리 모델."""

    filter_expression: Optional[FilterExpression] = None
    sort: List[SortField] = Field(default_factory=list)
    pagination: Optional[Pagination] = None
