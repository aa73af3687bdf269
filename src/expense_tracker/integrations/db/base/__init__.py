"""
목적: DB 베이스 모듈 공개 API를 제공한다.
설명: 공통 모델과 엔진 인터페이스를 노출한다.
디자인 패턴: 퍼사드
참조: src/expense_tracker/integrations/db/base/models.py, src/expense_tracker/integrations/db/base/engine.py
"""

from .engine import BaseDBEngine, DuplicateDocumentError
from .models import (
    CollectionSchema,
    ColumnSpec,
    Document,
    FilterCondition,
    FilterExpression,
    FilterOperator,
    Pagination,
    Query,
    SortField,
    SortOrder,
)

__all__ = [
    "CollectionSchema",
    "ColumnSpec",
    "Document",
    "FilterCondition",
    "FilterExpression",
    "FilterOperator",
    "Pagination",
    "Query",
    "SortField",
    "SortOrder",
    "BaseDBEngine",
    "DuplicateDocumentError",
]
