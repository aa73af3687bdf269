"""
목적: DB 통합 모듈 공개 API를 제공한다.
설명: 엔진 구현체와 공통 클라이언트를 노출한다.
디자인 패턴: 퍼사드
참조: src/expense_tracker/integrations/db/engines
"""

from .client import DBClient
from .engines import MongoDBEngine, SqliteEngine

__all__ = ["DBClient", "MongoDBEngine", "SqliteEngine"]
