"""
목적: DB 엔진 구현체 모듈을 제공한다.
설명: 각 DB 엔진 클래스를 외부에 노출한다.
디자인 패턴: 퍼사드
참조: src/expense_tracker/integrations/db/engines/*.py
"""

from .mongodb import MongoDBEngine
from .sqlite import SqliteEngine

__all__ = ["MongoDBEngine", "SqliteEngine"]
