"""
목적: 공통 상수 집합을 제공한다.
설명: 프로젝트 전역에서 사용하는 기본 상수 값을 정의한다.
디자인 패턴: 상수 객체
참조: src/expense_tracker/shared/config/settings.py
"""


class SharedConst:
    """공통 상수 집합이다.

    Attributes:
        LOGGING_ENV_PREFIX: 로깅 설정 환경 변수 접두사.
    """

    LOGGING_ENV_PREFIX = "EXPENSE_LOG_"


__all__ = ["SharedConst"]
