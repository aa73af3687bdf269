"""
목적: 설정 로더 공개 API를 제공한다.
설명: 환경 변수 설정 로더, 런타임 환경 로더, 로깅 설정 모델을 외부에 노출한다.
디자인 패턴: 퍼사드
참조: src/expense_tracker/shared/config/loader.py, src/expense_tracker/shared/config/runtime_env_loader.py
"""

from expense_tracker.shared.config.loader import ConfigLoader
from expense_tracker.shared.config.runtime_env_loader import RuntimeEnvironmentLoader
from expense_tracker.shared.config.settings import LoggingSettings, load_logging_settings

__all__ = [
    "ConfigLoader",
    "LoggingSettings",
    "RuntimeEnvironmentLoader",
    "load_logging_settings",
]
