"""
목적: 접두사 환경 변수를 설정 모델 필드 값으로 읽는 로더를 제공한다.
설명: pydantic 설정 모델의 필드 타입(bool/int/float/list/Optional)에 맞춰 환경 변수 문자열을 해석하고,
      오버라이드를 덮어써 모델 검증에 넘길 사전을 만든다.
디자인 패턴: 빌더 패턴
참조: src/expense_tracker/shared/config/settings.py, src/expense_tracker/shared/const/__init__.py
"""

from __future__ import annotations

import logging
import os
import types
import typing
from typing import Any, Callable, Dict, Mapping, Optional, Type

from pydantic import BaseModel

_LOGGER = logging.getLogger(__name__)

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def parse_bool(raw: str) -> bool:
    lowered = raw.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ValueError(f"불리언으로 해석할 수 없는 값입니다: {raw}")


def parse_csv(raw: str) -> list[str]:
    """쉼표로 구분된 문자열을 공백을 제거한 목록으로 변환한다."""

    return [item.strip() for item in raw.split(",") if item.strip()]


def _unwrap_optional(annotation: Any) -> tuple[Any, bool]:
    if typing.get_origin(annotation) in (typing.Union, types.UnionType):
        args = [arg for arg in typing.get_args(annotation) if arg is not type(None)]
        if len(args) == 1:
            return args[0], True
    return annotation, False


def _parser_for(annotation: Any) -> Callable[[str], Any]:
    annotation, _ = _unwrap_optional(annotation)
    if annotation is bool:
        return parse_bool
    if annotation is int:
        return lambda raw: int(raw.strip())
    if annotation is float:
        return lambda raw: float(raw.strip())
    if typing.get_origin(annotation) is list:
        return parse_csv
    return lambda raw: raw.strip()


class ConfigLoader:
    """설정 모델 필드 기준 환경 변수 로더이다.

    Args:
        model: 필드 타입을 읽어 올 pydantic 설정 모델.
        prefix: 환경 변수 접두사. 접두사를 뗀 나머지를 소문자로 바꿔 필드 이름과 맞춘다.
        environ: 환경 변수 매핑. 생략하면 `os.environ`을 사용한다.
    """

    def __init__(
        self,
        model: Type[BaseModel],
        prefix: str,
        environ: Optional[Mapping[str, str]] = None,
    ) -> None:
        self._model = model
        self._prefix = prefix
        self._environ = environ

    def read_env(self) -> Dict[str, Any]:
        """접두사 환경 변수를 필드 타입에 맞게 해석한 사전을 반환한다.

        모델에 없는 키는 건너뛰고, Optional 필드의 빈 값은 None이 된다.

        Raises:
            ValueError: 값이 필드 타입으로 해석되지 않는 경우.
        """

        environ = os.environ if self._environ is None else self._environ
        fields = self._model.model_fields
        values: Dict[str, Any] = {}
        for key, raw in environ.items():
            if not key.startswith(self._prefix):
                continue
            name = key[len(self._prefix) :].lower()
            field = fields.get(name)
            if field is None:
                _LOGGER.debug("알 수 없는 설정 환경 변수를 건너뜁니다: %s", key)
                continue
            _, optional = _unwrap_optional(field.annotation)
            if optional and not raw.strip():
                values[name] = None
                continue
            try:
                values[name] = _parser_for(field.annotation)(raw)
            except ValueError as exc:
                raise ValueError(f"{key} 값을 해석할 수 없습니다: {raw!r}") from exc
        return values

    def build(self, overrides: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        """환경 변수 값 위에 오버라이드를 덮어쓴 사전을 반환한다."""

        values = self.read_env()
        if overrides:
            values.update(overrides)
        return values
