"""
목적: 공통 예외 베이스 클래스와 로그 저장소 예외를 제공한다.
설명: 메시지를 외부에서 주입받고, Pydantic 기반 상세 모델과 함께 보관한다.
디자인 패턴: 도메인 예외 객체
참조: src/expense_tracker/shared/exceptions/models.py
"""

from __future__ import annotations

from typing import Optional

from expense_tracker.shared.exceptions.models import ExceptionDetail


class BaseAppException(Exception):
    """애플리케이션 공통 예외 클래스이다.

    Args:
        message: 사용자 또는 시스템에 전달할 메시지.
        detail: 예외 상세 정보 모델.
        original: 원본 예외 객체.
    """

    def __init__(
        self,
        message: str,
        detail: ExceptionDetail,
        original: Optional[Exception] = None,
    ) -> None:
        super().__init__(message)
        self._message = message
        self._detail = detail
        self._original = original

    @property
    def message(self) -> str:
        """주입된 메시지를 반환한다."""

        return self._message

    @property
    def detail(self) -> ExceptionDetail:
        """예외 상세 모델을 반환한다."""

        return self._detail

    @property
    def original(self) -> Optional[Exception]:
        """원본 예외를 반환한다."""

        return self._original

    def to_dict(self) -> dict:
        """예외 정보를 사전으로 변환한다."""

        return {
            "message": self._message,
            "detail": self._detail.model_dump(),
            "original": repr(self._original) if self._original else None,
        }


class StorageError(BaseAppException):
    """로그 저장소 작업 실패 예외이다.

    저장 매체에 접근할 수 없거나 값이 표현 불가능해 쓰기가 거부된 경우 발생한다.
    """

    @classmethod
    def from_error(
        cls,
        operation: str,
        original: Exception,
        code: str = "LOG_STORAGE_ERROR",
        hint: Optional[str] = None,
    ) -> "StorageError":
        """원본 예외를 감싼 저장소 예외를 생성한다."""

        detail = ExceptionDetail(
            code=code,
            cause=str(original),
            hint=hint,
            metadata={"operation": operation},
        )
        return cls(f"로그 저장소 {operation} 작업에 실패했습니다.", detail, original)


class AccessDeniedError(BaseAppException):
    """로그 조회 권한이 없을 때 발생하는 예외이다."""

    def __init__(self, message: str, code: str = "LOG_ACCESS_DENIED") -> None:
        super().__init__(message, ExceptionDetail(code=code, cause=message))
