"""
목적: 헬스체크 라우터 제공
설명: 서비스 상태와 로그 저장소 종류를 확인하는 엔드포인트를 정의한다
디자인 패턴: 라우터 패턴
참조: src/expense_tracker/api/main.py
"""
from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from expense_tracker.shared.logging import get_logger

router = APIRouter()


@router.get("/health", summary="서버의 상태를 조회합니다.")
def health_check():
    """서버의 상태를 확인합니다."""
    adapter = get_logger().config.adapter
    storage = type(adapter).__name__ if adapter is not None else None
    return JSONResponse(content={"status": "ok", "storage": storage}, status_code=status.HTTP_200_OK)
