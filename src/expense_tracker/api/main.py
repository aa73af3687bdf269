"""
목적: FastAPI 앱 실행 엔트리 포인트 제공
설명: 헬스체크, 관리자 로그 브라우저, 내 활동 API와 요청 로깅 미들웨어를 구성한다.
디자인 패턴: 단일 책임 원칙(SRP)
참조: src/expense_tracker/shared/logging/middleware.py
"""
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import RedirectResponse

from expense_tracker.shared.config import RuntimeEnvironmentLoader

# 런타임 환경(local/dev/stg/prod)을 판별해 환경 파일을 로드한다.
RUNTIME_ENV = RuntimeEnvironmentLoader().load()

# NOTE:
# .env 로딩 이후에 라우터/로거를 import해야, 기본 로거가 최신 환경 변수로 생성된다.
from expense_tracker.api.activity import router as activity_router
from expense_tracker.api.health.routers.server import router as health_router
from expense_tracker.api.logs import router as logs_router
from expense_tracker.shared.logging import RequestLoggingMiddleware, shutdown_default_logger


@asynccontextmanager
async def lifespan(app: FastAPI):
    """앱 종료 시 대기 중인 로그를 전송하고 저장소 연결을 정리한다."""
    try:
        yield
    finally:
        await shutdown_default_logger()


app = FastAPI(lifespan=lifespan)
app.add_middleware(RequestLoggingMiddleware)
app.include_router(health_router)
app.include_router(logs_router)
app.include_router(activity_router)

@app.get("/", include_in_schema=False)
def redirect_to_docs():
    """기본 접속 시 문서 페이지로 리다이렉트한다."""
    return RedirectResponse(url="/docs")
