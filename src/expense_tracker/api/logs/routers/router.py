"""
목적: 관리자 로그 라우터 집계를 제공한다.
설명: 엔드포인트별 분리 라우터를 하나의 관리자 로그 라우터로 묶는다.
디자인 패턴: 컴포지트 패턴
참조: src/expense_tracker/api/logs/routers/*.py
"""

from __future__ import annotations

from fastapi import APIRouter

from expense_tracker.api.const import ADMIN_LOGS_API_PREFIX, ADMIN_LOGS_API_TAG
from expense_tracker.api.logs.routers.cleanup_logs import router as cleanup_logs_router
from expense_tracker.api.logs.routers.delete_log import router as delete_log_router
from expense_tracker.api.logs.routers.export_logs import router as export_logs_router
from expense_tracker.api.logs.routers.list_logs import router as list_logs_router

router = APIRouter(tags=[ADMIN_LOGS_API_TAG])
router.include_router(list_logs_router, prefix=ADMIN_LOGS_API_PREFIX)
router.include_router(export_logs_router, prefix=ADMIN_LOGS_API_PREFIX)
router.include_router(cleanup_logs_router, prefix=ADMIN_LOGS_API_PREFIX)
router.include_router(delete_log_router, prefix=ADMIN_LOGS_API_PREFIX)
