"""
목적: 내 활동 라우터 집계를 제공한다.
설명: 엔드포인트별 분리 라우터를 하나의 내 활동 라우터로 묶는다.
디자인 패턴: 컴포지트 패턴
참조: src/expense_tracker/api/activity/routers/*.py
"""

from __future__ import annotations

from fastapi import APIRouter

from expense_tracker.api.activity.routers.export_activity import router as export_activity_router
from expense_tracker.api.activity.routers.list_activity import router as list_activity_router
from expense_tracker.api.const import ACTIVITY_API_PREFIX, ACTIVITY_API_TAG

router = APIRouter(tags=[ACTIVITY_API_TAG])
router.include_router(list_activity_router, prefix=ACTIVITY_API_PREFIX)
router.include_router(export_activity_router, prefix=ACTIVITY_API_PREFIX)
