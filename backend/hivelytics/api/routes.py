from __future__ import annotations

from fastapi import APIRouter

from hivelytics.api.routes_analytics import router as analytics_router
from hivelytics.core.config import get_settings

router = APIRouter(prefix='/api', tags=['api'])
settings = get_settings()


@router.get('/config')
def get_config() -> dict[str, object]:
    return {
        'history_days': settings.history_days,
        'haf_page_size': settings.haf_page_size,
        'delegations_limit': settings.delegations_limit,
    }


router.include_router(analytics_router)
