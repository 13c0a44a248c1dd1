from __future__ import annotations

from fastapi import APIRouter, Depends

from hivelytics.api.deps import get_snapshot_service
from hivelytics.api.route_utils import resolve_account_param
from hivelytics.schemas.analytics import AnalyticsResult
from hivelytics.services.snapshot_service import SnapshotService

router = APIRouter()


@router.get('/accounts/{account}/analytics', response_model=AnalyticsResult)
async def get_account_analytics(
    account: str,
    snapshot_service: SnapshotService = Depends(get_snapshot_service),
) -> AnalyticsResult:
    """Fetch the account's chain data and return the full analytics report.

    Chain failures surface as `HiveClientError` and are mapped to 502 by the app.
    """
    name = resolve_account_param(account)
    return await snapshot_service.analyze(name)
