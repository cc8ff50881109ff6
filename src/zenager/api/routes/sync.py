"""Sync endpoint."""

from fastapi import APIRouter

from zenager.api.dependencies import BoardServiceDep
from zenager.api.models import APIResponse, SyncResultResponse, sync_result_to_response

router = APIRouter(tags=["sync"])


@router.post("/sync", response_model=APIResponse[SyncResultResponse])
def run_sync(service: BoardServiceDep) -> APIResponse[SyncResultResponse]:
    """Fetch all selected sources and reconcile them into the board."""
    result = service.run_sync_cycle()
    return APIResponse(data=sync_result_to_response(result))
