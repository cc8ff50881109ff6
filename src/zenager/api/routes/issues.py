"""Issue placement endpoints."""

from fastapi import APIRouter

from zenager.api.dependencies import BoardServiceDep
from zenager.api.models import APIResponse, ColumnResponse, IssueMove
from zenager.api.routes.columns import board_response

router = APIRouter(prefix="/issues", tags=["issues"])


@router.post("/move", response_model=APIResponse[list[ColumnResponse]])
def move_issue(move: IssueMove, service: BoardServiceDep) -> APIResponse[list[ColumnResponse]]:
    """Move an issue to a position in a column. Returns the updated board."""
    service.move_issue(
        move.issue_id,
        move.from_column_id,
        move.to_column_id,
        target_index=move.target_index,
        source_id=move.source_id,
    )
    return APIResponse(data=board_response(service))
