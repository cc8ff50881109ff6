"""Column and manual item endpoints."""

from fastapi import APIRouter, status

from zenager.api.dependencies import BoardServiceDep
from zenager.api.models import (
    APIResponse,
    ColumnCreate,
    ColumnOrderUpdate,
    ColumnResponse,
    ColumnVisibilityUpdate,
    IssueResponse,
    ManualIssueCreate,
    column_to_response,
    issue_to_response,
)
from zenager.service import BoardService

router = APIRouter(prefix="/columns", tags=["columns"])


def board_response(service: BoardService) -> list[ColumnResponse]:
    visible = set(service.visible_columns())
    return [column_to_response(c, c.id in visible) for c in service.get_columns()]


@router.get("", response_model=APIResponse[list[ColumnResponse]])
def list_columns(service: BoardServiceDep) -> APIResponse[list[ColumnResponse]]:
    """List all columns in board order, with their issues."""
    return APIResponse(data=board_response(service))


@router.post(
    "",
    response_model=APIResponse[ColumnResponse],
    status_code=status.HTTP_201_CREATED,
)
def create_column(column: ColumnCreate, service: BoardServiceDep) -> APIResponse[ColumnResponse]:
    """Add a custom column at the end of the board."""
    created = service.add_column(column.name)
    return APIResponse(data=column_to_response(created, visible=True))


@router.delete("/{column_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_column(column_id: str, service: BoardServiceDep) -> None:
    """Delete a column and the issues in it."""
    service.remove_column(column_id)


@router.put("/order", response_model=APIResponse[list[ColumnResponse]])
def reorder_columns(
    order: ColumnOrderUpdate, service: BoardServiceDep
) -> APIResponse[list[ColumnResponse]]:
    """Reorder columns. The order must list every column exactly once."""
    service.reorder_columns(order.order)
    return APIResponse(data=board_response(service))


@router.put("/{column_id}/visibility", response_model=APIResponse[list[str]])
def set_column_visibility(
    column_id: str, visibility: ColumnVisibilityUpdate, service: BoardServiceDep
) -> APIResponse[list[str]]:
    """Show or hide a column. Returns the visible column ids."""
    service.set_column_visible(column_id, visibility.visible)
    return APIResponse(data=service.visible_columns())


@router.post(
    "/{column_id}/issues",
    response_model=APIResponse[IssueResponse],
    status_code=status.HTTP_201_CREATED,
)
def create_manual_issue(
    column_id: str, issue: ManualIssueCreate, service: BoardServiceDep
) -> APIResponse[IssueResponse]:
    """Add a manual item to a column."""
    created = service.create_manual_issue(column_id, issue.title, issue.body)
    return APIResponse(data=issue_to_response(created))


@router.delete("/{column_id}/issues/{issue_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_manual_issue(column_id: str, issue_id: int, service: BoardServiceDep) -> None:
    """Delete a manual item."""
    service.delete_manual_issue(column_id, issue_id)
