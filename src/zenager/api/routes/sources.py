"""Source registry endpoints."""

from fastapi import APIRouter, status

from zenager.api.dependencies import BoardServiceDep
from zenager.api.models import (
    APIResponse,
    SourceCreate,
    SourceResponse,
    SourceSelectionUpdate,
    source_to_response,
)
from zenager.service import BoardService

router = APIRouter(prefix="/sources", tags=["sources"])


def _sources(service: BoardService) -> list[SourceResponse]:
    return [source_to_response(source, selected) for source, selected in service.list_sources()]


@router.get("", response_model=APIResponse[list[SourceResponse]])
def list_sources(service: BoardServiceDep) -> APIResponse[list[SourceResponse]]:
    """List configured sources with their selection state."""
    return APIResponse(data=_sources(service))


@router.post(
    "",
    response_model=APIResponse[SourceResponse],
    status_code=status.HTTP_201_CREATED,
)
def create_source(source: SourceCreate, service: BoardServiceDep) -> APIResponse[SourceResponse]:
    """Add a source from its issues page URL. New sources are selected."""
    added = service.add_source_url(source.url, source.provider)
    return APIResponse(data=source_to_response(added, selected=True))


@router.delete("/{source_id:path}", status_code=status.HTTP_204_NO_CONTENT)
def delete_source(source_id: str, service: BoardServiceDep, clear_issues: bool = False) -> None:
    """Remove a source."""
    service.remove_source(source_id, clear_issues=clear_issues)


@router.post("/select-all", response_model=APIResponse[list[SourceResponse]])
def select_all_sources(service: BoardServiceDep) -> APIResponse[list[SourceResponse]]:
    service.select_all_sources()
    return APIResponse(data=_sources(service))


@router.post("/select-none", response_model=APIResponse[list[SourceResponse]])
def select_none_sources(service: BoardServiceDep) -> APIResponse[list[SourceResponse]]:
    """Deselect all sources and clear tracker issues from the board."""
    service.select_none_sources()
    return APIResponse(data=_sources(service))


@router.put("/{source_id:path}/selected", response_model=APIResponse[list[SourceResponse]])
def set_source_selected(
    source_id: str, selection: SourceSelectionUpdate, service: BoardServiceDep
) -> APIResponse[list[SourceResponse]]:
    """Select or deselect a source for the next sync."""
    service.set_source_selected(source_id, selection.selected)
    return APIResponse(data=_sources(service))
