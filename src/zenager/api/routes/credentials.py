"""Credential endpoints."""

from fastapi import APIRouter

from zenager.api.dependencies import BoardServiceDep
from zenager.api.models import APIResponse, CredentialsStatusResponse, CredentialsUpdate

router = APIRouter(prefix="/credentials", tags=["credentials"])


@router.put("", response_model=APIResponse[CredentialsStatusResponse])
def update_credentials(
    credentials: CredentialsUpdate, service: BoardServiceDep
) -> APIResponse[CredentialsStatusResponse]:
    """Set API keys. The response only says which keys are configured."""
    service.set_credentials(
        github_api_key=credentials.github_api_key,
        gitlab_api_key=credentials.gitlab_api_key,
    )
    return APIResponse(
        data=CredentialsStatusResponse(
            github_configured=bool(service.credentials.github_api_key),
            gitlab_configured=bool(service.credentials.gitlab_api_key),
        )
    )
