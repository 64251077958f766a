"""Organization API endpoints."""
from fastapi import APIRouter, Depends, Response, status

from registry_api.api.deps import get_organization_service
from registry_api.schemas.errors import ErrorResponse
from registry_api.schemas.organization import OrganizationRequest, OrganizationResponse
from registry_api.services.org_service import OrganizationService

router = APIRouter()

_NOT_FOUND = {status.HTTP_404_NOT_FOUND: {"model": ErrorResponse}}


@router.post(
    "",
    response_model=OrganizationResponse,
    status_code=status.HTTP_200_OK,
    summary="Create organization",
)
async def create_organization(
    request: OrganizationRequest,
    service: OrganizationService = Depends(get_organization_service),
) -> OrganizationResponse:
    """Create an organization.

    Args:
        request: Organization attributes
        service: Organization service

    Returns:
        Created organization, including its generated id
    """
    organization = await service.create(request)
    return OrganizationResponse.model_validate(organization)


@router.get("", response_model=list[OrganizationResponse], summary="List organizations")
async def list_organizations(
    service: OrganizationService = Depends(get_organization_service),
) -> list[OrganizationResponse]:
    """List every organization."""
    organizations = await service.list_organizations()
    return [OrganizationResponse.model_validate(org) for org in organizations]


@router.get(
    "/{org_id}",
    response_model=OrganizationResponse,
    responses=_NOT_FOUND,
    summary="Get organization details",
)
async def get_organization(
    org_id: int,
    service: OrganizationService = Depends(get_organization_service),
) -> OrganizationResponse:
    """Get organization by ID.

    Raises:
        HTTPException: 404 if organization not found
    """
    organization = await service.get_by_id(org_id)
    return OrganizationResponse.model_validate(organization)


@router.put(
    "/{org_id}",
    response_model=OrganizationResponse,
    responses=_NOT_FOUND,
    summary="Replace organization",
    description="Full replace: every attribute is overwritten, omitted optional fields become null.",
)
async def update_organization(
    org_id: int,
    request: OrganizationRequest,
    service: OrganizationService = Depends(get_organization_service),
) -> OrganizationResponse:
    """Replace organization details.

    Raises:
        HTTPException: 404 if organization not found
    """
    organization = await service.update(org_id, request)
    return OrganizationResponse.model_validate(organization)


@router.delete(
    "/{org_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Delete organization",
)
async def delete_organization(
    org_id: int,
    service: OrganizationService = Depends(get_organization_service),
) -> Response:
    """Delete an organization; 204 whether or not it existed."""
    await service.delete(org_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
