"""Catalog endpoints: templates, badges and signatories."""

from fastapi import APIRouter

from core.dependencies import Catalog
from schemas import BadgeListResponse, SignatoryListResponse, TemplateListResponse

router = APIRouter(prefix="/api", tags=["catalog"])


@router.get("/templates", response_model=TemplateListResponse)
async def list_templates(catalog: Catalog) -> TemplateListResponse:
    """List certificate templates with their required fields."""
    return TemplateListResponse(data=list(catalog.list_templates()))


@router.get("/badges", response_model=BadgeListResponse)
async def list_badges(catalog: Catalog) -> BadgeListResponse:
    """List badges that can be attached to certificates."""
    return BadgeListResponse(data=list(catalog.list_badges()))


@router.get("/signatories", response_model=SignatoryListResponse)
async def list_signatories(catalog: Catalog) -> SignatoryListResponse:
    """List signatories available for certificates."""
    return SignatoryListResponse(data=list(catalog.list_signatories()))
