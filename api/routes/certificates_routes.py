"""Certificate issuance, preview and lookup endpoints.

Route ordering note: Literal path segments (/preview) are defined before
parameterized segments (/{certificate_id}) to prevent routing conflicts.

The request body is an open JSON object: besides name/email/templateId it
carries whatever custom fields the chosen template requires, so it is
validated against the template in the service layer rather than by a
fixed pydantic model.
"""

from typing import Annotated, Any

from fastapi import APIRouter, Body, Response

from core.dependencies import AppSettings, Catalog, Certificates
from schemas import (
    CertificateImageResponse,
    CertificateListResponse,
    CertificateResponse,
    ErrorResponse,
    PreviewResponse,
)
from services.certificates_service import (
    build_preview,
    create_certificate,
    get_certificate,
    issue_certificate_image,
    list_certificates,
)

router = APIRouter(prefix="/api/certificates", tags=["certificates"])

_EXAMPLE_BODY = {
    "name": "Ada Lovelace",
    "email": "ada@example.com",
    "templateId": "temp-001",
    "badgeId": "badge-001",
    "signatoryIds": ["sig-001", "sig-002"],
    "issuanceDate": "2025-01-15",
    "expiryDate": "2027-01-15",
    "certificateNumber": "CERT-0001",
    "recipientName": "Ada Lovelace",
}

CertificateBody = Annotated[
    dict[str, Any],
    Body(openapi_examples={"professional": {"value": _EXAMPLE_BODY}}),
]


# --- Collection endpoints ---


@router.post(
    "",
    response_model=CertificateResponse | CertificateImageResponse,
    status_code=201,
    responses={
        200: {
            "model": CertificateImageResponse,
            "description": "Image output mode: certificate image written",
        },
        400: {"model": ErrorResponse, "description": "Validation failed"},
        500: {"model": ErrorResponse, "description": "Image generation failed"},
    },
)
async def create_certificate_endpoint(
    body: CertificateBody,
    response: Response,
    catalog: Catalog,
    store: Certificates,
    settings: AppSettings,
) -> CertificateResponse | CertificateImageResponse:
    """Issue a certificate.

    In record output mode (default) returns the certificate with 201.
    In image output mode renders it to the fixed output image and returns
    the image location with 200 once the file has been written.
    """
    if settings.certificate_output == "image":
        certificate = await issue_certificate_image(body, catalog, store, settings)
        response.status_code = 200
        return CertificateImageResponse(
            image_path=settings.output_image_url,
            certificate_id=certificate.id,
        )

    certificate = create_certificate(body, catalog, store)
    return CertificateResponse(data=certificate)


@router.get("", response_model=CertificateListResponse)
async def list_certificates_endpoint(store: Certificates) -> CertificateListResponse:
    """List certificates issued since the process started, oldest first."""
    return CertificateListResponse(data=list(list_certificates(store)))


# --- Literal path routes (before parameterized) ---


@router.post(
    "/preview",
    response_model=PreviewResponse,
    responses={400: {"model": ErrorResponse, "description": "Validation failed"}},
)
async def preview_certificate_endpoint(
    body: CertificateBody,
    catalog: Catalog,
) -> PreviewResponse:
    """Render a certificate preview as HTML without storing anything."""
    return PreviewResponse(data=build_preview(body, catalog))


# --- Parameterized routes ---


@router.get(
    "/{certificate_id}",
    response_model=CertificateResponse,
    responses={404: {"model": ErrorResponse, "description": "Certificate not found"}},
)
async def get_certificate_endpoint(
    certificate_id: str,
    store: Certificates,
) -> CertificateResponse:
    """Get an issued certificate by id."""
    return CertificateResponse(data=get_certificate(store, certificate_id))
