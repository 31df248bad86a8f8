"""Certificate business logic.

This module handles certificate business logic:
- Request validation against the base fields and the template schema
- Badge and signatory resolution against the catalog
- Issuance/expiry date defaulting
- Certificate and preview assembly
- Image generation (delegating to rendering module)

Routes should delegate all certificate business logic to this module.
"""

import asyncio
import logging
import uuid
from collections.abc import Mapping, Sequence
from datetime import UTC, date, datetime
from pathlib import Path
from typing import Any

from core.config import Settings
from rendering.certificates import (
    generate_certificate_svg,
    image_to_data_uri,
    render_preview_html,
)
from rendering.certificates import (
    svg_to_png as _svg_to_png,
)
from repositories.catalog_repository import (
    BADGE_FIELD,
    EXPIRY_FIELD,
    ISSUANCE_FIELD,
    SIGNATORIES_FIELD,
    CatalogRepository,
)
from repositories.certificate_repository import CertificateStore
from schemas import (
    Certificate,
    CertificateContent,
    Preview,
    SignatorySummary,
    Template,
    TemplateSchema,
)
from services.validation_service import (
    BASE_REQUIRED_FIELDS,
    is_missing,
    is_valid_email,
    validate_fields,
)

logger = logging.getLogger(__name__)


class CertificateError(Exception):
    """Base error for certificate requests; carries the HTTP status to report."""

    status_code: int = 400

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class CertificateValidationError(CertificateError):
    """Raised when a request is missing a field or references an unknown id."""

    status_code = 400


class CertificateNotFoundError(CertificateError):
    """Raised when a certificate id is not in the store."""

    status_code = 404

    def __init__(self, certificate_id: str) -> None:
        super().__init__("Certificate not found")
        self.certificate_id = certificate_id


class CertificateImageError(CertificateError):
    """Raised when the certificate image can't be rendered or written."""

    status_code = 500

    def __init__(self) -> None:
        super().__init__("Failed to generate certificate image")


# =============================================================================
# Dates
# =============================================================================


def _utc_now() -> datetime:
    return datetime.now(UTC)


def _format_timestamp(value: datetime) -> str:
    """ISO-8601 UTC timestamp with millisecond precision, e.g. 2025-01-15T10:30:00.000Z."""
    return value.astimezone(UTC).isoformat(timespec="milliseconds").replace(
        "+00:00", "Z"
    )


def _parse_iso_date(value: str) -> date | None:
    try:
        return date.fromisoformat(value)
    except ValueError:
        return None


def one_year_after(start: date) -> date:
    """Same month/day in the following year; Feb 29 rolls over to Mar 1."""
    try:
        return start.replace(year=start.year + 1)
    except ValueError:
        return date(start.year + 1, 3, 1)


def default_expiry_date(issuance_date: Any, today: date) -> str:
    """Expiry one calendar year after issuance.

    Falls back to one year after ``today`` when ``issuance_date`` is not
    an ISO calendar date string; dates are otherwise stored as submitted.
    """
    base = (
        _parse_iso_date(issuance_date) if isinstance(issuance_date, str) else None
    ) or today
    return one_year_after(base).isoformat()


# =============================================================================
# Assembly
# =============================================================================


def _resolve_template(
    body: Mapping[str, Any], catalog: CatalogRepository
) -> tuple[Template, TemplateSchema]:
    missing = validate_fields(body, BASE_REQUIRED_FIELDS)
    if missing:
        raise CertificateValidationError(f"Missing required field: {missing}")

    template = catalog.get_template(body["templateId"])
    if not template:
        raise CertificateValidationError("Invalid template ID")

    return template, catalog.get_template_schema(template.id)


def _resolve_signatories(
    body: Mapping[str, Any], catalog: CatalogRepository
) -> list[SignatorySummary]:
    signatory_ids = body.get(SIGNATORIES_FIELD)
    if not isinstance(signatory_ids, list) or not signatory_ids:
        raise CertificateValidationError("signatoryIds must be a non-empty array")

    # Unknown ids are dropped; only an entirely unresolvable list is rejected
    resolved: list[SignatorySummary] = []
    for signatory_id in signatory_ids:
        signatory = catalog.get_signatory(signatory_id)
        if signatory:
            resolved.append(
                SignatorySummary(
                    id=signatory.id, name=signatory.name, title=signatory.title
                )
            )

    if not resolved:
        raise CertificateValidationError("Invalid signatory IDs provided")

    dropped = len(signatory_ids) - len(resolved)
    if dropped:
        logger.info(
            "certificate.signatories.dropped",
            extra={"dropped": dropped, "resolved": len(resolved)},
        )
    return resolved


def assemble_certificate_content(
    body: Mapping[str, Any],
    catalog: CatalogRepository,
    *,
    today: date,
    default_expiry: bool = True,
) -> CertificateContent:
    """Validate a request and merge it with catalog data and date defaults.

    Submitted values are kept as sent; dates are not parsed or reformatted.

    Args:
        body: Request JSON object
        catalog: Catalog to resolve template, badge and signatories against
        today: Current calendar date, used for date defaults
        default_expiry: Fill a missing, not required expiryDate with one year
            after issuance. When False it stays None.

    Returns:
        The certificate fields shared by issued certificates and previews

    Raises:
        CertificateValidationError: On the first missing field or invalid id
    """
    template, schema = _resolve_template(body, catalog)

    missing = validate_fields(body, schema.required_fields)
    if missing:
        raise CertificateValidationError(f"Missing required attribute: {missing}")

    badge = None
    if schema.requires_badge:
        badge = catalog.get_badge(body[BADGE_FIELD])
        if not badge:
            raise CertificateValidationError("Invalid badge ID")

    signatories: list[SignatorySummary] = []
    if schema.requires_signatories:
        signatories = _resolve_signatories(body, catalog)

    if not is_valid_email(body["email"]):
        raise CertificateValidationError("Invalid email format")

    issuance_date = body.get(ISSUANCE_FIELD)
    if is_missing(issuance_date):
        issuance_date = today.isoformat()

    expiry_date = body.get(EXPIRY_FIELD)
    if is_missing(expiry_date):
        if schema.requires_expiry:
            raise CertificateValidationError(
                f"Missing required attribute: {EXPIRY_FIELD}"
            )
        expiry_date = (
            default_expiry_date(issuance_date, today) if default_expiry else None
        )

    raw_badge_id = body.get(BADGE_FIELD)

    return CertificateContent(
        name=body["name"],
        email=body["email"],
        template_id=template.id,
        template_name=template.name,
        badge_id=None if is_missing(raw_badge_id) else raw_badge_id,
        badge_name=badge.name if badge else None,
        signatories=signatories,
        issuance_date=issuance_date,
        expiry_date=expiry_date,
        custom_attributes={
            name: body[name] for name in schema.custom_field_names
        },
    )


def build_certificate(
    body: Mapping[str, Any],
    catalog: CatalogRepository,
    *,
    now: datetime | None = None,
) -> Certificate:
    """Assemble a new, not yet stored certificate from a request body."""
    now = now or _utc_now()
    content = assemble_certificate_content(body, catalog, today=now.date())
    return Certificate(
        **content.model_dump(),
        id=str(uuid.uuid4()),
        status="active",
        created_at=_format_timestamp(now),
    )


def build_preview(
    body: Mapping[str, Any],
    catalog: CatalogRepository,
    *,
    now: datetime | None = None,
) -> Preview:
    """Assemble a preview with its rendered HTML. Previews are never stored.

    Unlike issuance, a missing expiryDate is not defaulted, so the preview
    shows an expiry line only when the client sent one.
    """
    now = now or _utc_now()
    content = assemble_certificate_content(
        body, catalog, today=now.date(), default_expiry=False
    )
    return Preview(
        **content.model_dump(),
        preview_id=str(uuid.uuid4()),
        preview_date=_format_timestamp(now),
        preview_html=render_preview_html(content),
    )


def create_certificate(
    body: Mapping[str, Any],
    catalog: CatalogRepository,
    store: CertificateStore,
    *,
    now: datetime | None = None,
) -> Certificate:
    """Validate, assemble and store a certificate.

    Validation completes before the store is touched, so a rejected
    request leaves the store unchanged.
    """
    certificate = build_certificate(body, catalog, now=now)
    store.append(certificate)
    logger.info(
        "certificate.created",
        extra={
            "certificate_id": certificate.id,
            "template_id": certificate.template_id,
        },
    )
    return certificate


# =============================================================================
# Reads
# =============================================================================


def list_certificates(store: CertificateStore) -> Sequence[Certificate]:
    return store.list()


def get_certificate(store: CertificateStore, certificate_id: str) -> Certificate:
    certificate = store.get(certificate_id)
    if not certificate:
        raise CertificateNotFoundError(certificate_id)
    return certificate


# =============================================================================
# Image output
# =============================================================================


def _background_path(template: Template, images_dir: Path) -> Path:
    if not template.image:
        raise FileNotFoundError(f"Template {template.id} has no background image")
    return images_dir / Path(template.image).name


def _write_output_image(output_path: Path, png_content: bytes) -> None:
    """Replace the output image with new content."""
    output_path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = output_path.with_name(output_path.name + ".tmp")
    tmp_path.write_bytes(png_content)
    tmp_path.replace(output_path)


async def generate_certificate_image(
    certificate: Certificate,
    template: Template,
    settings: Settings,
) -> Path:
    """Render the certificate over its template background and write the PNG.

    Runs rasterization and the file write in a thread pool to avoid
    blocking the async event loop since CairoSVG rendering is CPU-bound.
    Every call overwrites the same output file.

    Returns:
        Path of the written PNG

    Raises:
        CertificateImageError: If the background can't be read or decoded,
            or the PNG can't be rendered or written
    """
    output_path = settings.output_image_path
    loop = asyncio.get_running_loop()
    try:
        background = image_to_data_uri(
            _background_path(template, settings.images_dir_path)
        )
        svg_content = generate_certificate_svg(
            certificate,
            background,
            width=settings.image_width,
            height=settings.image_height,
        )
        png_content = await loop.run_in_executor(None, _svg_to_png, svg_content)
        await loop.run_in_executor(
            None, _write_output_image, output_path, png_content
        )
    except Exception as e:
        logger.exception(
            "certificate.image.failed",
            extra={
                "certificate_id": certificate.id,
                "template_id": template.id,
                "exc_type": type(e).__name__,
            },
        )
        raise CertificateImageError() from e

    logger.info(
        "certificate.image.written",
        extra={"certificate_id": certificate.id, "output_path": str(output_path)},
    )
    return output_path


async def issue_certificate_image(
    body: Mapping[str, Any],
    catalog: CatalogRepository,
    store: CertificateStore,
    settings: Settings,
    *,
    now: datetime | None = None,
) -> Certificate:
    """Validate, render and store a certificate in image output mode.

    The certificate is stored only after its image has been written.
    """
    certificate = build_certificate(body, catalog, now=now)
    template = catalog.get_template(certificate.template_id)
    if template is None:
        raise CertificateValidationError("Invalid template ID")

    await generate_certificate_image(certificate, template, settings)

    store.append(certificate)
    logger.info(
        "certificate.created",
        extra={
            "certificate_id": certificate.id,
            "template_id": certificate.template_id,
            "output": "image",
        },
    )
    return certificate
