"""Pydantic schemas for catalog entries, certificates and API envelopes.

Attributes are snake_case in Python and camelCase on the wire
(``required_fields`` <-> ``requiredFields``). FastAPI serializes
response models by alias, so routes can return these models directly.
"""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model with camelCase aliases, accepting either spelling on input."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# =============================================================================
# Catalog
# =============================================================================


class Template(CamelModel):
    """A certificate type definition.

    ``required_fields`` drives per-template validation and decides which
    submitted fields become custom attributes on the certificate.
    """

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, frozen=True
    )

    id: str
    name: str
    description: str
    image: str | None = None
    required_fields: tuple[str, ...] = ()


class CustomField(BaseModel):
    """A template-declared field outside the fixed certificate schema."""

    model_config = ConfigDict(frozen=True)

    name: str
    kind: Literal["text"] = "text"


class TemplateSchema(BaseModel):
    """Validation schema for a template, resolved once at registration.

    NOTE: Not part of the API surface. ``Template.required_fields`` stays
    the wire contract; this is the pre-computed view the assembler uses.
    """

    model_config = ConfigDict(frozen=True)

    template_id: str
    required_fields: tuple[str, ...]
    requires_badge: bool
    requires_signatories: bool
    requires_expiry: bool
    requires_issuance: bool
    custom_fields: tuple[CustomField, ...]

    @property
    def custom_field_names(self) -> tuple[str, ...]:
        return tuple(f.name for f in self.custom_fields)


class Badge(CamelModel):
    """An achievement tier attachable to a certificate."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, frozen=True
    )

    id: str
    name: str
    description: str
    image: str | None = None


class Signatory(CamelModel):
    """A named authority whose name/title may appear on a certificate."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, frozen=True
    )

    id: str
    name: str
    title: str
    signature: str


class SignatorySummary(CamelModel):
    """Signatory as embedded in certificates (no signature)."""

    id: str
    name: str
    title: str


# =============================================================================
# Certificates
# =============================================================================


class CertificateContent(CamelModel):
    """Fields shared by issued certificates and previews.

    Submitted values (name, badge id, dates, custom attributes) are kept
    as the JSON the client sent; only catalog-derived fields are typed.
    """

    name: Any
    email: str
    template_id: str
    template_name: str
    badge_id: Any = None
    badge_name: str | None = None
    signatories: list[SignatorySummary] = Field(default_factory=list)
    issuance_date: Any
    expiry_date: Any = None
    custom_attributes: dict[str, Any] = Field(default_factory=dict)


class Certificate(CertificateContent):
    """An issued certificate. Never mutated once stored."""

    id: str
    status: str = "active"
    created_at: str


class Preview(CertificateContent):
    """An ephemeral, never-stored rendering of a would-be certificate."""

    preview_id: str
    preview_date: str
    preview_html: str


# =============================================================================
# Response envelopes
# =============================================================================


class TemplateListResponse(CamelModel):
    success: bool = True
    data: list[Template]


class BadgeListResponse(CamelModel):
    success: bool = True
    data: list[Badge]


class SignatoryListResponse(CamelModel):
    success: bool = True
    data: list[Signatory]


class CertificateResponse(CamelModel):
    """Response containing an issued certificate."""

    success: bool = True
    data: Certificate


class CertificateListResponse(CamelModel):
    success: bool = True
    data: list[Certificate]


class CertificateImageResponse(CamelModel):
    """Response after the certificate image has been written to disk."""

    success: bool = True
    message: str = "Certificate generated successfully"
    image_path: str
    certificate_id: str


class PreviewResponse(CamelModel):
    success: bool = True
    data: Preview


class ErrorResponse(CamelModel):
    """Body for every 4xx/5xx produced by this API."""

    success: bool = False
    message: str


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    service: str
