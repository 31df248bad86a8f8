"""Seeded catalog of templates, badges and signatories.

The catalog is static: it is built once at startup and never changes
while the process runs. Listing endpoints return it in seed order.
"""

from repositories.catalog_repository import CatalogRepository
from schemas import Badge, Signatory, Template

DEFAULT_TEMPLATES: tuple[Template, ...] = (
    Template(
        id="temp-001",
        name="Professional Certification",
        description="Standard certification for professional achievements",
        image="/images/temp-001.png",
        required_fields=(
            "badgeId",
            "expiryDate",
            "signatoryIds",
            "issuanceDate",
            "certificateNumber",
            "recipientName",
        ),
    ),
    Template(
        id="temp-002",
        name="Course Completion",
        description="Certification for completing a specific course",
        image="/images/temp-002.png",
        # No badge or signatories; only dates and custom attributes
        required_fields=(
            "issuanceDate",
            "expiryDate",
            "certificateNumber",
            "recipientName",
        ),
    ),
    Template(
        id="temp-003",
        name="Award of Excellence",
        description="Special recognition for outstanding performance",
        image="/images/temp-003.png",
        # Badge required; expiry defaults to one year out
        required_fields=(
            "badgeId",
            "issuanceDate",
            "certificateNumber",
            "recipientName",
        ),
    ),
)

DEFAULT_BADGES: tuple[Badge, ...] = (
    Badge(
        id="badge-001",
        name="Gold",
        description="Top tier achievement",
        image="/images/badge-001.png",
    ),
    Badge(
        id="badge-002",
        name="Silver",
        description="High level of proficiency",
        image="/images/badge-002.png",
    ),
    Badge(
        id="badge-003",
        name="Bronze",
        description="Standard level of competence",
        image="/images/badge-003.png",
    ),
)

DEFAULT_SIGNATORIES: tuple[Signatory, ...] = (
    Signatory(
        id="sig-001",
        name="Dr. Jane Smith",
        title="Program Director",
        signature="JSmith2025",
    ),
    Signatory(
        id="sig-002",
        name="Prof. Robert Johnson",
        title="Department Chair",
        signature="RJohnson",
    ),
    Signatory(
        id="sig-003",
        name="Alex Williams",
        title="CEO",
        signature="AWilliams",
    ),
)


def build_default_catalog() -> CatalogRepository:
    """Create a catalog seeded with the default templates, badges and signatories."""
    return CatalogRepository(
        templates=DEFAULT_TEMPLATES,
        badges=DEFAULT_BADGES,
        signatories=DEFAULT_SIGNATORIES,
    )
