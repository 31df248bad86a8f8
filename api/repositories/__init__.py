"""Repository layer for catalog and certificate storage.

Repositories encapsulate all data access, keeping routes thin and focused
on HTTP handling. Both stores are in-memory; they are created at startup,
attached to ``app.state`` and injected into routes, so tests can supply
isolated instances.
"""

from repositories.catalog_repository import (
    RESERVED_TEMPLATE_FIELDS,
    CatalogRepository,
    resolve_template_schema,
)
from repositories.certificate_repository import (
    CertificateStore,
    InMemoryCertificateRepository,
)

__all__ = [
    "CatalogRepository",
    "CertificateStore",
    "InMemoryCertificateRepository",
    "RESERVED_TEMPLATE_FIELDS",
    "resolve_template_schema",
]
