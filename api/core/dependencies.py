"""FastAPI dependencies for the in-memory stores and settings.

The stores are created in the app lifespan and kept on ``app.state``;
tests replace them with fresh instances per test.
"""

from typing import Annotated

from fastapi import Depends, Request

from core.config import Settings, get_settings
from repositories.catalog_repository import CatalogRepository
from repositories.certificate_repository import CertificateStore


def get_catalog(request: Request) -> CatalogRepository:
    return request.app.state.catalog


def get_certificate_store(request: Request) -> CertificateStore:
    return request.app.state.certificates


Catalog = Annotated[CatalogRepository, Depends(get_catalog)]
Certificates = Annotated[CertificateStore, Depends(get_certificate_store)]
AppSettings = Annotated[Settings, Depends(get_settings)]
