"""Pytest configuration and shared fixtures.

This module provides:
- Fresh catalog and certificate store instances per test
- FastAPI app wired to those instances via ``app.state``
- Async HTTP client for route integration tests
- Valid request bodies for each seeded template
"""

from collections.abc import AsyncGenerator, Callable, Generator
from pathlib import Path
from typing import Any

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from core.config import Settings, clear_settings_cache, get_settings
from repositories.catalog_repository import CatalogRepository
from repositories.certificate_repository import InMemoryCertificateRepository
from services.catalog_service import build_default_catalog

# 1x1 transparent PNG, used as a template background in image tests
PNG_PIXEL = bytes.fromhex(
    "89504e470d0a1a0a0000000d49484452000000010000000108060000001f15c489"
    "0000000d4944415478da636460f85f0f0002870180eb47ba920000000049454e44"
    "ae426082"
)


# =============================================================================
# Store Fixtures
# =============================================================================


@pytest.fixture
def catalog() -> CatalogRepository:
    """Catalog seeded with the default templates, badges and signatories."""
    return build_default_catalog()


@pytest.fixture
def certificate_store() -> InMemoryCertificateRepository:
    """Empty certificate store, isolated per test."""
    return InMemoryCertificateRepository()


# =============================================================================
# Request Bodies
# =============================================================================


@pytest.fixture
def valid_bodies() -> dict[str, dict[str, Any]]:
    """A request body per seeded template that passes all validation."""
    return {
        "temp-001": {
            "name": "Ada Lovelace",
            "email": "ada@example.com",
            "templateId": "temp-001",
            "badgeId": "badge-001",
            "signatoryIds": ["sig-001", "sig-002"],
            "issuanceDate": "2025-01-15",
            "expiryDate": "2027-01-15",
            "certificateNumber": "CERT-0001",
            "recipientName": "Ada Lovelace",
        },
        "temp-002": {
            "name": "Alan Turing",
            "email": "alan@example.com",
            "templateId": "temp-002",
            "issuanceDate": "2025-02-01",
            "expiryDate": "2026-02-01",
            "certificateNumber": "CERT-0002",
            "recipientName": "Alan Turing",
        },
        "temp-003": {
            "name": "Grace Hopper",
            "email": "grace@example.com",
            "templateId": "temp-003",
            "badgeId": "badge-002",
            "issuanceDate": "2024-03-10",
            "certificateNumber": "CERT-0003",
            "recipientName": "Grace Hopper",
        },
    }


# =============================================================================
# Settings Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_settings_cache() -> Generator[None]:
    """Reset settings cache before each test."""
    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def assets_dir(tmp_path: Path) -> Path:
    """Assets directory with a background image for every seeded template."""
    images = tmp_path / "images"
    images.mkdir()
    for template_id in ("temp-001", "temp-002", "temp-003"):
        (images / f"{template_id}.png").write_bytes(PNG_PIXEL)
    (tmp_path / "issued").mkdir()
    return tmp_path


@pytest.fixture
def image_settings(assets_dir: Path) -> Settings:
    """Settings for image output mode rooted at a temporary assets dir."""
    return Settings(certificate_output="image", assets_dir=str(assets_dir))


# =============================================================================
# FastAPI Test Client Fixtures
# =============================================================================


@pytest_asyncio.fixture
async def app(
    catalog: CatalogRepository,
    certificate_store: InMemoryCertificateRepository,
) -> AsyncGenerator[FastAPI]:
    """FastAPI app wired to the per-test catalog and certificate store."""
    from main import app as fastapi_app

    fastapi_app.state.catalog = catalog
    fastapi_app.state.certificates = certificate_store

    yield fastapi_app

    fastapi_app.dependency_overrides.clear()


@pytest.fixture
def override_settings(app: FastAPI) -> Callable[[Settings], None]:
    """Make routes see the given settings instead of the environment's."""

    def _override(settings: Settings) -> None:
        app.dependency_overrides[get_settings] = lambda: settings

    return _override


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client for testing routes."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac
