"""Application configuration using pydantic-settings."""

from functools import cached_property, lru_cache
from pathlib import Path
from typing import Literal, Self

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    service_name: str = "certificate-api"

    # Comma-separated list of allowed CORS origins (in addition to localhost defaults)
    # Example: "https://app.example.com,https://staging.example.com"
    cors_allowed_origins: str = ""

    # "record" returns the certificate JSON (201).
    # "image" renders a PNG to the fixed output path and returns its location (200).
    certificate_output: Literal["record", "image"] = "record"

    # Root for static assets; holds images/ (backgrounds) and issued/ (output)
    # Defaults to api/static
    assets_dir: str = ""
    output_image_name: str = "newCertificate.png"

    image_width: int = Field(default=1200, gt=0)
    image_height: int = Field(default=850, gt=0)

    # Feature flags
    debug: bool = False  # Enables docs and CORS localhost
    enable_docs: bool = False  # Swagger UI at /docs

    @model_validator(mode="after")
    def validate_config(self) -> Self:
        if "/" in self.output_image_name or "\\" in self.output_image_name:
            raise ValueError(
                "OUTPUT_IMAGE_NAME must be a bare file name, not a path."
            )
        if not self.output_image_name.lower().endswith(".png"):
            raise ValueError("OUTPUT_IMAGE_NAME must end with .png")
        return self

    @cached_property
    def assets_dir_path(self) -> Path:
        """Defaults to api/static if ASSETS_DIR not set."""
        if self.assets_dir:
            return Path(self.assets_dir)
        return Path(__file__).resolve().parent.parent / "static"

    @cached_property
    def images_dir_path(self) -> Path:
        """Template and badge images, served under /images."""
        return self.assets_dir_path / "images"

    @cached_property
    def issued_dir_path(self) -> Path:
        """Generated certificate image, served under /issued."""
        return self.assets_dir_path / "issued"

    @property
    def output_image_path(self) -> Path:
        return self.issued_dir_path / self.output_image_name

    @property
    def output_image_url(self) -> str:
        """Relative path reported to clients after image generation."""
        return f"issued/{self.output_image_name}"

    @cached_property
    def allowed_origins(self) -> list[str]:
        """Combines localhost (dev only) and cors_allowed_origins."""
        origins: list[str] = []

        if self.debug:
            origins.extend(
                [
                    "http://localhost:3000",
                    "http://localhost:5173",
                ]
            )

        if self.cors_allowed_origins:
            for origin in self.cors_allowed_origins.split(","):
                origin = origin.strip()
                if origin and origin not in origins:
                    origins.append(origin)

        return origins


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


def clear_settings_cache() -> None:
    """Clear the settings cache.

    Call this in tests to reset settings between test cases.
    After clearing, the next get_settings() call will create
    a fresh Settings instance with current environment variables.

    Example:
        def test_something(monkeypatch):
            monkeypatch.setenv("CERTIFICATE_OUTPUT", "image")
            clear_settings_cache()
            settings = get_settings()  # Fresh instance
    """
    get_settings.cache_clear()
