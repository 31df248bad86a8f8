"""Repository for issued certificates."""

from collections.abc import Sequence
from typing import Protocol

from schemas import Certificate


class CertificateStore(Protocol):
    """Append-only store of issued certificates."""

    def list(self) -> Sequence[Certificate]: ...

    def append(self, certificate: Certificate) -> None: ...

    def get(self, certificate_id: str) -> Certificate | None: ...


class InMemoryCertificateRepository:
    """Process-lifetime certificate store. Contents are lost on restart.

    Not synchronized: the API runs on a single event loop and appends
    happen after validation, with no await in between.
    """

    def __init__(self) -> None:
        self._certificates: list[Certificate] = []

    def list(self) -> Sequence[Certificate]:
        """All certificates in issuance order."""
        return tuple(self._certificates)

    def append(self, certificate: Certificate) -> None:
        self._certificates.append(certificate)

    def get(self, certificate_id: str) -> Certificate | None:
        return next(
            (c for c in self._certificates if c.id == certificate_id), None
        )

    def __len__(self) -> int:
        return len(self._certificates)
