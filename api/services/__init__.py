"""Service layer for business logic.

Services encapsulate all business logic, keeping routes thin and focused
on HTTP handling. This separation provides:
- Certificate validation rules in one place
- Catalog seeding independent of the web app
- Reusable assembly for both issuance and preview

Layer hierarchy:
    Routes (HTTP) -> Services (Business Logic) -> Repositories (In-memory stores)

Services should:
- Raise CertificateError subclasses for request problems
- Read the catalog and write the certificate store through repositories
- Not format HTTP responses (routes wrap results in envelopes)
"""
