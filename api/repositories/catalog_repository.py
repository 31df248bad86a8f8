"""Repository for the read-only catalog (templates, badges, signatories)."""

from collections.abc import Iterable, Sequence

from schemas import Badge, CustomField, Signatory, Template, TemplateSchema

# Fields with fixed meaning on every certificate; never echoed as custom attributes
BADGE_FIELD = "badgeId"
EXPIRY_FIELD = "expiryDate"
SIGNATORIES_FIELD = "signatoryIds"
ISSUANCE_FIELD = "issuanceDate"
RESERVED_TEMPLATE_FIELDS = frozenset(
    {BADGE_FIELD, EXPIRY_FIELD, SIGNATORIES_FIELD, ISSUANCE_FIELD}
)


def resolve_template_schema(template: Template) -> TemplateSchema:
    """Derive the validation schema for a template from its required fields."""
    required = template.required_fields
    return TemplateSchema(
        template_id=template.id,
        required_fields=required,
        requires_badge=BADGE_FIELD in required,
        requires_signatories=SIGNATORIES_FIELD in required,
        requires_expiry=EXPIRY_FIELD in required,
        requires_issuance=ISSUANCE_FIELD in required,
        custom_fields=tuple(
            CustomField(name=field)
            for field in required
            if field not in RESERVED_TEMPLATE_FIELDS
        ),
    )


class CatalogRepository:
    """In-memory catalog, seeded once and read-only afterwards.

    Lookups are linear scans over the seeded lists; catalog order is
    preserved for listing endpoints.
    """

    def __init__(
        self,
        templates: Iterable[Template] = (),
        badges: Iterable[Badge] = (),
        signatories: Iterable[Signatory] = (),
    ) -> None:
        self._templates: list[Template] = []
        self._schemas: dict[str, TemplateSchema] = {}
        for template in templates:
            self._register_template(template)
        self._badges: list[Badge] = list(badges)
        self._signatories: list[Signatory] = list(signatories)

    def _register_template(self, template: Template) -> None:
        if template.id in self._schemas:
            raise ValueError(f"Duplicate template id: {template.id}")
        self._templates.append(template)
        self._schemas[template.id] = resolve_template_schema(template)

    def list_templates(self) -> Sequence[Template]:
        return tuple(self._templates)

    def list_badges(self) -> Sequence[Badge]:
        return tuple(self._badges)

    def list_signatories(self) -> Sequence[Signatory]:
        return tuple(self._signatories)

    def get_template(self, template_id: object) -> Template | None:
        return next((t for t in self._templates if t.id == template_id), None)

    def get_template_schema(self, template_id: str) -> TemplateSchema:
        """Schema for a registered template.

        Raises:
            KeyError: If the template was never registered.
        """
        return self._schemas[template_id]

    def get_badge(self, badge_id: object) -> Badge | None:
        return next((b for b in self._badges if b.id == badge_id), None)

    def get_signatory(self, signatory_id: object) -> Signatory | None:
        return next((s for s in self._signatories if s.id == signatory_id), None)
