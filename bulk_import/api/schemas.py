"""Request schemas for import API endpoints."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from bulk_import.mapping import ImportFieldMapping


class ImportFieldMappingRequest(BaseModel):
    """Caller mapping entry for one canonical field."""

    primary_column: str | None = None
    alternative_names: list[str] = Field(default_factory=list)
    required: bool = False
    display_name: str | None = None

    def api_to_field_mapping(self, field_name: str) -> ImportFieldMapping:
        """Convert the request entry into a mapping-layer contract.

        Args:
            field_name: Canonical field name the entry is keyed by.

        Returns:
            ImportFieldMapping: Mapping contract; blank display names fall back to catalogue labels.

        Raises:
            RuntimeError: This method does not raise runtime errors.
        """

        return ImportFieldMapping(
            field_name=field_name,
            display_name=self.display_name or "",
            primary_column=self.primary_column,
            alternative_names=tuple(name for name in self.alternative_names if name.strip()),
            required=self.required,
        )


class ImportRunRequest(BaseModel):
    """Body of one import request: pre-parsed rows plus the caller mapping."""

    owner_id: str
    rows: list[dict[str, str | None]]
    mapping: dict[str, ImportFieldMappingRequest] = Field(default_factory=dict)
    headers: list[str] | None = None

    @field_validator("owner_id")
    @classmethod
    def _validate_owner_id(cls, value: str) -> str:
        normalized_value = value.strip()
        if not normalized_value:
            raise ValueError("owner_id must not be blank")
        return normalized_value

    def api_field_mappings(self) -> dict[str, ImportFieldMapping]:
        """Return mapping contracts keyed by canonical field name."""

        return {
            field_name: field_request.api_to_field_mapping(field_name)
            for field_name, field_request in self.mapping.items()
        }
