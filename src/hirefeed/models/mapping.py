"""Provider mapping models: declarative source→target projection per output schema."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


class FieldMapping(BaseModel):
    """Copy one canonical field into one provider column."""

    source_field: str
    target_field: str
    transformation: Optional[str] = None  # registered transformation name
    default_value: Optional[str] = None

    model_config = {"alias_generator": to_camel, "populate_by_name": True, "frozen": True}


class ProviderMapping(BaseModel):
    """Complete output schema for one payroll provider.

    ``transformations`` maps a target field to a registered transformation
    name. A target present there but absent from ``field_mappings`` is a
    wholly derived column.
    """

    provider: str
    field_mappings: list[FieldMapping] = Field(default_factory=list)
    transformations: dict[str, str] = Field(default_factory=dict)

    model_config = {"alias_generator": to_camel, "populate_by_name": True}

    @property
    def target_fields(self) -> list[str]:
        """Declared targets first, then transformation-only targets, in order."""
        targets = [fm.target_field for fm in self.field_mappings]
        seen = set(targets)
        targets.extend(t for t in self.transformations if t not in seen)
        return targets

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True, indent=2)
