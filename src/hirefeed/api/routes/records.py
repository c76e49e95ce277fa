"""Single-record endpoints: validation, compliance check and provider preview."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from hirefeed.api.deps import get_mappings
from hirefeed.models.employee_record import CanonicalRecord, DetailRecord
from hirefeed.models.issues import ValidationError
from hirefeed.persistence.mapping_store import MappingRepository
from hirefeed.stages.compliance.gate import is_compliant, skip_reason
from hirefeed.stages.transform.engine import transform
from hirefeed.stages.validator.record_validator import validate_record

router = APIRouter(tags=["records"])


class RecordRequest(BaseModel):
    record: dict[str, str]
    row_index: int = 0
    header_fields: Optional[list[str]] = None


class ComplianceResponse(BaseModel):
    compliant: bool
    reason: Optional[str] = None


class TransformResponse(BaseModel):
    provider: str
    output: dict[str, str] = Field(default_factory=dict)


def _to_record(payload: RecordRequest) -> CanonicalRecord:
    if "record_type" in payload.record:
        return DetailRecord.model_validate(payload.record)
    return CanonicalRecord.model_validate(payload.record)


@router.post("/validate", response_model=list[ValidationError])
async def validate(payload: RecordRequest) -> list[ValidationError]:
    return validate_record(_to_record(payload), payload.row_index, payload.header_fields)


@router.post("/compliance", response_model=ComplianceResponse)
async def compliance(payload: RecordRequest) -> ComplianceResponse:
    record = _to_record(payload)
    if is_compliant(record):
        return ComplianceResponse(compliant=True)
    return ComplianceResponse(compliant=False, reason=skip_reason(record))


@router.post("/transform/{provider}", response_model=TransformResponse)
def transform_record(
    provider: str,
    payload: RecordRequest,
    mappings: MappingRepository = Depends(get_mappings),
) -> TransformResponse:
    output = transform(_to_record(payload), mappings.get(provider))
    return TransformResponse(provider=provider, output=output)
