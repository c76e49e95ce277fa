"""Admin endpoints for provider mapping management."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import PlainTextResponse

from hirefeed.api.deps import get_mappings
from hirefeed.models.mapping import ProviderMapping
from hirefeed.persistence.mapping_store import MappingRepository
from hirefeed.stages.transform.transformations import registered_transformations

router = APIRouter(tags=["mappings"])


@router.get("/transformations")
def list_transformations() -> dict[str, list[str]]:
    return {"transformations": registered_transformations()}


@router.get("/mappings/{provider}")
def get_mapping(provider: str, mappings: MappingRepository = Depends(get_mappings)) -> dict:
    mapping = mappings.get(provider)
    return {
        "customized": mappings.is_customized(provider),
        "mapping": mapping.model_dump(by_alias=True),
    }


@router.put("/mappings/{provider}")
def replace_mapping(
    provider: str,
    mapping: ProviderMapping,
    mappings: MappingRepository = Depends(get_mappings),
) -> dict:
    saved = mappings.save(provider, mapping)
    return {"customized": True, "mapping": saved.model_dump(by_alias=True)}


@router.delete("/mappings/{provider}")
def reset_mapping(provider: str, mappings: MappingRepository = Depends(get_mappings)) -> dict:
    restored = mappings.reset(provider)
    return {"customized": False, "mapping": restored.model_dump(by_alias=True)}


@router.get("/mappings/{provider}/export")
def export_mapping(provider: str, mappings: MappingRepository = Depends(get_mappings)) -> PlainTextResponse:
    return PlainTextResponse(
        mappings.export(provider),
        media_type="application/json",
        headers={"Content-Disposition": f'attachment; filename="{provider.lower()}_mapping.json"'},
    )


@router.post("/mappings/{provider}/import")
async def import_mapping(
    provider: str,
    request: Request,
    mappings: MappingRepository = Depends(get_mappings),
) -> dict:
    """Import a mapping document sent as the raw JSON request body."""
    text = (await request.body()).decode("utf-8", errors="replace")
    imported = await run_in_threadpool(mappings.import_, provider, text)
    return {"customized": True, "mapping": imported.model_dump(by_alias=True)}
