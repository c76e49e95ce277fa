"""Batch upload endpoint: parse, validate, gate and transform in one call."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from fastapi.concurrency import run_in_threadpool

from hirefeed.api.deps import get_processor
from hirefeed.core.exceptions import BatchReadError
from hirefeed.models.pipeline import BatchRunResult
from hirefeed.stages.orchestrator.batch_processor import BatchProcessor

router = APIRouter(tags=["batches"])


@router.post("", response_model=BatchRunResult)
async def run_batch(request: Request, processor: BatchProcessor = Depends(get_processor)) -> BatchRunResult:
    """Process a CSV batch sent as the raw request body."""
    body = await request.body()
    try:
        text = body.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise BatchReadError(f"CSV parsing failed: {exc}") from exc
    return await run_in_threadpool(processor.run_batch, text)
