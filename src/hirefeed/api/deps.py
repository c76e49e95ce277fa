"""Request-scoped accessors for resources created in the app lifespan."""

from __future__ import annotations

from fastapi import Request

from hirefeed.core.config import AppSettings
from hirefeed.ledger.error_ledger import ErrorLedger
from hirefeed.persistence.mapping_store import MappingRepository
from hirefeed.stages.orchestrator.batch_processor import BatchProcessor


def get_settings(request: Request) -> AppSettings:
    return request.app.state.settings


def get_ledger(request: Request) -> ErrorLedger:
    return request.app.state.ledger


def get_mappings(request: Request) -> MappingRepository:
    return request.app.state.mappings


def get_processor(request: Request) -> BatchProcessor:
    state = request.app.state
    return BatchProcessor(settings=state.settings, ledger=state.ledger, mappings=state.mappings)
