"""MappingRepository: admin-replaceable provider mappings on a key-value store.

A stored mapping replaces the built-in one wholesale. Deleting it restores
the default.
"""

from __future__ import annotations

import logging

from pydantic import ValidationError as SchemaError

from hirefeed.core.exceptions import MappingError, MappingImportError, UnknownProviderError
from hirefeed.core.protocols import IKeyValueStore
from hirefeed.models.mapping import ProviderMapping
from hirefeed.stages.transform.default_mappings import DEFAULT_MAPPINGS, default_mapping
from hirefeed.stages.transform.engine import resolve_transformations

logger = logging.getLogger(__name__)

MAPPING_KEY_PREFIX = "payroll_mapping_"


def mapping_key(provider: str) -> str:
    return f"{MAPPING_KEY_PREFIX}{provider}"


class MappingRepository:
    """Read/write provider mappings through any IKeyValueStore."""

    def __init__(self, store: IKeyValueStore) -> None:
        self._store = store

    def get(self, provider: str) -> ProviderMapping:
        """Stored replacement if present and readable, else the built-in default.

        Raises:
            UnknownProviderError: nothing stored and no built-in mapping.
        """
        raw = self._store.get(mapping_key(provider))
        if raw is not None:
            try:
                return ProviderMapping.model_validate_json(raw)
            except SchemaError as exc:
                logger.warning("Stored mapping for %s is unreadable, using default: %s", provider, exc)
        return default_mapping(provider)

    def is_customized(self, provider: str) -> bool:
        return self._store.get(mapping_key(provider)) is not None

    def save(self, provider: str, mapping: ProviderMapping) -> ProviderMapping:
        """Replace the provider's mapping. Transformation names must be registered."""
        resolve_transformations(mapping)
        if mapping.provider != provider:
            mapping = mapping.model_copy(update={"provider": provider})
        self._store.set(mapping_key(provider), mapping.to_json())
        logger.info("Saved mapping for %s (%d field mappings)", provider, len(mapping.field_mappings))
        return mapping

    def reset(self, provider: str) -> ProviderMapping:
        self._store.delete(mapping_key(provider))
        logger.info("Reset mapping for %s to default", provider)
        return default_mapping(provider)

    def export(self, provider: str) -> str:
        return self.get(provider).to_json()

    def import_(self, provider: str, text: str) -> ProviderMapping:
        """Parse, check and save a JSON mapping document.

        Raises:
            MappingImportError: invalid JSON, wrong shape, or unknown
                transformation names.
        """
        try:
            mapping = ProviderMapping.model_validate_json(text)
        except SchemaError as exc:
            raise MappingImportError(provider, str(exc)) from exc
        try:
            return self.save(provider, mapping)
        except MappingError as exc:
            raise MappingImportError(provider, str(exc)) from exc

    def providers(self) -> list[str]:
        return list(DEFAULT_MAPPINGS)

    def all(self, providers: list[str] | None = None) -> dict[str, ProviderMapping]:
        names = providers if providers is not None else self.providers()
        result: dict[str, ProviderMapping] = {}
        for name in names:
            try:
                result[name] = self.get(name)
            except UnknownProviderError:
                logger.warning("Skipping provider %s: no mapping available", name)
        return result
