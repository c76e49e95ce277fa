"""hirefeed exception hierarchy.

Record-level problems are never raised; they come back as ValidationError /
ParseFailure values. Only the conditions below escape the pipeline.
"""

from __future__ import annotations


class HireFeedError(Exception):
    """Base exception for all hirefeed errors."""


class BatchReadError(HireFeedError):
    """Input stream could not be split into rows before any row was produced."""


class MappingError(HireFeedError):
    """Provider mapping is invalid or cannot be applied."""


class MappingImportError(MappingError):
    """Admin-supplied mapping document could not be imported."""

    def __init__(self, provider: str, message: str) -> None:
        self.provider = provider
        super().__init__(f"Failed to import mapping for {provider}: {message}")


class UnknownTransformationError(MappingError):
    """Mapping references a transformation name that is not registered."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown transformation {name!r}")


class UnknownErrorIdError(HireFeedError):
    """Correction targets an error id the ledger has never recorded."""

    def __init__(self, error_id: str) -> None:
        self.error_id = error_id
        super().__init__(f"No validation error recorded with id {error_id!r}")


class StorageError(HireFeedError):
    """Key-value persistence backend operation failed."""


class UnknownProviderError(MappingError):
    """No built-in or stored mapping exists for the requested provider."""

    def __init__(self, provider: str) -> None:
        self.provider = provider
        super().__init__(f"No mapping available for provider {provider!r}")


class CorrectionTargetError(HireFeedError):
    """Error's field does not name a correctable record field."""

    def __init__(self, error_id: str, field: str) -> None:
        self.error_id = error_id
        self.field = field
        super().__init__(f"Error {error_id!r} targets {field!r}, which is not a record field")
