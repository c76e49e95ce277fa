"""Protocol interfaces for hirefeed abstractions.

Structural typing, no inheritance required, easy to test with isinstance().
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from hirefeed.models.pipeline import ProgressEvent


# ---------------------------------------------------------------------------
# Persistence: Key-Value Store
# ---------------------------------------------------------------------------

@runtime_checkable
class IKeyValueStore(Protocol):
    """Host-environment storage for mappings and ledger history."""

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def delete(self, key: str) -> None: ...


# ---------------------------------------------------------------------------
# Progress sink
# ---------------------------------------------------------------------------

@runtime_checkable
class IProgressSink(Protocol):
    """Caller-supplied observer invoked once per processed row."""

    def __call__(self, event: ProgressEvent) -> None: ...
