"""Type aliases used across the hirefeed pipeline."""

from __future__ import annotations

RawRow = dict[str, str]  # normalized header -> cell text
OutputRecord = dict[str, str]  # provider column -> value
