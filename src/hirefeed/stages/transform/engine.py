"""TransformationEngine: projects one canonical record into a provider schema.

Pass 1 walks the declared (source, target) pairs; a transformation registered
for the target always wins over the copied value. Pass 2 runs every
transformation whose target the first pass did not populate, with an empty
source value, so mappings can synthesize wholly derived columns.
"""

from __future__ import annotations

from typing import Iterable

from hirefeed.core.types import OutputRecord
from hirefeed.models.employee_record import CanonicalRecord
from hirefeed.models.mapping import ProviderMapping
from hirefeed.stages.transform.transformations import Transformation, get_transformation


def resolve_transformations(mapping: ProviderMapping) -> dict[str, Transformation]:
    """Look up every named strategy the mapping references.

    Raises:
        UnknownTransformationError: a name is not registered.
    """
    table = {target: get_transformation(name) for target, name in mapping.transformations.items()}
    for fm in mapping.field_mappings:
        if fm.transformation:
            get_transformation(fm.transformation)
    return table


def transform(record: CanonicalRecord, mapping: ProviderMapping) -> OutputRecord:
    """Return the provider record for ``record``; a pure function of its inputs."""
    table = resolve_transformations(mapping)
    output: OutputRecord = {}

    for fm in mapping.field_mappings:
        value = record.value_of(fm.source_field)
        fn = table.get(fm.target_field)
        if fn is None and fm.transformation:
            fn = get_transformation(fm.transformation)

        if fn is not None:
            output[fm.target_field] = str(fn(value, record))
        else:
            output[fm.target_field] = value or (fm.default_value or "")

    for target, fn in table.items():
        if target not in output:
            output[target] = str(fn("", record))

    return output


def transform_batch(records: Iterable[CanonicalRecord], mapping: ProviderMapping) -> list[OutputRecord]:
    resolve_transformations(mapping)
    return [transform(record, mapping) for record in records]
