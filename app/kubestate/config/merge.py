"""
Field-by-field refinement of configuration models.

A loaded document only carries the keys present in the file. pydantic
records those in `model_fields_set`; everything else is a constructed
default and must not overwrite live in-memory values.
"""

import copy
from typing import Any

from pydantic import BaseModel


def _copy_value(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_copy(deep=True)
    return copy.deepcopy(value)


def refine_mapping(target: dict, source: dict) -> None:
    """
    Merge `source` into `target` in place.

    Keys present in both with model values are refined recursively.
    Other keys from `source` replace or extend `target`.
    """
    for key, value in source.items():
        current = target.get(key)
        if isinstance(current, BaseModel) and isinstance(value, BaseModel):
            refine_model(current, value)
        else:
            target[key] = _copy_value(value)


def refine_model(target: BaseModel, source: BaseModel) -> None:
    """
    Merge the explicitly set fields of `source` into `target` in place.

    Values from `source` take precedence, but only for fields that were
    present when it was loaded. Explicit nulls are ignored. Nested models
    and mappings are merged recursively; lists and scalars are replaced.
    Applying the same source twice yields the same result as once.
    """
    for name in source.model_fields_set:
        incoming = getattr(source, name)
        if incoming is None:
            continue

        current = getattr(target, name, None)
        if isinstance(current, BaseModel) and isinstance(incoming, BaseModel):
            refine_model(current, incoming)
        elif isinstance(current, dict) and isinstance(incoming, dict):
            refine_mapping(current, incoming)
        else:
            setattr(target, name, _copy_value(incoming))
