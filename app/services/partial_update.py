from enum import Enum
from typing import Iterable, List

from pydantic import BaseModel


def apply_partial_update(entity, update: BaseModel, exclude: Iterable[str] = ()) -> List[str]:
    """Copy supplied, non-blank fields from ``update`` onto ``entity``.

    Absent fields, ``None`` and whitespace-only strings leave the stored value
    untouched. Returns the names of the fields that were written.
    """
    changed = []
    for key, value in update.model_dump(exclude_unset=True, exclude=set(exclude)).items():
        if value is None:
            continue
        if isinstance(value, Enum):
            value = value.value
        if isinstance(value, str) and not value.strip():
            continue
        setattr(entity, key, value)
        changed.append(key)
    if changed:
        entity.touch()
    return changed
