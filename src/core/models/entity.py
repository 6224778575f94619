"""Entity kind descriptors shared by trips and blogs."""

import types
import typing
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel


def _is_structured(annotation: Any) -> bool:
    origin = typing.get_origin(annotation)
    if origin in (list, dict):
        return True
    if origin in (typing.Union, types.UnionType):
        return any(_is_structured(arg) for arg in typing.get_args(annotation))
    return False


@dataclass(frozen=True)
class MediaSlot:
    """A named asset reference on an entity and where its uploads live."""

    name: str
    attr: str
    folder: str
    prefix: str


@dataclass(frozen=True)
class EntityKind:
    name: str
    label: str
    document: type[BaseModel]
    slots: tuple[MediaSlot, ...]
    # Returns ids of records that block deletion; empty means deletable.
    dependents: Callable[[BaseModel], list[str]] = field(default=lambda _doc: [])
    dependents_message: str = ""

    def slot(self, name: str) -> MediaSlot:
        for slot in self.slots:
            if slot.name == name:
                return slot
        raise KeyError(name)

    @property
    def slot_names(self) -> list[str]:
        return [slot.name for slot in self.slots]

    @property
    def structured_fields(self) -> list[str]:
        """Wire names of document fields holding lists or objects."""
        return [
            info.alias or name
            for name, info in self.document.model_fields.items()
            if _is_structured(info.annotation)
        ]
