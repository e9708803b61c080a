"""Item Schemas — request/response models for the item mutation endpoints.

Invariants:
    - Indices are non-negative at the boundary; upper bounds are checked by the core
      against the snapshot in force (IndexOutOfRangeError → 409)
    - Responses always carry the snapshot after the call, applied or not

Design Decisions:
    - Item payloads stay dicts: the owning block variant decides the item model,
      which is only known once indices are resolved
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from flowedit.core.domain_types import ItemIndices
from flowedit.core.flow_document import dump_document
from flowedit.core.item_actions import MutationResult


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ItemIndicesBody(_CamelModel):
    group_index: int = Field(ge=0)
    block_index: int = Field(ge=0)
    item_index: int = Field(ge=0)

    def to_indices(self) -> ItemIndices:
        return ItemIndices(self.group_index, self.block_index, self.item_index)


class PathIndicesBody(ItemIndicesBody):
    path_index: int = Field(ge=0)

    def to_indices(self) -> ItemIndices:
        return ItemIndices(
            self.group_index, self.block_index, self.item_index, self.path_index,
        )


class CreateItemRequest(_CamelModel):
    """New item (partial) plus the insertion point."""
    item: dict[str, Any] = Field(default_factory=dict)
    indices: ItemIndicesBody


class UpdateItemRequest(_CamelModel):
    indices: ItemIndicesBody
    updates: dict[str, Any]


def mutation_response(result: MutationResult) -> dict:
    """camelCase envelope for a MutationResult."""
    return {
        "applied": result.applied,
        "itemId": result.item_id,
        "reason": result.reason.value if result.reason else None,
        "document": dump_document(result.document),
    }
