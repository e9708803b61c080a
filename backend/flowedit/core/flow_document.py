"""Flow Document — Pydantic models for the groups → blocks → items → paths tree and its edges.

Invariants:
    - Every item and path id is unique within a FlowDocument
    - Block variants are a discriminated union on `type` (BlockType values)
    - CardsItem image_url/title/description distinguish explicit null from unset
      through model_fields_set; dumps use exclude_unset to keep that distinction

Design Decisions:
    - snake_case attributes, camelCase aliases: the visual editor sends camelCase JSON
    - Edge.from_ aliased to "from": `from` is a Python keyword
    - Items carry no type tag — the owning block variant decides the item model
"""

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from flowedit.core.domain_types import BlockType, ITEM_BEARING_BLOCK_TYPES


class FlowModel(BaseModel):
    """Base model — camelCase aliases, populated by either name."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ─── Items ───────────────────────────────────────────────────────

class Comparison(FlowModel):
    id: str
    variable_id: str | None = None
    comparison_operator: str | None = None
    value: str | None = None


class ConditionContent(FlowModel):
    comparisons: list[Comparison] = Field(default_factory=list)
    logical_operator: Literal["AND", "OR"] = "AND"


class ItemBase(FlowModel):
    id: str
    block_id: str | None = None
    display_condition: dict[str, Any] | None = None


class ConnectableItem(ItemBase):
    """Item with a single outgoing edge slot."""
    outgoing_edge_id: str | None = None


class ConditionItem(ConnectableItem):
    content: ConditionContent | None = None


class ButtonItem(ConnectableItem):
    content: str | None = None
    value: str | None = None


class PictureChoiceItem(ConnectableItem):
    picture_src: str | None = None
    title: str | None = None
    description: str | None = None


class CardsPath(FlowModel):
    """A connectable endpoint owned by a cards item."""
    id: str
    text: str | None = None
    outgoing_edge_id: str | None = None


class CardsItem(ItemBase):
    image_url: str | None = None
    title: str | None = None
    description: str | None = None
    paths: list[CardsPath] = Field(default_factory=list)


Item = Union[ConditionItem, ButtonItem, PictureChoiceItem, CardsItem]


# ─── Blocks ──────────────────────────────────────────────────────

class BlockBase(FlowModel):
    id: str


class ConditionBlock(BlockBase):
    type: Literal["Condition"]
    items: list[ConditionItem]


class ChoiceInputBlock(BlockBase):
    type: Literal["choice input"]
    items: list[ButtonItem]
    options: dict[str, Any] | None = None


class PictureChoiceBlock(BlockBase):
    type: Literal["picture choice input"]
    items: list[PictureChoiceItem]
    options: dict[str, Any] | None = None


class CardsBlock(BlockBase):
    type: Literal["cards"]
    items: list[CardsItem]


class TextBubbleBlock(BlockBase):
    type: Literal["text"]
    content: dict[str, Any] | None = None
    outgoing_edge_id: str | None = None


class SetVariableBlock(BlockBase):
    type: Literal["Set variable"]
    options: dict[str, Any] | None = None
    outgoing_edge_id: str | None = None


Block = Annotated[
    Union[
        ConditionBlock, ChoiceInputBlock, PictureChoiceBlock, CardsBlock,
        TextBubbleBlock, SetVariableBlock,
    ],
    Field(discriminator="type"),
]


# ─── Graph ───────────────────────────────────────────────────────

class EdgeSource(FlowModel):
    block_id: str
    item_id: str | None = None
    path_id: str | None = None


class EdgeTarget(FlowModel):
    group_id: str
    block_id: str | None = None


class Edge(FlowModel):
    id: str
    from_: EdgeSource = Field(alias="from")
    to: EdgeTarget


class Group(FlowModel):
    id: str
    title: str = ""
    blocks: list[Block] = Field(default_factory=list)


class FlowDocument(FlowModel):
    id: str
    name: str = ""
    groups: list[Group] = Field(default_factory=list)
    edges: list[Edge] = Field(default_factory=list)


# ─── Helpers ─────────────────────────────────────────────────────

def block_has_items(block: BlockBase) -> bool:
    """HasItems capability check — driven by ITEM_BEARING_BLOCK_TYPES."""
    return BlockType(block.type) in ITEM_BEARING_BLOCK_TYPES


def item_has_paths(item: ItemBase) -> bool:
    return isinstance(item, CardsItem)


def unset_field(model: BaseModel, name: str) -> None:
    """Clear a field back to "unset" so exclude_unset dumps omit it."""
    setattr(model, name, None)
    model.model_fields_set.discard(name)


def normalize_keys(model_cls: type[BaseModel], data: dict[str, Any]) -> dict[str, Any]:
    """Map camelCase aliases in `data` onto field names; unknown keys pass through."""
    by_alias = {
        info.alias: name
        for name, info in model_cls.model_fields.items()
        if info.alias
    }
    return {by_alias.get(key, key): value for key, value in data.items()}


def dump_document(document: FlowDocument) -> dict:
    """JSON-safe camelCase dump that keeps explicit-null vs unset apart."""
    return document.model_dump(mode="json", by_alias=True, exclude_unset=True)
