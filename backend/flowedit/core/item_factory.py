"""Item Factory — builds and clones items per block variant.

Invariants:
    - A built item keeps the input id only when it is non-empty; otherwise a fresh id
    - Every path of a built or cloned cards item gets a fresh id, whatever its source
    - Clones never keep edge connections (item outgoing_edge_id, path outgoing_edge_id)
    - Input cards paths keep outgoing_edge_id under their new id; create_item re-sources
      those edges, paths copied from the neighbour are disconnected
    - _BUILDERS and _CLONERS cover exactly ITEM_BEARING_BLOCK_TYPES (tested)

Design Decisions:
    - Explicit BlockType → function dicts over isinstance chains: adding a variant
      means editing both tables, and the exhaustiveness test fails until you do
    - Items are rebuilt from model_dump(exclude_unset=True) so the explicit-null vs
      unset distinction on cards fields survives copying
"""

from typing import Any, Callable, Mapping

from flowedit.core.boundary_protocols import IdService
from flowedit.core.domain_types import BlockId, BlockType, ItemId
from flowedit.core.flow_document import (
    BlockBase, ButtonItem, CardsItem, ConditionItem, ConnectableItem, Item,
    PictureChoiceItem,
)

# Cards fields whose explicit null is mirrored from the neighbouring card
CARD_SHAPE_FIELDS: tuple[str, ...] = ("image_url", "title", "description")

ItemBuilder = Callable[[BlockBase, Mapping[str, Any], int, IdService], Item]
ItemCloner = Callable[[Item, IdService], Item]


def _input_id(item: Mapping[str, Any], id_service: IdService) -> ItemId:
    return item.get("id") or id_service.fresh_id()


def _disconnected_fields(item: Item) -> dict[str, Any]:
    fields = item.model_dump(exclude_unset=True)
    fields.pop("outgoing_edge_id", None)
    return fields


def _fresh_paths(paths: list[dict], id_service: IdService) -> list[dict]:
    """Re-id paths and drop their connections."""
    fresh = []
    for path in paths:
        path = dict(path)
        path.pop("outgoing_edge_id", None)
        path["id"] = id_service.fresh_id()
        fresh.append(path)
    return fresh


# ─── Builders ────────────────────────────────────────────────────

def _simple_builder(model: type[ConnectableItem]) -> ItemBuilder:
    """Builder for variants that only need an id: fields copied through unchanged."""

    def build(
        block: BlockBase, item: Mapping[str, Any], item_index: int,
        id_service: IdService,
    ) -> Item:
        return model.model_validate({**item, "id": _input_id(item, id_service)})

    return build


def _is_explicit_null(card: CardsItem | None, name: str) -> bool:
    return (
        card is not None
        and name in card.model_fields_set
        and getattr(card, name) is None
    )


def _build_card(
    block: BlockBase, item: Mapping[str, Any], item_index: int,
    id_service: IdService,
) -> CardsItem:
    """Build a card whose optional-field shape matches its neighbour.

    The neighbour is the card before the insertion point, else the card at it.
    Paths come from the input, else the neighbour, else one empty path.
    """
    items: list[CardsItem] = block.items
    neighbour = None
    if 0 < item_index <= len(items):
        neighbour = items[item_index - 1]
    elif item_index < len(items):
        neighbour = items[item_index]

    base = CardsItem.model_validate({**item, "id": _input_id(item, id_service)})
    fields = base.model_dump(exclude_unset=True)
    for name in CARD_SHAPE_FIELDS:
        if fields.get(name) is not None:
            continue
        fields.pop(name, None)
        if _is_explicit_null(neighbour, name):
            fields[name] = None

    if "paths" in base.model_fields_set:
        fields["paths"] = [
            {**path, "id": id_service.fresh_id()} for path in fields["paths"]
        ]
    elif neighbour is not None and "paths" in neighbour.model_fields_set:
        # neighbour paths are already wired to the neighbour's edges
        fields["paths"] = _fresh_paths(
            neighbour.model_dump(exclude_unset=True)["paths"], id_service,
        )
    else:
        fields["paths"] = [{"id": id_service.fresh_id()}]
    return CardsItem(**fields)


_BUILDERS: dict[BlockType, ItemBuilder] = {
    BlockType.CONDITION: _simple_builder(ConditionItem),
    BlockType.CHOICE: _simple_builder(ButtonItem),
    BlockType.PICTURE_CHOICE: _simple_builder(PictureChoiceItem),
    BlockType.CARDS: _build_card,
}


# ─── Cloners ─────────────────────────────────────────────────────

def _clone_connectable(item: Item, id_service: IdService) -> Item:
    fields = _disconnected_fields(item)
    fields["id"] = id_service.fresh_id()
    return type(item)(**fields)


def _clone_card(item: Item, id_service: IdService) -> Item:
    fields = _disconnected_fields(item)
    fields["id"] = id_service.fresh_id()
    if "paths" in fields:
        fields["paths"] = _fresh_paths(fields["paths"], id_service)
    return CardsItem(**fields)


_CLONERS: dict[BlockType, ItemCloner] = {
    BlockType.CONDITION: _clone_connectable,
    BlockType.CHOICE: _clone_connectable,
    BlockType.PICTURE_CHOICE: _clone_connectable,
    BlockType.CARDS: _clone_card,
}


# ─── Public API ──────────────────────────────────────────────────

def build_item(
    block: BlockBase, item: Mapping[str, Any], item_index: int,
    id_service: IdService,
) -> Item | None:
    """Build a well-formed item for `block` from a partial input.

    Returns None when the block variant has no construction rule.
    """
    builder = _BUILDERS.get(BlockType(block.type))
    if builder is None:
        return None
    return builder(block, item, item_index, id_service)


def clone_item(block: BlockBase, item: Item, id_service: IdService) -> Item | None:
    """Structural copy with fresh ids and no edge connections."""
    cloner = _CLONERS.get(BlockType(block.type))
    if cloner is None:
        return None
    return cloner(item, id_service)


def clone_items_for_block(
    items: list[Item], block_id: BlockId, id_service: IdService,
) -> list[Item]:
    """Copy a block's items for a duplicated block.

    Exported helper for callers that duplicate a whole block; ItemActions
    does not use it. Each copy gets a fresh id, points at
    `block_id`, and loses its connections (cards paths are re-id'd and
    disconnected too).
    """
    copies: list[Item] = []
    for item in items:
        fields = _disconnected_fields(item)
        fields["id"] = id_service.fresh_id()
        fields["block_id"] = block_id
        if "paths" in fields:
            fields["paths"] = _fresh_paths(fields["paths"], id_service)
        copies.append(type(item)(**fields))
    return copies


def builder_block_types() -> frozenset[BlockType]:
    return frozenset(_BUILDERS)


def cloner_block_types() -> frozenset[BlockType]:
    return frozenset(_CLONERS)
