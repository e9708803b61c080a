"""Document Integrity — structural invariants every snapshot must satisfy.

Invariants:
    - Item and path ids are unique across the whole document
    - Every item-bearing block holds at least one item
    - No edge is sourced from an item or path id that does not exist
    - Returns a list of human-readable violations; empty list means the document is sound

Design Decisions:
    - Pure function: no IO, no raising — the editor decides whether a violation is fatal
    - Only structural checks; item content is never inspected
"""

from collections import Counter

from flowedit.core.flow_document import FlowDocument, block_has_items, item_has_paths


def collect_node_ids(document: FlowDocument) -> list[str]:
    """All item and path ids in document order (duplicates kept)."""
    ids: list[str] = []
    for group in document.groups:
        for block in group.blocks:
            if not block_has_items(block):
                continue
            for item in block.items:
                ids.append(item.id)
                if item_has_paths(item):
                    ids.extend(path.id for path in item.paths)
    return ids


def find_integrity_violations(document: FlowDocument) -> list[str]:
    violations: list[str] = []

    node_ids = collect_node_ids(document)
    duplicates = sorted(node_id for node_id, n in Counter(node_ids).items() if n > 1)
    if duplicates:
        violations.append(f"duplicate item/path ids: {', '.join(duplicates)}")

    for group in document.groups:
        for block in group.blocks:
            if block_has_items(block) and not block.items:
                violations.append(f"block '{block.id}' has no items")

    known = set(node_ids)
    for edge in document.edges:
        for node_id in (edge.from_.item_id, edge.from_.path_id):
            if node_id and node_id not in known:
                violations.append(f"edge '{edge.id}' is sourced from missing node '{node_id}'")

    return violations
