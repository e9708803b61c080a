"""Edge Consistency — lookup and cascading removal of edges sourced from a node.

Invariants:
    - remove_edges_from drops every edge whose from.item_id or from.path_id is node_id
    - Relative order of the remaining edges is preserved (stable partition)
    - Only called when an item or path is destroyed — never on detach

Design Decisions:
    - Operates on the draft in place: callers already hold a private copy from produce()
"""

from flowedit.core.domain_types import EdgeId, ItemId, PathId
from flowedit.core.flow_document import Edge, FlowDocument


def find_edge_by_id(document: FlowDocument, edge_id: EdgeId) -> Edge | None:
    """Return the edge with `edge_id`, or None when it does not exist."""
    return next((edge for edge in document.edges if edge.id == edge_id), None)


def originates_from(edge: Edge, node_id: ItemId | PathId) -> bool:
    return node_id in (edge.from_.item_id, edge.from_.path_id)


def remove_edges_from(draft: FlowDocument, node_id: ItemId | PathId | None) -> int:
    """Remove every edge sourced from `node_id`. Returns how many were removed."""
    if not node_id:
        return 0
    kept = [edge for edge in draft.edges if not originates_from(edge, node_id)]
    removed = len(draft.edges) - len(kept)
    if removed:
        draft.edges = kept
    return removed
