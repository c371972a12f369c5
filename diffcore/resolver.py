"""
Resolver Module
Rebuilds markup from an annotated diff tree and the reviewer's decisions.
"""

import logging
from typing import Dict, Mapping, Optional, Union

from .nodes import (
    Block, Decision, ListItem, ListNode, Node, Root, Status,
    joined_text, list_changes,
)

logger = logging.getLogger(__name__)

DecisionValue = Union[Decision, str, None]
Decisions = Mapping[str, DecisionValue]


def decision_for(decisions: Optional[Decisions], node_id: str) -> Decision:
    """Look up a node's decision; a missing id means undecided."""
    if not decisions:
        return Decision.UNDECIDED
    value = decisions.get(node_id)
    if value is None:
        return Decision.UNDECIDED
    try:
        return Decision(value)
    except ValueError:
        raise ValueError(f"Unknown decision for {node_id}: {value!r}") from None


def _reading(node: Union[Block, ListItem], decision: Decision):
    """Return (present, text) for the node under the given decision.

    Only an accepted node shows the modified reading; rejected and
    undecided nodes keep the original.
    """
    accepted = decision == Decision.ACCEPT
    if accepted:
        text = joined_text(node.content, skip_removed=True)
        present = node.status != Status.REMOVED
    else:
        text = joined_text(node.content, skip_added=True)
        present = node.status != Status.ADDED
    return present, text


def _resolve(node: Node, decisions: Optional[Decisions]) -> str:
    if isinstance(node, Root):
        return ''.join(_resolve(child, decisions) for child in node.children)

    if isinstance(node, ListNode):
        inner = ''.join(_resolve(child, decisions) for child in node.children)
        if not inner:
            return ''
        return f"<{node.kind.value}>{inner}</{node.kind.value}>"

    if isinstance(node, Block):
        present, text = _reading(node, decision_for(decisions, node.id))
        if not present:
            return ''
        return f"<{node.tag.value}>{text}</{node.tag.value}>"

    if isinstance(node, ListItem):
        present, text = _reading(node, decision_for(decisions, node.id))
        # Nested children are resolved on their own decisions
        nested = ''.join(_resolve(child, decisions) for child in node.children or ())
        if not present:
            text = ''
        if not text and not nested:
            return ''
        return f"<li>{text}{nested}</li>"

    raise TypeError(f"Unknown node type: {type(node).__name__}")


def resolve(tree: Node, decisions: Optional[Decisions] = None) -> str:
    """Produce the final markup for ``tree`` given per-node decisions.

    The decision map is only read, never stored or modified.
    """
    logger.info(f"Resolving tree with {len(decisions or {})} decisions")
    return _resolve(tree, decisions)


def decide_all(tree: Node, decision: DecisionValue) -> Dict[str, Decision]:
    """Build a decision map giving every changed node the same decision."""
    decision = Decision(decision)
    return {node.id: decision for node in list_changes(tree)}


def review_stats(tree: Node, decisions: Optional[Decisions] = None) -> Dict[str, int]:
    """Count changes and how many of them have been accepted, rejected or left open."""
    stats = {'total': 0, 'accepted': 0, 'rejected': 0, 'undecided': 0}
    for node in list_changes(tree):
        stats['total'] += 1
        decision = decision_for(decisions, node.id)
        if decision == Decision.ACCEPT:
            stats['accepted'] += 1
        elif decision == Decision.REJECT:
            stats['rejected'] += 1
        else:
            stats['undecided'] += 1
    return stats
