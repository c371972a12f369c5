"""
Tree Differ Module
Aligns two parsed HTML trees and annotates every block and list item with its change status.
"""

import logging
from typing import List, Optional, Sequence, Tuple

from .html_tree_parser import HTMLTreeParser
from .inline_diff import GRANULARITIES, inline_diff
from .nodes import (
    Block, BlockTag, InlinePart, ListItem, ListNode, Node, Root, Status,
    flatten_text, joined_text,
)

logger = logging.getLogger(__name__)


class _IdSequence:
    """Positional ids for the annotated tree, assigned in output order."""

    def __init__(self):
        self.blocks = 0
        self.items = 0

    def block(self) -> str:
        self.blocks += 1
        return f"block-{self.blocks - 1}"

    def item(self) -> str:
        self.items += 1
        return f"li-{self.items - 1}"


def _status_for(parts: Sequence[InlinePart]) -> Status:
    if any(part.added or part.removed for part in parts):
        return Status.CHANGED
    return Status.UNCHANGED


class TreeDiffer:
    """Diffs two Root trees produced by HTMLTreeParser."""

    def __init__(self, granularity: str = 'word'):
        if granularity not in GRANULARITIES:
            raise ValueError(f"Unknown granularity: {granularity!r}")
        self.granularity = granularity

    def diff(self, original: Root, modified: Root) -> Root:
        """Return one annotated tree describing how ``original`` became ``modified``."""
        if not isinstance(original, Root) or not isinstance(modified, Root):
            raise TypeError("diff() expects two Root trees")

        logger.info(f"Diffing trees with {len(original.children)} / {len(modified.children)} top-level nodes")
        ids = _IdSequence()
        children = self._align(original.children, modified.children, ids)
        logger.info(f"Diff complete: {ids.blocks} blocks, {ids.items} list items")
        return Root(children=tuple(children))

    def _align(self, a_children: Sequence[Node], b_children: Sequence[Node],
               ids: _IdSequence) -> List[Node]:
        """Pair children by index; the longer side contributes added or removed subtrees."""
        result = []
        for index in range(max(len(a_children), len(b_children))):
            a = a_children[index] if index < len(a_children) else None
            b = b_children[index] if index < len(b_children) else None

            if a is None:
                result.append(self._mark(b, Status.ADDED, ids))
            elif b is None:
                result.append(self._mark(a, Status.REMOVED, ids))
            elif self._same_shape(a, b):
                result.append(self._diff_same(a, b, ids))
            else:
                logger.debug(f"Shape mismatch at index {index}: "
                             f"{type(a).__name__} vs {type(b).__name__}, using text fallback")
                result.append(self._fallback(a, b, ids))
        return result

    def _same_shape(self, a: Node, b: Node) -> bool:
        if isinstance(a, ListNode) and isinstance(b, ListNode):
            return True
        if isinstance(a, Block) and isinstance(b, Block):
            return a.tag == b.tag
        return isinstance(a, ListItem) and isinstance(b, ListItem)

    def _diff_same(self, a: Node, b: Node, ids: _IdSequence) -> Node:
        if isinstance(a, ListNode):
            return ListNode(kind=b.kind, children=tuple(self._align(a.children, b.children, ids)))

        if isinstance(a, Block):
            block_id = ids.block()
            parts = tuple(inline_diff(joined_text(a.content), joined_text(b.content), self.granularity))
            return Block(tag=b.tag, id=block_id, status=_status_for(parts), content=parts)

        item_id = ids.item()
        parts = tuple(inline_diff(joined_text(a.content), joined_text(b.content), self.granularity))
        children = None
        if a.children is not None or b.children is not None:
            children = tuple(self._align(a.children or (), b.children or (), ids))
        return ListItem(id=item_id, status=_status_for(parts), content=parts, children=children)

    def _fallback(self, a: Node, b: Node, ids: _IdSequence) -> Block:
        if isinstance(b, Block):
            tag = b.tag
        elif isinstance(a, Block):
            tag = a.tag
        else:
            tag = BlockTag.PARAGRAPH
        block_id = ids.block()
        parts = tuple(inline_diff(flatten_text(a), flatten_text(b), self.granularity))
        return Block(tag=tag, id=block_id, status=_status_for(parts), content=parts)

    def _mark(self, node: Node, status: Status, ids: _IdSequence) -> Node:
        """Copy a one-sided subtree, flagging every block and item with ``status``."""
        added = status == Status.ADDED

        def whole(parts: Tuple[InlinePart, ...]) -> Tuple[InlinePart, ...]:
            text = joined_text(parts)
            return (InlinePart(text, added=added, removed=not added),) if text else ()

        if isinstance(node, ListNode):
            return ListNode(kind=node.kind,
                            children=tuple(self._mark(child, status, ids) for child in node.children))
        if isinstance(node, Block):
            return Block(tag=node.tag, id=ids.block(), status=status, content=whole(node.content))
        if isinstance(node, ListItem):
            item_id = ids.item()
            children = None
            if node.children is not None:
                children = tuple(self._mark(child, status, ids) for child in node.children)
            return ListItem(id=item_id, status=status, content=whole(node.content), children=children)
        raise TypeError(f"Cannot mark node of type {type(node).__name__}")


def diff_trees(original: Root, modified: Root, granularity: str = 'word') -> Root:
    return TreeDiffer(granularity).diff(original, modified)


def diff_html(original: str, modified: str, granularity: str = 'word',
              parser: Optional[HTMLTreeParser] = None) -> Optional[Root]:
    """Parse and diff two HTML strings.

    Returns None when either side has no content, since there is nothing to
    line the other side up against. Use ``diff_trees`` with an empty ``Root``
    to see a whole document as added or removed.
    """
    parser = parser or HTMLTreeParser()
    tree_a = parser.parse(original)
    tree_b = parser.parse(modified)
    if tree_a is None or tree_b is None:
        logger.info("Nothing to diff, a document has no content")
        return None
    return TreeDiffer(granularity).diff(tree_a, tree_b)
