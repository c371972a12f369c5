"""
Diff Tree Nodes Module
Value types shared by the parser, the differ and the resolver.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterator, List, Optional, Tuple, Union


class Status(str, Enum):
    UNCHANGED = 'unchanged'
    ADDED = 'added'
    REMOVED = 'removed'
    CHANGED = 'changed'


class Decision(str, Enum):
    ACCEPT = 'accept'
    REJECT = 'reject'
    UNDECIDED = 'undecided'


class ListKind(str, Enum):
    UNORDERED = 'ul'
    ORDERED = 'ol'


class BlockTag(str, Enum):
    PARAGRAPH = 'p'
    HEADING1 = 'h1'
    HEADING2 = 'h2'
    HEADING3 = 'h3'
    HEADING4 = 'h4'
    HEADING5 = 'h5'
    HEADING6 = 'h6'


@dataclass(frozen=True)
class InlinePart:
    """A run of text or markup that belongs to the original, the modified text, or both."""
    text: str
    added: bool = False
    removed: bool = False

    def __post_init__(self):
        if self.added and self.removed:
            raise ValueError("An inline part cannot be both added and removed")

    def to_dict(self) -> Dict:
        return {'text': self.text, 'added': self.added, 'removed': self.removed}


@dataclass(frozen=True)
class Block:
    tag: BlockTag
    id: str
    status: Status = Status.UNCHANGED
    content: Tuple[InlinePart, ...] = ()

    def to_dict(self) -> Dict:
        return {
            'type': 'block',
            'tag': self.tag.value,
            'id': self.id,
            'status': self.status.value,
            'content': [part.to_dict() for part in self.content],
        }


@dataclass(frozen=True)
class ListItem:
    id: str
    status: Status = Status.UNCHANGED
    content: Tuple[InlinePart, ...] = ()
    # None when the item has no nested lists or blocks
    children: Optional[Tuple['Node', ...]] = None

    def to_dict(self) -> Dict:
        result = {
            'type': 'li',
            'id': self.id,
            'status': self.status.value,
            'content': [part.to_dict() for part in self.content],
        }
        if self.children is not None:
            result['children'] = [child.to_dict() for child in self.children]
        return result


@dataclass(frozen=True)
class ListNode:
    kind: ListKind
    children: Tuple['Node', ...] = ()

    def to_dict(self) -> Dict:
        return {
            'type': self.kind.value,
            'children': [child.to_dict() for child in self.children],
        }


@dataclass(frozen=True)
class Root:
    children: Tuple['Node', ...] = field(default_factory=tuple)

    def to_dict(self) -> Dict:
        return {
            'type': 'root',
            'children': [child.to_dict() for child in self.children],
        }


Node = Union[Root, ListNode, ListItem, Block]
ReviewNode = Union[ListItem, Block]


def joined_text(parts: Tuple[InlinePart, ...], *, skip_added: bool = False,
                skip_removed: bool = False) -> str:
    """Concatenate inline parts, optionally leaving out one side of the diff."""
    return ''.join(
        part.text for part in parts
        if not (skip_added and part.added) and not (skip_removed and part.removed)
    )


def flatten_text(node: Node) -> str:
    """Flatten a node to a single string; list children are joined with a space."""
    if isinstance(node, Block):
        return joined_text(node.content)
    if isinstance(node, ListItem):
        pieces = [joined_text(node.content)]
        pieces.extend(flatten_text(child) for child in node.children or ())
        return ' '.join(piece for piece in pieces if piece)
    if isinstance(node, (ListNode, Root)):
        return ' '.join(text for text in (flatten_text(c) for c in node.children) if text)
    raise TypeError(f"Unknown node type: {type(node).__name__}")


def iter_nodes(node: Node) -> Iterator[Node]:
    """Yield the node and all of its descendants in document order."""
    yield node
    if isinstance(node, (Root, ListNode)):
        for child in node.children:
            yield from iter_nodes(child)
    elif isinstance(node, ListItem):
        for child in node.children or ():
            yield from iter_nodes(child)


def iter_review_nodes(node: Node) -> Iterator[ReviewNode]:
    """Yield every Block and ListItem, the nodes a reviewer can decide on."""
    for item in iter_nodes(node):
        if isinstance(item, (Block, ListItem)):
            yield item


def summarize(tree: Node) -> Dict[str, int]:
    """Count reviewable nodes per status."""
    counts = {status.value: 0 for status in Status}
    total = 0
    for node in iter_review_nodes(tree):
        counts[node.status.value] += 1
        total += 1
    counts['total'] = total
    return counts


def list_changes(tree: Node) -> List[ReviewNode]:
    """Reviewable nodes whose status is anything but unchanged, in document order."""
    return [node for node in iter_review_nodes(tree) if node.status != Status.UNCHANGED]
