"""
HTML Tree Parser Module
Parses an HTML fragment into the simplified block/list tree used for diffing.
"""

import copy
import logging
from pathlib import Path
from typing import List, Optional, Union

from bs4 import BeautifulSoup
from bs4.element import Tag

from .nodes import Block, BlockTag, InlinePart, ListItem, ListKind, ListNode, Node, Root
from utils.file_utils import read_file_content

logger = logging.getLogger(__name__)

BLOCK_TAGS = {tag.value: tag for tag in BlockTag}
LIST_TAGS = {kind.value: kind for kind in ListKind}
CONTAINER_TAGS = {'div', 'section', 'article'}

# Everything that is lifted out of a list item's own content
NESTED_TAGS = set(BLOCK_TAGS) | set(LIST_TAGS)


class _Counter:
    """Hands out positional ids, one sequence per node kind."""

    def __init__(self):
        self.counts = {}

    def next(self, prefix: str) -> str:
        index = self.counts.get(prefix, 0)
        self.counts[prefix] = index + 1
        return f"{prefix}-{index}"


class HTMLTreeParser:
    """Parser for HTML fragments."""

    def __init__(self, features: str = 'html5lib', container_tags=None):
        """Initialize the parser.

        Args:
            features: BeautifulSoup tree builder; html5lib closes implicit
                <li>/<p> tags the way browsers do
            container_tags: Layout tags that fall back to a paragraph when
                they hold no recognised block
        """
        self.features = features
        self.container_tags = set(container_tags) if container_tags is not None else CONTAINER_TAGS

    def parse_file(self, file_path: Union[str, Path]) -> Optional[Root]:
        """Parse an HTML file into a tree."""
        try:
            logger.info(f"Starting to parse file: {file_path}")
            content = read_file_content(Path(file_path))
            logger.debug(f"Successfully read file, content length: {len(content)}")
            return self.parse(content)
        except Exception as e:
            logger.error(f"Error parsing file {file_path}: {str(e)}", exc_info=True)
            raise

    def parse(self, html_content: str) -> Optional[Root]:
        """Parse HTML content into a Root tree, or None when there is nothing to diff."""
        logger.info("Starting HTML parsing")
        logger.debug(f"Input HTML content length: {len(html_content or '')}")

        soup = BeautifulSoup(html_content or '', self.features)

        # Start with the body tag if it exists, otherwise use the root
        root = soup.body if soup.body else soup
        ids = _Counter()
        children = self._collect(root, ids, container_fallback=True)

        if not children:
            text = root.get_text().strip()
            if not text:
                logger.info("No content found in HTML")
                return None
            logger.debug("No recognised blocks, using document text as a paragraph")
            children = [Block(tag=BlockTag.PARAGRAPH, id=ids.next('block'),
                              content=(InlinePart(text),))]

        logger.info(f"HTML parsing complete, {len(children)} top-level nodes")
        return Root(children=tuple(children))

    def _collect(self, element: Tag, ids: _Counter, container_fallback: bool) -> List[Node]:
        """Collect recognised nodes among the element's children, in document order."""
        nodes = []
        for child in element.children:
            if not isinstance(child, Tag):
                continue

            tag = child.name.lower()
            if tag in BLOCK_TAGS:
                logger.debug(f"Found block: {tag}")
                nodes.append(Block(tag=BLOCK_TAGS[tag], id=ids.next('block'),
                                   content=(InlinePart(child.decode_contents().strip()),)))
            elif tag in LIST_TAGS:
                nodes.append(self._parse_list(child, ids))
            elif tag in self.container_tags:
                nested = self._collect(child, ids, container_fallback)
                if nested:
                    nodes.extend(nested)
                elif container_fallback and child.get_text().strip():
                    logger.debug(f"Container {tag} has no blocks, using it as a paragraph")
                    nodes.append(Block(tag=BlockTag.PARAGRAPH, id=ids.next('block'),
                                       content=(InlinePart(child.decode_contents().strip()),)))
            else:
                nodes.extend(self._collect(child, ids, container_fallback))
        return nodes

    def _parse_list(self, element: Tag, ids: _Counter) -> ListNode:
        items = []
        for li in element.find_all('li', recursive=False):
            top = self._top_content(li)
            item_id = ids.next('li')
            nested = self._collect(li, ids, container_fallback=False)
            if not top and not nested:
                logger.debug(f"Skipping empty list item {item_id}")
                continue
            items.append(ListItem(
                id=item_id,
                content=(InlinePart(top),) if top else (),
                children=tuple(nested) if nested else None,
            ))
        logger.debug(f"Parsed {element.name} with {len(items)} items")
        return ListNode(kind=LIST_TAGS[element.name.lower()], children=tuple(items))

    def _top_content(self, li: Tag) -> str:
        """Return the item's own markup with nested lists and blocks removed."""
        detached = copy.copy(li)
        _strip_nested(detached)
        return detached.decode_contents().strip()


def _strip_nested(element: Tag) -> None:
    for child in list(element.children):
        if not isinstance(child, Tag):
            continue
        if child.name.lower() in NESTED_TAGS:
            child.extract()
        else:
            _strip_nested(child)


def parse_html(html_content: str) -> Optional[Root]:
    """Parse with the default parser settings."""
    return HTMLTreeParser().parse(html_content)
