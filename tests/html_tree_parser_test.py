import sys
import os
import pytest
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))
from diffcore.html_tree_parser import HTMLTreeParser, parse_html
from diffcore.nodes import Block, BlockTag, InlinePart, ListItem, ListKind, ListNode, Root


def test_blocks_keep_inner_markup():
    tree = parse_html('<p>Hello <b>world</b></p><h2>Title</h2>')
    assert tree == Root(children=(
        Block(tag=BlockTag.PARAGRAPH, id='block-0', content=(InlinePart('Hello <b>world</b>'),)),
        Block(tag=BlockTag.HEADING2, id='block-1', content=(InlinePart('Title'),)),
    ))


def test_all_heading_levels_are_blocks():
    html = ''.join(f'<h{n}>H{n}</h{n}>' for n in range(1, 7))
    tree = parse_html(html)
    assert [child.tag.value for child in tree.children] == ['h1', 'h2', 'h3', 'h4', 'h5', 'h6']


def test_list_items_and_kinds():
    tree = parse_html('<ol><li>First</li><li>Second</li></ol><ul><li>Third</li></ul>')
    ordered, unordered = tree.children
    assert ordered.kind == ListKind.ORDERED
    assert unordered.kind == ListKind.UNORDERED
    assert [item.id for item in ordered.children] == ['li-0', 'li-1']
    assert unordered.children[0] == ListItem(id='li-2', content=(InlinePart('Third'),))


def test_nested_list_is_lifted_out_of_item_content():
    tree = parse_html('<ul><li>Two<ul><li>Sub</li></ul></li></ul>')
    item = tree.children[0].children[0]
    assert item.content == (InlinePart('Two'),)
    assert item.children == (
        ListNode(kind=ListKind.UNORDERED, children=(ListItem(id='li-1', content=(InlinePart('Sub'),)),)),
    )


def test_block_inside_item_becomes_child():
    tree = parse_html('<ul><li><p>Para</p></li></ul>')
    item = tree.children[0].children[0]
    assert item.content == ()
    assert item.children == (Block(tag=BlockTag.PARAGRAPH, id='block-0', content=(InlinePart('Para'),)),)


def test_empty_list_items_are_skipped():
    tree = parse_html('<ul><li>A</li><li>   </li><li>B</li></ul>')
    items = tree.children[0].children
    assert [item.content[0].text for item in items] == ['A', 'B']


def test_container_recurses_into_blocks():
    tree = parse_html('<div><section><p>A</p></section><article><h3>B</h3></article></div>')
    assert [child.content[0].text for child in tree.children] == ['A', 'B']


def test_container_without_blocks_falls_back_to_paragraph():
    tree = parse_html('<div>Just text <b>bold</b></div>')
    assert tree.children == (
        Block(tag=BlockTag.PARAGRAPH, id='block-0', content=(InlinePart('Just text <b>bold</b>'),)),
    )


def test_container_fallback_can_be_configured():
    parser = HTMLTreeParser(container_tags={'aside'})
    tree = parser.parse('<aside>Note</aside>')
    assert tree.children[0].content == (InlinePart('Note'),)


def test_unknown_tags_are_transparent():
    tree = parse_html('<blockquote><span><p>Quoted</p></span></blockquote>')
    assert tree.children == (
        Block(tag=BlockTag.PARAGRAPH, id='block-0', content=(InlinePart('Quoted'),)),
    )


def test_plain_text_document_becomes_paragraph():
    tree = parse_html('Just some text')
    assert tree == Root(children=(
        Block(tag=BlockTag.PARAGRAPH, id='block-0', content=(InlinePart('Just some text'),)),
    ))


def test_empty_and_blank_input_return_none():
    assert parse_html('') is None
    assert parse_html('   \n ') is None
    assert parse_html('<div></div>') is None
    assert parse_html(None) is None


def test_comments_and_body_wrapper():
    tree = parse_html('<html><body><!-- note --><p>A</p></body></html>')
    assert len(tree.children) == 1
    assert tree.children[0].content == (InlinePart('A'),)


def test_malformed_html_is_repaired():
    tree = parse_html('<ul><li>Open item<li>Another</ul><p>Unclosed')
    assert len(tree.children) == 2
    items = tree.children[0].children
    assert [item.content for item in items] == [(InlinePart('Open item'),), (InlinePart('Another'),)]
    assert tree.children[1] == Block(tag=BlockTag.PARAGRAPH, id='block-0', content=(InlinePart('Unclosed'),))


def test_implicitly_closed_items_are_siblings():
    tree = parse_html('<ul><li>one<li>two<li>three</ul>')
    items = tree.children[0].children
    assert [item.id for item in items] == ['li-0', 'li-1', 'li-2']
    assert [item.content[0].text for item in items] == ['one', 'two', 'three']
    assert all(item.children is None for item in items)


def test_unclosed_paragraph_does_not_swallow_list():
    tree = parse_html('<p>intro<ul><li>x</li></ul>')
    assert len(tree.children) == 2
    assert tree.children[0].content == (InlinePart('intro'),)
    assert tree.children[1].kind == ListKind.UNORDERED
    assert tree.children[1].children[0].content == (InlinePart('x'),)


def test_html_parser_builder_can_be_selected():
    tree = HTMLTreeParser(features='html.parser').parse('<p>Hello</p>')
    assert tree.children[0].content == (InlinePart('Hello'),)


def test_parse_file(tmp_path):
    path = tmp_path / 'doc.html'
    path.write_text('<p>From disk</p>', encoding='utf-8')
    tree = HTMLTreeParser().parse_file(path)
    assert tree.children[0].content == (InlinePart('From disk'),)


def test_parse_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        HTMLTreeParser().parse_file(tmp_path / 'missing.html')
