import sys
import os
import random
import pytest
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))
from diffcore.inline_diff import inline_diff, tokenize_words
from diffcore.nodes import InlinePart, joined_text


def original_side(parts):
    return joined_text(parts, skip_added=True)


def modified_side(parts):
    return joined_text(parts, skip_removed=True)


PAIRS = [
    ('Hard hat (Class G)', 'Hard hat (Class E or G)'),
    ('Stay calm and do not run.', 'Stay calm and walk quickly.'),
    ('<strong>Workers</strong> must wear PPE.', '<strong>All workers</strong> must wear PPE at all times.'),
    ('', 'Gather at the assembly point.'),
    ('Steel-toed boots', ''),
    ('Aggregate size: 10mm', 'Aggregate size: 10–14mm'),
    ('one two three', 'three two one'),
]


@pytest.mark.parametrize('original,modified', PAIRS)
def test_parts_rebuild_both_sides(original, modified):
    parts = inline_diff(original, modified)
    assert original_side(parts) == original
    assert modified_side(parts) == modified
    assert all(not (part.added and part.removed) for part in parts)


@pytest.mark.parametrize('granularity', ['char', 'line'])
def test_other_granularities_rebuild_both_sides(granularity):
    original = 'first line\nsecond line\n'
    modified = 'first line\nsecond edited line\nthird line\n'
    parts = inline_diff(original, modified, granularity=granularity)
    assert original_side(parts) == original
    assert modified_side(parts) == modified


def test_insertion_keeps_common_prefix_and_suffix():
    parts = inline_diff('Hard hat (Class G)', 'Hard hat (Class E or G)')
    assert parts == [
        InlinePart('Hard hat (Class '),
        InlinePart('E or ', added=True),
        InlinePart('G)'),
    ]


def test_identical_text_is_one_unchanged_part():
    assert inline_diff('Same text', 'Same text') == [InlinePart('Same text')]
    assert inline_diff('', '') == []


def test_one_sided_text():
    assert inline_diff('', 'New') == [InlinePart('New', added=True)]
    assert inline_diff('Old', '') == [InlinePart('Old', removed=True)]


def test_replacement_is_removed_then_added():
    parts = inline_diff('Cement: C25/30', 'Cement: C30/37')
    changes = [part for part in parts if part.added or part.removed]
    assert changes[0].removed
    assert changes[-1].added


def test_shared_whitespace_between_replacements_is_kept():
    parts = inline_diff('one two', 'three four')
    assert parts == [
        InlinePart('one', removed=True),
        InlinePart('three', added=True),
        InlinePart(' '),
        InlinePart('two', removed=True),
        InlinePart('four', added=True),
    ]


def test_tags_are_single_tokens():
    assert tokenize_words('<b class="x">bold</b> text') == ['<b class="x">', 'bold', '</b>', ' ', 'text']
    parts = inline_diff('<b>bold</b> text', '<i>bold</i> text')
    assert InlinePart('<b>', removed=True) in parts
    assert InlinePart('<i>', added=True) in parts


def test_character_granularity():
    parts = inline_diff('cat', 'cut', granularity='char')
    assert parts == [
        InlinePart('c'),
        InlinePart('a', removed=True),
        InlinePart('u', added=True),
        InlinePart('t'),
    ]


def test_line_granularity():
    parts = inline_diff('a\nb\n', 'a\nc\n', granularity='line')
    assert parts == [
        InlinePart('a\n'),
        InlinePart('b\n', removed=True),
        InlinePart('c\n', added=True),
    ]


def test_unknown_granularity():
    with pytest.raises(ValueError):
        inline_diff('a', 'b', granularity='sentence')


def test_part_cannot_be_added_and_removed():
    with pytest.raises(ValueError):
        InlinePart('x', added=True, removed=True)


def changed_token_count(parts):
    return sum(len(tokenize_words(part.text)) for part in parts if part.added or part.removed)


def minimal_token_edits(original, modified):
    a = tokenize_words(original)
    b = tokenize_words(modified)
    lengths = [[0] * (len(b) + 1) for _ in range(len(a) + 1)]
    for i in range(len(a) - 1, -1, -1):
        for j in range(len(b) - 1, -1, -1):
            if a[i] == b[j]:
                lengths[i][j] = lengths[i + 1][j + 1] + 1
            else:
                lengths[i][j] = max(lengths[i + 1][j], lengths[i][j + 1])
    return len(a) + len(b) - 2 * lengths[0][0]


def test_repeated_words_keep_shared_prefix():
    original = 'wear the hard hat and the vest'
    modified = 'wear the vest and wear the hard hat'
    parts = inline_diff(original, modified)
    assert parts[0] == InlinePart('wear the ')
    assert original_side(parts) == original
    assert modified_side(parts) == modified
    assert changed_token_count(parts) == minimal_token_edits(original, modified)


def test_shared_prefix_kept_when_words_repeat():
    original = 'c c a a c b a c'
    modified = 'c c d a c a c c a'
    parts = inline_diff(original, modified)
    assert parts[0].text.startswith('c c ')
    assert not parts[0].added and not parts[0].removed
    assert changed_token_count(parts) == minimal_token_edits(original, modified)


def test_edit_script_is_minimal_for_random_texts():
    rng = random.Random(20240611)
    for _ in range(300):
        original = ' '.join(rng.choice('abcd') for _ in range(rng.randint(0, 9)))
        modified = ' '.join(rng.choice('abcd') for _ in range(rng.randint(0, 9)))
        parts = inline_diff(original, modified)
        assert original_side(parts) == original
        assert modified_side(parts) == modified
        assert changed_token_count(parts) == minimal_token_edits(original, modified)


def test_changes_within_a_run_are_removed_first():
    parts = inline_diff('alpha beta gamma', 'alpha delta epsilon gamma')
    kinds = ['removed' if part.removed else 'added' if part.added else 'equal' for part in parts]
    for previous, current in zip(kinds, kinds[1:]):
        assert (previous, current) != ('added', 'removed')
