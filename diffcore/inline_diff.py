"""
Inline Diff Module
Word, character and line level alignment of two text spans.
"""

import logging
import re
from typing import Callable, Dict, List, Tuple

from diff_match_patch import diff_match_patch

from .nodes import InlinePart

logger = logging.getLogger(__name__)

# HTML tags stay whole so markup is never split inside a tag
WORD_TOKEN_RE = re.compile(r'<[^<>]*>|\w+|\s+|[^\w\s]', re.UNICODE)

# First code point handed to a token; surrogates are skipped
TOKEN_CODE_START = 0x100
SURROGATE_RANGE = (0xD800, 0xE000)


def tokenize_words(text: str) -> List[str]:
    """Split text into tags, words, whitespace runs and single punctuation marks."""
    return WORD_TOKEN_RE.findall(text)


def tokenize_chars(text: str) -> List[str]:
    return list(text)


def tokenize_lines(text: str) -> List[str]:
    return text.splitlines(keepends=True)


GRANULARITIES: Dict[str, Callable[[str], List[str]]] = {
    'word': tokenize_words,
    'char': tokenize_chars,
    'line': tokenize_lines,
}


class _TokenCodec:
    """Maps each distinct token to one character so diff-match-patch can align token sequences."""

    def __init__(self):
        self.token_to_char = {}
        self.char_to_token = {}
        self.next_code = TOKEN_CODE_START

    def encode(self, tokens: List[str]) -> str:
        chars = []
        for token in tokens:
            if token not in self.token_to_char:
                if SURROGATE_RANGE[0] <= self.next_code < SURROGATE_RANGE[1]:
                    self.next_code = SURROGATE_RANGE[1]
                char = chr(self.next_code)
                self.token_to_char[token] = char
                self.char_to_token[char] = token
                self.next_code += 1
            chars.append(self.token_to_char[token])
        return ''.join(chars)

    def decode(self, encoded: str) -> str:
        return ''.join(self.char_to_token[char] for char in encoded)


def _common_prefix(a: List[str], b: List[str]) -> int:
    n = 0
    limit = min(len(a), len(b))
    while n < limit and a[n] == b[n]:
        n += 1
    return n


def _common_suffix(a: List[str], b: List[str], prefix: int) -> int:
    n = 0
    limit = min(len(a), len(b)) - prefix
    while n < limit and a[-1 - n] == b[-1 - n]:
        n += 1
    return n


def _align_middle(a: List[str], b: List[str]) -> List[Tuple[int, str]]:
    """Minimal edit script between two token lists as (op, text) pairs."""
    if not a:
        return [(diff_match_patch.DIFF_INSERT, ''.join(b))]
    if not b:
        return [(diff_match_patch.DIFF_DELETE, ''.join(a))]

    codec = _TokenCodec()
    encoded_a = codec.encode(a)
    encoded_b = codec.encode(b)

    dmp = diff_match_patch()
    # No deadline: the half-match shortcut is skipped and the bisection
    # runs to completion, which keeps the script minimal.
    dmp.Diff_Timeout = 0
    diffs = dmp.diff_main(encoded_a, encoded_b, False)
    return [(op, codec.decode(text)) for op, text in diffs]


def inline_diff(original: str, modified: str, granularity: str = 'word') -> List[InlinePart]:
    """Compute ordered added/removed/equal runs between two strings.

    The shared token prefix and suffix are kept as unchanged runs; the
    middle is aligned with Myers' O(N*D) difference algorithm, so the
    number of added and removed tokens is minimal. Joining the parts that
    are not added gives back ``original``; joining the parts that are not
    removed gives back ``modified``. A replaced run is reported as a
    removed part immediately followed by an added part.

    Args:
        original: Text before the edit
        modified: Text after the edit
        granularity: One of ``GRANULARITIES``

    Returns:
        List of InlinePart, adjacent parts of the same kind merged
    """
    try:
        tokenize = GRANULARITIES[granularity]
    except KeyError:
        raise ValueError(f"Unknown granularity: {granularity!r}") from None

    original = original or ''
    modified = modified or ''
    if original == modified:
        return [InlinePart(original)] if original else []

    a = tokenize(original)
    b = tokenize(modified)
    prefix = _common_prefix(a, b)
    suffix = _common_suffix(a, b, prefix)
    logger.debug(f"Inline diff over {len(a)} / {len(b)} {granularity} tokens, "
                 f"{prefix} shared before and {suffix} after")

    parts: List[InlinePart] = []
    _append(parts, ''.join(a[:prefix]))
    for op, text in _align_middle(a[prefix:len(a) - suffix], b[prefix:len(b) - suffix]):
        if op == diff_match_patch.DIFF_EQUAL:
            _append(parts, text)
        elif op == diff_match_patch.DIFF_DELETE:
            _append(parts, text, removed=True)
        else:
            _append(parts, text, added=True)
    _append(parts, ''.join(a[len(a) - suffix:]))
    return _order_replacements(parts)


def _append(parts: List[InlinePart], text: str, added: bool = False, removed: bool = False) -> None:
    if not text:
        return
    if parts and parts[-1].added == added and parts[-1].removed == removed:
        parts[-1] = InlinePart(parts[-1].text + text, added, removed)
    else:
        parts.append(InlinePart(text, added, removed))


def _order_replacements(parts: List[InlinePart]) -> List[InlinePart]:
    """Within each run of changes, put the removed text before the added text."""
    result: List[InlinePart] = []
    removed = added = ''
    for part in parts + [None]:
        if part is not None and (part.added or part.removed):
            if part.removed:
                removed += part.text
            else:
                added += part.text
            continue
        if removed:
            result.append(InlinePart(removed, removed=True))
        if added:
            result.append(InlinePart(added, added=True))
        removed = added = ''
        if part is not None:
            result.append(part)
    return result
