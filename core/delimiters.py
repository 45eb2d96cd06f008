"""
Delimiter Matcher Module
Balanced-bracket extraction and top-level splitting built on ScanState.
"""

from typing import List, Optional, Tuple

from .scan_state import CLOSERS, OPENERS, ScanState


def _prev(text: str, i: int) -> str:
    return text[i - 1] if i > 0 else ''


def extract_balanced(text: str, start: int, open_char: str,
                     close_char: str) -> Optional[Tuple[str, int]]:
    """
    Extract the content between an already-consumed opener and its closer.

    Args:
        text: Full text to scan
        start: Index just after the opening delimiter (scanning starts at depth 1)
        open_char: Opening delimiter kind, e.g. '('
        close_char: Closing delimiter kind, e.g. ')'

    Returns:
        (content, index after the closer), or None when the text ends first
        or the brackets do not close with the expected kind.

    Example:
        extract_balanced("foo(bar(baz))", 4, "(", ")") -> ("bar(baz)", 13)
    """
    if open_char not in OPENERS or close_char not in CLOSERS:
        raise ValueError(f"Not a bracket pair: {open_char!r} {close_char!r}")
    state = ScanState(nesting_depth=1)
    for i in range(start, len(text)):
        char = text[i]
        state.update(char, _prev(text, i))
        if state.nesting_depth == 0 and not state.in_string and char == close_char:
            return text[start:i], i + 1
    return None


def split_top_level(text: str, separator: str = ',') -> List[str]:
    """Split on a single-character separator found at top level; empty segments are dropped."""
    parts = []
    state = ScanState()
    segment_start = 0
    for i, char in enumerate(text):
        state.update(char, _prev(text, i))
        if char == separator and state.is_neutral:
            segment = text[segment_start:i].strip()
            if segment:
                parts.append(segment)
            segment_start = i + 1
    segment = text[segment_start:].strip()
    if segment:
        parts.append(segment)
    return parts


def find_top_level_operator(text: str, token: str,
                            start: int = 0) -> Optional[Tuple[int, str, str]]:
    """
    Find the leftmost top-level occurrence of `token` at or after `start`.

    Returns (index, text before trimmed, text after trimmed) or None. Taking
    the leftmost match is what makes "a ? b : c ? d : e" split on the outer "?".
    """
    state = ScanState()
    last = len(text) - len(token)
    for i in range(len(text)):
        if i > last:
            break
        state.update(text[i], _prev(text, i))
        if i >= start and state.is_neutral and text.startswith(token, i):
            return i, text[:i].strip(), text[i + len(token):].strip()
    return None


def unwrap_bracketed(text: str, open_char: str, close_char: str) -> Optional[str]:
    """Inner text when all of `text` is one balanced bracket pair, e.g. "[a, [b]]" -> "a, [b]"."""
    text = text.strip()
    if len(text) < 2 or text[0] != open_char or text[-1] != close_char:
        return None
    found = extract_balanced(text, 1, open_char, close_char)
    if found is None or found[1] != len(text):
        return None
    return found[0]


def strip_outer_parens(text: str) -> str:
    """Remove redundant outer parentheses: "((a && b))" -> "a && b", "(a) || (b)" unchanged."""
    text = text.strip()
    while text.startswith('('):
        inner = unwrap_bracketed(text, '(', ')')
        if inner is None:
            break
        text = inner.strip()
    return text
