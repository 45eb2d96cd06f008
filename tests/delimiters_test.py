import sys
import os
import pytest
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))
from core.scan_state import ScanState
from core.delimiters import (
    extract_balanced,
    find_top_level_operator,
    split_top_level,
    strip_outer_parens,
    unwrap_bracketed,
)

def scan(text):
    state = ScanState()
    for i, char in enumerate(text):
        state.update(char, text[i - 1] if i else '')
    return state

def test_scan_state_tracks_depth_and_quotes():
    state = scan("fn(a, [b")
    assert state.nesting_depth == 2
    assert not state.is_neutral
    state = scan("'it is'")
    assert state.current_quote is None
    assert state.is_neutral
    state = scan("'open")
    assert state.current_quote == "'"
    assert state.in_string

def test_scan_state_ignores_escaped_quote():
    state = scan("'a\\'b")
    assert state.in_string
    state = scan("'a\\'b'")
    assert state.is_neutral

def test_scan_state_brackets_inside_strings_ignored():
    assert scan("'(['").is_neutral
    assert scan('`{`').is_neutral

def test_scan_state_unbalanced_closer_is_not_neutral():
    state = scan("a)")
    assert state.nesting_depth == -1
    assert not state.is_neutral

def test_extract_balanced_nested():
    assert extract_balanced("foo(bar(baz))", 4, '(', ')') == ("bar(baz)", 13)

def test_extract_balanced_other_kinds_are_content():
    text = "clsx('a', { b: [c] }, ')')}"
    content, end = extract_balanced(text, 5, '(', ')')
    assert content == "'a', { b: [c] }, ')'"
    assert text[end] == '}'

def test_extract_balanced_unterminated():
    assert extract_balanced("clsx('a', b", 5, '(', ')') is None
    assert extract_balanced("clsx('a)", 5, '(', ')') is None

def test_extract_balanced_rejects_non_brackets():
    with pytest.raises(ValueError):
        extract_balanced("abc", 0, '<', '>')

def test_split_top_level():
    assert split_top_level("'a', obj.method(1, 2), ['b', 'c']") == ["'a'", "obj.method(1, 2)", "['b', 'c']"]
    assert split_top_level("'a, b', c") == ["'a, b'", "c"]
    assert split_top_level(" , a,, b , ") == ["a", "b"]
    assert split_top_level("") == []

def test_find_top_level_operator_leftmost():
    idx, before, after = find_top_level_operator("a ? b : c ? d : e", '?')
    assert idx == 2
    assert before == "a"
    assert after == "b : c ? d : e"

def test_find_top_level_operator_skips_nested_and_strings():
    assert find_top_level_operator("(a && b)", '&&') is None
    assert find_top_level_operator("'a && b'", '&&') is None
    found = find_top_level_operator("(a || b) && 'x'", '&&')
    assert found[1] == "(a || b)"
    assert found[2] == "'x'"

def test_find_top_level_operator_start():
    idx, _, _ = find_top_level_operator("a ?? b ? c : d", '?', 5)
    assert idx == 7

def test_unwrap_bracketed():
    assert unwrap_bracketed("[a, [b]]", '[', ']') == "a, [b]"
    assert unwrap_bracketed("[a], [b]", '[', ']') is None
    assert unwrap_bracketed("{ x: 1 }", '{', '}') == " x: 1 "
    assert unwrap_bracketed("x", '(', ')') is None

def test_strip_outer_parens():
    assert strip_outer_parens("((isActive))") == "isActive"
    assert strip_outer_parens(" (a && b) ") == "a && b"
    assert strip_outer_parens("(a) || (b)") == "(a) || (b)"
    assert strip_outer_parens("fn(a)") == "fn(a)"
