"""
Expression Parser Module
Resolves small JavaScript-like class expressions into conditional classes.

Productions are tried in a fixed order and the first one that yields classes wins:

    1. Object literal      { 'a': cond, b: true }
    2. String literal      'a b'
    3. Logical AND         cond && 'a'
    4. Logical OR          cond || 'a'
    5. Nullish coalescing  cond ?? 'a'
    6. Ternary             cond ? 'a' : other ? 'b' : 'c'
    7. Template string     `a ${cond ? 'b' : 'c'} d`

The string literal must come before the operator productions because operator
characters may appear inside a string. A production that cannot find its
delimiters simply returns None and the next one is tried.

Outside a ternary, '??' mixed with '&&' or '||' at the same level is a syntax
error in JavaScript, so such fragments never match.
"""

import logging
import re
from functools import lru_cache
from typing import Callable, List, Optional

from .config import MAX_EXPRESSION_DEPTH
from .delimiters import (
    extract_balanced,
    find_top_level_operator,
    split_top_level,
    strip_outer_parens,
    unwrap_bracketed,
)
from .models import ConditionalClass
from .scan_state import QUOTES, ScanState

# Set up logging
logger = logging.getLogger(__name__)

ParseResult = Optional[List[ConditionalClass]]

_IDENTIFIER = re.compile(r'^[A-Za-z_$][\w$]*$')
_SIMPLE_OPERAND = re.compile(
    r'^!*[A-Za-z_$][\w$]*'
    r'(?:(?:\?\.|\.)[A-Za-z_$][\w$]*|\[[^\[\]]*\])*'
    r'(?:\([^()]*\))?$'
)


class ExpressionTooDeep(Exception):
    """Raised internally when nesting exceeds MAX_EXPRESSION_DEPTH."""

    def __init__(self, depth: int):
        super().__init__(f"Expression nesting exceeds {MAX_EXPRESSION_DEPTH} levels (at {depth})")
        self.depth = depth


# ============================================================================
# Public API
# ============================================================================

def parse_expression(fragment: str) -> ParseResult:
    """
    Parse an isolated class expression.

    Returns:
        List of ConditionalClass in source order, or None when no production matches.

    Example:
        parse_expression("isActive && 'bg-blue-500'")
        -> [ConditionalClass(classes='bg-blue-500', condition='isActive')]
    """
    return _guarded(_parse, fragment)


def parse_object_literal(fragment: str) -> ParseResult:
    """Run only the object-literal production, e.g. for Vue :class="{...}"."""
    return _guarded(_object_literal, fragment)


def parse_template_string(fragment: str) -> ParseResult:
    """Run only the template-string production, e.g. for className={`...`}."""
    return _guarded(_template_string, fragment)


def _guarded(production: Callable[[str, int], ParseResult], fragment: str) -> ParseResult:
    try:
        result = production(fragment.strip(), 0)
    except ExpressionTooDeep as e:
        logger.debug(f"Dropping fragment: {e}")
        return None
    # Sub-results are shared through the parse cache
    return list(result) if result else None


def _parse(expr: str, depth: int) -> ParseResult:
    if depth > MAX_EXPRESSION_DEPTH:
        raise ExpressionTooDeep(depth)
    return _parse_cached(expr.strip(), depth, MAX_EXPRESSION_DEPTH)


@lru_cache(maxsize=4096)
def _parse_cached(expr: str, depth: int, limit: int) -> ParseResult:
    # `limit` only keys the cache on the current MAX_EXPRESSION_DEPTH
    if not expr or _mixes_nullish(expr):
        return None
    for production in _PRODUCTIONS:
        result = production(expr, depth)
        if result:
            return result
    return None


# ============================================================================
# Condition helpers
# ============================================================================

def _is_ternary_question(text: str, i: int) -> bool:
    """True when the '?' at i is a conditional operator, not part of '??' or '?.'."""
    prev_char = text[i - 1] if i > 0 else ''
    next_char = text[i + 1:i + 2]
    if prev_char == '?' or next_char == '?':
        return False
    # "a?.b" is optional chaining, but "a?.5:1" is a ternary
    return not (next_char == '.' and not text[i + 2:i + 3].isdigit())


def _find_ternary_question(expr: str) -> Optional[int]:
    start = 0
    while True:
        found = find_top_level_operator(expr, '?', start)
        if found is None:
            return None
        idx = found[0]
        if _is_ternary_question(expr, idx):
            return idx
        start = idx + 1


def _find_ternary_colon(rest: str) -> Optional[int]:
    """Index of the ':' that closes the ternary whose '?' precedes `rest`."""
    state = ScanState()
    pending = 0
    for i, char in enumerate(rest):
        state.update(char, rest[i - 1] if i > 0 else '')
        if not state.is_neutral:
            continue
        if char == '?' and _is_ternary_question(rest, i):
            pending += 1
        elif char == ':':
            if pending == 0:
                return i
            pending -= 1
    return None


def _has_top_level(expr: str, *tokens: str) -> bool:
    return any(find_top_level_operator(expr, token) is not None for token in tokens)


def _mixes_nullish(expr: str) -> bool:
    """a ?? b || 'c' without parentheses: rejected by JavaScript itself."""
    if _find_ternary_question(expr) is not None:
        return False
    return _has_top_level(expr, '??') and _has_top_level(expr, '&&', '||')


def _is_simple(condition: str) -> bool:
    return bool(_SIMPLE_OPERAND.match(condition)) or unwrap_bracketed(condition, '(', ')') is not None


def _group(condition: str) -> str:
    """Parenthesize a condition that would bind looser than '&&'."""
    if _has_top_level(condition, '||', '??') or _find_ternary_question(condition) is not None:
        return f"({condition})"
    return condition


def _negate(condition: str) -> str:
    return f"!{condition}" if _is_simple(condition) else f"!({condition})"


def _is_nullish(condition: str) -> str:
    return f"{condition} == null" if _is_simple(condition) else f"({condition}) == null"


def _conjoin(left: str, right: Optional[str]) -> str:
    if right is None:
        return left
    return f"{_group(left)} && {_group(right)}"


def _guard_all(classes: List[ConditionalClass], condition: str) -> List[ConditionalClass]:
    return [ConditionalClass(cc.classes, _conjoin(condition, cc.condition)) for cc in classes]


def _unwrap_string(expr: str) -> Optional[str]:
    """Body of a single string literal, trimmed; None if not one or if blank."""
    expr = expr.strip()
    if len(expr) < 2 or expr[0] not in QUOTES or expr[-1] != expr[0]:
        return None
    quote = expr[0]
    body = expr[1:-1]
    for i, char in enumerate(body):
        if char == quote and (i == 0 or body[i - 1] != '\\'):
            return None
    if quote == '`' and '${' in body:
        return None
    return body.strip() or None


# ============================================================================
# Productions
# ============================================================================

def _object_literal(expr: str, depth: int) -> ParseResult:
    body = unwrap_bracketed(expr, '{', '}')
    if body is None or not body.strip():
        return None
    result = []
    for entry in split_top_level(body):
        conditional = _object_entry(entry)
        if conditional is not None:
            result.append(conditional)
    return result or None


def _find_key_colon(entry: str) -> Optional[int]:
    # Only quotes matter here: 'hover:bg-blue-500': isActive
    state = ScanState()
    for i, char in enumerate(entry):
        state.update(char, entry[i - 1] if i > 0 else '')
        if char == ':' and not state.in_string:
            return i
    return None


def _object_entry(entry: str) -> Optional[ConditionalClass]:
    if entry.startswith('...'):
        return None
    colon = _find_key_colon(entry)
    if colon is None:
        # { active } is shorthand for { active: active }
        return ConditionalClass(entry, entry) if _IDENTIFIER.match(entry) else None

    key = entry[:colon].strip()
    value = entry[colon + 1:].strip()
    if not key or not value or key.startswith('['):
        return None
    if key[0] in QUOTES:
        classes = _unwrap_string(key)
        if classes is None:
            return None
    else:
        classes = key

    if value == 'true':
        return ConditionalClass(classes)
    if value == 'false' or value[0] in '{[':
        return None
    return ConditionalClass(classes, strip_outer_parens(value))


def _string_literal(expr: str, depth: int) -> ParseResult:
    classes = _unwrap_string(expr)
    return [ConditionalClass(classes)] if classes else None


def _split_operator(expr: str, token: str, *looser: str):
    """
    Split on the first top-level `token` unless the expression is really a
    ternary or an operator that binds looser than `token`.
    """
    if _find_ternary_question(expr) is not None or (looser and _has_top_level(expr, *looser)):
        return None
    found = find_top_level_operator(expr, token)
    if found is None or not found[1] or not found[2]:
        return None
    return strip_outer_parens(found[1]), found[2]


def _resolve_right(right: str, depth: int) -> ParseResult:
    classes = _unwrap_string(right)
    if classes is not None:
        return [ConditionalClass(classes)]
    return _parse(strip_outer_parens(right), depth + 1)


def _logical_and(expr: str, depth: int) -> ParseResult:
    split = _split_operator(expr, '&&', '||', '??')
    if split is None:
        return None
    condition, right = split
    resolved = _resolve_right(right, depth)
    return _guard_all(resolved, condition) if resolved else None


def _logical_or(expr: str, depth: int) -> ParseResult:
    # The fallback applies when the left side is falsy
    split = _split_operator(expr, '||')
    if split is None:
        return None
    condition, right = split
    resolved = _resolve_right(right, depth)
    return _guard_all(resolved, _negate(condition)) if resolved else None


def _nullish(expr: str, depth: int) -> ParseResult:
    split = _split_operator(expr, '??')
    if split is None:
        return None
    condition, right = split
    resolved = _resolve_right(right, depth)
    return _guard_all(resolved, _is_nullish(condition)) if resolved else None


def _ternary(expr: str, depth: int) -> ParseResult:
    """
    Parse cond ? a : b, chaining nested ternaries as else-if branches:

        a ? 'x' : b ? 'y' : 'z'  ->  x (a), y (!a && b), z (!a && !b)
    """
    question = _find_ternary_question(expr)
    if question is None:
        return None
    condition = strip_outer_parens(expr[:question])
    rest = expr[question + 1:]
    colon = _find_ternary_colon(rest)
    if colon is None or not condition:
        return None

    result = []
    true_branch = _parse(rest[:colon], depth + 1)
    if true_branch:
        result.extend(_guard_all(true_branch, condition))
    false_branch = _parse(rest[colon + 1:], depth + 1)
    if false_branch:
        result.extend(_guard_all(false_branch, _negate(condition)))
    return result or None


def _template_string(expr: str, depth: int) -> ParseResult:
    if len(expr) < 2 or expr[0] != '`' or expr[-1] != '`':
        return None
    body = expr[1:-1]
    result = []
    static = []

    def flush():
        text = ''.join(static).strip()
        if text:
            result.append(ConditionalClass(text))
        static.clear()

    i = 0
    while i < len(body):
        char = body[i]
        if char == '\\':
            static.append(body[i:i + 2])
            i += 2
        elif char == '`':
            # More than one literal, e.g. `a` + `b`
            return None
        elif body.startswith('${', i):
            flush()
            found = extract_balanced(body, i + 2, '{', '}')
            if found is None:
                return None
            interpolation, i = found
            parsed = _parse(interpolation, depth + 1)
            if parsed:
                result.extend(parsed)
            else:
                logger.debug(f"Unrecognized interpolation skipped: {interpolation.strip()!r}")
        else:
            static.append(char)
            i += 1
    flush()
    return result or None


_PRODUCTIONS = (
    _object_literal,
    _string_literal,
    _logical_and,
    _logical_or,
    _nullish,
    _ternary,
    _template_string,
)
