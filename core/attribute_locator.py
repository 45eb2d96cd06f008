"""
Attribute Locator Module
One scanner per template dialect. Each scans the whole document, isolates the
dynamic payload of every class attribute it recognizes and hands it to the
expression parser. Malformed occurrences are skipped, never partially emitted.

Supported syntax:
    HTML / JSX   class="..."  className="..."
    JSX          className={`...`}  className={clsx(...)}  className={cond ? 'a' : 'b'}
    Vue          :class="..."  v-bind:class="..."
    Svelte       class:name={cond}  class:name
    Angular      [ngClass]="..."  [class.name]="cond"
    Solid        classList={{ name: cond }}
"""

import logging
import re
from typing import Callable, List, Optional, Tuple

from .config import HELPER_FUNCTIONS
from .delimiters import extract_balanced, split_top_level, unwrap_bracketed
from .expression_parser import parse_expression, parse_object_literal, parse_template_string
from .models import (
    KIND_HELPER,
    KIND_MIXED,
    KIND_SIMPLE,
    KIND_TEMPLATE,
    ClassExtraction,
    ConditionalClass,
)

# Set up logging
logger = logging.getLogger(__name__)

Locator = Callable[[str], List[ClassExtraction]]

# `class=` must not be the tail of a directive such as :class=, v-bind:class= or [class.x]=
_ATTR_BOUNDARY = r'(?<![\w:.\-\[@$])'

SIMPLE_PATTERN = re.compile(_ATTR_BOUNDARY + r'(class(?:Name)?)\s*=\s*(["\'])([^"\']*)\2')
JSX_EXPRESSION_PATTERN = re.compile(_ATTR_BOUNDARY + r'(class(?:Name)?)\s*=\s*\{')
HELPER_PATTERN = re.compile(
    _ATTR_BOUNDARY + r'(class(?:Name)?)\s*=\s*\{\s*('
    + '|'.join(re.escape(name) for name in HELPER_FUNCTIONS)
    + r')\s*\('
)
VUE_PATTERN = re.compile(r'(?<![\w\-])((?:v-bind)?:class)\s*=\s*(["\'])')
SVELTE_PATTERN = re.compile(r'(?<![\w\-:.])class:([\w\-:./\[\]]+?)(?:\s*=\s*\{|(?=\s|/?>))')
NG_CLASS_PATTERN = re.compile(r'\[ngClass\]\s*=\s*(["\'])')
ANGULAR_CLASS_PATTERN = re.compile(r'\[class\.([^\]\s]+)\]\s*=\s*(["\'])')
SOLID_PATTERN = re.compile(r'(?<![\w\-])classList\s*=\s*\{\s*\{')


# ============================================================================
# Shared helpers
# ============================================================================

def find_closing_quote(text: str, start: int, quote: str) -> Optional[int]:
    """
    Index of the attribute's closing quote, scanning from `start` (just after
    the opening quote). Backslash-escaped quotes are skipped, so
    :class="a \\"b\\" c" closes after c.
    """
    i = start
    while i < len(text):
        char = text[i]
        if char == '\\':
            i += 2
            continue
        if char == quote:
            return i
        i += 1
    return None


def _quoted_value(text: str, match: re.Match) -> Optional[Tuple[str, int]]:
    """Value of an attribute whose regex ends at the opening quote, and the index after its close."""
    quote = match.group(match.lastindex)
    close = find_closing_quote(text, match.end(), quote)
    if close is None:
        return None
    return text[match.end():close], close + 1


def _parse_arguments(args: List[str]) -> List[ConditionalClass]:
    """Parse each argument independently; array arguments are unwrapped one level."""
    result = []
    for arg in args:
        inner = unwrap_bracketed(arg, '[', ']')
        elements = split_top_level(inner) if inner is not None else [arg]
        for element in elements:
            parsed = parse_expression(element)
            if parsed:
                result.extend(parsed)
            else:
                logger.debug(f"Skipping unrecognized class argument: {element!r}")
    return result


def _parse_binding(content: str) -> Optional[List[ConditionalClass]]:
    """Object, array or expression value shared by Vue :class and Angular [ngClass]."""
    content = content.strip()
    if content.startswith('{'):
        return parse_object_literal(content)
    if content.startswith('['):
        inner = unwrap_bracketed(content, '[', ']')
        if inner is None:
            return None
        return _parse_arguments(split_top_level(inner)) or None
    parsed = parse_expression(content)
    if parsed:
        return parsed
    # Anything else is taken as a plain class list
    return [ConditionalClass(content)] if content else None


def _directive(name: str, condition: str) -> Optional[List[ConditionalClass]]:
    condition = condition.strip()
    if not name or not condition:
        return None
    if condition == 'true':
        return [ConditionalClass(name)]
    return [ConditionalClass(name, condition)]


# ============================================================================
# Locators
# ============================================================================

def extract_simple_strings(text: str) -> List[ClassExtraction]:
    """class="..." / className="..." static values."""
    extractions = []
    for match in SIMPLE_PATTERN.finditer(text):
        class_string = match.group(3).strip()
        if class_string:
            extractions.append(ClassExtraction.build(
                [ConditionalClass(class_string)], match.start(), match.end(),
                KIND_SIMPLE, match.group(1)))
    return extractions


def _jsx_expressions(text: str):
    """Yield (match, expression, end) for every className={...} with balanced braces."""
    for match in JSX_EXPRESSION_PATTERN.finditer(text):
        found = extract_balanced(text, match.end(), '{', '}')
        if found is None:
            logger.debug(f"Unbalanced class expression at offset {match.start()}")
            continue
        expression, end = found
        yield match, expression.strip(), end


def extract_template_literals(text: str) -> List[ClassExtraction]:
    """className={`static ${dynamic}`}"""
    extractions = []
    for match, expression, end in _jsx_expressions(text):
        if not expression.startswith('`'):
            continue
        conditional_classes = parse_template_string(expression)
        if conditional_classes:
            extractions.append(ClassExtraction.build(
                conditional_classes, match.start(), end, KIND_TEMPLATE, match.group(1)))
    return extractions


def extract_helper_functions(text: str) -> List[ClassExtraction]:
    """className={clsx('a', cond && 'b')} for the configured helper names."""
    extractions = []
    for match in HELPER_PATTERN.finditer(text):
        found = extract_balanced(text, match.end(), '(', ')')
        if found is None:
            continue
        args_content, args_end = found

        # The call must be the whole JSX expression: className={clsx(...)}
        close = args_end
        while close < len(text) and text[close].isspace():
            close += 1
        if close >= len(text) or text[close] != '}':
            continue

        array_body = unwrap_bracketed(args_content, '[', ']')
        args = split_top_level(array_body if array_body is not None else args_content)
        conditional_classes = _parse_arguments(args)
        if conditional_classes:
            extractions.append(ClassExtraction.build(
                conditional_classes, match.start(), close + 1, KIND_HELPER, match.group(1)))
    return extractions


def extract_jsx_expressions(text: str) -> List[ClassExtraction]:
    """className={cond ? 'a' : 'b'} and other bare expressions not covered above."""
    extractions = []
    for match, expression, end in _jsx_expressions(text):
        if expression.startswith('`') or HELPER_PATTERN.match(text, match.start()):
            continue
        conditional_classes = parse_expression(expression)
        if conditional_classes:
            extractions.append(ClassExtraction.build(
                conditional_classes, match.start(), end, KIND_MIXED, match.group(1)))
    return extractions


def extract_vue_class_bindings(text: str) -> List[ClassExtraction]:
    """:class="..." and v-bind:class="..." with object, array or expression values."""
    extractions = []
    for match in VUE_PATTERN.finditer(text):
        value = _quoted_value(text, match)
        if value is None:
            continue
        content, end = value
        conditional_classes = _parse_binding(content)
        if conditional_classes:
            extractions.append(ClassExtraction.build(
                conditional_classes, match.start(), end, KIND_HELPER, match.group(1)))
    return extractions


def extract_svelte_class_directives(text: str) -> List[ClassExtraction]:
    """class:name={cond}, plus the shorthand class:name meaning class:name={name}."""
    extractions = []
    for match in SVELTE_PATTERN.finditer(text):
        name = match.group(1)
        if match.group(0).endswith('{'):
            found = extract_balanced(text, match.end(), '{', '}')
            if found is None:
                continue
            condition, end = found
        else:
            condition, end = name, match.end()
        conditional_classes = _directive(name, condition)
        if conditional_classes:
            extractions.append(ClassExtraction.build(
                conditional_classes, match.start(), end, KIND_HELPER, f"class:{name}"))
    return extractions


def extract_angular_ng_class(text: str) -> List[ClassExtraction]:
    """[ngClass]="{'a': cond}" / [ngClass]="['a', cond ? 'b' : 'c']" """
    extractions = []
    for match in NG_CLASS_PATTERN.finditer(text):
        value = _quoted_value(text, match)
        if value is None:
            continue
        content, end = value
        conditional_classes = _parse_binding(content)
        if conditional_classes:
            extractions.append(ClassExtraction.build(
                conditional_classes, match.start(), end, KIND_HELPER, '[ngClass]'))
    return extractions


def extract_angular_class_bindings(text: str) -> List[ClassExtraction]:
    """[class.name]="cond" """
    extractions = []
    for match in ANGULAR_CLASS_PATTERN.finditer(text):
        value = _quoted_value(text, match)
        if value is None:
            continue
        condition, end = value
        conditional_classes = _directive(match.group(1), condition)
        if conditional_classes:
            extractions.append(ClassExtraction.build(
                conditional_classes, match.start(), end, KIND_HELPER, f"[class.{match.group(1)}]"))
    return extractions


def extract_solid_class_list(text: str) -> List[ClassExtraction]:
    """classList={{ name: cond }}: the object literal plus its JSX expression wrapper."""
    extractions = []
    for match in SOLID_PATTERN.finditer(text):
        found = extract_balanced(text, match.end(), '{', '}')
        if found is None:
            continue
        body, inner_end = found
        close = inner_end
        while close < len(text) and text[close].isspace():
            close += 1
        if close >= len(text) or text[close] != '}':
            continue
        conditional_classes = parse_object_literal('{' + body + '}')
        if conditional_classes:
            extractions.append(ClassExtraction.build(
                conditional_classes, match.start(), close + 1, KIND_HELPER, 'classList'))
    return extractions


# Concatenation order also breaks ties between extractions starting at the same offset
LOCATORS: Tuple[Locator, ...] = (
    extract_simple_strings,
    extract_template_literals,
    extract_helper_functions,
    extract_jsx_expressions,
    extract_vue_class_bindings,
    extract_svelte_class_directives,
    extract_angular_ng_class,
    extract_angular_class_bindings,
    extract_solid_class_list,
)
