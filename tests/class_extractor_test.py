import sys
import os
import pytest
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))
from core.class_extractor import (
    ClassExtractor,
    combine_class_strings,
    extract_all_class_attributes,
    find_extraction_at_position,
    remove_overlapping_extractions,
)
from core.models import ClassExtraction, ConditionalClass

MIXED_TEMPLATE = """<template>
  <div class="container" :class="{ dark: isDark }">
    <span class:active={on}>x</span>
    <li [class.selected]="sel" [ngClass]="['a', b ? 'c' : 'd']"></li>
    <p classList={{ bold: strong }}></p>
    <b className={`m-2 ${big ? 'text-xl' : 'text-base'}`}></b>
  </div>
</template>
"""

def make(start, end, classes='x'):
    return ClassExtraction.build([ConditionalClass(classes)], start, end, 'simple')

def test_simple_and_helper_in_one_document():
    text = "<div className=\"flex\"><span className={clsx('a', x && 'b')}>"
    extractions = extract_all_class_attributes(text)
    assert len(extractions) == 2
    assert extractions[0].kind == 'simple'
    assert extractions[0].class_strings == ['flex']
    assert extractions[1].kind == 'helper'
    assert len(extractions[1].conditional_classes) == 2

def test_static_and_bound_class_on_same_element():
    text = '<div class="static" :class="{ active: isActive }">'
    extractions = extract_all_class_attributes(text)
    assert len(extractions) == 2
    assert extractions[0].class_strings == ['static']
    assert extractions[1].conditional_classes == [ConditionalClass('active', 'isActive')]

def test_every_dialect_ordered_and_non_overlapping():
    extractions = extract_all_class_attributes(MIXED_TEMPLATE)
    assert [e.kind for e in extractions] == [
        'simple', 'helper', 'helper', 'helper', 'helper', 'helper', 'template',
    ]
    for previous, current in zip(extractions, extractions[1:]):
        assert previous.range.end <= current.range.start
    assert extractions[-1].class_strings == ['m-2', 'text-xl', 'text-base']

def test_false_svelte_directive_is_reported():
    extractions = extract_all_class_attributes('<div class:active={false} class:x={true}>')
    assert [e.conditional_classes for e in extractions] == [
        [ConditionalClass('active', 'false')],
        [ConditionalClass('x')],
    ]

def test_no_attributes():
    assert extract_all_class_attributes('') == []
    assert extract_all_class_attributes('<div id="main">plain text</div>') == []

def test_remove_overlapping_extractions():
    first, overlapping, adjacent = make(0, 10), make(5, 15), make(10, 20)
    tie = make(0, 3)
    assert remove_overlapping_extractions([adjacent, first, tie, overlapping]) == [first, adjacent]

def test_remove_overlapping_extractions_keeps_first_listed_on_equal_start():
    listed_first, listed_second = make(0, 3, 'a'), make(0, 10, 'b')
    assert remove_overlapping_extractions([listed_first, listed_second]) == [listed_first]

def test_find_extraction_at_position():
    text = '<div class="a"></div>'
    extractions = extract_all_class_attributes(text)
    start = text.index('class')
    end = text.index('>')
    assert find_extraction_at_position(extractions, start) is extractions[0]
    assert find_extraction_at_position(extractions, end) is extractions[0]
    assert find_extraction_at_position(extractions, start - 1) is None
    assert find_extraction_at_position(extractions, end + 1) is None
    assert find_extraction_at_position([], 0) is None

def test_combine_class_strings():
    assert combine_class_strings(['flex gap-4', 'flex  p-2']) == 'flex gap-4 p-2'
    assert combine_class_strings([]) == ''

def test_build_validates_kind_and_range():
    with pytest.raises(ValueError):
        ClassExtraction.build([ConditionalClass('a')], 0, 5, 'unknown')
    with pytest.raises(ValueError):
        ClassExtraction.build([ConditionalClass('a')], 5, 5, 'simple')

def test_to_dict():
    extraction = ClassExtraction.build(
        [ConditionalClass('a'), ConditionalClass('b', 'x')], 2, 9, 'helper', 'className')
    assert extraction.to_dict() == {
        'kind': 'helper',
        'attribute': 'className',
        'range': {'start': 2, 'end': 9},
        'class_strings': ['a', 'b'],
        'conditional_classes': [{'classes': 'a'}, {'classes': 'b', 'condition': 'x'}],
    }

def test_extract_classes_counts_and_locations():
    content = '<div class="flex p-2">\n<span className={isActive && \'flex font-bold\'}>'
    class_counter, class_locations = ClassExtractor().extract_classes(content)
    assert class_counter['flex'] == 2
    assert class_counter['font-bold'] == 1
    assert class_locations['flex'] == ['line 1', 'line 2 (if isActive)']
    assert class_locations['p-2'] == ['line 1']

def test_summarize():
    content = '<div class="flex p-2">\n<span className={isActive && \'flex font-bold\'}>'
    summary = ClassExtractor().summarize(content)
    assert len(summary['extractions']) == 2
    assert summary['unique_classes'] == ['flex', 'p-2', 'font-bold']
    assert summary['class_counts'] == {'flex': 2, 'p-2': 1, 'font-bold': 1}
    assert summary['conditional_only'] == ['font-bold']
