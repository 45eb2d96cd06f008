"""
Class Extractor Module
Runs every attribute locator over a document, resolves overlaps and reports class usage.
"""

import logging
from collections import Counter, defaultdict
from typing import Any, Dict, Iterable, List, Optional, Tuple

from .attribute_locator import LOCATORS
from .models import ClassExtraction

# Set up logging
logger = logging.getLogger(__name__)


def remove_overlapping_extractions(extractions: Iterable[ClassExtraction]) -> List[ClassExtraction]:
    """
    Order by start offset and keep an extraction only if it begins at or after
    the end of the previously kept one. On overlap the earlier start wins; for
    equal starts the extraction listed first wins.
    """
    ordered = sorted(extractions, key=lambda e: e.range.start)
    unique = []
    last_end = -1
    for extraction in ordered:
        if extraction.range.start >= last_end:
            unique.append(extraction)
            last_end = extraction.range.end
        else:
            logger.debug(f"Dropping overlapping {extraction.kind} extraction at {extraction.range.start}")
    return unique


def extract_all_class_attributes(document_text: str) -> List[ClassExtraction]:
    """
    Find every class attribute in the document, in every supported dialect.

    Returns:
        Non-overlapping extractions in document order.

    Example:
        extract_all_class_attributes('<div className="flex gap-4" />')
        -> [ClassExtraction(class_strings=['flex gap-4'], ..., kind='simple')]
    """
    extractions = []
    for locator in LOCATORS:
        extractions.extend(locator(document_text))
    return remove_overlapping_extractions(extractions)


def find_extraction_at_position(extractions: List[ClassExtraction],
                                position: int) -> Optional[ClassExtraction]:
    """First extraction whose range contains the character offset, if any."""
    for extraction in extractions:
        if extraction.range.contains(position):
            return extraction
    return None


def combine_class_strings(class_strings: Iterable[str]) -> str:
    """Unique classes across strings, first-seen order: ['flex gap-4', 'flex p-2'] -> 'flex gap-4 p-2'."""
    seen = {}
    for class_string in class_strings:
        for cls in class_string.split():
            seen.setdefault(cls, None)
    return ' '.join(seen)


class ClassExtractor:
    """Document-level class usage built on extract_all_class_attributes."""

    def extract(self, content: str) -> List[ClassExtraction]:
        return extract_all_class_attributes(content)

    def extract_classes(self, content: str) -> Tuple[Counter, Dict[str, List[str]]]:
        """Count every class token and record where it appears (line and condition)."""
        class_counter = Counter()
        class_locations = defaultdict(list)
        for extraction in self.extract(content):
            line_no = content.count('\n', 0, extraction.range.start) + 1
            for conditional in extraction.conditional_classes:
                location = f"line {line_no}"
                if conditional.condition is not None:
                    location += f" (if {conditional.condition})"
                for cls in conditional.tokens():
                    class_counter[cls] += 1
                    class_locations[cls].append(location)
        return class_counter, dict(class_locations)

    def summarize(self, content: str) -> Dict[str, Any]:
        """JSON-ready summary of one document."""
        extractions = self.extract(content)
        class_counter, class_locations = self.extract_classes(content)

        always, conditional = set(), set()
        for extraction in extractions:
            for cc in extraction.conditional_classes:
                (conditional if cc.condition is not None else always).update(cc.tokens())

        logger.debug(f"Summarized {len(extractions)} extractions, {len(class_counter)} distinct classes")
        return {
            'extractions': [e.to_dict() for e in extractions],
            'unique_classes': combine_class_strings(
                s for e in extractions for s in e.class_strings).split(),
            'class_counts': dict(class_counter),
            'class_locations': class_locations,
            'conditional_only': sorted(conditional - always),
        }
