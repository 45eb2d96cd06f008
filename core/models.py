"""
Extraction Models
Value types produced by the expression parser and the attribute locators.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

KIND_SIMPLE = 'simple'
KIND_TEMPLATE = 'template'
KIND_HELPER = 'helper'
KIND_MIXED = 'mixed'
EXTRACTION_KINDS = (KIND_SIMPLE, KIND_TEMPLATE, KIND_HELPER, KIND_MIXED)


@dataclass(frozen=True)
class ConditionalClass:
    """A space-separated class list, applied when `condition` holds (always when None)."""
    classes: str
    condition: Optional[str] = None

    def tokens(self) -> List[str]:
        return self.classes.split()

    def to_dict(self) -> Dict:
        result = {'classes': self.classes}
        if self.condition is not None:
            result['condition'] = self.condition
        return result


@dataclass(frozen=True)
class SourceRange:
    start: int
    end: int

    def contains(self, position: int) -> bool:
        # End is inclusive so a cursor right after the closing delimiter still matches
        return self.start <= position <= self.end

    def to_dict(self) -> Dict:
        return {'start': self.start, 'end': self.end}


@dataclass
class ClassExtraction:
    class_strings: List[str]
    conditional_classes: List[ConditionalClass]
    range: SourceRange
    kind: str = KIND_SIMPLE
    attribute: str = field(default='', compare=False)

    @classmethod
    def build(cls, conditional_classes: List[ConditionalClass], start: int, end: int,
              kind: str, attribute: str = '') -> 'ClassExtraction':
        """Create an extraction whose class_strings mirror its conditional classes."""
        if kind not in EXTRACTION_KINDS:
            raise ValueError(f"Unknown extraction kind: {kind}")
        if end <= start:
            raise ValueError(f"Empty extraction range: {start}..{end}")
        return cls(
            class_strings=[cc.classes for cc in conditional_classes],
            conditional_classes=list(conditional_classes),
            range=SourceRange(start, end),
            kind=kind,
            attribute=attribute,
        )

    def to_dict(self) -> Dict:
        return {
            'kind': self.kind,
            'attribute': self.attribute,
            'range': self.range.to_dict(),
            'class_strings': list(self.class_strings),
            'conditional_classes': [cc.to_dict() for cc in self.conditional_classes],
        }
