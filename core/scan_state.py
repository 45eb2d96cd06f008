"""
Scan State Module
Tracks string context and bracket nesting over a single left-to-right pass.
"""

from typing import Optional

QUOTES = ('"', "'", '`')
OPENERS = ('(', '[', '{')
CLOSERS = (')', ']', '}')


class ScanState:
    """
    Per-scan cursor state. A position is "top level" (neutral) when it is
    outside any string literal and at bracket depth zero.

    Create one per scan; it is mutated per character and must not be reused.
    """

    def __init__(self, nesting_depth: int = 0):
        self.nesting_depth = nesting_depth
        self.current_quote: Optional[str] = None

    @property
    def in_string(self) -> bool:
        return self.current_quote is not None

    @property
    def is_neutral(self) -> bool:
        return self.current_quote is None and self.nesting_depth == 0

    def update(self, char: str, prev_char: str) -> None:
        """Advance over `char`; `prev_char` is only used to detect a backslash escape."""
        escaped = prev_char == '\\'
        if self.current_quote is None:
            if char in QUOTES and not escaped:
                self.current_quote = char
            elif char in OPENERS:
                self.nesting_depth += 1
            elif char in CLOSERS:
                # Bracket kinds are not distinguished; a stray closer leaves the scan non-neutral
                self.nesting_depth -= 1
        elif char == self.current_quote and not escaped:
            self.current_quote = None
