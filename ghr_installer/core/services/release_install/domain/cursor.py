"""
L1 Domain — Prefix cursor (pure).

An immutable, non-backtracking consumer for filename grammars.  Each
``expect*`` call returns a new cursor; once an expectation fails the
cursor stays invalid and every further call is a no-op failure.
Alternatives are tried in the given order and the first prefix that
fits wins; there is no retry with a later alternative.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Iterable


@dataclass(frozen=True)
class Cursor:
    remaining: str
    consumed: str = ""
    valid: bool = True

    @classmethod
    def over(cls, text: str) -> Cursor:
        return cls(remaining=text)

    @property
    def matched(self) -> str:
        """Text consumed so far, or ``""`` once the cursor has failed."""
        return self.consumed if self.valid else ""

    @property
    def at_end(self) -> bool:
        return self.valid and not self.remaining

    def expect(self, literal: str) -> Cursor:
        if self.valid and self.remaining.startswith(literal):
            return Cursor(self.remaining[len(literal):], self.consumed + literal)
        return self._fail()

    def expect_any(self, literals: Iterable[str]) -> Cursor:
        if self.valid:
            for literal in literals:
                if self.remaining.startswith(literal):
                    return Cursor(self.remaining[len(literal):], self.consumed + literal)
        return self._fail()

    def expect_end(self) -> Cursor:
        return self if self.at_end else self._fail()

    def peek(self, literal: str) -> bool:
        return self.valid and self.remaining.startswith(literal)

    def _fail(self) -> Cursor:
        return self if not self.valid else replace(self, valid=False)
