#! /usr/bin/env python3

# Exclusion and tracked name patterns, matched against raw counter lines.

from dataclasses import dataclass
from typing import Iterable, List

PREFIX_MARKER = "^"

MATCH_SUBSTRING = "substring"
MATCH_PREFIX = "prefix"


@dataclass(frozen=True)
class NamePattern:
    # The text as given by the user, also used as the tracked total key:
    text: str
    needle: str
    mode: str = MATCH_SUBSTRING

    def matches(self, line: str) -> bool:
        if self.mode == MATCH_PREFIX:
            return line.lstrip().startswith(self.needle)
        return self.needle in line


def make_name_pattern(text: str) -> NamePattern:
    if text.startswith(PREFIX_MARKER):
        return NamePattern(text=text, needle=text[len(PREFIX_MARKER) :], mode=MATCH_PREFIX)
    return NamePattern(text=text, needle=text)


def make_name_patterns(texts: Iterable[str]) -> List[NamePattern]:
    return [make_name_pattern(text) for text in texts]


def any_match(patterns: Iterable[NamePattern], line: str) -> bool:
    return any(pattern.matches(line) for pattern in patterns)
