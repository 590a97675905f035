#! /usr/bin/env python3

# Running totals of the deltas of all rows matching a tracked name pattern.

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional

from .common import safe_div
from .name_filter import NamePattern


@dataclass
class TrackedSummary:
    name: str
    total: int = 0
    avg_per_cpu: float = 0
    total_per_sec: float = 0
    avg_per_sec_per_cpu: float = 0


class TrackedTotals:
    """Totals accumulated since the monitor started, keyed by pattern text.

    A counter line contributes its per CPU deltas to every pattern it
    matches, so one row may feed several totals.
    """

    def __init__(self, patterns: Optional[Iterable[NamePattern]] = None):
        self.patterns: List[NamePattern] = list(patterns or [])
        self.totals: Dict[str, int] = {pattern.text: 0 for pattern in self.patterns}

    def __len__(self) -> int:
        return len(self.patterns)

    def add(self, line: str, deltas: Iterable[int]):
        matching = [pattern for pattern in self.patterns if pattern.matches(line)]
        if not matching:
            return
        delta_sum = sum(deltas)
        for pattern in matching:
            self.totals[pattern.text] += delta_sum

    def get(self, name: str) -> int:
        return self.totals[name]

    def summary(self, online_cpus: Optional[int], interval: float) -> List[TrackedSummary]:
        online_cpus = online_cpus or 0
        return [
            TrackedSummary(
                name=pattern.text,
                total=self.totals[pattern.text],
                avg_per_cpu=safe_div(self.totals[pattern.text], online_cpus),
                total_per_sec=safe_div(self.totals[pattern.text], interval),
                avg_per_sec_per_cpu=safe_div(
                    safe_div(self.totals[pattern.text], interval), online_cpus
                ),
            )
            for pattern in self.patterns
        ]
