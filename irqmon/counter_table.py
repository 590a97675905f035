#! /usr/bin/env python3

# Per source (hardirqs, softirqs) counter storage with per CPU deltas.

from dataclasses import dataclass, field
from typing import Dict, List, Optional

INTERRUPTS_SOURCE = "interrupts"
SOFTIRQS_SOURCE = "softirqs"


@dataclass
class CounterRow:
    name: str
    current: List[int] = field(default_factory=list)
    delta: List[int] = field(default_factory=list)
    # Trailing tokens (controller, hw interrupt, devices), display only:
    description: List[str] = field(default_factory=list)
    ever_changed: bool = False

    def update(self, counters: List[int]) -> List[int]:
        # A row seen for the first time has an all zero baseline:
        prev = self.current
        self.delta = [
            counter - (prev[i] if i < len(prev) else 0)
            for i, counter in enumerate(counters)
        ]
        self.current = list(counters)
        return self.delta

    def has_delta(self) -> bool:
        return any(d != 0 for d in self.delta)


@dataclass
class CounterTable:
    source: str
    cpu_labels: List[str] = field(default_factory=list)
    rows: Dict[str, CounterRow] = field(default_factory=dict)

    def get(self, name: str) -> Optional[CounterRow]:
        return self.rows.get(name)

    def get_or_create(self, name: str) -> CounterRow:
        row = self.rows.get(name)
        if row is None:
            row = CounterRow(name=name)
            self.rows[name] = row
        return row

    def changed_rows(self) -> List[CounterRow]:
        return [self.rows[name] for name in sorted(self.rows) if self.rows[name].ever_changed]
