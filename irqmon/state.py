#! /usr/bin/env python3

# The state owned by one monitor run.

from dataclasses import dataclass, field
from typing import List, Optional

from .common import DEFAULT_PROC_ROOT
from .counter_table import INTERRUPTS_SOURCE, SOFTIRQS_SOURCE, CounterTable
from .name_filter import NamePattern
from .tracked_totals import TrackedTotals


@dataclass
class MonitorState:
    proc_root: str = DEFAULT_PROC_ROOT
    exclude: List[NamePattern] = field(default_factory=list)
    tracked: TrackedTotals = field(default_factory=TrackedTotals)
    # Whether the warm-up pass deltas (i.e. the raw counters) feed the
    # tracked totals:
    warmup_totals: bool = True
    # Set from the /proc/interrupts header by the first collection:
    online_cpus: Optional[int] = None
    hardirqs: CounterTable = field(
        default_factory=lambda: CounterTable(source=INTERRUPTS_SOURCE)
    )
    softirqs: CounterTable = field(
        default_factory=lambda: CounterTable(source=SOFTIRQS_SOURCE)
    )
    cycle_num: int = 0
