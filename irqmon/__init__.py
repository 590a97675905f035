#! /usr/bin/env python3

PROG_NAME = "irqmon"
__version__ = "1.0.0"

from .affinity import AffinityInfo, get_affinity_info
from .common import (
    CounterSourceError,
    CpuStatsError,
    IrqmonError,
    safe_div,
)
from .counter_table import (
    INTERRUPTS_SOURCE,
    SOFTIRQS_SOURCE,
    CounterRow,
    CounterTable,
)
from .cpumask import (
    CPULIST_NONE,
    cpulist_to_cpumask,
    cpumask_to_cpulist,
    parse_affinity_hint,
)
from .interrupts_collector import HardIrqCollector
from .name_filter import NamePattern, any_match, make_name_pattern, make_name_patterns
from .softirqs_collector import SoftIrqCollector
from .state import MonitorState
from .tracked_totals import TrackedSummary, TrackedTotals
