#! /usr/bin/env python3

# /proc/softirqs collector, e.g.:
#
#                     CPU0       CPU1       CPU2       CPU3
#           HI:          0          0          1          0
#        TIMER:     301911     285372     290711     279416
#       NET_RX:       1532       1212       4321        899
#
# The file may list possible rather than online CPUs; only the first
# online_cpus columns, as established by /proc/interrupts, are used.

from typing import List

from .common import CounterSourceError
from .counter_collector import CounterCollector, ParsedLine
from .counter_table import SOFTIRQS_SOURCE, CounterTable
from .state import MonitorState


class SoftIrqCollector(CounterCollector):
    source_file = SOFTIRQS_SOURCE

    def table(self, state: MonitorState) -> CounterTable:
        return state.softirqs

    def check_header(self, state: MonitorState, path: str, cpu_labels: List[str]) -> int:
        if state.online_cpus is None:
            raise CounterSourceError(f"{path}: online CPU count not known yet")
        if len(cpu_labels) < state.online_cpus:
            raise CounterSourceError(
                f"{path}: want at least {state.online_cpus} CPU columns, got {len(cpu_labels)}"
            )
        return state.online_cpus

    def parse_line(self, path: str, line_num: int, line: str, num_cpus: int) -> ParsedLine:
        name, counters, _ = super().parse_line(path, line_num, line, num_cpus)
        return name, counters, []
