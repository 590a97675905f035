#! /usr/bin/env python3

# /proc/interrupts collector, e.g.:
#
#            CPU0       CPU1       CPU2       CPU3
#   0:         36          0          0          0   IO-APIC   2-edge      timer
#  95:     149210          0          0        155   IR-PCI-MSI 1572864-edge      eth0-rx-0
# NMI:          0          0          0          0   Non-maskable interrupts
# ERR:          0
# MIS:          0

from typing import List

from .common import CounterSourceError
from .counter_collector import CounterCollector, ParsedLine
from .counter_table import INTERRUPTS_SOURCE, CounterTable
from .state import MonitorState

# Rows holding a single system wide counter rather than one per CPU:
GLOBAL_COUNTER_NAMES = {"ERR", "MIS"}


class HardIrqCollector(CounterCollector):
    source_file = INTERRUPTS_SOURCE

    def table(self, state: MonitorState) -> CounterTable:
        return state.hardirqs

    def check_header(self, state: MonitorState, path: str, cpu_labels: List[str]) -> int:
        num_cpus = len(cpu_labels)
        if num_cpus == 0:
            raise CounterSourceError(f"{path}: no CPU columns in header")
        if state.online_cpus is None:
            state.online_cpus = num_cpus
        elif state.online_cpus != num_cpus:
            raise CounterSourceError(
                f"{path}: CPU column count changed from {state.online_cpus} to {num_cpus}"
            )
        return num_cpus

    def parse_line(self, path: str, line_num: int, line: str, num_cpus: int) -> ParsedLine:
        name, sep, rest = line.partition(":")
        name = name.strip()
        words = rest.split()
        if sep and name in GLOBAL_COUNTER_NAMES and len(words) == 1 and words[0].isdigit():
            return name, [int(words[0])], []
        return super().parse_line(path, line_num, line, num_cpus)
