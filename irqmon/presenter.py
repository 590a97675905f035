#! /usr/bin/env python3

# Render one monitor frame: CPU breakdown, changed interrupt rows, tracked totals.

import socket
import sys
from typing import List, Optional, TextIO

from tabulate import tabulate

from . import PROG_NAME, __version__
from .affinity import get_affinity_info
from .common import is_numeric_name, ts
from .counter_table import CounterRow
from .cpu_stats import CpuStats
from .state import MonitorState

CLEAR_SCREEN = "\033[H\033[2J"

CPU_STATS_HEADERS = [
    "CPU",
    "%usr",
    "%nice",
    "%sys",
    "%iowait",
    "%irq",
    "%soft",
    "%steal",
    "%guest",
    "%idle",
]

IRQ_NAME_HEADER = "IRQ"
IRQ_DESCRIPTION_HEADER = "Description"
IRQ_AFFINITY_HEADER = "Affinity"

TRACKED_HEADERS = ["Tracked", "Total", "Avg/CPU", "Total/s", "Avg/s/CPU"]


def irq_row(row: CounterRow, num_cpus: int, proc_root: str) -> List:
    deltas: List = list(row.delta[:num_cpus])
    deltas.extend([""] * (num_cpus - len(deltas)))
    affinity = (
        str(get_affinity_info(row.name, proc_root=proc_root))
        if is_numeric_name(row.name)
        else ""
    )
    return [row.name] + deltas + [" ".join(row.description), affinity]


def irq_rows(state: MonitorState) -> List[List]:
    num_cpus = state.online_cpus or 0
    rows = sorted(
        state.hardirqs.changed_rows() + state.softirqs.changed_rows(),
        key=lambda row: row.name,
    )
    return [irq_row(row, num_cpus, state.proc_root) for row in rows]


def irq_headers(state: MonitorState) -> List[str]:
    cpu_labels = state.hardirqs.cpu_labels[: state.online_cpus or 0]
    return [IRQ_NAME_HEADER] + cpu_labels + [IRQ_DESCRIPTION_HEADER, IRQ_AFFINITY_HEADER]


def cpu_stats_rows(cpu_stats: List[CpuStats]) -> List[List]:
    return [[stats.cpu] + stats.values() for stats in cpu_stats]


def tracked_rows(state: MonitorState, interval: float) -> List[List]:
    return [
        [s.name, s.total, s.avg_per_cpu, s.total_per_sec, s.avg_per_sec_per_cpu]
        for s in state.tracked.summary(state.online_cpus, interval)
    ]


class Presenter:
    def __init__(
        self,
        interval: int,
        clear_screen: bool = True,
        fp: Optional[TextIO] = None,
    ):
        self.interval = interval
        self.clear_screen = clear_screen
        self.fp = fp
        self.hostname = socket.gethostname()

    def title(self, state: MonitorState) -> str:
        return (
            f"{PROG_NAME} {__version__} - {self.hostname} - {ts()}"
            + f"  interval: {self.interval}s  cpus: {state.online_cpus or 0}"
        )

    def format_frame(self, state: MonitorState, cpu_stats: List[CpuStats]) -> str:
        sections = [self.title(state)]
        sections.append(
            tabulate(cpu_stats_rows(cpu_stats), headers=CPU_STATS_HEADERS, floatfmt=".2f")
        )
        sections.append(tabulate(irq_rows(state), headers=irq_headers(state)))
        if len(state.tracked) > 0:
            sections.append(
                tabulate(
                    tracked_rows(state, self.interval),
                    headers=TRACKED_HEADERS,
                    floatfmt=".2f",
                )
            )
        return "\n\n".join(sections)

    def render(self, state: MonitorState, cpu_stats: List[CpuStats]):
        fp = self.fp if self.fp is not None else sys.stdout
        if self.clear_screen:
            fp.write(CLEAR_SCREEN)
        print(self.format_frame(state, cpu_stats), file=fp, flush=True)
