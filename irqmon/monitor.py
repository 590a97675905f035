#! /usr/bin/env python3

# The monitoring loop: one warm-up pass, then collect/render cycles.

from typing import Iterable, List, Optional, TextIO

from .common import DEFAULT_PROC_ROOT
from .counter_collector import CounterCollector
from .cpu_stats import DEFAULT_MPSTAT, make_cpu_stats_collector
from .interrupts_collector import HardIrqCollector
from .name_filter import make_name_patterns
from .presenter import Presenter
from .softirqs_collector import SoftIrqCollector
from .state import MonitorState
from .tracked_totals import TrackedTotals

DEFAULT_INTERVAL_SEC = 1

# Always firing vectors, excluded from the "ever changed" judgment:
DEFAULT_EXCLUDE_PATTERNS = [
    "^LOC:",
    "^RES:",
    "^CAL:",
    "^TLB:",
    "^TIMER:",
    "^SCHED:",
    "^RCU:",
]


def make_collectors() -> List[CounterCollector]:
    # /proc/interrupts first, it establishes the online CPU count:
    return [HardIrqCollector(), SoftIrqCollector()]


def make_state(
    exclude: Optional[Iterable[str]] = None,
    track: Optional[Iterable[str]] = None,
    proc_root: str = DEFAULT_PROC_ROOT,
    warmup_totals: bool = True,
) -> MonitorState:
    return MonitorState(
        proc_root=proc_root,
        exclude=make_name_patterns(
            DEFAULT_EXCLUDE_PATTERNS if exclude is None else exclude
        ),
        tracked=TrackedTotals(make_name_patterns(track or [])),
        warmup_totals=warmup_totals,
    )


def collect_counters(
    state: MonitorState,
    collectors: Iterable[CounterCollector],
    first_pass: bool = False,
):
    for collector in collectors:
        collector.collect(state, first_pass=first_pass)


def warm_up(state: MonitorState, collectors: Iterable[CounterCollector]):
    collect_counters(state, collectors, first_pass=True)


def run_cycle(
    state: MonitorState,
    collectors: Iterable[CounterCollector],
    cpu_collector,
    presenter: Presenter,
):
    """Run one refresh: wait for the CPU stats, collect the counters, render.

    The CPU stats collection blocks for the interval and comes first, ahead
    of the counter collection, rather than the collect, wait, render order
    of a plain polling loop. This way the rendered interrupt deltas and the
    CPU breakdown cover the same interval.
    """
    cpu_stats = cpu_collector.collect()
    collect_counters(state, collectors)
    state.cycle_num += 1
    presenter.render(state, cpu_stats)


def run(
    interval: int = DEFAULT_INTERVAL_SEC,
    count: Optional[int] = None,
    exclude: Optional[Iterable[str]] = None,
    track: Optional[Iterable[str]] = None,
    proc_root: str = DEFAULT_PROC_ROOT,
    mpstat: str = DEFAULT_MPSTAT,
    clear_screen: bool = True,
    warmup_totals: bool = True,
    fp: Optional[TextIO] = None,
    cpu_collector=None,
):
    state = make_state(
        exclude=exclude,
        track=track,
        proc_root=proc_root,
        warmup_totals=warmup_totals,
    )
    collectors = make_collectors()
    if cpu_collector is None:
        cpu_collector = make_cpu_stats_collector(interval, mpstat=mpstat, proc_root=proc_root)
    presenter = Presenter(interval, clear_screen=clear_screen, fp=fp)

    warm_up(state, collectors)
    while count is None or state.cycle_num < count:
        run_cycle(state, collectors, cpu_collector, presenter)
    return state
