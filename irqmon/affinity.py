#! /usr/bin/env python3

# Per IRQ affinity, read on demand from /proc/irq/N/{affinity_hint,smp_affinity_list}.

from dataclasses import dataclass

from .common import DEFAULT_PROC_ROOT, is_numeric_name, proc_path, read_optional_text
from .cpumask import CPULIST_NONE, cpumask_to_cpulist, parse_affinity_hint

IRQ_SUBDIR = "irq"
AFFINITY_HINT_FILE = "affinity_hint"
SMP_AFFINITY_LIST_FILE = "smp_affinity_list"


@dataclass
class AffinityInfo:
    hint: str = CPULIST_NONE
    aff: str = CPULIST_NONE

    def __str__(self) -> str:
        return f"hint={self.hint},aff={self.aff}"


def get_affinity_hint(irq: str, proc_root: str = DEFAULT_PROC_ROOT) -> str:
    content = read_optional_text(proc_path(proc_root, IRQ_SUBDIR, irq, AFFINITY_HINT_FILE))
    if content is None:
        return CPULIST_NONE
    try:
        mask = parse_affinity_hint(content)
    except ValueError:
        return CPULIST_NONE
    return cpumask_to_cpulist(mask)


def get_smp_affinity_list(irq: str, proc_root: str = DEFAULT_PROC_ROOT) -> str:
    content = read_optional_text(
        proc_path(proc_root, IRQ_SUBDIR, irq, SMP_AFFINITY_LIST_FILE)
    )
    return content if content is not None else CPULIST_NONE


def get_affinity_info(irq: str, proc_root: str = DEFAULT_PROC_ROOT) -> AffinityInfo:
    if not is_numeric_name(irq):
        raise ValueError(f"{irq!r}: affinity is only available for numeric IRQs")
    return AffinityInfo(
        hint=get_affinity_hint(irq, proc_root=proc_root),
        aff=get_smp_affinity_list(irq, proc_root=proc_root),
    )
