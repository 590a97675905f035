#! python3

# Test data locations and synthetic proc tree builders.

import os
from typing import Dict, List, Optional

TESTDATA_SUBDIR = "testdata"
PROC_TESTDATA_SUBDIR = f"{TESTDATA_SUBDIR}/proc"
MPSTAT_TESTDATA_SUBDIR = f"{TESTDATA_SUBDIR}/mpstat"

repo_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

proc_testdata_root = os.path.join(repo_root, PROC_TESTDATA_SUBDIR)
mpstat_testdata_root = os.path.join(repo_root, MPSTAT_TESTDATA_SUBDIR)


class FakeCpuStatsCollector:
    # Returns canned stats without blocking for the interval.
    def __init__(self, cpu_stats: Optional[List] = None):
        self.cpu_stats = cpu_stats or []
        self.num_calls = 0

    def collect(self) -> List:
        self.num_calls += 1
        return self.cpu_stats


def load_mpstat_output(name: str) -> str:
    with open(os.path.join(mpstat_testdata_root, name), "rt") as f:
        return f.read()


def make_counters_content(
    counters: Dict[str, List[int]],
    num_cpus: Optional[int] = None,
    descriptions: Optional[Dict[str, str]] = None,
) -> str:
    if num_cpus is None:
        num_cpus = max((len(c) for c in counters.values()), default=0)
    if descriptions is None:
        descriptions = {}
    lines = [" " * 11 + "".join(f"CPU{cpu:<8d}" for cpu in range(num_cpus))]
    for name, values in counters.items():
        line = f"{name:>10}:" + "".join(f"{v:11d}" for v in values)
        description = descriptions.get(name)
        if description:
            line += "   " + description
        lines.append(line)
    return "\n".join(lines) + "\n"


def write_proc_file(proc_root: str, name: str, content: str) -> str:
    path = os.path.join(proc_root, name)
    os.makedirs(os.path.dirname(path), exist_ok=True)
    with open(path, "wt") as f:
        f.write(content)
    return path


def write_counters(
    proc_root: str,
    name: str,
    counters: Dict[str, List[int]],
    num_cpus: Optional[int] = None,
    descriptions: Optional[Dict[str, str]] = None,
) -> str:
    return write_proc_file(
        proc_root,
        name,
        make_counters_content(counters, num_cpus=num_cpus, descriptions=descriptions),
    )


def write_irq_affinity(
    proc_root: str,
    irq: str,
    hint: Optional[str] = None,
    aff: Optional[str] = None,
):
    if hint is not None:
        write_proc_file(proc_root, os.path.join("irq", irq, "affinity_hint"), hint + "\n")
    if aff is not None:
        write_proc_file(proc_root, os.path.join("irq", irq, "smp_affinity_list"), aff + "\n")
