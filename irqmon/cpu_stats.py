#! /usr/bin/env python3

# Per CPU utilization over one interval.
#
# The primary collector runs `mpstat -P ALL INTERVAL 1`, which also provides
# the monitor's tick: the call blocks for the interval. When mpstat is not
# installed, /proc/stat is sampled around a sleep instead.

import os
import shutil
import subprocess
import time
from dataclasses import dataclass
from typing import Dict, List, Optional

from .common import (
    DEFAULT_PROC_ROOT,
    CpuStatsError,
    log_stderr,
    proc_path,
    read_text,
    safe_div,
)

DEFAULT_MPSTAT = "mpstat"

# Indexes in /proc/stat cpuN lines:
STAT_CPU_USER_TICKS = 0
STAT_CPU_NICE_TICKS = 1
STAT_CPU_SYSTEM_TICKS = 2
STAT_CPU_IDLE_TICKS = 3
STAT_CPU_IOWAIT_TICKS = 4
STAT_CPU_IRQ_TICKS = 5
STAT_CPU_SOFTIRQ_TICKS = 6
STAT_CPU_STEAL_TICKS = 7
STAT_CPU_GUEST_TICKS = 8
STAT_CPU_GUEST_NICE_TICKS = 9
STAT_CPU_NUM_STATS = 10

# mpstat column -> CpuStats field; older sysstat versions use %user:
MPSTAT_CPU_COLUMN = "CPU"
MPSTAT_COLUMNS = {
    "%usr": "usr",
    "%user": "usr",
    "%nice": "nice",
    "%sys": "sys",
    "%iowait": "iowait",
    "%irq": "irq",
    "%soft": "soft",
    "%steal": "steal",
    "%guest": "guest",
    "%idle": "idle",
}

CPU_STATS_FIELDS = ["usr", "nice", "sys", "iowait", "irq", "soft", "steal", "guest", "idle"]


@dataclass
class CpuStats:
    cpu: str
    usr: float = 0.0
    nice: float = 0.0
    sys: float = 0.0
    iowait: float = 0.0
    irq: float = 0.0
    soft: float = 0.0
    steal: float = 0.0
    guest: float = 0.0
    idle: float = 0.0

    def values(self) -> List[float]:
        return [getattr(self, f) for f in CPU_STATS_FIELDS]


def parse_mpstat_output(output: str) -> List[CpuStats]:
    """Extract the per CPU lines from mpstat -P ALL output.

    The columns are located through the header line, since the time stamp
    takes 1 or 2 fields depending on the locale (13:01:02 vs 01:01:02 PM).
    The banner, header, "all", blank and "Average" lines are skipped.
    """
    cpu_stats = []
    header = None
    for line in output.splitlines():
        words = line.split()
        if not words or words[0].startswith("Average"):
            continue
        if MPSTAT_CPU_COLUMN in words and ("%usr" in words or "%user" in words):
            header = words
            cpu_index = words.index(MPSTAT_CPU_COLUMN)
            field_index = {
                MPSTAT_COLUMNS[col]: i for i, col in enumerate(words) if col in MPSTAT_COLUMNS
            }
            continue
        if header is None or len(words) != len(header):
            continue
        cpu = words[cpu_index]
        if cpu == "all":
            continue
        try:
            values = {f: float(words[i]) for f, i in field_index.items()}
        except ValueError:
            continue
        cpu_stats.append(CpuStats(cpu=cpu, **values))
    return cpu_stats


class MpstatCollector:
    def __init__(self, interval: int, mpstat: str = DEFAULT_MPSTAT):
        self.interval = interval
        self.mpstat = mpstat

    def command(self) -> List[str]:
        return [self.mpstat, "-P", "ALL", str(self.interval), "1"]

    def environ(self) -> Dict[str, str]:
        # C locale numbers; LC_ALL takes precedence over LC_NUMERIC so it
        # cannot be passed along:
        env = dict(os.environ, LC_NUMERIC="C")
        env.pop("LC_ALL", None)
        return env

    def collect(self) -> List[CpuStats]:
        cmd = self.command()
        p = subprocess.run(
            cmd,
            check=False,
            capture_output=True,
            encoding="utf-8",
            env=self.environ(),
        )
        if p.returncode != 0:
            raise CpuStatsError(
                f"{' '.join(cmd)}: exit code {p.returncode}: {p.stderr.strip()}"
            )
        cpu_stats = parse_mpstat_output(p.stdout)
        if not cpu_stats:
            raise CpuStatsError(f"{' '.join(cmd)}: no per CPU stats in output")
        return cpu_stats


def parse_proc_stat_cpus(content: str) -> Dict[str, List[int]]:
    cpu_ticks = {}
    for line in content.splitlines():
        words = line.split()
        if not words or not words[0].startswith("cpu") or words[0] == "cpu":
            continue
        ticks = [int(w) for w in words[1 : STAT_CPU_NUM_STATS + 1]]
        ticks.extend([0] * (STAT_CPU_NUM_STATS - len(ticks)))
        cpu_ticks[words[0][len("cpu") :]] = ticks
    return cpu_ticks


def cpu_stats_from_ticks(cpu: str, prev: List[int], crt: List[int]) -> CpuStats:
    d = [max(c - p, 0) for c, p in zip(crt, prev)]
    # user and nice include guest and guest_nice, as per the kernel accounting:
    usr = max(d[STAT_CPU_USER_TICKS] - d[STAT_CPU_GUEST_TICKS], 0)
    nice = max(d[STAT_CPU_NICE_TICKS] - d[STAT_CPU_GUEST_NICE_TICKS], 0)
    total = sum(d[: STAT_CPU_STEAL_TICKS + 1])
    return CpuStats(
        cpu=cpu,
        usr=safe_div(usr * 100, total),
        nice=safe_div(nice * 100, total),
        sys=safe_div(d[STAT_CPU_SYSTEM_TICKS] * 100, total),
        iowait=safe_div(d[STAT_CPU_IOWAIT_TICKS] * 100, total),
        irq=safe_div(d[STAT_CPU_IRQ_TICKS] * 100, total),
        soft=safe_div(d[STAT_CPU_SOFTIRQ_TICKS] * 100, total),
        steal=safe_div(d[STAT_CPU_STEAL_TICKS] * 100, total),
        guest=safe_div(d[STAT_CPU_GUEST_TICKS] * 100, total),
        idle=safe_div(d[STAT_CPU_IDLE_TICKS] * 100, total),
    )


class ProcStatCollector:
    def __init__(self, interval: int, proc_root: str = DEFAULT_PROC_ROOT):
        self.interval = interval
        self.stat_path = proc_path(proc_root, "stat")

    def sample(self) -> Dict[str, List[int]]:
        try:
            return parse_proc_stat_cpus(read_text(self.stat_path))
        except (OSError, ValueError) as e:
            raise CpuStatsError(f"{self.stat_path}: {e}") from e

    def collect(self) -> List[CpuStats]:
        prev = self.sample()
        time.sleep(self.interval)
        crt = self.sample()
        return [
            cpu_stats_from_ticks(cpu, prev[cpu], ticks)
            for cpu, ticks in crt.items()
            if cpu in prev
        ]


def make_cpu_stats_collector(
    interval: int,
    mpstat: Optional[str] = DEFAULT_MPSTAT,
    proc_root: str = DEFAULT_PROC_ROOT,
):
    if mpstat and shutil.which(mpstat) is not None:
        return MpstatCollector(interval, mpstat=mpstat)
    log_stderr(f"{mpstat}: not found, using {proc_path(proc_root, 'stat')} instead")
    return ProcStatCollector(interval, proc_root=proc_root)
