#! /usr/bin/env python3

# CPU affinity masks <-> CPU list strings, e.g. 0x5800a000f <-> "0-3,17,19,31-32,34".

from typing import List

CPUMASK_NUM_BITS = 64
CPUMASK_WORD_BITS = 32

CPULIST_NONE = "none"


def cpumask_to_cpulist(mask: int, num_bits: int = CPUMASK_NUM_BITS) -> str:
    """Encode the set bits of mask as a list of CPU#'s and ranges.

    Bits are scanned from 0 up to num_bits - 1; a run of consecutive set bits
    becomes a lo-hi range, a single set bit a bare number. An empty mask is
    rendered as "none".
    """
    entries: List[str] = []
    run_start = None
    for cpu in range(num_bits + 1):
        is_set = cpu < num_bits and (mask >> cpu) & 1
        if is_set:
            if run_start is None:
                run_start = cpu
            continue
        if run_start is not None:
            run_end = cpu - 1
            entries.append(
                str(run_start) if run_start == run_end else f"{run_start}-{run_end}"
            )
            run_start = None
    return ",".join(entries) if entries else CPULIST_NONE


def cpulist_to_cpumask(cpulist: str) -> int:
    cpulist = cpulist.strip()
    if cpulist in {"", CPULIST_NONE}:
        return 0
    mask = 0
    for entry in cpulist.split(","):
        lo, sep, hi = entry.strip().partition("-")
        try:
            lo_cpu = int(lo)
            hi_cpu = int(hi) if sep else lo_cpu
        except ValueError:
            raise ValueError(f"{cpulist!r}: invalid CPU list entry {entry!r}")
        if lo_cpu < 0 or hi_cpu < lo_cpu:
            raise ValueError(f"{cpulist!r}: invalid CPU range {entry!r}")
        for cpu in range(lo_cpu, hi_cpu + 1):
            mask |= 1 << cpu
    return mask


def parse_affinity_hint(text: str, num_bits: int = CPUMASK_NUM_BITS) -> int:
    # The kernel prints masks as comma separated 32 bit hex words, most
    # significant first, e.g. "00000005,800a000f":
    mask = 0
    for word in text.strip().split(","):
        word = word.strip()
        if not word:
            continue
        mask = (mask << CPUMASK_WORD_BITS) | int(word, 16)
    return mask & ((1 << num_bits) - 1)
