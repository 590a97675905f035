#! /usr/bin/env python3

# Live hardirq/softirq delta and per CPU utilization monitor.

import argparse
import signal
import sys
from typing import List, Optional

from . import PROG_NAME, __version__
from .common import DEFAULT_PROC_ROOT, IrqmonError, log_stderr
from .cpu_stats import DEFAULT_MPSTAT
from .monitor import DEFAULT_EXCLUDE_PATTERNS, DEFAULT_INTERVAL_SEC, run


def interval_arg(value: str) -> int:
    if not value.isdigit() or int(value) <= 0:
        raise argparse.ArgumentTypeError(
            f"{value!r}: the interval must be a positive number of seconds"
        )
    return int(value)


def count_arg(value: str) -> int:
    if not value.isdigit() or int(value) <= 0:
        raise argparse.ArgumentTypeError(f"{value!r}: the count must be a positive number")
    return int(value)


def sig_handler(signum, frame):
    log_stderr(f"Received {signal.Signals(signum).name}")
    sys.exit(-signum)


def make_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=PROG_NAME,
        description="""Show the per CPU deltas of the hard and soft interrupts
            which changed since the start, alongside the per CPU utilization.""",
    )
    parser.add_argument(
        "interval",
        nargs="?",
        default=DEFAULT_INTERVAL_SEC,
        type=interval_arg,
        help="""Refresh interval, in seconds. Default: %(default)s""",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-x",
        "--exclude",
        action="append",
        metavar="PATTERN",
        help=f"""Exclude the lines matching PATTERN from the changed rows; a
             leading ^ makes it a prefix match, otherwise it is a substring
             match. May be repeated, the first use replaces the default list.
             Default: {" ".join(DEFAULT_EXCLUDE_PATTERNS)}""",
    )
    parser.add_argument(
        "-t",
        "--track",
        action="append",
        metavar="PATTERN",
        help="""Accumulate the deltas of the lines matching PATTERN into a
             running total, reported after the interrupt table. May be
             repeated.""",
    )
    parser.add_argument(
        "-n",
        "--count",
        type=count_arg,
        metavar="N",
        help="""Stop after N refreshes, if not specified then run forever""",
    )
    parser.add_argument(
        "--no-warmup-totals",
        action="store_true",
        help="""Do not add the counters read by the warm-up pass into the
             tracked totals""",
    )
    parser.add_argument(
        "--proc-root",
        default=DEFAULT_PROC_ROOT,
        help="""Proc filesystem root. Default: %(default)s""",
    )
    parser.add_argument(
        "--mpstat",
        default=DEFAULT_MPSTAT,
        help="""CPU statistics utility; /proc/stat is sampled if it cannot be
             found. Default: %(default)s""",
    )
    parser.add_argument(
        "--no-clear",
        action="store_true",
        help="""Do not clear the screen before each refresh""",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = make_arg_parser().parse_args(argv)

    signal.signal(signal.SIGTERM, sig_handler)
    signal.signal(signal.SIGINT, sig_handler)

    try:
        run(
            interval=args.interval,
            count=args.count,
            exclude=args.exclude,
            track=args.track,
            proc_root=args.proc_root,
            mpstat=args.mpstat,
            clear_screen=not args.no_clear,
            warmup_totals=not args.no_warmup_totals,
        )
    except IrqmonError as e:
        log_stderr(f"{PROG_NAME}: {e}")
        return 1
    return 0
