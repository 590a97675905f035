#! /usr/bin/env python3

# Helpers shared by the collectors, the presenter and the CLI.

import os
import sys
import time
from typing import Optional, Union

DEFAULT_PROC_ROOT = "/proc"

Number = Union[int, float]


class IrqmonError(Exception):
    pass


class CounterSourceError(IrqmonError):
    pass


class CpuStatsError(IrqmonError):
    pass


def ts(t: Optional[float] = None) -> str:
    if t is None:
        t = time.time()
    millisec = int((t - int(t)) * 1000)
    return time.strftime(f"%Y-%m-%dT%H:%M:%S.{millisec:03d}%z", time.localtime(t))


def log_stderr(msg: str):
    print(f"[{ts()}] {msg}", file=sys.stderr)


def safe_div(a: Number, b: Number) -> Number:
    return a / b if b else 0


def is_numeric_name(name: str) -> bool:
    return name.isdigit()


def read_text(path: str) -> str:
    with open(path, "rt") as f:
        return f.read()


def read_optional_text(path: str) -> Optional[str]:
    # Missing, unreadable or empty files are all reported as None:
    try:
        content = read_text(path).strip()
    except OSError:
        return None
    return content or None


def proc_path(proc_root: str, *parts: str) -> str:
    return os.path.join(proc_root, *parts)
