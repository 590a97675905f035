#! /usr/bin/env python3

# Common parsing and delta tracking for the /proc/interrupts and
# /proc/softirqs collectors.
#
# Both files have the same shape:
#
#                    CPU0       CPU1       CPU2       CPU3
#          NAME:  count0     count1     count2     count3   [description...]

from typing import List, Tuple

from .common import CounterSourceError, proc_path, read_text
from .counter_table import CounterTable
from .name_filter import any_match
from .state import MonitorState

ParsedLine = Tuple[str, List[int], List[str]]


class CounterCollector:
    source_file: str = ""

    def table(self, state: MonitorState) -> CounterTable:
        raise NotImplementedError

    def check_header(self, state: MonitorState, path: str, cpu_labels: List[str]) -> int:
        """Validate the header and return the number of counter columns to use."""
        raise NotImplementedError

    def parse_line(self, path: str, line_num: int, line: str, num_cpus: int) -> ParsedLine:
        name, sep, rest = line.partition(":")
        name = name.strip()
        if not sep or not name:
            raise CounterSourceError(f"{path}#{line_num}: {line!r}: missing 'NAME:'")
        words = rest.split()
        if len(words) < num_cpus:
            raise CounterSourceError(
                f"{path}#{line_num}: {line!r}: want {num_cpus} counters, got {len(words)} fields"
            )
        try:
            counters = [int(w) for w in words[:num_cpus]]
        except ValueError:
            raise CounterSourceError(f"{path}#{line_num}: {line!r}: invalid counter")
        return name, counters, words[num_cpus:]

    def read_lines(self, path: str) -> List[str]:
        try:
            lines = read_text(path).splitlines()
        except OSError as e:
            raise CounterSourceError(f"{path}: {e}") from e
        if not lines:
            raise CounterSourceError(f"{path}: empty file")
        return lines

    def collect(self, state: MonitorState, first_pass: bool = False) -> CounterTable:
        path = proc_path(state.proc_root, self.source_file)
        lines = self.read_lines(path)
        cpu_labels = lines[0].split()
        num_cpus = self.check_header(state, path, cpu_labels)
        table = self.table(state)
        table.cpu_labels = cpu_labels[:num_cpus]
        for line_num, line in enumerate(lines[1:], start=2):
            if not line.strip():
                continue
            name, counters, description = self.parse_line(path, line_num, line, num_cpus)
            row = table.get_or_create(name)
            row.description = description
            deltas = row.update(counters)
            if (
                not first_pass
                and not row.ever_changed
                and row.has_delta()
                and not any_match(state.exclude, line)
            ):
                row.ever_changed = True
            if not first_pass or state.warmup_totals:
                state.tracked.add(line, deltas)
        return table
