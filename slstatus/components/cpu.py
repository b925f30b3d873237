"""Processor usage and frequency components."""

from __future__ import annotations

import re
import sys

import psutil

from slstatus.util import fmt_human, read_text

STAT_PATH = "/proc/stat"
FREQ_PATH = "/sys/devices/system/cpu/cpu0/cpufreq/scaling_cur_freq"

_LINUX = sys.platform.startswith("linux")
_UINT = re.compile(r"\s*\+?(\d+)")
_NFIELDS = 7

Sample = tuple[float, float, float, float, float, float, float]


def _busy(sample: Sample) -> float:
    user, nice, system, _idle, _iowait, irq, softirq = sample
    return user + nice + system + irq + softirq


class CpuMeter:
    """Processor usage between successive readings of a stat file."""

    def __init__(self, stat_path: str = STAT_PATH) -> None:
        self.stat_path = stat_path
        self._previous: Sample = (0.0,) * _NFIELDS

    def _sample(self) -> Sample | None:
        text = read_text(self.stat_path)
        if text is None:
            return None
        fields = text.split()[1 : 1 + _NFIELDS]
        if len(fields) != _NFIELDS:
            return None
        try:
            user, nice, system, idle, iowait, irq, softirq = map(float, fields)
        except ValueError:
            return None
        return user, nice, system, idle, iowait, irq, softirq

    def perc(self) -> str | None:
        """Percentage of time busy since the last call; None on the first."""
        previous = self._previous
        current = self._sample()
        if current is None:
            return None
        self._previous = current
        if previous[0] == 0:
            return None
        total = sum(current) - sum(previous)
        if total == 0:
            return None
        return str(int(100 * (_busy(current) - _busy(previous)) / total))


class _PsutilCpuMeter(CpuMeter):
    def _sample(self) -> Sample | None:
        times = psutil.cpu_times()
        return (
            times.user,
            getattr(times, "nice", 0.0),
            times.system,
            times.idle,
            0.0,
            getattr(times, "irq", 0.0),
            0.0,
        )


_METER: CpuMeter = CpuMeter(STAT_PATH) if _LINUX else _PsutilCpuMeter(STAT_PATH)


def cpu_perc() -> str | None:
    """Processor usage in percent since the previous call."""
    return _METER.perc()


def cpu_freq() -> str | None:
    """Current frequency of the first processor."""
    if _LINUX:
        text = read_text(FREQ_PATH)
        if text is None:
            return None
        match = _UINT.match(text)
        if match is None:
            return None
        return fmt_human(int(match.group(1)) * 1000, 1000)
    freq = psutil.cpu_freq()
    if freq is None:
        return None
    return fmt_human(freq.current * 1e6, 1000)