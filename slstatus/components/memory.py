"""Memory and swap usage components."""

from __future__ import annotations

import re
import sys

import psutil

from slstatus.util import fmt_human, read_text

MEMINFO_PATH = "/proc/meminfo"

_LINUX = sys.platform.startswith("linux")
_LINE = re.compile(r"^([\w()]+):\s*(\d+)", re.MULTILINE)


def parse_meminfo(text: str) -> dict[str, int]:
    """Map each field of a meminfo listing to its value (in kB)."""
    return {name: int(value) for name, value in _LINE.findall(text)}


def _fields(*names: str) -> tuple[int, ...] | None:
    text = read_text(MEMINFO_PATH)
    if text is None:
        return None
    info = parse_meminfo(text)
    try:
        return tuple(info[name] for name in names)
    except KeyError:
        return None


def _trunc_div(numerator: int, denominator: int) -> int:
    quotient = abs(numerator) // abs(denominator)
    return quotient if (numerator < 0) == (denominator < 0) else -quotient


def _ram_fields() -> tuple[int, int, int, int] | None:
    values = _fields("MemTotal", "MemFree", "Buffers", "Cached")
    if values is None or _fields("MemAvailable") is None:
        return None
    total, free, buffers, cached = values
    return total, free, buffers, cached


def ram_free() -> str | None:
    """Memory available for new allocations."""
    if _LINUX:
        values = _fields("MemTotal", "MemFree", "MemAvailable")
        if values is None:
            return None
        return fmt_human(values[-1] * 1024, 1024)
    return fmt_human(psutil.virtual_memory().free, 1024)


def ram_perc() -> str | None:
    """Percentage of memory in use, not counting buffers and cache."""
    if _LINUX:
        values = _ram_fields()
        if values is None:
            return None
        total, free, buffers, cached = values
        if total == 0:
            return None
        return str(_trunc_div(100 * ((total - free) - (buffers + cached)), total))
    memory = psutil.virtual_memory()
    if memory.total == 0:
        return None
    active = getattr(memory, "active", memory.used)
    return str(active * 100 // memory.total)


def ram_total() -> str | None:
    """Total amount of memory."""
    if _LINUX:
        values = _fields("MemTotal")
        if values is None:
            return None
        return fmt_human(values[0] * 1024, 1024)
    return fmt_human(psutil.virtual_memory().total, 1024)


def ram_used() -> str | None:
    """Memory in use, not counting buffers and cache."""
    if _LINUX:
        values = _ram_fields()
        if values is None:
            return None
        total, free, buffers, cached = values
        return fmt_human((total - free - buffers - cached) * 1024, 1024)
    memory = psutil.virtual_memory()
    return fmt_human(getattr(memory, "active", memory.used), 1024)


def _swap_fields(*names: str) -> tuple[int, ...] | None:
    return _fields(*(f"Swap{name}" for name in names))


def swap_free() -> str | None:
    """Unused swap space."""
    if _LINUX:
        values = _swap_fields("Free")
        if values is None:
            return None
        return fmt_human(values[0] * 1024, 1024)
    return fmt_human(psutil.swap_memory().free, 1024)


def swap_perc() -> str | None:
    """Percentage of swap space in use."""
    if _LINUX:
        values = _swap_fields("Total", "Free", "Cached")
        if values is None:
            return None
        total, free, cached = values
        if total == 0:
            return None
        return str(_trunc_div(100 * (total - free - cached), total))
    swap = psutil.swap_memory()
    if swap.total == 0:
        return None
    return str(100 * swap.used // swap.total)


def swap_total() -> str | None:
    """Total swap space."""
    if _LINUX:
        values = _swap_fields("Total")
        if values is None:
            return None
        return fmt_human(values[0] * 1024, 1024)
    return fmt_human(psutil.swap_memory().total, 1024)


def swap_used() -> str | None:
    """Swap space in use, not counting cached pages."""
    if _LINUX:
        values = _swap_fields("Total", "Free", "Cached")
        if values is None:
            return None
        total, free, cached = values
        return fmt_human((total - free - cached) * 1024, 1024)
    return fmt_human(psutil.swap_memory().used, 1024)