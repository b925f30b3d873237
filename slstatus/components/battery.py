"""Battery charge, state and remaining time components."""

from __future__ import annotations

import os
import re
import sys

import psutil

from slstatus.util import read_text

POWER_SUPPLY_DIR = "/sys/class/power_supply"

_LINUX = sys.platform.startswith("linux")
_INT = re.compile(r"\s*([+-]?\d+)")
_STATE_LEN = 12
_SYMBOLS = {"Charging": "+", "Discharging": "-", "Full": "o"}


def _path(bat: str, name: str) -> str:
    return os.path.join(POWER_SUPPLY_DIR, bat, name)


def _read_int(path: str) -> int | None:
    text = read_text(path)
    if text is None:
        return None
    match = _INT.match(text)
    return int(match.group(1)) if match else None


def _read_state(bat: str) -> str | None:
    text = read_text(_path(bat, "status"))
    if text is None:
        return None
    words = text.split()
    return words[0][:_STATE_LEN] if words else None


def _pick(bat: str, *names: str) -> str | None:
    for name in names:
        path = _path(bat, name)
        if os.access(path, os.R_OK):
            return path
    return None


def _sensors_battery():
    probe = getattr(psutil, "sensors_battery", None)
    return probe() if probe is not None else None


def battery_perc(bat: str) -> str | None:
    """Charge of battery ``bat`` in percent."""
    if _LINUX:
        capacity = _read_int(_path(bat, "capacity"))
        return None if capacity is None else str(capacity)
    info = _sensors_battery()
    return None if info is None else str(int(info.percent))


def battery_state(bat: str) -> str | None:
    """'+' when charging, '-' when discharging, 'o' when full, '?' otherwise."""
    if _LINUX:
        state = _read_state(bat)
        if state is None:
            return None
        return _SYMBOLS.get(state, "?")
    info = _sensors_battery()
    if info is None:
        return None
    if info.power_plugged is None:
        return "?"
    return "+" if info.power_plugged else "-"


def battery_remaining(bat: str) -> str | None:
    """Time left while discharging, as hours and minutes; empty otherwise."""
    if not _LINUX:
        return _remaining_from_sensors()

    state = _read_state(bat)
    if state is None:
        return None
    charge_path = _pick(bat, "charge_now", "energy_now")
    if charge_path is None:
        return None
    charge = _read_int(charge_path)
    if charge is None:
        return None

    if state != "Discharging":
        return ""

    rate_path = _pick(bat, "current_now", "power_now")
    if rate_path is None:
        return None
    rate = _read_int(rate_path)
    if not rate:
        return None
    timeleft = charge / rate
    hours = int(timeleft)
    minutes = int((timeleft - hours) * 60)
    return f"{hours}h {minutes}m"


def _remaining_from_sensors() -> str | None:
    info = _sensors_battery()
    if info is None:
        return None
    if info.power_plugged:
        return ""
    if info.secsleft is None or info.secsleft < 0:
        return None
    minutes = int(info.secsleft) // 60
    return f"{minutes // 60}h {minutes % 60:02d}m"