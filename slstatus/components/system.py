"""General system components: time, host, load, files, commands, users."""

from __future__ import annotations

import os
import pwd
import re
import socket
import subprocess
import sys
import time

from slstatus.util import read_text, warn

_BUFSIZE = 1024
_ENTROPY_PATH = "/proc/sys/kernel/random/entropy_avail"
_UINT = re.compile(r"\s*\+?(\d+)")


def _scan_uint(text: str | None) -> int | None:
    if text is None:
        return None
    match = _UINT.match(text)
    return int(match.group(1)) if match else None


def datetime(fmt: str) -> str | None:
    """Current local time formatted with ``fmt``."""
    result = time.strftime(fmt, time.localtime())
    if not result or len(result) >= _BUFSIZE:
        warn("strftime: Result string exceeds buffer size")
        return None
    return result


def entropy() -> str | None:
    """Available kernel entropy."""
    if sys.platform.startswith("linux"):
        value = _scan_uint(read_text(_ENTROPY_PATH))
        return None if value is None else str(value)
    if sys.platform.startswith(("openbsd", "freebsd")):
        return "\u221e"
    return None


def hostname() -> str | None:
    """Host name of this machine."""
    try:
        return socket.gethostname()
    except OSError as exc:
        warn(f"gethostbyname: {exc}")
        return None


def kernel_release() -> str | None:
    """Kernel release, as ``uname -r`` shows it."""
    try:
        return os.uname().release
    except OSError as exc:
        warn(f"uname: {exc}")
        return None


def load_avg() -> str | None:
    """The 1, 5 and 15 minute load averages."""
    try:
        one, five, fifteen = os.getloadavg()
    except OSError:
        warn("getloadavg: Failed to obtain load average")
        return None
    return f"{one:.2f} {five:.2f} {fifteen:.2f}"


def num_files(path: str) -> str | None:
    """Number of entries in directory ``path``."""
    try:
        with os.scandir(path) as entries:
            count = sum(1 for _ in entries)
    except OSError as exc:
        warn(f"opendir '{path}': {exc.strerror or exc}")
        return None
    return str(count)


def run_command(cmd: str) -> str | None:
    """First line of output of the shell command ``cmd``."""
    try:
        completed = subprocess.run(
            cmd, shell=True, stdout=subprocess.PIPE, check=False
        )
    except OSError as exc:
        warn(f"popen '{cmd}': {exc}")
        return None
    data = completed.stdout[: _BUFSIZE - 2]
    newline = data.find(b"\n")
    if newline >= 0:
        data = data[:newline]
    line = data.decode("utf-8", errors="replace")
    return line or None


def separator(text: str) -> str:
    """Return ``text`` unchanged."""
    return text


def temp(file: str) -> str | None:
    """Temperature in degrees Celsius from a millidegree sensor file."""
    value = _scan_uint(read_text(file))
    return None if value is None else str(value // 1000)


def _uptime_clock() -> int:
    for name in ("CLOCK_BOOTTIME", "CLOCK_UPTIME", "CLOCK_MONOTONIC"):
        clock = getattr(time, name, None)
        if clock is not None:
            return clock
    return time.CLOCK_MONOTONIC


def uptime() -> str | None:
    """System uptime as hours and minutes."""
    clock = _uptime_clock()
    try:
        seconds = int(time.clock_gettime(clock))
    except OSError:
        warn(f"clock_gettime {clock}")
        return None
    hours, rest = divmod(seconds, 3600)
    return f"{hours}h {rest // 60}m"


def gid() -> str:
    """Real group id of this process."""
    return str(os.getgid())


def uid() -> str:
    """Effective user id of this process."""
    return str(os.geteuid())


def username() -> str | None:
    """Name of the effective user."""
    euid = os.geteuid()
    try:
        return pwd.getpwuid(euid).pw_name
    except KeyError:
        warn(f"getpwuid '{euid}': no such user")
        return None