"""Network components: interface addresses, transfer speeds and WiFi status."""

from __future__ import annotations

import array
import fcntl
import os
import re
import socket
import struct
import sys

import psutil

from slstatus.util import fmt_human, read_text, warn

NET_DIR = "/sys/class/net"
WIRELESS_PATH = "/proc/net/wireless"
INTERVAL_MS = 1000

_LINUX = sys.platform.startswith("linux")
_UINT = re.compile(r"\s*\+?(\d+)")
_LINK_QUALITY = re.compile(r"\s*[+-]?\d+\s*([+-]?\d+)")
_DIRECTIONS = ("rx", "tx")
_COUNTER_WRAP = 2**64
_LINE_MAX = 1022
_WIRELESS_MAX_QUALITY = 70

_SIOCGIWESSID = 0x8B1B
_IW_ESSID_MAX_SIZE = 32
_IFNAMSIZ = 16
_IWREQ_SIZE = 32


def _address(interface: str, family: socket.AddressFamily) -> str | None:
    try:
        table = psutil.net_if_addrs()
    except OSError as exc:
        warn(f"getifaddrs: {exc}")
        return None
    for entry in table.get(interface, ()):
        if entry.family == family and entry.address:
            return entry.address
    return None


def ipv4(interface: str) -> str | None:
    """First IPv4 address of ``interface``."""
    return _address(interface, socket.AF_INET)


def ipv6(interface: str) -> str | None:
    """First IPv6 address of ``interface``."""
    return _address(interface, socket.AF_INET6)


class ByteCounter:
    """Transfer rate of an interface between successive readings."""

    def __init__(self, direction: str) -> None:
        if direction not in _DIRECTIONS:
            raise ValueError(f"direction must be 'rx' or 'tx', not {direction!r}")
        self.direction = direction
        self.interval_ms = INTERVAL_MS
        self.net_dir: str | None = NET_DIR if _LINUX else None
        self._bytes = 0

    def _read(self, interface: str) -> int | None:
        if self.net_dir is not None:
            path = os.path.join(
                self.net_dir, interface, "statistics", f"{self.direction}_bytes"
            )
            text = read_text(path)
            if text is None:
                return None
            match = _UINT.match(text)
            return int(match.group(1)) if match else None

        counters = psutil.net_io_counters(pernic=True).get(interface)
        if counters is None:
            warn("reading 'if_data' failed")
            return None
        return counters.bytes_recv if self.direction == "rx" else counters.bytes_sent

    def speed(self, interface: str) -> str | None:
        """Bytes per second since the previous call; None on the first."""
        previous = self._bytes
        current = self._read(interface)
        if current is None:
            return None
        self._bytes = current
        if previous == 0:
            return None
        delta = (current - previous) % _COUNTER_WRAP
        return fmt_human(delta * 1000 // self.interval_ms, 1024)


_RX = ByteCounter("rx")
_TX = ByteCounter("tx")


def netspeed_rx(interface: str) -> str | None:
    """Receive speed of ``interface``."""
    return _RX.speed(interface)


def netspeed_tx(interface: str) -> str | None:
    """Transmit speed of ``interface``."""
    return _TX.speed(interface)


def wifi_perc(interface: str) -> str | None:
    """Link quality of a wireless interface in percent."""
    state = read_text(os.path.join(NET_DIR, interface, "operstate"))
    if state is None or state[:4] != "up\n":
        return None

    text = read_text(WIRELESS_PATH)
    if text is None:
        return None
    lines = text.splitlines(keepends=True)
    if len(lines) < 3:
        return None
    line = lines[2][:_LINE_MAX]

    position = line.find(interface)
    if position < 0:
        return None
    match = _LINK_QUALITY.match(line[position + len(interface) + 2 :])
    if match is None:
        return None
    quality = int(match.group(1))
    return str(int(quality / _WIRELESS_MAX_QUALITY * 100))


def wifi_essid(interface: str) -> str | None:
    """ESSID of the network a wireless interface is associated with."""
    if not _LINUX:
        return None
    name = interface.encode()
    if len(name) >= _IFNAMSIZ:
        warn("vsnprintf: Output truncated")
        return None

    essid = array.array("B", bytes(_IW_ESSID_MAX_SIZE + 1))
    address, _ = essid.buffer_info()
    request = bytearray(
        struct.pack(f"{_IFNAMSIZ}sPHH", name, address, _IW_ESSID_MAX_SIZE + 1, 0)
    )
    request.extend(bytes(max(0, _IWREQ_SIZE - len(request))))

    try:
        sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    except OSError as exc:
        warn(f"socket 'AF_INET': {exc.strerror or exc}")
        return None
    with sock:
        try:
            fcntl.ioctl(sock.fileno(), _SIOCGIWESSID, request)
        except OSError as exc:
            warn(f"ioctl 'SIOCGIWESSID': {exc.strerror or exc}")
            return None

    value = essid.tobytes().split(b"\0", 1)[0]
    return value.decode("utf-8", errors="replace") or None