"""Command line entry point: build the status line and publish it."""

from __future__ import annotations

import os
import signal
import socket
import struct
import sys
import threading
import time
from dataclasses import dataclass, field
from typing import Iterable, Iterator, Optional, Sequence

from slstatus import config
from slstatus.config import Arg
from slstatus.util import warn

USAGE = "usage: slstatus [-s] [-1]"


class UsageError(ValueError):
    """The command line could not be understood."""

    def __init__(self) -> None:
        super().__init__(USAGE)


@dataclass(frozen=True)
class Options:
    """Parsed command line flags."""

    stdout: bool = False
    once: bool = False


def parse_args(argv: Sequence[str]) -> Options:
    """Parse the flags ``-s`` (print to stdout) and ``-1`` (print once)."""
    stdout = once = False
    rest = list(argv)
    while rest and rest[0].startswith("-") and len(rest[0]) > 1:
        word = rest.pop(0)
        if word == "--":
            break
        for flag in word[1:]:
            if flag == "1":
                once = True
                stdout = True
            elif flag == "s":
                stdout = True
            else:
                raise UsageError()
    if rest:
        raise UsageError()
    return Options(stdout=stdout, once=once)


def build_status(
    args: Iterable[Arg],
    unknown: str = config.UNKNOWN_STR,
    maxlen: int = config.MAXLEN,
) -> str:
    """Join the formatted output of every item, within ``maxlen`` bytes."""
    status = bytearray()
    for item in args:
        value = item.func(item.args) if item.args is not None else item.func()
        if value is None:
            value = unknown
        piece = (item.fmt % value).encode("utf-8", errors="replace")
        room = maxlen - len(status)
        if len(piece) >= room:
            warn("vsnprintf: Output truncated")
            if room > 0:
                status.extend(piece[: room - 1])
            break
        status.extend(piece)
    return status.decode("utf-8", errors="ignore")


_X11_UNIX_DIR = "/tmp/.X11-unix"
_X11_TCP_PORT = 6000
_COOKIE_NAME = b"MIT-MAGIC-COOKIE-1"
_FAMILY_LOCAL = 256
_FAMILY_WILD = 65535
_CHANGE_PROPERTY = 18
_ATOM_STRING = 31
_ATOM_WM_NAME = 39


def _pad(length: int) -> bytes:
    return b"\0" * (-length % 4)


def _recv_exact(sock: socket.socket, size: int) -> bytes:
    chunks = bytearray()
    while len(chunks) < size:
        chunk = sock.recv(size - len(chunks))
        if not chunk:
            raise ConnectionError("display closed the connection")
        chunks.extend(chunk)
    return bytes(chunks)


def _xauth_entries(data: bytes) -> Iterator[tuple[int, bytes, bytes, bytes, bytes]]:
    offset = 0

    def field_at() -> bytes:
        nonlocal offset
        (length,) = struct.unpack_from(">H", data, offset)
        offset += 2
        value = data[offset : offset + length]
        if len(value) != length:
            raise struct.error("truncated authority entry")
        offset += length
        return value

    while offset < len(data):
        try:
            (family,) = struct.unpack_from(">H", data, offset)
            offset += 2
            address, number, name, cookie = (field_at() for _ in range(4))
        except struct.error:
            return
        yield family, address, number, name, cookie


def _auth_cookie(number: str, local: bool) -> tuple[bytes, bytes]:
    path = os.environ.get("XAUTHORITY") or os.path.join(
        os.path.expanduser("~"), ".Xauthority"
    )
    try:
        with open(path, "rb") as handle:
            data = handle.read()
    except OSError:
        return b"", b""
    hostname = socket.gethostname().encode()
    for family, address, entry_number, name, cookie in _xauth_entries(data):
        if entry_number not in (b"", number.encode()) or name != _COOKIE_NAME:
            continue
        if local and family not in (_FAMILY_LOCAL, _FAMILY_WILD):
            continue
        if family == _FAMILY_LOCAL and address != hostname:
            continue
        return name, cookie
    return b"", b""


def _connect(host: str, number: str) -> socket.socket:
    if host not in ("", "unix"):
        return socket.create_connection((host, _X11_TCP_PORT + int(number)))
    path = f"{_X11_UNIX_DIR}/X{number}"
    candidates = [path]
    if sys.platform.startswith("linux"):
        candidates.append("\0" + path)
    error: Optional[OSError] = None
    for address in candidates:
        sock = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
        try:
            sock.connect(address)
        except OSError as exc:
            sock.close()
            error = exc
            continue
        return sock
    assert error is not None
    raise error


@dataclass
class _RootWindow:
    """A minimal connection to an X display that can name its root window."""

    sock: socket.socket
    root: int

    @classmethod
    def open(cls, display: str) -> "_RootWindow":
        host, sep, rest = display.rpartition(":")
        number = rest.split(".", 1)[0]
        if not sep or not number.isdigit():
            raise OSError(f"bad display name {display!r}")
        sock = _connect(host, number)
        try:
            root = cls._handshake(sock, number, host in ("", "unix"))
        except BaseException:
            sock.close()
            raise
        return cls(sock, root)

    @staticmethod
    def _handshake(sock: socket.socket, number: str, local: bool) -> int:
        name, cookie = _auth_cookie(number, local)
        request = (
            struct.pack("<BxHHHH2x", 0x6C, 11, 0, len(name), len(cookie))
            + name
            + _pad(len(name))
            + cookie
            + _pad(len(cookie))
        )
        sock.sendall(request)
        status, reason_len, _major, _minor, extra = struct.unpack(
            "<BBHHH", _recv_exact(sock, 8)
        )
        body = _recv_exact(sock, extra * 4)
        if status != 1:
            reason = body[:reason_len] if status == 0 else body
            raise ConnectionRefusedError(reason.decode("latin-1", errors="replace"))
        (vendor_len,) = struct.unpack_from("<H", body, 16)
        nformats = body[21]
        offset = 32 + vendor_len + (-vendor_len % 4) + 8 * nformats
        (root,) = struct.unpack_from("<I", body, offset)
        return root

    def store_name(self, name: Optional[str]) -> None:
        """Set (or with None, clear) the root window's name."""
        data = name.encode("utf-8", errors="replace") if name is not None else b""
        padding = _pad(len(data))
        words = 6 + (len(data) + len(padding)) // 4
        request = struct.pack(
            "<BBHIIIB3xI",
            _CHANGE_PROPERTY,
            0,
            words,
            self.root,
            _ATOM_WM_NAME,
            _ATOM_STRING,
            8,
            len(data),
        )
        self.sock.sendall(request + data + padding)

    def close(self) -> None:
        self.sock.close()

    def __enter__(self) -> "_RootWindow":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


@dataclass
class _LoopState:
    done: bool = False
    wake: threading.Event = field(default_factory=threading.Event)

    def on_signal(self, signo: int, _frame: object) -> None:
        if signo != signal.SIGUSR1:
            self.done = True
        self.wake.set()


def _install_handlers(state: _LoopState) -> dict[int, object]:
    previous = {}
    for signo in (signal.SIGINT, signal.SIGTERM, signal.SIGUSR1):
        previous[signo] = signal.signal(signo, state.on_signal)
    return previous


def _run(options: Options, display: Optional[_RootWindow]) -> int:
    state = _LoopState(done=options.once)
    previous = _install_handlers(state)
    try:
        while True:
            start = time.monotonic()
            status = build_status(config.ARGS, config.UNKNOWN_STR, config.MAXLEN)
            if display is None:
                try:
                    sys.stdout.write(status + "\n")
                    sys.stdout.flush()
                except OSError as exc:
                    warn(f"puts: {exc.strerror or exc}")
                    return 1
            else:
                try:
                    display.store_name(status)
                except OSError:
                    warn("XStoreName: Allocation failed")
                    return 1
            if state.done:
                break
            wait = config.INTERVAL_MS / 1000 - (time.monotonic() - start)
            if wait >= 0:
                state.wake.wait(wait)
                state.wake.clear()
            if state.done:
                break
    finally:
        for signo, handler in previous.items():
            signal.signal(signo, handler)

    if display is not None:
        try:
            display.store_name(None)
        except OSError:
            warn("XCloseDisplay: Failed to close display")
            return 1
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the status loop; return the process exit status."""
    if argv is None:
        argv = sys.argv[1:]
    try:
        options = parse_args(argv)
    except UsageError as exc:
        warn(str(exc))
        return 1

    if options.stdout:
        return _run(options, None)

    try:
        display = _RootWindow.open(os.environ.get("DISPLAY", ""))
    except (OSError, struct.error, ValueError):
        warn("XOpenDisplay: Failed to open display")
        return 1
    with display:
        return _run(options, display)


if __name__ == "__main__":
    sys.exit(main())