"""Mixer volume component for OSS-compatible mixer devices."""

from __future__ import annotations

import fcntl
import os
import struct

from slstatus.util import warn

_SOUND_MIXER_READ_DEVMASK = 0x80044DFE
_MIXER_READ_BASE = 0x80044D00
_SOUND_DEVICE_NAMES = (
    "vol", "bass", "treble", "synth", "pcm", "speaker", "line", "mic",
    "cd", "mix", "pcm2", "rec", "igain", "ogain", "line1", "line2",
    "line3", "dig1", "dig2", "dig3", "phin", "phout", "video", "radio",
    "monitor",
)


def _read_int(fd: int, request: int) -> int:
    buffer = bytearray(4)
    fcntl.ioctl(fd, request, buffer)
    return struct.unpack("i", buffer)[0]


def vol_perc(card: str) -> str | None:
    """Master volume of mixer device ``card`` in percent."""
    try:
        fd = os.open(card, os.O_RDONLY | os.O_NONBLOCK)
    except OSError as exc:
        warn(f"open '{card}': {exc.strerror or exc}")
        return None

    try:
        try:
            devmask = _read_int(fd, _SOUND_MIXER_READ_DEVMASK)
        except OSError as exc:
            warn(f"ioctl 'SOUND_MIXER_READ_DEVMASK': {exc.strerror or exc}")
            return None

        level = None
        for index, name in enumerate(_SOUND_DEVICE_NAMES):
            if devmask & (1 << index) and name == "vol":
                try:
                    level = _read_int(fd, _MIXER_READ_BASE | index)
                except OSError as exc:
                    warn(f"ioctl 'MIXER_READ({index})': {exc.strerror or exc}")
                    return None
    finally:
        os.close(fd)

    if level is None:
        return None
    return str(level & 0xFF)