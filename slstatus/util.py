"""Shared helpers: diagnostics, human-readable sizes and file reading."""

from __future__ import annotations

import sys

PROGRAM = "slstatus"

_PREFIXES = {
    1000: ("", "k", "M", "G", "T", "P", "E", "Z", "Y"),
    1024: ("", "Ki", "Mi", "Gi", "Ti", "Pi", "Ei", "Zi", "Yi"),
}


def warn(message: str) -> None:
    """Write a diagnostic line to standard error.

    The program name is prepended unless the message is a usage line.
    """
    prefix = "" if message.startswith("usage") else f"{PROGRAM}: "
    sys.stderr.write(f"{prefix}{message}\n")
    sys.stderr.flush()


def fmt_human(num: float, base: int) -> str:
    """Format ``num`` with a decimal (1000) or binary (1024) unit prefix."""
    try:
        prefixes = _PREFIXES[base]
    except KeyError:
        raise ValueError(f"fmt_human: Invalid base {base!r}") from None

    scaled = float(num)
    index = 0
    while index < len(prefixes) - 1 and scaled >= base:
        scaled /= base
        index += 1
    return f"{scaled:.1f} {prefixes[index]}"


def read_text(path: str) -> str | None:
    """Return the contents of ``path``, or None after warning if it cannot be read."""
    try:
        with open(path, encoding="utf-8", errors="replace") as handle:
            return handle.read()
    except OSError as exc:
        warn(f"fopen '{path}': {exc.strerror or exc}")
        return None