"""Status bar configuration: update interval, fallback text and the item list."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from slstatus.components.system import datetime

# interval between updates (in ms)
INTERVAL_MS = 1000

# text to show if no value can be retrieved
UNKNOWN_STR = "n/a"

# maximum output string length
MAXLEN = 2048


@dataclass(frozen=True)
class Arg:
    """One status item: a component, a printf-style format and its argument.

    The component is called with ``args`` when it is given and with no
    arguments otherwise.
    """

    func: Callable[..., Optional[str]]
    fmt: str
    args: Optional[str] = None


ARGS: tuple[Arg, ...] = (
    Arg(datetime, "%s", "%F %T"),
)