# slstatus

A small status monitor. It calls a configured list of components (date and
time, load, memory, swap, disk, battery, network, CPU and more). It formats
their results into one line and then does one of two things:

- it sets that line as the name of the X root window, for window managers
  that show the root window name in their bar;
- it prints the line to standard output.

## Installation

```
pip install .
```

## Usage

```
slstatus          # set the root window name once per interval
slstatus -s       # print the status line to standard output once per interval
slstatus -1       # print the status line once to standard output and exit
```

Flags can be combined, as in `-s1`, and `--` ends the flags. An unknown flag
or a leftover argument prints `usage: slstatus [-s] [-1]` to standard error.
The command then exits with status 1.

`SIGINT` and `SIGTERM` stop the loop cleanly. When writing to the root window,
the name is cleared on exit. `SIGUSR1` triggers an immediate refresh.

The root window is reached through the display in `$DISPLAY`, either over a
local Unix socket or over TCP. Authentication uses an `MIT-MAGIC-COOKIE-1`
entry from `$XAUTHORITY` or `~/.Xauthority`. If the display cannot be opened,
the command prints `XOpenDisplay: Failed to open display` and exits with
status 1.

## Configuration

The status line is defined in `slstatus/config.py`:

- `INTERVAL_MS` is the time between updates (1000).
- `UNKNOWN_STR` is the text shown when a component returns no value (`n/a`).
- `MAXLEN` is the maximum length of the line in bytes (2048). Output that
  would exceed it is cut off with a warning.
- `ARGS` is a tuple of `Arg(func, fmt, args)` entries. A component is called
  with `args` when it is given and with no arguments otherwise. Its result is
  put into the `%`-style format `fmt`.

The default configuration shows only the date and time:

```python
ARGS = (
    Arg(datetime, "%s", "%F %T"),
)
```

`slstatus.cli.build_status(args, unknown, maxlen)` builds one line from any
sequence of `Arg` entries. `slstatus.cli.parse_args(argv)` parses the flags.

## Components

Every component returns a string, or `None` when no value can be had. In most
failure cases it also writes a diagnostic to standard error.

| module                        | function            | result                                 | argument          |
|-------------------------------|---------------------|----------------------------------------|-------------------|
| `slstatus.components.system`  | `datetime`          | local time via `strftime`              | format string     |
|                               | `entropy`           | available kernel entropy               | none              |
|                               | `hostname`          | host name                              | none              |
|                               | `kernel_release`    | kernel release                         | none              |
|                               | `load_avg`          | 1, 5 and 15 minute load averages       | none              |
|                               | `num_files`         | number of entries in a directory       | path              |
|                               | `run_command`       | first line of a shell command's output | command           |
|                               | `separator`         | the given text unchanged               | text              |
|                               | `temp`              | °C from a millidegree sensor file      | sensor file       |
|                               | `uptime`            | uptime as `Hh Mm`                      | none              |
|                               | `gid`, `uid`        | real group id, effective user id       | none              |
|                               | `username`          | name of the effective user             | none              |
| `slstatus.components.disk`    | `disk_free`, `disk_perc`, `disk_total`, `disk_used` | filesystem figures | mount point |
| `slstatus.components.memory`  | `ram_free`, `ram_perc`, `ram_total`, `ram_used` | memory figures     | none              |
|                               | `swap_free`, `swap_perc`, `swap_total`, `swap_used` | swap figures   | none              |
| `slstatus.components.cpu`     | `cpu_perc`          | CPU usage since the previous call      | none              |
|                               | `cpu_freq`          | frequency of the first CPU             | none              |
| `slstatus.components.battery` | `battery_perc`      | charge in percent                      | battery (`BAT0`)  |
|                               | `battery_state`     | `+` charging, `-` discharging, `o` full, `?` otherwise | battery |
|                               | `battery_remaining` | time left as `Hh Mm` while discharging, else empty | battery |
| `slstatus.components.network` | `ipv4`, `ipv6`      | first address of an interface          | interface         |
|                               | `netspeed_rx`, `netspeed_tx` | bytes per second since the previous call | interface |
|                               | `wifi_perc`         | link quality in percent                | interface         |
|                               | `wifi_essid`        | ESSID (Linux only)                     | interface         |
| `slstatus.components.volume`  | `vol_perc`          | master volume of an OSS mixer          | mixer (`/dev/mixer`) |

On Linux, memory, swap, CPU, battery and network speed figures are read from
`/proc` and `/sys`. On other systems they come from `psutil`.

Rate-based components return `None` on their first call. `cpu_perc` is built
on `CpuMeter` and the network speeds on `ByteCounter`. Each keeps the
previous reading, and both classes can be used directly.

Sizes are formatted by `slstatus.util.fmt_human(num, base)` with binary
(`1024`: `Ki`, `Mi`, …) or decimal (`1000`: `k`, `M`, …) prefixes, as in
`1.5 Gi`.

## What is not included

There are no components for keyboard indicators (caps/num lock) or for the
current keyboard layout. Configuration is done by editing
`slstatus/config.py`; there is no separate configuration file.

## Running the tests

```
pip install .[test]
pytest
```