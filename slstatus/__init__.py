"""Status monitor that collects system information into one status line."""

__version__ = "0.1.0"