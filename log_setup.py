"""Logging setup helpers for the runners and tests.

Call these before building networks so the `lan_simulation` loggers inherit
the console (and optional per-run file) handlers.
"""
import datetime
import logging
import os
import sys

DEFAULT_FORMAT = "%(asctime)s [%(levelname)s] %(filename)s:%(lineno)d %(message)s"
DEFAULT_DATEFMT = "%H:%M:%S"
# Example: "17:22:40 [INFO   ] network.py:65 Broadcast completed entry=Filip hops=4"
RUN_FORMAT = "%(asctime)s [%(levelname)-7s] %(filename)s:%(lineno)d %(message)s"

NOISY_LOGGERS = ("matplotlib", "matplotlib.font_manager", "PIL", "networkx")


def ensure_logging(level: int = logging.INFO, *, force: bool = False) -> None:
    """Ensure the root logger writes to stdout.

    - If the root logger has no handlers, configure one via basicConfig.
    - If handlers exist and `force` is True, replace them.
    - Otherwise only the root level is changed.

    Safe to call multiple times.
    """
    root = logging.getLogger()
    if force or not root.handlers:
        logging.basicConfig(level=level, format=DEFAULT_FORMAT, datefmt=DEFAULT_DATEFMT, stream=sys.stdout, force=force)
    else:
        root.setLevel(level)


def configure_debug(debug: bool) -> None:
    ensure_logging(logging.DEBUG if debug else logging.INFO)


def quiet_third_party_loggers() -> None:
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def _sanitize_filename(name: str) -> str:
    return "".join(c if c.isalnum() or c in "._-" else "_" for c in str(name))


def configure_run_logging(run_tag: str, *, log_dir: str = "results/logs",
                          console_level: int = logging.INFO, file_level: int = logging.DEBUG,
                          force: bool = False) -> str:
    """Configure console logging plus a per-run log file.

    The file is named after `run_tag` and a timestamp and records everything
    at `file_level` (per-hop DEBUG lines included). Returns the absolute
    path of the log file.
    """
    ensure_logging(level=console_level, force=force)
    quiet_third_party_loggers()

    os.makedirs(log_dir, exist_ok=True)
    timestamp = datetime.datetime.now().strftime("%Y%m%d_%H%M%S")
    safe_tag = _sanitize_filename((run_tag or "run").lower())
    logfile = os.path.join(log_dir, f"{safe_tag}_{timestamp}.log")

    root = logging.getLogger()
    if not force:
        # reuse a file handler already attached for this run tag
        for h in root.handlers:
            if isinstance(h, logging.FileHandler) and safe_tag in os.path.basename(h.baseFilename):
                return os.path.abspath(h.baseFilename)

    for h in root.handlers:
        if isinstance(h, logging.StreamHandler) and getattr(h, "stream", None) is sys.stdout:
            h.setLevel(console_level)
            h.setFormatter(logging.Formatter(RUN_FORMAT, datefmt=DEFAULT_DATEFMT))

    fh = logging.FileHandler(logfile, mode="a", encoding="utf-8")
    fh.setLevel(file_level)
    fh.setFormatter(logging.Formatter(RUN_FORMAT, datefmt=DEFAULT_DATEFMT))
    root.addHandler(fh)

    # root passes everything either handler wants
    root.setLevel(min(console_level, file_level))
    return os.path.abspath(logfile)
