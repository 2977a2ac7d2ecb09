"""Report sink helpers.

A report sink is any text stream owned by the caller (``io.StringIO``, an
open file, ``sys.stdout``). The simulation only appends to it and flushes.
"""
import logging
from typing import Protocol

_logger = logging.getLogger(__name__)


class ReportSink(Protocol):
    def write(self, text: str) -> int | None: ...


def flush(report: ReportSink) -> None:
    flush_fn = getattr(report, "flush", None)
    if flush_fn is not None:
        flush_fn()


def write_best_effort(report: ReportSink, text: str) -> bool:
    """Append `text` to the report, swallowing sink failures.

    Returns False when the sink refused the write. Used for telemetry lines
    (hops, request headers, broadcast confirmation) that must never change
    the outcome of a request.
    """
    try:
        report.write(text)
        flush(report)
    except (OSError, ValueError) as exc:
        # ValueError: write to a closed io stream
        if _logger.isEnabledFor(logging.DEBUG):
            _logger.debug(f"Report write dropped: {exc!r}")
        return False
    return True
