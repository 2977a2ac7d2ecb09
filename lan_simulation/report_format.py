from dataclasses import dataclass, fields, replace
from typing import Any, Dict


def _parse_bool(raw: Any, key: str) -> bool:
    if isinstance(raw, bool):
        return raw
    v = str(raw).strip().lower()
    if v in {"true", "yes", "on", "1"}:
        return True
    if v in {"false", "no", "off", "0"}:
        return False
    raise ValueError(f"Invalid boolean for report format key '{key}': {raw!r}")


@dataclass(frozen=True)
class ReportFormat:
    """Line templates written to the report sink.

    All report output goes through one of these templates so a runner can
    override the wording (or the postscript marker) from its configuration.
    """
    postscript_marker: str = "!PS"
    author_key: str = "author:"
    title_key: str = "title:"
    field_terminator: str = "."
    default_author: str = "Unknown"
    default_title: str = "Untitled"
    ascii_title: str = "ASCII DOCUMENT"
    # slice of an ASCII payload used as author (only when the payload is long enough)
    ascii_author_start: int = 8
    ascii_author_end: int = 16
    # ASCII jobs are printed without an accounting entry unless this is set
    account_ascii_jobs: bool = False

    hop_line: str = "\tNode '{name}' {action}.\n"
    accepts_broadcast: str = "accepts broadcast packet"
    passes_packet_on: str = "passes packet on"
    broadcast_request: str = "Broadcast Request\n"
    broadcast_done: str = ">>> Broadcast travelled whole token ring.\n\n"
    print_request: str = "'{workstation}' requests printing of '{document}' on '{printer}' ...\n"
    destination_not_found: str = ">>> Destination not found, print job cancelled.\n\n"
    not_a_printer: str = ">>> Destination is not a printer, print job cancelled.\n\n"
    document_line: str = "\tPrinter '{name}' prints '{document}'.\n"
    accounting_line: str = "\tAccounting -- author = '{author}' -- title = '{title}'\n"
    postscript_delivered: str = ">>> Postscript job delivered.\n\n"
    ascii_delivered: str = ">>> ASCII Print job delivered.\n\n"

    def is_postscript(self, document: str) -> bool:
        return document.startswith(self.postscript_marker)

    def _extract_field(self, document: str, key: str, default: str) -> str:
        start = document.find(key)
        if start < 0:
            return default
        start += len(key)
        end = document.find(self.field_terminator, start)
        if end < 0:
            end = len(document)
        return document[start:end]

    def postscript_author(self, document: str) -> str:
        return self._extract_field(document, self.author_key, self.default_author)

    def postscript_title(self, document: str) -> str:
        return self._extract_field(document, self.title_key, self.default_title)

    def ascii_author(self, document: str) -> str:
        if len(document) >= self.ascii_author_end:
            return document[self.ascii_author_start:self.ascii_author_end]
        return self.default_author

    @classmethod
    def from_mapping(cls, raw: Dict[str, Any]) -> "ReportFormat":
        """Build a format from a config mapping, rejecting unknown keys."""
        return DEFAULT_FORMAT.with_overrides(raw)

    def with_overrides(self, raw: Dict[str, Any]) -> "ReportFormat":
        known = {f.name for f in fields(self)}
        unknown = sorted(set(raw) - set(known))
        if unknown:
            raise ValueError(f"Unknown report format keys: {unknown}")
        values: Dict[str, Any] = {}
        for key, value in raw.items():
            current = getattr(self, key)
            if isinstance(current, bool):
                values[key] = _parse_bool(value, key)
            elif isinstance(current, int):
                values[key] = int(value)
            else:
                values[key] = str(value)
        return replace(self, **values)


DEFAULT_FORMAT = ReportFormat()
