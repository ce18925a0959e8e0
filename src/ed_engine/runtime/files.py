"""Plain-text loading and saving for buffers."""

from __future__ import annotations

from typing import Iterable, List, Tuple

from ed_engine.errors import InvalidPath

from . import telemetry


def byte_count(lines: Iterable[str]) -> int:
    """Size of ``lines`` on disk: every line plus its terminator."""

    return sum(len(line.encode("utf-8")) + 1 for line in lines)


def _split_records(text: str) -> List[str]:
    records = text.split("\n")
    if records and records[-1] == "":
        records.pop()
    return [record[:-1] if record.endswith("\r") else record for record in records]


def load_lines(path: str) -> Tuple[List[str], int]:
    """Read ``path`` into lines with terminators stripped.

    Returns the lines together with their byte count. Any failure to open or
    decode the file surfaces as ``InvalidPath``.
    """

    if not path:
        raise InvalidPath()
    try:
        with open(path, encoding="utf-8", newline="") as handle:
            lines = _split_records(handle.read())
    except (OSError, UnicodeDecodeError) as exc:
        telemetry.record_event(
            "file.load_failed", level="warning", data={"path": path, "reason": exc}
        )
        raise InvalidPath() from exc

    size = byte_count(lines)
    telemetry.record_event(
        "file.loaded", data={"path": path, "lines": len(lines), "bytes": size}
    )
    return lines, size


def save_lines(path: str, lines: Iterable[str]) -> int:
    """Write ``lines`` to ``path``, each followed by ``\\n``; returns bytes written."""

    if not path:
        raise InvalidPath()
    text = "".join(f"{line}\n" for line in lines)
    try:
        with open(path, "w", encoding="utf-8", newline="") as handle:
            handle.write(text)
    except OSError as exc:
        telemetry.record_event(
            "file.save_failed", level="warning", data={"path": path, "reason": exc}
        )
        raise InvalidPath() from exc

    size = len(text.encode("utf-8"))
    telemetry.record_event("file.saved", data={"path": path, "bytes": size})
    return size


__all__ = ["byte_count", "load_lines", "save_lines"]
