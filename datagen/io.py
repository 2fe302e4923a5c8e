"""I/O utilities for exporting and reloading generated records."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Iterable, Optional, TextIO

import pandas as pd

from .generate import Record

COLUMNS: tuple[str, ...] = ("index", "identifier", "name", "address", "phone")
FORMATS = {"csv", "jsonl"}


def write_jsonl(records: Iterable[Record], handle: TextIO) -> int:
    """Write one JSON object per record; returns the number written."""

    written = 0
    for record in records:
        handle.write(json.dumps(record.as_dict(), ensure_ascii=False))
        handle.write("\n")
        written += 1
    return written


def write_csv(records: Iterable[Record], handle: TextIO) -> int:
    """Write records as CSV with an ``index,identifier,name,address,phone`` header."""

    frame = pd.DataFrame([record.as_dict() for record in records], columns=list(COLUMNS))
    frame.to_csv(handle, index=False, lineterminator="\n")
    return len(frame)


def resolve_format(path: Path, format: Optional[str] = None) -> str:
    candidate = (format or path.suffix.lstrip(".")).lower()
    if candidate not in FORMATS:
        raise ValueError(f"Unsupported output format {candidate!r}; expected 'csv' or 'jsonl'")
    return candidate


def write_records(records: Iterable[Record], path: Path, format: Optional[str] = None) -> int:
    """Write records to ``path``, choosing the writer from ``format`` or the suffix."""

    detected = resolve_format(path, format)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8", newline="") as handle:
        if detected == "csv":
            return write_csv(records, handle)
        return write_jsonl(records, handle)


def read_records(path: Path, format: Optional[str] = None) -> list[Record]:
    """Load records previously written by :func:`write_records`."""

    if not path.exists():
        raise FileNotFoundError(path)

    detected = resolve_format(path, format)
    if detected == "csv":
        frame = pd.read_csv(path, dtype=str, keep_default_na=False, encoding="utf-8")
        missing = [column for column in COLUMNS if column not in frame.columns]
        if missing:
            raise ValueError(f"CSV file is missing columns: {', '.join(missing)}")
        rows = frame[list(COLUMNS)].to_dict(orient="records")
    else:
        rows = []
        with path.open("r", encoding="utf-8") as handle:
            for line in handle:
                line = line.strip()
                if not line:
                    continue
                obj = json.loads(line)
                if not isinstance(obj, dict):
                    raise ValueError("JSONL record is not an object")
                rows.append(obj)

    return [_row_to_record(row) for row in rows]


def _row_to_record(row: dict) -> Record:
    try:
        return Record(
            index=int(row["index"]),
            identifier=str(row["identifier"]),
            name=str(row["name"]),
            address=str(row["address"]),
            phone=str(row["phone"]),
        )
    except KeyError as exc:
        raise ValueError(f"Record is missing field {exc.args[0]!r}") from exc
