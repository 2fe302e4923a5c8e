"""Audit of injected corruption against a clean baseline batch."""

from __future__ import annotations

from typing import Any, Iterable

import numpy as np
import pandas as pd

from .corruption import FIELDS
from .generate import Record
from .utils import stable_hash


def edit_distance(source: str, target: str) -> int:
    """Levenshtein distance between two strings."""

    if source == target:
        return 0
    if not source:
        return len(target)
    if not target:
        return len(source)

    table = np.zeros((len(source) + 1, len(target) + 1), dtype=np.int64)
    table[:, 0] = np.arange(len(source) + 1)
    table[0, :] = np.arange(len(target) + 1)
    for i, source_char in enumerate(source, start=1):
        for j, target_char in enumerate(target, start=1):
            cost = 0 if source_char == target_char else 1
            table[i, j] = min(
                table[i - 1, j] + 1,
                table[i, j - 1] + 1,
                table[i - 1, j - 1] + cost,
            )
    return int(table[len(source), len(target)])


def validate_corruption(
    clean: Iterable[Record],
    corrupted: Iterable[Record],
    error_rate: float,
) -> dict[str, Any]:
    """Compare a corrupted batch with the zero-error batch of the same run.

    Records are paired by index. Identifiers must match exactly; every other
    field is measured by edit distance. A swap counts as two edits here, so
    the mean distance is an upper-bound style estimate of the pass count.
    """

    clean_by_index = {record.index: record for record in clean}
    corrupted_by_index = {record.index: record for record in corrupted}

    violations: list[dict[str, Any]] = []
    for index in sorted(set(clean_by_index) ^ set(corrupted_by_index)):
        side = "baseline" if index in clean_by_index else "corrupted"
        violations.append({"index": index, "issue": f"only present in {side} batch"})

    rows: list[dict[str, Any]] = []
    for index in sorted(set(clean_by_index) & set(corrupted_by_index)):
        before = clean_by_index[index]
        after = corrupted_by_index[index]
        if before.identifier != after.identifier:
            violations.append({"index": index, "issue": "identifier changed"})
        row: dict[str, Any] = {"index": index}
        for field in FIELDS:
            row[field] = edit_distance(getattr(before, field), getattr(after, field))
        rows.append(row)

    frame = pd.DataFrame(rows, columns=["index", *FIELDS])
    summary: dict[str, Any] = {
        "records_compared": int(len(frame)),
        "declared_error_rate": float(error_rate),
        "fingerprint": stable_hash(record.as_dict() for record in corrupted_by_index.values()),
    }

    if frame.empty:
        summary.update({"mean_edit_distance": 0.0, "changed_fraction": 0.0})
        field_stats: dict[str, Any] = {field: {"mean_edit_distance": 0.0, "changed_fraction": 0.0} for field in FIELDS}
    else:
        totals = frame[list(FIELDS)].sum(axis=1)
        summary["mean_edit_distance"] = round(float(totals.mean()), 4)
        summary["changed_fraction"] = round(float((totals > 0).mean()), 4)
        field_stats = {
            field: {
                "mean_edit_distance": round(float(frame[field].mean()), 4),
                "changed_fraction": round(float((frame[field] > 0).mean()), 4),
            }
            for field in FIELDS
        }

    return {
        "summary": summary,
        "fields": field_stats,
        "violations": violations,
    }
