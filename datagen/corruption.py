"""Character-level corruption of record fields.

Every decision is read from a single decision stream, one ``random()`` draw at
a time. The number and order of draws is fixed per pass:

1. target field
2. operation (skipped, together with 3 and 4, when the field is empty)
3. position within the current text
4. replacement character, drawn even when the operation does not use it

Changing that order changes every later decision for the record, so the
helpers below must not be reordered or short-circuited.
"""

from __future__ import annotations

import math
import random
from typing import MutableMapping

FIELDS: tuple[str, ...] = ("name", "address", "phone")
OPERATIONS: tuple[str, ...] = ("delete", "insert", "swap")


def _pick(rng: random.Random, size: int) -> int:
    return math.floor(rng.random() * size)


def error_budget(error_rate: float, rng: random.Random) -> int:
    """Number of corruption passes for one record.

    The whole part of ``error_rate`` is always applied; the fractional part
    decides one extra pass through a single draw.
    """

    whole = math.floor(error_rate)
    fraction = error_rate - whole
    total = whole
    if fraction > rng.random():
        total += 1
    return total


def introduce_error(text: str, rng: random.Random, alphabet: str) -> str:
    """Apply one delete, insert or swap edit to ``text``."""

    if len(text) == 0:
        return text

    operation = OPERATIONS[_pick(rng, len(OPERATIONS))]
    position = _pick(rng, len(text))
    char = alphabet[_pick(rng, len(alphabet))]

    if operation == "delete":
        return text[:position] + text[position + 1 :]
    if operation == "insert":
        return text[:position] + char + text[position:]
    # swap; no wraparound at the last character
    if position < len(text) - 1:
        return text[:position] + text[position + 1] + text[position] + text[position + 2 :]
    return text


def apply_random_error(
    fields: MutableMapping[str, str],
    rng: random.Random,
    alphabet: str,
) -> str:
    """Corrupt one randomly chosen field in place and return its name."""

    field = FIELDS[_pick(rng, len(FIELDS))]
    fields[field] = introduce_error(fields[field], rng, alphabet)
    return field


def corrupt_fields(
    fields: MutableMapping[str, str],
    total_errors: int,
    rng: random.Random,
    alphabet: str,
) -> list[str]:
    """Run ``total_errors`` sequential passes; returns the targeted fields in order."""

    return [apply_random_error(fields, rng, alphabet) for _ in range(total_errors)]
