"""Utility helpers for seed derivation and hashing."""

from __future__ import annotations

import hashlib
import json
import random
from typing import Iterable, Optional, Union

RunSeed = Union[int, str]

_INT32_RANGE = 1 << 32
_RANDOM_SEED_CEILING = 1_000_000_000


def combine_seed(run_seed: RunSeed, index: int) -> str:
    """Combine a run seed and a record index into the per-record seed string."""

    if isinstance(run_seed, bool) or not isinstance(run_seed, (int, str)):
        raise TypeError(f"run seed must be an int or str, got {type(run_seed).__name__}")
    return f"{run_seed}-{index}"


def to_int32(value: int) -> int:
    """Wrap an integer into the signed 32-bit range."""

    value %= _INT32_RANGE
    if value >= _INT32_RANGE // 2:
        value -= _INT32_RANGE
    return value


def derive_streams(combined_seed: str) -> tuple[int, random.Random]:
    """Return the identity seed and the decision stream for a combined seed.

    Two generators are built from the same seed material. The first one only
    yields the 32-bit identity seed; the second is handed back untouched and
    drives every error-count and corruption decision, in draw order.
    """

    identity_seed = to_int32(random.Random(combined_seed).getrandbits(32))
    decision_rng = random.Random(combined_seed)
    return identity_seed, decision_rng


def random_run_seed(rng: Optional[random.Random] = None) -> int:
    """Pick a fresh run seed in ``[0, 1_000_000_000)``."""

    source = rng or random.SystemRandom()
    return source.randrange(_RANDOM_SEED_CEILING)


def stable_hash(values: Iterable[object]) -> str:
    """Generate a stable SHA-256 hash for a sequence of values."""

    serialized = json.dumps(list(values), sort_keys=True, default=str, ensure_ascii=False)
    return hashlib.sha256(serialized.encode("utf-8")).hexdigest()
