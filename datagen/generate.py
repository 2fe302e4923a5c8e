"""Record synthesis and batch generation."""

from __future__ import annotations

import logging
import math
from concurrent.futures import ThreadPoolExecutor
from dataclasses import asdict, dataclass
from typing import Any, Callable, Iterator, Optional, Union

from .corruption import corrupt_fields, error_budget
from .identity import IdentityGenerationError, IdentityProvider, default_provider
from .regions import Region, alphabet_for, resolve_region
from .utils import RunSeed, combine_seed, derive_streams


logger = logging.getLogger(__name__)

FailureCallback = Callable[[int, IdentityGenerationError], None]


class InvalidErrorRateError(ValueError):
    """Raised when the requested error rate is negative or not finite."""


@dataclass(frozen=True, slots=True)
class Record:
    index: int
    identifier: str
    name: str
    address: str
    phone: str

    def as_dict(self) -> dict[str, Any]:
        """Export shape: index, identifier, name, address, phone."""

        return asdict(self)


def validate_error_rate(error_rate: float) -> float:
    try:
        value = float(error_rate)
    except (TypeError, ValueError) as exc:
        raise InvalidErrorRateError(f"Error rate must be a number, got {error_rate!r}") from exc
    if math.isnan(value) or math.isinf(value) or value < 0:
        raise InvalidErrorRateError(f"Error rate must be a finite non-negative number, got {error_rate!r}")
    return value


def validate_index(index: int, name: str = "index") -> int:
    if isinstance(index, bool) or not isinstance(index, int):
        raise ValueError(f"{name} must be an integer, got {index!r}")
    if index < 1:
        raise ValueError(f"{name} must be 1 or greater, got {index}")
    return index


def synthesize_record(
    index: int,
    region: Union[Region, str],
    error_rate: float,
    run_seed: RunSeed,
    provider: Optional[IdentityProvider] = None,
) -> Record:
    """Build the record at ``index`` for a run.

    The result depends only on the arguments: identical inputs give identical
    records regardless of which other indices were generated, or in what order.
    Any provider failure is raised as :class:`IdentityGenerationError`.
    """

    index = validate_index(index)
    region = resolve_region(region)
    error_rate = validate_error_rate(error_rate)
    combined = combine_seed(run_seed, index)
    identity_seed, rng = derive_streams(combined)

    try:
        identity = (provider or default_provider).identity(region, identity_seed)
    except IdentityGenerationError:
        raise
    except Exception as exc:
        raise IdentityGenerationError(
            f"Identity provider failed for record {index}: {exc!r}",
            region=region,
            seed=identity_seed,
        ) from exc
    fields = {"name": identity.name, "address": identity.address, "phone": identity.phone}

    total_errors = error_budget(error_rate, rng)
    corrupt_fields(fields, total_errors, rng, alphabet_for(region))

    return Record(index=index, identifier=identity.identifier, **fields)


def _check_batch_arguments(
    start_index: int,
    count: int,
    region: Union[Region, str],
    error_rate: float,
) -> tuple[Region, float]:
    validate_index(start_index, "start index")
    if count < 0:
        raise ValueError(f"count must not be negative, got {count}")
    return resolve_region(region), validate_error_rate(error_rate)


def _report_failure(
    index: int,
    exc: IdentityGenerationError,
    on_failure: Optional[FailureCallback],
) -> None:
    logger.warning("Skipping record %s: %s", index, exc)
    if on_failure is not None:
        on_failure(index, exc)


def iter_batch(
    start_index: int,
    count: int,
    region: Union[Region, str],
    error_rate: float,
    run_seed: RunSeed,
    *,
    provider: Optional[IdentityProvider] = None,
    on_failure: Optional[FailureCallback] = None,
) -> Iterator[Record]:
    """Lazily yield records for ``start_index .. start_index + count - 1``.

    Arguments are checked before the first record is produced. Indices whose
    identity cannot be generated are logged, handed to ``on_failure`` and
    skipped.
    """

    resolved_region, rate = _check_batch_arguments(start_index, count, region, error_rate)

    def _record_iterator() -> Iterator[Record]:
        for index in range(start_index, start_index + count):
            try:
                yield synthesize_record(index, resolved_region, rate, run_seed, provider)
            except IdentityGenerationError as exc:
                _report_failure(index, exc, on_failure)

    return _record_iterator()


def generate_batch(
    start_index: int,
    count: int,
    region: Union[Region, str],
    error_rate: float,
    run_seed: RunSeed,
    *,
    provider: Optional[IdentityProvider] = None,
    on_failure: Optional[FailureCallback] = None,
    workers: int = 1,
) -> list[Record]:
    """Generate a batch of records in ascending index order."""

    if workers < 1:
        raise ValueError(f"workers must be 1 or greater, got {workers}")
    if workers == 1:
        return list(
            iter_batch(
                start_index,
                count,
                region,
                error_rate,
                run_seed,
                provider=provider,
                on_failure=on_failure,
            )
        )

    resolved_region, rate = _check_batch_arguments(start_index, count, region, error_rate)
    indices = range(start_index, start_index + count)
    records: list[Record] = []
    with ThreadPoolExecutor(max_workers=workers) as executor:
        futures = [
            (index, executor.submit(synthesize_record, index, resolved_region, rate, run_seed, provider))
            for index in indices
        ]
        for index, future in futures:
            try:
                records.append(future.result())
            except IdentityGenerationError as exc:
                _report_failure(index, exc, on_failure)
    return records


def page_bounds(page_number: int, first_page_size: int = 20, page_size: int = 10) -> tuple[int, int]:
    """Return ``(start_index, count)`` for a scroll page.

    The first page is larger than the following ones, so page 1 covers
    indices 1..20 and page 2 covers 21..30 with the default sizes.
    """

    if page_number < 1:
        raise ValueError(f"page number must be 1 or greater, got {page_number}")
    if first_page_size < 1 or page_size < 1:
        raise ValueError("page sizes must be positive")
    if page_number == 1:
        return 1, first_page_size
    before = first_page_size + (page_number - 2) * page_size
    return before + 1, page_size
