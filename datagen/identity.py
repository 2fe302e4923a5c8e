"""Identity providers producing locale-formatted base fields for a record."""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from faker import Faker

from .regions import PHONE_GROUPS, Region, format_address, format_phone, profile_for


class IdentityGenerationError(RuntimeError):
    """Raised when a provider cannot produce an identity for a seed."""

    def __init__(self, message: str, *, region: Region, seed: int) -> None:
        super().__init__(message)
        self.region = region
        self.seed = seed


@dataclass(frozen=True, slots=True)
class Identity:
    identifier: str
    name: str
    address: str
    phone: str


@runtime_checkable
class IdentityProvider(Protocol):
    """Anything that maps ``(region, seed)`` to an :class:`Identity`.

    Implementations must behave as pure functions of their arguments so that
    records stay reproducible across calls, threads and processes.
    """

    def identity(self, region: Region, seed: int) -> Identity:
        ...


class FakerIdentityProvider:
    """Identity provider backed by locale-specific Faker instances.

    Faker instances carry their own random state, so each thread keeps a
    private instance per locale and re-seeds it on every call.
    """

    def __init__(self) -> None:
        self._local = threading.local()

    def identity(self, region: Region, seed: int) -> Identity:
        try:
            faker = self._faker(profile_for(region).locale)
            faker.seed_instance(seed)
            identifier = faker.uuid4()
            name = " ".join((faker.first_name(), faker.first_name(), faker.last_name()))
            address = format_address(
                region,
                street=faker.street_address(),
                city=faker.city(),
                state=faker.administrative_unit(),
                postcode=faker.postcode(),
            )
            phone = format_phone(region, [faker.numerify("#" * size) for size in PHONE_GROUPS])
        except Exception as exc:
            raise IdentityGenerationError(
                f"Faker failed to build an identity for region {region} with seed {seed}: {exc}",
                region=region,
                seed=seed,
            ) from exc
        return Identity(identifier=str(identifier), name=name, address=address, phone=phone)

    def _faker(self, locale: str) -> Faker:
        instances = getattr(self._local, "instances", None)
        if instances is None:
            instances = {}
            self._local.instances = instances
        faker = instances.get(locale)
        if faker is None:
            faker = Faker(locale)
            instances[locale] = faker
        return faker


default_provider = FakerIdentityProvider()
