"""Region table: locales, formatting templates and corruption alphabets."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Sequence, Union


class UnknownRegionError(ValueError):
    """Raised when a region name is not one of the supported regions."""

    def __init__(self, value: object) -> None:
        supported = ", ".join(region.value for region in Region)
        super().__init__(f"Unknown region {value!r}; expected one of: {supported}")
        self.value = value


class Region(str, Enum):
    USA = "USA"
    GERMANY = "Germany"
    POLAND = "Poland"


@dataclass(frozen=True, slots=True)
class RegionProfile:
    """Formatting and alphabet details for a single region."""

    locale: str
    alphabet: str
    phone_template: str
    address_template: str


_LATIN = "abcdefghijklmnopqrstuvwxyz"

PROFILES: dict[Region, RegionProfile] = {
    Region.USA: RegionProfile(
        locale="en_US",
        alphabet=_LATIN,
        phone_template="(+1) {0}-{1}-{2}",
        address_template="{street}, {city}, {state} {postcode}",
    ),
    Region.GERMANY: RegionProfile(
        locale="de_DE",
        alphabet=_LATIN + "äöüß",
        phone_template="+49-{0}-{1}-{2}",
        address_template="{street} {city} {state}",
    ),
    Region.POLAND: RegionProfile(
        locale="pl_PL",
        alphabet="aąbcćdeęfghijklłmnńoópqrsśtuvwxyzźż",
        phone_template="+48-{0}-{1}-{2}",
        address_template="{street}, {city}, {state} {postcode}",
    ),
}

PHONE_GROUPS: tuple[int, ...] = (3, 3, 4)


def resolve_region(value: Union[Region, str]) -> Region:
    """Map a region or a case-insensitive region name onto :class:`Region`."""

    if isinstance(value, Region):
        return value
    if isinstance(value, str):
        candidate = value.strip().lower()
        for region in Region:
            if candidate in {region.value.lower(), region.name.lower()}:
                return region
    raise UnknownRegionError(value)


def profile_for(region: Union[Region, str]) -> RegionProfile:
    return PROFILES[resolve_region(region)]


def alphabet_for(region: Union[Region, str]) -> str:
    return profile_for(region).alphabet


def format_address(
    region: Union[Region, str],
    street: str,
    city: str,
    state: str,
    postcode: str,
) -> str:
    """Join address parts in the region's field order and punctuation."""

    template = profile_for(region).address_template
    return template.format(street=street, city=city, state=state, postcode=postcode)


def format_phone(region: Union[Region, str], groups: Sequence[str]) -> str:
    """Render three digit groups with the region's dialing prefix."""

    if len(groups) != len(PHONE_GROUPS):
        raise ValueError(f"expected {len(PHONE_GROUPS)} digit groups, got {len(groups)}")
    return profile_for(region).phone_template.format(*groups)
