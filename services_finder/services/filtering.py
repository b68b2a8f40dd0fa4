"""Browse-page filter over the in-memory provider snapshot.

A single linear pass with four conjunctive steps:

1. drop inactive providers (always applied);
2. city, compared case-insensitively, unless empty or ``"All Cities"``;
3. occupation, unless empty or ``"All Services"``, compared according to
   ``OccupationMatch``;
4. free-text query, a case-insensitive substring of the name or the
   description.

The result keeps the input order (the fetch orders by rating, best first).
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from services_finder.core.constants import ALL_CITIES, ALL_SERVICES
from services_finder.models.enums import OccupationMatch
from services_finder.models.provider import Provider


@dataclass(frozen=True)
class FilterCriteria:
    """The three user-controlled criteria plus the occupation compare mode."""

    city: str = ""
    occupation: str = ""
    query: str = ""
    occupation_match: OccupationMatch = OccupationMatch.case_insensitive


def _city_matches(provider: Provider, city: str) -> bool:
    # No trimming: " Guntur" does not match "Guntur"
    return provider.city.lower() == city.lower()


def _occupation_matches(
    provider: Provider,
    occupation: str,
    mode: OccupationMatch,
) -> bool:
    if mode is OccupationMatch.exact:
        return provider.occupation == occupation
    return provider.occupation.lower() == occupation.lower()


def _text_matches(provider: Provider, query: str) -> bool:
    needle = query.lower()
    if needle in provider.full_name.lower():
        return True
    if provider.description is None:
        return False
    return needle in provider.description.lower()


def filter_providers(
    providers: Iterable[Provider],
    criteria: FilterCriteria,
) -> list[Provider]:
    """Return the providers visible under *criteria*, in input order."""
    filter_city = bool(criteria.city) and criteria.city != ALL_CITIES
    filter_occupation = (
        bool(criteria.occupation) and criteria.occupation != ALL_SERVICES
    )

    visible: list[Provider] = []
    for provider in providers:
        if not provider.is_active:
            continue
        if filter_city and not _city_matches(provider, criteria.city):
            continue
        if filter_occupation and not _occupation_matches(
            provider, criteria.occupation, criteria.occupation_match
        ):
            continue
        if criteria.query and not _text_matches(provider, criteria.query):
            continue
        visible.append(provider)
    return visible
