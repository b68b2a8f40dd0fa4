"""Enum types mirroring the Supabase schema and view options."""

from enum import Enum


class Occupation(str, Enum):
    """Service types (``service_type`` enum on the ``workers`` table)."""
    mechanic = "mechanic"
    plumber = "plumber"
    electrician = "electrician"
    carpenter = "carpenter"
    painter = "painter"
    cleaner = "cleaner"
    delivery = "delivery"
    restaurant = "restaurant"
    chef = "chef"
    driver = "driver"
    gardener = "gardener"
    other = "other"


class OccupationMatch(str, Enum):
    """How the occupation filter compares against a provider's occupation.

    The browse view historically existed twice: one copy compared
    case-insensitively, the other compared the raw enum value.
    """
    case_insensitive = "case_insensitive"
    exact = "exact"


class NotificationVariant(str, Enum):
    """Visual variant of a user-facing notification."""
    default = "default"
    destructive = "destructive"
