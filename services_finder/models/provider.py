"""Pydantic models for the ``workers`` table (service-provider listings).

``average_rating`` and ``total_ratings`` are maintained by the database
(rating triggers) and never appear in create payloads.  ``is_active`` is
left to the column default on insert.
"""

from pydantic import BaseModel, ConfigDict, Field

from services_finder.models.enums import Occupation


class ListingForm(BaseModel):
    """Fields submitted on the add-listing form."""
    full_name: str = Field(min_length=1)
    email: str = Field(min_length=1)
    phone: str = Field(min_length=1)
    city: str = Field(min_length=1)
    occupation: Occupation
    experience: int
    description: str = ""


class ProviderCreate(BaseModel):
    """Payload for inserting a listing (owner = submitting user)."""
    user_id: str
    full_name: str
    email: str
    phone: str
    city: str
    occupation: Occupation
    experience: int = Field(ge=0)
    description: str | None = None


class Provider(BaseModel):
    """Normalized provider record as used by the browse view.

    Every nullable column has already been replaced by its default, see
    ``services_finder.services.providers.normalize_provider_row``.
    """
    model_config = ConfigDict(from_attributes=True)

    id: str
    full_name: str
    email: str
    phone: str
    city: str
    occupation: str
    experience: int = 0
    description: str | None = ""
    average_rating: float = 0.0
    total_ratings: int = 0
    is_active: bool = False


class ContactInfo(BaseModel):
    """How to reach a provider to book a service."""
    provider_id: str
    full_name: str
    phone: str
    email: str
