"""
Pydantic schemas for the species catalog.
"""
from typing import Optional, List
from pydantic import Field

from lepinet.schemas.base import CamelModel


class SpeciesOut(CamelModel):
    butterfly_id: str
    common_name_english: str
    common_name_sinhalese: Optional[str] = None
    species_name_binomial: str
    species_name_trinomial: Optional[str] = None
    family: Optional[str] = None


class SpeciesSummary(CamelModel):
    """Subset shown next to a record's prediction."""

    common_name_english: str
    species_name_binomial: str
    family: Optional[str] = None


class SpeciesListResponse(CamelModel):
    request_id: str
    total: int
    species: List[SpeciesOut] = Field(default_factory=list)


class SpeciesResponse(CamelModel):
    request_id: str
    species: SpeciesOut
