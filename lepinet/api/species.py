"""
Species catalog API endpoints.
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from lepinet.api.deps import get_db
from lepinet.core.middleware import get_request_id
from lepinet.schemas.species import SpeciesListResponse, SpeciesOut, SpeciesResponse
from lepinet.services.species import species_service


router = APIRouter(prefix="/api/species", tags=["species"])


@router.get("", response_model=SpeciesListResponse)
async def list_species(
    search: Optional[str] = Query(None, description="Matches English, Sinhala or binomial name"),
    db: AsyncSession = Depends(get_db),
):
    species = await species_service.list_species(db, search)
    return SpeciesListResponse(
        request_id=get_request_id(),
        total=len(species),
        species=[SpeciesOut.model_validate(s) for s in species],
    )


@router.get("/{butterfly_id}", response_model=SpeciesResponse)
async def get_species(butterfly_id: str, db: AsyncSession = Depends(get_db)):
    species = await species_service.get_species(db, butterfly_id)
    return SpeciesResponse(request_id=get_request_id(), species=SpeciesOut.model_validate(species))
