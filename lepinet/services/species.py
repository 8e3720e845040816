"""
Species catalog lookups.
"""
from typing import List, Optional

from sqlalchemy import select, or_
from sqlalchemy.ext.asyncio import AsyncSession

from lepinet.core.exceptions import NotFoundException
from lepinet.models import Species


class SpeciesService:
    """Read-only access to the butterfly species catalog."""

    @staticmethod
    async def list_species(db: AsyncSession, search: Optional[str] = None) -> List[Species]:
        stmt = select(Species).order_by(Species.common_name_english)
        term = (search or "").strip()
        if term:
            stmt = stmt.where(
                or_(
                    Species.common_name_english.icontains(term, autoescape=True),
                    Species.common_name_sinhalese.icontains(term, autoescape=True),
                    Species.species_name_binomial.icontains(term, autoescape=True),
                )
            )
        return list((await db.execute(stmt)).scalars().all())

    @staticmethod
    async def find(db: AsyncSession, butterfly_id: Optional[str]) -> Optional[Species]:
        if not butterfly_id:
            return None
        return await db.get(Species, butterfly_id)

    @staticmethod
    async def get_species(db: AsyncSession, butterfly_id: str) -> Species:
        species = await SpeciesService.find(db, butterfly_id)
        if species is None:
            raise NotFoundException(
                f"Species not found: {butterfly_id}", details={"butterfly_id": butterfly_id}
            )
        return species


# Global singleton instance
species_service = SpeciesService()
