"""
Species reference catalog.
"""
from sqlalchemy import Column, String, Index

from lepinet.db.database import Base


class Species(Base):
    """Butterfly species catalog, used for display and for expert corrections."""

    __tablename__ = "species"

    butterfly_id = Column(String(50), primary_key=True)
    common_name_english = Column(String(255), nullable=False)
    common_name_sinhalese = Column(String(255), nullable=True)
    species_name_binomial = Column(String(255), nullable=False)
    species_name_trinomial = Column(String(255), nullable=True)
    family = Column(String(100), nullable=True)

    __table_args__ = (
        Index("idx_species_common_name_english", "common_name_english"),
        Index("idx_species_family", "family"),
    )

    def __repr__(self):
        return f"<Species(id={self.butterfly_id}, name={self.common_name_english})>"
